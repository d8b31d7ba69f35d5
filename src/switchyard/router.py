"""Selecting and invoking the binding that matches a response."""

from dataclasses import dataclass
from typing import Any, Iterable

from .bindings import Binding
from .core.protocols import Converter, Response
from .errors import UnsupportedResponse
from .logs import get_logger
from .registry import ConverterRegistry
from .retriever import BodyRetriever
from .selectors import Selector

logger = get_logger(__name__)


@dataclass(frozen=True)
class RouteResult:
    """Whatever the matched route returned."""

    value: Any = None

    def get(self, target: type) -> Any:
        """The value if it is an instance of ``target``, else None."""
        return self.value if isinstance(self.value, target) else None

    def has(self, target: type) -> bool:
        return isinstance(self.value, target)


def _as_registry(converters: ConverterRegistry | Iterable[Converter]) -> ConverterRegistry:
    if isinstance(converters, ConverterRegistry):
        return converters
    return ConverterRegistry(converters)


def _find_wildcard(bindings: tuple[Binding, ...]) -> Binding | None:
    wildcards = [binding for binding in bindings if binding.is_wildcard]
    if len(wildcards) > 1:
        raise ValueError(f"At most one wildcard binding is allowed, got {len(wildcards)}")
    return wildcards[0] if wildcards else None


class Router:
    """Matches a response against bindings and runs the winning route.

    Bindings are scanned in declaration order and the first match wins. The
    wildcard binding, wherever it appears, only applies when nothing else
    matches. The router never closes the response; the caller owns it.
    """

    def route(
        self,
        response: Response,
        converters: ConverterRegistry | Iterable[Converter],
        selector: Selector,
        bindings: Iterable[Binding],
    ) -> RouteResult:
        bindings = tuple(bindings)
        wildcard = _find_wildcard(bindings)
        key = selector.extract(response)

        match = next(
            (
                binding
                for binding in bindings
                if not binding.is_wildcard and selector.matches(binding.key, key)
            ),
            None,
        )
        if match is None:
            if wildcard is None:
                declared = [binding.key for binding in bindings]
                logger.debug(
                    "route_unsupported",
                    selector=selector.name,
                    key=str(key),
                    declared=[str(k) for k in declared],
                )
                raise UnsupportedResponse(
                    key,
                    declared,
                    status_code=response.status,
                    content_type=response.content_type,
                )
            match = wildcard

        logger.debug(
            "route_matched",
            selector=selector.name,
            key=str(key),
            wildcard=match.is_wildcard,
        )
        value = match.route(BodyRetriever(response, _as_registry(converters)))
        if isinstance(value, RouteResult):
            value = value.value
        return RouteResult(value)
