"""Top-level dispatch entry points."""

from typing import Iterable

from .bindings import Binding
from .core.protocols import Converter, Response
from .registry import ConverterRegistry, default_registry
from .router import RouteResult, Router
from .selectors import Selector


class Dispatcher:
    """Dispatches one response and releases it afterwards.

    The response is closed on every exit path: after the route returns, and
    when routing or decoding fails.
    """

    def __init__(
        self,
        response: Response,
        converters: ConverterRegistry | Iterable[Converter] | None = None,
    ):
        self.response = response
        self.converters = default_registry() if converters is None else converters
        self.router = Router()

    def dispatch(self, selector: Selector, *bindings: Binding) -> RouteResult:
        with self.response:
            return self.router.route(self.response, self.converters, selector, bindings)


def dispatch(
    response: Response,
    selector: Selector,
    *bindings: Binding,
    converters: ConverterRegistry | Iterable[Converter] | None = None,
) -> RouteResult:
    """Route ``response`` through ``bindings`` and close it."""
    return Dispatcher(response, converters).dispatch(selector, *bindings)
