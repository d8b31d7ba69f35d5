"""Bindings pair an expected key with the route to run for it."""

from dataclasses import dataclass
from typing import Any, Callable

from . import routes
from .routes import Route


class _Wildcard:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ANY"

    __str__ = __repr__


ANY = _Wildcard()


@dataclass(frozen=True)
class Binding:
    """An expected key (or ANY) and its route."""

    key: Any
    route: Route

    @property
    def is_wildcard(self) -> bool:
        return self.key is ANY


class Condition:
    """Fluent builder returned by :func:`on`."""

    def __init__(self, key: Any):
        self.key = key

    def route(self, route: Route) -> Binding:
        """Bind a route that receives the BodyRetriever itself."""
        return Binding(self.key, route)

    def call(self, fn: Callable[..., Any], target: Any = None) -> Binding:
        """Bind ``fn``; it receives the decoded body, or the response if no target."""
        return Binding(self.key, routes.call(fn, target))

    def capture(self, target: Any) -> Binding:
        return Binding(self.key, routes.capture(target))

    def pass_(self) -> Binding:
        return Binding(self.key, routes.pass_())

    def dispatch(self, selector, *bindings: Binding) -> Binding:
        return Binding(self.key, routes.dispatch(selector, *bindings))

    def raise_(self, factory: Callable[[Any], BaseException], target: Any = None) -> Binding:
        return Binding(self.key, routes.raise_(factory, target))


def on(key: Any) -> Condition:
    return Condition(key)


def anything() -> Condition:
    """Wildcard condition: used when no other binding matches."""
    return Condition(ANY)


any_series = anything
any_status = anything
any_status_code = anything
any_content_type = anything
any_reason_phrase = anything
