"""Route primitives.

A route is any callable taking a BodyRetriever; whatever it returns becomes
the value of the dispatch result.
"""

from typing import Any, Callable

from .retriever import BodyRetriever

Route = Callable[[BodyRetriever], Any]


def pass_() -> Route:
    """Acknowledge the response and discard its body."""

    def route(retriever: BodyRetriever) -> None:
        return None

    return route


def capture(target: Any) -> Route:
    """Decode the body into ``target`` and hand it back as the result."""

    def route(retriever: BodyRetriever) -> Any:
        return retriever.retrieve(target)

    return route


def call(fn: Callable[..., Any], target: Any = None) -> Route:
    """Invoke ``fn`` with the decoded body, or with the response if no target."""

    def route(retriever: BodyRetriever) -> Any:
        if target is None:
            return fn(retriever.response)
        return fn(retriever.retrieve(target))

    return route


def dispatch(selector, *bindings) -> Route:
    """Route the same response again with another selector and bindings."""

    def route(retriever: BodyRetriever) -> Any:
        from .router import Router

        result = Router().route(retriever.response, retriever.converters, selector, bindings)
        return result.value

    return route


def raise_(factory: Callable[[Any], BaseException], target: Any = None) -> Route:
    """Raise the exception built from the decoded body (or the response)."""

    def route(retriever: BodyRetriever) -> Any:
        payload = retriever.response if target is None else retriever.retrieve(target)
        raise factory(payload)

    return route
