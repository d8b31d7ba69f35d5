"""Selectors: extract a classification key from a response.

A selector never touches the body and never raises for a well-formed
response. Missing or malformed attributes yield ``None`` (or
``Series.UNKNOWN`` for the series selector).
"""

import operator
from dataclasses import dataclass, field
from typing import Any, Callable

from .core.protocols import Response
from .media_type import MediaType
from .status import reason_phrase as _registered_phrase, resolve_status


@dataclass(frozen=True)
class Selector:
    """A named key extractor plus the rule for comparing binding keys to it."""

    name: str
    extract: Callable[[Response], Any]
    matches: Callable[[Any, Any], bool] = field(default=operator.eq)

    def __call__(self, response: Response) -> Any:
        return self.extract(response)

    def __repr__(self) -> str:
        return f"Selector({self.name})"


def series() -> Selector:
    """Key: the status code's Series."""
    return Selector("series", lambda response: response.series)


def status_code() -> Selector:
    """Key: the numeric status code."""
    return Selector("status_code", lambda response: response.status)


def status() -> Selector:
    """Key: the registered HTTPStatus, or None for non-standard codes."""
    return Selector("status", lambda response: resolve_status(response.status))


def _media_types_match(binding_key: MediaType | None, key: MediaType | None) -> bool:
    if binding_key is None or key is None:
        return binding_key is None and key is None
    return binding_key.is_compatible_with(key)


def _coerce_media_type(value: Any) -> Any:
    if isinstance(value, str):
        return MediaType.parse(value)
    return value


def content_type() -> Selector:
    """Key: the parsed Content-Type; bindings match by media type compatibility.

    Binding keys may be given as MediaType or as strings.
    """
    return Selector(
        "content_type",
        lambda response: response.media_type,
        lambda binding_key, key: _media_types_match(_coerce_media_type(binding_key), key),
    )


def _reason(response: Response) -> str | None:
    return response.reason or _registered_phrase(response.status)


def reason_phrase() -> Selector:
    """Key: the reason phrase sent by the server, else the registered one."""
    return Selector("reason_phrase", _reason)
