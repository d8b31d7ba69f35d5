"""Declarative HTTP response dispatch."""

__version__ = "0.1.0"

from .bindings import ANY, Binding, any_content_type, any_reason_phrase, any_series
from .bindings import any_status, any_status_code, anything, on
from .converters import BytesConverter, FormConverter, JsonConverter, TextConverter
from .core import Converter, Response
from .core.fetcher import HttpFetcher
from .dispatcher import Dispatcher, dispatch
from .errors import (
    BodyConsumedError,
    InvalidMediaTypeError,
    NoSuitableConverter,
    SwitchyardError,
    UnsupportedResponse,
)
from .media_type import MediaType
from .registry import ConverterRegistry, default_registry
from .retriever import BodyRetriever
from .router import RouteResult, Router
from .selectors import Selector, content_type, reason_phrase, series, status, status_code
from .status import Series

__all__ = [
    "ANY",
    "Binding",
    "BodyConsumedError",
    "BodyRetriever",
    "BytesConverter",
    "Converter",
    "ConverterRegistry",
    "Dispatcher",
    "FormConverter",
    "HttpFetcher",
    "InvalidMediaTypeError",
    "JsonConverter",
    "MediaType",
    "NoSuitableConverter",
    "Response",
    "RouteResult",
    "Router",
    "Selector",
    "Series",
    "SwitchyardError",
    "TextConverter",
    "UnsupportedResponse",
    "any_content_type",
    "any_reason_phrase",
    "any_series",
    "any_status",
    "any_status_code",
    "anything",
    "content_type",
    "default_registry",
    "dispatch",
    "on",
    "reason_phrase",
    "series",
    "status",
    "status_code",
]
