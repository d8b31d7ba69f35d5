"""Lazy access to a response body."""

from typing import Any

from .core.protocols import Response
from .errors import BodyConsumedError
from .registry import ConverterRegistry


class BodyRetriever:
    """Decodes the body of one response, on demand, at most once.

    Nothing is read until a handler calls :meth:`retrieve`. A second call
    raises BodyConsumedError, whatever the requested type.
    """

    def __init__(self, response: Response, converters: ConverterRegistry):
        self.response = response
        self.converters = converters

    @property
    def consumed(self) -> bool:
        return self.response.consumed

    def retrieve(self, target: Any) -> Any:
        """Decode the body into ``target`` through the converter registry."""
        if self.response.consumed:
            raise BodyConsumedError()
        return self.converters.read(self.response, target)
