"""Ordered converter lookup."""

from typing import Any, Iterable

from .converters import BytesConverter, FormConverter, JsonConverter, TextConverter
from .core.protocols import Converter, Response
from .errors import NoSuitableConverter
from .logs import get_logger
from .media_type import APPLICATION_OCTET_STREAM, MediaType

logger = get_logger(__name__)


class ConverterRegistry:
    """Converters in priority order.

    The registry never changes after construction, so one instance can be
    shared by any number of concurrent dispatches.
    """

    def __init__(self, converters: Iterable[Converter] = ()):
        self._converters: tuple[Converter, ...] = tuple(converters)

    def __iter__(self):
        return iter(self._converters)

    def __len__(self) -> int:
        return len(self._converters)

    def __repr__(self) -> str:
        return f"ConverterRegistry({list(self._converters)!r})"

    @property
    def media_types(self) -> tuple[MediaType, ...]:
        """All supported media types, de-duplicated, in registration order."""
        seen: dict[MediaType, None] = {}
        for converter in self._converters:
            for media_type in converter.media_types:
                seen.setdefault(media_type, None)
        return tuple(seen)

    def find(self, target: Any, media_type: MediaType) -> Converter | None:
        """First converter able to read ``target`` from ``media_type``."""
        for converter in self._converters:
            if converter.can_read(target, media_type):
                return converter
        return None

    def read(self, response: Response, target: Any) -> Any:
        """Decode the response body into ``target``.

        Raises NoSuitableConverter when nothing matches; the body is left
        unread in that case.
        """
        media_type = response.media_type or APPLICATION_OCTET_STREAM
        converter = self.find(target, media_type)
        if converter is None:
            declared = response.content_type or str(APPLICATION_OCTET_STREAM)
            logger.debug(
                "no_suitable_converter",
                target=getattr(target, "__name__", repr(target)),
                content_type=declared,
            )
            raise NoSuitableConverter(target, declared, self.media_types)

        logger.debug(
            "converter_selected",
            converter=type(converter).__name__,
            target=getattr(target, "__name__", repr(target)),
            content_type=str(media_type),
        )
        return converter.read(response.consume(), target, media_type)


def default_registry() -> ConverterRegistry:
    """Bytes, text, JSON and form converters, in that order."""
    return ConverterRegistry([
        BytesConverter(),
        TextConverter(),
        JsonConverter(),
        FormConverter(),
    ])
