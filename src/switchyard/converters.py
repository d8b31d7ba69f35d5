"""Built-in body converters."""

import codecs
import json
import typing
from typing import Any, BinaryIO
from urllib.parse import parse_qs

from pydantic import TypeAdapter

from .config import settings
from .media_type import (
    ALL,
    APPLICATION_FORM_URLENCODED,
    APPLICATION_JSON,
    APPLICATION_JSON_ALL,
    TEXT_ALL,
    MediaType,
)


class BaseConverter:
    """Shared media type check for converters declaring a fixed set of types."""

    media_types: tuple[MediaType, ...] = ()

    def supports(self, media_type: MediaType) -> bool:
        return any(supported.is_compatible_with(media_type) for supported in self.media_types)

    def supports_target(self, target: Any) -> bool:
        raise NotImplementedError

    def can_read(self, target: Any, media_type: MediaType) -> bool:
        return self.supports_target(target) and self.supports(media_type)

    def charset_for(self, media_type: MediaType, default: str) -> str:
        """The declared charset, or ``default`` when absent or unknown to Python."""
        charset = media_type.charset
        if charset:
            try:
                return codecs.lookup(charset).name
            except LookupError:
                pass
        return default

    def __repr__(self) -> str:
        types = ", ".join(str(media_type) for media_type in self.media_types)
        return f"{type(self).__name__}([{types}])"


class BytesConverter(BaseConverter):
    """Raw bytes for any media type."""

    media_types = (ALL,)

    def supports_target(self, target: Any) -> bool:
        return target in (bytes, bytearray)

    def read(self, stream: BinaryIO, target: Any, media_type: MediaType) -> bytes:
        data = stream.read()
        return bytearray(data) if target is bytearray else data


class TextConverter(BaseConverter):
    """Decoded text; honours the ``charset`` parameter."""

    media_types = (TEXT_ALL, ALL)

    def __init__(self, default_charset: str | None = None):
        self.default_charset = default_charset or settings.default_charset

    def supports_target(self, target: Any) -> bool:
        return target is str

    def read(self, stream: BinaryIO, target: Any, media_type: MediaType) -> str:
        charset = self.charset_for(media_type, self.default_charset)
        return stream.read().decode(charset, errors="replace")


class JsonConverter(BaseConverter):
    """JSON bodies decoded and validated through pydantic.

    Any target pydantic can validate works: ``dict``, ``list[int]``,
    dataclasses, ``BaseModel`` subclasses, ``typing.Any``. Raw ``bytes`` and
    ``str`` are left to the bytes and text converters.
    """

    media_types = (APPLICATION_JSON, APPLICATION_JSON_ALL)

    def __init__(self):
        self._adapters: dict[Any, TypeAdapter] = {}

    def supports_target(self, target: Any) -> bool:
        return target not in (bytes, bytearray, str)

    def _adapter(self, target: Any) -> TypeAdapter:
        try:
            return self._adapters[target]
        except (KeyError, TypeError):
            pass
        adapter = TypeAdapter(target)
        try:
            self._adapters[target] = adapter
        except TypeError:
            # unhashable target, e.g. some Annotated forms
            pass
        return adapter

    def read(self, stream: BinaryIO, target: Any, media_type: MediaType) -> Any:
        data = stream.read()
        if target is object:
            return json.loads(data)
        return self._adapter(target).validate_json(data)


class FormConverter(BaseConverter):
    """``application/x-www-form-urlencoded`` into ``dict[str, list[str]]``."""

    media_types = (APPLICATION_FORM_URLENCODED,)

    def __init__(self, default_charset: str | None = None):
        self.default_charset = default_charset or settings.default_charset

    def supports_target(self, target: Any) -> bool:
        return (typing.get_origin(target) or target) is dict

    def read(self, stream: BinaryIO, target: Any, media_type: MediaType) -> dict[str, list[str]]:
        charset = self.charset_for(media_type, self.default_charset)
        return parse_qs(
            stream.read().decode(charset, errors="replace"),
            keep_blank_values=True,
            encoding=charset,
        )
