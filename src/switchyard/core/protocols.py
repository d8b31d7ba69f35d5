"""Protocol definitions for dispatch components."""

import io
from dataclasses import dataclass, field
from typing import Any, BinaryIO, Protocol

import httpx

from ..errors import BodyConsumedError
from ..media_type import MediaType
from ..status import Series


@dataclass
class Response:
    """A received HTTP response whose body can be read exactly once.

    Status and headers are freely readable; the body stream is owned by the
    response and released by :meth:`close` (or by leaving a ``with`` block).
    """

    status: int
    headers: httpx.Headers = field(default_factory=httpx.Headers)
    stream: BinaryIO = field(default_factory=io.BytesIO)
    reason: str | None = None
    url: str | None = None
    consumed: bool = field(default=False, init=False)
    closed: bool = field(default=False, init=False)

    def __post_init__(self):
        if not isinstance(self.headers, httpx.Headers):
            self.headers = httpx.Headers(self.headers)

    @classmethod
    def of(
        cls,
        status: int,
        content: bytes = b"",
        content_type: str | None = None,
        headers: Any = None,
        **kwargs,
    ) -> "Response":
        """Build a response from an in-memory body."""
        headers = httpx.Headers(headers)
        if content_type is not None:
            headers["Content-Type"] = content_type
        return cls(status=status, headers=headers, stream=io.BytesIO(content), **kwargs)

    @classmethod
    def from_httpx(cls, resp: httpx.Response) -> "Response":
        """Adapt an already-read httpx response."""
        return cls(
            status=resp.status_code,
            headers=resp.headers,
            stream=io.BytesIO(resp.content),
            reason=resp.reason_phrase or None,
            url=str(resp.url),
        )

    @property
    def series(self) -> Series:
        return Series.of(self.status)

    @property
    def content_type(self) -> str | None:
        """Raw Content-Type header value, if any."""
        return self.headers.get("content-type")

    @property
    def media_type(self) -> MediaType | None:
        """Parsed Content-Type, or None when absent or malformed."""
        return MediaType.parse_or_none(self.content_type)

    def consume(self) -> BinaryIO:
        """Hand out the body stream. A second call raises BodyConsumedError."""
        if self.consumed:
            raise BodyConsumedError()
        if self.closed:
            raise BodyConsumedError("Response has been closed")
        self.consumed = True
        return self.stream

    def read(self) -> bytes:
        return self.consume().read()

    def close(self):
        if not self.closed:
            self.closed = True
            self.stream.close()

    def __enter__(self) -> "Response":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


class Converter(Protocol):
    """Protocol for body decoders."""

    media_types: tuple[MediaType, ...]

    def can_read(self, target: Any, media_type: MediaType) -> bool:
        """Whether this converter can produce ``target`` from ``media_type``."""
        ...

    def read(self, stream: BinaryIO, target: Any, media_type: MediaType) -> Any:
        """Decode ``stream`` into an instance of ``target``."""
        ...
