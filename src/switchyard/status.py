"""HTTP status series classification."""

from enum import Enum
from http import HTTPStatus


class Series(Enum):
    """Leading-digit class of an HTTP status code."""

    INFORMATIONAL = 1
    SUCCESSFUL = 2
    REDIRECTION = 3
    CLIENT_ERROR = 4
    SERVER_ERROR = 5
    UNKNOWN = 0

    @classmethod
    def of(cls, status_code: int) -> "Series":
        """Classify a status code; codes outside 100-599 are UNKNOWN."""
        if not isinstance(status_code, int) or not 100 <= status_code <= 599:
            return cls.UNKNOWN
        return cls(status_code // 100)

    def __str__(self) -> str:
        return self.name


def resolve_status(status_code: int) -> HTTPStatus | None:
    """Look up a registered status, or None for non-standard codes."""
    try:
        return HTTPStatus(status_code)
    except ValueError:
        return None


def reason_phrase(status_code: int) -> str | None:
    status = resolve_status(status_code)
    return status.phrase if status is not None else None
