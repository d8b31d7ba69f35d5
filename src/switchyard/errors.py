"""Exceptions raised while dispatching a response."""

from typing import Any, Iterable


def _type_name(target: Any) -> str:
    module = getattr(target, "__module__", None)
    name = getattr(target, "__qualname__", None)
    if name is None:
        return repr(target)
    if module in (None, "builtins"):
        return name
    return f"{module}.{name}"


class SwitchyardError(Exception):
    """Base class for all dispatch errors."""


class InvalidMediaTypeError(SwitchyardError, ValueError):
    """A media type string could not be parsed."""

    def __init__(self, value: str, reason: str):
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid media type {value!r}: {reason}")


class BodyConsumedError(SwitchyardError, RuntimeError):
    """The response body was requested after it had already been read."""

    def __init__(self, message: str = "Response body has already been consumed"):
        super().__init__(message)


class UnsupportedResponse(SwitchyardError):
    """No binding, wildcard included, matched the response."""

    def __init__(
        self,
        observed_key: Any,
        available_keys: Iterable[Any],
        status_code: int | None = None,
        content_type: str | None = None,
    ):
        self.observed_key = observed_key
        self.available_keys = tuple(available_keys)
        self.status_code = status_code
        self.content_type = content_type
        keys = ", ".join(_format_key(key) for key in self.available_keys) or "<none>"
        super().__init__(
            f"Unable to dispatch response: no binding for {_format_key(observed_key)} "
            f"(status={status_code}, content-type={content_type or '<none>'}); "
            f"bindings declared for: {keys}"
        )


class NoSuitableConverter(SwitchyardError):
    """No registered converter can decode the body into the requested type."""

    def __init__(
        self,
        target_type: Any,
        declared_content_type: str,
        available_media_types: Iterable[Any],
    ):
        self.target_type = target_type
        self.declared_content_type = declared_content_type
        self.available_media_types = tuple(available_media_types)
        media_types = ", ".join(str(media_type) for media_type in self.available_media_types)
        super().__init__(
            f"Could not read response: no suitable converter found for response type "
            f"[{_type_name(target_type)}] and content type [{declared_content_type}]; "
            f"available media types: [{media_types}]"
        )


def _format_key(key: Any) -> str:
    name = getattr(key, "name", None)
    if isinstance(name, str) and not isinstance(key, str):
        return name
    return str(key)
