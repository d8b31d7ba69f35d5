"""Media type parsing and compatibility rules."""

from dataclasses import dataclass, field

from .errors import InvalidMediaTypeError

WILDCARD = "*"

_TOKEN_SEPARATORS = set('()<>@,;:\\"/[]?={} \t')


def _check_token(value: str, token: str, what: str):
    if not token:
        raise InvalidMediaTypeError(value, f"empty {what}")
    if any(char in _TOKEN_SEPARATORS for char in token):
        raise InvalidMediaTypeError(value, f"illegal character in {what} {token!r}")


def _split_parameters(value: str) -> list[str]:
    """Split on ';' outside quoted strings."""
    parts = []
    current = []
    quoted = escaped = False
    for char in value:
        if escaped:
            escaped = False
        elif quoted and char == "\\":
            escaped = True
        elif char == '"':
            quoted = not quoted
        elif char == ";" and not quoted:
            parts.append("".join(current))
            current = []
            continue
        current.append(char)
    parts.append("".join(current))
    return parts


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] == '"':
        return value[1:-1].replace('\\"', '"')
    return value


@dataclass(frozen=True)
class MediaType:
    """A MIME type such as ``application/json; charset=utf-8``.

    Type and subtype are case-insensitive and stored lowercased. Parameters
    are kept for inspection (e.g. ``charset``) but never take part in
    compatibility checks.
    """

    type: str
    subtype: str
    parameters: tuple[tuple[str, str], ...] = field(default=(), compare=False)

    @classmethod
    def parse(cls, value: str) -> "MediaType":
        """Parse a Content-Type style string. Raises InvalidMediaTypeError."""
        if value is None or not value.strip():
            raise InvalidMediaTypeError(str(value), "empty media type")

        head, *raw_params = _split_parameters(value)
        full_type = head.strip().lower()
        if full_type == WILDCARD:
            # "*" is a common shorthand for "*/*"
            full_type = "*/*"
        if "/" not in full_type:
            raise InvalidMediaTypeError(value, "does not contain '/'")

        type_, _, subtype = full_type.partition("/")
        _check_token(value, type_, "type")
        _check_token(value, subtype, "subtype")
        if type_ == WILDCARD and subtype != WILDCARD:
            raise InvalidMediaTypeError(value, "wildcard type is legal only in '*/*'")

        parameters = []
        for raw in raw_params:
            raw = raw.strip()
            if not raw:
                continue
            name, sep, param_value = raw.partition("=")
            if not sep:
                raise InvalidMediaTypeError(value, f"parameter {raw!r} has no value")
            name = name.strip().lower()
            _check_token(value, name, "parameter name")
            parameters.append((name, _unquote(param_value.strip())))

        return cls(type_, subtype, tuple(parameters))

    @classmethod
    def parse_or_none(cls, value: str | None) -> "MediaType | None":
        """Parse a media type, returning None when absent or malformed."""
        if value is None:
            return None
        try:
            return cls.parse(value)
        except InvalidMediaTypeError:
            return None

    @property
    def is_wildcard_type(self) -> bool:
        return self.type == WILDCARD

    @property
    def is_wildcard_subtype(self) -> bool:
        """True for ``*`` and for suffixed wildcards like ``*+json``."""
        return self.subtype == WILDCARD or self.subtype.startswith("*+")

    @property
    def suffix(self) -> str | None:
        """Structured syntax suffix, e.g. ``json`` for ``problem+json``."""
        _, plus, suffix = self.subtype.rpartition("+")
        return suffix if plus and suffix else None

    @property
    def charset(self) -> str | None:
        return self.get_parameter("charset")

    def get_parameter(self, name: str) -> str | None:
        name = name.lower()
        for key, value in self.parameters:
            if key == name:
                return value
        return None

    def includes(self, other: "MediaType") -> bool:
        """Whether this (possibly wildcard) type covers ``other``.

        ``text/*`` includes ``text/plain``, but not the other way around.
        """
        if self.is_wildcard_type:
            return True
        if self.type != other.type:
            return False
        if self.subtype == other.subtype or self.subtype == WILDCARD:
            return True
        if self.subtype.startswith("*+"):
            # application/*+json includes application/problem+json
            return other.suffix == self.suffix
        return False

    def is_compatible_with(self, other: "MediaType") -> bool:
        """Symmetric form of :meth:`includes`."""
        return self.includes(other) or other.includes(self)

    def __str__(self) -> str:
        rendered = f"{self.type}/{self.subtype}"
        for name, value in self.parameters:
            rendered += f";{name}={value}"
        return rendered


ALL = MediaType("*", "*")
APPLICATION_JSON = MediaType("application", "json")
APPLICATION_JSON_ALL = MediaType("application", "*+json")
APPLICATION_PROBLEM_JSON = MediaType("application", "problem+json")
APPLICATION_XML = MediaType("application", "xml")
APPLICATION_OCTET_STREAM = MediaType("application", "octet-stream")
APPLICATION_FORM_URLENCODED = MediaType("application", "x-www-form-urlencoded")
TEXT_ALL = MediaType("text", "*")
TEXT_PLAIN = MediaType("text", "plain")
TEXT_HTML = MediaType("text", "html")
