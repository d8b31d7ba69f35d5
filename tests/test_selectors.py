"""Tests for selectors."""

from http import HTTPStatus

import pytest

from switchyard.core.protocols import Response
from switchyard.media_type import APPLICATION_JSON, TEXT_ALL, MediaType
from switchyard.selectors import content_type, reason_phrase, series, status, status_code
from switchyard.status import Series


class TestSeriesSelector:
    @pytest.mark.parametrize(
        "code, expected",
        [
            (100, Series.INFORMATIONAL),
            (200, Series.SUCCESSFUL),
            (204, Series.SUCCESSFUL),
            (301, Series.REDIRECTION),
            (404, Series.CLIENT_ERROR),
            (503, Series.SERVER_ERROR),
            (99, Series.UNKNOWN),
            (600, Series.UNKNOWN),
        ],
    )
    def test_maps_status_to_series(self, code, expected):
        """Status codes map to their series, unknown ranges to UNKNOWN."""
        assert series().extract(Response.of(code)) == expected

    def test_is_idempotent(self):
        """Extracting twice yields the same key."""
        response = Response.of(201)
        selector = series()
        assert selector.extract(response) == selector.extract(response)

    def test_does_not_read_body(self):
        """Selectors never consume the body."""
        response = Response.of(200, b"hello", "text/plain")
        series().extract(response)
        content_type().extract(response)
        assert response.consumed is False


class TestStatusSelectors:
    def test_status_code(self):
        """status_code returns the numeric code."""
        assert status_code().extract(Response.of(418)) == 418

    def test_status_code_matches_http_status(self):
        """HTTPStatus members match the numeric key."""
        assert status_code().matches(HTTPStatus.NOT_FOUND, 404)

    def test_status(self):
        """status returns the registered HTTPStatus."""
        assert status().extract(Response.of(404)) is HTTPStatus.NOT_FOUND

    def test_status_unknown_code(self):
        """Non-standard codes yield None rather than failing."""
        assert status().extract(Response.of(599)) is None

    def test_reason_phrase_prefers_server_reason(self):
        """The server's reason phrase wins over the registered one."""
        assert reason_phrase().extract(Response.of(200, reason="Fine")) == "Fine"
        assert reason_phrase().extract(Response.of(404)) == "Not Found"
        assert reason_phrase().extract(Response.of(599)) is None


class TestContentTypeSelector:
    def test_extracts_media_type(self):
        """Key is the parsed media type."""
        response = Response.of(200, content_type="application/json; charset=utf-8")
        assert content_type().extract(response) == APPLICATION_JSON

    def test_quoted_semicolon_in_parameter(self):
        """A quoted ';' in a parameter does not hide the content type."""
        response = Response.of(200, content_type='multipart/form-data; boundary="a;b"')
        assert content_type().extract(response) == MediaType("multipart", "form-data")

    def test_missing_content_type(self):
        """Absent Content-Type yields None."""
        assert content_type().extract(Response.of(200)) is None

    def test_malformed_content_type(self):
        """Malformed Content-Type yields None rather than failing."""
        assert content_type().extract(Response.of(200, content_type="not a type")) is None

    def test_matches_by_compatibility(self):
        """Wildcard binding keys match concrete types."""
        selector = content_type()
        assert selector.matches(MediaType.parse("application/*"), APPLICATION_JSON)
        assert selector.matches(TEXT_ALL, MediaType.parse("text/html"))
        assert not selector.matches(TEXT_ALL, APPLICATION_JSON)

    def test_matches_string_keys(self):
        """Binding keys may be plain strings."""
        assert content_type().matches("application/json", APPLICATION_JSON)

    def test_none_matches_only_none(self):
        """A None binding key matches only a missing content type."""
        selector = content_type()
        assert selector.matches(None, None)
        assert not selector.matches(None, APPLICATION_JSON)
        assert not selector.matches(APPLICATION_JSON, None)
