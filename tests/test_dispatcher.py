"""Tests for the body retriever and top-level dispatch."""

import pytest

from switchyard.bindings import anything, on
from switchyard.converters import JsonConverter
from switchyard.core.protocols import Response
from switchyard.dispatcher import Dispatcher, dispatch
from switchyard.errors import BodyConsumedError, NoSuitableConverter, UnsupportedResponse
from switchyard.media_type import APPLICATION_JSON
from switchyard.registry import ConverterRegistry, default_registry
from switchyard.retriever import BodyRetriever
from switchyard.selectors import content_type, series, status_code
from switchyard.status import Series


class ProblemError(Exception):
    def __init__(self, problem: dict):
        super().__init__(problem["title"])
        self.problem = problem


class TestBodyRetriever:
    def test_lazy_until_retrieve(self):
        """Creating a retriever does not read the body."""
        response = Response.of(200, b"hi", "text/plain")
        retriever = BodyRetriever(response, default_registry())
        assert retriever.consumed is False
        assert retriever.retrieve(str) == "hi"
        assert retriever.consumed is True

    def test_second_retrieve_rejected(self):
        """The body can be decoded only once, whatever the target."""
        retriever = BodyRetriever(Response.of(200, b"hi", "text/plain"), default_registry())
        retriever.retrieve(str)
        with pytest.raises(BodyConsumedError):
            retriever.retrieve(str)
        with pytest.raises(BodyConsumedError):
            retriever.retrieve(bytes)

    def test_response_read_once(self):
        """Response.read enforces single consumption too."""
        response = Response.of(200, b"abc")
        assert response.read() == b"abc"
        with pytest.raises(BodyConsumedError):
            response.read()


class TestDispatch:
    def test_capture_returns_typed_value(self):
        """Captured values come back in the result."""
        response = Response.of(200, b'{"happy": true}', "application/json")
        result = dispatch(response, series(), on(Series.SUCCESSFUL).capture(dict))
        assert result.get(dict) == {"happy": True}

    def test_unknown_charset_does_not_break_dispatch(self):
        """A bogus charset parameter still decodes with the default charset."""
        response = Response.of(200, b"hi", "text/plain; charset=x-bogus")
        result = dispatch(response, series(), on(Series.SUCCESSFUL).capture(str))
        assert result.value == "hi"

    def test_call_with_target(self):
        """call passes the decoded body to the function."""
        seen = []
        response = Response.of(200, b"body", "text/plain")
        dispatch(response, series(), on(Series.SUCCESSFUL).call(seen.append, str))
        assert seen == ["body"]

    def test_call_without_target_gets_response(self):
        """call without a target receives the response itself."""
        response = Response.of(201, headers={"Location": "/things/1"})
        result = dispatch(
            response,
            status_code(),
            on(201).call(lambda r: r.headers["location"]),
        )
        assert result.value == "/things/1"

    def test_raise_builds_exception_from_body(self):
        """raise_ decodes the body and raises the built exception."""
        response = Response.of(400, b'{"title": "Bad Request"}', "application/problem+json")
        with pytest.raises(ProblemError) as exc_info:
            dispatch(
                response,
                series(),
                on(Series.SUCCESSFUL).pass_(),
                on(Series.CLIENT_ERROR).raise_(ProblemError, dict),
            )
        assert exc_info.value.problem == {"title": "Bad Request"}
        assert response.closed

    def test_nested_dispatch_falls_back_to_inner_wildcard(self):
        """An inner wildcard catches unknown content types."""
        response = Response.of(200, b"\x89PNG", "image/png")
        result = dispatch(
            response,
            series(),
            on(Series.SUCCESSFUL).dispatch(
                content_type(),
                on(APPLICATION_JSON).capture(dict),
                anything().capture(bytes),
            ),
        )
        assert result.value == b"\x89PNG"

    def test_route_cannot_read_body_twice(self):
        """A route decoding twice hits BodyConsumedError."""

        def twice(retriever):
            retriever.retrieve(bytes)
            return retriever.retrieve(bytes)

        response = Response.of(200, b"x")
        with pytest.raises(BodyConsumedError):
            dispatch(response, series(), on(Series.SUCCESSFUL).route(twice))
        assert response.closed

    def test_nested_dispatch_shares_single_body(self):
        """Outer and nested routes share the one-shot body."""
        inner = on(Series.SUCCESSFUL).dispatch(status_code(), on(200).capture(bytes))

        def outer(retriever):
            retriever.retrieve(bytes)
            return inner.route(retriever)

        with pytest.raises(BodyConsumedError):
            dispatch(Response.of(200, b"x"), series(), on(Series.SUCCESSFUL).route(outer))


class TestResourceScope:
    def test_closed_after_success(self):
        """Response is closed once the route returns."""
        response = Response.of(200, b"ignored", "text/plain")
        dispatch(response, series(), on(Series.SUCCESSFUL).pass_())
        assert response.closed
        assert response.stream.closed

    def test_closed_after_unsupported(self):
        """Response is closed when no binding matches."""
        response = Response.of(503)
        with pytest.raises(UnsupportedResponse):
            dispatch(response, series(), on(Series.SUCCESSFUL).pass_())
        assert response.closed

    def test_closed_after_converter_failure(self):
        """Response is closed when decoding fails."""
        response = Response.of(200, b"<x/>", "application/xml")
        dispatcher = Dispatcher(response, ConverterRegistry([JsonConverter()]))
        with pytest.raises(NoSuitableConverter):
            dispatcher.dispatch(series(), on(Series.SUCCESSFUL).capture(dict))
        assert response.closed

    def test_default_converters(self):
        """Dispatcher falls back to the default registry."""
        dispatcher = Dispatcher(Response.of(200))
        assert len(dispatcher.converters) == 4
