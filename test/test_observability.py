import logging

import pytest
import structlog
from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider

from fake_oxygen_server import FakeOxygenServer
from node_attributes import NodeType
from observability.app_logging import AppLogging
from observability.tracing import TRACER_NAME, Tracing
from oxygen_http_client import HttpClient
from oxygen_requests import OxygenRequests


@pytest.fixture()
def tracer() -> trace.Tracer:
    return TracerProvider().get_tracer("test")


def test_no_trace_headers_outside_a_span():
    assert Tracing.get_trace_headers() == {}


def test_trace_headers_inside_a_span(tracer: trace.Tracer):
    with tracer.start_as_current_span("operation") as span:
        context = span.get_span_context()
        headers = Tracing.get_trace_headers()

    assert headers["Request-ID"] == trace.format_span_id(context.span_id)
    assert headers["X-Request-ID"] == headers["Request-ID"]
    assert headers["Correlation-ID"] == trace.format_trace_id(context.trace_id)
    assert headers["X-Correlation-ID"] == headers["Correlation-ID"]


def test_requests_carry_trace_headers(tracer: trace.Tracer, client: HttpClient, served_by_fake: FakeOxygenServer):
    with tracer.start_as_current_span("operation") as span:
        client.resolve_node(1)

    headers = served_by_fake.requests[0].headers
    assert headers["Correlation-ID"] == trace.format_trace_id(span.get_span_context().trace_id)
    # Trace headers never replace the token
    assert headers["Authorization"] == "secret-token"


def test_diagnostic_capture_logs_bodies(endpoint: str, served_by_fake: FakeOxygenServer):
    served_by_fake.add_node(1, "f", NodeType.FILE, b"file content")

    with structlog.testing.capture_logs() as captured:
        with HttpClient(endpoint, "", OxygenRequests(), log=True) as client:
            _, content = client.read_path("f")
            with content:
                assert content.read() == b"file content"

    events = {entry["event"]: entry for entry in captured}
    assert events["Outgoing request"]["method"] == "GET"
    assert events["Incoming response"]["status_code"] == 200
    assert events["Incoming response"]["body"] == b"file content"


def test_no_bodies_logged_without_diagnostics(client: HttpClient, served_by_fake: FakeOxygenServer):
    served_by_fake.add_node(1, "f", NodeType.FILE, b"file content")

    with structlog.testing.capture_logs() as captured:
        _, content = client.read_path("f")
        content.close()

    assert "Incoming response" not in [entry["event"] for entry in captured]


@pytest.fixture()
def restore_logging():
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    root_logger.handlers = handlers
    root_logger.setLevel(level)
    structlog.reset_defaults()


def test_configure_logging(restore_logging, capsys: pytest.CaptureFixture, tracer: trace.Tracer):
    AppLogging.configure_logging(logging.DEBUG)

    with tracer.start_as_current_span("operation") as span:
        structlog.getLogger("test").info("Something happened", node_id=7)

    output = capsys.readouterr().err
    assert "Something happened" in output
    assert "node_id" in output
    assert trace.format_trace_id(span.get_span_context().trace_id) in output


def test_no_span_ids_outside_a_span():
    assert Tracing.current_span_ids() == {}


def test_span_ids_of_nested_spans(tracer: trace.Tracer):
    with tracer.start_as_current_span("outer") as outer:
        with tracer.start_as_current_span("inner") as inner:
            ids = Tracing.current_span_ids()

    assert ids == {
        "span_id": trace.format_span_id(inner.get_span_context().span_id),
        "trace_id": trace.format_trace_id(outer.get_span_context().trace_id),
        "parent_span_id": trace.format_span_id(outer.get_span_context().span_id),
    }


def test_log_events_carry_span_ids(tracer: trace.Tracer):
    with tracer.start_as_current_span("operation") as span:
        event = AppLogging._add_open_telemetry_spans(None, "info", {"event": "Something happened"})

    assert event["span_id"] == trace.format_span_id(span.get_span_context().span_id)
    assert event["tracer"] == TRACER_NAME
    assert "parent_span_id" not in event
    assert AppLogging._add_open_telemetry_spans(None, "info", {"event": "Outside"}) == {"event": "Outside"}
