import functools

from opentelemetry import trace

TRACER_NAME = "OxygenClient"

# The X prefix is deprecated (https://datatracker.ietf.org/doc/html/rfc6648) but still expected by some services
_SPAN_HEADERS = ("X-Request-ID", "Request-ID")
_TRACE_HEADERS = ("X-Correlation-ID", "Correlation-ID")


class Tracing:
    @staticmethod
    def traced(func):
        """Run each call of the operation in a span named after it"""

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            with trace.get_tracer(TRACER_NAME).start_as_current_span(func.__name__):
                return func(*args, **kwargs)

        return wrapper

    @staticmethod
    def current_span_ids() -> dict[str, str]:
        """Hex ids of the current span, its trace and its parent if any. Empty without a recording span."""
        span = trace.get_current_span()
        if not span.is_recording():
            return {}

        context = span.get_span_context()
        ids = {
            "span_id": trace.format_span_id(context.span_id),
            "trace_id": trace.format_trace_id(context.trace_id),
        }
        parent = getattr(span, "parent", None)
        if parent:
            ids["parent_span_id"] = trace.format_span_id(parent.span_id)
        return ids

    @staticmethod
    def get_trace_headers() -> dict[str, str]:
        ids = Tracing.current_span_ids()
        if not ids:
            return {}

        headers = dict.fromkeys(_SPAN_HEADERS, ids["span_id"])
        headers.update(dict.fromkeys(_TRACE_HEADERS, ids["trace_id"]))
        return headers
