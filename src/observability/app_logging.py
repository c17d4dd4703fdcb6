import logging

import structlog

from observability.tracing import TRACER_NAME, Tracing


class AppLogging:
    @staticmethod
    def _add_open_telemetry_spans(_, __, event_dict):
        # See https://www.structlog.org/en/stable/frameworks.html#opentelemetry
        span_ids = Tracing.current_span_ids()
        if span_ids:
            event_dict.update(span_ids)
            event_dict["tracer"] = TRACER_NAME
        return event_dict

    @staticmethod
    def configure_logging(level: int = logging.INFO):
        """Send structlog and standard library logging to the console, for applications using the client"""
        timestamper = structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S")
        shared_processors = [
            structlog.stdlib.add_log_level,
            timestamper,
        ]

        structlog.configure(
            processors=shared_processors
            + [
                structlog.contextvars.merge_contextvars,
                AppLogging._add_open_telemetry_spans,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )

        formatter = structlog.stdlib.ProcessorFormatter(
            # These run ONLY on `logging` entries that do NOT originate within
            # structlog.
            foreign_pre_chain=shared_processors,
            # These run on ALL entries after the pre_chain is done.
            processors=[
                # Remove _record & _from_structlog.
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.dev.ConsoleRenderer(),
            ],
        )

        handler = logging.StreamHandler()
        handler.setFormatter(formatter)
        root_logger = logging.getLogger()
        root_logger.addHandler(handler)
        root_logger.setLevel(level)
