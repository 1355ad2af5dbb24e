"""Logging helpers with optional OpenTelemetry export."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from opentelemetry._logs import set_logger_provider
from opentelemetry.exporter.otlp.proto.grpc._log_exporter import OTLPLogExporter
from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
from opentelemetry.sdk._logs.export import BatchLogRecordProcessor
from opentelemetry.sdk.resources import Resource

if TYPE_CHECKING:
    from .config import TelemetryConfig

LOG_FORMAT = (
    "%(asctime)s | %(levelname)s | %(name)s | %(message)s "
    "| trace_id=%(otelTraceID)s span_id=%(otelSpanID)s"
)

_LOGGER: logging.Logger | None = None
_CONSOLE_HANDLER: logging.Handler | None = None
_OTLP_HANDLER: logging.Handler | None = None


class _OtelContextFilter(logging.Filter):
    """Ensures trace/span placeholders exist even when no context is active."""

    def filter(self, record: logging.LogRecord) -> bool:  # pragma: no cover - trivial
        if not hasattr(record, "otelTraceID"):
            record.otelTraceID = "-"
        if not hasattr(record, "otelSpanID"):
            record.otelSpanID = "-"
        return True


def get_logger(name: str = "broadside") -> logging.Logger:
    global _LOGGER
    if _LOGGER is None:
        _LOGGER = logging.getLogger(name)
    return _LOGGER


def init_logging(config: TelemetryConfig) -> logging.Logger:
    """Configure console logging and, if enabled, OTLP log export.

    ``config.log_level`` applies to the console handler only. With OTLP
    export on, the root logger lets INFO records through to the exporter.
    """
    global _CONSOLE_HANDLER, _OTLP_HANDLER
    logger = get_logger(config.service_name)
    root_logger = logging.getLogger()

    if _CONSOLE_HANDLER is None:
        console = logging.StreamHandler()
        console.setFormatter(logging.Formatter(LOG_FORMAT))
        console.addFilter(_OtelContextFilter())
        root_logger.addHandler(console)
        _CONSOLE_HANDLER = console
    console_level = logging.getLevelName(config.log_level)
    _CONSOLE_HANDLER.setLevel(console_level)

    if config.enable_logging:
        root_logger.setLevel(min(console_level, logging.INFO))
    else:
        root_logger.setLevel(console_level)

    if config.enable_logging and _OTLP_HANDLER is None:
        provider = LoggerProvider(resource=Resource.create(config.resource()))
        if config.otlp_logs_endpoint:
            exporter = OTLPLogExporter(endpoint=config.otlp_logs_endpoint, insecure=True)
            provider.add_log_record_processor(BatchLogRecordProcessor(exporter))
        set_logger_provider(provider)

        handler = LoggingHandler(level=logging.INFO, logger_provider=provider)
        handler.addFilter(_OtelContextFilter())
        root_logger.addHandler(handler)
        _OTLP_HANDLER = handler

    return logger
