"""Observability setup for s3-tools.

Stdout is reserved for command output (one object key per line), so both
structured logs and exported spans are written to stderr unless another
stream is given.
"""

import logging
import sys
from typing import Any, Optional, TextIO

import structlog
from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

from .config import settings


def build_tracer_provider(stream: TextIO = sys.stderr) -> TracerProvider:
    """Create a tracer provider exporting spans to the given stream."""
    resource = Resource.create({"service.name": settings.otel_service_name})
    provider = TracerProvider(resource=resource)
    provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter(out=stream)))
    return provider


def setup_tracing(stream: TextIO = sys.stderr, enabled: Optional[bool] = None) -> None:
    """Install the console tracer provider when tracing is enabled."""
    if enabled is None:
        enabled = settings.otel_enabled
    if not enabled:
        return

    trace.set_tracer_provider(build_tracer_provider(stream))


def setup_logging(stream: TextIO = sys.stderr, level: Optional[str] = None) -> None:
    """Route JSON-rendered structlog events to the given stream.

    Args:
        stream: Destination for log lines
        level: Log level name, defaults to S3_TOOLS_LOG_LEVEL
    """
    logging.basicConfig(
        format="%(message)s",
        stream=stream,
        level=getattr(logging, (level or settings.log_level).upper()),
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> Any:
    """Get a logger instance."""
    return structlog.get_logger(name)


def get_tracer(name: str) -> trace.Tracer:
    """Get a tracer instance."""
    return trace.get_tracer(name)


# Initialize on import
setup_logging()
setup_tracing()
