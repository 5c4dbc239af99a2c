from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter, SimpleSpanProcessor
from opentelemetry.sdk.trace.sampling import TraceIdRatioBased

if TYPE_CHECKING:
    from fastapi import FastAPI

    from papersmith.settings import Settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
TRACER_NAME = "papersmith"

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
    # Every provider call would otherwise log its full URL at INFO.
    logging.getLogger("httpx").setLevel(logging.WARNING)


def init_otel(app: "FastAPI", settings: "Settings") -> bool:
    """Install a tracer provider and instrument FastAPI and httpx.

    Returns False without touching global state when tracing is disabled.
    Spans from ``get_tracer()`` are no-ops in that case.
    """
    if not settings.observability_enabled:
        return False

    provider = TracerProvider(
        resource=Resource.create({"service.name": settings.otel_service_name}),
        sampler=TraceIdRatioBased(settings.otel_sample_rate),
    )
    if settings.otel_exporter_console:
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))
    if settings.otel_exporter_otlp_endpoint:
        provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=settings.otel_exporter_otlp_endpoint)))
    trace.set_tracer_provider(provider)

    FastAPIInstrumentor.instrument_app(app)
    HTTPXClientInstrumentor().instrument()
    logger.info(
        "Tracing enabled for %s (sample_rate=%s, otlp=%s)",
        settings.otel_service_name,
        settings.otel_sample_rate,
        settings.otel_exporter_otlp_endpoint or "off",
    )
    return True


def get_tracer() -> trace.Tracer:
    return trace.get_tracer(TRACER_NAME)
