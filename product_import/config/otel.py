import logging
import os
from typing import Optional

from opentelemetry import trace, propagate
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, SimpleSpanProcessor, SpanExporter
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from sqlalchemy.engine import Engine

from product_import.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

_TRACER_PROVIDER_INSTANCE: Optional[TracerProvider] = None


def setup_tracing(
    settings: Optional[Settings] = None,
    exporter: Optional[SpanExporter] = None,
    engine: Optional[Engine] = None,
    set_global: bool = True,
) -> TracerProvider:
    """
    Builds the tracer provider for an import run.

    Spans go to `exporter` when one is given (synchronously), otherwise to the
    OTLP gRPC collector configured in OTEL_EXPORTER_OTLP_ENDPOINT. Without
    either the provider records spans but exports nothing.
    """
    global _TRACER_PROVIDER_INSTANCE
    settings = settings or get_settings()

    resource = Resource.create({
        "service.name": settings.OTEL_SERVICE_NAME,
        "deployment.environment": os.getenv("ENVIRONMENT", "development"),
    })
    tracer_provider = TracerProvider(resource=resource)

    if exporter is not None:
        tracer_provider.add_span_processor(SimpleSpanProcessor(exporter))
    elif settings.OTEL_EXPORTER_OTLP_ENDPOINT:
        endpoint = settings.OTEL_EXPORTER_OTLP_ENDPOINT
        # gRPC endpoints are host:port
        for scheme in ("http://", "https://"):
            if endpoint.startswith(scheme):
                endpoint = endpoint[len(scheme):]
        tracer_provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint, insecure=True)))
        logger.info("OTLP span exporter configured.", extra={"endpoint": endpoint})
    else:
        logger.info("No span exporter configured, spans are not exported.")

    if set_global:
        trace.set_tracer_provider(tracer_provider)
        propagate.set_global_textmap(TraceContextTextMapPropagator())
        _TRACER_PROVIDER_INSTANCE = tracer_provider

    if engine is not None and settings.INSTRUMENT_SQLALCHEMY:
        SQLAlchemyInstrumentor().instrument(engine=engine, tracer_provider=tracer_provider)
        logger.info("SQLAlchemyInstrumentor applied.")

    return tracer_provider


def get_global_tracer_provider() -> Optional[TracerProvider]:
    return _TRACER_PROVIDER_INSTANCE


def shutdown_tracing() -> None:
    global _TRACER_PROVIDER_INSTANCE
    if _TRACER_PROVIDER_INSTANCE is None:
        return
    try:
        _TRACER_PROVIDER_INSTANCE.shutdown()
    except Exception as e:
        logger.error("Error during TracerProvider shutdown.", extra={"error": str(e)}, exc_info=True)
    else:
        logger.info("TracerProvider shutdown successful.")
    _TRACER_PROVIDER_INSTANCE = None
