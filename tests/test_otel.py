from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from product_import.config.otel import setup_tracing, get_global_tracer_provider
from product_import.core.config import Settings


def test_setup_tracing_with_exporter():
    exporter = InMemorySpanExporter()
    settings = Settings(_env_file=None, OTEL_SERVICE_NAME="product-import-test")

    provider = setup_tracing(settings, exporter=exporter, set_global=False)

    assert isinstance(provider, TracerProvider)
    assert provider.resource.attributes["service.name"] == "product-import-test"
    with provider.get_tracer("tests").start_as_current_span("work"):
        pass
    assert [span.name for span in exporter.get_finished_spans()] == ["work"]
    provider.shutdown()


def test_setup_tracing_without_exporter_or_endpoint():
    provider = setup_tracing(Settings(_env_file=None), set_global=False)

    with provider.get_tracer("tests").start_as_current_span("work") as span:
        assert span.is_recording()
    provider.shutdown()


def test_local_provider_is_not_registered():
    before = get_global_tracer_provider()

    provider = setup_tracing(Settings(_env_file=None), exporter=InMemorySpanExporter(), set_global=False)

    assert get_global_tracer_provider() is before
    assert get_global_tracer_provider() is not provider
    provider.shutdown()
