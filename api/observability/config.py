"""
OpenTelemetry Configuration

Sets up distributed tracing and logging for the safety operations API.
"""

import os
import logging
from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.sampling import TraceIdRatioBased
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter

SERVICE_NAME = 'safety-ops-api'

_configured = False


def setup_observability(config: dict = None):
    """
    Initialize OpenTelemetry tracing and logging.

    Args:
        config: Application settings; keys it lacks fall back to the environment
    """
    global _configured
    config = config or {}
    environment = config.get('ENVIRONMENT') or os.getenv('ENVIRONMENT', 'development')
    otel_enabled = config.get('OTEL_ENABLED')
    if otel_enabled is None:
        otel_enabled = os.getenv('OTEL_ENABLED', 'true').lower() == 'true'
    service_version = config.get('SERVICE_VERSION') or os.getenv('SERVICE_VERSION', '1.0.0')
    otlp_endpoint = config.get('OTEL_EXPORTER_OTLP_ENDPOINT') or os.getenv('OTEL_EXPORTER_OTLP_ENDPOINT')

    setup_structured_logging(environment)

    if not otel_enabled or _configured:
        # Spans stay no-ops without a tracer provider
        return

    # Environment-specific sampling
    if environment == 'production':
        sampler = TraceIdRatioBased(0.1)
    elif environment == 'staging':
        sampler = TraceIdRatioBased(0.5)
    else:
        sampler = TraceIdRatioBased(1.0)

    resource = Resource.create({
        "service.name": SERVICE_NAME,
        "service.version": service_version,
        "deployment.environment": environment
    })

    tracer_provider = TracerProvider(
        sampler=sampler,
        resource=resource
    )

    if environment in ('production', 'staging'):
        if otlp_endpoint:
            otlp_exporter = OTLPSpanExporter(
                endpoint=otlp_endpoint,
                headers={"Authorization": f"Bearer {os.getenv('OTEL_API_KEY', '')}"}
            )
            tracer_provider.add_span_processor(
                BatchSpanProcessor(otlp_exporter, max_export_batch_size=512)
            )
    else:
        # Development: console output, plus a local collector when configured
        tracer_provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
        if otlp_endpoint:
            tracer_provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=otlp_endpoint)))

    trace.set_tracer_provider(tracer_provider)
    _configured = True


def setup_structured_logging(environment: str):
    """Configure log levels per environment."""
    log_level = {
        'production': logging.WARNING,
        'staging': logging.INFO,
        'development': logging.INFO
    }.get(environment, logging.INFO)

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s %(levelname)s %(name)s %(message)s',
        handlers=[logging.StreamHandler()]
    )

    if environment == 'production':
        logging.getLogger('pymongo').setLevel(logging.WARNING)
        logging.getLogger('werkzeug').setLevel(logging.WARNING)

    elif environment == 'development':
        logging.getLogger('domain').setLevel(logging.DEBUG)
        logging.getLogger('services').setLevel(logging.DEBUG)
