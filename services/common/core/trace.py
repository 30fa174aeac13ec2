"""
Where: services/common/core/trace.py
What: OpenTelemetry tracer setup and W3C trace-context propagation helpers.
Why: Every handler and outbound call opens a span; the context must cross
     HTTP ingress and gRPC egress unchanged.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, List, Mapping, Optional, Tuple

from opentelemetry import propagate, trace
from opentelemetry.context import Context
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

logger = logging.getLogger(__name__)

_TRACER_NAME = "par-pro.catalog"


def setup_tracing(service_name: str, otlp_endpoint: str = "") -> TracerProvider:
    """
    Install a global TracerProvider.

    Spans are always recorded (so ids appear in logs); they are exported only
    when an OTLP endpoint is configured.
    """
    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))

    if otlp_endpoint:
        from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter

        exporter = OTLPSpanExporter(endpoint=f"{otlp_endpoint.rstrip('/')}/v1/traces")
        provider.add_span_processor(BatchSpanProcessor(exporter))
        logger.info("Tracing export enabled: %s", otlp_endpoint)
    else:
        logger.info("Tracing export disabled: no OTEL_EXPORTER_OTLP_ENDPOINT configured")

    trace.set_tracer_provider(provider)
    return provider


def get_tracer(name: str = _TRACER_NAME) -> trace.Tracer:
    return trace.get_tracer(name)


@contextmanager
def start_span(
    name: str,
    context: Optional[Context] = None,
    kind: trace.SpanKind = trace.SpanKind.INTERNAL,
) -> Iterator[trace.Span]:
    """Open a span as a child of the current (or given) context and make it current."""
    with get_tracer().start_as_current_span(name, context=context, kind=kind) as span:
        yield span


def extract_context(headers: Mapping[str, str]) -> Context:
    """Build a parent context from incoming `traceparent`/`tracestate` headers."""
    return propagate.extract(headers)


def outgoing_metadata() -> List[Tuple[str, str]]:
    """gRPC metadata carrying the current span's trace context."""
    carrier: dict = {}
    propagate.inject(carrier)
    return [(key.lower(), value) for key, value in carrier.items()]


def current_trace_ids() -> Tuple[Optional[str], Optional[str]]:
    """Return (trace_id, span_id) of the active span as hex, or (None, None)."""
    ctx = trace.get_current_span().get_span_context()
    if not ctx.is_valid:
        return None, None
    return format(ctx.trace_id, "032x"), format(ctx.span_id, "016x")
