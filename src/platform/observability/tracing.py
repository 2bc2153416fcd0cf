"""
OpenTelemetry tracing configuration.

Spans wrap the availability check, the authoritative commit and the booking
submission flow so a slow or conflicting booking can be followed end to end.
Export is opt-in: console export via OTEL_CONSOLE_EXPORT=true; without an
exporter the spans are recorded by the SDK and dropped.
"""

import os
from typing import Any

from opentelemetry import trace
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.sdk.trace.sampling import ALWAYS_ON


class TracingConfig:
    """
    Usage:
        tracing = TracingConfig(service_name="seat-booking")
        tracing.setup()
        ...
        tracing.shutdown()
    """

    def __init__(self, *, service_name: str, enable_console: bool = False) -> None:
        self.service_name = service_name
        self.enable_console = (
            enable_console or os.getenv('OTEL_CONSOLE_EXPORT', 'false').lower() == 'true'
        )
        self._provider: TracerProvider | None = None

    def setup(self) -> None:
        """Install the global tracer provider. Call once at application startup."""
        resource = Resource(attributes={SERVICE_NAME: self.service_name})
        self._provider = TracerProvider(resource=resource, sampler=ALWAYS_ON)

        if self.enable_console:
            self._provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

        trace.set_tracer_provider(self._provider)

    def instrument_fastapi(self, *, app: Any, excluded_urls: str = 'health') -> None:
        FastAPIInstrumentor.instrument_app(app, excluded_urls=excluded_urls)

    def shutdown(self) -> None:
        if self._provider:
            self._provider.shutdown()
