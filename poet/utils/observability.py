"""Structured logging, Prometheus metrics and tracing spans.

Metrics are registered on the default Prometheus registry. Spans go through
the OpenTelemetry API, which is a no-op until an SDK tracer provider is
installed by the hosting application.
"""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterable, Iterator, Optional

from opentelemetry import trace
from prometheus_client import REGISTRY, Counter, Histogram


class StructuredLoggerAdapter(logging.LoggerAdapter):
    """Adapter that renders bound and per-call context after the message."""

    def bind(self, **context: Any) -> "StructuredLoggerAdapter":
        merged = dict(self.extra or {})
        merged.update(context)
        return StructuredLoggerAdapter(self.logger, merged)

    def process(self, msg: str, kwargs: Dict[str, Any]):
        event_context: Dict[str, Any] = dict(self.extra or {})
        provided = kwargs.pop("context", None)
        if isinstance(provided, dict):
            event_context.update(provided)
        if event_context:
            payload = json.dumps(event_context, sort_keys=True, default=str)
            msg = f"{msg} | {payload}"
        return msg, kwargs


def get_logger(name: str, **context: Any) -> StructuredLoggerAdapter:
    """Return a project logger with optional bound context."""

    return StructuredLoggerAdapter(logging.getLogger(name), context)


def _registered(name: str) -> Any:
    # Counters register both "<name>" and "<name>_total".
    collectors = getattr(REGISTRY, "_names_to_collectors", {})
    return collectors.get(name) or collectors.get(f"{name}_total")


def create_counter(
    name: str,
    documentation: str,
    label_names: Optional[Iterable[str]] = None,
) -> Counter:
    """Create a counter, reusing an existing one when the module is reloaded."""

    try:
        return Counter(name, documentation, labelnames=tuple(label_names or ()))
    except ValueError:
        existing = _registered(name)
        if existing is None:
            raise
        return existing


def create_histogram(
    name: str,
    documentation: str,
    label_names: Optional[Iterable[str]] = None,
) -> Histogram:
    """Create a histogram, reusing an existing one when the module is reloaded."""

    try:
        return Histogram(name, documentation, labelnames=tuple(label_names or ()))
    except ValueError:
        existing = _registered(name)
        if existing is None:
            raise
        return existing


@contextmanager
def start_span(name: str, attributes: Optional[Dict[str, Any]] = None) -> Iterator[Any]:
    """Start an OpenTelemetry span named ``name`` with ``attributes``."""

    tracer = trace.get_tracer("poet")
    with tracer.start_as_current_span(name) as span:
        add_span_attributes(span, attributes or {})
        yield span


def add_span_attributes(span: Any, attributes: Dict[str, Any]) -> None:
    """Attach primitive ``attributes`` to ``span``."""

    if span is None:
        return
    for key, value in attributes.items():
        if not isinstance(key, str):
            continue
        if isinstance(value, (str, bool, int, float)):
            span.set_attribute(key, value)
        else:
            span.set_attribute(key, str(value))


def record_exception(span: Any, error: BaseException) -> None:
    """Record ``error`` on ``span`` and flag the span as failed."""

    if span is None:
        return
    span.record_exception(error)
    span.set_attribute("error", True)


__all__ = [
    "StructuredLoggerAdapter",
    "add_span_attributes",
    "create_counter",
    "create_histogram",
    "get_logger",
    "record_exception",
    "start_span",
]
