"""Prometheus metrics for document parsing and formatting."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from prometheus_client import Counter, Histogram, start_http_server

logger = logging.getLogger(__name__)


@dataclass
class ParseEvent:
    source: str
    element_count: int
    duration_seconds: float
    status: str


@dataclass
class FormatEvent:
    kind: str
    length: int


class MetricsCollector:
    """Centralised metrics registry for the body parser."""

    def __init__(self) -> None:
        self._exporter_started = False

        self._documents = Counter(
            "bodyparser_documents_total",
            "Documents handed to the parser",
            labelnames=("source", "status"),
        )
        self._elements = Counter(
            "bodyparser_elements_total",
            "Elements produced by the parser",
            labelnames=("source",),
        )
        self._parse_duration = Histogram(
            "bodyparser_parse_duration_seconds",
            "Duration of a single parse in seconds",
            labelnames=("source",),
            buckets=(0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1, 5),
        )
        self._output_length = Histogram(
            "bodyparser_output_length_characters",
            "Length of formatted output in characters",
            labelnames=("kind",),
            buckets=(0, 50, 100, 200, 400, 800, 1600, 3200, 6400),
        )

        self.last_parse: Optional[ParseEvent] = None
        self.last_format: Optional[FormatEvent] = None

    def enable_exporter(self, port: int) -> bool:
        """Start the Prometheus HTTP exporter once."""

        if self._exporter_started:
            return True
        start_http_server(port)
        self._exporter_started = True
        logger.info("Prometheus metrics exporter started", extra={"event": "metrics.started", "port": port})
        return True

    def record_parse(self, *, source: str, element_count: int, duration_seconds: float, status: str) -> None:
        self.last_parse = ParseEvent(source, element_count, duration_seconds, status)
        self._documents.labels(source=source, status=status).inc()
        if element_count:
            self._elements.labels(source=source).inc(element_count)
        self._parse_duration.labels(source=source).observe(duration_seconds)

    def record_format(self, *, kind: str, length: int) -> None:
        self.last_format = FormatEvent(kind, length)
        self._output_length.labels(kind=kind).observe(length)

    def reset(self) -> None:
        """Reset cached inspection state (primarily for tests)."""

        self.last_parse = None
        self.last_format = None


metrics = MetricsCollector()


def configure_metrics_from_env() -> None:
    """Start metrics exporter when ``BODYPARSER_METRICS_PORT`` is defined."""

    port_value = os.getenv("BODYPARSER_METRICS_PORT")
    if not port_value:
        return
    try:
        port = int(port_value)
    except ValueError:
        logger.warning(
            "Invalid BODYPARSER_METRICS_PORT value; expected integer",
            extra={"event": "metrics.invalid_port", "value": port_value},
        )
        return
    metrics.enable_exporter(port)


__all__ = ["configure_metrics_from_env", "metrics", "MetricsCollector", "FormatEvent", "ParseEvent"]
