"""Prometheus Metrics: per-app registry with request histogram, liveness gauge, process collectors.

Invariants:
    - One CollectorRegistry per application instance (never the global REGISTRY)
    - Request durations observed in whole milliseconds under the route template label
    - Route labels come from a table built once from the registered routes; anything
      outside it is labelled "unmatched"
    - app_up reads LivenessState by reference at scrape time

Design Decisions:
    - Own registry: create_app() can run many times in one process (tests) without
      duplicate-timeseries errors
    - Static (method, path) table over per-request route resolution: label cardinality
      is fixed at startup
"""

import logging
import time
from typing import Iterable

from fastapi import FastAPI, Request
from fastapi.routing import APIRoute
from prometheus_client import (
    CONTENT_TYPE_LATEST, CollectorRegistry, GCCollector, Gauge, Histogram,
    PlatformCollector, ProcessCollector, generate_latest,
)
from starlette.routing import BaseRoute

from app.core.liveness import LivenessState

logger = logging.getLogger(__name__)

REQUEST_DURATION_BUCKETS = (50, 100, 200, 300, 400, 500, 1000)
UNMATCHED_ROUTE = "unmatched"


class MetricsRegistry:
    """Owns every metric exported by one application instance."""

    def __init__(self, liveness: LivenessState):
        self.registry = CollectorRegistry()
        ProcessCollector(registry=self.registry)
        PlatformCollector(registry=self.registry)
        GCCollector(registry=self.registry)

        self.request_duration = Histogram(
            "http_request_duration_ms",
            "Duration of HTTP requests in ms",
            ["method", "route", "status_code"],
            buckets=REQUEST_DURATION_BUCKETS,
            registry=self.registry,
        )
        self.app_up = Gauge(
            "app_up",
            "Indicates if the app is up (1) or down (0)",
            registry=self.registry,
        )
        self.app_up.set_function(liveness.gauge_value)
        self._route_labels: dict[tuple[str, str], str] = {}

    def bind_routes(self, routes: Iterable[BaseRoute]) -> None:
        """Build the (method, path) -> label table from the declared routes."""
        table: dict[tuple[str, str], str] = {}
        for route in routes:
            if not isinstance(route, APIRoute):
                continue
            for method in route.methods:
                table[(method, route.path)] = route.path
        self._route_labels = table
        logger.info(f"Metrics bound to {len(table)} route labels")

    def route_label(self, method: str, path: str) -> str:
        return self._route_labels.get((method, path), UNMATCHED_ROUTE)

    def observe_request(
        self, method: str, path: str, status_code: int, duration_ms: int,
    ) -> None:
        self.request_duration.labels(
            method, self.route_label(method, path), str(status_code),
        ).observe(duration_ms)

    def render(self) -> tuple[bytes, str]:
        """Text exposition payload and its content type."""
        return generate_latest(self.registry), CONTENT_TYPE_LATEST


def instrument_requests(app: FastAPI, metrics: MetricsRegistry) -> None:
    """Wrap every request to record method, route label, status, and duration."""

    @app.middleware("http")
    async def record_request_metrics(request: Request, call_next):
        start = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            duration_ms = int((time.perf_counter() - start) * 1000)
            metrics.observe_request(
                request.method, request.url.path, status_code, duration_ms,
            )
