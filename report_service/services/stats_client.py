"""HTTP client for the payment, enrollment and course statistics services."""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any

import httpx

from report_service.core.config import Settings, get_settings
from report_service.obs import UPSTREAM_FETCH_ERROR_COUNTER, UPSTREAM_FETCH_LATENCY_SECONDS
from report_service.services.errors import UpstreamStatsError

logger = logging.getLogger(__name__)

PAYMENT = "payment"
ENROLLMENT = "enrollment"
COURSE = "course"


@dataclass(slots=True, frozen=True)
class UpstreamEndpoint:
    """Base URL and stats path of one upstream service."""

    source: str
    base_url: str
    path: str

    @property
    def url(self) -> str:
        return f"{self.base_url.rstrip('/')}/{self.path.lstrip('/')}"


@dataclass(slots=True, frozen=True)
class StatsBundle:
    """Raw payloads returned by the three upstreams."""

    payment: Any
    enrollment: Any
    course: Any


def endpoints_from_settings(settings: Settings) -> dict[str, UpstreamEndpoint]:
    return {
        PAYMENT: UpstreamEndpoint(PAYMENT, settings.api_base_payment_url, settings.payment_stats_path),
        ENROLLMENT: UpstreamEndpoint(
            ENROLLMENT, settings.api_base_enrollment_url, settings.enrollment_stats_path
        ),
        COURSE: UpstreamEndpoint(COURSE, settings.api_base_course_url, settings.course_stats_path),
    }


class StatsClient:
    """Synchronous wrapper around the upstream statistics APIs."""

    def __init__(
        self,
        endpoints: dict[str, UpstreamEndpoint],
        *,
        timeout: float = 5.0,
        max_redirects: int = 5,
        client: httpx.Client | None = None,
    ) -> None:
        missing = {PAYMENT, ENROLLMENT, COURSE} - endpoints.keys()
        if missing:
            raise ValueError(f"missing upstream endpoints: {', '.join(sorted(missing))}")
        self._endpoints = endpoints
        self._timeout = timeout
        self._client = client or httpx.Client(
            timeout=timeout, follow_redirects=True, max_redirects=max_redirects
        )
        self._owns_client = client is None

    @classmethod
    def from_settings(cls, settings: Settings | None = None, *, client: httpx.Client | None = None) -> "StatsClient":
        settings = settings or get_settings()
        return cls(
            endpoints_from_settings(settings),
            timeout=settings.upstream_timeout_seconds,
            max_redirects=settings.upstream_max_redirects,
            client=client,
        )

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "StatsClient":
        return self

    def __exit__(self, *_args: object) -> None:
        self.close()

    def fetch(self, source: str) -> Any:
        """GET the stats document of ``source`` and return the decoded JSON body."""

        endpoint = self._endpoints[source]
        logger.info("Fetching %s stats from %s%s", source, endpoint.base_url, endpoint.path)
        start_time = time.perf_counter()
        try:
            response = self._client.get(endpoint.url, timeout=self._timeout)
            response.raise_for_status()
            return response.json()
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            UPSTREAM_FETCH_ERROR_COUNTER.labels(source=source).inc()
            raise UpstreamStatsError(source, f"request to {endpoint.url} failed: {exc}") from exc
        except ValueError as exc:
            UPSTREAM_FETCH_ERROR_COUNTER.labels(source=source).inc()
            raise UpstreamStatsError(source, f"invalid JSON from {endpoint.url}") from exc
        finally:
            UPSTREAM_FETCH_LATENCY_SECONDS.labels(source=source).observe(time.perf_counter() - start_time)

    def fetch_payment_stats(self) -> Any:
        return self.fetch(PAYMENT)

    def fetch_enrollment_stats(self) -> Any:
        return self.fetch(ENROLLMENT)

    def fetch_course_stats(self) -> Any:
        return self.fetch(COURSE)

    def fetch_all(self) -> StatsBundle:
        """Fetch all three payloads; the first failure aborts the bundle."""

        return StatsBundle(
            payment=self.fetch_payment_stats(),
            enrollment=self.fetch_enrollment_stats(),
            course=self.fetch_course_stats(),
        )


__all__ = [
    "COURSE",
    "ENROLLMENT",
    "PAYMENT",
    "StatsBundle",
    "StatsClient",
    "UpstreamEndpoint",
    "endpoints_from_settings",
]
