"""
Prometheus metrics instrumentation.
Adds custom metrics for monitoring API and the reconciliation jobs.
"""
from prometheus_client import Counter, Histogram, Gauge, Info
import time
from functools import wraps
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

# API Metrics
http_requests_total = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status']
)

http_request_duration_seconds = Histogram(
    'http_request_duration_seconds',
    'HTTP request latency',
    ['method', 'endpoint']
)

http_requests_in_progress = Gauge(
    'http_requests_in_progress',
    'HTTP requests currently in progress',
    ['method', 'endpoint']
)

# Network feed Metrics
network_fetch_total = Counter(
    'network_fetch_total',
    'Total fetches of flight-tracking network feeds',
    ['network', 'status']
)

# Reconciliation Metrics
reconciliation_runs_total = Counter(
    'reconciliation_runs_total',
    'Total reconciliation cycles',
    ['network', 'status']
)

reconciliation_duration_seconds = Histogram(
    'reconciliation_duration_seconds',
    'Reconciliation cycle duration',
    ['network']
)

flight_transitions_total = Counter(
    'flight_transitions_total',
    'Flight updates applied by the reconciliation engine',
    ['network', 'transition']
)

reconciliation_failures_total = Counter(
    'reconciliation_failures_total',
    'Per-flight failures during reconciliation',
    ['network', 'stage']
)

# Application Info
app_info = Info('crewcenter_backend', 'Application information')
app_info.info({
    'version': '1.0.0',
    'name': 'Crew Center Backend'
})


class PrometheusMiddleware(BaseHTTPMiddleware):
    """
    Middleware to collect HTTP metrics.
    """

    async def dispatch(self, request: Request, call_next):
        method = request.method
        endpoint = request.url.path

        # Track in-progress requests
        http_requests_in_progress.labels(method=method, endpoint=endpoint).inc()

        # Time request
        start_time = time.time()

        try:
            response = await call_next(request)
            status = response.status_code

            # Record metrics
            http_requests_total.labels(
                method=method,
                endpoint=endpoint,
                status=status
            ).inc()

            duration = time.time() - start_time
            http_request_duration_seconds.labels(
                method=method,
                endpoint=endpoint
            ).observe(duration)

            return response

        finally:
            http_requests_in_progress.labels(method=method, endpoint=endpoint).dec()


def track_reconciliation():
    """
    Decorator to track reconciliation cycle metrics.
    Expects the wrapped coroutine to return a ReconciliationStats.
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(self, *args, **kwargs):
            network = self.network.value
            start_time = time.time()

            try:
                stats = await func(self, *args, **kwargs)
            except Exception:
                reconciliation_runs_total.labels(network=network, status="error").inc()
                raise
            finally:
                reconciliation_duration_seconds.labels(network=network).observe(time.time() - start_time)

            reconciliation_runs_total.labels(
                network=network,
                status="success" if stats.succeeded else "fetch_error"
            ).inc()

            for transition in ("backfilled", "started", "closed"):
                count = getattr(stats, transition)
                if count > 0:
                    flight_transitions_total.labels(network=network, transition=transition).inc(count)

            return stats

        return wrapper
    return decorator
