"""Logging, error tracking and performance monitoring utilities.

This module provides:
- Logging setup for the dashboard (``kpi_dashboard`` logger)
- Sentry error tracking integration
- Performance monitoring with timing decorators

Usage:
    from kpi_dashboard.utils.monitoring import configure_logging, init_sentry, timing_decorator

    # In the app entry point
    configure_logging("INFO")
    init_sentry(dsn="your-dsn-here")

    # Use timing decorator on slow operations
    @timing_decorator
    def query_football_data():
        ...
"""

import time
import functools
import contextlib
from typing import Callable, Optional, Dict
import logging

logger = logging.getLogger('kpi_dashboard')

_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once and set the dashboard logger level."""
    logging.basicConfig(level=logging.INFO, format=_LOG_FORMAT)
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))


# =============================================================================
# SENTRY ERROR TRACKING
# =============================================================================

_sentry_initialized = False


def init_sentry(
    dsn: Optional[str] = None,
    environment: str = "development",
    release: Optional[str] = None,
    sample_rate: float = 1.0,
    traces_sample_rate: float = 0.1,
) -> bool:
    """Initialize Sentry for error tracking.

    Args:
        dsn: Sentry DSN (Data Source Name). If None, Sentry won't be initialized.
        environment: Environment name (dev, staging, production)
        release: Release version string
        sample_rate: Error sampling rate (0.0 to 1.0)
        traces_sample_rate: Performance trace sampling rate

    Returns:
        True if Sentry was successfully initialized
    """
    global _sentry_initialized

    if not dsn:
        logger.info("Sentry DSN not provided, error tracking disabled")
        return False

    if _sentry_initialized:
        return True

    import sentry_sdk
    from sentry_sdk.integrations.streamlit import StreamlitIntegration

    sentry_sdk.init(
        dsn=dsn,
        environment=environment,
        release=release,
        sample_rate=sample_rate,
        traces_sample_rate=traces_sample_rate,
        integrations=[
            StreamlitIntegration(),
        ],
    )

    _sentry_initialized = True
    logger.info(f"Sentry initialized for {environment} environment")
    return True


def capture_exception(error: Exception, context: Optional[Dict] = None) -> Optional[str]:
    """Capture an exception in Sentry, or log it when Sentry is not configured.

    Args:
        error: Exception to capture
        context: Additional context data

    Returns:
        Event ID if captured, None otherwise
    """
    if not _sentry_initialized:
        logger.error(f"Exception captured (Sentry not configured): {error!r} context={context or {}}")
        return None

    import sentry_sdk

    if context:
        with sentry_sdk.new_scope() as scope:
            for key, value in context.items():
                scope.set_extra(key, value)
            return sentry_sdk.capture_exception(error)
    return sentry_sdk.capture_exception(error)


# =============================================================================
# PERFORMANCE MONITORING
# =============================================================================

class PerformanceMonitor:
    """Logs dashboard operations that run longer than ``slow_threshold_ms``."""

    def __init__(self, slow_threshold_ms: float = 1000):
        self.slow_threshold_ms = slow_threshold_ms

    def record(self, operation_name: str, duration_ms: float, **metadata) -> None:
        details = f" {metadata}" if metadata else ""
        logger.debug(f"{operation_name} took {duration_ms:.2f}ms{details}")
        if duration_ms > self.slow_threshold_ms:
            logger.warning(
                f"Slow operation: {operation_name} took {duration_ms:.2f}ms "
                f"(threshold: {self.slow_threshold_ms}ms){details}"
            )


# Global performance monitor instance
_performance_monitor = PerformanceMonitor()


def get_performance_monitor() -> PerformanceMonitor:
    """Get the global performance monitor."""
    return _performance_monitor


@contextlib.contextmanager
def monitor_performance(operation_name: str, **metadata):
    """Context manager for monitoring performance of a code block.

    Usage:
        with monitor_performance("kpi_query", kpi="won"):
            ...
    """
    start = time.perf_counter()
    try:
        yield
    except Exception as e:
        metadata['error'] = str(e)
        raise
    finally:
        duration_ms = (time.perf_counter() - start) * 1000
        get_performance_monitor().record(operation_name, duration_ms, **metadata)


def timing_decorator(func: Callable) -> Callable:
    """Decorator to time function execution and log slow operations.

    Usage:
        @timing_decorator
        def order_chart_rows(records, kpi):
            ...
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        with monitor_performance(func.__name__):
            return func(*args, **kwargs)

    return wrapper
