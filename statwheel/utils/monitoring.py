"""Logging and performance monitoring for the stats wheel.

Usage:
    from statwheel.utils.monitoring import logger, timing_decorator, monitor_performance

    @timing_decorator
    def annotate_tree(data):
        ...

    with monitor_performance("render_wedges", nodes=42):
        ...
"""

import time
import functools
import contextlib
from typing import Callable, Optional, Dict, Any, List
from dataclasses import dataclass, field
import logging

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger('statwheel')


def configure_logging(level: str = "INFO") -> None:
    """Set the statwheel logger level from a name such as 'DEBUG'."""
    resolved = getattr(logging, str(level).upper(), None)
    if not isinstance(resolved, int):
        logger.warning(f"Unknown log level {level!r}, keeping {logging.getLevelName(logger.level)}")
        return
    logger.setLevel(resolved)


# =============================================================================
# PERFORMANCE MONITORING
# =============================================================================

@dataclass
class PerformanceMetrics:
    """Container for performance metrics."""

    operation_name: str
    start_time: float
    end_time: Optional[float] = None
    duration_ms: Optional[float] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def finish(self) -> None:
        """Mark the operation as finished."""
        self.end_time = time.time()
        self.duration_ms = (self.end_time - self.start_time) * 1000


class PerformanceMonitor:
    """Keeps timings of tree passes and logs the slow ones."""

    def __init__(self, slow_threshold_ms: float = 1000, max_metrics: int = 500):
        self.metrics: List[PerformanceMetrics] = []
        self.slow_threshold_ms = slow_threshold_ms
        self.max_metrics = max_metrics

    def start(self, operation_name: str, **metadata) -> PerformanceMetrics:
        metric = PerformanceMetrics(
            operation_name=operation_name,
            start_time=time.time(),
            metadata=metadata
        )
        self.metrics.append(metric)
        if len(self.metrics) > self.max_metrics:
            self.metrics = self.metrics[-self.max_metrics:]
        return metric

    def finish(self, metric: PerformanceMetrics) -> None:
        metric.finish()
        if metric.duration_ms and metric.duration_ms > self.slow_threshold_ms:
            logger.warning(
                f"Slow operation: {metric.operation_name} took {metric.duration_ms:.2f}ms "
                f"(threshold: {self.slow_threshold_ms}ms)"
            )

    def get_slow_operations(self, threshold_ms: Optional[float] = None) -> List[PerformanceMetrics]:
        threshold = threshold_ms or self.slow_threshold_ms
        return [m for m in self.metrics if m.duration_ms and m.duration_ms > threshold]

    def get_summary(self) -> Dict[str, Any]:
        """Get summary of all metrics."""
        if not self.metrics:
            return {"count": 0}

        durations = [m.duration_ms for m in self.metrics if m.duration_ms is not None]
        return {
            "count": len(self.metrics),
            "total_duration_ms": sum(durations),
            "max_duration_ms": max(durations) if durations else 0,
            "slow_operations": len(self.get_slow_operations()),
        }

    def clear(self) -> None:
        self.metrics = []


_performance_monitor = PerformanceMonitor()


def get_performance_monitor() -> PerformanceMonitor:
    """Get the global performance monitor."""
    return _performance_monitor


def timing_decorator(func: Callable) -> Callable:
    """Time each call of ``func`` and log it when slow."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        monitor = get_performance_monitor()
        metric = monitor.start(operation_name=func.__name__)

        try:
            return func(*args, **kwargs)
        except Exception as e:
            metric.metadata['error'] = str(e)
            raise
        finally:
            monitor.finish(metric)

    return wrapper


@contextlib.contextmanager
def monitor_performance(operation_name: str, **metadata):
    """Context manager for timing a block of code."""
    monitor = get_performance_monitor()
    metric = monitor.start(operation_name, **metadata)

    try:
        yield metric
    except Exception as e:
        metric.metadata['error'] = str(e)
        raise
    finally:
        monitor.finish(metric)


# =============================================================================
# HOST PAGE ERROR HANDLER
# =============================================================================

class ChartErrorHandler:
    """Logs errors raised while preparing a chart and reports them to the page."""

    def handle_error(
        self,
        error: Exception,
        user_message: Optional[str] = None,
        raise_error: bool = False
    ) -> None:
        logger.exception("Stats chart error occurred", exc_info=error)

        try:
            import streamlit as st
            st.error(user_message or "Could not build the stats chart. Please try again.")
        except Exception:
            logger.debug("No Streamlit context to report the error to")

        if raise_error:
            raise error


_error_handler: Optional[ChartErrorHandler] = None


def get_error_handler() -> ChartErrorHandler:
    """Get or create the global error handler."""
    global _error_handler
    if _error_handler is None:
        _error_handler = ChartErrorHandler()
    return _error_handler


def safe_execute(
    func: Callable,
    *args,
    default_return: Any = None,
    error_message: Optional[str] = None,
    **kwargs
) -> Any:
    """Run ``func``; on error log it, show ``error_message`` and return ``default_return``."""
    try:
        return func(*args, **kwargs)
    except Exception as e:
        get_error_handler().handle_error(e, user_message=error_message)
        return default_return
