"""
Metrics Collection for the Reset Service.

Counts reset runs, reset tasks and failures; exposed by the status endpoint.
"""

import time
from typing import Dict, Any, Callable
from collections import defaultdict
from datetime import datetime
import functools
import threading


class MetricsCollector:
    """Collects and manages metrics for the task reset job."""

    def __init__(self):
        """Initialize metrics collector."""
        self.metrics = defaultdict(int)
        self.timers = defaultdict(float)
        self.lock = threading.Lock()
        self.reset()

    def reset(self):
        """Zero every counter and timer."""
        with self.lock:
            self.metrics.clear()
            self.timers.clear()
            self.metrics["reset_runs_total"] = 0
            self.metrics["tasks_reset_total"] = 0
            self.metrics["task_reset_errors_total"] = 0
            self.metrics["reset_run_failures_total"] = 0

    def increment_counter(self, metric_name: str, value: int = 1):
        """Increment a counter metric."""
        with self.lock:
            self.metrics[metric_name] += value

    def record_timer(self, metric_name: str, duration: float):
        """Record a timing metric."""
        with self.lock:
            self.timers[metric_name] += duration

    def get_metrics(self) -> Dict[str, Any]:
        """Get current metrics values."""
        with self.lock:
            return {
                "counters": dict(self.metrics),
                "timers": dict(self.timers),
                "timestamp": datetime.utcnow().isoformat()
            }

    def reset_run(self):
        """Record that a reset run started."""
        self.increment_counter("reset_runs_total")

    def task_reset(self):
        """Record that a task was reset to pending."""
        self.increment_counter("tasks_reset_total")

    def task_reset_error(self):
        """Record that resetting a single task failed."""
        self.increment_counter("task_reset_errors_total")

    def reset_run_failure(self):
        """Record that a whole run failed."""
        self.increment_counter("reset_run_failures_total")

    def time_operation(self, metric_name: str) -> Callable:
        """Decorator accumulating the wall time of every call."""
        def decorator(func):
            @functools.wraps(func)
            def wrapper(*args, **kwargs):
                start_time = time.time()
                try:
                    return func(*args, **kwargs)
                finally:
                    self.record_timer(metric_name, time.time() - start_time)
            return wrapper
        return decorator


# Global metrics instance
metrics_collector = MetricsCollector()
