"""Timing and summary-statistics helpers for the driven loop."""
import time


def compute_basic_stats(values):
    if not values:
        return {}
    return {"min": min(values), "max": max(values), "mean": sum(values)/len(values), "count": len(values)}


class Timer:
    """Context manager measuring elapsed wall time in milliseconds."""

    def __init__(self):
        self.elapsed_ms = 0.0
        self._start = 0.0

    def __enter__(self):
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.elapsed_ms = (time.perf_counter() - self._start) * 1000.0
        return False

__all__ = ["compute_basic_stats", "Timer"]
