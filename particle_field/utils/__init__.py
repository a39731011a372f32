"""Small shared helpers (logging, timing)."""

from .logger import get_logger
from .metrics import Timer, compute_basic_stats

__all__ = ["get_logger", "Timer", "compute_basic_stats"]
