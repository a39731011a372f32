"""Simulation time and frame-delta normalisation."""
from typing import Optional

from particle_field.constants import CLOCK_STEP, FRAME_INTERVAL_MS


class SimulationClock:
    """Monotonic simulation time, advanced by a fixed step per driven frame unless paused."""

    def __init__(self, step: float = CLOCK_STEP):
        self.step = step
        self.sim_time = 0.0
        self.paused = False
        self.frames = 0

    def advance(self) -> float:
        self.frames += 1
        if not self.paused:
            self.sim_time += self.step
        return self.sim_time

    def set_paused(self, paused: bool) -> None:
        self.paused = bool(paused)

    def toggle_pause(self) -> bool:
        self.paused = not self.paused
        return self.paused


class FrameTimer:
    """Turns wall-clock frame timestamps (ms) into a delta where a 16.67 ms frame is 1.0."""

    def __init__(self, interval_ms: float = FRAME_INTERVAL_MS):
        self.interval_ms = interval_ms
        self.last_ms: Optional[float] = None

    def delta(self, now_ms: float) -> float:
        # the first frame has no predecessor and integrates nothing
        if self.last_ms is None:
            self.last_ms = now_ms
            return 0.0
        delta = (now_ms - self.last_ms) / self.interval_ms
        self.last_ms = now_ms
        return delta


def normalize_frame_delta(now_ms: float, last_ms: float, interval_ms: float = FRAME_INTERVAL_MS) -> float:
    return (now_ms - last_ms) / interval_ms


__all__ = ["SimulationClock", "FrameTimer", "normalize_frame_delta"]
