import time
from typing import Callable, Dict, Optional, Tuple

from particle_field.config import MAX_FRAME_DELTA, TARGET_FPS
from particle_field.core.clock import FrameTimer
from particle_field.runtime.simulation import FrameOutput, Simulation
from particle_field.utils.logger import get_logger
from particle_field.utils.metrics import Timer, compute_basic_stats

logger = get_logger(__name__)


def clamp_delta(delta_time: float, max_delta: float) -> float:
    """Clamp a frame delta when ``max_delta`` is positive; zero disables clamping."""
    if max_delta > 0:
        return min(delta_time, max_delta)
    return delta_time


def run_loop(
    simulation: Simulation,
    iterations: int = 3,
    fps: int = TARGET_FPS,
    max_delta: float = MAX_FRAME_DELTA,
    realtime: bool = True,
    on_frame: Optional[Callable[[int, Simulation, FrameOutput], None]] = None,
) -> Tuple[Optional[FrameOutput], Dict[str, float]]:
    """
    Headless stand-in for a display-refresh scheduler.

    With ``realtime`` the loop sleeps to hold ``fps`` and derives each delta from the wall
    clock; otherwise every frame is exactly one nominal frame (delta 1.0).
    ``on_frame`` runs between ticks, where a host would refresh its signal sources.
    """
    timer = FrameTimer()
    interval = 1.0 / fps if fps > 0 else 0.0
    tick_ms = []
    frame = None

    for i in range(iterations):
        if realtime:
            delta = timer.delta(time.perf_counter() * 1000.0)
        else:
            delta = 0.0 if i == 0 else 1.0
        delta = clamp_delta(delta, max_delta)

        with Timer() as t:
            frame = simulation.tick(delta)
        tick_ms.append(t.elapsed_ms)

        if on_frame is not None:
            on_frame(i, simulation, frame)
        if realtime and interval > t.elapsed_ms / 1000.0:
            time.sleep(interval - t.elapsed_ms / 1000.0)

    stats = compute_basic_stats(tick_ms)
    if stats:
        logger.info(
            "Ran %d frames in mode %s: tick min %.2f ms, mean %.2f ms, max %.2f ms",
            stats["count"], simulation.context.mode.value, stats["min"], stats["mean"], stats["max"],
        )
    return frame, stats

__all__ = ["run_loop", "clamp_delta"]
