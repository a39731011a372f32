"""Per-frame camera and light placement handed to the renderer alongside the buffers."""
import math
from dataclasses import dataclass

from particle_field.core_types import Mode, SignalSnapshot, Vec3

LIGHT_ORBIT_RADIUS = 15.0


@dataclass(frozen=True)
class CameraState:
    position: Vec3
    look_at: Vec3
    light_positions: tuple
    light_intensities: tuple


def camera_state(sim_time: float, mode: Mode, signal: SignalSnapshot) -> CameraState:
    """Slow orbit scaled by audio, with mode-specific overrides for fluid, biological and weather."""
    t = sim_time
    audio = signal.effective_audio
    factor = 1.0 + audio if signal.audio_active else 1.0

    x = math.sin(t * 0.1) * 5.0 * factor
    y = math.cos(t * 0.15) * 5.0 * factor + 5.0
    z = 20.0

    if mode == Mode.FLUID:
        y = 5.0 + math.sin(t * 0.2) * 3.0
        z = 20.0 + math.sin(t * 0.1) * 5.0
    elif mode == Mode.BIOLOGICAL:
        # microscope-like drift
        z = 15.0 + math.sin(t * 0.05) * 3.0
        x = math.sin(t * 0.07) * 3.0
    elif mode == Mode.WEATHER:
        y = 10.0 + math.sin(t * 0.1) * 5.0
        z = 25.0 + math.cos(t * 0.08) * 5.0

    intensity = 2.0 + audio * 3.0 if signal.audio_active else 2.0
    lights = (
        (math.sin(t * 0.3) * LIGHT_ORBIT_RADIUS, 0.0, math.cos(t * 0.3) * LIGHT_ORBIT_RADIUS),
        (math.sin(t * 0.3 + math.pi) * LIGHT_ORBIT_RADIUS, 0.0, math.cos(t * 0.3 + math.pi) * LIGHT_ORBIT_RADIUS),
    )
    return CameraState(
        position=(x, y, z),
        look_at=(0.0, 0.0, 0.0),
        light_positions=lights,
        light_intensities=(intensity, intensity * 0.7),
    )


__all__ = ["CameraState", "camera_state"]
