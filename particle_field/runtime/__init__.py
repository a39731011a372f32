"""Frame driving: simulation context, tick, camera rig and the headless loop."""

from .camera import CameraState, camera_state
from .simulation import FrameOutput, Simulation, SimulationContext
from .simulation_loop import clamp_delta, run_loop

__all__ = [
    "CameraState",
    "camera_state",
    "FrameOutput",
    "Simulation",
    "SimulationContext",
    "clamp_delta",
    "run_loop",
]
