"""Simulation core: distributions, particle state, forces, integration and clock."""

from .clock import FrameTimer, SimulationClock, normalize_frame_delta
from .distributions import generate, generate_many
from .forces import ForceModel, ForceResult, RespawnTransition, StepInputs
from .integrator import Integrator, advance
from .particles import ParticleState, generate_particles, gradient_colors

__all__ = [
    "FrameTimer",
    "SimulationClock",
    "normalize_frame_delta",
    "generate",
    "generate_many",
    "ForceModel",
    "ForceResult",
    "RespawnTransition",
    "StepInputs",
    "Integrator",
    "advance",
    "ParticleState",
    "generate_particles",
    "gradient_colors",
]
