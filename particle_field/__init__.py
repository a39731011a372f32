"""
particle_field - a mode-driven particle field whose motion reacts to pointer, audio and
gesture signals.

The package keeps import time light: nothing here touches the filesystem or configures
logging. Call ``particle_field.logging_config.setup_logging`` from an entry point.
"""

from .__version__ import __version__
from .core_types import DistributionKind, InteractionKind, Mode, ModeConfig, SignalSnapshot, Vec3
from .modes import MODE_CONFIGS, ModeCatalog, next_interaction, next_mode
from .core import ForceModel, Integrator, ParticleState, SimulationClock, generate, generate_particles
from .runtime import FrameOutput, Simulation, SimulationContext, run_loop
from .signals import AudioAnalyzer, GestureTracker, PointerTracker, SignalSources

__all__ = [
    "__version__",
    "Vec3",
    "Mode",
    "InteractionKind",
    "DistributionKind",
    "ModeConfig",
    "SignalSnapshot",
    "MODE_CONFIGS",
    "ModeCatalog",
    "next_mode",
    "next_interaction",
    "ForceModel",
    "Integrator",
    "ParticleState",
    "SimulationClock",
    "generate",
    "generate_particles",
    "FrameOutput",
    "Simulation",
    "SimulationContext",
    "run_loop",
    "AudioAnalyzer",
    "GestureTracker",
    "PointerTracker",
    "SignalSources",
]
