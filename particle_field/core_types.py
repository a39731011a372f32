"""Core lightweight types shared across modules.
Provides the enums, immutable configuration records and the per-frame signal snapshot
so modules can interoperate without importing the simulation itself.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from particle_field.utils.logger import get_logger

logger = get_logger(__name__)

Vec2 = Tuple[float, float]
Vec3 = Tuple[float, float, float]
RGB = Tuple[float, float, float]


class _TolerantEnum(str, Enum):
    """
    String enum whose ``parse`` falls back to a default member instead of raising.

    Subclasses name their fallback member with a ``default`` classmethod.
    """

    @classmethod
    def parse(cls, value) -> "_TolerantEnum":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            for member in cls:
                if member.value == key:
                    return member
        fallback = cls.default()
        logger.warning("Unknown %s %r, falling back to %s", cls.__name__, value, fallback.value)
        return fallback


class Mode(_TolerantEnum):
    """Named configuration bundle selecting distribution and per-step dynamics."""
    COSMIC = "cosmic"
    FRACTAL = "fractal"
    VORTEX = "vortex"
    NEURAL = "neural"
    FLUID = "fluid"
    BIOLOGICAL = "biological"
    WEATHER = "weather"

    @classmethod
    def default(cls) -> "Mode":
        return cls.COSMIC


class InteractionKind(_TolerantEnum):
    """Rule governing how the pointer or gesture signal perturbs particles."""
    ATTRACT = "attract"
    REPEL = "repel"
    WAVE = "wave"
    VOICE = "voice"
    GESTURE = "gesture"

    @classmethod
    def default(cls) -> "InteractionKind":
        return cls.ATTRACT


class DistributionKind(_TolerantEnum):
    """Procedural placement rule used at generation time."""
    SPHERE = "sphere"
    MANDELBULB = "mandelbulb"
    SPIRAL = "spiral"
    NETWORK = "network"
    FLUID = "fluid"
    CELLULAR = "cellular"
    ATMOSPHERIC = "atmospheric"

    @classmethod
    def default(cls) -> "DistributionKind":
        return cls.SPHERE


@dataclass(frozen=True)
class ModeConfig:
    count: int
    size: float
    speed: float
    colors: Tuple[RGB, RGB, RGB]
    distribution: DistributionKind

    def __post_init__(self):
        if self.count <= 0:
            raise ValueError(f"count must be positive, got {self.count}")
        if self.size <= 0:
            raise ValueError(f"size must be positive, got {self.size}")
        if self.speed <= 0:
            raise ValueError(f"speed must be positive, got {self.speed}")
        if len(self.colors) != 3:
            raise ValueError(f"exactly three gradient colours are required, got {len(self.colors)}")


@dataclass(frozen=True)
class SignalSnapshot:
    """Latest pointer/audio/gesture values visible to one simulation tick."""
    pointer_position: Vec2 = (0.0, 0.0)
    interaction_kind: InteractionKind = InteractionKind.ATTRACT
    audio_intensity: float = 0.0
    gesture_position: Vec2 = (0.0, 0.0)
    gesture_intensity: float = 0.0
    gesture_active: bool = False
    audio_active: bool = False
    paused: bool = False

    @property
    def effective_audio(self) -> float:
        """Audio intensity as consumed by forces: zero unless capture is active."""
        return self.audio_intensity if self.audio_active else 0.0


__all__ = [
    "Vec2",
    "Vec3",
    "RGB",
    "Mode",
    "InteractionKind",
    "DistributionKind",
    "ModeConfig",
    "SignalSnapshot",
]
