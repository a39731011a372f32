"""Particle storage: parallel position/velocity/origin arrays plus static colours."""
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from particle_field.constants import INITIAL_VELOCITY_JITTER
from particle_field.core.distributions import generate_many
from particle_field.core_types import ModeConfig


def gradient_colors(color_mix: np.ndarray, colors: Sequence[Sequence[float]]) -> np.ndarray:
    """Map ``color_mix`` in [0, 1] onto a two-segment, three-stop gradient."""
    mix = np.clip(np.asarray(color_mix, dtype=np.float64), 0.0, 1.0)[:, None]
    c0, c1, c2 = (np.asarray(c, dtype=np.float64) for c in colors)

    lower = c0 + (c1 - c0) * (mix * 2.0)
    upper = c1 + (c2 - c1) * ((mix - 0.5) * 2.0)
    return np.clip(np.where(mix < 0.5, lower, upper), 0.0, 1.0)


@dataclass
class ParticleState:
    """
    Parallel per-particle arrays, all of length ``count``.

    ``origins`` and ``colors`` are fixed for the lifetime of a generation and are stored
    read-only. ``respawned`` flags the particles that took the weather respawn
    transition during the most recent step.
    """
    positions: np.ndarray
    velocities: np.ndarray
    origins: np.ndarray
    colors: np.ndarray
    color_mix: np.ndarray
    respawned: Optional[np.ndarray] = None

    def __post_init__(self):
        n = self.positions.shape[0]
        for name in ("positions", "velocities", "origins", "colors"):
            arr = getattr(self, name)
            if arr.shape != (n, 3):
                raise ValueError(f"{name} must have shape ({n}, 3), got {arr.shape}")
        if self.color_mix.shape != (n,):
            raise ValueError(f"color_mix must have shape ({n},), got {self.color_mix.shape}")
        if self.respawned is None:
            self.respawned = np.zeros(n, dtype=bool)
        self.origins.flags.writeable = False
        self.colors.flags.writeable = False
        self.color_mix.flags.writeable = False

    @property
    def count(self) -> int:
        return self.positions.shape[0]

    def __len__(self) -> int:
        return self.count

    @classmethod
    def from_arrays(
        cls,
        positions,
        velocities=None,
        origins=None,
        colors=None,
        color_mix=None,
    ) -> "ParticleState":
        """Build a state from explicit arrays; missing arrays default to zeros / the positions."""
        pos = np.array(positions, dtype=np.float64).reshape(-1, 3)
        n = pos.shape[0]
        vel = np.zeros((n, 3)) if velocities is None else np.array(velocities, dtype=np.float64).reshape(n, 3)
        org = pos.copy() if origins is None else np.array(origins, dtype=np.float64).reshape(n, 3)
        col = np.ones((n, 3)) if colors is None else np.array(colors, dtype=np.float64).reshape(n, 3)
        mix = np.zeros(n) if color_mix is None else np.array(color_mix, dtype=np.float64).reshape(n)
        return cls(positions=pos, velocities=vel, origins=org, colors=col, color_mix=mix)

    def position_buffer(self) -> np.ndarray:
        """Flat ``3 * count`` read-only view of the live positions."""
        view = self.positions.reshape(-1).view()
        view.flags.writeable = False
        return view

    def color_buffer(self) -> np.ndarray:
        return self.colors.reshape(-1)


def generate_particles(config: ModeConfig, rng: Optional[np.random.Generator] = None) -> ParticleState:
    """Populate a fresh state for ``config``: positions, origins, colours and initial velocities."""
    if rng is None:
        rng = np.random.default_rng()

    positions, raw_mix = generate_many(config.distribution, config.count, rng)
    color_mix = np.clip(raw_mix, 0.0, 1.0)
    velocities = (rng.random((config.count, 3)) - 0.5) * INITIAL_VELOCITY_JITTER

    return ParticleState(
        positions=positions,
        velocities=velocities,
        origins=positions.copy(),
        colors=gradient_colors(color_mix, config.colors),
        color_mix=color_mix,
    )


__all__ = ["ParticleState", "gradient_colors", "generate_particles"]
