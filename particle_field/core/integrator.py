"""Damped explicit integration of particle velocities into positions."""
from typing import Optional

import numpy as np

from particle_field.constants import DAMPING_FACTOR
from particle_field.core.forces import ForceResult, RespawnTransition
from particle_field.core.particles import ParticleState


def apply_respawn(state: ParticleState, respawn: Optional[RespawnTransition]) -> int:
    """Apply a falling -> respawned transition and record it in ``state.respawned``."""
    state.respawned[:] = False
    if respawn is None or len(respawn) == 0:
        return 0
    state.positions[respawn.indices, 1] = respawn.y
    state.velocities[respawn.indices, 1] = respawn.velocity_y
    state.respawned[respawn.indices] = True
    return len(respawn)


def advance(
    state: ParticleState,
    forces: ForceResult,
    delta_time: float,
    speed: float,
    damping: float = DAMPING_FACTOR,
) -> ParticleState:
    """
    Commit one step in place.

    velocity += delta, respawn overrides applied, velocity *= damping, then
    position += velocity * delta_time * speed. ``delta_time`` is not clamped here.
    """
    state.velocities += forces.delta
    apply_respawn(state, forces.respawn)
    state.velocities *= damping
    state.positions += state.velocities * (delta_time * speed)
    return state


class Integrator:
    def __init__(self, damping: float = DAMPING_FACTOR):
        self.damping = damping

    def advance(self, state: ParticleState, forces: ForceResult, delta_time: float, speed: float) -> ParticleState:
        return advance(state, forces, delta_time, speed, self.damping)


__all__ = ["Integrator", "advance", "apply_respawn"]
