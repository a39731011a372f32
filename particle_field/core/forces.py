"""
Per-step force model.

Every force here is a row-wise function of a particle's own position and origin plus the
shared step inputs (signal snapshot, mode, interaction kind, simulation time). No force
reads another particle, so the arrays are processed vectorised and a single particle is
just the ``N == 1`` case.

Contributions are summed into one velocity delta:

1. spring toward the origin position
2. the interaction force from the pointer or gesture point
3. the mode-specific force, looked up in ``MODE_FORCES``

Weather mode can additionally emit a :class:`RespawnTransition`, which the integrator
applies as an explicit falling -> respawned state change.
"""
from dataclasses import dataclass
from typing import Callable, Dict, Optional

import numpy as np

from particle_field import constants as C
from particle_field.core_types import InteractionKind, Mode, SignalSnapshot
from particle_field.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class StepInputs:
    """Shared, read-only inputs for one step over all particles."""
    signal: SignalSnapshot
    mode: Mode
    interaction: InteractionKind
    sim_time: float
    rng: np.random.Generator

    @property
    def audio(self) -> float:
        return self.signal.effective_audio


@dataclass
class RespawnTransition:
    """Particles moved from falling to respawned: new height and vertical velocity."""
    indices: np.ndarray
    y: np.ndarray
    velocity_y: np.ndarray

    def __len__(self) -> int:
        return len(self.indices)


@dataclass
class ForceResult:
    delta: np.ndarray
    respawn: Optional[RespawnTransition] = None


def normalize_rows(vectors: np.ndarray) -> np.ndarray:
    """Unit vectors per row; zero rows stay zero."""
    norms = np.linalg.norm(vectors, axis=1, keepdims=True)
    out = np.zeros_like(vectors)
    np.divide(vectors, norms, out=out, where=norms > 0.0)
    return out


def _jitter(rng: np.random.Generator, n: int, width: float) -> np.ndarray:
    """Per-axis uniform noise in [-width/2, width/2)."""
    return (rng.random((n, 3)) - 0.5) * width


# Spring ---------------------------------------------------------------------

def spring_force(positions: np.ndarray, origins: np.ndarray) -> np.ndarray:
    return (origins - positions) * C.SPRING_CONSTANT


# Interaction ----------------------------------------------------------------

InteractionFn = Callable[[np.ndarray, np.ndarray, StepInputs], np.ndarray]
INTERACTION_FORCES: Dict[InteractionKind, InteractionFn] = {}


def register_interaction(*kinds: InteractionKind):
    def decorator(fn: InteractionFn) -> InteractionFn:
        for kind in kinds:
            INTERACTION_FORCES[kind] = fn
        return fn
    return decorator


def interaction_source(signal: SignalSnapshot, interaction: InteractionKind):
    """World-space interaction point and base strength for this step."""
    strength = C.INTERACTION_STRENGTH
    if interaction == InteractionKind.GESTURE and signal.gesture_active:
        x, y = signal.gesture_position
        strength *= signal.gesture_intensity * 2.0
    else:
        x, y = signal.pointer_position
    point = np.array([x * C.POINTER_SCALE, y * C.POINTER_SCALE, 0.0])
    return point, strength


@register_interaction(InteractionKind.ATTRACT, InteractionKind.GESTURE)
def attract(distance: np.ndarray, amplitude: np.ndarray, inputs: StepInputs) -> np.ndarray:
    return amplitude


@register_interaction(InteractionKind.REPEL)
def repel(distance: np.ndarray, amplitude: np.ndarray, inputs: StepInputs) -> np.ndarray:
    return -amplitude


@register_interaction(InteractionKind.WAVE)
def wave(distance: np.ndarray, amplitude: np.ndarray, inputs: StepInputs) -> np.ndarray:
    phase = inputs.sim_time * 3.0 - distance * 0.5
    return np.sin(phase) * amplitude


@register_interaction(InteractionKind.VOICE)
def voice(distance: np.ndarray, amplitude: np.ndarray, inputs: StepInputs) -> np.ndarray:
    if not inputs.signal.audio_active:
        return np.zeros_like(amplitude)
    return amplitude * inputs.signal.audio_intensity * 3.0


def interaction_force(positions: np.ndarray, inputs: StepInputs) -> np.ndarray:
    point, strength = interaction_source(inputs.signal, inputs.interaction)
    to_point = point - positions
    distance = np.linalg.norm(to_point, axis=1)
    inside = distance < C.INTERACTION_RADIUS

    force = np.zeros_like(positions)
    if not inside.any():
        return force

    amplitude = strength * (1.0 - distance[inside] / C.INTERACTION_RADIUS)
    fn = INTERACTION_FORCES.get(inputs.interaction, attract)
    magnitude = fn(distance[inside], amplitude, inputs)
    force[inside] = normalize_rows(to_point[inside]) * magnitude[:, None]
    return force


# Mode-specific --------------------------------------------------------------

ModeForceFn = Callable[[np.ndarray, np.ndarray, StepInputs], ForceResult]
MODE_FORCES: Dict[Mode, ModeForceFn] = {}


def register_mode(mode: Mode):
    def decorator(fn: ModeForceFn) -> ModeForceFn:
        MODE_FORCES[mode] = fn
        return fn
    return decorator


@register_mode(Mode.COSMIC)
def cosmic(positions, origins, inputs):
    return ForceResult(np.zeros_like(positions))


@register_mode(Mode.VORTEX)
def vortex(positions, origins, inputs):
    """Swirl about the vertical axis; perpendicular to the horizontal radius."""
    tangent = np.column_stack([-positions[:, 2], np.zeros(len(positions)), positions[:, 0]])
    return ForceResult(normalize_rows(tangent) * C.VORTEX_SWIRL)


@register_mode(Mode.FRACTAL)
def fractal(positions, origins, inputs):
    pulse = np.sin(inputs.sim_time) * C.FRACTAL_PULSE * (1.0 + inputs.audio * 2.0)
    return ForceResult(normalize_rows(positions) * pulse)


@register_mode(Mode.NEURAL)
def neural(positions, origins, inputs):
    return ForceResult(_jitter(inputs.rng, len(positions), C.NEURAL_JITTER))


@register_mode(Mode.FLUID)
def fluid(positions, origins, inputs):
    t = inputs.sim_time
    x, y = positions[:, 0], positions[:, 1]

    flow = np.column_stack([
        np.sin(y * 0.1 + t),
        np.cos(x * 0.1 + t),
        np.sin(x * 0.1 + y * 0.1 + t),
    ]) * C.FLUID_FLOW

    vorticity = np.column_stack([
        y - np.sin(t),
        -x + np.cos(t),
        np.sin(x + y + t * 0.5),
    ])
    delta = flow + normalize_rows(vorticity) * C.FLUID_VORTICITY

    if inputs.signal.audio_active:
        delta += _jitter(inputs.rng, len(positions), inputs.audio * C.FLUID_TURBULENCE)
    return ForceResult(delta)


@register_mode(Mode.BIOLOGICAL)
def biological(positions, origins, inputs):
    t = inputs.sim_time
    to_center = origins - positions
    outside = np.linalg.norm(to_center, axis=1) > C.BIO_MEMBRANE_RADIUS

    streaming = np.column_stack([
        np.sin(positions[:, 0] * 2.0 + t),
        np.cos(positions[:, 1] * 2.0 + t),
        np.sin(positions[:, 2] * 2.0 + t),
    ]) * C.BIO_STREAMING
    delta = np.where(outside[:, None], normalize_rows(to_center) * C.BIO_RETURN, streaming)

    if inputs.signal.audio_active:
        division = inputs.audio
    else:
        division = np.sin(t * 0.2) * 0.5 + 0.5
    if division > C.BIO_DIVISION_THRESHOLD:
        dividing = inputs.rng.random(len(positions)) < C.BIO_DIVISION_PROBABILITY
        k = int(dividing.sum())
        if k:
            impulse = normalize_rows(inputs.rng.random((k, 3)) - 0.5) * C.BIO_DIVISION_IMPULSE
            delta[dividing] += impulse
    return ForceResult(delta)


@register_mode(Mode.WEATHER)
def weather(positions, origins, inputs):
    t = inputs.sim_time
    n = len(positions)
    height = positions[:, 1] + C.WEATHER_GROUND_OFFSET

    ground = np.array([np.sin(t * 0.2) * 0.002, 0.0, np.cos(t * 0.3) * 0.002])
    upper = np.array([np.cos(t * 0.3) * 0.02, 0.0, np.sin(t * 0.3) * 0.02])
    mid = np.column_stack([
        np.sin(t * 0.1 + positions[:, 2] * 0.1) * 0.01,
        np.full(n, np.sin(t * 0.2) * 0.001),
        np.cos(t * 0.1 + positions[:, 0] * 0.1) * 0.01,
    ])

    delta = np.empty_like(positions)
    low_band = height < 3.0
    high_band = height >= 7.0
    mid_band = ~(low_band | high_band)
    delta[low_band] = ground
    delta[mid_band] = mid[mid_band]
    delta[high_band] = upper

    falling = positions[:, 1] < C.WEATHER_RESPAWN_BELOW
    respawning = falling & (inputs.rng.random(n) < C.WEATHER_RESPAWN_PROBABILITY)
    indices = np.flatnonzero(respawning)
    y_lo, y_hi = C.WEATHER_RESPAWN_Y
    vy_lo, vy_hi = C.WEATHER_RESPAWN_VY
    new_y = y_lo + inputs.rng.random(len(indices)) * (y_hi - y_lo)
    new_vy = vy_hi - inputs.rng.random(len(indices)) * (vy_hi - vy_lo)

    if inputs.signal.audio_active:
        storm = _jitter(inputs.rng, n, inputs.audio * C.WEATHER_STORM)
        delta += storm
        # respawned rows keep only the storm turbulence on top of the reset vertical velocity
        new_vy = new_vy + storm[indices, 1]

    respawn = RespawnTransition(indices, new_y, new_vy) if len(indices) else None
    return ForceResult(delta, respawn)


# Model ----------------------------------------------------------------------

class ForceModel:
    """Sums spring, interaction and mode forces into a per-particle velocity delta."""

    def __init__(self, mode_forces: Optional[Dict[Mode, ModeForceFn]] = None):
        self.mode_forces = dict(MODE_FORCES if mode_forces is None else mode_forces)

    def compute(self, positions: np.ndarray, origins: np.ndarray, inputs: StepInputs) -> ForceResult:
        delta = spring_force(positions, origins)
        delta += interaction_force(positions, inputs)

        mode_fn = self.mode_forces.get(inputs.mode, cosmic)
        mode_result = mode_fn(positions, origins, inputs)
        delta += mode_result.delta

        if not np.isfinite(delta).all():
            logger.debug("Non-finite velocity delta replaced with zeros")
            np.nan_to_num(delta, copy=False, nan=0.0, posinf=0.0, neginf=0.0)
        return ForceResult(delta, mode_result.respawn)

    def step(
        self,
        position,
        origin,
        signal: SignalSnapshot,
        mode,
        interaction,
        sim_time: float,
        rng: Optional[np.random.Generator] = None,
    ) -> np.ndarray:
        """Velocity delta for a single particle (any respawn transition is not included)."""
        inputs = StepInputs(
            signal=signal,
            mode=Mode.parse(mode),
            interaction=InteractionKind.parse(interaction),
            sim_time=sim_time,
            rng=rng if rng is not None else np.random.default_rng(),
        )
        pos = np.asarray(position, dtype=np.float64).reshape(1, 3)
        org = np.asarray(origin, dtype=np.float64).reshape(1, 3)
        return self.compute(pos, org, inputs).delta[0]


__all__ = [
    "StepInputs",
    "RespawnTransition",
    "ForceResult",
    "ForceModel",
    "normalize_rows",
    "spring_force",
    "interaction_source",
    "interaction_force",
    "register_interaction",
    "register_mode",
    "INTERACTION_FORCES",
    "MODE_FORCES",
]
