"""
The driven-frame callback.

:class:`Simulation` owns one :class:`SimulationContext` (clock, active mode and
interaction kind, latest signal snapshot, RNG) and one :class:`ParticleState`. A host
calls :meth:`Simulation.tick` from its display-refresh scheduler; everything for a frame
happens synchronously inside that call.
"""
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from particle_field.config import COUNT_SCALE, DEFAULT_INTERACTION, DEFAULT_MODE, PARTICLE_SEED
from particle_field.constants import AUDIO_SIZE_PULSE
from particle_field.core.clock import SimulationClock
from particle_field.core.forces import ForceModel, StepInputs
from particle_field.core.integrator import Integrator
from particle_field.core.particles import ParticleState, generate_particles
from particle_field.core_types import InteractionKind, Mode, ModeConfig, SignalSnapshot
from particle_field.modes import ModeCatalog, next_interaction, next_mode
from particle_field.runtime.camera import CameraState, camera_state
from particle_field.signals import SignalSources
from particle_field.utils.logger import get_logger
from particle_field.utils.metrics import Timer

logger = get_logger(__name__)


@dataclass
class SimulationContext:
    clock: SimulationClock
    mode: Mode
    interaction: InteractionKind
    rng: np.random.Generator
    signal: SignalSnapshot = field(default_factory=SignalSnapshot)

    @property
    def paused(self) -> bool:
        return self.clock.paused


@dataclass
class FrameOutput:
    """Everything the renderer and post-processing consume for one frame."""
    positions: np.ndarray
    colors: np.ndarray
    point_size: float
    sim_time: float
    audio_intensity: float
    camera: CameraState
    paused: bool
    respawned: int = 0


class Simulation:
    """
    Owns the particle state and advances it one frame per :meth:`tick`.

    ``mode``, ``interaction`` and ``seed`` default to ``DEFAULT_MODE``,
    ``DEFAULT_INTERACTION`` and ``PARTICLE_SEED`` from the environment.
    """

    def __init__(
        self,
        mode=None,
        interaction=None,
        seed: Optional[int] = None,
        catalog: Optional[ModeCatalog] = None,
        sources: Optional[SignalSources] = None,
        force_model: Optional[ForceModel] = None,
        integrator: Optional[Integrator] = None,
    ):
        self.catalog = catalog if catalog is not None else ModeCatalog(count_scale=COUNT_SCALE)
        self.sources = sources if sources is not None else SignalSources()
        self.force_model = force_model if force_model is not None else ForceModel()
        self.integrator = integrator if integrator is not None else Integrator()
        self.context = SimulationContext(
            clock=SimulationClock(),
            mode=Mode.parse(DEFAULT_MODE if mode is None else mode),
            interaction=InteractionKind.parse(DEFAULT_INTERACTION if interaction is None else interaction),
            rng=np.random.default_rng(PARTICLE_SEED if seed is None else seed),
        )
        self.state: ParticleState = self._regenerate()

    @property
    def config(self) -> ModeConfig:
        return self.catalog.get(self.context.mode)

    def _regenerate(self) -> ParticleState:
        cfg = self.config
        with Timer() as timer:
            state = generate_particles(cfg, self.context.rng)
        logger.info(
            "Generated %d particles for mode %s (%s) in %.1f ms",
            cfg.count, self.context.mode.value, cfg.distribution.value, timer.elapsed_ms,
        )
        return state

    # Commands ---------------------------------------------------------------

    def set_mode(self, mode) -> bool:
        """Switch mode and regenerate; returns False when the mode is already active."""
        new_mode = Mode.parse(mode)
        if new_mode == self.context.mode:
            return False
        self.context.mode = new_mode
        self.state = self._regenerate()
        return True

    def set_interaction(self, interaction) -> None:
        kind = InteractionKind.parse(interaction)
        if kind != self.context.interaction:
            logger.info("Interaction kind %s -> %s", self.context.interaction.value, kind.value)
        self.context.interaction = kind

    def set_paused(self, paused: bool) -> None:
        self.context.clock.set_paused(paused)

    def toggle_pause(self) -> bool:
        paused = self.context.clock.toggle_pause()
        logger.info("Simulation %s", "paused" if paused else "resumed")
        return paused

    def cycle_mode(self) -> Mode:
        self.set_mode(next_mode(self.context.mode))
        return self.context.mode

    def cycle_interaction(self) -> InteractionKind:
        self.set_interaction(next_interaction(self.context.interaction))
        return self.context.interaction

    def toggle_audio(self) -> bool:
        audio = self.sources.audio
        if audio.active:
            audio.disable()
        else:
            audio.enable()
        return audio.active

    def toggle_gesture(self) -> bool:
        gesture = self.sources.gesture
        if gesture.active:
            gesture.disable()
        else:
            gesture.enable()
        return gesture.active

    def handle_key(self, key: str) -> bool:
        """Keyboard shortcuts: m mode, i interaction, space pause, a audio, g gesture."""
        actions = {
            "m": self.cycle_mode,
            "i": self.cycle_interaction,
            " ": self.toggle_pause,
            "a": self.toggle_audio,
            "g": self.toggle_gesture,
        }
        action = actions.get(key)
        if action is None:
            return False
        action()
        return True

    # Frame ------------------------------------------------------------------

    def point_size(self, signal: SignalSnapshot) -> float:
        base = self.config.size
        if not signal.audio_active:
            return base
        return base * (1.0 + AUDIO_SIZE_PULSE * signal.audio_intensity)

    def tick(self, delta_time: float) -> FrameOutput:
        ctx = self.context
        sim_time = ctx.clock.advance()
        ctx.signal = self.sources.snapshot(ctx.interaction, ctx.paused)

        respawned = 0
        if not ctx.paused:
            inputs = StepInputs(
                signal=ctx.signal,
                mode=ctx.mode,
                interaction=ctx.interaction,
                sim_time=sim_time,
                rng=ctx.rng,
            )
            forces = self.force_model.compute(self.state.positions, self.state.origins, inputs)
            self.integrator.advance(self.state, forces, delta_time, self.config.speed)
            respawned = int(self.state.respawned.sum())

        return FrameOutput(
            positions=self.state.position_buffer(),
            colors=self.state.color_buffer(),
            point_size=self.point_size(ctx.signal),
            sim_time=sim_time,
            audio_intensity=ctx.signal.effective_audio,
            camera=camera_state(sim_time, ctx.mode, ctx.signal),
            paused=ctx.paused,
            respawned=respawned,
        )


__all__ = ["Simulation", "SimulationContext", "FrameOutput"]
