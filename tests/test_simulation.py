"""Tests for the driven-frame simulation, camera rig and headless loop."""

import numpy as np
import pytest

from particle_field.core.particles import ParticleState
from particle_field.core_types import InteractionKind, Mode, SignalSnapshot
from particle_field.main import main
from particle_field.runtime.camera import camera_state
from particle_field.runtime.simulation import Simulation
from particle_field.runtime.simulation_loop import clamp_delta, run_loop


@pytest.fixture
def simulation(small_catalog):
    """Seeded simulation over the scaled-down mode table."""
    return Simulation(mode="cosmic", interaction="attract", seed=42, catalog=small_catalog)


class TestSimulation:
    """Tests for Simulation.tick and commands."""

    def test_initial_state(self, simulation, small_catalog):
        assert simulation.context.mode is Mode.COSMIC
        assert simulation.state.count == small_catalog.get(Mode.COSMIC).count
        assert simulation.context.clock.sim_time == 0.0

    def test_attract_toward_pointer(self, simulation):
        """A particle inside the radius moves toward the centred pointer."""
        simulation.state = ParticleState.from_arrays([[5.0, 0.0, 0.0]])
        frame = simulation.tick(1.0)
        velocity = simulation.state.velocities[0]
        np.testing.assert_allclose(velocity, [-0.025 * 0.98, 0.0, 0.0])
        assert frame.positions[0] == pytest.approx(5.0 - 0.025 * 0.98 * 0.2)

    def test_attract_boundary_has_no_effect(self, simulation):
        """At exactly the interaction radius the attraction is zero."""
        simulation.state = ParticleState.from_arrays([[10.0, 0.0, 0.0]])
        simulation.tick(1.0)
        np.testing.assert_array_equal(simulation.state.velocities[0], [0.0, 0.0, 0.0])

    def test_clock_advances_per_frame(self, simulation):
        for _ in range(5):
            frame = simulation.tick(1.0)
        assert frame.sim_time == pytest.approx(0.05)

    def test_pause_freezes_particles_but_still_outputs(self, simulation):
        simulation.tick(1.0)
        positions = simulation.state.positions.copy()
        velocities = simulation.state.velocities.copy()
        sim_time = simulation.context.clock.sim_time

        simulation.toggle_pause()
        frame = simulation.tick(1.0)

        assert frame.paused
        assert frame.sim_time == sim_time
        assert np.array_equal(simulation.state.positions, positions)
        assert np.array_equal(simulation.state.velocities, velocities)
        assert frame.positions.shape == (3 * simulation.state.count,)

    def test_mode_switch_regenerates(self, simulation, small_catalog):
        simulation.tick(1.0)
        sim_time = simulation.context.clock.sim_time

        assert simulation.set_mode("vortex")
        assert simulation.state.count == small_catalog.get(Mode.VORTEX).count
        assert np.array_equal(simulation.state.origins, simulation.state.positions)
        # the clock survives mode changes
        assert simulation.context.clock.sim_time == sim_time

    def test_set_mode_is_idempotent(self, simulation):
        state = simulation.state
        assert not simulation.set_mode(Mode.COSMIC)
        assert simulation.state is state

    def test_unknown_commands_fall_back(self, simulation):
        simulation.set_mode("vortex")
        simulation.set_mode("hyperspace")
        assert simulation.context.mode is Mode.COSMIC
        simulation.set_interaction("tickle")
        assert simulation.context.interaction is InteractionKind.ATTRACT

    @pytest.mark.parametrize("mode", list(Mode))
    def test_origins_stable_over_many_steps(self, mode, small_catalog):
        sim = Simulation(mode=mode, seed=3, catalog=small_catalog)
        sim.sources.audio.enable()
        sim.sources.audio.analyze(np.full(32, 230))
        origins = sim.state.origins.copy()
        for _ in range(25):
            frame = sim.tick(1.0)
        assert np.array_equal(sim.state.origins, origins)
        assert np.isfinite(frame.positions).all()

    def test_point_size_reacts_to_audio(self, simulation):
        base = simulation.config.size
        assert simulation.tick(1.0).point_size == pytest.approx(base)

        simulation.sources.audio.enable()
        simulation.sources.audio.analyze(np.full(16, 255))
        frame = simulation.tick(1.0)
        assert frame.audio_intensity == pytest.approx(0.15)
        assert frame.point_size == pytest.approx(base * (1 + 0.5 * 0.15))

    def test_handle_key(self, simulation):
        assert simulation.handle_key("m")
        assert simulation.context.mode is Mode.FRACTAL
        assert simulation.handle_key("i")
        assert simulation.context.interaction is InteractionKind.REPEL
        assert simulation.handle_key(" ")
        assert simulation.context.paused
        assert simulation.handle_key("a")
        assert simulation.sources.audio.active
        assert simulation.handle_key("g")
        assert simulation.sources.gesture.active
        assert not simulation.handle_key("z")

    def test_defaults_come_from_environment_config(self, monkeypatch, small_catalog):
        """Constructor defaults follow DEFAULT_MODE, DEFAULT_INTERACTION and PARTICLE_SEED."""
        monkeypatch.setattr("particle_field.runtime.simulation.DEFAULT_MODE", "fluid")
        monkeypatch.setattr("particle_field.runtime.simulation.DEFAULT_INTERACTION", "wave")
        monkeypatch.setattr("particle_field.runtime.simulation.PARTICLE_SEED", 99)
        a = Simulation(catalog=small_catalog)
        b = Simulation(catalog=small_catalog)
        assert a.context.mode is Mode.FLUID
        assert a.context.interaction is InteractionKind.WAVE
        assert np.array_equal(a.state.positions, b.state.positions)

        explicit = Simulation(mode="vortex", interaction="repel", seed=1, catalog=small_catalog)
        assert explicit.context.mode is Mode.VORTEX
        assert explicit.context.interaction is InteractionKind.REPEL

    def test_seeded_simulations_match(self, small_catalog):
        a = Simulation(mode="neural", seed=8, catalog=small_catalog)
        b = Simulation(mode="neural", seed=8, catalog=small_catalog)
        for _ in range(3):
            fa = a.tick(1.0)
            fb = b.tick(1.0)
        assert np.array_equal(fa.positions, fb.positions)
        assert np.array_equal(fa.colors, fb.colors)


class TestCamera:
    """Tests for the camera rig."""

    def test_default_orbit_start(self):
        cam = camera_state(0.0, Mode.COSMIC, SignalSnapshot())
        assert cam.position == pytest.approx((0.0, 10.0, 20.0))
        assert cam.light_intensities == pytest.approx((2.0, 1.4))

    def test_audio_boosts_lights(self):
        cam = camera_state(0.0, Mode.COSMIC, SignalSnapshot(audio_intensity=0.5, audio_active=True))
        assert cam.position[1] == pytest.approx(5.0 * 1.5 + 5.0)
        assert cam.light_intensities[0] == pytest.approx(3.5)

    def test_mode_overrides(self):
        assert camera_state(0.0, Mode.WEATHER, SignalSnapshot()).position == pytest.approx((0.0, 10.0, 30.0))
        assert camera_state(0.0, Mode.BIOLOGICAL, SignalSnapshot()).position[2] == pytest.approx(15.0)


class TestLoop:
    """Tests for the headless driver."""

    def test_clamp_delta(self):
        assert clamp_delta(50.0, 3.0) == 3.0
        assert clamp_delta(50.0, 0.0) == 50.0

    def test_run_loop_fast(self, simulation):
        seen = []
        frame, stats = run_loop(
            simulation,
            iterations=4,
            realtime=False,
            on_frame=lambda i, sim, f: seen.append(i),
        )
        assert seen == [0, 1, 2, 3]
        assert stats["count"] == 4
        assert frame.sim_time == pytest.approx(0.04)

    def test_cli_runs(self, tmp_path):
        code = main([
            "--frames", "3",
            "--mode", "weather",
            "--seed", "1",
            "--fast",
            "--count-scale", "0.005",
            "--audio-level", "0.5",
            "--no-log-file",
        ])
        assert code == 0
