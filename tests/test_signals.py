"""Tests for the pointer, audio and gesture adapters."""

import logging

import numpy as np
import pytest

from particle_field.core_types import InteractionKind
from particle_field.signals import AudioAnalyzer, GestureTracker, PointerTracker, SignalSources


class TestPointerTracker:
    def test_screen_corners(self):
        pointer = PointerTracker()
        assert pointer.move(0, 0, 800, 600) == (-1.0, 1.0)
        assert pointer.move(800, 600, 800, 600) == (1.0, -1.0)
        assert pointer.move(400, 300, 800, 600) == (0.0, 0.0)

    def test_touch_uses_first_contact(self):
        pointer = PointerTracker()
        assert pointer.touch([(800, 0), (0, 600)], 800, 600) == (1.0, 1.0)
        assert pointer.touch([], 800, 600) == (1.0, 1.0)

    def test_degenerate_viewport_keeps_last_value(self):
        pointer = PointerTracker()
        pointer.move(0, 0, 800, 600)
        assert pointer.move(10, 10, 0, 0) == (-1.0, 1.0)


class TestAudioAnalyzer:
    def test_exponential_smoothing(self):
        audio = AudioAnalyzer()
        audio.enable()
        full = np.full(256, 255)
        assert audio.analyze(full) == pytest.approx(0.15)
        assert audio.analyze(full) == pytest.approx(0.15 * 0.85 + 0.15)

    def test_inactive_reports_zero(self):
        audio = AudioAnalyzer()
        assert audio.analyze(np.full(16, 255)) == 0.0
        assert audio.intensity == 0.0

    def test_malformed_frame_keeps_value(self, caplog):
        audio = AudioAnalyzer()
        audio.enable()
        audio.analyze(np.full(8, 255))
        with caplog.at_level(logging.WARNING):
            assert audio.analyze([]) == pytest.approx(0.15)
        assert "malformed" in caplog.text

    def test_failure_degrades_to_defaults(self):
        audio = AudioAnalyzer()
        audio.enable()
        audio.analyze(np.full(8, 200))
        audio.fail("permission denied")
        assert not audio.active
        assert audio.intensity == 0.0


class TestGestureTracker:
    def test_brightest_pixel(self):
        tracker = GestureTracker()
        tracker.enable()
        frame = np.zeros((60, 80, 3), dtype=np.uint8)
        frame[10, 20] = 255
        position, intensity = tracker.process(frame)
        assert position == pytest.approx((20 / 80 * 2 - 1, 10 / 60 * 2 - 1))
        assert intensity == pytest.approx(1.0)

    def test_larger_frames_are_downsampled(self):
        tracker = GestureTracker()
        tracker.enable()
        frame = np.zeros((120, 160, 3), dtype=np.uint8)
        frame[20:22, 40:42] = 128
        position, intensity = tracker.process(frame)
        assert position == pytest.approx((20 / 80 * 2 - 1, 10 / 60 * 2 - 1))
        assert intensity == pytest.approx(128 / 255)

    def test_dark_frame_centres(self):
        tracker = GestureTracker()
        tracker.enable()
        position, intensity = tracker.process(np.zeros((60, 80), dtype=np.uint8))
        assert position == (0.0, 0.0)
        assert intensity == 0.0

    def test_bad_frame_disables_tracker(self):
        tracker = GestureTracker()
        tracker.enable()
        assert tracker.process(np.zeros(5)) is None
        assert not tracker.active

    def test_inactive_ignores_frames(self):
        tracker = GestureTracker()
        assert tracker.process(np.full((60, 80), 255, dtype=np.uint8)) is None


class TestSignalSources:
    def test_snapshot_defaults(self):
        snapshot = SignalSources().snapshot(InteractionKind.WAVE, paused=True)
        assert snapshot.interaction_kind is InteractionKind.WAVE
        assert snapshot.paused
        assert not snapshot.audio_active and not snapshot.gesture_active
        assert snapshot.audio_intensity == 0.0

    def test_snapshot_reflects_sources(self):
        sources = SignalSources()
        sources.audio.enable()
        sources.audio.analyze(np.full(4, 255))
        sources.pointer.move(600, 150, 800, 600)
        snapshot = sources.snapshot(InteractionKind.VOICE, paused=False)
        assert snapshot.audio_active
        assert snapshot.audio_intensity == pytest.approx(0.15)
        assert snapshot.pointer_position == (0.5, 0.5)
