"""
External signal adapters.

These sit outside the simulation tick. Capture itself (microphone, camera, pointer
events) belongs to the host; the adapters here only turn raw samples into the
last-value-wins fields of a :class:`SignalSnapshot`. Failures degrade a source to its
defaults (inactive, intensity 0) instead of reaching the simulation.
"""
from typing import Optional, Sequence, Tuple

import numpy as np

from particle_field.constants import AUDIO_SMOOTHING, GESTURE_FRAME_SIZE, GESTURE_SAMPLE_STRIDE
from particle_field.core_types import InteractionKind, SignalSnapshot, Vec2
from particle_field.utils.logger import get_logger

logger = get_logger(__name__)


class PointerTracker:
    """Screen coordinates to the [-1, 1] square, y pointing up."""

    def __init__(self):
        self.position: Vec2 = (0.0, 0.0)

    def move(self, client_x: float, client_y: float, width: float, height: float) -> Vec2:
        if width <= 0 or height <= 0:
            return self.position
        self.position = (
            (client_x / width) * 2.0 - 1.0,
            -(client_y / height) * 2.0 + 1.0,
        )
        return self.position

    def touch(self, touches: Sequence[Tuple[float, float]], width: float, height: float) -> Vec2:
        """Touch input follows the first contact point only."""
        if not touches:
            return self.position
        x, y = touches[0]
        return self.move(x, y, width, height)


class AudioAnalyzer:
    """Smoothed loudness from analyser frequency bins (0-255 per bin)."""

    def __init__(self, smoothing: float = AUDIO_SMOOTHING):
        self.smoothing = smoothing
        self.active = False
        self.intensity = 0.0

    def enable(self) -> None:
        self.active = True

    def disable(self) -> None:
        self.active = False
        self.intensity = 0.0

    def fail(self, reason: str) -> None:
        logger.warning("Audio capture unavailable: %s", reason)
        self.disable()

    def analyze(self, frequency_data) -> float:
        if not self.active:
            return 0.0
        data = np.asarray(frequency_data, dtype=np.float64)
        if data.size == 0 or not np.isfinite(data).all():
            logger.warning("Ignoring malformed audio frame of %d bins", data.size)
            return self.intensity

        normalized = float(np.clip(data.mean() / 255.0, 0.0, 1.0))
        self.intensity = self.intensity * self.smoothing + normalized * (1.0 - self.smoothing)
        return self.intensity


class GestureTracker:
    """Brightest-pixel tracking on a downsampled video frame."""

    def __init__(self, frame_size: Tuple[int, int] = GESTURE_FRAME_SIZE, stride: int = GESTURE_SAMPLE_STRIDE):
        self.width, self.height = frame_size
        self.stride = stride
        self.active = False
        self.position: Vec2 = (0.0, 0.0)
        self.intensity = 0.0

    def enable(self) -> None:
        self.active = True

    def disable(self) -> None:
        self.active = False
        self.position = (0.0, 0.0)
        self.intensity = 0.0

    def fail(self, reason: str) -> None:
        logger.warning("Gesture capture unavailable: %s", reason)
        self.disable()

    def _downsample(self, frame: np.ndarray) -> np.ndarray:
        rows = np.arange(self.height) * frame.shape[0] // self.height
        cols = np.arange(self.width) * frame.shape[1] // self.width
        return frame[rows][:, cols]

    def process(self, frame) -> Optional[Tuple[Vec2, float]]:
        if not self.active:
            return None
        pixels = np.asarray(frame)
        if pixels.ndim not in (2, 3) or pixels.shape[0] == 0 or pixels.shape[1] == 0:
            self.fail(f"unexpected frame shape {pixels.shape}")
            return None

        small = self._downsample(pixels).astype(np.float64)
        brightness = small[..., :3].mean(axis=-1) if small.ndim == 3 else small
        sampled = brightness[::self.stride, ::self.stride]

        peak = float(sampled.max())
        if peak > 0.0:
            sy, sx = np.unravel_index(int(np.argmax(sampled)), sampled.shape)
            x, y = sx * self.stride, sy * self.stride
        else:
            x, y = self.width / 2, self.height / 2

        self.position = ((x / self.width) * 2.0 - 1.0, (y / self.height) * 2.0 - 1.0)
        self.intensity = peak / 255.0
        return self.position, self.intensity


class SignalSources:
    """Owns the signal adapters and freezes their latest values into a snapshot."""

    def __init__(self):
        self.pointer = PointerTracker()
        self.audio = AudioAnalyzer()
        self.gesture = GestureTracker()

    def snapshot(self, interaction: InteractionKind, paused: bool) -> SignalSnapshot:
        return SignalSnapshot(
            pointer_position=self.pointer.position,
            interaction_kind=interaction,
            audio_intensity=self.audio.intensity if self.audio.active else 0.0,
            gesture_position=self.gesture.position,
            gesture_intensity=self.gesture.intensity,
            gesture_active=self.gesture.active,
            audio_active=self.audio.active,
            paused=paused,
        )


__all__ = ["PointerTracker", "AudioAnalyzer", "GestureTracker", "SignalSources"]
