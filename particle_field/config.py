"""Configuration for the particle field environment, read from environment variables."""

import os
from pathlib import Path
from typing import Optional

# Project root directory
PROJECT_ROOT = Path(__file__).parent.parent


def _float_env(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


def _optional_int_env(name: str) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError:
        return None


# Paths (created by the logging setup when a file handler is attached)
LOGS_DIR = Path(os.getenv("LOGS_DIR", PROJECT_ROOT / "logs"))

# Simulation settings
PARTICLE_SEED: Optional[int] = _optional_int_env("PARTICLE_SEED")
DEFAULT_MODE = os.getenv("DEFAULT_MODE", "cosmic")
DEFAULT_INTERACTION = os.getenv("DEFAULT_INTERACTION", "attract")
TARGET_FPS = _int_env("TARGET_FPS", 60)
MAX_FRAME_DELTA = _float_env("MAX_FRAME_DELTA", 0.0)
COUNT_SCALE = _float_env("COUNT_SCALE", 1.0)

# Logging settings
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")

__all__ = [
    "PROJECT_ROOT",
    "LOGS_DIR",
    "PARTICLE_SEED",
    "DEFAULT_MODE",
    "DEFAULT_INTERACTION",
    "TARGET_FPS",
    "MAX_FRAME_DELTA",
    "COUNT_SCALE",
    "LOG_LEVEL",
    "LOG_FORMAT",
]
