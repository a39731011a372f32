"""Static per-mode parameter table and command cycling."""
from typing import Dict, Optional

from particle_field.core_types import RGB, DistributionKind, InteractionKind, Mode, ModeConfig


def hex_to_rgb(value: int) -> RGB:
    return (
        ((value >> 16) & 0xFF) / 255.0,
        ((value >> 8) & 0xFF) / 255.0,
        (value & 0xFF) / 255.0,
    )


MODE_CONFIGS: Dict[Mode, ModeConfig] = {
    Mode.COSMIC: ModeConfig(
        count=20000,
        size=0.03,
        speed=0.2,
        colors=(hex_to_rgb(0x0B66FF), hex_to_rgb(0xFF00FF), hex_to_rgb(0x00FFFF)),
        distribution=DistributionKind.SPHERE,
    ),
    Mode.FRACTAL: ModeConfig(
        count=15000,
        size=0.04,
        speed=0.3,
        colors=(hex_to_rgb(0x00FF00), hex_to_rgb(0xFFFF00), hex_to_rgb(0xFF6600)),
        distribution=DistributionKind.MANDELBULB,
    ),
    Mode.VORTEX: ModeConfig(
        count=25000,
        size=0.02,
        speed=0.5,
        colors=(hex_to_rgb(0xFF0000), hex_to_rgb(0xFF6600), hex_to_rgb(0xFFCC00)),
        distribution=DistributionKind.SPIRAL,
    ),
    Mode.NEURAL: ModeConfig(
        count=30000,
        size=0.015,
        speed=0.15,
        colors=(hex_to_rgb(0x6600FF), hex_to_rgb(0x0066FF), hex_to_rgb(0x00FFCC)),
        distribution=DistributionKind.NETWORK,
    ),
    Mode.FLUID: ModeConfig(
        count=35000,
        size=0.02,
        speed=0.4,
        colors=(hex_to_rgb(0x0044FF), hex_to_rgb(0x00CCFF), hex_to_rgb(0x00FFCC)),
        distribution=DistributionKind.FLUID,
    ),
    Mode.BIOLOGICAL: ModeConfig(
        count=25000,
        size=0.025,
        speed=0.2,
        colors=(hex_to_rgb(0x00CC44), hex_to_rgb(0x44FF88), hex_to_rgb(0xFFCC44)),
        distribution=DistributionKind.CELLULAR,
    ),
    Mode.WEATHER: ModeConfig(
        count=30000,
        size=0.03,
        speed=0.35,
        # cold, neutral, hot
        colors=(hex_to_rgb(0x0088FF), hex_to_rgb(0xFFFFFF), hex_to_rgb(0xFF4400)),
        distribution=DistributionKind.ATMOSPHERIC,
    ),
}

_MODE_ORDER = list(Mode)
_INTERACTION_ORDER = list(InteractionKind)


class ModeCatalog:
    """Read-only lookup over the mode table, optionally scaling particle counts."""

    def __init__(self, configs: Optional[Dict[Mode, ModeConfig]] = None, count_scale: float = 1.0):
        source = configs if configs is not None else MODE_CONFIGS
        if count_scale != 1.0:
            source = {
                mode: ModeConfig(
                    count=max(1, int(cfg.count * count_scale)),
                    size=cfg.size,
                    speed=cfg.speed,
                    colors=cfg.colors,
                    distribution=cfg.distribution,
                )
                for mode, cfg in source.items()
            }
        if Mode.default() not in source:
            raise ValueError(f"mode table must include the fallback mode {Mode.default().value!r}")
        self._configs = dict(source)

    def get(self, mode) -> ModeConfig:
        key = Mode.parse(mode)
        if key not in self._configs:
            key = Mode.default()
        return self._configs[key]

    def __getitem__(self, mode) -> ModeConfig:
        return self.get(mode)

    def __contains__(self, mode) -> bool:
        if isinstance(mode, str):
            mode = mode.strip().lower()
        try:
            return Mode(mode) in self._configs
        except ValueError:
            return False

    def __iter__(self):
        return iter(self._configs)

    def __len__(self) -> int:
        return len(self._configs)


def next_mode(current) -> Mode:
    """Cycle cosmic -> fractal -> vortex -> neural -> fluid -> biological -> weather -> cosmic."""
    mode = Mode.parse(current)
    return _MODE_ORDER[(_MODE_ORDER.index(mode) + 1) % len(_MODE_ORDER)]


def next_interaction(current) -> InteractionKind:
    kind = InteractionKind.parse(current)
    return _INTERACTION_ORDER[(_INTERACTION_ORDER.index(kind) + 1) % len(_INTERACTION_ORDER)]


__all__ = ["MODE_CONFIGS", "ModeCatalog", "hex_to_rgb", "next_mode", "next_interaction"]
