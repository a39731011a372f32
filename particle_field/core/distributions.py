"""
Procedural initial distributions.

Each distribution kind maps to one function drawing a single particle: it returns the
particle position and an unclamped scalar ``color_mix`` used for the gradient lookup.
Functions keep no state between calls; every random draw goes through the
``numpy.random.Generator`` passed in, so a seeded generator reproduces a layout exactly.

Cluster-style layouts (network, fluid vortices, cellular, storms) roll a fresh anchor for
every particle rather than sharing anchors across a cluster.
"""
import math
from typing import Callable, Dict, Optional, Tuple

import numpy as np

from particle_field.core_types import DistributionKind, Vec3
from particle_field.utils.logger import get_logger

logger = get_logger(__name__)

Sample = Tuple[Vec3, float]
DistributionFn = Callable[[np.random.Generator], Sample]

SPHERE_MIN_RADIUS = 5.0
SPHERE_MAX_RADIUS = 13.0
SPHERE_CLUSTER_PROBABILITY = 0.8
NETWORK_CLUSTERS = 12
NETWORK_CONNECTION_PROBABILITY = 0.3
SPIRAL_ARMS = 3
SPIRAL_MAX_RADIUS = 12.0

_REGISTRY: Dict[DistributionKind, DistributionFn] = {}


def register_distribution(kind: DistributionKind):
    def decorator(fn: DistributionFn) -> DistributionFn:
        _REGISTRY[kind] = fn
        return fn
    return decorator


def available_distributions():
    return tuple(_REGISTRY)


def _centered(rng: np.random.Generator, span: float) -> float:
    """Uniform draw in [-span/2, span/2)."""
    return (rng.random() - 0.5) * span


def _random_anchor(rng: np.random.Generator, span: float) -> Vec3:
    return (_centered(rng, span), _centered(rng, span), _centered(rng, span))


def _spherical(radius: float, theta: float, phi: float) -> Vec3:
    return (
        radius * math.sin(phi) * math.cos(theta),
        radius * math.sin(phi) * math.sin(theta),
        radius * math.cos(phi),
    )


@register_distribution(DistributionKind.SPHERE)
def sphere(rng: np.random.Generator) -> Sample:
    """Clumpy shell: clusters near radius 5-8, otherwise a uniform shell of radius 5-13."""
    if rng.random() < SPHERE_CLUSTER_PROBABILITY:
        direction = np.array(_random_anchor(rng, 10.0))
        norm = np.linalg.norm(direction)
        if norm == 0.0:
            direction = np.array([1.0, 0.0, 0.0])
        else:
            direction /= norm
        center = direction * (5.0 + rng.random() * 3.0)
        point = center + np.array(_random_anchor(rng, 2.0))
        distance = float(np.linalg.norm(point))
        # jitter may pull a point inside the minimum shell radius
        if distance < SPHERE_MIN_RADIUS:
            point = point * (SPHERE_MIN_RADIUS / distance) if distance > 0.0 else direction * SPHERE_MIN_RADIUS
        elif distance > SPHERE_MAX_RADIUS:
            point = point * (SPHERE_MAX_RADIUS / distance)
        x, y, z = (float(v) for v in point)
    else:
        radius = SPHERE_MIN_RADIUS + rng.random() * (SPHERE_MAX_RADIUS - SPHERE_MIN_RADIUS)
        theta = rng.random() * math.pi * 2.0
        phi = rng.random() * math.pi
        x, y, z = _spherical(radius, theta, phi)

    distance = math.sqrt(x * x + y * y + z * z)
    return (x, y, z), distance / SPHERE_MAX_RADIUS


@register_distribution(DistributionKind.MANDELBULB)
def mandelbulb(rng: np.random.Generator) -> Sample:
    theta = rng.random() * math.pi * 2.0
    phi = rng.random() * math.pi
    radius = 5.0 + 3.0 * math.sin(8.0 * phi) * math.sin(8.0 * theta)
    return _spherical(radius, theta, phi), abs(math.sin(phi * 10.0 + theta * 5.0))


@register_distribution(DistributionKind.SPIRAL)
def spiral(rng: np.random.Generator) -> Sample:
    angle = rng.random() * math.pi * 15.0
    radius = SPIRAL_MAX_RADIUS * rng.random()
    arm_offset = int(rng.integers(SPIRAL_ARMS)) * math.pi * 2.0 / SPIRAL_ARMS
    sweep = angle + arm_offset + radius * 0.2
    x = radius * math.cos(sweep)
    y = radius * math.sin(sweep)
    z = _centered(rng, 2.0)
    # inner particles take the first gradient colour
    return (x, y, z), radius / SPIRAL_MAX_RADIUS


@register_distribution(DistributionKind.NETWORK)
def network(rng: np.random.Generator) -> Sample:
    """Dense nodes around a cluster anchor, plus connection particles strung between anchors."""
    cluster_index = int(rng.integers(NETWORK_CLUSTERS))
    ax, ay, az = _random_anchor(rng, 20.0)

    if rng.random() < NETWORK_CONNECTION_PROBABILITY:
        t = rng.random()
        bx, by, bz = _random_anchor(rng, 20.0)
        position = (
            ax * (1.0 - t) + bx * t,
            ay * (1.0 - t) + by * t,
            az * (1.0 - t) + bz * t,
        )
    else:
        position = (ax + _centered(rng, 2.0), ay + _centered(rng, 2.0), az + _centered(rng, 2.0))

    return position, cluster_index / NETWORK_CLUSTERS


@register_distribution(DistributionKind.FLUID)
def fluid(rng: np.random.Generator) -> Sample:
    if rng.random() < 0.3:
        cx, cy, cz = _random_anchor(rng, 15.0)
        radius = 2.0 + rng.random() * 3.0
        angle = rng.random() * math.pi * 2.0
        height = _centered(rng, 4.0)
        x = cx + math.cos(angle) * radius
        y = cy + height
        z = cz + math.sin(angle) * radius
    else:
        line = int(rng.integers(10))
        x = _centered(rng, 30.0)
        y = math.sin(x * 0.2) * 3.0 + line - 5.0
        z = math.cos(x * 0.3) * 2.0 + line - 5.0

    return (x, y, z), (y + 10.0) / 20.0


@register_distribution(DistributionKind.CELLULAR)
def cellular(rng: np.random.Generator) -> Sample:
    tier = rng.random()
    if tier < 0.4:
        # nucleus
        cx, cy, cz = _random_anchor(rng, 20.0)
        position = (cx + _centered(rng, 2.0), cy + _centered(rng, 2.0), cz + _centered(rng, 2.0))
        mix = 0.8 + rng.random() * 0.2
    elif tier < 0.6:
        # membrane
        theta = rng.random() * math.pi * 2.0
        phi = rng.random() * math.pi
        radius = 4.0 + _centered(rng, 0.5)
        cx, cy, cz = _random_anchor(rng, 15.0)
        sx, sy, sz = _spherical(radius, theta, phi)
        position = (cx + sx, cy + sy, cz + sz)
        mix = 0.4 + rng.random() * 0.2
    else:
        # organelles
        cx, cy, cz = _random_anchor(rng, 20.0)
        dist = 2.0 + rng.random() * 2.5
        a1 = rng.random() * math.pi * 2.0
        a2 = rng.random() * math.pi * 2.0
        position = (
            cx + math.cos(a1) * math.sin(a2) * dist,
            cy + math.sin(a1) * math.sin(a2) * dist,
            cz + math.cos(a2) * dist,
        )
        mix = rng.random() * 0.3
    return position, mix


@register_distribution(DistributionKind.ATMOSPHERIC)
def atmospheric(rng: np.random.Generator) -> Sample:
    band = rng.random()
    if band < 0.3:
        # cloud band
        base = -5.0 + rng.random() * 10.0
        thickness = 2.0 + rng.random() * 4.0
        x = _centered(rng, 30.0)
        y = base + rng.random() * thickness
        z = _centered(rng, 30.0)
        return (x, y, z), 0.4 + rng.random() * 0.2

    if band < 0.6:
        # wind sheets, coloured by height (cold low, hot high)
        layer = int(rng.integers(5)) - 2
        x = _centered(rng, 30.0)
        z = _centered(rng, 30.0)
        y = layer * 3.0 + math.sin(x * 0.1) * math.cos(z * 0.1) * 2.0
        return (x, y, z), (y + 10.0) / 20.0

    if rng.random() < 0.5:
        # rain
        x = _centered(rng, 30.0)
        z = _centered(rng, 30.0)
        y = 5.0 - rng.random() * 15.0
        return (x, y, z), 0.2

    # storm vortex
    cx = _centered(rng, 20.0)
    cz = _centered(rng, 20.0)
    radius = 3.0 + rng.random() * 7.0
    angle = rng.random() * math.pi * 2.0
    height = rng.random() * 6.0
    position = (cx + math.cos(angle) * radius, height - 3.0, cz + math.sin(angle) * radius)
    return position, 0.3 + rng.random() * 0.4


def generate(kind, particle_index: int = 0, rng: Optional[np.random.Generator] = None) -> Sample:
    """Draw one particle for ``kind``.

    ``particle_index`` is accepted for call-site symmetry with the per-particle loop; no
    distribution depends on it. Unknown kinds use the sphere rule.
    """
    if rng is None:
        rng = np.random.default_rng()
    key = DistributionKind.parse(kind)
    fn = _REGISTRY.get(key, _REGISTRY[DistributionKind.SPHERE])
    return fn(rng)


def generate_many(kind, count: int, rng: Optional[np.random.Generator] = None) -> Tuple[np.ndarray, np.ndarray]:
    """Draw ``count`` particles; returns ``(positions[count, 3], color_mix[count])``."""
    if rng is None:
        rng = np.random.default_rng()
    key = DistributionKind.parse(kind)
    fn = _REGISTRY.get(key, _REGISTRY[DistributionKind.SPHERE])

    positions = np.empty((count, 3), dtype=np.float64)
    mixes = np.empty(count, dtype=np.float64)
    for i in range(count):
        positions[i], mixes[i] = fn(rng)
    return positions, mixes


__all__ = [
    "register_distribution",
    "available_distributions",
    "generate",
    "generate_many",
    "sphere",
    "mandelbulb",
    "spiral",
    "network",
    "fluid",
    "cellular",
    "atmospheric",
]
