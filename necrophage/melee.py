"""Melee telegraph geometry, player attacks and the harvest window."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from enum import Enum
from typing import Hashable, Iterable, TypeVar

from necrophage.camera import Vec3
from necrophage.combat import (
    BROAD_HALF_ANGLE,
    BROAD_RADIUS,
    HARVEST_BIOMASS,
    HARVEST_HEALTH,
    HARVEST_RANGE,
    HARVEST_WINDOW_DURATION,
    JAB_HALF_LENGTH,
    JAB_HALF_WIDTH,
    MELEE_RANGE,
    RANGED_ATTACK_RANGE,
    GridPos,
    MeleeAttackShape,
    dist_xz,
)

_T = TypeVar("_T", bound=Hashable)


def melee_hits(
    shape: MeleeAttackShape,
    origin: Vec3,
    direction: tuple[float, float],
    target: Vec3,
) -> bool:
    """True when ``target`` stands inside the strike zone of a melee telegraph.

    ``direction`` is the normalised attack direction on the ground plane,
    given as (x, z).
    """
    fwd_x, fwd_z = direction
    delta_x = target.x - origin.x
    delta_z = target.z - origin.z
    if shape is MeleeAttackShape.JAB:
        local_fwd = delta_x * fwd_x + delta_z * fwd_z
        local_right = delta_x * fwd_z - delta_z * fwd_x
        return (
            0.0 <= local_fwd <= JAB_HALF_LENGTH * 2.0
            and abs(local_right) <= JAB_HALF_WIDTH
        )
    distance = math.hypot(delta_x, delta_z)
    attack_angle = math.atan2(fwd_x, fwd_z)
    target_angle = math.atan2(delta_x, delta_z)
    diff = (target_angle - attack_angle + math.pi) % (2.0 * math.pi) - math.pi
    return distance <= BROAD_RADIUS and abs(diff) <= BROAD_HALF_ANGLE


def build_sector_points(
    radius: float, half_angle: float, segments: int
) -> list[tuple[float, float, float]]:
    """Vertices of a flat triangle fan pointing along +Z.

    The first vertex is the tip at the origin; the remaining ``segments + 1``
    vertices sweep the arc from ``-half_angle`` to ``+half_angle``. Triangle
    ``i`` joins vertices 0, ``i + 1`` and ``i + 2``.
    """
    if segments <= 0:
        raise ValueError("segments must be positive")
    points = [(0.0, 0.0, 0.0)]
    for i in range(segments + 1):
        angle = -half_angle + (i / segments) * 2.0 * half_angle
        points.append((radius * math.sin(angle), 0.0, radius * math.cos(angle)))
    return points


@dataclass(frozen=True)
class HarvestReward:
    """What the player gains by harvesting a low-health enemy."""

    class Kind(Enum):
        HEALTH = "health"
        BIOMASS = "biomass"
        NOTHING = "nothing"

    kind: "HarvestReward.Kind"
    amount: float = 0.0

    @classmethod
    def health(cls, amount: float = HARVEST_HEALTH) -> "HarvestReward":
        return cls(cls.Kind.HEALTH, amount)

    @classmethod
    def biomass(cls, amount: float = HARVEST_BIOMASS) -> "HarvestReward":
        return cls(cls.Kind.BIOMASS, amount)

    @classmethod
    def nothing(cls) -> "HarvestReward":
        return cls(cls.Kind.NOTHING)


@dataclass
class HarvestWindow:
    """Open harvest window on a stunned, invincible enemy."""

    reward: HarvestReward
    timer: float = HARVEST_WINDOW_DURATION

    def tick(self, dt: float) -> bool:
        """Count down; return True once the window has expired."""
        self.timer -= dt
        return self.timer <= 0.0


def roll_harvest_reward(rng: random.Random) -> HarvestReward:
    """Pick health, biomass or nothing with equal chance."""
    roll = rng.randrange(3)
    if roll == 0:
        return HarvestReward.health()
    if roll == 1:
        return HarvestReward.biomass()
    return HarvestReward.nothing()


def nearest_harvestable(
    player_pos: GridPos, candidates: Iterable[tuple[_T, GridPos]]
) -> tuple[_T, GridPos] | None:
    """Closest harvestable enemy within harvest range; the first wins a tie."""
    best: tuple[_T, GridPos] | None = None
    best_dist = 0
    for entity, pos in candidates:
        dist = pos.chebyshev(player_pos)
        if dist <= HARVEST_RANGE and (best is None or dist < best_dist):
            best = (entity, pos)
            best_dist = dist
    return best


def player_melee_targets(
    player_pos: Vec3, targets: Iterable[tuple[_T, Vec3]]
) -> list[_T]:
    """Every target within melee reach of the player."""
    return [
        entity for entity, pos in targets if dist_xz(player_pos, pos) <= MELEE_RANGE
    ]


def nearest_ranged_target(
    player_pos: Vec3, targets: Iterable[tuple[_T, Vec3]]
) -> tuple[_T, Vec3] | None:
    """Closest target within shooting range, compared to a thousandth of a unit."""
    in_range = [
        (entity, pos)
        for entity, pos in targets
        if dist_xz(player_pos, pos) <= RANGED_ATTACK_RANGE
    ]
    if not in_range:
        return None
    return min(in_range, key=lambda item: int(dist_xz(player_pos, item[1]) * 1000.0))