"""Core combat rules: health, attacks, damage, death and line of sight."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Hashable

from necrophage.camera import Vec3

# Dissolve: wait before fading, then fade alpha 1 -> 0.
DISSOLVE_DELAY = 1.0
DISSOLVE_DURATION = 2.0

LOST_TIMEOUT = 2.0
DEFAULT_SIGHT_RANGE = 8
ALERT_RADIUS = 6

# Harvest window.
HARVEST_THRESHOLD = 0.10
HARVEST_FLOOR = 0.05
HARVEST_WINDOW_DURATION = 2.5
HARVEST_RANGE = 3
HARVEST_HEALTH = 15.0
HARVEST_BIOMASS = 10.0

# Melee telegraphs.
MELEE_WINDUP_DURATION = 0.6
MELEE_RANGE = 1.5
JAB_HALF_WIDTH = 0.40
JAB_HALF_LENGTH = 1.50
BROAD_HALF_ANGLE = math.pi / 4 / 2.0
BROAD_RADIUS = MELEE_RANGE * 2.0

# Ranged attacks.
RANGED_ATTACK_RANGE = 7.0
RANGED_STOP_DIST = 6.0
PROJECTILE_SPEED = 12.0
PROJECTILE_HIT_DIST = 0.4
PROJECTILE_LIFETIME = 3.0

CONSUME_RANGE = 1
KILL_HEAL = 3.0
CIVILIAN_BIOMASS = 2.0
ENEMY_BIOMASS = 5.0


@dataclass(frozen=True)
class GridPos:
    """A tile coordinate on the level grid."""

    x: int
    y: int

    def chebyshev(self, other: "GridPos") -> int:
        """Tile distance allowing diagonal steps."""
        return max(abs(self.x - other.x), abs(self.y - other.y))


def dist_xz(a: Vec3, b: Vec3) -> float:
    """Distance between two world positions on the ground (XZ) plane."""
    return math.hypot(a.x - b.x, a.z - b.z)


@dataclass
class Health:
    """Hit points; ``current`` starts at ``max`` when not given."""

    max: float
    current: float | None = None

    def __post_init__(self) -> None:
        if self.current is None:
            self.current = self.max

    def fraction(self) -> float:
        """Current hit points as a fraction of the maximum."""
        return self.current / self.max


@dataclass
class Attack:
    """Damage dealt per strike and the cooldown between strikes."""

    damage: float
    cooldown: float
    timer: float = 0.0

    def tick(self, dt: float) -> None:
        if self.timer > 0.0:
            self.timer -= dt

    def ready(self) -> bool:
        return self.timer <= 0.0

    def trigger(self) -> None:
        """Start the cooldown after striking."""
        self.timer = self.cooldown


class AttackMode(Enum):
    MELEE = "melee"
    RANGED = "ranged"


class MeleeAttackShape(Enum):
    JAB = "jab"
    BROAD = "broad"


class EnemyAI(Enum):
    PATROL = "patrol"
    CHASE = "chase"
    ATTACK_TARGET = "attack_target"


@dataclass(frozen=True)
class DamageEvent:
    target: Hashable
    amount: float
    attacker_pos: GridPos | None = None


@dataclass
class Dying:
    """Fade-out of a dead body: a visible delay, then an alpha fade."""

    delay: float = DISSOLVE_DELAY
    timer: float = DISSOLVE_DURATION
    alpha: float = field(default=1.0)

    def tick(self, dt: float) -> bool:
        """Advance the dissolve; return True once the body should be removed."""
        if self.delay > 0.0:
            self.delay -= dt
            return False
        self.timer -= dt
        self.alpha = dissolve_alpha(self.timer)
        return self.timer <= 0.0


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def has_line_of_sight(
    is_wall: Callable[[int, int], bool], start: GridPos, end: GridPos
) -> bool:
    """True when no wall tile lies strictly between ``start`` and ``end``."""
    dx = end.x - start.x
    dy = end.y - start.y
    steps = max(abs(dx), abs(dy))
    if steps == 0:
        return True
    for i in range(1, steps):
        nx = _round_half_away(start.x + dx * i / steps)
        ny = _round_half_away(start.y + dy * i / steps)
        if is_wall(nx, ny):
            return False
    return True


def apply_damage(
    health: Health, amount: float, harvestable: bool, invincible: bool = False
) -> float:
    """Apply a hit and return the resulting hit points.

    A fatal hit on a harvestable enemy leaves it at the harvest floor so the
    harvest window can open.
    """
    if invincible:
        return health.current
    new_hp = health.current - amount
    if new_hp <= 0.0 and health.max > 0.0 and harvestable:
        health.current = max(health.max * HARVEST_FLOOR, 0.01)
    else:
        health.current = new_hp
    return health.current


def death_biomass_value(is_civilian: bool) -> float:
    """Biomass a corpse is worth."""
    return CIVILIAN_BIOMASS if is_civilian else ENEMY_BIOMASS


def heal_on_kill(health: Health, kill_count: int) -> float:
    """Heal the player for each enemy killed, capped at maximum; return current HP."""
    if kill_count > 0:
        health.current = min(health.current + KILL_HEAL * kill_count, health.max)
    return health.current


def dissolve_alpha(timer: float) -> float:
    """Opacity of a dissolving body with ``timer`` seconds of fade left."""
    return min(max(timer / DISSOLVE_DURATION, 0.0), 1.0)