"""Enemy perception, alerting, grid movement and projectiles."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Callable, Hashable, Iterable

from necrophage.camera import Vec3
from necrophage.combat import (
    ALERT_RADIUS,
    DEFAULT_SIGHT_RANGE,
    LOST_TIMEOUT,
    PROJECTILE_HIT_DIST,
    PROJECTILE_LIFETIME,
    PROJECTILE_SPEED,
    DamageEvent,
    EnemyAI,
    GridPos,
    has_line_of_sight,
)

TileTest = Callable[[int, int], bool]

PATROL_DIRECTIONS = ((0, -1), (0, 1), (-1, 0), (1, 0))
FLEE_RADIUS = 10
_AIM_HEIGHT = Vec3(0.0, 0.5, 0.0)


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


@dataclass
class EnemyState:
    """Perception and pursuit state of one enemy."""

    pos: GridPos
    ai: EnemyAI = EnemyAI.PATROL
    sight_range: int = DEFAULT_SIGHT_RANGE
    lost_timer: float = LOST_TIMEOUT
    chase_target: Hashable | None = None

    def tick_lost(self, dt: float) -> bool:
        """Count down while chasing; return True when the enemy gives up and patrols."""
        if self.ai != EnemyAI.CHASE:
            return False
        self.lost_timer -= dt
        if self.lost_timer <= 0.0:
            self.ai = EnemyAI.PATROL
            self.lost_timer = 0.0
            return True
        return False


def find_visible_target(
    enemy: EnemyState,
    friendlies: Iterable[tuple[Hashable, GridPos]],
    is_wall: TileTest,
) -> tuple[Hashable | None, bool]:
    """Pick the closest visible friendly in sight range and start chasing it.

    Returns the target (or None) and whether the enemy has just become alert,
    in which case an alert should be raised at the enemy's position.
    """
    best: tuple[Hashable, int] | None = None
    for entity, target_pos in friendlies:
        dist = enemy.pos.chebyshev(target_pos)
        if dist <= enemy.sight_range and has_line_of_sight(is_wall, enemy.pos, target_pos):
            if best is None or dist < best[1]:
                best = (entity, dist)
    if best is None:
        return None, False
    newly_alerted = enemy.ai != EnemyAI.CHASE
    enemy.ai = EnemyAI.CHASE
    enemy.lost_timer = LOST_TIMEOUT
    enemy.chase_target = best[0]
    return best[0], newly_alerted


def alert_nearby(enemies: Iterable[EnemyState], origin: GridPos) -> list[EnemyState]:
    """Wake patrolling enemies within the alert radius; return those woken."""
    woken = []
    for enemy in enemies:
        if enemy.ai == EnemyAI.PATROL and enemy.pos.chebyshev(origin) <= ALERT_RADIUS:
            enemy.ai = EnemyAI.CHASE
            enemy.lost_timer = LOST_TIMEOUT
            woken.append(enemy)
    return woken


def patrol_step(pos: GridPos, is_walkable: TileTest, rng: random.Random) -> GridPos:
    """Try one step in a random cardinal direction."""
    dx, dy = PATROL_DIRECTIONS[rng.randrange(len(PATROL_DIRECTIONS))]
    nx, ny = pos.x + dx, pos.y + dy
    return GridPos(nx, ny) if is_walkable(nx, ny) else pos


def direct_step(pos: GridPos, target: GridPos, is_walkable: TileTest) -> GridPos:
    """Step towards the target, preferring a diagonal, then x, then y."""
    dx = _sign(target.x - pos.x)
    dy = _sign(target.y - pos.y)
    if dx and dy and is_walkable(pos.x + dx, pos.y + dy):
        return GridPos(pos.x + dx, pos.y + dy)
    if dx and is_walkable(pos.x + dx, pos.y):
        return GridPos(pos.x + dx, pos.y)
    if dy and is_walkable(pos.x, pos.y + dy):
        return GridPos(pos.x, pos.y + dy)
    return pos


def flee_step(pos: GridPos, threat: GridPos, is_walkable: TileTest) -> GridPos:
    """Step away from a nearby threat along x, else along y."""
    if pos.chebyshev(threat) > FLEE_RADIUS:
        return pos
    dx = -_sign(threat.x - pos.x)
    dy = -_sign(threat.y - pos.y)
    if dx and is_walkable(pos.x + dx, pos.y):
        return GridPos(pos.x + dx, pos.y)
    if dy and is_walkable(pos.x, pos.y + dy):
        return GridPos(pos.x, pos.y + dy)
    return pos


@dataclass
class Projectile:
    """A shot flying in a fixed straight line; it never homes in."""

    target: Hashable
    damage: float
    direction: Vec3
    position: Vec3
    lifetime: float = PROJECTILE_LIFETIME
    alive: bool = True

    def step(self, dt: float, target_pos: Vec3 | None) -> DamageEvent | None:
        """Advance the shot; return a damage event when it reaches its target.

        ``target_pos`` is the target's current position, or None when the
        target is gone. The shot stops being alive on expiry, hit or loss.
        """
        if not self.alive:
            return None
        self.lifetime -= dt
        if self.lifetime <= 0.0:
            self.alive = False
            return None
        self.position = self.position + self.direction * (PROJECTILE_SPEED * dt)
        if target_pos is None:
            self.alive = False
            return None
        if (self.position - (target_pos + _AIM_HEIGHT)).length() <= PROJECTILE_HIT_DIST:
            self.alive = False
            return DamageEvent(target=self.target, amount=self.damage)
        return None


def spawn_projectile(
    from_pos: Vec3, target: Hashable, target_pos: Vec3, damage: float
) -> Projectile:
    """Create a shot from ``from_pos`` aimed at where the target stands now."""
    origin = from_pos + _AIM_HEIGHT
    delta = (target_pos + _AIM_HEIGHT) - origin
    length = delta.length()
    direction = delta * (1.0 / length) if length > 0.0 and math.isfinite(length) else Vec3()
    return Projectile(target=target, damage=damage, direction=direction, position=origin)