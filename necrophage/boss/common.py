"""Shared boss pieces: relations, phase cycling, telegraphs and narrative phases."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Hashable, Iterable, Union

from necrophage.camera import Vec3
from necrophage.combat import DamageEvent, GridPos

# Boss HP fractions at which the narrative moves to phase 2 and phase 3.
PHASE_2_THRESHOLD = 0.66
PHASE_3_THRESHOLD = 0.33
TELEGRAPH_HEIGHT = 0.05
ENRAGE_FRACTION = 0.5


class BossRelation(Enum):
    """How a faction boss currently stands towards the player."""

    HOSTILE = "hostile"
    SURRENDERED = "surrendered"


@dataclass
class BossAI:
    """Position in a boss's attack cycle and time until its next ability."""

    phase: int = 0
    phase_timer: float = 4.0


@dataclass(frozen=True)
class Damage(DamageEvent):
    """A hit dealt by a boss ability."""


@dataclass(frozen=True)
class Summon:
    """Request to spawn an enemy on a tile."""

    pos: GridPos
    hp: float
    damage: float
    color: tuple[float, float, float]


@dataclass(frozen=True)
class Telegraph:
    """Request to place a telegraph disc that explodes after ``delay`` seconds."""

    center: Vec3
    radius: float
    delay: float
    damage: float


@dataclass
class TelegraphMarker:
    """A telegraph disc on the ground, counting down to its explosion."""

    timer: float
    damage: float
    radius: float
    position: Vec3 = field(default_factory=Vec3)
    exploded: bool = False

    def tick(
        self, dt: float, friendlies: Iterable[tuple[Hashable, Vec3]]
    ) -> list[Damage]:
        """Count down; on expiry, hit every friendly within the radius once."""
        if self.exploded:
            return []
        self.timer -= dt
        if self.timer > 0.0:
            return []
        self.exploded = True
        return [
            Damage(target=target, amount=self.damage)
            for target in within_radius(self.position, friendlies, self.radius)
        ]


@dataclass
class Controlled:
    """A swarm member briefly turned against its allies."""

    timer: float
    target: Hashable | None = None

    def tick(self, dt: float) -> bool:
        """Count down; return True once control has worn off."""
        self.timer -= dt
        return self.timer <= 0.0


@dataclass
class BossNarrativePhase:
    """Three-act structure of a faction boss fight.

    While ``in_interphase`` the boss is invincible and its adds must be
    killed before the fight resumes.
    """

    phase: int = 1
    in_interphase: bool = False
    adds_spawned: bool = False

    def update(self, hp_fraction: float, adds_alive: int) -> int | None:
        """Advance the narrative; return the new phase when one begins."""
        if self.in_interphase:
            if adds_alive <= 0:
                self.in_interphase = False
                self.adds_spawned = False
            return None
        if hp_fraction <= PHASE_3_THRESHOLD:
            new_phase = 3
        elif hp_fraction <= PHASE_2_THRESHOLD:
            new_phase = 2
        else:
            new_phase = 1
        if new_phase <= self.phase:
            return None
        self.phase = new_phase
        self.in_interphase = True
        self.adds_spawned = False
        return new_phase


BossAction = Union[Damage, Summon, Telegraph, Controlled]


def within_radius(
    center: Vec3, friendlies: Iterable[tuple[Hashable, Vec3]], radius: float
) -> list[Hashable]:
    """Entities whose ground-plane distance to ``center`` is at most ``radius``."""
    limit = radius * radius
    hits = []
    for entity, pos in friendlies:
        dx = pos.x - center.x
        dz = pos.z - center.z
        if dx * dx + dz * dz <= limit:
            hits.append(entity)
    return hits