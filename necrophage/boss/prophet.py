"""The Prophet, the cult leader: zealots, psychic pulse, blink and mind control."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Callable, Hashable, Iterable

from necrophage.boss.common import (
    ENRAGE_FRACTION,
    BossAction,
    BossAI,
    BossNarrativePhase,
    BossRelation,
    Controlled,
    Damage,
    Summon,
    within_radius,
)
from necrophage.camera import Vec3
from necrophage.combat import GridPos, Health

PROPHET_HP = 280.0
PROPHET_DMG = 22.0
PROPHET_STATS = (PROPHET_HP, PROPHET_DMG)

PULSE_RADIUS = 5.0
ZEALOT_HP = 25.0
ZEALOT_DMG = 7.0
ZEALOT_COLOR = (0.5, 0.05, 0.05)
ZEALOTS_NORMAL = 3
ZEALOTS_ENRAGED = 4
PHASE_0_TIMER = 7.0
PHASE_1_TIMER = 3.5
PHASE_2_TIMER = 5.0
CONTROL_DURATION = 3.0
ENRAGED_SPEED = 0.6
BLINK_RANGE = 8
BLINK_ATTEMPTS = 20
BODY_HEIGHT = 0.5


def blink(
    pos: GridPos, is_walkable: Callable[[int, int], bool], rng: random.Random
) -> GridPos | None:
    """Pick a random walkable tile near ``pos``; None when none was found."""
    for _ in range(BLINK_ATTEMPTS):
        nx = pos.x + rng.randint(-BLINK_RANGE, BLINK_RANGE)
        ny = pos.y + rng.randint(-BLINK_RANGE, BLINK_RANGE)
        if nx >= 0 and ny >= 0 and is_walkable(nx, ny):
            return GridPos(nx, ny)
    return None


@dataclass
class Prophet:
    """Cycles zealot summons, a psychic pulse, and blink with mind control."""

    pos: GridPos
    xyz: Vec3 | None = None
    health: Health = field(default_factory=lambda: Health(PROPHET_HP))
    ai: BossAI = field(default_factory=BossAI)
    relation: BossRelation = BossRelation.HOSTILE
    narrative: BossNarrativePhase | None = field(default_factory=BossNarrativePhase)

    def __post_init__(self) -> None:
        if self.xyz is None:
            self.xyz = Vec3(float(self.pos.x), BODY_HEIGHT, float(self.pos.y))

    def update(
        self,
        dt: float,
        friendlies: Iterable[tuple[Hashable, Vec3]],
        swarm_members: Iterable[Hashable],
        is_walkable: Callable[[int, int], bool],
        rng: random.Random,
    ) -> list[BossAction]:
        """Advance the attack cycle; return the actions the boss takes."""
        if self.relation is not BossRelation.HOSTILE:
            return []
        if self.narrative is not None and self.narrative.in_interphase:
            return []
        self.ai.phase_timer -= dt
        if self.ai.phase_timer > 0.0:
            return []
        enraged = self.health.current < self.health.max * ENRAGE_FRACTION
        speed = ENRAGED_SPEED if enraged else 1.0

        step = self.ai.phase % 3
        actions: list[BossAction]
        if step == 0:
            count = ZEALOTS_ENRAGED if enraged else ZEALOTS_NORMAL
            actions = [
                Summon(
                    pos=GridPos(max(self.pos.x + (i - count // 2) * 2, 0), self.pos.y),
                    hp=ZEALOT_HP,
                    damage=ZEALOT_DMG,
                    color=ZEALOT_COLOR,
                )
                for i in range(count)
            ]
            self.ai.phase_timer = PHASE_0_TIMER * speed
        elif step == 1:
            actions = [
                Damage(target=target, amount=PROPHET_DMG, attacker_pos=self.pos)
                for target in within_radius(self.xyz, friendlies, PULSE_RADIUS)
            ]
            self.ai.phase_timer = PHASE_1_TIMER * speed
        else:
            landing = blink(self.pos, is_walkable, rng)
            if landing is not None:
                self.pos = landing
                self.xyz = Vec3(float(landing.x), BODY_HEIGHT, float(landing.y))
            member = next(iter(swarm_members), None)
            actions = (
                [Controlled(timer=CONTROL_DURATION, target=member)]
                if member is not None
                else []
            )
            self.ai.phase_timer = PHASE_2_TIMER * speed
        self.ai.phase = (self.ai.phase + 1) % 256
        return actions