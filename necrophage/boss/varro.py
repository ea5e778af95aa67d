"""Don Varro, the syndicate boss: bodyguards, a ranged throw and a blast."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Hashable, Iterable

from necrophage.boss.common import (
    ENRAGE_FRACTION,
    BossAction,
    BossAI,
    BossNarrativePhase,
    BossRelation,
    Damage,
    Summon,
    within_radius,
)
from necrophage.camera import Vec3
from necrophage.combat import GridPos, Health

VARRO_HP = 300.0
VARRO_DMG = 20.0
VARRO_STATS = (VARRO_HP, VARRO_DMG)

SUMMON_COUNT_NORMAL = 2
SUMMON_COUNT_ENRAGED = 3
RANGED_DMG_MULT = 0.8
AOE_RADIUS = 3.0
PHASE_0_TIMER = 8.0
PHASE_1_TIMER = 2.5
PHASE_2_TIMER = 4.0
ENRAGED_SPEED = 0.6

BODYGUARD_HP = 30.0
BODYGUARD_DMG = 8.0
BODYGUARD_COLOR = (0.9, 0.7, 0.1)


@dataclass
class Varro:
    """Cycles summon, ranged throw and area blast while hostile."""

    health: Health = field(default_factory=lambda: Health(VARRO_HP))
    ai: BossAI = field(default_factory=BossAI)
    relation: BossRelation = BossRelation.HOSTILE
    narrative: BossNarrativePhase | None = field(default_factory=BossNarrativePhase)

    def update(
        self,
        dt: float,
        boss_pos: GridPos,
        boss_xyz: Vec3,
        friendlies: Iterable[tuple[Hashable, Vec3]],
        player: Hashable,
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
            count = SUMMON_COUNT_ENRAGED if enraged else SUMMON_COUNT_NORMAL
            actions = [
                Summon(
                    pos=GridPos(max(boss_pos.x + (i - count // 2) * 2, 0), boss_pos.y),
                    hp=BODYGUARD_HP,
                    damage=BODYGUARD_DMG,
                    color=BODYGUARD_COLOR,
                )
                for i in range(count)
            ]
            self.ai.phase_timer = PHASE_0_TIMER * speed
        elif step == 1:
            actions = [
                Damage(target=player, amount=VARRO_DMG * RANGED_DMG_MULT, attacker_pos=boss_pos)
            ]
            self.ai.phase_timer = PHASE_1_TIMER * speed
        else:
            actions = [
                Damage(target=target, amount=VARRO_DMG, attacker_pos=boss_pos)
                for target in within_radius(boss_xyz, friendlies, AOE_RADIUS)
            ]
            self.ai.phase_timer = PHASE_2_TIMER * speed
        self.ai.phase = (self.ai.phase + 1) % 256
        return actions