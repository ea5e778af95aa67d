"""Chief Harlan, the precinct boss: burst fire, shield wall and tactical strikes."""

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
    Telegraph,
    within_radius,
)
from necrophage.camera import Vec3
from necrophage.combat import GridPos, Health

HARLAN_HP = 350.0
HARLAN_DMG = 18.0
HARLAN_STATS = (HARLAN_HP, HARLAN_DMG)

AOE_RADIUS = 4.0
BURST_COUNT = 3
BURST_INTERVAL = 0.15
SHIELD_DURATION = 2.0
TELEGRAPH_DELAY = 1.5
ENRAGED_TELEGRAPH_FACTOR = 0.7
ENRAGED_SPEED = 0.6

PHASE_0_TIMER = 4.0
PHASE_1_TIMER = 6.0
PHASE_2_TIMER = 5.0


@dataclass
class _Burst:
    remaining: int
    interval: float


@dataclass
class Harlan:
    """Cycles a three-shot burst, a shield wall with counter blast, and a strike."""

    health: Health = field(default_factory=lambda: Health(HARLAN_HP))
    ai: BossAI = field(default_factory=BossAI)
    relation: BossRelation = BossRelation.HOSTILE
    narrative: BossNarrativePhase | None = field(default_factory=BossNarrativePhase)
    invincible: bool = False
    shield_timer: float | None = None
    burst: _Burst | None = None

    def _tick_burst(self, dt: float, player: Hashable) -> list[BossAction]:
        burst = self.burst
        if burst is None:
            return []
        burst.interval -= dt
        if burst.interval > 0.0 or burst.remaining <= 0:
            return []
        burst.remaining -= 1
        burst.interval = BURST_INTERVAL
        if burst.remaining == 0:
            self.burst = None
        return [Damage(target=player, amount=HARLAN_DMG)]

    def update(
        self,
        dt: float,
        boss_pos: GridPos,
        boss_xyz: Vec3,
        player: Hashable,
        player_xyz: Vec3,
        friendlies: Iterable[tuple[Hashable, Vec3]],
    ) -> list[BossAction]:
        """Advance the burst and the attack cycle; return the actions taken."""
        actions = self._tick_burst(dt, player)
        if self.relation is not BossRelation.HOSTILE:
            return actions
        if self.narrative is not None and self.narrative.in_interphase:
            return actions
        self.ai.phase_timer -= dt
        if self.ai.phase_timer > 0.0:
            return actions
        enraged = self.health.current < self.health.max * ENRAGE_FRACTION
        speed = ENRAGED_SPEED if enraged else 1.0

        step = self.ai.phase % 3
        if step == 0:
            actions.append(Damage(target=player, amount=HARLAN_DMG, attacker_pos=boss_pos))
            self.burst = _Burst(remaining=BURST_COUNT - 1, interval=BURST_INTERVAL)
            self.ai.phase_timer = PHASE_0_TIMER * speed
        elif step == 1:
            self.invincible = True
            self.shield_timer = SHIELD_DURATION
            actions.extend(
                Damage(target=target, amount=HARLAN_DMG * 1.5, attacker_pos=boss_pos)
                for target in within_radius(boss_xyz, friendlies, AOE_RADIUS)
            )
            self.ai.phase_timer = PHASE_1_TIMER * speed
        else:
            delay = TELEGRAPH_DELAY * ENRAGED_TELEGRAPH_FACTOR if enraged else TELEGRAPH_DELAY
            actions.append(
                Telegraph(
                    center=player_xyz,
                    radius=AOE_RADIUS * 0.6,
                    delay=delay,
                    damage=HARLAN_DMG * 2.0,
                )
            )
            self.ai.phase_timer = PHASE_2_TIMER * speed
        self.ai.phase = (self.ai.phase + 1) % 256
        return actions

    def tick_shield(self, dt: float) -> bool:
        """Count down the shield wall; return True when it drops."""
        if self.shield_timer is None:
            return False
        self.shield_timer -= dt
        if self.shield_timer > 0.0:
            return False
        self.shield_timer = None
        self.invincible = False
        return True