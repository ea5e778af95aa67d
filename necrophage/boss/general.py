"""General Marak, the final military boss, and the tank that shields him."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Hashable

from necrophage.boss.common import (
    BossAction,
    BossAI,
    BossRelation,
    Damage,
    Summon,
    Telegraph,
)
from necrophage.camera import Vec3
from necrophage.combat import GridPos, Health

GENERAL_HP = 1000.0
GENERAL_DMG = 35.0
GENERAL_STATS = (GENERAL_HP, GENERAL_DMG)

BARRAGE_MARKERS_A = 3
BARRAGE_MARKERS_B = 2
TELEGRAPH_DELAY_A = 2.0
TELEGRAPH_DELAY_B = 1.0
BARRAGE_RADIUS = 2.5
BARRAGE_SPACING = 3.0
SHIELD_INTERVAL = 8.0
SHIELD_DURATION = 2.0
REINFORCE_INTERVAL = 15.0
COMBO_COUNT = 3
COMBO_INTERVAL = 0.2
PHASE_TIMER_A = 8.0
PHASE_TIMER_B = 5.0
PHASE_TIMER_C = 5.0
PHASE_TIMER_D = 1.8

REINFORCEMENT_HP = 60.0
REINFORCEMENT_DMG = 12.0
REINFORCEMENT_COLOR = (0.2, 0.45, 0.2)

TANK_HP = 600.0
TANK_DMG = 30.0
TANK_STATS = (TANK_HP, TANK_DMG)
TANK_CANNON_DELAY = 4.0
TANK_SPREAD_DELAY = 3.0
TANK_PHASE_0_TIMER = 6.0
TANK_PHASE_1_TIMER = 8.0
TANK_CANNON_RADIUS = 3.0
TANK_ENRAGED_SPEED = 0.65
TANK_ENRAGED_DELAY = 0.7
TANK_SPREAD_OFFSET = 3.0

GENERAL_NAME = "General Marak"
ENTRANCE_LINE = "The General steps from the wreckage."


@dataclass(frozen=True)
class EliteSummon(Summon):
    """Request to spawn an elite soldier."""


@dataclass
class ComboState:
    """Hits left in the enrage combo and time until the next one."""

    remaining: int
    interval: float


@dataclass
class ShieldCooldown:
    interval_timer: float = SHIELD_INTERVAL
    active_timer: float = 0.0
    shielded: bool = False


def _barrage(player_xyz: Vec3, count: int, delay: float) -> list[Telegraph]:
    return [
        Telegraph(
            center=player_xyz + Vec3((i - count // 2) * BARRAGE_SPACING, 0.0, 0.0),
            radius=BARRAGE_RADIUS,
            delay=delay,
            damage=GENERAL_DMG * 1.5,
        )
        for i in range(count)
    ]


def _reinforcements(boss_pos: GridPos) -> list[EliteSummon]:
    return [
        EliteSummon(
            pos=GridPos(max(boss_pos.x + (i - 1) * 3, 0), boss_pos.y - 3),
            hp=REINFORCEMENT_HP,
            damage=REINFORCEMENT_DMG,
            color=REINFORCEMENT_COLOR,
        )
        for i in range(3)
    ]


@dataclass
class General:
    """Four HP-driven phases: barrage, shield protocol, reinforcements, enrage.

    The General never surrenders.
    """

    health: Health = field(default_factory=lambda: Health(GENERAL_HP))
    ai: BossAI = field(default_factory=BossAI)
    relation: BossRelation = BossRelation.HOSTILE
    invincible: bool = False
    shield: ShieldCooldown | None = None
    reinforce_timer: float | None = None
    combo: ComboState | None = None

    def _tick_combo(self, dt: float, player: Hashable) -> list[BossAction]:
        combo = self.combo
        if combo is None:
            return []
        combo.interval -= dt
        if combo.interval > 0.0 or combo.remaining <= 0:
            return []
        combo.remaining -= 1
        combo.interval = COMBO_INTERVAL
        if combo.remaining == 0:
            self.combo = None
        return [Damage(target=player, amount=GENERAL_DMG * 1.2)]

    def _tick_shield(self, dt: float) -> None:
        shield = self.shield
        if shield is None:
            return
        if shield.shielded:
            shield.active_timer -= dt
            if shield.active_timer <= 0.0:
                shield.shielded = False
                self.invincible = False
        else:
            shield.interval_timer -= dt
            if shield.interval_timer <= 0.0:
                shield.shielded = True
                shield.interval_timer = SHIELD_INTERVAL
                shield.active_timer = SHIELD_DURATION
                self.invincible = True

    def update(
        self, dt: float, boss_pos: GridPos, player: Hashable, player_xyz: Vec3
    ) -> list[BossAction]:
        """Advance combo, shield, reinforcements and the phase cycle."""
        actions = self._tick_combo(dt, player)
        if self.relation is BossRelation.SURRENDERED:
            return actions

        hp_frac = self.health.current / self.health.max
        has_shield = self.shield is not None
        shield_range = 0.25 < hp_frac <= 0.75

        if shield_range:
            self._tick_shield(dt)

        if 0.25 < hp_frac <= 0.50:
            if self.reinforce_timer is None:
                self.reinforce_timer = REINFORCE_INTERVAL
            else:
                self.reinforce_timer -= dt
                if self.reinforce_timer <= 0.0:
                    self.reinforce_timer = REINFORCE_INTERVAL
                    actions.extend(_reinforcements(boss_pos))

        if shield_range and not has_shield:
            self.shield = ShieldCooldown()

        self.ai.phase_timer -= dt
        if self.ai.phase_timer > 0.0:
            return actions

        if hp_frac > 0.75:
            actions.extend(_barrage(player_xyz, BARRAGE_MARKERS_A, TELEGRAPH_DELAY_A))
            actions.extend(_reinforcements(boss_pos))
            self.ai.phase_timer = PHASE_TIMER_A
            if not has_shield:
                self.shield = ShieldCooldown()
        elif hp_frac > 0.50:
            actions.extend(_barrage(player_xyz, BARRAGE_MARKERS_B, TELEGRAPH_DELAY_B))
            self.ai.phase_timer = PHASE_TIMER_B
        elif hp_frac > 0.25:
            actions.extend(_barrage(player_xyz, BARRAGE_MARKERS_B, TELEGRAPH_DELAY_B))
            self.ai.phase_timer = PHASE_TIMER_C
        else:
            self.invincible = False
            self.shield = None
            actions.append(
                Damage(target=player, amount=GENERAL_DMG * 1.5, attacker_pos=boss_pos)
            )
            self.combo = ComboState(remaining=COMBO_COUNT - 1, interval=COMBO_INTERVAL)
            self.ai.phase_timer = PHASE_TIMER_D
        return actions


@dataclass
class Tank:
    """Sub-boss alternating a heavy cannon shot with a flanking spread burst."""

    health: Health = field(default_factory=lambda: Health(TANK_HP))
    ai: BossAI = field(default_factory=BossAI)
    relation: BossRelation = BossRelation.HOSTILE

    def update(self, dt: float, player_xyz: Vec3) -> list[Telegraph]:
        """Advance the attack cycle; return the telegraphs placed."""
        if self.relation is not BossRelation.HOSTILE:
            return []
        self.ai.phase_timer -= dt
        if self.ai.phase_timer > 0.0:
            return []
        enraged = self.health.current < self.health.max * 0.5
        speed = TANK_ENRAGED_SPEED if enraged else 1.0

        if self.ai.phase % 2 == 0:
            delay = TANK_CANNON_DELAY * TANK_ENRAGED_DELAY if enraged else TANK_CANNON_DELAY
            actions = [
                Telegraph(
                    center=player_xyz,
                    radius=TANK_CANNON_RADIUS,
                    delay=delay,
                    damage=TANK_DMG * 2.0,
                )
            ]
            self.ai.phase_timer = TANK_PHASE_0_TIMER * speed
        else:
            delay = TANK_SPREAD_DELAY * TANK_ENRAGED_DELAY if enraged else TANK_SPREAD_DELAY
            actions = [
                Telegraph(
                    center=player_xyz + Vec3(sign * TANK_SPREAD_OFFSET, 0.0, 0.0),
                    radius=TANK_CANNON_RADIUS * 0.7,
                    delay=delay,
                    damage=TANK_DMG * 1.2,
                )
                for sign in (-1.0, 1.0)
            ]
            self.ai.phase_timer = TANK_PHASE_1_TIMER * speed
        self.ai.phase = (self.ai.phase + 1) % 256
        return actions

    def on_death(self, general: General) -> tuple[str, str]:
        """Unlock the General; return the speaker and line of his entrance."""
        general.invincible = False
        return GENERAL_NAME, ENTRANCE_LINE