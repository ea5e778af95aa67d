"""Boss movement on the grid and the adds summoned between narrative phases."""

from __future__ import annotations

from enum import Enum
from typing import Callable

from necrophage.boss.common import Summon
from necrophage.combat import GridPos
from necrophage.enemy_ai import direct_step

ADD_SPACING = 2
ADD_ROW_OFFSET = 2


class BossKind(Enum):
    """Which faction boss a fight is against."""

    VARRO = "varro"
    HARLAN = "harlan"
    PROPHET = "prophet"
    GENERAL = "general"


# count, hp, damage, colour of the adds each boss calls in between phases.
_INTERPHASE_ADDS = {
    BossKind.VARRO: (4, 20.0, 6.0, (0.85, 0.65, 0.05)),
    BossKind.HARLAN: (4, 22.0, 5.0, (0.4, 0.45, 0.55)),
    BossKind.PROPHET: (5, 18.0, 5.0, (0.35, 0.05, 0.05)),
}


def boss_chase_step(
    boss_pos: GridPos, target: GridPos, is_walkable: Callable[[int, int], bool]
) -> GridPos:
    """One step of a hostile boss towards its target: diagonal, then x, then y."""
    return direct_step(boss_pos, target, is_walkable)


def interphase_adds(kind: BossKind | str, boss_pos: GridPos) -> list[Summon]:
    """Adds spawned in a row two tiles beyond the boss when a new phase begins.

    Bosses without inter-phase adds get an empty list. An unknown kind
    raises ValueError.
    """
    spec = _INTERPHASE_ADDS.get(BossKind(kind))
    if spec is None:
        return []
    count, hp, damage, color = spec
    return [
        Summon(
            pos=GridPos(
                max(boss_pos.x + (i - count // 2) * ADD_SPACING, 0),
                boss_pos.y + ADD_ROW_OFFSET,
            ),
            hp=hp,
            damage=damage,
            color=color,
        )
        for i in range(count)
    ]