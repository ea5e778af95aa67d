"""Frame timing statistics and the end-of-run state report."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Iterable

_F32_MAX = 3.4028234663852886e38


def _round(value: float, digits: int) -> float:
    """Round half away from zero to the given number of decimals."""
    factor = 10.0**digits
    scaled = value * factor
    return math.copysign(math.floor(abs(scaled) + 0.5), scaled) / factor


@dataclass
class FrameStats:
    """Counts frames and keeps frame times, skipping the startup frame."""

    current_frame: int = 0
    frame_times_ms: list[float] = field(default_factory=list)

    def record(self, delta_secs: float) -> int:
        """Record one frame; return the new frame count."""
        self.current_frame += 1
        if self.current_frame > 1:
            self.frame_times_ms.append(delta_secs * 1000.0)
        return self.current_frame

    def summary(self) -> dict[str, Any]:
        samples = self.frame_times_ms
        avg = sum(samples) / len(samples) if samples else 0.0
        minimum = min(samples, default=_F32_MAX)
        maximum = max([0.0, *samples])
        ordered = sorted(samples)
        index = max(int(len(ordered) * 0.95) - 1, 0)
        p95 = ordered[index] if ordered else 0.0
        fps = 1000.0 / avg if avg > 0.0 else 0.0
        return {
            "fps_avg": _round(fps, 1),
            "frame_ms_avg": _round(avg, 2),
            "frame_ms_min": _round(minimum, 2),
            "frame_ms_max": _round(maximum, 2),
            "frame_ms_p95": _round(p95, 2),
            "sample_count": len(samples),
        }


def build_report(
    frame: int,
    player_health: tuple[float, float] | None,
    enemies: Iterable[bool],
    swarm_size: int | None,
    biomass: float | None,
    stats: FrameStats,
) -> dict[str, Any]:
    """Assemble the state report.

    ``enemies`` yields one flag per enemy, true when it is a corpse.
    Missing values are reported as -1.
    """
    hp, hp_max = player_health if player_health is not None else (-1.0, -1.0)
    alive = dead = 0
    for is_corpse in enemies:
        if is_corpse:
            dead += 1
        else:
            alive += 1
    return {
        "frame": frame,
        "enemies_alive": alive,
        "enemies_dead": dead,
        "player_hp": hp,
        "player_hp_max": hp_max,
        "swarm_size": swarm_size if swarm_size is not None else -1,
        "biomass": biomass if biomass is not None else -1.0,
        "timing": stats.summary(),
    }