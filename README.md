# necrophage

Game rules for an isometric action RPG in which you play a parasite
fighting its way through a crime syndicate, a police precinct, a cult and
the military. The package holds plain Python rules only: combat, enemy
behaviour, boss encounters, camera motion and a frame-timing report. It has
no dependencies beyond the standard library.

## Modules

- `necrophage.combat`: `GridPos` with Chebyshev distance, `Health`,
  `Attack` cooldowns, the `AttackMode`, `MeleeAttackShape` and `EnemyAI`
  enums, `DamageEvent`, the corpse fade-out `Dying`, and the functions
  `has_line_of_sight`, `apply_damage`, `death_biomass_value`,
  `heal_on_kill`, `dissolve_alpha` and `dist_xz`.
- `necrophage.enemy_ai`: `EnemyState` (sight range, lost timer, chase
  target), `find_visible_target`, `alert_nearby`, `patrol_step`,
  `direct_step`, `flee_step`, and straight-line `Projectile`s made with
  `spawn_projectile`.
- `necrophage.melee`: telegraphed jab and broad hit zones (`melee_hits`),
  the fan of points for a broad telegraph (`build_sector_points`), the
  harvest window (`HarvestReward`, `HarvestWindow`, `roll_harvest_reward`,
  `nearest_harvestable`) and player target picking
  (`player_melee_targets`, `nearest_ranged_target`).
- `necrophage.camera`: `Vec3` and `CameraRig`, an isometric follow camera
  with a follow light, scroll zoom and trauma-based shake.
- `necrophage.boss.common`: `BossRelation`, `BossAI`, the boss actions
  `Damage`, `Summon`, `Telegraph` and `Controlled`, ground
  `TelegraphMarker`s, `BossNarrativePhase` and `within_radius`.
- `necrophage.boss.varro`, `necrophage.boss.harlan`,
  `necrophage.boss.prophet`, `necrophage.boss.general`: the bosses
  `Varro`, `Harlan`, `Prophet` (with `blink`), `General` and `Tank`.
- `necrophage.boss.arena`: `BossKind`, `boss_chase_step` and
  `interphase_adds`.
- `necrophage.report`: `FrameStats` and `build_report`, which assemble a
  JSON-ready state report for a run.

Boss `update` methods do not touch a world; they return a list of actions
(`Damage`, `Summon`, `Telegraph`, `Controlled`) for the caller to carry out.

## Examples

Line of sight on the tile grid; any wall strictly between the two tiles
blocks it:

```python
from necrophage.combat import GridPos, has_line_of_sight

walls = {(5, 0)}

def is_wall(x, y):
    return (x, y) in walls

has_line_of_sight(is_wall, GridPos(0, 0), GridPos(9, 0))   # False
has_line_of_sight(is_wall, GridPos(0, 0), GridPos(5, 5))   # True
```

A fatal hit on a harvestable enemy leaves it at 5 % of its maximum health:

```python
from necrophage.combat import Health, apply_damage

guard = Health(10.0)
apply_damage(guard, 999.0, harvestable=True)    # 0.5
```

Driving a boss:

```python
from necrophage.boss.varro import Varro
from necrophage.camera import Vec3
from necrophage.combat import GridPos

varro = Varro()
actions = varro.update(4.0, GridPos(10, 10), Vec3(10.0, 0.5, 10.0), [], "player")
# two Summon actions for bodyguards at (8, 10) and (10, 10)
```

A run report:

```python
import json
from necrophage.report import FrameStats, build_report

stats = FrameStats()
for _ in range(120):
    stats.record(1 / 60)
report = build_report(stats.current_frame, (80.0, 100.0), [False, True], 3, 12.0, stats)
print(json.dumps(report))
```

## Rules worth knowing

- Below 10 % health an ordinary enemy can be harvested for 2.5 seconds, for
  health, biomass or nothing, each equally likely.
- Enemy melee strikes are telegraphed for 0.6 seconds. Jabs hit a strip
  0.8 wide and 3.0 long in front of the enemy; broad swings hit a 45° arc
  of radius 3.0.
- Enemies see up to 8 tiles, wake patrolling enemies within 6 tiles when
  they spot you, and give up the chase after 2 seconds out of sight.
- Faction bosses enter an invulnerable inter-phase at 66 % and 33 % health
  until their adds are dead. General Marak never surrenders; the tank's
  `on_death` makes him vulnerable.

## What the package does not do

It draws nothing, reads no input and runs no game loop: there is no
window, renderer or command to start a game or a headless run. It keeps no
save data. It has no level maps or path finding; tile checks are passed in
as functions. Biomass growth tiers and psychic power are not part of it;
`death_biomass_value` and the harvest reward only report how much biomass
is due.