# towerdefence

The rules of a tower defence game as plain Python objects: enemies walking a
path, towers that target and fire at them, the resources of a play session,
click-to-place tower building, buttons driven by mouse state, and player
progress kept in an SQLite file. You drive it from your own game loop and
draw it with your own renderer.

The package has no runtime dependencies beyond the standard library.

## Modules

- `towerdefence.entities`: `Vec2`, `ResourceType`, `resource_type_from_string`,
  `Resource`, `GameObject`, `Enemy` and `Projectile`. An `Enemy` follows its
  waypoints, can be slowed for one frame (`slow`, capped at 80%) and takes
  damage reduced by its defence (`deal_damage`). A `Projectile` flies towards
  its target's centre and sets `hit_enemy` when it gets there.
- `towerdefence.towers`: `Tower`, `FreezeTower`, `UpgradeData`,
  `PlacementState`, and `parse_upgrade_pair`, `parse_upgrade_map` and
  `dump_upgrade_map` for upgrade data in JSON form. A `Tower` targets the enemy
  farthest along the path among those within its radius and calls a `fire`
  callback each time its attack timer runs out. A `FreezeTower` slows every
  enemy in its radius instead.
- `towerdefence.handlers`: `upgrade_tower_attribute`, `TowerUpgradeHandler`
  (applies and pays for the next level of an upgrade) and `SellTowerHandler`
  (refunds and removes a tower).
- `towerdefence.economy`: `GameSession`, `PurchaseManager`, `SellManager` and
  `collect_finished_enemies`, which removes dead enemies (adding their drop)
  and those that reached the end of the path (costing one health).
- `towerdefence.placement`: `TowerPlacement`, the pick, drag and place
  sequence for a new tower.
- `towerdefence.collision`: `check_collision`, `check_collision_with_rect` and
  `CollisionChecker`, which tells whether a tower may stand where it is
  (not on the path area, not on another tower, inside the map).
- `towerdefence.selection`: `InputState` (mouse position, buttons, escape key)
  and `SelectOnClick`.
- `towerdefence.buttons`: `Button`, `MenuButton`, `MapMenuButton`,
  `SellTowerButton`, `TowerUpgradedButton`, `TowerButton`, `ButtonFrame`,
  `map_id_from_texture` and `map_label_id`.
- `towerdefence.level`: `Level`, `Tileset` and `Rect`, the data of a map.
- `towerdefence.repositories`, `towerdefence.database`,
  `towerdefence.progress`: player progress (coins and the best wave per map)
  in SQLite. `ProgressManager.load_all` creates missing tables and seeds three
  maps ("Pondside path", "Crescent cliff", "Looping turn") on first use.
- `towerdefence.resultset`: `execute_sql`, which runs SQL and returns a
  `ResultSet` of text values, raising `SqlError` on failure.
- `towerdefence.timestamp` and `towerdefence.calendar_math`: a `Timestamp`
  counted in hundredths of a second within its year, parsed from a fixed set of
  layouts (such as `"DD-MON-YYYY"` and `"YYYY-MM-DD HH:MM:SS"`), formatted with
  `strftime`, and shifted or compared with `add_days`, `add_months`,
  `diff_days`, `diff_seconds` and the like.

## Installation

```
pip install .
```

With the test dependencies:

```
pip install ".[test]"
```

## Example: a tower shooting an enemy

```python
from towerdefence.entities import Enemy, Resource, ResourceType
from towerdefence.towers import Tower

enemy = Enemy(0, 0, 32, 32, move_speed=2, max_health=10,
              drop=Resource(ResourceType.GREEN, 3))
enemy.set_path([(100, 0), (100, 100)])

tower = Tower(50, 40, 32, 32, name="Stump", color="green", damage=2,
              radius=80, attack_speed=1.0,
              base_cost=Resource(ResourceType.GREEN, 10))

shots = []
for _ in range(120):
    enemy.update()
    tower.target_enemy([enemy])
    tower.update(fire=shots.append, dt=1 / 60)
```

Each call to `fire` receives the tower; creating and moving projectiles is up
to the caller.

## Example: the session economy

```python
from towerdefence.economy import GameSession, PurchaseManager, SellManager

session = GameSession.new()     # 5 health; 30 green, 5 yellow, 5 red, 0 blue
seller = SellManager(session)
shop = PurchaseManager(session, seller, cost_lookup=lambda name: 10)

if shop.can_purchase_tower("stump", "green"):
    ...
```

Towers sell back for 40% of the resources spent on them, rounded down.

## Example: player progress

```python
from towerdefence.database import UserProgressDatabase
from towerdefence.progress import ProgressManager
from towerdefence.repositories import (
    GameProgressRepository,
    MapsProgressRepository,
    MapsRepository,
)

manager = ProgressManager(
    GameProgressRepository(),
    MapsRepository(),
    MapsProgressRepository(),
    UserProgressDatabase(),
)
manager.load_all("progress.sqlite")

for map_info in manager.maps():
    print(map_info.id, map_info.name)

manager.update_max_wave(1, 7)   # stored only if it beats the current best
manager.close()
```

## What this package does not do

- It draws nothing and opens no window; there is no renderer, sprite loading,
  font or sound handling.
- It has no game loop, game states (menus, pause, game over, victory) and no
  command to start a game.
- It does not read map files: a `Level` must be filled in by the caller.
- It does not spawn enemy waves or load tower, enemy and projectile
  definitions from data files, apart from parsing upgrade data already loaded
  from JSON.

## Running the tests

```
pytest
```