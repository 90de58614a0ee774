from .generator import MazeGenerator, level1_entry, level1_spawn
from .map import DungeonMap
from .pathfinding import find_path_bfs, reachable_from, unreachable_floor

__all__ = [
    "DungeonMap",
    "MazeGenerator",
    "find_path_bfs",
    "level1_entry",
    "level1_spawn",
    "reachable_from",
    "unreachable_floor",
]
