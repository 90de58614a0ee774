from collections import deque
from typing import Optional, Set

from ..core.position import Position
from .map import DungeonMap


def reachable_from(grid: DungeonMap, start: Position) -> Set[Position]:
    """Return every traversable position reachable from ``start`` (4-neighbour)."""
    if not grid.contains(start) or not grid.is_traversable(start):
        return set()
    seen = {start}
    q = deque([start])
    while q:
        p = q.popleft()
        for n in grid.neighbors_4(p):
            if n not in seen and grid.is_traversable(n):
                seen.add(n)
                q.append(n)
    return seen


def find_path_bfs(grid: DungeonMap, start: Position, goal: Position) -> Optional[int]:
    """Breadth-first shortest path length over traversable cells; None if unreachable."""
    if not grid.is_traversable(start) or not grid.is_traversable(goal):
        return None
    q = deque([(start, 0)])
    seen = {start}
    while q:
        p, d = q.popleft()
        if p == goal:
            return d
        for n in grid.neighbors_4(p):
            if n not in seen and grid.is_traversable(n):
                seen.add(n)
                q.append((n, d + 1))
    return None


def unreachable_floor(grid: DungeonMap, start: Position) -> Set[Position]:
    """Traversable positions that cannot be reached from ``start``."""
    reached = reachable_from(grid, start)
    return {p for p in grid.positions() if grid.is_traversable(p) and p not in reached}
