from __future__ import annotations
import logging
from collections import deque
from dataclasses import dataclass, field

from carpark.rh.rh_exceptions import CarParkInvariantError
from carpark.rh.rh_grid import PLAYER_ID, Grid
from carpark.rh.rh_puzzle import CarPark

logger = logging.getLogger(__name__)

StateKey = tuple[tuple[int, ...], ...]

@dataclass
class Turn:
    """ One continuous slide of a single vehicle """
    vehicle_id: int
    direction: str
    steps: int = 1

    def extended(self) -> "Turn":
        return Turn(self.vehicle_id, self.direction, self.steps + 1)

    def as_dict(self) -> dict[str, str | int]:
        return {"name": self.vehicle_id, "direction": self.direction, "distance": self.steps}

@dataclass
class Solution:
    turns: list[Turn]
    states_visited: int = 0

    @property
    def turn_count(self) -> int:
        return len(self.turns)

    def to_moves(self) -> list[dict[str, str | int]]:
        return [turn.as_dict() for turn in self.turns]

def board_key(grid: Grid) -> StateKey:
    return tuple(tuple(row) for row in grid)

@dataclass
class _Branch:
    """ A unit step still to be tried from `parent` """
    parent: CarPark
    turns: list[Turn]
    vehicle_id: int
    direction: str

@dataclass
class SearchSession:
    """
    Depth-first search for a solution with the fewest turns.

    Edges of the search are unit steps. A step that continues the previous
    step (same car, same direction) extends the last turn; anything else
    starts a new one. `visited` remembers the smallest turn count each grid
    was reached with:

    - seen with fewer turns: the branch cannot do better and stops
    - seen with as many turns: only the continuation of the current slide is
      explored from it
    - otherwise the count is recorded and the branch is expanded

    Branches are kept on an explicit stack, pushed in reverse so they pop in
    the same order a recursive walk would take them. Branches longer than
    `limit` turns, when given, are cut.
    """

    car_park: CarPark
    limit: int | None = None
    visited: dict[StateKey, int] = field(default_factory=dict)
    best: list[Turn] | None = None

    def _children(self, car_park: CarPark, turns: list[Turn], continuation_only: bool) -> list[_Branch]:
        branches = []
        last = turns[-1] if turns else None
        # a car that just left through the exit has nothing to continue
        if last is not None and last.vehicle_id in car_park.vehicles:
            branches.append(_Branch(car_park, turns, last.vehicle_id, last.direction))
        if continuation_only:
            return branches

        for car in sorted(car_park.vehicles):
            if last is not None and car == last.vehicle_id:
                continue
            for direction in car_park.vehicles[car].directions:
                branches.append(_Branch(car_park, turns, car, direction))
        return branches

    def _expand(self, branch: _Branch):
        """ Try one branch; returns the children to push """
        parent = branch.parent
        if not parent.can_step(branch.vehicle_id, branch.direction):
            return []
        car_park = parent.clone()
        car_park.step(branch.vehicle_id, branch.direction, check=False)

        turns = branch.turns
        last = turns[-1] if turns else None
        if last is not None and (last.vehicle_id, last.direction) == (branch.vehicle_id, branch.direction):
            turns = turns[:-1] + [last.extended()]
        else:
            turns = turns + [Turn(branch.vehicle_id, branch.direction)]
        turn_count = len(turns)

        if self.limit is not None and turn_count > self.limit:
            return []

        if PLAYER_ID not in car_park.vehicles:
            if self.best is None or turn_count < len(self.best):
                logger.debug("Found a solution with %d turns", turn_count)
                self.best = turns
            return []

        if self.best is not None and turn_count >= len(self.best):
            return []

        key = board_key(car_park.grid)
        seen = self.visited.get(key)
        if seen is not None and seen < turn_count:
            return []
        if seen is None or turn_count < seen:
            self.visited[key] = turn_count

        return self._children(car_park, turns, continuation_only=seen == turn_count)

    def run(self) -> Solution | None:
        start = self.car_park.clone()
        start.check_consistent()
        self.visited[board_key(start.grid)] = 0

        stack = list(reversed(self._children(start, [], continuation_only=False)))
        while stack:
            branch = stack.pop()
            stack.extend(reversed(self._expand(branch)))

        logger.debug("Search finished after recording %d states", len(self.visited))
        if self.best is None:
            return None
        return Solution(turns=self.best, states_visited=len(self.visited))

def _slides(car_park: CarPark):
    """ Every car park one turn away, one per (car, direction, distance) """
    for car in sorted(car_park.vehicles):
        for direction in car_park.vehicles[car].directions:
            sim = car_park.clone()
            while sim.step(car, direction, check=False):
                yield sim
                if car not in sim.vehicles:
                    break
                sim = sim.clone()

def min_turn_count(car_park: CarPark) -> int | None:
    """
    Breadth-first search where a whole slide is one move.

    Returns the fewest turns that get the player car out, or None when it
    never gets out. Only the count is kept, not the turns themselves.
    """
    start = car_park.clone()
    start.check_consistent()
    if start.solved():
        return 0

    q = deque([(start, 0)])
    visited = {board_key(start.grid)}

    while q:
        state, depth = q.popleft()
        for nxt in _slides(state):
            if nxt.solved():
                return depth + 1
            key = board_key(nxt.grid)
            if key in visited:
                continue
            visited.add(key)
            q.append((nxt, depth + 1))

    return None

def solve(car_park: CarPark) -> Solution | None:
    """
    Find a solution for car_park with the minimum number of turns.

    Returns None when the player car can never reach the exit. The given
    car park is not modified.

    min_turn_count() settles the number of turns first; the depth-first
    search then only follows branches that fit in it.
    """
    if car_park.solved():
        return Solution(turns=[], states_visited=0)

    limit = min_turn_count(car_park)
    if limit is None:
        logger.debug("No solution exists")
        return None

    solution = SearchSession(car_park, limit=limit).run()
    if solution is None:
        raise CarParkInvariantError(f"Search found no solution within {limit} turns.")
    return solution
