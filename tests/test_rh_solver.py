import pytest

from carpark.rh.rh_puzzle import validate
from carpark.rh.rh_solver import SearchSession, Solution, Turn, board_key, min_turn_count, solve

ONE_TURN = [
    [0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 1, 1],
    [0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0],
]

TWO_TURNS = [
    [0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 2],
    [0, 0, 0, 1, 1, 2],
    [0, 0, 0, 0, 0, 3],
    [0, 0, 0, 0, 0, 3],
    [0, 0, 0, 0, 0, 0],
]

THREE_TURNS = [
    [0, 0, 0, 0, 0, 0],
    [0, 0, 0, 2, 0, 0],
    [1, 1, 0, 2, 0, 0],
    [0, 0, 0, 2, 0, 0],
    [0, 0, 0, 0, 0, 0],
    [0, 0, 3, 3, 0, 0],
]

SAMPLE = [
    [2, 2, 0, 3, 0, 0],
    [0, 0, 0, 3, 0, 4],
    [0, 1, 1, 3, 0, 4],
    [5, 0, 0, 0, 0, 0],
    [5, 0, 6, 6, 0, 0],
    [0, 0, 0, 0, 7, 7],
]

SMALL = [
    [0, 0, 2, 0, 0],
    [0, 0, 2, 3, 3],
    [1, 1, 0, 4, 0],
    [0, 0, 0, 4, 0],
    [5, 5, 5, 0, 0],
]

CROWDED = [
    [2, 2, 3, 0, 0],
    [0, 0, 3, 4, 4],
    [0, 1, 1, 0, 5],
    [6, 6, 7, 0, 5],
    [0, 0, 7, 8, 8],
]

# nothing can move at all
JAMMED = [
    [2, 2, 4, 5],
    [1, 1, 4, 5],
    [3, 3, 6, 6],
]

# car 3 fills its whole column; car 4 can still move
WALLED_IN = [
    [0, 0, 3, 0, 4],
    [1, 1, 3, 0, 4],
    [2, 2, 3, 0, 0],
]


EXITING_BLOCKER = [
    [0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0],
    [1, 1, 0, 0, 2, 2],
    [0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0],
]

BEGINNER_CARD = [
    [2, 2, 0, 0, 0, 3],
    [4, 0, 0, 5, 0, 3],
    [4, 1, 1, 5, 0, 3],
    [4, 0, 0, 5, 0, 0],
    [6, 0, 0, 0, 7, 7],
    [6, 0, 8, 8, 8, 0],
]

def _exit_row_1(grid):
    return validate(grid, exit_row=1)


def brute_force_turns(car_park):
    """ Breadth-first search where every slide of any length is one turn """
    start = car_park.clone()
    frontier = [start]
    seen = {board_key(start.grid)}
    depth = 0
    while frontier:
        depth += 1
        next_frontier = []
        for state in frontier:
            for car in sorted(state.vehicles):
                for direction in state.vehicles[car].directions:
                    moved = state.clone()
                    while car in moved.vehicles and moved.step(car, direction):
                        if moved.solved():
                            return depth
                        key = board_key(moved.grid)
                        if key not in seen:
                            seen.add(key)
                            next_frontier.append(moved.clone())
        frontier = next_frontier
    return None


def replay(car_park, solution):
    sim = car_park.clone()
    for turn in solution.turns:
        sim.move(turn.vehicle_id, turn.direction, turn.steps)
    return sim


def test_board_key_is_exact():
    grid = [row[:] for row in SAMPLE]
    assert board_key(grid) == board_key(SAMPLE)
    assert hash(board_key(grid)) == hash(board_key(SAMPLE))
    grid[5][0] = 8
    assert board_key(grid) != board_key(SAMPLE)
    assert board_key([[1, 0], [0, 1]]) != board_key([[1, 0, 0, 1]])


def test_player_next_to_exit_needs_one_turn():
    solution = solve(validate(ONE_TURN))
    assert solution.turns == [Turn(1, "right", 1)]
    assert solution.turn_count == 1


def test_blocker_moves_up_then_player_drives_out():
    solution = solve(validate(TWO_TURNS))
    assert solution.turns == [Turn(2, "up", 1), Turn(1, "right", 2)]


def test_three_turns():
    car_park = validate(THREE_TURNS)
    solution = solve(car_park)
    assert solution.turn_count == 3
    assert solution.turns[1] == Turn(2, "down", 2)
    assert solution.turns[2] == Turn(1, "right", 5)
    assert replay(car_park, solution).solved()


@pytest.mark.parametrize("grid", [JAMMED, WALLED_IN])
def test_enclosed_player_is_unsolvable(grid):
    assert solve(_exit_row_1(grid)) is None


@pytest.mark.parametrize("car_park", [
    validate(ONE_TURN),
    validate(TWO_TURNS),
    validate(THREE_TURNS),
    validate(SAMPLE),
    validate(SMALL),
    validate(CROWDED),
    _exit_row_1(WALLED_IN),
], ids=["one", "two", "three", "sample", "small", "crowded", "walled-in"])
def test_solution_is_minimal_and_replays(car_park):
    expected = brute_force_turns(car_park)
    solution = solve(car_park)
    if expected is None:
        assert solution is None
        return
    assert solution.turn_count == expected
    assert replay(car_park, solution).solved()


def test_turns_collapse_unit_steps():
    solution = solve(validate(SAMPLE))
    for prev, turn in zip(solution.turns, solution.turns[1:]):
        assert (prev.vehicle_id, prev.direction) != (turn.vehicle_id, turn.direction)
    assert all(turn.steps >= 1 for turn in solution.turns)


def test_solve_is_deterministic_and_pure():
    car_park = validate(SAMPLE)
    before = car_park.clone()
    first = solve(car_park)
    second = solve(car_park)
    assert first.turns == second.turns
    assert car_park == before


def test_solution_helpers():
    solution = Solution(turns=[Turn(2, "up", 1), Turn(1, "right", 2)], states_visited=4)
    assert solution.turn_count == 2
    assert solution.to_moves() == [
        {"name": 2, "direction": "up", "distance": 1},
        {"name": 1, "direction": "right", "distance": 2},
    ]


def test_session_records_start_and_keeps_table():
    car_park = validate(TWO_TURNS)
    session = SearchSession(car_park)
    solution = session.run()
    assert session.visited[board_key(TWO_TURNS)] == 0
    assert solution.states_visited == len(session.visited)
    assert session.best == solution.turns
    assert all(count >= 0 for count in session.visited.values())


def test_already_solved_car_park():
    car_park = validate(ONE_TURN)
    car_park.move(1, "right", 1)
    assert solve(car_park).turns == []


def test_other_car_leaving_through_exit_ends_its_slide():
    car_park = validate(EXITING_BLOCKER)
    solution = solve(car_park)
    assert solution.turns == [Turn(2, "right", 1), Turn(1, "right", 5)]
    assert replay(car_park, solution).solved()


def test_beginner_card_in_eight_turns():
    car_park = validate(BEGINNER_CARD)
    solution = solve(car_park)
    assert solution.turn_count == 8
    assert replay(car_park, solution).solved()


@pytest.mark.parametrize("grid, expected", [
    (ONE_TURN, 1),
    (TWO_TURNS, 2),
    (EXITING_BLOCKER, 2),
    (BEGINNER_CARD, 8),
])
def test_min_turn_count(grid, expected):
    assert min_turn_count(validate(grid)) == expected


def test_min_turn_count_unsolvable():
    assert min_turn_count(_exit_row_1(JAMMED)) is None


def test_session_limit_cuts_longer_branches():
    car_park = validate(THREE_TURNS)
    assert SearchSession(car_park, limit=2).run() is None
    assert SearchSession(car_park, limit=3).run().turn_count == 3
