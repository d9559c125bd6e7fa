import argparse
import logging
import sys

from carpark.data.data_loader import Level, load_level, save_level
from carpark.rh.rh_exceptions import *
from carpark.rh.rh_puzzle import CarPark, validate
from carpark.rh.rh_solver import Solution, Turn, solve
from carpark.utils.config import EXIT_ROW
from carpark.utils.logs import setup_script_logger

logger = logging.getLogger(__name__)

def evaluate_solution(car_park: CarPark, turns: list[Turn]):
    """ Replay turns on a copy of car_park; returns (completed turns, solved, error) """
    sim = car_park.clone()

    completed_moves = 0
    error = None

    for turn in turns:
        try:
            sim.move(turn.vehicle_id, turn.direction, turn.steps)
            completed_moves += 1
        except InvalidMove as e:
            error = f"Invalid move: {turn}. {e}"
            break
        except CarNotFound as e:
            error = f"Car not found: {turn.vehicle_id}. {e}"
            break

    return completed_moves, sim.solved(), error

def validate_solution(car_park: CarPark, turns: list[Turn], min_turns: int | None = None):
    sim = car_park.clone()

    for i, turn in enumerate(turns, 1):
        try:
            sim.move(turn.vehicle_id, turn.direction, turn.steps)
        except CarNotFound as e:
            logger.info("turn %d car not found: %s", i, e)
            return False, "CAR_NOT_FOUND"
        except InvalidMove as e:
            logger.info("turn %d invalid: %s", i, e)
            return False, "INVALID_MOVE"

    if not sim.solved():
        return False, "UNSOLVED"

    if min_turns is not None and len(turns) != min_turns:
        return True, "NOT_OPTIMAL"

    return True, "OPTIMAL"

def write_solved_level(file_path: str, grid, exit_row: int = EXIT_ROW) -> Solution:
    """ Validate and solve grid, then store it with its minimal turn count """
    car_park = validate(grid, exit_row=exit_row)
    solution = solve(car_park)
    if solution is None:
        raise Unsolvable(f"Level {file_path} has no solution; nothing written.")

    save_level(file_path, grid, solution.turn_count)
    logger.info("Saved %s with %d turns", file_path, solution.turn_count)
    return solution

def verify_level(level: Level, exit_row: int = EXIT_ROW):
    """
    Check the turn count stored with a level against the solver.

    Returns (ok, label, solution) where label is one of OK, MISSING,
    MISMATCH or UNSOLVABLE.
    """
    car_park = validate(level.grid, exit_row=exit_row)
    solution = solve(car_park)

    if solution is None:
        return False, "UNSOLVABLE", None
    if level.min_turns is None:
        return False, "MISSING", solution
    if level.min_turns != solution.turn_count:
        return False, "MISMATCH", solution
    return True, "OK", solution

def main(argv=None):
    parser = argparse.ArgumentParser(description="Check the turn counts stored in level files.")
    parser.add_argument("levels", nargs="+", help="Level files to verify")
    parser.add_argument("--exit-row", type=int, default=EXIT_ROW, help="Row index of the exit")
    args = parser.parse_args(argv)

    setup_script_logger("carpark.verify")

    failures = 0
    for path in args.levels:
        try:
            level = load_level(path)
            ok, label, solution = verify_level(level, exit_row=args.exit_row)
        except (CarParkException, OSError) as e:
            print(f"{path}: INVALID ({e})")
            failures += 1
            continue

        found = solution.turn_count if solution is not None else "-"
        print(f"{path}: {label} (stored {level.min_turns}, solver {found})")
        if not ok:
            failures += 1

    return 1 if failures else 0

if __name__ == "__main__":
    sys.exit(main())
