import argparse
import sys

from carpark.data.data_loader import load_level, save_level
from carpark.eval.eval_utils import describe_turn
from carpark.rh.rh_exceptions import CarParkException
from carpark.rh.rh_puzzle import validate
from carpark.rh.rh_solver import solve
from carpark.utils.config import EXIT_ROW
from carpark.utils.logs import setup_script_logger

def main(argv=None):
    parser = argparse.ArgumentParser(description="Solve a car park level with the fewest turns.")
    parser.add_argument("level", help="Path to a level file")
    parser.add_argument("--exit-row", type=int, default=EXIT_ROW, help="Row index of the exit")
    parser.add_argument("--write", action="store_true", help="Store the minimal turn count in the level file")
    args = parser.parse_args(argv)

    log = setup_script_logger("carpark.solve")

    try:
        level = load_level(args.level)
        car_park = validate(level.grid, exit_row=args.exit_row)
    except (CarParkException, OSError) as e:
        print(f"Cannot load {args.level}: {e}")
        return 1

    print(car_park.snapshot())
    solution = solve(car_park)
    if solution is None:
        print("Unsolvable.")
        return 1

    for i, turn in enumerate(solution.turns, 1):
        print(f"{i:3d}. {describe_turn(turn)}")
    print(f"Solved in {solution.turn_count} turns ({solution.states_visited} states visited).")

    if args.write:
        save_level(args.level, level.grid, solution.turn_count)
        log.info("Wrote turn count %d to %s", solution.turn_count, args.level)

    return 0

if __name__ == "__main__":
    sys.exit(main())
