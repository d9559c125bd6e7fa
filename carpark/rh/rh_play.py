import argparse
import sys

from carpark.data.data_loader import load_level
from carpark.eval.eval_utils import parse_turn
from carpark.rh.rh_exceptions import *
from carpark.rh.rh_puzzle import CarPark, validate
from carpark.utils.config import EXIT_ROW
from carpark.utils.logs import setup_script_logger

def play(car_park: CarPark, read=input, write=print):
    """
    Text game loop: show the car park, read a turn, apply it.

    Returns the number of turns it took to get the player car out, or None
    when the player quits with 'q'.
    """
    turns = 0
    while not car_park.solved():
        write(car_park.snapshot())
        answer = read("Your Turn: ").strip()

        if answer.lower() == "q":
            write("Quitting the game.")
            return None

        try:
            turn = parse_turn(answer)
            car_park.move(turn.vehicle_id, turn.direction, turn.steps)
        except CarParkException as e:
            write(str(e))
            continue
        turns += 1

    write(car_park.snapshot())
    write(f"You have successfully moved your car to the exit in {turns} turns! You win!")
    return turns

def main(argv=None):
    parser = argparse.ArgumentParser(description="Play a car park level in the terminal.")
    parser.add_argument("level", help="Path to a level file")
    parser.add_argument("--exit-row", type=int, default=EXIT_ROW, help="Row index of the exit")
    args = parser.parse_args(argv)

    setup_script_logger("carpark.play")

    try:
        level = load_level(args.level)
        car_park = validate(level.grid, exit_row=args.exit_row)
    except (CarParkException, OSError) as e:
        print(f"Cannot load {args.level}: {e}")
        return 1

    turns = play(car_park)
    if turns is not None and level.min_turns is not None:
        print(f"Best possible: {level.min_turns} turns.")
    return 0

if __name__ == "__main__":
    sys.exit(main())
