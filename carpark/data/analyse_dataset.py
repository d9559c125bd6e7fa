import argparse
import logging
import os
import sys

import pandas as pd
from matplotlib import pyplot as plt
from tqdm import tqdm

from carpark.data.data_loader import Level, data_loader
from carpark.rh.rh_exceptions import StructuralError
from carpark.rh.rh_puzzle import validate
from carpark.rh.rh_solver import solve
from carpark.utils.config import EXIT_ROW, LEVELS_DIR
from carpark.utils.logs import setup_script_logger

logger = logging.getLogger(__name__)

COLUMNS = ["level", "width", "height", "vehicles", "stored_turns", "solved_turns", "status"]

def analyse_level(level: Level, exit_row: int = EXIT_ROW) -> dict:
    height = len(level.grid)
    width = len(level.grid[0]) if height else 0
    row = {
        "level": level.name,
        "width": width,
        "height": height,
        "vehicles": None,
        "stored_turns": level.min_turns,
        "solved_turns": None,
        "status": "INVALID",
    }

    try:
        car_park = validate(level.grid, exit_row=exit_row)
    except StructuralError as e:
        logger.warning("Level %s is invalid: %s", level.name, e)
        return row

    row["vehicles"] = len(car_park.vehicles)
    solution = solve(car_park)
    if solution is None:
        row["status"] = "UNSOLVABLE"
        return row

    row["solved_turns"] = solution.turn_count
    if level.min_turns is not None and level.min_turns != solution.turn_count:
        row["status"] = "MISMATCH"
    else:
        row["status"] = "OK"
    return row

def analyse_levels(levels: dict[str, Level], exit_row: int = EXIT_ROW) -> pd.DataFrame:
    rows = [
        analyse_level(level, exit_row=exit_row)
        for level in tqdm(levels.values(), desc="Solving levels", unit="level")
    ]
    return pd.DataFrame(rows, columns=COLUMNS)

def summarise(df: pd.DataFrame) -> pd.DataFrame:
    """ Number of levels per minimal turn count, split by status """
    solved = df[df["solved_turns"].notna()]
    if solved.empty:
        return pd.DataFrame()
    summary = (
        solved.groupby(["solved_turns", "status"]).size()
        .unstack(fill_value=0)
    )
    summary.index = summary.index.astype(int)
    summary.index.name = "turns"
    return summary

def plot_summary(summary: pd.DataFrame, file_path: str):
    plt.figure()
    plt.bar(summary.index, summary.sum(axis=1))
    plt.xlabel("Minimal Number of Turns")
    plt.ylabel("Levels")
    plt.title("Levels by Minimal Number of Turns")
    plt.savefig(file_path, bbox_inches='tight')
    plt.close()

def main(argv=None):
    parser = argparse.ArgumentParser(description="Solve every level in a directory and summarise the results.")
    parser.add_argument("--levels-dir", default=LEVELS_DIR, help="Directory of level files")
    parser.add_argument("--exit-row", type=int, default=EXIT_ROW, help="Row index of the exit")
    parser.add_argument("--out", default="levels_summary.txt", help="Tab separated per level results")
    parser.add_argument("--plot", default=None, help="Optional path for a bar chart of turn counts")
    args = parser.parse_args(argv)

    log = setup_script_logger("carpark.analyse")

    if not os.path.isdir(args.levels_dir):
        print(f"No such directory: {args.levels_dir}")
        return 1

    levels = data_loader(args.levels_dir)
    log.info("Loaded %d levels from %s", len(levels), args.levels_dir)

    df = analyse_levels(levels, exit_row=args.exit_row)
    df.to_csv(args.out, sep="\t", index=False)
    print(f"Saved results: {os.path.abspath(args.out)}")
    print(df["status"].value_counts().to_string())

    summary = summarise(df)
    if not summary.empty:
        print(summary.to_string())
        if args.plot:
            plot_summary(summary, args.plot)
            print(f"Saved plot: {os.path.abspath(args.plot)}")

    return 0 if (df["status"] == "OK").all() else 1

if __name__ == "__main__":
    sys.exit(main())
