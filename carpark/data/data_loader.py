import logging
import os
from dataclasses import dataclass

from carpark.rh.rh_exceptions import LevelFormatError
from carpark.rh.rh_grid import Grid

logger = logging.getLogger(__name__)

# Level file format:
# 000000
# 000020
# 000120   <- one hex digit per cell, 0 = empty
# 000000
# 000000
# 000000
# 2        <- optional minimal turn count (decimal)

@dataclass
class Level:
    name: str
    grid: Grid
    min_turns: int | None = None

def _has_turn_count(lines: list[str], height: int | None) -> bool:
    if len(lines) < 2:
        return False
    if height is not None:
        return len(lines) > height
    last = lines[-1]
    if len(last) != len(lines[0]):
        return True
    # a digit line as wide as the rows is a count only if it leaves a square grid
    return last.isdigit() and len(lines) - 1 == len(lines[0])

def parse_level(text: str, name: str = "", height: int | None = None) -> Level:
    """
    Parse one level file.

    The last line is taken as the turn count when it is not as wide as the
    rows, or when it is all digits and dropping it leaves a square grid.
    Pass height for narrow non-square grids where that is ambiguous.
    """
    lines = [line.strip() for line in text.splitlines()]
    while lines and not lines[-1]:
        lines.pop()
    if not lines:
        raise LevelFormatError(f"Level {name!r} is empty.")

    min_turns = None
    if _has_turn_count(lines, height):
        count = lines.pop()
        if not count.isdigit():
            raise LevelFormatError(f"Level {name!r}: turn count {count!r} is not a number.")
        min_turns = int(count)
    if height is not None and len(lines) != height:
        raise LevelFormatError(f"Level {name!r} has {len(lines)} rows, expected {height}.")

    grid = []
    for y, line in enumerate(lines):
        if len(line) != len(lines[0]):
            raise LevelFormatError(f"Level {name!r}: row {y} has {len(line)} cells, expected {len(lines[0])}.")
        try:
            grid.append([int(ch, 16) for ch in line])
        except ValueError:
            raise LevelFormatError(f"Level {name!r}: row {y} ({line!r}) is not made of hex digits.") from None

    return Level(name=name, grid=grid, min_turns=min_turns)

def format_level(grid: Grid, min_turns: int | None = None) -> str:
    lines = ["".join(format(car, "x") for car in row) for row in grid]
    if min_turns is not None:
        lines.append(str(min_turns))
    return "\n".join(lines) + "\n"

def load_level(file_path: str, height: int | None = None) -> Level:
    name = os.path.splitext(os.path.basename(file_path))[0]
    with open(file_path, "r", encoding="utf-8") as file:
        return parse_level(file.read(), name=name, height=height)

def save_level(file_path: str, grid: Grid, min_turns: int | None = None):
    with open(file_path, "w", encoding="utf-8") as file:
        file.write(format_level(grid, min_turns))

def data_loader(levels_dir: str) -> dict[str, Level]:
    """
    Load every level file in a directory.

    Args:
        levels_dir (str): Directory holding one level per file.

    Returns:
        dict: {level name (file stem): Level}, ordered by file name
    """
    levels = {}
    for file_name in sorted(os.listdir(levels_dir)):
        path = os.path.join(levels_dir, file_name)
        if not os.path.isfile(path) or file_name.startswith("."):
            continue
        try:
            level = load_level(path)
        except (LevelFormatError, UnicodeDecodeError) as e:
            logger.warning("Skipping %s: %s", path, e)
            continue
        levels[level.name] = level

    return levels
