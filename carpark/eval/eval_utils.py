import re

from carpark.rh.rh_exceptions import InvalidMove
from carpark.rh.rh_solver import Turn

# "3ss" is car 3 down two cells, as typed in the game
# "3 down 2" / "move car 3 down by 2" is the long form
TURN_PATTERN = re.compile(
    r"""
    ^\s*
    (?:(?:move|slide)\s+)?
    (?:car\s+)?
    (?P<car>\d+)
    (?:
        (?P<keys>w+|a+|s+|d+)
      |
        \s+(?P<direction>up|down|left|right)
        (?:\s+(?:by\s+)?(?P<distance>\d+))?
    )
    \s*$
    """,
    re.IGNORECASE | re.VERBOSE,
)

KEY_DIRECTIONS = {
    "w": "up",
    "a": "left",
    "s": "down",
    "d": "right",
}

DIRECTION_KEYS = {direction: key for key, direction in KEY_DIRECTIONS.items()}

def parse_turn(text: str) -> Turn:
    match = TURN_PATTERN.match(text)
    if not match:
        raise InvalidMove(
            f"Invalid input {text!r}. Input has to be of the form '<car number><direction wasd>' "
            "or '<car number> <direction> <distance>'"
        )

    car = int(match.group("car"))
    if car < 1:
        raise InvalidMove("Invalid car number. Please enter a positive integer.")

    keys = match.group("keys")
    if keys:
        return Turn(car, KEY_DIRECTIONS[keys[0].lower()], len(keys))

    distance = int(match.group("distance") or 1)
    if distance < 1:
        raise InvalidMove(f"Invalid distance {distance} for car {car}.")
    return Turn(car, match.group("direction").lower(), distance)

def parse_turns(text: str) -> list[Turn]:
    """ Turns separated by commas or newlines, e.g. '2w, 1dd' """
    parts = [part for part in re.split(r"[,;\n]", text) if part.strip()]
    return [parse_turn(part) for part in parts]

def format_turn(turn: Turn) -> str:
    return f"{turn.vehicle_id}{DIRECTION_KEYS[turn.direction] * turn.steps}"

def describe_turn(turn: Turn) -> str:
    unit = "step" if turn.steps == 1 else "steps"
    return f"vehicle {turn.vehicle_id}, {turn.direction}, {turn.steps} {unit}"
