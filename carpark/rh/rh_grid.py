from dataclasses import dataclass

EMPTY = 0
PLAYER_ID = 1
EXIT_ROW = 2
MAX_VEHICLE_ID = 15

# direction name -> (dx, dy)
DIRECTIONS: dict[str, tuple[int, int]] = {
    "up": (0, -1),
    "down": (0, 1),
    "left": (-1, 0),
    "right": (1, 0),
}

OPPOSITE = {
    "up": "down",
    "down": "up",
    "left": "right",
    "right": "left",
}

Grid = list[list[int]]

@dataclass(frozen=True)
class Position:
    x: int # column
    y: int # row

    def shifted(self, direction: str, distance: int = 1) -> "Position":
        dx, dy = DIRECTIONS[direction]
        return Position(self.x + dx * distance, self.y + dy * distance)

def grid_size(grid: Grid) -> tuple[int, int]:
    """ (width, height) of a rectangular grid """
    height = len(grid)
    width = len(grid[0]) if height else 0
    return width, height

def in_bounds(grid: Grid, pos: Position) -> bool:
    width, height = grid_size(grid)
    return 0 <= pos.x < width and 0 <= pos.y < height

def cell_at(grid: Grid, pos: Position) -> int:
    return grid[pos.y][pos.x]

def find_extent(grid: Grid, pos: Position, directions=tuple(DIRECTIONS)):
    """
    Find the extent of the vehicle covering `pos`.

    Walks from `pos` through contiguous cells holding the same id, once per
    direction in `directions`, and returns the (top_left, bottom_right)
    corners of what was found. Returns None for an empty or out of bounds
    cell.

    Only the row and column through `pos` are scanned, so an L shaped or
    square blob yields a box whose corners differ on both axes; telling
    those apart is up to the caller.
    """
    if not in_bounds(grid, pos):
        return None
    car = cell_at(grid, pos)
    if car == EMPTY:
        return None

    reach = {}
    for direction in directions:
        cur = pos
        nxt = cur.shifted(direction)
        while in_bounds(grid, nxt) and cell_at(grid, nxt) == car:
            cur = nxt
            nxt = cur.shifted(direction)
        reach[direction] = cur

    top_left = Position(reach.get("left", pos).x, reach.get("up", pos).y)
    bottom_right = Position(reach.get("right", pos).x, reach.get("down", pos).y)
    return top_left, bottom_right
