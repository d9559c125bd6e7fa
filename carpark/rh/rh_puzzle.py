from dataclasses import dataclass, field

from carpark.rh.rh_exceptions import *
from carpark.rh.rh_grid import (
    DIRECTIONS,
    EMPTY,
    EXIT_ROW,
    MAX_VEHICLE_ID,
    PLAYER_ID,
    Grid,
    Position,
    cell_at,
    find_extent,
    grid_size,
    in_bounds,
)

@dataclass
class Vehicle:
    id: int
    top_left: Position
    bottom_right: Position # inclusive

    @property
    def horizontal(self) -> bool:
        return self.top_left.y == self.bottom_right.y and self.bottom_right.x > self.top_left.x

    @property
    def vertical(self) -> bool:
        return self.top_left.x == self.bottom_right.x and self.bottom_right.y > self.top_left.y

    @property
    def length(self) -> int:
        return max(self.bottom_right.x - self.top_left.x, self.bottom_right.y - self.top_left.y) + 1

    @property
    def directions(self) -> tuple[str, str]:
        return ("left", "right") if self.horizontal else ("up", "down")

    def cells(self) -> list[Position]:
        return [
            Position(x, y)
            for y in range(self.top_left.y, self.bottom_right.y + 1)
            for x in range(self.top_left.x, self.bottom_right.x + 1)
        ]

    def covers(self, pos: Position) -> bool:
        return (
            self.top_left.x <= pos.x <= self.bottom_right.x
            and self.top_left.y <= pos.y <= self.bottom_right.y
        )

    def edges(self, direction: str) -> tuple[Position, Position]:
        """ (leading, trailing) cell when sliding in `direction` """
        if direction in ("up", "left"):
            return self.top_left, self.bottom_right
        return self.bottom_right, self.top_left

@dataclass
class CarPark:
    """
    A validated grid together with the vehicles parked on it.

    The grid is indexed grid[y][x]; 0 is an empty cell and any other value
    is the id of the vehicle covering it. Car 1 is the player and leaves
    through the right edge of `exit_row`:

    grid = [
        [2, 2, 0, 3, 0, 0],
        [0, 0, 0, 3, 0, 4],
        [0, 1, 1, 3, 0, 4],   <- exit row, exit on the right
        [5, 0, 0, 0, 0, 0],
        [5, 0, 6, 6, 0, 0],
        [0, 0, 0, 0, 7, 7],
    ]

    Grid and vehicles are only ever changed together through step()/move().
    """

    grid: Grid
    vehicles: dict[int, Vehicle] = field(default_factory=dict)
    exit_row: int = EXIT_ROW

    @property
    def width(self) -> int:
        return grid_size(self.grid)[0]

    @property
    def height(self) -> int:
        return grid_size(self.grid)[1]

    def clone(self) -> "CarPark":
        return CarPark(
            grid=[row[:] for row in self.grid],
            vehicles={car: Vehicle(v.id, v.top_left, v.bottom_right) for car, v in self.vehicles.items()},
            exit_row=self.exit_row,
        )

    def vehicle(self, car: int) -> Vehicle:
        vehicle = self.vehicles.get(car)
        if vehicle is None:
            raise CarNotFound(f"Car {car} not found in the car park.")
        return vehicle

    def solved(self) -> bool:
        return PLAYER_ID not in self.vehicles

    def check_consistent(self):
        """ Raise CarParkInvariantError if any vehicle record disagrees with the grid """
        for vehicle in self.vehicles.values():
            self._check_consistent(vehicle)

    def _check_consistent(self, vehicle: Vehicle):
        for corner in (vehicle.top_left, vehicle.bottom_right):
            if not in_bounds(self.grid, corner) or cell_at(self.grid, corner) != vehicle.id:
                raise CarParkInvariantError(
                    f"Car {vehicle.id} is recorded at {vehicle.top_left}-{vehicle.bottom_right} "
                    f"but the grid disagrees at {corner}."
                )

    def _at_exit(self, vehicle: Vehicle, direction: str) -> bool:
        return (
            direction == "right"
            and vehicle.horizontal
            and vehicle.top_left.y == self.exit_row
            and vehicle.bottom_right.x == self.width - 1
        )

    def can_step(self, car: int, direction: str) -> bool:
        """ Whether car could slide one cell in direction; nothing is changed """
        vehicle = self.vehicle(car)
        if direction not in vehicle.directions:
            return False
        if self._at_exit(vehicle, direction):
            return True
        leading, _ = vehicle.edges(direction)
        dest = leading.shifted(direction)
        return in_bounds(self.grid, dest) and cell_at(self.grid, dest) == EMPTY

    def step(self, car: int, direction: str, check: bool = True) -> bool:
        """
        Slide car one cell in direction.

        Returns False and leaves everything untouched when the step is not
        possible (wrong axis, edge of the grid, occupied cell). A horizontal
        car in the exit row stepping right off the last column leaves the car
        park and is removed from both the grid and the vehicle map.

        With check=False the vehicle record is trusted to match the grid;
        the search uses this on copies of car parks it already checked.
        """
        vehicle = self.vehicle(car)
        if check:
            self._check_consistent(vehicle)

        if not self.can_step(car, direction):
            return False

        if self._at_exit(vehicle, direction):
            for pos in vehicle.cells():
                self.grid[pos.y][pos.x] = EMPTY
            del self.vehicles[car]
            return True

        leading, trailing = vehicle.edges(direction)
        dest = leading.shifted(direction)
        self.grid[dest.y][dest.x] = car
        self.grid[trailing.y][trailing.x] = EMPTY
        vehicle.top_left = vehicle.top_left.shifted(direction)
        vehicle.bottom_right = vehicle.bottom_right.shifted(direction)
        return True

    def move(self, car: int, direction: str, distance: int):
        """ Slide car by distance cells as one turn; raises InvalidMove and changes nothing on failure """
        vehicle = self.vehicle(car)

        if direction not in DIRECTIONS:
            raise InvalidMove(f"Invalid direction {direction} for car {car}.")
        if direction not in vehicle.directions:
            axis = "vertical" if direction in ("up", "down") else "horizontal"
            raise InvalidMove(f"Car {car} cannot move {direction}; it is not {axis}.")
        if distance < 1:
            raise InvalidMove(f"Car {car} cannot move {direction} by {distance}; distance must be positive.")

        trial = self.clone()
        for _ in range(distance):
            if car not in trial.vehicles:
                raise InvalidMove(f"Car {car} cannot move {direction} by {distance}; it already left the car park.")
            moving = trial.vehicles[car]
            if not trial.step(car, direction):
                dest = moving.edges(direction)[0].shifted(direction)
                if not in_bounds(trial.grid, dest):
                    raise InvalidMove(f"Car {car} cannot move {direction} by {distance}; out of bounds.")
                raise InvalidMove(f"Car {car} cannot move {direction} by {distance}; path blocked.")

        self.grid = trial.grid
        self.vehicles = trial.vehicles

    def snapshot(self) -> str:
        """ Bordered text view; the gap on the exit row is the way out """
        border = "+%s+" % ("-" * (self.width * 3 + 1))
        lines = [border]
        for y, row in enumerate(self.grid):
            cells = " ".join(" ." if car == EMPTY else f"{car:2d}" for car in row)
            line = "| " + cells + (" ." if y == self.exit_row else " |")
            if y == self.exit_row and self.solved():
                line += " 1 1"
            lines.append(line)
        lines.append(border)
        return "\n".join(lines)

def _check_grid(raw_grid, exit_row: int):
    if not raw_grid or not raw_grid[0]:
        raise MalformedGrid("The grid is empty.")
    width = len(raw_grid[0])
    for y, row in enumerate(raw_grid):
        if len(row) != width:
            raise MalformedGrid(f"Row {y} has {len(row)} cells, expected {width}.")
        for x, car in enumerate(row):
            if isinstance(car, bool) or not isinstance(car, int) or not 0 <= car <= MAX_VEHICLE_ID:
                raise MalformedGrid(f"Cell ({x}, {y}) holds {car!r}; expected 0..{MAX_VEHICLE_ID}.")
    if not 0 <= exit_row < len(raw_grid):
        raise MalformedGrid(f"Exit row {exit_row} is outside a grid of {len(raw_grid)} rows.")

def validate(raw_grid, exit_row: int = EXIT_ROW) -> CarPark:
    """
    Turn a raw grid into a CarPark or raise a StructuralError.

    Cells are scanned row by row. The first cell of every new id gives the
    extent of that vehicle; every later cell of the same id has to fall
    inside it. The raw grid is copied, never modified.
    """
    _check_grid(raw_grid, exit_row)
    grid = [list(row) for row in raw_grid]
    vehicles: dict[int, Vehicle] = {}

    for y, row in enumerate(grid):
        for x, car in enumerate(row):
            if car == EMPTY:
                continue
            pos = Position(x, y)
            known = vehicles.get(car)
            if known is not None and known.covers(pos):
                continue

            top_left, bottom_right = find_extent(grid, pos)
            if top_left == bottom_right:
                raise VehicleTooShort(f"Car {car} at ({x}, {y}) occupies a single cell.")
            if known is not None:
                raise InconsistentShape(
                    f"Car {car} appears at {known.top_left}-{known.bottom_right} "
                    f"and again at {top_left}-{bottom_right}."
                )
            if top_left.x != bottom_right.x and top_left.y != bottom_right.y:
                raise InvalidShape(f"Car {car} at {top_left}-{bottom_right} is not a single row or column.")
            if car == PLAYER_ID and not (top_left.y == bottom_right.y == exit_row):
                raise PlayerNotInExitRow(f"The player car must lie in row {exit_row}.")

            vehicles[car] = Vehicle(car, top_left, bottom_right)

    if PLAYER_ID not in vehicles:
        raise NoPlayerCar("There is no player car (1) in the grid.")

    return CarPark(grid=grid, vehicles=vehicles, exit_row=exit_row)
