class CarParkException(Exception):
    """Base exception class for car park errors."""
    pass

class InvalidMove(CarParkException):
    """Raised when an invalid move is attempted."""
    pass

class CarNotFound(CarParkException):
    """Raised when a specified car is not found in the car park."""
    pass

class StructuralError(CarParkException):
    """Raised when a raw grid cannot be turned into a car park."""
    pass

class MalformedGrid(StructuralError):
    """Raised when the grid itself is empty, ragged or holds bad cell values."""
    pass

class VehicleTooShort(StructuralError):
    """Raised when a vehicle occupies a single cell."""
    pass

class InconsistentShape(StructuralError):
    """Raised when one id shows up with two different extents."""
    pass

class InvalidShape(StructuralError):
    """Raised when a vehicle is not a single row or column."""
    pass

class PlayerNotInExitRow(StructuralError):
    """Raised when the player car does not lie in the exit row."""
    pass

class NoPlayerCar(StructuralError):
    """Raised when the grid holds no player car."""
    pass

class LevelFormatError(CarParkException):
    """Raised when a level file cannot be parsed."""
    pass

class Unsolvable(CarParkException):
    """Raised by callers that need a solution when the level has none."""
    pass

class CarParkInvariantError(RuntimeError):
    """A vehicle's stored position no longer matches the grid. Always a bug."""
    pass
