import os
from dotenv import load_dotenv

load_dotenv()

def _optional(name: str, default: str) -> str:
    v = os.getenv(name)
    if not v:
        return default
    return v

def _int(name: str, default: int) -> int:
    v = _optional(name, str(default))
    try:
        return int(v)
    except ValueError:
        raise RuntimeError(f"Env var {name} must be an integer, got {v!r}") from None

LEVELS_DIR = _optional("CARPARK_LEVELS_DIR", "./levels")
EXIT_ROW = _int("CARPARK_EXIT_ROW", 2)
LOGLEVEL = _optional("LOGLEVEL", "INFO").upper()
