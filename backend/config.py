import os
import pathlib

BASE_DIR = pathlib.Path(__file__).parent.parent.absolute()
OUTPUT_DIR = pathlib.Path(os.environ.get("BRICKWORLD_OUTPUT_DIR", BASE_DIR / "output"))

# Vegetation seed for the served world; unset gives a fresh forest per process
_seed = os.environ.get("BRICKWORLD_SEED", "").strip()
WORLD_SEED = int(_seed) if _seed else None

CORS_ORIGINS = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]
