"""Data classes and path management."""

import pathlib
import time
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Optional, Tuple

from .constants import OUTPUT_DIR, SCENE_DEFAULTS


class PathManager:
    """Manage paths relative to the BrickWorld directory."""

    @staticmethod
    def get_output_path(filename: str) -> pathlib.Path:
        """Get the output file path."""
        path = pathlib.Path(filename)
        if path.is_absolute():
            return path
        return OUTPUT_DIR / filename


class BrickKind(str, Enum):
    TERRAIN = "terrain"
    WALL = "wall"
    TOWER = "tower"
    WATER = "water"
    FOLIAGE = "foliage"
    SNOW = "snow"
    PATH = "path"


class SceneTime(str, Enum):
    DAY = "day"
    SUNSET = "sunset"
    NIGHT = "night"


def hex_to_rgb(color: str) -> Tuple[float, float, float]:
    """Convert ``#RRGGBB`` to an (r, g, b) tuple of 0-1 floats."""
    value = color.lstrip('#')
    if len(value) != 6:
        raise ValueError(f"Expected #RRGGBB colour, got {color!r}")
    return tuple(int(value[i:i + 2], 16) / 255.0 for i in (0, 2, 4))


@dataclass(frozen=True)
class Brick:
    position: Tuple[int, int, int]
    color: str
    kind: BrickKind
    name: str
    description: Optional[str] = None

    @property
    def x(self) -> int:
        return self.position[0]

    @property
    def y(self) -> int:
        return self.position[1]

    @property
    def z(self) -> int:
        return self.position[2]

    def rgb(self) -> Tuple[float, float, float]:
        return hex_to_rgb(self.color)

    def to_dict(self) -> dict:
        return {
            "position": list(self.position),
            "color": self.color,
            "kind": self.kind.value,
            "name": self.name,
            "description": self.description,
        }


@dataclass
class SceneConfig:
    """Grid extents and structural constants for one generated world."""
    size_x: int = SCENE_DEFAULTS['size_x']
    size_z: int = SCENE_DEFAULTS['size_z']
    wall_height_base: int = SCENE_DEFAULTS['wall_height_base']
    tower_interval: int = SCENE_DEFAULTS['tower_interval']
    wall_half_width: float = SCENE_DEFAULTS['wall_half_width']
    tower_half_width: float = SCENE_DEFAULTS['tower_half_width']
    tower_zone: int = SCENE_DEFAULTS['tower_zone']
    fill_cap: int = SCENE_DEFAULTS['fill_cap']
    vegetation_seed: Optional[int] = None

    def __post_init__(self):
        if self.size_x < 0 or self.size_z < 0:
            raise ValueError(f"Grid extents must be non-negative, got "
                             f"size_x={self.size_x}, size_z={self.size_z}")
        if self.tower_interval <= 0:
            raise ValueError(f"tower_interval must be positive, got {self.tower_interval}")
        if self.wall_height_base < 2:
            raise ValueError(f"wall_height_base must be at least 2, got {self.wall_height_base}")
        if self.wall_half_width < 0 or self.tower_half_width < 0:
            raise ValueError("Wall and tower half-widths must be non-negative")
        if self.tower_zone < 0:
            raise ValueError(f"tower_zone must be non-negative, got {self.tower_zone}")
        if self.fill_cap < 0:
            raise ValueError(f"fill_cap must be non-negative, got {self.fill_cap}")

    def in_bounds(self, x: int, z: int) -> bool:
        return abs(x) <= self.size_x and abs(z) <= self.size_z

    @property
    def column_count(self) -> int:
        return (2 * self.size_x + 1) * (2 * self.size_z + 1)


@dataclass
class ChatMessage:
    role: str    # "user" or "model"
    text: str
    timestamp: float = field(default_factory=time.time)

    def to_dict(self) -> dict:
        return asdict(self)
