"""Procedural brick world: terrain columns, the wall, towers and vegetation.

The generator walks the scene grid column by column (x outer, z inner)
and appends bricks in generation order.  Terrain bricks are always
emitted; wall, tower and vegetation bricks are layered on top of them
and never replace a terrain entry.
"""

import logging
import math
import random
import time
from collections import Counter
from dataclasses import dataclass
from typing import Callable, List, Optional, Set, Tuple

from .constants import (
    LEGO_COLORS, STONE_VARIANTS, FOLIAGE_VARIANTS,
    SNOW_LINE, SNOW_CLEARANCE, ROCK_LINE, TREE_LINE,
    TREE_THRESHOLD, TREE_CLEARANCE, BUSH_THRESHOLD, BUSH_CLEARANCE,
    TOWER_EXTRA_HEIGHT, WINDOW_MIN_LAYER,
)
from .heightfield import distance_to_wall, elevation_grid
from .models import Brick, BrickKind, SceneConfig
from .noise import hash2, fractal_sum

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[float, str], None]

STRUCTURE_DESCRIPTION = "Part of the Ming Dynasty construction."
FOUNDATION_DESCRIPTION = "Supporting terrain foundation."
NEEDLES_DESCRIPTION = "Evergreen foliage adapted to the harsh climate."


@dataclass(frozen=True)
class Surface:
    """Material of a column's top layer."""
    color: str
    name: str
    description: str
    is_snow: bool = False


def classify_surface(x: int, z: int, y: int, dist_to_wall: float) -> Surface:
    """Pick the biome of a column from its elevation and wall distance."""
    if y > SNOW_LINE and dist_to_wall > SNOW_CLEARANCE:
        return Surface(LEGO_COLORS['SNOW'], "Snowy Peak",
                       "Eternal snow on the highest ridges.", is_snow=True)

    if y > ROCK_LINE:
        rock_mix = hash2(x, z)
        if rock_mix > 0.6:
            return Surface(LEGO_COLORS['DARK_GRAY'], "Granite Rock",
                           "Solid mountain bedrock.")
        if rock_mix > 0.3:
            return Surface(LEGO_COLORS['BLUISH_GRAY'], "Limestone",
                           "Pale sedimentary stone weathered by wind.")
        return Surface(LEGO_COLORS['OLIVE'], "Highland Moss",
                       "Hardy moss clinging to the upper slopes.")

    lush_mix = fractal_sum(x * 0.2, z * 0.2, 1)
    n = len(FOLIAGE_VARIANTS)
    color = FOLIAGE_VARIANTS[int(math.floor(abs(lush_mix) * n)) % n]
    return Surface(color, "Grass Block", "Lush vegetation covering the hills.")


def tower_phase(x: float, interval: int) -> int:
    """Signed position of ``x`` within its tower period.

    Rounds half up, then takes a remainder whose sign follows ``x``, so the
    band around x = 0 is symmetric.
    """
    return int(math.fmod(math.floor(x + 0.5), interval))


class WorldGenerator:
    def __init__(self, config: Optional[SceneConfig] = None,
                 rng: Optional[random.Random] = None):
        """
        config: grid extents and structural constants (defaults to the
            standard Great Wall scene).
        rng: source for tree height and leaf colour.  Defaults to
            ``random.Random(config.vegetation_seed)``; a ``None`` seed gives
            a different forest on every run.
        """
        self.config = config or SceneConfig()
        self.rng = rng or random.Random(self.config.vegetation_seed)
        self._elevations = None
        self._foliage: Set[Tuple[int, int, int]] = set()

    # ------------------------------------------------------------------
    # Elevation lookups
    # ------------------------------------------------------------------

    def elevation(self, x: int, z: int) -> int:
        cfg = self.config
        return int(self._elevations[x + cfg.size_x, z + cfg.size_z])

    def fill_depth(self, x: int, z: int) -> int:
        """Extra layers needed under (x, z) so no side of the column floats."""
        y = self.elevation(x, z)
        neighbours = []
        for nx, nz in ((x + 1, z), (x - 1, z), (x, z + 1), (x, z - 1)):
            # Map edge: no fill pressure
            neighbours.append(self.elevation(nx, nz) if self.config.in_bounds(nx, nz) else y)
        return max(0, min(y - min(neighbours), self.config.fill_cap))

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    def generate(self, progress_callback: Optional[ProgressCallback] = None) -> List[Brick]:
        """Build the complete ordered brick list for the configured grid."""
        def _progress(pct, msg):
            if progress_callback:
                progress_callback(pct, msg)

        cfg = self.config
        t0 = time.perf_counter()
        _progress(0, "Sampling elevation...")
        self._elevations = elevation_grid(cfg.size_x, cfg.size_z)
        self._foliage = set()

        bricks: List[Brick] = []
        width = 2 * cfg.size_x + 1
        for ix, x in enumerate(range(-cfg.size_x, cfg.size_x + 1)):
            for z in range(-cfg.size_z, cfg.size_z + 1):
                self._build_column(x, z, bricks)
            _progress(5 + 95 * (ix + 1) / width, f"Built slice x={x}")

        elapsed = time.perf_counter() - t0
        counts = Counter(b.kind.value for b in bricks)
        logger.info(f"Generated {len(bricks)} bricks over {cfg.column_count} "
                    f"columns in {elapsed:.2f}s")
        for kind, count in sorted(counts.items()):
            logger.info(f"  {kind}: {count}")
        return bricks

    def _build_column(self, x: int, z: int, bricks: List[Brick]) -> None:
        cfg = self.config
        y = self.elevation(x, z)
        dist = distance_to_wall(x, z)

        surface = classify_surface(x, z, y, dist)
        self._emit_terrain(x, z, y, surface, bricks)

        phase = tower_phase(x, cfg.tower_interval)
        is_wall, is_tower = self._structure_flags(phase, dist)

        if is_tower or is_wall:
            self._emit_structure(x, z, y, dist, phase, is_tower, bricks)
        elif not surface.is_snow and y < TREE_LINE:
            self._emit_vegetation(x, z, y, dist, bricks)

    def _structure_flags(self, phase: int, dist: float) -> Tuple[bool, bool]:
        """(is_wall, is_tower) for a column at ``phase`` and ``dist`` from the wall."""
        cfg = self.config
        in_tower_zone = -cfg.tower_zone < phase < cfg.tower_zone
        return dist < cfg.wall_half_width, in_tower_zone and dist < cfg.tower_half_width

    def in_structure(self, x: int, z: int) -> bool:
        """True when column (x, z) carries wall or tower bricks."""
        is_wall, is_tower = self._structure_flags(
            tower_phase(x, self.config.tower_interval), distance_to_wall(x, z))
        return is_wall or is_tower

    def _add_foliage(self, brick: Brick, bricks: List[Brick]) -> None:
        # One foliage brick per cell; overlapping crowns share leaves
        if brick.position in self._foliage:
            return
        self._foliage.add(brick.position)
        bricks.append(brick)

    def _emit_terrain(self, x, z, y, surface, bricks):
        kind = BrickKind.SNOW if surface.is_snow else BrickKind.TERRAIN
        rocky = y > ROCK_LINE
        for i in range(1 + self.fill_depth(x, z)):
            if i == 0:
                bricks.append(Brick((x, y, z), surface.color, kind,
                                    surface.name, surface.description))
            else:
                bricks.append(Brick(
                    (x, y - i, z),
                    LEGO_COLORS['DARK_GRAY'] if rocky else LEGO_COLORS['BROWN'],
                    kind,
                    "Mountain Bedrock" if rocky else "Dirt Foundation",
                    FOUNDATION_DESCRIPTION,
                ))

    def _emit_structure(self, x, z, y, dist, phase, is_tower, bricks):
        cfg = self.config
        base = y + 1
        height = cfg.wall_height_base + (TOWER_EXTRA_HEIGHT if is_tower else 0)
        kind = BrickKind.TOWER if is_tower else BrickKind.WALL
        if is_tower:
            is_edge = dist > cfg.tower_half_width - 1 or abs(phase) > 2
        else:
            is_edge = dist > 0.5

        n = len(STONE_VARIANTS)
        for h in range(height):
            current_y = base + h
            weathering = fractal_sum(x * 0.5, current_y * 0.5, 1)
            color = STONE_VARIANTS[int(math.floor(abs(weathering * 10))) % n]

            if is_tower:
                name = "Watchtower Fortification"
                # Window openings
                if WINDOW_MIN_LAYER < h < height - 2 and is_edge and h % 3 == 0:
                    continue
                if h == height - 2:
                    color = LEGO_COLORS['DARK_GRAY']
            else:
                name = "Ancient Wall Brick"
                if h == height - 2:
                    color = LEGO_COLORS['DARK_TAN']
                    name = "Walkway Paving"

            # Crenellations: checkerboard merlons on the outer edge only
            if h == height - 1:
                if not is_edge or (x + z) % 2 != 0:
                    continue
                name = "Battlement"

            bricks.append(Brick((x, current_y, z), color, kind, name,
                                STRUCTURE_DESCRIPTION))

    def _emit_vegetation(self, x, z, y, dist, bricks):
        tree_noise = hash2(x, z)
        if tree_noise > TREE_THRESHOLD and dist > TREE_CLEARANCE:
            self._emit_pine(x, z, y, bricks)
        elif tree_noise > BUSH_THRESHOLD and dist > BUSH_CLEARANCE:
            self._add_foliage(Brick((x, y + 1, z), LEGO_COLORS['GREEN'],
                                    BrickKind.FOLIAGE, "Mountain Shrub"), bricks)

    def _emit_pine(self, x, z, y, bricks):
        tree_height = 3 + int(self.rng.random() * 4)

        for dy in (1, 2):
            self._add_foliage(Brick((x, y + dy, z), LEGO_COLORS['BROWN'],
                                    BrickKind.FOLIAGE, "Pine Trunk"), bricks)

        leaf_color = LEGO_COLORS['DARK_GREEN'] if self.rng.random() > 0.5 else LEGO_COLORS['OLIVE']

        for ly in range(tree_height):
            py = y + 2 + ly
            radius = int(math.floor((tree_height - ly) * 0.6))
            for lx in range(-radius, radius + 1):
                for lz in range(-radius, radius + 1):
                    # Keep the trunk clear below the tip
                    if lx == 0 and lz == 0 and ly < tree_height - 1:
                        continue
                    if abs(lx) + abs(lz) > radius + 0.5:
                        continue
                    # Crowns never grow into the wall or a tower
                    if self.in_structure(x + lx, z + lz):
                        continue
                    self._add_foliage(Brick((x + lx, py, z + lz), leaf_color,
                                            BrickKind.FOLIAGE, "Pine Needles",
                                            NEEDLES_DESCRIPTION), bricks)


def generate_world(config: Optional[SceneConfig] = None,
                   rng: Optional[random.Random] = None,
                   progress_callback: Optional[ProgressCallback] = None) -> List[Brick]:
    """Generate the full brick list for ``config``."""
    return WorldGenerator(config, rng).generate(progress_callback=progress_callback)
