"""Analytic height fields: wall line, mountain spine and terrain elevation.

Provides functions for:
1. The serpentine z-offset the wall follows along x
2. The ridge (mountain spine) elevation as a function of x
3. Final integer terrain elevation at any (x, z)
4. Sampling that elevation on the whole scene grid
"""

import logging
import math

import numpy as np

from .noise import hash2, fractal_sum

logger = logging.getLogger(__name__)

# Terrain falls away from the wall line by this much per unit of distance
RIDGE_FALLOFF = 1.2
SLOPE_SCALE, SLOPE_OCTAVES, SLOPE_AMPLITUDE = 0.1, 2, 5.0
ROUGHNESS_SCALE, ROUGHNESS_OCTAVES, ROUGHNESS_AMPLITUDE = 0.05, 3, 8.0
MIN_ELEVATION = 1


def wall_centerline(x: float) -> float:
    """Z coordinate of the wall's centre line at ``x``."""
    return math.sin(x * 0.05) * 20 + math.sin(x * 0.15) * 8


def ridge_elevation(x: float) -> float:
    """Base elevation of the mountain spine; independent of z."""
    return 15 + math.sin(x * 0.04) * 12 + math.cos(x * 0.1) * 5


def distance_to_wall(x: float, z: float) -> float:
    return abs(z - wall_centerline(x))


def terrain_elevation(x: float, z: float) -> int:
    """Natural integer terrain height at (x, z), never below 1."""
    ground = ridge_elevation(x) - distance_to_wall(x, z) * RIDGE_FALLOFF
    ground += fractal_sum(x * SLOPE_SCALE, z * SLOPE_SCALE, SLOPE_OCTAVES) * SLOPE_AMPLITUDE
    ground += fractal_sum(x * ROUGHNESS_SCALE, z * ROUGHNESS_SCALE,
                          ROUGHNESS_OCTAVES) * ROUGHNESS_AMPLITUDE

    if ground < MIN_ELEVATION:
        ground = MIN_ELEVATION + hash2(x, z) * 0.5

    return int(math.floor(ground))


def elevation_grid(size_x: int, size_z: int) -> np.ndarray:
    """Sample ``terrain_elevation`` for every column of the scene grid.

    Returns an int32 array of shape (2*size_x + 1, 2*size_z + 1) indexed
    as ``grid[x + size_x, z + size_z]``.
    """
    nx = 2 * size_x + 1
    nz = 2 * size_z + 1
    grid = np.empty((nx, nz), dtype=np.int32)
    for ix in range(nx):
        x = ix - size_x
        for iz in range(nz):
            grid[ix, iz] = terrain_elevation(x, iz - size_z)
    logger.debug(f"Elevation grid {nx}x{nz}: min={grid.min()}, max={grid.max()}")
    return grid
