"""Value noise: position hash, smooth lattice noise and fractal sums.

Every stochastic choice in the world that must survive regeneration
(terrain roughness, rock mix, masonry weathering, tree placement) is
derived from these functions, so they are pure functions of their inputs.
"""

import math


def _fract(v: float) -> float:
    return v - math.floor(v)


def hash2(x: float, z: float) -> float:
    """Deterministic pseudo-random scalar in [0, 1) for a 2D point."""
    return _fract(math.sin(x * 12.9898 + z * 78.233) * 43758.5453)


def smooth_noise(x: float, z: float) -> float:
    """Bilinear value noise with a smoothstep blend between lattice points."""
    i = math.floor(x)
    j = math.floor(z)
    f = x - i
    g = z - j

    a = hash2(i, j)
    b = hash2(i + 1, j)
    c = hash2(i, j + 1)
    d = hash2(i + 1, j + 1)

    # 3t^2 - 2t^3 keeps the surface C1 across cell edges
    u = f * f * (3.0 - 2.0 * f)
    v = g * g * (3.0 - 2.0 * g)

    return (a * (1 - u) + b * u) * (1 - v) + (c * (1 - u) + d * u) * v


def fractal_sum(x: float, z: float, octaves: int) -> float:
    """Sum ``octaves`` layers of smooth noise, doubling frequency each time.

    Amplitude starts at 0.5 and halves per octave, so the result stays
    below 1.0 for any octave count.
    """
    if octaves < 0:
        raise ValueError(f"octaves must be non-negative, got {octaves}")
    value = 0.0
    amplitude = 0.5
    frequency = 1.0
    for _ in range(octaves):
        value += amplitude * smooth_noise(x * frequency, z * frequency)
        frequency *= 2
        amplitude *= 0.5
    return value
