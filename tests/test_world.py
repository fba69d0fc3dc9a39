"""World generator invariants and scenarios."""

import dataclasses
import random
from collections import defaultdict

import pytest

from brickworld.heightfield import wall_centerline
from brickworld.models import BrickKind, SceneConfig
from brickworld.world import WorldGenerator, generate_world, tower_phase, classify_surface

TERRAIN_KINDS = (BrickKind.TERRAIN, BrickKind.SNOW)
STRUCTURE_KINDS = (BrickKind.WALL, BrickKind.TOWER)


@pytest.fixture(scope="module")
def world():
    config = SceneConfig(size_x=40, size_z=30, vegetation_seed=7)
    gen = WorldGenerator(config)
    return gen, gen.generate()


def _terrain_columns(bricks):
    columns = defaultdict(list)
    for b in bricks:
        if b.kind in TERRAIN_KINDS:
            columns[(b.x, b.z)].append(b.y)
    return columns


def _structure_at(bricks):
    return {b.position: b for b in bricks if b.kind in STRUCTURE_KINDS}


def _structure_info(gen, x, z):
    """(is_tower, is_edge, base, height) or None for a plain terrain column."""
    cfg = gen.config
    dist = abs(z - wall_centerline(x))
    phase = tower_phase(x, cfg.tower_interval)
    is_tower = -cfg.tower_zone < phase < cfg.tower_zone and dist < cfg.tower_half_width
    is_wall = dist < cfg.wall_half_width
    if not (is_tower or is_wall):
        return None
    height = cfg.wall_height_base + (5 if is_tower else 0)
    is_edge = (dist > cfg.tower_half_width - 1 or abs(phase) > 2) if is_tower else dist > 0.5
    return is_tower, is_edge, gen.elevation(x, z) + 1, height


def test_same_seed_gives_identical_worlds():
    config = SceneConfig(size_x=20, size_z=15, vegetation_seed=42)
    assert generate_world(config) == generate_world(config)


def test_injected_rng_gives_identical_worlds():
    config = SceneConfig(size_x=20, size_z=15)
    first = generate_world(config, rng=random.Random(3))
    second = generate_world(config, rng=random.Random(3))
    assert first == second


def test_every_column_has_a_contiguous_terrain_stack(world):
    gen, bricks = world
    columns = _terrain_columns(bricks)
    assert len(columns) == gen.config.column_count
    for (x, z), ys in columns.items():
        assert len(ys) == len(set(ys)), f"duplicate layer in column {(x, z)}"
        top = gen.elevation(x, z)
        assert max(ys) == top
        assert sorted(ys) == list(range(top - len(ys) + 1, top + 1))


def test_no_gap_between_neighbouring_columns(world):
    gen, bricks = world
    cap = gen.config.fill_cap
    columns = _terrain_columns(bricks)
    for (x, z), ys in columns.items():
        top, bottom = max(ys), min(ys)
        for nx, nz in ((x + 1, z), (x - 1, z), (x, z + 1), (x, z - 1)):
            if (nx, nz) not in columns:
                continue
            neighbour_top = max(columns[(nx, nz)])
            assert bottom <= neighbour_top or top - bottom == cap


def test_minimum_elevation(world):
    _, bricks = world
    assert min(b.y for b in bricks if b.kind in TERRAIN_KINDS) >= 1


def test_subsurface_material(world):
    gen, bricks = world
    for b in bricks:
        if b.kind not in TERRAIN_KINDS or b.y == gen.elevation(b.x, b.z):
            continue
        if gen.elevation(b.x, b.z) > 15:
            assert b.name == "Mountain Bedrock"
        else:
            assert b.name == "Dirt Foundation"
        assert b.description == "Supporting terrain foundation."


def test_battlements_only_on_even_edge_columns(world):
    gen, bricks = world
    structure = _structure_at(bricks)
    checked = 0
    for x in range(-gen.config.size_x, gen.config.size_x + 1):
        for z in range(-gen.config.size_z, gen.config.size_z + 1):
            info = _structure_info(gen, x, z)
            if info is None:
                continue
            _, is_edge, base, height = info
            top = structure.get((x, base + height - 1, z))
            if is_edge and (x + z) % 2 == 0:
                assert top is not None and top.name == "Battlement"
            else:
                assert top is None
            checked += 1
    assert checked > 0


def test_tower_windows_are_carved(world):
    gen, bricks = world
    structure = _structure_at(bricks)
    edges = 0
    for x in range(-gen.config.size_x, gen.config.size_x + 1):
        for z in range(-gen.config.size_z, gen.config.size_z + 1):
            info = _structure_info(gen, x, z)
            if info is None or not info[0] or not info[1]:
                continue
            _, _, base, height = info
            edges += 1
            for h in range(height - 1):
                present = (x, base + h, z) in structure
                if 4 < h < height - 2 and h % 3 == 0:
                    assert not present
                else:
                    assert present
    assert edges > 0


def test_tower_at_origin(world):
    _, bricks = world
    kinds = {b.kind for b in bricks if b.x == 0 and b.z == 0}
    assert BrickKind.TOWER in kinds
    assert BrickKind.WALL not in kinds


def test_plain_wall_has_walkway_layer(world):
    gen, bricks = world
    structure = _structure_at(bricks)
    x = 17  # phase 17: outside every tower band
    z = round(wall_centerline(x))
    info = _structure_info(gen, x, z)
    assert info is not None and not info[0]
    _, _, base, height = info
    walkway = structure[(x, base + height - 2, z)]
    assert walkway.name == "Walkway Paving"
    assert walkway.kind == BrickKind.WALL


def test_small_grid_wall_scenario():
    config = SceneConfig(size_x=2, size_z=2, tower_zone=0, vegetation_seed=1)
    bricks = generate_world(config)
    wall_columns = {(b.x, b.z) for b in bricks if b.kind == BrickKind.WALL}
    expected = {
        (x, z)
        for x in range(-2, 3)
        for z in range(-2, 3)
        if abs(z - wall_centerline(x)) < 1.5
    }
    assert wall_columns == expected
    assert not any(b.kind == BrickKind.TOWER for b in bricks)
    for b in bricks:
        if (b.x, b.z) not in expected:
            assert b.kind in TERRAIN_KINDS + (BrickKind.FOLIAGE,)


def test_vegetation_stays_off_structures(world):
    gen, bricks = world
    for b in bricks:
        if b.name in ("Pine Trunk", "Mountain Shrub"):
            assert _structure_info(gen, b.x, b.z) is None
            assert abs(b.z - wall_centerline(b.x)) > 2
            assert b.kind == BrickKind.FOLIAGE


def test_foliage_never_shares_a_cell_with_structures(world):
    gen, bricks = world
    structure = _structure_at(bricks)
    foliage = [b for b in bricks if b.kind == BrickKind.FOLIAGE]
    assert foliage
    assert not [b.position for b in foliage if b.position in structure]
    assert not [b for b in foliage if gen.in_structure(b.x, b.z)]


def test_foliage_positions_are_unique(world):
    _, bricks = world
    positions = [b.position for b in bricks if b.kind == BrickKind.FOLIAGE]
    assert len(positions) == len(set(positions))


def test_in_structure_matches_wall_footprint(world):
    gen, _ = world
    for x in range(-10, 11):
        for z in range(-30, 31):
            assert gen.in_structure(x, z) == (_structure_info(gen, x, z) is not None)


def test_tree_height_comes_from_rng():
    class MaxRandom(random.Random):
        def random(self):
            return 0.999

    config = SceneConfig(size_x=40, size_z=30)
    bricks = generate_world(config, rng=MaxRandom())
    needles = [b for b in bricks if b.name == "Pine Needles"]
    trunks = [b for b in bricks if b.name == "Pine Trunk"]
    assert trunks and needles
    assert {b.color for b in needles} == {"#2E5543"}
    # tallest pine: six leaf layers above the trunk top
    tops = {(b.x, b.z): b.y for b in trunks}
    assert max(b.y for b in needles) - max(tops.values()) == 5


def test_classify_surface_biomes():
    assert classify_surface(0, 40, 30, 40.0).is_snow
    assert classify_surface(0, 0, 30, 0.0).name in ("Granite Rock", "Limestone", "Highland Moss")
    assert classify_surface(0, 0, 5, 0.0).name == "Grass Block"


def test_surface_is_immutable():
    surface = classify_surface(0, 0, 5, 0.0)
    assert surface.is_snow is False
    with pytest.raises(dataclasses.FrozenInstanceError):
        surface.color = "#000000"


def test_tower_phase_is_signed():
    assert tower_phase(0, 35) == 0
    assert tower_phase(36, 35) == 1
    assert tower_phase(-36, 35) == -1
    assert tower_phase(-70, 35) == 0


@pytest.mark.parametrize("kwargs", [
    {"size_x": -1},
    {"size_z": -5},
    {"tower_interval": 0},
    {"wall_height_base": 1},
    {"fill_cap": -1},
    {"tower_zone": -2},
])
def test_malformed_config_fails_fast(kwargs):
    with pytest.raises(ValueError):
        SceneConfig(**kwargs)


def test_progress_callback_reaches_completion():
    seen = []
    generate_world(SceneConfig(size_x=3, size_z=3, vegetation_seed=0),
                   progress_callback=lambda pct, msg: seen.append(pct))
    assert seen[0] == 0
    assert seen[-1] == pytest.approx(100.0)
