"""GLB export of generated worlds."""

import pytest
import trimesh

from brickworld.export import export_glb
from brickworld.models import SceneConfig
from brickworld.world import generate_world


def test_export_writes_one_mesh_per_kind_and_colour(tmp_path):
    bricks = generate_world(SceneConfig(size_x=4, size_z=4, vegetation_seed=5))
    output = tmp_path / "world.glb"
    result = export_glb(bricks, str(output))

    assert output.exists() and output.stat().st_size > 0
    assert result["output_path"] == str(output)
    assert result["bricks"] == len(bricks)
    assert result["meshes"] == len({(b.kind, b.color) for b in bricks})
    assert result["faces"] == 12 * len(bricks)

    scene = trimesh.load(str(output), force='scene')
    assert len(scene.geometry) == result["meshes"]


def test_export_reports_progress(tmp_path):
    bricks = generate_world(SceneConfig(size_x=2, size_z=2, vegetation_seed=5))
    seen = []
    export_glb(bricks, str(tmp_path / "p.glb"), progress_callback=lambda pct, msg: seen.append(msg))
    assert seen[0] == "Grouping bricks..."
    assert seen[-1] == "Writing GLB..."


def test_export_rejects_empty_world(tmp_path):
    with pytest.raises(ValueError, match="No bricks"):
        export_glb([], str(tmp_path / "empty.glb"))
