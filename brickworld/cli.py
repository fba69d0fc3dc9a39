"""Click CLI commands for BrickWorld."""

import asyncio
import json
import logging
from typing import Optional

import click

from .export import export_glb
from .guide import GuideAssistant, GuideSession
from .models import SceneConfig, SceneTime
from .scene import describe_brick, summarize_world
from .world import generate_world

logger = logging.getLogger(__name__)


def _grid_options(func):
    func = click.option('--seed', type=int, default=None,
                        help='Vegetation seed (omit for a fresh forest each run)')(func)
    func = click.option('--size-z', type=int, default=None, help='Grid half-depth')(func)
    func = click.option('--size-x', type=int, default=None, help='Grid half-width')(func)
    return func


def _make_config(size_x: Optional[int], size_z: Optional[int], seed: Optional[int]) -> SceneConfig:
    kwargs = {'vegetation_seed': seed}
    if size_x is not None:
        kwargs['size_x'] = size_x
    if size_z is not None:
        kwargs['size_z'] = size_z
    try:
        return SceneConfig(**kwargs)
    except ValueError as e:
        raise click.BadParameter(str(e))


@click.group()
def cli():
    """BrickWorld CLI for generating and exploring the brick Great Wall."""
    pass


@cli.command()
@_grid_options
@click.option('--json', 'json_path', default=None, help='Write all bricks to this JSON file')
def generate(size_x, size_z, seed, json_path):
    """Generate the world and print a summary."""
    config = _make_config(size_x, size_z, seed)
    try:
        bricks = generate_world(config)
        summary = summarize_world(bricks)
        click.echo(f"Generated {summary['bricks']} bricks over {summary['columns']} columns")
        for kind, count in summary['kinds'].items():
            click.echo(f"  {kind:<8} {count}")
        if json_path:
            with open(json_path, 'w') as f:
                json.dump([b.to_dict() for b in bricks], f)
            click.echo(f"Bricks written to {json_path}")
    except Exception as e:
        logger.error(f"Error generating world: {e}")
        raise click.ClickException(str(e))


@cli.command()
@_grid_options
@click.option('--output', '-o', default='world.glb', help='Output GLB file path')
def export(size_x, size_z, seed, output):
    """Export the generated world as a GLB model."""
    config = _make_config(size_x, size_z, seed)
    try:
        def _progress(pct, msg):
            click.echo(f"[{pct:3.0f}%] {msg}")

        bricks = generate_world(config)
        result = export_glb(bricks, output, progress_callback=_progress)
        click.echo(f"Wrote {result['bricks']} bricks as {result['meshes']} meshes "
                   f"to {result['output_path']}")
    except Exception as e:
        logger.error(f"Error exporting world: {e}")
        raise click.ClickException(str(e))


@cli.command()
@click.argument('x', type=int)
@click.argument('z', type=int)
@_grid_options
def inspect(x, z, size_x, size_z, seed):
    """Show inspector details for every brick in column (X, Z)."""
    config = _make_config(size_x, size_z, seed)
    if not config.in_bounds(x, z):
        raise click.BadParameter(f"Column ({x}, {z}) is outside the grid")
    column = [b for b in generate_world(config) if b.x == x and b.z == z]
    for brick in sorted(column, key=lambda b: b.y, reverse=True):
        click.echo(describe_brick(brick))
        click.echo("-" * 40)


@cli.command()
@click.argument('question')
@click.option('--time', 'time_of_day', type=click.Choice([t.value for t in SceneTime]),
              default=SceneTime.DAY.value, help='Time of day shown in the scene')
def chat(question, time_of_day):
    """Ask the Lego Historian a single question."""
    session = GuideSession(GuideAssistant(), SceneTime(time_of_day))
    reply = asyncio.run(session.ask(question))
    click.echo(reply or "")


if __name__ == '__main__':
    cli()
