"""Renderer-side view state over a generated brick list.

The brick list is an immutable snapshot.  Hover highlighting and
selection live here as separate display state: a hover override is kept
apart from each brick's canonical colour, so ending a hover simply drops
the override.
"""

import logging
from collections import Counter
from typing import Callable, Dict, Optional, Sequence

from .constants import HIGHLIGHT_COLOR
from .models import Brick, SceneTime

logger = logging.getLogger(__name__)

DEFAULT_BRICK_DESCRIPTION = ("A standard high-quality ABS plastic brick used to "
                             "construct this procedural world.")


class InteractionState:
    """Hover and selection state keyed by brick index."""

    def __init__(self, bricks: Sequence[Brick], highlight_color: str = HIGHLIGHT_COLOR,
                 on_select: Optional[Callable[[Brick], None]] = None,
                 on_deselect: Optional[Callable[[], None]] = None):
        self.bricks = tuple(bricks)
        self.highlight_color = highlight_color
        self.on_select = on_select
        self.on_deselect = on_deselect
        self.hovered_id: Optional[int] = None
        self.selected_id: Optional[int] = None
        self._overrides: Dict[int, str] = {}

    def _check(self, index: int) -> None:
        if not 0 <= index < len(self.bricks):
            raise IndexError(f"Brick index {index} out of range (0..{len(self.bricks) - 1})")

    def canonical_color(self, index: int) -> str:
        self._check(index)
        return self.bricks[index].color

    def displayed_color(self, index: int) -> str:
        self._check(index)
        return self._overrides.get(index, self.bricks[index].color)

    def hover(self, index: int) -> None:
        self._check(index)
        if self.hovered_id is not None and self.hovered_id != index:
            self._overrides.pop(self.hovered_id, None)
        self.hovered_id = index
        self._overrides[index] = self.highlight_color

    def unhover(self) -> None:
        if self.hovered_id is not None:
            self._overrides.pop(self.hovered_id, None)
        self.hovered_id = None

    @property
    def selected(self) -> Optional[Brick]:
        if self.selected_id is None:
            return None
        return self.bricks[self.selected_id]

    def select(self, index: int) -> Brick:
        self._check(index)
        self.selected_id = index
        brick = self.bricks[index]
        logger.debug(f"Selected brick {index}: {brick.name} at {brick.position}")
        if self.on_select:
            self.on_select(brick)
        return brick

    def deselect(self) -> None:
        """Clear the selection (click on empty background)."""
        self.selected_id = None
        if self.on_deselect:
            self.on_deselect()


def describe_brick(brick: Brick) -> str:
    """Inspector panel text for one brick."""
    x, y, z = brick.position
    return "\n".join([
        brick.name,
        f"POS: {x}, {y}, {z}",
        brick.description or DEFAULT_BRICK_DESCRIPTION,
        f"Color Hex: {brick.color}",
    ])


def summarize_world(bricks: Sequence[Brick]) -> dict:
    """Counts and extents of a brick list."""
    if not bricks:
        return {"bricks": 0, "columns": 0, "kinds": {}, "bounds": None}

    xs = [b.x for b in bricks]
    ys = [b.y for b in bricks]
    zs = [b.z for b in bricks]
    columns = {(b.x, b.z) for b in bricks}
    return {
        "bricks": len(bricks),
        "columns": len(columns),
        "kinds": dict(sorted(Counter(b.kind.value for b in bricks).items())),
        "bounds": {
            "x": [min(xs), max(xs)],
            "y": [min(ys), max(ys)],
            "z": [min(zs), max(zs)],
        },
    }


def scene_context(time_of_day: SceneTime = SceneTime.DAY) -> str:
    """Scene description handed to the guide alongside the chat history."""
    time_of_day = SceneTime(time_of_day)
    return (f"Time of day: {time_of_day.value}. The user is looking at a procedural "
            f"LEGO model of the Great Wall, showing watchtowers on varied terrain.")
