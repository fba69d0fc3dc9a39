"""BrickWorld package — procedural brick-built Great Wall landscape.

Import constants FIRST so the .env file and logging are configured
before any other module reads the environment.
"""

from brickworld import constants as _constants  # noqa: F401

from brickworld.models import Brick, BrickKind, SceneConfig, SceneTime, ChatMessage
from brickworld.world import WorldGenerator, generate_world
