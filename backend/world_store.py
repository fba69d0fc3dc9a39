import logging
import threading
from typing import List, Optional

from brickworld import Brick, SceneConfig, generate_world

from backend import config

logger = logging.getLogger(__name__)


class WorldStore:
    """Generates the scene once and serves the same snapshot afterwards."""

    def __init__(self, scene_config: Optional[SceneConfig] = None) -> None:
        self.scene_config = scene_config
        self._bricks: Optional[List[Brick]] = None
        self._lock = threading.Lock()

    def get(self) -> List[Brick]:
        with self._lock:
            if self._bricks is None:
                scene_config = self.scene_config or SceneConfig(vegetation_seed=config.WORLD_SEED)
                logger.info(f"Generating world (seed={scene_config.vegetation_seed})")
                self._bricks = generate_world(scene_config)
            return self._bricks


# Singleton instance used across the application
world_store = WorldStore()
