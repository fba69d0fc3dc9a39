"""Palette, default scene constants, paths and logging setup."""

import os
import pathlib
import logging

from dotenv import load_dotenv

# ── Brick palette ────────────────────────────────────────────────────────
# Official LEGO colour approximations.
LEGO_COLORS = {
    # Greens
    'DARK_GREEN': '#2E5543',     # Earth Green
    'GREEN': '#237841',          # Dark Green
    'OLIVE': '#6B8E23',          # Olive Green
    'BRIGHT_GREEN': '#4B9F4A',   # Bright Green
    'SAND_GREEN': '#A0BCAC',     # Sand Green

    # Earth tones
    'BROWN': '#582A12',          # Reddish Brown
    'DARK_BROWN': '#352100',     # Dark Brown
    'DARK_TAN': '#958A73',       # Dark Tan
    'TAN': '#E4CD9E',            # Brick Yellow
    'WARM_TAN': '#D6C595',       # sunlit stone

    # Greys (stone)
    'LIGHT_GRAY': '#9BA19D',     # Medium Stone Grey
    'DARK_GRAY': '#635F52',      # Dark Stone Grey
    'VERY_LIGHT_GRAY': '#E5E4DE',
    'BLUISH_GRAY': '#6C6E68',    # Dark Bluish Gray

    # Others
    'BLACK': '#1B2A34',
    'WATER': '#0055BF',          # Dark Azure
    'FOAM': '#C0DFF6',           # Light Royal Blue
    'RED': '#C91A09',            # Bright Red (flags)
    'GOLD': '#C2B280',
    'SNOW': '#FFFFFF',
}

# Tans and greys for sunlit wall masonry
STONE_VARIANTS = [
    LEGO_COLORS['LIGHT_GRAY'],
    LEGO_COLORS['TAN'],
    LEGO_COLORS['WARM_TAN'],
    LEGO_COLORS['DARK_TAN'],
    LEGO_COLORS['LIGHT_GRAY'],
]

FOLIAGE_VARIANTS = [
    LEGO_COLORS['DARK_GREEN'],
    LEGO_COLORS['GREEN'],
    LEGO_COLORS['OLIVE'],
    LEGO_COLORS['BRIGHT_GREEN'],
    LEGO_COLORS['SAND_GREEN'],
]

HIGHLIGHT_COLOR = '#FFD700'

# ── Scene defaults ───────────────────────────────────────────────────────
SCENE_DEFAULTS = {
    'size_x': 80,              # half-width of the grid (x)
    'size_z': 50,              # half-depth of the grid (z)
    'wall_height_base': 7,     # layers of a plain wall segment
    'tower_interval': 35,      # x period between watchtowers
    'wall_half_width': 1.5,
    'tower_half_width': 4.5,
    'tower_zone': 4,           # |x rem interval| below this is a tower band
    'fill_cap': 6,             # max extra layers filled under a cliff edge
}

# ── Biome thresholds ─────────────────────────────────────────────────────
SNOW_LINE = 28          # elevation above which far-from-wall columns are snow
SNOW_CLEARANCE = 10.0   # min distance from the wall line for snow
ROCK_LINE = 15          # above this the surface is rock, subsurface bedrock
TREE_LINE = 25          # vegetation only grows below this elevation

TREE_THRESHOLD = 0.97
TREE_CLEARANCE = 3.0
BUSH_THRESHOLD = 0.90
BUSH_CLEARANCE = 2.0
TOWER_EXTRA_HEIGHT = 5
WINDOW_MIN_LAYER = 4

# Load environment variables (API_KEY for the guide)
load_dotenv()

# Configure base paths
BASE_DIR = pathlib.Path(__file__).parent.parent.absolute()
OUTPUT_DIR = pathlib.Path(os.environ.get("BRICKWORLD_OUTPUT_DIR", BASE_DIR / "output"))

# Configure logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)
