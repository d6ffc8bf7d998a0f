"""
Configuration constants.

Centralizes the default paths, seeds and sizes used by the generator and its
command line interface.
"""

import logging
from pathlib import Path

from hexwfc.types import RandomSeed

# =============================================================================
# GENERAL
# =============================================================================

PROJECT_ROOT_PATH = Path(__file__).resolve().parent.parent

# Master seed for the named RNG streams (fresh map seeds are drawn from the
# "wfc.seed" stream). None draws from system entropy.
RANDOM_SEED: RandomSeed = None

# =============================================================================
# SAMPLES
# =============================================================================

RES_PATH = PROJECT_ROOT_PATH / "res"
DEFAULT_SAMPLE_PATH = RES_PATH / "test.txt"

# =============================================================================
# GENERATION
# =============================================================================

DEFAULT_HEX_RADIUS = 8

# Step budget used by the CLI when --max-steps is not given. None means run
# until the generator reports it is done.
DEFAULT_MAX_STEPS: int | None = None

# =============================================================================
# LOGGING
# =============================================================================

LOG_LEVEL = logging.INFO
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# =============================================================================
# PNG PREVIEW
# =============================================================================

IMAGE_HEX_SIZE = 12  # Distance from hex centre to corner, in pixels
IMAGE_MARGIN = 4
IMAGE_OUTLINE_COLOR = (40, 40, 40)
IMAGE_BACKGROUND_COLOR = (0, 0, 0)
