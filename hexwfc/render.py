"""PNG previews of hex grids using Pillow.

Cells are drawn as pointy-top hexagons. ``size`` is the distance from a cell's
centre to its corners, so neighbouring centres are ``sqrt(3) * size`` apart
along a row and rows are ``1.5 * size`` apart.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from pathlib import Path
from typing import Any

from PIL import Image as PILImage
from PIL import ImageDraw

from hexwfc import config
from hexwfc.hexgrid import Grid, HexCoord
from hexwfc.types import ColorRGB

logger = logging.getLogger(__name__)

_SQRT3 = math.sqrt(3.0)


def hex_to_pixel(coord: HexCoord, size: float) -> tuple[float, float]:
    """Centre of a pointy-top hex relative to the origin's centre."""
    return size * _SQRT3 * (coord.q + coord.r / 2), size * 1.5 * coord.r


def hex_corners(center: tuple[float, float], size: float) -> list[tuple[float, float]]:
    cx, cy = center
    corners = []
    for i in range(6):
        angle = math.radians(60 * i - 30)
        corners.append((cx + size * math.cos(angle), cy + size * math.sin(angle)))
    return corners


def render_grid_image[T](
    grid: Grid[Any, T],
    color: Callable[[T], ColorRGB],
    size: int = config.IMAGE_HEX_SIZE,
    margin: int = config.IMAGE_MARGIN,
) -> PILImage.Image:
    """Draw every cell of ``grid`` filled with ``color(value)``.

    Args:
        grid: Grid to draw. Any layout works.
        color: Maps a cell value to an RGB fill colour.
        size: Hex centre-to-corner distance in pixels.
        margin: Empty border around the map in pixels.

    Returns:
        An RGB image just large enough to hold the map and its margin.
    """
    centers = [(coord, hex_to_pixel(coord, size)) for coord in grid.layout]
    if not centers:
        size_px = (2 * margin, 2 * margin)
        return PILImage.new("RGB", size_px, config.IMAGE_BACKGROUND_COLOR)

    half_width = size * _SQRT3 / 2
    min_x = min(x for _, (x, _) in centers) - half_width
    max_x = max(x for _, (x, _) in centers) + half_width
    min_y = min(y for _, (_, y) in centers) - size
    max_y = max(y for _, (_, y) in centers) + size

    width = math.ceil(max_x - min_x) + 2 * margin
    height = math.ceil(max_y - min_y) + 2 * margin
    image = PILImage.new("RGB", (width, height), config.IMAGE_BACKGROUND_COLOR)
    draw = ImageDraw.Draw(image)

    for coord, (x, y) in centers:
        center = (x - min_x + margin, y - min_y + margin)
        draw.polygon(
            hex_corners(center, size),
            fill=tuple(color(grid[coord])),
            outline=config.IMAGE_OUTLINE_COLOR,
        )
    return image


def save_grid_image[T](
    path: str | Path,
    grid: Grid[Any, T],
    color: Callable[[T], ColorRGB],
    size: int = config.IMAGE_HEX_SIZE,
) -> Path:
    """Render ``grid`` and write it as a PNG file. Returns the written path."""
    path = Path(path)
    image = render_grid_image(grid, color, size)
    image.save(path, format="PNG")
    logger.info(f"Saved {image.width}x{image.height} preview to {path}")
    return path
