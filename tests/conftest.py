from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from hexwfc.hexgrid import Grid, HexagonalGridLayout
from hexwfc.terrain import TERRAIN_SYMBOLS, Terrain
from hexwfc.util import rng
from hexwfc.wfc import Template, load_grid_file

RES_PATH = Path(__file__).resolve().parents[1] / "res"


@pytest.fixture(autouse=True)
def seeded_rng_streams() -> Iterator[None]:
    """Give every test the same named RNG streams."""
    rng.init(0)
    yield
    rng.init(None)


@pytest.fixture
def small_sample() -> Grid[HexagonalGridLayout, str]:
    """Radius 3 sample of raw symbols with ocean, mountain and forest bands."""
    return load_grid_file(RES_PATH / "test-r3.txt")


@pytest.fixture
def sparse_sample() -> Grid[HexagonalGridLayout, str]:
    """Radius 4 ocean with a single mountain in the centre."""
    return load_grid_file(RES_PATH / "sparse.txt")


@pytest.fixture(scope="session")
def sparse_template() -> Template[str]:
    return Template.from_sample(load_grid_file(RES_PATH / "sparse.txt"))


@pytest.fixture(scope="session")
def island_template() -> Template[Terrain]:
    """Template of the bundled radius 5 island sample."""
    return Template.from_sample(load_grid_file(RES_PATH / "test.txt", TERRAIN_SYMBOLS))
