from __future__ import annotations

import base64
import logging
from pathlib import Path

import pytest

from hexwfc.__main__ import build_parser, main
from hexwfc.hexgrid import HexagonalGridLayout
from hexwfc.wfc import Generator, Seed, Template, load_grid_file

RES_PATH = Path(__file__).resolve().parents[1] / "res"
SPARSE = str(RES_PATH / "sparse.txt")


class TestArguments:
    def test_options_follow_the_layout(self) -> None:
        args = build_parser().parse_args(
            ["hexagonal", "6", "--seed", "AAEPWOIF", "--max-steps", "10"]
        )
        assert args.layout == "hexagonal"
        assert args.radius == 6
        assert args.seed == "AAEPWOIF"
        assert args.max_steps == 10

    def test_radius_must_be_positive(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["hexagonal", "0"])

    def test_square_needs_dimensions_without_seed(self) -> None:
        with pytest.raises(SystemExit):
            main(["square", "4"])


class TestMain:
    def test_generates_hexagonal_map(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["hexagonal", "4", "--sample", SPARSE, "--max-steps", "5000"]) == 0
        out = capsys.readouterr().out
        assert "Seed: " in out
        assert out.startswith("8 tiles")
        map_lines = out.splitlines()[-7:]
        assert map_lines[3].startswith(" ")
        assert len(map_lines[3].split()) == 7

    def test_seed_reproduces_map(self, capsys: pytest.CaptureFixture[str]) -> None:
        args = ["hexagonal", "--seed", "AAEPWOIF", "--sample", SPARSE]
        assert main(args) == 0
        first = capsys.readouterr().out
        assert main(args) == 0
        second = capsys.readouterr().out
        assert first == second
        assert "Seed: AAEPWOIF" in first
        assert len(first.splitlines()) == 2 + 15

    def test_seed_shape_mismatch_fails(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main(["square", "--seed", "AAEPWOIF", "--sample", SPARSE]) == 1
        assert main(["hexagonal", "5", "--seed", "AAEPWOIF", "--sample", SPARSE]) == 1

    def test_invalid_seed_fails(self) -> None:
        assert main(["hexagonal", "--seed", "not a seed", "--sample", SPARSE]) == 1

    @pytest.mark.parametrize(
        "data", [bytes([0x00, 0x00, 0x01]), bytes([0x01, 0x00, 0x04, 0x01])]
    )
    def test_empty_map_seed_fails(self, data: bytes) -> None:
        """A seed for a map with a zero dimension is reported, not raised."""
        text = base64.b32encode(data).decode("ascii").rstrip("=")
        for layout in ("hexagonal", "square"):
            assert main([layout, "--seed", text, "--sample", SPARSE]) == 1

    def test_missing_sample_fails(self, tmp_path: Path) -> None:
        assert main(["hexagonal", "3", "--sample", str(tmp_path / "none.txt")]) == 1

    def test_step_budget(self) -> None:
        assert main(["hexagonal", "6", "--sample", SPARSE, "--max-steps", "2"]) == 1

    def test_verbose_prints_progress(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["hexagonal", "2", "--sample", SPARSE, "--verbose"]) == 0
        out = capsys.readouterr().out
        assert "Step 1: q0r0" in out
        assert "?" in out

    def test_square_with_image(self, tmp_path: Path) -> None:
        image = tmp_path / "map.png"
        args = ["square", "5", "4", "--sample", SPARSE, "--image", str(image)]
        assert main(args) == 0
        assert image.exists()


class TestLogging:
    def test_handler_is_detached_after_main(self) -> None:
        logger = logging.getLogger("hexwfc")
        before = list(logger.handlers)
        assert main(["hexagonal", "2", "--sample", SPARSE]) == 0
        assert logger.handlers == before

    def test_later_logging_after_captured_run(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Generation logging after a CLI run does not write to a stale stream."""
        assert main(["hexagonal", "2", "--sample", SPARSE]) == 0
        capsys.readouterr()
        template = Template.from_sample(load_grid_file(SPARSE))
        generator = Generator.new_with_layout(template, HexagonalGridLayout(2))
        assert generator.run(max_steps=1000)
        assert "Logging error" not in capsys.readouterr().err
