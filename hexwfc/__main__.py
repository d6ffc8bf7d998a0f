"""Command line entry point: generate a terrain map from a sample.

Examples:
    python -m hexwfc hexagonal 12
    python -m hexwfc hexagonal --seed AAEPWOIF
    python -m hexwfc square 40 20 --sample res/test-r3.txt --image map.png
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from hexwfc import config
from hexwfc.hexgrid import GridLayout, HexagonalGridLayout, SquareGridLayout
from hexwfc.render import save_grid_image
from hexwfc.terrain import TERRAIN_SYMBOLS, Terrain
from hexwfc.util import rng
from hexwfc.wfc import (
    Alternatives,
    Cell,
    Generator,
    IncompatibleSeedError,
    Seed,
    Template,
    WFCError,
    dump_grid,
    load_grid_file,
)

logger = logging.getLogger("hexwfc")

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
_LAYOUT_TYPES: dict[str, type[GridLayout]] = {
    "hexagonal": HexagonalGridLayout,
    "square": SquareGridLayout,
}
_handler: logging.Handler | None = None


def setup_logging(level: int | str = config.LOG_LEVEL) -> None:
    """Send ``hexwfc`` log records to the current stderr at ``level``.

    Calling this again replaces the handler installed by the previous call.
    """
    global _handler
    teardown_logging()
    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter(config.LOG_FORMAT))
    logger.addHandler(_handler)
    logger.setLevel(level)


def teardown_logging() -> None:
    """Detach the handler installed by ``setup_logging``, if any."""
    global _handler
    if _handler is not None:
        logger.removeHandler(_handler)
        _handler = None


def _positive_int(text: str) -> int:
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    # Options shared by both subcommands so they can follow the layout name
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--seed", type=str, help="Reproduce the map of a seed string")
    common.add_argument(
        "--sample",
        type=Path,
        default=config.DEFAULT_SAMPLE_PATH,
        help=f"Sample map file (default: {config.DEFAULT_SAMPLE_PATH.name})",
    )
    common.add_argument(
        "--verbose",
        action="store_true",
        help="Print the map after every step",
    )
    common.add_argument(
        "--max-steps",
        type=_positive_int,
        default=config.DEFAULT_MAX_STEPS,
        help="Give up after this many steps",
    )
    common.add_argument("--image", type=Path, help="Also write a PNG preview")
    common.add_argument("--log-level", choices=_LOG_LEVELS, help="Logging level")

    parser = argparse.ArgumentParser(
        prog="hexwfc",
        description="Generate a hex terrain map with Wave Function Collapse",
    )
    subparsers = parser.add_subparsers(dest="layout", required=True)
    hexagonal = subparsers.add_parser(
        "hexagonal", parents=[common], help="Hexagon shaped map"
    )
    hexagonal.add_argument(
        "radius",
        type=_positive_int,
        nargs="?",
        help=f"Radius including the centre cell (default: {config.DEFAULT_HEX_RADIUS})",
    )
    square = subparsers.add_parser("square", parents=[common], help="Rectangular map")
    square.add_argument("width", type=_positive_int, nargs="?")
    square.add_argument("height", type=_positive_int, nargs="?")
    return parser


def requested_layout(args: argparse.Namespace) -> GridLayout | None:
    """The layout named on the command line, or None if dimensions were omitted."""
    match args.layout:
        case "hexagonal":
            if args.radius is None:
                return None
            return HexagonalGridLayout(args.radius)
        case "square":
            if args.width is None or args.height is None:
                return None
            return SquareGridLayout(args.width, args.height)
        case _:
            raise ValueError(f"Unknown layout: {args.layout}")


def make_generator(
    args: argparse.Namespace, template: Template[Terrain]
) -> Generator[GridLayout, Terrain]:
    """Create a generator from the seed, the dimensions, or both.

    Raises:
        InvalidSeedError: If the seed string cannot be decoded.
        IncompatibleSeedError: If the seed describes a different map shape.
    """
    requested = requested_layout(args)
    if args.seed is not None:
        layout_type = _LAYOUT_TYPES[args.layout]
        seed = Seed.parse(args.seed)
        generator = Generator.new_with_seed(template, seed, layout_type)
        if requested is not None and requested != generator.layout:
            raise IncompatibleSeedError(
                f"Seed {args.seed} describes {generator.layout!r}, not {requested!r}"
            )
        return generator
    if requested is None:
        requested = HexagonalGridLayout(config.DEFAULT_HEX_RADIUS)
    return Generator.new_with_layout(template, requested)


def describe_cell(cell: Cell, template: Template[Terrain]) -> str:
    """One character for a cell in verbose output.

    ``.`` is untouched, ``?`` is narrowed by a neighbour and a collapsed cell
    shows its terrain.
    """
    if isinstance(cell, Alternatives):
        return "." if cell.count == len(template) else "?"
    return template.contribution(cell.tile).symbol


def generate_map(args: argparse.Namespace) -> int:
    sample = load_grid_file(args.sample, TERRAIN_SYMBOLS)
    template = Template.from_sample(sample)
    print(template.stats())

    generator = make_generator(args, template)
    print(f"Seed: {generator.seed}")

    if args.verbose:
        steps = 0
        while not generator.is_done():
            if args.max_steps is not None and steps >= args.max_steps:
                break
            coord = generator.step()
            steps += 1
            print(f"Step {steps}: {coord}")
            print(dump_grid(generator.grid, lambda cell: describe_cell(cell, template)))
        finished = generator.is_done()
    else:
        finished = generator.run(args.max_steps)

    if not finished:
        logger.error(f"Step budget of {args.max_steps} ran out before the map was done")
        return 1

    terrain = generator.export()
    print(dump_grid(terrain, lambda t: t.symbol), end="")
    if args.image is not None:
        save_grid_image(args.image, terrain, lambda t: t.color)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.layout == "square" and args.seed is None and args.height is None:
        parser.error("square maps need WIDTH and HEIGHT unless --seed is given")
    setup_logging(args.log_level or config.LOG_LEVEL)
    rng.init(config.RANDOM_SEED)

    try:
        return generate_map(args)
    except WFCError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1
    except OSError as e:
        logger.error(f"Could not read or write a file: {e}")
        return 1
    finally:
        teardown_logging()


if __name__ == "__main__":
    sys.exit(main())
