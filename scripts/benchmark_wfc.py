#!/usr/bin/env python3
"""Benchmark template construction and map generation."""

from __future__ import annotations

import argparse
import json
import time
from pathlib import Path

from hexwfc import config
from hexwfc.terrain import TERRAIN_SYMBOLS, Terrain
from hexwfc.wfc import (
    Alternatives,
    Generator,
    HexagonalSeedType,
    Seed,
    SeedType,
    SquareSeedType,
    Template,
    load_grid_file,
)

SEED_TYPES: tuple[SeedType, ...] = (
    HexagonalSeedType(8),
    HexagonalSeedType(16),
    HexagonalSeedType(32),
    SquareSeedType(30, 30),
    SquareSeedType(60, 40),
)


def _size_key(seed_type: SeedType) -> str:
    match seed_type:
        case HexagonalSeedType(radius=radius):
            return f"hex r{radius}"
        case SquareSeedType(width=width, height=height):
            return f"{width}x{height}"


class WFCBenchmark:
    """Benchmark runner for the hex WFC generator."""

    def __init__(self, sample: Path, iterations: int) -> None:
        self.sample = load_grid_file(sample, TERRAIN_SYMBOLS)
        self.iterations = iterations
        self.template: Template[Terrain] | None = None
        self.results: dict[str, dict[str, float]] = {}

    def _time_template(self) -> float:
        """Build the template ``iterations`` times; return average ms."""
        elapsed_total = 0.0
        for _ in range(self.iterations):
            start = time.perf_counter()
            self.template = Template.from_sample(self.sample)
            elapsed_total += time.perf_counter() - start
        return (elapsed_total / self.iterations) * 1000.0

    def _run_case(self, seed_type: SeedType) -> tuple[float, float]:
        """Return average generation time in ms and average rewinds per map."""
        assert self.template is not None
        elapsed_total = 0.0
        rewinds_total = 0
        for i in range(self.iterations):
            generator = Generator.new_with_seed(self.template, Seed(seed_type, i))

            start = time.perf_counter()
            while (coord := generator.step()) is not None:
                # A step that leaves its cell uncollapsed was a rewind
                if isinstance(generator.grid[coord], Alternatives):
                    rewinds_total += 1
            elapsed_total += time.perf_counter() - start

        return (
            (elapsed_total / self.iterations) * 1000.0,
            rewinds_total / self.iterations,
        )

    def run(self) -> None:
        """Run all configured benchmarks."""
        print("WFC Benchmark")
        print("=" * 48)
        print(f"Iterations per case: {self.iterations}")

        template_ms = self._time_template()
        assert self.template is not None
        self.results["template"] = {"ms": template_ms}
        print(f"Template build: {template_ms:.2f}ms ({self.template.stats()})")
        print()
        print(f"{'Size':>12} {'Cells':>8} {'Generate (ms)':>15} {'Rewinds':>9}")
        print("-" * 48)

        for seed_type in SEED_TYPES:
            generate_ms, rewinds = self._run_case(seed_type)
            size_key = _size_key(seed_type)
            self.results[size_key] = {"ms": generate_ms, "rewinds": rewinds}
            cells = seed_type.layout().size()
            print(f"{size_key:>12} {cells:>8} {generate_ms:15.2f} {rewinds:9.1f}")

    def save_results(self, filename: str) -> None:
        """Save benchmark output to a JSON file."""
        with Path(filename).open("w") as f:
            json.dump(self.results, f, indent=2)
        print(f"\nSaved benchmark results to {filename}")

    def compare_with_baseline(self, baseline_file: str) -> None:
        """Compare current run with a saved baseline JSON file."""
        try:
            with Path(baseline_file).open() as f:
                baseline: dict[str, dict[str, float]] = json.load(f)
        except FileNotFoundError:
            print(f"\nBaseline file not found: {baseline_file}")
            return

        print(f"\nComparison vs baseline: {baseline_file}")
        print("=" * 64)

        for size_key, current in self.results.items():
            if size_key not in baseline:
                continue

            old_ms = baseline[size_key].get("ms", 0.0)
            new_ms = current["ms"]
            if old_ms <= 0:
                continue

            delta_pct = ((new_ms - old_ms) / old_ms) * 100.0
            speed_ratio = old_ms / new_ms if new_ms > 0 else 0.0
            trend = "faster" if speed_ratio > 1.0 else "slower"

            print(
                f"{size_key:>12}: {new_ms:8.2f}ms "
                f"vs {old_ms:8.2f}ms | {speed_ratio:5.2f}x {trend} "
                f"({delta_pct:+6.1f}%)"
            )


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Benchmark hex WFC generation")
    parser.add_argument(
        "--iterations",
        type=int,
        default=5,
        help="Number of runs per case (default: 5)",
    )
    parser.add_argument(
        "--sample",
        type=Path,
        default=config.DEFAULT_SAMPLE_PATH,
        help="Sample map to build the template from",
    )
    parser.add_argument("--save", type=str, help="Save current results to JSON")
    parser.add_argument(
        "--compare",
        type=str,
        help="Compare current results against baseline JSON",
    )
    args = parser.parse_args(argv)

    benchmark = WFCBenchmark(args.sample, iterations=args.iterations)
    benchmark.run()

    if args.save:
        benchmark.save_results(args.save)

    if args.compare:
        benchmark.compare_with_baseline(args.compare)


if __name__ == "__main__":
    main()
