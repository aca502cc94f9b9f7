#!/usr/bin/env python3
"""Solve a batch of random mazes with every strategy and report averages."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Dict, List

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from labyrinth import MazeGenerator, Strategy, solve
from labyrinth.generator import DEFAULT_HEIGHT, DEFAULT_WIDTH


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("count", type=int, help="Number of mazes to generate")
    parser.add_argument("--width", type=int, default=DEFAULT_WIDTH, help="Maze width (odd, >= 5)")
    parser.add_argument("--height", type=int, default=DEFAULT_HEIGHT, help="Maze height (odd, >= 5)")
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Optional RNG seed for reproducible batches",
    )
    parser.add_argument("--json", action="store_true", help="Print the summary as JSON")
    return parser.parse_args()


def main() -> None:
    args = _parse_args()
    if args.count < 1:
        raise ValueError("count must be at least 1")

    generator = MazeGenerator(args.width, args.height, seed=args.seed)
    totals: Dict[str, Dict[str, float]] = {
        member.value: {"path_length": 0.0, "explored": 0.0, "solve_time": 0.0, "unsolved": 0.0}
        for member in Strategy
    }

    for index, maze in enumerate(generator.generate_batch(args.count), start=1):
        lengths: List[str] = []
        for member in Strategy:
            result = solve(maze, member)
            bucket = totals[member.value]
            bucket["path_length"] += result.path_length
            bucket["explored"] += result.explored
            bucket["solve_time"] += result.elapsed
            if not result.found:
                bucket["unsolved"] += 1
            lengths.append(f"{member.value}={result.path_length}/{result.explored}")
        if not args.json:
            print(f"[{index}/{args.count}] " + " ".join(lengths))

    summary = {
        name: {key: value / args.count for key, value in bucket.items()}
        for name, bucket in totals.items()
    }
    for name in summary:
        summary[name]["unsolved"] = int(totals[name]["unsolved"])

    if args.json:
        print(json.dumps(summary, indent=2))
        return
    for name, stats in summary.items():
        print(
            f"{name:>5}: path {stats['path_length']:.1f}  explored {stats['explored']:.1f}  "
            f"time {stats['solve_time'] * 1000:.3f}ms  unsolved {stats['unsolved']}"
        )


if __name__ == "__main__":
    main()
