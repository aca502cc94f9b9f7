"""Perfect maze generator using randomized depth-first carving."""

from __future__ import annotations

import argparse
import logging
import random
from typing import List, Optional

from .base import AbstractMazeGenerator
from .model import Cell, Maze, Position

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 21
DEFAULT_HEIGHT = 21

# right, down, left, up; two steps so moves land on odd coordinates
CARVE_DIRECTIONS = ((0, 2), (2, 0), (0, -2), (-2, 0))


class MazeGenerator(AbstractMazeGenerator):
    """Carve a spanning tree over the odd-coordinate cells of a walled grid."""

    def __init__(
        self,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        *,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        strict: bool = False,
    ) -> None:
        super().__init__(width, height, seed=seed, rng=rng, strict=strict)

    def create_maze(self) -> Maze:
        grid = [[Cell.WALL for _ in range(self.width)] for _ in range(self.height)]

        origin = (
            self._rng.randrange(1, self.height - 1, 2),
            self._rng.randrange(1, self.width - 1, 2),
        )
        grid[origin[0]][origin[1]] = Cell.OPEN
        stack: List[Position] = [origin]
        carved = 1

        while stack:
            r, c = stack[-1]
            candidates = []
            for dr, dc in CARVE_DIRECTIONS:
                nr, nc = r + dr, c + dc
                if 0 < nr < self.height - 1 and 0 < nc < self.width - 1 and grid[nr][nc] is Cell.WALL:
                    candidates.append((nr, nc, dr // 2, dc // 2))
            if candidates:
                nr, nc, wr, wc = self._rng.choice(candidates)
                grid[r + wr][c + wc] = Cell.OPEN
                grid[nr][nc] = Cell.OPEN
                stack.append((nr, nc))
                carved += 1
            else:
                stack.pop()

        start = (1, 1)
        end = (self.height - 2, self.width - 2)
        grid[start[0]][start[1]] = Cell.START
        grid[end[0]][end[1]] = Cell.END

        logger.debug(
            "Carved %dx%d maze from %s (%d cells)", self.height, self.width, origin, carved
        )
        return Maze(
            width=self.width,
            height=self.height,
            grid=tuple(tuple(row) for row in grid),
            start=start,
            end=end,
        )


def generate_maze(
    width: int = DEFAULT_WIDTH,
    height: int = DEFAULT_HEIGHT,
    *,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> Maze:
    return MazeGenerator(width, height, seed=seed, rng=rng).create_maze()


__all__ = ["MazeGenerator", "generate_maze", "DEFAULT_WIDTH", "DEFAULT_HEIGHT"]


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a perfect maze and print it as text")
    parser.add_argument("--width", type=int, default=DEFAULT_WIDTH, help="Odd width >= 5 (even values round down)")
    parser.add_argument("--height", type=int, default=DEFAULT_HEIGHT, help="Odd height >= 5 (even values round down)")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    maze = generate_maze(args.width, args.height, seed=args.seed)
    print("\n".join(maze.to_rows()))


if __name__ == "__main__":
    main()
