"""Traced BFS, DFS and A* solvers for perfect mazes."""

from __future__ import annotations

import argparse
import heapq
import itertools
import json
import logging
import time
from collections import deque
from dataclasses import replace
from enum import Enum
from pathlib import Path as FilePath
from typing import Deque, Dict, List, Optional, Set, Tuple, Union

from .base import AbstractMazeSolver
from .generator import DEFAULT_HEIGHT, DEFAULT_WIDTH, generate_maze
from .model import Maze, Path, Position, SolveResult, StepRecord

logger = logging.getLogger(__name__)


class Strategy(str, Enum):
    BFS = "bfs"
    DFS = "dfs"
    ASTAR = "astar"

    @classmethod
    def parse(cls, value: Union[str, "Strategy"]) -> "Strategy":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            choices = ", ".join(member.value for member in cls)
            raise ValueError(f"Unknown strategy {value!r}; expected one of: {choices}") from exc


def manhattan(a: Position, b: Position) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


class BreadthFirstSolver(AbstractMazeSolver):
    """FIFO search; the first path reaching the end is a shortest one."""

    name = Strategy.BFS.value

    def solve(self, maze: Maze) -> SolveResult:
        queue: Deque[Tuple[Position, Path]] = deque([(maze.start, (maze.start,))])
        visited: Set[Position] = {maze.start}
        steps: List[StepRecord] = []

        while queue:
            position, path = queue.popleft()
            self._record(steps, position, path, visited)
            if position == maze.end:
                return self._result(path, steps)
            for neighbor in maze.neighbors(position):
                if neighbor not in visited:
                    visited.add(neighbor)
                    queue.append((neighbor, path + (neighbor,)))

        return self._result(None, steps)


class DepthFirstSolver(AbstractMazeSolver):
    """LIFO search marking positions visited when pushed, not when popped."""

    name = Strategy.DFS.value

    def solve(self, maze: Maze) -> SolveResult:
        stack: List[Tuple[Position, Path]] = [(maze.start, (maze.start,))]
        visited: Set[Position] = {maze.start}
        steps: List[StepRecord] = []

        while stack:
            position, path = stack.pop()
            self._record(steps, position, path, visited)
            if position == maze.end:
                return self._result(path, steps)
            for neighbor in maze.neighbors(position):
                if neighbor not in visited:
                    visited.add(neighbor)
                    stack.append((neighbor, path + (neighbor,)))

        return self._result(None, steps)


class AStarSolver(AbstractMazeSolver):
    """Best-first search on g + Manhattan distance.

    Improved g-scores push a fresh heap entry instead of decreasing a key;
    entries whose position is already closed are dropped when popped. A
    running sequence number breaks f-score ties in insertion order.
    """

    name = Strategy.ASTAR.value

    def solve(self, maze: Maze) -> SolveResult:
        counter = itertools.count()
        open_heap: List[Tuple[int, int, int, Position, Path]] = [
            (manhattan(maze.start, maze.end), next(counter), 0, maze.start, (maze.start,))
        ]
        g_scores: Dict[Position, int] = {maze.start: 0}
        closed: Set[Position] = set()
        steps: List[StepRecord] = []

        while open_heap:
            _, _, g_score, position, path = heapq.heappop(open_heap)
            if position in closed:
                continue
            self._record(steps, position, path, closed)
            if position == maze.end:
                return self._result(path, steps)
            closed.add(position)

            for neighbor in maze.neighbors(position):
                if neighbor in closed:
                    continue
                tentative = g_score + 1
                if neighbor not in g_scores or tentative < g_scores[neighbor]:
                    g_scores[neighbor] = tentative
                    f_score = tentative + manhattan(neighbor, maze.end)
                    heapq.heappush(
                        open_heap,
                        (f_score, next(counter), tentative, neighbor, path + (neighbor,)),
                    )

        return self._result(None, steps)


_SOLVERS = {
    Strategy.BFS: BreadthFirstSolver,
    Strategy.DFS: DepthFirstSolver,
    Strategy.ASTAR: AStarSolver,
}


def get_solver(strategy: Union[str, Strategy]) -> AbstractMazeSolver:
    return _SOLVERS[Strategy.parse(strategy)]()


def solve(maze: Maze, strategy: Union[str, Strategy] = Strategy.BFS) -> SolveResult:
    """Solve ``maze`` with the chosen strategy and time the search."""

    solver = get_solver(strategy)
    started = time.perf_counter()
    result = solver.solve(maze)
    elapsed = time.perf_counter() - started
    logger.debug(
        "%s explored %d cells, path length %d, %.6fs",
        solver.name,
        result.explored,
        result.path_length,
        elapsed,
    )
    return replace(result, elapsed=elapsed)


__all__ = [
    "AStarSolver",
    "BreadthFirstSolver",
    "DepthFirstSolver",
    "Strategy",
    "get_solver",
    "manhattan",
    "solve",
]


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    from .render import DEFAULT_CELL_SIZE, DEFAULT_SPEED

    parser = argparse.ArgumentParser(description="Generate a maze, solve it and report statistics")
    parser.add_argument("--width", type=int, default=DEFAULT_WIDTH)
    parser.add_argument("--height", type=int, default=DEFAULT_HEIGHT)
    parser.add_argument(
        "--algorithm",
        type=str,
        default=Strategy.BFS.value,
        choices=[member.value for member in Strategy],
    )
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--gif", type=FilePath, default=None, help="Write the step-by-step playback to this GIF")
    parser.add_argument("--png", type=FilePath, default=None, help="Write the solved maze to this PNG")
    parser.add_argument("--speed", type=int, default=DEFAULT_SPEED, help="Playback steps per second (1-50)")
    parser.add_argument("--cell-size", type=int, default=DEFAULT_CELL_SIZE)
    parser.add_argument(
        "--no-animation",
        action="store_true",
        help="Only keep the final frame in the GIF instead of every step",
    )
    parser.add_argument("--steps", action="store_true", help="Include the full step trace in the JSON output")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    from .render import save_frame, save_playback

    args = _parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    maze = generate_maze(args.width, args.height, seed=args.seed)
    result = solve(maze, args.algorithm)
    if not result.found:
        logger.warning("No path from %s to %s", maze.start, maze.end)
    if args.gif is not None:
        save_playback(
            maze,
            result,
            args.gif,
            speed=args.speed,
            cell_size=args.cell_size,
            animate=not args.no_animation,
        )
        logger.info("Saved playback to %s", args.gif)
    if args.png is not None:
        save_frame(maze, args.png, final_path=result.final_path, cell_size=args.cell_size)
        logger.info("Saved solution to %s", args.png)
    print(json.dumps(result.to_dict(include_steps=args.steps), indent=2))


if __name__ == "__main__":
    main()
