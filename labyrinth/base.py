"""Abstract interfaces for maze generation and solving."""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from typing import AbstractSet, List, Optional, Sequence

from .model import Maze, Path, Position, SolveResult, StepRecord

MIN_DIMENSION = 5


def normalize_dimension(value: int, *, minimum: int = MIN_DIMENSION, strict: bool = False) -> int:
    """Coerce a requested width or height to an odd value of at least ``minimum``.

    Even values are decremented by one. Values that still fall below
    ``minimum`` are clamped up to it, or rejected when ``strict`` is set.
    """

    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"Maze dimension must be an integer, got {type(value).__name__}")
    if value < 1:
        raise ValueError(f"Maze dimension must be positive, got {value}")
    if value % 2 == 0:
        value -= 1
    if value < minimum:
        if strict:
            raise ValueError(f"Maze dimension must be at least {minimum}, got {value}")
        value = minimum
    return value


class AbstractMazeGenerator(ABC):
    """Base class for builders that emit ready-to-solve mazes."""

    def __init__(
        self,
        width: int,
        height: int,
        *,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        strict: bool = False,
    ) -> None:
        self.width = normalize_dimension(width, strict=strict)
        self.height = normalize_dimension(height, strict=strict)
        self.seed = seed
        self._rng = rng if rng is not None else random.Random(seed)

    @abstractmethod
    def create_maze(self) -> Maze:
        """Create a single randomized maze instance."""

    def generate_batch(self, count: int) -> List[Maze]:
        """Generate ``count`` independent mazes from the same random stream."""

        return [self.create_maze() for _ in range(count)]


class AbstractMazeSolver(ABC):
    """Base class scaffolding for traced path searches."""

    name: str = ""

    @abstractmethod
    def solve(self, maze: Maze) -> SolveResult:
        """Search ``maze`` from its start to its end, recording every expansion."""

    def _record(
        self,
        steps: List[StepRecord],
        position: Position,
        path: Path,
        visited: AbstractSet[Position],
    ) -> None:
        steps.append(StepRecord(current_position=position, current_path=path, visited=frozenset(visited)))

    def _result(self, final_path: Optional[Path], steps: Sequence[StepRecord]) -> SolveResult:
        return SolveResult(strategy=self.name, final_path=final_path, steps=tuple(steps))


__all__ = [
    "AbstractMazeGenerator",
    "AbstractMazeSolver",
    "MIN_DIMENSION",
    "normalize_dimension",
]
