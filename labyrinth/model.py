"""Value types shared by the maze generator, solvers and renderer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Iterator, List, Optional, Sequence, Tuple

Position = Tuple[int, int]
Path = Tuple[Position, ...]

# up, right, down, left
NEIGHBOR_OFFSETS: Tuple[Position, ...] = ((-1, 0), (0, 1), (1, 0), (0, -1))


class Cell(str, Enum):
    WALL = "#"
    OPEN = " "
    START = "S"
    END = "E"


@dataclass(frozen=True)
class Maze:
    width: int
    height: int
    grid: Tuple[Tuple[Cell, ...], ...]
    start: Position
    end: Position

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> "Maze":
        """Parse a literal grid of ``#``, space, ``S`` and ``E`` characters."""

        if not rows:
            raise ValueError("Maze rows must not be empty")
        width = len(rows[0])
        grid: List[Tuple[Cell, ...]] = []
        starts: List[Position] = []
        ends: List[Position] = []
        for r, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(f"Row {r} has length {len(row)}, expected {width}")
            cells: List[Cell] = []
            for c, char in enumerate(row):
                try:
                    cell = Cell(char)
                except ValueError as exc:
                    raise ValueError(f"Unknown cell character {char!r} at ({r}, {c})") from exc
                if cell is Cell.START:
                    starts.append((r, c))
                elif cell is Cell.END:
                    ends.append((r, c))
                cells.append(cell)
            grid.append(tuple(cells))
        if len(starts) != 1 or len(ends) != 1:
            raise ValueError("Maze must contain exactly one 'S' and one 'E'")
        return cls(width=width, height=len(rows), grid=tuple(grid), start=starts[0], end=ends[0])

    def to_rows(self) -> List[str]:
        return ["".join(cell.value for cell in row) for row in self.grid]

    def to_dict(self) -> dict:
        return {
            "width": self.width,
            "height": self.height,
            "grid": self.to_rows(),
            "start": list(self.start),
            "end": list(self.end),
        }

    def in_bounds(self, pos: Position) -> bool:
        r, c = pos
        return 0 <= r < self.height and 0 <= c < self.width

    def cell(self, pos: Position) -> Cell:
        if not self.in_bounds(pos):
            raise IndexError(f"Position {pos} is outside the {self.height}x{self.width} maze")
        r, c = pos
        return self.grid[r][c]

    def is_passable(self, pos: Position) -> bool:
        return self.in_bounds(pos) and self.grid[pos[0]][pos[1]] is not Cell.WALL

    def neighbors(self, pos: Position) -> Iterator[Position]:
        """Yield passable 4-neighbours of ``pos`` in up, right, down, left order."""

        r, c = pos
        for dr, dc in NEIGHBOR_OFFSETS:
            candidate = (r + dr, c + dc)
            if self.is_passable(candidate):
                yield candidate

    def open_cells(self) -> List[Position]:
        return [
            (r, c)
            for r in range(self.height)
            for c in range(self.width)
            if self.grid[r][c] is not Cell.WALL
        ]


@dataclass(frozen=True)
class StepRecord:
    """Search state captured when a position is dequeued or expanded."""

    current_position: Position
    current_path: Path
    visited: FrozenSet[Position]

    def to_dict(self) -> dict:
        return {
            "current_position": list(self.current_position),
            "current_path": [list(pos) for pos in self.current_path],
            "visited": sorted(list(pos) for pos in self.visited),
        }


@dataclass(frozen=True)
class SolveResult:
    strategy: str
    final_path: Optional[Path]
    steps: Tuple[StepRecord, ...]
    elapsed: float = field(default=0.0, compare=False)

    @property
    def found(self) -> bool:
        return self.final_path is not None

    @property
    def path_length(self) -> int:
        return len(self.final_path) if self.final_path is not None else 0

    @property
    def explored(self) -> int:
        return len(self.steps)

    def to_dict(self, *, include_steps: bool = False) -> dict:
        payload = {
            "strategy": self.strategy,
            "found": self.found,
            "path_length": self.path_length,
            "explored": self.explored,
            "solve_time": round(self.elapsed, 6),
            "final_path": (
                [list(pos) for pos in self.final_path] if self.final_path is not None else None
            ),
        }
        if include_steps:
            payload["steps"] = [step.to_dict() for step in self.steps]
        return payload


__all__ = [
    "Cell",
    "Maze",
    "NEIGHBOR_OFFSETS",
    "Path",
    "Position",
    "SolveResult",
    "StepRecord",
]
