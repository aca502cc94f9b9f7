"""Frame rendering and GIF playback for solved mazes."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np
from PIL import Image

from .model import Cell, Maze, Position, SolveResult, StepRecord

try:
    RESAMPLE_NEAREST = Image.Resampling.NEAREST
except AttributeError:  # pragma: no cover
    RESAMPLE_NEAREST = Image.NEAREST

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

WALL_COLOR = (0, 0, 0)
OPEN_COLOR = (255, 255, 255)
START_COLOR = (0, 128, 0)
END_COLOR = (255, 0, 0)
CURRENT_PATH_COLOR = (255, 255, 0)
FINAL_PATH_COLOR = (0, 0, 255)
# rgba(25, 31, 52, 0.6) composited over white
VISITED_COLOR = (117, 121, 133)

DEFAULT_CELL_SIZE = 20
DEFAULT_SPEED = 20
MIN_SPEED = 1
MAX_SPEED = 50
FINAL_FRAME_MS = 1000


def _paint(canvas: np.ndarray, cells: Iterable[Position], color: Tuple[int, int, int]) -> None:
    for r, c in cells:
        canvas[r, c] = color


def render_frame(
    maze: Maze,
    *,
    step: Optional[StepRecord] = None,
    final_path: Optional[Sequence[Position]] = None,
    cell_size: int = DEFAULT_CELL_SIZE,
) -> Image.Image:
    """Draw the maze with an optional search step and final path overlaid."""

    if cell_size < 1:
        raise ValueError("cell_size must be positive")
    canvas = np.empty((maze.height, maze.width, 3), dtype=np.uint8)
    canvas[:] = OPEN_COLOR

    # lowest precedence first; later layers overwrite
    if step is not None:
        _paint(canvas, step.visited, VISITED_COLOR)
    if final_path:
        _paint(canvas, final_path, FINAL_PATH_COLOR)
    if step is not None:
        _paint(canvas, step.current_path, CURRENT_PATH_COLOR)

    walls = np.array([[cell is Cell.WALL for cell in row] for row in maze.grid], dtype=bool)
    canvas[walls] = WALL_COLOR
    canvas[maze.end] = END_COLOR
    canvas[maze.start] = START_COLOR

    image = Image.fromarray(canvas)
    if cell_size == 1:
        return image
    return image.resize((maze.width * cell_size, maze.height * cell_size), RESAMPLE_NEAREST)


def iter_frames(
    maze: Maze,
    result: SolveResult,
    *,
    cell_size: int = DEFAULT_CELL_SIZE,
    animate: bool = True,
) -> Iterator[Image.Image]:
    """Yield one frame per recorded step, then the final state."""

    if animate:
        for step in result.steps:
            yield render_frame(maze, step=step, cell_size=cell_size)
    yield render_frame(maze, final_path=result.final_path, cell_size=cell_size)


def save_frame(
    maze: Maze,
    path: PathLike,
    *,
    final_path: Optional[Sequence[Position]] = None,
    cell_size: int = DEFAULT_CELL_SIZE,
) -> Path:
    destination = Path(path)
    destination.parent.mkdir(parents=True, exist_ok=True)
    render_frame(maze, final_path=final_path, cell_size=cell_size).save(destination)
    return destination


def save_playback(
    maze: Maze,
    result: SolveResult,
    path: PathLike,
    *,
    speed: int = DEFAULT_SPEED,
    cell_size: int = DEFAULT_CELL_SIZE,
    animate: bool = True,
) -> Path:
    """Write the step trace as an animated GIF paced at ``speed`` steps per second."""

    if not MIN_SPEED <= speed <= MAX_SPEED:
        raise ValueError(f"speed must be between {MIN_SPEED} and {MAX_SPEED}, got {speed}")
    frames: List[Image.Image] = list(iter_frames(maze, result, cell_size=cell_size, animate=animate))
    step_ms = max(1, round(1000 / speed))
    durations = [step_ms] * (len(frames) - 1) + [FINAL_FRAME_MS]

    destination = Path(path)
    destination.parent.mkdir(parents=True, exist_ok=True)
    frames[0].save(
        destination,
        save_all=True,
        append_images=frames[1:],
        duration=durations,
        loop=0,
    )
    logger.debug("Wrote %d playback frames to %s", len(frames), destination)
    return destination


__all__ = [
    "DEFAULT_CELL_SIZE",
    "DEFAULT_SPEED",
    "iter_frames",
    "render_frame",
    "save_frame",
    "save_playback",
]
