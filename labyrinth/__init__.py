"""Perfect maze generation and traced path search toolkit."""

__all__ = [
    "AbstractMazeGenerator",
    "AbstractMazeSolver",
    "Cell",
    "Maze",
    "Position",
    "StepRecord",
    "SolveResult",
    "MazeGenerator",
    "generate_maze",
    "normalize_dimension",
    "Strategy",
    "BreadthFirstSolver",
    "DepthFirstSolver",
    "AStarSolver",
    "get_solver",
    "solve",
]

from .base import AbstractMazeGenerator, AbstractMazeSolver, normalize_dimension
from .model import Cell, Maze, Position, StepRecord, SolveResult
from .generator import MazeGenerator, generate_maze
from .solver import (
    Strategy,
    BreadthFirstSolver,
    DepthFirstSolver,
    AStarSolver,
    get_solver,
    solve,
)
