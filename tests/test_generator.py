import random
import unittest
from collections import deque
from contextlib import redirect_stdout
from io import StringIO

from labyrinth import Cell, Maze, MazeGenerator, generate_maze, normalize_dimension
from labyrinth.generator import main


def _reachable(maze: Maze):
    seen = {maze.start}
    queue = deque([maze.start])
    while queue:
        for neighbor in maze.neighbors(queue.popleft()):
            if neighbor not in seen:
                seen.add(neighbor)
                queue.append(neighbor)
    return seen


def _edge_count(maze: Maze) -> int:
    edges = 0
    for r, c in maze.open_cells():
        for neighbor in ((r, c + 1), (r + 1, c)):
            if maze.is_passable(neighbor):
                edges += 1
    return edges


class NormalizeDimensionTests(unittest.TestCase):
    def test_even_values_round_down(self) -> None:
        self.assertEqual(normalize_dimension(6), 5)
        self.assertEqual(normalize_dimension(22), 21)

    def test_odd_values_pass_through(self) -> None:
        self.assertEqual(normalize_dimension(5), 5)
        self.assertEqual(normalize_dimension(51), 51)

    def test_small_values_clamp_to_minimum(self) -> None:
        for value in (1, 2, 3, 4):
            self.assertEqual(normalize_dimension(value), 5)

    def test_strict_mode_rejects_small_values(self) -> None:
        with self.assertRaises(ValueError):
            normalize_dimension(3, strict=True)
        with self.assertRaises(ValueError):
            normalize_dimension(4, strict=True)
        self.assertEqual(normalize_dimension(6, strict=True), 5)

    def test_rejects_non_positive_and_non_integer(self) -> None:
        with self.assertRaises(ValueError):
            normalize_dimension(0)
        with self.assertRaises(ValueError):
            normalize_dimension(-7)
        with self.assertRaises(TypeError):
            normalize_dimension(7.0)
        with self.assertRaises(TypeError):
            normalize_dimension(True)


class MazeGeneratorTests(unittest.TestCase):
    def test_generated_maze_is_perfect(self) -> None:
        for width, height in ((5, 5), (7, 5), (21, 21), (31, 11)):
            for seed in range(5):
                maze = MazeGenerator(width, height, seed=seed).create_maze()
                with self.subTest(width=width, height=height, seed=seed):
                    open_cells = maze.open_cells()
                    self.assertEqual(_reachable(maze), set(open_cells))
                    self.assertEqual(_edge_count(maze), len(open_cells) - 1)

    def test_layout_invariants(self) -> None:
        maze = MazeGenerator(15, 9, seed=42).create_maze()
        self.assertEqual((maze.width, maze.height), (15, 9))
        self.assertEqual(maze.start, (1, 1))
        self.assertEqual(maze.end, (7, 13))
        self.assertIs(maze.cell(maze.start), Cell.START)
        self.assertIs(maze.cell(maze.end), Cell.END)
        for c in range(maze.width):
            self.assertIs(maze.grid[0][c], Cell.WALL)
            self.assertIs(maze.grid[maze.height - 1][c], Cell.WALL)
        for r in range(maze.height):
            self.assertIs(maze.grid[r][0], Cell.WALL)
            self.assertIs(maze.grid[r][maze.width - 1], Cell.WALL)
        for r in range(1, maze.height, 2):
            for c in range(1, maze.width, 2):
                self.assertTrue(maze.is_passable((r, c)))
        for r in range(2, maze.height - 1, 2):
            for c in range(2, maze.width - 1, 2):
                self.assertIs(maze.grid[r][c], Cell.WALL)

    def test_minimum_maze_is_a_corridor_tree(self) -> None:
        maze = MazeGenerator(5, 5, seed=0).create_maze()
        self.assertEqual(len(maze.open_cells()), 7)
        self.assertEqual(len(maze.grid), 5)
        self.assertTrue(all(len(row) == 5 for row in maze.grid))

    def test_dimensions_are_normalized(self) -> None:
        generator = MazeGenerator(22, 4)
        self.assertEqual((generator.width, generator.height), (21, 5))
        maze = generator.create_maze()
        self.assertEqual((maze.width, maze.height), (21, 5))
        self.assertEqual(maze.end, (3, 19))

    def test_strict_generator_rejects_small_dimensions(self) -> None:
        with self.assertRaises(ValueError):
            MazeGenerator(3, 9, strict=True)

    def test_same_seed_gives_same_maze(self) -> None:
        self.assertEqual(generate_maze(25, 25, seed=99), generate_maze(25, 25, seed=99))

    def test_injected_rng_is_used(self) -> None:
        first = generate_maze(13, 13, rng=random.Random(5))
        second = generate_maze(13, 13, rng=random.Random(5))
        self.assertEqual(first.to_rows(), second.to_rows())

    def test_batch_draws_from_one_stream(self) -> None:
        mazes = MazeGenerator(21, 21, seed=1).generate_batch(4)
        self.assertEqual(len(mazes), 4)
        self.assertGreater(len({tuple(maze.to_rows()) for maze in mazes}), 1)

    def test_main_prints_rows(self) -> None:
        buffer = StringIO()
        with redirect_stdout(buffer):
            main(["--width", "9", "--height", "7", "--seed", "3"])
        rows = buffer.getvalue().splitlines()
        self.assertEqual(len(rows), 7)
        self.assertEqual(rows[1][1], "S")
        self.assertEqual(rows[5][7], "E")
        self.assertEqual(Maze.from_rows(rows), generate_maze(9, 7, seed=3))


class MazeModelTests(unittest.TestCase):
    ROWS = [
        "#####",
        "#S  #",
        "# # #",
        "#  E#",
        "#####",
    ]

    def test_from_rows_round_trips_text(self) -> None:
        maze = Maze.from_rows(self.ROWS)
        self.assertEqual(maze.to_rows(), self.ROWS)
        self.assertEqual((maze.start, maze.end), ((1, 1), (3, 3)))
        self.assertEqual(maze.to_dict()["grid"], self.ROWS)

    def test_from_rows_rejects_malformed_grids(self) -> None:
        with self.assertRaises(ValueError):
            Maze.from_rows([])
        with self.assertRaises(ValueError):
            Maze.from_rows(["#####", "#S E", "#####"])
        with self.assertRaises(ValueError):
            Maze.from_rows(["#####", "#SSE#", "#####"])
        with self.assertRaises(ValueError):
            Maze.from_rows(["#####", "#S  #", "#####"])
        with self.assertRaises(ValueError):
            Maze.from_rows(["#####", "#S.E#", "#####"])

    def test_neighbors_follow_fixed_order(self) -> None:
        maze = Maze.from_rows(self.ROWS)
        self.assertEqual(list(maze.neighbors((1, 2))), [(1, 3), (1, 1)])
        self.assertEqual(list(maze.neighbors((2, 3))), [(1, 3), (3, 3)])

    def test_bounds_are_checked(self) -> None:
        maze = Maze.from_rows(self.ROWS)
        self.assertFalse(maze.is_passable((-1, 1)))
        self.assertFalse(maze.is_passable((1, 5)))
        self.assertFalse(maze.is_passable((2, 2)))
        with self.assertRaises(IndexError):
            maze.cell((5, 0))


if __name__ == "__main__":
    unittest.main()
