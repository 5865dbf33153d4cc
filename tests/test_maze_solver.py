import math
from collections import deque

import pytest

from maze import Direction, Grid
from maze_generator import GenerationEngine
from maze_solver import SolverEngine, SolveState


def _bfs_distance(grid: Grid, origin, destination):
    dist = {origin: 0}
    q = deque([origin])
    while q:
        idx = q.popleft()
        if idx == destination:
            return dist[idx]
        x, y = grid.indexToCoord(idx)
        for d, nx, ny in grid.neighbours(x, y):
            n = grid.cellIndex(nx, ny)
            if grid.canMove(x, y, d) and n not in dist:
                dist[n] = dist[idx] + 1
                q.append(n)
    return math.inf


def _generated(width, height, seed):
    grid = Grid(width, height)
    gen = GenerationEngine()
    gen.setup(grid, seed)
    while not gen.isDone():
        gen.step(grid)
    return grid


def _solve(grid, origin, destination, limit=10000):
    solver = SolverEngine()
    solver.setup(grid, origin, destination)
    steps = 0
    while not solver.isFinished():
        solver.step(grid)
        steps += 1
        assert steps <= limit
    return solver


def _assert_valid_path(grid, solver):
    path = solver.finalPath
    assert path[0] == solver.destination
    assert path[-1] == solver.origin
    for a, b in zip(path, path[1:]):
        ax, ay = grid.indexToCoord(a)
        bx, by = grid.indexToCoord(b)
        assert abs(ax - bx) + abs(ay - by) == 1
        d = [d for d, nx, ny in grid.neighbours(ax, ay) if (nx, ny) == (bx, by)][0]
        assert grid.canMove(ax, ay, d)


def test_setup_state():
    grid = Grid(3, 3)
    solver = SolverEngine()
    solver.setup(grid, 0, 8)
    assert solver.state == SolveState.Running
    assert solver.dist[0] == 0
    assert all(d == math.inf for d in solver.dist[1:])
    assert solver.parent == [None] * 9
    assert solver.frontier == [(0, 0)]
    assert solver.solveVisited == set()
    assert solver.finalPath == []


@pytest.mark.parametrize("width,height,seed", [(2, 2, 42), (5, 5, 1), (8, 6, 7), (12, 12, 2024), (1, 9, 3)])
def test_distance_matches_breadth_first_search(width, height, seed):
    grid = _generated(width, height, seed)
    origin = grid.cellIndex(0, 0)
    destination = grid.cellIndex(width - 1, height - 1)
    solver = _solve(grid, origin, destination)
    assert solver.state == SolveState.Found
    assert solver.distanceTo(destination) == _bfs_distance(grid, origin, destination)
    assert len(solver.finalPath) == solver.distanceTo(destination) + 1
    _assert_valid_path(grid, solver)


def test_two_by_two_seed_42_distance():
    grid = _generated(2, 2, 42)
    solver = _solve(grid, 0, 3)
    assert solver.distanceTo(3) in {1, 2, 3}
    assert solver.distanceTo(3) == _bfs_distance(grid, 0, 3)


def test_open_grid_with_cycles():
    # Every wall open: many equal-length paths and stale frontier entries.
    grid = Grid(4, 4)
    for y in range(4):
        for x in range(4):
            if x + 1 < 4: grid.openPassage(x, y, x + 1, y)
            if y + 1 < 4: grid.openPassage(x, y, x, y + 1)
    solver = _solve(grid, 0, 15)
    assert solver.state == SolveState.Found
    assert solver.distanceTo(15) == 6
    _assert_valid_path(grid, solver)


def test_single_cell_is_found_immediately():
    grid = Grid(1, 1)
    solver = SolverEngine()
    solver.setup(grid, 0, 0)
    assert solver.step(grid) == SolveState.Found
    assert solver.finalPath == [0]
    assert solver.solveVisited == {0}


def test_unreachable_destination_exhausts():
    grid = Grid(3, 1)
    grid.openPassage(0, 0, 1, 0)
    solver = _solve(grid, 0, 2)
    assert solver.state == SolveState.Exhausted
    assert solver.finalPath == []
    assert solver.distanceTo(2) == math.inf
    assert solver.solveVisited == {0, 1}


def test_visited_set_grows_monotonically():
    grid = _generated(6, 6, 17)
    solver = SolverEngine()
    solver.setup(grid, 0, 35)
    seen = set()
    while not solver.isFinished():
        solver.step(grid)
        assert seen <= solver.solveVisited
        assert len(solver.solveVisited) - len(seen) <= 1
        seen = set(solver.solveVisited)


def test_stale_entries_are_skipped():
    grid = Grid(2, 1)
    grid.openPassage(0, 0, 1, 0)
    solver = SolverEngine()
    solver.setup(grid, 0, 1)
    solver.frontier.append((5, 0))
    solver.step(grid)
    assert solver.solveVisited == {0}
    before = set(solver.solveVisited)
    # (1, 1) is popped next and finishes the search; the stale (5, 0) is never expanded.
    solver.step(grid)
    assert solver.state == SolveState.Found
    assert solver.solveVisited == before | {1}


def test_stale_entry_pop_does_no_work():
    grid = Grid(2, 1)
    grid.openPassage(0, 0, 1, 0)
    solver = SolverEngine()
    solver.setup(grid, 0, 1)
    solver.dist[0] = -1
    assert solver.step(grid) == SolveState.Running
    assert solver.solveVisited == set()
    assert solver.frontier == []


def test_step_after_finish_is_noop():
    grid = _generated(3, 3, 5)
    solver = _solve(grid, 0, 8)
    path = list(solver.finalPath)
    assert solver.step(grid) == SolveState.Found
    assert solver.finalPath == path


def test_setup_clears_previous_run():
    grid = _generated(4, 4, 21)
    solver = _solve(grid, 0, 15)
    solver.setup(grid, 0, 15)
    assert solver.finalPath == []
    assert solver.solveVisited == set()
    assert solver.state == SolveState.Running


def test_clear_drops_everything():
    grid = _generated(3, 3, 2)
    solver = _solve(grid, 0, 8)
    solver.clear()
    assert solver.state is None
    assert solver.finalPath == []
    assert solver.solveVisited == set()
    assert solver.distanceTo(8) == math.inf
    assert solver.step(grid) is None


def test_solver_does_not_touch_walls():
    grid = _generated(5, 4, 13)
    before = [list(c.walls) for c in grid.cells]
    _solve(grid, 0, 19)
    assert [c.walls for c in grid.cells] == before
    assert not grid.canMove(0, 0, Direction.South)
