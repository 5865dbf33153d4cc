import logging
import random
from enum import Enum

from maze import Grid
from maze_generator import GenerationEngine
from maze_solver import SolveState, SolverEngine

logger = logging.getLogger(__name__)


class MazeState(Enum):
    Idle = 0
    Generating = 1
    Solving = 2
    Solved = 3


def newSeed() -> int:
    return random.SystemRandom().randrange(2 ** 32)


class MazeController:
    """
    Owns one Grid plus a generation and a solver engine and sequences them:

        reset -> Generating --step*--> Idle --startSolve--> Solving --step*--> Solved

    Commands issued in the wrong state are ignored. Renderers should only use
    the read-only queries between step() calls.
    """

    def __init__(self, width, height, seed=None):
        self.grid = Grid(width, height)
        self.generator = GenerationEngine()
        self.solver = SolverEngine()
        self.seed = newSeed() if seed is None else seed
        self.state = MazeState.Generating
        self.reset()

    # --- Commands ---

    def reset(self, seed=None):
        if seed is not None:
            self.seed = seed
        self.grid.Reset()
        self.solver.clear()
        self.generator.setup(self.grid, self.seed)
        self.state = MazeState.Generating
        logger.debug("Reset %dx%d maze (seed %r)", self.width, self.height, self.seed)

    def startSolve(self):
        if self.state != MazeState.Idle:
            return
        origin = self.grid.cellIndex(0, 0)
        destination = self.grid.cellIndex(self.width - 1, self.height - 1)
        self.solver.setup(self.grid, origin, destination)
        self.state = MazeState.Solving

    def step(self):
        if self.state == MazeState.Generating:
            self.generator.step(self.grid)
            if self.generator.isDone():
                self.state = MazeState.Idle
        elif self.state == MazeState.Solving:
            self.solver.step(self.grid)
            if self.solver.isFinished():
                self.state = MazeState.Solved
        return self.state

    def runToCompletion(self, limit=None):
        """Step until the current phase (generation or solving) ends. Returns the number of steps taken."""
        steps = 0
        while self.state in (MazeState.Generating, MazeState.Solving):
            if limit is not None and steps >= limit:
                break
            self.step()
            steps += 1
        return steps

    # --- Queries ---

    @property
    def width(self): return self.grid.width

    @property
    def height(self): return self.grid.height

    @property
    def current(self):
        if self.state != MazeState.Generating:
            return None
        return self.generator.current

    @property
    def solveVisited(self):
        return frozenset(self.solver.solveVisited)

    @property
    def finalPath(self):
        if self.state != MazeState.Solved or self.solver.state != SolveState.Found:
            return ()
        return tuple(self.solver.finalPath)

    def isGenerationDone(self) -> bool:
        return self.state == MazeState.Idle

    def cellAt(self, x, y):
        return self.grid.cellAt(x, y)

    def walls(self, x, y):
        cell = self.grid.cellAt(x, y)
        if cell is None:
            return None
        return tuple(cell.walls)

    def isVisited(self, x, y) -> bool:
        cell = self.grid.cellAt(x, y)
        return cell is not None and cell.visited

    def solutionLength(self):
        """Number of passages on the found path, or None if no path has been found."""
        path = self.finalPath
        if not path:
            return None
        return len(path) - 1
