import logging
import random
from enum import Enum

from maze import Grid

logger = logging.getLogger(__name__)


class GenerationState(Enum):
    Running = 0
    Done = 1


class GenerationEngine:
    """
    Randomized depth-first carver ("recursive backtracker") with an explicit
    stack. Each call to step() either carves into one unvisited neighbour or
    backtracks one cell, so a w*h grid finishes in at most 2*w*h steps.
    """

    def __init__(self):
        self.state = GenerationState.Done
        self.current = (0, 0)
        self.stack = []
        self.rng = random.Random()
        self.seed = None
        self.visitSteps = 0
        self.backtrackSteps = 0

    def setup(self, grid: Grid, seed):
        self.seed = seed
        self.rng = random.Random(seed)
        self.stack = []
        self.current = (0, 0)
        self.visitSteps = 0
        self.backtrackSteps = 0

        grid.cellAt(0, 0).visited = True
        self.stack.append(self.current)
        self.state = GenerationState.Running
        logger.debug("Generation set up on %dx%d grid with seed %r", grid.width, grid.height, seed)

    def isDone(self) -> bool: return self.state == GenerationState.Done

    def step(self, grid: Grid):
        if self.state == GenerationState.Done:
            return self.state

        x, y = self.current
        candidates = [(nx, ny) for _, nx, ny in grid.neighbours(x, y)
                      if not grid.cellAt(nx, ny).visited]

        if candidates:
            nx, ny = self.rng.choice(candidates)
            self.stack.append(self.current)
            grid.openPassage(x, y, nx, ny)
            self.current = (nx, ny)
            grid.cellAt(nx, ny).visited = True
            self.visitSteps += 1
        elif self.stack:
            self.current = self.stack.pop()
            self.backtrackSteps += 1
            # The origin pushed by setup() is the bottom of the stack.
            if not self.stack:
                self._finish()

        return self.state

    def _finish(self):
        self.state = GenerationState.Done
        logger.info("Generation finished: %d cells carved, %d backtracks",
                    self.visitSteps + 1, self.backtrackSteps)
