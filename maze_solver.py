import heapq
import logging
import math
from enum import Enum

from maze import DELTA, Direction, Grid

logger = logging.getLogger(__name__)


class SolveState(Enum):
    Running = 0
    Found = 1
    Exhausted = 2


class SolverEngine:
    """
    Dijkstra search over the open passages of a Grid, one frontier pop per step().

    Every passage costs 1. Entries in the frontier are never updated in place:
    a better distance pushes a new entry and the stale one is skipped when it
    is popped.
    """

    def __init__(self):
        self.clear()

    def clear(self):
        self.state = None
        self.origin = None
        self.destination = None
        self.frontier = []
        self.dist = []
        self.parent = []
        self.solveVisited = set()
        self.finalPath = []
        self.expandedCount = 0

    def setup(self, grid: Grid, origin: int, destination: int):
        total = len(grid)
        self.origin = origin
        self.destination = destination
        self.dist = [math.inf] * total
        self.parent = [None] * total
        self.solveVisited = set()
        self.finalPath = []
        self.expandedCount = 0

        self.dist[origin] = 0
        self.frontier = [(0, origin)]
        self.state = SolveState.Running
        logger.debug("Solver set up: origin %d, destination %d", origin, destination)

    def isFinished(self) -> bool:
        return self.state in (SolveState.Found, SolveState.Exhausted)

    def distanceTo(self, index):
        if not self.dist:
            return math.inf
        return self.dist[index]

    def step(self, grid: Grid):
        if self.state != SolveState.Running:
            return self.state

        if not self.frontier:
            self.state = SolveState.Exhausted
            logger.info("No path from %d to %d", self.origin, self.destination)
            return self.state

        cost, idx = heapq.heappop(self.frontier)
        if cost > self.dist[idx]:
            return self.state

        self.solveVisited.add(idx)
        self.expandedCount += 1

        if idx == self.destination:
            self._reconstructPath()
            self.state = SolveState.Found
            logger.info("Path found: length %d after expanding %d cells",
                        self.dist[idx], self.expandedCount)
            return self.state

        x, y = grid.indexToCoord(idx)
        newDist = self.dist[idx] + 1
        for d in Direction:
            if not grid.canMove(x, y, d):
                continue
            dx, dy = DELTA[d]
            nextIdx = grid.cellIndex(x + dx, y + dy)
            if newDist < self.dist[nextIdx]:
                self.dist[nextIdx] = newDist
                self.parent[nextIdx] = idx
                heapq.heappush(self.frontier, (newDist, nextIdx))

        return self.state

    def _reconstructPath(self):
        # Ordered destination -> origin.
        self.finalPath = []
        curr = self.destination
        while curr is not None:
            self.finalPath.append(curr)
            curr = self.parent[curr]
