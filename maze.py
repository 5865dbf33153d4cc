from enum import Enum

# ==========================================
# 1. ENUMS & CONSTANTS
# ==========================================

class Direction(Enum):
    North = 0
    East = 1
    South = 2
    West = 3

# North points to +y: the origin cell (0, 0) sits in the bottom-left corner.
DELTA = {
    Direction.North: (0, 1),
    Direction.East: (1, 0),
    Direction.South: (0, -1),
    Direction.West: (-1, 0),
}

OPPOSITE = {
    Direction.North: Direction.South,
    Direction.East: Direction.West,
    Direction.South: Direction.North,
    Direction.West: Direction.East,
}

OUT_OF_BOUNDS = -1


def reverseDir(d: Direction) -> Direction:
    return OPPOSITE[d]

# ==========================================
# 2. ERRORS
# ==========================================

class MazeError(Exception):
    pass

class InvalidDimensions(MazeError, ValueError):
    def __init__(self, width, height):
        super().__init__(f"Maze dimensions must be positive integers, got {width}x{height}")
        self.width = width
        self.height = height

# ==========================================
# 3. GRID
# ==========================================

class Cell:
    __slots__ = ("visited", "walls")

    def __init__(self):
        self.visited = False
        self.walls = [True, True, True, True]

    def hasWall(self, d: Direction) -> bool: return self.walls[d.value]

    def __repr__(self):
        closed = "".join(d.name[0] for d in Direction if self.walls[d.value])
        return f"Cell(visited={self.visited}, walls={closed or '-'})"


def _isDimension(value) -> bool:
    # bool is an int subclass but never a valid size.
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


class Grid:
    """
    Rectangular grid of cells stored row-major (index = y * width + x).

    Walls are only ever removed through openPassage(), which clears both
    sides at once, so the wall a cell holds toward its neighbour always
    matches the wall the neighbour holds back.
    """

    def __init__(self, width, height):
        if not _isDimension(width) or not _isDimension(height):
            raise InvalidDimensions(width, height)
        self.width = width
        self.height = height
        self.cells = []
        self.Reset()

    def Reset(self):
        self.cells = [Cell() for _ in range(self.width * self.height)]

    def __len__(self): return len(self.cells)

    def inBounds(self, x, y) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def cellIndex(self, x, y) -> int:
        if not self.inBounds(x, y):
            return OUT_OF_BOUNDS
        return y * self.width + x

    def indexToCoord(self, index):
        return index % self.width, index // self.width

    def cellAt(self, x, y):
        idx = self.cellIndex(x, y)
        if idx == OUT_OF_BOUNDS:
            return None
        return self.cells[idx]

    def neighbours(self, x, y):
        """In-bounds neighbours of (x, y) as (direction, nx, ny), in Direction order."""
        result = []
        for d in Direction:
            dx, dy = DELTA[d]
            nx, ny = x + dx, y + dy
            if self.inBounds(nx, ny):
                result.append((d, nx, ny))
        return result

    def canMove(self, x, y, direction: Direction) -> bool:
        cell = self.cellAt(x, y)
        if cell is None or cell.hasWall(direction):
            return False
        dx, dy = DELTA[direction]
        return self.inBounds(x + dx, y + dy)

    def openPassage(self, x1, y1, x2, y2):
        first = self.cellAt(x1, y1)
        second = self.cellAt(x2, y2)
        if first is None or second is None:
            raise ValueError(f"Cannot open passage outside the grid: ({x1}, {y1}) -> ({x2}, {y2})")

        for d, (dx, dy) in DELTA.items():
            if (x1 + dx, y1 + dy) == (x2, y2):
                first.walls[d.value] = False
                second.walls[reverseDir(d).value] = False
                return d
        raise ValueError(f"Cells ({x1}, {y1}) and ({x2}, {y2}) are not adjacent")

    def passageCount(self) -> int:
        # Count each passage once, from its west/south side.
        count = 0
        for y in range(self.height):
            for x in range(self.width):
                if self.canMove(x, y, Direction.East): count += 1
                if self.canMove(x, y, Direction.North): count += 1
        return count

    def visitedCount(self) -> int:
        return sum(1 for cell in self.cells if cell.visited)
