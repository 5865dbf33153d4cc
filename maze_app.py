import argparse
import logging
import random
import sys
import time

import pygame

from maze import Direction, InvalidDimensions
from maze_controller import MazeController, MazeState

logger = logging.getLogger(__name__)

# ==========================================
# 1. CONFIG
# ==========================================

WINDOW_W = 1200
WINDOW_H = 800
CONTROL_PANEL_WIDTH = 250
GRID_W = 12
GRID_H = 12
FPS = 60

COLOR_BG = (77, 51, 26)
COLOR_WALL = (255, 255, 255)
COLOR_VISITED = (51, 153, 51)
COLOR_SOLVE_VISITED = (0, 102, 204)
COLOR_CURSOR = (240, 240, 120)
COLOR_START = (0, 255, 0)
COLOR_END = (255, 0, 0)
COLOR_PATH = (255, 204, 0)
COLOR_PANEL = (230, 230, 230)
COLOR_TEXT = (0, 0, 0)

MARKER_INSET = 0.1

# ==========================================
# 2. UI ELEMENTS
# ==========================================

class SimpleSlider:
    def __init__(self, x, y, w, h, min_val, max_val, start_val):
        self.rect = pygame.Rect(x, y, w, h)
        self.min_val = min_val
        self.max_val = max_val
        self.val = start_val
        self.dragging = False
        self.knob_rect = pygame.Rect(x, y - 5, 20, h + 10)
        self.update_knob_pos()

    def update_knob_pos(self):
        ratio = (self.val - self.min_val) / (self.max_val - self.min_val)
        self.knob_rect.centerx = self.rect.x + (self.rect.width * ratio)

    def handle_event(self, event):
        if event.type == pygame.MOUSEBUTTONDOWN:
            if self.knob_rect.collidepoint(event.pos) or self.rect.collidepoint(event.pos):
                self.dragging = True
                self.update_value(event.pos[0])
        elif event.type == pygame.MOUSEBUTTONUP:
            self.dragging = False
        elif event.type == pygame.MOUSEMOTION and self.dragging:
            self.update_value(event.pos[0])

    def update_value(self, mouse_x):
        x = max(self.rect.x, min(mouse_x, self.rect.right))
        ratio = (x - self.rect.x) / self.rect.width
        self.val = self.min_val + (ratio * (self.max_val - self.min_val))
        self.update_knob_pos()

    def draw(self, screen):
        pygame.draw.rect(screen, (180, 180, 180), self.rect, border_radius=5)
        pygame.draw.rect(screen, (50, 50, 150), self.knob_rect, border_radius=5)

    def get_value(self): return self.val


class SimpleButton:
    def __init__(self, x, y, w, h, text, callback, color=(100, 100, 200)):
        self.rect = pygame.Rect(x, y, w, h)
        self.text = text
        self.callback = callback
        self.font = pygame.font.SysFont('Arial', 14, bold=True)
        self.bg_color = color
        self.hover_color = tuple(min(c + 30, 255) for c in color)
        self.is_hovered = False
        self.enabled = True

    def handle_event(self, event):
        if event.type == pygame.MOUSEMOTION:
            self.is_hovered = self.rect.collidepoint(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.enabled and self.rect.collidepoint(event.pos):
                self.callback()

    def draw(self, screen):
        if not self.enabled:
            color = (150, 150, 150)
        else:
            color = self.hover_color if self.is_hovered else self.bg_color
        pygame.draw.rect(screen, color, self.rect, border_radius=5)
        pygame.draw.rect(screen, (0, 0, 0), self.rect, 2, border_radius=5)
        text_surf = self.font.render(self.text, True, (255, 255, 255))
        screen.blit(text_surf, text_surf.get_rect(center=self.rect.center))

# ==========================================
# 3. LAYOUT
# ==========================================

class Layout:
    """Square cells centred in the viewport, cell (0, 0) in the bottom-left corner."""

    def __init__(self, grid_w, grid_h, view_w, view_h):
        self.grid_w = grid_w
        self.grid_h = grid_h
        self.cell = min(view_w / grid_w, view_h / grid_h)
        self.offset_x = (view_w - grid_w * self.cell) / 2
        self.offset_y = (view_h - grid_h * self.cell) / 2

    def cellRect(self, x, y):
        left = self.offset_x + x * self.cell
        top = self.offset_y + (self.grid_h - 1 - y) * self.cell
        return left, top, self.cell, self.cell

    def cellCenter(self, x, y):
        left, top, size, _ = self.cellRect(x, y)
        return left + size / 2, top + size / 2

    def wallSegment(self, x, y, d: Direction):
        left, top, size, _ = self.cellRect(x, y)
        right, bottom = left + size, top + size
        if d == Direction.North: return (left, top), (right, top)
        if d == Direction.East: return (right, top), (right, bottom)
        if d == Direction.South: return (left, bottom), (right, bottom)
        return (left, top), (left, bottom)

# ==========================================
# 4. DRAWING
# ==========================================

def drawMarker(screen, layout, x, y, color):
    left, top, size, _ = layout.cellRect(x, y)
    inset = size * MARKER_INSET
    pygame.draw.rect(screen, color, (left + inset, top + inset, size - 2 * inset, size - 2 * inset))


def drawMaze(screen, controller: MazeController, layout: Layout):
    grid = controller.grid
    solve_visited = controller.solveVisited
    solving = controller.state in (MazeState.Solving, MazeState.Solved)

    for y in range(grid.height):
        for x in range(grid.width):
            cell = grid.cellAt(x, y)
            if cell.visited:
                color = COLOR_VISITED
                if solving and grid.cellIndex(x, y) in solve_visited:
                    color = COLOR_SOLVE_VISITED
                pygame.draw.rect(screen, color, layout.cellRect(x, y))

    if controller.current is not None:
        drawMarker(screen, layout, *controller.current, COLOR_CURSOR)

    wall_width = max(1, int(layout.cell / 20))
    for y in range(grid.height):
        for x in range(grid.width):
            cell = grid.cellAt(x, y)
            for d in Direction:
                if cell.hasWall(d):
                    start, end = layout.wallSegment(x, y, d)
                    pygame.draw.line(screen, COLOR_WALL, start, end, wall_width)

    drawMarker(screen, layout, 0, 0, COLOR_START)
    drawMarker(screen, layout, grid.width - 1, grid.height - 1, COLOR_END)

    path = controller.finalPath
    if len(path) > 1:
        points = [layout.cellCenter(*grid.indexToCoord(idx)) for idx in path]
        pygame.draw.lines(screen, COLOR_PATH, False, points, max(2, int(layout.cell / 8)))
    elif len(path) == 1:
        cx, cy = layout.cellCenter(*grid.indexToCoord(path[0]))
        pygame.draw.circle(screen, COLOR_PATH, (cx, cy), max(2, layout.cell / 8))


def statusLines(controller: MazeController):
    lines = [
        f"State: {controller.state.name}",
        f"Grid: {controller.width}x{controller.height}",
        f"Seed: {controller.seed}",
        f"Visited: {controller.grid.visitedCount()}/{len(controller.grid)}",
    ]
    if controller.state in (MazeState.Solving, MazeState.Solved):
        lines.append(f"Expanded: {len(controller.solveVisited)}")
    if controller.state == MazeState.Solved:
        length = controller.solutionLength()
        lines.append("Path: none" if length is None else f"Path length: {length}")
    return lines

# ==========================================
# 5. MAIN
# ==========================================

SEED_RANGE = 2 ** 32


def reseed(controller: MazeController, seed_rng: random.Random):
    """Restart generation with the next seed from seed_rng, so every press gives a new maze."""
    controller.reset(seed=seed_rng.randrange(SEED_RANGE))


def parseArgs(argv=None):
    parser = argparse.ArgumentParser(description="Animate maze generation and Dijkstra solving.")
    parser.add_argument("--width", type=int, default=GRID_W, help="Maze width in cells")
    parser.add_argument("--height", type=int, default=GRID_H, help="Maze height in cells")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the first maze (default: current time)")
    parser.add_argument("--window-width", type=int, default=WINDOW_W)
    parser.add_argument("--window-height", type=int, default=WINDOW_H)
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


def main(argv=None):
    args = parseArgs(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    # Wall-clock seeding stays here; the core only ever sees explicit seeds.
    seed_rng = random.Random(time.time_ns())
    seed = args.seed if args.seed is not None else seed_rng.randrange(SEED_RANGE)
    try:
        controller = MazeController(args.width, args.height, seed=seed)
    except InvalidDimensions as e:
        logger.error("%s", e)
        return 2

    pygame.init()
    screen = pygame.display.set_mode((args.window_width, args.window_height))
    pygame.display.set_caption(f"Maze - {args.width}x{args.height}")
    clock = pygame.time.Clock()
    font = pygame.font.SysFont('Arial', 18)

    viewport_w = max(1, args.window_width - CONTROL_PANEL_WIDTH)
    layout = Layout(controller.width, controller.height, viewport_w, args.window_height)

    def reset():
        reseed(controller, seed_rng)

    panel_x = viewport_w + 20
    btn_reset = SimpleButton(panel_x, 20, 95, 30, "Reset (R)", reset, color=(200, 50, 50))
    btn_solve = SimpleButton(panel_x + 105, 20, 95, 30, "Solve (D)", controller.startSolve)
    slider = SimpleSlider(panel_x, 90, 200, 20, -10, 20, 0)

    frame_counter = 0
    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                # KEYDOWN fires once per press, so holding a key does not repeat the command.
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_r:
                    reset()
                elif event.key == pygame.K_d:
                    controller.startSolve()
            slider.handle_event(event)
            btn_reset.handle_event(event)
            btn_solve.handle_event(event)

        # Negative speed waits that many frames per step; positive runs speed+1 steps per frame.
        val = int(slider.get_value())
        if val < 0:
            frame_counter += 1
            if frame_counter > abs(val):
                frame_counter = 0
                controller.step()
        else:
            for _ in range(val + 1):
                controller.step()

        btn_solve.enabled = controller.isGenerationDone()

        screen.fill(COLOR_BG)
        drawMaze(screen, controller, layout)

        pygame.draw.rect(screen, COLOR_PANEL, (viewport_w, 0, CONTROL_PANEL_WIDTH, args.window_height))
        screen.blit(font.render("Speed:", True, COLOR_TEXT), (panel_x, 62))
        btn_reset.draw(screen)
        btn_solve.draw(screen)
        slider.draw(screen)
        text_y = 140
        for line in statusLines(controller):
            screen.blit(font.render(line, True, COLOR_TEXT), (panel_x, text_y))
            text_y += 25

        pygame.display.flip()
        clock.tick(FPS)

    pygame.quit()
    return 0


if __name__ == "__main__":
    sys.exit(main())
