import logging
from numbers import Integral

import numpy as np
from PIL import Image

from config import BLANK, BORDER_HORIZONTAL, BORDER_VERTICAL, MARKER, CanvasConfig
from errors import (
    DegenerateLine,
    DegenerateRectangle,
    InvalidColor,
    InvalidCoordinate,
    InvalidDimension,
    OutOfBounds,
    UnsupportedOrientation,
)

logger = logging.getLogger(__name__)


def _is_whole(value) -> bool:
    return isinstance(value, Integral) and not isinstance(value, bool)


class Canvas:
    """
    A fixed-size character grid surrounded by a border frame.

    The grid holds ``height + 2`` rows of ``width + 2`` cells. Drawing
    operations take 1-based interior coordinates, so the frame at row 0,
    row ``height + 1``, column 0 and column ``width + 1`` is never written
    after construction.
    """
    def __init__(self, width, height):
        if not (_is_whole(width) and _is_whole(height)) or width <= 0 or height <= 0:
            raise InvalidDimension(
                f"Height and width must both be whole numbers greater than zero, got {width!r}x{height!r}."
            )
        self.width = int(width)
        self.height = int(height)
        self.grid = np.full((self.height + 2, self.width + 2), BLANK, dtype="<U1")
        self.grid[:, 0] = BORDER_VERTICAL
        self.grid[:, -1] = BORDER_VERTICAL
        self.grid[0, :] = BORDER_HORIZONTAL
        self.grid[-1, :] = BORDER_HORIZONTAL
        logger.debug("Created %dx%d canvas", self.width, self.height)

    def _check_point(self, x, y):
        """Raises unless (x, y) names an interior cell."""
        if not (_is_whole(x) and _is_whole(y)):
            raise InvalidCoordinate(f"Coordinates must be whole numbers, got ({x!r}, {y!r}).")
        if not 1 <= x <= self.width:
            raise OutOfBounds(f"X coordinate {x} must fall within 1..{self.width}.")
        if not 1 <= y <= self.height:
            raise OutOfBounds(f"Y coordinate {y} must fall within 1..{self.height}.")

    def cell(self, x, y) -> str:
        """Returns the character at an interior coordinate."""
        self._check_point(x, y)
        return str(self.grid[y, x])

    def draw_line(self, x1, y1, x2, y2):
        """Draws a horizontal or vertical line of markers, endpoints included."""
        self._check_point(x1, y1)
        self._check_point(x2, y2)
        if x1 == x2 and y1 == y2:
            raise DegenerateLine(f"Line cannot begin and end at the same location ({x1}, {y1}).")

        if x1 == x2:
            top, bottom = sorted((y1, y2))
            self.grid[top:bottom + 1, x1] = MARKER
        elif y1 == y2:
            left, right = sorted((x1, x2))
            self.grid[y1, left:right + 1] = MARKER
        else:
            raise UnsupportedOrientation(
                f"Can only draw a straight line, got ({x1}, {y1}) to ({x2}, {y2})."
            )
        logger.debug("Drew line (%d, %d) -> (%d, %d)", x1, y1, x2, y2)

    def draw_rectangle(self, x1, y1, x2, y2):
        """Draws the outline of the rectangle with opposite corners (x1, y1) and (x2, y2)."""
        self._check_point(x1, y1)
        self._check_point(x2, y2)
        if x1 == x2 or y1 == y2:
            raise DegenerateRectangle(
                f"Cannot make a rectangle from a straight line ({x1}, {y1}) to ({x2}, {y2})."
            )

        self.draw_line(x1, y1, x2, y1)
        self.draw_line(x1, y2, x2, y2)
        self.draw_line(x1, y1, x1, y2)
        self.draw_line(x2, y1, x2, y2)

    def fill(self, x, y, color):
        """Fills the blank region 4-connected to (x, y) with ``color``."""
        self._check_point(x, y)
        if not isinstance(color, str) or len(color) != 1:
            raise InvalidColor(f"The color must be a single character, got {color!r}.")
        if color == BLANK:
            raise InvalidColor("The color cannot be the blank character.")
        if not color.isprintable():
            raise InvalidColor(f"The color must be a printable character, got {color!r}.")

        if self.grid[y, x] != BLANK:
            return

        # Cells are coloured when pushed, so each one enters the stack at most once.
        self.grid[y, x] = color
        stack = [(x, y)]
        filled = 1
        while stack:
            px, py = stack.pop()
            for nx, ny in ((px - 1, py), (px, py - 1), (px + 1, py), (px, py + 1)):
                if (
                    1 <= nx <= self.width and
                    1 <= ny <= self.height and
                    self.grid[ny, nx] == BLANK
                ):
                    self.grid[ny, nx] = color
                    stack.append((nx, ny))
                    filled += 1
        logger.debug("Filled %d cells from (%d, %d) with %r", filled, x, y, color)

    def render(self) -> str:
        """Returns the grid as text, one newline-terminated line per row."""
        return "".join("".join(row) + "\n" for row in self.grid)

    def to_rgba(self, config: CanvasConfig = None) -> np.ndarray:
        """Maps every cell to an RGBA block of ``cell_size`` pixels."""
        config = config or CanvasConfig()
        pixels = np.empty(self.grid.shape + (4,), dtype=np.uint8)
        pixels[:] = config.background
        for char in np.unique(self.grid[1:-1, 1:-1]):
            if char == BLANK:
                continue
            colour = config.marker_color if char == MARKER else config.fill_color(str(char))
            pixels[self.grid == char] = colour
        # The frame is structural, whatever characters a fill may share with it.
        pixels[0, :] = config.border_color
        pixels[-1, :] = config.border_color
        pixels[:, 0] = config.border_color
        pixels[:, -1] = config.border_color
        size = config.cell_size
        return pixels.repeat(size, axis=0).repeat(size, axis=1)

    def save_to_png(self, filename="canvas.png", config: CanvasConfig = None):
        """Saves the canvas to a PNG file."""
        img = Image.fromarray(self.to_rgba(config))
        img.save(filename)
        logger.info("Saved canvas image to %s", filename)
