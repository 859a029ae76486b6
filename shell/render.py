"""
Board drawing for tic-tac-toe.
Renders a board, its winning line and the keyboard focus with Pillow.
"""

from typing import Optional, Sequence, Tuple

from PIL import Image, ImageDraw

from engine.game_state import BOARD_SIZE, CELL_COUNT, Cell, GameOutcome, Mark, index_to_row_col
from .config import ShellConfig

Bounds = Tuple[int, int, int, int]


class BoardRenderer:
    """
    Draws the 3x3 board as a square RGB image.

    Cells are rounded tiles separated by the background colour. The
    three cells of a winning line get the palette's "win" fill, and the
    focused cell gets an outline.
    """

    def __init__(self, config: Optional[ShellConfig] = None, theme: Optional[str] = None):
        """
        Initialize the renderer.

        Args:
            config: Shell configuration. Uses defaults if not provided.
            theme: "dark" or "light". Uses the configured default if not provided.
        """
        self.config = config or ShellConfig()
        self.size = self.config.BOARD_PIXELS
        self.gap = self.config.GRID_GAP
        self.cell_size = (self.size - (BOARD_SIZE + 1) * self.gap) / BOARD_SIZE
        self.theme = self.config.DEFAULT_THEME
        self.set_theme(theme or self.config.DEFAULT_THEME)

    @property
    def palette(self):
        return self.config.PALETTES[self.theme]

    def set_theme(self, theme: str) -> None:
        if theme not in self.config.PALETTES:
            raise ValueError(f"Unknown theme {theme!r}")
        self.theme = theme

    def cell_bounds(self, index: int) -> Bounds:
        """Pixel box (x0, y0, x1, y1) of a cell."""
        row, col = index_to_row_col(index)
        step = self.cell_size + self.gap
        x0 = round(self.gap + col * step)
        y0 = round(self.gap + row * step)
        x1 = round(self.gap + col * step + self.cell_size)
        y1 = round(self.gap + row * step + self.cell_size)
        return x0, y0, x1, y1

    def cell_at(self, x: float, y: float) -> Optional[int]:
        """Cell under a pixel, or None for the gaps and outside the board."""
        for index in range(CELL_COUNT):
            x0, y0, x1, y1 = self.cell_bounds(index)
            if x0 <= x <= x1 and y0 <= y <= y1:
                return index
        return None

    def render(
        self,
        board: Sequence[Cell],
        outcome: Optional[GameOutcome] = None,
        focus: Optional[int] = None
    ) -> Image.Image:
        """
        Draw a board.

        Args:
            board: 9 cells in row-major order.
            outcome: Highlights the winning line if it is a win.
            focus: Cell to outline for keyboard players.

        Returns:
            A new RGB image of BOARD_PIXELS x BOARD_PIXELS.
        """
        palette = self.palette
        image = Image.new("RGB", (self.size, self.size), palette["background"])
        draw = ImageDraw.Draw(image)

        winning = set(outcome.line) if outcome is not None and outcome.is_win else set()

        for index in range(CELL_COUNT):
            bounds = self.cell_bounds(index)
            fill = palette["win"] if index in winning else palette["cell"]
            draw.rounded_rectangle(bounds, radius=self.config.CELL_RADIUS, fill=fill)

            if index == focus:
                draw.rounded_rectangle(
                    bounds,
                    radius=self.config.CELL_RADIUS,
                    outline=palette["focus"],
                    width=self.config.FOCUS_WIDTH
                )

            mark = board[index]
            if mark == Mark.X:
                self._draw_x(draw, bounds, palette["x"])
            elif mark == Mark.O:
                self._draw_o(draw, bounds, palette["o"])

        return image

    def _mark_box(self, bounds: Bounds) -> Bounds:
        pad = round(self.cell_size * self.config.MARK_PADDING)
        x0, y0, x1, y1 = bounds
        return x0 + pad, y0 + pad, x1 - pad, y1 - pad

    def _draw_x(self, draw: ImageDraw.ImageDraw, bounds: Bounds, color: str) -> None:
        x0, y0, x1, y1 = self._mark_box(bounds)
        width = self.config.MARK_WIDTH
        draw.line([(x0, y0), (x1, y1)], fill=color, width=width)
        draw.line([(x0, y1), (x1, y0)], fill=color, width=width)

    def _draw_o(self, draw: ImageDraw.ImageDraw, bounds: Bounds, color: str) -> None:
        draw.ellipse(self._mark_box(bounds), outline=color, width=self.config.MARK_WIDTH)
