import logging
import time
from typing import Callable, Optional, Tuple

from mosaic_drawing import draw_cell, draw_grid
from mosaic_model import Color, MosaicGrid
from mosaic_surface import DisplaySurface
import mosaic_style

logger = logging.getLogger(__name__)


class MosaicCanvas:
    """
    A grid of colored rectangles drawn on a display surface.

    Colors can be set from any thread. Every draw runs on the surface's UI
    thread: directly when already there, otherwise queued with invoke_later.
    Setting a cell redraws just that cell; changing a grid-wide property
    redraws everything, but only when the value actually changed.
    """

    def __init__(
        self,
        surface: DisplaySurface,
        rows: int = mosaic_style.DEFAULT_ROWS,
        columns: int = mosaic_style.DEFAULT_COLUMNS,
        throttle: float = mosaic_style.DRAW_THROTTLE,
    ):
        self.grid = MosaicGrid(rows, columns)
        self.surface = surface
        self.throttle = throttle
        self.autopaint = True
        surface.on_resize = self.force_redraw

    @staticmethod
    def preferred_size(
        rows: int,
        columns: int,
        block_height: int = mosaic_style.DEFAULT_BLOCK_SIZE,
        block_width: int = mosaic_style.DEFAULT_BLOCK_SIZE,
    ) -> Tuple[int, int]:
        """(width, height) in pixels for the given block size, blocks no smaller than MIN_BLOCK_SIZE."""
        block_height = max(block_height, mosaic_style.MIN_BLOCK_SIZE)
        block_width = max(block_width, mosaic_style.MIN_BLOCK_SIZE)
        return block_width * columns, block_height * rows

    @property
    def rows(self) -> int:
        return self.grid.rows

    @property
    def columns(self) -> int:
        return self.grid.columns

    # ----------------------------
    # Cell colors
    # ----------------------------

    def set_color(self, row: int, col: int, color: Color) -> None:
        """Set one cell; ignored if (row, col) is outside the grid."""
        if self.grid.set_cell(row, col, color):
            if self.autopaint:
                self._schedule(lambda: draw_cell(self.surface, self.grid, row, col))

    def set_rgb(self, row: int, col: int, red: float, green: float, blue: float) -> None:
        self.set_color(row, col, Color.rgb(red, green, blue))

    def get_color(self, row: int, col: int) -> Optional[Color]:
        return self.grid.get_cell(row, col)

    def get_red(self, row: int, col: int) -> float:
        return self.grid.get_channel(row, col, "red")

    def get_green(self, row: int, col: int) -> float:
        return self.grid.get_channel(row, col, "green")

    def get_blue(self, row: int, col: int) -> float:
        return self.grid.get_channel(row, col, "blue")

    def fill(self, color: Optional[Color]) -> None:
        self.grid.fill(color)
        self._redraw_if(self.autopaint)

    def clear(self) -> None:
        self.fill(None)

    # ----------------------------
    # Grid-wide properties
    # ----------------------------

    @property
    def default_color(self) -> Color:
        return self.grid.default_color

    @property
    def grouting_color(self) -> Optional[Color]:
        return self.grid.grouting_color

    @property
    def use_3d(self) -> bool:
        return self.grid.use_3d

    @property
    def always_draw_grouting(self) -> bool:
        return self.grid.always_draw_grouting

    def set_default_color(self, color: Color) -> None:
        self._redraw_if(self.grid.set_default_color(color))

    def set_grouting_color(self, color: Optional[Color]) -> None:
        self._redraw_if(self.grid.set_grouting_color(color))

    def set_use_3d(self, use_3d: bool) -> None:
        self._redraw_if(self.grid.set_use_3d(use_3d))

    def set_always_draw_grouting(self, always: bool) -> None:
        self._redraw_if(self.grid.set_always_draw_grouting(always))

    def set_autopaint(self, autopaint: bool) -> None:
        """
        Turn redraw-on-write on or off.

        With autopaint off, set_color only stores colors; call force_redraw to
        show a batch of changes. Turning it back on redraws the whole grid.
        """
        if autopaint == self.autopaint:
            return
        self.autopaint = autopaint
        self._redraw_if(autopaint)

    # ----------------------------
    # Redraw
    # ----------------------------

    def force_redraw(self) -> None:
        logger.debug(f"Full redraw of {self.rows}x{self.columns} mosaic")
        self._schedule(lambda: draw_grid(self.surface, self.grid))

    def _redraw_if(self, changed: bool) -> None:
        if changed:
            self.force_redraw()

    def _schedule(self, draw: Callable[[], None]) -> None:
        if self.surface.is_owner_thread():
            draw()
        else:
            self.surface.invoke_later(draw)
        # Keep tight update loops from flooding the UI thread.
        if self.throttle > 0:
            time.sleep(self.throttle)
