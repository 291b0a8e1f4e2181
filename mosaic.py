"""
Mosaic: a window made up of a grid of colored rectangles.

Colors are given as red, green and blue amounts from 0 to 255. The functions
in this module drive one process-wide window and may be called from any
thread:

    import mosaic

    mosaic.open(10, 20, 15, 15)
    mosaic.set_color(0, 0, 255, 0, 0)
    mosaic.delay(100)

Rows are numbered 0 to rows - 1 and columns 0 to columns - 1.
"""

import logging
import threading
import time
from typing import Callable, Optional, Tuple

from mosaic_canvas import MosaicCanvas
from mosaic_model import Color, MosaicRangeError
from mosaic_surface import DisplaySurface, PygameSurface
import mosaic_style

logger = logging.getLogger(__name__)

SurfaceFactory = Callable[[int, int], DisplaySurface]


class MosaicWindow:
    """Handle on one mosaic window: opened once, then read and written from any thread."""

    def __init__(
        self,
        surface_factory: SurfaceFactory = PygameSurface,
        use_3d_effect: bool = True,
        poll_interval: float = mosaic_style.OPEN_POLL_INTERVAL,
    ) -> None:
        self.surface_factory = surface_factory
        self.use_3d_effect = use_3d_effect
        self.poll_interval = poll_interval
        self.surface: Optional[DisplaySurface] = None
        # (canvas, rows, columns), replaced as a whole so readers never see a mix.
        self._opened: Optional[Tuple[MosaicCanvas, int, int]] = None
        self._open_lock = threading.Lock()

    @property
    def canvas(self) -> Optional[MosaicCanvas]:
        opened = self._opened
        return None if opened is None else opened[0]

    @property
    def rows(self) -> int:
        opened = self._opened
        return 0 if opened is None else opened[1]

    @property
    def columns(self) -> int:
        opened = self._opened
        return 0 if opened is None else opened[2]

    def open(
        self,
        rows: int,
        columns: int,
        block_width: int = mosaic_style.DEFAULT_BLOCK_SIZE,
        block_height: int = mosaic_style.DEFAULT_BLOCK_SIZE,
    ) -> None:
        """
        Open the window and wait until it can be drawn on.

        Each rectangle is block_width pixels wide and block_height pixels high.
        Does nothing if the window is already open. Initially every rectangle
        shows the default color (black).
        """
        with self._open_lock:
            if self._opened is not None:
                return
            width, height = MosaicCanvas.preferred_size(rows, columns, block_height, block_width)
            surface = self.surface_factory(width, height)
            canvas = MosaicCanvas(surface, rows, columns)
            self._apply_3d_effect(canvas)
            canvas.force_redraw()
            surface.start()

            while not surface.wait_ready(self.poll_interval):
                if not surface.is_running():
                    raise RuntimeError("Mosaic window failed to start.")

            self.surface = surface
            self._opened = (canvas, rows, columns)
            logger.info(f"Mosaic opened: {rows} rows x {columns} columns")

    def is_open(self) -> bool:
        return self._opened is not None

    def close(self) -> None:
        """Stop the window; the next open() starts a fresh one."""
        with self._open_lock:
            if self.surface is not None:
                self.surface.stop()
            self.surface = None
            self._opened = None

    def _checked_canvas(self, row: int, col: int) -> Optional[MosaicCanvas]:
        opened = self._opened
        if opened is None:
            return None
        canvas, rows, columns = opened
        if row < 0 or row >= rows or col < 0 or col >= columns:
            raise MosaicRangeError(row, col)
        return canvas

    def get_red(self, row: int, col: int) -> int:
        """Red component of the rectangle at (row, col), 0 to 255."""
        canvas = self._checked_canvas(row, col)
        if canvas is None:
            return 0
        return int(255 * canvas.get_red(row, col))

    def get_green(self, row: int, col: int) -> int:
        canvas = self._checked_canvas(row, col)
        if canvas is None:
            return 0
        return int(255 * canvas.get_green(row, col))

    def get_blue(self, row: int, col: int) -> int:
        canvas = self._checked_canvas(row, col)
        if canvas is None:
            return 0
        return int(255 * canvas.get_blue(row, col))

    def set_color(self, row: int, col: int, red: int, green: int, blue: int) -> None:
        """
        Set the color of the rectangle at (row, col).

        red, green and blue run from 0 (none) to 255 (full); values outside
        that range are clamped. Does nothing if the window is not open.
        """
        canvas = self._checked_canvas(row, col)
        if canvas is None:
            return
        canvas.set_color(row, col, Color.from_rgb255(red, green, blue))

    def set_use_3d_effect(self, use_3d_effect: bool) -> None:
        """3D rects and grouting when True, flat rects with no grouting when False."""
        self.use_3d_effect = use_3d_effect
        if self.canvas is not None:
            self._apply_3d_effect(self.canvas)

    def _apply_3d_effect(self, canvas: MosaicCanvas) -> None:
        if self.use_3d_effect:
            canvas.set_grouting_color(Color.from_rgb255(*mosaic_style.COLOR_GROUTING))
        else:
            canvas.set_grouting_color(None)
        canvas.set_use_3d(self.use_3d_effect)

    def redraw(self) -> None:
        if self.canvas is not None:
            self.canvas.force_redraw()


def delay(milliseconds: int) -> None:
    """Pause the calling thread for at least `milliseconds`. Non-positive values return at once."""
    if milliseconds > 0:
        time.sleep(milliseconds / 1000.0)


# ----------------------------
# Process-wide window
# ----------------------------

_window = MosaicWindow()


def window() -> MosaicWindow:
    return _window


def open(rows: int, columns: int,
         block_width: int = mosaic_style.DEFAULT_BLOCK_SIZE,
         block_height: int = mosaic_style.DEFAULT_BLOCK_SIZE) -> None:
    _window.open(rows, columns, block_width, block_height)


def is_open() -> bool:
    return _window.is_open()


def close() -> None:
    _window.close()


def get_red(row: int, col: int) -> int:
    return _window.get_red(row, col)


def get_green(row: int, col: int) -> int:
    return _window.get_green(row, col)


def get_blue(row: int, col: int) -> int:
    return _window.get_blue(row, col)


def set_color(row: int, col: int, red: int, green: int, blue: int) -> None:
    _window.set_color(row, col, red, green, blue)


def set_use_3d_effect(use_3d_effect: bool) -> None:
    _window.set_use_3d_effect(use_3d_effect)


def redraw() -> None:
    _window.redraw()
