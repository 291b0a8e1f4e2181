import colorsys
import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

import mosaic_style

# ----------------------------
# Colors
# ----------------------------

CHANNELS = ("red", "green", "blue")


def clamp_unit(v: float) -> float:
    return 0.0 if v < 0 else (1.0 if v > 1 else float(v))


@dataclass(frozen=True)
class Color:
    red: float
    green: float
    blue: float

    def __post_init__(self) -> None:
        # Channels always live in [0, 1].
        for name in CHANNELS:
            object.__setattr__(self, name, clamp_unit(getattr(self, name)))

    @classmethod
    def rgb(cls, red: float, green: float, blue: float) -> "Color":
        return cls(red, green, blue)

    @classmethod
    def from_rgb255(cls, red: int, green: int, blue: int) -> "Color":
        return cls.rgb(red / 255.0, green / 255.0, blue / 255.0)

    @classmethod
    def hsb(cls, hue: float, saturation: float, brightness: float) -> "Color":
        """Build a color from hue/saturation/brightness; out-of-range s and b are clamped."""
        r, g, b = colorsys.hsv_to_rgb(hue % 1.0, clamp_unit(saturation), clamp_unit(brightness))
        return cls.rgb(r, g, b)

    def to_hsb(self) -> Tuple[float, float, float]:
        return colorsys.rgb_to_hsv(self.red, self.green, self.blue)

    def to_rgb255(self) -> Tuple[int, int, int]:
        return (
            int(round(self.red * 255)),
            int(round(self.green * 255)),
            int(round(self.blue * 255)),
        )

    def channel(self, name: str) -> float:
        if name not in CHANNELS:
            raise ValueError(f"Unknown color channel: {name!r}")
        return getattr(self, name)


BLACK = Color(0.0, 0.0, 0.0)
GRAY = Color.from_rgb255(*mosaic_style.COLOR_GROUTING)
WHITE = Color(1.0, 1.0, 1.0)


# ----------------------------
# Geometry
# ----------------------------

def round_half_up(v: float) -> int:
    return int(math.floor(v + 0.5))


def cell_span(index: int, count: int, total: float) -> Tuple[int, int]:
    """
    Pixel span of cell `index` when `total` pixels are split into `count` cells.

    Boundaries are the rounded cumulative division, so neighbouring cells share
    an edge and the sizes always add up to `total`.
    """
    step = total / count
    start = round_half_up(step * index)
    end = round_half_up(step * (index + 1))
    return start, max(1, end - start)


def cell_rect(row: int, col: int, rows: int, columns: int, width: float, height: float) -> Tuple[int, int, int, int]:
    y, h = cell_span(row, rows, height)
    x, w = cell_span(col, columns, width)
    return x, y, w, h


# ----------------------------
# Errors
# ----------------------------

class MosaicRangeError(IndexError):
    def __init__(self, row: int, col: int) -> None:
        super().__init__(f"(row,col) = ({row},{col}) is not in the mosaic.")
        self.row = row
        self.col = col


# ----------------------------
# Grid store
# ----------------------------

class MosaicGrid:
    """
    Rows x columns of optional cell colors.

    A cell that was never set (None) is drawn in `default_color`, flat, and only
    gets grouting when `always_draw_grouting` is on.
    """

    def __init__(self, rows: int, columns: int) -> None:
        if rows <= 0 or columns <= 0:
            raise ValueError("Rows and columns must be greater than zero.")
        self.rows = rows
        self.columns = columns
        self.cells: List[List[Optional[Color]]] = [[None for _ in range(columns)] for _ in range(rows)]
        self.default_color: Color = Color.from_rgb255(*mosaic_style.COLOR_DEFAULT)
        self.grouting_color: Optional[Color] = GRAY
        self.always_draw_grouting = False
        self.use_3d = True

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.columns

    def get_cell(self, row: int, col: int) -> Optional[Color]:
        if not self.in_bounds(row, col):
            return None
        return self.cells[row][col]

    def set_cell(self, row: int, col: int, color: Color) -> bool:
        if not self.in_bounds(row, col):
            return False
        self.cells[row][col] = color
        return True

    def clear_cell(self, row: int, col: int) -> bool:
        if not self.in_bounds(row, col):
            return False
        self.cells[row][col] = None
        return True

    def effective_color(self, row: int, col: int) -> Color:
        c = self.get_cell(row, col)
        return self.default_color if c is None else c

    def get_channel(self, row: int, col: int, channel: str) -> float:
        return self.effective_color(row, col).channel(channel)

    def fill(self, color: Optional[Color]) -> None:
        for r in range(self.rows):
            for c in range(self.columns):
                self.cells[r][c] = color

    def clear(self) -> None:
        self.fill(None)

    # Property setters report whether anything changed.

    def set_default_color(self, color: Color) -> bool:
        if color is None:
            raise ValueError("The default color cannot be None.")
        if color == self.default_color:
            return False
        self.default_color = color
        return True

    def set_grouting_color(self, color: Optional[Color]) -> bool:
        if color == self.grouting_color:
            return False
        self.grouting_color = color
        return True

    def set_use_3d(self, use_3d: bool) -> bool:
        if bool(use_3d) == self.use_3d:
            return False
        self.use_3d = bool(use_3d)
        return True

    def set_always_draw_grouting(self, always: bool) -> bool:
        if bool(always) == self.always_draw_grouting:
            return False
        self.always_draw_grouting = bool(always)
        return True
