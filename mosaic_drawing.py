from typing import Any

from mosaic_model import Color, MosaicGrid, cell_rect
import mosaic_style


def fill_3d_rect(surface: Any, color: Color, x: int, y: int, width: int, height: int) -> None:
    """Fill a raised-looking rect: light on the top/left edges, shadow on the bottom/right."""
    h, s, b = color.to_hsb()
    if b > mosaic_style.BEVEL_MAX_BRIGHTNESS:
        b = mosaic_style.BEVEL_MAX_BRIGHTNESS
        color = Color.hsb(h, s, b)
    elif b < mosaic_style.BEVEL_MIN_BRIGHTNESS:
        b = mosaic_style.BEVEL_MIN_BRIGHTNESS
        color = Color.hsb(h, s, b)
    surface.fill_rect(x, y, width, height, color)

    light = Color.hsb(h, s, b + mosaic_style.BEVEL_SHADE_STEP)
    surface.stroke_line(x + 0.5, y + 0.5, x + width - 0.5, y + 0.5, light)
    surface.stroke_line(x + 0.5, y + 0.5, x + 0.5, y + height - 0.5, light)

    dark = Color.hsb(h, s, b - mosaic_style.BEVEL_SHADE_STEP)
    surface.stroke_line(x + width - 0.5, y + 1.5, x + width - 0.5, y + height - 0.5, dark)
    surface.stroke_line(x + 1.5, y + height - 0.5, x + width - 0.5, y + height - 0.5, dark)


def draw_cell(surface: Any, grid: MosaicGrid, row: int, col: int) -> None:
    # Geometry comes from the surface's current size on every call.
    x, y, w, h = cell_rect(row, col, grid.rows, grid.columns, surface.width, surface.height)
    c = grid.cells[row][col]
    fill = grid.default_color if c is None else c
    flat = c is None or not grid.use_3d

    if grid.grouting_color is None or (c is None and not grid.always_draw_grouting):
        if flat:
            surface.fill_rect(x, y, w, h, fill)
        else:
            fill_3d_rect(surface, fill, x, y, w, h)
    else:
        if flat:
            surface.fill_rect(x + 1, y + 1, w - 2, h - 2, fill)
        else:
            fill_3d_rect(surface, fill, x + 1, y + 1, w - 2, h - 2)
        surface.stroke_rect(x + 0.5, y + 0.5, w - 1, h - 1, grid.grouting_color)


def draw_grid(surface: Any, grid: MosaicGrid) -> None:
    for r in range(grid.rows):
        for c in range(grid.columns):
            draw_cell(surface, grid, r, c)
