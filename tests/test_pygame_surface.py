import os
import sys
import threading

import pygame
import pytest

# Add project root to sys.path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from mosaic import MosaicWindow
from mosaic_drawing import draw_cell
from mosaic_model import Color, MosaicGrid
from mosaic_surface import PygameSurface

RED = Color.rgb(1.0, 0.0, 0.0)
WHITE = Color.rgb(1.0, 1.0, 1.0)


def offscreen(width=10, height=10):
    surface = PygameSurface(width, height, exit_on_close=False)
    surface.screen = pygame.Surface((width, height), 0, 32)
    return surface


def pixel(surface, x, y):
    return tuple(surface.screen.get_at((x, y)))[:3]


def test_fill_rect_covers_exact_pixels():
    s = offscreen()
    s.fill_rect(2, 3, 4, 2, RED)
    assert pixel(s, 2, 3) == (255, 0, 0)
    assert pixel(s, 5, 4) == (255, 0, 0)
    assert pixel(s, 6, 4) == (0, 0, 0)
    assert pixel(s, 2, 5) == (0, 0, 0)


def test_fill_rect_ignores_empty_rects():
    s = offscreen()
    s.fill_rect(2, 2, -1, 4, RED)
    s.fill_rect(2, 2, 4, 0, RED)
    assert pixel(s, 2, 2) == (0, 0, 0)


def test_stroke_rect_outlines_the_pixel_block():
    s = offscreen()
    s.stroke_rect(0.5, 0.5, 9, 9, WHITE)
    for xy in [(0, 0), (9, 0), (0, 9), (9, 9), (5, 0), (0, 5)]:
        assert pixel(s, *xy) == (255, 255, 255)
    assert pixel(s, 1, 1) == (0, 0, 0)
    assert pixel(s, 5, 5) == (0, 0, 0)


def test_stroke_line_is_inclusive():
    s = offscreen()
    s.stroke_line(1.5, 2.5, 7.5, 2.5, RED)
    assert pixel(s, 1, 2) == (255, 0, 0)
    assert pixel(s, 7, 2) == (255, 0, 0)
    assert pixel(s, 8, 2) == (0, 0, 0)
    assert pixel(s, 4, 3) == (0, 0, 0)


def test_drawing_before_start_is_a_no_op():
    s = PygameSurface(10, 10, exit_on_close=False)
    s.fill_rect(0, 0, 10, 10, RED)
    s.stroke_rect(0.5, 0.5, 9, 9, RED)
    s.stroke_line(0.5, 0.5, 9.5, 0.5, RED)
    assert s.screen is None


def test_grouted_cell_on_pixels():
    grid = MosaicGrid(2, 2)
    grid.set_use_3d(False)
    grid.set_cell(0, 0, WHITE)
    s = offscreen(20, 20)
    draw_cell(s, grid, 0, 0)
    assert pixel(s, 0, 0) == (128, 128, 128)
    assert pixel(s, 9, 9) == (128, 128, 128)
    assert pixel(s, 1, 1) == (255, 255, 255)
    assert pixel(s, 8, 8) == (255, 255, 255)
    assert pixel(s, 10, 10) == (0, 0, 0)


def test_not_owner_thread_before_start():
    s = PygameSurface(10, 10, exit_on_close=False)
    assert not s.is_owner_thread()
    assert not s.is_ready()
    assert not s.is_running()


@pytest.fixture
def dummy_video(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")


def test_window_runs_queued_draws_on_its_own_thread(dummy_video):
    surface = PygameSurface(20, 20, exit_on_close=False)
    surface.start()
    try:
        assert surface.wait_ready(5.0)
        ran = threading.Event()
        seen = []

        def task():
            seen.append(surface.is_owner_thread())
            ran.set()

        surface.invoke_later(task)
        assert ran.wait(5.0)
        assert seen == [True]
        assert not surface.is_owner_thread()
    finally:
        surface.stop()
    assert not surface.is_running()


def test_failing_draw_does_not_stop_the_loop(dummy_video):
    surface = PygameSurface(20, 20, exit_on_close=False)
    surface.start()
    try:
        assert surface.wait_ready(5.0)
        ran = threading.Event()

        def boom():
            raise RuntimeError("boom")

        surface.invoke_later(boom)
        surface.invoke_later(ran.set)
        assert ran.wait(5.0)
        assert surface.is_running()
    finally:
        surface.stop()


def test_end_to_end_with_real_window(dummy_video):
    window = MosaicWindow(surface_factory=lambda w, h: PygameSurface(w, h, exit_on_close=False))
    try:
        window.open(2, 2, 10, 10)
        assert window.surface.is_ready()
        window.set_color(0, 0, 255, 0, 0)
        assert window.get_red(0, 0) == 255
        assert window.get_green(0, 0) == 0
        assert window.get_red(1, 1) == 0
        with pytest.raises(IndexError):
            window.set_color(5, 5, 0, 0, 0)

        drawn = threading.Event()
        window.surface.invoke_later(drawn.set)
        assert drawn.wait(5.0)
        assert tuple(window.surface.screen.get_at((5, 5)))[:3] == (204, 0, 0)
    finally:
        window.close()


def test_closing_the_window_leaves_the_main_thread_alone_by_default():
    assert PygameSurface(10, 10).exit_on_close is False
