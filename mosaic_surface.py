"""
Display surfaces the mosaic draws on.

A surface owns one UI thread. Drawing primitives may only be called on that
thread; other threads hand work over with `invoke_later`.
"""

import _thread
import logging
import math
import queue
import threading
from abc import ABC, abstractmethod
from typing import Callable, Optional

import pygame

from mosaic_model import Color
import mosaic_style

logger = logging.getLogger(__name__)


class DisplaySurface(ABC):
    """Abstract drawing target with an owning UI thread."""

    def __init__(self, width: int, height: int, title: str = mosaic_style.WINDOW_TITLE):
        self.width = width
        self.height = height
        self.title = title
        # Called on the UI thread after the surface changed size.
        self.on_resize: Optional[Callable[[], None]] = None

    @abstractmethod
    def start(self) -> None:
        """Start the UI thread. Returns without waiting for it to be ready."""
        pass

    @abstractmethod
    def stop(self) -> None:
        pass

    @abstractmethod
    def is_ready(self) -> bool:
        pass

    @abstractmethod
    def wait_ready(self, timeout: float) -> bool:
        """
        Wait up to `timeout` seconds for the surface to become ready.

        Returns:
            True if the surface is ready
        """
        pass

    @abstractmethod
    def is_running(self) -> bool:
        pass

    @abstractmethod
    def invoke_later(self, callback: Callable[[], None]) -> None:
        """Queue `callback` to run on the UI thread. Never blocks on it."""
        pass

    @abstractmethod
    def is_owner_thread(self) -> bool:
        """True when called from the surface's UI thread."""
        pass

    @abstractmethod
    def fill_rect(self, x: float, y: float, width: float, height: float, color: Color) -> None:
        pass

    @abstractmethod
    def stroke_rect(self, x: float, y: float, width: float, height: float, color: Color) -> None:
        """
        Stroke a 1-pixel outline.

        Coordinates follow pixel-centre convention: the outline of the pixel
        block (x, y, w, h) is stroke_rect(x + 0.5, y + 0.5, w - 1, h - 1).
        """
        pass

    @abstractmethod
    def stroke_line(self, x1: float, y1: float, x2: float, y2: float, color: Color) -> None:
        pass


class PygameSurface(DisplaySurface):
    """A pygame window driven from its own thread."""

    def __init__(
        self,
        width: int,
        height: int,
        title: str = mosaic_style.WINDOW_TITLE,
        frame_rate: int = mosaic_style.FRAME_RATE,
        resizable: bool = False,
        exit_on_close: bool = False,
    ):
        """
        Args:
            width: Window width in pixels
            height: Window height in pixels
            title: Window caption
            frame_rate: Frames per second of the UI loop
            resizable: Let the user resize the window
            exit_on_close: Interrupt the main thread when the window is closed
        """
        super().__init__(width, height, title)
        self.frame_rate = frame_rate
        self.resizable = resizable
        self.exit_on_close = exit_on_close
        self.screen: Optional[pygame.Surface] = None

        self._tasks: "queue.Queue[Callable[[], None]]" = queue.Queue()
        self._ready_evt = threading.Event()
        self._stop_evt = threading.Event()
        self._owner_ident: Optional[int] = None
        self._thread = threading.Thread(target=self._run, name="MosaicSurface", daemon=True)

    # ----------------------------
    # Lifecycle
    # ----------------------------

    def start(self) -> None:
        self._thread.start()

    def stop(self) -> None:
        self._stop_evt.set()
        if self._thread.is_alive() and not self.is_owner_thread():
            self._thread.join(timeout=1.0)

    def is_ready(self) -> bool:
        return self._ready_evt.is_set()

    def wait_ready(self, timeout: float) -> bool:
        return self._ready_evt.wait(timeout)

    def is_running(self) -> bool:
        return self._thread.is_alive() and not self._stop_evt.is_set()

    # ----------------------------
    # Scheduling
    # ----------------------------

    def invoke_later(self, callback: Callable[[], None]) -> None:
        if self._stop_evt.is_set():
            logger.debug("Surface stopped, dropping queued draw.")
            return
        self._tasks.put(callback)

    def is_owner_thread(self) -> bool:
        return self._owner_ident is not None and threading.get_ident() == self._owner_ident

    def _run_pending(self) -> None:
        while True:
            try:
                task = self._tasks.get_nowait()
            except queue.Empty:
                return
            try:
                task()
            except Exception:
                logger.exception("Queued draw failed")

    def _run(self) -> None:
        closed = False
        pygame.init()
        try:
            flags = pygame.RESIZABLE if self.resizable else 0
            self.screen = pygame.display.set_mode((self.width, self.height), flags)
            pygame.display.set_caption(self.title)
            clock = pygame.time.Clock()

            self._owner_ident = threading.get_ident()
            self._ready_evt.set()
            logger.info(f"Mosaic window opened: {self.width}x{self.height}")

            while not self._stop_evt.is_set():
                self._run_pending()

                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        closed = True
                        self._stop_evt.set()
                        break
                    if event.type == pygame.VIDEORESIZE:
                        self._resized(event.w, event.h)

                pygame.display.flip()
                clock.tick(self.frame_rate)
        finally:
            self._stop_evt.set()
            self._owner_ident = None
            self.screen = None
            pygame.quit()
            logger.info("Mosaic window closed.")

        if closed and self.exit_on_close:
            _thread.interrupt_main()

    def _resized(self, width: int, height: int) -> None:
        self.screen = pygame.display.get_surface()
        self.width, self.height = width, height
        if self.on_resize is not None:
            self.on_resize()

    # ----------------------------
    # Drawing (UI thread only)
    # ----------------------------

    def fill_rect(self, x: float, y: float, width: float, height: float, color: Color) -> None:
        if self.screen is None or width <= 0 or height <= 0:
            return
        rect = pygame.Rect(int(x), int(y), int(width), int(height))
        pygame.draw.rect(self.screen, color.to_rgb255(), rect)

    def stroke_rect(self, x: float, y: float, width: float, height: float, color: Color) -> None:
        if self.screen is None or width < 0 or height < 0:
            return
        x0, y0 = math.floor(x), math.floor(y)
        x1, y1 = math.floor(x + width), math.floor(y + height)
        rect = pygame.Rect(x0, y0, x1 - x0 + 1, y1 - y0 + 1)
        pygame.draw.rect(self.screen, color.to_rgb255(), rect, 1)

    def stroke_line(self, x1: float, y1: float, x2: float, y2: float, color: Color) -> None:
        if self.screen is None:
            return
        start = (math.floor(x1), math.floor(y1))
        end = (math.floor(x2), math.floor(y2))
        pygame.draw.line(self.screen, color.to_rgb255(), start, end, 1)
