"""pygame implementation of the replay draw surface."""

from __future__ import annotations

import asyncio
import logging

import pygame

from pysbahn.colors import Color

_logger = logging.getLogger(__name__)


class PygameSurface:
    """A pygame window that satisfies :class:`pysbahn.replay.DrawSurface`.

    Closing the window or pressing ESC makes :meth:`next_frame` return
    ``False``.
    """

    def __init__(self, width: int, height: int, *, caption: str = "S-Bahn Munich live map") -> None:
        pygame.init()
        self._screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption(caption)
        _logger.debug("pygame display initialised size=%dx%d", width, height)

    @property
    def width(self) -> int:
        return self._screen.get_width()

    @property
    def height(self) -> int:
        return self._screen.get_height()

    def clear(self, color: Color) -> None:
        self._screen.fill(color.to_rgba255())

    def draw_circle(self, center: tuple[float, float], radius: float, color: Color) -> None:
        pygame.draw.circle(self._screen, color.to_rgba255(), center, radius)

    async def next_frame(self) -> bool:
        pygame.display.flip()
        keep_running = True
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                keep_running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                keep_running = False
        # Hand control back to the event loop between frames.
        await asyncio.sleep(0)
        return keep_running

    def close(self) -> None:
        pygame.quit()
