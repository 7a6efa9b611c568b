"""Frame-by-frame playback of vehicle timelines.

The frame index is a logical tick, unrelated to wall-clock time or to any
vehicle's own timestamps. Each tick draws the ``i``-th sample of every
vehicle that has one, then the index advances and wraps at the frame
bound.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Protocol

from pysbahn.colors import Color
from pysbahn.config import ReplayConfig
from pysbahn.models.trajectory import Coordinate
from pysbahn.state.history import VehicleHistory

_logger = logging.getLogger(__name__)


def map_range(value: float, a_min: float, a_max: float, b_min: float, b_max: float) -> float:
    """Linearly map *value* from ``[a_min, a_max]`` onto ``[b_min, b_max]``."""
    return b_min + (value - a_min) / (a_max - a_min) * (b_max - b_min)


class DrawSurface(Protocol):
    """What the replay loop needs from a window."""

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    def clear(self, color: Color) -> None: ...

    def draw_circle(self, center: tuple[float, float], radius: float, color: Color) -> None: ...

    async def next_frame(self) -> bool:
        """Present the frame and yield until the next tick. ``False`` requests a stop."""
        ...


@dataclass(frozen=True)
class ScreenProjection:
    """Maps coordinates to surface pixels with the vertical axis flipped."""

    width: float
    height: float
    longitude_range: tuple[float, float]
    latitude_range: tuple[float, float]

    def project(self, position: Coordinate) -> tuple[float, float]:
        lon_min, lon_max = self.longitude_range
        lat_min, lat_max = self.latitude_range
        x = map_range(position.longitude, lon_min, lon_max, 0.0, self.width)
        y = map_range(position.latitude, lat_min, lat_max, self.height, 0.0)
        return x, y


class Replay:
    """Round-robin playback over a :class:`VehicleHistory`."""

    def __init__(self, history: VehicleHistory, config: ReplayConfig | None = None) -> None:
        self._history = history
        self._config = config or ReplayConfig()
        self._background = Color.from_rgb_int(self._config.background)
        self._frame_index = 0

    @property
    def frame_index(self) -> int:
        return self._frame_index

    @property
    def frame_bound(self) -> int:
        """Tick count after which the index wraps to zero.

        Uses the configured bound, or the longest vehicle timeline.
        """
        if self._config.frame_bound is not None:
            return self._config.frame_bound
        return max(self._history.longest_timeline(), 1)

    def advance(self) -> int:
        """Move to the next tick, wrapping at :attr:`frame_bound`."""
        self._frame_index += 1
        if self._frame_index >= self.frame_bound:
            self._frame_index = 0
        return self._frame_index

    def projection_for(self, surface: DrawSurface) -> ScreenProjection:
        return ScreenProjection(
            width=surface.width,
            height=surface.height,
            longitude_range=self._config.longitude_range,
            latitude_range=self._config.latitude_range,
        )

    def draw(self, surface: DrawSurface) -> int:
        """Clear the surface and draw the current tick. Returns vehicles drawn."""
        surface.clear(self._background)
        return self._history.render(
            self._frame_index,
            surface,
            self.projection_for(surface),
            self._config.radius,
        )

    async def run(self, surface: DrawSurface, *, max_frames: int | None = None) -> int:
        """Play until the surface asks to stop or *max_frames* ticks were shown.

        Returns the number of ticks shown.
        """
        _logger.info(
            "Replay starting vehicles=%d records=%d frame_bound=%d",
            len(self._history),
            self._history.record_count,
            self.frame_bound,
        )
        shown = 0
        while max_frames is None or shown < max_frames:
            self.draw(surface)
            shown += 1
            if not await surface.next_frame():
                _logger.info("Replay stopped by surface after %d frames", shown)
                break
            if self._config.frame_delay > 0:
                await asyncio.sleep(self._config.frame_delay)
            self.advance()
        return shown
