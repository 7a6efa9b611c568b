"""Feed and replay configuration for pysbahn."""

from __future__ import annotations

import dataclasses
import os
from typing import Any
from urllib.parse import urlencode

from pysbahn import _constants
from pysbahn.exceptions import SbahnConfigError


def _env_float(value: str, name: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise SbahnConfigError(f"{name} must be a number, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class FeedConfig:
    """Live feed configuration.

    Parameters
    ----------
    api_key : str
        geOps realtime API key. Embedded in the websocket URL.
    base_url : str
        Websocket endpoint without query string.
    log_path : str
        Raw frame log. Opened in append mode.
    bbox : tuple of int
        Spatial filter ``(minx, miny, maxx, maxy)`` in web mercator metres.
    zoom : int
        Zoom level sent with the spatial filter.
    tenant : str
        Tenant identifier (``sbm`` for S-Bahn Munich).
    buffer : tuple of int
        Server-side buffering hint sent as ``BUFFER <a> <b>``.
    topics : tuple of str
        Channels to ``GET`` and ``SUB``, in order.
    ping_interval : float
        Minimum spacing in seconds between keepalive ``PING`` messages.
    reconnect_delay : float
        Pause before reconnecting after a dropped session. ``0`` reconnects
        immediately.
    connect_timeout : float or None
        Timeout for establishing the websocket. ``None`` waits indefinitely.
    """

    api_key: str
    base_url: str = _constants.BASE_URL
    log_path: str = _constants.LOG_PATH
    bbox: tuple[int, int, int, int] = _constants.BBOX
    zoom: int = _constants.ZOOM
    tenant: str = _constants.TENANT
    buffer: tuple[int, int] = _constants.BUFFER
    topics: tuple[str, ...] = _constants.TOPICS
    ping_interval: float = _constants.PING_INTERVAL_SECONDS
    reconnect_delay: float = 0.0
    connect_timeout: float | None = None

    def __post_init__(self) -> None:
        if not self.api_key or not self.api_key.strip():
            raise SbahnConfigError("api_key must be non-empty")
        if self.ping_interval <= 0:
            raise SbahnConfigError(f"ping_interval must be positive, got {self.ping_interval}")
        if self.reconnect_delay < 0:
            raise SbahnConfigError(f"reconnect_delay must not be negative, got {self.reconnect_delay}")

    @property
    def url(self) -> str:
        """Websocket URL with the API key embedded."""
        return f"{self.base_url}?{urlencode({'key': self.api_key})}"

    @classmethod
    def from_env(cls, **overrides: Any) -> FeedConfig:
        """Create configuration from environment variables.

        Reads ``SBAHN_API_KEY`` (falling back to ``API_KEY``) and the
        optional ``SBAHN_BASE_URL``, ``SBAHN_LOG_PATH``, ``SBAHN_TENANT``,
        ``SBAHN_PING_INTERVAL`` and ``SBAHN_RECONNECT_DELAY``. Explicit
        keyword arguments override environment values.
        """
        env = os.environ

        config_kwargs: dict[str, Any] = {}
        api_key = env.get("SBAHN_API_KEY") or env.get("API_KEY")
        if api_key is not None:
            config_kwargs["api_key"] = api_key

        _ENV_CONFIG_MAP = {
            "SBAHN_BASE_URL": "base_url",
            "SBAHN_LOG_PATH": "log_path",
            "SBAHN_TENANT": "tenant",
        }
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        ping_env = env.get("SBAHN_PING_INTERVAL")
        if ping_env is not None and "ping_interval" not in overrides:
            config_kwargs["ping_interval"] = _env_float(ping_env, "SBAHN_PING_INTERVAL")

        delay_env = env.get("SBAHN_RECONNECT_DELAY")
        if delay_env is not None and "reconnect_delay" not in overrides:
            config_kwargs["reconnect_delay"] = _env_float(delay_env, "SBAHN_RECONNECT_DELAY")

        config_kwargs.update(overrides)
        if "api_key" not in config_kwargs:
            raise SbahnConfigError("SBAHN_API_KEY (or API_KEY) is not set")

        return cls(**config_kwargs)


@dataclasses.dataclass(frozen=True)
class ReplayConfig:
    """Replay window and projection settings.

    ``frame_bound`` is the tick count after which playback wraps to frame
    zero. ``None`` derives it from the longest vehicle timeline.
    """

    width: int = 800
    height: int = 600
    longitude_range: tuple[float, float] = _constants.LONGITUDE_RANGE
    latitude_range: tuple[float, float] = _constants.LATITUDE_RANGE
    background: int = _constants.BACKGROUND_COLOR
    radius: float = _constants.VEHICLE_RADIUS
    frame_delay: float = _constants.FRAME_DELAY_SECONDS
    frame_bound: int | None = None

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise SbahnConfigError(f"surface size must be positive, got {self.width}x{self.height}")
        if self.frame_bound is not None and self.frame_bound <= 0:
            raise SbahnConfigError(f"frame_bound must be positive, got {self.frame_bound}")
        for name, (low, high) in (("longitude_range", self.longitude_range), ("latitude_range", self.latitude_range)):
            if low == high:
                raise SbahnConfigError(f"{name} must not be empty, got {low}..{high}")
