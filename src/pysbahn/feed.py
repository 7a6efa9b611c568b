"""Websocket feed session.

Connects to the geOps realtime websocket, subscribes to the configured
channels and forwards every text frame verbatim to a sink (normally
:meth:`pysbahn.rawlog.RawLog.append`). A text ``PING`` keepalive is sent on
connect and then whenever ``ping_interval`` has elapsed, checked after each
received frame rather than on a timer.

When a session drops, :meth:`FeedSession.run_forever` reconnects without
backoff and without a retry cap. Only a failure to connect at all on first
startup is fatal.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import time
from collections.abc import AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager
from typing import Any, Protocol

import aiohttp

from pysbahn._constants import PING_COMMAND
from pysbahn._redact import redact_url
from pysbahn.config import FeedConfig
from pysbahn.exceptions import FeedConnectionError

_CLOSING_TYPES = frozenset({aiohttp.WSMsgType.CLOSE, aiohttp.WSMsgType.CLOSING, aiohttp.WSMsgType.CLOSED})


class FeedMessage(Protocol):
    type: aiohttp.WSMsgType
    data: Any


class FeedSocket(Protocol):
    """The subset of :class:`aiohttp.ClientWebSocketResponse` the session uses.

    Having a protocol here makes it easy to pass test doubles.
    """

    async def send_str(self, data: str) -> None: ...

    async def receive(self) -> FeedMessage: ...


FeedConnector = Callable[[str], AbstractAsyncContextManager[FeedSocket]]


class AiohttpConnector:
    """Opens websocket connections with :mod:`aiohttp`."""

    def __init__(self, *, connect_timeout: float | None = None) -> None:
        self._connect_timeout = connect_timeout

    @contextlib.asynccontextmanager
    async def __call__(self, url: str) -> AsyncIterator[FeedSocket]:
        timeout = aiohttp.ClientTimeout(total=None, connect=self._connect_timeout)
        async with aiohttp.ClientSession(timeout=timeout) as http:
            async with http.ws_connect(url, autoping=True) as socket:
                yield socket


def build_subscribe_commands(config: FeedConfig) -> list[str]:
    """Commands sent right after connecting, in order."""
    minx, miny, maxx, maxy = config.bbox
    first, second = config.buffer
    commands = [
        f"BBOX {minx} {miny} {maxx} {maxy} {config.zoom} tenant={config.tenant}",
        f"BUFFER {first} {second}",
    ]
    for topic in config.topics:
        commands.append(f"GET {topic}")
        commands.append(f"SUB {topic}")
    return commands


class FeedSession:
    """Sequential read loop: receive one frame, write one line, maybe ping."""

    def __init__(
        self,
        config: FeedConfig,
        sink: Callable[[str], None],
        *,
        connector: FeedConnector | None = None,
        clock: Callable[[], float] = time.monotonic,
        logger: logging.Logger | None = None,
    ) -> None:
        self._config = config
        self._sink = sink
        self._connector = connector or AiohttpConnector(connect_timeout=config.connect_timeout)
        self._clock = clock
        self._logger = logger or logging.getLogger(__name__)
        self._redacted_url = redact_url(config.url)
        self._stopped = False
        self._connected_once = False
        self._sessions = 0

    @property
    def sessions(self) -> int:
        """Number of successfully opened connections."""
        return self._sessions

    @property
    def is_stopped(self) -> bool:
        return self._stopped

    def stop(self) -> None:
        """Ask :meth:`run_forever` to return once the current session ends."""
        self._stopped = True

    async def run_forever(self) -> None:
        """Keep a session open, reconnecting whenever it ends."""
        self._logger.info("Feed starting url=%s", self._redacted_url)
        while not self._stopped:
            try:
                frames = await self.run_once()
                self._logger.info("Feed session closed by server after %d frames", frames)
            except FeedConnectionError as exc:
                if not self._connected_once:
                    raise
                self._logger.warning("Feed session failed: %s", exc)
            if self._stopped:
                break
            self._logger.info("Reconnecting to %s", self._redacted_url)
            if self._config.reconnect_delay > 0:
                await asyncio.sleep(self._config.reconnect_delay)
        self._logger.info("Feed stopped after %d sessions", self._sessions)

    async def run_once(self) -> int:
        """Run one connection until it closes. Returns the number of frames forwarded.

        Raises :class:`FeedConnectionError` on connect, read or send failure.
        """
        stack = contextlib.AsyncExitStack()
        try:
            socket = await stack.enter_async_context(self._connector(self._config.url))
        except (aiohttp.ClientError, OSError) as exc:
            raise FeedConnectionError(
                f"cannot connect to {self._redacted_url}: {exc}",
                url=self._redacted_url,
            ) from exc
        self._connected_once = True
        self._sessions += 1
        self._logger.debug("Feed connected session=%d", self._sessions)

        try:
            for command in build_subscribe_commands(self._config):
                await self._send(socket, command)
            await self._send(socket, PING_COMMAND)
            last_ping = self._clock()

            return await self._read_loop(socket, last_ping)
        finally:
            try:
                await stack.aclose()
            except (aiohttp.ClientError, OSError):
                self._logger.debug("Feed socket close failed", exc_info=True)

    async def _read_loop(self, socket: FeedSocket, last_ping: float) -> int:
        frames = 0
        while True:
            message = await self._receive(socket)
            if message.type == aiohttp.WSMsgType.TEXT:
                self._sink(message.data)
                frames += 1
            elif message.type in _CLOSING_TYPES:
                self._logger.debug("Feed close frame received type=%s", message.type)
                return frames
            elif message.type == aiohttp.WSMsgType.ERROR:
                raise FeedConnectionError(
                    f"websocket error from {self._redacted_url}: {message.data}",
                    url=self._redacted_url,
                )
            # Binary, ping and pong frames are ignored.

            if self._clock() - last_ping >= self._config.ping_interval:
                await self._send(socket, PING_COMMAND)
                last_ping = self._clock()

    async def _send(self, socket: FeedSocket, text: str) -> None:
        try:
            await socket.send_str(text)
        except (aiohttp.ClientError, OSError, RuntimeError) as exc:
            raise FeedConnectionError(f"send failed: {exc}", url=self._redacted_url) from exc
        self._logger.debug("Sent %s", text)

    async def _receive(self, socket: FeedSocket) -> FeedMessage:
        try:
            return await socket.receive()
        except (aiohttp.ClientError, OSError, RuntimeError) as exc:
            raise FeedConnectionError(f"read failed: {exc}", url=self._redacted_url) from exc
