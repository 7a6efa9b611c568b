from __future__ import annotations

import contextlib
from collections.abc import AsyncIterator
from types import SimpleNamespace

import aiohttp
import pytest

from pysbahn.config import FeedConfig
from pysbahn.exceptions import FeedConnectionError
from pysbahn.feed import FeedSession, build_subscribe_commands


def _text(data: str) -> SimpleNamespace:
    return SimpleNamespace(type=aiohttp.WSMsgType.TEXT, data=data)


def _message(kind: aiohttp.WSMsgType, data: object = None) -> SimpleNamespace:
    return SimpleNamespace(type=kind, data=data)


class _Clock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class _FakeSocket:
    def __init__(self, *messages: SimpleNamespace, clock: _Clock | None = None, step: float = 0.0) -> None:
        self._messages = list(messages)
        self._clock = clock
        self._step = step
        self.sent: list[str] = []
        self.closed = False

    async def send_str(self, data: str) -> None:
        self.sent.append(data)

    async def receive(self) -> SimpleNamespace:
        if self._clock is not None:
            self._clock.now += self._step
        if not self._messages:
            return _message(aiohttp.WSMsgType.CLOSED)
        return self._messages.pop(0)

    @property
    def pings(self) -> int:
        return self.sent.count("PING")


class _FakeConnector:
    def __init__(self, *outcomes: _FakeSocket | BaseException) -> None:
        self._outcomes = list(outcomes)
        self.urls: list[str] = []

    @contextlib.asynccontextmanager
    async def __call__(self, url: str) -> AsyncIterator[_FakeSocket]:
        self.urls.append(url)
        outcome = self._outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        try:
            yield outcome
        finally:
            outcome.closed = True


_CONFIG = FeedConfig(api_key="secret")


def test_subscribe_commands_order() -> None:
    commands = build_subscribe_commands(_CONFIG)

    assert commands[0] == "BBOX 1152072 6048052 1433666 6205578 5 tenant=sbm"
    assert commands[1] == "BUFFER 100 100"
    assert commands[2:6] == [
        "GET extra_geoms",
        "SUB extra_geoms",
        "GET healthcheck",
        "SUB healthcheck",
    ]
    assert commands[-2:] == ["GET trajectory", "SUB trajectory"]
    assert len(commands) == 2 + 2 * len(_CONFIG.topics)


@pytest.mark.asyncio
async def test_session_subscribes_then_forwards_text_frames() -> None:
    socket = _FakeSocket(_text("one"), _text("two"), _message(aiohttp.WSMsgType.CLOSE))
    connector = _FakeConnector(socket)
    frames: list[str] = []

    forwarded = await FeedSession(_CONFIG, frames.append, connector=connector).run_once()

    assert forwarded == 2
    assert frames == ["one", "two"]
    assert socket.sent == [*build_subscribe_commands(_CONFIG), "PING"]
    assert socket.closed
    assert connector.urls == ["wss://api.geops.io/realtime-ws/v1/?key=secret"]


@pytest.mark.asyncio
async def test_ping_after_interval_elapsed() -> None:
    clock = _Clock()
    socket = _FakeSocket(
        _text("a"),
        _text("b"),
        _text("c"),
        _text("d"),
        _message(aiohttp.WSMsgType.CLOSE),
        clock=clock,
        step=4.0,
    )
    session = FeedSession(_CONFIG, lambda frame: None, connector=_FakeConnector(socket), clock=clock)

    await session.run_once()

    # Connect at t=0, frames at t=4, 8, 12, 16: one extra ping once 10s have passed.
    assert socket.pings == 2
    assert socket.sent[-1] == "PING"


@pytest.mark.asyncio
async def test_non_text_frames_are_ignored() -> None:
    socket = _FakeSocket(
        _message(aiohttp.WSMsgType.BINARY, b"\x00"),
        _message(aiohttp.WSMsgType.PING),
        _message(aiohttp.WSMsgType.PONG),
        _text("payload"),
        _message(aiohttp.WSMsgType.CLOSING),
    )
    frames: list[str] = []

    forwarded = await FeedSession(_CONFIG, frames.append, connector=_FakeConnector(socket)).run_once()

    assert forwarded == 1
    assert frames == ["payload"]


@pytest.mark.asyncio
async def test_error_frame_raises() -> None:
    socket = _FakeSocket(_text("one"), _message(aiohttp.WSMsgType.ERROR, "boom"))
    session = FeedSession(_CONFIG, lambda frame: None, connector=_FakeConnector(socket))

    with pytest.raises(FeedConnectionError) as info:
        await session.run_once()

    assert "secret" not in str(info.value)
    assert socket.closed


@pytest.mark.asyncio
async def test_send_failure_raises() -> None:
    class _BrokenSocket(_FakeSocket):
        async def send_str(self, data: str) -> None:
            raise ConnectionResetError("reset by peer")

    session = FeedSession(_CONFIG, lambda frame: None, connector=_FakeConnector(_BrokenSocket()))

    with pytest.raises(FeedConnectionError):
        await session.run_once()


@pytest.mark.asyncio
async def test_first_connect_failure_is_fatal() -> None:
    connector = _FakeConnector(aiohttp.ClientConnectionError("refused"))
    session = FeedSession(_CONFIG, lambda frame: None, connector=connector)

    with pytest.raises(FeedConnectionError):
        await session.run_forever()

    assert session.sessions == 0


@pytest.mark.asyncio
async def test_reconnects_after_session_ends() -> None:
    frames: list[str] = []
    session: FeedSession

    def sink(frame: str) -> None:
        frames.append(frame)
        if frame == "last":
            session.stop()

    connector = _FakeConnector(
        _FakeSocket(_text("first"), _message(aiohttp.WSMsgType.ERROR, "dropped")),
        OSError("network unreachable"),
        _FakeSocket(_text("second"), _message(aiohttp.WSMsgType.CLOSE)),
        _FakeSocket(_text("last")),
    )
    session = FeedSession(_CONFIG, sink, connector=connector)

    await session.run_forever()

    assert frames == ["first", "second", "last"]
    assert session.sessions == 3
    assert session.is_stopped
    assert len(connector.urls) == 4


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "failure",
    [aiohttp.ClientConnectionError("connection lost"), RuntimeError("websocket is closed")],
)
async def test_reconnects_after_read_failure(failure: Exception) -> None:
    class _DroppingSocket(_FakeSocket):
        async def receive(self) -> SimpleNamespace:
            if self._messages:
                return self._messages.pop(0)
            raise failure

    frames: list[str] = []
    session: FeedSession

    def sink(frame: str) -> None:
        frames.append(frame)
        if frame == "after":
            session.stop()

    dropping = _DroppingSocket(_text("before"))
    connector = _FakeConnector(dropping, _FakeSocket(_text("after")))
    session = FeedSession(_CONFIG, sink, connector=connector)

    await session.run_forever()

    assert frames == ["before", "after"]
    assert session.sessions == 2
    assert dropping.closed
