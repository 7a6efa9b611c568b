"""Append-only newline-delimited raw frame log."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path
from types import TracebackType
from typing import TextIO

from pysbahn.exceptions import RawLogError

_logger = logging.getLogger(__name__)


class RawLog:
    """Writer for the raw frame log.

    The file is opened in append mode, so repeated runs accumulate history.
    Frames are written verbatim, one per line, and flushed immediately.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._file: TextIO | None = None
        self._written = 0

    @property
    def path(self) -> Path:
        return self._path

    @property
    def written(self) -> int:
        """Frames appended since :meth:`open`."""
        return self._written

    def open(self) -> RawLog:
        if self._file is not None:
            return self
        try:
            self._file = self._path.open("a", encoding="utf-8")
        except OSError as exc:
            raise RawLogError(f"cannot open raw log {self._path} for appending: {exc}") from exc
        self._written = 0
        _logger.debug("Raw log opened path=%s", self._path)
        return self

    def append(self, frame: str) -> None:
        """Write one frame and flush it."""
        if self._file is None:
            raise RawLogError(f"raw log {self._path} is not open")
        try:
            self._file.write(f"{frame}\n")
            self._file.flush()
        except OSError as exc:
            raise RawLogError(f"cannot write to raw log {self._path}: {exc}") from exc
        self._written += 1

    def close(self) -> None:
        file = self._file
        self._file = None
        if file is not None:
            file.close()
            _logger.debug("Raw log closed path=%s frames=%d", self._path, self._written)

    def __enter__(self) -> RawLog:
        return self.open()

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def read_frames(path: str | Path) -> Iterator[tuple[int, str]]:
    """Yield ``(line_number, frame)`` for every non-empty line of a raw log.

    Raises :class:`RawLogError` if the file cannot be opened. Undecodable
    bytes are replaced so that one bad line fails stage-1 decoding instead
    of aborting the scan.
    """
    log_path = Path(path)
    try:
        handle = log_path.open("r", encoding="utf-8", errors="replace")
    except OSError as exc:
        raise RawLogError(f"cannot open raw log {log_path}: {exc}") from exc
    with handle:
        for line_number, line in enumerate(handle, start=1):
            frame = line.rstrip("\r\n")
            if frame:
                yield line_number, frame
