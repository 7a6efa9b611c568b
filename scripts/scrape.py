#!/usr/bin/env python3
"""Record the S-Bahn Munich live map feed into a raw frame log.

Reads the API key from ``SBAHN_API_KEY`` (or ``API_KEY``), connects to the
geOps realtime websocket and appends every text frame to the log, one per
line. Runs until Ctrl+C, reconnecting whenever the session drops.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Allow running from repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pysbahn import FeedConfig, FeedSession, RawLog, SbahnError  # noqa: E402
from pysbahn._redact import redact_url  # noqa: E402

_LOG = logging.getLogger("scrape")


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Record the S-Bahn Munich realtime feed to a JSONL log.",
    )
    parser.add_argument(
        "--log-path",
        default=None,
        help="Raw frame log to append to (default: SBAHN_LOG_PATH or s-bahn-munich-live-map.jsonl).",
    )
    parser.add_argument(
        "--ping-interval",
        type=float,
        default=None,
        help="Seconds between keepalive PING messages.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logs.",
    )
    return parser.parse_args()


async def _run(config: FeedConfig) -> None:
    with RawLog(config.log_path) as raw_log:
        session = FeedSession(config, raw_log.append, logger=_LOG)
        try:
            await session.run_forever()
        finally:
            _LOG.info("Wrote %d frames to %s", raw_log.written, raw_log.path)


def main() -> None:
    args = _parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    overrides: dict[str, object] = {}
    if args.log_path is not None:
        overrides["log_path"] = args.log_path
    if args.ping_interval is not None:
        overrides["ping_interval"] = args.ping_interval

    try:
        config = FeedConfig.from_env(**overrides)
    except SbahnError as exc:
        raise SystemExit(f"Configuration error: {exc}") from exc

    _LOG.info("URL: %s", redact_url(config.url))
    try:
        asyncio.run(_run(config))
    except KeyboardInterrupt:
        _LOG.info("Interrupted")
    except SbahnError as exc:
        raise SystemExit(f"Fatal: {exc}") from exc


if __name__ == "__main__":
    main()
