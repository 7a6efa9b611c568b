#!/usr/bin/env python3
"""Analyze a recorded raw frame log and optionally replay it.

Prints frequency counts of delays, states, ride states, original lines and
lines over every decodable trajectory feature. With ``--replay`` the
vehicle timelines are played back frame by frame in a pygame window.
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

from pysbahn import Replay, ReplayConfig, SbahnError, analyze_log  # noqa: E402
from pysbahn._constants import LOG_PATH  # noqa: E402

_LOG = logging.getLogger("analyze")


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Analyze and replay an S-Bahn Munich raw frame log.")
    parser.add_argument("log_path", nargs="?", default=LOG_PATH, help="Raw frame log to read.")
    parser.add_argument("--replay", action="store_true", help="Open a window and play back vehicle positions.")
    parser.add_argument("--width", type=int, default=800, help="Replay window width.")
    parser.add_argument("--height", type=int, default=600, help="Replay window height.")
    parser.add_argument(
        "--frame-bound",
        type=int,
        default=None,
        help="Wrap playback after this many frames (default: longest vehicle timeline).",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logs.")
    return parser.parse_args()


async def _replay(replay: Replay, config: ReplayConfig) -> None:
    # Imported lazily so plain analysis works without a display.
    from pysbahn.surface import PygameSurface

    surface = PygameSurface(config.width, config.height)
    try:
        await replay.run(surface)
    finally:
        surface.close()


def main() -> None:
    args = _parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        result = analyze_log(args.log_path)
        replay_config = ReplayConfig(width=args.width, height=args.height, frame_bound=args.frame_bound)
    except SbahnError as exc:
        raise SystemExit(f"Fatal: {exc}") from exc

    print(result.statistics.report())
    print(result.summary())

    if not args.replay:
        return
    try:
        asyncio.run(_replay(Replay(result.history, replay_config), replay_config))
    except KeyboardInterrupt:
        _LOG.info("Interrupted")


if __name__ == "__main__":
    main()
