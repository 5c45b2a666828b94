"""SteadyInk replay tool: run a recorded stroke through a pipeline."""

import argparse
import json
import logging
import sys
import time
from typing import List, Optional

from pydantic import ValidationError

from . import __version__
from .config import SteadyInkConfig, build_pointer
from .models import RecordedPoint, ReplayResult, ReplayStats, StrokePoint, StrokeRecording
from .pointer import StabilizedPointer
from .presets import PRESETS

logger = logging.getLogger("steadyink.cli")


def setup_logging(level: str):
    """Configure console logging for the steadyink logger tree."""
    root_logger = logging.getLogger("steadyink")
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    # stderr keeps stdout clean for the JSON result
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)


def replay(recording: StrokeRecording, pointer: StabilizedPointer) -> ReplayResult:
    """Feed every recorded sample through ``pointer`` and finish the stroke."""
    start_time = time.perf_counter()

    realtime = pointer.process_all(p.to_pointer_point() for p in recording.points)
    stroke = pointer.finish()

    stats = ReplayStats(
        points_in=len(recording.points),
        points_accepted=len(realtime),
        points_rejected=len(recording.points) - len(realtime),
        processing_time_ms=(time.perf_counter() - start_time) * 1000,
    )
    logger.info("Replayed %d points: %d accepted, %d rejected",
                stats.points_in, stats.points_accepted, stats.points_rejected)

    return ReplayResult(
        realtime=[RecordedPoint.from_pointer_point(p) for p in realtime],
        stroke=[StrokePoint.from_point(p) for p in stroke],
        stats=stats,
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="steadyink",
        description="SteadyInk - replay a recorded stroke through a stabilization pipeline",
    )
    parser.add_argument(
        "input",
        nargs="?",
        help="Stroke recording (JSON); reads stdin when omitted",
        default=None,
    )
    parser.add_argument(
        "-c", "--config",
        help="Path to config file",
        default=None,
    )
    parser.add_argument(
        "--preset",
        help="Stabilization preset (overrides config filters)",
        choices=sorted(PRESETS),
        default=None,
    )
    parser.add_argument(
        "--level",
        help="Stabilization level 0-100 (overrides config filters)",
        type=float,
        default=None,
    )
    parser.add_argument(
        "--log-level",
        help="Override log level",
        default=None,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    args = parser.parse_args(argv)

    config = SteadyInkConfig.load(args.config)
    if args.preset is not None or args.level is not None:
        config.filters = []
        config.preset = args.preset
        config.level = args.level

    setup_logging(args.log_level or config.logging.level)

    try:
        if args.input:
            with open(args.input, "r") as f:
                raw = f.read()
        else:
            raw = sys.stdin.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Failed to read %s: %s", args.input, e)
        return 1

    try:
        recording = StrokeRecording.model_validate_json(raw)
    except ValidationError as e:
        logger.error("Invalid stroke recording: %s", e)
        return 2

    result = replay(recording, build_pointer(config))
    json.dump(result.model_dump(), sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
