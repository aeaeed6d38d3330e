# /// script
# requires-python = ">=3.10"
# dependencies = [
#     "numpy",
#     "pillow",
# ]
# ///
"""
Rain Ripples - drops falling on a pond, rendered in the terminal.

Usage:
    python -m rain_ripples [--ttl 4] [--cadence 0.35] [--fps 30]
    python -m rain_ripples --snapshot ripples.gif --frames 60 --size 160x90
"""

import argparse
import logging
import sys
import time

from .config import (
    DESATURATION,
    DROP_CADENCE,
    DROP_TTL,
    FPS,
    RESOLUTION,
    TINT,
    WAVE_NUMBER,
)
from .engine import RippleEngine
from .snapshot import save_frames
from .terminal import (
    RESET,
    clear_screen,
    enable_windows_ansi,
    grid_size_for_terminal,
    hide_cursor,
    paint,
    show_cursor,
)
from .wave_table import TableDomain

log = logging.getLogger(__name__)


def parse_size(text):
    try:
        w, h = (int(v) for v in text.lower().split("x"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected WIDTHxHEIGHT, got {text!r}")
    if w <= 0 or h <= 0:
        raise argparse.ArgumentTypeError(f"size must be positive, got {text!r}")
    return w, h


def build_parser():
    parser = argparse.ArgumentParser(description="Animated rain ripples in the terminal")
    parser.add_argument("--ttl", type=float, default=DROP_TTL, help="Seconds a drop stays active")
    parser.add_argument("--cadence", type=float, default=DROP_CADENCE, help="Minimum seconds between drops")
    parser.add_argument("--wave-number", type=float, default=WAVE_NUMBER, help="Ring spacing (angular frequency)")
    parser.add_argument("--resolution", type=int, default=RESOLUTION, help="Wave table buckets per axis")
    parser.add_argument("--desaturation", type=float, default=DESATURATION, help="Blend toward luminance (0-1)")
    parser.add_argument("--tint", type=float, default=TINT, help="Blend toward green tint (0-1)")
    parser.add_argument("--fps", type=float, default=FPS, help="Target frame rate")
    parser.add_argument("--seed", type=int, default=None, help="Seed for drop positions")
    parser.add_argument("--duration", type=float, default=None, help="Stop after this many seconds")

    snap = parser.add_argument_group("snapshot")
    snap.add_argument("--snapshot", metavar="PATH", help="Render headless to a PNG (1 frame) or GIF")
    snap.add_argument("--frames", type=int, default=1, help="Frames to render")
    snap.add_argument("--frame-dt", type=float, default=1 / FPS, help="Seconds between frames")
    snap.add_argument("--warmup", type=float, default=2.0, help="Seconds simulated before the first frame")
    snap.add_argument("--size", type=parse_size, default=(160, 90), help="Grid size WIDTHxHEIGHT")
    snap.add_argument("--scale", type=int, default=4, help="Pixels per grid cell")

    parser.add_argument("--verbose", "-v", action="store_true", help="Log to stderr")
    parser.add_argument("--log-file", help="Log to this file")
    return parser


def configure_logging(args):
    if args.log_file:
        logging.basicConfig(
            filename=args.log_file,
            level=logging.DEBUG if args.verbose else logging.INFO,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
    elif args.verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")


def make_engine(args, width, height):
    return RippleEngine(
        width,
        height,
        drop_ttl=args.ttl,
        drop_cadence=args.cadence,
        wave_number=args.wave_number,
        desaturation=args.desaturation,
        tint=args.tint,
        domain=TableDomain(resolution=args.resolution),
        seed=args.seed,
    )


def run_snapshot(args):
    width, height = args.size
    engine = make_engine(args, width, height)

    log.info("snapshot %dx%d, %d frame(s)", width, height, args.frames)
    now = 0.0
    while now < args.warmup:
        engine.tick(now)
        now += args.frame_dt

    frames = []
    for _ in range(max(args.frames, 1)):
        engine.tick(now)
        frames.append(engine.render())
        now += args.frame_dt

    try:
        save_frames(frames, args.snapshot, scale=args.scale, duration_ms=int(args.frame_dt * 1000))
    except OSError as e:
        print(f"Could not write {args.snapshot}: {e}", file=sys.stderr)
        return 1
    print(f"Saved {len(frames)} frame(s) to {args.snapshot}")
    return 0


def run_terminal(args):
    enable_windows_ansi()
    width, height = grid_size_for_terminal()
    log.info("terminal grid %dx%d", width, height)

    print("Filling the pond...")
    engine = make_engine(args, width, height)

    clear_screen()
    hide_cursor()
    t_start = time.monotonic()

    try:
        while True:
            # Handle resize dynamically
            new_width, new_height = grid_size_for_terminal()
            if (new_width, new_height) != (engine.width, engine.height):
                engine.resize(new_width, new_height)
                clear_screen()

            now = time.monotonic() - t_start
            if args.duration is not None and now >= args.duration:
                break

            engine.tick(now)
            paint(engine.render())

            time.sleep(1 / args.fps)

    except KeyboardInterrupt:
        pass
    finally:
        sys.stdout.write(RESET)
        clear_screen()
        show_cursor()
        print("Rain ripples ended.")
    return 0


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.fps <= 0 or args.frame_dt <= 0:
        parser.error("--fps and --frame-dt must be positive")
    configure_logging(args)
    if args.snapshot:
        return run_snapshot(args)
    return run_terminal(args)


if __name__ == "__main__":
    sys.exit(main())
