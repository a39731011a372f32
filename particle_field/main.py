"""Headless command-line driver for the particle field."""
import argparse
from typing import List, Optional

import numpy as np

from particle_field import config
from particle_field.core_types import InteractionKind, Mode
from particle_field.logging_config import setup_logging
from particle_field.modes import ModeCatalog
from particle_field.runtime.simulation import Simulation
from particle_field.runtime.simulation_loop import run_loop


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="particle-field", description=__doc__)
    parser.add_argument("--frames", type=int, default=120, help="number of frames to drive")
    parser.add_argument("--mode", default=config.DEFAULT_MODE, help="one of: " + ", ".join(m.value for m in Mode))
    parser.add_argument(
        "--interaction",
        default=config.DEFAULT_INTERACTION,
        help="one of: " + ", ".join(k.value for k in InteractionKind),
    )
    parser.add_argument("--seed", type=int, default=config.PARTICLE_SEED)
    parser.add_argument("--fps", type=int, default=config.TARGET_FPS)
    parser.add_argument("--fast", action="store_true", help="do not pace frames to wall-clock time")
    parser.add_argument("--count-scale", type=float, default=config.COUNT_SCALE)
    parser.add_argument("--pointer", type=float, nargs=2, metavar=("X", "Y"), default=(0.0, 0.0))
    parser.add_argument(
        "--audio-level",
        type=float,
        default=None,
        help="feed a constant spectrum level in [0, 1] to the audio analyser",
    )
    parser.add_argument("--log-level", default=config.LOG_LEVEL)
    parser.add_argument("--no-log-file", action="store_true")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logger = setup_logging("particle_field", level=args.log_level, to_file=not args.no_log_file)

    simulation = Simulation(
        mode=args.mode,
        interaction=args.interaction,
        seed=args.seed,
        catalog=ModeCatalog(count_scale=args.count_scale),
    )
    simulation.sources.pointer.position = (float(args.pointer[0]), float(args.pointer[1]))

    on_frame = None
    if args.audio_level is not None:
        simulation.sources.audio.enable()
        spectrum = np.full(1024, float(np.clip(args.audio_level, 0.0, 1.0)) * 255.0)

        def on_frame(index, sim, frame):
            sim.sources.audio.analyze(spectrum)

    frame, stats = run_loop(simulation, iterations=args.frames, fps=args.fps, realtime=not args.fast, on_frame=on_frame)
    if frame is not None:
        positions = frame.positions.reshape(-1, 3)
        logger.info(
            "Final frame: simTime=%.2f particles=%d point size=%.4f centroid=%s",
            frame.sim_time,
            len(positions),
            frame.point_size,
            np.round(positions.mean(axis=0), 3).tolist(),
        )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
