#!/usr/bin/env python3
"""
CLI tool to simulate a snakechase session and save it as a video

Usage:
    snakechase-video
    snakechase-video --player random --seed 7

Examples:
    # One simulated minute with the autopilot
    snakechase-video --duration 60000

    # Custom output path
    snakechase-video --output ./my_run.mp4

    # Custom frame rate
    snakechase-video --fps 60
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from dotenv import load_dotenv

from snakechase.main import build_player, configure_logging, env_seed, run_simulation
from snakechase.players.variant_registry import AVAILABLE_PLAYERS
from snakechase.services.notifier import LoggingListener
from snakechase.services.video_generator import DEFAULT_FPS, SessionVideoGenerator

logger = logging.getLogger(__name__)


def default_output_path(player_key: str, seed: Optional[int]) -> str:
    output_dir = os.getenv("SNAKECHASE_OUTPUT_DIR", "videos")
    suffix = f"_seed{seed}" if seed is not None else ""
    return os.path.join(output_dir, f"snakechase_{player_key}{suffix}.mp4")


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    configure_logging()

    parser = argparse.ArgumentParser(
        description='Simulate a snakechase session and encode it as MP4',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument(
        '--player',
        choices=AVAILABLE_PLAYERS,
        default='autopilot',
        help='Computer player steering the snake (default: autopilot)'
    )
    parser.add_argument(
        '--duration',
        type=float,
        default=30000,
        help='Simulated milliseconds to record (default: 30000)'
    )
    parser.add_argument(
        '--fps',
        type=int,
        default=DEFAULT_FPS,
        help=f'Frames per second (default: {DEFAULT_FPS})'
    )
    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help='Random seed (default: $SNAKECHASE_SEED)'
    )
    parser.add_argument(
        '--output', '-o',
        type=str,
        help='Output video file path (default: $SNAKECHASE_OUTPUT_DIR/snakechase_<player>.mp4)'
    )

    args = parser.parse_args(argv)

    try:
        seed = args.seed if args.seed is not None else env_seed()
        frames = []
        player = build_player(args.player, seed)
        result = run_simulation(
            player,
            duration_ms=args.duration,
            fps=args.fps,
            seed=seed,
            listeners=[LoggingListener()],
            on_frame=frames.append
        )
        logger.info(f"Simulated {result['elapsed_ms']:.0f} ms, final score {result['final_score']}")

        output_path = args.output or default_output_path(args.player, seed)
        generator = SessionVideoGenerator(fps=args.fps)
        video_path = generator.generate_video(frames, output_path=output_path)

        print(f"\n✓ Video saved to: {video_path}")
        return 0

    except Exception as e:
        logger.error(f"Failed to generate video: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
