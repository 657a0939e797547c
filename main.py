#!/usr/bin/env python3
"""
Minefield - Main entry point.

Usage:
    python main.py play [--preset {beginner,intermediate,expert}] [--seed N]
    python main.py play --size 12 --mines 30 [--safe-zone {neighborhood,cell}]
    python main.py paint [--size N]
    python main.py demo [--games N] [--delay S]
"""
import argparse
import logging
import sys
import time
from pathlib import Path

# Add src to Python path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from minefield import BoardConfig, MinesweeperEnv, PRESETS, SafeZone
from minefield.console import PaintSession, PlaySession, run_session


def setup_logging(verbose: bool) -> None:
    """Configure application logging on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def build_config(args: argparse.Namespace) -> BoardConfig:
    """Board configuration from a preset, overridden by explicit flags."""
    preset = PRESETS[args.preset]
    return BoardConfig(
        size=args.size if args.size is not None else preset.size,
        num_mines=args.mines if args.mines is not None else preset.num_mines,
        safe_zone=SafeZone(args.safe_zone),
    )


def play(args: argparse.Namespace) -> None:
    """Play Minesweeper in the terminal."""
    print("Commands: r ROW COL (reveal), f ROW COL (flag), n (new game), q (quit)")
    run_session(PlaySession(build_config(args), seed=args.seed))


def paint(args: argparse.Namespace) -> None:
    """Play the palette board in the terminal."""
    print("Commands: c ROW COL (click), n (clear board), q (quit)")
    run_session(PaintSession(args.size))


def demo(args: argparse.Namespace) -> None:
    """Watch a random player reveal cells through the environment."""
    config = build_config(args)
    env = MinesweeperEnv(config=config, render_mode="ansi")
    cells = config.size * config.size
    wins = 0

    for game in range(args.games):
        obs, info = env.reset(seed=None if args.seed is None else args.seed + game)
        env.action_space.seed(None if args.seed is None else args.seed + game)
        done = False
        step = 0

        while not done:
            mask = env.get_action_mask()
            # Reveal actions only
            mask[cells:] = False
            action = env.action_space.sample(mask=mask.astype("int8"))
            obs, reward, terminated, truncated, info = env.step(action)
            done = terminated or truncated
            step += 1

            print(f"=== Game {game + 1}/{args.games} | Step {step} ===")
            print(env.render())
            if args.delay:
                time.sleep(args.delay)

        if info["game_state"] == "WON":
            wins += 1
            print("*** WIN! ***\n")
        else:
            print("*** LOST (hit mine) ***\n")

    print(f"=== Final: {wins}/{args.games} wins ({100 * wins / args.games:.0f}%) ===")


def add_board_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--preset", choices=sorted(PRESETS), default="beginner",
        help="Board size and mine count",
    )
    parser.add_argument("--size", type=int, help="Override board size (NxN)")
    parser.add_argument("--mines", type=int, help="Override number of mines")
    parser.add_argument(
        "--safe-zone", choices=[zone.value for zone in SafeZone],
        default=SafeZone.NEIGHBORHOOD.value,
        help="Cells kept mine-free on the first reveal",
    )
    parser.add_argument("--seed", type=int, help="Random seed")


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Minefield - Minesweeper in the terminal"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Show debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    play_parser = subparsers.add_parser("play", help="Play Minesweeper")
    add_board_arguments(play_parser)

    paint_parser = subparsers.add_parser("paint", help="Play the palette board")
    paint_parser.add_argument(
        "--size", type=int, default=10, help="Board size (NxN)"
    )

    demo_parser = subparsers.add_parser("demo", help="Watch a random player")
    add_board_arguments(demo_parser)
    demo_parser.add_argument(
        "--games", type=int, default=3, help="Number of games"
    )
    demo_parser.add_argument(
        "--delay", type=float, default=0.0, help="Delay between moves"
    )

    args = parser.parse_args()
    setup_logging(args.verbose)

    try:
        if args.command == "play":
            play(args)
        elif args.command == "paint":
            paint(args)
        elif args.command == "demo":
            demo(args)
        else:
            parser.print_help()
    except ValueError as exc:
        # Invalid board configuration from the command line
        parser.error(str(exc))


if __name__ == "__main__":
    main()
