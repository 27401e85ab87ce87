#!/usr/bin/env python3
"""
tetris-sim: falling-block puzzle simulation.
Main entry point and command-line interface.
"""

import argparse
import random
import sys
import time
from typing import Optional

from tetris_sim import TetrisEngine, GameConfig, Intent


# Intents the headless demo picks from; QUIT is left to the max-steps limit
DEMO_INTENTS = [Intent.SHIFT_LEFT, Intent.SHIFT_RIGHT, Intent.ROTATE, Intent.SOFT_DROP_STEP]


def make_config(args) -> GameConfig:
    return GameConfig(
        width=args.width,
        height=args.height,
        seed=args.seed,
        randomize_spawn_rotation=args.random_rotation,
    )


def print_summary(engine: TetrisEngine, duration: Optional[float] = None):
    stats = engine.get_stats()
    print("\n" + "=" * 50)
    print("GAME OVER" if engine.game_over else "STOPPED")
    print("=" * 50)
    print(f"Final Score: {stats['score']}")
    print(f"Lines Cleared: {stats['lines_cleared']}")
    print(f"Level Reached: {stats['level']}")
    print(f"Pieces Placed: {stats['pieces_placed']}")
    print(f"Tetrises: {stats['tetrises']}")
    if duration is not None:
        print(f"Game Duration: {duration:.2f} seconds")


def run_headless(engine: TetrisEngine, max_steps: int, seed: Optional[int] = None,
                 move_chance: float = 0.5, on_step=None) -> int:
    """Advance the engine with random intents until game over or max_steps. Returns steps taken."""
    chooser = random.Random(seed)
    steps = 0
    while not engine.is_over and steps < max_steps:
        if chooser.random() < move_chance:
            engine.apply_intent(chooser.choice(DEMO_INTENTS))
        engine.step()
        steps += 1
        if on_step:
            on_step(engine, steps)
    return steps


def demo_game(args):
    """Run a headless demo game driven by random intents."""
    print("tetris-sim demo")
    print("=" * 50)

    engine = TetrisEngine(make_config(args))
    engine.on_line_cleared = lambda rows, points: print(f"Cleared {rows} row(s) for {points} points")
    engine.on_level_up = lambda level: print(f"Level up: {level}")

    def show(engine, steps):
        if steps % args.print_every == 0:
            print(f"\nStep: {steps}")
            print(engine)
            print("-" * 30)
            if args.delay:
                time.sleep(args.delay)

    start_time = time.time()
    run_headless(engine, args.max_steps, seed=args.seed, on_step=show)
    print_summary(engine, time.time() - start_time)


def benchmark(args):
    """Measure headless ticks per second."""
    print("tetris-sim benchmark")
    print("=" * 50)

    engine = TetrisEngine(make_config(args))
    total_steps = 0
    games = 0
    start_time = time.perf_counter()
    while total_steps < args.steps:
        total_steps += run_headless(engine, args.steps - total_steps, seed=args.seed)
        games += 1
        engine.reset()
    elapsed = max(time.perf_counter() - start_time, 1e-9)

    print(f"Steps: {total_steps} over {games} game(s) in {elapsed:.3f}s "
          f"({total_steps / elapsed:.0f} steps/s)")


def play_game(args):
    """Open the interactive window."""
    from tetris_ui import play

    engine = play(make_config(args))
    print_summary(engine)


def main(argv=None):
    """Main entry point."""
    parser = argparse.ArgumentParser(description="tetris-sim: falling-block puzzle simulation")
    parser.add_argument('--width', type=int, default=10, help='Board width in cells')
    parser.add_argument('--height', type=int, default=20, help='Board height in cells')
    parser.add_argument('--seed', type=int, default=None, help='Seed for the piece randomizer')
    parser.add_argument('--random-rotation', action='store_true',
                        help='Spawn pieces in a random rotation state')
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    subparsers.add_parser('play', help='Play in a window (arrows or WASD, Esc to quit)')

    demo_parser = subparsers.add_parser('demo', help='Run a headless demo game')
    demo_parser.add_argument('--max-steps', type=int, default=5000, help='Stop after this many ticks')
    demo_parser.add_argument('--print-every', type=int, default=250, help='Print the board every N ticks')
    demo_parser.add_argument('--delay', type=float, default=0.0, help='Seconds to pause after each print')

    benchmark_parser = subparsers.add_parser('benchmark', help='Run performance benchmarks')
    benchmark_parser.add_argument('--steps', type=int, default=100000, help='Total ticks to simulate')

    args = parser.parse_args(argv)

    if args.command == 'play':
        play_game(args)
    elif args.command == 'demo':
        demo_game(args)
    elif args.command == 'benchmark':
        benchmark(args)
    else:
        parser.print_help()
        print("\nFor a quick demo, run: python main.py demo")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
