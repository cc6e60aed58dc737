#!/usr/bin/env python3
"""CLI entry point for the Pong simulation.

Usage:
    python main.py play [--ai]              Open the game window
    python main.py headless [ticks] [seed]  Run a headless session and print stats
    python main.py analyze                  Generate analysis charts
    python main.py test                     Run all tests
"""

import logging
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))


def _int_arg(index, default):
    if len(sys.argv) <= index:
        return default
    try:
        return int(sys.argv[index])
    except ValueError:
        print(f"Expected an integer, got {sys.argv[index]!r}")
        sys.exit(1)


def cmd_play():
    """Open the game window."""
    ai = "--ai" in sys.argv[2:]
    print("Launching Pong...")
    print("Controls: W/S=left  Up/Down=right  P=pause  R=reset  A=AI  Q/Esc=quit")
    print("-" * 60)
    from pong_sim.visualizer import run_visualizer
    run_visualizer(ai_enabled=ai)


def cmd_headless():
    """Run a headless session and print stats."""
    from pong_engine.game import simulate_session

    ticks = _int_arg(2, 6000)
    seed = _int_arg(3, None)

    print("=" * 60)
    print("  HEADLESS PONG SESSION")
    print("=" * 60)

    result = simulate_session(ticks=ticks, seed=seed)
    s = result.stats

    for i, rally in enumerate(result.rallies):
        print(f"  Rally {i+1:3d}: {rally.hits:3d} hits, {rally.duration_ticks:5d} ticks, "
              f"top |vx| {rally.top_speed:5.2f}  -> {rally.scorer}")

    print()
    print(f"  FINAL SCORE: {s['score_left']} - {s['score_right']}")
    print(f"  Total rallies: {s['total_rallies']}")
    print(f"  Avg rally: {s['avg_rally_hits']} hits / {s['avg_rally_ticks']} ticks")
    print(f"  Longest rally: {s['max_rally_hits']} hits")
    print(f"  Top speed: {s['top_speed']} units/tick")
    print("=" * 60)


def cmd_analyze():
    """Generate all analysis charts."""
    print("Generating analysis charts...")
    print("-" * 60)
    from pong_sim.analysis import generate_all_charts
    output_dir = os.path.join(os.path.dirname(__file__), "output")
    paths = generate_all_charts(output_dir=output_dir)
    print(f"\nDone! {len(paths)} charts saved to {output_dir}/")


def cmd_test():
    """Run all tests."""
    import subprocess
    print("Running tests...")
    print("-" * 60)
    result = subprocess.run(
        [sys.executable, "-m", "pytest", "tests/", "-v"],
        cwd=os.path.dirname(os.path.abspath(__file__)),
    )
    sys.exit(result.returncode)


COMMANDS = {
    "play": cmd_play,
    "headless": cmd_headless,
    "analyze": cmd_analyze,
    "test": cmd_test,
}


def main():
    logging.basicConfig(
        level=os.environ.get("PONG_LOG_LEVEL", "WARNING").upper(),
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    if len(sys.argv) < 2 or sys.argv[1] not in COMMANDS:
        print(__doc__)
        print("Available commands:")
        for name, func in COMMANDS.items():
            print(f"  {name:12s} {func.__doc__}")
        sys.exit(1)

    COMMANDS[sys.argv[1]]()


if __name__ == "__main__":
    main()
