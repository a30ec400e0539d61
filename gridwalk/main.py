#!/usr/bin/env python3
"""
Gridwalk Simulation

Agents walk a text-defined grid map, either at random or along the
shortest path to the nearest destination cell.

Usage:
    gridwalk --config configs/corridor.yaml [options]

Examples:
    gridwalk --config configs/corridor.yaml
    gridwalk --config configs/corridor.yaml --live --tick 0.5
    gridwalk --config configs/corridor.yaml --strategy random --gif --out-dir results/
    gridwalk --config configs/corridor.yaml --no-csv --no-snapshot --quiet
"""

import argparse
import logging
import sys
import time
from pathlib import Path

from .config import load_config
from .model.engine import SimulationEngine
from .model.errors import GridWalkError
from .model.movement import Strategy
from .export.csv_writer import CSVWriter
from .export.text_renderer import render_text
from .export.visualizer import Visualizer
from .export.reporter import Reporter


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Grid world random-walk / shortest-path agent simulation',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    gridwalk --config configs/corridor.yaml
    gridwalk --config configs/corridor.yaml --live --tick 0.5
    gridwalk --config configs/corridor.yaml --strategy random --seed 42
        """
    )

    # Required arguments
    parser.add_argument('--config', type=Path, required=True,
                        help='Path to YAML configuration file')

    # Optional overrides
    parser.add_argument('--steps', type=int, default=None,
                        help='Override max simulation steps')
    parser.add_argument('--strategy', default=None,
                        choices=[s.value for s in Strategy],
                        help='Override movement strategy')
    parser.add_argument('--tick', type=float, default=None,
                        help='Seconds between ticks (default from config)')
    parser.add_argument('--out-dir', type=Path, default=Path('./output'),
                        help='Output directory for exports (default: ./output)')

    # Export toggles
    parser.add_argument('--csv', dest='csv', action='store_true', default=None,
                        help='Enable CSV export (default)')
    parser.add_argument('--no-csv', dest='csv', action='store_false',
                        help='Disable CSV export')

    parser.add_argument('--snapshot', dest='snapshot', action='store_true', default=None,
                        help='Enable final snapshot (default)')
    parser.add_argument('--no-snapshot', dest='snapshot', action='store_false',
                        help='Disable final snapshot')

    parser.add_argument('--gif', action='store_true', default=False,
                        help='Enable GIF animation export')
    parser.add_argument('--live', action='store_true', default=False,
                        help='Print the map with agents after every tick')

    parser.add_argument('--quiet', action='store_true', default=False,
                        help='Suppress stdout output')
    parser.add_argument('--verbose', '-v', action='store_true', default=False,
                        help='Enable debug logging')

    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for reproducibility')

    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    # Load configuration
    try:
        config = load_config(args.config)
    except FileNotFoundError:
        print(f"Error: Configuration file not found: {args.config}", file=sys.stderr)
        return 1
    except (ValueError, KeyError, TypeError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    # Apply CLI overrides
    if args.steps is not None:
        config.max_steps = args.steps
    if args.strategy is not None:
        config.strategy = Strategy(args.strategy)
    if args.tick is not None:
        config.tick_interval = args.tick
    if args.csv is not None:
        config.csv_enabled = args.csv
    if args.snapshot is not None:
        config.snapshot_enabled = args.snapshot
    if args.gif:
        config.gif_enabled = True
    config.live = args.live
    config.quiet = args.quiet
    if args.seed is not None:
        config.seed = args.seed
    config.out_dir = args.out_dir

    try:
        engine = SimulationEngine.from_config(config)
    except (GridWalkError, ValueError, TypeError, OSError) as e:
        print(f"Error building simulation: {e}", file=sys.stderr)
        return 1

    if not config.quiet:
        print("Initializing simulation...")
        print(f"  Grid: {engine.grid.width}x{engine.grid.height}")
        print(f"  Agents: {len(engine.agents)}")
        print(f"  Strategy: {config.strategy.value}")
        print(f"  Max steps: {config.max_steps}")

    # Initialize exporters
    csv_writer = None
    if config.csv_enabled:
        csv_writer = CSVWriter(config.out_dir / 'simulation_log.csv', engine.grid)
        csv_writer.open()

    visualizer = Visualizer(engine.grid)
    reporter = Reporter(str(args.config), config.seed, config.strategy.value)

    if config.live:
        print(render_text(engine.grid, engine.positions))

    # Main tick loop; Ctrl-C terminates
    if not config.quiet:
        print("\nRunning simulation...")

    final_state = engine.snapshot()
    try:
        while not engine.is_finished(config.max_steps):
            state = engine.advance()
            final_state = state

            if csv_writer:
                csv_writer.append(state)

            if config.gif_enabled:
                visualizer.buffer_frame(state)

            reporter.update(state)

            if config.live:
                print(f"\n-- step {state.step} --")
                print(render_text(engine.grid, state.positions))
            elif not config.quiet and state.step % 100 == 0:
                arrived = int(state.metrics.get('arrived', 0))
                print(f"  Step {state.step}: {arrived} arrived")

            if config.tick_interval > 0:
                time.sleep(config.tick_interval)

    except KeyboardInterrupt:
        if not config.quiet:
            print("\nSimulation interrupted by user.")
    finally:
        if csv_writer:
            csv_writer.close()

    # Final exports
    if csv_writer and not config.quiet:
        print(f"\nCSV saved: {config.out_dir / 'simulation_log.csv'}")

    if config.snapshot_enabled:
        snapshot_path = config.out_dir / 'final_state.png'
        visualizer.save_snapshot(final_state, snapshot_path)
        if not config.quiet:
            print(f"Snapshot saved: {snapshot_path}")

    if config.gif_enabled:
        gif_path = config.out_dir / 'simulation.gif'
        if not config.quiet:
            print(f"Generating GIF ({len(visualizer.frames)} frames)...")
        visualizer.generate_gif(gif_path)
        if not config.quiet:
            print(f"Animation saved: {gif_path}")

    if not config.quiet:
        report = reporter.generate_summary(
            final_state,
            engine.grid,
            config.out_dir,
            config.csv_enabled,
            config.snapshot_enabled,
            config.gif_enabled
        )
        print(report)

    return 0


if __name__ == '__main__':
    sys.exit(main())
