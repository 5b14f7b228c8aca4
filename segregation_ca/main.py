#!/usr/bin/env python3
"""
Segregation Cellular Automata Simulation

A Schelling-style residential model: endline ('e') and newline ('n') agents
share a square board with vacancies ('.'), and agents with too few
like-minded neighbors relocate every cycle.

Usage:
    python -m segregation_ca [-h] [-t N] [-c N] [-d dim] [-s %str] [-v %vac] [-e %end]

Examples:
    python -m segregation_ca                       # full-screen, until Control-C
    python -m segregation_ca -c 5 -d 10 -s 40      # six snapshots to stdout
    python -m segregation_ca -c 100 --seed 42 --csv --snapshot --report
    python -m segregation_ca --config configs/default.yaml -t 200000
"""

import argparse
import curses
import logging
import sys
import time
from pathlib import Path
from typing import List, Optional

import yaml

from .config import (
    ConfigError,
    SimulationConfig,
    EXIT_FAILURE,
    FIELD_CHECKS,
    load_config,
    validate_config,
)
from .model.engine import SimulationEngine
from .model.state import CycleState
from .export.render import BatchRenderer, CursesRenderer, Renderer
from .export.csv_writer import CSVWriter
from .export.visualizer import Visualizer
from .export.reporter import Reporter

logger = logging.getLogger(__name__)

PROG = "segregation-ca"

LOG_FORMAT = '%(levelname)s %(name)s: %(message)s'
DEBUG_LOG_NAME = 'debug.log'

# Frames kept for --gif when the run only ends on Control-C
MAX_INTERACTIVE_GIF_FRAMES = 200

USAGE = (
    "usage:\n"
    f"{PROG} [-h] [-t N] [-c N] [-d dim] [-s %str] [-v %vac] [-e %end]\n"
)

OPTIONS_HELP = (
    "Option      Default   Example   Description\n"
    "'-h'        NA        -h        print this usage message.\n"
    "'-t N'      900000    -t 5000   microseconds cycle delay.\n"
    "'-c N'      NA        -c4       count cycle maximum value.\n"
    "'-d dim'    15        -d 7      width and height dimension.\n"
    "'-s %str'   50        -s 30     strength of preference.\n"
    "'-v %vac'   20        -v30      percent vacancies.\n"
    "'-e %endl'  60        -e75      percent Endline braces. Others want Newline.\n"
    "\n"
    "Additional options:\n"
    "--config PATH    YAML configuration file (flags override it)\n"
    "--seed N         pin the shuffle seed (default: wall-clock time)\n"
    "--csv            write per-cycle statistics to OUT_DIR/cycle_log.csv\n"
    "--snapshot       save the final board to OUT_DIR/final_state.png\n"
    "--gif            save rendered cycles to OUT_DIR/simulation.gif\n"
    "                 (the last 200 when running until Control-C)\n"
    "--report         print a summary to stderr when the run ends\n"
    "--out-dir PATH   output directory for exports (default: ./output)\n"
    "--verbose        debug logging to stderr (OUT_DIR/debug.log when full-screen)\n"
)


def print_usage() -> None:
    """Print the usage message to standard error."""
    sys.stderr.write(USAGE)


class HelpRequested(Exception):
    """Raised as soon as -h is read; later options are not looked at."""


class _ArgumentParser(argparse.ArgumentParser):
    """Reports malformed or unknown options with the usage and exit status 1."""

    def error(self, message: str) -> None:
        sys.stderr.write(f"{self.prog}: {message}\n")
        print_usage()
        sys.exit(EXIT_FAILURE)


class _HelpAction(argparse.Action):
    def __init__(self, option_strings, dest, **kwargs):
        super().__init__(option_strings, dest, nargs=0, default=argparse.SUPPRESS)

    def __call__(self, parser, namespace, values, option_string=None):
        raise HelpRequested()


class _CheckedIntAction(argparse.Action):
    """Range-checks an integer option when it is read, so the first bad flag wins."""

    def __call__(self, parser, namespace, values, option_string=None):
        FIELD_CHECKS[self.dest](values)
        setattr(namespace, self.dest, values)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Raises HelpRequested for -h and ConfigError for the first out-of-range
    value, in command-line order.
    """
    parser = _ArgumentParser(prog=PROG, add_help=False)

    parser.add_argument('-h', action=_HelpAction)
    parser.add_argument('-t', dest='delay_us', type=int, metavar='N', default=None)
    for flag, dest, metavar in (('-c', 'cycles', 'N'),
                                ('-d', 'dimension', 'dim'),
                                ('-s', 'strength', '%str'),
                                ('-v', 'vacancy', '%vac'),
                                ('-e', 'endline', '%end')):
        parser.add_argument(flag, dest=dest, type=int, metavar=metavar, default=None,
                            action=_CheckedIntAction)

    parser.add_argument('--config', type=Path, default=None)
    parser.add_argument('--seed', type=int, default=None)
    parser.add_argument('--out-dir', type=Path, default=None)

    # Export toggles
    parser.add_argument('--csv', action='store_true', default=None)
    parser.add_argument('--snapshot', action='store_true', default=None)
    parser.add_argument('--gif', action='store_true', default=None)
    parser.add_argument('--report', action='store_true', default=None)

    parser.add_argument('--verbose', action='store_true', default=False)

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> SimulationConfig:
    """Combine defaults, the optional YAML file and CLI overrides, then validate."""
    config = load_config(args.config) if args.config else SimulationConfig()

    # Apply CLI overrides
    for name in ('cycles', 'dimension', 'strength', 'vacancy', 'endline', 'seed', 'out_dir'):
        value = getattr(args, name)
        if value is not None:
            setattr(config, name, value)
    config.set_delay(args.delay_us)
    if args.csv is not None:
        config.csv_enabled = args.csv
    if args.snapshot is not None:
        config.snapshot_enabled = args.snapshot
    if args.gif is not None:
        config.gif_enabled = args.gif
    if args.report is not None:
        config.report_enabled = args.report

    validate_config(config)
    return config


class RunExports:
    """Optional exports fed with every rendered cycle."""

    def __init__(self, config: SimulationConfig, seed: int):
        self.config = config
        self.final_state: Optional[CycleState] = None

        self.csv_writer = None
        if config.csv_enabled:
            self.csv_writer = CSVWriter(config.out_dir / 'cycle_log.csv')
            self.csv_writer.open()

        # An interactive run has no last cycle, so only the newest frames are kept
        max_frames = MAX_INTERACTIVE_GIF_FRAMES if config.interactive else None
        self.visualizer = Visualizer(config.dimension, max_frames=max_frames)

        self.reporter = Reporter(config, seed) if config.report_enabled else None

    def record(self, state: CycleState) -> None:
        self.final_state = state
        if self.csv_writer:
            self.csv_writer.append(state)
        if self.config.gif_enabled:
            self.visualizer.buffer_frame(state)
        if self.reporter:
            self.reporter.update(state)

    def finish(self) -> None:
        """Close the CSV log and write the image exports and report."""
        config = self.config

        if self.csv_writer:
            self.csv_writer.close()
            logger.info("CSV saved: %s", config.out_dir / 'cycle_log.csv')

        if self.final_state is None:
            return

        if config.snapshot_enabled:
            snapshot_path = config.out_dir / 'final_state.png'
            self.visualizer.save_snapshot(self.final_state, snapshot_path)
            logger.info("Snapshot saved: %s", snapshot_path)

        if config.gif_enabled:
            gif_path = config.out_dir / 'simulation.gif'
            logger.info("Generating GIF (%d frames)...", len(self.visualizer.frames))
            self.visualizer.generate_gif(gif_path)
            logger.info("Animation saved: %s", gif_path)

        if self.reporter:
            report = self.reporter.generate_summary(
                self.final_state,
                config.out_dir,
                config.csv_enabled,
                config.snapshot_enabled,
                config.gif_enabled
            )
            print(report, file=sys.stderr)


def run_batch(engine: SimulationEngine, renderer: Renderer,
              exports: RunExports, cycles: int) -> None:
    """Render cycles 0..cycles inclusive."""
    for state in engine.run(cycles):
        renderer.render(state)
        exports.record(state)


def run_interactive(stdscr: "curses.window", engine: SimulationEngine,
                    exports: RunExports, delay_us: int) -> None:
    """Redraw the board every delay_us microseconds until interrupted."""
    renderer = CursesRenderer(engine.config, stdscr)
    stdscr.refresh()
    for state in engine.run():
        renderer.render(state)
        exports.record(state)
        time.sleep(delay_us / 1_000_000)


def configure_logging(verbose: bool, config: SimulationConfig) -> None:
    """
    Send log records to stderr, or to OUT_DIR/debug.log while curses owns the
    terminal. Without --verbose only warnings are emitted.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    if verbose and config.interactive:
        config.out_dir.mkdir(parents=True, exist_ok=True)
        logging.basicConfig(
            level=level,
            format=LOG_FORMAT,
            filename=str(config.out_dir / DEBUG_LOG_NAME)
        )
    else:
        logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    try:
        args = parse_args(argv)
    except HelpRequested:
        print_usage()
        sys.stderr.write(OPTIONS_HELP)
        return 0
    except ConfigError as e:
        print(e, file=sys.stderr)
        print_usage()
        return e.exit_code

    # Load configuration
    try:
        config = build_config(args)
    except FileNotFoundError:
        print(f"Error: Configuration file not found: {args.config}", file=sys.stderr)
        return EXIT_FAILURE
    except ConfigError as e:
        print(e, file=sys.stderr)
        print_usage()
        return e.exit_code
    except (OSError, yaml.YAMLError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return EXIT_FAILURE

    configure_logging(args.verbose, config)

    engine = SimulationEngine(config)
    exports = RunExports(config, engine.seed)

    if config.interactive:
        try:
            curses.wrapper(run_interactive, engine, exports, config.delay_us)
        except KeyboardInterrupt:
            logger.debug("Interrupted at cycle %d", engine.current_cycle)
    else:
        with BatchRenderer(config) as renderer:
            run_batch(engine, renderer, exports, config.cycles)

    exports.finish()
    return 0


if __name__ == '__main__':
    sys.exit(main())
