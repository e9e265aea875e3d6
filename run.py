#!/usr/bin/env python3
"""
run.py - Main entry point for the Connect Four engine
"""

import argparse
import sys

from c4engine.debug import debug, DebugLevel
from c4engine.exceptions import DimensionOverflowError
from c4engine.interfaces.cli import GameMode, SimpleCLI
from c4engine.utils import COLS, CONNECT_N, ROWS, BoardShape

# --- Utility Functions ---

def configure_debug(args):
    """Configure debug level based on args.debug or args.debug_level."""
    if args.debug:
        debug.configure(level=DebugLevel.DEBUG)
    else:
        debug.configure(level=DebugLevel[args.debug_level.upper()])
    if args.log_file:
        debug.configure(log_file=args.log_file)

def build_shape(args):
    """Build the board shape from the shape options, exiting on an impossible one."""
    try:
        return BoardShape(args.rows, args.cols, args.connect)
    except (DimensionOverflowError, ValueError) as e:
        print(f"Error: {e}")
        sys.exit(2)

# --- Command Handlers ---

def handle_play(args):
    """Handle the 'play' command."""
    cli = SimpleCLI(build_shape(args), precompute=args.precompute)
    if args.mode is None:
        cli.run_menu()
    else:
        cli.play_game(GameMode(args.mode))

def handle_analyze(args):
    """Handle the 'analyze' command."""
    if not args.position:
        print("Please provide a position string with --position")
        return
    cli = SimpleCLI(build_shape(args))
    cli.analyze_position(args.position, args.player)

def handle_benchmark(args):
    """Handle the 'benchmark' command."""
    cli = SimpleCLI(build_shape(args))
    cli.benchmark(args.iterations, args.seed)

# --- Main Entry Point ---

def main():
    """Main entry point for the Connect Four engine."""
    parser = argparse.ArgumentParser(
        description='Connect Four with an exhaustive-search computer opponent',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
    Examples:

    # Show the menu (PvP or play against the computer)
    python run.py play

    # Play second against the computer
    python run.py play --mode ai-first

    # Let the computer enumerate every position before the game starts
    python run.py play --mode ai-second --precompute

    # Score every column of a 4x5 position (row-major, top row first)
    python run.py analyze --position 0,0,0,0,0,0,0,0,0,0,2,2,0,0,0,1,1,1,0,0

    # Same position with player one forced to move
    python run.py analyze --player 1 --position 0,0,0,0,0,0,0,0,0,0,2,2,0,0,0,1,1,1,0,0

    # Benchmark the engine
    python run.py benchmark --iterations 5000
    """
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('--debug',
        action='store_true',
        help='Enable debug mode (equivalent to --debug_level debug)')
    common.add_argument('--debug_level',
        choices=['none', 'error', 'warning', 'info', 'debug', 'trace'],
        default='warning',
        help='Set debug level: none (silent), error, warning, info, debug, trace (most verbose)')
    common.add_argument('--log_file',
        type=str,
        help='Also write log output to this file')
    shape_group = common.add_argument_group('Board options')
    shape_group.add_argument('--rows', type=int, default=ROWS,
        help=f'Number of rows, at most 7 (default: {ROWS})')
    shape_group.add_argument('--cols', type=int, default=COLS,
        help=f'Number of columns (default: {COLS})')
    shape_group.add_argument('--connect', type=int, default=CONNECT_N,
        help=f'Pieces in a row needed to win (default: {CONNECT_N})')

    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    play_parser = subparsers.add_parser('play', parents=[common],
        help='Play Connect Four',
        description='Play against another person or the computer')
    play_parser.add_argument('--mode',
        choices=[mode.value for mode in GameMode],
        help='pvp, ai-first (computer is player 1) or ai-second; shows a menu if omitted')
    play_parser.add_argument('--precompute',
        action='store_true',
        help='Solve the empty board before the game instead of solving each move on demand')

    analyze_parser = subparsers.add_parser('analyze', parents=[common],
        help='Score every column of a position')
    analyze_parser.add_argument('--position',
        type=str,
        help='Comma-separated cell values (0 empty, 1 player one, 2 player two), top row first')
    analyze_parser.add_argument('--player',
        type=int, choices=[1, 2],
        help='Side to move (inferred from piece counts if omitted)')

    benchmark_parser = subparsers.add_parser('benchmark', parents=[common],
        help='Benchmark engine performance')
    benchmark_parser.add_argument('--iterations',
        type=int,
        default=1000,
        help='Number of random positions to benchmark with')
    benchmark_parser.add_argument('--seed',
        type=int,
        default=0,
        help='Random seed for the benchmark positions')

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        return

    configure_debug(args)
    if args.command == 'play':
        handle_play(args)
    elif args.command == 'analyze':
        handle_analyze(args)
    elif args.command == 'benchmark':
        handle_benchmark(args)

if __name__ == "__main__":
    main()
