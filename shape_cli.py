#!/usr/bin/env python3
"""Command-line interface for shape recognition and smoothing.

This module runs the service layer over a stroke stored as JSON and prints
the JSON result to stdout. The input file holds either a list of points or
an object with a ``points`` list; points are ``{"x": .., "y": ..}`` objects
or ``[x, y]`` pairs.

Usage:
    python shape_cli.py recognize stroke.json
    python shape_cli.py recognize stroke.json --min-confidence 0.8
    python shape_cli.py smooth stroke.json --resolution 4
    python shape_cli.py features stroke.json --log-level DEBUG

Exit status is 0 on success, 2 when the input cannot be read or parsed.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from shape_lib.api import ShapeService
from shape_lib.logging_config import configure_logging

_logger = logging.getLogger(__name__)

EXIT_INVALID_INPUT = 2


def _create_argument_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        description='Recognize or smooth a freehand stroke stored as JSON'
    )
    parser.add_argument('command', choices=['recognize', 'smooth', 'features'],
                        help='Operation to run')
    parser.add_argument('file', type=str,
                        help='JSON file with a list of points or {"points": [...]}')
    parser.add_argument('--min-confidence', type=float, default=None,
                        help='Recognition threshold in [0, 1] (default: 0.65)')
    parser.add_argument('--resolution', type=int, default=None,
                        help='Smoothing samples per segment (default: 8)')
    parser.add_argument('--log-level', type=str, default='WARNING',
                        help='Log level (default: WARNING)')
    return parser


def _load_points(path: Path):
    """Read the raw point list from a JSON file."""
    with open(path) as f:
        data = json.load(f)
    if isinstance(data, dict):
        if 'points' not in data:
            raise ValueError("JSON object has no 'points' key")
        return data['points']
    return data


def run(argv: list[str] | None = None) -> int:
    """Run the CLI and return the process exit status."""
    parser = _create_argument_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    service = ShapeService()
    try:
        raw_points = _load_points(Path(args.file))
        if args.command == 'recognize':
            output = service.recognize(raw_points, min_confidence=args.min_confidence)
        elif args.command == 'smooth':
            output = service.smooth(raw_points, resolution=args.resolution)
        else:
            output = service.analyze(raw_points)
    except (OSError, ValueError) as e:
        _logger.error("Cannot process %s: %s", args.file, e)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    print(json.dumps(output, indent=2))
    return 0


def main() -> None:
    """Command-line interface for shape recognition.

    Usage:
        python shape_cli.py recognize stroke.json
        python shape_cli.py smooth stroke.json --resolution 4
    """
    sys.exit(run())


if __name__ == '__main__':
    main()
