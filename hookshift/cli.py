"""
CLI — Command interface

Reads the statements of a generated function body, groups them, and prints
the reorganized body.

    hookshift group body.js
    hookshift group body.js --tracked count,resetCount --annotate
    cat body.js | hookshift group -
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from .config import ConfigManager
from .core.grouping import GroupingEngine, render
from .errors import HookshiftError
from .parsing import parse_statements, declared_names, is_available
from . import __version__

logger = logging.getLogger(__name__)


def _read_source(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def _parse_tracked(value: Optional[str]) -> Optional[List[str]]:
    if not value:
        return None
    return [name.strip() for name in value.split(",") if name.strip()]


def cmd_group(args) -> int:
    """Group the statements of a file and print the result."""
    manager = ConfigManager(Path(args.project), config_path=args.config)
    config = manager.load_valid()
    if args.annotate:
        config.labels.annotate_stats = True

    if not is_available():
        raise HookshiftError(
            "JavaScript parsing requires tree-sitter-language-pack "
            "(pip install tree-sitter-language-pack)"
        )

    try:
        source = _read_source(args.file)
    except OSError as e:
        raise HookshiftError(f"Cannot read {args.file}: {e.strerror}")

    statements = parse_statements(source, strict=not args.lenient)

    tracked = _parse_tracked(args.tracked)
    if tracked is None:
        tracked = declared_names(statements)
    logger.debug("tracking %d name(s): %s", len(tracked), sorted(tracked))

    result = GroupingEngine(config).group(statements, tracked)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(render(result.items))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the hookshift CLI."""
    parser = argparse.ArgumentParser(
        description="hookshift -- Group setup statements into labeled blocks",
    )

    parser.add_argument(
        '--project', '-p',
        default=os.environ.get("HOOKSHIFT_PROJECT_PATH", "."),
        help='Project directory for .hookshift/config.yaml (default: HOOKSHIFT_PROJECT_PATH or current)'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Log grouping details to stderr'
    )

    parser.add_argument(
        '--version', '-V',
        action='version',
        version=f'hookshift {__version__}'
    )

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    group_parser = subparsers.add_parser('group', help='Group statements of a JavaScript function body')
    group_parser.add_argument('file', help="JavaScript file, or '-' for stdin")
    group_parser.add_argument(
        '--tracked', '-t',
        help='Comma-separated tracked names (default: every declared name)'
    )
    group_parser.add_argument('--config', '-c', type=Path, help='Config file (overrides project config)')
    group_parser.add_argument('--annotate', action='store_true', help='Append cluster stats to labels')
    group_parser.add_argument('--json', action='store_true', help='Print groups as JSON')
    group_parser.add_argument('--lenient', action='store_true', help='Do not fail on syntax errors')
    group_parser.set_defaults(handler=cmd_group)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 0

    try:
        return args.handler(args)
    except HookshiftError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
