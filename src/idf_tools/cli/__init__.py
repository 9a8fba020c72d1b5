"""
Command-line interface for idf-tools.

Provides commands for common IDF 3.0 tasks via the `idf-tools` command:

    idf-tools info <file>        - Summarize a board, panel or library file
    idf-tools rewrite <file>     - Re-encode a file, optionally transforming it
    idf-tools similar <library>  - Find library definitions with the same outline
    idf-tools config             - Show or initialize configuration

Examples:
    idf-tools info board.emn
    idf-tools info parts.emp --format json
    idf-tools rewrite board.emn -o out.emn --remove-test-points --part-numbers package
    idf-tools rewrite parts.emp -o out.emp --part-numbers geometry --dedupe
    idf-tools similar parts.emp --tolerance 0.01
    idf-tools config --init
"""

import argparse
import sys
from typing import List, Optional

from idf_tools import __version__

__all__ = ["main"]


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for idf-tools CLI."""
    parser = argparse.ArgumentParser(
        prog="idf-tools",
        description="IDF 3.0 board and library toolkit",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--version", action="version", version=f"idf-tools {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Info subcommand
    info_parser = subparsers.add_parser("info", help="Summarize an IDF file")
    info_parser.add_argument("file", help="Path to .emn/.emp file")
    info_parser.add_argument("--format", choices=["text", "json"], default="text")
    info_parser.add_argument("-v", "--verbose", action="store_true")

    # Rewrite subcommand
    rewrite_parser = subparsers.add_parser("rewrite", help="Re-encode an IDF file")
    rewrite_parser.add_argument("file", help="Path to .emn/.emp file")
    rewrite_parser.add_argument("-o", "--output", help="Output path (default: stdout)")
    rewrite_parser.add_argument("--prefix", help="Prepend to the header source")
    rewrite_parser.add_argument("--remove-test-points", action="store_true")
    rewrite_parser.add_argument(
        "--part-numbers", choices=["keep", "package", "geometry"], help="Part number source"
    )
    rewrite_parser.add_argument("--dedupe", action="store_true", help="Drop duplicate definitions")
    rewrite_parser.add_argument("-v", "--verbose", action="store_true")

    # Similar subcommand
    similar_parser = subparsers.add_parser(
        "similar", help="Find library definitions with matching outlines"
    )
    similar_parser.add_argument("library", help="Path to .emp library file")
    similar_parser.add_argument("--tolerance", type=float, help="Tolerance in mm")
    similar_parser.add_argument("--format", choices=["text", "json"], default="text")

    # Config subcommand
    config_parser = subparsers.add_parser("config", help="Manage configuration")
    config_group = config_parser.add_mutually_exclusive_group()
    config_group.add_argument("--show", action="store_true", help="Show effective configuration")
    config_group.add_argument("--init", action="store_true", help="Create template config file")
    config_group.add_argument("--paths", action="store_true", help="Show config file paths")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    return _dispatch(args)


def _dispatch(args) -> int:
    """Forward parsed arguments to the command module."""
    if args.command == "info":
        from .info_cmd import main as info_cmd

        sub_argv = [args.file]
        if args.format != "text":
            sub_argv.extend(["--format", args.format])
        if args.verbose:
            sub_argv.append("--verbose")
        return info_cmd(sub_argv)

    elif args.command == "rewrite":
        from .rewrite_cmd import main as rewrite_cmd

        sub_argv = [args.file]
        if args.output:
            sub_argv.extend(["-o", args.output])
        if args.prefix is not None:
            sub_argv.extend(["--prefix", args.prefix])
        if args.remove_test_points:
            sub_argv.append("--remove-test-points")
        if args.part_numbers:
            sub_argv.extend(["--part-numbers", args.part_numbers])
        if args.dedupe:
            sub_argv.append("--dedupe")
        if args.verbose:
            sub_argv.append("--verbose")
        return rewrite_cmd(sub_argv)

    elif args.command == "similar":
        from .similar_cmd import main as similar_cmd

        sub_argv = [args.library]
        if args.tolerance is not None:
            sub_argv.extend(["--tolerance", str(args.tolerance)])
        if args.format != "text":
            sub_argv.extend(["--format", args.format])
        return similar_cmd(sub_argv)

    elif args.command == "config":
        from .config_cmd import main as config_cmd

        sub_argv = []
        if args.init:
            sub_argv.append("--init")
        elif args.paths:
            sub_argv.append("--paths")
        return config_cmd(sub_argv)

    return 1


if __name__ == "__main__":
    sys.exit(main())
