"""
Find library definitions that describe the same physical package.

Usage:
    idf-tools similar <library.emp> [--tolerance MM] [--format {text,json}]
"""

import argparse
import json
import sys

from idf_tools.config import Config
from idf_tools.exceptions import IdfToolsError
from idf_tools.geometry import find_similar_definitions
from idf_tools.idf_file import load_library


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="idf-tools similar",
        description="Find library definitions with matching outlines",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("library", help="Path to .emp library file")
    parser.add_argument(
        "--tolerance", type=float, help="Tolerance in mm (default: [geometry] tolerance_mm)"
    )
    parser.add_argument("--format", choices=["text", "json"], default="text", help="Output format")

    args = parser.parse_args(argv)

    try:
        tolerance = args.tolerance
        if tolerance is None:
            tolerance = Config.load().geometry.tolerance_mm
        doc = load_library(args.library)
    except IdfToolsError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    groups = find_similar_definitions(doc.components, tolerance)
    names = [[d.geometry_name for d in group] for group in groups]

    if args.format == "json":
        print(json.dumps({"tolerance_mm": tolerance, "groups": names}, indent=2))
    elif not names:
        print(f"No similar definitions among {len(doc.components)}")
    else:
        print(f"Similar definitions ({len(names)} groups):")
        for group in names:
            print(f"  {', '.join(group)}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
