"""
Quick overview of an IDF 3.0 file.

Usage:
    idf-tools info <file> [options]

Options:
    --format {text,json}   Output format (default: text)
    --verbose              List every placement or definition

Examples:
    idf-tools info board.emn
    idf-tools info parts.emp --format json
"""

import argparse
import json
import sys
from collections import Counter

from idf_tools.exceptions import IdfToolsError
from idf_tools.idf30 import IdfDocument, LibraryFile
from idf_tools.idf_file import load_idf


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="idf-tools info",
        description="Summarize an IDF 3.0 file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("file", help="Path to .emn/.emp file")
    parser.add_argument("--format", choices=["text", "json"], default="text", help="Output format")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show more details")

    args = parser.parse_args(argv)

    try:
        doc = load_idf(args.file)
    except IdfToolsError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    summary = gather_summary(doc, args.verbose)
    if args.format == "json":
        print(json.dumps(summary, indent=2))
    else:
        print_summary(summary)
    return 0


def gather_summary(doc: IdfDocument, verbose: bool = False) -> dict:
    """Collect the numbers shown by the info command."""
    header = doc.header
    summary = {
        "file_type": header.file_type_token,
        "source": header.source,
        "date": header.date,
        "version": header.version,
        "sections": [s.name for s in doc.sections],
    }

    if isinstance(header.file_type, LibraryFile):
        summary["definitions"] = len(doc.components)
        summary["unique_geometries"] = len({c.geometry_name for c in doc.components})
        if verbose:
            summary["definition_list"] = [
                {
                    "geometry": c.geometry_name,
                    "part_number": c.part_number,
                    "units": str(c.units),
                    "height": c.height,
                    "points": len(c.points),
                }
                for c in doc.components
            ]
    else:
        summary["board_name"] = header.board_name
        summary["units"] = str(header.units)
        summary["placements"] = len(doc.placements)
        summary["test_points"] = sum(1 for p in doc.placements if p.designator.is_test_point())
        summary["by_side"] = dict(Counter(str(p.board_side) for p in doc.placements))
        if verbose:
            summary["placement_list"] = [
                {
                    "designator": str(p.designator),
                    "package": p.package_name,
                    "part_number": p.part_number,
                    "x": p.x,
                    "y": p.y,
                    "rotation": p.rotation,
                    "side": str(p.board_side),
                    "status": str(p.placement_status),
                }
                for p in doc.placements
            ]

    return summary


def print_summary(summary: dict) -> None:
    print(f"Type:    {summary['file_type']}")
    print(f"Source:  {summary['source']}")
    print(f"Date:    {summary['date']}")
    print(f"Version: {summary['version']}")

    if "board_name" in summary:
        print(f"Name:    {summary['board_name']} ({summary['units']})")
        print(f"Components: {summary['placements']}")
        print(f"Test points: {summary['test_points']}")
        for side, count in summary["by_side"].items():
            print(f"  {side}: {count}")
        for p in summary.get("placement_list", []):
            print(
                f"  {p['designator']:<10} {p['package']:<16} {p['part_number']:<16} "
                f"{p['x']:>10.4f} {p['y']:>10.4f} {p['rotation']:>8.3f} {p['side']} {p['status']}"
            )
    else:
        print(f"Component defs: {summary['definitions']}")
        print(f"Unique geometries: {summary['unique_geometries']}")
        for d in summary.get("definition_list", []):
            print(
                f"  {d['geometry']:<16} {d['part_number']:<16} "
                f"{d['height']:>8.4f} {d['units']} ({d['points']} points)"
            )

    if summary["sections"]:
        print(f"Other sections: {', '.join(summary['sections'])}")


if __name__ == "__main__":
    sys.exit(main())
