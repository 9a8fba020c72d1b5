"""
Re-encode an IDF 3.0 file, optionally transforming it on the way.

Settings come from the ``[rewrite]`` config section; command-line flags
override them.

Usage:
    idf-tools rewrite <file> [-o OUTPUT] [options]

Examples:
    idf-tools rewrite board.emn -o out.emn --prefix "PCB: " --remove-test-points
    idf-tools rewrite parts.emp -o out.emp --part-numbers geometry --dedupe
"""

import argparse
import sys
from dataclasses import replace

from idf_tools.config import PART_NUMBER_SOURCES, Config
from idf_tools.exceptions import IdfToolsError
from idf_tools.idf30 import encode
from idf_tools.idf_file import load_idf, save_idf
from idf_tools.log import configure_from, enable_verbose
from idf_tools.operations import apply_rewrite


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="idf-tools rewrite",
        description="Re-encode an IDF 3.0 file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("file", help="Path to .emn/.emp file")
    parser.add_argument("-o", "--output", help="Output path (default: stdout)")
    parser.add_argument("--prefix", help="Prepend to the header source")
    parser.add_argument(
        "--remove-test-points", action="store_true", help="Drop TP* placements"
    )
    parser.add_argument(
        "--part-numbers", choices=PART_NUMBER_SOURCES, help="Where part numbers come from"
    )
    parser.add_argument(
        "--dedupe", action="store_true", help="Keep one definition per geometry name"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log each step")

    args = parser.parse_args(argv)

    try:
        config = Config.load()
        configure_from(config)
        if args.verbose:
            enable_verbose("INFO")

        rewrite = config.rewrite
        if args.prefix is not None:
            rewrite = replace(rewrite, source_prefix=args.prefix)
        if args.remove_test_points:
            rewrite = replace(rewrite, remove_test_points=True)
        if args.part_numbers:
            rewrite = replace(rewrite, part_numbers_from=args.part_numbers)
        if args.dedupe:
            rewrite = replace(rewrite, dedupe_definitions=True)

        doc = apply_rewrite(load_idf(args.file), rewrite)

        if args.output:
            save_idf(doc, args.output)
            print(f"Wrote {doc.header.file_type_token} to {args.output}", file=sys.stderr)
        else:
            sys.stdout.write(encode(doc))
    except IdfToolsError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
