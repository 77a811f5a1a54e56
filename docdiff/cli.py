"""Command line entry point for diffing two document files."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from .models import EngineConfig, LogLevel
from .runner import DocumentDiffRunner
from .exceptions import DocDiffError
from .jsonpath_utils import changed_fields


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docdiff",
        description="Diff two versions of a document",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  docdiff left.json right.json --types types.yaml
  docdiff left.json right.json -t types.yaml -r report.json
  docdiff left.json right.json -t types.yaml --select '$.schemas.dublincore.*'
  docdiff left.json right.json -t types.yaml --changed
        """
    )

    parser.add_argument("left", help="Path to the left-hand document file")
    parser.add_argument("right", help="Path to the right-hand document file")
    parser.add_argument("-t", "--types", required=True, help="Path to the type definition file")
    parser.add_argument("-r", "--report", help="Path to output JSON report file")
    parser.add_argument("-s", "--select", help="JSONPath expression applied to the report")
    parser.add_argument("-c", "--changed", action="store_true",
                        help="Print only the differing fields, one schema:field per line")
    parser.add_argument("--system", action="store_true",
                        help="Also compare document type and path")
    parser.add_argument("--fail-fast", action="store_true",
                        help="Stop on the first field error")
    parser.add_argument("--max-depth", type=int, default=100, help="Maximum nesting depth")
    parser.add_argument(
        "--log-level",
        default=LogLevel.WARN.value,
        choices=[level.value for level in LogLevel],
        help="Logging level"
    )
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress console output")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = EngineConfig(
        max_depth=args.max_depth,
        fail_fast=args.fail_fast,
        include_system_elements=args.system,
        log_level=LogLevel(args.log_level),
    )
    logging.basicConfig(
        level=config.log_level.value,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    runner = DocumentDiffRunner(args.types, config)
    try:
        doc_diff = runner.diff_files(args.left, args.right)
        output = doc_diff.select(args.select) if args.select else doc_diff.to_dict()
    except (DocDiffError, FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.report:
        runner.write_report(doc_diff, args.report)

    if not args.quiet:
        if args.changed:
            print("\n".join(changed_fields(doc_diff.to_dict())))
        else:
            print(json.dumps(output, indent=2))

    return 0 if doc_diff.is_identical() else 1


if __name__ == "__main__":
    sys.exit(main())
