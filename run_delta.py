#!/usr/bin/env python
"""Diff two JSON/YAML documents from the command line."""

import argparse
import json
import sys
from pathlib import Path

from jsondelta import DeltaRunner, EngineConfig, ErrorResponse, JsonDeltaError


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Compute the structural delta between two JSON/YAML documents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_delta.py before.json after.json
  python run_delta.py before.json after.json -c config.yaml -o delta.json
  python run_delta.py before.json after.json -i '$..updatedAt' --trace
        """
    )

    parser.add_argument("left", help="Path to the original document")
    parser.add_argument("right", help="Path to the changed document")
    parser.add_argument("-c", "--config", help="Path to YAML/JSON diff configuration")
    parser.add_argument("-o", "--output", help="Path to output JSON file (default: stdout)")
    parser.add_argument(
        "-i", "--ignore",
        action="append",
        default=[],
        help="JSONPath removed from both documents before diffing (repeatable)"
    )
    parser.add_argument("--trace", action="store_true", help="Include option trace in output")
    parser.add_argument("--max-depth", type=int, default=100, help="Maximum nesting depth")
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress console output")

    args = parser.parse_args(argv)

    for path in (args.left, args.right, args.config):
        if path and not Path(path).exists():
            print(f"Error: File not found: {path}", file=sys.stderr)
            return 2

    engine_config = EngineConfig(
        max_depth=args.max_depth,
        global_ignores=args.ignore,
        trace_rule_application=args.trace,
    )

    try:
        report = DeltaRunner.run_diff(args.left, args.right, args.config, engine_config)
    except JsonDeltaError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if isinstance(report, ErrorResponse):
        print(f"Error: {report.error['message']}", file=sys.stderr)
        return 2

    result = report.to_dict()
    output = result if args.trace else result["delta"]

    if args.output:
        with open(args.output, 'w') as f:
            json.dump(output, indent=2, fp=f)
        if not args.quiet:
            print(f"Delta saved to: {args.output}")
    elif not args.quiet:
        print(json.dumps(output, indent=2))

    return 1 if report.has_changes else 0


if __name__ == "__main__":
    sys.exit(main())
