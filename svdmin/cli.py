from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from .errors import MinifyError
from .minifier import minify_file, minify_paths
from .utils import LOG_FILE_PATH, setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Minify SVD/XML files by renaming tags to single-letter symbols")
    parser.add_argument("paths", nargs="+", help="SVD/XML file(s) or directories")
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        help="Output file for a single input, output directory otherwise (default: print / write <name>.min.txt beside inputs)",
    )
    parser.add_argument("--report", type=str, help="Write per-file batch results as JSON to this path")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    parser.add_argument("--log-file", type=str, default=LOG_FILE_PATH, help="Log file path (empty string disables)")
    return parser


def _is_single_file(paths: list[str]) -> bool:
    return len(paths) == 1 and not os.path.isdir(paths[0])


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    missing = [p for p in args.paths if not os.path.exists(p)]
    if missing:
        parser.error(f"Input path not found: {', '.join(missing)}")

    setup_logging(verbose=args.verbose, log_file=args.log_file or None)
    logger = logging.getLogger(__name__)

    if _is_single_file(args.paths) and not args.report:
        try:
            minified = minify_file(args.paths[0])
        except MinifyError as e:
            print(e, file=sys.stderr)
            return 1
        if args.output:
            Path(args.output).write_text(minified + "\n", encoding="utf-8")
            logger.info("Wrote %s", args.output)
        else:
            print(minified)
        return 0

    results = minify_paths(args.paths, output_dir=args.output)
    total_before = total_after = 0
    for r in results:
        name = Path(r["file"]).name
        if not r["success"]:
            print(f"{name}: FAILED ({r['error']})")
            continue
        before, after = r["before"], r["after"]
        total_before += before
        total_after += after
        pct = (1 - after / before) * 100 if before else 0
        print(f"{name}: {before/1024:.1f}KB -> {after/1024:.1f}KB ({pct:.1f}% saved) -> {r['output']}")
    overall = (1 - total_after / total_before) * 100 if total_before else 0
    failed = sum(1 for r in results if not r["success"])
    print(f"TOTAL: {total_before/1024:.1f}KB -> {total_after/1024:.1f}KB ({overall:.1f}% saved) failed={failed}")

    if args.report:
        with open(args.report, "w", encoding="utf-8") as f:
            json.dump(results, f, indent=2)
        logger.info("Batch report saved to %s", args.report)

    return 1 if failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
