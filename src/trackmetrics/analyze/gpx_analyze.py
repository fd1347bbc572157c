#!/usr/bin/env python3
"""
trackmetrics-analyze: summarize GPX tracks (distance, duration, pace, climb).
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from trackmetrics.analyze.report import TSV_HEADER, text_report, tsv_row
from trackmetrics.analyze.track import analyze_gpx
from trackmetrics.config import load_config
from trackmetrics.errors import ConfigError, TrackMetricsError
from trackmetrics.util.logging import log, setup_logging, utc_now_iso


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="trackmetrics: Analyze GPX file(s).")
    ap.add_argument("gpx", nargs="+",
                    help="One or more GPX files.")
    out = ap.add_mutually_exclusive_group()
    out.add_argument("--tsv", action="store_true",
                     help="Print tab-separated output (good for piping).")
    out.add_argument("--json", action="store_true",
                     help="Print one JSON document with a result per file.")
    ap.add_argument("--min-speed", type=float, default=None, metavar="KMH",
                    help="Movement filter speed threshold (default: from config, 1.5)")
    ap.add_argument("--min-interval", type=float, default=None, metavar="S",
                    help="Movement filter minimum spacing between fixes (default: from config, 1.0)")
    ap.add_argument("-v", "--verbose", action="store_true",
                    help="Log progress and filter decisions.")
    return ap


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        cfg = load_config()
    except ConfigError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    min_speed = args.min_speed if args.min_speed is not None else cfg.filter.min_speed_kmh
    min_interval = args.min_interval if args.min_interval is not None else cfg.filter.min_interval_s

    if args.tsv:
        print(TSV_HEADER)

    rc = 0
    results: list[dict] = []
    for raw in args.gpx:
        path = Path(raw).expanduser()
        if path.suffix.lower() != ".gpx":
            print(f"Skipping (not a .gpx file): {path}", file=sys.stderr)
            rc = 1
            continue
        if not path.is_file():
            print(f"Skipping (not a file): {path}", file=sys.stderr)
            rc = 1
            continue

        if args.verbose:
            log(f"Analyzing {path}")
        try:
            result = analyze_gpx(path, min_speed_kmh=min_speed, min_interval_s=min_interval)
        except TrackMetricsError as e:
            print(f"error: {path}: {e}", file=sys.stderr)
            rc = 1
            continue

        if args.json:
            results.append({"file": str(path), **result.to_dict()})
        elif args.tsv:
            print(tsv_row(path, result))
        else:
            print()
            print(text_report(path, result))

    if args.json:
        doc = {
            "analyzed_at": utc_now_iso(),
            "filter": {"min_speed_kmh": min_speed, "min_interval_s": min_interval},
            "results": results,
        }
        print(json.dumps(doc, indent=2))

    return rc


if __name__ == "__main__":
    raise SystemExit(main())
