#!/usr/bin/env python3
"""
rideadda-analyze: summarize recorded ride tracks (GPX).

Prints distance, moving time, average and max speed per file, either as a
human report, tab-separated rows, or JSON.
"""

from __future__ import annotations

import argparse
import json
from dataclasses import replace
from pathlib import Path

from rideadda.analyze.track import AnalyticsSettings, analyze_track
from rideadda.config import load_config
from rideadda.errors import RideAddaError
from rideadda.formats.gpx import load_track
from rideadda.models import RideStatistics
from rideadda.util.fzf import fzf_select_paths
from rideadda.util.logging import log

TSV_HEADER = "file\tdistance_km\tmoving_time_min\tavg_speed_kph\tmax_speed_kph"


def print_report(path: Path, stats: RideStatistics, *, tsv: bool) -> None:
    if tsv:
        print(
            f"{path}\t"
            f"{stats.distance_km:.2f}\t"
            f"{stats.moving_time_minutes}\t"
            f"{stats.avg_speed_kph}\t"
            f"{stats.max_speed_kph}"
        )
    else:
        print(f"\n{path}")
        print(f"  ride          : {stats.ride_id}")
        print(f"  distance (km) : {stats.distance_km:.2f}")
        print(f"  moving (min)  : {stats.moving_time_minutes}")
        print(f"  avg speed kph : {stats.avg_speed_kph}")
        print(f"  max speed kph : {stats.max_speed_kph}")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="rideadda-analyze",
                                 description="RideAdda: summarize ride track(s) from GPX.")
    ap.add_argument("gpx", nargs="*",
                    help="One or more GPX files. If omitted, use fzf selection under the work root.")
    ap.add_argument("--work-root", default=None,
                    help="Where to look for GPX files (default: from RideAdda config or ~/Rides/_work)")
    ap.add_argument("--user-id", default="local",
                    help="Rider identifier stamped on each summary.")
    fmt = ap.add_mutually_exclusive_group()
    fmt.add_argument("--tsv", action="store_true",
                     help="Print tab-separated output (good for piping).")
    fmt.add_argument("--json", action="store_true",
                     help="Print one JSON array of summaries.")
    ap.add_argument("--plot", action="store_true",
                    help="Plot each track coloured by segment speed.")
    ap.add_argument("--max-speed-kph", type=float, default=None,
                    help="Segment speeds at/above this are treated as GPS jitter.")
    ap.add_argument("--idle-gap-s", type=float, default=None,
                    help="Exclude gaps longer than this from moving time.")
    return ap


def _settings_from(args: argparse.Namespace, base: AnalyticsSettings) -> AnalyticsSettings:
    settings = base
    if args.max_speed_kph is not None and args.max_speed_kph > 0:
        settings = replace(settings, max_plausible_speed_kph=args.max_speed_kph)
    if args.idle_gap_s is not None:
        settings = replace(settings, idle_gap_s=args.idle_gap_s if args.idle_gap_s > 0 else None)
    return settings


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    cfg = load_config()

    settings = _settings_from(args, cfg.analytics)

    if args.gpx:
        selected = [Path(p).expanduser() for p in args.gpx]
    else:
        work_root = Path(args.work_root).expanduser() if args.work_root else cfg.paths.work_root
        gpx_files = sorted(work_root.rglob("*.gpx"))
        if not gpx_files:
            raise SystemExit(f"No GPX files found under {work_root}")

        selected = fzf_select_paths(
            gpx_files,
            header="Select GPX file(s) to analyze:",
            multi=True,
        )

    if args.tsv:
        print(TSV_HEADER)

    results = []
    for path in selected:
        if not path.is_file():
            log(f"Skipping (not a file): {path}")
            continue
        try:
            stats = analyze_track(path, user_id=args.user_id, settings=settings)
        except (RideAddaError, OSError) as e:
            log(f"Skipping {path}: {e}")
            continue

        if args.json:
            results.append({"file": str(path), **stats.to_dict()})
        else:
            print_report(path, stats, tsv=args.tsv)

        if args.plot:
            from rideadda.visualize.plot import plot_speed
            plot_speed(load_track(path), title=path.name)

    if args.json:
        print(json.dumps(results, indent=2))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
