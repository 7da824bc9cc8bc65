#!/usr/bin/env python3
"""
gpxparser — Command line
================================
Inspect GPX 1.0/1.1 files and rewrite them as canonical GPX 1.1.

Usage:
    gpxparser track.gpx                      # One-line summary
    gpxparser track.gpx --info               # Detailed summary
    gpxparser old.gpx new.gpx                # Rewrite as GPX 1.1
    gpxparser old.gpx -                      # Rewrite to stdout
    gpxparser old.gpx a.gpx b.gpx --raw      # Multi-output, no indentation
"""

from __future__ import annotations
import argparse
import logging
import sys
from typing import List, Optional

from .constants import DEFAULT_CREATOR, SOFT_FULL_NAME
from .errors import GPXParserError
from .formats import parse_file, to_xml, write_file
from .models import GPX


def show_info(gpx: GPX, filepath: str = ""):
    """Display information about a parsed document."""
    if filepath:
        print(f"\n📁 File: {filepath}")
    version = gpx.version.value if gpx.version else "unknown"
    print(f"   GPX version: {version}")
    print(f"   Creator: {gpx.creator or '(none)'}")

    metadata = gpx.metadata
    if metadata is not None:
        if metadata.name:
            print(f"   Name: {metadata.name}")
        if metadata.author is not None and metadata.author.name:
            print(f"   Author: {metadata.author.name}")
        if metadata.time is not None:
            print(f"   Time: {metadata.time.isoformat()}")
        if metadata.bounds is not None:
            b = metadata.bounds
            print(f"   Bounds: ({b.min_lat:.6f}, {b.min_lon:.6f}) → ({b.max_lat:.6f}, {b.max_lon:.6f})")

    print(f"\n   📌 Waypoints: {len(gpx.waypoints)}")
    for i, route in enumerate(gpx.routes):
        print(f"   🛣️  Route [{i + 1}] {route.name or '(unnamed)'}: {len(route.route_points)} points")
    for i, track in enumerate(gpx.tracks):
        print(f"   📍 Track [{i + 1}] {track.name or '(unnamed)'}: "
              f"{len(track.segments)} segments, {track.point_count()} points")


def summary(gpx: GPX) -> str:
    points = len(gpx.waypoints)
    points += sum(len(r.route_points) for r in gpx.routes)
    points += sum(t.point_count() for t in gpx.tracks)
    version = gpx.version.value if gpx.version else "?"
    return (f"GPX {version}: {len(gpx.waypoints)} waypoints, {len(gpx.routes)} routes, "
            f"{len(gpx.tracks)} tracks, {points} points")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gpxparser",
        description=f"{SOFT_FULL_NAME} — GPX 1.0/1.1 reader, GPX 1.1 writer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s track.gpx                    Show a summary
  %(prog)s --info track.gpx             Show file information
  %(prog)s old.gpx new.gpx              Rewrite as GPX 1.1
  %(prog)s old.gpx -                    Rewrite to standard output
        """)

    parser.add_argument("input", help="Input GPX file")
    parser.add_argument("outputs", nargs="*", help="Output GPX file(s), '-' for stdout")
    parser.add_argument("--info", action="store_true", help="Show file info")
    parser.add_argument("--raw", action="store_true", help="Write without indentation")
    parser.add_argument("--creator", type=str, default=None,
                        help=f"Set the creator attribute (default: keep, or '{DEFAULT_CREATOR}' if missing)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        gpx = parse_file(args.input)
    except GPXParserError as e:
        print(f"❌ Error reading {args.input}: {e}", file=sys.stderr)
        return 1

    if args.info:
        show_info(gpx, args.input)
    elif not args.outputs:
        print(f"✅ {args.input}: {summary(gpx)}")

    if not args.outputs:
        return 0

    if args.creator:
        gpx.creator = args.creator
    elif gpx.creator is None:
        gpx.creator = DEFAULT_CREATOR

    pretty = not args.raw
    for output_path in args.outputs:
        if output_path == "-":
            sys.stdout.write(to_xml(gpx, pretty))
            continue
        try:
            write_file(output_path, gpx, pretty)
        except OSError as e:
            print(f"❌ Error writing {output_path}: {e}", file=sys.stderr)
            return 1
        if args.verbose:
            print(f"✅ Converted → {output_path} (GPX 1.1)", file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())
