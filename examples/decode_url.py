#!/usr/bin/env python3
"""CLI tool to decode an iReal URL and export its songs to JSON or text.

Usage:
    python examples/decode_url.py <input_file> [-o output_file]

Examples:
    python examples/decode_url.py testdata/work.url
    python examples/decode_url.py testdata/work.url --render
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from ireal_parser import IRealError, parse_url, render, to_harte
from ireal_parser.chart.models import Bar
from ireal_parser.models import ChordSymbol, NoChord
from ireal_parser.url import Collection, Song


def chord_to_dict(chord: ChordSymbol) -> dict[str, Any]:
    """Convert a chord to a JSON-serializable dict."""
    if isinstance(chord, NoChord):
        return {"text": str(chord), "harte": to_harte(chord)}
    try:
        harte = to_harte(chord)
    except ValueError:
        harte = None
    return {
        "text": str(chord),
        "root": str(chord.root),
        "quality": str(chord.flavor),
        "alterations": [str(a) for a in chord.altered_notes],
        "bass": str(chord.bass_note) if chord.bass_note is not None else None,
        "harte": harte,
    }


def bar_to_dict(bar: Bar) -> dict[str, Any]:
    """Convert a Bar to a JSON-serializable dict."""
    return {
        "prefix": [str(a) for a in bar.prefix],
        "suffix": [str(a) for a in bar.suffix],
        "comments": list(bar.comments),
        "slots": [
            [{"chord": chord_to_dict(e.chord), "width": e.width, "alternate": e.alternate} for e in slot]
            for slot in bar.slots
        ],
        "repeat_start": bar.repeat_start,
        "repeat_end": bar.repeat_end,
        "double_bar_start": bar.double_bar_start,
        "double_bar_end": bar.double_bar_end,
        "final_bar": bar.final_bar,
        "shorthand": bar.shorthand,
    }


def song_to_dict(song: Song) -> dict[str, Any]:
    """Convert a Song to a JSON-serializable dict."""
    return {
        "title": song.title,
        "composer": song.composer,
        "style": song.style,
        "key": song.key,
        "transpose": song.transpose,
        "comp_style": song.comp_style,
        "bpm": song.bpm,
        "repeats": song.repeats,
        "repeat_start": song.music.repeat_start,
        "bars": [bar_to_dict(bar) for bar in song.music.bars],
    }


def collection_to_dict(collection: Collection) -> dict[str, Any]:
    """Convert a Collection to a JSON-serializable dict."""
    return {
        "title": collection.title,
        "songs": [song_to_dict(song) for song in collection.songs],
    }


def collection_to_text(collection: Collection, bars_per_line: int) -> str:
    """Render every song as a titled fixed-width chart."""
    parts = []
    for song in collection.songs:
        parts.append(f"{song.title} ({song.composer}) - {song.style}, {song.key}\n")
        parts.append(render(song.music, bars_per_line=bars_per_line))
    return "\n".join(parts)


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Decode an irealb:// URL and export to JSON",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s testdata/work.url
  %(prog)s testdata/work.url -o work.json --pretty
  %(prog)s testdata/work.url --render --bars-per-line 2
        """,
    )
    parser.add_argument(
        "input",
        type=Path,
        help="File holding the irealb:// URL",
    )
    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=None,
        help="Output file (default: stdout)",
    )
    parser.add_argument(
        "--pretty",
        action="store_true",
        help="Pretty-print JSON output",
    )
    parser.add_argument(
        "--render",
        action="store_true",
        help="Write fixed-width charts instead of JSON",
    )
    parser.add_argument(
        "--bars-per-line",
        type=int,
        default=4,
        help="Bars per rendered line (default: 4)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log decoding steps",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.input.exists():
        print(f"Error: Input file not found: {args.input}", file=sys.stderr)
        return 1

    try:
        collection = parse_url(args.input.read_text(encoding="utf-8"))
    except IRealError as e:
        print(f"Error decoding URL: {e}", file=sys.stderr)
        return 1

    if args.render:
        output = collection_to_text(collection, args.bars_per_line)
    else:
        indent = 2 if args.pretty else None
        output = json.dumps(collection_to_dict(collection), indent=indent, ensure_ascii=False)

    if args.output:
        args.output.write_text(output, encoding="utf-8")
        print(f"Wrote output to {args.output}")
    else:
        print(output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
