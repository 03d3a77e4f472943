#!/usr/bin/env python3
"""
Export a district's prayer times calendar to an .ics file.

Usage:
    uv run python src/scripts/export_ics.py <district_id> [--lang en] [--output FILE]

Example:
    uv run python src/scripts/export_ics.py 9541 --lang tr
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import OUTPUT_DIR, SUPPORTED_LANGUAGES
from core.upstream_client import EzanVaktiClient
from services.feed import feed_filename, generate_feed


async def export(district_id: str, language: str, output_path: Path | None) -> Path:
    client = EzanVaktiClient()
    try:
        feed = await generate_feed(client, district_id, language)
    finally:
        await client.aclose()

    if output_path is None:
        output_path = OUTPUT_DIR / feed_filename(district_id, language)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(feed.content)

    print(f"{feed.days} days, {feed.event_count} events")
    return output_path


def main():
    parser = argparse.ArgumentParser(
        description="Export a district's prayer times as an iCalendar file"
    )
    parser.add_argument("district_id", help="District ID (IlceID) from the Ezan Vakti API")
    parser.add_argument(
        "--lang",
        choices=SUPPORTED_LANGUAGES,
        default="tr",
        help="Event title language (default: tr)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Output file (default: output/prayer-times-<district>-<lang>.ics)",
    )

    args = parser.parse_args()

    try:
        output_path = asyncio.run(export(args.district_id, args.lang, args.output))
        print(f"\nCalendar written: {output_path}")
    except Exception as e:
        print(f"\nError: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
