"""
Main entry point for the conference calendar generator.
Loads raw agenda sessions, normalizes them, and writes the ICS file.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from confcal.diagnostics import Diagnostics
from confcal.event_normalizer import process_sessions
from confcal.ics_generator import generate_ics_file, print_calendar_summary
from confcal.ics_verifier import verify_ics_file
from confcal.logging_helper import Log
from confcal.raw_sessions import load_raw_sessions, sample_raw_sessions
from confcal.settings_manager import get_output_path, load_calendar_info, load_settings


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="confcal",
        description="Generate an ICS calendar from scraped conference agenda sessions.",
    )
    parser.add_argument("input", nargs="?", help="JSON file of scraped sessions (default: bundled sample agenda)")
    parser.add_argument("--output", help="Output .ics path (overrides the output_path setting)")
    parser.add_argument("--settings", help="Settings JSON file")
    parser.add_argument("--verify", action="store_true", help="Read the generated file back and report on it")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the app."""
    args = _parse_args(argv)

    Log.section("Conference Calendar Generator")
    Log.info(f"Log file: {Log.get_log_path()}")

    settings = load_settings(Path(args.settings) if args.settings else None)
    info = load_calendar_info(settings)
    output_path = Path(args.output) if args.output else get_output_path(settings)

    try:
        if args.input:
            raw_sessions = load_raw_sessions(args.input)
        else:
            Log.info("No input file given, using the sample agenda")
            raw_sessions = sample_raw_sessions()
    except (OSError, ValueError) as e:
        Log.error(f"Failed to load sessions: {e}")
        return 1

    diagnostics = Diagnostics()
    events = process_sessions(
        raw_sessions,
        diagnostics,
        zone=info.zone,
        year=info.year,
        default_location=settings["default_location"],
    )
    diagnostics.flush_to_log()

    try:
        ics_path = generate_ics_file(events, output_path, info)
    except OSError as e:
        Log.error(f"Failed to write ICS file: {e}")
        Log.kv({"stage": "ics", "result": "failed", "error": str(e)})
        return 1

    print_calendar_summary(events)

    if args.verify:
        try:
            report = verify_ics_file(ics_path)
        except ValueError as e:
            Log.error(f"Generated ICS file could not be parsed: {e}")
            return 1
        if not report.ok:
            return 1

    Log.info(f"The ICS file has been saved to: {ics_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
