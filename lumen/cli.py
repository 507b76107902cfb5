# lumen/cli.py
"""
Daily impulse generator.

1. Fetches today's Gospel reference from USCCB
2. Resolves it and looks up the passage text per language (optional)
3. Calls the Magisterium AI API for each language (de, en, pl)
4. Writes impulses/<date>.json + impulses/latest.json

Only the Gospel reference is sent to the API. MAGISTERIUM_API_KEY is
required; API_BIBLE_KEY is optional.

  python generate_impulse.py
  python generate_impulse.py --date 2026-02-17 --dry-run
"""

from __future__ import annotations
import argparse
import dataclasses
import json
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List, Optional
from zoneinfo import ZoneInfoNotFoundError

from .config import Config
from .dates import iso, today_local, utc_stamp
from .errors import ConfigError, FatalError, MissingCredentialError
from .http import make_session
from .log import error, log, ok
from .output import build_record, validate_record, write_outputs
from .passages import fetch_passages
from .references import resolve_reference
from .reflections import generate_reflections, openai_client
from .usccb import fetch_gospel_reading


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Generate the daily Gospel impulse")
    p.add_argument("--date", type=date.fromisoformat, help="YYYY-MM-DD override")
    p.add_argument("--tz", help="IANA timezone for 'today' (default: APP_TZ or Europe/Berlin)")
    p.add_argument("--out-dir", type=Path, help="output directory (default: impulses/)")
    p.add_argument("--lang", action="append", dest="languages", help="language code; repeatable")
    p.add_argument("--no-texts", action="store_true", help="skip the scripture text lookup")
    p.add_argument("--dry-run", action="store_true", help="print the record, write nothing")
    return p.parse_args(argv)


def config_from_args(args: argparse.Namespace, base: Config) -> Config:
    changes: Dict[str, Any] = {}
    if args.tz:
        changes["tz"] = args.tz
    if args.out_dir:
        changes["out_dir"] = args.out_dir
    if args.languages:
        changes["languages"] = tuple(args.languages)
    if args.no_texts:
        changes["fetch_texts"] = False
    return dataclasses.replace(base, **changes)


def run(config: Config, day: Optional[date] = None, *, session=None, client=None,
        now: Optional[datetime] = None) -> Dict[str, Any]:
    """Whole pipeline; returns the record. Fatal conditions raise FatalError."""
    if not config.magisterium_api_key:
        raise MissingCredentialError("MAGISTERIUM_API_KEY environment variable is not set")

    try:
        day = day or today_local(config.tz, now)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigError(f"invalid timezone {config.tz!r}: {e}") from e
    today = iso(day)
    log(f"Generating impulse for {today} (tz={config.tz})")

    session = session or make_session()
    gospel = fetch_gospel_reading(session, config, day)
    log(f"Gospel: {gospel.reference_display} ({gospel.reference})")

    ref = resolve_reference(gospel.reference)
    if ref is not None:
        log(f"Resolved: {ref.normalized} -> {ref.book.code} {ref.chapter}")
    texts = fetch_passages(session, config, ref)

    client = client or openai_client(config)
    impulses = generate_reflections(client, config, gospel.reference_display)

    record = build_record(today, gospel, utc_stamp(now), texts, impulses)
    problems = validate_record(record)
    if problems:
        raise FatalError("record failed schema validation: " + "; ".join(problems[:5]))
    return record


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    config = config_from_args(args, Config.from_env())
    try:
        record = run(config, args.date)
    except FatalError as e:
        error(str(e))
        return 1

    if args.dry_run:
        print(json.dumps(record, ensure_ascii=False, indent=2))
        return 0

    write_outputs(record, config.out_dir)
    done = sum(1 for v in record["impulses"].values() if v)
    ok(f"{done}/{len(config.languages)} languages generated successfully")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
