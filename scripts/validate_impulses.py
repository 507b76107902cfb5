#!/usr/bin/env python3
"""
Validate impulses/*.json against lumen/schemas/impulse.schema.json.

Older files predate the scripture texts and used German keys for the
"deeper" block; they are coerced before validation, not rewritten.

  python scripts/validate_impulses.py [impulses_dir]
"""
import json, sys
from pathlib import Path

from lumen.config import IMPULSES_DIR
from lumen.output import validate_record
from lumen.reflections import migrate_legacy_keys


def coerce(item: dict) -> dict:
    """Apply the back-compat normalizations the schema expects."""
    if not isinstance(item, dict):
        return {}
    item.setdefault("texts", None)
    impulses = item.get("impulses")
    if isinstance(impulses, dict):
        for refl in impulses.values():
            if not isinstance(refl, dict):
                continue
            deeper = migrate_legacy_keys(refl).get("deeper")
            if isinstance(deeper, dict):
                deeper.setdefault("exercise", "")
    return item


def validate_file(path: Path) -> int:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        print(f"[invalid] {path}: JSON decode error at line {e.lineno} col {e.colno}: {e.msg}")
        return 1
    errors = validate_record(coerce(data))
    for msg in errors:
        print(f"[invalid] {path} {msg}")
    if not errors:
        print(f"[ok] {path} valid")
    return 1 if errors else 0


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    root = Path(argv[0]) if argv else IMPULSES_DIR
    files = sorted(root.glob("*.json"))
    if not files:
        print(f"[skip] no impulse files in {root}")
        return 0
    rc = 0
    for path in files:
        rc |= validate_file(path)
    return rc


if __name__ == "__main__":
    raise SystemExit(main())
