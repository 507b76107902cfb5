# lumen/output.py
from __future__ import annotations
import json
import os
import tempfile
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

from jsonschema import Draft202012Validator

from .config import SCHEMA_DIR
from .errors import NoReflectionsError
from .log import ok
from .passages import PassageText
from .usccb import GospelReading

LATEST_NAME = "latest.json"


@lru_cache(maxsize=1)
def _validator() -> Draft202012Validator:
    schema = json.loads((SCHEMA_DIR / "impulse.schema.json").read_text(encoding="utf-8"))
    return Draft202012Validator(schema)


def build_record(day: str, gospel: GospelReading, generated_at: str,
                 texts: Optional[Mapping[str, Optional[PassageText]]],
                 impulses: Mapping[str, Optional[Dict[str, Any]]]) -> Dict[str, Any]:
    """
    Merge everything into the persisted record. Requires at least one
    reflection; `texts` None means no text in any language.
    """
    if not any(impulses.values()):
        raise NoReflectionsError("All API calls failed. No impulse generated.")
    return {
        "date": day,
        "title": gospel.title,
        "gospelRef": gospel.reference_display,
        "gospelRefOriginal": gospel.reference,
        "generatedAt": generated_at,
        "texts": None if texts is None else {
            lang: (p.to_dict() if p else None) for lang, p in texts.items()
        },
        "impulses": dict(impulses),
    }


def validate_record(record: Any) -> List[str]:
    errors = []
    for err in _validator().iter_errors(record):
        loc = "/".join(map(str, err.path)) or "(root)"
        errors.append(f"{loc}: {err.message}")
    return errors


def atomic_write_json(path: Path, obj) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(prefix=path.name, dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(obj, f, ensure_ascii=False, indent=2)
            f.write("\n")
        os.replace(tmp, path)
    finally:
        if os.path.exists(tmp):
            os.remove(tmp)


def write_outputs(record: Dict[str, Any], out_dir: Path) -> Tuple[Path, Path]:
    """Write <date>.json and latest.json; returns both paths."""
    date_path = Path(out_dir) / f"{record['date']}.json"
    latest_path = Path(out_dir) / LATEST_NAME
    atomic_write_json(date_path, record)
    ok(f"Written: {date_path}")
    atomic_write_json(latest_path, record)
    ok(f"Written: {latest_path}")
    return date_path, latest_path
