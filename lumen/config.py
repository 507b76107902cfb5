# lumen/config.py
"""
Run configuration.

Built once from the process environment (plus CLI overrides) and passed
explicitly to every component. Instances are frozen.
"""

from __future__ import annotations
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Optional, Tuple

# ---------- Paths ----------
BASE_DIR = Path(__file__).resolve().parents[1]
SCHEMA_DIR = Path(__file__).resolve().parent / "schemas"
IMPULSES_DIR = BASE_DIR / "impulses"

# ---------- external endpoints ----------
USCCB_BASE = "https://bible.usccb.org/bible/readings"
MAGISTERIUM_API_URL = "https://www.magisterium.com/api/v1"
BOLLS_BASE = "https://bolls.life"
API_BIBLE_BASE = "https://api.scripture.api.bible/v1"

LANGUAGES = ("de", "en", "pl")
DEFAULT_TZ = "Europe/Berlin"
API_TIMEOUT = 30  # seconds; CI has no rush

# bolls.life translation codes per language
BOLLS_VERSIONS = "de=ELB,en=DRB,pl=UBG"
# API.Bible bible ids per language (only used with API_BIBLE_KEY)
API_BIBLE_IDS = "en=de4e12af7f28f599-02"
# backend order; first non-empty text wins
TEXT_BACKENDS = "api_bible,bolls"


def parse_table(raw: Optional[str]) -> Dict[str, str]:
    """
    "de=ELB, en=DRB" -> {"de": "ELB", "en": "DRB"}
    Blank keys or values are dropped.
    """
    out: Dict[str, str] = {}
    for part in (raw or "").split(","):
        if "=" not in part:
            continue
        k, v = part.split("=", 1)
        k, v = k.strip().lower(), v.strip()
        if k and v:
            out[k] = v
    return out


def parse_list(raw: Optional[str]) -> Tuple[str, ...]:
    return tuple(p.strip() for p in (raw or "").split(",") if p.strip())


@dataclass(frozen=True)
class Config:
    tz: str = DEFAULT_TZ
    languages: Tuple[str, ...] = LANGUAGES
    timeout: float = API_TIMEOUT
    out_dir: Path = IMPULSES_DIR

    usccb_base: str = USCCB_BASE

    magisterium_api_key: str = ""
    magisterium_api_url: str = MAGISTERIUM_API_URL
    model: str = "magisterium-1"

    api_bible_key: str = ""
    api_bible_base: str = API_BIBLE_BASE
    api_bible_ids: Mapping[str, str] = field(default_factory=lambda: parse_table(API_BIBLE_IDS))

    bolls_base: str = BOLLS_BASE
    bolls_versions: Mapping[str, str] = field(default_factory=lambda: parse_table(BOLLS_VERSIONS))

    text_backends: Tuple[str, ...] = parse_list(TEXT_BACKENDS)
    fetch_texts: bool = True

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Config":
        env = os.environ if environ is None else environ

        def get(key: str, default: str = "") -> str:
            return (env.get(key) or default).strip()

        try:
            timeout = float(get("API_TIMEOUT", str(API_TIMEOUT)))
        except ValueError:
            timeout = float(API_TIMEOUT)

        return cls(
            tz=get("APP_TZ", DEFAULT_TZ),
            languages=parse_list(get("LANGUAGES")) or LANGUAGES,
            timeout=timeout,
            out_dir=Path(get("IMPULSES_DIR")) if get("IMPULSES_DIR") else IMPULSES_DIR,
            usccb_base=get("USCCB_BASE", USCCB_BASE).rstrip("/"),
            magisterium_api_key=get("MAGISTERIUM_API_KEY"),
            magisterium_api_url=get("MAGISTERIUM_API_URL", MAGISTERIUM_API_URL).rstrip("/"),
            model=get("GEN_MODEL", "magisterium-1"),
            api_bible_key=get("API_BIBLE_KEY"),
            api_bible_base=get("API_BIBLE_BASE", API_BIBLE_BASE).rstrip("/"),
            api_bible_ids=parse_table(get("API_BIBLE_IDS", API_BIBLE_IDS)),
            bolls_base=get("BOLLS_BASE", BOLLS_BASE).rstrip("/"),
            bolls_versions=parse_table(get("BOLLS_VERSIONS", BOLLS_VERSIONS)),
            text_backends=parse_list(get("TEXT_BACKENDS", TEXT_BACKENDS)),
            fetch_texts=get("FETCH_TEXTS", "1") != "0",
        )
