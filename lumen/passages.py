# lumen/passages.py
"""
Scripture text per language.

Backends are plain functions registered by id. Each takes
(session, config, ref, lang) and returns a PassageText or None; transport
and shape errors are caught at the backend boundary so one language or one
backend failing never affects the others.

    bolls      free; whole chapter as a verse list, filtered locally
    api_bible  needs API_BIBLE_KEY; one passage request per verse range
"""

from __future__ import annotations
import re
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional

import requests
from bs4 import BeautifulSoup

from .config import Config
from .errors import PassageFetchError
from .log import log, warn
from .references import ResolvedReference


@dataclass(frozen=True)
class PassageText:
    text: str
    source: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


Backend = Callable[[requests.Session, Config, ResolvedReference, str], Optional[PassageText]]

BACKENDS: Dict[str, Backend] = {}


def register_backend(backend_id: str):
    """Decorator to register a text backend under `backend_id`."""
    def decorator(func: Backend) -> Backend:
        BACKENDS[backend_id] = func
        return func
    return decorator


# ---------- cleaning ----------
# Tags whose *content* is an annotation, not prose (Strong's numbers,
# verse numbers, footnotes).
_DROP_TAGS = ["s", "sup", "note", "sub"]
_BRACKET_MARK_RE = re.compile(r"\[\s*\d+\s*\]")
_LEADING_NUM_RE = re.compile(r"^\s*\d+\s+(?=\D)")
_WS = re.compile(r"\s+")


def clean_verse_text(raw: str) -> str:
    """
    Strip inline markup and numeric verse markers, collapse whitespace.
    '<S>3588</S>And he <i>sighed</i> [12] deeply' -> 'And he sighed deeply'
    """
    if not raw:
        return ""
    soup = BeautifulSoup(raw, "html.parser")
    for tag in soup.find_all(_DROP_TAGS):
        tag.decompose()
    text = soup.get_text(" ")
    text = _BRACKET_MARK_RE.sub(" ", text)
    text = _LEADING_NUM_RE.sub("", text)
    text = _WS.sub(" ", text).strip()
    # no space before punctuation left behind by unwrapped tags
    return re.sub(r"\s+([,.;:!?])", r"\1", text)


def select_verses(verses: Iterable[Dict[str, Any]], ref: ResolvedReference) -> List[str]:
    """
    Keep verses whose number falls in ANY requested range, in response
    order, cleaned. Rows without an integer verse number are skipped.
    """
    out: List[str] = []
    for row in verses:
        if not isinstance(row, dict):
            continue
        try:
            n = int(row.get("verse"))
        except (TypeError, ValueError):
            continue
        if not ref.includes(n):
            continue
        text = clean_verse_text(str(row.get("text") or ""))
        if text:
            out.append(text)
    return out


# ---------- backends ----------
def _get(session: requests.Session, url: str, config: Config, **kw) -> requests.Response:
    try:
        r = session.get(url, timeout=config.timeout, **kw)
    except requests.RequestException as e:
        raise PassageFetchError(f"GET {url} failed: {e}") from e
    if not r.ok:
        raise PassageFetchError(f"GET {url} -> HTTP {r.status_code}")
    return r


@register_backend("bolls")
def fetch_bolls(session: requests.Session, config: Config, ref: ResolvedReference,
                lang: str) -> Optional[PassageText]:
    version = config.bolls_versions.get(lang)
    if not version:
        return None
    url = f"{config.bolls_base}/get-text/{version}/{ref.book.number}/{ref.chapter}/"
    data = _get(session, url, config).json()
    if not isinstance(data, list):
        raise PassageFetchError(f"bolls {version}: expected a verse list, got {type(data).__name__}")
    parts = select_verses(data, ref)
    if not parts:
        return None
    return PassageText(text=" ".join(parts), source=f"bolls.life {version}")


@register_backend("api_bible")
def fetch_api_bible(session: requests.Session, config: Config, ref: ResolvedReference,
                    lang: str) -> Optional[PassageText]:
    bible_id = config.api_bible_ids.get(lang)
    if not config.api_bible_key or not bible_id:
        return None
    params = {
        "content-type": "text",
        "include-notes": "false",
        "include-titles": "false",
        "include-chapter-numbers": "false",
        "include-verse-numbers": "false",
        "include-verse-spans": "false",
    }
    headers = {"api-key": config.api_bible_key}
    parts: List[str] = []
    for passage_id in ref.passage_ids():
        url = f"{config.api_bible_base}/bibles/{bible_id}/passages/{passage_id}"
        payload = _get(session, url, config, params=params, headers=headers).json()
        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, dict):
            raise PassageFetchError(f"api.bible {passage_id}: unexpected data {type(data).__name__}")
        content = data.get("content")
        if not isinstance(content, str):
            raise PassageFetchError(f"api.bible {passage_id}: no data.content")
        text = clean_verse_text(content)
        if text:
            parts.append(text)
    if not parts:
        return None
    return PassageText(text=" ".join(parts), source=f"API.Bible {bible_id}")


# ---------- per-language orchestration ----------
def fetch_passage(session: requests.Session, config: Config, ref: ResolvedReference,
                  lang: str) -> Optional[PassageText]:
    """First backend (in configured order) that yields text wins."""
    for backend_id in config.text_backends:
        backend = BACKENDS.get(backend_id)
        if backend is None:
            warn(f"unknown text backend {backend_id!r}; skipping")
            continue
        try:
            result = backend(session, config, ref, lang)
        except PassageFetchError as e:
            warn(f"{backend_id} failed for {lang}: {e}")
            continue
        except ValueError as e:  # undecodable JSON
            warn(f"{backend_id} returned bad JSON for {lang}: {e}")
            continue
        except (KeyError, TypeError, AttributeError) as e:
            warn(f"{backend_id} returned an unexpected shape for {lang}: {e!r}")
            continue
        if result and result.text:
            log(f"  text {lang}: {result.source} ({len(result.text)} chars)")
            return result
    return None


def fetch_passages(session: requests.Session, config: Config,
                   ref: Optional[ResolvedReference]) -> Optional[Dict[str, Optional[PassageText]]]:
    """
    {lang: PassageText|None} when at least one language has text,
    otherwise None ("no text").
    """
    if ref is None or not config.fetch_texts:
        return None
    if not config.api_bible_key and "api_bible" in config.text_backends:
        log("API_BIBLE_KEY not set; api_bible backend disabled")

    texts: Dict[str, Optional[PassageText]] = {}
    for lang in config.languages:
        texts[lang] = fetch_passage(session, config, ref, lang)
        if texts[lang] is None:
            warn(f"no passage text for {lang}")
    if not any(texts.values()):
        warn("no passage text in any language")
        return None
    return texts
