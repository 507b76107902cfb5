# lumen/reflections.py
"""
Reflection ("impulse") generation through the Magisterium AI chat API.

The API speaks the OpenAI chat-completions protocol, so the stock `openai`
client is pointed at it. Only the Gospel reference is ever sent.
"""

from __future__ import annotations
import json
import re
from functools import lru_cache
from typing import Any, Dict, List, Optional, Tuple

from jsonschema import Draft202012Validator

from .config import SCHEMA_DIR, Config
from .errors import ReflectionError
from .log import log, warn

LANG_LABEL = {"de": "Deutsch", "en": "Englisch", "pl": "Polnisch"}
LANG_DU = {
    "de": "Duze den Leser",
    "en": 'Use "you" (informal)',
    "pl": 'Zwracaj się per "ty"',
}
QUESTION_TITLE = {
    "de": "Eine Frage für heute",
    "en": "A question for today",
    "pl": "Pytanie na dziś",
}

SYSTEM_PROMPT = (
    "Du bist ein katholischer geistlicher Begleiter in der ignatianischen Tradition. "
    "Antworte ausschließlich mit validem JSON. Kein Markdown, keine Codeblöcke, "
    "kein umschließender Text – nur das reine JSON-Objekt."
)

# older model outputs used German keys for the "deeper" block
LEGACY_KEYS = {"titel": "title", "gedanken": "points", "uebung": "exercise"}

FENCE_RE = re.compile(r"```(?:json)?\s*\n?([\s\S]*?)\n?\s*```")


@lru_cache(maxsize=1)
def _validator() -> Draft202012Validator:
    schema = json.loads((SCHEMA_DIR / "reflection.schema.json").read_text(encoding="utf-8"))
    return Draft202012Validator(schema)


def build_prompt(gospel_ref: str, lang: str) -> Tuple[str, str]:
    label = LANG_LABEL.get(lang, "Englisch")
    du = LANG_DU.get(lang, LANG_DU["en"])
    question = QUESTION_TITLE.get(lang, QUESTION_TITLE["en"])
    shape = (
        '{"impuls":{"title":"...","text":"..."},'
        f'"mitnahme":{{"title":"{question}","text":"..."}},'
        '"deeper":{"title":"...","text":"...","points":["...","...","..."],"exercise":"..."}}'
    )
    user = "\n".join([
        f"Das heutige Tagesevangelium: {gospel_ref}",
        "",
        f"Erstelle einen universellen Morgenimpuls auf {label} als JSON:",
        shape,
        "",
        "Regeln:",
        f"- {du}",
        "- 2-3 Sätze pro Impuls-Text, lebensnah und warm",
        "- Die Frage (mitnahme) soll konkret und alltagstauglich sein",
        "- deeper: theologisch fundiert (Kirchenväter, Ignatius, KKK), 3 Gedanken, 1 praktische Übung",
        "- Kein Moralisieren, keine Angst-Rhetorik, ignatianisch-barmherzig",
        "- Beziehe dich auf das Tagesevangelium",
    ])
    return SYSTEM_PROMPT, user


def extract_json(content: str) -> str:
    """Strip code fences, then cut to the outermost {...}."""
    cleaned = (content or "").strip()
    m = FENCE_RE.search(cleaned)
    if m:
        cleaned = m.group(1).strip()
    s, e = cleaned.find("{"), cleaned.rfind("}")
    if s != -1 and e > s:
        cleaned = cleaned[s:e + 1]
    return cleaned


def migrate_legacy_keys(parsed: Dict[str, Any]) -> Dict[str, Any]:
    if "deeper" not in parsed and isinstance(parsed.get("tieferReingehen"), dict):
        parsed["deeper"] = parsed.pop("tieferReingehen")
    deeper = parsed.get("deeper")
    if isinstance(deeper, dict):
        for old, new in LEGACY_KEYS.items():
            if new not in deeper and old in deeper:
                deeper[new] = deeper.pop(old)
    return parsed


def _as_points(val: Any) -> List[str]:
    if isinstance(val, list):
        return [str(p) for p in val if p is not None] or [""]
    return [str(val or "")]


def parse_reflection(content: str, lang: str = "de") -> Dict[str, Any]:
    """Model output -> Reflection dict; raises ReflectionError when unusable."""
    try:
        parsed = json.loads(extract_json(content))
    except ValueError as e:
        raise ReflectionError(f"invalid JSON: {e}") from e
    if not isinstance(parsed, dict):
        raise ReflectionError("response is not a JSON object")

    parsed = migrate_legacy_keys(parsed)
    errors = sorted(_validator().iter_errors(parsed), key=lambda err: list(err.path))
    if errors:
        err = errors[0]
        loc = ".".join(map(str, err.path)) or "(root)"
        raise ReflectionError(f"{loc}: {err.message}")

    impuls, mitnahme, deeper = parsed["impuls"], parsed["mitnahme"], parsed["deeper"]
    return {
        "impuls": {"title": impuls["title"], "text": impuls["text"]},
        "mitnahme": {
            "title": mitnahme.get("title") or QUESTION_TITLE.get(lang, QUESTION_TITLE["de"]),
            "text": mitnahme["text"],
        },
        "deeper": {
            "title": deeper["title"],
            "text": deeper["text"],
            "points": _as_points(deeper.get("points")),
            "exercise": deeper.get("exercise") or "",
        },
    }


def openai_client(config: Config):
    from openai import OpenAI
    return OpenAI(
        api_key=config.magisterium_api_key,
        base_url=config.magisterium_api_url,
        timeout=config.timeout,
        max_retries=0,
    )


def generate_reflection(client, config: Config, gospel_ref: str, lang: str) -> Dict[str, Any]:
    from openai import OpenAIError

    system, user = build_prompt(gospel_ref, lang)
    log(f"  Calling Magisterium API for lang={lang}...")
    try:
        r = client.chat.completions.create(
            model=config.model,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
        )
    except OpenAIError as e:
        raise ReflectionError(f"Magisterium API: {e}") from e

    content = r.choices[0].message.content if r.choices else None
    if not content:
        raise ReflectionError("Empty response from Magisterium API")
    reflection = parse_reflection(content, lang)
    log(f"  {lang}: \"{reflection['impuls']['title']}\"")
    return reflection


def generate_reflections(client, config: Config, gospel_ref: str) -> Dict[str, Optional[Dict[str, Any]]]:
    """One call per language, sequential; a failure nulls only that language."""
    out: Dict[str, Optional[Dict[str, Any]]] = {}
    for lang in config.languages:
        try:
            out[lang] = generate_reflection(client, config, gospel_ref, lang)
        except ReflectionError as e:
            warn(f"Failed for {lang}: {e}")
            out[lang] = None
    return out
