# lumen/usccb.py
"""
Gospel citation from the USCCB daily readings page.

The Markdown variant (<slug>.cfm.md) is the primary source:

    ## Tuesday of the Sixth Week in Ordinary Time
    ...
    ### Gospel
    [Mark 8:11-13](https://bible.usccb.org/bible/mark/8?11)

An HTML page (<slug>.cfm) is handled as a fallback by looking for the
"Gospel" heading in the DOM.
"""

from __future__ import annotations
import re
from dataclasses import dataclass
from datetime import date
from typing import Tuple

import requests
from bs4 import BeautifulSoup, Tag

from .config import Config
from .dates import usccb_url
from .display import to_display_reference
from .errors import CitationNotFoundError, SourceFetchError
from .log import log

DEFAULT_TITLE = "Daily Gospel"
TARGET_SECTION = "Gospel"

BOILERPLATE_RE = re.compile(r"^Get the Daily Readings", re.I)
LINK_RE = re.compile(r"\[([^\]]+)\]\(")
H3_RE = re.compile(r"^###\s+")
# elements that carry a reading's section name in the HTML page
SECTION_TAGS = ["h2", "h3", "h4", "div", "strong"]


@dataclass(frozen=True)
class GospelReading:
    reference: str
    reference_display: str
    title: str


def _looks_like_html(doc: str) -> bool:
    head = doc.lstrip()[:512].lower()
    return head.startswith("<!doctype html") or head.startswith("<html") or "<body" in head


def parse_usccb_markdown(markdown: str, section: str = TARGET_SECTION) -> Tuple[str, str]:
    """Return (title, reference); either may be ''."""
    lines = markdown.splitlines()
    title = ""
    for line in lines:
        if not line.startswith("## "):
            continue
        candidate = line[3:].strip()
        if not candidate or BOILERPLATE_RE.match(candidate):
            continue
        title = candidate
        break

    section_re = re.compile(rf"^###\s+{re.escape(section)}\s*:?\s*$", re.I)
    reference = ""
    in_section = False
    for raw in lines:
        line = raw.strip()
        if section_re.match(line):
            in_section = True
            continue
        if in_section and H3_RE.match(line):
            break
        if not in_section:
            continue
        m = LINK_RE.search(line)
        if m:
            reference = m.group(1).strip()
            break
    return title, reference


def parse_usccb_html(html: str, section: str = TARGET_SECTION) -> Tuple[str, str]:
    soup = BeautifulSoup(html, "html.parser")

    title = ""
    for h2 in soup.find_all("h2"):
        t = h2.get_text(" ", strip=True)
        if t and not BOILERPLATE_RE.match(t):
            title = t
            break

    reference = ""
    section_re = re.compile(rf"^\s*{re.escape(section)}\s*:?\s*$", re.I)
    header = None
    for tag in soup.find_all(SECTION_TAGS):
        header = tag.find(string=section_re, recursive=False)
        if header is not None:
            break
    if header is not None:
        container = header.parent
        # <h3>Gospel <a>Mk 8:11-13</a></h3>
        link = container.find("a") if isinstance(container, Tag) else None
        if link and link.get_text(strip=True):
            reference = link.get_text(" ", strip=True)
        else:
            # <div class="name">Gospel</div><div class="address"><a>Mk 8:11-13</a></div>
            sibling = container.next_sibling
            for _ in range(5):
                if sibling is None:
                    break
                if isinstance(sibling, Tag):
                    a = sibling.find("a") if sibling.name != "a" else sibling
                    text = (a or sibling).get_text(" ", strip=True)
                    if any(ch.isdigit() for ch in text):
                        reference = text
                        break
                sibling = sibling.next_sibling
    return title, re.sub(r"\s+", " ", reference).strip()


def extract_gospel(document: str) -> Tuple[str, str]:
    """
    (title, reference) from a readings document, Markdown or HTML.
    Title falls back to DEFAULT_TITLE; a missing reference raises.
    """
    if _looks_like_html(document):
        title, reference = parse_usccb_html(document)
    else:
        title, reference = parse_usccb_markdown(document)
    if not reference:
        raise CitationNotFoundError("Could not find Gospel reference in USCCB response")
    return title or DEFAULT_TITLE, reference


def fetch_gospel_reading(session: requests.Session, config: Config, day: date,
                         display_lang: str = "de") -> GospelReading:
    url = usccb_url(config.usccb_base, day)
    log(f"Fetching USCCB: {url}")
    try:
        r = session.get(url, timeout=config.timeout)
    except requests.RequestException as e:
        raise SourceFetchError(f"USCCB fetch failed: {e}") from e
    if not r.ok:
        raise SourceFetchError(f"USCCB fetch failed: {r.status_code}")

    title, reference = extract_gospel(r.text)
    return GospelReading(
        reference=reference,
        reference_display=to_display_reference(reference, display_lang),
        title=title,
    )

