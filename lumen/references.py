# lumen/references.py
"""
Citation parser.

Grammar (whitespace between tokens is free):

    citation := book chapter ":" verses
    book     := [ordinal] word ("of" | word)*
    ordinal  := "1" | "2" | "3"          (roman / spelled ordinals are words
                                          and are resolved by the book lookup)
    chapter  := NUMBER
    verses   := segment (("," | ";") segment)*
    segment  := NUMBER [letter] [dash NUMBER [letter]]
    dash     := "-" | en dash | em dash

Examples: "Mark 8:11-13", "1 Jn 3:1-2", "Matthew 6:1-6, 16-18",
"Song of Songs 2:8-14", "Is 25:6-10a".

Part-verse letters ("10a") are accepted and dropped. Ranges keep input order.
Malformed input raises CitationParseError; an unknown book raises
UnknownBookError. resolve_reference() turns both into None.
"""

from __future__ import annotations
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .books import Book, lookup_book
from .errors import CitationParseError, UnknownBookError
from .log import warn

_TOKEN_RE = re.compile(
    r"""
    (?P<ws>\s+)
  | (?P<num>\d+)(?P<letter>[a-z](?![A-Za-z]))?
  | (?P<word>[^\W\d_]+\.?)
  | (?P<colon>:)
  | (?P<sep>[,;])
  | (?P<dash>[-–—])
    """,
    re.VERBOSE,
)


@dataclass(frozen=True)
class VerseRange:
    start: int
    end: int

    def __post_init__(self):
        if self.start < 1 or self.end < self.start:
            raise ValueError(f"invalid verse range {self.start}-{self.end}")

    def __contains__(self, verse: int) -> bool:
        return self.start <= verse <= self.end


@dataclass(frozen=True)
class ResolvedReference:
    book: Book
    chapter: int
    ranges: Tuple[VerseRange, ...]
    original: str = ""

    def __post_init__(self):
        if not self.ranges:
            raise ValueError("a reference needs at least one verse range")

    @property
    def verse_start(self) -> int:
        return self.ranges[0].start

    @property
    def verse_end(self) -> int:
        return self.ranges[-1].end

    def includes(self, verse: int) -> bool:
        return any(verse in r for r in self.ranges)

    @property
    def normalized(self) -> str:
        parts = []
        for r in self.ranges:
            parts.append(str(r.start) if r.start == r.end else f"{r.start}-{r.end}")
        return f"{self.book.full_name} {self.chapter}:{', '.join(parts)}"

    def passage_ids(self) -> List[str]:
        """API.Bible passage ids, one per range: 'MRK.8.11-MRK.8.13'."""
        code, c = self.book.code, self.chapter
        return [f"{code}.{c}.{r.start}-{code}.{c}.{r.end}" for r in self.ranges]


def tokenize(citation: str) -> List[Tuple[str, str]]:
    tokens: List[Tuple[str, str]] = []
    pos = 0
    while pos < len(citation):
        m = _TOKEN_RE.match(citation, pos)
        if not m:
            raise CitationParseError(f"unexpected character {citation[pos]!r} in {citation!r}")
        pos = m.end()
        kind = m.lastgroup
        if kind == "letter":
            kind = "num"
        if kind == "ws":
            continue
        tokens.append((kind, m.group("num") if kind == "num" else m.group(kind)))
    return tokens


class _Parser:
    def __init__(self, citation: str):
        self.citation = citation
        self.tokens = tokenize(citation)
        self.i = 0

    def peek(self, offset: int = 0) -> Tuple[str, str]:
        j = self.i + offset
        return self.tokens[j] if j < len(self.tokens) else ("end", "")

    def take(self, kind: str) -> str:
        k, v = self.peek()
        if k != kind:
            raise CitationParseError(f"expected {kind}, found {v or 'end'!r} in {self.citation!r}")
        self.i += 1
        return v

    def number(self) -> int:
        return int(self.take("num"))

    def book(self) -> Book:
        words: List[str] = []
        if self.peek()[0] == "num" and self.peek(1)[0] == "word":
            ordinal = self.take("num")
            if ordinal not in ("1", "2", "3"):
                raise CitationParseError(f"bad book ordinal {ordinal!r} in {self.citation!r}")
            words.append(ordinal)
        words.append(self.take("word"))
        while self.peek()[0] == "word":
            words.append(self.take("word"))
        return lookup_book(" ".join(words))

    def verses(self) -> Tuple[VerseRange, ...]:
        ranges = [self.segment()]
        while self.peek()[0] == "sep":
            self.i += 1
            ranges.append(self.segment())
        return tuple(ranges)

    def segment(self) -> VerseRange:
        start = self.number()
        end = start
        if self.peek()[0] == "dash":
            self.i += 1
            end = self.number()
            if self.peek()[0] == "colon":
                raise CitationParseError(f"cross-chapter range not supported in {self.citation!r}")
        if end < start:
            raise CitationParseError(f"descending range {start}-{end} in {self.citation!r}")
        return VerseRange(start, end)

    def parse(self) -> ResolvedReference:
        book = self.book()
        chapter = self.number()
        self.take("colon")
        ranges = self.verses()
        if self.peek()[0] != "end":
            raise CitationParseError(f"trailing input {self.peek()[1]!r} in {self.citation!r}")
        if chapter < 1:
            raise CitationParseError(f"bad chapter {chapter} in {self.citation!r}")
        return ResolvedReference(book=book, chapter=chapter, ranges=ranges, original=self.citation)


def parse_citation(citation: str) -> ResolvedReference:
    """Strict parse; raises CitationParseError / UnknownBookError."""
    text = re.sub(r"\s+", " ", citation or "").strip()
    if not text:
        raise CitationParseError("empty citation")
    try:
        return _Parser(text).parse()
    except ValueError as e:
        if isinstance(e, CitationParseError):
            raise
        raise CitationParseError(str(e)) from e


def resolve_reference(citation: str) -> Optional[ResolvedReference]:
    """Non-fatal wrapper: logs and returns None when the citation can't be resolved."""
    try:
        return parse_citation(citation)
    except UnknownBookError as e:
        warn(f"reference not resolved ({e}); skipping text fetch")
    except CitationParseError as e:
        warn(f"could not parse reference {citation!r}: {e}; skipping text fetch")
    return None
