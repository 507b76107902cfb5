# lumen/books.py
"""
Closed vocabulary of scripture books.

Each member carries its USFM-style code (as used by API.Bible passage ids),
its bolls.life book number and its canonical English name. Name lookup is
case-insensitive, ignores periods and accepts the usual abbreviations and
ordinal spellings ("1 Jn", "I John", "First John", "1John").
"""

from __future__ import annotations
import re
from enum import Enum
from typing import Dict, List, Optional

from .errors import UnknownBookError


class Book(Enum):
    # Pentateuch
    GEN = ("GEN", 1, "Genesis")
    EXO = ("EXO", 2, "Exodus")
    LEV = ("LEV", 3, "Leviticus")
    NUM = ("NUM", 4, "Numbers")
    DEU = ("DEU", 5, "Deuteronomy")
    # Historical
    JOS = ("JOS", 6, "Joshua")
    JDG = ("JDG", 7, "Judges")
    RUT = ("RUT", 8, "Ruth")
    SA1 = ("1SA", 9, "1 Samuel")
    SA2 = ("2SA", 10, "2 Samuel")
    KI1 = ("1KI", 11, "1 Kings")
    KI2 = ("2KI", 12, "2 Kings")
    CH1 = ("1CH", 13, "1 Chronicles")
    CH2 = ("2CH", 14, "2 Chronicles")
    EZR = ("EZR", 15, "Ezra")
    NEH = ("NEH", 16, "Nehemiah")
    EST = ("EST", 17, "Esther")
    # Wisdom
    JOB = ("JOB", 18, "Job")
    PSA = ("PSA", 19, "Psalms")
    PRO = ("PRO", 20, "Proverbs")
    ECC = ("ECC", 21, "Ecclesiastes")
    SNG = ("SNG", 22, "Song of Songs")
    # Prophets
    ISA = ("ISA", 23, "Isaiah")
    JER = ("JER", 24, "Jeremiah")
    LAM = ("LAM", 25, "Lamentations")
    EZK = ("EZK", 26, "Ezekiel")
    DAN = ("DAN", 27, "Daniel")
    HOS = ("HOS", 28, "Hosea")
    JOL = ("JOL", 29, "Joel")
    AMO = ("AMO", 30, "Amos")
    OBA = ("OBA", 31, "Obadiah")
    JON = ("JON", 32, "Jonah")
    MIC = ("MIC", 33, "Micah")
    NAM = ("NAM", 34, "Nahum")
    HAB = ("HAB", 35, "Habakkuk")
    ZEP = ("ZEP", 36, "Zephaniah")
    HAG = ("HAG", 37, "Haggai")
    ZEC = ("ZEC", 38, "Zechariah")
    MAL = ("MAL", 39, "Malachi")
    # Gospels & Acts
    MAT = ("MAT", 40, "Matthew")
    MRK = ("MRK", 41, "Mark")
    LUK = ("LUK", 42, "Luke")
    JHN = ("JHN", 43, "John")
    ACT = ("ACT", 44, "Acts")
    # Letters
    ROM = ("ROM", 45, "Romans")
    CO1 = ("1CO", 46, "1 Corinthians")
    CO2 = ("2CO", 47, "2 Corinthians")
    GAL = ("GAL", 48, "Galatians")
    EPH = ("EPH", 49, "Ephesians")
    PHP = ("PHP", 50, "Philippians")
    COL = ("COL", 51, "Colossians")
    TH1 = ("1TH", 52, "1 Thessalonians")
    TH2 = ("2TH", 53, "2 Thessalonians")
    TI1 = ("1TI", 54, "1 Timothy")
    TI2 = ("2TI", 55, "2 Timothy")
    TIT = ("TIT", 56, "Titus")
    PHM = ("PHM", 57, "Philemon")
    HEB = ("HEB", 58, "Hebrews")
    JAS = ("JAS", 59, "James")
    PE1 = ("1PE", 60, "1 Peter")
    PE2 = ("2PE", 61, "2 Peter")
    JN1 = ("1JN", 62, "1 John")
    JN2 = ("2JN", 63, "2 John")
    JN3 = ("3JN", 64, "3 John")
    JUD = ("JUD", 65, "Jude")
    REV = ("REV", 66, "Revelation")
    # Deuterocanon
    TOB = ("TOB", 67, "Tobit")
    JDT = ("JDT", 68, "Judith")
    WIS = ("WIS", 69, "Wisdom")
    SIR = ("SIR", 70, "Sirach")
    BAR = ("BAR", 71, "Baruch")
    MA1 = ("1MA", 72, "1 Maccabees")
    MA2 = ("2MA", 73, "2 Maccabees")

    def __init__(self, code: str, number: int, full_name: str):
        self.code = code
        self.number = number
        self.full_name = full_name

    @property
    def deuterocanonical(self) -> bool:
        return self.number > 66

    @classmethod
    def from_code(cls, code: str) -> "Book":
        for b in cls:
            if b.code == code.upper():
                return b
        raise UnknownBookError(f"unknown book code: {code!r}")


# Abbreviations and variant spellings, beyond the full English name and the
# USFM code which are always accepted. Numbered books list the name without
# the ordinal; "1 "/"2 "/"3 " is prefixed from the member.
_ALIASES: Dict[Book, List[str]] = {
    Book.GEN: ["gen", "gn", "ge"],
    Book.EXO: ["ex", "exod", "exo"],
    Book.LEV: ["lev", "lv", "le"],
    Book.NUM: ["num", "nm", "nu", "nb"],
    Book.DEU: ["deut", "dt", "deu"],
    Book.JOS: ["josh", "jos", "jo", "josue"],
    Book.JDG: ["judg", "jdg", "jgs", "jg"],
    Book.RUT: ["ru", "rth", "rut"],
    Book.SA1: ["samuel", "sam", "sm", "sa", "kingdoms"],
    Book.SA2: ["samuel", "sam", "sm", "sa"],
    Book.KI1: ["kings", "kgs", "ki", "kin"],
    Book.KI2: ["kings", "kgs", "ki", "kin"],
    Book.CH1: ["chronicles", "chr", "chron", "ch", "paralipomenon"],
    Book.CH2: ["chronicles", "chr", "chron", "ch", "paralipomenon"],
    Book.EZR: ["ezr", "esdras"],
    Book.NEH: ["neh", "ne"],
    Book.EST: ["esth", "est", "es"],
    Book.JOB: ["jb"],
    Book.PSA: ["psalm", "ps", "pss", "psa", "psalter"],
    Book.PRO: ["prov", "prv", "pr", "pro"],
    Book.ECC: ["eccl", "eccles", "ecc", "qoh", "qoheleth", "ecclesiastes"],
    Book.SNG: ["song", "song of solomon", "canticle of canticles", "canticles", "canticle", "sg", "sos", "cant"],
    Book.ISA: ["isa", "is", "isaias"],
    Book.JER: ["jer", "je", "jeremias"],
    Book.LAM: ["lam", "la"],
    Book.EZK: ["ezek", "ez", "eze", "ezk", "ezechiel"],
    Book.DAN: ["dan", "dn", "da"],
    Book.HOS: ["hos", "ho", "osee"],
    Book.JOL: ["jl", "joe"],
    Book.AMO: ["am", "amo"],
    Book.OBA: ["obad", "ob", "oba", "abdias"],
    Book.JON: ["jon", "jonas"],
    Book.MIC: ["mic", "mi", "micheas"],
    Book.NAM: ["nah", "na", "nam"],
    Book.HAB: ["hab", "hb", "habacuc"],
    Book.ZEP: ["zeph", "zep", "zp", "sophonias"],
    Book.HAG: ["hag", "hg", "aggeus"],
    Book.ZEC: ["zech", "zec", "zc", "zacharias"],
    Book.MAL: ["mal", "ml", "malachias"],
    Book.MAT: ["matt", "mt", "mat"],
    Book.MRK: ["mk", "mrk", "mar", "mr"],
    Book.LUK: ["lk", "luk", "lu"],
    Book.JHN: ["jn", "joh", "jhn"],
    Book.ACT: ["acts of the apostles", "act", "ac"],
    Book.ROM: ["rom", "rm", "ro"],
    Book.CO1: ["corinthians", "cor", "co"],
    Book.CO2: ["corinthians", "cor", "co"],
    Book.GAL: ["gal", "ga"],
    Book.EPH: ["eph", "ephes"],
    Book.PHP: ["phil", "php", "phl"],
    Book.COL: ["col"],
    Book.TH1: ["thessalonians", "thess", "thes", "th"],
    Book.TH2: ["thessalonians", "thess", "thes", "th"],
    Book.TI1: ["timothy", "tim", "tm", "ti"],
    Book.TI2: ["timothy", "tim", "tm", "ti"],
    Book.TIT: ["ti", "tit"],
    Book.PHM: ["phlm", "philem", "phm", "pm"],
    Book.HEB: ["heb"],
    Book.JAS: ["jas", "jm", "jam"],
    Book.PE1: ["peter", "pet", "pt", "pe"],
    Book.PE2: ["peter", "pet", "pt", "pe"],
    Book.JN1: ["john", "jn", "jo", "joh"],
    Book.JN2: ["john", "jn", "jo", "joh"],
    Book.JN3: ["john", "jn", "jo", "joh"],
    Book.JUD: ["jude", "jud", "jd"],
    Book.REV: ["rev", "rv", "apoc", "apocalypse", "re"],
    Book.TOB: ["tob", "tb", "tobias"],
    Book.JDT: ["jdt", "jth"],
    Book.WIS: ["wis", "ws", "wisdom of solomon"],
    Book.SIR: ["sir", "ecclus", "ecclesiasticus"],
    Book.BAR: ["bar", "ba"],
    Book.MA1: ["maccabees", "macc", "mac", "mc", "machabees"],
    Book.MA2: ["maccabees", "macc", "mac", "mc", "machabees"],
}

_ORDINALS = {
    "i": "1", "ii": "2", "iii": "3",
    "first": "1", "second": "2", "third": "3",
    "1st": "1", "2nd": "2", "3rd": "3",
}


def _key(name: str) -> str:
    k = name.replace(".", " ").lower()
    k = re.sub(r"\s+", " ", k).strip()
    head, _, rest = k.partition(" ")
    if rest and head in _ORDINALS:
        k = f"{_ORDINALS[head]} {rest}"
    # "1john" -> "1 john"
    return re.sub(r"^([1-3])\s*(?=[a-z])", r"\1 ", k)


def _build_index() -> Dict[str, Book]:
    idx: Dict[str, Book] = {}
    for book in Book:
        idx[_key(book.full_name)] = book
        idx[_key(book.code)] = book
        prefix = book.full_name[:2] if book.full_name[0].isdigit() else ""
        for alias in _ALIASES.get(book, []):
            k = _key(prefix + alias)
            # first writer wins, so "jo" stays Joshua and "1 jo" stays 1 John
            idx.setdefault(k, book)
    return idx


BOOK_INDEX: Dict[str, Book] = _build_index()


def find_book(name: str) -> Optional[Book]:
    return BOOK_INDEX.get(_key(name or ""))


def lookup_book(name: str) -> Book:
    """Lookup-or-fail: unknown names raise UnknownBookError."""
    book = find_book(name)
    if book is None:
        raise UnknownBookError(f"unknown book: {name!r}")
    return book
