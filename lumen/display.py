# lumen/display.py
"""
Display form of a citation for one target language.

"Mark 8:11-13" -> "Markus 8,11-13" (de), "Mk 8,11-13" (pl).
Input that does not look like "<book> <digits...>" comes back unchanged.
"""

from __future__ import annotations
import re
from typing import Dict

from .books import Book, find_book

DISPLAY_RE = re.compile(r"^([1-3]?\s?[A-Za-z.]+)\s+([0-9].*)$")

GERMAN_NAMES: Dict[Book, str] = {
    Book.GEN: "Genesis", Book.EXO: "Exodus", Book.LEV: "Levitikus",
    Book.NUM: "Numeri", Book.DEU: "Deuteronomium", Book.JOS: "Josua",
    Book.JDG: "Richter", Book.RUT: "Rut", Book.SA1: "1 Samuel",
    Book.SA2: "2 Samuel", Book.KI1: "1 Koenige", Book.KI2: "2 Koenige",
    Book.CH1: "1 Chronik", Book.CH2: "2 Chronik", Book.EZR: "Esra",
    Book.NEH: "Nehemia", Book.EST: "Ester", Book.JOB: "Ijob",
    Book.PSA: "Psalm", Book.PRO: "Sprichwoerter", Book.ECC: "Kohelet",
    Book.SNG: "Hohelied", Book.ISA: "Jesaja", Book.JER: "Jeremia",
    Book.LAM: "Klagelieder", Book.EZK: "Ezechiel", Book.DAN: "Daniel",
    Book.HOS: "Hosea", Book.JOL: "Joel", Book.AMO: "Amos",
    Book.OBA: "Obadja", Book.JON: "Jona", Book.MIC: "Micha",
    Book.NAM: "Nahum", Book.HAB: "Habakuk", Book.ZEP: "Zefanja",
    Book.HAG: "Haggai", Book.ZEC: "Sacharja", Book.MAL: "Maleachi",
    Book.MAT: "Matthaeus", Book.MRK: "Markus", Book.LUK: "Lukas",
    Book.JHN: "Johannes", Book.ACT: "Apostelgeschichte", Book.ROM: "Roemer",
    Book.CO1: "1 Korinther", Book.CO2: "2 Korinther", Book.GAL: "Galater",
    Book.EPH: "Epheser", Book.PHP: "Philipper", Book.COL: "Kolosser",
    Book.TH1: "1 Thessalonicher", Book.TH2: "2 Thessalonicher",
    Book.TI1: "1 Timotheus", Book.TI2: "2 Timotheus", Book.TIT: "Titus",
    Book.PHM: "Philemon", Book.HEB: "Hebraeer", Book.JAS: "Jakobus",
    Book.PE1: "1 Petrus", Book.PE2: "2 Petrus", Book.JN1: "1 Johannes",
    Book.JN2: "2 Johannes", Book.JN3: "3 Johannes", Book.JUD: "Judas",
    Book.REV: "Offenbarung", Book.TOB: "Tobit", Book.JDT: "Judit",
    Book.WIS: "Weisheit", Book.SIR: "Jesus Sirach", Book.BAR: "Baruch",
    Book.MA1: "1 Makkabaeer", Book.MA2: "2 Makkabaeer",
}

# Biblia Tysiaclecia sigla
POLISH_NAMES: Dict[Book, str] = {
    Book.GEN: "Rdz", Book.EXO: "Wj", Book.LEV: "Kpł", Book.NUM: "Lb",
    Book.DEU: "Pwt", Book.JOS: "Joz", Book.JDG: "Sdz", Book.RUT: "Rt",
    Book.SA1: "1 Sm", Book.SA2: "2 Sm", Book.KI1: "1 Krl", Book.KI2: "2 Krl",
    Book.CH1: "1 Krn", Book.CH2: "2 Krn", Book.EZR: "Ezd", Book.NEH: "Ne",
    Book.EST: "Est", Book.JOB: "Hi", Book.PSA: "Ps", Book.PRO: "Prz",
    Book.ECC: "Koh", Book.SNG: "Pnp", Book.ISA: "Iz", Book.JER: "Jr",
    Book.LAM: "Lm", Book.EZK: "Ez", Book.DAN: "Dn", Book.HOS: "Oz",
    Book.JOL: "Jl", Book.AMO: "Am", Book.OBA: "Ab", Book.JON: "Jon",
    Book.MIC: "Mi", Book.NAM: "Na", Book.HAB: "Ha", Book.ZEP: "So",
    Book.HAG: "Ag", Book.ZEC: "Za", Book.MAL: "Ml", Book.MAT: "Mt",
    Book.MRK: "Mk", Book.LUK: "Łk", Book.JHN: "J", Book.ACT: "Dz",
    Book.ROM: "Rz", Book.CO1: "1 Kor", Book.CO2: "2 Kor", Book.GAL: "Ga",
    Book.EPH: "Ef", Book.PHP: "Flp", Book.COL: "Kol", Book.TH1: "1 Tes",
    Book.TH2: "2 Tes", Book.TI1: "1 Tm", Book.TI2: "2 Tm", Book.TIT: "Tt",
    Book.PHM: "Flm", Book.HEB: "Hbr", Book.JAS: "Jk", Book.PE1: "1 P",
    Book.PE2: "2 P", Book.JN1: "1 J", Book.JN2: "2 J", Book.JN3: "3 J",
    Book.JUD: "Jud", Book.REV: "Ap", Book.TOB: "Tb", Book.JDT: "Jdt",
    Book.WIS: "Mdr", Book.SIR: "Syr", Book.BAR: "Ba", Book.MA1: "1 Mch",
    Book.MA2: "2 Mch",
}

DISPLAY_TABLES: Dict[str, Dict[Book, str]] = {
    "de": GERMAN_NAMES,
    "pl": POLISH_NAMES,
}


def to_display_reference(reference: str, lang: str = "de") -> str:
    normalized = re.sub(r"\s+", " ", reference or "").strip()
    m = DISPLAY_RE.match(normalized)
    if not m:
        return normalized
    book_raw = m.group(1).replace(".", "").strip()
    chapter_verse = m.group(2).replace(":", ",")
    table = DISPLAY_TABLES.get(lang, {})
    book = find_book(book_raw)
    name = table.get(book, book_raw) if book else book_raw
    return f"{name} {chapter_verse}"
