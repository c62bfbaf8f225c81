"""Pinyin normalization: scanner, syllable model and binary codec."""

from .errors import IllegalCombinationError, ParseErrorKind, PinyinParseError, UnknownSpellingError
from .phonology.tables import Final, Initial, Place, Tone
from .phonology.validity import is_legal
from .pinyin_string import PinyinString
from .scanner import ScanResult, parse_pinyin, scan_pinyin
from .syllable import Syllable

__all__ = [
    "Place",
    "Initial",
    "Final",
    "Tone",
    "is_legal",
    "Syllable",
    "PinyinString",
    "ScanResult",
    "parse_pinyin",
    "scan_pinyin",
    "ParseErrorKind",
    "PinyinParseError",
    "IllegalCombinationError",
    "UnknownSpellingError",
]
