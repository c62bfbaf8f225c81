"""Left-to-right scanner turning raw pinyin text into syllables.

Accepted input mixes freely:

- tone numbers after syllables (``ke3neng2``, ``0`` and ``5`` for neutral),
- tone marks as precomposed or combining characters (``kěnéng``),
- CC-CEDICT conventions: ``v``/``u:`` for ``ü``, ``r5`` as a separate erhua
  token, spaces, ``·`` and ``,`` between syllables,
- apostrophes disambiguating syllable boundaries (``Xi'an``).

Whitespace, ``·`` and ``,`` collapse into a single word break. The scanner
keeps one character of lookahead (two for ``r5`` and the coda rule) and
never backtracks.
"""

from __future__ import annotations

from dataclasses import dataclass
import unicodedata

from pinyin_norm.errors import (
    IllegalCombinationError,
    ParseErrorKind,
    PinyinParseError,
    UnknownSpellingError,
)
from pinyin_norm.phonology.tables import TONE_MARKS, Final, Initial, Tone
from pinyin_norm.pinyin_string import PinyinString
from pinyin_norm.syllable import Syllable

CONSONANTS = frozenset("bpmfdtnlzcsrjqxgkhBPMFDTNLZCSRJQXGKH")
GLIDES = frozenset("ywYW")
VOWELS = frozenset("aoeiuüvAOEIUÜV")
TONE_DIGITS = frozenset("012345")
WORD_BREAK_CHARS = frozenset("·,")
SYLLABLE_SEPARATORS = frozenset("'’")
END = "\x03"


def prepare_text(text: str) -> str:
    """Trim ``text`` and split precomposed tone marks off their vowels.

    ``ü`` is recomposed afterwards so that it stays one scanner character.
    """

    return _normalize_with_offsets(text.strip())[0]


def _normalize_with_offsets(text: str) -> tuple[str, list[int]]:
    """Normalize ``text`` like :func:`prepare_text` without trimming.

    Returns:
        The normalized text and, per normalized character, the index of the
        ``text`` character it came from.
    """

    chars: list[str] = []
    offsets: list[int] = []
    for idx, char in enumerate(text):
        for part in unicodedata.normalize("NFD", char):
            if part == "\u0308" and chars and chars[-1] in "uU":
                chars[-1] = "\u00fc" if chars[-1] == "u" else "\u00dc"
                continue
            chars.append(part)
            offsets.append(idx)
    return "".join(chars), offsets


class Scanner:
    """Single-use scanner over one input text.

    Each instance owns its cursor and buffer, so independent scans never
    interact.
    """

    def __init__(self, text: str) -> None:
        self._source = text.strip()
        self._text, self._offsets = _normalize_with_offsets(self._source)
        self._index = 0
        self._buffer: list[str] = []

    def scan(self, keep_word_breaks: bool = True) -> list[Syllable | None]:
        """Scan the whole text.

        Args:
            keep_word_breaks: Whether word breaks are materialized as ``None``.

        Returns:
            Syllables in input order, with ``None`` where a word break was seen.

        Raises:
            PinyinParseError: On the first invalid construct.
        """

        entries: list[Syllable | None] = []
        length = len(self._text)

        while self._index < length:
            if self._accept_erhua_token():
                self._attach_erhua(entries)
            else:
                entries.append(self._scan_separated_syllable())

            if self._skip_word_breaks() and self._index < length and keep_word_breaks:
                entries.append(None)

        return entries

    def _attach_erhua(self, entries: list[Syllable | None]) -> None:
        position = self._position(self._index - 2)
        if entries and entries[-1] is None:
            # A break before r5 is dropped, not kept: "na3 r5" is one entry
            # even under break-sensitive comparison.
            entries.pop()
        last = entries[-1] if entries else None
        if last is None:
            raise PinyinParseError(
                ParseErrorKind.MISPLACED_ERHUA, "r5", position, "no preceding syllable"
            )
        if last.erhua:
            raise PinyinParseError(
                ParseErrorKind.MISPLACED_ERHUA, "r5", position, f"'{last}' already has an r-final"
            )
        entries[-1] = last.with_erhua()

    def _scan_separated_syllable(self) -> Syllable:
        syllable = self._scan_syllable()

        if self._current() in SYLLABLE_SEPARATORS:
            position = self._position(self._index)
            separator = self._accept()
            if self._current() not in VOWELS:
                raise PinyinParseError(
                    ParseErrorKind.INVALID_SEPARATOR,
                    separator + self._current().replace(END, ""),
                    position,
                    f"after syllable '{syllable}'",
                )

        return syllable

    def _scan_syllable(self) -> Syllable:
        start = self._index
        self._buffer.clear()

        self._append_while(CONSONANTS)
        initial_spelling = "".join(self._buffer)
        try:
            initial = Initial.from_spelling(initial_spelling.lower())
        except UnknownSpellingError:
            raise PinyinParseError(
                ParseErrorKind.INVALID_INITIAL, initial_spelling, self._position(start)
            ) from None

        self._append_while(GLIDES)
        self._append_vowels()
        tone_index = self._accept_tone_mark()
        if tone_index:
            self._append_vowels()

        if len(self._buffer) == len(initial_spelling):
            raise PinyinParseError(
                ParseErrorKind.UNEXPECTED_CHARACTER,
                self._current().replace(END, ""),
                self._position(self._index),
            )

        if self._accept_coda("n"):
            self._accept_coda("g")

        final_spelling = "".join(self._buffer[len(initial_spelling) :])
        try:
            final = Final.from_spelling(initial, final_spelling.lower())
        except UnknownSpellingError:
            raise PinyinParseError(
                ParseErrorKind.INVALID_FINAL,
                final_spelling,
                self._position(start + len(initial_spelling)),
                f"after initial '{initial.spelling}'",
            ) from None

        capitalized = self._buffer[0].isupper()

        erhua = self._current().lower() == "r" and self._lookahead(1) not in VOWELS
        if erhua:
            self._accept()
        if not tone_index:
            tone_index = self._accept_tone_digit()

        try:
            return Syllable(
                initial=initial,
                final=final,
                tone=Tone.from_index(tone_index),
                erhua=erhua,
                capitalized=capitalized,
            )
        except IllegalCombinationError as exc:
            raise PinyinParseError(
                ParseErrorKind.ILLEGAL_COMBINATION,
                self._source[self._position(start) : self._position(self._index)],
                self._position(start),
                str(exc),
            ) from exc

    def _append_while(self, charset: frozenset[str]) -> None:
        while self._current() in charset:
            self._buffer.append(self._accept())

    def _append_vowels(self) -> None:
        while self._current() in VOWELS:
            char = self._accept()
            if char in "vV":
                self._buffer.append("ü" if char == "v" else "Ü")
            elif char in "uU" and self._current() == ":":
                self._accept()
                self._buffer.append("ü" if char == "u" else "Ü")
            else:
                self._buffer.append(char)

    def _accept_tone_mark(self) -> int:
        if self._current() not in TONE_MARKS:
            return 0
        return Tone.from_mark(self._accept()).index

    def _accept_tone_digit(self) -> int:
        if self._current() not in TONE_DIGITS:
            return 0
        # 5 is the CC-CEDICT neutral tone.
        return int(self._accept()) % 5

    def _accept_coda(self, expected: str) -> bool:
        # A coda consonant followed by a vowel starts the next syllable instead.
        # The apostrophe and the end sentinel are not vowels.
        if self._current().lower() == expected and self._lookahead(1) not in VOWELS:
            self._buffer.append(self._accept())
            return True
        return False

    def _accept_erhua_token(self) -> bool:
        if self._current().lower() == "r" and self._lookahead(1) == "5":
            self._accept()
            self._accept()
            return True
        return False

    def _skip_word_breaks(self) -> bool:
        skipped = False
        while self._current().isspace() or self._current() in WORD_BREAK_CHARS:
            self._accept()
            skipped = True
        return skipped

    def _accept(self) -> str:
        char = self._current()
        if char == END:
            raise PinyinParseError(
                ParseErrorKind.UNEXPECTED_ENDING, "", self._position(self._index)
            )
        self._index += 1
        return char

    def _position(self, index: int) -> int:
        # Reported positions index the trimmed input, not the normalized text.
        if index >= len(self._offsets):
            return len(self._source)
        return self._offsets[index]

    def _current(self) -> str:
        return self._lookahead(0)

    def _lookahead(self, amount: int) -> str:
        position = self._index + amount
        if position >= len(self._text):
            return END
        return self._text[position]


@dataclass(frozen=True)
class ScanResult:
    """Outcome of :func:`scan_pinyin`: exactly one of the fields is set."""

    sequence: PinyinString | None = None
    error: PinyinParseError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def parse_pinyin(text: str, keep_word_breaks: bool = True) -> PinyinString:
    """Parse pinyin text into a normalized :class:`PinyinString`.

    Args:
        text: Raw pinyin, e.g. ``"ni3 hao3"``, ``"nu:3 ren2"`` or ``"nǚrén"``.
        keep_word_breaks: Whether separators become ``None`` entries.

    Returns:
        The parsed sequence.

    Raises:
        PinyinParseError: If ``text`` is not a whole number of valid syllables.
    """

    return PinyinString(Scanner(text).scan(keep_word_breaks=keep_word_breaks))


def scan_pinyin(text: str, keep_word_breaks: bool = True) -> ScanResult:
    """Like :func:`parse_pinyin` but report failures in the result instead of raising."""

    try:
        return ScanResult(sequence=parse_pinyin(text, keep_word_breaks=keep_word_breaks))
    except PinyinParseError as exc:
        return ScanResult(error=exc)
