"""Syllable value object with diacritic rendering and a 16-bit encoding."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
import functools

from pinyin_norm.errors import IllegalCombinationError
from pinyin_norm.phonology.tables import Final, Initial, Tone
from pinyin_norm.phonology.validity import is_legal

# Bit layout, low to high: initial (5), final (6), tone (3), erhua (1), capital (1).
INITIAL_MASK = 0x001F
FINAL_SHIFT = 5
FINAL_MASK = 0x07E0
TONE_SHIFT = 11
TONE_MASK = 0x3800
ERHUA_MASK = 0x4000
CAPITAL_MASK = 0x8000

# Vowels in the order they are considered for the tone mark fallback.
DIACRITIC_VOWELS = "aoeiuü"


def diacritic_index(spelling: str) -> int:
    """Return the index of the vowel that carries the tone mark in ``spelling``.

    ``a`` or ``e`` wins first (no syllable has both), then the ``o`` of ``ou``,
    then the last vowel of the syllable.

    Args:
        spelling: Lowercase toneless syllable spelling, e.g. ``"guir"``.

    Returns:
        Character index of the mark-bearing vowel, or ``-1`` if there is none.
    """

    result = max(spelling.find("a"), spelling.find("e"))
    if result >= 0:
        return result

    result = spelling.find("ou")
    if result >= 0:
        return result

    return max(spelling.rfind(vowel) for vowel in DIACRITIC_VOWELS)


@dataclass(frozen=True)
class Syllable:
    """One pinyin syllable: initial, final, tone, erhua and capitalization.

    The ``(initial, final)`` pair is validated on construction. Capitalization
    is presentation only and does not take part in ``==`` or hashing; use
    :meth:`same_as` for a case-sensitive comparison.
    """

    initial: Initial
    final: Final
    tone: Tone = Tone.NEUTRAL
    erhua: bool = False
    capitalized: bool = field(default=False, compare=False)

    def __post_init__(self) -> None:
        if not is_legal(self.initial, self.final):
            raise IllegalCombinationError(self.initial, self.final)

    @property
    def has_unambiguous_start(self) -> bool:
        """Whether the syllable cannot run into a preceding syllable's coda."""

        return self.initial is not Initial.EMPTY or self.final.unambiguous_isolated_start

    @property
    def has_coda(self) -> bool:
        """Whether the syllable ends in ``n``, ``ng`` or an erhua ``r``."""

        return self.final.has_coda or self.erhua

    @property
    def toneless(self) -> str:
        """Lowercase spelling without tone mark, e.g. ``"nür"``."""

        spelling = self.initial.spelling + self.final.spelling_for(self.initial)
        return spelling + "r" if self.erhua else spelling

    def same_as(self, other: Syllable, case_sensitive: bool = False) -> bool:
        """Compare with ``other``, optionally taking capitalization into account."""

        if self != other:
            return False
        return not case_sensitive or self.capitalized == other.capitalized

    def with_erhua(self) -> Syllable:
        """Return a copy of this syllable carrying the erhua flag."""

        return replace(self, erhua=True)

    def encode(self) -> int:
        """Pack the syllable into an unsigned 16-bit integer."""

        value = self.initial.index
        value |= self.final.index << FINAL_SHIFT
        value |= self.tone.index << TONE_SHIFT
        if self.erhua:
            value |= ERHUA_MASK
        if self.capitalized:
            value |= CAPITAL_MASK
        return value

    @classmethod
    def decode(cls, value: int) -> Syllable:
        """Rebuild a syllable from :meth:`encode` output.

        Results are memoized per bit pattern.

        Raises:
            ValueError: If a field is out of range or the value is not 16-bit.
            IllegalCombinationError: If the pattern encodes an illegal pair.
        """

        return _decode(value)

    def __str__(self) -> str:
        spelling = self.toneless
        mark_at = diacritic_index(spelling) + 1
        rendered = spelling[:mark_at] + self.tone.mark + spelling[mark_at:]
        if self.capitalized:
            return rendered[0].upper() + rendered[1:]
        return rendered


@functools.lru_cache(maxsize=1 << 16)
def _decode(value: int) -> Syllable:
    if not 0 <= value <= 0xFFFF:
        raise ValueError(f"Syllable encoding {value} does not fit into 16 bits.")
    try:
        initial = Initial.from_index(value & INITIAL_MASK)
        final = Final.from_index((value & FINAL_MASK) >> FINAL_SHIFT)
        tone = Tone.from_index((value & TONE_MASK) >> TONE_SHIFT)
    except IndexError as exc:
        raise ValueError(f"Invalid syllable encoding 0x{value:04x}: {exc}") from exc
    return Syllable(
        initial=initial,
        final=final,
        tone=tone,
        erhua=bool(value & ERHUA_MASK),
        capitalized=bool(value & CAPITAL_MASK),
    )
