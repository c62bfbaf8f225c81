"""Closed phonological inventories: places, initials, finals and tones.

The enumerations carry their own data (index, spelling, flags). Index and
spelling lookups are backed by tables that are built once when this module is
imported and exposed as read-only mappings afterwards.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping

from pinyin_norm.errors import UnknownSpellingError


class Place(Enum):
    """Coarse place of articulation of an initial, as far as spelling cares.

    ``EMPTY`` is not a real place; it stands for the missing onset. Every place
    without special orthography is grouped under ``OTHER``.
    """

    EMPTY = 0
    LABIAL = 1
    PALATAL = 2
    OTHER = 3


class Initial(Enum):
    """Syllable onset consonant, including the empty onset.

    Glides (``y``/``w``) are part of the final in this analysis, so a syllable
    such as ``yan`` has the ``EMPTY`` initial.
    """

    EMPTY = (0, "", Place.EMPTY)
    B = (1, "b", Place.LABIAL)
    P = (2, "p", Place.LABIAL)
    M = (3, "m", Place.LABIAL)
    F = (4, "f", Place.LABIAL)
    D = (5, "d", Place.OTHER)
    T = (6, "t", Place.OTHER)
    N = (7, "n", Place.OTHER)
    L = (8, "l", Place.OTHER)
    G = (9, "g", Place.OTHER)
    K = (10, "k", Place.OTHER)
    H = (11, "h", Place.OTHER)
    J = (12, "j", Place.PALATAL)
    Q = (13, "q", Place.PALATAL)
    X = (14, "x", Place.PALATAL)
    ZH = (15, "zh", Place.OTHER)
    CH = (16, "ch", Place.OTHER)
    SH = (17, "sh", Place.OTHER)
    R = (18, "r", Place.OTHER)
    Z = (19, "z", Place.OTHER)
    C = (20, "c", Place.OTHER)
    S = (21, "s", Place.OTHER)

    def __init__(self, index: int, spelling: str, place: Place) -> None:
        self.index = index
        self.spelling = spelling
        self.place = place

    @classmethod
    def from_index(cls, index: int) -> Initial:
        """Return the initial whose ``index`` equals ``index``.

        Raises:
            IndexError: If no initial has that index.
        """

        if not 0 <= index < len(_INITIALS_BY_INDEX):
            raise IndexError(f"There is no initial with index {index}.")
        return _INITIALS_BY_INDEX[index]

    @classmethod
    def from_spelling(cls, spelling: str) -> Initial:
        """Return the initial spelled ``spelling`` (``""`` is the empty initial).

        Raises:
            UnknownSpellingError: If no initial has that spelling.
        """

        try:
            return _INITIALS_BY_SPELLING[spelling]
        except KeyError:
            raise UnknownSpellingError(f"There is no initial with spelling '{spelling}'.") from None


class Final(Enum):
    """Syllable nucleus plus optional nasal coda (and fused glide where needed).

    Each member is declared as ``(index, unambiguous_isolated_start, has_coda,
    *spellings)``. One spelling means the same text after every place; two
    spellings are ``(empty, other)``; four spellings are given per place in
    ``Place`` order.
    """

    A = (0, False, False, "a")
    # Spelled "_" after labials so it never shadows UO, which is written "o" there.
    O = (1, False, False, "o", "_", "o", "o")
    E = (2, False, False, "e")
    AI = (3, False, False, "ai")
    EI = (4, False, False, "ei")
    AO = (5, False, False, "ao")
    OU = (6, False, False, "ou")
    AN = (7, False, True, "an")
    EN = (8, False, True, "en")
    ANG = (9, False, True, "ang")
    ENG = (10, False, True, "eng")
    # Also covers the syllabic consonants of zi/ci/si and zhi/chi/shi/ri.
    I = (11, True, False, "yi", "i")
    IA = (12, True, False, "ya", "ia")
    IO = (13, True, False, "yo", "io")
    IE = (14, True, False, "ye", "ie")
    IAI = (15, True, False, "yai", "iai")
    IAO = (16, True, False, "yao", "iao")
    IU = (17, True, False, "you", "iu")
    IAN = (18, True, True, "yan", "ian")
    IN = (19, True, True, "yin", "in")
    IANG = (20, True, True, "yang", "iang")
    ING = (21, True, True, "ying", "ing")
    IONG = (22, True, True, "yong", "iong")
    U = (23, True, False, "wu", "u")
    UA = (24, True, False, "wa", "ua")
    UO = (25, True, False, "wo", "o", "uo", "uo")
    UAI = (26, True, False, "wai", "uai")
    UI = (27, True, False, "wei", "ui")
    UAN = (28, True, True, "wan", "uan")
    UN = (29, True, True, "wen", "un")
    UANG = (30, True, True, "wang", "uang")
    # Unifies isolated "weng" with "ong" after an initial.
    ONG = (31, True, True, "weng", "ong")
    V = (32, True, False, "yu", "ü", "u", "ü")
    VE = (33, True, False, "yue", "üe", "ue", "üe")
    VN = (34, True, True, "yun", "ün", "un", "ün")
    VAN = (35, True, True, "yuan", "üan", "uan", "üan")

    def __init__(
        self,
        index: int,
        unambiguous_isolated_start: bool,
        has_coda: bool,
        *spellings: str,
    ) -> None:
        self.index = index
        self.unambiguous_isolated_start = unambiguous_isolated_start
        self.has_coda = has_coda
        if len(spellings) == 1:
            spellings = spellings * 4
        elif len(spellings) == 2:
            spellings = (spellings[0], spellings[1], spellings[1], spellings[1])
        self.spellings: Mapping[Place, str] = MappingProxyType(dict(zip(Place, spellings)))

    def spelling_for(self, context: Place | Initial) -> str:
        """Return the spelling of this final after an initial or a place."""

        place = context.place if isinstance(context, Initial) else context
        return self.spellings[place]

    @classmethod
    def from_index(cls, index: int) -> Final:
        """Return the final whose ``index`` equals ``index``.

        Raises:
            IndexError: If no final has that index.
        """

        if not 0 <= index < len(_FINALS_BY_INDEX):
            raise IndexError(f"There is no final with index {index}.")
        return _FINALS_BY_INDEX[index]

    @classmethod
    def from_spelling(cls, context: Place | Initial, spelling: str) -> Final:
        """Return the final spelled ``spelling`` after the given initial or place.

        Args:
            context: Preceding initial, or directly its place of articulation.
            spelling: Lowercase spelling of the final.

        Returns:
            The matching final.

        Raises:
            UnknownSpellingError: If nothing is spelled that way in this context.
        """

        place = context.place if isinstance(context, Initial) else context
        try:
            return _FINALS_BY_SPELLING[place][spelling]
        except KeyError:
            where = context.spelling if isinstance(context, Initial) else place.name
            raise UnknownSpellingError(
                f"There is no final with spelling '{spelling}' after '{where}'."
            ) from None


class Tone(Enum):
    """The four Mandarin tones plus the neutral tone, with their combining marks."""

    NEUTRAL = (0, "")
    HIGH = (1, "\u0304")
    RISING = (2, "\u0301")
    LOW = (3, "\u030c")
    FALLING = (4, "\u0300")

    def __init__(self, index: int, mark: str) -> None:
        self.index = index
        self.mark = mark

    @classmethod
    def from_index(cls, index: int) -> Tone:
        """Return the tone with the given index (0 is neutral).

        Raises:
            IndexError: If no tone has that index.
        """

        if not 0 <= index < len(_TONES_BY_INDEX):
            raise IndexError(f"There is no tone with index {index}.")
        return _TONES_BY_INDEX[index]

    @classmethod
    def from_mark(cls, mark: str) -> Tone:
        """Return the tone carrying the combining ``mark``.

        Raises:
            UnknownSpellingError: If ``mark`` is not a tone mark.
        """

        try:
            return _TONES_BY_MARK[mark]
        except KeyError:
            raise UnknownSpellingError(f"'{mark}' is not a tone mark.") from None


def _build_final_spelling_tables() -> dict[Place, Mapping[str, Final]]:
    tables: dict[Place, dict[str, Final]] = {place: {} for place in Place}
    for final in Final:
        for place, spelling in final.spellings.items():
            # After palatals "u", "un" and "uan" are the ü-finals, which are
            # declared after the u-finals and therefore take precedence.
            tables[place][spelling] = final
    return {place: MappingProxyType(table) for place, table in tables.items()}


_INITIALS_BY_INDEX: tuple[Initial, ...] = tuple(sorted(Initial, key=lambda item: item.index))
_INITIALS_BY_SPELLING: Mapping[str, Initial] = MappingProxyType(
    {initial.spelling: initial for initial in Initial}
)
_FINALS_BY_INDEX: tuple[Final, ...] = tuple(sorted(Final, key=lambda item: item.index))
_FINALS_BY_SPELLING: Mapping[Place, Mapping[str, Final]] = MappingProxyType(
    _build_final_spelling_tables()
)
_TONES_BY_INDEX: tuple[Tone, ...] = tuple(sorted(Tone, key=lambda item: item.index))
_TONES_BY_MARK: Mapping[str, Tone] = MappingProxyType(
    {tone.mark: tone for tone in Tone if tone.mark}
)

TONE_MARKS: frozenset[str] = frozenset(_TONES_BY_MARK)
