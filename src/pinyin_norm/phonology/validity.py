"""Phonotactic table of which initials may precede which finals.

The inventory of Mandarin syllables is irregular, so the table is written out
group by group instead of being derived from a rule.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Mapping

from pinyin_norm.phonology.tables import Final, Initial

_LABIALS = (Initial.B, Initial.P, Initial.M, Initial.F)
_ALVEOLARS = (Initial.D, Initial.T, Initial.N, Initial.L)
_VELARS = (Initial.G, Initial.K, Initial.H)
_PALATALS = (Initial.J, Initial.Q, Initial.X)
_SIBILANTS = (Initial.ZH, Initial.CH, Initial.SH, Initial.R, Initial.Z, Initial.C, Initial.S)

# (initials, finals) groups; a pair is legal if any group contains it.
_GROUPS: tuple[tuple[tuple[Initial, ...], tuple[Final, ...]], ...] = (
    # Every final may stand alone.
    ((Initial.EMPTY,), tuple(Final)),
    # labials
    (
        _LABIALS,
        (Final.A, Final.EI, Final.AN, Final.EN, Final.ANG, Final.ENG, Final.IAO, Final.U, Final.UO),
    ),
    (
        (Initial.B, Initial.P, Initial.M),
        (Final.AI, Final.AO, Final.I, Final.IE, Final.IAN, Final.IN, Final.ING),
    ),
    ((Initial.M,), (Final.E, Final.IU)),
    ((Initial.P, Initial.M, Initial.F), (Final.OU,)),
    ((Initial.B,), (Final.IANG,)),
    # non-sibilant alveolars
    (
        _ALVEOLARS,
        (
            Final.A,
            Final.E,
            Final.AI,
            Final.EI,
            Final.AO,
            Final.OU,
            Final.AN,
            Final.ANG,
            Final.ENG,
            Final.ONG,
            Final.I,
            Final.IE,
            Final.IAO,
            Final.IAN,
            Final.ING,
            Final.U,
            Final.UO,
            Final.UAN,
            Final.UN,
        ),
    ),
    ((Initial.L,), (Final.O, Final.VAN, Final.VN)),
    ((Initial.D, Initial.N), (Final.EN,)),
    ((Initial.D, Initial.N, Initial.L), (Final.IA, Final.IU, Final.IANG)),
    ((Initial.N, Initial.L), (Final.IN, Final.V, Final.VE)),
    ((Initial.D, Initial.T), (Final.UI,)),
    # velars
    (
        _VELARS,
        (
            Final.A,
            Final.E,
            Final.AI,
            Final.EI,
            Final.AO,
            Final.OU,
            Final.AN,
            Final.EN,
            Final.ANG,
            Final.ENG,
            Final.ONG,
            Final.U,
            Final.UA,
            Final.UO,
            Final.UAI,
            Final.UI,
            Final.UAN,
            Final.UN,
            Final.UANG,
        ),
    ),
    # palatals
    (
        _PALATALS,
        (
            Final.I,
            Final.IA,
            Final.IE,
            Final.IAO,
            Final.IU,
            Final.IAN,
            Final.IN,
            Final.ING,
            Final.IANG,
            Final.IONG,
            Final.V,
            Final.VE,
            Final.VAN,
            Final.VN,
        ),
    ),
    # retroflex and alveolar sibilants
    (
        _SIBILANTS,
        (
            Final.E,
            Final.AO,
            Final.OU,
            Final.AN,
            Final.EN,
            Final.ANG,
            Final.ENG,
            Final.ONG,
            Final.I,
            Final.U,
            Final.UO,
            Final.UI,
            Final.UAN,
            Final.UN,
        ),
    ),
    (
        (Initial.ZH, Initial.CH, Initial.SH, Initial.Z, Initial.C, Initial.S),
        (Final.A, Final.AI),
    ),
    ((Initial.ZH, Initial.SH, Initial.Z, Initial.S), (Final.EI,)),
    ((Initial.ZH, Initial.CH, Initial.SH, Initial.R), (Final.UA,)),
    ((Initial.ZH, Initial.CH, Initial.SH), (Final.UAI, Final.UANG)),
)


def _build_matrix(
    groups: Iterable[tuple[tuple[Initial, ...], tuple[Final, ...]]],
) -> Mapping[Initial, frozenset[Final]]:
    combinations: dict[Initial, set[Final]] = {initial: set() for initial in Initial}
    for initials, finals in groups:
        for initial in initials:
            combinations[initial].update(finals)
    return MappingProxyType(
        {initial: frozenset(finals) for initial, finals in combinations.items()}
    )


LEGAL_COMBINATIONS: Mapping[Initial, frozenset[Final]] = _build_matrix(_GROUPS)


def is_legal(initial: Initial, final: Final) -> bool:
    """Return whether ``initial`` may precede ``final`` in a Mandarin syllable."""

    return final in LEGAL_COMBINATIONS[initial]


def legal_finals(initial: Initial) -> frozenset[Final]:
    """Return every final that can follow ``initial``."""

    return LEGAL_COMBINATIONS[initial]


def legal_syllable_count() -> int:
    """Count legal ``(initial, final)`` pairs across the whole table."""

    return sum(len(finals) for finals in LEGAL_COMBINATIONS.values())
