"""Data models shared by the CC-CEDICT conversion and inventory audit.

The rows are immutable contracts between parsing, reporting and writing so
each step has a narrow, testable interface.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field


@dataclass(frozen=True)
class NormalizedRow:
    """One CC-CEDICT record with its pinyin rendered in normalized forms.

    ``pinyin`` is the canonical diacritic rendering (combining marks),
    ``pinyin_numbered`` the re-serialized tone-number form, and
    ``pinyin_cc_cedict`` the untouched bracket payload from the source line.
    """

    traditional: str
    simplified: str
    pinyin_cc_cedict: str
    pinyin: str
    pinyin_numbered: str
    definition: str


@dataclass(frozen=True)
class RejectedSyllable:
    """Reference syllable that the scanner refused, with the reason."""

    syllable: str
    kind: str
    message: str


@dataclass(frozen=True)
class InventoryReport:
    """Result of checking a reference syllable inventory against the scanner.

    ``rejected`` is kept in the order syllables were checked; report builders
    sort it for deterministic output.
    """

    checked: int
    accepted: int
    rejected: tuple[RejectedSyllable, ...] = field(default_factory=tuple)

    def kind_counts(self) -> dict[str, int]:
        """Count rejections per error kind."""

        return dict(Counter(item.kind for item in self.rejected))
