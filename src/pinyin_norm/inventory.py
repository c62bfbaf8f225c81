"""Cross-check the scanner against pypinyin's syllable inventory.

pypinyin ships a per-character reading table. Every distinct tone-marked
reading in it is a syllable some dictionary considers real, so running them
all through the scanner exposes gaps in the validity table. A few readings
are expected to fail: interjections without a vowel nucleus (``m``, ``ng``,
``hm``) and ``ê``.
"""

from __future__ import annotations

import logging
from typing import Iterable

from pypinyin import constants as pypinyin_constants

from pinyin_norm.errors import PinyinParseError
from pinyin_norm.models import InventoryReport, RejectedSyllable
from pinyin_norm.scanner import parse_pinyin

_LOGGER = logging.getLogger(__name__)


def collect_reference_syllables() -> list[str]:
    """Collect distinct tone-marked readings from pypinyin's character table.

    Returns:
        Sorted, lowercase syllables such as ``"zhōng"``.
    """

    syllables: set[str] = set()
    for value in pypinyin_constants.PINYIN_DICT.values():
        for item in str(value).split(","):
            item = item.strip().lower()
            if item:
                syllables.add(item)
    return sorted(syllables)


def audit_inventory(syllables: Iterable[str] | None = None) -> InventoryReport:
    """Parse each reference syllable and record the ones that fail.

    Args:
        syllables: Syllables to check; defaults to
            :func:`collect_reference_syllables`.

    Returns:
        Report with counts and the rejected syllables.
    """

    if syllables is None:
        syllables = collect_reference_syllables()

    checked = 0
    rejected: list[RejectedSyllable] = []
    for syllable in syllables:
        checked += 1
        try:
            sequence = parse_pinyin(syllable, keep_word_breaks=False)
        except PinyinParseError as exc:
            rejected.append(RejectedSyllable(syllable, exc.kind.name, str(exc)))
            continue
        if len(sequence) != 1:
            message = f"Parsed as {len(sequence)} syllables: {sequence}"
            rejected.append(RejectedSyllable(syllable, "SPLIT", message))

    _LOGGER.debug("Checked %s reference syllables, %s rejected", checked, len(rejected))
    return InventoryReport(
        checked=checked,
        accepted=checked - len(rejected),
        rejected=tuple(rejected),
    )
