"""Parsing utilities for CC-CEDICT and compatible dictionary files."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import re
from typing import Iterable, Iterator

from pinyin_norm.errors import PinyinParseError
from pinyin_norm.models import NormalizedRow
from pinyin_norm.pinyin_string import PinyinString
from pinyin_norm.scanner import parse_pinyin
from pinyin_norm.validation import raise_for_errors

_LOGGER = logging.getLogger(__name__)

CEDICT_ENTRY_RE = re.compile(r"^(\S+)\s+(\S+)\s+\[([^]]+)]\s*/(.*)/\s*$")
CEDICT_ALSO_PR_RE = re.compile(r"also pr\. \[([^]]+)]")


@dataclass(frozen=True)
class CedictEntry:
    """One dictionary line with its pinyin parsed into a :class:`PinyinString`.

    Definitions keep the slash-delimited glosses of the source line in order.
    ``alternates`` holds the ``also pr. [...]`` readings found in the glosses.
    """

    traditional: str
    simplified: str
    pinyin_raw: str
    pinyin: PinyinString
    definitions: tuple[str, ...]
    alternates: tuple[PinyinString, ...] = ()

    def to_row(self) -> NormalizedRow:
        """Flatten the entry into a TSV row for its main reading."""

        return self._row(self.pinyin_raw, self.pinyin)

    def to_rows(self) -> list[NormalizedRow]:
        """Return the main row followed by one row per alternate reading.

        Alternate rows share the definition; their ``pinyin_cc_cedict`` column
        holds the reading in numbered form.
        """

        rows = [self.to_row()]
        rows.extend(self._row(alternate.numbered(), alternate) for alternate in self.alternates)
        return rows

    def _row(self, raw: str, pinyin: PinyinString) -> NormalizedRow:
        return NormalizedRow(
            traditional=self.traditional,
            simplified=self.simplified,
            pinyin_cc_cedict=raw,
            pinyin=str(pinyin),
            pinyin_numbered=pinyin.numbered(),
            definition="/".join(self.definitions),
        )


def extract_additional_pinyin(definition_payload: str) -> list[PinyinString]:
    """Parse ``also pr. [...]`` alternates from a definition payload.

    Alternates that are not valid pinyin are ignored.

    Args:
        definition_payload: Raw gloss payload captured from a CEDICT line.

    Returns:
        Parsed alternate readings in order of appearance.
    """

    alternates: list[PinyinString] = []
    for match in CEDICT_ALSO_PR_RE.finditer(definition_payload):
        try:
            alternates.append(parse_pinyin(match.group(1), keep_word_breaks=False))
        except PinyinParseError as exc:
            _LOGGER.debug("Ignoring alternate reading [%s]: %s", match.group(1), exc)
    return alternates


def parse_cedict_line(line: str) -> CedictEntry | None:
    """Parse one CC-CEDICT line.

    Args:
        line: Raw dictionary line.

    Returns:
        The parsed entry, or ``None`` for comments, blank and malformed lines.

    Raises:
        PinyinParseError: If the bracketed pinyin is not valid pinyin.
    """

    if not line.strip() or line.startswith("#"):
        return None
    match = CEDICT_ENTRY_RE.match(line.strip())
    if not match:
        return None

    trad, simp, pinyin_field, definition_payload = match.groups()
    # CC-CEDICT writes one token per syllable, so breaks carry no information.
    pinyin = parse_pinyin(pinyin_field, keep_word_breaks=False)
    glosses = tuple(part for part in definition_payload.split("/") if part)

    return CedictEntry(
        traditional=trad,
        simplified=simp,
        pinyin_raw=pinyin_field,
        pinyin=pinyin,
        definitions=glosses,
        alternates=tuple(extract_additional_pinyin(definition_payload)),
    )


def parse_cedict_lines(lines: Iterable[str], strict: bool = False) -> list[CedictEntry]:
    """Parse CC-CEDICT lines into entries with normalized pinyin.

    Comments and malformed lines are ignored. Lines whose pinyin is not valid
    pinyin (letter names, placeholders like ``xx5``) are skipped unless
    ``strict`` is set.

    Args:
        lines: Raw dictionary lines.
        strict: Whether invalid pinyin fails the whole parse.

    Returns:
        Parsed entries in input order.

    Raises:
        ValueError: In strict mode, if any line had invalid pinyin.
    """

    entries: list[CedictEntry] = []
    errors: list[str] = []
    for idx, line in enumerate(lines, start=1):
        try:
            entry = parse_cedict_line(line)
        except PinyinParseError as exc:
            errors.append(f"Line {idx}: {exc}")
            _LOGGER.debug("Skipping line %s: %s", idx, exc)
            continue
        if entry is not None:
            entries.append(entry)

    if strict:
        raise_for_errors("CC-CEDICT parsing", errors)
    elif errors:
        _LOGGER.info("Skipped %s CC-CEDICT lines with invalid pinyin", len(errors))
    return entries


def iter_rows(entries: Iterable[CedictEntry]) -> Iterator[NormalizedRow]:
    """Yield TSV rows for parsed entries, alternate readings included."""

    for entry in entries:
        yield from entry.to_rows()
