"""Validation helpers for batches of pinyin input."""

from __future__ import annotations

from typing import Iterable, Sequence

from pinyin_norm.errors import PinyinParseError
from pinyin_norm.pinyin_string import PinyinString
from pinyin_norm.scanner import parse_pinyin

PREVIEW_LIMIT = 25


def raise_for_errors(context: str, errors: Sequence[str]) -> None:
    """Raise one ``ValueError`` summarizing ``errors``, if there are any.

    Args:
        context: Label used at the start of the message.
        errors: Individual error descriptions.

    Raises:
        ValueError: If ``errors`` is not empty. Only the first
            ``PREVIEW_LIMIT`` errors are listed.
    """

    if not errors:
        return
    preview = "\n".join(f"- {item}" for item in errors[:PREVIEW_LIMIT])
    rest = len(errors) - min(PREVIEW_LIMIT, len(errors))
    more = f"\n- ... and {rest} more" if rest > 0 else ""
    raise ValueError(f"{context} failed with {len(errors)} errors:\n{preview}{more}")


def parse_pinyin_lines(
    lines: Iterable[str],
    keep_word_breaks: bool = True,
) -> list[PinyinString]:
    """Parse one pinyin text per non-blank line, failing on any invalid line.

    Args:
        lines: Raw input lines; blank lines and ``#`` comments are skipped.
        keep_word_breaks: Passed through to the parser.

    Returns:
        Parsed sequences in input order.

    Raises:
        ValueError: If any line fails to parse; every failure is reported.
    """

    sequences: list[PinyinString] = []
    errors: list[str] = []
    for idx, line in enumerate(lines, start=1):
        if not line.strip() or line.lstrip().startswith("#"):
            continue
        try:
            sequences.append(parse_pinyin(line, keep_word_breaks=keep_word_breaks))
        except PinyinParseError as exc:
            errors.append(f"Line {idx}: {exc}")

    raise_for_errors("Pinyin parsing", errors)
    return sequences
