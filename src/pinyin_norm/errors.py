"""Error types raised while building syllables and scanning pinyin text."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pinyin_norm.phonology.tables import Final, Initial


class ParseErrorKind(Enum):
    """Closed set of reasons a pinyin scan can fail."""

    INVALID_INITIAL = "invalid initial"
    INVALID_FINAL = "invalid final"
    ILLEGAL_COMBINATION = "illegal combination"
    UNEXPECTED_CHARACTER = "unexpected character"
    UNEXPECTED_ENDING = "unexpected ending"
    INVALID_SEPARATOR = "unexpected syllable separator"
    MISPLACED_ERHUA = "misplaced r-final"


class UnknownSpellingError(LookupError):
    """Raised when a spelling has no registered initial or final."""


class IllegalCombinationError(ValueError):
    """Raised when an initial and a final cannot form a syllable together.

    Attributes:
        initial: The rejected initial.
        final: The rejected final.
    """

    def __init__(self, initial: Initial, final: Final) -> None:
        self.initial = initial
        self.final = final
        super().__init__(
            f"Initial '{initial.spelling}' cannot be combined with final {final.name}."
        )


class PinyinParseError(ValueError):
    """Structured failure of a pinyin scan.

    The scanner never returns partial results, so one instance describes the
    whole failed call.

    Attributes:
        kind: Category of the failure.
        fragment: Offending substring (accumulated text or current character).
        position: Index into the trimmed input (not its normalized form) where
            the failure was detected.
        detail: Optional extra context appended to the message.
    """

    def __init__(
        self,
        kind: ParseErrorKind,
        fragment: str,
        position: int,
        detail: str = "",
    ) -> None:
        self.kind = kind
        self.fragment = fragment
        self.position = position
        self.detail = detail
        message = f"{kind.value.capitalize()} '{fragment}' at position {position}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
