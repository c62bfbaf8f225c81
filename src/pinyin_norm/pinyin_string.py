"""Ordered pinyin sequence with canonical rendering and a binary codec.

Binary layout, in order: each syllable as its 16-bit code (big-endian), each
word break as byte ``0x28``, then terminator byte ``0x30``. A syllable's high
byte can never be ``0x28`` or ``0x30``: bits 3-5 of the high byte hold the
tone, and both values would need a tone index of 5 or 6 while tones stop at
4. Any change to the field widths has to keep this property.
"""

from __future__ import annotations

from functools import cached_property
from typing import BinaryIO, Iterable, Iterator, Sequence
import unicodedata

from pinyin_norm.syllable import Syllable

WORD_BREAK_BYTE = 0x28
TERMINATOR_BYTE = 0x30


class PinyinString(Sequence["Syllable | None"]):
    """Immutable sequence of syllables where ``None`` marks a word break.

    Equality ignores word breaks and capitalization; see :meth:`equals` for
    the stricter modes.
    """

    def __init__(self, entries: Iterable[Syllable | None]) -> None:
        self._entries: tuple[Syllable | None, ...] = tuple(entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index):
        return self._entries[index]

    def __iter__(self) -> Iterator[Syllable | None]:
        return iter(self._entries)

    @property
    def syllables(self) -> tuple[Syllable, ...]:
        """Entries with word breaks removed."""

        return tuple(entry for entry in self._entries if entry is not None)

    @cached_property
    def _rendered(self) -> str:
        parts: list[str] = []
        inside_word = False

        for entry in self._entries:
            if entry is None:
                parts.append(" ")
                inside_word = False
                continue
            if inside_word and not entry.has_unambiguous_start:
                parts.append("'")
            parts.append(str(entry))
            inside_word = True

        return "".join(parts)

    def __str__(self) -> str:
        return self._rendered

    def __repr__(self) -> str:
        return f"PinyinString({self._rendered!r})"

    def composed(self) -> str:
        """Return the rendering with precomposed characters (``ǎ`` instead of ``a`` + mark)."""

        return unicodedata.normalize("NFC", self._rendered)

    def numbered(self) -> str:
        """Return CC-CEDICT style numbered pinyin, e.g. ``"Ni3 hao3 nu:3 r5"``.

        Syllables are space separated, neutral tone is written ``5`` and erhua
        becomes a separate ``r5`` token, except for standalone ``er``. The
        output parses back to an equal sequence.
        """

        tokens: list[str] = []
        for syllable in self.syllables:
            spelling = syllable.initial.spelling + syllable.final.spelling_for(syllable.initial)
            spelling = spelling.replace("ü", "u:")
            if syllable.capitalized:
                spelling = spelling[0].upper() + spelling[1:]
            tone = syllable.tone.index or 5
            if syllable.erhua and spelling.lower() == "e":
                # Standalone "er" is its own CC-CEDICT token.
                tokens.append(f"{spelling}r{tone}")
                continue
            tokens.append(f"{spelling}{tone}")
            if syllable.erhua:
                tokens.append("r5")
        return " ".join(tokens)

    def equals(
        self,
        other: PinyinString,
        case_sensitive: bool = False,
        break_sensitive: bool = False,
    ) -> bool:
        """Compare two sequences.

        Args:
            other: Sequence to compare with.
            case_sensitive: Whether syllable capitalization must match.
            break_sensitive: Whether word breaks must line up.

        Returns:
            ``True`` if both sequences hold the same entries in the same order.
        """

        mine = self._entries if break_sensitive else self.syllables
        theirs = other._entries if break_sensitive else other.syllables
        if len(mine) != len(theirs):
            return False

        for left, right in zip(mine, theirs):
            if left is None or right is None:
                if left is not right:
                    return False
                continue
            if not left.same_as(right, case_sensitive=case_sensitive):
                return False
        return True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PinyinString):
            return NotImplemented
        return self.equals(other)

    def __hash__(self) -> int:
        return hash(self.syllables)

    def to_bytes(self) -> bytes:
        """Encode the sequence including its terminator byte."""

        out = bytearray()
        for entry in self._entries:
            if entry is None:
                out.append(WORD_BREAK_BYTE)
            else:
                out += entry.encode().to_bytes(2, "big")
        out.append(TERMINATOR_BYTE)
        return bytes(out)

    def save(self, stream: BinaryIO) -> None:
        """Write the encoded sequence to a binary stream."""

        stream.write(self.to_bytes())

    @classmethod
    def read(cls, stream: BinaryIO) -> PinyinString:
        """Read one encoded sequence from a binary stream.

        Raises:
            EOFError: If the stream ends before the terminator.
            ValueError: If a syllable code is invalid.
        """

        entries: list[Syllable | None] = []
        first = _read_byte(stream)
        while first != TERMINATOR_BYTE:
            if first == WORD_BREAK_BYTE:
                entries.append(None)
            else:
                entries.append(Syllable.decode(first << 8 | _read_byte(stream)))
            first = _read_byte(stream)
        return cls(entries)

    @classmethod
    def from_bytes(cls, data: bytes) -> PinyinString:
        """Decode a sequence produced by :meth:`to_bytes`.

        Raises:
            EOFError: If the terminator is missing.
            ValueError: If bytes follow the terminator or a code is invalid.
        """

        offset = 0
        entries: list[Syllable | None] = []
        while True:
            if offset >= len(data):
                raise EOFError("Pinyin data ended before the terminator byte.")
            first = data[offset]
            offset += 1
            if first == TERMINATOR_BYTE:
                break
            if first == WORD_BREAK_BYTE:
                entries.append(None)
                continue
            if offset >= len(data):
                raise EOFError("Pinyin data ended inside a syllable.")
            entries.append(Syllable.decode(first << 8 | data[offset]))
            offset += 1

        if offset != len(data):
            raise ValueError(f"{len(data) - offset} unexpected bytes after the terminator.")
        return cls(entries)


def _read_byte(stream: BinaryIO) -> int:
    chunk = stream.read(1)
    if not chunk:
        raise EOFError("Pinyin stream ended before the terminator byte.")
    return chunk[0]
