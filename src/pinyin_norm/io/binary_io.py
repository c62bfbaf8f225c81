"""Files holding several binary-encoded pinyin sequences back to back."""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Iterable

from pinyin_norm.pinyin_string import PinyinString

_LOGGER = logging.getLogger(__name__)


def write_sequences(sequences: Iterable[PinyinString], output_path: Path) -> int:
    """Write each sequence's encoding, terminator included, one after another.

    Returns:
        Number of sequences written.
    """

    count = 0
    with output_path.open("wb") as handle:
        for sequence in sequences:
            sequence.save(handle)
            count += 1
    _LOGGER.debug("Wrote %s sequences to %s", count, output_path)
    return count


def read_sequences(input_path: Path) -> list[PinyinString]:
    """Read every sequence stored by :func:`write_sequences`.

    Raises:
        FileNotFoundError: If ``input_path`` does not exist.
        EOFError: If the file ends inside a sequence.
    """

    data = input_path.read_bytes()
    stream = io.BytesIO(data)
    sequences: list[PinyinString] = []
    while stream.tell() < len(data):
        sequences.append(PinyinString.read(stream))
    _LOGGER.debug("Read %s sequences from %s", len(sequences), input_path)
    return sequences
