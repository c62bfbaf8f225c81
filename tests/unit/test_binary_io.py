"""Unit tests for multi-sequence binary files."""

from __future__ import annotations

from pathlib import Path

import pytest

from pinyin_norm.io.binary_io import read_sequences, write_sequences
from pinyin_norm.scanner import parse_pinyin


def test_write_then_read_keeps_order_and_breaks(tmp_path: Path) -> None:
    output = tmp_path / "pinyin.bin"
    sequences = [parse_pinyin("Ni3 hao3"), parse_pinyin(""), parse_pinyin("nu:3er2")]

    count = write_sequences(sequences, output)
    restored = read_sequences(output)

    assert count == 3
    assert output.read_bytes()[:6] == bytes([0x99, 0x67, 0x28, 0x18, 0xAB, 0x30])
    assert len(restored) == 3
    for original, decoded in zip(sequences, restored):
        assert decoded.equals(original, case_sensitive=True, break_sensitive=True)


def test_read_sequences_rejects_truncated_file(tmp_path: Path) -> None:
    path = tmp_path / "broken.bin"
    path.write_bytes(parse_pinyin("ni3 hao3").to_bytes()[:-1])

    with pytest.raises(EOFError):
        read_sequences(path)
