"""Unit tests for TSV serialization helpers."""

from __future__ import annotations

from pathlib import Path

from pinyin_norm.io.tsv_io import TSV_HEADER, write_tsv
from pinyin_norm.models import NormalizedRow


def test_write_tsv_writes_header_and_columns_in_order(tmp_path: Path) -> None:
    output = tmp_path / "out.tsv"
    row = NormalizedRow(
        traditional="愛",
        simplified="爱",
        pinyin_cc_cedict="ai4",
        pinyin="ài",
        pinyin_numbered="ai4",
        definition="to love",
    )

    count = write_tsv([row], output_path=output, include_header=True)
    lines = output.read_text(encoding="utf-8").splitlines()

    assert count == 1
    assert TSV_HEADER == [
        "traditional",
        "simplified",
        "pinyin_cc-cedict",
        "pinyin",
        "pinyin_numbered",
        "definition",
    ]
    assert lines[0].split("\t") == TSV_HEADER
    assert lines[1].split("\t") == ["愛", "爱", "ai4", "ài", "ai4", "to love"]


def test_write_tsv_without_header(tmp_path: Path) -> None:
    output = tmp_path / "out.tsv"
    row = NormalizedRow("一", "一", "yi1", "yī", "yi1", "one")

    write_tsv([row], output_path=output, include_header=False)

    assert output.read_text(encoding="utf-8") == "一\t一\tyi1\tyī\tyi1\tone\n"
