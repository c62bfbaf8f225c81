"""Unit tests for CC-CEDICT parsing behavior."""

from __future__ import annotations

import logging

import pytest

from pinyin_norm.cedict.parser import (
    extract_additional_pinyin,
    iter_rows,
    parse_cedict_line,
    parse_cedict_lines,
)


def test_parse_cedict_lines_preserves_slash_delimited_glosses() -> None:
    entries = parse_cedict_lines(
        iter(["籃 篮 [lan2] /basket (receptacle)/basket (in basketball)/\n"])
    )

    assert len(entries) == 1
    assert entries[0].traditional == "籃"
    assert entries[0].simplified == "篮"
    assert entries[0].definitions == ("basket (receptacle)", "basket (in basketball)")
    assert entries[0].to_row().definition == "basket (receptacle)/basket (in basketball)"


def test_parse_cedict_line_normalizes_pinyin() -> None:
    entry = parse_cedict_line("女兒 女儿 [nu:3 er2] /daughter/")

    assert entry is not None
    assert entry.pinyin_raw == "nu:3 er2"
    assert entry.pinyin.composed() == "nǚ'ér"
    assert entry.pinyin.numbered() == "nu:3 er2"


def test_parse_cedict_line_attaches_erhua_token() -> None:
    entry = parse_cedict_line("哪兒 哪儿 [na3 r5] /where?/")

    assert entry is not None
    assert len(entry.pinyin) == 1
    assert entry.pinyin[0].erhua
    assert entry.pinyin.composed() == "nǎr"
    assert entry.to_row().pinyin_numbered == "na3 r5"


@pytest.mark.parametrize("line", ["# CC-CEDICT", "", "   ", "not a dictionary line"])
def test_parse_cedict_line_ignores_comments_and_malformed_lines(line: str) -> None:
    assert parse_cedict_line(line) is None


def test_extract_additional_pinyin_skips_invalid_readings() -> None:
    alternates = extract_additional_pinyin("variant/also pr. [shui4]/also pr. [xx5]")

    assert [item.composed() for item in alternates] == ["shuì"]


def test_parse_cedict_lines_skips_invalid_pinyin(caplog: pytest.LogCaptureFixture) -> None:
    lines = [
        "# comment\n",
        "某某 某某 [xx5 xx5] /so-and-so/\n",
        "說 说 [shuo1] /to speak/also pr. [shui4]/\n",
    ]

    with caplog.at_level(logging.INFO, logger="pinyin_norm.cedict.parser"):
        entries = parse_cedict_lines(lines)

    assert [entry.simplified for entry in entries] == ["说"]
    assert entries[0].alternates[0].composed() == "shuì"
    assert "Skipped 1 CC-CEDICT lines" in caplog.text


def test_parse_cedict_lines_strict_mode_fails() -> None:
    with pytest.raises(ValueError, match="CC-CEDICT parsing failed with 1 errors"):
        parse_cedict_lines(["某某 某某 [xx5 xx5] /so-and-so/"], strict=True)


def test_iter_rows_flattens_entries() -> None:
    entries = parse_cedict_lines(["愛 爱 [ai4] /to love/"])
    (row,) = list(iter_rows(entries))

    assert row.traditional == "愛"
    assert row.pinyin_cc_cedict == "ai4"
    assert row.pinyin == "a\u0300i"
    assert row.pinyin_numbered == "ai4"
    assert row.definition == "to love"


def test_iter_rows_emits_alternate_readings() -> None:
    entries = parse_cedict_lines(["說 说 [shuo1] /to speak/also pr. [shui4]/"])
    rows = list(iter_rows(entries))

    assert [row.pinyin_cc_cedict for row in rows] == ["shuo1", "shui4"]
    assert [row.pinyin_numbered for row in rows] == ["shuo1", "shui4"]
    assert rows[1].pinyin == "shui\u0300"
    assert {row.definition for row in rows} == {"to speak/also pr. [shui4]"}
