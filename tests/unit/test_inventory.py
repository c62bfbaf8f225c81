"""Unit tests for the pypinyin-backed syllable inventory audit."""

from __future__ import annotations

import pytest

from pinyin_norm import inventory
from pinyin_norm.inventory import audit_inventory, collect_reference_syllables


def test_collect_reference_syllables_dedupes_and_sorts(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        inventory.pypinyin_constants,
        "PINYIN_DICT",
        {0x4E2D: "zhōng,zhòng", 0x91CD: "zhòng,chóng", 0x5417: "Ma"},
    )

    assert collect_reference_syllables() == ["chóng", "ma", "zhòng", "zhōng"]


def test_audit_inventory_records_rejections() -> None:
    report = audit_inventory(["zhōng", "lǚ", "hm", "ê"])

    assert report.checked == 4
    assert report.accepted == 2
    assert {item.syllable: item.kind for item in report.rejected} == {
        "hm": "INVALID_INITIAL",
        "ê": "UNEXPECTED_CHARACTER",
    }
    assert report.kind_counts() == {"INVALID_INITIAL": 1, "UNEXPECTED_CHARACTER": 1}


def test_audit_inventory_flags_readings_that_split() -> None:
    report = audit_inventory(["xian"])

    assert report.accepted == 1

    report = audit_inventory(["nǐhǎo"])

    assert report.rejected[0].kind == "SPLIT"
    assert "2 syllables" in report.rejected[0].message


def test_reference_inventory_is_mostly_accepted() -> None:
    report = audit_inventory()

    assert report.checked > 1000
    assert report.accepted / report.checked > 0.95
