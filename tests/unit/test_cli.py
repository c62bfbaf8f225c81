"""Unit tests for the command line entrypoint."""

from __future__ import annotations

from pathlib import Path

import pytest

from pinyin_norm import cli
from pinyin_norm.models import InventoryReport, RejectedSyllable


def test_normalize_prints_composed_pinyin(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["normalize", "ni3", "hao3"]) == 0

    assert capsys.readouterr().out == "nǐ hǎo\n"


def test_normalize_styles(capsys: pytest.CaptureFixture[str]) -> None:
    cli.main(["normalize", "--style", "numbered", "nǚ'ér"])
    cli.main(["normalize", "--style", "combining", "--no-breaks", "ma1 ma"])

    assert capsys.readouterr().out.splitlines() == ["nu:3 er2", "ma\u0304ma"]


def test_normalize_rejects_invalid_pinyin() -> None:
    with pytest.raises(SystemExit, match="Invalid pinyin: Illegal combination 'fai1'"):
        cli.main(["normalize", "fai1"])


def test_encode_then_decode(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "lines.txt"
    source.write_text("# greetings\nni3 hao3\n\nZai4jian4\n", encoding="utf-8")
    binary = tmp_path / "lines.bin"

    cli.main(["encode", "--input", str(source), "--output", str(binary)])
    cli.main(["decode", "--input", str(binary), "--style", "numbered"])

    lines = capsys.readouterr().out.splitlines()
    assert lines == [f"Wrote 2 sequences to {binary}", "ni3 hao3", "Zai4 jian4"]


def test_encode_reports_invalid_lines(tmp_path: Path) -> None:
    source = tmp_path / "lines.txt"
    source.write_text("ni3\nxq1\n", encoding="utf-8")

    with pytest.raises(SystemExit, match="Line 2: Invalid initial"):
        cli.main(["encode", "--input", str(source), "--output", str(tmp_path / "out.bin")])


def test_decode_rejects_corrupt_file(tmp_path: Path) -> None:
    binary = tmp_path / "broken.bin"
    binary.write_bytes(b"\x19")

    with pytest.raises(SystemExit, match="Corrupt pinyin file"):
        cli.main(["decode", "--input", str(binary)])


def test_missing_input_file(tmp_path: Path) -> None:
    with pytest.raises(SystemExit, match="Input not found"):
        cli.main(["decode", "--input", str(tmp_path / "missing.bin")])
    with pytest.raises(SystemExit, match="CC-CEDICT file not found"):
        cli.main(
            ["cedict", "--cedict", str(tmp_path / "missing.u8"), "--output", str(tmp_path / "o")]
        )


def test_cedict_writes_tsv(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "cedict_ts.u8"
    source.write_text(
        "# CC-CEDICT\n愛 爱 [ai4] /to love/\n某某 某某 [xx5 xx5] /so-and-so/\n",
        encoding="utf-8",
    )
    output = tmp_path / "out.tsv"

    cli.main(["cedict", "--cedict", str(source), "--output", str(output), "--no-header"])

    assert capsys.readouterr().out == f"Wrote 1 rows to {output}\n"
    assert output.read_text(encoding="utf-8").split("\t")[:3] == ["愛", "爱", "ai4"]

    with pytest.raises(SystemExit, match="CC-CEDICT parsing failed"):
        cli.main(["cedict", "--cedict", str(source), "--output", str(output), "--strict"])


def test_audit_prints_summary_and_writes_report(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    report = InventoryReport(
        checked=3,
        accepted=2,
        rejected=(RejectedSyllable("hm", "INVALID_INITIAL", "Invalid initial 'hm'"),),
    )
    monkeypatch.setattr(cli, "audit_inventory", lambda: report)
    output = tmp_path / "audit.md"

    assert cli.main(["audit", "--report", str(output)]) == 0

    out = capsys.readouterr().out
    assert "checked | accepted | rejected" in out
    assert "INVALID_INITIAL | 1" in out
    assert output.read_text(encoding="utf-8").startswith("# Syllable Inventory Audit\n")
