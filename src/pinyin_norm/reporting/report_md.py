"""Markdown report generation for syllable inventory audits."""

from __future__ import annotations

from typing import Iterable, Sequence

from pinyin_norm.models import InventoryReport
from pinyin_norm.phonology.tables import Initial
from pinyin_norm.phonology.validity import legal_finals, legal_syllable_count


def _markdown_table(headers: Sequence[str], rows: Iterable[Sequence[str]]) -> str:
    """Render a deterministic GitHub-flavored markdown table.

    Args:
        headers: Table header labels.
        rows: Table body rows as string sequences.

    Returns:
        Markdown table text.
    """

    line_header = "| " + " | ".join(headers) + " |"
    line_sep = "| " + " | ".join("---" for _ in headers) + " |"
    body = ["| " + " | ".join(row) + " |" for row in rows]
    return "\n".join([line_header, line_sep, *body])


def build_audit_report_md(report: InventoryReport) -> str:
    """Build the markdown report for one inventory audit.

    Args:
        report: Audit result from :func:`pinyin_norm.inventory.audit_inventory`.

    Returns:
        Full markdown content with summary tables.
    """

    summary_rows = [
        ("checked", str(report.checked)),
        ("accepted", str(report.accepted)),
        ("rejected", str(len(report.rejected))),
        ("legal initial/final pairs", str(legal_syllable_count())),
    ]

    kind_counts = report.kind_counts()
    kind_rows = [
        (kind, str(kind_counts[kind]))
        for kind in sorted(kind_counts, key=lambda item: (-kind_counts[item], item))
    ]

    initial_rows = [
        (initial.spelling or "(empty)", initial.place.name, str(len(legal_finals(initial))))
        for initial in Initial
    ]

    rejected_rows = [
        (item.syllable, item.kind, item.message.replace("|", "\\|"))
        for item in sorted(report.rejected, key=lambda item: (item.kind, item.syllable))
    ]

    sections = [
        "# Syllable Inventory Audit",
        "",
        "## Summary",
        _markdown_table(["metric", "value"], summary_rows),
        "",
        "## Legal finals per initial",
        _markdown_table(["initial", "place", "legal_finals"], initial_rows),
        "",
        "## Rejections by error kind",
        _markdown_table(["kind", "count"], kind_rows),
        "",
        "## Rejected syllables",
        _markdown_table(["syllable", "kind", "message"], rejected_rows),
    ]

    return "\n".join(sections) + "\n"
