"""TSV write helpers for normalized dictionary output."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from pinyin_norm.models import NormalizedRow

TSV_HEADER = [
    "traditional",
    "simplified",
    "pinyin_cc-cedict",
    "pinyin",
    "pinyin_numbered",
    "definition",
]


def write_tsv(rows: Iterable[NormalizedRow], output_path: Path, include_header: bool = True) -> int:
    """Write normalized rows to a TSV file using the canonical column order.

    Args:
        rows: Rows to serialize.
        output_path: Destination TSV file path.
        include_header: Whether to include a header row.

    Returns:
        Number of data rows written.
    """

    count = 0
    with output_path.open("w", encoding="utf-8") as handle:
        if include_header:
            handle.write("\t".join(TSV_HEADER))
            handle.write("\n")
        for row in rows:
            handle.write(
                "\t".join(
                    [
                        row.traditional,
                        row.simplified,
                        row.pinyin_cc_cedict,
                        row.pinyin,
                        row.pinyin_numbered,
                        row.definition,
                    ]
                )
            )
            handle.write("\n")
            count += 1
    return count
