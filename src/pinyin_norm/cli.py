"""CLI entrypoint for pinyin normalization, binary encoding and audits."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

from pinyin_norm.cedict.parser import iter_rows, parse_cedict_lines
from pinyin_norm.errors import PinyinParseError
from pinyin_norm.inventory import audit_inventory
from pinyin_norm.io.binary_io import read_sequences, write_sequences
from pinyin_norm.io.tsv_io import write_tsv
from pinyin_norm.pinyin_string import PinyinString
from pinyin_norm.reporting.report_md import build_audit_report_md
from pinyin_norm.scanner import parse_pinyin
from pinyin_norm.validation import parse_pinyin_lines

_LOGGER = logging.getLogger(__name__)


def _resolve_default_cedict_path() -> Path:
    """Resolve default CC-CEDICT path from project layout.

    Returns:
        Preferred dictionary path, favoring ``data/cedict_ts.u8`` when present
        and falling back to project-root ``cedict_ts.u8``.
    """

    cwd_data = Path("data") / "cedict_ts.u8"
    if cwd_data.exists():
        return cwd_data
    return Path("cedict_ts.u8")


def _format_table(headers: Sequence[str], data_rows: Sequence[Sequence[str]]) -> str:
    """Format rows as an ASCII table for terminal output.

    Args:
        headers: Table headers.
        data_rows: Row values.

    Returns:
        Monospace table string.
    """

    widths = [len(header) for header in headers]
    for row in data_rows:
        for idx, value in enumerate(row):
            widths[idx] = max(widths[idx], len(value))

    header_line = " | ".join(header.ljust(widths[idx]) for idx, header in enumerate(headers))
    separator_line = "-+-".join("-" * width for width in widths)
    body_lines = [
        " | ".join(value.ljust(widths[idx]) for idx, value in enumerate(row)) for row in data_rows
    ]
    return "\n".join([header_line, separator_line, *body_lines])


def _render(sequence: PinyinString, style: str) -> str:
    if style == "composed":
        return sequence.composed()
    if style == "numbered":
        return sequence.numbered()
    return str(sequence)


def build_arg_parser() -> argparse.ArgumentParser:
    """Construct CLI argument parser.

    Returns:
        Configured parser with one subcommand per workflow.
    """

    parser = argparse.ArgumentParser(
        description="Normalize tone-number and CC-CEDICT pinyin into diacritic pinyin."
    )
    parser.add_argument("--debug", action="store_true", help="Print DEBUG messages to console.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    style_parent = argparse.ArgumentParser(add_help=False)
    style_parent.add_argument(
        "--style",
        choices=("combining", "composed", "numbered"),
        default="composed",
        help="Output form: combining marks, precomposed glyphs, or tone numbers.",
    )

    normalize = subparsers.add_parser(
        "normalize", parents=[style_parent], help="Normalize pinyin given as arguments."
    )
    normalize.add_argument("text", nargs="+", help="Pinyin text, e.g. 'ni3 hao3'.")
    normalize.add_argument(
        "--no-breaks",
        action="store_true",
        help="Drop word breaks (spaces, '·', ',') from the output.",
    )

    encode = subparsers.add_parser("encode", help="Encode pinyin lines into a binary file.")
    encode.add_argument("--input", required=True, type=Path, help="Text file, one entry per line.")
    encode.add_argument("--output", required=True, type=Path, help="Destination binary file.")
    encode.add_argument("--no-breaks", action="store_true", help="Do not store word breaks.")

    decode = subparsers.add_parser(
        "decode", parents=[style_parent], help="Print pinyin stored in a binary file."
    )
    decode.add_argument("--input", required=True, type=Path, help="Binary file from 'encode'.")

    cedict = subparsers.add_parser("cedict", help="Convert a CC-CEDICT file into TSV.")
    cedict.add_argument(
        "--cedict",
        type=Path,
        default=_resolve_default_cedict_path(),
        help="Path to CC-CEDICT .u8 file.",
    )
    cedict.add_argument("--output", required=True, type=Path, help="Destination TSV output path.")
    cedict.add_argument(
        "--strict",
        action="store_true",
        help="Fail on entries whose pinyin cannot be parsed instead of skipping them.",
    )
    cedict.add_argument("--no-header", action="store_true", help="Do not write TSV header.")

    audit = subparsers.add_parser(
        "audit", help="Check the syllable table against pypinyin's reading inventory."
    )
    audit.add_argument(
        "--report",
        type=Path,
        default=None,
        help="Markdown report output path (default: print summary only).",
    )
    return parser


def _run_normalize(args: argparse.Namespace) -> int:
    text = " ".join(args.text)
    try:
        sequence = parse_pinyin(text, keep_word_breaks=not args.no_breaks)
    except PinyinParseError as exc:
        raise SystemExit(f"Invalid pinyin: {exc}") from exc
    print(_render(sequence, args.style))
    return 0


def _run_encode(args: argparse.Namespace) -> int:
    if not args.input.exists():
        raise SystemExit(f"Input not found: {args.input}")
    with args.input.open("r", encoding="utf-8") as handle:
        try:
            sequences = parse_pinyin_lines(handle, keep_word_breaks=not args.no_breaks)
        except ValueError as exc:
            raise SystemExit(str(exc)) from exc
    count = write_sequences(sequences, args.output)
    print(f"Wrote {count} sequences to {args.output}")
    return 0


def _run_decode(args: argparse.Namespace) -> int:
    if not args.input.exists():
        raise SystemExit(f"Input not found: {args.input}")
    try:
        sequences = read_sequences(args.input)
    except (EOFError, ValueError) as exc:
        raise SystemExit(f"Corrupt pinyin file {args.input}: {exc}") from exc
    for sequence in sequences:
        print(_render(sequence, args.style))
    return 0


def _run_cedict(args: argparse.Namespace) -> int:
    if not args.cedict.exists():
        raise SystemExit(f"CC-CEDICT file not found: {args.cedict}")
    with args.cedict.open("r", encoding="utf-8") as handle:
        try:
            entries = parse_cedict_lines(handle, strict=args.strict)
        except ValueError as exc:
            raise SystemExit(str(exc)) from exc
    count = write_tsv(
        iter_rows(entries), output_path=args.output, include_header=not args.no_header
    )
    print(f"Wrote {count} rows to {args.output}")
    return 0


def _run_audit(args: argparse.Namespace) -> int:
    report = audit_inventory()
    print(
        _format_table(
            ["checked", "accepted", "rejected"],
            [[str(report.checked), str(report.accepted), str(len(report.rejected))]],
        )
    )
    kind_counts = report.kind_counts()
    if kind_counts:
        print("\nRejections by error kind:")
        print(
            _format_table(
                ["kind", "count"],
                [[kind, str(count)] for kind, count in sorted(kind_counts.items())],
            )
        )
    if args.report is not None:
        args.report.write_text(build_audit_report_md(report), encoding="utf-8")
        print(f"\nWrote report to {args.report}")
    return 0


_COMMANDS = {
    "normalize": _run_normalize,
    "encode": _run_encode,
    "decode": _run_decode,
    "cedict": _run_cedict,
    "audit": _run_audit,
}


def main(argv: Sequence[str] | None = None) -> int:
    """Run the selected CLI workflow.

    Args:
        argv: Arguments without the program name; defaults to ``sys.argv``.

    Returns:
        Zero exit status on success.
    """

    parser = build_arg_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO)
    _LOGGER.debug(args)
    return _COMMANDS[args.command](args)


if __name__ == "__main__":
    raise SystemExit(main())
