"""Interval table formatting.

Renders an ``IntervalTable`` as an ASCII table, Markdown, CSV, or a
JSON-ready dict for downstream plotting and reporting.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any
import json
import logging

from bootfit.validation.results import IntervalTable


_LOGGER = logging.getLogger(__name__)

_HEADERS = ["Term", "Estimate", "Lower", "Upper", "Std. Error"]


def _rows(table: IntervalTable) -> list[list[str]]:
    return [
        [
            i.term,
            f"{i.estimate:.4f}",
            f"{i.lower:.4f}",
            f"{i.upper:.4f}",
            f"{i.std_error:.4f}",
        ]
        for i in table
    ]


def _caption(table: IntervalTable) -> str:
    return (
        f"{table.confidence_level:.0%} {table.method} intervals "
        f"({table.n_resamples} resamples, seed={table.seed})"
    )


def format_table_ascii(table: IntervalTable) -> str:
    rows = _rows(table)
    widths = [max(len(h), *(len(r[i]) for r in rows)) if rows else len(h) for i, h in enumerate(_HEADERS)]

    def fmt_row(cols: list[str]) -> str:
        return " | ".join(col.ljust(widths[i]) for i, col in enumerate(cols))

    sep = "-+-".join("-" * w for w in widths)
    lines = [_caption(table), fmt_row(_HEADERS), sep]
    lines.extend(fmt_row(r) for r in rows)
    return "\n".join(lines)


def format_table_markdown(table: IntervalTable) -> str:
    lines = ["| " + " | ".join(_HEADERS) + " |"]
    lines.append("| " + " | ".join(["---"] * len(_HEADERS)) + " |")
    for r in _rows(table):
        lines.append("| " + " | ".join(r) + " |")
    lines.append("")
    lines.append(f"_{_caption(table)}_")
    return "\n".join(lines)


def format_table_csv(table: IntervalTable) -> str:
    headers = ["term", "point_estimate", "lower", "upper", "std_error", "confidence_level", "n_resamples"]
    out_lines = [",".join(headers)]
    for i in table:
        term = '"' + i.term.replace('"', '""') + '"' if ("," in i.term or '"' in i.term) else i.term
        out_lines.append(
            ",".join(
                [
                    term,
                    f"{i.estimate:.6f}",
                    f"{i.lower:.6f}",
                    f"{i.upper:.6f}",
                    f"{i.std_error:.6f}",
                    f"{table.confidence_level:.4f}",
                    str(table.n_resamples),
                ]
            )
        )
    return "\n".join(out_lines)


def format_intervals(table: IntervalTable, output_format: str = "table") -> str | dict[str, Any]:
    """Format ``table`` as one of {"table", "markdown", "csv", "json"}."""

    fmt = output_format.lower()
    if fmt == "json":
        return table.to_dict()
    if fmt == "csv":
        return format_table_csv(table)
    if fmt == "markdown":
        return format_table_markdown(table)
    if fmt != "table":
        raise ValueError(f"unknown output format: {output_format!r}")
    return format_table_ascii(table)


def save_results(table: IntervalTable, output_path: Path, extra: dict[str, Any] | None = None) -> Path:
    """Write ``table`` (plus ``extra`` provenance keys) as JSON to ``output_path``."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = table.to_dict()
    if extra:
        payload.update(extra)
    with output_path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)
    _LOGGER.info("Results saved to %s", output_path)
    return output_path


__all__ = [
    "format_intervals",
    "format_table_ascii",
    "format_table_markdown",
    "format_table_csv",
    "save_results",
]
