"""
Tab-separated table reading and writing.

Profiles, rule files and result tables are plain TSV without quoting, so
regular expressions in cells (quotes, backslashes) survive unchanged.
Result tables may escape tabs and line breaks so that arbitrary input
strings fit in a cell.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterable, Mapping, Sequence

__all__ = ["read_tsv", "read_tsv_rows", "write_tsv", "escape_cell"]


def read_tsv_rows(path: str | Path) -> list[list[str]]:
    """Read a TSV file as raw rows, skipping blank lines."""
    with open(path, "r", encoding="utf-8", newline="") as f:
        reader = csv.reader(f, delimiter="\t", quoting=csv.QUOTE_NONE)
        return [row for row in reader if any(cell for cell in row)]


def read_tsv(path: str | Path) -> list[dict[str, str]]:
    """
    Read a TSV file with a header row.

    Short rows are padded with empty cells.

    Returns:
        List of dicts keyed by header names
    """
    rows = read_tsv_rows(path)
    if not rows:
        return []
    header, body = rows[0], rows[1:]
    # A UTF-8 BOM written by spreadsheet programs ends up in the first name
    header[0] = header[0].lstrip("\ufeff")
    records = []
    for row in body:
        row = row + [""] * (len(header) - len(row))
        records.append(dict(zip(header, row)))
    return records


# Visible stand-ins for characters that would break the table layout
_ESCAPES = {"\t": "\\t", "\n": "\\n", "\r": "\\r"}


def escape_cell(cell: str) -> str:
    """Replace tabs and line breaks by ``\\t``, ``\\n`` and ``\\r``."""
    for char, escaped in _ESCAPES.items():
        cell = cell.replace(char, escaped)
    return cell


def write_tsv(
    path: str | Path,
    records: Iterable[Mapping[str, str]],
    columns: Sequence[str],
    escape: bool = False,
) -> None:
    """
    Write records as a TSV file with a header row.

    Args:
        path: Destination file
        records: Rows keyed by column name
        columns: Column order
        escape: Write tabs and line breaks inside cells as ``\\t``, ``\\n``
            and ``\\r`` instead of rejecting them

    Raises:
        ValueError: If a cell contains a tab or a line break and escape
            is off
    """
    path = Path(path)
    lines = ["\t".join(columns)]
    for record in records:
        cells = [record.get(column, "") or "" for column in columns]
        if escape:
            cells = [escape_cell(cell) for cell in cells]
        for cell in cells:
            if "\t" in cell or "\n" in cell or "\r" in cell:
                raise ValueError(f"Cell cannot contain tabs or line breaks: {cell!r}")
        lines.append("\t".join(cells))
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write("\n".join(lines) + "\n")
