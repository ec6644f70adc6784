"""
CSV parser for published spreadsheet exports.

Best-effort parser: quoted fields, escaped quotes and embedded commas are
handled; malformed quoting never raises. Newlines inside quoted fields are
not supported, since lines are split before scanning.
"""

from __future__ import annotations
from typing import Dict, List
import re

Row = Dict[str, str]

_BOM = "\ufeff"
_LINE_BREAK = re.compile(r"\r?\n")


class CsvParser:
    """Turns CSV text into a list of rows keyed by the header line."""

    @staticmethod
    def split_line(line: str) -> List[str]:
        """
        Split one CSV line into raw cells.

        A double quote toggles quoted mode; inside quoted mode a doubled quote
        is a literal quote. Commas separate fields only outside quotes. An
        unterminated quote consumes the rest of the line.

        Example:
            >>> CsvParser.split_line('a,"Moscow, Russia","say ""hi"" now"')
            ['a', 'Moscow, Russia', 'say "hi" now']
        """
        cells: List[str] = []
        current: List[str] = []
        in_quotes = False
        i = 0
        length = len(line)
        while i < length:
            ch = line[i]
            if ch == '"':
                if in_quotes and i + 1 < length and line[i + 1] == '"':
                    current.append('"')
                    i += 1
                else:
                    in_quotes = not in_quotes
            elif ch == "," and not in_quotes:
                cells.append("".join(current))
                current = []
            else:
                current.append(ch)
            i += 1
        cells.append("".join(current))
        return cells

    @classmethod
    def parse(cls, text: str) -> List[Row]:
        """
        Parse CSV text into rows.

        Blank and whitespace-only lines are dropped before parsing, so a data
        row made of one empty cell cannot be told apart from a blank line.
        Missing trailing cells become empty strings; extra cells are ignored.

        Args:
            text (str): Raw CSV document

        Returns:
            List[Row]: One dict per data line, header -> trimmed value
        """
        if text.startswith(_BOM):
            text = text[len(_BOM):]
        lines = [line for line in _LINE_BREAK.split(text) if line.strip()]
        if not lines:
            return []

        headers = [h.strip() for h in cls.split_line(lines[0])]
        rows: List[Row] = []
        for line in lines[1:]:
            cells = cls.split_line(line)
            if len(cells) == 1 and cells[0] == "":
                continue
            row: Row = {}
            for idx, header in enumerate(headers):
                row[header] = cells[idx].strip() if idx < len(cells) else ""
            rows.append(row)
        return rows
