"""Filtering of symbols the reader can already see."""

from __future__ import annotations

from .models import LineRange, Symbol


def filter_visible_symbols(
    symbols: list[Symbol], line_range: LineRange, total_lines: int
) -> list[Symbol]:
    """Drop entry-file symbols whose declaration lies inside a partial read window.

    Imported symbols and symbols without line bounds are always kept.
    """
    first = line_range.offset
    last = min(line_range.end, total_lines) - 1

    remaining: list[Symbol] = []
    for symbol in symbols:
        if (
            not symbol.is_imported
            and symbol.line_start is not None
            and symbol.line_end is not None
            and first <= symbol.line_start
            and symbol.line_end <= last
        ):
            continue
        remaining.append(symbol)
    return remaining
