from __future__ import annotations

"""
Column lettering helpers.

Columns are identified by position; for display and for the snapshot wire
format each zero-based index maps to a spreadsheet-style letter using
bijective base-26:

    0 -> A, 25 -> Z, 26 -> AA, 27 -> AB, 701 -> ZZ, 702 -> AAA

These helpers are pure and shared by the store, the snapshot codecs and the UI.
"""

from typing import List


_ALPHABET_SIZE = 26


def column_letter(index: int) -> str:
    """Return the column letter(s) for a zero-based column index."""
    if isinstance(index, bool) or not isinstance(index, int):
        raise TypeError(f"Column index must be an int, got {type(index).__name__}")
    if index < 0:
        raise ValueError(f"Column index must be non-negative, got {index}")
    out = ""
    value = index + 1
    while value > 0:
        value, rem = divmod(value - 1, _ALPHABET_SIZE)
        out = chr(65 + rem) + out
    return out


def column_index(letter: str) -> int:
    """Return the zero-based index for a column letter (case-insensitive).

    Raises ValueError when `letter` is empty or contains non A-Z characters.
    """
    token = str(letter or "").strip().upper()
    if not token or not all("A" <= ch <= "Z" for ch in token):
        raise ValueError(f"Invalid column letter: {letter!r}")
    col = 0
    for ch in token:
        col = col * _ALPHABET_SIZE + (ord(ch) - 64)
    return col - 1


def is_column_letter(value: object) -> bool:
    """True when `value` is a non-empty string made only of A-Z (any case)."""
    if not isinstance(value, str):
        return False
    try:
        column_index(value)
    except ValueError:
        return False
    return True


def column_letters(count: int) -> List[str]:
    """Letters for columns `0..count-1`."""
    return [column_letter(i) for i in range(max(0, int(count)))]


__all__ = [
    "column_letter",
    "column_index",
    "is_column_letter",
    "column_letters",
]
