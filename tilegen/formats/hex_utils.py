"""
Tilegen - Hex String Utilities

Parsing and formatting of the space-separated hex rows used to store packed
atlas words in map files.
"""

from typing import List, Sequence


def parse_hex_row(row_str: str) -> List[int]:
    """
    Parse space-separated hex string to list of integers.

    Example:
        >>> parse_hex_row("0000001B FFFFFFFF")
        [27, 4294967295]

    Raises:
        ValueError: If a field is not valid hex
    """
    return [int(x, 16) for x in row_str.split()]


def format_hex_row(row: Sequence[int], digits: int = 8) -> str:
    """
    Format integers as a space-separated, zero-padded uppercase hex string.

    Args:
        row: Values to format
        digits: Hex digits per value (8 for 32-bit words)

    Example:
        >>> format_hex_row([27, 4294967295])
        '0000001B FFFFFFFF'
    """
    return " ".join(f"{int(v):0{digits}X}" for v in row)


def parse_hex_rows(rows: List[str]) -> List[int]:
    """Parse hex rows and concatenate their values into one flat list."""
    values: List[int] = []
    for row in rows:
        values.extend(parse_hex_row(row))
    return values


def format_hex_rows(values: Sequence[int], per_row: int, digits: int = 8) -> List[str]:
    """
    Split values into rows of per_row entries and format each as hex.

    The final row may be shorter.
    """
    if per_row <= 0:
        raise ValueError(f"per_row must be positive, got {per_row}")
    return [
        format_hex_row(values[start : start + per_row], digits)
        for start in range(0, len(values), per_row)
    ]
