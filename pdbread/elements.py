"""
Element symbol lookup.

The reader treats element resolution as a collaborator: any callable
``symbol -> Optional[int]`` works. ``atomic_number_from_symbol`` is the
default, backed by the periodic table in ``pdbread.constants``.
"""

from __future__ import annotations
from typing import Callable, Optional

from pdbread.constants import (
    ELEMENT_ALIASES,
    ELEMENT_SYMBOLS,
    SYMBOL_TO_ATOMIC_NUMBER,
)

ElementLookup = Callable[[str], Optional[int]]


def atomic_number_from_symbol(symbol: str) -> Optional[int]:
    """
    Resolve an element symbol to its atomic number.

    Matching is case-insensitive and ignores surrounding whitespace.
    Returns None for blank or unrecognized symbols.
    """
    key = symbol.strip().upper()
    if not key:
        return None
    key = ELEMENT_ALIASES.get(key, key)
    return SYMBOL_TO_ATOMIC_NUMBER.get(key)


def symbol_from_atomic_number(atomic_number: int) -> str:
    """Inverse lookup; returns "X" for 0 or out-of-range numbers."""
    if 1 <= atomic_number <= len(ELEMENT_SYMBOLS):
        return ELEMENT_SYMBOLS[atomic_number - 1]
    return "X"


def infer_symbol_from_name(raw_name: str) -> str:
    """
    Guess an element symbol from the 4-column atom-name field.

    Used for files that leave columns 77-78 blank. PDB right-justifies
    one-letter element symbols inside the name field, so a name starting
    in column 13 (" CA " vs "CA  ") carries a two-letter element. Leading
    digits (hydrogen numbering such as "1HB ") are skipped.
    """
    padded = raw_name.ljust(4)[:4]
    if padded[0].isalpha() and padded[1].isalpha():
        two = padded[:2]
        if atomic_number_from_symbol(two) is not None:
            return two.strip()

    letters = padded.strip().lstrip("0123456789")
    return letters[:1]
