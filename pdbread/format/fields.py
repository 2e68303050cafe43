"""
Fixed-column field extraction.

Slices each sub-field out of a record line, trims it and converts it
according to its ``FieldSpec``. Failures raise ``RecordDecodeError``
with the record kind, the field label and the raw un-trimmed text.
"""

from __future__ import annotations
from typing import Any, Callable, Optional
import logging
import re

from pdbread.errors import RecordDecodeError
from pdbread.format.layouts import FieldPolicy, FieldSpec, RecordLayout

logger = logging.getLogger(__name__)

_CHARGE_TRAILING = re.compile(r"^(\d)([+-])$", re.ASCII)
_CHARGE_LEADING = re.compile(r"^([+-]?)(\d)$", re.ASCII)

# Plain decimal text only: no nan/inf, digit separators or non-ASCII digits.
_INT_TEXT = re.compile(r"^[+-]?\d+$", re.ASCII)
_FLOAT_TEXT = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$", re.ASCII)


def parse_charge(text: str) -> int:
    """Convert a PDB formal charge ("2+", "1-", "+1", "0") to an int."""
    m = _CHARGE_TRAILING.match(text)
    if m:
        value = int(m.group(1))
        return -value if m.group(2) == "-" else value
    m = _CHARGE_LEADING.match(text)
    if m:
        value = int(m.group(2))
        return -value if m.group(1) == "-" else value
    raise ValueError(f"invalid formal charge: {text!r}")


def _parse_int(text: str) -> int:
    if not _INT_TEXT.match(text):
        raise ValueError(f"not an integer: {text!r}")
    return int(text)


def _parse_float(text: str) -> float:
    if not _FLOAT_TEXT.match(text):
        raise ValueError(f"not a decimal number: {text!r}")
    return float(text)


def _parse_char(text: str) -> str:
    if len(text) != 1:
        raise ValueError(f"expected a single character, got {text!r}")
    return text


_CONVERTERS: dict[str, Callable[[str], Any]] = {
    "int": _parse_int,
    "float": _parse_float,
    "char": _parse_char,
    "str": str,
    "charge": parse_charge,
}


def slice_field(line: str, spec: FieldSpec) -> str:
    """Raw column text; columns past the end of a short line read as blank."""
    return line[spec.start:spec.end]


def extract_field(
    line: str,
    spec: FieldSpec,
    record: str,
    strict: bool = True,
    warnings: Optional[list[str]] = None,
) -> Any:
    """
    Extract and convert a single field.

    Args:
        line: Full record line (newline already stripped).
        spec: Column range, converter kind and policy.
        record: Record kind used in diagnostics (e.g. "ATOM").
        strict: In lenient mode (False), INFORMATIONAL fields that fail
            to convert become None instead of raising.
        warnings: Optional list collecting lenient-mode recoveries.

    Returns:
        The converted value, or None for an absent optional field.

    Raises:
        RecordDecodeError: On a blank mandatory field or a conversion
            failure the policy does not tolerate.
    """
    raw = slice_field(line, spec)
    text = raw.strip()

    if not text:
        if spec.policy is FieldPolicy.MANDATORY:
            raise RecordDecodeError(record, spec.label, raw, detail="blank")
        return None

    try:
        return _CONVERTERS[spec.kind](text)
    except ValueError:
        if not strict and spec.policy is FieldPolicy.INFORMATIONAL:
            message = f"{record} record: ignoring unparsable {spec.label} {raw!r}"
            logger.warning(message)
            if warnings is not None:
                warnings.append(message)
            return None
        raise RecordDecodeError(record, spec.label, raw) from None


def extract_fields(
    line: str,
    layout: RecordLayout,
    record: Optional[str] = None,
    strict: bool = True,
    warnings: Optional[list[str]] = None,
) -> dict[str, Any]:
    """Extract every field of ``layout``; first failure aborts."""
    record = record or layout.record
    return {
        spec.name: extract_field(line, spec, record, strict, warnings)
        for spec in layout.fields
    }
