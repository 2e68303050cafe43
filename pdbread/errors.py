"""
Exception hierarchy for PDB reading.

Decoding errors carry their provenance (record kind, field label, raw
column text and line number) so a failed read can report exactly which
columns could not be converted.
"""

from __future__ import annotations
from typing import Optional


class PDBReadError(Exception):
    """Base class for all pdbread errors."""


class ConfigError(PDBReadError, ValueError):
    """Invalid reader configuration."""


class RecordDecodeError(PDBReadError, ValueError):
    """A fixed-column sub-field could not be converted."""

    def __init__(
        self,
        record: str,
        field: str,
        raw: str,
        detail: Optional[str] = None,
        line_number: Optional[int] = None,
    ):
        self.record = record
        self.field = field
        self.raw = raw
        self.detail = detail
        self.line_number = line_number
        super().__init__(self._format())

    def _describe(self) -> str:
        return f"failed to parse {self.field} from {self.raw!r}"

    def _format(self) -> str:
        prefix = f"line {self.line_number}: " if self.line_number is not None else ""
        suffix = f" ({self.detail})" if self.detail else ""
        return f"{prefix}{self.record} record: {self._describe()}{suffix}"

    def at_line(self, line_number: int) -> RecordDecodeError:
        """Attach the line number (extractors only ever see one line)."""
        self.line_number = line_number
        self.args = (self._format(),)
        return self


class UnknownElementError(RecordDecodeError):
    """The trimmed element symbol has no periodic-table entry."""

    def __init__(self, record: str, raw: str, line_number: Optional[int] = None):
        super().__init__(record, "element symbol", raw, line_number=line_number)

    def _describe(self) -> str:
        return f"unknown {self.field} {self.raw!r}"
