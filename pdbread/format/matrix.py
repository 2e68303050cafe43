"""
Accumulation of BIOMT / SMTRY rows into 4x4 transforms.

Each transform kind owns an independent in-progress matrix. Rows arrive
one line at a time; writing row 2 (the third row) completes the operator,
which is moved into that kind's output list and replaced by a fresh
identity matrix.

Scoping: the in-progress matrix is reset to identity whenever row 0
arrives, so a truncated operator never leaks rows into the next one.
Completed lists live for the whole read. Row order inside an operator is
not re-validated: a block that jumps straight to row 2 completes with
identity rows where rows were never supplied.
"""

from __future__ import annotations
from typing import Sequence
import logging

import numpy as np

from pdbread.errors import RecordDecodeError

logger = logging.getLogger(__name__)

LAST_ROW = 2


def identity() -> np.ndarray:
    return np.eye(4, dtype=np.float64)


class MatrixAccumulator:
    """
    In-progress and completed transforms, one slot per kind.

    Usage::

        acc = MatrixAccumulator(("BIOMT", "SMTRY"))
        acc.supply_row("BIOMT", 0, [1.0, 0.0, 0.0, 0.0])
        acc.supply_row("BIOMT", 1, [0.0, 1.0, 0.0, 0.0])
        done = acc.supply_row("BIOMT", 2, [0.0, 0.0, 1.0, 0.0])
        acc.completed("BIOMT")   # [array(4x4)]
    """

    def __init__(self, kinds: Sequence[str]):
        self._current: dict[str, np.ndarray] = {k: identity() for k in kinds}
        self._rows_seen: dict[str, int] = {k: 0 for k in kinds}
        self._completed: dict[str, list[np.ndarray]] = {k: [] for k in kinds}

    @property
    def kinds(self) -> list[str]:
        return list(self._current)

    def supply_row(self, kind: str, row_index: int, columns: Sequence[float]) -> bool:
        """
        Write one row of the ``kind`` operator.

        Args:
            kind: Transform kind (e.g. "BIOMT").
            row_index: 0-based row, 0..2.
            columns: Three rotation entries followed by the translation.

        Returns:
            True if this row completed a matrix.

        Raises:
            RecordDecodeError: If ``row_index`` is outside 0..2.
        """
        if kind not in self._current:
            raise KeyError(f"Unknown transform kind '{kind}'. Known: {self.kinds}")
        if not 0 <= row_index <= LAST_ROW:
            raise RecordDecodeError(
                kind, "row index", str(row_index + 1), detail="expected 1, 2 or 3",
            )
        if len(columns) != 4:
            raise ValueError(f"Expected 4 columns, got {len(columns)}")

        if row_index == 0:
            if self._rows_seen[kind]:
                logger.debug("%s operator restarted after %d row(s)", kind, self._rows_seen[kind])
            self._current[kind] = identity()
            self._rows_seen[kind] = 0

        self._current[kind][row_index, :] = columns
        self._rows_seen[kind] += 1

        if row_index == LAST_ROW:
            matrix = self._current[kind]
            self._completed[kind].append(matrix)
            self._current[kind] = identity()
            self._rows_seen[kind] = 0
            logger.debug("%s operator %d completed", kind, len(self._completed[kind]))
            return True
        return False

    def in_progress(self, kind: str) -> np.ndarray:
        """Copy of the current partial matrix (identity when idle)."""
        return self._current[kind].copy()

    def completed(self, kind: str) -> list[np.ndarray]:
        return self._completed[kind]

    def pending_rows(self, kind: str) -> int:
        """Rows written to the current operator that have not completed it."""
        return self._rows_seen[kind]
