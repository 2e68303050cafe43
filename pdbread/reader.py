"""
PDB reader: one synchronous pass over a line stream.

Each line is classified by the dispatcher and handed to its extractor.
Atoms go straight into the molecule sink; CONECT, HELIX and SHEET records
are collected as plain values; BIOMT/SMTRY rows feed the matrix
accumulator. The read stops successfully on a terminator record or at the
end of the stream, and stops with a failure on the first fatal decoding
error. Atoms added before a failure stay in the molecule; callers should
discard it when ``result.success`` is False.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Iterator, Optional
import logging

import numpy as np

from pdbread.config import ReaderConfig
from pdbread.constants import UNKNOWN_ATOMIC_NUMBER
from pdbread.elements import ElementLookup, atomic_number_from_symbol, infer_symbol_from_name
from pdbread.errors import RecordDecodeError, UnknownElementError
from pdbread.filters import AltLocSelector, AtomPredicate
from pdbread.format.dispatch import RecordDispatcher, default_keywords
from pdbread.format.layouts import FORMAT_VARIANTS, RecordKind, RecordLayout
from pdbread.format.matrix import MatrixAccumulator
from pdbread.format.records import (
    AtomRecord,
    ConnectRecord,
    HelixRecord,
    SheetRecord,
    parse_atom,
    parse_connect,
    parse_helix,
    parse_sheet,
    parse_transform,
)
from pdbread.molecule import Molecule, MoleculeSink
from pdbread.storage import open_text

logger = logging.getLogger(__name__)

TRANSFORM_KINDS = (RecordKind.BIOMT.value, RecordKind.SMTRY.value)


@dataclass
class ReadResult:
    """Outcome of one read. ``bool(result)`` is ``result.success``."""
    molecule: Any
    success: bool = True
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    biomt_matrices: list[np.ndarray] = field(default_factory=list)
    smtry_matrices: list[np.ndarray] = field(default_factory=list)
    connections: list[ConnectRecord] = field(default_factory=list)
    helices: list[HelixRecord] = field(default_factory=list)
    sheets: list[SheetRecord] = field(default_factory=list)
    serial_to_index: dict[int, int] = field(default_factory=dict)
    atoms_added: int = 0
    atoms_skipped: int = 0
    lines_read: int = 0
    terminated: bool = False

    def __bool__(self) -> bool:
        return self.success

    @staticmethod
    def _stack(matrices: list[np.ndarray]) -> np.ndarray:
        if not matrices:
            return np.zeros((0, 4, 4), dtype=np.float64)
        return np.stack(matrices)

    @property
    def biomt_stack(self) -> np.ndarray:
        """Biological-assembly operators as [N, 4, 4]."""
        return self._stack(self.biomt_matrices)

    @property
    def smtry_stack(self) -> np.ndarray:
        """Crystallographic symmetry operators as [N, 4, 4]."""
        return self._stack(self.smtry_matrices)

    def summary(self) -> dict:
        return {
            "success": self.success,
            "atoms": self.atoms_added,
            "atoms_skipped": self.atoms_skipped,
            "connections": len(self.connections),
            "helices": len(self.helices),
            "sheets": len(self.sheets),
            "biomt": len(self.biomt_matrices),
            "smtry": len(self.smtry_matrices),
            "lines_read": self.lines_read,
            "terminated": self.terminated,
            "errors": list(self.errors),
            "warnings": len(self.warnings),
        }


def iter_lines(stream: Iterable[str]) -> Iterator[tuple[int, str]]:
    """Yield ``(line_number, line)`` with line endings removed (1-based)."""
    for number, line in enumerate(stream, start=1):
        yield number, line.rstrip("\r\n")


class _ReadState:
    """Everything that lives for exactly one ``read`` call."""

    def __init__(self, molecule: MoleculeSink, atom_filter: AtomPredicate, altloc: str):
        self.molecule = molecule
        self.result = ReadResult(molecule=molecule)
        self.accumulator = MatrixAccumulator(TRANSFORM_KINDS)
        self.atom_filter = atom_filter
        self.altloc = AltLocSelector(altloc)
        self.line_number = 0

    def warn(self, message: str) -> None:
        message = f"line {self.line_number}: {message}"
        logger.warning(message)
        self.result.warnings.append(message)


class PDBReader:
    """
    Column-exact reader for PDB files.

    Usage::

        reader = PDBReader()
        result = reader.read_file("1abc.pdb")
        if result:
            mol = result.molecule
            print(mol.num_atoms, len(result.biomt_matrices))
        else:
            print(result.errors)

        # Backbone trace only, tolerant of bad informational columns
        reader = PDBReader(ReaderConfig(strict=False, atom_names=["CA", "O"]))

    Args:
        config: Reader options; defaults to ``ReaderConfig()``.
        element_lookup: Callable mapping an element symbol to its atomic
            number or None. Defaults to the built-in periodic table.
    """

    def __init__(
        self,
        config: Optional[ReaderConfig] = None,
        element_lookup: Optional[ElementLookup] = None,
    ):
        self.config = config or ReaderConfig()
        self.element_lookup = element_lookup or atomic_number_from_symbol
        self.variant = FORMAT_VARIANTS[self.config.variant]
        self.layouts = self.config.layouts()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def read(self, stream: Iterable[str], molecule: MoleculeSink) -> ReadResult:
        """
        Read records from ``stream`` into ``molecule``.

        Args:
            stream: Any iterable of lines (open file, list of str, ...).
            molecule: Sink receiving ``add_atom`` calls.

        Returns:
            ReadResult with the collected records and transforms.
        """
        state = _ReadState(molecule, self.config.build_atom_filter(), self.config.altloc)
        result = state.result
        dispatcher = self._build_dispatcher(state)

        for number, line in iter_lines(stream):
            state.line_number = number
            result.lines_read = number
            n_warnings = len(result.warnings)
            try:
                kind = dispatcher.dispatch(line)
            except RecordDecodeError as e:
                e.at_line(number)
                logger.error("%s", e)
                result.errors.append(str(e))
                result.success = False
                break
            finally:
                # Lenient-mode field warnings are raised without a line number
                for i in range(n_warnings, len(result.warnings)):
                    if not result.warnings[i].startswith("line "):
                        result.warnings[i] = f"line {number}: {result.warnings[i]}"
            if kind is RecordKind.TERMINATOR:
                logger.debug("Terminator at line %d: %s", number, line.strip())
                result.terminated = True
                break

        result.biomt_matrices = state.accumulator.completed(RecordKind.BIOMT.value)
        result.smtry_matrices = state.accumulator.completed(RecordKind.SMTRY.value)
        if result.success:
            for kind in TRANSFORM_KINDS:
                pending = state.accumulator.pending_rows(kind)
                if pending:
                    state.warn(f"incomplete {kind} operator discarded ({pending} of 3 rows)")

        logger.info(
            "Read %d lines: %d atoms (%d skipped), %d CONECT, %d HELIX, %d SHEET, "
            "%d BIOMT, %d SMTRY%s",
            result.lines_read, result.atoms_added, result.atoms_skipped,
            len(result.connections), len(result.helices), len(result.sheets),
            len(result.biomt_matrices), len(result.smtry_matrices),
            "" if result.success else " [FAILED]",
        )
        return result

    def read_text(self, text: str, molecule: Optional[MoleculeSink] = None) -> ReadResult:
        """Read from a string (file contents)."""
        return self.read(text.splitlines(), molecule if molecule is not None else Molecule())

    def read_file(
        self,
        path: str,
        molecule: Optional[MoleculeSink] = None,
        storage_options: Optional[dict] = None,
    ) -> ReadResult:
        """Read from a local or remote file path (``.gz`` is decompressed)."""
        if molecule is None:
            molecule = Molecule(name=_structure_name(path))
        logger.debug("Reading %s", path)
        with open_text(path, storage_options) as f:
            return self.read(f, molecule)

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def _build_dispatcher(self, state: _ReadState) -> RecordDispatcher:
        keywords = default_keywords(self.config.accept_hetatm, self.config.terminators)
        dispatcher = RecordDispatcher(keywords)
        dispatcher.register(RecordKind.ATOM, lambda line: self._on_atom(line, RecordKind.ATOM, state))
        dispatcher.register(RecordKind.HETATM, lambda line: self._on_atom(line, RecordKind.HETATM, state))
        dispatcher.register(RecordKind.CONECT, lambda line: self._on_connect(line, state))
        dispatcher.register(RecordKind.HELIX, lambda line: self._on_helix(line, state))
        dispatcher.register(RecordKind.SHEET, lambda line: self._on_sheet(line, state))
        dispatcher.register(RecordKind.BIOMT, lambda line: self._on_transform(line, RecordKind.BIOMT, state))
        dispatcher.register(RecordKind.SMTRY, lambda line: self._on_transform(line, RecordKind.SMTRY, state))
        return dispatcher

    def _on_atom(self, line: str, kind: RecordKind, state: _ReadState) -> None:
        layout = self.layouts[RecordKind.ATOM.value]
        record = parse_atom(line, layout, kind.value, self.config.strict, state.result.warnings)

        if not state.atom_filter(record) or not state.altloc(record):
            state.result.atoms_skipped += 1
            return

        atomic_number = self._resolve_element(record, line, layout, state)
        if atomic_number is None:
            state.result.atoms_skipped += 1
            return

        atom = state.molecule.add_atom(atomic_number)
        atom.set_position(record.position)
        atom.set_name(record.name)
        state.result.serial_to_index[record.serial] = atom.index
        state.result.atoms_added += 1

    def _resolve_element(
        self,
        record: AtomRecord,
        line: str,
        layout: RecordLayout,
        state: _ReadState,
    ) -> Optional[int]:
        """Atomic number for ``record``; None means the atom is skipped."""
        symbol = record.element
        if not symbol and self.config.infer_element:
            name_spec = layout["name"]
            symbol = infer_symbol_from_name(line[name_spec.start:name_spec.end])

        atomic_number = self.element_lookup(symbol) if symbol else None
        if atomic_number is not None:
            return atomic_number

        element_spec = layout["element"]
        raw = line[element_spec.start:element_spec.end]
        policy = self.config.unknown_element
        if policy == "reject":
            raise UnknownElementError(record.record, raw)
        if policy == "skip":
            state.warn(f"{record.record} {record.serial}: unknown element {raw!r}, atom skipped")
            return None
        state.warn(f"{record.record} {record.serial}: unknown element {raw!r}, using atomic number 0")
        return UNKNOWN_ATOMIC_NUMBER

    def _on_connect(self, line: str, state: _ReadState) -> None:
        layout = self.layouts[RecordKind.CONECT.value]
        state.result.connections.append(
            parse_connect(line, layout, self.config.strict, state.result.warnings)
        )

    def _on_helix(self, line: str, state: _ReadState) -> None:
        layout = self.layouts[RecordKind.HELIX.value]
        state.result.helices.append(
            parse_helix(line, layout, self.config.strict, state.result.warnings)
        )

    def _on_sheet(self, line: str, state: _ReadState) -> None:
        layout = self.layouts[RecordKind.SHEET.value]
        state.result.sheets.append(
            parse_sheet(line, layout, self.config.strict, state.result.warnings)
        )

    def _on_transform(self, line: str, kind: RecordKind, state: _ReadState) -> None:
        row = parse_transform(line, kind.value, self.variant.transform_layout(line))
        state.accumulator.supply_row(kind.value, row.row, row.values)


def _structure_name(path: str) -> str:
    name = Path(str(path)).name
    for suffix in (".gz", ".pdb", ".ent"):
        name = name.removesuffix(suffix)
    return name or "unnamed"


def read_pdb(
    path: str,
    molecule: Optional[MoleculeSink] = None,
    storage_options: Optional[dict] = None,
    **config_kwargs,
) -> ReadResult:
    """
    One-shot convenience wrapper around ``PDBReader.read_file``.

    Extra keyword arguments build the ``ReaderConfig``::

        result = read_pdb("1abc.pdb", atom_names=["CA"], strict=False)
    """
    reader = PDBReader(ReaderConfig(**config_kwargs))
    return reader.read_file(path, molecule, storage_options)
