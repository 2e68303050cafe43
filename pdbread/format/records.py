"""
Parsed record value objects and their extractors.

One extractor per record kind. Each takes a single line plus the layout
to read it with and returns a plain dataclass; nothing here touches the
molecule or cross-references atom serials.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from pdbread.format.fields import extract_fields
from pdbread.format.layouts import (
    ATOM_LAYOUT,
    CONECT_LAYOUT,
    HELIX_LAYOUT,
    SHEET_LAYOUT,
    TRANSFORM_WIDE,
    RecordKind,
    RecordLayout,
)


# ======================================================================
# Value objects
# ======================================================================

@dataclass
class AtomRecord:
    """Single ATOM/HETATM line."""
    record: str
    serial: int
    name: str
    x: float
    y: float
    z: float
    alt_loc: Optional[str] = None
    res_name: Optional[str] = None
    chain_id: Optional[str] = None
    res_seq: Optional[int] = None
    i_code: Optional[str] = None
    occupancy: Optional[float] = None
    temperature_factor: Optional[float] = None
    segment_id: Optional[str] = None
    element: Optional[str] = None
    charge: Optional[int] = None

    @property
    def position(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    @property
    def is_hetero(self) -> bool:
        return self.record == RecordKind.HETATM.value

    @property
    def identity(self) -> tuple:
        """
        Key identifying one atom site regardless of its altLoc.

        The residue name is left out: microheterogeneity (ASER / BTHR at
        one residue number) is a single site with two conformers.
        """
        return (self.chain_id, self.res_seq, self.i_code, self.name)


@dataclass
class ConnectRecord:
    """CONECT line: one anchor serial and up to four bonded serials."""
    anchor: int
    bonded: tuple[int, ...] = ()

    def pairs(self) -> list[tuple[int, int]]:
        return [(self.anchor, b) for b in self.bonded]


@dataclass(frozen=True)
class ResidueRef:
    res_name: Optional[str]
    chain_id: Optional[str]
    seq: Optional[int]
    i_code: Optional[str] = None


@dataclass
class HelixRecord:
    serial: int
    helix_id: Optional[str]
    start: ResidueRef
    end: ResidueRef
    helix_class: Optional[int] = None
    comment: Optional[str] = None
    length: Optional[int] = None


@dataclass
class SheetRecord:
    strand: int
    sheet_id: str
    start: ResidueRef
    end: ResidueRef
    num_strands: Optional[int] = None
    sense: Optional[int] = None
    current_atom: Optional[str] = None
    current: Optional[ResidueRef] = None
    previous_atom: Optional[str] = None
    previous: Optional[ResidueRef] = None


@dataclass
class TransformRow:
    """One BIOMTn/SMTRYn line: a single row of a 4x4 operator."""
    kind: str
    row: int                 # 0-based
    operator: int
    values: tuple[float, float, float, float]


# ======================================================================
# Extractors
# ======================================================================

def parse_atom(
    line: str,
    layout: RecordLayout = ATOM_LAYOUT,
    record: str = RecordKind.ATOM.value,
    strict: bool = True,
    warnings: Optional[list[str]] = None,
) -> AtomRecord:
    values = extract_fields(line, layout, record, strict, warnings)
    return AtomRecord(record=record, **values)


def parse_connect(
    line: str,
    layout: RecordLayout = CONECT_LAYOUT,
    strict: bool = True,
    warnings: Optional[list[str]] = None,
) -> ConnectRecord:
    values = extract_fields(line, layout, RecordKind.CONECT.value, strict, warnings)
    bonded = tuple(
        values[name] for name in ("bonded_1", "bonded_2", "bonded_3", "bonded_4")
        if values[name] is not None
    )
    return ConnectRecord(anchor=values["anchor"], bonded=bonded)


def _residue(values: dict, prefix: str) -> ResidueRef:
    return ResidueRef(
        res_name=values[f"{prefix}_res_name"],
        chain_id=values[f"{prefix}_chain_id"],
        seq=values[f"{prefix}_seq"],
        i_code=values[f"{prefix}_i_code"],
    )


def parse_helix(
    line: str,
    layout: RecordLayout = HELIX_LAYOUT,
    strict: bool = True,
    warnings: Optional[list[str]] = None,
) -> HelixRecord:
    v = extract_fields(line, layout, RecordKind.HELIX.value, strict, warnings)
    return HelixRecord(
        serial=v["serial"],
        helix_id=v["helix_id"],
        start=_residue(v, "init"),
        end=_residue(v, "end"),
        helix_class=v["helix_class"],
        comment=v["comment"],
        length=v["length"],
    )


def parse_sheet(
    line: str,
    layout: RecordLayout = SHEET_LAYOUT,
    strict: bool = True,
    warnings: Optional[list[str]] = None,
) -> SheetRecord:
    v = extract_fields(line, layout, RecordKind.SHEET.value, strict, warnings)

    current = previous = None
    if v["cur_res_name"] is not None or v["cur_seq"] is not None:
        current = _residue(v, "cur")
    if v["prev_res_name"] is not None or v["prev_seq"] is not None:
        previous = _residue(v, "prev")

    return SheetRecord(
        strand=v["strand"],
        sheet_id=v["sheet_id"],
        start=_residue(v, "init"),
        end=_residue(v, "end"),
        num_strands=v["num_strands"],
        sense=v["sense"],
        current_atom=v["cur_atom"],
        current=current,
        previous_atom=v["prev_atom"],
        previous=previous,
    )


def parse_transform(
    line: str,
    kind: str,
    layout: RecordLayout = TRANSFORM_WIDE,
) -> TransformRow:
    """
    Parse a REMARK 350 BIOMTn or REMARK 290 SMTRYn line.

    The row number in the file is 1-based; the returned row is 0-based.
    Row ordering and range are left to the accumulator.
    """
    v = extract_fields(line, layout, kind)
    return TransformRow(
        kind=kind,
        row=v["row"] - 1,
        operator=v["operator"],
        values=(v["m1"], v["m2"], v["m3"], v["t"]),
    )
