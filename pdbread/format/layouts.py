"""
Column layouts for PDB record kinds.

Each record kind is described by a ``RecordLayout``: an ordered table of
``FieldSpec`` entries giving the 0-based half-open column range, the
converter kind and the field's policy. Layouts are data, grouped into
``FormatVariant`` objects so that revisions of the format that disagree
on an offset (the transform translation column) are selected by name
instead of by branching inside the extractors.

Offsets follow the wwPDB format description v3.3:
http://www.wwpdb.org/documentation/file-format-content/format33/v3.3.html
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional


class RecordKind(str, Enum):
    ATOM = "ATOM"
    HETATM = "HETATM"
    CONECT = "CONECT"
    HELIX = "HELIX"
    SHEET = "SHEET"
    BIOMT = "BIOMT"
    SMTRY = "SMTRY"
    REMARK = "REMARK"
    TERMINATOR = "TERMINATOR"


class FieldPolicy(str, Enum):
    """
    How a sub-field reacts to blank or unconvertible text.

    MANDATORY      blank -> error, bad text -> error
    OPTIONAL       blank -> None,  bad text -> error
    INFORMATIONAL  blank -> None,  bad text -> error (strict) / None (lenient)
    """
    MANDATORY = "mandatory"
    OPTIONAL = "optional"
    INFORMATIONAL = "informational"


FIELD_KINDS = ("int", "float", "char", "str", "charge")


@dataclass(frozen=True)
class FieldSpec:
    """One fixed-width sub-field of a record."""
    name: str       # attribute name on the parsed record
    label: str      # human-readable name used in diagnostics
    start: int
    end: int
    kind: str = "str"
    policy: FieldPolicy = FieldPolicy.MANDATORY

    def __post_init__(self):
        if self.kind not in FIELD_KINDS:
            raise ValueError(f"Unknown field kind '{self.kind}'. Choose from {FIELD_KINDS}")
        if not 0 <= self.start < self.end:
            raise ValueError(f"Bad column range [{self.start}, {self.end}) for '{self.name}'")

    @property
    def width(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class RecordLayout:
    """Ordered field table for one record kind."""
    record: str
    fields: tuple[FieldSpec, ...]

    def __getitem__(self, name: str) -> FieldSpec:
        for spec in self.fields:
            if spec.name == name:
                return spec
        raise KeyError(f"{self.record} layout has no field '{name}'")

    @property
    def names(self) -> list[str]:
        return [f.name for f in self.fields]

    def with_policies(self, overrides: dict[str, FieldPolicy]) -> RecordLayout:
        """Return a copy with some field policies replaced."""
        if not overrides:
            return self
        unknown = set(overrides) - set(self.names)
        if unknown:
            raise KeyError(f"{self.record} layout has no field(s) {sorted(unknown)}")
        fields = tuple(
            replace(f, policy=overrides[f.name]) if f.name in overrides else f
            for f in self.fields
        )
        return RecordLayout(self.record, fields)


_M = FieldPolicy.MANDATORY
_O = FieldPolicy.OPTIONAL
_I = FieldPolicy.INFORMATIONAL


# ======================================================================
# Coordinate records
# ======================================================================

ATOM_LAYOUT = RecordLayout("ATOM", (
    FieldSpec("serial", "atom serial number", 6, 11, "int", _M),
    FieldSpec("name", "atom name", 12, 16, "str", _M),
    FieldSpec("alt_loc", "alternate location", 16, 17, "char", _O),
    FieldSpec("res_name", "residue name", 17, 20, "str", _I),
    FieldSpec("chain_id", "chain identifier", 21, 22, "char", _O),
    FieldSpec("res_seq", "residue sequence number", 22, 26, "int", _I),
    FieldSpec("i_code", "insertion code", 26, 27, "char", _O),
    FieldSpec("x", "x coordinate", 30, 38, "float", _M),
    FieldSpec("y", "y coordinate", 38, 46, "float", _M),
    FieldSpec("z", "z coordinate", 46, 54, "float", _M),
    FieldSpec("occupancy", "occupancy", 54, 60, "float", _I),
    FieldSpec("temperature_factor", "temperature factor", 60, 66, "float", _I),
    FieldSpec("segment_id", "segment identifier", 72, 76, "str", _O),
    FieldSpec("element", "element symbol", 76, 78, "str", _O),
    FieldSpec("charge", "formal charge", 78, 80, "charge", _I),
))

# ======================================================================
# Connectivity
# ======================================================================

CONECT_LAYOUT = RecordLayout("CONECT", (
    FieldSpec("anchor", "anchor atom serial", 6, 11, "int", _M),
    FieldSpec("bonded_1", "bonded atom serial 1", 11, 16, "int", _O),
    FieldSpec("bonded_2", "bonded atom serial 2", 16, 21, "int", _O),
    FieldSpec("bonded_3", "bonded atom serial 3", 21, 26, "int", _O),
    FieldSpec("bonded_4", "bonded atom serial 4", 26, 31, "int", _O),
))

# ======================================================================
# Secondary structure
# ======================================================================

HELIX_LAYOUT = RecordLayout("HELIX", (
    FieldSpec("serial", "helix serial number", 7, 10, "int", _M),
    FieldSpec("helix_id", "helix identifier", 11, 14, "str", _I),
    FieldSpec("init_res_name", "initial residue name", 15, 18, "str", _M),
    FieldSpec("init_chain_id", "initial chain identifier", 19, 20, "char", _O),
    FieldSpec("init_seq", "initial residue sequence number", 21, 25, "int", _M),
    FieldSpec("init_i_code", "initial insertion code", 25, 26, "char", _O),
    FieldSpec("end_res_name", "terminal residue name", 27, 30, "str", _M),
    FieldSpec("end_chain_id", "terminal chain identifier", 31, 32, "char", _O),
    FieldSpec("end_seq", "terminal residue sequence number", 33, 37, "int", _M),
    FieldSpec("end_i_code", "terminal insertion code", 37, 38, "char", _O),
    FieldSpec("helix_class", "helix class", 38, 40, "int", _I),
    FieldSpec("comment", "helix comment", 40, 70, "str", _O),
    FieldSpec("length", "helix length", 71, 76, "int", _I),
))

SHEET_LAYOUT = RecordLayout("SHEET", (
    FieldSpec("strand", "strand number", 7, 10, "int", _M),
    FieldSpec("sheet_id", "sheet identifier", 11, 14, "str", _M),
    FieldSpec("num_strands", "number of strands", 14, 16, "int", _I),
    FieldSpec("init_res_name", "initial residue name", 17, 20, "str", _M),
    FieldSpec("init_chain_id", "initial chain identifier", 21, 22, "char", _O),
    FieldSpec("init_seq", "initial residue sequence number", 22, 26, "int", _M),
    FieldSpec("init_i_code", "initial insertion code", 26, 27, "char", _O),
    FieldSpec("end_res_name", "terminal residue name", 28, 31, "str", _M),
    FieldSpec("end_chain_id", "terminal chain identifier", 32, 33, "char", _O),
    FieldSpec("end_seq", "terminal residue sequence number", 33, 37, "int", _M),
    FieldSpec("end_i_code", "terminal insertion code", 37, 38, "char", _O),
    FieldSpec("sense", "strand sense", 38, 40, "int", _O),
    FieldSpec("cur_atom", "registration atom name", 41, 45, "str", _O),
    FieldSpec("cur_res_name", "registration residue name", 45, 48, "str", _O),
    FieldSpec("cur_chain_id", "registration chain identifier", 49, 50, "char", _O),
    FieldSpec("cur_seq", "registration residue sequence number", 50, 54, "int", _O),
    FieldSpec("cur_i_code", "registration insertion code", 54, 55, "char", _O),
    FieldSpec("prev_atom", "previous-strand atom name", 56, 60, "str", _O),
    FieldSpec("prev_res_name", "previous-strand residue name", 60, 63, "str", _O),
    FieldSpec("prev_chain_id", "previous-strand chain identifier", 64, 65, "char", _O),
    FieldSpec("prev_seq", "previous-strand residue sequence number", 65, 69, "int", _O),
    FieldSpec("prev_i_code", "previous-strand insertion code", 69, 70, "char", _O),
))

# ======================================================================
# Transform remarks (REMARK 350 BIOMTn / REMARK 290 SMTRYn)
# ======================================================================

_TRANSFORM_HEAD = (
    FieldSpec("row", "row index", 18, 19, "int", _M),
    FieldSpec("operator", "operator serial number", 19, 23, "int", _M),
    FieldSpec("m1", "rotation column 1", 23, 33, "float", _M),
    FieldSpec("m2", "rotation column 2", 33, 43, "float", _M),
    FieldSpec("m3", "rotation column 3", 43, 53, "float", _M),
)

TRANSFORM_WIDE = RecordLayout("TRANSFORM", _TRANSFORM_HEAD + (
    FieldSpec("t", "translation", 55, 68, "float", _M),
))

TRANSFORM_NARROW = RecordLayout("TRANSFORM", _TRANSFORM_HEAD + (
    FieldSpec("t", "translation", 53, 58, "float", _M),
))

# Right-trimmed lines longer than this carry the wide translation field.
WIDE_TRANSLATION_MIN_LENGTH = 58


# ======================================================================
# Variants
# ======================================================================

@dataclass(frozen=True)
class FormatVariant:
    """
    A consistent set of record layouts.

    ``transform`` is None for auto-detection: the translation width is
    chosen per line from the length of its trailing content.
    """
    name: str
    description: str
    transform: Optional[RecordLayout]
    layouts: dict[str, RecordLayout] = field(default_factory=lambda: {
        RecordKind.ATOM.value: ATOM_LAYOUT,
        RecordKind.CONECT.value: CONECT_LAYOUT,
        RecordKind.HELIX.value: HELIX_LAYOUT,
        RecordKind.SHEET.value: SHEET_LAYOUT,
    })

    def transform_layout(self, line: str) -> RecordLayout:
        if self.transform is not None:
            return self.transform
        if len(line.rstrip()) > WIDE_TRANSLATION_MIN_LENGTH:
            return TRANSFORM_WIDE
        return TRANSFORM_NARROW


FORMAT_VARIANTS: dict[str, FormatVariant] = {
    "wwpdb-3.3": FormatVariant(
        "wwpdb-3.3",
        "wwPDB v3.3 columns; 13-column translation field at [55, 68)",
        TRANSFORM_WIDE,
    ),
    "legacy": FormatVariant(
        "legacy",
        "Older writers; 5-column translation field at [53, 58)",
        TRANSFORM_NARROW,
    ),
    "auto": FormatVariant(
        "auto",
        "wwPDB v3.3 columns; translation width detected per line",
        None,
    ),
}


def get_variant(name: str) -> FormatVariant:
    try:
        return FORMAT_VARIANTS[name]
    except KeyError:
        raise KeyError(
            f"Unknown format variant '{name}'. "
            f"Available: {sorted(FORMAT_VARIANTS)}"
        ) from None
