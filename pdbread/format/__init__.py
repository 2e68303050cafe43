"""
pdbread.format: column layouts, field extraction and record dispatch.

Layouts:
    FORMAT_VARIANTS, RecordLayout, FieldSpec, FieldPolicy, RecordKind

Extraction:
    extract_field / extract_fields, parse_atom, parse_connect,
    parse_helix, parse_sheet, parse_transform

Dispatch and transforms:
    RecordDispatcher, MatrixAccumulator
"""

from pdbread.format.layouts import (
    ATOM_LAYOUT,
    CONECT_LAYOUT,
    HELIX_LAYOUT,
    SHEET_LAYOUT,
    TRANSFORM_NARROW,
    TRANSFORM_WIDE,
    FORMAT_VARIANTS,
    FieldPolicy,
    FieldSpec,
    FormatVariant,
    RecordKind,
    RecordLayout,
    get_variant,
)
from pdbread.format.fields import extract_field, extract_fields, parse_charge
from pdbread.format.records import (
    AtomRecord,
    ConnectRecord,
    HelixRecord,
    ResidueRef,
    SheetRecord,
    TransformRow,
    parse_atom,
    parse_connect,
    parse_helix,
    parse_sheet,
    parse_transform,
)
from pdbread.format.dispatch import RecordDispatcher, default_keywords
from pdbread.format.matrix import MatrixAccumulator

__all__ = [
    # Layouts
    "ATOM_LAYOUT",
    "CONECT_LAYOUT",
    "HELIX_LAYOUT",
    "SHEET_LAYOUT",
    "TRANSFORM_NARROW",
    "TRANSFORM_WIDE",
    "FORMAT_VARIANTS",
    "FieldPolicy",
    "FieldSpec",
    "FormatVariant",
    "RecordKind",
    "RecordLayout",
    "get_variant",
    # Extraction
    "extract_field",
    "extract_fields",
    "parse_charge",
    "AtomRecord",
    "ConnectRecord",
    "HelixRecord",
    "ResidueRef",
    "SheetRecord",
    "TransformRow",
    "parse_atom",
    "parse_connect",
    "parse_helix",
    "parse_sheet",
    "parse_transform",
    # Dispatch / transforms
    "RecordDispatcher",
    "default_keywords",
    "MatrixAccumulator",
]
