"""
pdbread: column-exact decoding of PDB structure files.

Reads ATOM/HETATM, CONECT, HELIX, SHEET and REMARK 350/290 transform
records into a molecule sink plus plain record values and 4x4 operators.
"""

from pdbread.config import ReaderConfig
from pdbread.errors import ConfigError, PDBReadError, RecordDecodeError, UnknownElementError
from pdbread.filters import AltLocSelector, backbone_trace, keep_atom_names
from pdbread.molecule import Atom, Bond, Molecule, MoleculeSink, apply_connections
from pdbread.reader import PDBReader, ReadResult, read_pdb

__all__ = [
    "PDBReader",
    "ReadResult",
    "ReaderConfig",
    "read_pdb",
    "Molecule",
    "MoleculeSink",
    "Atom",
    "Bond",
    "apply_connections",
    "AltLocSelector",
    "backbone_trace",
    "keep_atom_names",
    "PDBReadError",
    "RecordDecodeError",
    "UnknownElementError",
    "ConfigError",
]

__version__ = "0.1.0"
