"""
Pytest configuration and fixtures.

Record builders format lines with the exact PDB column widths so tests
can vary values without hand-counting spaces.
"""

import pytest

from pdbread.molecule import Molecule
from pdbread.reader import PDBReader


def _atom_line(
    serial=1, name=" CA", res="ALA", chain="A", seq=1,
    x=0.0, y=0.0, z=0.0, element="C", record="ATOM",
    alt=" ", icode=" ", occ=1.0, b=20.0, charge="",
):
    return (
        f"{record:<6s}{serial:5d} {name:<4s}{alt}{res:>3s} {chain}{seq:4d}{icode}   "
        f"{x:8.3f}{y:8.3f}{z:8.3f}{occ:6.2f}{b:6.2f}          {element:>2s}{charge:<2s}"
    )


def _transform_line(kind, row, op, m1, m2, m3, t, legacy=False):
    code = "350" if kind == "BIOMT" else "290"
    head = f"REMARK {code}   {kind}{row}{op:4d}{m1:10.6f}{m2:10.6f}{m3:10.6f}"
    if legacy:
        return head + f"{t:5.1f}"
    return head + f"     {t:10.5f}"


def _helix_line(serial, helix_id, r1, c1, s1, r2, c2, s2, helix_class=1, length=9):
    return (
        f"HELIX  {serial:3d} {helix_id:>3s} {r1:>3s} {c1} {s1:4d}  {r2:>3s} {c2} {s2:4d} "
        f"{helix_class:2d}{'':30s} {length:5d}    "
    )


def _sheet_line(strand, sheet_id, n, r1, c1, s1, r2, c2, s2, sense, registration=None):
    line = (
        f"SHEET  {strand:3d} {sheet_id:>3s}{n:2d} {r1:>3s} {c1}{s1:4d}  "
        f"{r2:>3s} {c2}{s2:4d} {sense:2d}"
    )
    if registration:
        cur_atom, cur_res, cur_chain, cur_seq, prev_atom, prev_res, prev_chain, prev_seq = registration
        line += (
            f" {cur_atom:<4s}{cur_res:>3s} {cur_chain}{cur_seq:4d}  "
            f"{prev_atom:<4s}{prev_res:>3s} {prev_chain}{prev_seq:4d} "
        )
    return line


@pytest.fixture
def atom_line():
    """Factory for ATOM/HETATM lines."""
    return _atom_line


@pytest.fixture
def transform_line():
    """Factory for REMARK 350 BIOMT / REMARK 290 SMTRY lines."""
    return _transform_line


@pytest.fixture
def helix_line():
    return _helix_line


@pytest.fixture
def sheet_line():
    return _sheet_line


@pytest.fixture
def sample_pdb():
    """Small but complete structure: header, SS, atoms, bonds, transforms."""
    lines = [
        "HEADER    HYDROLASE                               01-JAN-00   1TST",
        "REMARK   2 RESOLUTION.    1.80 ANGSTROMS.",
        _transform_line("SMTRY", 1, 1, 1.0, 0.0, 0.0, 0.0),
        _transform_line("SMTRY", 2, 1, 0.0, 1.0, 0.0, 0.0),
        _transform_line("SMTRY", 3, 1, 0.0, 0.0, 1.0, 0.0),
        _transform_line("SMTRY", 1, 2, -1.0, 0.0, 0.0, 12.5),
        _transform_line("SMTRY", 2, 2, 0.0, -1.0, 0.0, 0.0),
        _transform_line("SMTRY", 3, 2, 0.0, 0.0, 1.0, 25.0),
        "REMARK 350 BIOMOLECULE: 1",
        _transform_line("BIOMT", 1, 1, 1.0, 0.0, 0.0, 0.0),
        _transform_line("BIOMT", 2, 1, 0.0, 1.0, 0.0, 0.0),
        _transform_line("BIOMT", 3, 1, 0.0, 0.0, 1.0, 0.0),
        _helix_line(1, "HA", "ALA", "A", 1, "GLY", "A", 3, 1, 3),
        _sheet_line(1, "S1", 2, "ALA", "A", 1, "VAL", "A", 3, 0),
        "CRYST1   50.000   50.000   50.000  90.00  90.00  90.00 P 1           1",
        _atom_line(1, " N", "ALA", "A", 1, 1.0, 2.0, 3.0, "N"),
        _atom_line(2, " CA", "ALA", "A", 1, 1.5, 2.5, 3.5, "C"),
        _atom_line(3, " O", "ALA", "A", 1, 2.0, 3.0, 4.0, "O"),
        _atom_line(4, " CA", "GLY", "A", 2, 3.5, 4.5, 5.5, "C"),
        _atom_line(5, " O", "GLY", "A", 2, 4.0, 5.0, 6.0, "O"),
        _atom_line(6, " CA", "VAL", "A", 3, 5.5, 6.5, 7.5, "C"),
        "TER       7      VAL A   3",
        _atom_line(8, "ZN", "ZN", "A", 101, 9.0, 9.0, 9.0, "ZN", record="HETATM", charge="2+"),
        "CONECT    1    2",
        "CONECT    2    1    3",
        "END",
    ]
    return "\n".join(lines) + "\n"


@pytest.fixture
def reader():
    return PDBReader()


@pytest.fixture
def molecule():
    return Molecule("test")
