"""
Residue, atom and element constants for PDB decoding.

Single source of truth for lookup tables used across pdbread.
Import from here instead of defining local copies.

Sections:
    1. Residue mappings (THREE_TO_ONE, STANDARD_RESIDUES)
    2. Atom definitions
    3. Periodic table (ELEMENT_SYMBOLS, SYMBOL_TO_ATOMIC_NUMBER)
"""

# ======================================================================
# 1. Residue mappings
# ======================================================================

THREE_TO_ONE: dict[str, str] = {
    "ALA": "A", "ARG": "R", "ASN": "N", "ASP": "D", "CYS": "C",
    "GLN": "Q", "GLU": "E", "GLY": "G", "HIS": "H", "ILE": "I",
    "LEU": "L", "LYS": "K", "MET": "M", "PHE": "F", "PRO": "P",
    "SER": "S", "THR": "T", "TRP": "W", "TYR": "Y", "VAL": "V",
    "MSE": "M", "SEC": "U", "PYL": "O",
}

STANDARD_RESIDUES: set[str] = {
    k for k in THREE_TO_ONE if k not in ("MSE", "SEC", "PYL")
}

# ======================================================================
# 2. Atom definitions
# ======================================================================

BACKBONE_ATOMS: tuple[str, ...] = ("N", "CA", "C", "O")

# Alpha carbon + carbonyl oxygen, enough to orient a backbone trace.
TRACE_ATOMS: tuple[str, ...] = ("CA", "O")

# ======================================================================
# 3. Periodic table
# ======================================================================

ELEMENT_SYMBOLS: tuple[str, ...] = (
    "H", "He",
    "Li", "Be", "B", "C", "N", "O", "F", "Ne",
    "Na", "Mg", "Al", "Si", "P", "S", "Cl", "Ar",
    "K", "Ca", "Sc", "Ti", "V", "Cr", "Mn", "Fe", "Co", "Ni", "Cu", "Zn",
    "Ga", "Ge", "As", "Se", "Br", "Kr",
    "Rb", "Sr", "Y", "Zr", "Nb", "Mo", "Tc", "Ru", "Rh", "Pd", "Ag", "Cd",
    "In", "Sn", "Sb", "Te", "I", "Xe",
    "Cs", "Ba",
    "La", "Ce", "Pr", "Nd", "Pm", "Sm", "Eu", "Gd", "Tb", "Dy", "Ho", "Er",
    "Tm", "Yb", "Lu",
    "Hf", "Ta", "W", "Re", "Os", "Ir", "Pt", "Au", "Hg",
    "Tl", "Pb", "Bi", "Po", "At", "Rn",
    "Fr", "Ra",
    "Ac", "Th", "Pa", "U", "Np", "Pu", "Am", "Cm", "Bk", "Cf", "Es", "Fm",
    "Md", "No", "Lr",
    "Rf", "Db", "Sg", "Bh", "Hs", "Mt", "Ds", "Rg", "Cn",
    "Nh", "Fl", "Mc", "Lv", "Ts", "Og",
)

# Keys are upper-case; PDB element columns are conventionally upper-case.
SYMBOL_TO_ATOMIC_NUMBER: dict[str, int] = {
    sym.upper(): i for i, sym in enumerate(ELEMENT_SYMBOLS, start=1)
}

# Hydrogen isotopes written by some refinement programs.
ELEMENT_ALIASES: dict[str, str] = {"D": "H", "T": "H"}

UNKNOWN_ATOMIC_NUMBER: int = 0
