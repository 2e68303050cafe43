"""
Molecule sink used by the reader.

The reader only ever creates atoms: ``add_atom(atomic_number)`` followed
by ``set_position`` / ``set_name`` on the returned handle. Anything that
implements ``MoleculeSink`` can be filled; ``Molecule`` is the default
in-memory implementation.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Optional, Protocol, Sequence
import logging

import torch

from pdbread.elements import symbol_from_atomic_number
from pdbread.format.records import ConnectRecord

logger = logging.getLogger(__name__)


class AtomHandle(Protocol):
    index: int

    def set_position(self, position: Sequence[float]) -> None: ...

    def set_name(self, name: str) -> None: ...


class MoleculeSink(Protocol):
    """What the reader needs from a molecule."""

    def add_atom(self, atomic_number: int) -> AtomHandle: ...


class BondSink(Protocol):
    def add_bond(self, atom1: int, atom2: int, order: int = 1) -> None: ...


@dataclass
class Bond:
    """Bond between two atom indices."""
    atom1: int
    atom2: int
    order: int = 1


class Atom:
    """Lightweight view onto one atom of a ``Molecule``."""

    __slots__ = ("molecule", "index")

    def __init__(self, molecule: Molecule, index: int):
        self.molecule = molecule
        self.index = index

    @property
    def atomic_number(self) -> int:
        return self.molecule.atomic_numbers[self.index]

    @property
    def element(self) -> str:
        return symbol_from_atomic_number(self.atomic_number)

    @property
    def position(self) -> tuple[float, float, float]:
        return self.molecule.positions[self.index]

    @property
    def name(self) -> str:
        return self.molecule.names[self.index]

    def set_position(self, position: Sequence[float]) -> None:
        x, y, z = position
        self.molecule.positions[self.index] = (float(x), float(y), float(z))

    def set_name(self, name: str) -> None:
        self.molecule.names[self.index] = name

    def __repr__(self) -> str:
        return f"Atom({self.index}, {self.element}, {self.name!r}, {self.position})"


class Molecule:
    """
    Atoms by element, position and display name, plus bonds.

    Usage::

        mol = Molecule("1abc")
        atom = mol.add_atom(6)
        atom.set_position((1.0, 2.0, 3.0))
        atom.set_name("CA")
        mol.coords.shape   # torch.Size([1, 3])
    """

    def __init__(self, name: str = "unnamed"):
        self.name = name
        self.atomic_numbers: list[int] = []
        self.positions: list[tuple[float, float, float]] = []
        self.names: list[str] = []
        self.bonds: list[Bond] = []

    def add_atom(self, atomic_number: int) -> Atom:
        self.atomic_numbers.append(atomic_number)
        self.positions.append((0.0, 0.0, 0.0))
        self.names.append("")
        return Atom(self, len(self.atomic_numbers) - 1)

    def add_bond(self, atom1: int, atom2: int, order: int = 1) -> Bond:
        for idx in (atom1, atom2):
            if not 0 <= idx < self.num_atoms:
                raise IndexError(f"Atom index {idx} out of range (0..{self.num_atoms - 1})")
        bond = Bond(atom1, atom2, order)
        self.bonds.append(bond)
        return bond

    def atom(self, index: int) -> Atom:
        if not 0 <= index < self.num_atoms:
            raise IndexError(f"Atom index {index} out of range (0..{self.num_atoms - 1})")
        return Atom(self, index)

    def atoms(self) -> list[Atom]:
        return [Atom(self, i) for i in range(self.num_atoms)]

    @property
    def num_atoms(self) -> int:
        return len(self.atomic_numbers)

    @property
    def num_bonds(self) -> int:
        return len(self.bonds)

    @property
    def coords(self) -> torch.Tensor:
        """Atom coordinates as [N, 3] tensor."""
        if not self.positions:
            return torch.zeros(0, 3, dtype=torch.float32)
        return torch.tensor(self.positions, dtype=torch.float32)

    @property
    def elements(self) -> list[str]:
        return [symbol_from_atomic_number(z) for z in self.atomic_numbers]

    def clear(self) -> None:
        self.atomic_numbers.clear()
        self.positions.clear()
        self.names.clear()
        self.bonds.clear()

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "num_atoms": self.num_atoms,
            "num_bonds": self.num_bonds,
            "coords": self.coords,
            "elements": self.elements,
            "names": list(self.names),
        }

    def __len__(self) -> int:
        return self.num_atoms

    def __repr__(self) -> str:
        return f"Molecule({self.name!r}, atoms={self.num_atoms}, bonds={self.num_bonds})"


def apply_connections(
    molecule: BondSink,
    connections: Iterable[ConnectRecord],
    serial_to_index: dict[int, int],
    order: int = 1,
) -> int:
    """
    Turn CONECT records into bonds on ``molecule``.

    CONECT lists each bond from both ends; every pair is added once.
    Serials that do not resolve (atoms filtered out or never read) are
    logged and skipped.

    Returns:
        Number of bonds added.
    """
    seen: set[frozenset[int]] = set()
    added = 0
    for conect in connections:
        origin: Optional[int] = serial_to_index.get(conect.anchor)
        for partner_serial in conect.bonded:
            partner = serial_to_index.get(partner_serial)
            if origin is None or partner is None:
                logger.warning(
                    "CONECT %d-%d: atom serial not found, bond skipped",
                    conect.anchor, partner_serial,
                )
                continue
            key = frozenset((origin, partner))
            if origin == partner or key in seen:
                continue
            seen.add(key)
            molecule.add_bond(origin, partner, order)
            added += 1
    return added
