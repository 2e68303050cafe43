"""
Atom selection predicates.

A predicate decides whether a parsed ``AtomRecord`` is added to the
molecule. Consumers that only need a backbone trace and consumers that
need the full structure use the same reader with different predicates.
"""

from __future__ import annotations
from typing import Callable, Iterable

from pdbread.constants import BACKBONE_ATOMS, STANDARD_RESIDUES, TRACE_ATOMS
from pdbread.format.records import AtomRecord

AtomPredicate = Callable[[AtomRecord], bool]

ALTLOC_POLICIES = ("all", "first", "skip")


def keep_all(record: AtomRecord) -> bool:
    return True


def keep_atom_names(names: Iterable[str]) -> AtomPredicate:
    """Keep atoms whose trimmed name is in ``names``."""
    allowed = frozenset(n.strip() for n in names)

    def predicate(record: AtomRecord) -> bool:
        return record.name in allowed

    return predicate


def backbone() -> AtomPredicate:
    return keep_atom_names(BACKBONE_ATOMS)


def backbone_trace() -> AtomPredicate:
    """Alpha carbons and carbonyl oxygens only."""
    return keep_atom_names(TRACE_ATOMS)


def keep_protein_only(record: AtomRecord) -> bool:
    return not record.is_hetero


def keep_standard_residues(record: AtomRecord) -> bool:
    """The 20 canonical amino acids; modified residues are dropped."""
    return record.res_name in STANDARD_RESIDUES


def all_of(*predicates: AtomPredicate) -> AtomPredicate:
    def predicate(record: AtomRecord) -> bool:
        return all(p(record) for p in predicates)

    return predicate


class AltLocSelector:
    """
    Stateful alternate-location filter for one read.

    Policies:
        all    keep every conformer as its own atom
        first  keep blank altLoc atoms and, per atom site, only the
               first altLoc code encountered
        skip   drop every atom with a non-blank altLoc
    """

    def __init__(self, policy: str = "all"):
        if policy not in ALTLOC_POLICIES:
            raise ValueError(f"Unknown altloc policy '{policy}'. Choose from {ALTLOC_POLICIES}")
        self.policy = policy
        self._chosen: dict[tuple, str] = {}

    def __call__(self, record: AtomRecord) -> bool:
        if record.alt_loc is None or self.policy == "all":
            return True
        if self.policy == "skip":
            return False
        chosen = self._chosen.setdefault(record.identity, record.alt_loc)
        return chosen == record.alt_loc
