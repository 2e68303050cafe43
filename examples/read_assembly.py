#!/usr/bin/env python
"""
Read a PDB file and expand its biological assembly.

Shows the pieces a viewer or a docking pipeline needs from one read:

  - atoms as a torch coordinate tensor
  - CONECT records resolved into bonds
  - REMARK 350 BIOMT operators applied to the asymmetric unit
  - a CA/O backbone trace from the same reader with a different filter

Usage:
  python examples/read_assembly.py 1abc.pdb
  python examples/read_assembly.py s3://bucket/1abc.pdb.gz   # needs pdbread[streaming]

Requires: pip install pdbread
"""

import sys

import torch

from pdbread import PDBReader, ReaderConfig, apply_connections, backbone_trace

path = sys.argv[1] if len(sys.argv) > 1 else "1abc.pdb"

# ── 1. Full structure ────────────────────────────────────────────────

print("=== Full structure ===\n")

result = PDBReader().read_file(path)
if not result:
    print("Read failed:")
    for err in result.errors:
        print(f"  {err}")
    sys.exit(1)

mol = result.molecule
n_bonds = apply_connections(mol, result.connections, result.serial_to_index)
print(f"  {mol}")
print(f"  Coords:   {tuple(mol.coords.shape)}")
print(f"  Bonds:    {n_bonds} from {len(result.connections)} CONECT records")
print(f"  Helices:  {len(result.helices)}  Sheets: {len(result.sheets)}")
for warning in result.warnings[:5]:
    print(f"  warning: {warning}")
print()

# ── 2. Biological assembly ───────────────────────────────────────────

print("=== Assembly ===\n")

ops = torch.from_numpy(result.biomt_stack).float()    # [N_ops, 4, 4]
if len(ops) == 0:
    print("  No BIOMT operators; the asymmetric unit is the assembly.")
else:
    coords = mol.coords                                # [N_atoms, 3]
    rotated = torch.einsum("oij,aj->oai", ops[:, :3, :3], coords)
    assembly = (rotated + ops[:, None, :3, 3]).reshape(-1, 3)
    print(f"  Operators: {len(ops)}")
    print(f"  Assembly coords: {tuple(assembly.shape)}")
    print(f"  Extent: {(assembly.max(0).values - assembly.min(0).values).tolist()}")
print(f"  SMTRY operators: {len(result.smtry_matrices)}")
print()

# ── 3. Backbone trace ────────────────────────────────────────────────

print("=== Backbone trace (CA/O) ===\n")

trace = PDBReader(ReaderConfig(atom_filter=backbone_trace(), altloc="first")).read_file(path)
print(f"  Trace atoms: {trace.molecule.num_atoms} (skipped {trace.atoms_skipped})")
