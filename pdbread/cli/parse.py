"""
CLI command for reading and validating PDB files.
"""

from __future__ import annotations
from pathlib import Path
from typing import Annotated, Optional

import typer


def parse(
    paths: Annotated[list[Path], typer.Argument(help="PDB files to read (.pdb, .ent, optionally .gz).")],
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
    config: Annotated[Optional[Path], typer.Option("--config", help="YAML reader config.")] = None,
    variant: Annotated[Optional[str], typer.Option(help="Format variant: wwpdb-3.3, legacy or auto.")] = None,
    lenient: Annotated[bool, typer.Option("--lenient", help="Tolerate bad informational columns.")] = False,
    unknown_element: Annotated[Optional[str], typer.Option(help="default, skip or reject.")] = None,
    altloc: Annotated[Optional[str], typer.Option(help="all, first or skip.")] = None,
    atoms: Annotated[Optional[str], typer.Option(help="Comma-separated atom names to keep, e.g. CA,O.")] = None,
    bonds: Annotated[bool, typer.Option("--bonds", help="Resolve CONECT records into bonds.")] = False,
    verbose: Annotated[bool, typer.Option("-v", help="Verbose logging.")] = False,
):
    """Parse PDB files and report atoms, connectivity, secondary structure and transforms."""
    import json
    import logging

    from pdbread.config import ReaderConfig
    from pdbread.errors import ConfigError
    from pdbread.molecule import apply_connections
    from pdbread.reader import PDBReader

    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(message)s")

    overrides = {
        "variant": variant,
        "strict": False if lenient else None,
        "unknown_element": unknown_element,
        "altloc": altloc,
        "atom_names": [a.strip() for a in atoms.split(",") if a.strip()] if atoms else None,
    }
    try:
        if config is not None:
            reader_config = ReaderConfig.from_yaml(str(config), **overrides)
        else:
            reader_config = ReaderConfig.from_dict({}, **overrides)
    except (ConfigError, OSError) as e:
        typer.echo(f"Invalid configuration: {e}", err=True)
        raise typer.Exit(code=2)

    reader = PDBReader(reader_config)
    results = []
    failed = False

    for path in paths:
        if not path.exists():
            typer.echo(f"File not found: {path}", err=True)
            failed = True
            continue

        try:
            result = reader.read_file(str(path))
        except (OSError, EOFError) as e:
            typer.echo(f"Cannot read {path}: {e}", err=True)
            failed = True
            continue
        info = {"file": str(path), **result.summary()}
        if bonds and result.success:
            info["bonds"] = apply_connections(
                result.molecule, result.connections, result.serial_to_index,
            )
        info["elements"] = sorted(set(result.molecule.elements))
        failed = failed or not result.success
        results.append(info)

    if json_output:
        typer.echo(json.dumps(results, indent=2, default=str))
    else:
        for info in results:
            _print_info(info)

    if failed:
        raise typer.Exit(code=1)


def _print_info(info: dict) -> None:
    typer.echo(f"\n{'─' * 60}")
    typer.echo(f"  File: {info['file']}")
    status = "OK" if info["success"] else "FAILED"
    typer.echo(f"  Status: {status}  ({info['lines_read']} lines read"
               f"{', stopped at terminator' if info['terminated'] else ''})")
    typer.echo(f"  Atoms: {info['atoms']} (skipped {info['atoms_skipped']})")
    if info["elements"]:
        typer.echo(f"  Elements: {', '.join(info['elements'])}")
    typer.echo(f"  CONECT: {info['connections']}" +
               (f"  -> {info['bonds']} bonds" if "bonds" in info else ""))
    typer.echo(f"  HELIX: {info['helices']}  SHEET: {info['sheets']}")
    typer.echo(f"  BIOMT: {info['biomt']}  SMTRY: {info['smtry']}")
    if info["warnings"]:
        typer.echo(f"  Warnings: {info['warnings']}")
    for err in info["errors"]:
        typer.echo(f"  ERROR: {err}")
