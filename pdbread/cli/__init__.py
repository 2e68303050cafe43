"""
pdbread CLI: entry point.

Commands
--------
    pdbread parse    Read PDB files and report atoms, records and transforms
    pdbread info     Show supported record kinds, variants and column layouts
"""

import typer

from pdbread.cli.parse import parse
from pdbread.cli.info import info

app = typer.Typer(no_args_is_help=True, pretty_exceptions_enable=False)

app.command("parse")(parse)
app.command("info")(info)
