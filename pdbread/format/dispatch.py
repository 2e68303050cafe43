"""
Record classification by keyword prefix.

Keywords are matched longest first, so a refinement such as
``REMARK 350   BIOMT`` always wins over the generic ``REMARK``.
"""

from __future__ import annotations
from typing import Callable, Iterable, Optional

from pdbread.format.layouts import RecordKind

Handler = Callable[[str], None]

BIOMT_KEYWORD = "REMARK 350   BIOMT"
SMTRY_KEYWORD = "REMARK 290   SMTRY"

DEFAULT_TERMINATORS: tuple[str, ...] = ("ENDMDL", "END")


def default_keywords(
    accept_hetatm: bool = True,
    terminators: Iterable[str] = DEFAULT_TERMINATORS,
) -> dict[str, RecordKind]:
    """Keyword -> kind table for the record kinds pdbread understands."""
    table = {
        BIOMT_KEYWORD: RecordKind.BIOMT,
        SMTRY_KEYWORD: RecordKind.SMTRY,
        "REMARK": RecordKind.REMARK,
        "ATOM": RecordKind.ATOM,
        "CONECT": RecordKind.CONECT,
        "HELIX": RecordKind.HELIX,
        "SHEET": RecordKind.SHEET,
    }
    if accept_hetatm:
        table["HETATM"] = RecordKind.HETATM
    for keyword in terminators:
        table[keyword] = RecordKind.TERMINATOR
    return table


class RecordDispatcher:
    """
    Classify lines by keyword and route them to handlers.

    Usage::

        dispatcher = RecordDispatcher(default_keywords())
        dispatcher.register(RecordKind.ATOM, on_atom)
        kind = dispatcher.dispatch(line)   # None for unknown keywords
    """

    def __init__(self, keywords: dict[str, RecordKind]):
        self._keywords = sorted(keywords.items(), key=lambda kv: len(kv[0]), reverse=True)
        self._handlers: dict[RecordKind, Handler] = {}

    @property
    def keywords(self) -> list[str]:
        return [k for k, _ in self._keywords]

    def register(self, kind: RecordKind, handler: Handler) -> None:
        self._handlers[kind] = handler

    def classify(self, line: str) -> Optional[RecordKind]:
        for keyword, kind in self._keywords:
            if line.startswith(keyword):
                return kind
        return None

    def dispatch(self, line: str) -> Optional[RecordKind]:
        """Classify ``line`` and invoke its handler, if one is registered."""
        kind = self.classify(line)
        if kind is not None:
            handler = self._handlers.get(kind)
            if handler is not None:
                handler(line)
        return kind
