"""
Reader configuration.

Every policy choice the reader makes is explicit here: format variant,
strict vs lenient field handling, per-field policy overrides, unknown
element handling, altLoc selection and atom filtering.

Usage::

    from pdbread.config import ReaderConfig

    config = ReaderConfig(strict=False, atom_names=["CA", "O"])
    config = ReaderConfig.from_yaml("reader.yaml")

YAML format::

    variant: auto            # wwpdb-3.3 | legacy | auto
    strict: true
    accept_hetatm: true
    terminators: [ENDMDL, END]
    unknown_element: default # default | skip | reject
    infer_element: true
    altloc: all              # all | first | skip
    atom_names: [CA, O]      # optional allow-list
    field_policies:
      ATOM.temperature_factor: optional
"""

from __future__ import annotations
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Optional
import logging

from pdbread.errors import ConfigError
from pdbread.filters import (
    ALTLOC_POLICIES,
    AtomPredicate,
    all_of,
    keep_all,
    keep_atom_names,
)
from pdbread.format.dispatch import DEFAULT_TERMINATORS
from pdbread.format.layouts import FORMAT_VARIANTS, FieldPolicy, RecordLayout

logger = logging.getLogger(__name__)

UNKNOWN_ELEMENT_POLICIES = ("default", "skip", "reject")

# Record kinds whose field policies may be overridden (HETATM shares ATOM).
OVERRIDABLE_RECORDS = ("ATOM", "CONECT", "HELIX", "SHEET")


@dataclass
class ReaderConfig:
    """Options for ``PDBReader``; validated on construction."""
    variant: str = "auto"
    strict: bool = True
    accept_hetatm: bool = True
    terminators: tuple[str, ...] = DEFAULT_TERMINATORS
    unknown_element: str = "default"
    infer_element: bool = True
    altloc: str = "all"
    atom_names: Optional[list[str]] = None
    atom_filter: Optional[AtomPredicate] = None
    field_policies: dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if self.variant not in FORMAT_VARIANTS:
            raise ConfigError(
                f"Unknown format variant '{self.variant}'. "
                f"Available: {sorted(FORMAT_VARIANTS)}"
            )
        if self.unknown_element not in UNKNOWN_ELEMENT_POLICIES:
            raise ConfigError(
                f"Unknown unknown_element policy '{self.unknown_element}'. "
                f"Choose from {UNKNOWN_ELEMENT_POLICIES}"
            )
        if self.altloc not in ALTLOC_POLICIES:
            raise ConfigError(
                f"Unknown altloc policy '{self.altloc}'. Choose from {ALTLOC_POLICIES}"
            )
        if isinstance(self.terminators, str):
            self.terminators = (self.terminators,)
        self.terminators = tuple(self.terminators)
        if not all(self.terminators):
            raise ConfigError("Terminator keywords must be non-empty")
        self._policy_overrides = self._parse_policies(self.field_policies)
        self.layouts()

    @staticmethod
    def _parse_policies(raw: dict[str, str]) -> dict[str, dict[str, FieldPolicy]]:
        parsed: dict[str, dict[str, FieldPolicy]] = {}
        for key, value in raw.items():
            record, sep, name = key.partition(".")
            if not sep or record not in OVERRIDABLE_RECORDS:
                raise ConfigError(
                    f"Bad field policy key '{key}': expected '<RECORD>.<field>' "
                    f"with RECORD in {OVERRIDABLE_RECORDS}"
                )
            try:
                policy = FieldPolicy(str(value).lower())
            except ValueError:
                raise ConfigError(
                    f"Bad policy '{value}' for '{key}'. "
                    f"Choose from {[p.value for p in FieldPolicy]}"
                ) from None
            parsed.setdefault(record, {})[name] = policy
        return parsed

    # ------------------------------------------------------------------
    # Derived objects
    # ------------------------------------------------------------------

    def layouts(self) -> dict[str, RecordLayout]:
        """Variant layouts with the configured policy overrides applied."""
        base = FORMAT_VARIANTS[self.variant].layouts
        out = {}
        for record, layout in base.items():
            try:
                out[record] = layout.with_policies(self._policy_overrides.get(record, {}))
            except KeyError as e:
                raise ConfigError(str(e.args[0])) from None
        return out

    def build_atom_filter(self) -> AtomPredicate:
        predicates = []
        if self.atom_names:
            predicates.append(keep_atom_names(self.atom_names))
        if self.atom_filter is not None:
            predicates.append(self.atom_filter)
        if not predicates:
            return keep_all
        if len(predicates) == 1:
            return predicates[0]
        return all_of(*predicates)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    @classmethod
    def from_dict(cls, data: dict[str, Any], **overrides) -> ReaderConfig:
        """Build from a plain mapping; unknown keys are rejected."""
        merged = {**(data or {}), **{k: v for k, v in overrides.items() if v is not None}}
        known = {f.name for f in fields(cls)}
        unknown = set(merged) - known
        if unknown:
            raise ConfigError(f"Unknown config keys: {sorted(unknown)}")
        if "terminators" in merged and merged["terminators"] is not None:
            merged["terminators"] = tuple(merged["terminators"])
        return cls(**merged)

    @classmethod
    def from_yaml(cls, path: str, **overrides) -> ReaderConfig:
        """
        Load from a YAML file.

        Args:
            path: Path to YAML file.
            **overrides: Values that replace the file's (None is ignored,
                         so CLI options that were not given fall through).
        """
        import yaml

        raw = Path(path).read_text()
        data = yaml.safe_load(raw) or {}
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")
        logger.debug("Loaded reader config from %s: %s", path, sorted(data))
        return cls.from_dict(data, **overrides)

    def to_dict(self) -> dict[str, Any]:
        return {
            "variant": self.variant,
            "strict": self.strict,
            "accept_hetatm": self.accept_hetatm,
            "terminators": list(self.terminators),
            "unknown_element": self.unknown_element,
            "infer_element": self.infer_element,
            "altloc": self.altloc,
            "atom_names": list(self.atom_names) if self.atom_names else None,
            "field_policies": dict(self.field_policies),
        }
