from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass
class RuleCatalogError(Exception):
    """Raised when two catalog rules share a path shape but disagree on the label.

    Identical re-derivations of a rule are collapsed silently; only a
    conflicting label is an authoring defect.
    """

    shape: str
    labels: tuple[str, ...]

    def __str__(self) -> str:  # pragma: no cover - human readable
        return f"conflicting labels for '{self.shape}': {', '.join(self.labels)}"


@dataclass
class SnapshotError(Exception):
    """Raised when a group snapshot file cannot be read or validated."""

    path: Path
    reason: str

    def __str__(self) -> str:  # pragma: no cover - human readable
        return f"{self.path}: {self.reason}"
