from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol


class DocumentBackend(Protocol):
    """
    Minimal storage interface: a single JSON object persisted as a whole.
    """

    @property
    def path(self) -> Path:
        ...

    def load(self) -> dict[str, Any]:
        """Load and return the full document (never None)."""
        ...

    def save(self, doc: dict[str, Any]) -> None:
        """Persist the full document, replacing whatever was stored before."""
        ...


