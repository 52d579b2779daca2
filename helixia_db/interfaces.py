from __future__ import annotations

from typing import Any, Protocol


class KeyValueDocumentStore(Protocol):
    """
    Minimal storage interface: a single JSON object document persisted as a whole.
    """

    def exists(self) -> bool:
        """Whether a persisted document is present."""
        ...

    def load(self) -> dict[str, Any] | None:
        """Load and return the full document, or None when nothing is persisted."""
        ...

    def save(self, doc: dict[str, Any]) -> None:
        """Persist the full document, replacing the previous one atomically."""
        ...
