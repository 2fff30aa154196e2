"""Error types for catalog loading."""
from __future__ import annotations


class CatalogError(Exception):
    """Raised when a catalog document or entry cannot be turned into metas."""

    def __init__(self, message: str, key: str | None = None) -> None:
        self.key = key
        super().__init__(message if key is None else f"{key}: {message}")
