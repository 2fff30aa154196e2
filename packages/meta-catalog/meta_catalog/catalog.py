"""Catalog registry: meta lookup by key."""
from __future__ import annotations

from datetime import time, timedelta
from typing import Iterator

from meta_clock import Meta, MetaIter

from meta_catalog.category import Category
from meta_catalog.config import CatalogConfig
from meta_catalog.loader import BUNDLED_CATALOG, load_metas


class Catalog:
    """Stores metas by key. Definition order is preserved."""

    def __init__(self) -> None:
        self._metas: dict[str, Meta] = {}

    def define(self, key: str, meta: Meta) -> None:
        """Register a meta under ``key``. Overwrites if key exists."""
        self._metas[key] = meta

    def get(self, key: str) -> Meta:
        """Look up a meta. Raises KeyError if not defined."""
        if key not in self._metas:
            raise KeyError(key)
        return self._metas[key]

    def has(self, key: str) -> bool:
        return key in self._metas

    def keys(self) -> list[str]:
        return list(self._metas)

    def metas(self) -> list[Meta]:
        return list(self._metas.values())

    def by_category(self, category: Category) -> list[Meta]:
        """All metas in ``category``, in definition order."""
        return [m for m in self._metas.values() if m.category is category]

    def remove(self, key: str) -> None:
        """Remove a meta. Raises KeyError if not defined."""
        if key not in self._metas:
            raise KeyError(key)
        del self._metas[key]

    def iter(self, key: str, start: int | timedelta | time = 0) -> MetaIter:
        """Merged occurrence iterator for the meta stored under ``key``."""
        return MetaIter(self.get(key), start)

    def __contains__(self, key: object) -> bool:
        return key in self._metas

    def __len__(self) -> int:
        return len(self._metas)

    def __iter__(self) -> Iterator[str]:
        return iter(self._metas)


def load_catalog(config: CatalogConfig | None = None) -> Catalog:
    """Load a Catalog as described by ``config`` (bundled data by default)."""
    config = config or CatalogConfig()
    path = config.path if config.path is not None else BUNDLED_CATALOG
    catalog = Catalog()
    for key, meta in load_metas(path, strict=config.strict).items():
        catalog.define(key, meta)
    return catalog


def default_catalog() -> Catalog:
    """The catalog bundled with the package."""
    return load_catalog(CatalogConfig())
