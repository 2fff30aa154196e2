"""Catalog of recurring meta-events, loaded from YAML."""
from meta_catalog.catalog import Catalog, default_catalog, load_catalog
from meta_catalog.category import Category
from meta_catalog.config import CatalogConfig, CatalogSettings
from meta_catalog.loader import BUNDLED_CATALOG, load_metas, parse_document
from meta_catalog.types import CatalogError

__all__ = [
    "Catalog",
    "CatalogConfig",
    "CatalogSettings",
    "CatalogError",
    "Category",
    "BUNDLED_CATALOG",
    "default_catalog",
    "load_catalog",
    "load_metas",
    "parse_document",
]
