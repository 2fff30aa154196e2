"""Catalog configuration."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CatalogSettings(BaseSettings):
    """Environment overrides: ``META_CATALOG_PATH`` and ``META_CATALOG_STRICT``."""

    path: Path | None = None
    strict: bool = True

    model_config = SettingsConfigDict(
        env_prefix="META_CATALOG_",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("path", mode="before")
    @classmethod
    def _blank_path_is_unset(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


@dataclass(frozen=True)
class CatalogConfig:
    """Immutable configuration for loading a catalog.

    Attributes:
        path: YAML catalog file. None selects the catalog bundled with the package.
        strict: Abort on the first invalid meta. When False, invalid metas are
            skipped with a warning and the rest are loaded.
    """

    path: Path | None = None
    strict: bool = True

    @classmethod
    def from_env(cls) -> CatalogConfig:
        """Build a config from the process environment."""
        settings = CatalogSettings()
        return cls(path=settings.path, strict=settings.strict)
