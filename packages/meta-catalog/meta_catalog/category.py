"""Category enumeration for grouping metas by release."""
from __future__ import annotations

from enum import Enum

from meta_catalog.types import CatalogError


class Category(Enum):
    """Release a meta belongs to. Values are display labels."""

    CORE_TYRIA = "Core Tyria"
    LIVING_WORLD_SEASON_2 = "Living World Season 2"
    HEART_OF_THORNS = "Heart of Thorns"
    LIVING_WORLD_SEASON_3 = "Living World Season 3"
    PATH_OF_FIRE = "Path of Fire"
    LIVING_WORLD_SEASON_4 = "Living World Season 4"
    THE_ICEBROOD_SAGA = "The Icebrood Saga"
    END_OF_DRAGONS = "End of Dragons"

    @property
    def label(self) -> str:
        return self.value

    @classmethod
    def from_label(cls, text: str) -> Category:
        """Resolve a member name (``PATH_OF_FIRE``) or label (``Path of Fire``)."""
        key = text.strip()
        if key.upper().replace(" ", "_") in cls.__members__:
            return cls[key.upper().replace(" ", "_")]
        for member in cls:
            if member.value.lower() == key.lower():
                return member
        raise CatalogError(f"unknown category {text!r}")

    def __str__(self) -> str:
        return self.value
