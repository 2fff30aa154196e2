"""YAML catalog loading.

A catalog document maps meta keys to a name, a category and an ordered list
of events::

    metas:
      world-bosses:
        name: World Bosses
        category: Core Tyria
        events:
          - {name: Svanir Shaman Chief, offset: "00:15", frequency: 2h, length: 15m}

Offsets are ``"HH:MM"`` strings (quote them, YAML 1.1 reads bare ``10:00`` as
a base-60 integer) or integer minutes. Durations are integer minutes or
strings such as ``2h``, ``75m`` or ``1h15m``. Document order is kept for both
metas and events.
"""
from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Mapping

import structlog
import yaml
from meta_clock import EventSchedule, Meta, ScheduleError, parse_time_of_day

from meta_catalog.category import Category
from meta_catalog.types import CatalogError

logger = structlog.get_logger(__name__)

BUNDLED_CATALOG = Path(__file__).resolve().parent / "data" / "metas.yaml"

_DURATION_RE = re.compile(r"^\s*(?:(\d+)\s*h)?\s*(?:(\d+)\s*m)?\s*$")


def parse_duration(value: int | str) -> int:
    """Parse integer minutes or an ``XhYm`` string into minutes."""
    if isinstance(value, bool):
        raise CatalogError(f"invalid duration {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        match = _DURATION_RE.match(value)
        if match and (match.group(1) or match.group(2)):
            hours, minutes = match.groups()
            return int(hours or 0) * 60 + int(minutes or 0)
    raise CatalogError(f"invalid duration {value!r}")


def parse_offset(value: int | str) -> int:
    """Parse an ``HH:MM`` string or integer minutes into minutes after 00:00."""
    if isinstance(value, bool):
        raise CatalogError(f"invalid offset {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return parse_time_of_day(value)
        except ValueError as exc:
            raise CatalogError(str(exc)) from exc
    raise CatalogError(f"invalid offset {value!r}")


def _require_name(value: Any, what: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise CatalogError(f"{what} name must be a non-empty string, got {value!r}")
    return value


def parse_event(entry: Mapping[str, Any], meta_name: str = "") -> EventSchedule:
    """Build one EventSchedule from a catalog event entry."""
    if not isinstance(entry, Mapping):
        raise CatalogError(f"event entry must be a mapping, got {entry!r}")
    missing = [f for f in ("name", "offset", "frequency", "length") if f not in entry]
    if missing:
        raise CatalogError(f"event is missing {', '.join(missing)}")
    try:
        schedule = EventSchedule(
            name=_require_name(entry["name"], "event"),
            offset=parse_offset(entry["offset"]),
            frequency=parse_duration(entry["frequency"]),
            length=parse_duration(entry["length"]),
        )
    except ScheduleError as exc:
        raise CatalogError(str(exc)) from exc
    if schedule.offset >= schedule.frequency:
        logger.warning(
            "schedule_offset_outside_period",
            meta=meta_name,
            event_name=schedule.name,
            offset=schedule.offset,
            frequency=schedule.frequency,
        )
    return schedule


def parse_meta(key: str, entry: Mapping[str, Any]) -> Meta:
    """Build a Meta from one catalog entry. Raises CatalogError on bad input."""
    if not isinstance(entry, Mapping):
        raise CatalogError("meta entry must be a mapping", key=key)
    try:
        name = _require_name(entry.get("name", key), "meta")
        category = Category.from_label(str(entry.get("category", "")))
        events = entry.get("events")
        if not isinstance(events, list) or not events:
            raise CatalogError("meta must list at least one event")
        schedules = [parse_event(e, name) for e in events]
        return Meta(name=name, category=category, schedules=tuple(schedules))
    except CatalogError as exc:
        raise CatalogError(str(exc), key=key) from exc


def parse_document(
    document: Any, strict: bool = True, source: str = "<memory>"
) -> dict[str, Meta]:
    """Turn a parsed YAML document into an ordered ``key -> Meta`` mapping."""
    if not isinstance(document, Mapping) or not isinstance(
        document.get("metas"), Mapping
    ):
        raise CatalogError(f"{source}: catalog must have a top-level 'metas' mapping")

    metas: dict[str, Meta] = {}
    for key, entry in document["metas"].items():
        try:
            metas[str(key)] = parse_meta(str(key), entry)
        except CatalogError as exc:
            if strict:
                raise
            logger.warning("catalog_meta_skipped", source=source, key=key, error=str(exc))
    return metas


def load_metas(path: Path | str, strict: bool = True) -> dict[str, Meta]:
    """Load a YAML catalog file into an ordered ``key -> Meta`` mapping."""
    path = Path(path)
    try:
        # PyYAML decodes bytes itself; undecodable input is a ReaderError.
        with open(path, "rb") as f:
            document = yaml.safe_load(f)
    except OSError as exc:
        raise CatalogError(f"cannot read catalog {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise CatalogError(f"malformed catalog {path}: {exc}") from exc

    metas = parse_document(document, strict=strict, source=str(path))
    logger.info("catalog_loaded", source=str(path), metas=len(metas))
    return metas

