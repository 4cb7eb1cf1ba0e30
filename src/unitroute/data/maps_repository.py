"""Data access helpers for map records (the per-map point registry)."""

from __future__ import annotations

import logging
import re
from dataclasses import asdict
from pathlib import Path
from typing import Iterable, Sequence

from ..models.domain import MapRecord
from ..persistence.filesystem import FileStorage
from ..services.routing.errors import MapNotFoundError

_MAP_ID_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")

logger = logging.getLogger(__name__)


def _storage() -> FileStorage:
    return FileStorage()


def _checked_map_id(map_id: str) -> str:
    if not _MAP_ID_PATTERN.match(map_id or ""):
        raise MapNotFoundError(map_id)
    return map_id


def _normalize_unit(entry: dict) -> dict:
    return {
        "unit": str(entry["unit"]).strip(),
        "x": float(entry["x"]),
        "y": float(entry["y"]),
        "floor": int(entry.get("floor") or 0),
    }


def store_map_image(original_name: str, payload: bytes) -> tuple[str, Path]:
    """Persist an uploaded image and return the new map id and the stored file path."""

    storage = _storage()
    stored_name = storage.make_upload_name(original_name)
    path = storage.image_path(stored_name)
    storage.write_bytes(path, payload)
    map_id = Path(stored_name).stem
    logger.info(f"Stored map image {stored_name} ({len(payload)} bytes)")
    return map_id, path


def save_map(record: MapRecord) -> MapRecord:
    storage = _storage()
    _checked_map_id(record.map_id)
    record.units = [_normalize_unit(entry) for entry in record.units]
    storage.write_json(storage.map_json_path(record.map_id), asdict(record))
    return record


def load_map(map_id: str) -> MapRecord:
    storage = _storage()
    path = storage.map_json_path(_checked_map_id(map_id))
    if not path.exists():
        raise MapNotFoundError(map_id)
    data = storage.read_json(path)
    return MapRecord(
        map_id=data.get("map_id", map_id),
        image_file=data.get("image_file"),
        width=data.get("width"),
        height=data.get("height"),
        units=[_normalize_unit(entry) for entry in data.get("units") or []],
    )


def map_image_path(map_id: str) -> Path:
    record = load_map(map_id)
    if not record.image_file:
        raise MapNotFoundError(map_id)
    path = _storage().image_path(record.image_file)
    if not path.exists():
        raise MapNotFoundError(map_id)
    return path


def replace_units(map_id: str, units: Iterable[dict]) -> MapRecord:
    """Overwrite the unit set of an existing map."""

    record = load_map(map_id)
    record.units = list(units)
    saved = save_map(record)
    logger.info(f"Map {map_id} now has {len(saved.units)} units")
    return saved


def units_by_label(record: MapRecord) -> dict[str, dict]:
    # later entries win, matching a plain dict build over the stored list
    return {entry["unit"]: entry for entry in record.units}


def find_missing(record: MapRecord, requested: Sequence[str]) -> list[str]:
    """Requested labels with no unit on the map, in request order."""
    known = units_by_label(record)
    return [label for label in requested if label not in known]
