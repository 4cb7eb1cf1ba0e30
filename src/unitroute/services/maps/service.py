"""Map upload and registry orchestration."""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Iterable, Optional

from ...config import settings
from ...data.maps_repository import load_map, replace_units, save_map, store_map_image
from ...models.domain import MapRecord
from ...schemas.maps import MapRecordModel, UnitModel
from ..extraction.ocr import detect_units


def to_model(record: MapRecord) -> MapRecordModel:
    image_url = f"{settings.api_prefix}/maps/{record.map_id}/image" if record.image_file else None
    return MapRecordModel(
        map_id=record.map_id,
        image_url=image_url,
        width=record.width,
        height=record.height,
        units=[UnitModel(**entry) for entry in record.units],
    )


def check_upload(payload: bytes) -> None:
    """Reject empty uploads and uploads over the configured size limit."""
    if not payload:
        raise ValueError("Uploaded file is empty.")
    if len(payload) > settings.max_upload_bytes:
        raise ValueError(f"Uploaded file exceeds {settings.max_upload_bytes} bytes.")


def create_map(
    *,
    filename: str,
    payload: bytes,
    width: Optional[int] = None,
    height: Optional[int] = None,
) -> MapRecordModel:
    """Store an uploaded floor plan and seed its units from text detection."""
    check_upload(payload)

    map_id, image_path = store_map_image(filename, payload)
    detected = detect_units(image_path)
    if not detected:
        logging.info(f"No units detected on map '{map_id}'; starting with an empty unit list")

    record = save_map(
        MapRecord(
            map_id=map_id,
            image_file=image_path.name,
            width=width,
            height=height,
            units=[asdict(unit) for unit in detected],
        )
    )
    return to_model(record)


def get_map(map_id: str) -> MapRecordModel:
    return to_model(load_map(map_id))


def update_units(map_id: str, units: Iterable[UnitModel]) -> MapRecordModel:
    return to_model(replace_units(map_id, [unit.model_dump() for unit in units]))
