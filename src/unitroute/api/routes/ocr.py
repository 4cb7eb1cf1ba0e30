"""Standalone unit detection endpoint."""

from __future__ import annotations

import tempfile
from dataclasses import asdict
from pathlib import Path

from fastapi import APIRouter, File, HTTPException, UploadFile, status

from ...schemas.maps import DetectionResponse, UnitModel
from ...services.extraction import ocr
from ...services.maps.service import check_upload

router = APIRouter(tags=["ocr"])


@router.post("/ocr-detect", response_model=DetectionResponse, status_code=status.HTTP_200_OK)
async def detect(map: UploadFile = File(...)) -> DetectionResponse:
    """Detect unit labels on an image without creating a map record."""
    if not map.filename:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file uploaded.")

    payload = await map.read()
    try:
        check_upload(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    with tempfile.TemporaryDirectory(prefix="unitroute_ocr_") as workdir:
        image_path = Path(workdir) / (Path(map.filename).name or "upload")
        image_path.write_bytes(payload)
        detected = ocr.detect_units(image_path)
    return DetectionResponse(success=True, units=[UnitModel(**asdict(unit)) for unit in detected])
