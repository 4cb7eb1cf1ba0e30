"""Map upload, unit registry and map route endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, File, Form, HTTPException, UploadFile, status
from fastapi.responses import FileResponse

from ...data.maps_repository import map_image_path
from ...schemas.maps import MapRecordModel, UnitsUpdateRequest
from ...schemas.routing import RouteRequest, RouteResponse
from ...services.maps.service import create_map, get_map, update_units
from ...services.routing.errors import MapNotFoundError, MissingPointsError
from ...services.routing.service import plan_route

router = APIRouter(prefix="/maps", tags=["maps"])


@router.post("", response_model=MapRecordModel, status_code=status.HTTP_201_CREATED)
async def upload_map(
    map: UploadFile = File(..., description="Floor-plan image."),
    width: int | None = Form(default=None),
    height: int | None = Form(default=None),
) -> MapRecordModel:
    """Upload a floor plan; units are pre-filled from text detection (possibly empty)."""
    if not map.filename:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file uploaded.")
    try:
        return create_map(filename=map.filename, payload=await map.read(), width=width, height=height)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error storing uploaded map: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to store map: {str(exc)}"
        ) from exc


@router.get("/{map_id}", response_model=MapRecordModel, status_code=status.HTTP_200_OK)
def read_map(map_id: str) -> MapRecordModel:
    try:
        return get_map(map_id)
    except MapNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Map not found") from exc


@router.get("/{map_id}/image")
def read_map_image(map_id: str) -> FileResponse:
    try:
        return FileResponse(map_image_path(map_id))
    except MapNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Map image not found") from exc


@router.post("/{map_id}/units", response_model=MapRecordModel, status_code=status.HTTP_200_OK)
def save_units(map_id: str, payload: UnitsUpdateRequest) -> MapRecordModel:
    """Replace the unit set of a map."""
    try:
        return update_units(map_id, payload.units)
    except MapNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Map not found") from exc


@router.post("/{map_id}/route", response_model=RouteResponse, status_code=status.HTTP_200_OK)
def route_map_units(map_id: str, payload: RouteRequest) -> RouteResponse:
    """Compute a visiting order over the requested units of a map."""
    try:
        return plan_route(map_id, payload)
    except MapNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Map not found") from exc
    except MissingPointsError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "Some units not found", "missing": exc.missing},
        ) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error computing route for map {map_id}: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to compute route: {str(exc)}"
        ) from exc
