"""Map record request/response schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class UnitModel(BaseModel):
    unit: str = Field(..., min_length=1, description="Unit label, e.g. '101'.")
    x: float = Field(..., allow_inf_nan=False)
    y: float = Field(..., allow_inf_nan=False)
    floor: int = 0


class MapRecordModel(BaseModel):
    map_id: str
    image_url: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    units: List[UnitModel]


class UnitsUpdateRequest(BaseModel):
    units: List[UnitModel] = Field(default_factory=list)


class DetectionResponse(BaseModel):
    success: bool
    units: List[UnitModel]
