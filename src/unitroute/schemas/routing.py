"""Routing request/response schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class RouteRequest(BaseModel):
    units: List[str] = Field(default_factory=list, description="Unit labels to visit.")
    start_unit: Optional[str] = Field(
        default=None,
        description="Unit to start from. Defaults to the first requested unit when absent or unknown.",
    )
    return_to_start: bool = Field(default=True, description="Include the closing leg back to the start.")
    floor_penalty: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    max_iterations: Optional[int] = Field(default=None, ge=1)


class PathPointModel(BaseModel):
    id: str
    x: float
    y: float
    floor: int = 0


class RouteResponse(BaseModel):
    map_id: str
    route: List[str]
    length: float
    path: List[PathPointModel]
    metadata: dict


class SolvePointModel(BaseModel):
    id: str
    x: float = Field(..., allow_inf_nan=False)
    y: float = Field(..., allow_inf_nan=False)
    floor: int = 0


class SolveRequest(BaseModel):
    points: List[SolvePointModel]
    floor_penalty: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    return_to_start: Optional[bool] = None
    max_iterations: Optional[int] = Field(default=None, ge=1)


class SolveResponse(BaseModel):
    order: List[int]
    route: List[str]
    length: float
    metadata: dict
