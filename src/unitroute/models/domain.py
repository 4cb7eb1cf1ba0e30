"""Domain models for located points, maps and solver parameters."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True, slots=True)
class Point:
    """A located stop. Position 0 of a solve call is the fixed start."""

    id: str
    x: float
    y: float
    floor: int = 0


@dataclass(frozen=True, slots=True)
class SolveConfig:
    """Per-call solver parameters."""

    floor_penalty: float = 20.0
    return_to_start: bool = True
    max_iterations: int = 500
    time_limit_seconds: Optional[float] = None


@dataclass(slots=True)
class DetectedUnit:
    """Candidate unit label found on a floor-plan image, in normalized image coordinates."""

    unit: str
    x: float
    y: float
    floor: int = 0


@dataclass(slots=True)
class MapRecord:
    """Represents an uploaded floor plan and the units known on it."""

    map_id: str
    image_file: Optional[str]
    width: Optional[int] = None
    height: Optional[int] = None
    units: list[dict] = field(default_factory=list)
