"""Application configuration and settings management."""

from pathlib import Path
from typing import Any, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="UNITROUTE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Unit Route Planner API"
    api_prefix: str = "/api"
    data_root: Path = Field(default=Path("data"), description="Root directory for map records and images.")
    floor_penalty: float = Field(
        default=20.0,
        ge=0.0,
        allow_inf_nan=False,
        description="Cost added to an edge between points on different floors (raw coordinate units).",
    )
    route_floor_penalty: float = Field(
        default=0.02,
        ge=0.0,
        allow_inf_nan=False,
        description="Floor penalty used for map routes, whose coordinates are normalized to [0, 1].",
    )
    return_to_start: bool = True
    max_iterations: int = Field(default=500, ge=1, description="Cap on 2-opt improvement sweeps.")
    solver_time_limit_seconds: Optional[float] = Field(
        default=None,
        gt=0.0,
        allow_inf_nan=False,
        description="Optional wall-clock budget for the improvement phase.",
    )
    ocr_language: str = Field(default="eng", description="Tesseract language code.")
    ocr_resize_width: int = Field(default=1200, ge=100, description="Width images are scaled to before OCR.")
    ocr_label_pattern: str = Field(
        default=r"^\d{2,5}$",
        description="Regular expression a recognized word must match to count as a unit label.",
    )
    max_upload_bytes: int = Field(default=10 * 1024 * 1024, ge=1)
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("data_root", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path:
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()


settings = Settings()
