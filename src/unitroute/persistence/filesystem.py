"""File-based persistence helpers for map records and uploaded images."""

from __future__ import annotations

import json
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from ..config import settings

_UNSAFE_NAME_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


class FileStorage:
    """Thin wrapper around the data root for storing map JSON and image files."""

    def __init__(self, root: Path | None = None) -> None:
        self.root = (root or settings.data_root).resolve()
        self.maps_root = self.root / "maps"
        self.maps_root.mkdir(parents=True, exist_ok=True)
        self.images_root = self.maps_root / "images"
        self.images_root.mkdir(parents=True, exist_ok=True)

    def make_upload_name(self, original_name: str) -> str:
        """Timestamp-prefixed, filesystem-safe name for an uploaded file."""
        timestamp = int(datetime.now(timezone.utc).timestamp() * 1000)
        base = _UNSAFE_NAME_CHARS.sub("_", Path(original_name).name).strip("._") or "upload"
        return f"{timestamp}-{base}"

    def map_json_path(self, map_id: str) -> Path:
        return self.maps_root / f"{map_id}.json"

    def image_path(self, name: str) -> Path:
        return self.images_root / Path(name).name

    def write_json(self, path: Path, data: Any, *, indent: int = 2) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as handle:
            json.dump(data, handle, ensure_ascii=False, indent=indent)

    def read_json(self, path: Path) -> Any:
        with path.open("r", encoding="utf-8") as handle:
            return json.load(handle)

    def write_bytes(self, path: Path, payload: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("wb") as handle:
            handle.write(payload)
