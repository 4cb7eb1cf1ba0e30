"""Route group exports."""

from . import health, maps, ocr, routes

__all__ = ["health", "maps", "ocr", "routes"]
