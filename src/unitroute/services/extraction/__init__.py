"""Floor-plan unit extraction."""

from .ocr import detect_units, extract_units, units_from_text, units_from_words

__all__ = ["detect_units", "extract_units", "units_from_text", "units_from_words"]
