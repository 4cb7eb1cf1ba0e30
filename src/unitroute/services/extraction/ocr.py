"""Floor-plan text recognition: finds unit labels and their normalized positions.

Detection is best effort. An unreadable image, a missing Tesseract binary or a page with
no recognizable labels all produce an empty list, which callers treat as "no points
detected".
"""

from __future__ import annotations

import logging
import re
import string
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence

import pytesseract
from PIL import Image, ImageEnhance, ImageFilter, ImageOps

from ...config import settings
from ...models.domain import DetectedUnit

FALLBACK_LABEL_PATTERN = re.compile(r"\d{2,5}")
FALLBACK_ORIGIN = 0.2
FALLBACK_STEP = 0.15
CONTRAST_FACTOR = 1.5
CHAR_WHITELIST = string.digits + string.ascii_uppercase + string.ascii_lowercase

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RecognizedWord:
    text: str
    left: int
    top: int
    width: int
    height: int

    @property
    def center(self) -> tuple[float, float]:
        return self.left + self.width / 2, self.top + self.height / 2


def _clamp_unit(value: float) -> float:
    return max(0.0, min(1.0, value))


def preprocess_image(image: Image.Image, target_width: int | None = None) -> Image.Image:
    """Upscale, grayscale, normalize, sharpen and boost contrast for better recognition."""

    target_width = target_width or settings.ocr_resize_width
    scale = target_width / image.width
    gray = ImageOps.grayscale(image)
    resized = gray.resize((target_width, max(1, round(image.height * scale))), Image.Resampling.LANCZOS)
    normalized = ImageOps.autocontrast(resized)
    sharpened = normalized.filter(ImageFilter.SHARPEN)
    return ImageEnhance.Contrast(sharpened).enhance(CONTRAST_FACTOR)


def recognize_words(image: Image.Image) -> list[RecognizedWord]:
    """Run Tesseract and return every non-empty word with its bounding box."""

    config = f"--psm 6 -c tessedit_char_whitelist={CHAR_WHITELIST}"
    data = pytesseract.image_to_data(
        image,
        lang=settings.ocr_language,
        config=config,
        output_type=pytesseract.Output.DICT,
    )
    words: list[RecognizedWord] = []
    for text, left, top, width, height in zip(
        data.get("text", []),
        data.get("left", []),
        data.get("top", []),
        data.get("width", []),
        data.get("height", []),
    ):
        cleaned = (text or "").strip()
        if not cleaned:
            continue
        words.append(RecognizedWord(cleaned, int(left), int(top), int(width), int(height)))
    return words


def units_from_words(
    words: Iterable[RecognizedWord],
    processed_size: tuple[int, int],
    label_pattern: str | None = None,
) -> list[DetectedUnit]:
    """Convert label words into units at their box centres, normalized to [0, 1].

    ``processed_size`` is the (width, height) of the image the boxes refer to. The processed
    image keeps the original aspect ratio, so normalizing against it equals scaling back to
    the original image and normalizing there.
    """

    pattern = re.compile(label_pattern or settings.ocr_label_pattern)
    width, height = processed_size
    detected: list[DetectedUnit] = []
    for word in words:
        text = word.text.strip()
        if not pattern.match(text):
            continue
        center_x, center_y = word.center
        detected.append(
            DetectedUnit(unit=text, x=_clamp_unit(center_x / width), y=_clamp_unit(center_y / height))
        )
    return detected


def units_from_text(text: str) -> list[DetectedUnit]:
    """Fallback when no positioned label was found: place labels on a diagonal."""

    labels = FALLBACK_LABEL_PATTERN.findall(text or "")
    return [
        DetectedUnit(
            unit=label,
            x=_clamp_unit(FALLBACK_ORIGIN + index * FALLBACK_STEP),
            y=_clamp_unit(FALLBACK_ORIGIN + index * FALLBACK_STEP),
        )
        for index, label in enumerate(labels)
    ]


def extract_units(words: Sequence[RecognizedWord], processed_size: tuple[int, int]) -> list[DetectedUnit]:
    detected = units_from_words(words, processed_size)
    if not detected:
        detected = units_from_text(" ".join(word.text for word in words))
    return detected


def detect_units(image_path: Path) -> list[DetectedUnit]:
    """Detect unit labels on the floor plan stored at ``image_path``."""

    try:
        with Image.open(image_path) as image:
            logger.info(f"Running unit detection on {image_path} ({image.width}x{image.height})")
            processed = preprocess_image(image)
        words = recognize_words(processed)
        detected = extract_units(words, processed.size)
    except Exception:
        logger.exception(f"Unit detection failed for {image_path}")
        return []
    logger.info(f"Detected {len(detected)} units on {image_path}")
    return detected
