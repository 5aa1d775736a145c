# 🧩 carimport/infrastructure/parsers/extractors/__init__.py
"""
🧩 Екстрактори полів оголошення: заголовок, ціна, технічні дані, JSON-LD, зображення.
"""

from __future__ import annotations

from .base import Selectors, _ConfigSnapshot, first_resolved
from .images import extract_images
from .json_ld import StructuredFields, extract_structured
from .price import extract_price
from .technical import TechnicalDetails, extract_technical
from .title import extract_title

__all__ = [
    "Selectors",
    "_ConfigSnapshot",
    "first_resolved",
    "extract_title",
    "extract_price",
    "extract_technical",
    "TechnicalDetails",
    "extract_structured",
    "StructuredFields",
    "extract_images",
]
