# 🧠 carimport/infrastructure/parsers/__init__.py
"""🧠 Парсинг оголошень: документ, екстрактори полів та збирач запису."""

from __future__ import annotations

from .document import Document
from .vehicle_data_extractor import VehicleDataExtractor, VehicleFields
from .vehicle_parser import VehicleParser

__all__ = ["Document", "VehicleDataExtractor", "VehicleFields", "VehicleParser"]
