# 🚗 carimport/domain/vehicles/__init__.py
"""🚗 Домен оголошень авто: сутності та контракти."""

from .entities import (
    IMAGES_MAX,
    MODEL_YEAR_MAX,
    MODEL_YEAR_MIN,
    PLACEHOLDER_IMAGE,
    TITLE_FALLBACK,
    FuelType,
    Url,
    VehicleRecord,
    normalize_fuel_type,
)
from .interfaces import IDocumentProvider, IVehicleDataProvider

__all__ = [
    "IMAGES_MAX",
    "MODEL_YEAR_MAX",
    "MODEL_YEAR_MIN",
    "PLACEHOLDER_IMAGE",
    "TITLE_FALLBACK",
    "FuelType",
    "Url",
    "VehicleRecord",
    "normalize_fuel_type",
    "IDocumentProvider",
    "IVehicleDataProvider",
]
