# 🧲 carimport/infrastructure/parsers/vehicle_data_extractor.py
"""
🧲 VehicleDataExtractor — фасад над стратегіями екстракції для одного документа.

🔹 Запускає екстрактори полів (DOM) і повертає чернетку `VehicleFields`.
🔹 Окремим кроком заповнює прогалини з JSON-LD (знайдене в DOM не перезаписується).
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging														# 🧾 Логування подій
from dataclasses import dataclass, field, fields					# 🧱 Чернетка полів
from typing import List, Optional									# 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from carimport.infrastructure.parsers.document import Document
from carimport.infrastructure.parsers.extractors.images import extract_images
from carimport.infrastructure.parsers.extractors.json_ld import extract_structured
from carimport.infrastructure.parsers.extractors.price import extract_price
from carimport.infrastructure.parsers.extractors.technical import extract_technical
from carimport.infrastructure.parsers.extractors.title import extract_title
from carimport.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.parser.extractor")


@dataclass
class VehicleFields:
    """Чернетка запису: None — поле ще не визначене."""

    title: Optional[str] = None
    price: Optional[int] = None
    power: Optional[int] = None
    mileage: Optional[int] = None
    model_year: Optional[int] = None
    fuel_type: Optional[str] = None
    transmission: Optional[str] = None
    images: List[str] = field(default_factory=list)

    def unresolved(self) -> List[str]:
        return [f.name for f in fields(self) if f.name != "images" and getattr(self, f.name) is None]


class VehicleDataExtractor:
    """
    🧲 Витягує поля з одного `Document`.
    """

    def __init__(self, document: Document, *, images_limit: Optional[int] = None) -> None:
        self.document = document
        self.images_limit = images_limit

    def extract_fields(self) -> VehicleFields:
        """📥 DOM-рівні: селектори, структурований список, повнотекстові регулярки, зображення."""
        doc = self.document
        technical = extract_technical(doc)
        draft = VehicleFields(
            title=extract_title(doc),
            price=extract_price(doc),
            power=technical.power,
            mileage=technical.mileage,
            model_year=technical.model_year,
            fuel_type=technical.fuel_type,
            transmission=technical.transmission,
            images=extract_images(doc, limit=self.images_limit),
        )
        logger.debug(
            "📥 DOM: title=%r price=%s power=%s mileage=%s year=%s fuel=%r images=%d",
            draft.title,
            draft.price,
            draft.power,
            draft.mileage,
            draft.model_year,
            draft.fuel_type,
            len(draft.images),
        )
        return draft

    def fill_from_structured(self, draft: VehicleFields) -> VehicleFields:
        """🧾 Лише порожні поля отримують значення з JSON-LD."""
        missing = draft.unresolved()
        if not missing:
            return draft
        structured = extract_structured(self.document)
        for name in missing:
            value = getattr(structured, name)
            if value is not None:
                setattr(draft, name, value)
                logger.debug("🧾 JSON-LD заповнив %s=%r", name, value)
        return draft

    def extract(self) -> VehicleFields:
        return self.fill_from_structured(self.extract_fields())


__all__ = ["VehicleFields", "VehicleDataExtractor"]
