# 🔧 carimport/infrastructure/parsers/extractors/technical.py
"""
🔧 Технічні характеристики: потужність, пробіг, рік, пальне, коробка передач.

🔹 Рівень 1 — структурований список: пари «мітка → значення» з `dl`, блоків технічних даних і таблиць.
🔹 Рівень 2 — регулярні вирази по всьому видимому тексту сторінки.
🔹 Кожне поле заповнюється незалежно: що не знайшов рівень 1, добирає рівень 2.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from bs4.element import Tag												# 🧱 DOM-вузол

# 🔠 Системні імпорти
import re																	# 🧪 Регулярні вирази
from dataclasses import dataclass, fields, replace							# 🧱 DTO характеристик
from typing import Callable, List, Optional, Sequence, Tuple				# 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from carimport.domain.vehicles.entities import (
    MODEL_YEAR_MAX,
    MODEL_YEAR_MIN,
    fuel_from_text,
    normalize_fuel_type,
)
from carimport.infrastructure.parsers.document import Document
from carimport.infrastructure.parsers.extractors.base import _ConfigSnapshot, _norm_ws, logger
from carimport.shared.utils.number import grouped_to_int, kw_to_ps

# ================================
# 🧪 ПАТЕРНИ
# ================================
_PS_RE = re.compile(r"(\d+)\s*PS(?![a-zäöü])", re.IGNORECASE)				# ⚡ "150 PS"
_KW_RE = re.compile(r"(\d+)\s*kW(?![a-zäöü])", re.IGNORECASE)				# ⚡ "110 kW" (але не "kWh")
_KM_RE = re.compile(r"(\d{1,3}(?:\.\d{3})+|\d+)\s*km(?![a-zäöü/])", re.IGNORECASE)	# 🛣️ "123.456 km" (але не "km/h")
_YEAR_RE = re.compile(r"(?<!\d)(?:19|20)\d{2}(?!\d)")						# 📅 4-значний рік

_MILEAGE_LABELS = ("kilometerstand", "laufleistung")						# 🛣️ Перевіряються раніше за "leistung"
_YEAR_LABELS = ("erstzulassung", "baujahr")
_FUEL_LABELS = ("kraftstoff",)
_CONSUMPTION_TOKEN = "verbrauch"												# ⛽ "Kraftstoffverbrauch" — не тип пального
_TRANSMISSION_LABELS = ("getriebe",)
_POWER_LABELS = ("leistung", "ps")

Pair = Tuple[str, str]


# ================================
# 🧱 DTO
# ================================
@dataclass
class TechnicalDetails:
    """Проміжний результат: None означає «поле не визначене»."""

    power: Optional[int] = None
    mileage: Optional[int] = None
    model_year: Optional[int] = None
    fuel_type: Optional[str] = None
    transmission: Optional[str] = None

    def fill_gaps(self, other: "TechnicalDetails") -> "TechnicalDetails":
        """Повертає копію, де порожні поля взято з `other`."""
        updates = {
            f.name: getattr(other, f.name)
            for f in fields(self)
            if getattr(self, f.name) is None and getattr(other, f.name) is not None
        }
        return replace(self, **updates)


# ================================
# 🔢 ПАРСЕРИ ЗНАЧЕНЬ
# ================================
def parse_power(text: str) -> Optional[int]:
    """PS напряму, інакше kW → PS; 0 вважаємо невизначеним."""
    ps_match = _PS_RE.search(text or "")
    if ps_match and int(ps_match.group(1)) > 0:
        return int(ps_match.group(1))
    kw_match = _KW_RE.search(text or "")
    if kw_match and int(kw_match.group(1)) > 0:
        return kw_to_ps(kw_match.group(1))
    return None


def parse_mileage(text: str) -> Optional[int]:
    match = _KM_RE.search(text or "")
    if not match:
        return None
    return grouped_to_int(match.group(1))


def parse_year(text: str) -> Optional[int]:
    """Перший рік у межах [1990, 2025]; роки поза межами пропускаються."""
    for match in _YEAR_RE.finditer(text or ""):
        year = int(match.group(0))
        if MODEL_YEAR_MIN <= year <= MODEL_YEAR_MAX:
            return year
        logger.debug("📅 Рік %s поза межами [%s, %s] — пропускаємо.", year, MODEL_YEAR_MIN, MODEL_YEAR_MAX)
    return None


# ================================
# 📋 РІВЕНЬ 1: СТРУКТУРОВАНИЙ СПИСОК
# ================================
def _direct_children(element: Tag) -> List[Tag]:
    return [child for child in element.find_all(recursive=False) if isinstance(child, Tag)]


def label_value_pairs(doc: Document, row_selectors: Optional[Sequence[str]] = None) -> List[Pair]:
    """📋 Пари (мітка у нижньому регістрі, значення) з dl/dt/dd та рядків технічних блоків."""
    pairs: List[Pair] = []
    for term in doc.select("dl dt"):
        definition = term.find_next_sibling("dd")
        if isinstance(definition, Tag):
            pairs.append((doc.text_of(term).lower(), doc.text_of(definition)))

    chosen = row_selectors if row_selectors is not None else _ConfigSnapshot.selectors().TECH_ROW_LIST
    for selector in chosen:
        for row in doc.select(selector):
            cells = _direct_children(row)
            if len(cells) < 2:
                continue
            label, value = doc.text_of(cells[0]).lower(), doc.text_of(cells[1])
            if label and value:
                pairs.append((label, value))
    return pairs


def _matches(label: str, keywords: Sequence[str]) -> bool:
    return any(keyword in label for keyword in keywords)


def details_from_pairs(pairs: Sequence[Pair]) -> TechnicalDetails:
    """Перша підходяща пара для кожного поля; пальне = "<коробка> <пальне>" → словник."""
    details = TechnicalDetails()
    fuel_text = ""
    transmission_text = ""
    for label, value in pairs:
        if _matches(label, _MILEAGE_LABELS):
            if details.mileage is None:
                details.mileage = parse_mileage(value) or grouped_to_int(_norm_ws(value))
        elif _matches(label, _YEAR_LABELS):
            if details.model_year is None:
                details.model_year = parse_year(value)
        elif _CONSUMPTION_TOKEN in label:
            continue
        elif _matches(label, _FUEL_LABELS):
            if not fuel_text or normalize_fuel_type(fuel_text) is None:
                fuel_text = value
        elif _matches(label, _TRANSMISSION_LABELS):
            transmission_text = transmission_text or value
        elif _matches(label, _POWER_LABELS):
            if details.power is None:
                details.power = parse_power(value)

    combined = " ".join(part for part in (transmission_text, fuel_text) if part)
    details.fuel_type = normalize_fuel_type(combined) if combined else None
    details.transmission = transmission_text or None
    return details


def details_from_list(doc: Document) -> TechnicalDetails:
    return details_from_pairs(label_value_pairs(doc))


# ================================
# 📜 РІВЕНЬ 2: ВЕСЬ ТЕКСТ
# ================================
def details_from_text(doc: Document) -> TechnicalDetails:
    text = doc.full_text()
    return TechnicalDetails(
        power=parse_power(text),
        mileage=parse_mileage(text),
        model_year=parse_year(text),
        fuel_type=fuel_from_text(text),
    )


TECHNICAL_TIERS: Tuple[Callable[[Document], TechnicalDetails], ...] = (
    details_from_list,
    details_from_text,
)																			# 🪜 Спершу список (менше хибних чисел), потім текст


def extract_technical(doc: Document) -> TechnicalDetails:
    """🔧 Проганяє рівні по черзі; кожне поле бере перше знайдене значення."""
    result = TechnicalDetails()
    for tier in TECHNICAL_TIERS:
        result = result.fill_gaps(tier(doc))
    logger.debug("🔧 Технічні дані: %s", result)
    return result


__all__ = [
    "TechnicalDetails",
    "TECHNICAL_TIERS",
    "parse_power",
    "parse_mileage",
    "parse_year",
    "label_value_pairs",
    "details_from_pairs",
    "details_from_list",
    "details_from_text",
    "extract_technical",
]
