# 🧾 carimport/infrastructure/parsers/extractors/json_ld.py
"""
🧾 Структуровані дані (JSON-LD) як джерело для заповнення прогалин.

🔹 Кожен `script[type="application/ld+json"]` розбирається у `Result[блоки, StructuredDataParseError]`;
   зламаний блок логуємо як PartialParseFailure і пропускаємо, інші обробляються далі.
🔹 Враховуються списки та `@graph`; цікавлять лише обʼєкти з `@type` Car/Vehicle.
🔹 Значення з JSON-LD ніколи не перезаписують уже знайдені поля.
🔹 Рік з JSON-LD вважається авторитетним: межі [1990, 2025] тут не застосовуються.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import json																# 🧾 Десеріалізація JSON
import re																	# 🧪 Рік із дати
from dataclasses import dataclass, fields								# 🧱 DTO полів
from typing import Any, Dict, Iterable, List, Optional					# 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from carimport.domain.vehicles.entities import normalize_fuel_type
from carimport.infrastructure.parsers.document import Document
from carimport.infrastructure.parsers.extractors.base import _as_list, _norm_ws, logger
from carimport.shared.errors import StructuredDataParseError
from carimport.shared.utils.number import kw_to_ps, to_int_or_none
from carimport.shared.utils.result import Err, Ok, Result

_VEHICLE_TYPES = {"car", "vehicle"}										# 🚗 Типи schema.org, які нас цікавлять
_DATE_KEYS = ("dateVehicleFirstRegistered", "productionDate", "vehicleModelDate", "modelDate")
_YEAR_RE = re.compile(r"(?<!\d)(\d{4})(?!\d)")


# ================================
# 🧱 DTO
# ================================
@dataclass
class StructuredFields:
    """Поля, які можуть прийти з JSON-LD (None — немає в блоці)."""

    title: Optional[str] = None
    price: Optional[int] = None
    power: Optional[int] = None
    mileage: Optional[int] = None
    model_year: Optional[int] = None
    fuel_type: Optional[str] = None
    transmission: Optional[str] = None

    def fill_gaps(self, other: "StructuredFields") -> None:
        for f in fields(self):
            if getattr(self, f.name) is None and getattr(other, f.name) is not None:
                setattr(self, f.name, getattr(other, f.name))


# ================================
# 📄 РОЗБІР БЛОКІВ
# ================================
def parse_block(raw: str, index: int) -> Result[List[Dict[str, Any]], StructuredDataParseError]:
    """📄 Один JSON-LD блок → плаский список обʼєктів (списки та `@graph` розгорнуто)."""
    try:
        payload = json.loads(raw)
    except (json.JSONDecodeError, TypeError) as exc:
        return Err(StructuredDataParseError(index=index, detail=str(exc)))
    return Ok(list(_flatten(payload)))


def _flatten(node: Any) -> Iterable[Dict[str, Any]]:
    for item in _as_list(node):
        if not isinstance(item, dict):
            continue
        yield item
        graph = item.get("@graph")
        if graph is not None:
            yield from _flatten(graph)


def _is_vehicle(obj: Dict[str, Any]) -> bool:
    return any(str(t).strip().lower() in _VEHICLE_TYPES for t in _as_list(obj.get("@type")))


def vehicle_objects(doc: Document) -> List[Dict[str, Any]]:
    """🚗 Усі Car/Vehicle обʼєкти з коректних блоків документа."""
    vehicles: List[Dict[str, Any]] = []
    for index, raw in enumerate(doc.structured_blocks()):
        result = parse_block(raw, index)
        if isinstance(result, Err):
            logger.warning(
                "⚠️ PartialParseFailure: %s (%s)",
                result.error.message,
                result.error.details,
                extra={"kind": result.error.kind.value, "url": doc.url},
            )
            continue
        vehicles.extend(obj for obj in result.value if _is_vehicle(obj))
    logger.debug("📄 JSON-LD: знайдено %d Car/Vehicle обʼєктів.", len(vehicles))
    return vehicles


# ================================
# 🔑 ПОЛЯ
# ================================
def _first_not_empty(*values: Any) -> Any:
    for value in values:
        if value not in (None, "", [], {}):
            return value
    return None


def _scalar(value: Any) -> Any:
    """`{"value": 1}` / `{"@value": 1}` / `[x, ...]` → перше скалярне значення."""
    if isinstance(value, list):
        return _scalar(value[0]) if value else None
    if isinstance(value, dict):
        return _first_not_empty(value.get("value"), value.get("@value"), value.get("name"))
    return value


def _year_of(value: Any) -> Optional[int]:
    match = _YEAR_RE.search(str(_scalar(value) or ""))
    return int(match.group(1)) if match else None


def _price_of(offers: Any) -> Optional[int]:
    for offer in _as_list(offers):
        if not isinstance(offer, dict):
            continue
        spec = offer.get("priceSpecification")
        spec_price = _scalar(spec.get("price")) if isinstance(spec, dict) else None
        candidate = _first_not_empty(offer.get("price"), spec_price, offer.get("lowPrice"))
        price = to_int_or_none(_scalar(candidate))
        if price is not None and price > 0:
            return price
        nested = offer.get("offers")										# 🧺 AggregateOffer.offers
        if nested:
            price = _price_of(nested)
            if price is not None:
                return price
    return None


def _power_of(engine: Any) -> Optional[int]:
    for item in _as_list(engine):
        if not isinstance(item, dict):
            continue
        for power in _as_list(item.get("enginePower")):
            if isinstance(power, dict):
                amount = to_int_or_none(power.get("value"))
                unit = str(power.get("unitCode") or power.get("unitText") or "").upper()
            else:
                amount, unit = to_int_or_none(power), ""
            if amount is None or amount <= 0:
                continue
            return kw_to_ps(amount) if unit in {"KWT", "KW"} else amount
    return None


def fields_from_object(obj: Dict[str, Any]) -> StructuredFields:
    """🔑 Мапінг одного Car/Vehicle обʼєкта на поля запису."""
    name = _norm_ws(str(_scalar(obj.get("name")) or ""))
    year = next((y for y in (_year_of(obj.get(key)) for key in _DATE_KEYS) if y), None)
    mileage = to_int_or_none(_scalar(obj.get("mileageFromOdometer")))
    transmission = _norm_ws(str(_scalar(obj.get("vehicleTransmission")) or ""))
    return StructuredFields(
        title=name or None,
        price=_price_of(obj.get("offers")),
        power=_power_of(obj.get("vehicleEngine")),
        mileage=mileage if mileage is not None and mileage >= 0 else None,
        model_year=year,
        fuel_type=normalize_fuel_type(_scalar(obj.get("fuelType"))),
        transmission=transmission or None,
    )


def extract_structured(doc: Document) -> StructuredFields:
    """🧾 Обʼєднує всі Car/Vehicle обʼєкти; перший обʼєкт має пріоритет."""
    merged = StructuredFields()
    for obj in vehicle_objects(doc):
        merged.fill_gaps(fields_from_object(obj))
    return merged


__all__ = [
    "StructuredFields",
    "parse_block",
    "vehicle_objects",
    "fields_from_object",
    "extract_structured",
]
