# 🚗 carimport/domain/vehicles/entities.py
"""
🚗 Доменно-чисті сутності оголошення авто.

🔹 `Url` — value-object для абсолютних http(s) посилань.
🔹 `FuelType` — закритий словник типів пального та нормалізація німецьких/англійських назв.
🔹 `VehicleRecord` — іммʼютабельний результат екстракції з явними sentinel-значеннями
   (0 для чисел, "" для рядків, плейсхолдер для порожнього списку зображень).
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                      # 🧾 Логування валідації
import re                                                           # 🧵 Пошук слів у тексті
import uuid                                                         # 🆔 Ідентифікатор запису
from dataclasses import dataclass, field                            # 🧱 Опис сутностей
from datetime import datetime, timezone                             # ⏱️ Час генерації
from enum import Enum                                               # 🔖 Перелік типів пального
from typing import Any, Dict, Iterable, Optional, Tuple             # 🧰 Типізація
from urllib.parse import urlparse                                   # 🌐 Перевірка URL

# ================================
# 🪵 ЛОГЕР МОДУЛЯ
# ================================
logger = logging.getLogger(__name__)


# ================================
# 📏 КОНСТАНТИ ВАЛІДАЦІЇ
# ================================
MODEL_YEAR_MIN = 1990                                               # 📅 Нижня межа року з вільного тексту
MODEL_YEAR_MAX = 2025                                               # 📅 Верхня межа року з вільного тексту
IMAGES_MAX = 10                                                     # 🖼️ Максимум зображень у записі
TITLE_FALLBACK = "Unbekanntes Modell"                               # 🏷️ Заголовок, коли жодна стратегія не спрацювала
PLACEHOLDER_IMAGE = (
    "data:image/svg+xml,%3Csvg xmlns='http://www.w3.org/2000/svg' width='800' height='600'%3E"
    "%3Crect width='800' height='600' fill='%23334155'/%3E"
    "%3Ctext x='50%25' y='50%25' font-family='Arial' font-size='48' fill='%23cbd5e1' "
    "text-anchor='middle' dominant-baseline='middle'%3EKein Bild%3C/text%3E%3C/svg%3E"
)                                                                   # 🖼️ Сірий SVG «Kein Bild»


# ================================
# 🔗 VALUE OBJECT: URL
# ================================
@dataclass(frozen=True, slots=True)
class Url:
    """
    Іммʼютабельний value-object для абсолютних http(s) посилань.
    """

    value: str                                                      # 🌐 Канонічний URL

    def __post_init__(self) -> None:
        normalized = (self.value or "").strip()                     # 🧼 Trim + захист від None
        if not is_http_url(normalized):
            logger.debug("❌ Url: %r не є абсолютним http(s)", normalized)
            raise ValueError(f"Url must be absolute (http/https): {normalized!r}")
        object.__setattr__(self, "value", normalized)               # 🔐 Фіксуємо нормалізоване значення

    def __str__(self) -> str:
        return self.value


def is_http_url(value: str) -> bool:
    """Перевіряє, чи є рядок валідним http(s) URL із netloc."""
    parsed = urlparse(value or "")
    return parsed.scheme in {"http", "https"} and bool(parsed.netloc)


# ================================
# ⛽ ТИПИ ПАЛЬНОГО
# ================================
class FuelType(str, Enum):
    """Закритий словник типів пального запису."""

    GASOLINE = "Gasoline"
    DIESEL = "Diesel"
    ELECTRIC = "Electric"
    HYBRID = "Hybrid"
    LPG = "LPG"
    CNG = "CNG"


FUEL_KEYWORDS: Tuple[Tuple[str, FuelType], ...] = (
    ("Benzin", FuelType.GASOLINE),
    ("Diesel", FuelType.DIESEL),
    ("Elektro", FuelType.ELECTRIC),
    ("Hybrid", FuelType.HYBRID),
    ("Autogas", FuelType.LPG),
    ("Erdgas", FuelType.CNG),
)                                                                   # 📋 Порядок пошуку у вільному тексті

_FUEL_ALIASES: Tuple[Tuple[str, FuelType], ...] = (
    ("hybrid", FuelType.HYBRID),                                    # 🔋 "Hybrid (Benzin/Elektro)" — спершу гібрид
    ("plug-in", FuelType.HYBRID),
    ("autogas", FuelType.LPG),
    ("lpg", FuelType.LPG),
    ("erdgas", FuelType.CNG),
    ("cng", FuelType.CNG),
    ("diesel", FuelType.DIESEL),
    ("elektro", FuelType.ELECTRIC),
    ("electric", FuelType.ELECTRIC),
    ("benzin", FuelType.GASOLINE),
    ("gasoline", FuelType.GASOLINE),
    ("petrol", FuelType.GASOLINE),
)


def normalize_fuel_type(raw: Any) -> Optional[str]:
    """
    Приводить довільний опис пального ("Benzin", "Diesel, Automatik", schema.org URL)
    до значення словника `FuelType`. Нерозпізнане → None.
    """
    text = str(raw or "").strip().lower()
    if not text:
        return None
    for token, fuel in _FUEL_ALIASES:
        if re.search(rf"(?<![a-z]){re.escape(token)}", text):
            return fuel.value
    logger.debug("⛽ Невідомий тип пального: %r", raw)
    return None


def fuel_from_text(text: str) -> Optional[str]:
    """Перше слово з упорядкованого словника, яке зустрічається в тексті."""
    for word, fuel in FUEL_KEYWORDS:
        if word in (text or ""):
            return fuel.value
    return None


# ================================
# 🚗 ЗАПИС ОГОЛОШЕННЯ
# ================================
def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _new_record_id() -> str:
    return uuid.uuid4().hex


def _clean_images(images: Iterable[str]) -> Tuple[str, ...]:
    unique = tuple(dict.fromkeys(str(u).strip() for u in images if u and str(u).strip()))
    return unique[:IMAGES_MAX] or (PLACEHOLDER_IMAGE,)


@dataclass(frozen=True)
class VehicleRecord:
    """
    Нормалізований запис оголошення.

    Sentinel-значення: `power`, `mileage`, `model_year` = 0 — «не знайдено»;
    `fuel_type`, `transmission` = "" — «не знайдено». `price` завжди > 0,
    `images` ніколи не порожній (мінімум плейсхолдер).
    """

    title: str
    price: int
    source_url: str
    fuel_type: str = ""
    transmission: str = ""
    power: int = 0
    mileage: int = 0
    model_year: int = 0
    images: Tuple[str, ...] = ()
    record_id: str = field(default_factory=_new_record_id)
    generated_at: datetime = field(default_factory=_utc_now)

    def __post_init__(self) -> None:
        title = " ".join(str(self.title or "").split())
        if not title:
            raise ValueError("VehicleRecord.title must be non-empty")
        if int(self.price) <= 0:
            raise ValueError(f"VehicleRecord.price must be > 0, got {self.price!r}")
        if self.fuel_type and self.fuel_type not in {f.value for f in FuelType}:
            raise ValueError(f"Unknown fuel type: {self.fuel_type!r}")

        object.__setattr__(self, "title", title)
        object.__setattr__(self, "price", int(self.price))
        for name in ("power", "mileage", "model_year"):
            object.__setattr__(self, name, max(0, int(getattr(self, name) or 0)))	# 🔢 ≥ 0
        object.__setattr__(self, "transmission", str(self.transmission or "").strip())
        object.__setattr__(self, "images", _clean_images(self.images))

    def to_dict(self) -> Dict[str, Any]:
        """📦 Серіалізація для HTTP-відповіді (camelCase)."""
        return {
            "recordId": self.record_id,
            "sourceUrl": self.source_url,
            "generatedAt": self.generated_at.isoformat(),
            "title": self.title,
            "fuelType": self.fuel_type,
            "transmission": self.transmission,
            "power": self.power,
            "mileage": self.mileage,
            "modelYear": self.model_year,
            "price": self.price,
            "images": list(self.images),
        }


__all__ = [
    "MODEL_YEAR_MIN",
    "MODEL_YEAR_MAX",
    "IMAGES_MAX",
    "TITLE_FALLBACK",
    "PLACEHOLDER_IMAGE",
    "Url",
    "is_http_url",
    "FuelType",
    "FUEL_KEYWORDS",
    "normalize_fuel_type",
    "fuel_from_text",
    "VehicleRecord",
]
