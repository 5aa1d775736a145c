# 🧾 carimport/infrastructure/parsers/extractors/base.py
"""
🧾 Спільні абстракції екстракторів полів оголошення.

🔹 Дефолтні CSS-селектори + перевизначення з config.yaml (`parser.selectors.defaults`).
🔹 `_ConfigSnapshot` кешує селектори та фільтри зображень.
🔹 `first_resolved` — прогін упорядкованих стратегій `Document -> Optional[T]` до першого значення.
🔹 Дрібні нормалізатори тексту для всіх mixin/стратегій.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging	# 🧾 Логування подій
import re	# 🧵 Робота з регулярними виразами
from dataclasses import dataclass	# 🧱 Створення датакласів
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, TypeVar	# 🧰 Типи для статичного аналізу

# 🧩 Внутрішні модулі проєкту
from carimport.config.config_service import ConfigService	# ⚙️ Доступ до конфігурацій
from carimport.infrastructure.parsers.document import Document	# 📄 Документ сторінки
from carimport.shared.utils.collections import uniq_keep_order	# ♻️ Унікалізуємо послідовності
from carimport.shared.utils.logger import LOG_NAME	# 🏷️ Базова назва логера

# ================================
# 🧾 ЛОГЕР
# ================================
logger = logging.getLogger(f"{LOG_NAME}.parser.extractor")	# 🧾 Логер для екстракторів

T = TypeVar("T")
Strategy = Callable[[Document], Optional[T]]	# 🧩 Одна стратегія вилучення поля

# ================================
# 📦 КОНСТАНТИ МОДУЛЯ
# ================================
_DEFAULT_SELECTORS: Dict[str, Any] = {
    "TITLE_LIST": (
        '[data-testid="ad-title"]',
        'h1[class*="Heading"]',
        "h1",
        'h2[class*="bold"], [class*="HeadingBold"]',
    ),
    "PRICE_LIST": (
        '[class*="PriceInfo"]',
        '[data-testid="prime-price"]',
        '[class*="price"]',
        'span[class*="Price"]',
    ),
    "TECH_ROW_LIST": (
        '[class*="TechnicalData"] > div',
        '[class*="technical-data"] > div',
        '[data-testid*="technical"] > div',
        '[data-testid*="technical"] li',
        "table tr",
    ),
    "GALLERY_IMAGE_LIST": (
        '[class*="gallery"] img',
        '[class*="Gallery"] img',
        '[data-testid*="gallery"] img',
        '[data-testid*="image"] img',
        'img[src*="vehicle"], img[data-src*="vehicle"]',
    ),
}	# 🧾 Базовий набір CSS-селекторів за замовчуванням

_DEFAULT_IMAGE_FILTERS: Dict[str, Any] = {
    "marketplace_domain": "mobile.de",
    "bad_tokens": ("logo", "icon"),
    "limit": 10,
}	# 🖼️ Фільтри зображень за замовчуванням

# ================================
# 🛠️ ДОПОМІЖНІ ФУНКЦІЇ
# ================================
def _norm_ws(text: str) -> str:
    """Нормалізує пробіли у переданому рядку."""
    if not text:	# 🚫 Порожній або None рядок
        return ""
    return re.sub(r"\s+", " ", text).strip()	# 🧹 Стискаємо та обрізаємо пробіли


def _as_list(x: Any) -> List[Any]:
    """Гарантує отримання списку елементів."""
    if x is None:
        return []
    if isinstance(x, list):
        return x
    return [x]


def _normalize_image_url(src: str) -> str:
    """Уніфікує URL зображення: перший токен srcset, протокол для `//host/...`."""
    if not src:
        return ""
    head = src.strip().split(" ")[0]	# ✂️ Відсікаємо дескриптор srcset
    if head.startswith("//"):
        return f"https:{head}"
    return head


def first_resolved(strategies: Sequence[Strategy[T]], doc: Document, *, field: str) -> Optional[T]:
    """
    🧩 Запускає стратегії по черзі й повертає перше не-None значення.

    Стратегія, що впала з винятком парсингу, вважається такою, що не знайшла значення.
    """
    for strategy in strategies:
        try:
            value = strategy(doc)
        except (ValueError, TypeError, AttributeError) as exc:
            logger.debug("🐛 %s: стратегія %s впала: %s", field, getattr(strategy, "__name__", strategy), exc)
            continue
        if value is not None:
            logger.debug("✅ %s ← %s: %r", field, getattr(strategy, "__name__", strategy), value)
            return value
    logger.debug("🔎 %s: жодна стратегія не дала значення.", field)
    return None

# ================================
# 🧱 СТРУКТУРА СЕЛЕКТОРІВ
# ================================
@dataclass(frozen=True)
class Selectors:
    """Структура із CSS-селекторами для екстракторів."""
    TITLE_LIST: Tuple[str, ...]
    PRICE_LIST: Tuple[str, ...]
    TECH_ROW_LIST: Tuple[str, ...]
    GALLERY_IMAGE_LIST: Tuple[str, ...]

# ================================
# 🧠 СНАПШОТ КОНФІГУРАЦІЇ
# ================================
class _ConfigSnapshot:
    """Керує кешами селекторів та фільтрів зображень."""
    _SELECTORS_CACHE: Optional[Selectors] = None	# 🧠 Кеш селекторів
    _IMG_FILTERS_CACHE: Optional[Dict[str, Any]] = None	# 🖼️ Кеш фільтрів зображень

    @classmethod
    def reset(cls) -> None:
        """🧹 Скидає кеші (тести / перечитування конфігу)."""
        cls._SELECTORS_CACHE = None
        cls._IMG_FILTERS_CACHE = None

    @classmethod
    def _as_tuple(cls, value: Any) -> Tuple[str, ...]:
        """Перетворює значення конфігу на кортеж рядків."""
        if value is None:
            return tuple()
        if isinstance(value, (list, tuple)):
            return tuple(str(x).strip() for x in value if str(x).strip())
        normalized = str(value).strip()
        return (normalized,) if normalized else tuple()

    @classmethod
    def selectors(cls) -> Selectors:
        """Повертає dataclass із селекторами (дефолти + `parser.selectors.defaults`)."""
        if cls._SELECTORS_CACHE is None:
            overrides = ConfigService().get("parser.selectors.defaults") or {}	# 🧾 Перевизначення з конфігу
            merged: Dict[str, Any] = dict(_DEFAULT_SELECTORS)
            if isinstance(overrides, dict):
                for key, val in overrides.items():
                    if key in merged and cls._as_tuple(val):	# ✅ Лише відомі та непорожні ключі
                        merged[key] = val
            cls._SELECTORS_CACHE = Selectors(**{key: cls._as_tuple(val) for key, val in merged.items()})
            logger.debug("🔧 Селектори екстрактора завантажені (overrides=%s).", sorted(overrides or {}))
        return cls._SELECTORS_CACHE

    @classmethod
    def img_filters(cls) -> Dict[str, Any]:
        """Повертає параметри фільтрації зображень (домен маркетплейсу, стоп-токени, ліміт)."""
        if cls._IMG_FILTERS_CACHE is None:
            cfg = ConfigService()
            domain = cfg.get("parser.marketplace_domain", _DEFAULT_IMAGE_FILTERS["marketplace_domain"], cast=str)
            bad_tokens = cfg.get("parser.images.bad_tokens", None, cast=list) or _DEFAULT_IMAGE_FILTERS["bad_tokens"]
            limit = cfg.get("parser.images.limit", _DEFAULT_IMAGE_FILTERS["limit"], cast=int)
            cls._IMG_FILTERS_CACHE = {
                "marketplace_domain": str(domain or _DEFAULT_IMAGE_FILTERS["marketplace_domain"]).strip().lower(),
                "bad_tokens": tuple(uniq_keep_order(str(t).strip().lower() for t in bad_tokens)),
                "limit": max(1, min(int(limit or 10), 10)),	# 🔢 Жорстка верхня межа запису — 10
            }
        return cls._IMG_FILTERS_CACHE

# ================================
# 📤 ЕКСПОРТ МОДУЛЯ
# ================================
__all__ = [
    "Selectors",
    "Strategy",
    "_ConfigSnapshot",
    "_norm_ws",
    "_as_list",
    "_normalize_image_url",
    "first_resolved",
    "uniq_keep_order",
    "logger",
]
