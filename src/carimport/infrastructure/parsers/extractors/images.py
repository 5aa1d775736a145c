# 🖼️ carimport/infrastructure/parsers/extractors/images.py
"""
🖼️ Зображення оголошення — стратегії накопичуються, а не зупиняються на першій.

🔹 `img` src/data-src з доменом маркетплейсу (без logo/icon), мініатюри `/s/`, `/xs/`, `/m/` → `/l/`.
🔹 `srcset`-списки, `background-image: url(...)` з inline-стилів.
🔹 Для статичного HTML (без headless-рендерингу) — ще й галерейні селектори та токен "vehicle".
🔹 Дедуплікація зі збереженням порядку, ліміт 10, плейсхолдер «Kein Bild», якщо нічого немає.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import re																	# 🧪 Регулярні вирази для URL
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple	# 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from carimport.domain.vehicles.entities import PLACEHOLDER_IMAGE, is_http_url
from carimport.infrastructure.parsers.document import Document
from carimport.infrastructure.parsers.extractors.base import (
    _ConfigSnapshot,
    _normalize_image_url,
    logger,
    uniq_keep_order,
)

ImageStrategy = Callable[[Document, Dict[str, Any]], List[str]]		# 🧩 (документ, фільтри) → кандидати

_THUMB_SEGMENT_RE = re.compile(r"/(?:xs|s|m)/")							# 🔎 Сегменти мініатюр
_BG_URL_RE = re.compile(r"""url\(\s*['"]?([^'")]+)['"]?\s*\)""")		# 🎨 background-image: url(...)


# ================================
# 🧼 НОРМАЛІЗАЦІЯ ТА ФІЛЬТРИ
# ================================
def upscale_thumbnail(url: str) -> str:
    """🔍 `/s/`, `/xs/`, `/m/` → `/l/` (велике зображення)."""
    return _THUMB_SEGMENT_RE.sub("/l/", url)


def _has_bad_token(url: str, filters: Dict[str, Any]) -> bool:
    lower = url.lower()
    return any(token in lower for token in filters["bad_tokens"])


def _is_marketplace(url: str, filters: Dict[str, Any]) -> bool:
    return filters["marketplace_domain"] in url.lower()


def _accept_marketplace(url: str, filters: Dict[str, Any]) -> Optional[str]:
    """URL маркетплейсу без logo/icon → канонічна (велика) форма, інакше None."""
    normalized = _normalize_image_url(url)
    if not normalized or not _is_marketplace(normalized, filters) or _has_bad_token(normalized, filters):
        return None
    return upscale_thumbnail(normalized)


def _srcset_urls(srcset: str) -> List[str]:
    return [_normalize_image_url(candidate) for candidate in (srcset or "").split(",") if candidate.strip()]


# ================================
# 🖼️ СТРАТЕГІЇ
# ================================
def images_from_sources(doc: Document, filters: Dict[str, Any]) -> List[str]:
    """🖼️ `img` з прямим або lazy-load атрибутом, що вказує на маркетплейс."""
    found: List[str] = []
    for img in doc.select("img[src], img[data-src]"):
        for attr in ("src", "data-src"):
            accepted = _accept_marketplace(doc.attr_of(img, attr), filters)
            if accepted:
                found.append(accepted)
                break
    return found


def images_from_srcset(doc: Document, filters: Dict[str, Any]) -> List[str]:
    """🖼️ Кандидати responsive-зображень (`srcset`)."""
    found: List[str] = []
    for element in doc.select("img[srcset], source[srcset]"):
        for candidate in _srcset_urls(doc.attr_of(element, "srcset")):
            accepted = _accept_marketplace(candidate, filters)
            if accepted:
                found.append(accepted)
    return found


def images_from_background(doc: Document, filters: Dict[str, Any]) -> List[str]:
    """🎨 URL з `background-image` у inline-стилях."""
    found: List[str] = []
    for element in doc.select('[style*="background-image"]'):
        for raw in _BG_URL_RE.findall(doc.attr_of(element, "style")):
            accepted = _accept_marketplace(raw, filters)
            if accepted:
                found.append(accepted)
    return found


def images_from_gallery(doc: Document, filters: Dict[str, Any]) -> List[str]:
    """🗂️ Статичний HTML: галерейні селектори; потрібен абсолютний URL, без logo/icon."""
    found: List[str] = []
    for selector in _ConfigSnapshot.selectors().GALLERY_IMAGE_LIST:
        for img in doc.select(selector):
            raw = doc.attr_of(img, "src") or doc.attr_of(img, "data-src")
            url = _normalize_image_url(raw)
            if not is_http_url(url) or _has_bad_token(url, filters):
                continue
            found.append(upscale_thumbnail(url) if _is_marketplace(url, filters) else url)
    return found


RENDERED_STRATEGIES: Tuple[ImageStrategy, ...] = (
    images_from_sources,
    images_from_srcset,
    images_from_background,
)
STATIC_STRATEGIES: Tuple[ImageStrategy, ...] = RENDERED_STRATEGIES + (images_from_gallery,)


# ================================
# 📦 ПУБЛІЧНИЙ API
# ================================
def extract_images(
    doc: Document,
    *,
    limit: Optional[int] = None,
    strategies: Optional[Sequence[ImageStrategy]] = None,
) -> List[str]:
    """
    🖼️ Обʼєднує результати всіх стратегій.

    Returns:
        List[str]: Від 1 до `limit` (≤10) URL; порожній результат → `[PLACEHOLDER_IMAGE]`.
    """
    filters = _ConfigSnapshot.img_filters()
    cap = max(1, min(int(limit or filters["limit"]), filters["limit"]))
    chosen = strategies if strategies is not None else (RENDERED_STRATEGIES if doc.rendered else STATIC_STRATEGIES)

    candidates: List[str] = []
    for strategy in chosen:
        batch = strategy(doc, filters)
        logger.debug("🖼️ %s → %d кандидатів.", strategy.__name__, len(batch))
        candidates.extend(batch)

    images = list(uniq_keep_order(candidates))[:cap]
    if not images:
        logger.info("🖼️ Зображення не знайдено — використовуємо плейсхолдер.")
        return [PLACEHOLDER_IMAGE]
    logger.info("📷 Зображення | total=%d | samples=%s", len(images), images[:3])
    return images


__all__ = [
    "upscale_thumbnail",
    "images_from_sources",
    "images_from_srcset",
    "images_from_background",
    "images_from_gallery",
    "RENDERED_STRATEGIES",
    "STATIC_STRATEGIES",
    "extract_images",
]
