# 🏷️ carimport/infrastructure/parsers/extractors/title.py
"""
🏷️ Стратегії пошуку заголовка (моделі) оголошення.

🔹 Порядок: `data-testid="ad-title"` → заголовок із класом *Heading* → перший `h1` → жирний підзаголовок.
🔹 Перший непорожній текст перемагає; якщо нічого не знайдено — поле лишається невизначеним,
   а підстановку "Unbekanntes Modell" робить збирач запису.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from typing import Optional, Sequence, Tuple

# 🧩 Внутрішні модулі проєкту
from carimport.infrastructure.parsers.document import Document
from carimport.infrastructure.parsers.extractors.base import (
    Strategy,
    _ConfigSnapshot,
    _norm_ws,
    first_resolved,
)


def _selector_text(selector: str) -> Strategy[str]:
    """Стратегія: текст першого елемента під селектором, якщо він непорожній."""

    def _strategy(doc: Document) -> Optional[str]:
        for element in doc.select(selector):
            text = _norm_ws(doc.text_of(element))
            if text:
                return text
        return None

    _strategy.__name__ = f"title<{selector}>"
    return _strategy


def title_strategies(selectors: Optional[Sequence[str]] = None) -> Tuple[Strategy[str], ...]:
    """🏷️ Упорядковані стратегії заголовка (селектори з конфігу за замовчуванням)."""
    chosen = selectors if selectors is not None else _ConfigSnapshot.selectors().TITLE_LIST
    return tuple(_selector_text(selector) for selector in chosen)


def extract_title(doc: Document, selectors: Optional[Sequence[str]] = None) -> Optional[str]:
    """🏷️ Заголовок оголошення або None."""
    return first_resolved(title_strategies(selectors), doc, field="title")


__all__ = ["title_strategies", "extract_title"]
