# 💰 carimport/infrastructure/parsers/extractors/price.py
"""
💰 Стратегії пошуку ціни.

🔹 Для кожного селектора перебираємо всі знайдені елементи, лишаємо тільки цифри
   ("15.900 €" → 15900) і приймаємо перше значення > 0.
🔹 Невизначена ціна — фатальна для запису (`MissingPrice`), але це вирішує валідатор.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from typing import Optional, Sequence, Tuple

# 🧩 Внутрішні модулі проєкту
from carimport.infrastructure.parsers.document import Document
from carimport.infrastructure.parsers.extractors.base import Strategy, _ConfigSnapshot, first_resolved
from carimport.shared.utils.number import digits_to_int


def _selector_price(selector: str) -> Strategy[int]:
    """Стратегія: перша додатна ціна серед елементів під селектором."""

    def _strategy(doc: Document) -> Optional[int]:
        for element in doc.select(selector):
            value = digits_to_int(doc.text_of(element))
            if value is not None and value > 0:
                return value
        return None

    _strategy.__name__ = f"price<{selector}>"
    return _strategy


def price_strategies(selectors: Optional[Sequence[str]] = None) -> Tuple[Strategy[int], ...]:
    chosen = selectors if selectors is not None else _ConfigSnapshot.selectors().PRICE_LIST
    return tuple(_selector_price(selector) for selector in chosen)


def extract_price(doc: Document, selectors: Optional[Sequence[str]] = None) -> Optional[int]:
    """💰 Ціна оголошення (ціле > 0) або None."""
    return first_resolved(price_strategies(selectors), doc, field="price")


__all__ = ["price_strategies", "extract_price"]
