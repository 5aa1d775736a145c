# ♻️ carimport/shared/utils/collections.py
"""♻️ Утиліти для колекцій."""

from __future__ import annotations

# 🔠 Системні імпорти
from typing import Hashable, Iterable, Iterator, TypeVar

H = TypeVar("H", bound=Hashable)


def uniq_keep_order(items: Iterable[H]) -> Iterator[H]:
    """♻️ Повертає унікальні елементи у порядку першої появи (порожні значення пропускає)."""
    seen = set()
    for item in items:
        if not item or item in seen:
            continue
        seen.add(item)
        yield item


__all__ = ["uniq_keep_order"]
