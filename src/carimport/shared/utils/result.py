# 🧾 carimport/shared/utils/result.py
"""
🧾 Мінімальний тип `Result` для помилок, що повертаються значенням.

🔹 `Ok(value)` / `Err(error)` — іммʼютабельні контейнери.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """✅ Успішний результат."""

    value: T


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """❌ Помилка як значення."""

    error: E


Result = Union[Ok[T], Err[E]]


__all__ = ["Ok", "Err", "Result"]
