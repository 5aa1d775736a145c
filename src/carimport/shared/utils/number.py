# 🔢 carimport/shared/utils/number.py
"""
🔢 Числові утиліти для розбору цін, пробігу та потужності.

🔹 `digits_to_int` — лишає тільки цифри ("15.900 €" → 15900).
🔹 `grouped_to_int` — число з крапками-розділювачами тисяч ("123.456" → 123456).
🔹 `kw_to_ps` — кВт → к.с. з округленням half-up (147 → 200).
"""

from __future__ import annotations

# 🔠 Системні імпорти
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional, Union

KW_TO_PS = Decimal("1.36")                          # ⚡ Коефіцієнт кВт → PS

_NON_DIGITS = re.compile(r"\D+")
_GROUPED = re.compile(r"^\d{1,3}(?:\.\d{3})+$")
_DE_DECIMAL = re.compile(r"^\d{1,3}(?:\.\d{3})*,\d+$")     # 🇩🇪 "31.990,00"
_EN_DECIMAL = re.compile(r"^\d{1,3}(?:,\d{3})*\.\d+$")     # 🇬🇧 "31,990.00"


def digits_to_int(text: Any) -> Optional[int]:
    """Видаляє всі нецифрові символи; порожній результат → None."""
    digits = _NON_DIGITS.sub("", str(text or ""))
    if not digits:
        return None
    return int(digits)


def grouped_to_int(text: str) -> Optional[int]:
    """"123.456" / "123,456" / "123 456" → 123456."""
    cleaned = re.sub(r"[.,\s  ]", "", text or "")
    return int(cleaned) if cleaned.isdigit() else None


def kw_to_ps(kw: Union[int, float, str, Decimal]) -> int:
    """Конвертує кіловати в кінські сили з округленням половини вгору."""
    value = Decimal(str(kw)) * KW_TO_PS
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def to_int_or_none(value: Any) -> Optional[int]:
    """Безпечне приведення JSON-значення (int/float/str) до int."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value == value and abs(value) != float("inf") else None
    text = str(value).strip()
    if not text:
        return None
    if _GROUPED.match(text):
        return grouped_to_int(text)                 # 🇩🇪 "15.000" — тисячі, не дріб
    if _DE_DECIMAL.match(text):
        return int(Decimal(text.replace(".", "").replace(",", ".")))
    if _EN_DECIMAL.match(text):
        return int(Decimal(text.replace(",", "")))
    try:
        return int(Decimal(text.replace(",", ".")))
    except (ArithmeticError, ValueError):            # 🧯 "abc", "NaN", "Infinity"
        return digits_to_int(text)


__all__ = ["KW_TO_PS", "digits_to_int", "grouped_to_int", "kw_to_ps", "to_int_or_none"]
