# 🧰 carimport/shared/utils/__init__.py
"""
🧰 Пакет спільних утиліт: логування, колекції, числа та `Result`.
"""

from __future__ import annotations

# 🔠 Логування
from .logger import (
    LOG_NAME,
    get_logger,
    init_logging,
    init_logging_from_config,
)

# 🔁 Колекції
from .collections import uniq_keep_order

# 💰 Числові утиліти
from .number import digits_to_int, grouped_to_int, kw_to_ps, to_int_or_none

# 🧾 Результати
from .result import Err, Ok, Result

# ================================
# 📦 ЕКСПОРТ ПАКЕТУ
# ================================
__all__ = [
    # logging
    "LOG_NAME",
    "get_logger",
    "init_logging",
    "init_logging_from_config",
    # collections
    "uniq_keep_order",
    # number utils
    "digits_to_int",
    "grouped_to_int",
    "kw_to_ps",
    "to_int_or_none",
    # result
    "Ok",
    "Err",
    "Result",
]
