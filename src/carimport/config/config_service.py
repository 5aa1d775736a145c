# ⚙️ carimport/config/config_service.py
"""
⚙️ config_service.py — Сервіс для доступу до статичної конфігурації.

🔹 Клас `ConfigService`:
- Завантажує конфігурацію з .env та config.yaml.
- Надає єдиний метод .get() для доступу до будь-якого параметра.
- Працює як Singleton.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import yaml                                  # 📦 YAML-парсинг
from dotenv import load_dotenv              # 🔐 Завантаження змінних із .env

# 🔠 Системні імпорти
import logging                              # 🧾 Логування
import os                                   # 📁 Доступ до змінних середовища
from pathlib import Path                    # 📁 Побудова шляху до файлів
from typing import Any, Callable, Dict, Optional  # 🧩 Типізація


# ============================
# 🧾 ЗМІННІ СЕРЕДОВИЩА
# ============================
_ENV_KEYS: Dict[str, str] = {
    "server.port": "PORT",
    "server.host": "HOST",
    "logging.level": "LOG_LEVEL",
    "parser.marketplace_domain": "MARKETPLACE_DOMAIN",
    "playwright.headless": "PLAYWRIGHT_HEADLESS",
    "provider.kind": "PROVIDER_KIND",
    "parser.html_parser": "HTML_PARSER",
}                                           # 🔑 Крапковий ключ → імʼя змінної середовища

_TRUE_VALUES = {"1", "true", "yes", "on"}   # ✅ Рядкові значення, які вважаємо True


# ============================
# ⚙️ СЕРВІС ДОСТУПУ ДО КОНФІГІВ
# ============================
class ConfigService:
    """
    ⚙️ Надає доступ до всіх статичних конфігураційних параметрів проєкту.
    Працює як Singleton — конфігурація зчитується лише один раз.
    """

    _instance: Optional["ConfigService"] = None    # 🧩 Singleton-екземпляр
    _config: Dict[str, Any] = {}                    # 📦 Обʼєднана конфігурація зі всіх джерел

    def __new__(cls) -> "ConfigService":
        # ✅ Патерн Singleton: створюємо лише один екземпляр
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._config = {}
            cls._instance._load_all_configs()  # 🔄 Завантаження конфігурації під час першого виклику
            logging.debug("🔄 Singleton ConfigService створено і конфігурація завантажена")
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """🧹 Скидає singleton (потрібно тестам та перезапуску з новим .env)."""
        cls._instance = None

    def _load_all_configs(self) -> None:
        """
        📥 Завантажує всі джерела конфігурації в один словник.
        Пріоритет: config.yaml → .env (змінні середовища перекривають YAML)
        """

        # --- 1. YAML-файл ---
        try:
            logging.debug("📘 Завантаження config.yaml")
            yaml_path = Path(__file__).parent / "config.yaml"
            with open(yaml_path, "r", encoding="utf-8") as f:
                self._deep_update(self._config, yaml.safe_load(f) or {})
        except (FileNotFoundError, yaml.YAMLError) as e:
            logging.warning("⚠️ Не вдалося завантажити config.yaml: %s", e)

        # --- 2. .env змінні ---
        logging.debug("🔐 Завантаження змінних з .env")
        load_dotenv()  # 🔐 Ініціалізує змінні середовища з файлу .env
        env_vars = {
            key: os.getenv(env_name)
            for key, env_name in _ENV_KEYS.items()
            if os.getenv(env_name) not in (None, "")
        }
        # 🔁 Перетворюємо крапкові ключі в словник та обʼєднуємо з config
        self._deep_update(self._config, self._unflatten_dict(env_vars))

        logging.info("✅ Конфігурацію успішно завантажено.")

    def get(
        self,
        key: str,
        default: Any = None,
        cast: Optional[Callable[[Any], Any]] = None,
    ) -> Any:
        """
        🔑 Отримує значення конфігурації за ключем (наприклад: 'playwright.headless').

        Args:
            key (str): Ключ у форматі з крапкою.
            default (Any): Значення за замовчуванням, якщо ключ не знайдено.
            cast (Callable | None): Перетворення типу (int, float, bool, list ...).

        Returns:
            Any: Значення параметра або default.
        """
        value: Any = self._config
        for k in key.split('.'):                  # ⛓️ Розбиваємо ключ за крапкою
            if isinstance(value, dict) and k in value:
                value = value[k]                 # 🔎 Переходимо глибше в структуру
            else:
                return default                   # ❌ Якщо ключ не знайдено — повертаємо дефолт

        if value is None or cast is None:
            return value if value is not None else default
        try:
            if cast is bool and isinstance(value, str):
                return value.strip().lower() in _TRUE_VALUES	# 🔘 "false" з .env не має ставати True
            return cast(value)                   # 🔄 Приводимо тип
        except (TypeError, ValueError) as e:
            logging.warning("⚠️ Ключ '%s': не вдалося привести %r (%s) → default", key, value, e)
            return default

    # ===============================
    # 🔧 ДОПОМІЖНІ МЕТОДИ ЗЛИТТЯ КОНФІГІВ
    # ===============================

    def _unflatten_dict(self, d: Dict[str, Any]) -> Dict[str, Any]:
        """
        🔁 Перетворює ключі з крапками в ієрархічний словник.
        'server.port' → {'server': {'port': ...}}
        """
        result: Dict[str, Any] = {}
        for key, value in d.items():
            parts = key.split('.')                   # 🧩 Розбиваємо ключ на частини
            d_ref = result
            for part in parts[:-1]:                  # 🔁 Ітеруємось по вкладеності
                d_ref = d_ref.setdefault(part, {})
            d_ref[parts[-1]] = value                 # 🧷 Вставляємо значення у найглибший рівень
        return result

    def _deep_update(self, source: Dict[str, Any], overrides: Dict[str, Any]) -> None:
        """
        🔁 Рекурсивно обʼєднує два словника (оновлення значень).
        Якщо значення — словник, обʼєднує його глибоко.
        """
        for key, value in overrides.items():
            if (
                isinstance(value, dict) and
                key in source and
                isinstance(source[key], dict)
            ):
                self._deep_update(source[key], value)  # 🔁 Глибоке обʼєднання
            else:
                source[key] = value                    # 🧩 Перезапис простого значення


__all__ = ["ConfigService"]
