# 🚗 carimport/main.py
"""
🚗 Entry-point HTTP-сервісу імпорту оголошень.

🔹 CLI-прапорці → ENV (`--headful`, `--headless`, `--http`), далі ConfigService.
🔹 Піднімає логування з розділу `logging` та запускає FastAPI через uvicorn.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import uvicorn															# 🦄 ASGI-сервер

# 🔠 Системні імпорти
import logging															# 🧾 Логування подій запуску
import os																# 🌍 Робота з оточенням/ENV
import sys																# 🧵 CLI-аргументи
from typing import List, Optional

# 🧩 Внутрішні модулі проєкту
from carimport.api.server import create_app								# 🌐 FastAPI-застосунок
from carimport.config.config_service import ConfigService					# ⚙️ Завантаження конфігів
from carimport.shared.utils.logger import LOG_NAME, init_logging_from_config	# 🪵 Логування

logger = logging.getLogger(LOG_NAME)


# ================================
# ⚙️ CLI-ФЛАГИ → ENV
# ================================
def _apply_cli_flags_to_env(args: List[str]) -> None:
    """Мапить зручні CLI-прапорці на змінні середовища."""
    if "--headful" in args:
        os.environ["PLAYWRIGHT_HEADLESS"] = "false"						# 🖥️ Видимий браузер
    if "--headless" in args:
        os.environ["PLAYWRIGHT_HEADLESS"] = "true"						# 🙈 Примусово headless
    if "--http" in args:
        os.environ["PROVIDER_KIND"] = "http"								# 🌐 Статичний HTML без браузера

    for arg in args:
        if arg.startswith("--port="):
            os.environ["PORT"] = arg.split("=", 1)[1]						# 🚪 Порт сервера


# ================================
# 🚀 ENTRYPOINT
# ================================
def main(argv: Optional[List[str]] = None) -> None:
    """Основна точка входу: CLI → конфіг → логування → uvicorn."""
    _apply_cli_flags_to_env(list(sys.argv[1:] if argv is None else argv))

    config = ConfigService()												# ⚙️ config.yaml + .env
    init_logging_from_config(config.get("logging"))							# 🪵 Логування з YAML

    host = config.get("server.host", "0.0.0.0", cast=str) or "0.0.0.0"
    port = config.get("server.port", 3000, cast=int) or 3000

    app = create_app(config_service=config)
    logger.info("🚀 Сервер запускається на http://%s:%s", host, port)
    uvicorn.run(app, host=host, port=port, log_config=None)					# 🪵 Логи uvicorn ідуть у наш root-логер
    logger.info("👋 Сервер зупинено")


if __name__ == "__main__":
    main()
