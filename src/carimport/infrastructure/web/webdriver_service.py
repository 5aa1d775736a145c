# 🧭 carimport/infrastructure/web/webdriver_service.py
"""
🧭 WebDriverService — постачальник відрендерених документів на базі Playwright.

🔹 Керує життєвим циклом Chromium (startup/shutdown, `async with`).
🔹 На кожне завантаження — окремий контекст і сторінка, що закриваються у `finally`.
🔹 Таймаут навігації, фіксована пауза після завантаження, реалістичний User-Agent, stealth.
🔹 Помилки перетворюються на типізовані `DocumentLoadError`; пишуться метрики успіху/невдачі.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from playwright.async_api import (									# 🧠 Асинхронний API Playwright
    Browser,
    BrowserContext,
    Error as PlaywrightError,
    Page,
    Playwright,
    Response,
    async_playwright,
)
from playwright_stealth import stealth_async						# 🥷 Прибирає сигнатуру браузера

# 🔠 Системні імпорти
import asyncio														# ⏳ Затримки та корутини
import logging														# 🧾 Логування подій
from typing import Any, Dict, List, Optional						# 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from carimport.config.config_service import ConfigService			# ⚙️ Доступ до конфігурацій
from carimport.domain.vehicles.entities import is_http_url			# 🌐 Перевірка URL
from carimport.domain.vehicles.interfaces import IDocumentProvider	# 🧭 Контракт постачальника
from carimport.infrastructure.parsers.document import Document		# 📄 Документ для екстракторів
from carimport.shared.errors import (								# 🚨 Типові помилки веб-доступу
    CloudflareBlockError,
    DocumentLoadError,
    HttpError,
    InvalidUrlError,
    NetworkError,
    RequestTimeout,
)
from carimport.shared.metrics.parsing import PARSING_FAILURE, PARSING_SUCCESS	# 📈 Метрики
from carimport.shared.utils.logger import LOG_NAME					# 🏷️ Базове ім'я логера

logger = logging.getLogger(f"{LOG_NAME}.web")						# 🧾 Логер сервісу

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
DEFAULT_LAUNCH_ARGS = (
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
)
_RETRYABLE_STATUSES = (403, 429, 502, 503)


# ================================
# 🏛️ ГОЛОВНИЙ КЛАС
# ================================
class WebDriverService(IDocumentProvider):
    """
    🧭 Реалізація `IDocumentProvider` на базі Playwright (рендерений DOM).
    """

    source = "webdriver"

    def __init__(self, config_service: Optional[ConfigService] = None) -> None:
        self._cfg = config_service or ConfigService()					# 🗂️ Постачальник конфігурацій

        self._playwright: Optional[Playwright] = None				# 🧠 Лінива ініціалізація
        self._browser: Optional[Browser] = None						# 🌐 Поточний браузер Chromium

        self._is_headless: bool = bool(self._cfg.get("playwright.headless", True, cast=bool))
        self._retry_attempts: int = max(1, self._cfg.get("playwright.retry_attempts", 1, cast=int) or 1)
        self._retry_delay_sec: float = self._cfg.get("playwright.retry_delay_sec", 2, cast=float) or 0
        self._user_agent: str = self._cfg.get("playwright.user_agent", None, cast=str) or DEFAULT_USER_AGENT
        self._navigation_timeout_ms: int = self._cfg.get(
            "playwright.navigation_timeout_ms", 30000, cast=int,
        ) or 30000																# ⏳ Таймаут навігації (мс)
        self._settle_delay_ms: int = self._cfg.get(
            "playwright.settle_delay_ms", 2000, cast=int,
        ) or 0																	# 💤 Пауза для динамічного контенту
        self._wait_until: str = self._cfg.get("playwright.wait_until", "networkidle", cast=str) or "networkidle"
        self._enable_stealth: bool = bool(self._cfg.get("playwright.enable_stealth", True, cast=bool))
        self._html_parser: str = self._cfg.get("parser.html_parser", None, cast=str) or Document.HTML_PARSER
        self._launch_args: List[str] = list(
            self._cfg.get("playwright.launch_args", None, cast=list) or DEFAULT_LAUNCH_ARGS
        )

        raw_phrases: List[str] = self._cfg.get("playwright.cloudflare_phrases", None, cast=list) or [
            "Your connection needs to be verified",
            "Please complete the security check",
            "Verifying you are human",
            "Checking your browser before accessing",
        ]
        self._cloudflare_phrases: List[str] = [
            str(phrase).strip().lower() for phrase in raw_phrases if str(phrase).strip()
        ]

        logger.info(
            "✅ WebDriverService: headless=%s, retries=%s, timeout_ms=%s, settle_ms=%s",
            self._is_headless,
            self._retry_attempts,
            self._navigation_timeout_ms,
            self._settle_delay_ms,
        )

    # ================================
    # 🚪 ЖИТТЄВИЙ ЦИКЛ
    # ================================
    async def startup(self) -> None:
        """🔌 Запускає Playwright і Chromium, якщо вони ще не активні."""
        if self._browser and self._browser.is_connected():
            return

        if self._playwright is None:
            self._playwright = await async_playwright().start()

        launch_kwargs: Dict[str, Any] = {"headless": self._is_headless, "args": self._launch_args}
        logger.info("🚀 Запуск Chromium (headless=%s)…", self._is_headless)
        self._browser = await self._playwright.chromium.launch(**launch_kwargs)
        logger.info("✅ Chromium готовий до навігації")

    async def shutdown(self) -> None:
        """📴 Завершує сесію браузера та Playwright (ідемпотентно)."""
        if self._browser:
            try:
                await self._browser.close()
            finally:
                self._browser = None
                logger.info("🔒 Chromium закрито")

        if self._playwright:
            try:
                await self._playwright.stop()
            finally:
                self._playwright = None
                logger.info("🔌 Playwright зупинено")

    # ================================
    # 🌐 ЗАВАНТАЖЕННЯ
    # ================================
    async def load(self, url: str) -> Document:
        """
        🌐 Завантажує сторінку та повертає відрендерений документ.

        Raises:
            InvalidUrlError | RequestTimeout | NetworkError | HttpError | CloudflareBlockError
        """
        html = await self.get_page_content(url)
        return Document.from_html(html, url=url, rendered=True, parser=self._html_parser)

    async def get_page_content(self, url: str) -> str:
        """🌐 HTML сторінки після навігації та паузи; ретраї лише для тимчасових збоїв."""
        if not url or not is_http_url(url):
            self._record_failure("invalid_url")
            raise InvalidUrlError(url=url, detail="посилання повинно мати http(s)://")

        await self.startup()
        last_error: Optional[DocumentLoadError] = None

        for attempt in range(1, self._retry_attempts + 1):
            try:
                return await self._load_once(url, attempt)
            except (HttpError, CloudflareBlockError) as exc:
                if isinstance(exc, HttpError) and exc.status_code not in _RETRYABLE_STATUSES:
                    raise													# 🚫 404 тощо — повтор не допоможе
                last_error = exc
                logger.warning("⚠️ %s (%s/%s)", exc, attempt, self._retry_attempts)
            if attempt < self._retry_attempts and self._retry_delay_sec > 0:
                await asyncio.sleep(self._retry_delay_sec)

        logger.error("❌ Вичерпано %s спроб для %s", self._retry_attempts, url)
        assert last_error is not None
        raise last_error

    async def _load_once(self, url: str, attempt: int) -> str:
        if self._browser is None:
            raise NetworkError(url=url, detail="Browser not initialized")

        context: Optional[BrowserContext] = None
        page: Optional[Page] = None
        try:
            context = await self._browser.new_context(user_agent=self._user_agent)
            page = await context.new_page()
            if self._enable_stealth:
                await stealth_async(page)

            logger.info("🌍 Завантаження %s (%s/%s)", url, attempt, self._retry_attempts)
            response: Optional[Response] = await page.goto(
                url,
                wait_until=self._wait_until,
                timeout=self._navigation_timeout_ms,
            )
            if self._settle_delay_ms > 0:
                await asyncio.sleep(self._settle_delay_ms / 1000)		# 💤 Даємо JS дозаповнити DOM

            status_code = response.status if response else None
            if status_code is not None and status_code >= 400:
                self._record_failure(f"http_{status_code}")
                raise HttpError(url=url, status_code=int(status_code), detail=response.status_text if response else None)

            html = await page.content()
            if self._is_blocked_by_cloudflare(html):
                self._record_failure("cloudflare")
                raise CloudflareBlockError(url=url)

            PARSING_SUCCESS.labels(source=self.source).inc()
            return html

        except PlaywrightError as exc:
            detail = str(exc)
            if "timeout" in detail.lower():
                self._record_failure("timeout")
                raise RequestTimeout(url=url, timeout_ms=self._navigation_timeout_ms, detail=detail) from exc
            self._record_failure("playwright_error")
            raise NetworkError(url=url, detail=detail) from exc

        finally:
            if page is not None:
                try:
                    if not page.is_closed():
                        await page.close()
                except PlaywrightError as close_err:
                    logger.debug("ℹ️ Не вдалося закрити вкладку: %s", close_err)
            if context is not None:
                try:
                    await context.close()
                except PlaywrightError as close_err:
                    logger.debug("ℹ️ Не вдалося закрити контекст: %s", close_err)

    # ================================
    # 🧰 ДОПОМІЖНІ МЕТОДИ
    # ================================
    def _record_failure(self, reason: str) -> None:
        PARSING_FAILURE.labels(source=self.source, reason=reason).inc()

    def _is_blocked_by_cloudflare(self, html: str) -> bool:
        """🛡️ Визначає, чи замість сторінки отримано перевірку Cloudflare."""
        if not html:
            return False
        body = html.lower()
        if any(phrase in body for phrase in self._cloudflare_phrases):
            return True
        return "<title>just a moment...</title>" in body


__all__ = ["WebDriverService", "DEFAULT_USER_AGENT", "DEFAULT_LAUNCH_ARGS"]
