# 🌐 carimport/infrastructure/web/http_document_provider.py
"""
🌐 HttpDocumentProvider — статичне завантаження HTML через httpx (без рендерингу JS).

🔹 Реалістичний User-Agent та німецька мова в заголовках.
🔹 Обмежений таймаут, типізовані помилки `DocumentLoadError`.
🔹 Документи позначаються `rendered=False` → екстрактор зображень вмикає галерейні стратегії.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import httpx														# 🌐 Асинхронний HTTP-клієнт

# 🔠 Системні імпорти
import logging														# 🧾 Логування подій
from typing import Dict, Optional									# 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from carimport.config.config_service import ConfigService
from carimport.domain.vehicles.entities import is_http_url
from carimport.domain.vehicles.interfaces import IDocumentProvider
from carimport.infrastructure.parsers.document import Document
from carimport.infrastructure.web.webdriver_service import DEFAULT_USER_AGENT
from carimport.shared.errors import HttpError, InvalidUrlError, NetworkError, RequestTimeout
from carimport.shared.metrics.parsing import PARSING_FAILURE, PARSING_SUCCESS
from carimport.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.web.http")


class HttpDocumentProvider(IDocumentProvider):
    """🌐 Завантажує сторінки одним GET-запитом."""

    source = "http"

    def __init__(
        self,
        config_service: Optional[ConfigService] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        cfg = config_service or ConfigService()
        self._timeout_sec: float = cfg.get("http.timeout_sec", 30, cast=float) or 30.0
        self._follow_redirects: bool = bool(cfg.get("http.follow_redirects", True, cast=bool))
        self._html_parser: str = cfg.get("parser.html_parser", None, cast=str) or Document.HTML_PARSER
        self._headers: Dict[str, str] = {
            "User-Agent": cfg.get("playwright.user_agent", None, cast=str) or DEFAULT_USER_AGENT,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "de-DE,de;q=0.9,en;q=0.8",
        }
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def startup(self) -> None:
        if self._client is None:
            self._client = httpx.AsyncClient(
                headers=self._headers,
                timeout=self._timeout_sec,
                follow_redirects=self._follow_redirects,
                transport=self._transport,
            )

    async def shutdown(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.debug("🔌 httpx-клієнт закрито")

    async def load(self, url: str) -> Document:
        if not url or not is_http_url(url):
            PARSING_FAILURE.labels(source=self.source, reason="invalid_url").inc()
            raise InvalidUrlError(url=url, detail="посилання повинно мати http(s)://")

        await self.startup()
        assert self._client is not None
        logger.info("🌍 GET %s", url)
        try:
            response = await self._client.get(url)
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            PARSING_FAILURE.labels(source=self.source, reason="timeout").inc()
            raise RequestTimeout(url=url, timeout_ms=int(self._timeout_sec * 1000), detail=str(exc)) from exc
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            PARSING_FAILURE.labels(source=self.source, reason=f"http_{status}").inc()
            raise HttpError(url=url, status_code=status, detail=exc.response.reason_phrase) from exc
        except httpx.HTTPError as exc:
            PARSING_FAILURE.labels(source=self.source, reason="network").inc()
            raise NetworkError(url=url, detail=str(exc) or type(exc).__name__) from exc

        PARSING_SUCCESS.labels(source=self.source).inc()
        logger.info("✅ Завантажено (%d байт).", len(response.text))
        return Document.from_html(
            response.text, url=str(response.url), rendered=False, parser=self._html_parser,
        )


__all__ = ["HttpDocumentProvider"]
