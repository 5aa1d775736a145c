# 🚨 carimport/shared/errors.py
"""
🚨 Ієрархія помилок сервісу імпорту авто.

🔹 `AppError` / `UserVisibleError` — база для всіх доменних і інфраструктурних помилок.
🔹 `DocumentLoadError` та нащадки — збої постачальників документів (URL, мережа, таймаут, HTTP, Cloudflare).
🔹 `ExtractionError` + `ExtractionErrorKind` — помилки рівня запису, які повертаються як `Err(...)`.
🔹 `StructuredDataParseError` — збій розбору одного JSON-LD блоку (не фатальний).
"""

from __future__ import annotations

# 🔠 Системні імпорти
from enum import Enum												# 🔖 Перелік видів помилок
from typing import Any, Dict, Optional								# 📐 Типізація


# ================================
# 🧠 БАЗОВІ ПОМИЛКИ
# ================================
class AppError(Exception):
    """🧠 Базова помилка застосунку з опційними технічними деталями."""

    def __init__(self, message: str, *, details: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message											# 🗒️ Повідомлення
        self.details = details											# 🧾 Технічні подробиці для логів

    def to_log_extra(self) -> Dict[str, Any]:
        """📦 Словник для `logger.extra`."""
        extra: Dict[str, Any] = {"error_type": type(self).__name__}
        if self.details:
            extra["details"] = self.details
        return extra


class UserVisibleError(AppError):
    """👀 Помилка, повідомлення якої можна показати клієнту API."""


# ================================
# 🌐 ЗБОЇ ЗАВАНТАЖЕННЯ ДОКУМЕНТА
# ================================
class DocumentLoadError(AppError):
    """🌐 Базова помилка постачальника документів."""

    def __init__(self, message: str, *, url: str = "", detail: Optional[str] = None) -> None:
        super().__init__(message, details=detail)
        self.url = url													# 🔗 Адреса, яку не вдалося завантажити
        self.detail = detail

    def to_log_extra(self) -> Dict[str, Any]:
        extra = super().to_log_extra()
        if self.url:
            extra["url"] = self.url
        return extra

    def __str__(self) -> str:
        return f"{self.message}: {self.detail}" if self.detail else self.message


class InvalidUrlError(DocumentLoadError):
    """🚦 Адреса відсутня або не є абсолютним http(s) URL."""

    def __init__(self, *, url: str, detail: Optional[str] = None) -> None:
        super().__init__(f"Ungültige URL '{url}'", url=url, detail=detail)


class NetworkError(DocumentLoadError):
    """🌐 Мережевий збій або помилка навігації браузера."""

    def __init__(self, *, url: str, detail: Optional[str] = None) -> None:
        super().__init__("Netzwerkfehler", url=url, detail=detail)


class RequestTimeout(DocumentLoadError):
    """⏳ Сторінка не завантажилась у межах таймауту."""

    def __init__(self, *, url: str, timeout_ms: int, detail: Optional[str] = None) -> None:
        super().__init__(f"Zeitüberschreitung nach {timeout_ms} ms", url=url, detail=detail)
        self.timeout_ms = timeout_ms


class HttpError(DocumentLoadError):
    """🔢 Сервер повернув помилковий HTTP-статус."""

    def __init__(self, *, url: str, status_code: int, detail: Optional[str] = None) -> None:
        super().__init__(f"HTTP {status_code}", url=url, detail=detail)
        self.status_code = status_code


class CloudflareBlockError(DocumentLoadError):
    """☁️ Замість оголошення отримано сторінку перевірки Cloudflare."""

    def __init__(self, *, url: str, detail: Optional[str] = None) -> None:
        super().__init__("Zugriff durch Bot-Schutz blockiert", url=url, detail=detail)


# ================================
# 🧾 ПОМИЛКИ ЕКСТРАКЦІЇ
# ================================
class ExtractionErrorKind(str, Enum):
    """🔖 Види помилок рівня запису."""

    INVALID_INPUT = "InvalidInput"
    DOCUMENT_LOAD_FAILURE = "DocumentLoadFailure"
    MISSING_PRICE = "MissingPrice"
    MISSING_TITLE = "MissingTitle"
    PARTIAL_PARSE_FAILURE = "PartialParseFailure"


_DEFAULT_MESSAGES: Dict[ExtractionErrorKind, str] = {
    ExtractionErrorKind.INVALID_INPUT: "URL is required",
    ExtractionErrorKind.DOCUMENT_LOAD_FAILURE: "Fehler beim Scrapen",
    ExtractionErrorKind.MISSING_PRICE: "Konnte keine Preisdaten extrahieren",
    ExtractionErrorKind.MISSING_TITLE: "Konnte keinen Fahrzeugtitel extrahieren",
    ExtractionErrorKind.PARTIAL_PARSE_FAILURE: "Strukturierte Daten konnten nicht gelesen werden",
}																	# 🗒️ Повідомлення для клієнтів API


class ExtractionError(UserVisibleError):
    """
    🧾 Помилка екстракції оголошення.

    Не кидається з парсера назовні: `VehicleParser.parse()` повертає її як `Err(...)`.
    """

    def __init__(
        self,
        kind: ExtractionErrorKind,
        *,
        url: str = "",
        message: Optional[str] = None,
        details: Optional[str] = None,
    ) -> None:
        base = _DEFAULT_MESSAGES[kind]
        if message is None and kind is ExtractionErrorKind.DOCUMENT_LOAD_FAILURE and details:
            message = f"{base}: {details}"								# 🧾 "Fehler beim Scrapen: <причина>"
        super().__init__(message or base, details=details)
        self.kind = kind
        self.url = url

    def to_payload(self) -> Dict[str, Any]:
        """📦 JSON-відповідь для HTTP-обгортки та звіту пакетного імпорту."""
        payload: Dict[str, Any] = {"error": self.message, "kind": self.kind.value}
        if self.details and self.kind is ExtractionErrorKind.DOCUMENT_LOAD_FAILURE:
            payload["debug"] = self.details
        return payload

    def to_log_extra(self) -> Dict[str, Any]:
        extra = super().to_log_extra()
        extra.update({"kind": self.kind.value, "url": self.url})
        return extra

    def __repr__(self) -> str:
        return f"ExtractionError(kind={self.kind.value!r}, url={self.url!r}, message={self.message!r})"


class StructuredDataParseError(AppError):
    """📄 Один JSON-LD блок не вдалося розібрати; інші блоки обробляються далі."""

    def __init__(self, *, index: int, detail: str) -> None:
        super().__init__(f"JSON-LD block #{index} is not valid JSON", details=detail)
        self.index = index
        self.kind = ExtractionErrorKind.PARTIAL_PARSE_FAILURE


# ================================
# 📤 ПУБЛІЧНИЙ API
# ================================
__all__ = [
    "AppError",
    "UserVisibleError",
    "DocumentLoadError",
    "InvalidUrlError",
    "NetworkError",
    "RequestTimeout",
    "HttpError",
    "CloudflareBlockError",
    "ExtractionErrorKind",
    "ExtractionError",
    "StructuredDataParseError",
]
