# 🧭 carimport/infrastructure/web/__init__.py
"""🧭 Постачальники документів: Playwright (рендеринг) та httpx (статичний HTML)."""

from __future__ import annotations

from .http_document_provider import HttpDocumentProvider
from .webdriver_service import WebDriverService

__all__ = ["HttpDocumentProvider", "WebDriverService", "make_document_provider"]


def make_document_provider(kind: str = "browser", config_service=None):
    """🏭 "browser" → WebDriverService, "http" → HttpDocumentProvider."""
    if (kind or "").strip().lower() == "http":
        return HttpDocumentProvider(config_service)
    return WebDriverService(config_service)
