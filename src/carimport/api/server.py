# 🌐 carimport/api/server.py
"""
🌐 HTTP-обгортка над парсером оголошень (FastAPI).

🔹 `POST /api/scrape` — один URL → запис або `{error, kind}`.
🔹 `POST /api/batch` — список URL → звіт `{imported, failed, data, errors}`.
🔹 `GET /api/health` — перевірка живості.
🔹 `GET /metrics` — Prometheus-метрики.
🔹 Постачальник документів стартує та зупиняється разом із застосунком (lifespan).
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from pydantic import BaseModel

# 🔠 Системні імпорти
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncIterator, Dict, List, Optional

# 🧩 Внутрішні модулі проєкту
from carimport import __version__
from carimport.config.config_service import ConfigService
from carimport.domain.vehicles.interfaces import IDocumentProvider, IVehicleDataProvider
from carimport.infrastructure.batch.batch_import_service import BatchImportService
from carimport.infrastructure.parsers.vehicle_parser import VehicleParser
from carimport.infrastructure.web import make_document_provider
from carimport.shared.errors import ExtractionError, ExtractionErrorKind
from carimport.shared.utils.logger import LOG_NAME
from carimport.shared.utils.result import Ok

logger = logging.getLogger(f"{LOG_NAME}.api")

# Помилки на боці клієнта/сторінки → 400, збій завантаження → 502
_STATUS_BY_KIND: Dict[ExtractionErrorKind, int] = {
    ExtractionErrorKind.INVALID_INPUT: 400,
    ExtractionErrorKind.MISSING_PRICE: 400,
    ExtractionErrorKind.MISSING_TITLE: 400,
    ExtractionErrorKind.PARTIAL_PARSE_FAILURE: 400,
    ExtractionErrorKind.DOCUMENT_LOAD_FAILURE: 502,
}


# ================================
# 📨 МОДЕЛІ ЗАПИТІВ
# ================================
class ScrapeRequest(BaseModel):
    url: Optional[str] = None


class BatchRequest(BaseModel):
    urls: Optional[List[str]] = None


def _error_response(error: ExtractionError) -> JSONResponse:
    return JSONResponse(status_code=_STATUS_BY_KIND.get(error.kind, 500), content=error.to_payload())


# ================================
# 🏭 ФАБРИКА ЗАСТОСУНКУ
# ================================
def create_app(
    provider: Optional[IDocumentProvider] = None,
    parser: Optional[IVehicleDataProvider] = None,
    config_service: Optional[ConfigService] = None,
    *,
    batch_service: Optional[BatchImportService] = None,
) -> FastAPI:
    """
    🏭 Збирає FastAPI-застосунок.

    Без аргументів бере постачальника з `provider.kind` і створює `VehicleParser`.
    У тестах можна передати готовий `parser` (тоді постачальник не потрібен).
    """
    cfg = config_service or ConfigService()
    if parser is None:
        if provider is None:
            provider = make_document_provider(cfg.get("provider.kind", "browser", cast=str), cfg)
        parser = VehicleParser(provider, cfg)
    batch = batch_service or BatchImportService(parser, cfg)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        if provider is not None:
            await provider.startup()
        logger.info("🚀 API готовий до запитів")
        try:
            yield
        finally:
            if provider is not None:
                await provider.shutdown()
            logger.info("🛑 API зупинено")

    app = FastAPI(title="carimport", version=__version__, lifespan=lifespan)

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        """🚦 Відсутнє або нерядкове тіло запиту → 400 InvalidInput замість 422."""
        logger.warning("🚦 Некоректне тіло запиту %s: %s", request.url.path, exc.errors())
        message = "URLs are required" if request.url.path == "/api/batch" else None
        return _error_response(ExtractionError(ExtractionErrorKind.INVALID_INPUT, message=message))

    @app.post("/api/scrape")
    async def scrape(request: ScrapeRequest) -> Any:
        url = (request.url or "").strip()
        if not url:
            return _error_response(ExtractionError(ExtractionErrorKind.INVALID_INPUT))

        result = await parser.parse(url)
        if isinstance(result, Ok):
            return result.value.to_dict()
        return _error_response(result.error)

    @app.post("/api/batch")
    async def batch_import(request: BatchRequest) -> Any:
        urls = [u.strip() for u in (request.urls or []) if u and u.strip()]
        if not urls:
            return _error_response(
                ExtractionError(ExtractionErrorKind.INVALID_INPUT, message="URLs are required")
            )
        report = await batch.run(urls)
        return report.to_dict()

    @app.get("/api/health")
    async def health() -> Dict[str, str]:
        return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}

    @app.get("/metrics")
    async def metrics() -> Response:
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    return app


__all__ = ["create_app", "ScrapeRequest", "BatchRequest"]
