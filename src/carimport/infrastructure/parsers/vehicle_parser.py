# 🧠 carimport/infrastructure/parsers/vehicle_parser.py
"""
🧠 VehicleParser — оркестратор повного циклу: URL → документ → поля → валідований запис.

🔹 Перевіряє URL, завантажує документ через `IDocumentProvider` (з rich-спінером за бажанням).
🔹 DOM-стратегії → заповнення прогалин з JSON-LD → заголовок-фолбек → плейсхолдер зображення.
🔹 Валідація fail-fast: спершу ціна (`MissingPrice`), потім заголовок (`MissingTitle`).
🔹 Ніколи не кидає помилки екстракції назовні: повертає `Ok(VehicleRecord)` або `Err(ExtractionError)`.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn	# ⏳ Індикація завантаження

# 🔠 Системні імпорти
import asyncio														# ⏳ Таймаут провайдера
import logging														# 🧾 Логування подій
import time														# ⏱️ Латентність екстракції
from typing import Optional										# 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from carimport.config.config_service import ConfigService		# ⚙️ Конфігураційний сервіс
from carimport.domain.vehicles.entities import (
    PLACEHOLDER_IMAGE,
    TITLE_FALLBACK,
    Url,
    VehicleRecord,
)
from carimport.domain.vehicles.interfaces import IDocumentProvider, IVehicleDataProvider
from carimport.infrastructure.parsers.document import Document
from carimport.infrastructure.parsers.vehicle_data_extractor import VehicleDataExtractor, VehicleFields
from carimport.shared.errors import DocumentLoadError, ExtractionError, ExtractionErrorKind
from carimport.shared.metrics.parsing import EXTRACTION_LATENCY, EXTRACTION_OUTCOME
from carimport.shared.utils.logger import LOG_NAME
from carimport.shared.utils.result import Err, Ok, Result

# ================================
# 🧾 ЛОГЕР МОДУЛЯ
# ================================
logger = logging.getLogger(f"{LOG_NAME}.parser")


# ================================
# 🏛️ ПАРСЕР
# ================================
class VehicleParser(IVehicleDataProvider):
    """
    🏛️ Повний цикл обробки оголошення.

    Налаштовувані поведінки:
      • `title_fallback_enabled`: True → порожній заголовок стає "Unbekanntes Modell";
        False → запис без заголовка відхиляється з `MissingTitle`.
      • `images_limit`: ліміт зображень (не більше 10).
      • `enable_progress`: rich-спінер під час завантаження документа.
    """

    def __init__(
        self,
        provider: Optional[IDocumentProvider],
        config_service: Optional[ConfigService] = None,
        *,
        enable_progress: Optional[bool] = None,
        title_fallback_enabled: Optional[bool] = None,
        images_limit: Optional[int] = None,
    ) -> None:
        self.provider = provider										# 🌐 Постачальник документів
        self.config_service = config_service or ConfigService()		# ⚙️ Конфігураційний сервіс
        cfg = self.config_service

        self.enable_progress = bool(
            cfg.get("parser.enable_progress", False, cast=bool) if enable_progress is None else enable_progress
        )																# ⏳ Чи показувати прогрес
        self.title_fallback_enabled = bool(
            cfg.get("parser.title_fallback_enabled", True, cast=bool)
            if title_fallback_enabled is None
            else title_fallback_enabled
        )																# 🏷️ Політика порожнього заголовка

        limit_raw = images_limit if images_limit is not None else cfg.get("parser.images.limit", 10, cast=int)
        try:
            self.images_limit = max(1, min(int(limit_raw), 10))		# 🖼️ Ліміт зображень 1..10
        except (TypeError, ValueError):
            self.images_limit = 10

        self.load_timeout_sec = float(
            cfg.get("parser.load_timeout_sec", 0, cast=float) or 0
        ) or None														# ⏳ Додатковий зовнішній таймаут (None → довіряємо провайдеру)

        logger.debug(
            "🧠 VehicleParser init: provider=%s fallback_title=%s images_limit=%s progress=%s",
            type(provider).__name__,
            self.title_fallback_enabled,
            self.images_limit,
            self.enable_progress,
        )

    # ================================
    # 🔄 ПУБЛІЧНИЙ API
    # ================================
    async def parse(self, url: str) -> Result[VehicleRecord, ExtractionError]:
        """
        🔄 Основний метод: URL → `Ok(VehicleRecord)` | `Err(ExtractionError)`.
        """
        started = time.perf_counter()
        url_str = (url or "").strip()
        if not url_str:
            return self._fail(ExtractionError(ExtractionErrorKind.INVALID_INPUT))
        try:
            url_str = str(Url(url_str))
        except ValueError:
            return self._fail(ExtractionError(
                ExtractionErrorKind.INVALID_INPUT, url=url_str, message=f"Ungültige URL: {url_str}",
            ))

        try:
            document = await self._load_document(url_str)
        except DocumentLoadError as exc:
            return self._fail(ExtractionError(
                ExtractionErrorKind.DOCUMENT_LOAD_FAILURE, url=url_str, details=str(exc),
            ))
        except asyncio.TimeoutError:
            return self._fail(ExtractionError(
                ExtractionErrorKind.DOCUMENT_LOAD_FAILURE,
                url=url_str,
                details=f"timeout after {self.load_timeout_sec}s",
            ))
        except Exception as exc:  # noqa: BLE001  # ⚠️ Непередбачений збій провайдера
            logger.exception("❌ Неочікувана помилка завантаження %s", url_str)
            return self._fail(ExtractionError(
                ExtractionErrorKind.DOCUMENT_LOAD_FAILURE, url=url_str, details=str(exc) or type(exc).__name__,
            ))

        result = self.extract(document, url=url_str)
        EXTRACTION_LATENCY.observe(time.perf_counter() - started)
        return result

    def extract(self, document: Document, *, url: Optional[str] = None) -> Result[VehicleRecord, ExtractionError]:
        """
        🧲 Синхронне ядро: документ → валідований запис. Документ не змінюється.
        """
        source_url = (url or document.url or "").strip()
        extractor = VehicleDataExtractor(document, images_limit=self.images_limit)
        draft = extractor.extract()
        self._apply_defaults(draft)

        error = self._validate(draft, source_url)
        if error is not None:
            return self._fail(error)

        record = self._build_record(draft, source_url)
        EXTRACTION_OUTCOME.labels(outcome="ok").inc()
        logger.info(
            "✅ %s | %s € | %s PS | %s km | %s | images=%d",
            record.title,
            record.price,
            record.power,
            record.mileage,
            record.model_year,
            len(record.images),
        )
        return Ok(record)

    # ================================
    # 🌐 ЗАВАНТАЖЕННЯ ДОКУМЕНТА
    # ================================
    async def _load_document(self, url: str) -> Document:
        if self.provider is None:
            raise DocumentLoadError("Kein Dokumentanbieter konfiguriert", url=url)

        logger.info("🌍 Завантаження %s …", url)
        load = self.provider.load(url)
        if self.load_timeout_sec:
            load = asyncio.wait_for(load, timeout=self.load_timeout_sec)

        if not self.enable_progress:
            return await load

        task_description = f"Laden [cyan]{url.rstrip('/').split('/')[-1]}[/cyan]…"
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            TimeElapsedColumn(),
            transient=True,
        ) as progress:
            progress.add_task(description=task_description, total=None)
            return await load

    # ================================
    # 🧱 ЗБІРКА ТА ВАЛІДАЦІЯ
    # ================================
    def _apply_defaults(self, draft: VehicleFields) -> None:
        """🛟 Фолбеки: заголовок-маркер (за політикою) і плейсхолдер зображення."""
        if not (draft.title or "").strip() and self.title_fallback_enabled:
            logger.warning("⚠️ Заголовок не знайдено → '%s'", TITLE_FALLBACK)
            draft.title = TITLE_FALLBACK
        if not draft.images:
            draft.images = [PLACEHOLDER_IMAGE]

    @staticmethod
    def _validate(draft: VehicleFields, url: str) -> Optional[ExtractionError]:
        if not draft.price or draft.price <= 0:
            return ExtractionError(ExtractionErrorKind.MISSING_PRICE, url=url)
        if not (draft.title or "").strip():
            return ExtractionError(ExtractionErrorKind.MISSING_TITLE, url=url)
        return None

    @staticmethod
    def _build_record(draft: VehicleFields, url: str) -> VehicleRecord:
        return VehicleRecord(
            title=str(draft.title),
            price=int(draft.price or 0),
            source_url=url,
            fuel_type=draft.fuel_type or "",
            transmission=draft.transmission or "",
            power=draft.power or 0,
            mileage=draft.mileage or 0,
            model_year=draft.model_year or 0,
            images=tuple(draft.images),
        )

    @staticmethod
    def _fail(error: ExtractionError) -> Err[ExtractionError]:
        EXTRACTION_OUTCOME.labels(outcome=error.kind.value).inc()
        log = logger.error if error.kind is ExtractionErrorKind.DOCUMENT_LOAD_FAILURE else logger.warning
        log("❌ %s: %s (%s)", error.kind.value, error.message, error.url or "-", extra=error.to_log_extra())
        return Err(error)


__all__ = ["VehicleParser"]
