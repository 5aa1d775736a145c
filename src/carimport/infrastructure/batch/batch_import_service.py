# 📦 carimport/infrastructure/batch/batch_import_service.py
"""
📦 Пакетний імпорт оголошень.

🔹 Обробляє URL строго послідовно, з паузою між викликами (≈1 с, щоб не навантажувати сайт).
🔹 Кожен URL незалежний: помилка одного не зупиняє решту.
🔹 Повертає звіт `{imported, failed, data[], errors[]}`.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import asyncio                                                      # ⏳ Пауза між запитами
import logging                                                      # 🧾 Базове логування
from dataclasses import dataclass, field                            # 🧱 DTO звіту
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence  # 📐 Типи публічного API

# 🧩 Внутрішні модулі проєкту
from carimport.config.config_service import ConfigService           # ⚙️ Пауза з конфігу
from carimport.domain.vehicles.entities import VehicleRecord        # 🚗 Запис оголошення
from carimport.domain.vehicles.interfaces import IVehicleDataProvider  # 🤝 Контракт парсера
from carimport.shared.errors import ExtractionError, ExtractionErrorKind  # ⚠️ Помилки екстракції
from carimport.shared.utils.logger import LOG_NAME                  # 🏷️ Імʼя базового логера
from carimport.shared.utils.result import Err, Ok                   # 🧾 Результат парсера

logger = logging.getLogger(f"{LOG_NAME}.batch")                     # 🧾 Модульний логер сервісу

Sleep = Callable[[float], Awaitable[Any]]


@dataclass
class BatchFailure:
    """❌ Невдалий URL пакета."""

    url: str
    error: str
    kind: str

    def to_dict(self) -> Dict[str, Any]:
        return {"url": self.url, "error": self.error, "kind": self.kind}


@dataclass
class BatchReport:
    """📊 Підсумок пакетного імпорту."""

    records: List[VehicleRecord] = field(default_factory=list)
    errors: List[BatchFailure] = field(default_factory=list)

    @property
    def imported(self) -> int:
        return len(self.records)

    @property
    def failed(self) -> int:
        return len(self.errors)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "imported": self.imported,
            "failed": self.failed,
            "data": [record.to_dict() for record in self.records],
            "errors": [failure.to_dict() for failure in self.errors],
        }


class BatchImportService:
    """⚙️ Послідовний координатор: один URL за раз, пауза між викликами."""

    def __init__(
        self,
        parser: IVehicleDataProvider,
        config_service: Optional[ConfigService] = None,
        *,
        delay_sec: Optional[float] = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._parser = parser
        if delay_sec is None:
            delay_sec = (config_service or ConfigService()).get("batch.delay_sec", 1.0, cast=float)
        self._delay_sec = max(0.0, float(delay_sec if delay_sec is not None else 1.0))
        self._sleep = sleep
        logger.debug("⚙️ BatchImportService init (delay=%.2fs)", self._delay_sec)

    async def run(self, urls: Sequence[str]) -> BatchReport:
        report = BatchReport()
        total = len(urls)
        logger.info("📦 Старт пакетного імпорту: %d URL", total)

        for index, url in enumerate(urls):
            if index > 0 and self._delay_sec > 0:
                await self._sleep(self._delay_sec)                  # 🐢 Пауза між запитами

            try:
                result = await self._parser.parse(url)
            except Exception as e:  # noqa: BLE001                # 🔥 Один URL не зупиняє пакет
                logger.exception("🔥 Непередбачена помилка для %s", url)
                result = Err(ExtractionError(
                    ExtractionErrorKind.DOCUMENT_LOAD_FAILURE, url=str(url), details=str(e) or type(e).__name__,
                ))

            if isinstance(result, Ok):
                report.records.append(result.value)
                logger.info("✅ [%d/%d] %s", index + 1, total, url)
                continue

            error = result.error
            report.errors.append(BatchFailure(url=str(url), error=error.message, kind=error.kind.value))
            logger.warning("❌ [%d/%d] %s: %s", index + 1, total, url, error.message)

        logger.info("📊 Імпорт завершено: imported=%d failed=%d", report.imported, report.failed)
        return report


__all__ = ["BatchFailure", "BatchReport", "BatchImportService"]
