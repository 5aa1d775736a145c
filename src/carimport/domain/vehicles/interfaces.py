# carimport/domain/vehicles/interfaces.py
"""
🧩 Интерфейсы источников документов и экстракторов объявлений.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from carimport.shared.errors import ExtractionError
from carimport.shared.utils.result import Result

from .entities import VehicleRecord

if TYPE_CHECKING:
    from carimport.infrastructure.parsers.document import Document

# ================================
# 🏛️ ИНТЕРФЕЙСЫ
# ================================

class IDocumentProvider(ABC):
    """Контракт для любого источника загруженного документа (браузер, HTTP)."""

    @abstractmethod
    async def load(self, url: str) -> "Document":
        """Загружает страницу и возвращает документ; ошибки — `DocumentLoadError`."""

    async def startup(self) -> None:
        """Поднимает ресурсы провайдера (по умолчанию ничего не делает)."""

    async def shutdown(self) -> None:
        """Освобождает ресурсы провайдера (по умолчанию ничего не делает)."""

    async def __aenter__(self) -> "IDocumentProvider":
        await self.startup()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.shutdown()


class IVehicleDataProvider(ABC):
    """Контракт для сервиса, который превращает URL объявления в запись."""

    @abstractmethod
    async def parse(self, url: str) -> Result[VehicleRecord, ExtractionError]:
        """Возвращает `Ok(VehicleRecord)` или `Err(ExtractionError)`."""
