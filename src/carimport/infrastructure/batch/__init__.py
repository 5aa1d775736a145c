# 📦 carimport/infrastructure/batch/__init__.py
"""📦 Послідовний пакетний імпорт оголошень."""

from .batch_import_service import BatchFailure, BatchImportService, BatchReport

__all__ = ["BatchFailure", "BatchImportService", "BatchReport"]
