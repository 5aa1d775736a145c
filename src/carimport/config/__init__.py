# ⚙️ carimport/config/__init__.py
"""⚙️ Конфігураційний шар: singleton `ConfigService` поверх config.yaml та .env."""

from .config_service import ConfigService

__all__ = ["ConfigService"]
