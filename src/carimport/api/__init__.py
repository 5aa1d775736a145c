# 🌐 carimport/api/__init__.py
"""🌐 HTTP-обгортка (FastAPI)."""

from .server import create_app

__all__ = ["create_app"]
