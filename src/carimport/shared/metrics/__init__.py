# 📊 carimport/shared/metrics/__init__.py
"""📊 Метрики Prometheus сервісу (експортуються HTTP-обгорткою на `/metrics`)."""

from __future__ import annotations

from .parsing import EXTRACTION_LATENCY, EXTRACTION_OUTCOME, PARSING_FAILURE, PARSING_SUCCESS

__all__ = [
    "PARSING_SUCCESS",
    "PARSING_FAILURE",
    "EXTRACTION_OUTCOME",
    "EXTRACTION_LATENCY",
]
