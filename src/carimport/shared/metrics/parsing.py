# 📈 carimport/shared/metrics/parsing.py
"""
📈 Prometheus-лічильники завантаження сторінок та екстракції оголошень.

🔹 `PARSING_SUCCESS` / `PARSING_FAILURE` — результат роботи постачальників документів.
🔹 `EXTRACTION_OUTCOME` — підсумок складання запису (ok / вид помилки).
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from prometheus_client import Counter, Histogram

PARSING_SUCCESS = Counter(
    "carimport_document_load_success_total",
    "Successfully loaded listing documents",
    ["source"],
)
PARSING_FAILURE = Counter(
    "carimport_document_load_failure_total",
    "Failed listing document loads",
    ["source", "reason"],
)
EXTRACTION_OUTCOME = Counter(
    "carimport_extraction_outcome_total",
    "Vehicle record extraction outcomes",
    ["outcome"],
)
EXTRACTION_LATENCY = Histogram(
    "carimport_extraction_seconds",
    "Time spent loading and extracting one listing",
)

__all__ = ["PARSING_SUCCESS", "PARSING_FAILURE", "EXTRACTION_OUTCOME", "EXTRACTION_LATENCY"]
