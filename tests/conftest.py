# tests/conftest.py
import sys
from pathlib import Path

import pytest

# Додаємо src у sys.path, щоб працював імпорт "carimport.…"
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from carimport.config.config_service import ConfigService  # noqa: E402
from carimport.infrastructure.parsers.document import Document  # noqa: E402
from carimport.infrastructure.parsers.extractors.base import _ConfigSnapshot  # noqa: E402

_ENV_NAMES = ("PORT", "HOST", "LOG_LEVEL", "MARKETPLACE_DOMAIN", "PLAYWRIGHT_HEADLESS", "PROVIDER_KIND", "HTML_PARSER")


@pytest.fixture(autouse=True)
def _fresh_config(monkeypatch):
    """Кожен тест бачить config.yaml без перекриттів із середовища."""
    for name in _ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    ConfigService.reset()
    _ConfigSnapshot.reset()
    yield
    ConfigService.reset()
    _ConfigSnapshot.reset()


@pytest.fixture
def make_doc():
    """Фабрика документів з HTML-рядка."""
    def _make(html: str, *, url: str = "https://suchen.mobile.de/fahrzeuge/details.html?id=1", rendered: bool = True):
        return Document.from_html(html, url=url, rendered=rendered)
    return _make
