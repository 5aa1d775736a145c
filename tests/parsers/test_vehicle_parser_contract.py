# tests/parsers/test_vehicle_parser_contract.py
import asyncio
import json

import pytest

from carimport.domain.vehicles.entities import PLACEHOLDER_IMAGE, TITLE_FALLBACK
from carimport.domain.vehicles.interfaces import IDocumentProvider
from carimport.infrastructure.parsers.document import Document
from carimport.infrastructure.parsers.vehicle_parser import VehicleParser
from carimport.shared.errors import ExtractionErrorKind, HttpError, RequestTimeout
from carimport.shared.utils.result import Err, Ok

URL = "https://suchen.mobile.de/fahrzeuge/details.html?id=123"


# ──────────────────────────────────────────────────────────────────────────────
#                          🔧 Тестові заглушки/фейки
# ──────────────────────────────────────────────────────────────────────────────

class _FakeProvider(IDocumentProvider):
    """Повертає заздалегідь заданий HTML або кидає заданий виняток."""

    def __init__(self, html: str = "", error: Exception | None = None):
        self._html = html
        self._error = error
        self.calls: list[str] = []

    async def load(self, url: str) -> Document:
        self.calls.append(url)
        await asyncio.sleep(0)
        if self._error is not None:
            raise self._error
        return Document.from_html(self._html, url=url)


_FULL_HTML = """
<html><body>
  <h1 data-testid="ad-title">BMW 320d Touring</h1>
  <div class="MainPriceInfo">24.890 €</div>
  <div class="TechnicalData">
    <div><span>Kilometerstand</span><span>98.500 km</span></div>
    <div><span>Leistung</span><span>140 kW (190 PS)</span></div>
    <div><span>Kraftstoff</span><span>Diesel</span></div>
    <div><span>Getriebe</span><span>Automatik</span></div>
    <div><span>Erstzulassung</span><span>06/2018</span></div>
  </div>
  <img src="https://img.mobile.de/s/a.jpg"><img src="https://img.mobile.de/s/b.jpg">
  <img src="https://static.mobile.de/logo.png">
</body></html>
"""


# ──────────────────────────────────────────────────────────────────────────────
#                                ✅ Успіх
# ──────────────────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_full_listing_is_assembled():
    provider = _FakeProvider(_FULL_HTML)
    parser = VehicleParser(provider)

    result = await parser.parse(URL)

    assert isinstance(result, Ok)
    record = result.value
    assert record.title == "BMW 320d Touring"
    assert record.price == 24890
    assert record.mileage == 98500
    assert record.power == 190
    assert record.fuel_type == "Diesel"
    assert record.transmission == "Automatik"
    assert record.model_year == 2018
    assert record.images == ("https://img.mobile.de/l/a.jpg", "https://img.mobile.de/l/b.jpg")
    assert record.source_url == URL
    assert provider.calls == [URL]


@pytest.mark.asyncio
async def test_minimal_listing_gets_sentinels_and_placeholder():
    parser = VehicleParser(_FakeProvider('<div class="price">15.000 €</div>'))

    result = await parser.parse(URL)

    assert isinstance(result, Ok)
    record = result.value
    assert record.title == TITLE_FALLBACK
    assert record.price == 15000
    assert (record.power, record.mileage, record.model_year) == (0, 0, 0)
    assert record.fuel_type == "" and record.transmission == ""
    assert record.images == (PLACEHOLDER_IMAGE,)


@pytest.mark.asyncio
async def test_structured_data_fills_only_gaps():
    ld = {
        "@type": "Car",
        "name": "Ignoriert",
        "offers": {"price": 1},
        "dateVehicleFirstRegistered": "1975",
        "mileageFromOdometer": {"value": 210000},
    }
    html = (
        '<h1>Mercedes W123</h1><div class="PriceInfo">19.500 €</div>'
        f'<script type="application/ld+json">{json.dumps(ld)}</script>'
    )
    parser = VehicleParser(_FakeProvider(html))

    record = (await parser.parse(URL)).value

    assert record.title == "Mercedes W123"
    assert record.price == 19500
    assert record.model_year == 1975
    assert record.mileage == 210000


# ──────────────────────────────────────────────────────────────────────────────
#                                ❌ Помилки
# ──────────────────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_missing_price_is_fatal():
    parser = VehicleParser(_FakeProvider("<h1>Audi A6</h1><p>Preis auf Anfrage</p>"))

    result = await parser.parse(URL)

    assert isinstance(result, Err)
    assert result.error.kind is ExtractionErrorKind.MISSING_PRICE
    assert result.error.message == "Konnte keine Preisdaten extrahieren"


@pytest.mark.asyncio
async def test_missing_title_when_fallback_disabled():
    parser = VehicleParser(_FakeProvider('<div class="price">8.000 €</div>'), title_fallback_enabled=False)

    result = await parser.parse(URL)

    assert isinstance(result, Err)
    assert result.error.kind is ExtractionErrorKind.MISSING_TITLE


@pytest.mark.asyncio
async def test_price_checked_before_title():
    parser = VehicleParser(_FakeProvider("<p>leer</p>"), title_fallback_enabled=False)

    result = await parser.parse(URL)

    assert result.error.kind is ExtractionErrorKind.MISSING_PRICE


@pytest.mark.asyncio
@pytest.mark.parametrize("url", ["", "   ", "ftp://mobile.de/x", "mobile.de/details"])
async def test_invalid_input_never_hits_provider(url):
    provider = _FakeProvider("<h1>x</h1>")
    parser = VehicleParser(provider)

    result = await parser.parse(url)

    assert isinstance(result, Err)
    assert result.error.kind is ExtractionErrorKind.INVALID_INPUT
    assert provider.calls == []


@pytest.mark.asyncio
async def test_url_is_trimmed_before_loading():
    provider = _FakeProvider(_FULL_HTML)

    result = await VehicleParser(provider).parse(f"  {URL}  ")

    assert provider.calls == [URL]
    assert result.value.source_url == URL


@pytest.mark.asyncio
async def test_provider_failure_becomes_document_load_failure():
    error = RequestTimeout(url=URL, timeout_ms=30000, detail="Timeout 30000ms exceeded")
    parser = VehicleParser(_FakeProvider(error=error))

    result = await parser.parse(URL)

    assert isinstance(result, Err)
    assert result.error.kind is ExtractionErrorKind.DOCUMENT_LOAD_FAILURE
    assert result.error.message.startswith("Fehler beim Scrapen: ")
    assert "Timeout 30000ms exceeded" in result.error.to_payload()["debug"]


@pytest.mark.asyncio
async def test_unexpected_provider_exception_is_contained():
    parser = VehicleParser(_FakeProvider(error=RuntimeError("browser crashed")))

    result = await parser.parse(URL)

    assert result.error.kind is ExtractionErrorKind.DOCUMENT_LOAD_FAILURE
    assert result.error.details == "browser crashed"


@pytest.mark.asyncio
async def test_http_error_details_are_reported():
    parser = VehicleParser(_FakeProvider(error=HttpError(url=URL, status_code=404, detail="Not Found")))

    result = await parser.parse(URL)

    assert result.error.details == "HTTP 404: Not Found"


def test_extract_is_pure_and_repeatable():
    doc = Document.from_html(_FULL_HTML, url=URL)
    parser = VehicleParser(None)

    first, second = parser.extract(doc), parser.extract(doc)

    assert first.value.title == second.value.title
    assert first.value.images == second.value.images
    assert first.value.record_id != second.value.record_id
