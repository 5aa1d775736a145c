# tests/batch/test_batch_import_service.py
import pytest

from carimport.domain.vehicles.entities import VehicleRecord
from carimport.domain.vehicles.interfaces import IVehicleDataProvider
from carimport.infrastructure.batch.batch_import_service import BatchImportService
from carimport.shared.errors import ExtractionError, ExtractionErrorKind
from carimport.shared.utils.result import Err, Ok


class _FakeParser(IVehicleDataProvider):
    """URL з "fail" → збій завантаження, з "boom" → виняток, решта → запис."""

    def __init__(self):
        self.calls = []

    async def parse(self, url):
        self.calls.append(url)
        if "boom" in url:
            raise RuntimeError("unexpected")
        if "fail" in url:
            return Err(ExtractionError(ExtractionErrorKind.DOCUMENT_LOAD_FAILURE, url=url, details="HTTP 503"))
        return Ok(VehicleRecord(title=f"Auto {len(self.calls)}", price=1000, source_url=url))


class _SleepRecorder:
    def __init__(self):
        self.delays = []

    async def __call__(self, delay):
        self.delays.append(delay)


@pytest.mark.asyncio
async def test_one_failure_does_not_stop_the_batch():
    parser, sleep = _FakeParser(), _SleepRecorder()
    service = BatchImportService(parser, sleep=sleep)
    urls = ["https://mobile.de/1", "https://mobile.de/fail", "https://mobile.de/3"]

    report = await service.run(urls)

    assert parser.calls == urls                     # строго послідовно і по порядку
    assert report.imported == 2
    assert report.failed == 1
    assert sleep.delays == [1.0, 1.0]               # пауза лише між викликами

    payload = report.to_dict()
    assert [item["title"] for item in payload["data"]] == ["Auto 1", "Auto 3"]
    assert payload["errors"] == [
        {"url": "https://mobile.de/fail", "error": "Fehler beim Scrapen: HTTP 503", "kind": "DocumentLoadFailure"}
    ]


@pytest.mark.asyncio
async def test_unexpected_exception_is_reported_as_load_failure():
    service = BatchImportService(_FakeParser(), delay_sec=0, sleep=_SleepRecorder())

    report = await service.run(["https://mobile.de/boom", "https://mobile.de/2"])

    assert report.imported == 1
    assert report.errors[0].kind == "DocumentLoadFailure"
    assert report.errors[0].error == "Fehler beim Scrapen: unexpected"


@pytest.mark.asyncio
async def test_empty_batch_and_single_url_do_not_sleep():
    sleep = _SleepRecorder()
    service = BatchImportService(_FakeParser(), sleep=sleep)

    assert (await service.run([])).to_dict() == {"imported": 0, "failed": 0, "data": [], "errors": []}
    await service.run(["https://mobile.de/1"])
    assert sleep.delays == []
