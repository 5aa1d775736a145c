# tests/shared/test_errors_payload.py
from carimport.shared.errors import (
    CloudflareBlockError,
    DocumentLoadError,
    ExtractionError,
    ExtractionErrorKind,
    HttpError,
    StructuredDataParseError,
)


def test_default_messages_per_kind():
    assert ExtractionError(ExtractionErrorKind.INVALID_INPUT).message == "URL is required"
    assert ExtractionError(ExtractionErrorKind.MISSING_PRICE).message == "Konnte keine Preisdaten extrahieren"
    assert ExtractionError(ExtractionErrorKind.MISSING_TITLE).kind.value == "MissingTitle"


def test_document_load_failure_carries_debug_details():
    error = ExtractionError(ExtractionErrorKind.DOCUMENT_LOAD_FAILURE, url="https://x.de", details="Timeout 30000ms")

    payload = error.to_payload()

    assert payload == {
        "error": "Fehler beim Scrapen: Timeout 30000ms",
        "kind": "DocumentLoadFailure",
        "debug": "Timeout 30000ms",
    }


def test_validation_errors_have_no_debug_field():
    payload = ExtractionError(ExtractionErrorKind.MISSING_PRICE, details="irrelevant").to_payload()
    assert "debug" not in payload
    assert payload["kind"] == "MissingPrice"


def test_load_errors_are_document_load_errors():
    http = HttpError(url="https://x.de", status_code=404, detail="Not Found")
    blocked = CloudflareBlockError(url="https://x.de")

    assert isinstance(http, DocumentLoadError)
    assert isinstance(blocked, DocumentLoadError)
    assert http.status_code == 404
    assert "Not Found" in str(http)


def test_structured_data_error_kind():
    error = StructuredDataParseError(index=2, detail="Expecting value")
    assert error.kind is ExtractionErrorKind.PARTIAL_PARSE_FAILURE

