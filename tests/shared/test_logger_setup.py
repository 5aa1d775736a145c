# tests/shared/test_logger_setup.py
import json
import logging

from carimport.shared.utils.logger import LOG_NAME, JsonFormatter, get_logger, init_logging


def test_json_formatter_keeps_extra_fields():
    record = logging.LogRecord(LOG_NAME, logging.WARNING, __file__, 10, "❌ %s", ("MissingPrice",), None)
    record.kind = "MissingPrice"
    record.url = "https://mobile.de/x"

    payload = json.loads(JsonFormatter().format(record))

    assert payload["message"] == "❌ MissingPrice"
    assert payload["kind"] == "MissingPrice"
    assert payload["url"] == "https://mobile.de/x"
    assert payload["level"] == "WARNING"


def test_init_logging_is_idempotent_and_writes_file(tmp_path):
    log_file = tmp_path / "logs" / "app.log"

    init_logging(level="DEBUG", console=True, file=str(log_file))
    logger = init_logging(level="DEBUG", console=False, json_mode=True, file=str(log_file))
    try:
        get_logger("test").info("привіт", extra={"url": "https://mobile.de/1"})
        for handler in logger.handlers:
            handler.flush()

        assert len(logger.handlers) == 1
        last_line = log_file.read_text(encoding="utf-8").strip().splitlines()[-1]
        assert json.loads(last_line)["url"] == "https://mobile.de/1"
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()


def test_get_logger_prefix():
    assert get_logger().name == "carimport"
    assert get_logger("api").name == "carimport.api"
