import json
import logging

from autoshorts.core.logging import (
    DevelopmentFormatter,
    StructuredFormatter,
    get_logger,
    mask_secret,
    set_job_id,
    set_request_id,
    clear_context,
)


def make_record(message="hello", **extra):
    record = logging.LogRecord("autoshorts.test", logging.INFO, __file__, 10, message, (), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_mask_secret_keeps_only_the_tail():
    assert mask_secret("AIzaSyExampleKey1234") == "...1234"
    assert mask_secret("abc") == "...***"
    assert mask_secret("") == "<empty>"
    assert mask_secret(None) == "<empty>"


def test_structured_output_redacts_credentials():
    record = make_record(api_key="AIzaSyExampleKey1234", nested={"Authorization": "Bearer x", "count": 2})
    payload = json.loads(StructuredFormatter().format(record))

    assert payload["message"] == "hello"
    assert payload["extra"]["api_key"] == "***REDACTED***"
    assert payload["extra"]["nested"] == {"Authorization": "***REDACTED***", "count": 2}
    assert "AIzaSy" not in json.dumps(payload)


def test_structured_output_carries_context_ids():
    set_request_id("req-1")
    set_job_id("job-1")
    try:
        payload = json.loads(StructuredFormatter().format(make_record()))
    finally:
        clear_context()
    assert payload["request_id"] == "req-1"
    assert payload["job_id"] == "job-1"


def test_development_output_shows_short_job_id():
    set_job_id("abcdef123456")
    try:
        line = DevelopmentFormatter().format(make_record("rendering"))
    finally:
        clear_context()
    assert "job:abcdef12" in line
    assert "rendering" in line


def test_adapter_merges_fixed_and_call_extras(caplog):
    logger = get_logger("autoshorts.test.adapter", component="unit")
    with caplog.at_level(logging.INFO, logger="autoshorts.test.adapter"):
        logger.info("done", extra={"scenes": 4})
    record = caplog.records[-1]
    assert record.component == "unit"
    assert record.scenes == 4
