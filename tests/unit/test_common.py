"""Unit tests for common utils and the core prompt template helpers."""
from datetime import datetime
import pytest

from api.utils.common import iso_format
from mentor.core.prompt_builder import bucket_label, build_from_template


@pytest.mark.unit
class TestIsoFormat:
    def test_appends_z(self):
        dt = datetime(2025, 1, 15, 12, 30, 0)
        assert iso_format(dt) == "2025-01-15T12:30:00Z"


@pytest.mark.unit
class TestBuildFromTemplate:
    def test_fills_keys(self):
        assert build_from_template("{a} and {b}", a="x", b="y") == "x and y"

    def test_missing_and_none_render_empty(self):
        assert build_from_template("[{a}][{b}]", a=None) == "[][]"

    def test_empty_template(self):
        assert build_from_template("", a="x") == ""


@pytest.mark.unit
class TestBucketLabel:
    BUCKETS = [(1, "low"), (5, "mid")]

    def test_upper_bound_inclusive(self):
        assert bucket_label(1, self.BUCKETS, "high") == "low"
        assert bucket_label(5, self.BUCKETS, "high") == "mid"

    def test_fallback(self):
        assert bucket_label(5.1, self.BUCKETS, "high") == "high"


@pytest.mark.unit
class TestLogging:
    def test_request_id_filter(self):
        import logging
        from api.utils.logger import RequestIdFilter, clear_request_id, set_request_id

        record = logging.LogRecord("t", logging.INFO, __file__, 1, "msg", None, None)
        rid = set_request_id("abc123")
        try:
            assert RequestIdFilter().filter(record) is True
            assert record.request_id == rid == "abc123"
        finally:
            clear_request_id()

    def test_log_request_outcomes(self, caplog):
        import logging
        from api.utils.logger import log_request

        logger = logging.getLogger("tests.log_request")
        with caplog.at_level(logging.INFO, logger="tests.log_request"):
            with log_request(logger, "gateway chat"):
                pass
            with pytest.raises(RuntimeError):
                with log_request(logger, "gateway quiz"):
                    raise RuntimeError("boom")

        messages = [r.getMessage() for r in caplog.records]
        assert messages[0].startswith("gateway chat ok duration_ms=")
        assert messages[1].startswith("gateway quiz failed duration_ms=")
        assert caplog.records[1].levelno == logging.WARNING
