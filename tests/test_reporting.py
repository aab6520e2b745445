"""Tests for result presentation."""

import logging

from region_batch.errors import UnknownFlag
from region_batch.models import Applied, BatchResult, Rejected
from region_batch.reporting import CollectingSink, LoggingSink, format_total, report


def _result(*outcomes):
    return BatchResult(world="world", flag="pvp", outcomes=list(outcomes))


class TestBatchResult:
    def test_counts(self):
        result = _result(Applied("a"), Rejected("b", "bad"), Applied("c"))
        assert (result.applied, result.rejected, result.total) == (2, 1, 3)
        assert result.applied_ids() == ["a", "c"]

    def test_json_payload_includes_counts(self):
        payload = _result(Applied("a")).model_dump(mode="json")
        assert payload["applied"] == 1
        assert payload["rejected"] == 0
        assert payload["outcomes"] == [{"regionId": "a", "status": "applied", "reason": None}]


class TestSinks:
    def test_collecting_sink(self):
        sink = CollectingSink()
        report(_result(Applied("a"), Rejected("b", "Not a number")), sink)
        assert sink.lines == [
            "Region a modified.",
            "Region b not modified: Not a number",
            "Total modified regions: 1 (1 rejected)",
        ]

    def test_empty_result_still_has_total(self):
        sink = CollectingSink()
        report(_result(), sink)
        assert sink.lines == ["Total modified regions: 0"]
        assert format_total(_result()) == "Total modified regions: 0"

    def test_logging_sink(self, caplog):
        sink = LoggingSink(logging.getLogger("test.reporting"))
        with caplog.at_level(logging.INFO, logger="test.reporting"):
            report(_result(Applied("a"), Rejected("b", "bad")), sink)
            sink.aborted(UnknownFlag("zzz"))
        levels = [r.levelno for r in caplog.records]
        assert levels == [logging.INFO, logging.WARNING, logging.INFO, logging.ERROR]
        assert "Batch aborted" in caplog.records[-1].getMessage()
