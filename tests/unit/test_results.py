"""Unit tests for batch reports."""

import csv
import io
import json
from datetime import datetime, timedelta, timezone

import pytest

from svgraster.core.batch.models import (
    BatchOutcome,
    BatchResult,
    ConversionJob,
    TaskFailure,
    TaskSuccess,
)
from svgraster.core.batch.results import BatchReportBuilder
from svgraster.core.exceptions import EngineError, PageLoadError


@pytest.fixture
def outcome():
    ok_job = ConversionJob(source_path="in/a.svg", destination_path="out/a.png")
    bad_job = ConversionJob(source_path="in/b.svg", destination_path="out/b.png")
    result = BatchResult(total=2)
    result.record(TaskSuccess(job=ok_job, destination_path="out/a.png"))
    result.record(TaskFailure(job=bad_job, error=PageLoadError("in/b.svg", "fail")))

    started = datetime(2024, 1, 1, tzinfo=timezone.utc)
    return BatchOutcome(
        batch_id="abc123",
        result=result,
        started_at=started,
        completed_at=started + timedelta(seconds=1.5),
    )


class TestBatchReportBuilder:
    """Test report generation."""

    def test_json_report(self, outcome):
        report = json.loads(BatchReportBuilder().generate_summary_report(outcome))

        assert report["batch_id"] == "abc123"
        assert report["ok"] is False
        assert report["total_files"] == 2
        assert report["successful_files"] == 1
        assert report["failed_files"] == 1
        assert report["elapsed_seconds"] == 1.5
        assert report["engine_error"] is None
        assert report["files"][0] == {
            "status": "success",
            "source": "in/a.svg",
            "destination": "out/a.png",
            "error": None,
        }
        assert report["files"][1]["status"] == "failed"
        assert "with status fail" in report["files"][1]["error"]

    def test_csv_report(self, outcome):
        content = BatchReportBuilder().generate_summary_report(outcome, "csv")

        rows = list(csv.DictReader(io.StringIO(content)))
        assert [row["status"] for row in rows] == ["success", "failed"]
        assert rows[0]["error"] == ""
        assert rows[1]["source"] == "in/b.svg"

    def test_engine_error_report(self):
        outcome = BatchOutcome(
            batch_id="x",
            result=BatchResult(total=3),
            started_at=datetime.now(timezone.utc),
            engine_error=EngineError("no browser"),
        )

        report = json.loads(BatchReportBuilder().generate_summary_report(outcome))

        assert report["ok"] is False
        assert report["engine_error"] == "no browser"
        assert report["completed_at"] is None
        assert report["files"] == []

    def test_unsupported_format(self, outcome):
        with pytest.raises(ValueError, match="Unsupported report format"):
            BatchReportBuilder().generate_summary_report(outcome, "xml")
