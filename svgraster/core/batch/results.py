"""Batch result reports."""

import csv
import io
import json
from typing import Any, Dict, List

from svgraster.core.constants import ERROR_MESSAGE_MAX_LENGTH, REPORT_FORMATS

from .models import BatchOutcome

CSV_FIELDS = ["status", "source", "destination", "error"]


class BatchReportBuilder:
    """Builds JSON or CSV summaries of a batch outcome."""

    def file_rows(self, outcome: BatchOutcome) -> List[Dict[str, Any]]:
        """One row per settled job, successes first."""
        rows = [
            {
                "status": "success",
                "source": success.job.source_path,
                "destination": success.destination_path,
                "error": None,
            }
            for success in outcome.result.successes
        ]
        for failure in outcome.result.failures:
            rows.append(
                {
                    "status": "failed",
                    "source": failure.job.source_path,
                    "destination": failure.job.destination_path,
                    "error": failure.message[:ERROR_MESSAGE_MAX_LENGTH],
                }
            )
        return rows

    def generate_summary_report(
        self, outcome: BatchOutcome, format: str = "json"
    ) -> str:
        """Generate a summary report of a batch.

        Args:
            outcome: The batch outcome
            format: Report format (json or csv)

        Returns:
            Report content as string
        """
        if format == "json":
            return self._generate_json_report(outcome)
        elif format == "csv":
            return self._generate_csv_report(outcome)
        else:
            raise ValueError(
                f"Unsupported report format: {format}, "
                f"expected one of {list(REPORT_FORMATS)}"
            )

    def _generate_json_report(self, outcome: BatchOutcome) -> str:
        report = {
            "batch_id": outcome.batch_id,
            "ok": outcome.ok,
            "started_at": outcome.started_at.isoformat(),
            "completed_at": (
                outcome.completed_at.isoformat() if outcome.completed_at else None
            ),
            "elapsed_seconds": outcome.elapsed_seconds,
            "total_files": outcome.result.total,
            "successful_files": len(outcome.result.succeeded),
            "failed_files": len(outcome.result.failures),
            "engine_error": (
                str(outcome.engine_error) if outcome.engine_error is not None else None
            ),
            "files": self.file_rows(outcome),
        }
        return json.dumps(report, indent=2)

    def _generate_csv_report(self, outcome: BatchOutcome) -> str:
        output = io.StringIO()
        writer = csv.DictWriter(output, fieldnames=CSV_FIELDS)
        writer.writeheader()
        for row in self.file_rows(outcome):
            writer.writerow(
                {key: "" if value is None else value for key, value in row.items()}
            )
        return output.getvalue()
