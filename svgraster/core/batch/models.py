"""Data models for batch conversion."""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ConversionJob(BaseModel):
    """One source file and the raster file it becomes."""

    model_config = ConfigDict(frozen=True)

    source_path: str = Field(..., description="SVG file to read")
    destination_path: str = Field(..., description="Raster file to write")

    @field_validator("source_path", "destination_path", mode="before")
    @classmethod
    def coerce_path(cls, v):
        if isinstance(v, Path):
            v = str(v)
        if not isinstance(v, str) or not v.strip():
            raise ValueError("path must be a non-empty string")
        return v

    @classmethod
    def from_mapping(
        cls, file_map: Dict[Union[str, Path], Union[str, Path]]
    ) -> List["ConversionJob"]:
        """Build jobs from a ``{source: destination}`` mapping."""
        return [
            cls(source_path=source, destination_path=destination)
            for source, destination in file_map.items()
        ]


@dataclass(frozen=True)
class TaskSuccess:
    job: ConversionJob
    destination_path: str
    ok: Literal[True] = True


@dataclass(frozen=True)
class TaskFailure:
    job: ConversionJob
    error: BaseException
    ok: Literal[False] = False

    @property
    def message(self) -> str:
        return str(self.error) or type(self.error).__name__


TaskOutcome = Union[TaskSuccess, TaskFailure]


@dataclass
class BatchResult:
    """Outcomes of every job in a batch, in completion order."""

    total: int
    succeeded: List[str] = field(default_factory=list)
    failures: List[TaskFailure] = field(default_factory=list)
    successes: List[TaskSuccess] = field(default_factory=list)

    def record(self, outcome: TaskOutcome) -> None:
        if outcome.ok:
            self.successes.append(outcome)
            self.succeeded.append(outcome.destination_path)
        else:
            self.failures.append(outcome)

    @property
    def errors(self) -> List[BaseException]:
        return [failure.error for failure in self.failures]

    @property
    def settled(self) -> int:
        return len(self.succeeded) + len(self.failures)

    @property
    def is_complete(self) -> bool:
        return self.settled == self.total


@dataclass
class BatchOutcome:
    """Final state of one batch call.

    ``ok`` is True only when the engine started and no job failed.
    ``engine_error`` is set when the engine never started, in which case
    no job ran.
    """

    batch_id: str
    result: BatchResult
    started_at: datetime
    completed_at: Optional[datetime] = None
    engine_error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.engine_error is None and not self.result.failures

    @property
    def elapsed_seconds(self) -> float:
        if self.completed_at is None:
            return 0.0
        return (self.completed_at - self.started_at).total_seconds()
