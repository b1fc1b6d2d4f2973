from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class Stage(str, Enum):
    """Forward-only states of a walkthrough run."""

    PROVISIONING = "provisioning"
    UPLOADING = "uploading"
    LISTING = "listing"
    DOWNLOADING = "downloading"
    READING_METADATA = "reading_metadata"
    DONE = "done"


class StepStatus(str, Enum):
    OK = "ok"
    FAILED = "failed"


class ErrorKind(str, Enum):
    DIRECTORY_NOT_FOUND = "directory_not_found"
    UNEXPECTED = "unexpected"
    REQUEST_FAILED = "request_failed"


@dataclass
class StepResult:
    """Outcome of a single walkthrough step."""

    stage: Stage
    status: StepStatus = StepStatus.OK
    error_kind: Optional[ErrorKind] = None
    error: Optional[str] = None
    status_code: Optional[int] = None
    error_code: Optional[str] = None
    data: Dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status is StepStatus.OK

    @classmethod
    def success(cls, stage: Stage, **data: Any) -> "StepResult":
        return cls(stage=stage, data=data)

    @classmethod
    def failure(
        cls,
        stage: Stage,
        kind: ErrorKind,
        exc: BaseException,
        **data: Any,
    ) -> "StepResult":
        return cls(
            stage=stage,
            status=StepStatus.FAILED,
            error_kind=kind,
            error=str(exc),
            data=data,
        )


__all__ = ["Stage", "StepStatus", "ErrorKind", "StepResult"]
