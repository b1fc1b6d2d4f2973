"""Drive the walkthrough steps in order against one container."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional

from loguru import logger

from blobtour.logging_utils import logging_context
from blobtour.pacing import Pacer, make_pacer
from blobtour.settings import WalkthroughSettings
from blobtour.steps import (
    Stage,
    StepResult,
    create_container,
    download_blobs,
    list_blobs,
    read_container_metadata,
    upload_generated_file,
)

if TYPE_CHECKING:  # pragma: no cover
    from azure.storage.blob.aio import BlobServiceClient


@dataclass
class WalkthroughReport:
    """What happened during one run."""

    run_id: str
    container_name: Optional[str] = None
    stage: Stage = Stage.PROVISIONING
    results: List[StepResult] = field(default_factory=list)

    @property
    def failed_stages(self) -> List[Stage]:
        return [r.stage for r in self.results if not r.ok]

    def result_for(self, stage: Stage) -> Optional[StepResult]:
        for result in self.results:
            if result.stage is stage:
                return result
        return None


def _record(report: WalkthroughReport, result: StepResult) -> None:
    report.results.append(result)
    if result.ok:
        logger.info("stage {} ok", result.stage.value)
    else:
        # Absorbed failures do not stop the run.
        logger.warning(
            "stage {} failed kind={} error={}; continuing",
            result.stage.value,
            result.error_kind.value if result.error_kind else "-",
            result.error,
        )


async def run_walkthrough(
    service: "BlobServiceClient",
    settings: WalkthroughSettings,
    *,
    pace: Optional[Pacer] = None,
) -> WalkthroughReport:
    """
    Runs provisioning, upload, listing, download and metadata steps in sequence.

    Provisioning and listing errors propagate; the other steps report failures in the
    returned report and the run carries on.
    """
    pace = pace or make_pacer(settings.interactive)
    report = WalkthroughReport(run_id=uuid.uuid4().hex[:12])

    with logging_context(run_id=report.run_id, stage=Stage.PROVISIONING.value):
        container = await create_container(
            service, prefix=settings.container_prefix, pace=pace
        )
    report.container_name = container.container_name
    report.results.append(
        StepResult.success(Stage.PROVISIONING, container_name=container.container_name)
    )

    report.stage = Stage.UPLOADING
    with logging_context(run_id=report.run_id, stage=report.stage.value):
        _record(
            report,
            await upload_generated_file(
                container,
                settings.local_dir,
                file_prefix=settings.file_prefix,
                content=settings.file_content,
                pace=pace,
            ),
        )

    report.stage = Stage.LISTING
    with logging_context(run_id=report.run_id, stage=report.stage.value):
        _record(report, await list_blobs(container, settings.local_dir, pace=pace))

    report.stage = Stage.DOWNLOADING
    with logging_context(run_id=report.run_id, stage=report.stage.value):
        _record(
            report,
            await download_blobs(
                container,
                settings.local_dir,
                temp_root=settings.temp_root,
                pace=pace,
            ),
        )

    report.stage = Stage.READING_METADATA
    with logging_context(run_id=report.run_id, stage=report.stage.value):
        _record(report, await read_container_metadata(container, pace=pace))

    report.stage = Stage.DONE
    if report.failed_stages:
        logger.warning(
            "walkthrough finished with failures: {}",
            ",".join(s.value for s in report.failed_stages),
        )
    else:
        logger.info("walkthrough finished container={}", report.container_name)
    return report


__all__ = ["WalkthroughReport", "run_walkthrough"]
