"""Print the user-defined metadata of a container."""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict

from azure.core.exceptions import HttpResponseError
from loguru import logger

from blobtour.pacing import Pacer, noop_pacer
from blobtour.steps.results import ErrorKind, Stage, StepResult, StepStatus

if TYPE_CHECKING:  # pragma: no cover
    from azure.storage.blob.aio import ContainerClient


async def read_container_metadata(
    container: "ContainerClient",
    *,
    pace: Pacer = noop_pacer,
) -> StepResult:
    """
    Fetches container properties and prints each metadata key/value pair.

    Only request failures reported by the service are handled here; anything else
    propagates.
    """
    try:
        properties = await container.get_container_properties()
    except HttpResponseError as exc:
        error_code = getattr(exc, "error_code", None)
        print(f"HTTP error code {exc.status_code}: {error_code}")
        print(exc.message)
        logger.warning(
            "metadata read failed status={} code={}", exc.status_code, error_code
        )
        await pace("")
        return StepResult(
            stage=Stage.READING_METADATA,
            status=StepStatus.FAILED,
            error_kind=ErrorKind.REQUEST_FAILED,
            error=exc.message,
            status_code=exc.status_code,
            error_code=error_code,
        )

    metadata: Dict[str, str] = dict(properties.metadata or {})
    print("Container metadata:")
    for key, value in metadata.items():
        print(f"\tKey: {key}")
        print(f"\tValue: {value}")
    logger.info("read container metadata entries={}", len(metadata))
    return StepResult.success(Stage.READING_METADATA, metadata=metadata)


__all__ = ["read_container_metadata"]
