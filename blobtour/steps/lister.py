"""Enumerate and print the blobs of a container."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, List

from loguru import logger

from blobtour.pacing import Pacer, noop_pacer
from blobtour.steps.results import Stage, StepResult

if TYPE_CHECKING:  # pragma: no cover
    from azure.storage.blob.aio import ContainerClient


async def iter_blob_names(container: "ContainerClient"):
    """Yield blob names as the service returns them. Each call re-enumerates."""
    async for item in container.list_blobs():
        yield item.name


async def list_blobs(
    container: "ContainerClient",
    directory: Path,
    *,
    pace: Pacer = noop_pacer,
) -> StepResult:
    """Print every blob name. Listing failures propagate to the caller."""
    print("Listing blobs...")
    names: List[str] = []
    async for name in iter_blob_names(container):
        print("\t" + name)
        names.append(name)
    logger.info("listed {} blob(s)", len(names))

    print(
        f"\nYou can also verify by looking inside the container in the portal "
        f"or under {directory}."
        "\nNext the blob will be downloaded with an altered file name."
    )
    await pace("Press 'Enter' to continue.")
    return StepResult.success(Stage.LISTING, names=names)


__all__ = ["iter_blob_names", "list_blobs"]
