"""Create the uniquely named container the rest of the walkthrough works in."""

from __future__ import annotations

import re
import uuid
from typing import TYPE_CHECKING

from loguru import logger

from blobtour.core.exceptions import ContainerNameError
from blobtour.pacing import Pacer, noop_pacer

if TYPE_CHECKING:  # pragma: no cover
    from azure.storage.blob.aio import BlobServiceClient, ContainerClient

# 3-63 chars, lowercase letters/digits, single hyphens, no leading/trailing hyphen.
_CONTAINER_NAME_RE = re.compile(r"^[a-z0-9](?!.*--)[a-z0-9-]{1,61}[a-z0-9]$")


def validate_container_name(name: str) -> str:
    """
    Checks a container name against Azure naming rules.

    Args:
        name (str): The candidate name.

    Returns:
        str: The same name.

    Raises:
        ContainerNameError: If the name is not a legal container name.
    """
    if not isinstance(name, str) or not _CONTAINER_NAME_RE.match(name):
        raise ContainerNameError(f"invalid container name {name!r}")
    return name


def generate_container_name(prefix: str = "wtblob") -> str:
    """Return ``prefix`` followed by a fresh UUID4."""
    return validate_container_name(f"{prefix}{uuid.uuid4()}")


async def create_container(
    service: "BlobServiceClient",
    *,
    prefix: str = "wtblob",
    pace: Pacer = noop_pacer,
) -> "ContainerClient":
    """
    Creates a new container and returns its client.

    Failures are not caught: without a container nothing else can run.
    """
    container_name = generate_container_name(prefix)
    container = await service.create_container(container_name)
    logger.info("created container {}", container_name)

    print(
        f"A container named '{container_name}' has been created. "
        "\nTake a minute and verify in the portal."
        "\nNext a file will be created and uploaded to the container."
    )
    await pace("Press 'Enter' to continue.")
    return container


__all__ = ["create_container", "generate_container_name", "validate_container_name"]
