"""Generate a local text file and upload it as a blob."""

from __future__ import annotations

import uuid
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from blobtour.pacing import Pacer, noop_pacer
from blobtour.steps.results import ErrorKind, Stage, StepResult

if TYPE_CHECKING:  # pragma: no cover
    from azure.storage.blob.aio import ContainerClient


def ensure_local_dir(path: Path) -> Path:
    """Create ``path`` (and parents) if missing. Existing contents are left alone."""
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def generate_file_name(prefix: str = "wtfile") -> str:
    return f"{prefix}{uuid.uuid4()}.txt"


async def upload_generated_file(
    container: "ContainerClient",
    local_dir: Path,
    *,
    file_prefix: str = "wtfile",
    content: str = "Hello, World!",
    pace: Pacer = noop_pacer,
) -> StepResult:
    """
    Writes ``content`` to a fresh file under ``local_dir`` and uploads it.

    The blob is named after the file. Errors are reported and returned, never raised.
    """
    try:
        ensure_local_dir(local_dir)

        file_name = generate_file_name(file_prefix)
        local_path = Path(local_dir) / file_name
        local_path.write_text(content, encoding="utf-8")

        blob = container.get_blob_client(file_name)
        print(f"Uploading to Blob storage as blob:\n\t {blob.url}\n")

        with local_path.open("rb") as stream:
            await blob.upload_blob(stream)

        logger.info("uploaded {} ({} bytes)", file_name, local_path.stat().st_size)
        print("\nThe file was uploaded. We'll verify by listing the blobs next.")
        await pace("Press 'Enter' to continue.")
        return StepResult.success(
            Stage.UPLOADING,
            blob_name=file_name,
            local_path=local_path,
            url=blob.url,
        )
    except (FileNotFoundError, NotADirectoryError) as exc:
        print(f"Error: {exc}")
        logger.warning("upload skipped, directory not found: {}", exc)
        return StepResult.failure(Stage.UPLOADING, ErrorKind.DIRECTORY_NOT_FOUND, exc)
    except Exception as exc:
        print(f"Unexpected error: {exc}")
        logger.exception("upload failed")
        return StepResult.failure(Stage.UPLOADING, ErrorKind.UNEXPECTED, exc)


__all__ = ["ensure_local_dir", "generate_file_name", "upload_generated_file"]
