"""Download every blob through a scratch directory into the persistent one."""

from __future__ import annotations

import shutil
import tempfile
import uuid
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional

from loguru import logger

from blobtour.adapters.storage.azure_blob import safe_name
from blobtour.pacing import Pacer, noop_pacer
from blobtour.settings import DOWNLOAD_SUFFIX
from blobtour.steps.lister import iter_blob_names
from blobtour.steps.results import ErrorKind, Stage, StepResult

if TYPE_CHECKING:  # pragma: no cover
    from azure.storage.blob.aio import ContainerClient


def download_file_name(blob_name: str) -> str:
    """``<blobName>_DOWNLOADED.txt``, flattened to a single path component."""
    return f"{safe_name(blob_name)}{DOWNLOAD_SUFFIX}"


def make_temp_dir(root: Optional[Path] = None) -> Path:
    """Create a fresh, uniquely named directory under ``root`` (system temp by default)."""
    base = Path(root) if root is not None else Path(tempfile.gettempdir())
    path = base / uuid.uuid4().hex
    path.mkdir(parents=True)
    return path


def copy_into(source_dir: Path, target_dir: Path) -> List[Path]:
    """Copy the regular files of ``source_dir`` into ``target_dir``, overwriting."""
    copied: List[Path] = []
    for src in sorted(Path(source_dir).iterdir()):
        if not src.is_file():
            continue
        dst = Path(target_dir) / src.name
        shutil.copyfile(src, dst)
        copied.append(dst)
    return copied


async def download_blobs(
    container: "ContainerClient",
    persistent_dir: Path,
    *,
    temp_root: Optional[Path] = None,
    pace: Pacer = noop_pacer,
) -> StepResult:
    """
    Downloads all blobs into a temporary directory, then copies them to ``persistent_dir``.

    The temporary directory is removed before returning, on success and on failure.
    Errors are reported and returned, never raised.
    """
    temp_dir = make_temp_dir(temp_root)
    downloaded: List[Path] = []
    copied: List[Path] = []
    try:
        print("Listing blobs...")
        async for name in iter_blob_names(container):
            print("\t" + name)
            blob = container.get_blob_client(name)
            target = temp_dir / download_file_name(name)
            print(f"\nDownloading blob to\n\t{target}\n")

            stream = await blob.download_blob()
            with target.open("wb") as handle:
                await stream.readinto(handle)
            downloaded.append(target)
            logger.debug("downloaded {} -> {}", name, target)

        print(f"\nCopying downloaded files to persistent directory: {persistent_dir}")
        copied = copy_into(temp_dir, persistent_dir)
        logger.info("downloaded {} blob(s), copied to {}", len(downloaded), persistent_dir)

        print(f"\nLocate the downloaded files in the temporary directory: {temp_dir}")
        print("The next step is to read the container metadata.")
        await pace("Press 'Enter' to continue.")
        return StepResult.success(
            Stage.DOWNLOADING,
            temp_dir=temp_dir,
            downloaded=downloaded,
            copied=copied,
        )
    except Exception as exc:
        print(f"Error downloading blobs: {exc}")
        logger.exception("download failed")
        return StepResult.failure(
            Stage.DOWNLOADING,
            ErrorKind.UNEXPECTED,
            exc,
            temp_dir=temp_dir,
            downloaded=downloaded,
            copied=copied,
        )
    finally:
        try:
            shutil.rmtree(temp_dir)
            logger.debug("removed temporary directory {}", temp_dir)
        except OSError:
            logger.exception("failed to remove temporary directory {}", temp_dir)


__all__ = ["copy_into", "download_blobs", "download_file_name", "make_temp_dir"]
