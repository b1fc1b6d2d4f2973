from blobtour.steps.downloader import download_blobs
from blobtour.steps.lister import list_blobs
from blobtour.steps.metadata import read_container_metadata
from blobtour.steps.provisioner import create_container
from blobtour.steps.results import ErrorKind, Stage, StepResult, StepStatus
from blobtour.steps.uploader import upload_generated_file

__all__ = [
    "create_container",
    "upload_generated_file",
    "list_blobs",
    "download_blobs",
    "read_container_metadata",
    "ErrorKind",
    "Stage",
    "StepResult",
    "StepStatus",
]
