class BlobTourError(Exception):
    """Base class for all blobtour exceptions."""


class ConfigError(BlobTourError):
    """Raised for missing/malformed configuration."""


class ContainerNameError(BlobTourError, ValueError):
    """Raised when a generated container name breaks Azure naming rules."""


__all__ = [
    "BlobTourError",
    "ConfigError",
    "ContainerNameError",
]
