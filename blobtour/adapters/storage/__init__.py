# blobtour/adapters/storage/__init__.py
"""Lazy export surface for storage adapter."""

__all__ = [
    "create_service_client",
    "open_service_client",
    "account_url",
    "safe_name",
    "summarize_env",
]


def __getattr__(name: str):
    if name in __all__:
        from . import azure_blob as _impl  # local import = lazy load
        return getattr(_impl, name)
    raise AttributeError(name)
