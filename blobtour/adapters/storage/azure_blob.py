"""
Thin helpers around the async Azure Blob Storage SDK.

Public API:
- create_service_client(storage=None, credential=None) -> BlobServiceClient (aio)
- open_service_client(storage=None) -> async context manager closing client and credential
- account_url(account) -> str
- safe_name(name) -> str
- summarize_env(storage=None) -> dict[str, bool]

Configuration precedence: connection string -> account/key -> DefaultAzureCredential.
"""

from __future__ import annotations

from contextlib import AsyncExitStack, asynccontextmanager
from typing import AsyncIterator, Dict, Optional

from azure.identity.aio import DefaultAzureCredential
from azure.storage.blob.aio import BlobServiceClient
from loguru import logger

from blobtour.core.exceptions import ConfigError
from blobtour.settings import StorageSettings, get_storage_settings

__all__ = [
    "create_service_client",
    "open_service_client",
    "account_url",
    "safe_name",
    "summarize_env",
]


def account_url(account: str) -> str:
    """
    Returns the public blob endpoint of a storage account.

    Args:
        account (str): The storage account name.

    Returns:
        str: The account URL.

    Raises:
        ConfigError: If the account name is empty.
    """
    account = (account or "").strip()
    if not account:
        raise ConfigError("storage account name is required to build the account URL")
    return f"https://{account}.blob.core.windows.net"


def safe_name(name: str) -> str:
    """
    Sanitizes a blob name for use as a single local file name.

    Args:
        name (str): The blob name.

    Returns:
        str: The sanitized name.
    """
    s = (name or "").strip().replace("/", "_").replace("\\", "_")
    return s or "unnamed"


def create_service_client(
    storage: Optional[StorageSettings] = None,
    *,
    credential: Optional[DefaultAzureCredential] = None,
) -> BlobServiceClient:
    """
    Builds an authenticated async BlobServiceClient.

    Args:
        storage (Optional[StorageSettings]): Credentials; read from the environment if omitted.
        credential (Optional[DefaultAzureCredential]): Token credential for the managed
            identity path. Created when omitted; the caller must close it either way.

    Returns:
        BlobServiceClient: An async service client. Callers own it and should close it.

    Raises:
        ConfigError: If no usable credential is configured.
    """
    storage = storage or get_storage_settings()

    if storage.connection_string:
        logger.debug("storage auth via connection string")
        return BlobServiceClient.from_connection_string(storage.connection_string)

    # Explicit account/key (common for local dev)
    if storage.account_name and storage.account_key:
        logger.debug("storage auth via shared key account={}", storage.account_name)
        return BlobServiceClient(
            account_url(storage.account_name),
            credential=storage.account_key,
        )

    # Managed Identity / DefaultAzureCredential path
    if storage.account_name:
        logger.debug("storage auth via DefaultAzureCredential account={}", storage.account_name)
        if credential is None:
            credential = DefaultAzureCredential(exclude_interactive_browser_credential=True)
        return BlobServiceClient(account_url(storage.account_name), credential=credential)

    raise ConfigError(
        "Azure storage not configured: set AZURE_STORAGE_CONNECTION_STRING "
        "or AZURE_STORAGE_ACCOUNT (with AZURE_STORAGE_ACCOUNT_KEY or a managed identity)."
    )


@asynccontextmanager
async def open_service_client(
    storage: Optional[StorageSettings] = None,
) -> AsyncIterator[BlobServiceClient]:
    """
    Opens a service client and closes it, plus any DefaultAzureCredential it owns, on exit.

    The client closes before the credential.
    """
    storage = storage or get_storage_settings()
    async with AsyncExitStack() as stack:
        credential = None
        if storage.account_name and not (storage.connection_string or storage.account_key):
            credential = DefaultAzureCredential(exclude_interactive_browser_credential=True)
            stack.push_async_callback(credential.close)
        client = create_service_client(storage, credential=credential)
        yield await stack.enter_async_context(client)


def summarize_env(storage: Optional[StorageSettings] = None) -> Dict[str, bool]:
    """Report which storage settings are present, without exposing their values."""
    storage = storage or get_storage_settings()
    return {
        "AZURE_STORAGE_CONNECTION_STRING": storage.has_connection_string,
        "AZURE_STORAGE_ACCOUNT": bool(storage.account_name),
        "AZURE_STORAGE_ACCOUNT_KEY": bool(storage.account_key),
    }
