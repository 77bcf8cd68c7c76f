# Storage Integrations Package
from functools import lru_cache

from mugshop.core import settings
from .storage_base import BaseStorageClient
from .local_storage import LocalStorageClient
from .http_storage import HttpStorageClient


@lru_cache()
def get_storage_client() -> BaseStorageClient:
    """Storage client for the configured STORAGE_BACKEND"""
    backend = settings.STORAGE_BACKEND.lower()
    if backend == "http":
        if not settings.STORAGE_API_URL:
            raise ValueError("STORAGE_API_URL is required when STORAGE_BACKEND=http")
        return HttpStorageClient(settings.STORAGE_API_URL, settings.STORAGE_API_KEY)
    if backend == "local":
        return LocalStorageClient(settings.UPLOAD_DIR, settings.PUBLIC_BASE_URL)
    raise ValueError(f"Unknown STORAGE_BACKEND: {settings.STORAGE_BACKEND}")


__all__ = [
    "BaseStorageClient",
    "LocalStorageClient",
    "HttpStorageClient",
    "get_storage_client",
]
