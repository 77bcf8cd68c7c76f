"""
Base Storage Client - Abstract base class for design file storage
"""
from abc import ABC, abstractmethod
from typing import Optional
import logging

from mugshop.core.exceptions import ValidationFailedError

logger = logging.getLogger(__name__)


class BaseStorageClient(ABC):
    """
    Object storage for uploaded artwork. Implementations return the public
    URL of the stored object.
    """
    BACKEND_NAME: str = "base"

    @abstractmethod
    async def put(self, key: str, data: bytes, content_type: Optional[str] = None) -> str:
        """
        Store bytes under key and return the object's URL
        """
        pass

    @staticmethod
    def normalize_key(key: str) -> str:
        """Strip leading slashes and refuse path traversal"""
        key = key.replace("\\", "/").lstrip("/")
        parts = [part for part in key.split("/") if part not in ("", ".")]
        if any(part == ".." for part in parts):
            raise ValidationFailedError(f"Invalid storage key: {key}")
        return "/".join(parts)
