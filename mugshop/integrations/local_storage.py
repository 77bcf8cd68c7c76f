"""
Local Storage Client - keeps uploads on the local filesystem
"""
import asyncio
import os
from typing import Optional
import logging

from .storage_base import BaseStorageClient

logger = logging.getLogger(__name__)


class LocalStorageClient(BaseStorageClient):
    """
    Writes files under `root_dir` and serves them from
    `<public_base_url>/uploads/<key>` (mounted as static files by main.py)
    """
    BACKEND_NAME = "local"

    def __init__(self, root_dir: str, public_base_url: str):
        self.root_dir = root_dir
        self.public_base_url = public_base_url.rstrip("/")

    def path_for(self, key: str) -> str:
        return os.path.join(self.root_dir, *self.normalize_key(key).split("/"))

    def _write(self, path: str, data: bytes) -> None:
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "wb") as f:
            f.write(data)

    async def put(self, key: str, data: bytes, content_type: Optional[str] = None) -> str:
        key = self.normalize_key(key)
        path = self.path_for(key)

        await asyncio.to_thread(self._write, path, data)

        logger.info(f"Stored {len(data)} bytes at {path}")
        return f"{self.public_base_url}/uploads/{key}"
