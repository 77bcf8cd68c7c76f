"""
HTTP Storage Client - uploads through a storage proxy API
"""
from typing import Optional
import logging

import httpx

from mugshop.core.exceptions import PersistenceUnavailableError
from .storage_base import BaseStorageClient

logger = logging.getLogger(__name__)


class HttpStorageClient(BaseStorageClient):
    """
    POST {api_url}/v1/storage/upload?path=<key> with a multipart `file`
    field; the proxy answers with JSON containing the object `url`.
    """
    BACKEND_NAME = "http"

    def __init__(
        self,
        api_url: str,
        api_key: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_url = api_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.transport = transport

    def _build_headers(self) -> dict:
        headers = {}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def put(self, key: str, data: bytes, content_type: Optional[str] = None) -> str:
        key = self.normalize_key(key)
        file_name = key.rsplit("/", 1)[-1]

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    f"{self.api_url}/v1/storage/upload",
                    params={"path": key},
                    headers=self._build_headers(),
                    files={"file": (file_name, data, content_type or "application/octet-stream")},
                )
        except httpx.RequestError as e:
            logger.error(f"Storage request error for {key}: {e}")
            raise PersistenceUnavailableError(f"Storage service unreachable: {e}") from e

        if response.status_code >= 400:
            logger.error(f"Storage upload failed ({response.status_code}): {response.text}")
            raise PersistenceUnavailableError(f"Storage upload failed with status {response.status_code}")

        url = response.json().get("url")
        if not url:
            raise PersistenceUnavailableError("Storage service returned no URL")

        logger.info(f"Uploaded {len(data)} bytes to {key}")
        return url
