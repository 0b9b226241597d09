"""
HTTP client for the admin actions of a remote instance.
"""
import logging
from typing import Any, Dict, Optional

import requests
from asgiref.sync import sync_to_async
from django.conf import settings

from core.domain.exceptions import InvalidSecretError, RemoteStoreError
from sync.ports.remote_store import RemoteStore

logger = logging.getLogger(__name__)


class HttpRemoteStore(RemoteStore):
    """RemoteStore that POSTs JSON actions with ``requests``."""

    def __init__(self, api_url: str, secret: str, timeout: Optional[float] = None):
        self.api_url = api_url
        self.secret = secret
        self.timeout = timeout or settings.LICENSE_SYNC_TIMEOUT_SECONDS

    async def call(self, action: str, **payload: Any) -> Dict[str, Any]:
        return await sync_to_async(self._post, thread_sensitive=False)(action, payload)

    def _post(self, action: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        body = {"action": action, "secret": self.secret, **payload}
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": "License-Manager-Sync/1.0",
        }
        try:
            response = requests.post(self.api_url, json=body, headers=headers, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.warning("Remote store unreachable: %s", e, extra={"action": action})
            raise RemoteStoreError(f"Remote store unreachable: {e}") from e

        content_type = response.headers.get("Content-Type", "")
        if "application/json" not in content_type:
            raise RemoteStoreError(
                f"Remote store answered {response.status_code} without JSON"
            )
        try:
            data = response.json()
        except ValueError as e:
            raise RemoteStoreError("Remote store returned malformed JSON") from e
        if not isinstance(data, dict):
            raise RemoteStoreError("Remote store returned an unexpected JSON document")

        error = data.get("error")
        if isinstance(error, dict):
            error = error.get("message")
        if response.status_code == 403 or error == InvalidSecretError().message:
            raise InvalidSecretError()
        if response.status_code >= 400 or error:
            raise RemoteStoreError(
                f"Remote store rejected {action}: {error or response.status_code}"
            )
        return data
