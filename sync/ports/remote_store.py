"""
Remote store port (interface).

The remote is another instance of this service reached through its
admin-action endpoint.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict


class RemoteStore(ABC):
    """Client for the admin actions of a remote instance."""

    @abstractmethod
    async def call(self, action: str, **payload: Any) -> Dict[str, Any]:
        """
        Run an admin action on the remote.

        Args:
            action: Admin action name, e.g. ``sync_admin``
            payload: Action arguments sent next to ``action`` and ``secret``

        Returns:
            Decoded JSON response

        Raises:
            InvalidSecretError: If the remote rejected the shared secret
            RemoteStoreError: On transport errors, non-JSON or error responses
        """
