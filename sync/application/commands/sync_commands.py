"""
Commands of the sync engine.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

PUSH_LICENSE = "push_license"
DELETE_LICENSE = "delete_license"
PUSH_REQUEST = "push_request"
UPDATE_REQUEST = "update_request"
DELETE_REQUEST = "delete_request"

PUSH_ACTIONS = (PUSH_LICENSE, DELETE_LICENSE, PUSH_REQUEST, UPDATE_REQUEST, DELETE_REQUEST)


@dataclass
class PushChangeCommand:
    """
    Command to send one local change to the remote store.

    The current row is loaded when the command runs, so a retried push
    always sends the latest state.
    """

    action: str
    object_id: str


@dataclass
class AdminActionCommand:
    """Admin action received from a peer or the dashboard client."""

    action: Optional[str]
    secret: Optional[str]
    payload: Dict[str, Any] = field(default_factory=dict)
