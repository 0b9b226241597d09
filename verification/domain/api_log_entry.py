"""
ApiLogEntry domain entity.

Immutable record of one verification call.
"""
import json
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from core.domain.clock import utc_now


@dataclass(frozen=True)
class ApiLogEntry:
    """
    ApiLogEntry domain entity.

    ``response_body`` holds the JSON text exactly as it was returned so
    that entries pulled from another instance round-trip unchanged.
    """

    id: str
    timestamp: datetime
    method: str
    endpoint: str
    source_url: str
    provided_key: str
    response_status: int
    response_body: str

    @classmethod
    def record(
        cls,
        source_url: str,
        provided_key: Optional[str],
        response_status: int,
        response_body: Any,
        endpoint: str = "/api/v1/license/verify",
        method: str = "POST",
    ) -> "ApiLogEntry":
        body = response_body if isinstance(response_body, str) else json.dumps(response_body)
        return cls(
            id=f"log_{uuid.uuid4().hex[:16]}",
            timestamp=utc_now(),
            method=method,
            endpoint=endpoint,
            source_url=source_url,
            provided_key=provided_key or "",
            response_status=response_status,
            response_body=body,
        )

    def parsed_body(self) -> Any:
        try:
            return json.loads(self.response_body)
        except ValueError:
            return self.response_body
