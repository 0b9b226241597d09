"""
Last-writer-wins merge of remote rows into the local store.
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, Optional


class MergeDecision(Enum):
    INSERT = "insert"
    UPDATE = "update"
    KEEP = "keep"


class LastWriterWinsPolicy:
    """
    Decides what to do with one remote row.

    A row missing locally is inserted. When the remote row carries an
    ``updatedAt`` stamp the newer side wins and ties keep the local row.
    A remote row without a stamp always wins.
    """

    def decide(
        self,
        local_updated_at: Optional[datetime],
        remote_updated_at: Optional[datetime],
        exists_locally: bool = True,
    ) -> MergeDecision:
        if not exists_locally:
            return MergeDecision.INSERT
        if remote_updated_at is None or local_updated_at is None:
            return MergeDecision.UPDATE
        if remote_updated_at > local_updated_at:
            return MergeDecision.UPDATE
        return MergeDecision.KEEP


@dataclass
class TableReport:
    inserted: int = 0
    updated: int = 0
    skipped: int = 0

    def count(self, decision: MergeDecision) -> None:
        if decision is MergeDecision.INSERT:
            self.inserted += 1
        elif decision is MergeDecision.UPDATE:
            self.updated += 1
        else:
            self.skipped += 1

    def to_dict(self) -> Dict[str, int]:
        return {"inserted": self.inserted, "updated": self.updated, "skipped": self.skipped}


@dataclass
class PullReport:
    """Per-table counts of one pull."""

    licenses: TableReport = field(default_factory=TableReport)
    requests: TableReport = field(default_factory=TableReport)
    logs: TableReport = field(default_factory=TableReport)

    @property
    def changed(self) -> int:
        return sum(
            table.inserted + table.updated for table in (self.licenses, self.requests, self.logs)
        )

    def to_dict(self) -> Dict[str, Dict[str, int]]:
        return {
            "licenses": self.licenses.to_dict(),
            "requests": self.requests.to_dict(),
            "logs": self.logs.to_dict(),
        }
