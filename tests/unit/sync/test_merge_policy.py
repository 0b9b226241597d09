"""
Unit tests for the last-writer-wins merge policy.
"""

from datetime import datetime, timedelta, timezone

import pytest

from sync.domain.merge import LastWriterWinsPolicy, MergeDecision, PullReport, TableReport

NOW = datetime(2026, 5, 1, 12, 0, tzinfo=timezone.utc)


class TestLastWriterWinsPolicy:
    """Tests for LastWriterWinsPolicy."""

    @pytest.fixture
    def policy(self):
        return LastWriterWinsPolicy()

    def test_missing_locally_is_inserted(self, policy):
        assert policy.decide(None, NOW, exists_locally=False) is MergeDecision.INSERT

    def test_newer_remote_wins(self, policy):
        assert policy.decide(NOW, NOW + timedelta(seconds=1)) is MergeDecision.UPDATE

    def test_older_remote_is_ignored(self, policy):
        assert policy.decide(NOW, NOW - timedelta(days=1)) is MergeDecision.KEEP

    def test_tie_keeps_local(self, policy):
        assert policy.decide(NOW, NOW) is MergeDecision.KEEP

    def test_unstamped_remote_wins(self, policy):
        """Test that rows from peers without updatedAt overwrite the local copy."""
        assert policy.decide(NOW, None) is MergeDecision.UPDATE


class TestPullReport:
    """Tests for the pull report counters."""

    def test_counts(self):
        table = TableReport()
        for decision in (MergeDecision.INSERT, MergeDecision.UPDATE, MergeDecision.KEEP):
            table.count(decision)
        table.count(MergeDecision.INSERT)

        assert table.to_dict() == {"inserted": 2, "updated": 1, "skipped": 1}

    def test_changed_sums_inserts_and_updates(self):
        report = PullReport(
            licenses=TableReport(inserted=1, updated=2, skipped=5),
            logs=TableReport(inserted=3),
        )
        assert report.changed == 6
        assert report.to_dict()["requests"] == {"inserted": 0, "updated": 0, "skipped": 0}
