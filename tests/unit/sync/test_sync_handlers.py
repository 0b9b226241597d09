"""
Unit tests for the pull and push handlers of the sync engine.
"""

from dataclasses import replace
from datetime import timedelta

import pytest

from core.domain.exceptions import (
    InvalidSecretError,
    RemoteStoreError,
    SyncNotConfiguredError,
    UnknownActionError,
)
from core.domain.value_objects import LicenseStatus
from sync.application.commands.sync_commands import (
    DELETE_LICENSE,
    DELETE_REQUEST,
    PUSH_LICENSE,
    PUSH_REQUEST,
    UPDATE_REQUEST,
    PushChangeCommand,
)
from sync.application.handlers.pull_from_remote_handler import PullFromRemoteHandler
from sync.application.handlers.push_change_handler import PushChangeHandler
from sync.application.services.sync_settings_service import SyncSettingsService
from sync.domain.setting_keys import ADMIN_SECRET, API_URL
from sync.infrastructure.wire import encode_license, encode_log, encode_request
from verification.domain.api_log_entry import ApiLogEntry

REMOTE_URL = "https://remote.example.com/api/v1/license/verify"


@pytest.fixture
def configured(setting_repo):
    setting_repo.values[API_URL] = REMOTE_URL
    setting_repo.values[ADMIN_SECRET] = "peer-secret"
    return SyncSettingsService(setting_repo)


@pytest.mark.asyncio
class TestSyncSettingsService:
    """Tests for SyncSettingsService."""

    async def test_secret_falls_back_to_django_settings(self, setting_repo):
        service = SyncSettingsService(setting_repo)
        assert await service.admin_secret() == "test-secret"

        await service.save(ADMIN_SECRET, "  stored  ")
        assert await service.admin_secret() == "stored"

    async def test_no_remote_without_url(self, setting_repo, fake_remote_factory, fake_remote):
        service = SyncSettingsService(setting_repo)
        assert await service.remote_store(fake_remote_factory(fake_remote())) is None

    async def test_remote_gets_url_and_secret(self, configured, fake_remote_factory, fake_remote):
        store = fake_remote()
        assert await configured.remote_store(fake_remote_factory(store)) is store
        assert store.api_url == REMOTE_URL
        assert store.secret == "peer-secret"

    @pytest.mark.parametrize("key", ["", "   ", "k" * 101])
    async def test_invalid_key(self, setting_repo, key):
        with pytest.raises(ValueError):
            await SyncSettingsService(setting_repo).save(key, "x")


@pytest.mark.asyncio
class TestPullFromRemoteHandler:
    """Tests for PullFromRemoteHandler."""

    def build(self, settings_service, store, factory, license_repo, request_repo, api_log_repo):
        return PullFromRemoteHandler(
            settings_service, factory(store), license_repo, request_repo, api_log_repo
        )

    async def test_not_configured(
        self, setting_repo, fake_remote, fake_remote_factory, license_repo, request_repo, api_log_repo
    ):
        handler = self.build(
            SyncSettingsService(setting_repo),
            fake_remote(),
            fake_remote_factory,
            license_repo,
            request_repo,
            api_log_repo,
        )
        with pytest.raises(SyncNotConfiguredError):
            await handler.handle()

    async def test_inserts_remote_rows(
        self,
        configured,
        fake_remote,
        fake_remote_factory,
        license_repo,
        request_repo,
        api_log_repo,
        make_license,
        make_request,
    ):
        """Test that rows only the remote knows are imported."""
        license = make_license(domain="remote.example.com")
        request = make_request(domain="pending.example.com")
        entry = ApiLogEntry.record("remote.example.com", license.key, 200, {"status": "valid"})
        store = fake_remote(
            responses={
                "sync_admin": {
                    "status": "ok",
                    "licenses": [encode_license(license)],
                    "requests": [encode_request(request)],
                    "logs": [encode_log(entry)],
                }
            }
        )
        handler = self.build(
            configured, store, fake_remote_factory, license_repo, request_repo, api_log_repo
        )

        report = await handler.handle()

        assert store.calls == [("sync_admin", {})]
        assert report.licenses.inserted == 1
        assert report.requests.inserted == 1
        assert report.logs.inserted == 1
        assert report.changed == 3
        assert (await license_repo.find_by_id(license.id)).key == license.key
        assert await request_repo.find_by_id(request.id) is not None
        assert await api_log_repo.exists(entry.id)

    async def test_last_writer_wins(
        self,
        configured,
        fake_remote,
        fake_remote_factory,
        license_repo,
        request_repo,
        api_log_repo,
        make_license,
    ):
        """Test that the newer side of each row wins."""
        base = make_license(domain="a.example.com")
        newer_remote = replace(
            base, organization="Remote Edit", updated_at=base.updated_at + timedelta(minutes=5)
        )
        other = make_license(domain="b.example.com")
        stale_remote = replace(
            other, organization="Stale", updated_at=other.updated_at - timedelta(minutes=5)
        )
        await license_repo.save(base)
        await license_repo.save(other)

        store = fake_remote(
            responses={
                "sync_admin": {
                    "licenses": [encode_license(newer_remote), encode_license(stale_remote)]
                }
            }
        )
        report = await self.build(
            configured, store, fake_remote_factory, license_repo, request_repo, api_log_repo
        ).handle()

        assert (await license_repo.find_by_id(base.id)).organization == "Remote Edit"
        assert (await license_repo.find_by_id(other.id)).organization == "Example Fire Brigade"
        assert report.licenses.to_dict() == {"inserted": 0, "updated": 1, "skipped": 1}

    async def test_skips_bad_rows_and_key_conflicts(
        self,
        configured,
        fake_remote,
        fake_remote_factory,
        license_repo,
        request_repo,
        api_log_repo,
        make_license,
    ):
        local = await license_repo.save(make_license(domain="a.example.com"))
        clash = replace(
            make_license(domain="c.example.com"), key=local.key
        )
        store = fake_remote(
            responses={
                "sync_admin": {
                    "licenses": [{"id": "broken"}, encode_license(clash)],
                    "requests": "not a list",
                    "logs": [{"id": "log_x"}],
                }
            }
        )

        report = await self.build(
            configured, store, fake_remote_factory, license_repo, request_repo, api_log_repo
        ).handle()

        assert report.licenses.skipped == 2
        assert report.logs.skipped == 1
        assert report.changed == 0
        assert list(license_repo.rows) == [local.id]

    async def test_local_only_rows_are_kept(
        self,
        configured,
        fake_remote,
        fake_remote_factory,
        license_repo,
        request_repo,
        api_log_repo,
        make_license,
    ):
        local = await license_repo.save(make_license())
        store = fake_remote(responses={"sync_admin": {"licenses": [], "requests": [], "logs": []}})

        await self.build(
            configured, store, fake_remote_factory, license_repo, request_repo, api_log_repo
        ).handle()

        assert await license_repo.exists(local.id)

    async def test_same_domain_different_id_is_imported(
        self,
        configured,
        fake_remote,
        fake_remote_factory,
        license_repo,
        request_repo,
        api_log_repo,
        make_license,
    ):
        """Test that a remote license sharing a local domain is merged by id, not rejected."""
        local = await license_repo.save(make_license(domain="shared.example.com"))
        remote = make_license(domain="shared.example.com")
        store = fake_remote(
            responses={
                "sync_admin": {"licenses": [encode_license(remote)], "requests": [], "logs": []}
            }
        )

        report = await self.build(
            configured, store, fake_remote_factory, license_repo, request_repo, api_log_repo
        ).handle()

        assert report.licenses.inserted == 1
        assert await license_repo.exists(local.id)
        assert await license_repo.exists(remote.id)

    async def test_known_logs_are_not_duplicated(
        self,
        configured,
        fake_remote,
        fake_remote_factory,
        license_repo,
        request_repo,
        api_log_repo,
    ):
        entry = await api_log_repo.append(ApiLogEntry.record("a.example.com", None, 201, {}))
        store = fake_remote(responses={"sync_admin": {"logs": [encode_log(entry)]}})

        report = await self.build(
            configured, store, fake_remote_factory, license_repo, request_repo, api_log_repo
        ).handle()

        assert report.logs.skipped == 1
        assert len(api_log_repo.entries) == 1

    async def test_remote_failure_propagates(
        self,
        configured,
        fake_remote,
        fake_remote_factory,
        license_repo,
        request_repo,
        api_log_repo,
    ):
        store = fake_remote(error=InvalidSecretError())
        handler = self.build(
            configured, store, fake_remote_factory, license_repo, request_repo, api_log_repo
        )
        with pytest.raises(InvalidSecretError):
            await handler.handle()


@pytest.mark.asyncio
class TestPushChangeHandler:
    """Tests for PushChangeHandler."""

    def build(self, settings_service, store, factory, license_repo, request_repo):
        return PushChangeHandler(settings_service, factory(store), license_repo, request_repo)

    async def test_push_license(
        self, configured, fake_remote, fake_remote_factory, license_repo, request_repo, make_license
    ):
        license = await license_repo.save(make_license().revoke())
        store = fake_remote()

        pushed = await self.build(
            configured, store, fake_remote_factory, license_repo, request_repo
        ).handle(PushChangeCommand(PUSH_LICENSE, license.id))

        assert pushed is True
        action, payload = store.calls[0]
        assert action == PUSH_LICENSE
        assert payload["license"]["id"] == license.id
        assert payload["license"]["status"] == LicenseStatus.SUSPENDED.value

    @pytest.mark.parametrize("action", [PUSH_REQUEST, UPDATE_REQUEST])
    async def test_push_request(
        self,
        action,
        configured,
        fake_remote,
        fake_remote_factory,
        license_repo,
        request_repo,
        make_request,
    ):
        request = await request_repo.save(make_request())
        store = fake_remote()

        await self.build(
            configured, store, fake_remote_factory, license_repo, request_repo
        ).handle(PushChangeCommand(action, request.id))

        assert store.calls == [(action, {"request": encode_request(request)})]

    @pytest.mark.parametrize("action", [DELETE_LICENSE, DELETE_REQUEST])
    async def test_push_delete(
        self, action, configured, fake_remote, fake_remote_factory, license_repo, request_repo
    ):
        """Test that deletes send only the id."""
        store = fake_remote()

        pushed = await self.build(
            configured, store, fake_remote_factory, license_repo, request_repo
        ).handle(PushChangeCommand(action, "gone_1"))

        assert pushed is True
        assert store.calls == [(action, {"id": "gone_1"})]

    async def test_skipped_without_remote(
        self, setting_repo, fake_remote, fake_remote_factory, license_repo, request_repo
    ):
        store = fake_remote()
        pushed = await self.build(
            SyncSettingsService(setting_repo), store, fake_remote_factory, license_repo, request_repo
        ).handle(PushChangeCommand(DELETE_LICENSE, "lic_1"))

        assert pushed is False
        assert store.calls == []

    async def test_skipped_when_row_is_gone(
        self, configured, fake_remote, fake_remote_factory, license_repo, request_repo
    ):
        store = fake_remote()
        pushed = await self.build(
            configured, store, fake_remote_factory, license_repo, request_repo
        ).handle(PushChangeCommand(PUSH_LICENSE, "lic_missing"))

        assert pushed is False
        assert store.calls == []

    async def test_unknown_action(
        self, configured, fake_remote, fake_remote_factory, license_repo, request_repo
    ):
        with pytest.raises(UnknownActionError):
            await self.build(
                configured, fake_remote(), fake_remote_factory, license_repo, request_repo
            ).handle(PushChangeCommand("sync_admin", "x"))

    async def test_remote_error_propagates(
        self, configured, fake_remote, fake_remote_factory, license_repo, request_repo
    ):
        store = fake_remote(error=RemoteStoreError("down"))
        with pytest.raises(RemoteStoreError):
            await self.build(
                configured, store, fake_remote_factory, license_repo, request_repo
            ).handle(PushChangeCommand(DELETE_REQUEST, "req_1"))
