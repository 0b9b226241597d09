"""
Pytest configuration and shared fixtures.

Handler tests run against the in-memory repositories defined here;
repository and API tests use the Django database.
"""

from datetime import date, timedelta
from typing import Dict, List, Optional

import pytest
from django.core.cache import cache

from catalog.domain.module_definition import DEFAULT_MODULES, ModuleDefinition
from catalog.ports.module_repository import ModuleRepository
from core.domain.clock import utc_today
from core.domain.events import DomainEvent, EventBus, EventHandler
from licenses.domain.license import License
from licenses.domain.license_request import LicenseRequest
from licenses.ports.license_repository import LicenseRepository
from licenses.ports.license_request_repository import LicenseRequestRepository
from sync.ports.remote_store import RemoteStore
from sync.ports.setting_repository import SettingRepository
from verification.domain.api_log_entry import ApiLogEntry
from verification.ports.api_log_repository import ApiLogRepository


class InMemoryLicenseRepository(LicenseRepository):
    def __init__(self):
        self.rows: Dict[str, License] = {}

    async def save(self, license: License) -> License:
        self.rows[license.id] = license
        return license

    async def find_by_id(self, license_id: str) -> Optional[License]:
        return self.rows.get(license_id)

    async def find_by_key(self, key: str) -> Optional[License]:
        return next((l for l in self.rows.values() if l.key == key), None)

    async def find_by_domain(self, domain: str) -> Optional[License]:
        matches = [l for l in self.rows.values() if l.domain.lower() == domain.lower()]
        return min(matches, key=lambda l: l.created_at) if matches else None

    async def find_all(self, status=None, search=None) -> List[License]:
        rows = sorted(self.rows.values(), key=lambda l: l.created_at, reverse=True)
        if status:
            rows = [l for l in rows if l.status.value == status]
        if search:
            needle = search.lower()
            rows = [
                l
                for l in rows
                if needle in l.organization.lower() or needle in l.domain or needle in l.key.lower()
            ]
        return rows

    async def delete(self, license_id: str) -> bool:
        return self.rows.pop(license_id, None) is not None

    async def exists(self, license_id: str) -> bool:
        return license_id in self.rows


class InMemoryLicenseRequestRepository(LicenseRequestRepository):
    def __init__(self):
        self.rows: Dict[str, LicenseRequest] = {}

    async def save(self, request: LicenseRequest) -> LicenseRequest:
        self.rows[request.id] = request
        return request

    async def find_by_id(self, request_id: str) -> Optional[LicenseRequest]:
        return self.rows.get(request_id)

    async def find_by_domain(self, domain: str) -> Optional[LicenseRequest]:
        matches = [
            r for r in self.rows.values() if r.requested_domain.lower() == domain.lower()
        ]
        return min(matches, key=lambda r: r.request_date) if matches else None

    async def find_all(self) -> List[LicenseRequest]:
        return sorted(self.rows.values(), key=lambda r: r.request_date, reverse=True)

    async def delete(self, request_id: str) -> bool:
        return self.rows.pop(request_id, None) is not None


class InMemoryModuleRepository(ModuleRepository):
    def __init__(self, modules=None):
        self.rows: Dict[str, ModuleDefinition] = {m.id: m for m in (modules or [])}

    async def save(self, module: ModuleDefinition) -> ModuleDefinition:
        self.rows[module.id] = module
        return module

    async def find_by_id(self, module_id: str) -> Optional[ModuleDefinition]:
        return self.rows.get(module_id)

    async def find_all(self) -> List[ModuleDefinition]:
        return list(self.rows.values())

    async def delete(self, module_id: str) -> bool:
        return self.rows.pop(module_id, None) is not None


class InMemoryApiLogRepository(ApiLogRepository):
    def __init__(self):
        self.entries: List[ApiLogEntry] = []

    async def append(self, entry: ApiLogEntry) -> ApiLogEntry:
        self.entries.append(entry)
        return entry

    async def exists(self, entry_id: str) -> bool:
        return any(entry.id == entry_id for entry in self.entries)

    async def recent(self, limit: int = 100) -> List[ApiLogEntry]:
        return sorted(self.entries, key=lambda e: e.timestamp, reverse=True)[:limit]


class InMemorySettingRepository(SettingRepository):
    def __init__(self, values=None):
        self.values: Dict[str, str] = dict(values or {})

    async def get(self, key: str) -> Optional[str]:
        return self.values.get(key)

    async def set(self, key: str, value: str) -> None:
        self.values[key] = value

    async def all(self) -> Dict[str, str]:
        return dict(self.values)


class RecordingEventBus(EventBus):
    """Event bus that only remembers what was published."""

    def __init__(self):
        self.events: List[DomainEvent] = []

    async def publish(self, event: DomainEvent) -> None:
        self.events.append(event)

    def subscribe(self, event_type: type, handler: EventHandler) -> None:
        raise NotImplementedError

    def of_type(self, event_type):
        return [event for event in self.events if isinstance(event, event_type)]


class FakeRemoteStore(RemoteStore):
    """Remote store returning canned responses and recording calls."""

    def __init__(self, responses=None, error=None):
        self.responses = responses or {}
        self.error = error
        self.calls = []

    async def call(self, action, **payload):
        self.calls.append((action, payload))
        if self.error:
            raise self.error
        return self.responses.get(action, {"status": "ok"})


@pytest.fixture(autouse=True)
def clear_cache():
    """The module catalog is cached; start every test cold."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def license_repo():
    return InMemoryLicenseRepository()


@pytest.fixture
def request_repo():
    return InMemoryLicenseRequestRepository()


@pytest.fixture
def module_repo():
    return InMemoryModuleRepository(DEFAULT_MODULES)


@pytest.fixture
def api_log_repo():
    return InMemoryApiLogRepository()


@pytest.fixture
def setting_repo():
    return InMemorySettingRepository()


@pytest.fixture
def event_bus():
    return RecordingEventBus()


@pytest.fixture
def fake_remote_factory():
    """Factory fixture: ``fake_remote_factory(store)`` returns a RemoteStoreFactory."""

    def build(store: FakeRemoteStore):
        def factory(api_url, secret):
            store.api_url = api_url
            store.secret = secret
            return store

        return factory

    return build


@pytest.fixture
def fake_remote():
    return FakeRemoteStore


@pytest.fixture
def make_license():
    """Factory for License entities."""

    def build(domain="shop.example.com", valid_until: Optional[date] = None, **kwargs):
        return License.create(
            organization=kwargs.pop("organization", "Example Fire Brigade"),
            contact_person=kwargs.pop("contact_person", "Alex Example"),
            email=kwargs.pop("email", "alex@example.com"),
            domain=domain,
            valid_until=valid_until or utc_today() + timedelta(days=30),
            features=kwargs.pop("features", {"inventory": True, "hoses": False}),
            key_prefix="TST",
            **kwargs,
        )

    return build


@pytest.fixture
def make_request():
    """Factory for LicenseRequest entities."""

    def build(domain="new.example.com", **kwargs):
        return LicenseRequest.create(
            organization=kwargs.pop("organization", "New Brigade"),
            contact_person=kwargs.pop("contact_person", "Sam New"),
            email=kwargs.pop("email", "sam@new.example.com"),
            requested_domain=domain,
            **kwargs,
        )

    return build


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()
