"""Shared fixtures for the vendor contracts test suite."""

import os

os.environ.setdefault("LOGFIRE_ENABLED", "false")

import uuid
from datetime import datetime, timezone
from typing import Optional

import pytest
from fastapi.testclient import TestClient

from vendor_contracts.api.deps import get_contract_store
from vendor_contracts.enums import ContractChange, ContractStatus, UserRole
from vendor_contracts.features.contracts.exceptions import ContractNotFoundError, ContractValidationError
from vendor_contracts.features.contracts.schemas import ContractRecord, CurrentUser, EventDescriptor, Revision, VendorDescriptor
from vendor_contracts.features.contracts.templates import generate_contract_template
from vendor_contracts.features.notifications.client import get_notifications_client
from vendor_contracts.main import app


class InMemoryContractStore:
    """Dict-backed stand-in for ContractStore with the same async interface."""

    def __init__(self):
        self.records: dict[uuid.UUID, ContractRecord] = {}

    async def get_by_pair(self, event_id: str, vendor_id: str) -> Optional[ContractRecord]:
        for record in self.records.values():
            if record.event_id == event_id and record.vendor_id == vendor_id:
                return record
        return None

    async def get_by_id(self, contract_id: uuid.UUID, lock: bool = False) -> ContractRecord:
        if contract_id not in self.records:
            raise ContractNotFoundError(f"contract_id={contract_id} not found")
        return self.records[contract_id]

    async def upsert(self, record: ContractRecord) -> ContractRecord:
        now = datetime.now(tz=timezone.utc)
        existing = await self.get_by_pair(record.event_id, record.vendor_id)
        if existing is None:
            saved = record.model_copy(update={"id": uuid.uuid4(), "revisions": [], "created_at": now, "updated_at": now})
        elif existing.status == ContractStatus.ACTIVE:
            raise ContractValidationError("not editable")
        else:
            saved = existing.model_copy(update={"content": record.content, "status": record.status, "updated_at": now})
        self.records[saved.id] = saved
        return saved

    async def record_signature(self, record: ContractRecord, role: UserRole) -> ContractRecord:
        existing = await self.get_by_id(record.id)
        if role == UserRole.PLANNER:
            if existing.planner_signature:
                raise ContractValidationError("already signed")
            update = {"planner_signature": record.planner_signature, "planner_signed_at": record.planner_signed_at}
        else:
            if existing.vendor_signature or not existing.planner_signature:
                raise ContractValidationError("already signed")
            update = {"vendor_signature": record.vendor_signature, "vendor_signed_at": record.vendor_signed_at}
        if record.status == ContractStatus.ACTIVE:
            update["status"] = ContractStatus.ACTIVE
        saved = existing.model_copy(update={**update, "updated_at": datetime.now(tz=timezone.utc)})
        self.records[saved.id] = saved
        return saved

    async def append_revision(self, contract_id: uuid.UUID, revision: Revision, status: ContractStatus) -> ContractRecord:
        existing = await self.get_by_id(contract_id)
        saved = existing.model_copy(update={"revisions": [*existing.revisions, revision], "status": status, "updated_at": datetime.now(tz=timezone.utc)})
        self.records[saved.id] = saved
        return saved


class RecordingNotifier:
    """Collects published contract changes instead of sending them to Redis."""

    def __init__(self):
        self.changes: list[tuple[ContractRecord, ContractChange]] = []

    async def publish_contract_change(self, record: ContractRecord, change: ContractChange) -> None:
        self.changes.append((record, change))


@pytest.fixture
def event():
    return EventDescriptor(
        name="Smith Wedding",
        start_time=datetime(2025, 6, 1, 14, 0, tzinfo=timezone.utc),
        planner_name="Jane Doe",
    )


@pytest.fixture
def catering_vendor():
    return VendorDescriptor(business_name="Acme Catering", service_type="catering")


@pytest.fixture
def photography_vendor():
    return VendorDescriptor(business_name="Bright Lens Studio", service_type="Photography")


@pytest.fixture
def planner():
    return CurrentUser(id="planner-1", name="Jane Doe", role=UserRole.PLANNER)


@pytest.fixture
def vendor_user():
    return CurrentUser(id="vendor-1", name="Sam Acme", role=UserRole.VENDOR)


@pytest.fixture
def catering_template(event, catering_vendor):
    return generate_contract_template(event, catering_vendor)


@pytest.fixture
def saved_record(catering_template):
    """A freshly saved contract awaiting the planner's review."""
    return ContractRecord(
        id=uuid.uuid4(),
        event_id="event-1",
        vendor_id="vendor-1",
        content=catering_template,
        status=ContractStatus.PENDING_PLANNER_SIGNATURE,
    )


@pytest.fixture
def store():
    return InMemoryContractStore()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def client(store, notifier):
    app.dependency_overrides[get_contract_store] = lambda: store
    app.dependency_overrides[get_notifications_client] = lambda: notifier
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def planner_headers():
    return {"X-User-Id": "planner-1", "X-User-Name": "Jane Doe", "X-User-Role": "planner"}


@pytest.fixture
def vendor_headers():
    return {"X-User-Id": "vendor-1", "X-User-Name": "Sam Acme", "X-User-Role": "vendor"}
