import logging

from uuid import UUID
from datetime import datetime, timezone

from vendor_contracts.enums import ContractChange, ContractState, UserRole
from vendor_contracts.features.contracts import lifecycle
from vendor_contracts.features.contracts.exceptions import ContractPermissionError
from vendor_contracts.features.contracts.parser import parse_contract_content
from vendor_contracts.features.contracts.schemas import ContractFieldsUpdate, ContractRecord, ContractUpsert, ContractView, CurrentUser, EventDescriptor, Revision, RevisionCreate, SignatureRequest, VendorDescriptor
from vendor_contracts.features.contracts.store import ContractStore
from vendor_contracts.features.contracts.templates import generate_contract_template
from vendor_contracts.features.notifications.client import NotificationsClient


logger = logging.getLogger(__name__)


async def load_contract_view(store: ContractStore, user: CurrentUser, event_id: str, vendor_id: str, event: EventDescriptor, vendor: VendorDescriptor) -> ContractView:
    """load the contract for display, re-deriving the structured fields from the stored text"""

    record = await store.get_by_pair(event_id, vendor_id)
    permissions = lifecycle.get_permissions(user.role, record)

    if record is not None:
        state, content = ContractState.SAVED, record.content or generate_contract_template(event, vendor, user)
    elif user.role == UserRole.VENDOR:
        state, content = ContractState.DRAFT, generate_contract_template(event, vendor, user)
    else:
        return ContractView(state=ContractState.NO_CONTRACT, permissions=permissions)

    parsed = parse_contract_content(content)
    return ContractView(
        state=state,
        contract=record,
        content=content,
        fields=parsed.fields,
        custom_fields=parsed.custom_fields,
        permissions=permissions,
    )


async def save_contract_fields(store: ContractStore, notifier: NotificationsClient, user: CurrentUser, event_id: str, vendor_id: str, request: ContractFieldsUpdate) -> ContractRecord:
    """assemble edited fields into a fresh template and save the result"""

    current = await store.get_by_pair(event_id, vendor_id)
    record = lifecycle.save_contract(current, user, event_id, vendor_id, request.event, request.vendor, request.fields, request.custom_fields)
    saved = await store.upsert(record)
    logger.info(f"saved contract fields for event_id={event_id} vendor_id={vendor_id} status={saved.status.value}")
    await notifier.publish_contract_change(saved, ContractChange.SAVED)
    return saved


async def save_contract_content(store: ContractStore, notifier: NotificationsClient, user: CurrentUser, request: ContractUpsert) -> ContractRecord:
    """save agreement text assembled by the client"""

    current = await store.get_by_pair(request.event_id, request.vendor_id)
    record = lifecycle.save_contract_content(current, user.role, request.event_id, request.vendor_id, request.content, request.status)
    saved = await store.upsert(record)
    logger.info(f"saved contract content for event_id={request.event_id} vendor_id={request.vendor_id} status={saved.status.value}")
    await notifier.publish_contract_change(saved, ContractChange.SAVED)
    return saved


async def sign_contract(store: ContractStore, notifier: NotificationsClient, user: CurrentUser, contract_id: UUID, request: SignatureRequest) -> ContractRecord:
    """apply the caller's signature"""

    if request.role != user.role:
        raise ContractPermissionError("not permitted")

    current = await store.get_by_id(contract_id, lock=True)
    record = lifecycle.apply_signature(current, request.role, request.signature, signed_at=datetime.now(tz=timezone.utc))
    saved = await store.record_signature(record, request.role)
    logger.info(f"{request.role.value} signed contract_id={contract_id} status={saved.status.value}")
    await notifier.publish_contract_change(saved, ContractChange.SIGNED)
    return saved


async def request_contract_revision(store: ContractStore, notifier: NotificationsClient, user: CurrentUser, contract_id: UUID, request: RevisionCreate) -> ContractRecord:
    """append the planner's revision request and flag the contract for vendor updates"""

    current = await store.get_by_id(contract_id, lock=True)
    revision = Revision(
        requested_by=request.requested_by,
        comment=request.comment,
        timestamp=request.timestamp or datetime.now(tz=timezone.utc),
    )
    record = lifecycle.request_revision(current, user.role, revision)
    saved = await store.append_revision(contract_id, revision, record.status)
    logger.info(f"revision requested on contract_id={contract_id} ({len(saved.revisions)} total)")
    await notifier.publish_contract_change(saved, ContractChange.REVISION_REQUESTED)
    return saved
