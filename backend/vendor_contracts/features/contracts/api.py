import logging

from uuid import UUID

from fastapi import APIRouter, Depends, Response

from vendor_contracts.api.deps import get_contract_store, get_current_user
from vendor_contracts.features.contracts import services
from vendor_contracts.features.contracts.exceptions import ContractNotFoundError
from vendor_contracts.features.contracts.schemas import ContractFieldsUpdate, ContractRecord, ContractUpsert, ContractView, ContractViewRequest, CurrentUser, RevisionRequest, SignatureRequest
from vendor_contracts.features.contracts.store import ContractStore
from vendor_contracts.features.notifications.client import NotificationsClient, get_notifications_client


router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/contracts/event/{event_id}/vendor/{vendor_id}", response_model=ContractRecord, tags=["contracts"])
async def get_contract(event_id: str, vendor_id: str, store: ContractStore = Depends(get_contract_store)) -> ContractRecord:
    """get the contract for an (event, vendor) pair"""

    record = await store.get_by_pair(event_id, vendor_id)
    if not record:
        raise ContractNotFoundError(f"contract not found for event_id={event_id} vendor_id={vendor_id}")
    return record


@router.post("/contracts/event/{event_id}/vendor/{vendor_id}/view", response_model=ContractView, tags=["contracts"])
async def get_contract_view(
    event_id: str,
    vendor_id: str,
    request: ContractViewRequest,
    user: CurrentUser = Depends(get_current_user),
    store: ContractStore = Depends(get_contract_store),
) -> ContractView:
    """get the contract with its parsed fields and the caller's permissions, falling back to a draft template for vendors"""

    return await services.load_contract_view(store, user, event_id, vendor_id, request.event, request.vendor)


@router.post("/contracts", response_model=ContractRecord, status_code=201, tags=["contracts"])
async def upsert_contract(
    request: ContractUpsert,
    user: CurrentUser = Depends(get_current_user),
    store: ContractStore = Depends(get_contract_store),
    notifier: NotificationsClient = Depends(get_notifications_client),
) -> ContractRecord:
    """create or update the contract text for an (event, vendor) pair"""

    return await services.save_contract_content(store, notifier, user, request)


@router.put("/contracts/event/{event_id}/vendor/{vendor_id}/fields", response_model=ContractRecord, tags=["contracts"])
async def save_contract_fields(
    event_id: str,
    vendor_id: str,
    request: ContractFieldsUpdate,
    user: CurrentUser = Depends(get_current_user),
    store: ContractStore = Depends(get_contract_store),
    notifier: NotificationsClient = Depends(get_notifications_client),
) -> ContractRecord:
    """save edited contract fields, re-assembling the agreement text from a fresh template"""

    return await services.save_contract_fields(store, notifier, user, event_id, vendor_id, request)


@router.put("/contracts/{contract_id}/sign", response_model=ContractRecord, tags=["contracts"])
async def sign_contract(
    contract_id: UUID,
    request: SignatureRequest,
    user: CurrentUser = Depends(get_current_user),
    store: ContractStore = Depends(get_contract_store),
    notifier: NotificationsClient = Depends(get_notifications_client),
) -> ContractRecord:
    """sign the contract as the planner or the vendor"""

    return await services.sign_contract(store, notifier, user, contract_id, request)


@router.put("/contracts/{contract_id}/revise", response_model=ContractRecord, tags=["contracts"])
async def revise_contract(
    contract_id: UUID,
    request: RevisionRequest,
    user: CurrentUser = Depends(get_current_user),
    store: ContractStore = Depends(get_contract_store),
    notifier: NotificationsClient = Depends(get_notifications_client),
) -> ContractRecord:
    """request revisions to the contract"""

    return await services.request_contract_revision(store, notifier, user, contract_id, request.revision)


@router.get("/contracts/{contract_id}/export", tags=["contracts"])
async def export_contract(contract_id: UUID, store: ContractStore = Depends(get_contract_store)) -> Response:
    """download the contract text as a markdown file"""

    record = await store.get_by_id(contract_id)
    filename = f"contract_{record.event_id}_{record.vendor_id}.md"
    return Response(
        content=record.content,
        media_type="text/markdown; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
