"""contract lifecycle rules: permissions, status transitions, signatures, and revisions

The functions in this module are pure: they take the current contract record (``None`` while the
contract is still an unsaved draft) and return a new record, raising a ``ContractError`` subclass
when a guard is violated. Persistence and notifications are handled by the service layer.
"""

import re
import logging

from datetime import datetime
from typing import Optional

from vendor_contracts.core.config import settings
from vendor_contracts.enums import ContractStatus, UserRole
from vendor_contracts.features.contracts.assembler import assemble_contract_content
from vendor_contracts.features.contracts.exceptions import ContractPermissionError, ContractValidationError
from vendor_contracts.features.contracts.fields import ContractField, NON_EDITABLE_LABELS
from vendor_contracts.features.contracts.parser import is_placeholder, parse_contract_content
from vendor_contracts.features.contracts.schemas import ContractPermissions, ContractRecord, CurrentUser, CustomField, EventDescriptor, Revision, StructuredFields, VendorDescriptor
from vendor_contracts.features.contracts.templates import generate_contract_template


logger = logging.getLogger(__name__)

NUMERIC_BOUNDS = {
    ContractField.TOTAL_FEE: lambda: settings.max_total_fee,
    ContractField.HOURS_OF_COVERAGE: lambda: settings.max_hours_of_coverage,
}

ALLOWED_TRANSITIONS: dict[ContractStatus, frozenset[ContractStatus]] = {
    ContractStatus.PENDING_PLANNER_SIGNATURE: frozenset({ContractStatus.PENDING_PLANNER_SIGNATURE, ContractStatus.REVISIONS_REQUESTED, ContractStatus.ACTIVE}),
    ContractStatus.REVISIONS_REQUESTED: frozenset({ContractStatus.PENDING_PLANNER_SIGNATURE, ContractStatus.REVISIONS_REQUESTED, ContractStatus.ACTIVE}),
    ContractStatus.ACTIVE: frozenset({ContractStatus.ACTIVE}),
}


# --- permissions ---

def can_edit(role: UserRole, record: Optional[ContractRecord]) -> bool:
    """only vendors edit the contract, and only until it becomes active"""

    return role == UserRole.VENDOR and (record is None or record.status != ContractStatus.ACTIVE)


def can_sign(role: UserRole, record: Optional[ContractRecord]) -> bool:
    """the planner signs first; the vendor may only countersign after the planner"""

    if record is None:
        return False
    if role == UserRole.PLANNER:
        return not record.planner_signature
    return not record.vendor_signature and bool(record.planner_signature)


def can_revise(role: UserRole, record: Optional[ContractRecord]) -> bool:
    """planners may request revisions on a saved, non-active contract they have not yet signed"""

    return (
        record is not None
        and role == UserRole.PLANNER
        and record.status != ContractStatus.ACTIVE
        and not record.planner_signature
    )


def get_permissions(role: UserRole, record: Optional[ContractRecord]) -> ContractPermissions:
    return ContractPermissions(
        can_edit=can_edit(role, record),
        can_sign=can_sign(role, record),
        can_revise=can_revise(role, record),
    )


# --- field validation ---

def validate_fields(fields: StructuredFields, custom_fields: list[CustomField]) -> None:
    """enforce the edit-boundary constraints on structured and custom fields"""

    for field, value in fields.items():
        if "\n" in value or "\r" in value:
            raise ContractValidationError(f"invalid field value: {field.label} must be a single line")
        if value and is_placeholder(value):
            raise ContractValidationError(f"invalid field value: {field.label} cannot be bracketed placeholder text")
        if field in NUMERIC_BOUNDS and value:
            if not re.fullmatch(r"[0-9]+", value):
                raise ContractValidationError(f"invalid field value: {field.label} must contain digits only")
            maximum = NUMERIC_BOUNDS[field]()
            if int(value) > maximum:
                raise ContractValidationError(f"invalid field value: {field.label} must not exceed {maximum}")

    for custom_field in custom_fields:
        header, value = custom_field.header.strip(), custom_field.value.strip()
        if not header or not value:
            continue
        if any(char in header for char in "*:\n\r"):
            raise ContractValidationError(f"invalid field value: custom header '{header}' cannot contain '*', ':' or line breaks")
        if "\n" in value or "\r" in value or is_placeholder(value):
            raise ContractValidationError(f"invalid field value: custom field '{header}' must be a single line of text")
        if ContractField.from_label(header) is not None or header in NON_EDITABLE_LABELS:
            raise ContractValidationError(f"invalid field value: custom header '{header}' is reserved")


def validate_content(content: str) -> None:
    """validate the numeric fields of raw agreement text submitted directly"""

    parsed = parse_contract_content(content)
    for field in NUMERIC_BOUNDS:
        value = parsed.fields.get(field)
        if value and int(value) > NUMERIC_BOUNDS[field]():
            raise ContractValidationError(f"invalid field value: {field.label} must not exceed {NUMERIC_BOUNDS[field]()}")


# --- status transitions ---

def status_on_save(record: Optional[ContractRecord]) -> ContractStatus:
    """a save resets a revisions-requested contract for a fresh planner review"""

    if record is None or record.status == ContractStatus.REVISIONS_REQUESTED:
        return ContractStatus.PENDING_PLANNER_SIGNATURE
    return record.status


def set_status(record: ContractRecord, status: ContractStatus) -> ContractRecord:
    if status not in ALLOWED_TRANSITIONS[record.status]:
        raise ContractValidationError(f"invalid status transition: {record.status.value} -> {status.value}")
    return record.model_copy(update={"status": status})


def resolve_status(record: ContractRecord) -> ContractRecord:
    """a contract carrying both signatures is active"""

    if record.planner_signature and record.vendor_signature and record.status != ContractStatus.ACTIVE:
        return set_status(record, ContractStatus.ACTIVE)
    return record


# --- operations ---

def save_contract_content(record: Optional[ContractRecord], role: UserRole, event_id: str, vendor_id: str, content: str, requested_status: Optional[ContractStatus] = None) -> ContractRecord:
    """apply a vendor save of the full agreement text"""

    if not can_edit(role, record):
        raise ContractValidationError("not editable")
    validate_content(content)

    status = status_on_save(record)
    if requested_status is not None and requested_status != status:
        raise ContractValidationError(f"invalid status transition: {requested_status.value} requested, {status.value} expected")

    if record is None:
        return ContractRecord(event_id=event_id, vendor_id=vendor_id, content=content, status=status)
    return record.model_copy(update={"content": content, "status": status})


def save_contract(record: Optional[ContractRecord], user: CurrentUser, event_id: str, vendor_id: str, event: EventDescriptor, vendor: VendorDescriptor, fields: StructuredFields, custom_fields: list[CustomField]) -> ContractRecord:
    """apply a vendor save of edited fields, re-assembling the text onto a freshly generated template"""

    if not can_edit(user.role, record):
        raise ContractValidationError("not editable")
    validate_fields(fields, custom_fields)

    base_template = generate_contract_template(event, vendor, user)
    content = assemble_contract_content(fields, custom_fields, base_template)
    return save_contract_content(record, user.role, event_id, vendor_id, content)


def apply_signature(record: ContractRecord, role: UserRole, signature: str, signed_at: datetime) -> ContractRecord:
    """apply one party's signature and resolve the derived status"""

    signature = signature.strip()
    if not signature:
        raise ContractValidationError("signature name required")

    if role == UserRole.PLANNER:
        if record.planner_signature:
            raise ContractValidationError("already signed")
        signed = record.model_copy(update={"planner_signature": signature, "planner_signed_at": signed_at})
    else:
        if record.vendor_signature:
            raise ContractValidationError("already signed")
        if not record.planner_signature:
            raise ContractValidationError("planner must sign first")
        signed = record.model_copy(update={"vendor_signature": signature, "vendor_signed_at": signed_at})

    return resolve_status(signed)


def append_revision(record: ContractRecord, revision: Revision) -> ContractRecord:
    """append a revision entry leaving the existing history untouched"""

    return record.model_copy(update={"revisions": [*record.revisions, revision]})


def request_revision(record: ContractRecord, role: UserRole, revision: Revision) -> ContractRecord:
    """record a planner's revision request and flag the contract for vendor updates"""

    if not revision.comment.strip():
        raise ContractValidationError("revision comment required")
    if role != UserRole.PLANNER:
        raise ContractPermissionError("not permitted")
    if record.status == ContractStatus.ACTIVE:
        raise ContractValidationError("not editable")
    if record.planner_signature:
        raise ContractValidationError("already signed")

    revised = append_revision(record, revision)
    return set_status(revised, ContractStatus.REVISIONS_REQUESTED)
