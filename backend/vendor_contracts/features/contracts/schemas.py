from uuid import UUID
from datetime import datetime
from typing import Iterator, Optional

from pydantic import ConfigDict, Field

from vendor_contracts.common.schemas import ConfiguredBaseModel
from vendor_contracts.enums import ContractState, ContractStatus, UserRole
from vendor_contracts.features.contracts.fields import ContractField


class CurrentUser(ConfiguredBaseModel):
    id: str
    name: str
    role: UserRole

class EventDescriptor(ConfiguredBaseModel):
    name: str
    start_time: datetime
    planner_name: Optional[str] = None

class VendorDescriptor(ConfiguredBaseModel):
    business_name: Optional[str] = None
    service_type: str = ""


class StructuredFields(ConfiguredBaseModel):
    """known contract fields re-derived from the document text (None = label absent, "" = unset)"""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    total_fee: Optional[str] = Field(default=None, alias=ContractField.TOTAL_FEE.key)
    hours_of_coverage: Optional[str] = Field(default=None, alias=ContractField.HOURS_OF_COVERAGE.key)
    deliverables: Optional[str] = Field(default=None, alias=ContractField.DELIVERABLES.key)
    image_rights: Optional[str] = Field(default=None, alias=ContractField.IMAGE_RIGHTS.key)
    performance_time: Optional[str] = Field(default=None, alias=ContractField.PERFORMANCE_TIME.key)
    service_type: Optional[str] = Field(default=None, alias=ContractField.SERVICE_TYPE.key)
    equipment: Optional[str] = Field(default=None, alias=ContractField.EQUIPMENT.key)
    scope: Optional[str] = Field(default=None, alias=ContractField.SCOPE.key)
    setup_teardown: Optional[str] = Field(default=None, alias=ContractField.SETUP_TEARDOWN.key)
    arrangement_types: Optional[str] = Field(default=None, alias=ContractField.ARRANGEMENT_TYPES.key)
    substitutions: Optional[str] = Field(default=None, alias=ContractField.SUBSTITUTIONS.key)
    spaces_provided: Optional[str] = Field(default=None, alias=ContractField.SPACES_PROVIDED.key)
    capacity: Optional[str] = Field(default=None, alias=ContractField.CAPACITY.key)
    restrictions: Optional[str] = Field(default=None, alias=ContractField.RESTRICTIONS.key)
    service_style: Optional[str] = Field(default=None, alias=ContractField.SERVICE_STYLE.key)
    menu: Optional[str] = Field(default=None, alias=ContractField.MENU.key)
    staffing: Optional[str] = Field(default=None, alias=ContractField.STAFFING.key)

    def get(self, field: ContractField) -> Optional[str]:
        return getattr(self, field.attribute)

    def set(self, field: ContractField, value: Optional[str]) -> None:
        setattr(self, field.attribute, value)

    def items(self) -> Iterator[tuple[ContractField, str]]:
        """iterate over the fields present in the document in declaration order"""

        for field in ContractField:
            value = self.get(field)
            if value is not None:
                yield field, value

class CustomField(ConfiguredBaseModel):
    header: str
    value: str

class ParsedContract(ConfiguredBaseModel):
    fields: StructuredFields = Field(default_factory=StructuredFields)
    custom_fields: list[CustomField] = Field(default_factory=list)


class Revision(ConfiguredBaseModel):
    requested_by: str
    comment: str
    timestamp: datetime


class ContractRecord(ConfiguredBaseModel):
    id: Optional[UUID] = None
    event_id: str
    vendor_id: str
    content: str
    status: ContractStatus = ContractStatus.PENDING_PLANNER_SIGNATURE
    planner_signature: Optional[str] = None
    planner_signed_at: Optional[datetime] = None
    vendor_signature: Optional[str] = None
    vendor_signed_at: Optional[datetime] = None
    revisions: list[Revision] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ContractPermissions(ConfiguredBaseModel):
    can_edit: bool
    can_sign: bool
    can_revise: bool

class ContractView(ConfiguredBaseModel):
    state: ContractState
    contract: Optional[ContractRecord] = None
    content: Optional[str] = None
    fields: StructuredFields = Field(default_factory=StructuredFields)
    custom_fields: list[CustomField] = Field(default_factory=list)
    permissions: ContractPermissions


class ContractUpsert(ConfiguredBaseModel):
    event_id: str
    vendor_id: str
    content: str
    status: Optional[ContractStatus] = None

class ContractFieldsUpdate(ConfiguredBaseModel):
    event: EventDescriptor
    vendor: VendorDescriptor
    fields: StructuredFields = Field(default_factory=StructuredFields)
    custom_fields: list[CustomField] = Field(default_factory=list)

class ContractViewRequest(ConfiguredBaseModel):
    event: EventDescriptor
    vendor: VendorDescriptor

class SignatureRequest(ConfiguredBaseModel):
    role: UserRole
    signature: str

class RevisionCreate(ConfiguredBaseModel):
    requested_by: str
    comment: str
    timestamp: Optional[datetime] = None

class RevisionRequest(ConfiguredBaseModel):
    revision: RevisionCreate


class ContractChangeEvent(ConfiguredBaseModel):
    contract_id: UUID
    event_id: str
    vendor_id: str
    status: ContractStatus
    change: str
    timestamp: datetime
