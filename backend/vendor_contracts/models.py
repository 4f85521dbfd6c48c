import uuid

from sqlalchemy import Column, String, DateTime, Enum, JSON, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.sql import func

from vendor_contracts.enums import ContractStatus


class Base(DeclarativeBase):
    pass


class Contract(Base):
    __tablename__ = "contracts"
    __table_args__ = (UniqueConstraint("event_id", "vendor_id", name="uq_contracts_event_vendor"),)
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    event_id = Column(String, nullable=False, index=True)
    vendor_id = Column(String, nullable=False, index=True)
    content = Column(String, nullable=False)
    status = Column(Enum(ContractStatus, values_callable=lambda enum: [member.value for member in enum]), nullable=False)
    planner_signature = Column(String, nullable=True)
    planner_signed_at = Column(DateTime(timezone=True), nullable=True)
    vendor_signature = Column(String, nullable=True)
    vendor_signed_at = Column(DateTime(timezone=True), nullable=True)
    revisions = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())
