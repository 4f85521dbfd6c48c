import uuid
import logging

from uuid import UUID
from typing import Optional

from sqlalchemy import func, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from vendor_contracts.enums import ContractStatus, UserRole
from vendor_contracts.models import Contract as DBContract
from vendor_contracts.features.contracts.exceptions import ContractNotFoundError, ContractStoreError, ContractValidationError
from vendor_contracts.features.contracts.schemas import ContractRecord, Revision


logger = logging.getLogger(__name__)

UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class ContractStore:
    """persistence wrapper for contract records backed by the contracts table

    each write touches only the columns its operation owns so concurrent saves, signatures,
    and revision requests on the same contract never overwrite each other's changes
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_pair(self, event_id: str, vendor_id: str) -> Optional[ContractRecord]:
        """get the contract for an (event, vendor) pair or None if it was never saved"""

        query = select(DBContract).where(DBContract.event_id == event_id, DBContract.vendor_id == vendor_id)
        dbcontract = await self._fetch_one(query)
        return ContractRecord.model_validate(dbcontract) if dbcontract else None

    async def get_by_id(self, contract_id: UUID, lock: bool = False) -> ContractRecord:
        """get a contract by ID, optionally holding a row lock until the next commit"""

        query = select(DBContract).where(DBContract.id == contract_id).execution_options(populate_existing=True)
        if lock:
            query = query.with_for_update()
        dbcontract = await self._fetch_one(query)
        if not dbcontract:
            raise ContractNotFoundError(f"contract_id={contract_id} not found")
        return ContractRecord.model_validate(dbcontract)

    async def upsert(self, record: ContractRecord) -> ContractRecord:
        """insert or overwrite the text and status for the record's (event, vendor) pair - the last writer wins"""

        insert = UPSERT_INSERTS[self.db.get_bind().dialect.name]
        stmt = insert(DBContract).values(
            id=record.id or uuid.uuid4(),
            event_id=record.event_id,
            vendor_id=record.vendor_id,
            content=record.content,
            status=record.status,
            revisions=[],
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["event_id", "vendor_id"],
            set_={"content": stmt.excluded.content, "status": stmt.excluded.status, "updated_at": func.now()},
            where=DBContract.status != ContractStatus.ACTIVE,
        )
        try:
            result = await self.db.execute(stmt.returning(DBContract), execution_options={"populate_existing": True})
            dbcontract = result.scalar_one_or_none()
            if dbcontract is None:
                await self.db.rollback()
                raise ContractValidationError("not editable")
            saved = ContractRecord.model_validate(dbcontract)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("failed to upsert contract", exc_info=True)
            raise ContractStoreError(f"failed to save contract: {e}") from e
        return saved

    async def record_signature(self, record: ContractRecord, role: UserRole) -> ContractRecord:
        """write one party's signature unless that party has already signed"""

        if role == UserRole.PLANNER:
            unsigned = DBContract.planner_signature.is_(None)
            values = {"planner_signature": record.planner_signature, "planner_signed_at": record.planner_signed_at}
        else:
            unsigned = DBContract.vendor_signature.is_(None) & DBContract.planner_signature.is_not(None)
            values = {"vendor_signature": record.vendor_signature, "vendor_signed_at": record.vendor_signed_at}
        if record.status == ContractStatus.ACTIVE:
            values["status"] = ContractStatus.ACTIVE

        stmt = update(DBContract).where(DBContract.id == record.id, unsigned).values(**values).execution_options(synchronize_session=False)
        try:
            result = await self.db.execute(stmt)
            if result.rowcount == 0:
                await self.db.rollback()
                raise ContractValidationError("already signed")
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("failed to record signature", exc_info=True)
            raise ContractStoreError(f"failed to update contract: {e}") from e
        return await self.get_by_id(record.id)

    async def append_revision(self, contract_id: UUID, revision: Revision, status: ContractStatus) -> ContractRecord:
        """append to the stored revision history and set the status without touching the other columns"""

        query = select(DBContract).where(DBContract.id == contract_id).with_for_update().execution_options(populate_existing=True)
        dbcontract = await self._fetch_one(query)
        if not dbcontract:
            raise ContractNotFoundError(f"contract_id={contract_id} not found")
        try:
            dbcontract.revisions = [*dbcontract.revisions, revision.model_dump(mode="json")]
            dbcontract.status = status
            await self.db.commit()
            await self.db.refresh(dbcontract)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("failed to append revision", exc_info=True)
            raise ContractStoreError(f"failed to update contract: {e}") from e
        return ContractRecord.model_validate(dbcontract)

    async def _fetch_one(self, query) -> Optional[DBContract]:
        try:
            result = await self.db.execute(query)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("failed to fetch contract", exc_info=True)
            raise ContractStoreError(f"failed to load contract: {e}") from e
