from typing import AsyncGenerator

from fastapi import Depends, Header, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from vendor_contracts.core.db import SessionLocal
from vendor_contracts.enums import UserRole
from vendor_contracts.features.contracts.schemas import CurrentUser
from vendor_contracts.features.contracts.store import ContractStore


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """get a new async database session"""

    async with SessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


async def get_contract_store(db: AsyncSession = Depends(get_db)) -> ContractStore:
    """get a contract store bound to the request's database session"""

    return ContractStore(db)


async def get_current_user(
    x_user_id: str = Header(..., description="caller ID set by the identity provider"),
    x_user_name: str = Header(..., description="caller display name set by the identity provider"),
    x_user_role: str = Header(..., description="caller role: planner or vendor"),
) -> CurrentUser:
    """resolve the calling user from the identity headers forwarded by the upstream session provider"""

    try:
        role = UserRole(x_user_role.strip().lower())
    except ValueError:
        raise HTTPException(status_code=401, detail=f"invalid user role: {x_user_role}")
    return CurrentUser(id=x_user_id, name=x_user_name, role=role)
