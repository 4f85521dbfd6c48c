import logging

from vendor_contracts.core.db import engine
from vendor_contracts.models import Base


logger = logging.getLogger(__name__)


async def create_tables():
    """apply the table models to the database"""

    async with engine.begin() as cnx:
        await cnx.run_sync(Base.metadata.create_all)
    logger.info(f"ensured tables exist: {sorted(Base.metadata.tables)}")
