from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, AsyncEngine
from sqlalchemy.orm import sessionmaker

from vendor_contracts.core.config import settings


engine: AsyncEngine = create_async_engine(str(settings.database_url), echo=settings.db_echo, pool_size=settings.db_pool_size, max_overflow=settings.db_max_overflow)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, class_=AsyncSession)
