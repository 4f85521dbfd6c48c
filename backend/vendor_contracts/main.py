import logging
import logfire

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from vendor_contracts.core.config import settings
from vendor_contracts.core.exception_handlers import setup_exception_handlers
from vendor_contracts.core.lifespan import create_tables
from vendor_contracts.features.notifications.client import get_notifications_client, close_notifications_client
from vendor_contracts.api.router import router


logging.basicConfig(level=getattr(logging, settings.log_level.upper()))


@asynccontextmanager
async def lifespan(app: FastAPI):
    await create_tables()
    await get_notifications_client()
    yield
    await close_notifications_client()

app = FastAPI(
    title=settings.app_name,
    description=settings.app_description,
    version=settings.app_version,
    debug=settings.debug,
    lifespan=lifespan
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_credentials,
    allow_methods=settings.cors_methods,
    allow_headers=settings.cors_headers,
)
setup_exception_handlers(app)
app.include_router(router)

if settings.logfire_enabled:
    logfire.configure(
        token=settings.logfire_token,
        service_name=settings.app_name,
        service_version=settings.app_version,
        environment=settings.environment,
        send_to_logfire="if-token-present",
    )
    logfire.instrument_fastapi(app)
