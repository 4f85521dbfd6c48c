import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from vendor_contracts.features.contracts.exceptions import ContractError, ContractStoreError


logger = logging.getLogger(__name__)


def setup_exception_handlers(app: FastAPI) -> None:
    """map the typed contract failures onto HTTP responses"""

    @app.exception_handler(ContractError)
    async def contract_error_handler(request: Request, exc: ContractError) -> JSONResponse:
        if isinstance(exc, ContractStoreError):
            logger.error(f"contract store failure on {request.method} {request.url.path}: {exc.reason}")
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.reason})

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(f"unhandled exception on {request.method} {request.url.path}", exc_info=exc)
        return JSONResponse(status_code=500, content={"detail": "internal server error"})
