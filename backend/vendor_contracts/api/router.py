from fastapi import APIRouter

from vendor_contracts.api.system import router as system_router
from vendor_contracts.features.contracts.api import router as contracts_router
from vendor_contracts.features.notifications.api import router as notifications_router


router = APIRouter()
router.include_router(system_router)
router.include_router(contracts_router)
router.include_router(notifications_router)
