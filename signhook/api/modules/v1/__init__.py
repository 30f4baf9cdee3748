from fastapi import APIRouter

from signhook.api.modules.v1.billing.routes import billing_router

router = APIRouter(prefix="/v1")
router.include_router(billing_router)
