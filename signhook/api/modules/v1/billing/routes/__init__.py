from fastapi import APIRouter

from signhook.api.modules.v1.billing.routes.webhook_route import router as webhook

billing_router = APIRouter()

billing_router.include_router(webhook)


__all__ = [
    "billing_router",
    "webhook",
]
