import logging

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from signhook.api.core.exceptions import WebhookError
from signhook.api.db.database import get_db
from signhook.api.modules.v1.billing.routes.docs.webhook_route_docs import (
    stripe_webhook_responses,
)
from signhook.api.modules.v1.billing.stripe.stripe_adapter import verify_webhook_signature
from signhook.api.modules.v1.billing.stripe.webhook_processor import process_stripe_event
from signhook.api.modules.v1.documents.service.signature_cache import (
    SignatureCache,
    get_signature_cache,
)
from signhook.api.utils.response_payloads import error_response, success_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/billing", tags=["Billing"])


@router.post(
    "/webhook",
    status_code=status.HTTP_200_OK,
    summary="Stripe webhook endpoint",
    responses=stripe_webhook_responses,
)
async def stripe_webhook(
    request: Request,
    db: AsyncSession = Depends(get_db),
    cache: SignatureCache = Depends(get_signature_cache),
):
    """
    Stripe webhook receiver.

    Verifies the Stripe-Signature header against the raw body, then hands the
    event to its handler. Stripe retries any delivery answered with a non-2xx.

    Args:
        request (Request): The incoming HTTP request containing the webhook payload.

    Returns:
        JSONResponse: ``{"success": ..., "message": ...}``
    """
    try:
        payload = await request.body()
        sig_header = request.headers.get("Stripe-Signature")

        event = await verify_webhook_signature(payload=payload, header=sig_header)
        logger.info("Stripe webhook received: id=%s type=%s", event.id, event.type)

        await process_stripe_event(db=db, event=event, cache=cache)

    except WebhookError as exc:
        return error_response(status_code=exc.status_code, message=exc.message)

    except Exception as exc:
        logger.exception("Unexpected error in stripe_webhook handler: %s", str(exc))
        return error_response(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, message="Internal server error"
        )

    return success_response(status_code=status.HTTP_200_OK, message="Webhook received")
