import logging
from typing import Any, Awaitable, Callable, Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from signhook.api.core.exceptions import UnhandledEventError
from signhook.api.modules.v1.billing.schemas import CheckoutSessionPayload, StripeWebhookEvent
from signhook.api.modules.v1.billing.service.subscription_service import SubscriptionService
from signhook.api.modules.v1.documents.service.pledge_provisioning_service import (
    PledgeProvisioningService,
)
from signhook.api.modules.v1.documents.service.signature_cache import SignatureCache

logger = logging.getLogger(__name__)

EventHandler = Callable[..., Awaitable[Dict[str, Any]]]


async def _handle_subscription_updated(
    db: AsyncSession,
    event: StripeWebhookEvent,
    cache: Optional[SignatureCache] = None,
) -> Dict[str, Any]:
    """
    Handle customer.subscription.updated by overwriting the local subscription.

    Args:
        db (AsyncSession): Database session for the update.
        event (StripeWebhookEvent): Verified event; ``data.object`` is the subscription.
        cache (Optional[SignatureCache]): Unused, accepted for a uniform handler signature.

    Returns:
        Dict[str, Any]: A structured action result describing what was performed.

    Raises:
        SubscriptionNotFoundError: No local subscription for the customer.
    """
    service = SubscriptionService(db)
    try:
        details = await service.reconcile_from_stripe(event.data_object)
    except Exception:
        await db.rollback()
        logger.exception("Error handling subscription update for event %s", event.id)
        raise

    return {"action": "subscription_updated", **details}


async def _handle_checkout_session_completed(
    db: AsyncSession,
    event: StripeWebhookEvent,
    cache: Optional[SignatureCache] = None,
) -> Dict[str, Any]:
    """
    Handle checkout.session.completed by provisioning a supporter pledge.

    Args:
        db (AsyncSession): Database session for the provisioning transaction.
        event (StripeWebhookEvent): Verified event; ``data.object`` is the checkout session.
        cache (Optional[SignatureCache]): Store holding uploaded signature images.

    Returns:
        Dict[str, Any]: A structured action result describing what was performed.

    Raises:
        UserNotFoundError: The session's client_reference_id matches no user.
    """
    session = CheckoutSessionPayload.model_validate(event.data_object)
    service = PledgeProvisioningService(db, cache)
    return await service.provision(session, event_id=event.id)


EVENT_HANDLERS: Dict[str, EventHandler] = {
    "customer.subscription.updated": _handle_subscription_updated,
    "checkout.session.completed": _handle_checkout_session_completed,
}


async def process_stripe_event(
    db: AsyncSession,
    event: StripeWebhookEvent,
    cache: Optional[SignatureCache] = None,
) -> Dict[str, Any]:
    """
    Dispatch a verified Stripe event to its handler.

    Args:
        db (AsyncSession): Database session used by the handler.
        event (StripeWebhookEvent): Verified event envelope.
        cache (Optional[SignatureCache]): Signature image store passed to handlers.

    Returns:
        Dict[str, Any]: The handler's action result.

    Raises:
        UnhandledEventError: No handler is registered for the event type.
    """
    handler = EVENT_HANDLERS.get(event.type)
    if handler is None:
        logger.info("Unhandled stripe event: id=%s type=%s", event.id, event.type)
        raise UnhandledEventError()

    logger.info("Processing stripe event: id=%s type=%s", event.id, event.type)
    result = await handler(db, event, cache)
    logger.info("Stripe event %s handled: %s", event.id, result.get("action"))
    return result
