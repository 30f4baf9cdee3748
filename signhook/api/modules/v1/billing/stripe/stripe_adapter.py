import logging
from typing import Optional

import stripe
from pydantic import ValidationError

from signhook.api.core.config import settings
from signhook.api.core.exceptions import InvalidSignatureError, MissingSignatureError
from signhook.api.modules.v1.billing.schemas import StripeWebhookEvent

logger = logging.getLogger(__name__)

stripe.api_key = settings.STRIPE_SECRET_KEY


async def verify_webhook_signature(payload: bytes, header: Optional[str]) -> StripeWebhookEvent:
    """
    Verify a Stripe webhook payload and return the parsed event.

    Args:
        payload: raw request.body() bytes
        header: the 'Stripe-Signature' header value

    Returns:
        StripeWebhookEvent: The verified event envelope

    Raises:
        MissingSignatureError: The header is absent or empty
        InvalidSignatureError: The signature, timestamp or payload is not acceptable
        RuntimeError: STRIPE_WEBHOOK_SECRET is not configured
    """
    if not header or not header.strip():
        logger.warning("Stripe webhook received without a signature header")
        raise MissingSignatureError()

    webhook_secret = settings.STRIPE_WEBHOOK_SECRET
    if not webhook_secret:
        logger.error("STRIPE_WEBHOOK_SECRET not configured - cannot verify webhooks")
        raise RuntimeError("Webhook secret not configured")

    try:
        body = payload.decode("utf-8")
    except UnicodeDecodeError as e:
        logger.warning("Stripe webhook payload is not UTF-8: %s", e)
        raise InvalidSignatureError() from e

    logger.debug("Verifying stripe webhook signature (len=%d)", len(payload))
    try:
        stripe.WebhookSignature.verify_header(
            body, header, webhook_secret, tolerance=settings.STRIPE_WEBHOOK_TOLERANCE
        )
    except stripe.SignatureVerificationError as e:
        logger.warning("Stripe webhook signature verification failed: %s", e)
        raise InvalidSignatureError() from e

    try:
        return StripeWebhookEvent.model_validate_json(body)
    except ValidationError as e:
        logger.warning("Invalid payload: verified webhook is not a Stripe event: %s", e)
        raise InvalidSignatureError() from e
