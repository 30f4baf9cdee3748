from .webhook_schema import CheckoutSessionPayload, StripeEventData, StripeWebhookEvent

__all__ = [
    "CheckoutSessionPayload",
    "StripeEventData",
    "StripeWebhookEvent",
]
