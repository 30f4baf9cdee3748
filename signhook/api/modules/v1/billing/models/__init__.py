from .subscription import Subscription, SubscriptionStatus

__all__ = [
    "Subscription",
    "SubscriptionStatus",
]
