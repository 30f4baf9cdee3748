import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from signhook.api.modules.v1.billing.models import SubscriptionStatus

logger = logging.getLogger(__name__)


def parse_ts(value: Any, field_name: str) -> Optional[datetime]:
    """
    Parse a UNIX timestamp-like value into a timezone-aware UTC datetime.

    Args:
        value: The timestamp to parse.
        field_name: The name of the field (used for logging on parse failure).

    Returns:
        Optional[datetime]: A timezone-aware datetime in UTC if parsing succeeds, otherwise None.
    """
    if value in (None, "", 0):
        return None
    try:
        return datetime.fromtimestamp(int(value), tz=timezone.utc)
    except (TypeError, ValueError, OverflowError, OSError):
        logger.warning("Failed to parse %s=%s", field_name, value)
        return None


def map_stripe_status_to_subscription_status(stripe_status: Optional[str]) -> SubscriptionStatus:
    """
    Map a Stripe subscription status string to our SubscriptionStatus enum.

    Args:
        stripe_status: The status string returned by Stripe for a subscription

    Returns:
        SubscriptionStatus: ACTIVE for "active", PAST_DUE for "past_due",
        INACTIVE for anything else.
    """
    if stripe_status == "active":
        return SubscriptionStatus.ACTIVE
    if stripe_status == "past_due":
        return SubscriptionStatus.PAST_DUE
    return SubscriptionStatus.INACTIVE


def normalize_customer_id(customer: Any) -> Optional[str]:
    """Return the customer id whether Stripe sent it bare or expanded."""
    if isinstance(customer, dict):
        customer = customer.get("id")
    if not customer:
        return None
    return str(customer)


def _first_item(subscription: Dict[str, Any]) -> Dict[str, Any]:
    items = (subscription.get("items") or {}).get("data") or []
    return items[0] if items else {}


def extract_plan_id(subscription: Dict[str, Any]) -> Optional[str]:
    """
    Find the plan identifier on a subscription object.

    Older payloads carry ``plan.id``; newer ones only expose the price or plan
    on the first subscription item.
    """
    plan = subscription.get("plan") or {}
    if plan.get("id"):
        return plan["id"]

    item = _first_item(subscription)
    price = item.get("price") or {}
    if price.get("id"):
        return price["id"]
    return (item.get("plan") or {}).get("id")


def extract_period_end(subscription: Dict[str, Any]) -> Optional[datetime]:
    """Return the current period end as a UTC datetime, if Stripe sent one."""
    value = subscription.get("current_period_end")
    if value in (None, ""):
        value = _first_item(subscription).get("current_period_end")
    return parse_ts(value, "current_period_end")
