import logging
from datetime import datetime, timezone
from typing import Any, Dict

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from signhook.api.core.exceptions import SubscriptionNotFoundError
from signhook.api.modules.v1.billing.models import Subscription
from signhook.api.modules.v1.billing.utils.billings_utils import (
    extract_period_end,
    extract_plan_id,
    map_stripe_status_to_subscription_status,
    normalize_customer_id,
)

logger = logging.getLogger(__name__)


class SubscriptionService:
    """Keeps local subscriptions in line with Stripe subscription objects."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def reconcile_from_stripe(self, stripe_subscription: Dict[str, Any]) -> Dict[str, Any]:
        """
        Overwrite the local subscription identified by the Stripe customer id.

        Args:
            stripe_subscription: The ``data.object`` of a customer.subscription.* event.

        Returns:
            Dict[str, Any]: Summary of the applied values.

        Raises:
            SubscriptionNotFoundError: No local subscription has this customer id.
        """
        customer_id = normalize_customer_id(stripe_subscription.get("customer"))
        if not customer_id:
            logger.warning(
                "Subscription %s has no customer id", stripe_subscription.get("id")
            )
            raise SubscriptionNotFoundError()

        status = map_stripe_status_to_subscription_status(stripe_subscription.get("status"))
        plan_id = extract_plan_id(stripe_subscription)
        period_end = extract_period_end(stripe_subscription)
        cancel_at_period_end = bool(stripe_subscription.get("cancel_at_period_end"))

        values: Dict[str, Any] = {
            "status": status,
            "cancel_at_period_end": cancel_at_period_end,
            "period_end": period_end,
            "updated_at": datetime.now(timezone.utc),
        }
        if plan_id:
            values["plan_id"] = plan_id
        else:
            logger.warning("No plan id on subscription for customer %s", customer_id)

        result = await self.db.execute(
            update(Subscription)
            .where(Subscription.customer_id == customer_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )

        if result.rowcount == 0:
            logger.warning("No local subscription for Stripe customer %s", customer_id)
            raise SubscriptionNotFoundError()

        await self.db.commit()

        logger.info(
            "Subscription for customer %s set to %s (plan=%s, cancel_at_period_end=%s)",
            customer_id,
            status.value,
            plan_id,
            cancel_at_period_end,
        )

        return {
            "customer_id": customer_id,
            "plan_id": plan_id,
            "status": status.value,
            "cancel_at_period_end": cancel_at_period_end,
            "period_end": period_end,
        }
