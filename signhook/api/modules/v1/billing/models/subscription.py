import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

import sqlalchemy as sa
from sqlalchemy import Boolean, Column, DateTime, ForeignKey
from sqlmodel import Field, SQLModel


class SubscriptionStatus(str, Enum):
    """Local subscription statuses."""

    ACTIVE = "ACTIVE"
    PAST_DUE = "PAST_DUE"
    INACTIVE = "INACTIVE"


class Subscription(SQLModel, table=True):
    """
    Local mirror of a Stripe subscription, keyed by the Stripe customer id.
    """

    __tablename__ = "subscriptions"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, index=True, nullable=False)

    customer_id: str = Field(max_length=255, nullable=False, unique=True, index=True)

    plan_id: str = Field(max_length=255, nullable=False)

    status: SubscriptionStatus = Field(
        sa_column=sa.Column(
            sa.Enum(SubscriptionStatus, name="subscriptionstatus"), nullable=False
        ),
        default=SubscriptionStatus.INACTIVE,
    )

    cancel_at_period_end: bool = Field(
        default=False,
        sa_column=Column(Boolean, nullable=False),
    )

    period_end: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime(timezone=True), nullable=True)
    )

    user_id: Optional[uuid.UUID] = Field(
        default=None,
        sa_column=Column(
            ForeignKey("users.id", ondelete="CASCADE"),
            nullable=True,
            index=True,
        ),
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
