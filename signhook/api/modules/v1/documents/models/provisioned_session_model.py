import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Column, DateTime, ForeignKey
from sqlmodel import Field, SQLModel


class ProvisionedCheckoutSession(SQLModel, table=True):
    """
    Ledger of checkout sessions that already produced a pledge document.

    The unique ``session_id`` makes Stripe redeliveries of the same
    checkout.session.completed event a no-op.
    """

    __tablename__ = "provisioned_checkout_sessions"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, index=True, nullable=False)

    session_id: str = Field(
        max_length=255,
        nullable=False,
        unique=True,
        index=True,
        description="Stripe checkout session ID",
    )

    event_id: Optional[str] = Field(
        default=None,
        max_length=255,
        nullable=True,
        description="Stripe event ID that triggered provisioning",
    )

    document_id: Optional[uuid.UUID] = Field(
        default=None,
        sa_column=Column(
            ForeignKey("documents.id", ondelete="SET NULL"),
            nullable=True,
        ),
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
