import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Text
from sqlmodel import Field, SQLModel


class Signature(SQLModel, table=True):
    """
    A signature applied to a field.

    Exactly one of ``signature_image_as_base64`` and ``typed_signature`` is set.
    """

    __tablename__ = "signatures"
    __table_args__ = (
        CheckConstraint(
            "(signature_image_as_base64 IS NULL) <> (typed_signature IS NULL)",
            name="ck_signature_single_form",
        ),
    )

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, index=True, nullable=False)

    field_id: uuid.UUID = Field(
        sa_column=Column(
            ForeignKey("fields.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        )
    )

    recipient_id: uuid.UUID = Field(
        sa_column=Column(
            ForeignKey("recipients.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )
    )

    signature_image_as_base64: Optional[str] = Field(
        default=None, sa_column=Column(Text, nullable=True)
    )

    typed_signature: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    created: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
