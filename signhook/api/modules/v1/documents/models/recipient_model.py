import uuid
from datetime import datetime
from enum import Enum
from typing import Optional

import sqlalchemy as sa
from sqlalchemy import Column, DateTime, ForeignKey
from sqlmodel import Field, SQLModel


class ReadStatus(str, Enum):
    NOT_OPENED = "NOT_OPENED"
    OPENED = "OPENED"


class SendStatus(str, Enum):
    NOT_SENT = "NOT_SENT"
    SENT = "SENT"


class SigningStatus(str, Enum):
    NOT_SIGNED = "NOT_SIGNED"
    SIGNED = "SIGNED"


class Recipient(SQLModel, table=True):
    """A party asked to sign a document."""

    __tablename__ = "recipients"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, index=True, nullable=False)

    document_id: uuid.UUID = Field(
        sa_column=Column(
            ForeignKey("documents.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )
    )

    name: str = Field(default="", max_length=255, nullable=False)

    email: str = Field(max_length=255, nullable=False, index=True)

    token: str = Field(max_length=64, nullable=False, unique=True, index=True)

    signed_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime(timezone=True), nullable=True)
    )

    read_status: ReadStatus = Field(
        sa_column=sa.Column(sa.Enum(ReadStatus, name="readstatus"), nullable=False),
        default=ReadStatus.NOT_OPENED,
    )

    send_status: SendStatus = Field(
        sa_column=sa.Column(sa.Enum(SendStatus, name="sendstatus"), nullable=False),
        default=SendStatus.NOT_SENT,
    )

    signing_status: SigningStatus = Field(
        sa_column=sa.Column(sa.Enum(SigningStatus, name="signingstatus"), nullable=False),
        default=SigningStatus.NOT_SIGNED,
    )
