import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

import sqlalchemy as sa
from sqlalchemy import Column, DateTime, ForeignKey, Text
from sqlmodel import Field, SQLModel


class DocumentDataType(str, Enum):
    """How a DocumentData row stores its bytes."""

    BYTES = "BYTES"
    BYTES_64 = "BYTES_64"
    S3_PATH = "S3_PATH"


class DocumentStatus(str, Enum):
    DRAFT = "DRAFT"
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"


class DocumentData(SQLModel, table=True):
    """
    Stored PDF content.

    ``initial_data`` keeps the untouched template, ``data`` holds the current
    (possibly stamped) document. Both are base64 strings for BYTES_64 rows.
    """

    __tablename__ = "document_data"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, index=True, nullable=False)

    type: DocumentDataType = Field(
        sa_column=sa.Column(sa.Enum(DocumentDataType, name="documentdatatype"), nullable=False),
    )

    data: str = Field(sa_column=Column(Text, nullable=False))

    initial_data: str = Field(sa_column=Column(Text, nullable=False))


class Document(SQLModel, table=True):
    __tablename__ = "documents"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, index=True, nullable=False)

    title: str = Field(max_length=255, nullable=False)

    status: DocumentStatus = Field(
        sa_column=sa.Column(sa.Enum(DocumentStatus, name="documentstatus"), nullable=False),
        default=DocumentStatus.DRAFT,
    )

    user_id: uuid.UUID = Field(
        sa_column=Column(
            ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )
    )

    document_data_id: uuid.UUID = Field(
        sa_column=Column(
            ForeignKey("document_data.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        )
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )

    updated_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=True),
    )
