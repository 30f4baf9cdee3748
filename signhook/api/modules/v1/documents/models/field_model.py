import uuid
from decimal import Decimal
from enum import Enum

import sqlalchemy as sa
from sqlalchemy import Boolean, Column, ForeignKey, Numeric
from sqlmodel import Field, SQLModel


class FieldType(str, Enum):
    SIGNATURE = "SIGNATURE"
    FREE_SIGNATURE = "FREE_SIGNATURE"
    NAME = "NAME"
    EMAIL = "EMAIL"
    DATE = "DATE"
    TEXT = "TEXT"


class DocumentField(SQLModel, table=True):
    """
    A placed input on a document page.

    Positions are PDF points measured from the top-left corner of the page.
    """

    __tablename__ = "fields"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, index=True, nullable=False)

    document_id: uuid.UUID = Field(
        sa_column=Column(
            ForeignKey("documents.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )
    )

    recipient_id: uuid.UUID = Field(
        sa_column=Column(
            ForeignKey("recipients.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )
    )

    type: FieldType = Field(
        sa_column=sa.Column(sa.Enum(FieldType, name="fieldtype"), nullable=False),
    )

    page: int = Field(default=0, nullable=False)

    position_x: Decimal = Field(sa_column=Column(Numeric(10, 2), nullable=False))

    position_y: Decimal = Field(sa_column=Column(Numeric(10, 2), nullable=False))

    custom_text: str = Field(default="", nullable=False)

    inserted: bool = Field(
        default=False,
        sa_column=Column(Boolean, nullable=False),
    )
