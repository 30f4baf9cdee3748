"""initial webhook schema

Revision ID: 4c1e2b7f9a10
Revises:
Create Date: 2026-10-19 09:12:44.301552

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
import sqlmodel


# revision identifiers, used by Alembic.
revision: str = '4c1e2b7f9a10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('email', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
    op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)

    op.create_table(
        'subscriptions',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('customer_id', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('plan_id', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('status', sa.Enum('ACTIVE', 'PAST_DUE', 'INACTIVE', name='subscriptionstatus'), nullable=False),
        sa.Column('cancel_at_period_end', sa.Boolean(), nullable=False),
        sa.Column('period_end', sa.DateTime(timezone=True), nullable=True),
        sa.Column('user_id', sa.Uuid(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_subscriptions_customer_id'), 'subscriptions', ['customer_id'], unique=True)
    op.create_index(op.f('ix_subscriptions_id'), 'subscriptions', ['id'], unique=False)
    op.create_index(op.f('ix_subscriptions_user_id'), 'subscriptions', ['user_id'], unique=False)

    op.create_table(
        'document_data',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('type', sa.Enum('BYTES', 'BYTES_64', 'S3_PATH', name='documentdatatype'), nullable=False),
        sa.Column('data', sa.Text(), nullable=False),
        sa.Column('initial_data', sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_document_data_id'), 'document_data', ['id'], unique=False)

    op.create_table(
        'documents',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('title', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('status', sa.Enum('DRAFT', 'PENDING', 'COMPLETED', name='documentstatus'), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('document_data_id', sa.Uuid(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['document_data_id'], ['document_data.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('document_data_id')
    )
    op.create_index(op.f('ix_documents_id'), 'documents', ['id'], unique=False)
    op.create_index(op.f('ix_documents_user_id'), 'documents', ['user_id'], unique=False)

    op.create_table(
        'recipients',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('document_id', sa.Uuid(), nullable=False),
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('email', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('token', sqlmodel.sql.sqltypes.AutoString(length=64), nullable=False),
        sa.Column('signed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('read_status', sa.Enum('NOT_OPENED', 'OPENED', name='readstatus'), nullable=False),
        sa.Column('send_status', sa.Enum('NOT_SENT', 'SENT', name='sendstatus'), nullable=False),
        sa.Column('signing_status', sa.Enum('NOT_SIGNED', 'SIGNED', name='signingstatus'), nullable=False),
        sa.ForeignKeyConstraint(['document_id'], ['documents.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_recipients_document_id'), 'recipients', ['document_id'], unique=False)
    op.create_index(op.f('ix_recipients_email'), 'recipients', ['email'], unique=False)
    op.create_index(op.f('ix_recipients_id'), 'recipients', ['id'], unique=False)
    op.create_index(op.f('ix_recipients_token'), 'recipients', ['token'], unique=True)

    op.create_table(
        'fields',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('document_id', sa.Uuid(), nullable=False),
        sa.Column('recipient_id', sa.Uuid(), nullable=False),
        sa.Column('type', sa.Enum('SIGNATURE', 'FREE_SIGNATURE', 'NAME', 'EMAIL', 'DATE', 'TEXT', name='fieldtype'), nullable=False),
        sa.Column('page', sa.Integer(), nullable=False),
        sa.Column('position_x', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('position_y', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('custom_text', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('inserted', sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(['document_id'], ['documents.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['recipient_id'], ['recipients.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_fields_document_id'), 'fields', ['document_id'], unique=False)
    op.create_index(op.f('ix_fields_id'), 'fields', ['id'], unique=False)
    op.create_index(op.f('ix_fields_recipient_id'), 'fields', ['recipient_id'], unique=False)

    op.create_table(
        'signatures',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('field_id', sa.Uuid(), nullable=False),
        sa.Column('recipient_id', sa.Uuid(), nullable=False),
        sa.Column('signature_image_as_base64', sa.Text(), nullable=True),
        sa.Column('typed_signature', sa.Text(), nullable=True),
        sa.Column('created', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint('(signature_image_as_base64 IS NULL) <> (typed_signature IS NULL)', name='ck_signature_single_form'),
        sa.ForeignKeyConstraint(['field_id'], ['fields.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['recipient_id'], ['recipients.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('field_id')
    )
    op.create_index(op.f('ix_signatures_id'), 'signatures', ['id'], unique=False)
    op.create_index(op.f('ix_signatures_recipient_id'), 'signatures', ['recipient_id'], unique=False)

    op.create_table(
        'provisioned_checkout_sessions',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('session_id', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('event_id', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True),
        sa.Column('document_id', sa.Uuid(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['document_id'], ['documents.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_provisioned_checkout_sessions_id'), 'provisioned_checkout_sessions', ['id'], unique=False)
    op.create_index(op.f('ix_provisioned_checkout_sessions_session_id'), 'provisioned_checkout_sessions', ['session_id'], unique=True)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f('ix_provisioned_checkout_sessions_session_id'), table_name='provisioned_checkout_sessions')
    op.drop_index(op.f('ix_provisioned_checkout_sessions_id'), table_name='provisioned_checkout_sessions')
    op.drop_table('provisioned_checkout_sessions')
    op.drop_index(op.f('ix_signatures_recipient_id'), table_name='signatures')
    op.drop_index(op.f('ix_signatures_id'), table_name='signatures')
    op.drop_table('signatures')
    op.drop_index(op.f('ix_fields_recipient_id'), table_name='fields')
    op.drop_index(op.f('ix_fields_id'), table_name='fields')
    op.drop_index(op.f('ix_fields_document_id'), table_name='fields')
    op.drop_table('fields')
    op.drop_index(op.f('ix_recipients_token'), table_name='recipients')
    op.drop_index(op.f('ix_recipients_id'), table_name='recipients')
    op.drop_index(op.f('ix_recipients_email'), table_name='recipients')
    op.drop_index(op.f('ix_recipients_document_id'), table_name='recipients')
    op.drop_table('recipients')
    op.drop_index(op.f('ix_documents_user_id'), table_name='documents')
    op.drop_index(op.f('ix_documents_id'), table_name='documents')
    op.drop_table('documents')
    op.drop_index(op.f('ix_document_data_id'), table_name='document_data')
    op.drop_table('document_data')
    op.drop_index(op.f('ix_subscriptions_user_id'), table_name='subscriptions')
    op.drop_index(op.f('ix_subscriptions_id'), table_name='subscriptions')
    op.drop_index(op.f('ix_subscriptions_customer_id'), table_name='subscriptions')
    op.drop_table('subscriptions')
    op.drop_index(op.f('ix_users_id'), table_name='users')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_table('users')

    sa.Enum(name='signingstatus').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='sendstatus').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='readstatus').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='fieldtype').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='documentstatus').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='documentdatatype').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='subscriptionstatus').drop(op.get_bind(), checkfirst=True)
