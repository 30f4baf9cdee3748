import asyncio
import base64
import functools
import logging
import secrets
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from signhook.api.core.config import settings
from signhook.api.core.exceptions import UserNotFoundError
from signhook.api.modules.v1.billing.schemas import CheckoutSessionPayload
from signhook.api.modules.v1.documents.models import (
    Document,
    DocumentData,
    DocumentDataType,
    DocumentField,
    DocumentStatus,
    FieldType,
    ProvisionedCheckoutSession,
    ReadStatus,
    Recipient,
    SendStatus,
    Signature,
    SigningStatus,
)
from signhook.api.modules.v1.documents.service.pdf_service import (
    insert_image_in_pdf,
    insert_text_in_pdf,
)
from signhook.api.modules.v1.documents.service.signature_cache import SignatureCache
from signhook.api.modules.v1.users.models import User
from signhook.api.modules.v1.users.service.user import UserCRUD

logger = logging.getLogger(__name__)

# Where the supporter signs on the pledge template.
SIGNATURE_FIELD_PAGE = 0
SIGNATURE_FIELD_X = Decimal("77")
SIGNATURE_FIELD_Y = Decimal("638")


def _read_template(path: str) -> str:
    return base64.b64encode(Path(path).read_bytes()).decode("ascii")


class PledgeProvisioningService:
    """
    Turns a completed landing-page checkout into a signed supporter pledge.

    All rows are written in the caller's session and committed once at the end;
    any failure rolls the whole pledge back.
    """

    def __init__(self, db: AsyncSession, cache: Optional[SignatureCache] = None):
        self.db = db
        self.cache = cache or SignatureCache()

    async def provision(
        self, session: CheckoutSessionPayload, event_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Provision the pledge document for a checkout session.

        Args:
            session: Parsed checkout.session object.
            event_id: Stripe event id, recorded on the provisioning ledger.

        Returns:
            Dict[str, Any]: ``action`` is one of "ignored", "already_provisioned"
            or "pledge_provisioned".

        Raises:
            UserNotFoundError: client_reference_id does not resolve to a user.
        """
        if session.source != settings.PLEDGE_CHECKOUT_SOURCE:
            logger.info(
                "Checkout session %s has source %r, skipping pledge",
                session.id,
                session.source,
            )
            return {"action": "ignored", "session_id": session.id}

        user = await UserCRUD.get_by_reference(self.db, session.client_reference_id)
        if user is None:
            logger.warning(
                "Checkout session %s references unknown user %r",
                session.id,
                session.client_reference_id,
            )
            raise UserNotFoundError()

        signature_text = session.signature_text or user.name or ""

        signature_data_url = None
        if session.signature_data_url_ref:
            signature_data_url = await self.cache.get(session.signature_data_url_ref)

        try:
            ledger = await self._claim_session(session.id, event_id)
            if ledger is None:
                return {"action": "already_provisioned", "session_id": session.id}

            document = await self._create_pledge(
                user, ledger, signature_text, signature_data_url
            )
            document_id = document.id
            user_id = user.id

            await self.db.commit()

        except Exception:
            await self.db.rollback()
            logger.exception("Failed to provision pledge for checkout session %s", session.id)
            raise

        logger.info(
            "Provisioned pledge document %s for user %s (session %s)",
            document_id,
            user_id,
            session.id,
        )
        return {
            "action": "pledge_provisioned",
            "session_id": session.id,
            "document_id": str(document_id),
        }

    async def _claim_session(
        self, session_id: str, event_id: Optional[str]
    ) -> Optional[ProvisionedCheckoutSession]:
        """Insert the ledger row, or return None if the session was already handled."""
        result = await self.db.execute(
            select(ProvisionedCheckoutSession).where(
                ProvisionedCheckoutSession.session_id == session_id
            )
        )
        if result.scalar_one_or_none() is not None:
            logger.info("Checkout session %s already provisioned", session_id)
            return None

        ledger = ProvisionedCheckoutSession(session_id=session_id, event_id=event_id)
        self.db.add(ledger)
        try:
            await self.db.flush()
        except IntegrityError:
            await self.db.rollback()
            logger.info("Checkout session %s provisioned concurrently", session_id)
            return None
        return ledger

    async def _create_pledge(
        self,
        user: User,
        ledger: ProvisionedCheckoutSession,
        signature_text: str,
        signature_data_url: Optional[str],
    ) -> Document:
        loop = asyncio.get_running_loop()

        template64 = await loop.run_in_executor(
            None, _read_template, settings.PLEDGE_TEMPLATE_PATH
        )

        document_data = DocumentData(
            type=DocumentDataType.BYTES_64,
            data=template64,
            initial_data=template64,
        )
        self.db.add(document_data)
        await self.db.flush()

        document = Document(
            title=settings.PLEDGE_DOCUMENT_TITLE,
            status=DocumentStatus.COMPLETED,
            user_id=user.id,
            document_data_id=document_data.id,
        )
        self.db.add(document)
        await self.db.flush()

        recipient = Recipient(
            document_id=document.id,
            name=user.name or "",
            email=user.email,
            token=secrets.token_hex(16),
            signed_at=datetime.now(timezone.utc),
            read_status=ReadStatus.OPENED,
            send_status=SendStatus.SENT,
            signing_status=SigningStatus.SIGNED,
        )
        self.db.add(recipient)
        await self.db.flush()

        field = DocumentField(
            document_id=document.id,
            recipient_id=recipient.id,
            type=FieldType.SIGNATURE,
            page=SIGNATURE_FIELD_PAGE,
            position_x=SIGNATURE_FIELD_X,
            position_y=SIGNATURE_FIELD_Y,
            custom_text="",
            inserted=False,
        )
        self.db.add(field)
        await self.db.flush()

        if signature_data_url:
            stamp = functools.partial(
                insert_image_in_pdf,
                template64,
                signature_data_url,
                float(field.position_x),
                float(field.position_y),
                field.page,
            )
        else:
            stamp = functools.partial(
                insert_text_in_pdf,
                template64,
                signature_text,
                float(field.position_x),
                float(field.position_y),
                field.page,
            )
        stamped64 = await loop.run_in_executor(None, stamp)

        signature = Signature(
            field_id=field.id,
            recipient_id=recipient.id,
            signature_image_as_base64=signature_data_url or None,
            typed_signature=None if signature_data_url else signature_text,
        )
        document_data.data = stamped64
        ledger.document_id = document.id
        self.db.add(signature)
        self.db.add(document_data)
        await self.db.flush()

        return document
