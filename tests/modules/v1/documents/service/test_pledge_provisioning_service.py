"""
Tests for PledgeProvisioningService.
"""

import uuid
from decimal import Decimal
from unittest.mock import patch

import pytest
import pytest_asyncio
from sqlalchemy import func
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
from signhook.api.modules.v1.documents.service.pledge_provisioning_service import (
    PledgeProvisioningService,
)
from signhook.api.modules.v1.documents.service.signature_cache import SignatureCache
from signhook.api.modules.v1.users.models import User

ALL_PLEDGE_MODELS = (
    Document,
    DocumentData,
    Recipient,
    DocumentField,
    Signature,
    ProvisionedCheckoutSession,
)


@pytest_asyncio.fixture
async def supporter(test_session):
    user = User(email="supporter@example.com", name="Jane Supporter")
    test_session.add(user)
    await test_session.commit()
    return user


async def _count(session, model) -> int:
    result = await session.execute(select(func.count()).select_from(model))
    return result.scalar_one()


async def _one(session, model):
    return (await session.execute(select(model))).scalar_one()


def _session(user_id, session_id="cs_test_1", **metadata) -> CheckoutSessionPayload:
    return CheckoutSessionPayload(
        id=session_id,
        client_reference_id=str(user_id) if user_id is not None else None,
        metadata={"source": "landing", **metadata},
    )


@pytest.mark.asyncio
class TestProvisionTypedSignature:
    async def test_creates_the_full_pledge(self, test_session, supporter):
        user_id = supporter.id

        result = await PledgeProvisioningService(test_session).provision(
            _session(user_id), event_id="evt_1"
        )

        assert result["action"] == "pledge_provisioned"

        document = await _one(test_session, Document)
        assert str(document.id) == result["document_id"]
        assert document.title == settings.PLEDGE_DOCUMENT_TITLE
        assert document.status == DocumentStatus.COMPLETED
        assert document.user_id == user_id

        document_data = await _one(test_session, DocumentData)
        assert document.document_data_id == document_data.id
        assert document_data.type == DocumentDataType.BYTES_64
        assert document_data.data != document_data.initial_data

        recipient = await _one(test_session, Recipient)
        assert recipient.document_id == document.id
        assert recipient.name == "Jane Supporter"
        assert recipient.email == "supporter@example.com"
        assert len(recipient.token) == 32
        int(recipient.token, 16)
        assert recipient.signed_at is not None
        assert recipient.read_status == ReadStatus.OPENED
        assert recipient.send_status == SendStatus.SENT
        assert recipient.signing_status == SigningStatus.SIGNED

        field = await _one(test_session, DocumentField)
        assert field.type == FieldType.SIGNATURE
        assert field.page == 0
        assert Decimal(field.position_x) == Decimal("77")
        assert Decimal(field.position_y) == Decimal("638")
        assert field.inserted is False
        assert field.custom_text == ""
        assert field.recipient_id == recipient.id

        signature = await _one(test_session, Signature)
        assert signature.field_id == field.id
        assert signature.recipient_id == recipient.id
        assert signature.typed_signature == "Jane Supporter"
        assert signature.signature_image_as_base64 is None

        ledger = await _one(test_session, ProvisionedCheckoutSession)
        assert ledger.session_id == "cs_test_1"
        assert ledger.event_id == "evt_1"
        assert ledger.document_id == document.id

    async def test_signature_text_overrides_user_name(self, test_session, supporter):
        await PledgeProvisioningService(test_session).provision(
            _session(supporter.id, signatureText="J. Supporter")
        )

        signature = await _one(test_session, Signature)
        assert signature.typed_signature == "J. Supporter"
        recipient = await _one(test_session, Recipient)
        assert recipient.name == "Jane Supporter"

    async def test_user_without_name(self, test_session):
        user = User(email="anon@example.com", name=None)
        test_session.add(user)
        await test_session.commit()

        await PledgeProvisioningService(test_session).provision(_session(user.id))

        recipient = await _one(test_session, Recipient)
        assert recipient.name == ""
        signature = await _one(test_session, Signature)
        assert signature.typed_signature == ""


@pytest.mark.asyncio
class TestProvisionImageSignature:
    async def test_cached_image_is_used(self, test_session, supporter, signature_png):
        cache = SignatureCache()
        await cache.put("upload-42", signature_png)

        await PledgeProvisioningService(test_session, cache).provision(
            _session(supporter.id, signatureDataUrl="upload-42", signatureText="Ignored Text")
        )

        signature = await _one(test_session, Signature)
        assert signature.signature_image_as_base64 == signature_png
        assert signature.typed_signature is None
        document_data = await _one(test_session, DocumentData)
        assert document_data.data != document_data.initial_data

    async def test_cache_miss_falls_back_to_typed_text(self, test_session, supporter):
        await PledgeProvisioningService(test_session).provision(
            _session(supporter.id, signatureDataUrl="expired-upload")
        )

        signature = await _one(test_session, Signature)
        assert signature.signature_image_as_base64 is None
        assert signature.typed_signature == "Jane Supporter"


@pytest.mark.asyncio
class TestProvisionPreconditions:
    async def test_other_source_is_ignored(self, test_session, supporter):
        payload = CheckoutSessionPayload(
            id="cs_pricing",
            client_reference_id=str(supporter.id),
            metadata={"source": "pricing"},
        )

        result = await PledgeProvisioningService(test_session).provision(payload)

        assert result["action"] == "ignored"
        for model in ALL_PLEDGE_MODELS:
            assert await _count(test_session, model) == 0

    @pytest.mark.parametrize("reference", [None, "not-a-uuid", str(uuid.uuid4())])
    async def test_unknown_user(self, test_session, reference):
        payload = CheckoutSessionPayload(
            id="cs_1", client_reference_id=reference, metadata={"source": "landing"}
        )

        with pytest.raises(UserNotFoundError):
            await PledgeProvisioningService(test_session).provision(payload)

        for model in ALL_PLEDGE_MODELS:
            assert await _count(test_session, model) == 0


@pytest.mark.asyncio
class TestProvisionAtomicity:
    async def test_same_session_is_provisioned_once(self, test_session, supporter):
        service = PledgeProvisioningService(test_session)
        user_id = supporter.id

        first = await service.provision(_session(user_id))
        second = await service.provision(_session(user_id))

        assert first["action"] == "pledge_provisioned"
        assert second["action"] == "already_provisioned"
        for model in ALL_PLEDGE_MODELS:
            assert await _count(test_session, model) == 1

    async def test_different_sessions_get_separate_documents(self, test_session, supporter):
        service = PledgeProvisioningService(test_session)
        user_id = supporter.id

        await service.provision(_session(user_id, session_id="cs_a"))
        await service.provision(_session(user_id, session_id="cs_b"))

        assert await _count(test_session, Document) == 2

    async def test_stamping_failure_persists_nothing(self, test_session, supporter):
        target = (
            "signhook.api.modules.v1.documents.service."
            "pledge_provisioning_service.insert_text_in_pdf"
        )
        with patch(target, side_effect=ValueError("Page 0 out of range")):
            with pytest.raises(ValueError):
                await PledgeProvisioningService(test_session).provision(_session(supporter.id))

        for model in ALL_PLEDGE_MODELS:
            assert await _count(test_session, model) == 0

    async def test_missing_template_persists_nothing(self, test_session, supporter, monkeypatch, tmp_path):
        monkeypatch.setattr(settings, "PLEDGE_TEMPLATE_PATH", str(tmp_path / "missing.pdf"))

        with pytest.raises(FileNotFoundError):
            await PledgeProvisioningService(test_session).provision(_session(supporter.id))

        for model in ALL_PLEDGE_MODELS:
            assert await _count(test_session, model) == 0

    async def test_failed_attempt_can_be_retried(self, test_session, supporter):
        user_id = supporter.id
        target = (
            "signhook.api.modules.v1.documents.service."
            "pledge_provisioning_service.insert_text_in_pdf"
        )
        with patch(target, side_effect=ValueError("boom")):
            with pytest.raises(ValueError):
                await PledgeProvisioningService(test_session).provision(_session(user_id))

        result = await PledgeProvisioningService(test_session).provision(_session(user_id))

        assert result["action"] == "pledge_provisioned"
        assert await _count(test_session, Document) == 1
