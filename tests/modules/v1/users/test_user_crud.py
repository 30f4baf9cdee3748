import uuid

import pytest

from signhook.api.modules.v1.users.models import User
from signhook.api.modules.v1.users.service.user import UserCRUD


@pytest.mark.asyncio
class TestUserCRUD:
    async def test_get_by_id(self, test_session):
        user = User(email="jane@example.com", name="Jane")
        test_session.add(user)
        await test_session.commit()

        found = await UserCRUD.get_by_id(test_session, user.id)

        assert found is not None
        assert found.email == "jane@example.com"

    async def test_get_by_id_unknown(self, test_session):
        assert await UserCRUD.get_by_id(test_session, uuid.uuid4()) is None

    async def test_get_by_reference(self, test_session):
        user = User(email="jane@example.com", name="Jane")
        test_session.add(user)
        await test_session.commit()

        found = await UserCRUD.get_by_reference(test_session, str(user.id))

        assert found is not None
        assert found.id == user.id

    @pytest.mark.parametrize("reference", [None, "", "42", "not-a-uuid"])
    async def test_get_by_reference_rejects_malformed(self, test_session, reference):
        assert await UserCRUD.get_by_reference(test_session, reference) is None
