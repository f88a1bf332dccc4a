"""
User Service Tests

Tests for user creation, lookup and profile updates.
"""

import pytest


class TestCreateUser:
    """Tests for user creation."""

    @pytest.mark.asyncio
    async def test_stores_lowercase_email_and_hash(self, db):
        from dynamix.services import user_service

        user = await user_service.create_user(
            db, name="Ada Lovelace", email="Ada@Example.COM", password="analytical"
        )

        assert user.email == "ada@example.com"
        assert user.password_hash != "analytical"
        assert user.id.startswith("u-")
        assert user.avatar_url.endswith("seed=AdaLovelace")

    @pytest.mark.asyncio
    async def test_duplicate_email_ignores_case(self, db, student):
        from dynamix.core.exceptions import ConflictError
        from dynamix.services import user_service

        with pytest.raises(ConflictError) as exc_info:
            await user_service.create_user(
                db, name="Copy", email="STUDENT@demo.com", password="whatever1"
            )

        assert exc_info.value.status_code == 400
        assert exc_info.value.detail == "User already exists"

    @pytest.mark.asyncio
    async def test_lookup_by_email_ignores_case(self, db, student):
        from dynamix.services import user_service

        found = await user_service.get_user_by_email("Student@Demo.com", db)

        assert found is not None
        assert found.id == "s1"


class TestUpdateUser:
    """Tests for partial profile updates."""

    @pytest.mark.asyncio
    async def test_only_provided_fields_change(self, db, student):
        from dynamix.schemas.user import UserUpdate
        from dynamix.services import user_service

        original_avatar = student.avatar_url

        user = await user_service.update_user(
            "s1", UserUpdate.model_validate({"name": "Johnny"}), db
        )

        assert user.name == "Johnny"
        assert user.email == "student@demo.com"
        assert user.avatar_url == original_avatar

    @pytest.mark.asyncio
    async def test_email_taken_by_another_user(self, db, student, teacher):
        from dynamix.core.exceptions import ConflictError
        from dynamix.schemas.user import UserUpdate
        from dynamix.services import user_service

        with pytest.raises(ConflictError):
            await user_service.update_user(
                "s1", UserUpdate.model_validate({"email": "Teacher@demo.com"}), db
            )

    @pytest.mark.asyncio
    async def test_keeping_own_email_is_allowed(self, db, student):
        from dynamix.schemas.user import UserUpdate
        from dynamix.services import user_service

        user = await user_service.update_user(
            "s1", UserUpdate.model_validate({"email": "STUDENT@demo.com"}), db
        )

        assert user.email == "student@demo.com"

    @pytest.mark.asyncio
    async def test_missing_user(self, db):
        from dynamix.core.exceptions import NotFoundError
        from dynamix.schemas.user import UserUpdate
        from dynamix.services import user_service

        with pytest.raises(NotFoundError):
            await user_service.update_user("nobody", UserUpdate(name="X"), db)
