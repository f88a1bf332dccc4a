"""
Client Store Tests

Drives ClientStore against the in-process app.
"""

import httpx
import pytest
import pytest_asyncio


STUDENT_PASSWORD = "student-pass"
TEACHER_PASSWORD = "teacher-pass"


@pytest_asyncio.fixture
async def store(app):
    from dynamix.client import ClientStore, build_http_client

    transport = httpx.ASGITransport(app=app)
    async with build_http_client("http://test/api", transport=transport) as http:
        yield ClientStore(http)


class TestSession:
    """Tests for login, logout and profile."""

    @pytest.mark.asyncio
    async def test_login_loads_enrollments(self, store, db, student, course):
        from dynamix.services import enrollment_service

        await enrollment_service.enroll("s1", "c1", db)

        user = await store.login("student@demo.com", STUDENT_PASSWORD)

        assert user["id"] == "s1"
        assert "accessToken" not in user
        assert store.token
        assert store.get_enrollment("c1")["progress"] == 0

    @pytest.mark.asyncio
    async def test_login_failure_carries_server_message(self, store, student):
        from dynamix.client import ClientError

        with pytest.raises(ClientError) as exc_info:
            await store.login("student@demo.com", "wrong")

        assert exc_info.value.message == "Invalid credentials"
        assert exc_info.value.status_code == 401
        assert store.user is None

    @pytest.mark.asyncio
    async def test_logout_clears_session(self, store, db, student, course):
        from dynamix.services import enrollment_service

        await enrollment_service.enroll("s1", "c1", db)
        await store.login("student@demo.com", STUDENT_PASSWORD)

        store.logout()

        assert store.user is None
        assert store.token is None
        assert store.get_enrollment("c1") is None

    @pytest.mark.asyncio
    async def test_register_picks_up_auto_enrollment(self, store, course):
        user = await store.register("Jane Doe", "jane@demo.com", "secret-password")

        assert user["role"] == "STUDENT"
        assert store.get_enrollment("c1") is not None

    @pytest.mark.asyncio
    async def test_update_profile(self, store, student):
        await store.login("student@demo.com", STUDENT_PASSWORD)

        user = await store.update_profile(name="Johnny")

        assert user["name"] == "Johnny"
        assert store.user["name"] == "Johnny"

    @pytest.mark.asyncio
    async def test_actions_require_sign_in(self, store):
        from dynamix.client import ClientError

        with pytest.raises(ClientError):
            await store.enroll("c1")


class TestCatalog:
    """Tests for course mutations refreshing the cache."""

    @pytest.mark.asyncio
    async def test_add_update_delete_course(self, store, teacher):
        await store.login("teacher@demo.com", TEACHER_PASSWORD)

        created = await store.add_course(
            {"title": "Async Python", "instructorId": "t1", "modules": [{"title": "Event loop"}]}
        )
        assert store.get_course(created["id"])["title"] == "Async Python"

        await store.update_course(created["id"], {"title": "Async Python, Revised"})
        assert store.get_course(created["id"])["title"] == "Async Python, Revised"

        await store.delete_course(created["id"])
        assert store.get_course(created["id"]) is None
        assert store.courses.values() == []

    @pytest.mark.asyncio
    async def test_validation_errors_are_readable(self, store, teacher):
        from dynamix.client import ClientError

        with pytest.raises(ClientError) as exc_info:
            await store.add_course({"instructorId": "t1"})

        assert exc_info.value.status_code == 422
        assert exc_info.value.message


class TestLearning:
    """Tests for enrolling and progress."""

    @pytest.mark.asyncio
    async def test_enroll_complete_and_quiz(self, store, student, course):
        await store.login("student@demo.com", STUDENT_PASSWORD)

        await store.enroll("c1")
        assert store.get_enrollment("c1")["progress"] == 0

        await store.update_progress("c1", "m1")
        assert store.get_enrollment("c1")["progress"] == 50

        result = await store.submit_quiz("c1", "m2", [0])
        assert result["passed"] is False
        assert store.get_enrollment("c1")["progress"] == 50

        result = await store.submit_quiz("c1", "m2", [1])
        assert result["passed"] is True
        assert store.get_enrollment("c1")["completedModuleIds"] == ["m1", "m2"]
        assert store.get_enrollment("c1")["progress"] == 100

    @pytest.mark.asyncio
    async def test_progress_error_message(self, store, student, course):
        from dynamix.client import ClientError

        await store.login("student@demo.com", STUDENT_PASSWORD)

        with pytest.raises(ClientError) as exc_info:
            await store.update_progress("c1", "m1")

        assert exc_info.value.message == "Enrollment not found"
