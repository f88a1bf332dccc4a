"""
Client Store

Async client-side view of the LMS: the signed-in user, the course catalog
and that user's enrollments.

Every mutation goes to the server first and then re-fetches the affected
collection, so the local caches only ever hold what the server returned.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

import httpx

from dynamix.client.cache import EntityCache
from dynamix.client.transport import request_with_retry


logger = logging.getLogger(__name__)

Entity = Dict[str, Any]


class ClientError(Exception):
    """A failed API call. ``message`` is the server's error text."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def error_message(response: httpx.Response) -> str:
    """Extract the server's ``detail`` text from an error response."""
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"

    detail = body.get("detail") if isinstance(body, dict) else None
    if isinstance(detail, str):
        return detail
    if detail:
        # Validation errors: list of {"loc": ..., "msg": ...}
        return "; ".join(str(item.get("msg", item)) for item in detail)
    return f"HTTP {response.status_code}"


class ClientStore:
    """
    Session-scoped LMS client.

    Usage:
        async with build_http_client("http://localhost:5000/api") as http:
            store = ClientStore(http)
            await store.login("student@demo.com", "password")
            await store.refresh_courses()
            await store.enroll("c1")
    """

    def __init__(self, client: httpx.AsyncClient, cache_ttl: int = 300):
        self._client = client
        self.user: Optional[Entity] = None
        self.token: Optional[str] = None
        self.courses: EntityCache[Entity] = EntityCache(default_ttl=cache_ttl)
        # Keyed by courseId; a user has at most one enrollment per course
        self.enrollments: EntityCache[Entity] = EntityCache(default_ttl=cache_ttl)

    # ============== Plumbing ==============

    def _headers(self) -> Dict[str, str]:
        if self.token:
            return {"Authorization": f"Bearer {self.token}"}
        return {}

    async def _request(
        self,
        method: str,
        url: str,
        retry: bool = False,
        **kwargs: Any,
    ) -> Any:
        kwargs.setdefault("headers", self._headers())
        if retry:
            response = await request_with_retry(method, url, client=self._client, **kwargs)
        else:
            response = await self._client.request(method, url, **kwargs)

        if response.is_error:
            message = error_message(response)
            logger.debug("%s %s -> %d: %s", method, url, response.status_code, message)
            raise ClientError(message, status_code=response.status_code)
        return response.json()

    def _require_user(self) -> Entity:
        if self.user is None:
            raise ClientError("Not signed in")
        return self.user

    def _sign_in(self, auth: Entity) -> Entity:
        self.token = auth.pop("accessToken", None)
        auth.pop("tokenType", None)
        self.user = auth
        return auth

    # ============== Session ==============

    async def login(self, email: str, password: str) -> Entity:
        """Sign in and load the user's enrollments."""
        auth = await self._request(
            "POST", "/auth/login", json={"email": email, "password": password}
        )
        user = self._sign_in(auth)
        await self.refresh_enrollments()
        return user

    async def register(
        self,
        name: str,
        email: str,
        password: str,
        role: str = "STUDENT",
    ) -> Entity:
        """Create an account, sign in, and load any auto-enrollment."""
        auth = await self._request(
            "POST",
            "/auth/register",
            json={"name": name, "email": email, "password": password, "role": role},
        )
        user = self._sign_in(auth)
        await self.refresh_enrollments()
        return user

    def logout(self) -> None:
        self.user = None
        self.token = None
        self.enrollments.clear()

    async def update_profile(self, **updates: Any) -> Entity:
        """
        Update the signed-in user's profile.

        Keyword arguments use wire names: ``name``, ``email``, ``avatarUrl``.
        """
        user = self._require_user()
        self.user = await self._request("PUT", f"/users/{user['id']}", json=updates)
        return self.user

    # ============== Courses ==============

    async def refresh_courses(self) -> List[Entity]:
        courses = await self._request("GET", "/courses", retry=True)
        self.courses.replace_all({course["id"]: course for course in courses})
        return courses

    def get_course(self, course_id: str) -> Optional[Entity]:
        return self.courses.get(course_id)

    async def add_course(self, course: Entity) -> Entity:
        created = await self._request("POST", "/courses", json=course)
        await self.refresh_courses()
        return created

    async def update_course(self, course_id: str, updates: Entity) -> Entity:
        updated = await self._request("PUT", f"/courses/{course_id}", json=updates, retry=True)
        await self.refresh_courses()
        return updated

    async def delete_course(self, course_id: str) -> None:
        await self._request("DELETE", f"/courses/{course_id}", retry=True)
        await self.refresh_courses()

    # ============== Enrollments ==============

    async def refresh_enrollments(self) -> List[Entity]:
        if self.user is None:
            self.enrollments.clear()
            return []

        enrollments = await self._request(
            "GET", "/enrollments", params={"userId": self.user["id"]}, retry=True
        )
        self.enrollments.replace_all(
            {enrollment["courseId"]: enrollment for enrollment in enrollments}
        )
        return enrollments

    def get_enrollment(self, course_id: str) -> Optional[Entity]:
        return self.enrollments.get(course_id)

    async def enroll(self, course_id: str) -> Entity:
        user = self._require_user()
        enrollment = await self._request(
            "POST", "/enrollments", json={"userId": user["id"], "courseId": course_id}
        )
        await self.refresh_enrollments()
        return enrollment

    async def update_progress(self, course_id: str, module_id: str) -> Entity:
        """Mark a module complete. Safe to retry: completion is idempotent."""
        user = self._require_user()
        enrollment = await self._request(
            "PUT",
            "/enrollments/progress",
            json={"userId": user["id"], "courseId": course_id, "moduleId": module_id},
            retry=True,
        )
        await self.refresh_enrollments()
        return enrollment

    async def submit_quiz(
        self,
        course_id: str,
        module_id: str,
        answers: Sequence[Optional[int]],
    ) -> Entity:
        user = self._require_user()
        result = await self._request(
            "POST",
            "/enrollments/quiz",
            json={
                "userId": user["id"],
                "courseId": course_id,
                "moduleId": module_id,
                "answers": list(answers),
            },
        )
        await self.refresh_enrollments()
        return result
