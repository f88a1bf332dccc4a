"""
Model Mapping Tests

Tests for ORM mapper configuration.
"""

import warnings

from sqlalchemy import inspect
from sqlalchemy.exc import SADeprecationWarning
from sqlalchemy.orm import configure_mappers


class TestMappers:

    def test_configure_without_deprecation_warnings(self):
        import dynamix.models  # noqa: F401

        with warnings.catch_warnings():
            warnings.simplefilter("error", SADeprecationWarning)
            configure_mappers()

    def test_relationships(self):
        from dynamix.models import Enrollment, User

        assert list(inspect(User).relationships.keys()) == []
        assert list(inspect(Enrollment).relationships.keys()) == ["completions"]

    def test_enrollment_keeps_user_foreign_key(self):
        from dynamix.models import Enrollment

        foreign_keys = {fk.target_fullname for fk in Enrollment.__table__.foreign_keys}
        assert foreign_keys == {"users.id"}
