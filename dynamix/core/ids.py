"""
Identifier Generation

Opaque string ids for stored entities. Every generated id goes through
new_id so the scheme can change without touching callers.
"""

import uuid

USER_PREFIX = "u"
COURSE_PREFIX = "c"
MODULE_PREFIX = "m"


def new_id(prefix: str) -> str:
    """Return a new unique id such as ``c-1f0e...``."""
    return f"{prefix}-{uuid.uuid4().hex}"
