"""
Schema Base

Shared Pydantic configuration: camelCase on the wire, snake_case in Python.
"""

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class APIModel(BaseModel):
    """Base schema serializing field names as camelCase."""

    model_config = {
        "from_attributes": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }
