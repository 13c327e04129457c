"""Shared pydantic configuration for request/response DTOs."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case attributes on the Python side, camelCase keys on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RequestModel(CamelModel):
    """Request bodies reject keys they do not declare."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")
