"""Base schema for inbound request payloads."""

from pydantic import BaseModel, ConfigDict


class RequestModel(BaseModel):
    """Base class for every request body the API accepts.

    Fields that are not declared on the schema are rejected instead of being
    silently dropped, and declared fields are coerced into their declared
    types before a handler sees them.
    """

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)
