"""
Shared pydantic configuration for API schemas.

The API speaks camelCase JSON (numEmployees, logoUrl, isAdmin, ...) while
Python code and ORM rows use snake_case.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema: camelCase on the wire, snake_case attributes."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class UpdateModel(CamelModel):
    """
    Base schema for PATCH bodies.

    Unknown fields are rejected, so only the declared fields can reach the
    partial-update builder.
    """
    model_config = ConfigDict(extra="forbid")

    def to_update_data(self) -> dict:
        """Fields the client actually sent, keyed by their camelCase name."""
        return self.model_dump(by_alias=True, exclude_unset=True)


class DeletedResponse(BaseModel):
    deleted: str
