"""
Base schemas and common response models.
"""
from typing import Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
    )


class CamelSchema(BaseSchema):
    """
    Schema whose JSON keys are camelCase (userId, newBalance, ...).

    Used for the request/response bodies the web client already speaks;
    Python code still uses snake_case attribute names.
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


class SuccessResponse(CamelSchema):
    """{"success": true} acknowledgement, with an optional message."""

    success: bool = True
    message: Optional[str] = None

