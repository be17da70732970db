"""Pydantic schemas for API requests and responses."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ShortenRequest(CamelModel):
    """Request to shorten a URL.

    Both fields are checked by the service so that missing or bad values
    produce the same 400 body as every other validation failure.
    """

    original_url: Optional[str] = Field(None, description="The URL to shorten")
    custom_name: Optional[str] = Field(None, description="Optional custom short code")

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {"originalUrl": "https://example.com/very/long/path/to/resource"},
                {"originalUrl": "https://github.com/user/repo", "customName": "my-repo"},
            ]
        },
    )


class ShortenResponse(CamelModel):
    """Response after shortening a URL."""

    success: bool = True
    short_url: str = Field(..., description="The complete short URL")
    short_code: str = Field(..., description="The short code")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field("OK", description="Overall status")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""

    success: bool = False
    message: str = Field(..., description="Error message")
