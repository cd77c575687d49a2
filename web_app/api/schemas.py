"""Pydantic schemas for API requests and responses."""

import json
from typing import Dict

from pydantic import BaseModel, ConfigDict, Field

from shortlink.common.validators import normalize_url, validate
from shortlink.errors import ValidationError


class ShortenRequest(BaseModel):
    """Request to shorten a URL."""

    url: str = Field(..., description="The URL to shorten")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"url": "https://example.com/very/long/path/to/resource"},
            ]
        }
    }

    @classmethod
    def from_body(cls, body: bytes) -> "ShortenRequest":
        """Parse a raw request body, naming exactly what is wrong with it.

        Raises:
            ValidationError: MALFORMED_JSON, MISSING_FIELD or INVALID_URL
        """
        try:
            payload = json.loads(body)
        except ValueError as e:
            raise ValidationError(ValidationError.MALFORMED_JSON, detail=str(e)) from e

        url = payload.get("url") if isinstance(payload, dict) else None
        if not url:
            raise ValidationError(ValidationError.MISSING_FIELD)

        if not isinstance(url, str):
            raise ValidationError(ValidationError.INVALID_URL)

        url = normalize_url(url)
        if not validate(url):
            raise ValidationError(ValidationError.INVALID_URL)

        return cls(url=url)


class ShortenResponse(BaseModel):
    """Response after shortening a URL."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {"shortUrl": "https://short.link/ab12cd", "id": "ab12cd"}
            ]
        },
    )

    short_url: str = Field(..., alias="shortUrl", description="The complete short URL")
    id: str = Field(..., description="The allocated identifier")


class ErrorResponse(BaseModel):
    """Error response."""

    error: str = Field(..., description="Error message")


class ApiInfoResponse(BaseModel):
    """Static description of the API."""

    message: str
    usage: str
    endpoints: Dict[str, str]


API_INFO = ApiInfoResponse(
    message="URL Shortener API",
    usage="Send POST request with JSON { url: 'https://example.com' }",
    endpoints={
        "POST /": "Create short URL",
        "GET /:code": "Redirect to original URL",
    },
)
