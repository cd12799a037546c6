"""Error response body."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """Body of every non-2xx response.

    Example:
        {
            "statusCode": 400,
            "error": "Bad Request",
            "message": "Sorting by field 'secret' is not allowed. Allowed fields are: id, name",
            "type": "invalid-field",
            "instance": "/api/v1/categories",
            "request_id": "4f1c2a3b..."
        }
    """

    statusCode: int = Field(ge=400, le=599, description="HTTP status code")  # noqa: N815
    error: str = Field(min_length=1, description="HTTP reason phrase")
    message: str = Field(description="Human-readable explanation of this occurrence")
    type: str | None = Field(default=None, description="Machine-readable error type")
    instance: str | None = Field(default=None, description="Request path")
    request_id: str | None = Field(default=None, description="Request correlation id")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "statusCode": 400,
                "error": "Bad Request",
                "message": "Invalid cursor format",
                "type": "invalid-cursor",
                "instance": "/api/v1/categories",
            }
        },
    )


__all__ = ["ErrorResponse"]
