"""Response envelopes shared by every endpoint."""

from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field

DataT = TypeVar("DataT")


class SuccessResponse(BaseModel, Generic[DataT]):
    """Standard ``{status, data}`` envelope for successful responses."""

    model_config = ConfigDict(populate_by_name=True)

    status: Literal["success"] = "success"
    data: DataT


class ErrorResponse(BaseModel):
    """Standard ``{status, message}`` envelope for error responses."""

    status: Literal["fail", "error"] = Field(description="'fail' for 4xx, 'error' for 5xx")
    message: str


class HealthCheckResponse(BaseModel):
    """Health check payload."""

    status: Literal["success"] = "success"
    message: str = "Server is running"
    timestamp: str
    database: Literal["up", "down"] | None = None
