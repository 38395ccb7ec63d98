"""Dispatcher-level result model."""

from pydantic import BaseModel, Field


class FocusResult(BaseModel):
    """Uniform outcome of a focus/input request, local or forwarded."""

    success: bool
    message: str = ""
    error_kind: str | None = Field(
        default=None,
        description="Name of the error class that caused a failure",
    )

    @classmethod
    def failure(cls, error: Exception) -> "FocusResult":
        return cls(success=False, message=str(error), error_kind=type(error).__name__)
