"""
Response bodies for failed requests.

Domain and HTTP errors render as ErrorResponse; request schema failures
render as ValidationErrorResponse with one entry per offending field.
"""

from pydantic import BaseModel, Field
from typing import Optional


class ErrorResponse(BaseModel):
    error: str = Field(..., description="Human-readable message")
    code: Optional[str] = Field(None, description="Stable machine-readable code, e.g. TODO_NOT_FOUND")


class FieldError(BaseModel):
    field: str = Field(..., description="Dotted path of the field, e.g. title")
    message: str


class ValidationErrorResponse(BaseModel):
    error: str = "Invalid request data"
    details: list[FieldError]
