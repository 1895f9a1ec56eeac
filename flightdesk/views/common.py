"""Common response schemas."""

from typing import Any, Optional

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    detail: Any
    code: Optional[str] = None


class MessageResponse(BaseModel):
    message: str
