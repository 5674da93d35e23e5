from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SuccessResponse(BaseModel):
    message: str = "success"
    data: Any | None = None


class ErrorResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    error_code: str = Field(..., alias="errorCode")
    details: Any | None = None
