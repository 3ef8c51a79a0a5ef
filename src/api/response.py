"""
Uniform response envelope.

Every endpoint, successful or not, answers with
``{success, message, data, status_code, error}``.
"""

from typing import Any, Generic, Optional, TypeVar

from fastapi.responses import JSONResponse
from pydantic import BaseModel

from src.libs.result import Error

T = TypeVar("T")


class ErrorBody(BaseModel):
    code: str
    message: str


class ApiResponse(BaseModel, Generic[T]):
    success: bool
    message: str
    data: Optional[T] = None
    status_code: int
    error: Optional[ErrorBody] = None


def success(data: Any, message: str = "Success", status_code: int = 200) -> ApiResponse:
    return ApiResponse(success=True, message=message, data=data, status_code=status_code)


def fail(error: Error, status_code: int, message: Optional[str] = None) -> JSONResponse:
    message = message or error.message or "Failure"
    body = ApiResponse(
        success=False,
        message=message,
        data=None,
        status_code=status_code,
        error=ErrorBody(code=error.code, message=message),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))
