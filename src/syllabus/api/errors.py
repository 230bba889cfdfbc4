"""Error responses for the Syllabus API.

Every error body has the same shape:

    {"messages": [{"code": "NotFound", "messageType": "Error",
                   "text": "Course with id 7 not found",
                   "timestamp": "2026-03-02T09:15:04.112000+00:00"}]}
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from enum import Enum

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from syllabus.catalog.errors import NotFoundError as CatalogNotFoundError

logger = logging.getLogger(__name__)


class MessageType(str, Enum):
    ERROR = "Error"
    WARNING = "Warning"
    INFO = "Info"
    EXCEPTION = "Exception"


class Message(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    code: str
    message_type: MessageType = Field(serialization_alias="messageType")
    text: str
    timestamp: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())


class Result(BaseModel):
    messages: list[Message]


def error_response(
    status_code: int,
    code: str,
    text: str,
    message_type: MessageType = MessageType.ERROR,
) -> JSONResponse:
    """Build a JSONResponse carrying a single-message Result."""
    body = Result(messages=[Message(code=code, message_type=message_type, text=text)])
    return JSONResponse(
        status_code=status_code, content=body.model_dump(mode="json", by_alias=True)
    )


class ApiError(HTTPException):
    """HTTP error raised from a router, rendered as a Result."""

    code = "Error"

    def __init__(self, status_code: int, text: str):
        super().__init__(status_code=status_code, detail=text)
        self.text = text


class BadRequestError(ApiError):
    code = "BadRequest"

    def __init__(self, text: str):
        super().__init__(400, text)


async def api_exception_handler(request: Request, exc: ApiError) -> JSONResponse:
    return error_response(exc.status_code, exc.code, exc.text)


async def catalog_not_found_handler(request: Request, exc: CatalogNotFoundError) -> JSONResponse:
    return error_response(404, "NotFound", str(exc))


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    problems = [
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    ]
    return error_response(400, "BadRequest", "; ".join(problems))


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return error_response(
        500, "InternalServerError", "An unexpected error occurred", MessageType.EXCEPTION
    )
