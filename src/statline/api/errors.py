"""
Error responses for the API layer.

Every error leaves the service as ``{"message": "..."}`` with a fixed,
user-facing message; internal details are only logged.
"""

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse


class APIError(HTTPException):
    """Base API error carrying the status code and public message."""

    def __init__(
        self,
        status_code: int,
        message: str,
        headers: dict[str, str] | None = None,
    ):
        self.message = message
        super().__init__(status_code=status_code, detail=message, headers=headers)


class BadRequestError(APIError):
    """A required parameter is missing (400)."""

    def __init__(self, message: str):
        super().__init__(status_code=400, message=message)


class InternalError(APIError):
    """Any failure while serving a request (500)."""

    def __init__(self, message: str):
        super().__init__(status_code=500, message=message)


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """
    FastAPI exception handler for APIError.

    Converts APIError exceptions to ``{"message": ...}`` JSON responses.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message},
        headers=exc.headers,
    )
