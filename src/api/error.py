"""API error type

Use-case errors surface to clients as ``{"error": {"code", "message", "reason"}}``.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse
from src.app.result import Error


class ClientError(Exception):
    """Raised by routes to return an error result with an HTTP status"""

    def __init__(self, error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        super().__init__(error.message)
        self.error = error
        self.status_code = status_code


async def client_error_handler(request: Request, exc: ClientError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.error.model_dump(exclude_none=True)},
    )
