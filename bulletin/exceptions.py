"""
Domain errors and their HTTP rendering.

Services raise the subclasses of ``BoardApiError`` below; the handlers
registered by ``register_exception_handlers`` turn them into JSON
responses of the form ``{"code": ..., "message": ..., "detail": ...}``.
None of these errors are transient, so callers should not retry them.
Storage failures are deliberately not part of this hierarchy.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class BoardApiError(Exception):
    """Base class for client-input errors raised by the service layer."""

    status_code: int = 400
    code: str = "BAD_REQUEST"

    def __init__(self, message: str, detail: dict | None = None) -> None:
        self.message = message
        self.detail = detail
        super().__init__(message)


class NotFound(BoardApiError):
    status_code = 404
    code = "NOT_FOUND"

    def __init__(self, entity: str, entity_id) -> None:
        super().__init__(
            f"{entity} not found",
            detail={"entity": entity.lower(), "id": entity_id},
        )


class DuplicateName(BoardApiError):
    status_code = 409
    code = "DUPLICATE_NAME"

    def __init__(self, name: str) -> None:
        super().__init__("A board with this name already exists", detail={"name": name})


class DuplicateUsername(BoardApiError):
    status_code = 409
    code = "DUPLICATE_USERNAME"

    def __init__(self, username: str) -> None:
        super().__init__("This username is already taken", detail={"username": username})


class DuplicateNickname(BoardApiError):
    status_code = 409
    code = "DUPLICATE_NICKNAME"

    def __init__(self, nickname: str) -> None:
        super().__init__("This nickname is already taken", detail={"nickname": nickname})


class Forbidden(BoardApiError):
    status_code = 403
    code = "FORBIDDEN"


class InvalidCredentials(BoardApiError):
    status_code = 401
    code = "INVALID_CREDENTIALS"

    def __init__(self) -> None:
        # One message for "no such user" and "wrong password".
        super().__init__("Unknown user or wrong password")


class InvalidSearchType(BoardApiError):
    status_code = 400
    code = "INVALID_SEARCH_TYPE"

    def __init__(self, search_type: str, allowed: list[str]) -> None:
        super().__init__(
            f"Invalid search type: {search_type}",
            detail={"search_type": search_type, "allowed": allowed},
        )


# ---------------------------------------------------------------------------
# FastAPI handlers
# ---------------------------------------------------------------------------

async def board_api_error_handler(request: Request, exc: BoardApiError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"code": exc.code, "message": exc.message, "detail": exc.detail},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"code": "INTERNAL_ERROR", "message": "Internal server error", "detail": None},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BoardApiError, board_api_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
