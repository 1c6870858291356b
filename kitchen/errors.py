import re

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy.exc import IntegrityError


class ApiError(Exception):
    """Base for errors that map to a ``{"ok": false, "error": ...}`` reply."""

    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def __str__(self):
        return f"[{self.status_code}] {self.message}"


class BadRequest(ApiError):
    status_code = 400


class Unauthorized(ApiError):
    status_code = 401


class Forbidden(ApiError):
    status_code = 403


class NotFound(ApiError):
    status_code = 404


class Conflict(ApiError):
    status_code = 409


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"ok": False, "error": message})


def first_validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    err = errors[0]
    # loc looks like ("body", "title") or ("query", "userId")
    fields = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
    msg = err.get("msg", "Invalid value")
    if fields:
        return f"{'.'.join(fields)}: {msg}"
    return msg


# sqlite: "UNIQUE constraint failed: users.email"
# postgres: 'Key (email)=(a@b.c) already exists.'
_UNIQUE_SQLITE = re.compile(r"UNIQUE constraint failed: \w+\.(\w+)")
_UNIQUE_PG = re.compile(r"Key \((\w+)\)=")

# column -> wire name; columns not listed here (id_sequences.prefix, ...) are
# internal and answer a generic "Duplicate key"
_FIELD_NAMES = {
    "user_id": "userId",
    "recipe_id": "recipeId",
    "inventory_id": "inventoryId",
    "email": "email",
}


def conflict_message(exc: IntegrityError) -> str:
    text = str(exc.orig) if exc.orig is not None else str(exc)
    match = _UNIQUE_SQLITE.search(text) or _UNIQUE_PG.search(text)
    if not match:
        return "Duplicate key"
    field = _FIELD_NAMES.get(match.group(1))
    if field is None:
        return "Duplicate key"
    return f"{field} already exists"


async def api_error_handler(request: Request, exc: ApiError):
    logger.warning(f"{request.method} {request.url.path} -> {exc}")
    return error_response(exc.status_code, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError):
    message = first_validation_message(exc)
    logger.warning(f"{request.method} {request.url.path} -> [400] {message}")
    return error_response(400, message)


async def integrity_error_handler(request: Request, exc: IntegrityError):
    message = conflict_message(exc)
    logger.warning(f"{request.method} {request.url.path} -> [409] {message}")
    return error_response(409, message)


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.opt(exception=exc).error(f"{request.method} {request.url.path} failed")
    return error_response(500, "Server error")


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
