"""Errores con payload uniforme {statusCode, title, detail: {message}}."""

from enum import Enum

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from servicio_funcionarios.logging_funcionarios import get_logger

logger = get_logger("errors")

TITULO_VALIDACAO = "Erro na validação de dados"


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND_REFERENCE = "not-found-reference"
    CONFLICT = "conflict"
    NOT_FOUND = "not-found"
    UNAUTHORIZED = "unauthorized"
    INVALID_FIELD = "invalid-field"


class ErrorResponse(Exception):
    def __init__(self, status_code: int, title: str, message: str, kind: ErrorKind):
        super().__init__(message)
        self.status_code = status_code
        self.title = title
        self.message = message
        self.kind = kind

    def to_dict(self) -> dict:
        return payload(self.status_code, self.title, self.message)


def payload(status_code: int, title: str, message: str) -> dict:
    return {"statusCode": status_code, "title": title, "detail": {"message": message}}


# === Factories ===
def validation_error(message: str) -> ErrorResponse:
    return ErrorResponse(status.HTTP_400_BAD_REQUEST, TITULO_VALIDACAO, message, ErrorKind.VALIDATION)


def reference_not_found(title: str, message: str) -> ErrorResponse:
    return ErrorResponse(status.HTTP_400_BAD_REQUEST, title, message, ErrorKind.NOT_FOUND_REFERENCE)


def conflict(title: str, message: str) -> ErrorResponse:
    return ErrorResponse(status.HTTP_400_BAD_REQUEST, title, message, ErrorKind.CONFLICT)


def not_found(title: str, message: str) -> ErrorResponse:
    return ErrorResponse(status.HTTP_404_NOT_FOUND, title, message, ErrorKind.NOT_FOUND)


def unauthorized(title: str, message: str) -> ErrorResponse:
    return ErrorResponse(status.HTTP_401_UNAUTHORIZED, title, message, ErrorKind.UNAUTHORIZED)


def invalid_field(field) -> ErrorResponse:
    return ErrorResponse(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Erro interno do servidor",
        f"Campo inválido para busca: {field}",
        ErrorKind.INVALID_FIELD,
    )


# === Handlers ===
async def error_response_handler(request: Request, exc: ErrorResponse) -> JSONResponse:
    if exc.kind is ErrorKind.INVALID_FIELD:
        logger.error("Busca por campo não permitido", extra={"path": request.url.path, "kind": exc.kind.value})
    else:
        logger.info(exc.title, extra={"path": request.url.path, "kind": exc.kind.value, "status": exc.status_code})
    headers = {"WWW-Authenticate": "Bearer"} if exc.kind is ErrorKind.UNAUTHORIZED else None
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    first = exc.errors()[0] if exc.errors() else {}
    campo = ".".join(str(p) for p in first.get("loc", ()) if p != "body") or "body"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=payload(status.HTTP_400_BAD_REQUEST, TITULO_VALIDACAO, f"O campo '{campo}' é inválido"),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=payload(exc.status_code, "Erro na requisição", str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Erro não tratado", extra={"path": request.url.path})
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=payload(status.HTTP_500_INTERNAL_SERVER_ERROR, "Erro interno do servidor", "Ocorreu um erro inesperado"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ErrorResponse, error_response_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
