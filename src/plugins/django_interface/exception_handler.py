"""
Tradução das exceções de domínio para respostas HTTP.

Registrado em REST_FRAMEWORK["EXCEPTION_HANDLER"]; o que não for
exceção de domínio segue para o handler padrão do DRF.
"""
import pydantic
import structlog
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from labora_core.core.domain.exceptions import (
    AuthError,
    ExportError,
    InvalidArgument,
    InvalidStateTransition,
    NotFoundError,
    PersistenceError,
    ValidationError,
)

logger = structlog.get_logger(__name__)


def _pydantic_errors(exc: pydantic.ValidationError) -> list[dict[str, str]]:
    return [
        {"path": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
        for err in exc.errors()
    ]


def labora_exception_handler(exc, context):  # noqa: PLR0911
    view = type(context.get("view")).__name__ if context.get("view") else None
    log = logger.bind(view=view, error=type(exc).__name__)

    if isinstance(exc, ValidationError):
        log.info("http.validation_error", fields=[e.path for e in exc.errors])
        return Response(
            {"detail": exc.message, "errors": [{"path": e.path, "message": e.message} for e in exc.errors]},
            status=status.HTTP_400_BAD_REQUEST,
        )
    if isinstance(exc, pydantic.ValidationError):
        log.info("http.payload_error")
        return Response(
            {"detail": "Dados inválidos.", "errors": _pydantic_errors(exc)},
            status=status.HTTP_400_BAD_REQUEST,
        )
    if isinstance(exc, InvalidArgument):
        log.info("http.invalid_argument", detail=exc.message)
        return Response({"detail": exc.message}, status=status.HTTP_400_BAD_REQUEST)
    if isinstance(exc, InvalidStateTransition):
        log.info("http.invalid_transition", current=exc.current, target=exc.target)
        return Response(
            {"detail": exc.message, "current": exc.current, "target": exc.target},
            status=status.HTTP_409_CONFLICT,
        )
    if isinstance(exc, AuthError):
        code = status.HTTP_400_BAD_REQUEST if exc.code == "sign_up_failed" else status.HTTP_401_UNAUTHORIZED
        log.info("http.auth_error", code=exc.code)
        return Response({"detail": exc.message, "code": exc.code}, status=code)
    if isinstance(exc, NotFoundError):
        log.info("http.not_found", detail=exc.message)
        return Response({"detail": exc.message}, status=status.HTTP_404_NOT_FOUND)
    if isinstance(exc, PersistenceError):
        log.error("http.persistence_error", detail=exc.message, upstream_status=exc.status_code)
        return Response({"detail": exc.message}, status=status.HTTP_502_BAD_GATEWAY)
    if isinstance(exc, ExportError):
        log.error("http.export_error")
        return Response({"detail": exc.message}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return exception_handler(exc, context)
