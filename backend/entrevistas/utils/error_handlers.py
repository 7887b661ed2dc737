"""
Centralized error handling and user-facing error messages.
"""
import logging

from fastapi import HTTPException
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


# User-facing error messages (Spanish, like the rest of the API surface)
ERROR_MESSAGES = {
    # Requests
    "create_failed": "Error al crear la solicitud",
    "list_failed": "Error al obtener solicitudes",
    "confirm_failed": "Error al confirmar la cita",
    "reject_failed": "Error al rechazar solicitud",
    "duplicate_email": "Ya existe un aspirante registrado con este correo.",

    # Recruiters
    "recruiters_failed": "Error al obtener reclutadores",

    # General
    "invalid_reference": "Referencia inválida. El registro relacionado no existe.",
    "invalid_data": "Los datos enviados no son válidos.",
    "server_error": "Ocurrió un error en el servidor. Intenta de nuevo más tarde.",
    "database_error": "Problema de conexión con la base de datos. Intenta de nuevo más tarde.",
}


def get_error_message(error_key: str, default: str | None = None) -> str:
    """Get a user-facing error message."""
    return ERROR_MESSAGES.get(error_key, default or ERROR_MESSAGES["server_error"])


def handle_database_error(error: Exception, operation: str = "", default_key: str = "server_error") -> HTTPException:
    """Map a database exception to an HTTPException with a user-facing message."""
    # Match on the driver error only; the wrapped SQL text can contain anything.
    root = getattr(error, "orig", None) or error
    error_str = str(root).lower()
    logger.debug("Mapping database error during %s: %s", operation, root)

    if "duplicate" in error_str or "unique" in error_str:
        return HTTPException(
            status_code=409,
            detail=get_error_message("duplicate_email"),
        )

    if "foreign key" in error_str:
        return HTTPException(
            status_code=400,
            detail=get_error_message("invalid_reference"),
        )

    if "check constraint" in error_str or "not null" in error_str:
        return HTTPException(
            status_code=400,
            detail=get_error_message("invalid_data"),
        )

    if "could not connect" in error_str or "connection refused" in error_str:
        return HTTPException(
            status_code=503,
            detail=get_error_message("database_error"),
        )

    return HTTPException(
        status_code=500,
        detail=get_error_message(default_key),
    )


def create_error_response(status_code: int, message: str, details: dict | None = None) -> JSONResponse:
    """Create a standardized error response."""
    content = {
        "success": False,
        "error": message,
        "status_code": status_code,
    }

    if details:
        content["details"] = details

    return JSONResponse(status_code=status_code, content=content)
