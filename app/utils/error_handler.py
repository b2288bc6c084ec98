"""
Excepciones del cliente Poynt.

Validación de opciones (antes de cualquier llamada HTTP) y errores de
transporte del executor por defecto.
"""

import logging
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

logger = logging.getLogger(__name__)


class ErrorCode(Enum):
    """
    Códigos de error del cliente.
    """

    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"
    POYNT_CONNECTION_FAILED = "POYNT_CONNECTION_FAILED"
    POYNT_API_ERROR = "POYNT_API_ERROR"
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"


class AppException(Exception):
    """
    Excepción base del cliente.

    Attributes:
        message: Mensaje legible
        error_code: Código de error
        status_code: Código HTTP asociado
        is_retryable: Si tiene sentido repetir la llamada
        details: Contexto para logging
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        status_code: int = 500,
        is_retryable: bool = False,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.is_retryable = is_retryable
        self.details = details or {}

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"


class MissingFieldException(AppException):
    """
    Campos identificadores ausentes en las opciones de una operación.

    `field` es el primer campo faltante y `fields` la lista completa,
    en el orden en que se verificaron.
    """

    def __init__(self, fields: Sequence[str], operation: Optional[str] = None):
        self.fields: List[str] = list(fields)
        self.field = self.fields[0] if self.fields else None
        self.operation = operation

        message = f"Missing required field(s): {', '.join(self.fields)}"
        if operation:
            message = f"{operation}: {message}"

        super().__init__(
            message=message,
            error_code=ErrorCode.MISSING_REQUIRED_FIELD,
            status_code=422,
            details={"missing_fields": self.fields, "operation": operation},
        )


class PoyntAPIException(AppException):
    """
    Error de la API de Poynt o de la red hacia ella.

    Sin `api_response_code` el error es de conexión; un 429 marca
    `rate_limited` con el `retry_after` del header.
    """

    def __init__(
        self,
        message: str,
        api_response_code: Optional[int] = None,
        endpoint: Optional[str] = None,
        method: Optional[str] = None,
        rate_limited: bool = False,
        retry_after: Optional[int] = None,
        response_body: Any = None,
    ):
        if rate_limited:
            error_code = ErrorCode.RATE_LIMIT_EXCEEDED
        elif api_response_code is None:
            error_code = ErrorCode.POYNT_CONNECTION_FAILED
        else:
            error_code = ErrorCode.POYNT_API_ERROR

        # 4xx (salvo 429) no se resuelven reintentando
        is_retryable = rate_limited or api_response_code is None or api_response_code >= 500

        super().__init__(
            message=message,
            error_code=error_code,
            status_code=api_response_code or 503,
            is_retryable=is_retryable,
            details={"endpoint": endpoint, "method": method, "retry_after": retry_after},
        )

        self.api_response_code = api_response_code
        self.endpoint = endpoint
        self.method = method
        self.rate_limited = rate_limited
        self.retry_after = retry_after
        self.response_body = response_body


def log_error(exception: Exception, context: Optional[Dict[str, Any]] = None, level: int = logging.ERROR) -> None:
    """
    Registra un error con su código y contexto como campos extra.

    Args:
        exception: Excepción a registrar
        context: Contexto adicional (p.ej. business_id)
        level: Nivel de logging
    """
    extra = {"exception_type": type(exception).__name__, **(context or {})}

    if isinstance(exception, AppException):
        extra.update(exception.details)
        extra["error_code"] = exception.error_code.value
        extra["is_retryable"] = exception.is_retryable

    logger.log(level, str(exception), extra=extra)
