"""
Configuración de logging del back-office.

Formato legible para desarrollo o JSON estructurado para producción,
con request id propagado por contextvars.
"""

import json
import logging
import sys
from contextvars import ContextVar
from typing import Any, Dict, Optional
from uuid import uuid4

# Request id por petición (se propaga entre llamadas async)
request_id_context: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


class StructuredFormatter(logging.Formatter):
    """Formatter JSON para agregadores de logs"""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        request_id = request_id_context.get()
        if request_id:
            log_data["request_id"] = request_id

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class HumanReadableFormatter(logging.Formatter):
    """Formato de una línea para desarrollo local"""

    def format(self, record: logging.LogRecord) -> str:
        request_id = request_id_context.get()
        prefix = f"[req:{request_id[:8]}] " if request_id else ""
        message = (
            f"{self.formatTime(record, self.datefmt)} {record.levelname:8} "
            f"[{record.name}] {prefix}{record.getMessage()}"
        )

        if record.exc_info:
            message += f"\n{self.formatException(record.exc_info)}"

        return message


def setup_logging(
    log_level: str = "INFO",
    service_name: str = "centymo",
    use_json: bool = False,
) -> logging.Logger:
    """
    Configurar el logger raíz de la aplicación.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR o CRITICAL
        service_name: nombre del logger del servicio
        use_json: usar formato JSON en lugar del legible

    Returns:
        Logger del servicio
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    formatter: logging.Formatter
    if use_json:
        formatter = StructuredFormatter(datefmt="%Y-%m-%d %H:%M:%S")
    else:
        formatter = HumanReadableFormatter(datefmt="%Y-%m-%d %H:%M:%S")

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # Menos ruido de librerías
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    logger = logging.getLogger(service_name)
    logger.setLevel(numeric_level)
    return logger


def set_request_id(request_id: Optional[str] = None) -> str:
    """Fijar el request id del contexto; genera uno nuevo si no se pasa"""
    if request_id is None:
        request_id = str(uuid4())
    request_id_context.set(request_id)
    return request_id


def clear_request_id() -> None:
    request_id_context.set(None)
