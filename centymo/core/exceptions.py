"""
Excepciones del back-office.

ActionError y PageError son las dos salidas de error de las vistas:
las acciones HTMX devuelven un header HX-Error-Message y las páginas
completas renderizan una página de error.
"""

from typing import Any, Dict, Optional


class CentymoException(Exception):
    """
    Excepción base del back-office.

    Todas las excepciones propias heredan de esta clase para un
    manejo de errores consistente.
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class DataSourceError(CentymoException):
    """Fallo del backend de datos (conexión, serialización, etc.)"""


class RecordNotFoundError(DataSourceError):
    """El registro pedido no existe en la colección"""

    def __init__(self, collection: str, record_id: str) -> None:
        self.collection = collection
        self.record_id = record_id
        super().__init__(
            f"Record '{record_id}' not found in '{collection}'",
            {"collection": collection, "id": record_id},
        )


class ActionError(CentymoException):
    """
    Error de una acción HTMX (/action/...).

    Se convierte en una respuesta 422 con el mensaje en el header
    HX-Error-Message para que el drawer lo muestre.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 422,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.status_code = status_code
        super().__init__(message, details)


class PageError(CentymoException):
    """
    Error al cargar una página completa (/app/...).

    Se renderiza con la plantilla errors/page.html.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.status_code = status_code
        super().__init__(message, details)
