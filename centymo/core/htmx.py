"""
Respuestas HTMX de las acciones.

- éxito: 200 + HX-Trigger {"formSuccess": true, "refreshTable": "<tabla>"}
- redirección: 200 + HX-Trigger {"formSuccess": true} + HX-Redirect
- error: 422 + HX-Error-Message
"""

import json
from typing import Optional

from fastapi import Request
from fastapi.responses import Response

HX_TRIGGER = "HX-Trigger"
HX_REDIRECT = "HX-Redirect"
HX_ERROR_MESSAGE = "HX-Error-Message"


def is_htmx(request: Request) -> bool:
    return request.headers.get("HX-Request", "").lower() == "true"


def htmx_success(table_id: Optional[str] = None) -> Response:
    """Cerrar el drawer y refrescar la tabla indicada"""
    trigger = {"formSuccess": True}
    if table_id:
        trigger["refreshTable"] = table_id
    return Response(status_code=200, headers={HX_TRIGGER: json.dumps(trigger)})


def htmx_redirect(url: str) -> Response:
    return Response(
        status_code=200,
        headers={
            HX_TRIGGER: json.dumps({"formSuccess": True}),
            HX_REDIRECT: url,
        },
    )


def htmx_error(message: str, status_code: int = 422) -> Response:
    return Response(status_code=status_code, headers={HX_ERROR_MESSAGE: message})


def action_response(result) -> Response:
    """Convertir un ActionResult de los services en la respuesta HTMX"""
    if result.redirect_url:
        return htmx_redirect(result.redirect_url)
    return htmx_success(result.refresh_table)
