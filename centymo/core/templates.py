"""
Renderizado de plantillas Jinja2.

Las plantillas viven en centymo/templates/<módulo>/*.html; las páginas
extienden layouts/base.html y los fragmentos HTMX se renderizan solos.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from fastapi import Request
from fastapi.templating import Jinja2Templates

from centymo.core.htmx import is_htmx
from centymo.shared.labels import LOCATION_MAP
from centymo.shared.records import format_price

BASE_PATH = Path(__file__).resolve().parent.parent
TEMPLATES_DIR = BASE_PATH / "templates"

# Módulos con plantillas propias
TEMPLATE_MODULES = [
    "plan",
    "subscription",
    "product",
    "paymentcollection",
    "inventory",
    "sales",
    "pricelist",
]

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def money(amount: Any, currency: str = "PHP") -> str:
    try:
        value = float(amount or 0)
    except (TypeError, ValueError):
        return str(amount)
    return format_price(currency, value)


def tojson_attr(value: Any) -> str:
    """JSON compacto para atributos hx-vals / data-*"""
    return json.dumps(value, separators=(",", ":"))


templates.env.filters["money"] = money
templates.env.filters["tojson_attr"] = tojson_attr
templates.env.globals["locations"] = LOCATION_MAP


def template_patterns() -> List[str]:
    """Globs de las plantillas de cada módulo (para apps que montan su propio loader)"""
    return [str(TEMPLATES_DIR / module / "*.html") for module in TEMPLATE_MODULES]


def render_page(
    request: Request,
    name: str,
    context: Optional[Dict[str, Any]] = None,
    status_code: int = 200,
):
    """
    Renderizar una página completa.

    Si la petición viene de HTMX (navegación con hx-boost o tabs) se
    devuelve sólo el bloque de contenido sin el layout.
    """
    ctx = dict(context or {})
    ctx.setdefault("hx_partial", is_htmx(request) and not request.headers.get("HX-Boosted"))
    ctx.setdefault("app_name", getattr(request.app.state, "app_name", "Centymo"))
    return templates.TemplateResponse(
        request=request,
        name=name,
        context=ctx,
        status_code=status_code,
    )


def render_partial(
    request: Request,
    name: str,
    context: Optional[Dict[str, Any]] = None,
    status_code: int = 200,
):
    """Renderizar un fragmento (drawer, tabla, tab) para HTMX"""
    return templates.TemplateResponse(
        request=request,
        name=name,
        context=dict(context or {}),
        status_code=status_code,
    )
