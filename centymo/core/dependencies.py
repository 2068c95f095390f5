from fastapi import Request

from centymo.shared.datasource import DataSource
from centymo.shared.labels import LabelCatalog


def get_datasource(request: Request) -> DataSource:
    """DataSource configurado en create_app()"""
    return request.app.state.datasource


def get_labels(request: Request) -> LabelCatalog:
    return request.app.state.labels


async def get_form_value(request: Request, key: str) -> str:
    """
    Valor de la query o, si no viene, del body del formulario.

    Las acciones de fila (delete, set-status) reciben el id como
    ?id=... desde las acciones de fila pero también pueden recibirlo en el form.
    """
    value = request.query_params.get(key, "")
    if value:
        return value
    form = await request.form()
    return str(form.get(key) or "")


async def get_form_list(request: Request, key: str) -> list:
    """Valores repetidos de un campo (ids de bulk actions)"""
    form = await request.form()
    return [str(value) for value in form.getlist(key) if value]
