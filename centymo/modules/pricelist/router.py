# centymo/modules/pricelist/router.py
from fastapi import APIRouter, Depends, Form, Request
from typing import Annotated

from centymo.config.settings import settings
from centymo.core.dependencies import get_datasource, get_form_list, get_form_value, get_labels
from centymo.core.htmx import action_response
from centymo.core.templates import render_page, render_partial
from centymo.shared import routes
from centymo.shared.datasource import DataSource
from centymo.shared.labels import LabelCatalog
from .service import PriceListService
from .schemas import PriceListFormRequest, PriceProductFormRequest

router = APIRouter(tags=["Price Lists"])


def get_price_list_service(
    db: DataSource = Depends(get_datasource),
    labels: LabelCatalog = Depends(get_labels)
) -> PriceListService:
    return PriceListService(db, labels, default_currency=settings.default_currency)

# ==================== PÁGINAS ====================
# El listado va antes que /app/price-lists/{id}

@router.get("/app/price-lists/list")
@router.get(routes.PRICE_LIST_LIST_URL)
async def price_list_list_page(
    request: Request,
    status: str = "active",
    service: PriceListService = Depends(get_price_list_service)
):
    data = service.get_list_page(status, current_path=request.url.path)
    return render_page(request, "pricelist/list.html", {"page": data.page, "table": data.table})

@router.get(routes.PRICE_LIST_DETAIL_URL)
async def price_list_detail_page(
    request: Request,
    id: str,
    tab: str = "basic",
    service: PriceListService = Depends(get_price_list_service)
):
    """
    Detalle de lista de precios: basic, prices
    """
    data = service.get_detail_page(id, tab, current_path=request.url.path)
    return render_page(request, "pricelist/detail.html", {"page": data.page, "detail": data})

# ==================== CRUD DE LISTA ====================

@router.get(routes.PRICE_LIST_ADD_URL)
async def price_list_add_form(request: Request, service: PriceListService = Depends(get_price_list_service)):
    return render_partial(request, "pricelist/drawer_form.html", {"form": service.get_add_form()})

@router.post(routes.PRICE_LIST_ADD_URL)
async def price_list_add(
    form: Annotated[PriceListFormRequest, Form()],
    service: PriceListService = Depends(get_price_list_service)
):
    return action_response(service.create_price_list(form))

@router.get(routes.PRICE_LIST_EDIT_URL)
async def price_list_edit_form(
    request: Request,
    id: str,
    service: PriceListService = Depends(get_price_list_service)
):
    return render_partial(request, "pricelist/drawer_form.html", {"form": service.get_edit_form(id)})

@router.post(routes.PRICE_LIST_EDIT_URL)
async def price_list_edit(
    id: str,
    form: Annotated[PriceListFormRequest, Form()],
    service: PriceListService = Depends(get_price_list_service)
):
    return action_response(service.update_price_list(id, form))

@router.post(routes.PRICE_LIST_DELETE_URL)
async def price_list_delete(request: Request, service: PriceListService = Depends(get_price_list_service)):
    price_list_id = await get_form_value(request, "id")
    return action_response(service.delete_price_list(price_list_id))

@router.post(routes.PRICE_LIST_BULK_DELETE_URL)
async def price_list_bulk_delete(request: Request, service: PriceListService = Depends(get_price_list_service)):
    price_list_ids = await get_form_list(request, "id")
    return action_response(service.bulk_delete(price_list_ids))

# ==================== PRECIOS POR PRODUCTO ====================

@router.get(routes.PRICE_PRODUCT_ADD_URL)
async def price_product_add_form(
    request: Request,
    id: str,
    service: PriceListService = Depends(get_price_list_service)
):
    return render_partial(request, "pricelist/price_product_form.html", {"form": service.get_price_product_form(id)})

@router.post(routes.PRICE_PRODUCT_ADD_URL)
async def price_product_add(
    id: str,
    form: Annotated[PriceProductFormRequest, Form()],
    service: PriceListService = Depends(get_price_list_service)
):
    return action_response(service.add_price_product(id, form))

@router.post(routes.PRICE_PRODUCT_DELETE_URL)
async def price_product_delete(
    request: Request,
    id: str,
    service: PriceListService = Depends(get_price_list_service)
):
    price_product_id = await get_form_value(request, "id")
    return action_response(service.delete_price_product(price_product_id))
