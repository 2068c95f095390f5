# centymo/modules/sales/router.py
from fastapi import APIRouter, Depends, Form, Request
from typing import Annotated

from centymo.config.settings import settings
from centymo.core.dependencies import get_datasource, get_form_list, get_form_value, get_labels
from centymo.core.htmx import action_response
from centymo.core.templates import render_page, render_partial
from centymo.shared import routes
from centymo.shared.datasource import DataSource
from centymo.shared.labels import LabelCatalog
from .service import SalesService
from .schemas import DiscountFormRequest, LineItemFormRequest, PaymentFormRequest, SaleFormRequest

router = APIRouter(tags=["Sales"])


def get_sales_service(
    db: DataSource = Depends(get_datasource),
    labels: LabelCatalog = Depends(get_labels)
) -> SalesService:
    return SalesService(db, labels, default_currency=settings.default_currency)

# ==================== PÁGINAS ====================

@router.get("/app/sales/list")
@router.get(routes.SALES_LIST_URL)
async def sales_list_page(
    request: Request,
    status: str = "active",
    service: SalesService = Depends(get_sales_service)
):
    """
    Listado de ventas por estado (active, completed, cancelled)
    """
    data = service.get_list_page(status, current_path=request.url.path)
    return render_page(request, "sales/list.html", {"page": data.page, "table": data.table})

@router.get(routes.SALES_DETAIL_URL)
async def sales_detail_page(
    request: Request,
    id: str,
    tab: str = "info",
    service: SalesService = Depends(get_sales_service)
):
    """
    Detalle de venta con pestañas: info, items, payment, audit
    """
    data = service.get_detail_page(id, tab, current_path=request.url.path)
    return render_page(request, "sales/detail.html", {"page": data.page, "detail": data})

@router.get(routes.SALES_TAB_ACTION_URL)
async def sales_detail_tab(
    request: Request,
    id: str,
    tab: str,
    service: SalesService = Depends(get_sales_service)
):
    """Contenido de una pestaña para intercambio HTMX"""
    data = service.get_detail_page(id, tab, current_path=request.url.path)
    return render_partial(request, "sales/tab.html", {"detail": data})

# ==================== CRUD DE VENTA ====================

@router.get(routes.SALES_ADD_URL)
async def sales_add_form(request: Request, service: SalesService = Depends(get_sales_service)):
    return render_partial(request, "sales/drawer_form.html", {"form": service.get_add_form()})

@router.post(routes.SALES_ADD_URL)
async def sales_add(
    form: Annotated[SaleFormRequest, Form()],
    service: SalesService = Depends(get_sales_service)
):
    return action_response(service.create_sale(form))

@router.get(routes.SALES_EDIT_URL)
async def sales_edit_form(request: Request, id: str, service: SalesService = Depends(get_sales_service)):
    return render_partial(request, "sales/drawer_form.html", {"form": service.get_edit_form(id)})

@router.post(routes.SALES_EDIT_URL)
async def sales_edit(
    id: str,
    form: Annotated[SaleFormRequest, Form()],
    service: SalesService = Depends(get_sales_service)
):
    return action_response(service.update_sale(id, form))

@router.post(routes.SALES_DELETE_URL)
async def sales_delete(request: Request, service: SalesService = Depends(get_sales_service)):
    sale_id = await get_form_value(request, "id")
    return action_response(service.delete_sale(sale_id))

@router.post(routes.SALES_BULK_DELETE_URL)
async def sales_bulk_delete(request: Request, service: SalesService = Depends(get_sales_service)):
    sale_ids = await get_form_list(request, "id")
    return action_response(service.bulk_delete(sale_ids))

# ==================== ESTADOS ====================

@router.post(routes.SALES_SET_STATUS_URL)
async def sales_set_status(request: Request, service: SalesService = Depends(get_sales_service)):
    """
    Cambiar estado de una venta (ongoing, complete, cancelled)

    Completar descuenta stock; cancelar libera los seriales.
    """
    sale_id = await get_form_value(request, "id")
    target_status = await get_form_value(request, "status")
    return action_response(service.set_status(sale_id, target_status))

@router.post(routes.SALES_BULK_SET_STATUS_URL)
async def sales_bulk_set_status(request: Request, service: SalesService = Depends(get_sales_service)):
    sale_ids = await get_form_list(request, "id")
    target_status = await get_form_value(request, "target_status")
    return action_response(service.bulk_set_status(sale_ids, target_status))

# ==================== LINE ITEMS ====================

@router.get(routes.SALES_LINE_ITEM_TABLE_URL)
async def sales_line_item_table(request: Request, id: str, service: SalesService = Depends(get_sales_service)):
    return render_partial(request, "components/table.html", {"table": service.get_line_item_table(id)})

@router.get(routes.SALES_LINE_ITEM_ADD_URL)
async def sales_line_item_add_form(request: Request, id: str, service: SalesService = Depends(get_sales_service)):
    return render_partial(request, "sales/line_item_form.html", {"form": service.get_line_item_add_form(id)})

@router.post(routes.SALES_LINE_ITEM_ADD_URL)
async def sales_line_item_add(
    id: str,
    form: Annotated[LineItemFormRequest, Form()],
    service: SalesService = Depends(get_sales_service)
):
    return action_response(service.add_line_item(id, form))

@router.get(routes.SALES_LINE_ITEM_EDIT_URL)
async def sales_line_item_edit_form(
    request: Request,
    id: str,
    item_id: str,
    service: SalesService = Depends(get_sales_service)
):
    form = service.get_line_item_edit_form(id, item_id)
    return render_partial(request, "sales/line_item_form.html", {"form": form})

@router.post(routes.SALES_LINE_ITEM_EDIT_URL)
async def sales_line_item_edit(
    id: str,
    item_id: str,
    form: Annotated[LineItemFormRequest, Form()],
    service: SalesService = Depends(get_sales_service)
):
    return action_response(service.update_line_item(id, item_id, form))

@router.post(routes.SALES_LINE_ITEM_REMOVE_URL)
async def sales_line_item_remove(request: Request, id: str, service: SalesService = Depends(get_sales_service)):
    item_id = await get_form_value(request, "itemId")
    return action_response(service.remove_line_item(id, item_id))

@router.get(routes.SALES_LINE_ITEM_DISCOUNT_URL)
async def sales_discount_form(request: Request, id: str, service: SalesService = Depends(get_sales_service)):
    return render_partial(request, "sales/discount_form.html", {"form": service.get_discount_form(id)})

@router.post(routes.SALES_LINE_ITEM_DISCOUNT_URL)
async def sales_discount_add(
    id: str,
    form: Annotated[DiscountFormRequest, Form()],
    service: SalesService = Depends(get_sales_service)
):
    return action_response(service.add_discount(id, form))

# ==================== PAGOS ====================

@router.get(routes.SALES_PAYMENT_TABLE_URL)
async def sales_payment_table(request: Request, id: str, service: SalesService = Depends(get_sales_service)):
    return render_partial(request, "components/table.html", {"table": service.get_payment_table(id)})

@router.get(routes.SALES_PAYMENT_ADD_URL)
async def sales_payment_add_form(request: Request, id: str, service: SalesService = Depends(get_sales_service)):
    return render_partial(request, "sales/payment_form.html", {"form": service.get_payment_add_form(id)})

@router.post(routes.SALES_PAYMENT_ADD_URL)
async def sales_payment_add(
    id: str,
    form: Annotated[PaymentFormRequest, Form()],
    service: SalesService = Depends(get_sales_service)
):
    return action_response(service.add_payment(id, form))

@router.get(routes.SALES_PAYMENT_EDIT_URL)
async def sales_payment_edit_form(
    request: Request,
    id: str,
    payment_id: str,
    service: SalesService = Depends(get_sales_service)
):
    form = service.get_payment_edit_form(id, payment_id)
    return render_partial(request, "sales/payment_form.html", {"form": form})

@router.post(routes.SALES_PAYMENT_EDIT_URL)
async def sales_payment_edit(
    id: str,
    payment_id: str,
    form: Annotated[PaymentFormRequest, Form()],
    service: SalesService = Depends(get_sales_service)
):
    return action_response(service.update_payment(id, payment_id, form))

@router.post(routes.SALES_PAYMENT_REMOVE_URL)
async def sales_payment_remove(request: Request, id: str, service: SalesService = Depends(get_sales_service)):
    payment_id = await get_form_value(request, "id")
    return action_response(service.remove_payment(payment_id))
