# centymo/modules/inventory/router.py
from fastapi import APIRouter, Depends, Form, Request
from typing import Annotated

from centymo.config.settings import settings
from centymo.core.dependencies import get_datasource, get_form_list, get_form_value, get_labels
from centymo.core.exceptions import PageError
from centymo.core.htmx import action_response
from centymo.core.templates import render_page, render_partial
from centymo.shared import routes
from centymo.shared.datasource import DataSource
from centymo.shared.labels import LabelCatalog
from .service import InventoryService
from .schemas import (
    DepreciationFormRequest, InventoryFormRequest, SerialFormRequest, TransactionFormRequest
)

router = APIRouter(tags=["Inventory"])

DASHBOARD_PARTIALS = ("stats", "chart", "movements", "alerts")


def get_inventory_service(
    db: DataSource = Depends(get_datasource),
    labels: LabelCatalog = Depends(get_labels)
) -> InventoryService:
    return InventoryService(db, labels, default_location=settings.default_location)

# ==================== PÁGINAS ====================

@router.get("/app/inventory/list")
@router.get(routes.INVENTORY_LIST_URL)
async def inventory_list_page(
    request: Request,
    location: str = "",
    service: InventoryService = Depends(get_inventory_service)
):
    """
    Listado de inventario de una ubicación
    """
    data = service.get_list_page(location, current_path=request.url.path)
    return render_page(request, "inventory/list.html", {"page": data.page, "table": data.table})

@router.get(routes.INVENTORY_DETAIL_URL)
async def inventory_detail_page(
    request: Request,
    id: str,
    tab: str = "info",
    service: InventoryService = Depends(get_inventory_service)
):
    """
    Detalle de item con pestañas: info, attributes, serials, transactions,
    depreciation, audit
    """
    data = service.get_detail_page(id, tab, current_path=request.url.path)
    return render_page(request, "inventory/detail.html", {"page": data.page, "detail": data})

@router.get(routes.INVENTORY_TAB_ACTION_URL)
async def inventory_detail_tab(
    request: Request,
    id: str,
    tab: str,
    service: InventoryService = Depends(get_inventory_service)
):
    data = service.get_detail_page(id, tab, current_path=request.url.path)
    return render_partial(request, "inventory/tab.html", {"detail": data})

@router.get(routes.INVENTORY_DASHBOARD_URL)
async def inventory_dashboard_page(request: Request, service: InventoryService = Depends(get_inventory_service)):
    data = service.get_dashboard_page(current_path=request.url.path)
    return render_page(request, "inventory/dashboard.html", {"page": data.page, "dashboard": data})

@router.get(routes.INVENTORY_DASHBOARD_PARTIAL_URL)
async def inventory_dashboard_partial(
    request: Request,
    partial: str,
    service: InventoryService = Depends(get_inventory_service)
):
    """Fragmentos del dashboard cargados con hx-get"""
    if partial not in DASHBOARD_PARTIALS:
        raise PageError(f"unknown dashboard partial: {partial}", status_code=404)

    context = {"labels": service.l, "partial": partial}
    if partial == "stats":
        context["widgets"] = service.build_dashboard_widgets()
    elif partial == "movements":
        context["movements"] = service.get_recent_movements()
    elif partial == "alerts":
        context["alerts"] = service.get_low_stock_alerts()

    return render_partial(request, "inventory/dashboard_partial.html", context)

@router.get(routes.INVENTORY_MOVEMENTS_URL)
async def inventory_movements_page(request: Request, service: InventoryService = Depends(get_inventory_service)):
    data = service.get_movements_page(current_path=request.url.path)
    return render_page(request, "inventory/movements.html", {"page": data.page, "table": data.table})

# ==================== CRUD DE ITEM ====================

@router.get(routes.INVENTORY_ADD_URL)
async def inventory_add_form(request: Request, service: InventoryService = Depends(get_inventory_service)):
    return render_partial(request, "inventory/drawer_form.html", {"form": service.get_add_form()})

@router.post(routes.INVENTORY_ADD_URL)
async def inventory_add(
    form: Annotated[InventoryFormRequest, Form()],
    service: InventoryService = Depends(get_inventory_service)
):
    return action_response(service.create_item(form))

@router.get(routes.INVENTORY_EDIT_URL)
async def inventory_edit_form(request: Request, id: str, service: InventoryService = Depends(get_inventory_service)):
    return render_partial(request, "inventory/drawer_form.html", {"form": service.get_edit_form(id)})

@router.post(routes.INVENTORY_EDIT_URL)
async def inventory_edit(
    id: str,
    form: Annotated[InventoryFormRequest, Form()],
    service: InventoryService = Depends(get_inventory_service)
):
    return action_response(service.update_item(id, form))

@router.post(routes.INVENTORY_DELETE_URL)
async def inventory_delete(request: Request, service: InventoryService = Depends(get_inventory_service)):
    item_id = await get_form_value(request, "id")
    return action_response(service.delete_item(item_id))

@router.post(routes.INVENTORY_BULK_DELETE_URL)
async def inventory_bulk_delete(request: Request, service: InventoryService = Depends(get_inventory_service)):
    item_ids = await get_form_list(request, "id")
    return action_response(service.bulk_delete(item_ids))

@router.post(routes.INVENTORY_SET_STATUS_URL)
async def inventory_set_status(request: Request, service: InventoryService = Depends(get_inventory_service)):
    item_id = await get_form_value(request, "id")
    target_status = await get_form_value(request, "status")
    return action_response(service.set_status(item_id, target_status))

@router.post(routes.INVENTORY_BULK_SET_STATUS_URL)
async def inventory_bulk_set_status(request: Request, service: InventoryService = Depends(get_inventory_service)):
    item_ids = await get_form_list(request, "id")
    target_status = await get_form_value(request, "target_status")
    return action_response(service.bulk_set_status(item_ids, target_status))

# ==================== SERIALES ====================

@router.get(routes.INVENTORY_SERIAL_TABLE_URL)
async def inventory_serial_table(request: Request, id: str, service: InventoryService = Depends(get_inventory_service)):
    return render_partial(request, "components/table.html", {"table": service.get_serial_table(id)})

@router.get(routes.INVENTORY_SERIAL_ASSIGN_URL)
async def inventory_serial_assign_form(
    request: Request,
    id: str,
    service: InventoryService = Depends(get_inventory_service)
):
    return render_partial(request, "inventory/serial_form.html", {"form": service.get_serial_assign_form(id)})

@router.post(routes.INVENTORY_SERIAL_ASSIGN_URL)
async def inventory_serial_assign(
    id: str,
    form: Annotated[SerialFormRequest, Form()],
    service: InventoryService = Depends(get_inventory_service)
):
    return action_response(service.assign_serial(id, form))

@router.get(routes.INVENTORY_SERIAL_EDIT_URL)
async def inventory_serial_edit_form(
    request: Request,
    id: str,
    sid: str,
    service: InventoryService = Depends(get_inventory_service)
):
    return render_partial(request, "inventory/serial_form.html", {"form": service.get_serial_edit_form(id, sid)})

@router.post(routes.INVENTORY_SERIAL_EDIT_URL)
async def inventory_serial_edit(
    id: str,
    sid: str,
    form: Annotated[SerialFormRequest, Form()],
    service: InventoryService = Depends(get_inventory_service)
):
    return action_response(service.update_serial(sid, form))

@router.post(routes.INVENTORY_SERIAL_REMOVE_URL)
async def inventory_serial_remove(request: Request, id: str, service: InventoryService = Depends(get_inventory_service)):
    serial_id = await get_form_value(request, "id")
    return action_response(service.remove_serial(serial_id))

# ==================== MOVIMIENTOS ====================

@router.get(routes.INVENTORY_TRANSACTION_TABLE_URL)
async def inventory_transaction_table(
    request: Request,
    id: str,
    service: InventoryService = Depends(get_inventory_service)
):
    return render_partial(request, "components/table.html", {"table": service.get_transaction_table(id)})

@router.get(routes.INVENTORY_TRANSACTION_ASSIGN_URL)
async def inventory_transaction_form(
    request: Request,
    id: str,
    service: InventoryService = Depends(get_inventory_service)
):
    return render_partial(request, "inventory/transaction_form.html", {"form": service.get_transaction_form(id)})

@router.post(routes.INVENTORY_TRANSACTION_ASSIGN_URL)
async def inventory_transaction_record(
    id: str,
    form: Annotated[TransactionFormRequest, Form()],
    service: InventoryService = Depends(get_inventory_service)
):
    """
    Registrar movimiento de stock

    received/returned suman, sold/transferred/write_off restan (mínimo 0),
    adjusted no modifica el stock.
    """
    return action_response(service.record_transaction(id, form))

# ==================== DEPRECIACIÓN ====================

@router.get(routes.INVENTORY_DEPRECIATION_ASSIGN_URL)
async def inventory_depreciation_assign_form(
    request: Request,
    id: str,
    service: InventoryService = Depends(get_inventory_service)
):
    form = service.get_depreciation_assign_form(id)
    return render_partial(request, "inventory/depreciation_form.html", {"form": form})

@router.post(routes.INVENTORY_DEPRECIATION_ASSIGN_URL)
async def inventory_depreciation_assign(
    id: str,
    form: Annotated[DepreciationFormRequest, Form()],
    service: InventoryService = Depends(get_inventory_service)
):
    return action_response(service.assign_depreciation(id, form))

@router.get(routes.INVENTORY_DEPRECIATION_EDIT_URL)
async def inventory_depreciation_edit_form(
    request: Request,
    id: str,
    did: str,
    service: InventoryService = Depends(get_inventory_service)
):
    form = service.get_depreciation_edit_form(id, did)
    return render_partial(request, "inventory/depreciation_form.html", {"form": form})

@router.post(routes.INVENTORY_DEPRECIATION_EDIT_URL)
async def inventory_depreciation_edit(
    id: str,
    did: str,
    form: Annotated[DepreciationFormRequest, Form()],
    service: InventoryService = Depends(get_inventory_service)
):
    return action_response(service.update_depreciation(id, did, form))
