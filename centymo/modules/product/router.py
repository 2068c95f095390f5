# centymo/modules/product/router.py
from fastapi import APIRouter, Depends, Form, Request
from typing import Annotated

from centymo.config.settings import settings
from centymo.core.dependencies import get_datasource, get_form_list, get_form_value, get_labels
from centymo.core.htmx import action_response
from centymo.core.templates import render_page, render_partial
from centymo.shared import routes
from centymo.shared.datasource import DataSource
from centymo.shared.labels import LabelCatalog
from .service import ProductService
from .schemas import AttributeAssignRequest, ProductFormRequest, VariantFormRequest

router = APIRouter(tags=["Products"])


def get_product_service(
    db: DataSource = Depends(get_datasource),
    labels: LabelCatalog = Depends(get_labels)
) -> ProductService:
    return ProductService(db, labels, default_currency=settings.default_currency)

# ==================== PÁGINAS ====================

@router.get("/app/products/list")
@router.get(routes.PRODUCT_LIST_URL)
async def product_list_page(
    request: Request,
    status: str = "active",
    service: ProductService = Depends(get_product_service)
):
    """
    Listado de productos filtrado por estado (active / inactive)
    """
    data = service.get_list_page(status, current_path=request.url.path)
    return render_page(request, "product/list.html", {"page": data.page, "table": data.table})

@router.get(routes.PRODUCT_DETAIL_URL)
async def product_detail_page(
    request: Request,
    id: str,
    tab: str = "info",
    service: ProductService = Depends(get_product_service)
):
    """
    Detalle de producto con pestañas: info, variants, attributes, pricing
    """
    data = service.get_detail_page(id, tab, current_path=request.url.path)
    return render_page(request, "product/detail.html", {"page": data.page, "detail": data})

@router.get(routes.PRODUCT_TAB_ACTION_URL)
async def product_detail_tab(
    request: Request,
    id: str,
    tab: str,
    service: ProductService = Depends(get_product_service)
):
    data = service.get_detail_page(id, tab, current_path=request.url.path)
    return render_partial(request, "product/tab.html", {"detail": data})

# ==================== CRUD DE PRODUCTO ====================

@router.get(routes.PRODUCT_ADD_URL)
async def product_add_form(request: Request, service: ProductService = Depends(get_product_service)):
    return render_partial(request, "product/drawer_form.html", {"form": service.get_add_form()})

@router.post(routes.PRODUCT_ADD_URL)
async def product_add(
    form: Annotated[ProductFormRequest, Form()],
    service: ProductService = Depends(get_product_service)
):
    return action_response(service.create_product(form))

@router.get(routes.PRODUCT_EDIT_URL)
async def product_edit_form(request: Request, id: str, service: ProductService = Depends(get_product_service)):
    return render_partial(request, "product/drawer_form.html", {"form": service.get_edit_form(id)})

@router.post(routes.PRODUCT_EDIT_URL)
async def product_edit(
    id: str,
    form: Annotated[ProductFormRequest, Form()],
    service: ProductService = Depends(get_product_service)
):
    return action_response(service.update_product(id, form))

@router.post(routes.PRODUCT_DELETE_URL)
async def product_delete(request: Request, service: ProductService = Depends(get_product_service)):
    product_id = await get_form_value(request, "id")
    return action_response(service.delete_product(product_id))

@router.post(routes.PRODUCT_BULK_DELETE_URL)
async def product_bulk_delete(request: Request, service: ProductService = Depends(get_product_service)):
    product_ids = await get_form_list(request, "id")
    return action_response(service.bulk_delete(product_ids))

@router.post(routes.PRODUCT_SET_STATUS_URL)
async def product_set_status(request: Request, service: ProductService = Depends(get_product_service)):
    product_id = await get_form_value(request, "id")
    target_status = await get_form_value(request, "status")
    return action_response(service.set_status(product_id, target_status))

@router.post(routes.PRODUCT_BULK_SET_STATUS_URL)
async def product_bulk_set_status(request: Request, service: ProductService = Depends(get_product_service)):
    product_ids = await get_form_list(request, "id")
    target_status = await get_form_value(request, "target_status")
    return action_response(service.bulk_set_status(product_ids, target_status))

# ==================== VARIANTES ====================

@router.get(routes.PRODUCT_VARIANT_TABLE_URL)
async def product_variant_table(request: Request, id: str, service: ProductService = Depends(get_product_service)):
    return render_partial(request, "components/table.html", {"table": service.get_variant_table(id)})

@router.get(routes.PRODUCT_VARIANT_ASSIGN_URL)
async def product_variant_assign_form(request: Request, id: str, service: ProductService = Depends(get_product_service)):
    return render_partial(request, "product/variant_form.html", {"form": service.get_variant_assign_form(id)})

@router.post(routes.PRODUCT_VARIANT_ASSIGN_URL)
async def product_variant_assign(
    id: str,
    form: Annotated[VariantFormRequest, Form()],
    service: ProductService = Depends(get_product_service)
):
    return action_response(service.assign_variant(id, form))

@router.get(routes.PRODUCT_VARIANT_EDIT_URL)
async def product_variant_edit_form(
    request: Request,
    id: str,
    vid: str,
    service: ProductService = Depends(get_product_service)
):
    return render_partial(request, "product/variant_form.html", {"form": service.get_variant_edit_form(id, vid)})

@router.post(routes.PRODUCT_VARIANT_EDIT_URL)
async def product_variant_edit(
    id: str,
    vid: str,
    form: Annotated[VariantFormRequest, Form()],
    service: ProductService = Depends(get_product_service)
):
    return action_response(service.update_variant(id, vid, form))

@router.post(routes.PRODUCT_VARIANT_REMOVE_URL)
async def product_variant_remove(request: Request, id: str, service: ProductService = Depends(get_product_service)):
    variant_id = await get_form_value(request, "id")
    return action_response(service.remove_variant(variant_id))

# ==================== ATRIBUTOS ====================

@router.get(routes.PRODUCT_ATTRIBUTE_TABLE_URL)
async def product_attribute_table(request: Request, id: str, service: ProductService = Depends(get_product_service)):
    return render_partial(request, "components/table.html", {"table": service.get_attribute_table(id)})

@router.get(routes.PRODUCT_ATTRIBUTE_ASSIGN_URL)
async def product_attribute_assign_form(
    request: Request,
    id: str,
    service: ProductService = Depends(get_product_service)
):
    return render_partial(request, "product/attribute_form.html", {"form": service.get_attribute_assign_form(id)})

@router.post(routes.PRODUCT_ATTRIBUTE_ASSIGN_URL)
async def product_attribute_assign(
    id: str,
    form: Annotated[AttributeAssignRequest, Form()],
    service: ProductService = Depends(get_product_service)
):
    """Asignar un atributo existente al producto (copia nombre y código)"""
    return action_response(service.assign_attribute(id, form))

@router.post(routes.PRODUCT_ATTRIBUTE_REMOVE_URL)
async def product_attribute_remove(request: Request, id: str, service: ProductService = Depends(get_product_service)):
    product_attribute_id = await get_form_value(request, "id")
    return action_response(service.remove_attribute(product_attribute_id))
