# centymo/modules/paymentcollection/router.py
from fastapi import APIRouter, Depends, Form, Request
from typing import Annotated

from centymo.core.dependencies import get_datasource, get_form_value, get_labels
from centymo.core.htmx import action_response
from centymo.core.templates import render_page, render_partial
from centymo.shared import routes
from centymo.shared.datasource import DataSource
from centymo.shared.labels import LabelCatalog
from .service import PaymentCollectionService
from .schemas import PaymentCollectionFormRequest

router = APIRouter(tags=["Payment Collections"])


def get_payment_collection_service(
    db: DataSource = Depends(get_datasource),
    labels: LabelCatalog = Depends(get_labels)
) -> PaymentCollectionService:
    return PaymentCollectionService(db, labels)


@router.get("/app/payment-collections/list")
@router.get(routes.PAYMENT_COLLECTION_LIST_URL)
async def payment_collection_list_page(
    request: Request,
    status: str = "pending",
    service: PaymentCollectionService = Depends(get_payment_collection_service)
):
    """
    Cobros filtrados por estado (pending por defecto)
    """
    data = service.get_list_page(status, current_path=request.url.path)
    return render_page(request, "paymentcollection/list.html", {"page": data.page, "table": data.table})

@router.get(routes.PAYMENT_COLLECTION_DETAIL_URL)
async def payment_collection_detail_page(
    request: Request,
    id: str,
    service: PaymentCollectionService = Depends(get_payment_collection_service)
):
    data = service.get_detail_page(id, current_path=request.url.path)
    return render_page(request, "paymentcollection/detail.html", {"page": data.page, "detail": data})

@router.get(routes.PAYMENT_COLLECTION_ADD_URL)
async def payment_collection_add_form(
    request: Request,
    service: PaymentCollectionService = Depends(get_payment_collection_service)
):
    return render_partial(request, "paymentcollection/drawer_form.html", {"form": service.get_add_form()})

@router.post(routes.PAYMENT_COLLECTION_ADD_URL)
async def payment_collection_add(
    form: Annotated[PaymentCollectionFormRequest, Form()],
    service: PaymentCollectionService = Depends(get_payment_collection_service)
):
    return action_response(service.create_collection(form))

@router.get(routes.PAYMENT_COLLECTION_EDIT_URL)
async def payment_collection_edit_form(
    request: Request,
    id: str,
    service: PaymentCollectionService = Depends(get_payment_collection_service)
):
    return render_partial(request, "paymentcollection/drawer_form.html", {"form": service.get_edit_form(id)})

@router.post(routes.PAYMENT_COLLECTION_EDIT_URL)
async def payment_collection_edit(
    id: str,
    form: Annotated[PaymentCollectionFormRequest, Form()],
    service: PaymentCollectionService = Depends(get_payment_collection_service)
):
    return action_response(service.update_collection(id, form))

@router.post(routes.PAYMENT_COLLECTION_DELETE_URL)
async def payment_collection_delete(
    request: Request,
    service: PaymentCollectionService = Depends(get_payment_collection_service)
):
    collection_id = await get_form_value(request, "id")
    return action_response(service.delete_collection(collection_id))
