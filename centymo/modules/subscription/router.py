# centymo/modules/subscription/router.py
from fastapi import APIRouter, Depends, Form, Request
from typing import Annotated

from centymo.core.dependencies import get_datasource, get_form_value, get_labels
from centymo.core.htmx import action_response
from centymo.core.templates import render_page, render_partial
from centymo.shared import routes
from centymo.shared.datasource import DataSource
from centymo.shared.labels import LabelCatalog
from .service import SubscriptionService
from .schemas import SubscriptionFormRequest

router = APIRouter(tags=["Subscriptions"])


def get_subscription_service(
    db: DataSource = Depends(get_datasource),
    labels: LabelCatalog = Depends(get_labels)
) -> SubscriptionService:
    return SubscriptionService(db, labels)


@router.get("/app/subscriptions/list")
@router.get(routes.SUBSCRIPTION_LIST_URL)
async def subscription_list_page(
    request: Request,
    status: str = "active",
    service: SubscriptionService = Depends(get_subscription_service)
):
    data = service.get_list_page(status, current_path=request.url.path)
    return render_page(request, "subscription/list.html", {"page": data.page, "table": data.table})

@router.get(routes.SUBSCRIPTION_DETAIL_URL)
async def subscription_detail_page(
    request: Request,
    id: str,
    service: SubscriptionService = Depends(get_subscription_service)
):
    data = service.get_detail_page(id, current_path=request.url.path)
    return render_page(request, "subscription/detail.html", {"page": data.page, "detail": data})

@router.get(routes.SUBSCRIPTION_ADD_URL)
async def subscription_add_form(request: Request, service: SubscriptionService = Depends(get_subscription_service)):
    return render_partial(request, "subscription/drawer_form.html", {"form": service.get_add_form()})

@router.post(routes.SUBSCRIPTION_ADD_URL)
async def subscription_add(
    form: Annotated[SubscriptionFormRequest, Form()],
    service: SubscriptionService = Depends(get_subscription_service)
):
    return action_response(service.create_subscription(form))

@router.get(routes.SUBSCRIPTION_EDIT_URL)
async def subscription_edit_form(
    request: Request,
    id: str,
    service: SubscriptionService = Depends(get_subscription_service)
):
    return render_partial(request, "subscription/drawer_form.html", {"form": service.get_edit_form(id)})

@router.post(routes.SUBSCRIPTION_EDIT_URL)
async def subscription_edit(
    id: str,
    form: Annotated[SubscriptionFormRequest, Form()],
    service: SubscriptionService = Depends(get_subscription_service)
):
    return action_response(service.update_subscription(id, form))

@router.post(routes.SUBSCRIPTION_DELETE_URL)
async def subscription_delete(request: Request, service: SubscriptionService = Depends(get_subscription_service)):
    subscription_id = await get_form_value(request, "id")
    return action_response(service.delete_subscription(subscription_id))
