# centymo/modules/plan/router.py
from fastapi import APIRouter, Depends, Form, Request
from typing import Annotated

from centymo.core.dependencies import get_datasource, get_form_value, get_labels
from centymo.core.htmx import action_response
from centymo.core.templates import render_page, render_partial
from centymo.shared import routes
from centymo.shared.datasource import DataSource
from centymo.shared.labels import LabelCatalog
from .service import PlanService
from .schemas import PlanFormRequest

router = APIRouter(tags=["Plans"])


def get_plan_service(
    db: DataSource = Depends(get_datasource),
    labels: LabelCatalog = Depends(get_labels)
) -> PlanService:
    return PlanService(db, labels)


@router.get("/app/plans/list")
@router.get(routes.PLAN_LIST_URL)
async def plan_list_page(request: Request, status: str = "active", service: PlanService = Depends(get_plan_service)):
    data = service.get_list_page(status, current_path=request.url.path)
    return render_page(request, "plan/list.html", {"page": data.page, "table": data.table})

@router.get(routes.PLAN_DETAIL_URL)
async def plan_detail_page(request: Request, id: str, service: PlanService = Depends(get_plan_service)):
    data = service.get_detail_page(id, current_path=request.url.path)
    return render_page(request, "plan/detail.html", {"page": data.page, "detail": data})

@router.get(routes.PLAN_ADD_URL)
async def plan_add_form(request: Request, service: PlanService = Depends(get_plan_service)):
    return render_partial(request, "plan/drawer_form.html", {"form": service.get_add_form()})

@router.post(routes.PLAN_ADD_URL)
async def plan_add(form: Annotated[PlanFormRequest, Form()], service: PlanService = Depends(get_plan_service)):
    return action_response(service.create_plan(form))

@router.get(routes.PLAN_EDIT_URL)
async def plan_edit_form(request: Request, id: str, service: PlanService = Depends(get_plan_service)):
    return render_partial(request, "plan/drawer_form.html", {"form": service.get_edit_form(id)})

@router.post(routes.PLAN_EDIT_URL)
async def plan_edit(
    id: str,
    form: Annotated[PlanFormRequest, Form()],
    service: PlanService = Depends(get_plan_service)
):
    return action_response(service.update_plan(id, form))

@router.post(routes.PLAN_DELETE_URL)
async def plan_delete(request: Request, service: PlanService = Depends(get_plan_service)):
    plan_id = await get_form_value(request, "id")
    return action_response(service.delete_plan(plan_id))
