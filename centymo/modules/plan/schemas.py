# centymo/modules/plan/schemas.py
from pydantic import BaseModel
from typing import List

from centymo.shared.schemas import FormOption, InfoField, PageData, TableConfig

class PlanFormRequest(BaseModel):
    """Campos del drawer de plan"""
    name: str = ""
    description: str = ""
    interval: str = ""
    price: str = ""
    status: str = ""

class PlanFormData(BaseModel):
    form_action: str
    is_edit: bool = False
    id: str = ""
    name: str = ""
    description: str = ""
    interval: str = "monthly"
    price: str = ""
    status: str = "active"
    intervals: List[FormOption] = []
    statuses: List[FormOption] = []

class PlanListPage(BaseModel):
    page: PageData
    table: TableConfig

class PlanDetailPage(BaseModel):
    page: PageData
    plan_id: str
    status: str
    status_variant: str
    info_fields: List[InfoField] = []
    back_url: str
