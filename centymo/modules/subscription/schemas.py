# centymo/modules/subscription/schemas.py
from pydantic import BaseModel
from typing import List

from centymo.shared.schemas import FormOption, InfoField, PageData, TableConfig

class SubscriptionFormRequest(BaseModel):
    """Campos del drawer de suscripción"""
    customer: str = ""
    plan: str = ""
    start_date: str = ""
    end_date: str = ""
    status: str = ""

class SubscriptionFormData(BaseModel):
    form_action: str
    is_edit: bool = False
    id: str = ""
    customer: str = ""
    plan: str = ""
    start_date: str = ""
    end_date: str = ""
    status: str = "active"
    plans: List[FormOption] = []
    statuses: List[FormOption] = []

class SubscriptionListPage(BaseModel):
    page: PageData
    table: TableConfig

class SubscriptionDetailPage(BaseModel):
    page: PageData
    subscription_id: str
    status: str
    status_variant: str
    info_fields: List[InfoField] = []
    back_url: str
