# centymo/modules/paymentcollection/schemas.py
from pydantic import BaseModel
from typing import List

from centymo.shared.schemas import FormOption, InfoField, PageData, TableConfig

class PaymentCollectionFormRequest(BaseModel):
    """Campos del drawer de cobro"""
    customer: str = ""
    amount: str = ""
    date: str = ""
    reference: str = ""
    status: str = ""

class PaymentCollectionFormData(BaseModel):
    form_action: str
    is_edit: bool = False
    id: str = ""
    customer: str = ""
    amount: str = ""
    date: str = ""
    reference: str = ""
    status: str = "pending"
    statuses: List[FormOption] = []

class PaymentCollectionListPage(BaseModel):
    page: PageData
    table: TableConfig

class PaymentCollectionDetailPage(BaseModel):
    page: PageData
    collection_id: str
    status: str
    status_variant: str
    info_fields: List[InfoField] = []
    back_url: str
