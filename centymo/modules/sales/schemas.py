# centymo/modules/sales/schemas.py
from pydantic import BaseModel
from typing import List, Optional

from centymo.shared.labels import SalesDetailLabels, SalesFormLabels
from centymo.shared.schemas import FormOption, InfoField, PageData, TabItem, TableConfig

# ==================== REQUESTS (FORM BODIES) ====================

class SaleFormRequest(BaseModel):
    """Campos del drawer de venta"""
    name: str = ""
    reference_number: str = ""
    revenue_date_string: str = ""
    currency: str = ""
    status: str = ""
    notes: str = ""
    location_id: str = ""

class LineItemFormRequest(BaseModel):
    description: str = ""
    quantity: str = ""
    unit_price: str = ""
    cost_price: str = ""
    discount: str = ""
    inventory_item_id: str = ""
    inventory_serial_id: str = ""
    notes: str = ""

class DiscountFormRequest(BaseModel):
    description: str = ""
    amount: str = ""

class PaymentFormRequest(BaseModel):
    collection_method_id: str = ""
    amount_paid: str = ""
    currency: str = ""
    reference_number: str = ""
    received_by: str = ""
    received_role: str = ""
    notes: str = ""

# ==================== FORMULARIOS (DRAWERS) ====================

class SalesFormData(BaseModel):
    """Datos del drawer de alta/edición de venta"""
    form_action: str
    is_edit: bool = False
    id: str = ""
    name: str = ""
    reference_number: str = ""
    date: str = ""
    currency: str = "PHP"
    status: str = "ongoing"
    notes: str = ""
    location_id: str = ""
    locations: List[FormOption] = []
    statuses: List[FormOption] = []
    labels: SalesFormLabels

class LineItemFormData(BaseModel):
    form_action: str
    is_edit: bool = False
    id: str = ""
    revenue_id: str
    description: str = ""
    quantity: str = "1"
    unit_price: str = ""
    cost_price: str = ""
    discount: str = ""
    notes: str = ""
    line_item_type: str = "item"
    inventory_item_id: str = ""
    inventory_items: List[FormOption] = []
    labels: SalesDetailLabels

class DiscountFormData(BaseModel):
    form_action: str
    revenue_id: str
    description: str = ""
    amount: str = ""
    labels: SalesDetailLabels

class PaymentFormData(BaseModel):
    form_action: str
    is_edit: bool = False
    id: str = ""
    revenue_id: str
    collection_method_id: str = ""
    amount_paid: str = ""
    currency: str = "PHP"
    reference_number: str = ""
    notes: str = ""
    received_by: str = ""
    received_role: str = ""
    payment_methods: List[FormOption] = []
    labels: SalesDetailLabels

# ==================== PÁGINAS ====================

class PaymentInfo(BaseModel):
    """Resumen del pago mostrado en la pestaña Payment"""
    method: str
    amount_paid: str
    currency: str = ""
    card_last4: str = ""
    payment_date: str = ""
    received_by: str = ""
    received_role: str = ""

class SalesListPage(BaseModel):
    page: PageData
    table: TableConfig

class SalesDetailPage(BaseModel):
    page: PageData
    revenue_id: str
    status: str = ""
    active_tab: str
    tab_items: List[TabItem]
    info_fields: List[InfoField] = []
    line_item_table: Optional[TableConfig] = None
    total_amount: str = ""
    payment: Optional[PaymentInfo] = None
    payment_table: Optional[TableConfig] = None
    audit_table: Optional[TableConfig] = None
    labels: SalesDetailLabels
