# centymo/modules/inventory/schemas.py
from pydantic import BaseModel
from typing import List, Optional

from centymo.shared.labels import (
    InventoryDepreciationLabels, InventoryFormLabels, InventoryLabels,
    InventorySerialLabels, InventoryTransactionLabels
)
from centymo.shared.schemas import FormOption, InfoField, PageData, TabItem, TableConfig

# ==================== REQUESTS (FORM BODIES) ====================

class InventoryFormRequest(BaseModel):
    """Campos del drawer de item de inventario"""
    product_name: str = ""
    sku: str = ""
    quantity_on_hand: str = ""
    quantity_reserved: str = ""
    reorder_level: str = ""
    unit_of_measure: str = ""
    location_id: str = ""
    notes: str = ""
    active: str = ""

class SerialFormRequest(BaseModel):
    serial_number: str = ""
    imei: str = ""
    status: str = ""
    warranty_start: str = ""
    warranty_end: str = ""
    purchase_order: str = ""
    sold_reference: str = ""

class TransactionFormRequest(BaseModel):
    transaction_type: str = ""
    quantity: str = ""
    transaction_date: str = ""
    reference: str = ""
    serial_number: str = ""
    notes: str = ""

class DepreciationFormRequest(BaseModel):
    method: str = ""
    cost_basis: str = ""
    salvage_value: str = ""
    useful_life_months: str = ""
    start_date: str = ""

# ==================== FORMULARIOS (DRAWERS) ====================

class InventoryFormData(BaseModel):
    form_action: str
    is_edit: bool = False
    id: str = ""
    name: str = ""
    sku: str = ""
    on_hand: str = ""
    reserved: str = ""
    reorder_level: str = ""
    unit_of_measure: str = "pcs"
    location_id: str = ""
    notes: str = ""
    active: bool = True
    locations: List[FormOption] = []
    labels: InventoryFormLabels

class SerialFormData(BaseModel):
    form_action: str
    is_edit: bool = False
    id: str = ""
    serial_number: str = ""
    imei: str = ""
    status: str = "available"
    warranty_start: str = ""
    warranty_end: str = ""
    purchase_order: str = ""
    sold_reference: str = ""
    status_options: List[FormOption] = []
    labels: InventorySerialLabels

class TransactionFormData(BaseModel):
    form_action: str
    today: str
    type_options: List[FormOption] = []
    labels: InventoryTransactionLabels

class DepreciationFormData(BaseModel):
    form_action: str
    is_edit: bool = False
    id: str = ""
    method: str = "straight_line"
    cost_basis: str = ""
    salvage_value: str = ""
    useful_life: str = ""
    start_date: str = ""
    method_options: List[FormOption] = []
    labels: InventoryDepreciationLabels

# ==================== PÁGINAS ====================

class AttributeEntry(BaseModel):
    name: str
    value: str = ""

class SerialSummary(BaseModel):
    total: int = 0
    available: int = 0
    sold: int = 0
    reserved: int = 0

class DepreciationInfo(BaseModel):
    id: str
    method: str
    cost_basis: str
    salvage_value: str
    useful_life: str
    start_date: str
    accumulated: str
    book_value: str

class WidgetData(BaseModel):
    """Tarjeta de estadística del dashboard"""
    icon: str
    value: str
    label: str
    trend: str = ""
    trend_up: bool = False
    color: str = ""

class MovementEntry(BaseModel):
    transaction_date: str = ""
    item_name: str = ""
    transaction_type: str = ""
    quantity: str = ""
    reference: str = ""

class LowStockAlert(BaseModel):
    id: str
    name: str
    sku: str = ""
    available: str
    reorder_level: str

class InventoryListPage(BaseModel):
    page: PageData
    table: TableConfig

class InventoryDetailPage(BaseModel):
    page: PageData
    item_id: str
    active_tab: str
    tab_items: List[TabItem] = []
    is_serialized: bool = False
    item_type: str
    item_type_label: str
    item_type_variant: str
    location_name: str
    available_qty: str
    info_fields: List[InfoField] = []
    attributes: List[AttributeEntry] = []
    serial_table: Optional[TableConfig] = None
    serial_summary: Optional[SerialSummary] = None
    transaction_table: Optional[TableConfig] = None
    depreciation: Optional[DepreciationInfo] = None
    depreciation_assign_url: str = ""
    depreciation_edit_url: str = ""
    audit_table: Optional[TableConfig] = None
    labels: InventoryLabels

class InventoryDashboardPage(BaseModel):
    page: PageData
    widgets: List[WidgetData]
    labels: InventoryLabels

class InventoryMovementsPage(BaseModel):
    page: PageData
    table: TableConfig
