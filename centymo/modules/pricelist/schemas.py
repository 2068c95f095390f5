# centymo/modules/pricelist/schemas.py
from pydantic import BaseModel
from typing import List, Optional

from centymo.shared.labels import PriceListDetailLabels, PriceListFormLabels
from centymo.shared.schemas import FormOption, PageData, TableConfig

# ==================== ENTIDADES ====================

class PriceList(BaseModel):
    """Lista de precios tipada a partir del registro del DataSource"""
    id: str = ""
    name: str = ""
    description: Optional[str] = None
    date_start_string: str = ""
    date_end_string: Optional[str] = None
    active: bool = False

class PriceProduct(BaseModel):
    id: str = ""
    product_id: str = ""
    name: str = ""
    description: Optional[str] = None
    amount: int = 0
    currency: str = ""
    price_list_id: Optional[str] = None
    active: bool = False

# ==================== REQUESTS (FORM BODIES) ====================

class PriceListFormRequest(BaseModel):
    name: str = ""
    description: str = ""
    date_start: str = ""
    date_end: str = ""
    active: str = ""

class PriceProductFormRequest(BaseModel):
    product_id: str = ""
    name: str = ""
    currency: str = ""
    amount: str = ""

# ==================== FORMULARIOS (DRAWERS) ====================

class PriceListFormData(BaseModel):
    form_action: str
    is_edit: bool = False
    id: str = ""
    name: str = ""
    description: str = ""
    date_start: str = ""
    date_end: str = ""
    active: bool = True
    labels: PriceListFormLabels

class PriceProductFormData(BaseModel):
    form_action: str
    price_list_id: str
    currency: str = "PHP"
    products: List[FormOption] = []
    labels: PriceListDetailLabels

# ==================== PÁGINAS ====================

class PriceListTab(BaseModel):
    key: str
    label: str
    active: bool = False
    url: str

class PriceListListPage(BaseModel):
    page: PageData
    table: TableConfig

class PriceListDetailPage(BaseModel):
    page: PageData
    price_list: PriceList
    active_tab: str
    tabs: List[PriceListTab] = []
    prices_table: Optional[TableConfig] = None
