# centymo/modules/product/schemas.py
from pydantic import BaseModel
from typing import List, Optional

from centymo.shared.labels import ProductAttributeLabels, ProductFormLabels, ProductVariantLabels
from centymo.shared.schemas import FormOption, InfoField, PageData, TabItem, TableConfig

# ==================== REQUESTS (FORM BODIES) ====================

class ProductFormRequest(BaseModel):
    """Campos del drawer de producto"""
    name: str = ""
    description: str = ""
    price: str = ""
    currency: str = ""
    active: str = ""

class VariantFormRequest(BaseModel):
    sku: str = ""
    price_override: str = ""
    attribute_values: str = ""
    active: str = ""

class AttributeAssignRequest(BaseModel):
    attribute_id: str = ""
    default_value: str = ""

# ==================== FORMULARIOS (DRAWERS) ====================

class ProductFormData(BaseModel):
    form_action: str
    is_edit: bool = False
    id: str = ""
    name: str = ""
    description: str = ""
    price: str = ""
    currency: str = "PHP"
    active: bool = True
    labels: ProductFormLabels

class VariantFormData(BaseModel):
    form_action: str
    is_edit: bool = False
    id: str = ""
    product_id: str
    sku: str = ""
    price_override: str = ""
    attribute_values: str = ""
    active: bool = True
    labels: ProductVariantLabels

class AttributeFormData(BaseModel):
    """Drawer de asignación: sólo atributos que el producto aún no tiene"""
    form_action: str
    product_id: str
    attributes: List[FormOption] = []
    labels: ProductAttributeLabels

# ==================== PÁGINAS ====================

class ProductListPage(BaseModel):
    page: PageData
    table: TableConfig

class ProductDetailPage(BaseModel):
    page: PageData
    product_id: str
    active_tab: str
    tab_items: List[TabItem] = []
    status: str
    status_variant: str
    price: str
    currency: str
    collections: List[str] = []
    info_fields: List[InfoField] = []
    variants_table: Optional[TableConfig] = None
    attributes_table: Optional[TableConfig] = None
    pricing_table: Optional[TableConfig] = None
