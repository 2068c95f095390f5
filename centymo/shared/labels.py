"""
Labels traducibles de los módulos.

Cada módulo tiene su árbol de labels con defaults en inglés. Una app
consumidora puede sobreescribir cualquier texto con un JSON (claves
camelCase) vía load_labels().
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from centymo.shared.schemas import BulkActionsConfig, EmptyState, TableLabels

logger = logging.getLogger(__name__)


class LabelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ==================== COMMON ====================

class DensityLabels(LabelModel):
    default: str = "Default"
    comfortable: str = "Comfortable"
    compact: str = "Compact"

class CommonTableLabels(LabelModel):
    search: str = "Search"
    search_placeholder: str = "Search..."
    filters: str = "Filters"
    filter_conditions: str = "Filter conditions"
    clear_all: str = "Clear all"
    add_condition: str = "Add condition"
    clear: str = "Clear"
    apply_filters: str = "Apply filters"
    sort: str = "Sort"
    columns: str = "Columns"
    export: str = "Export"
    density: DensityLabels = Field(default_factory=DensityLabels)
    show: str = "Show"
    entries: str = "entries"
    showing: str = "Showing"
    to: str = "to"
    of: str = "of"
    entries_label: str = "entries"
    select_all: str = "Select all"
    actions: str = "Actions"

class PaginationLabels(LabelModel):
    prev: str = "Previous"
    next: str = "Next"

class CommonBulkLabels(LabelModel):
    select_all: str = "Select all"
    selected: str = "selected"
    clear_selection: str = "Clear selection"
    delete: str = "Delete"

class CommonLabels(LabelModel):
    table: CommonTableLabels = Field(default_factory=CommonTableLabels)
    pagination: PaginationLabels = Field(default_factory=PaginationLabels)
    bulk: CommonBulkLabels = Field(default_factory=CommonBulkLabels)


# ==================== INVENTORY ====================

class InventoryPageLabels(LabelModel):
    heading: str = "Inventory"
    caption: str = "Track stock levels per location"
    location: str = "Location"

class InventoryButtonLabels(LabelModel):
    add_item: str = "Add Item"

class InventoryColumnLabels(LabelModel):
    product_name: str = "Product"
    sku: str = "SKU"
    on_hand: str = "On Hand"
    available: str = "Available"
    reorder_level: str = "Reorder Level"
    status: str = "Status"

class EmptyLabels(LabelModel):
    title: str = "No items found"
    message: str = "There are no inventory items at this location."

class InventoryFormLabels(LabelModel):
    product: str = "Product"
    sku: str = "SKU"
    sku_placeholder: str = "e.g. SKU-0001"
    on_hand: str = "Quantity on hand"
    reserved: str = "Quantity reserved"
    reorder_level: str = "Reorder level"
    unit_of_measure: str = "Unit of measure"
    location: str = "Location"
    notes: str = "Notes"
    notes_placeholder: str = "Optional notes"
    active: str = "Active"

class ActionLabels(LabelModel):
    view: str = "View"
    edit: str = "Edit"
    delete: str = "Delete"

class BulkLabels(LabelModel):
    delete: str = "Delete selected"

class InventoryDetailLabels(LabelModel):
    tab_basic_info: str = "Basic Info"
    tab_attributes: str = "Attributes"
    tab_serials: str = "Serials"
    tab_transactions: str = "Transactions"
    tab_audit_trail: str = "Audit Trail"

    item_info: str = "Item Information"
    product_name: str = "Product"
    sku: str = "SKU"
    location: str = "Location"
    on_hand: str = "On Hand"
    reserved: str = "Reserved"
    available: str = "Available"
    reorder_level: str = "Reorder Level"
    unit_of_measure: str = "Unit of Measure"
    status: str = "Status"
    notes: str = "Notes"

    attribute_name: str = "Attribute"
    attribute_value: str = "Value"

    serial_number: str = "Serial Number"
    imei: str = "IMEI"
    serial_status: str = "Status"
    warranty_end: str = "Warranty End"
    purchase_order: str = "Purchase Order"
    sale_reference: str = "Sale Reference"

    total_units: str = "Total Units"
    available_units: str = "Available"
    sold_units: str = "Sold"
    reserved_units: str = "Reserved"

    date: str = "Date"
    type: str = "Type"
    quantity: str = "Quantity"
    reference: str = "Reference"
    serial: str = "Serial"
    performed_by: str = "Performed By"

    audit_action: str = "Action"
    audit_user: str = "User"
    description: str = "Description"

    attribute_empty_title: str = "No attributes"
    attribute_empty_message: str = "This item's product has no attributes."
    serial_empty_title: str = "No serials"
    serial_empty_message: str = "No serial numbers have been assigned yet."
    transaction_empty_title: str = "No transactions"
    transaction_empty_message: str = "No stock movements recorded for this item."
    audit_empty_title: str = "No audit entries"
    audit_empty_message: str = "Changes to this item will appear here."

class InventoryTabLabels(LabelModel):
    info: str = "Info"
    attributes: str = "Attributes"
    serials: str = "Serials"
    transactions: str = "Transactions"
    depreciation: str = "Depreciation"
    audit: str = "Audit Trail"

class InventoryItemTypeLabels(LabelModel):
    serialized: str = "Serialized"
    non_serialized: str = "Non-serialized"
    consumable: str = "Consumable"

class StatusActionLabels(LabelModel):
    activate: str = "Activate"
    deactivate: str = "Deactivate"

class InventorySerialLabels(LabelModel):
    title: str = "Serial Numbers"
    serial_number: str = "Serial Number"
    imei: str = "IMEI"
    status: str = "Status"
    warranty_start: str = "Warranty Start"
    warranty_end: str = "Warranty End"
    purchase_order: str = "Purchase Order"
    sold_reference: str = "Sold Reference"
    assign: str = "Assign Serial"
    edit: str = "Edit Serial"
    remove: str = "Remove Serial"
    empty: str = "No serial numbers yet."
    status_available: str = "Available"
    status_sold: str = "Sold"
    status_reserved: str = "Reserved"
    status_defective: str = "Defective"
    status_returned: str = "Returned"

class InventoryTransactionLabels(LabelModel):
    title: str = "Transactions"
    type: str = "Type"
    quantity: str = "Quantity"
    date: str = "Date"
    reference: str = "Reference"
    performed_by: str = "Performed By"
    record: str = "Record Transaction"
    empty: str = "No transactions recorded."
    type_received: str = "Received"
    type_sold: str = "Sold"
    type_adjusted: str = "Adjusted"
    type_transferred: str = "Transferred"
    type_returned: str = "Returned"
    type_write_off: str = "Write-off"

class InventoryDepreciationLabels(LabelModel):
    title: str = "Depreciation"
    method: str = "Method"
    cost_basis: str = "Cost Basis"
    salvage_value: str = "Salvage Value"
    useful_life: str = "Useful Life"
    start_date: str = "Start Date"
    accumulated: str = "Accumulated"
    book_value: str = "Book Value"
    configure: str = "Configure Depreciation"
    edit: str = "Edit Depreciation"
    not_configured: str = "Depreciation has not been configured for this item."
    method_straight_line: str = "Straight Line"
    method_declining_balance: str = "Declining Balance"
    method_sum_of_years: str = "Sum of Years"

class InventoryDashboardLabels(LabelModel):
    title: str = "Inventory Dashboard"
    total_stock_value: str = "Total Stock Value"
    low_stock_alerts: str = "Low Stock Alerts"
    stock_turnover: str = "Stock Turnover"
    items_by_location: str = "Items by Location"
    depreciation_summary: str = "Depreciation Summary"
    serial_unit_status: str = "Serial Unit Status"
    recent_movements: str = "Recent Movements"
    category_distribution: str = "Category Distribution"

class InventoryMovementsLabels(LabelModel):
    title: str = "Stock Movements"
    subtitle: str = "All inventory transactions across locations"

class InventoryLabels(LabelModel):
    page: InventoryPageLabels = Field(default_factory=InventoryPageLabels)
    buttons: InventoryButtonLabels = Field(default_factory=InventoryButtonLabels)
    columns: InventoryColumnLabels = Field(default_factory=InventoryColumnLabels)
    empty: EmptyLabels = Field(default_factory=EmptyLabels)
    form: InventoryFormLabels = Field(default_factory=InventoryFormLabels)
    actions: ActionLabels = Field(default_factory=ActionLabels)
    bulk_actions: BulkLabels = Field(default_factory=BulkLabels)
    detail: InventoryDetailLabels = Field(default_factory=InventoryDetailLabels)
    tabs: InventoryTabLabels = Field(default_factory=InventoryTabLabels)
    item_type: InventoryItemTypeLabels = Field(default_factory=InventoryItemTypeLabels)
    status: StatusActionLabels = Field(default_factory=StatusActionLabels)
    serial: InventorySerialLabels = Field(default_factory=InventorySerialLabels)
    transaction: InventoryTransactionLabels = Field(default_factory=InventoryTransactionLabels)
    depreciation: InventoryDepreciationLabels = Field(default_factory=InventoryDepreciationLabels)
    dashboard: InventoryDashboardLabels = Field(default_factory=InventoryDashboardLabels)
    movements: InventoryMovementsLabels = Field(default_factory=InventoryMovementsLabels)


# ==================== SALES ====================

class SalesPageLabels(LabelModel):
    heading: str = "Sales"
    heading_active: str = "Active Sales"
    heading_completed: str = "Completed Sales"
    heading_cancelled: str = "Cancelled Sales"
    caption: str = "Manage sales and revenue"
    caption_active: str = "Sales currently in progress"
    caption_completed: str = "Sales that have been completed"
    caption_cancelled: str = "Sales that were cancelled"

class SalesButtonLabels(LabelModel):
    add_sale: str = "Add Sale"

class SalesColumnLabels(LabelModel):
    reference: str = "Reference"
    customer: str = "Customer"
    date: str = "Date"
    amount: str = "Amount"
    status: str = "Status"

class SalesEmptyLabels(LabelModel):
    active_title: str = "No active sales"
    active_message: str = "Create a sale to get started."
    completed_title: str = "No completed sales"
    completed_message: str = "Completed sales will appear here."
    cancelled_title: str = "No cancelled sales"
    cancelled_message: str = "Cancelled sales will appear here."

class SalesFormLabels(LabelModel):
    customer: str = "Customer"
    date: str = "Date"
    amount: str = "Amount"
    currency: str = "Currency"
    reference: str = "Reference Number"
    reference_placeholder: str = "e.g. INV-0001"
    status: str = "Status"
    notes: str = "Notes"
    notes_placeholder: str = "Optional notes"
    active: str = "Active"
    location: str = "Location"

class SalesDetailLabels(LabelModel):
    page_title: str = "Sale"
    invoice_info: str = "Invoice Information"
    line_items: str = "Line Items"
    description: str = "Description"
    quantity: str = "Quantity"
    unit_price: str = "Unit Price"
    cost_price: str = "Cost Price"
    gross_profit: str = "Gross Profit"
    total: str = "Total"
    discount: str = "Discount"
    sub_total: str = "Subtotal"
    grand_total: str = "Grand Total"

    tab_basic_info: str = "Basic Info"
    tab_line_items: str = "Line Items"
    tab_payment: str = "Payment"
    tab_audit_trail: str = "Audit Trail"

    customer: str = "Customer"
    date: str = "Date"
    amount: str = "Amount"
    currency: str = "Currency"
    status: str = "Status"
    notes: str = "Notes"

    payment_method: str = "Payment Method"
    amount_paid: str = "Amount Paid"
    card_details: str = "Card Details"
    payment_date: str = "Payment Date"
    received_by: str = "Received By"
    payment_info: str = "Payment Information"

    audit_trail_coming_soon: str = "Audit trail is coming soon."
    audit_action: str = "Action"
    audit_user: str = "User"
    audit_empty_title: str = "No audit entries"
    audit_empty_message: str = "Changes to this sale will appear here."

    total_gross_profit: str = "Total Gross Profit"

    # Line items
    item_type: str = "Type"
    item_type_item: str = "Item"
    item_type_discount: str = "Discount"
    inventory_item: str = "Inventory Item"
    add_item: str = "Add Item"
    add_discount: str = "Add Discount"
    edit_item: str = "Edit Item"
    remove_item: str = "Remove Item"
    item_empty_title: str = "No line items"
    item_empty_message: str = "This sale has no line items."

    # Payments
    reference_number: str = "Reference Number"
    received_role: str = "Role"
    add_payment: str = "Record Payment"
    edit_payment: str = "Edit Payment"
    remove_payment: str = "Remove Payment"
    payment_empty_title: str = "No payments"
    payment_empty_message: str = "No payments have been recorded for this sale."

    # Status
    mark_complete: str = "Mark as Complete"
    mark_cancelled: str = "Cancel Sale"
    mark_ongoing: str = "Reopen Sale"

class SalesLabels(LabelModel):
    page: SalesPageLabels = Field(default_factory=SalesPageLabels)
    buttons: SalesButtonLabels = Field(default_factory=SalesButtonLabels)
    columns: SalesColumnLabels = Field(default_factory=SalesColumnLabels)
    empty: SalesEmptyLabels = Field(default_factory=SalesEmptyLabels)
    form: SalesFormLabels = Field(default_factory=SalesFormLabels)
    actions: ActionLabels = Field(default_factory=ActionLabels)
    bulk_actions: BulkLabels = Field(default_factory=BulkLabels)
    detail: SalesDetailLabels = Field(default_factory=SalesDetailLabels)


# ==================== PRODUCT ====================

class StatusPageLabels(LabelModel):
    heading: str = ""
    heading_active: str = ""
    heading_inactive: str = ""
    caption: str = ""
    caption_active: str = ""
    caption_inactive: str = ""

class StatusEmptyLabels(LabelModel):
    active_title: str = ""
    active_message: str = ""
    inactive_title: str = ""
    inactive_message: str = ""

class ProductButtonLabels(LabelModel):
    add_product: str = "Add Product"

class ProductColumnLabels(LabelModel):
    name: str = "Name"
    sku: str = "SKU"
    description: str = "Description"
    price: str = "Price"
    status: str = "Status"

class ProductFormLabels(LabelModel):
    name: str = "Name"
    description: str = "Description"
    description_placeholder: str = "Short product description"
    price: str = "Price"
    currency: str = "Currency"
    active: str = "Active"

class ProductTabLabels(LabelModel):
    info: str = "Info"
    variants: str = "Variants"
    attributes: str = "Attributes"
    pricing: str = "Pricing"

class ProductDetailLabels(LabelModel):
    description: str = "Description"
    price_list: str = "Price List"
    custom_price: str = "Custom Price"
    valid_from: str = "Valid From"
    valid_to: str = "Valid To"
    price: str = "Price"
    currency: str = "Currency"
    collections: str = "Collections"
    variant_count: str = "Variants"
    status: str = "Status"

class ProductVariantLabels(LabelModel):
    title: str = "Variants"
    sku: str = "SKU"
    price_override: str = "Price Override"
    attributes: str = "Attributes"
    assign: str = "Add Variant"
    edit: str = "Edit Variant"
    remove: str = "Remove Variant"
    empty: str = "No variants yet."

class ProductAttributeLabels(LabelModel):
    title: str = "Attributes"
    name: str = "Name"
    code: str = "Code"
    data_type: str = "Data Type"
    select: str = "Attribute"
    default_value: str = "Default Value"
    assign: str = "Assign Attribute"
    remove: str = "Remove Attribute"
    empty: str = "No attributes assigned."

def _product_page() -> StatusPageLabels:
    return StatusPageLabels(
        heading="Products",
        heading_active="Active Products",
        heading_inactive="Inactive Products",
        caption="Manage your product catalog",
        caption_active="Products available for sale",
        caption_inactive="Products hidden from sale",
    )

def _product_empty() -> StatusEmptyLabels:
    return StatusEmptyLabels(
        active_title="No active products",
        active_message="Add a product to get started.",
        inactive_title="No inactive products",
        inactive_message="Deactivated products will appear here.",
    )

class ProductLabels(LabelModel):
    page: StatusPageLabels = Field(default_factory=_product_page)
    buttons: ProductButtonLabels = Field(default_factory=ProductButtonLabels)
    columns: ProductColumnLabels = Field(default_factory=ProductColumnLabels)
    empty: StatusEmptyLabels = Field(default_factory=_product_empty)
    form: ProductFormLabels = Field(default_factory=ProductFormLabels)
    actions: ActionLabels = Field(default_factory=ActionLabels)
    bulk_actions: BulkLabels = Field(default_factory=BulkLabels)
    tabs: ProductTabLabels = Field(default_factory=ProductTabLabels)
    detail: ProductDetailLabels = Field(default_factory=ProductDetailLabels)
    status: StatusActionLabels = Field(default_factory=StatusActionLabels)
    variant: ProductVariantLabels = Field(default_factory=ProductVariantLabels)
    attribute: ProductAttributeLabels = Field(default_factory=ProductAttributeLabels)


# ==================== PRICE LIST ====================

class PriceListButtonLabels(LabelModel):
    add_price_list: str = "Add Price List"

class PriceListColumnLabels(LabelModel):
    name: str = "Name"
    date_start: str = "Start Date"
    date_end: str = "End Date"
    status: str = "Status"

class PriceListFormLabels(LabelModel):
    name: str = "Name"
    description: str = "Description"
    description_placeholder: str = "What is this price list for?"
    date_start: str = "Start Date"
    date_end: str = "End Date"
    active: str = "Active"

class PriceListDetailLabels(LabelModel):
    basic_info: str = "Basic Info"
    prices: str = "Prices"
    product_name: str = "Product"
    amount: str = "Amount"
    currency: str = "Currency"
    add_price: str = "Add Product Price"
    product: str = "Product"
    select_product: str = "Select a product"
    name: str = "Display Name"

def _price_list_page() -> StatusPageLabels:
    return StatusPageLabels(
        heading="Price Lists",
        heading_active="Active Price Lists",
        heading_inactive="Inactive Price Lists",
        caption="Manage product pricing",
        caption_active="Price lists currently in effect",
        caption_inactive="Price lists no longer in effect",
    )

def _price_list_empty() -> StatusEmptyLabels:
    return StatusEmptyLabels(
        active_title="No active price lists",
        active_message="Create a price list to override product prices.",
        inactive_title="No inactive price lists",
        inactive_message="Deactivated price lists will appear here.",
    )

class PriceListLabels(LabelModel):
    page: StatusPageLabels = Field(default_factory=_price_list_page)
    buttons: PriceListButtonLabels = Field(default_factory=PriceListButtonLabels)
    columns: PriceListColumnLabels = Field(default_factory=PriceListColumnLabels)
    empty: StatusEmptyLabels = Field(default_factory=_price_list_empty)
    form: PriceListFormLabels = Field(default_factory=PriceListFormLabels)
    actions: ActionLabels = Field(default_factory=ActionLabels)
    bulk_actions: BulkLabels = Field(default_factory=BulkLabels)
    detail: PriceListDetailLabels = Field(default_factory=PriceListDetailLabels)


# ==================== CATÁLOGO ====================

class LabelCatalog(LabelModel):
    common: CommonLabels = Field(default_factory=CommonLabels)
    inventory: InventoryLabels = Field(default_factory=InventoryLabels)
    sales: SalesLabels = Field(default_factory=SalesLabels)
    product: ProductLabels = Field(default_factory=ProductLabels)
    price_list: PriceListLabels = Field(default_factory=PriceListLabels)


def _deep_merge(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_labels(path: Optional[Union[str, Path]] = None) -> LabelCatalog:
    """
    Cargar el catálogo de labels.

    Sin archivo devuelve los defaults; con archivo, sus claves (camelCase)
    reemplazan sólo los textos que definen.
    """
    defaults = LabelCatalog()
    if not path:
        return defaults

    labels_path = Path(path)
    if not labels_path.exists():
        logger.warning(f"Labels file not found: {labels_path}, using defaults")
        return defaults

    overrides = json.loads(labels_path.read_text(encoding="utf-8"))
    merged = _deep_merge(defaults.model_dump(by_alias=True), overrides)
    logger.info(f"✅ Labels loaded from {labels_path}")
    return LabelCatalog.model_validate(merged)


# ==================== MAPPERS ====================

def map_table_labels(common: CommonLabels) -> TableLabels:
    """Aplanar los labels comunes en la estructura TableLabels"""
    table = common.table
    return TableLabels(
        search=table.search,
        search_placeholder=table.search_placeholder,
        filters=table.filters,
        filter_conditions=table.filter_conditions,
        clear_all=table.clear_all,
        add_condition=table.add_condition,
        clear=table.clear,
        apply_filters=table.apply_filters,
        sort=table.sort,
        columns=table.columns,
        export=table.export,
        density_default=table.density.default,
        density_comfortable=table.density.comfortable,
        density_compact=table.density.compact,
        show=table.show,
        entries=table.entries,
        showing=table.showing,
        to=table.to,
        of=table.of,
        entries_label=table.entries_label,
        select_all=table.select_all,
        actions=table.actions,
        prev=common.pagination.prev,
        next=common.pagination.next,
    )


def map_bulk_config(common: CommonLabels) -> BulkActionsConfig:
    return BulkActionsConfig(
        enabled=True,
        select_all_label=common.bulk.select_all,
        selected_label=common.bulk.selected,
        cancel_label=common.bulk.clear_selection,
    )


def status_page_text(labels: StatusPageLabels, status: str, kind: str = "heading") -> str:
    """Título o caption de un listado según su estado (active / inactive)"""
    if kind == "caption":
        values = {"active": labels.caption_active, "inactive": labels.caption_inactive}
        return values.get(status, labels.caption)
    values = {"active": labels.heading_active, "inactive": labels.heading_inactive}
    return values.get(status, labels.heading)


def status_empty_state(labels: StatusEmptyLabels, status: str) -> EmptyState:
    if status == "inactive":
        return EmptyState(title=labels.inactive_title, message=labels.inactive_message)
    return EmptyState(title=labels.active_title, message=labels.active_message)


# ==================== UBICACIONES ====================

LOCATION_MAP: Dict[str, str] = {
    "ayala-central-bloc": "Ayala Central Bloc",
    "sm-city-cebu": "SM City Cebu",
    "ayala-center-cebu": "Ayala Center Cebu",
    "robinsons-galleria": "Robinsons Galleria",
}


def location_display_name(slug: str) -> str:
    return LOCATION_MAP.get(slug, slug)
