# centymo/modules/inventory/service.py
import logging
from datetime import date
from typing import List, Dict, Any, Optional

from centymo.core.exceptions import ActionError, DataSourceError, PageError, RecordNotFoundError
from centymo.shared import routes
from centymo.shared.datasource import DataSource
from centymo.shared.labels import (
    LOCATION_MAP, LabelCatalog, location_display_name, map_bulk_config, map_table_labels
)
from centymo.shared.records import (
    format_quantity, is_explicit_false, parse_float, record_float, record_str, value_str
)
from centymo.shared.schemas import (
    ActionResult, BulkAction, EmptyState, FormOption, InfoField, PageData,
    PrimaryAction, RowAction, TabItem, TableCell, TableColumn, TableConfig,
    TableRow, apply_column_styles, apply_table_settings, build_options
)
from .repository import InventoryRepository
from .schemas import (
    AttributeEntry, DepreciationFormData, DepreciationFormRequest, DepreciationInfo,
    InventoryDashboardPage, InventoryDetailPage, InventoryFormData, InventoryFormRequest,
    InventoryListPage, InventoryMovementsPage, LowStockAlert, MovementEntry,
    SerialFormData, SerialFormRequest, SerialSummary, TransactionFormData,
    TransactionFormRequest, WidgetData
)

logger = logging.getLogger(__name__)

INVENTORY_TABLE = "inventory-table"
SERIAL_TABLE = "serial-table"
TRANSACTION_TABLE = "transaction-table"

DEFAULT_ITEM_TYPE = "non_serialized"
DETAIL_TABS = ("info", "attributes", "serials", "transactions", "depreciation", "audit")
SERIAL_STATUSES = ("available", "sold", "reserved", "defective", "returned")
TRANSACTION_TYPES = ("received", "sold", "adjusted", "transferred", "returned", "write_off")
DEPRECIATION_METHODS = ("straight_line", "declining_balance", "sum_of_years")

# Tipos de movimiento que suman o restan stock
INBOUND_TYPES = ("received", "returned")
OUTBOUND_TYPES = ("sold", "transferred", "write_off")

# Valor unitario fijo mientras no exista costo por item
PLACEHOLDER_UNIT_COST = 100

ITEM_TYPE_VARIANTS = {"serialized": "info", "non_serialized": "default", "consumable": "success"}
SERIAL_STATUS_VARIANTS = {
    "available": "success",
    "sold": "default",
    "reserved": "warning",
    "defective": "danger",
    "returned": "warning",
}
TRANSACTION_TYPE_VARIANTS = {
    "received": "success",
    "sold": "default",
    "adjusted": "info",
    "transferred": "warning",
    "returned": "danger",
    "write_off": "danger",
}


# ==================== HELPERS ====================

def compute_available(on_hand: Any, reserved: Any) -> str:
    """max(0, on_hand - reserved); entero si no tiene decimales"""
    available = parse_float(on_hand) - parse_float(reserved)
    if available < 0:
        available = 0.0
    return format_quantity(available)


def is_low_stock(record: Dict[str, Any]) -> bool:
    """Disponible en o por debajo del nivel de reorden (sólo si hay nivel definido)"""
    reorder_level = record_float(record, "reorder_level")
    available = record_float(record, "quantity_on_hand") - record_float(record, "quantity_reserved")
    return reorder_level > 0 and available <= reorder_level


def inventory_status(record: Dict[str, Any]) -> str:
    # Sólo un False explícito desactiva el item
    return "inactive" if is_explicit_false(record, "active") else "active"


def item_type_of(record: Dict[str, Any]) -> str:
    return record_str(record, "item_type") or DEFAULT_ITEM_TYPE


def quantity_str(record: Dict[str, Any], key: str) -> str:
    if record.get(key) is None:
        return "0"
    return record_str(record, key)


def format_signed_quantity(quantity: Any, transaction_type: str) -> str:
    """Cantidad con signo según el tipo de movimiento"""
    value = value_str(quantity)
    if transaction_type in INBOUND_TYPES:
        return "+" + value
    if transaction_type in OUTBOUND_TYPES:
        return "-" + value
    return value


def apply_transaction(on_hand: float, transaction_type: str, quantity: float) -> float:
    """Nuevo on_hand tras un movimiento (las salidas no bajan de 0)"""
    if transaction_type in INBOUND_TYPES:
        return on_hand + quantity
    if transaction_type in OUTBOUND_TYPES:
        return max(0.0, on_hand - quantity)
    return on_hand


def status_variant(status: str) -> str:
    return {"active": "success", "inactive": "warning"}.get(status, "default")


class InventoryService:
    """
    Servicio de inventario: listado por ubicación, detalle con pestañas,
    dashboard, movimientos y acciones de drawer
    """

    def __init__(self, db: DataSource, labels: LabelCatalog, default_location: str = "ayala-central-bloc"):
        self.repository = InventoryRepository(db)
        self.labels = labels
        self.l = labels.inventory
        self.default_location = default_location

    def _item_type_label(self, item_type: str) -> str:
        names = {
            "serialized": self.l.item_type.serialized,
            "non_serialized": self.l.item_type.non_serialized,
            "consumable": self.l.item_type.consumable,
        }
        return names.get(item_type, item_type)

    def _depreciation_method_label(self, method: str) -> str:
        names = {
            "straight_line": self.l.depreciation.method_straight_line,
            "declining_balance": self.l.depreciation.method_declining_balance,
            "sum_of_years": self.l.depreciation.method_sum_of_years,
        }
        return names.get(method, method)

    # ==================== LISTADO ====================

    def get_list_page(self, location: str, current_path: str = "") -> InventoryListPage:
        location = location or self.default_location

        try:
            records = self.repository.list_items()
        except DataSourceError as e:
            logger.error(f"Failed to list inventory: {e}")
            raise PageError(f"failed to load inventory: {e.message}") from e

        columns = [
            TableColumn(key="name", label=self.l.columns.product_name, sortable=True),
            TableColumn(key="sku", label=self.l.columns.sku, sortable=True, width="150px"),
            TableColumn(key="item_type", label="Type", sortable=True, width="130px"),
            TableColumn(key="on_hand", label=self.l.columns.on_hand, sortable=True, width="120px"),
            TableColumn(key="available", label=self.l.columns.available, sortable=True, width="120px"),
            TableColumn(key="reorder_level", label=self.l.columns.reorder_level, sortable=True, width="140px"),
            TableColumn(key="status", label=self.l.columns.status, sortable=True, width="120px"),
        ]
        rows = self.build_list_rows(records, location)
        apply_column_styles(columns, rows)

        common = self.labels.common
        bulk = map_bulk_config(common)
        bulk.actions = [
            BulkAction(
                key="activate",
                label=self.l.status.activate,
                icon="icon-check-circle",
                variant="success",
                endpoint=routes.INVENTORY_BULK_SET_STATUS_URL,
                confirm_title=self.l.status.activate,
                confirm_message="Are you sure you want to activate {{count}} item(s)?",
                extra_params={"target_status": "active"},
            ),
            BulkAction(
                key="deactivate",
                label=self.l.status.deactivate,
                icon="icon-x-circle",
                variant="warning",
                endpoint=routes.INVENTORY_BULK_SET_STATUS_URL,
                confirm_title=self.l.status.deactivate,
                confirm_message="Are you sure you want to deactivate {{count}} item(s)?",
                extra_params={"target_status": "inactive"},
            ),
            BulkAction(
                key="delete",
                label=common.bulk.delete,
                icon="icon-trash-2",
                variant="danger",
                endpoint=routes.INVENTORY_BULK_DELETE_URL,
                confirm_title=common.bulk.delete,
                confirm_message="Are you sure you want to delete {{count}} item(s)? This action cannot be undone.",
            ),
        ]

        table = TableConfig(
            id=INVENTORY_TABLE,
            refresh_url=routes.route_url(routes.INVENTORY_LIST_URL, location=location),
            columns=columns,
            rows=rows,
            show_search=True,
            show_actions=True,
            show_filters=True,
            show_sort=True,
            show_columns=True,
            show_export=True,
            show_density=True,
            show_entries=True,
            default_sort_column="name",
            default_sort_direction="asc",
            labels=map_table_labels(common),
            empty_state=EmptyState(title=self.l.empty.title, message=self.l.empty.message),
            primary_action=PrimaryAction(label=self.l.buttons.add_item, action_url=routes.INVENTORY_ADD_URL),
            bulk_actions=bulk,
        )
        apply_table_settings(table)

        title = f"Inventory — {location_display_name(location)}"
        return InventoryListPage(
            page=PageData(
                title=title,
                current_path=current_path,
                active_nav="inventory",
                active_sub_nav=location,
                header_title=title,
                header_subtitle=self.l.page.caption,
                header_icon="icon-package",
                content_template="inventory/list.html",
            ),
            table=table,
        )

    def build_list_rows(self, records: List[Dict[str, Any]], location: str) -> List[TableRow]:
        rows = []
        for record in records:
            if record_str(record, "location_id") != location:
                continue

            item_id = record_str(record, "id")
            name = record_str(record, "name")
            sku = record_str(record, "sku")
            on_hand = quantity_str(record, "quantity_on_hand")
            reserved = quantity_str(record, "quantity_reserved")
            reorder_level = quantity_str(record, "reorder_level")
            item_type = item_type_of(record)
            available = compute_available(record.get("quantity_on_hand"), record.get("quantity_reserved"))
            status = inventory_status(record)

            reorder_display = f"{reorder_level} (!)" if is_low_stock(record) else reorder_level
            detail_url = routes.route_url(routes.INVENTORY_DETAIL_URL, id=item_id)

            rows.append(TableRow(
                id=item_id,
                href=detail_url,
                cells=[
                    TableCell(value=name),
                    TableCell(value=sku),
                    TableCell(
                        type="badge",
                        value=self._item_type_label(item_type),
                        variant=ITEM_TYPE_VARIANTS.get(item_type, "default"),
                    ),
                    TableCell(value=on_hand),
                    TableCell(value=available),
                    TableCell(value=reorder_display),
                    TableCell(type="badge", value=status, variant=status_variant(status)),
                ],
                data_attrs={
                    "name": name,
                    "sku": sku,
                    "item_type": item_type,
                    "on_hand": on_hand,
                    "reserved": reserved,
                    "available": available,
                    "reorder_lvl": reorder_level,
                    "status": status,
                },
                actions=[
                    RowAction(type="view", label=self.l.actions.view, action="view", href=detail_url),
                    RowAction(
                        type="edit", label=self.l.actions.edit, action="edit",
                        url=routes.route_url(routes.INVENTORY_EDIT_URL, id=item_id),
                        drawer_title=self.l.actions.edit,
                    ),
                    RowAction(
                        type="delete", label=self.l.actions.delete, action="delete",
                        url=routes.INVENTORY_DELETE_URL, item_name=name,
                    ),
                ],
            ))
        return rows

    # ==================== DETALLE ====================

    def get_detail_page(self, item_id: str, tab: str = "info", current_path: str = "") -> InventoryDetailPage:
        try:
            item = self.repository.get_item(item_id)
        except RecordNotFoundError as e:
            raise PageError(f"failed to load inventory item: {e.message}", status_code=404) from e
        except DataSourceError as e:
            logger.error(f"Failed to read inventory_item {item_id}: {e}")
            raise PageError(f"failed to load inventory item: {e.message}") from e

        active_tab = tab if tab in DETAIL_TABS else "info"
        item_type = item_type_of(item)
        is_serialized = item_type == "serialized"
        location_name = location_display_name(record_str(item, "location_id"))
        header_title = f"{record_str(item, 'name')} — {location_name}"
        available = compute_available(item.get("quantity_on_hand"), item.get("quantity_reserved"))

        page = InventoryDetailPage(
            page=PageData(
                title=header_title,
                current_path=current_path,
                active_nav="inventory",
                header_title=header_title,
                header_subtitle=self.l.detail.item_info,
                header_icon="icon-package",
                content_template="inventory/detail.html",
            ),
            item_id=item_id,
            active_tab=active_tab,
            tab_items=self._build_tab_items(item_id, is_serialized),
            is_serialized=is_serialized,
            item_type=item_type,
            item_type_label=self._item_type_label(item_type),
            item_type_variant=ITEM_TYPE_VARIANTS.get(item_type, "default"),
            location_name=location_name,
            available_qty=available,
            labels=self.l,
        )

        if active_tab == "info":
            page.info_fields = self._build_info_fields(item, location_name, available)
        elif active_tab == "attributes":
            page.attributes = self.load_attributes(item)
        elif active_tab == "serials":
            serials = self._safe_serials(item_id)
            page.serial_table = self.build_serial_table(serials, item_id)
            page.serial_summary = compute_serial_summary(serials)
        elif active_tab == "transactions":
            page.transaction_table = self.build_transaction_table(item_id)
        elif active_tab == "depreciation":
            page.depreciation = self.load_depreciation(item_id)
            page.depreciation_assign_url = routes.route_url(routes.INVENTORY_DEPRECIATION_ASSIGN_URL, id=item_id)
            if page.depreciation:
                page.depreciation_edit_url = routes.route_url(
                    routes.INVENTORY_DEPRECIATION_EDIT_URL, id=item_id, did=page.depreciation.id
                )
        elif active_tab == "audit":
            page.audit_table = self._build_audit_table()

        return page

    def _build_tab_items(self, item_id: str, is_serialized: bool) -> List[TabItem]:
        tabs = self.l.tabs
        tab_defs = [
            ("info", tabs.info, "icon-info"),
            ("attributes", tabs.attributes, "icon-layers"),
        ]
        # Los seriales sólo aplican a items serializados
        if is_serialized:
            tab_defs.append(("serials", tabs.serials, "icon-hash"))
        tab_defs.extend([
            ("transactions", tabs.transactions, "icon-repeat"),
            ("depreciation", tabs.depreciation, "icon-trending-down"),
            ("audit", tabs.audit, "icon-clock"),
        ])

        base = routes.route_url(routes.INVENTORY_DETAIL_URL, id=item_id)
        return [
            TabItem(
                key=key,
                label=label,
                href=f"{base}?tab={key}",
                hx_get=routes.route_url(routes.INVENTORY_TAB_ACTION_URL, id=item_id, tab=key),
                icon=icon,
            )
            for key, label, icon in tab_defs
        ]

    def _build_info_fields(self, item: Dict[str, Any], location_name: str, available: str) -> List[InfoField]:
        detail = self.l.detail
        status = inventory_status(item)
        return [
            InfoField(label=detail.product_name, value=record_str(item, "name")),
            InfoField(label=detail.sku, value=record_str(item, "sku")),
            InfoField(label=detail.location, value=location_name),
            InfoField(label=detail.on_hand, value=quantity_str(item, "quantity_on_hand")),
            InfoField(label=detail.reserved, value=quantity_str(item, "quantity_reserved")),
            InfoField(label=detail.available, value=available),
            InfoField(label=detail.reorder_level, value=quantity_str(item, "reorder_level")),
            InfoField(label=detail.unit_of_measure, value=record_str(item, "unit_of_measure")),
            InfoField(label=detail.status, value=status, variant=status_variant(status)),
            InfoField(label=detail.notes, value=record_str(item, "notes")),
        ]

    def load_attributes(self, item: Dict[str, Any]) -> List[AttributeEntry]:
        """
        Atributos del item: atributos del producto con el valor del item
        o, si no tiene, el default_value del producto
        """
        product_id = record_str(item, "product_id")
        item_id = record_str(item, "id")
        if not product_id:
            return []

        try:
            product_attributes = self.repository.get_product_attributes(product_id)
            attribute_ids = {record_str(pa, "attribute_id") for pa in product_attributes}
            attribute_names = {
                record_str(a, "id"): record_str(a, "name")
                for a in self.repository.list_attributes()
                if record_str(a, "id") in attribute_ids
            }
            item_values = {
                record_str(ia, "attribute_id"): record_str(ia, "value")
                for ia in self.repository.get_item_attributes(item_id)
            }
        except DataSourceError as e:
            logger.error(f"Failed to load attributes for inventory item {item_id}: {e}")
            return []

        entries = []
        for pa in product_attributes:
            attribute_id = record_str(pa, "attribute_id")
            name = attribute_names.get(attribute_id, "")
            value = item_values.get(attribute_id) or record_str(pa, "default_value")
            if name:
                entries.append(AttributeEntry(name=name, value=value))
        return entries

    def _safe_serials(self, item_id: str) -> List[Dict[str, Any]]:
        try:
            return self.repository.get_serials(item_id)
        except DataSourceError as e:
            logger.error(f"Failed to list inventory_serial: {e}")
            return []

    def build_serial_table(self, serials: List[Dict[str, Any]], item_id: str) -> TableConfig:
        detail, serial_labels = self.l.detail, self.l.serial
        columns = [
            TableColumn(key="serial_number", label=detail.serial_number, sortable=True),
            TableColumn(key="imei", label=detail.imei, width="180px"),
            TableColumn(key="status", label=detail.serial_status, sortable=True, width="120px"),
            TableColumn(key="warranty_end", label=detail.warranty_end, sortable=True, width="140px"),
            TableColumn(key="purchase_order", label=detail.purchase_order, width="140px"),
            TableColumn(key="sold_reference", label=detail.sale_reference, width="140px"),
        ]

        rows = []
        for serial in serials:
            serial_id = record_str(serial, "id")
            serial_number = record_str(serial, "serial_number")
            status = record_str(serial, "status")
            rows.append(TableRow(
                id=serial_id,
                cells=[
                    TableCell(value=serial_number),
                    TableCell(value=record_str(serial, "imei")),
                    TableCell(type="badge", value=status, variant=SERIAL_STATUS_VARIANTS.get(status, "default")),
                    TableCell(value=record_str(serial, "warranty_end")),
                    TableCell(value=record_str(serial, "purchase_order")),
                    TableCell(value=record_str(serial, "sold_reference")),
                ],
                actions=[
                    RowAction(
                        type="edit", label=serial_labels.edit, action="edit",
                        url=routes.route_url(routes.INVENTORY_SERIAL_EDIT_URL, id=item_id, sid=serial_id),
                        drawer_title=serial_labels.edit,
                    ),
                    RowAction(
                        type="delete", label=serial_labels.remove, action="delete",
                        url=routes.route_url(routes.INVENTORY_SERIAL_REMOVE_URL, id=item_id),
                        item_name=serial_number,
                    ),
                ],
            ))

        apply_column_styles(columns, rows)
        table = TableConfig(
            id=SERIAL_TABLE,
            refresh_url=routes.route_url(routes.INVENTORY_SERIAL_TABLE_URL, id=item_id),
            columns=columns,
            rows=rows,
            show_search=True,
            show_entries=True,
            default_sort_column="serial_number",
            default_sort_direction="asc",
            labels=map_table_labels(self.labels.common),
            empty_state=EmptyState(title=detail.serial_empty_title, message=detail.serial_empty_message),
            primary_action=PrimaryAction(
                label=serial_labels.assign,
                action_url=routes.route_url(routes.INVENTORY_SERIAL_ASSIGN_URL, id=item_id),
            ),
        )
        return apply_table_settings(table)

    def get_serial_table(self, item_id: str) -> TableConfig:
        return self.build_serial_table(self._safe_serials(item_id), item_id)

    def build_transaction_table(self, item_id: str) -> TableConfig:
        try:
            transactions = self.repository.get_transactions(item_id)
        except DataSourceError as e:
            logger.error(f"Failed to list inventory_transaction: {e}")
            transactions = []

        detail = self.l.detail
        columns = [
            TableColumn(key="transaction_date", label=detail.date, sortable=True, width="130px"),
            TableColumn(key="transaction_type", label=detail.type, sortable=True, width="120px"),
            TableColumn(key="quantity", label=detail.quantity, sortable=True, width="100px"),
            TableColumn(key="reference", label=detail.reference),
            TableColumn(key="serial_number", label=detail.serial, width="150px"),
            TableColumn(key="performed_by", label=detail.performed_by, width="150px"),
        ]

        rows = []
        for transaction in transactions:
            transaction_type = record_str(transaction, "transaction_type")
            rows.append(TableRow(
                id=record_str(transaction, "id"),
                cells=[
                    TableCell(value=record_str(transaction, "transaction_date")),
                    TableCell(
                        type="badge",
                        value=transaction_type,
                        variant=TRANSACTION_TYPE_VARIANTS.get(transaction_type, "default"),
                    ),
                    TableCell(value=format_signed_quantity(transaction.get("quantity"), transaction_type)),
                    TableCell(value=record_str(transaction, "reference")),
                    TableCell(value=record_str(transaction, "serial_number")),
                    TableCell(value=record_str(transaction, "performed_by")),
                ],
            ))

        apply_column_styles(columns, rows)
        table = TableConfig(
            id=TRANSACTION_TABLE,
            refresh_url=routes.route_url(routes.INVENTORY_TRANSACTION_TABLE_URL, id=item_id),
            columns=columns,
            rows=rows,
            show_search=True,
            show_entries=True,
            default_sort_column="transaction_date",
            default_sort_direction="desc",
            labels=map_table_labels(self.labels.common),
            empty_state=EmptyState(title=detail.transaction_empty_title, message=detail.transaction_empty_message),
            primary_action=PrimaryAction(
                label=self.l.transaction.record,
                action_url=routes.route_url(routes.INVENTORY_TRANSACTION_ASSIGN_URL, id=item_id),
            ),
        )
        return apply_table_settings(table)

    def load_depreciation(self, item_id: str) -> Optional[DepreciationInfo]:
        """Primera política de depreciación del item (None si no hay)"""
        try:
            records = self.repository.get_depreciations(item_id)
        except DataSourceError as e:
            logger.error(f"Failed to list inventory_depreciation: {e}")
            return None

        if not records:
            return None

        record = records[0]
        return DepreciationInfo(
            id=record_str(record, "id"),
            method=self._depreciation_method_label(record_str(record, "method")),
            cost_basis=record_str(record, "cost_basis"),
            salvage_value=record_str(record, "salvage_value"),
            useful_life=f"{record_str(record, 'useful_life_months')} months",
            start_date=record_str(record, "start_date"),
            accumulated=record_str(record, "accumulated_depreciation"),
            book_value=record_str(record, "book_value"),
        )

    def _build_audit_table(self) -> TableConfig:
        detail = self.l.detail
        table = TableConfig(
            id="audit-trail-table",
            columns=[
                TableColumn(key="date", label=detail.date, sortable=True, width="160px"),
                TableColumn(key="action", label=detail.audit_action, sortable=True),
                TableColumn(key="user", label=detail.audit_user, sortable=True, width="180px"),
                TableColumn(key="description", label=detail.description),
            ],
            rows=[],
            show_search=True,
            show_entries=True,
            default_sort_column="date",
            default_sort_direction="desc",
            labels=map_table_labels(self.labels.common),
            empty_state=EmptyState(title=detail.audit_empty_title, message=detail.audit_empty_message),
        )
        return apply_table_settings(table)

    # ==================== DASHBOARD ====================

    def get_dashboard_page(self, current_path: str = "") -> InventoryDashboardPage:
        title = self.l.dashboard.title
        return InventoryDashboardPage(
            page=PageData(
                title=title,
                current_path=current_path,
                active_nav="inventory",
                active_sub_nav="dashboard",
                header_title=title,
                header_icon="icon-briefcase",
                content_template="inventory/dashboard.html",
            ),
            widgets=self.build_dashboard_widgets(),
            labels=self.l,
        )

    def build_dashboard_widgets(self) -> List[WidgetData]:
        items = self._safe_list(self.repository.list_items, "inventory items")
        serials = self._safe_list(self.repository.list_all_serials, "serials")
        depreciations = self._safe_list(self.repository.list_depreciations, "depreciations")

        total_stock_value = 0.0
        low_stock_count = 0
        item_types = set()
        for item in items:
            total_stock_value += record_float(item, "quantity_on_hand") * PLACEHOLDER_UNIT_COST
            if is_low_stock(item):
                low_stock_count += 1
            item_types.add(item_type_of(item))

        serial_available = sum(1 for s in serials if record_str(s, "status") == "available")
        total_cost_basis = sum(record_float(d, "cost_basis") for d in depreciations)
        total_book_value = sum(record_float(d, "book_value") for d in depreciations)

        dashboard = self.l.dashboard
        return [
            WidgetData(icon="icon-dollar-sign", value=f"{total_stock_value:.0f}",
                       label=dashboard.total_stock_value, color="terracotta"),
            WidgetData(icon="icon-alert-triangle", value=str(low_stock_count),
                       label=dashboard.low_stock_alerts, color="amber"),
            WidgetData(icon="icon-repeat", value=str(len(items)),
                       label=dashboard.stock_turnover, color="sage"),
            WidgetData(icon="icon-map-pin", value=str(len(LOCATION_MAP)),
                       label=dashboard.items_by_location, color="navy"),
            WidgetData(icon="icon-trending-down", value=f"{total_cost_basis:.0f} / {total_book_value:.0f}",
                       label=dashboard.depreciation_summary, color="terracotta"),
            WidgetData(icon="icon-hash", value=f"{serial_available} / {len(serials)}",
                       label=dashboard.serial_unit_status, color="sage"),
            WidgetData(icon="icon-activity", value="—",
                       label=dashboard.recent_movements, color="navy"),
            WidgetData(icon="icon-pie-chart", value=f"{len(item_types)} types",
                       label=dashboard.category_distribution, color="amber"),
        ]

    def _safe_list(self, loader, what: str) -> List[Dict[str, Any]]:
        try:
            return loader()
        except DataSourceError as e:
            logger.error(f"Dashboard: Failed to list {what}: {e}")
            return []

    def get_recent_movements(self, limit: int = 10) -> List[MovementEntry]:
        """Últimos movimientos registrados"""
        transactions = self._safe_list(self.repository.list_transactions, "transactions")
        items = {record_str(i, "id"): i for i in self._safe_list(self.repository.list_items, "inventory items")}

        entries = []
        for transaction in transactions[-limit:]:
            item_id = record_str(transaction, "inventory_item_id")
            transaction_type = record_str(transaction, "transaction_type")
            entries.append(MovementEntry(
                transaction_date=record_str(transaction, "transaction_date"),
                item_name=record_str(items.get(item_id), "name") or item_id,
                transaction_type=transaction_type,
                quantity=format_signed_quantity(transaction.get("quantity"), transaction_type),
                reference=record_str(transaction, "reference"),
            ))
        return entries

    def get_low_stock_alerts(self) -> List[LowStockAlert]:
        items = self._safe_list(self.repository.list_items, "items for alerts")
        return [
            LowStockAlert(
                id=record_str(item, "id"),
                name=record_str(item, "name"),
                sku=record_str(item, "sku"),
                available=compute_available(item.get("quantity_on_hand"), item.get("quantity_reserved")),
                reorder_level=quantity_str(item, "reorder_level"),
            )
            for item in items
            if is_low_stock(item)
        ]

    # ==================== MOVIMIENTOS ====================

    def get_movements_page(self, current_path: str = "") -> InventoryMovementsPage:
        transactions = self._safe_list(self.repository.list_transactions, "inventory_transaction")
        items = {record_str(i, "id"): i for i in self._safe_list(self.repository.list_items, "inventory_item")}

        detail = self.l.detail
        columns = [
            TableColumn(key="transaction_date", label=detail.date, sortable=True, width="130px"),
            TableColumn(key="item_name", label=self.l.columns.product_name, sortable=True),
            TableColumn(key="location", label=detail.location, sortable=True, width="160px"),
            TableColumn(key="transaction_type", label=detail.type, sortable=True, width="120px"),
            TableColumn(key="quantity", label=detail.quantity, sortable=True, width="100px"),
            TableColumn(key="serial_number", label=detail.serial, width="150px"),
            TableColumn(key="reference", label=detail.reference),
            TableColumn(key="performed_by", label=detail.performed_by, width="150px"),
        ]

        rows = []
        for transaction in transactions:
            item_id = record_str(transaction, "inventory_item_id")
            transaction_type = record_str(transaction, "transaction_type")
            item = items.get(item_id)
            item_name = record_str(item, "name") or item_id
            location_name = location_display_name(record_str(item, "location_id")) if item else ""

            rows.append(TableRow(
                id=record_str(transaction, "id"),
                cells=[
                    TableCell(value=record_str(transaction, "transaction_date")),
                    TableCell(value=item_name),
                    TableCell(value=location_name),
                    TableCell(
                        type="badge",
                        value=transaction_type,
                        variant=TRANSACTION_TYPE_VARIANTS.get(transaction_type, "default"),
                    ),
                    TableCell(value=format_signed_quantity(transaction.get("quantity"), transaction_type)),
                    TableCell(value=record_str(transaction, "serial_number")),
                    TableCell(value=record_str(transaction, "reference")),
                    TableCell(value=record_str(transaction, "performed_by")),
                ],
            ))

        apply_column_styles(columns, rows)
        table = TableConfig(
            id="movements-table",
            columns=columns,
            rows=rows,
            show_search=True,
            show_actions=True,
            show_filters=True,
            show_sort=True,
            show_columns=True,
            show_export=True,
            show_density=True,
            show_entries=True,
            default_sort_column="transaction_date",
            default_sort_direction="desc",
            labels=map_table_labels(self.labels.common),
            empty_state=EmptyState(title=detail.transaction_empty_title, message=detail.transaction_empty_message),
        )
        apply_table_settings(table)

        return InventoryMovementsPage(
            page=PageData(
                title="Inventory Movements",
                current_path=current_path,
                active_nav="inventory",
                active_sub_nav="movements",
                header_title="Inventory Movements",
                header_subtitle=self.l.movements.subtitle,
                header_icon="icon-repeat",
                content_template="inventory/movements.html",
            ),
            table=table,
        )

    # ==================== DRAWER DE ITEM ====================

    def _location_options(self, selected: str = "") -> List[FormOption]:
        return build_options(list(LOCATION_MAP.keys()), LOCATION_MAP, selected or self.default_location)

    def get_add_form(self) -> InventoryFormData:
        return InventoryFormData(
            form_action=routes.INVENTORY_ADD_URL,
            active=True,
            unit_of_measure="pcs",
            location_id=self.default_location,
            locations=self._location_options(),
            labels=self.l.form,
        )

    def get_edit_form(self, item_id: str) -> InventoryFormData:
        try:
            record = self.repository.get_item(item_id)
        except DataSourceError as e:
            logger.error(f"Failed to read inventory item {item_id}: {e}")
            raise ActionError("Inventory item not found") from e

        location_id = record_str(record, "location_id")
        return InventoryFormData(
            form_action=routes.route_url(routes.INVENTORY_EDIT_URL, id=item_id),
            is_edit=True,
            id=item_id,
            name=record_str(record, "name"),
            sku=record_str(record, "sku"),
            on_hand=quantity_str(record, "quantity_on_hand"),
            reserved=quantity_str(record, "quantity_reserved"),
            reorder_level=quantity_str(record, "reorder_level"),
            unit_of_measure=record_str(record, "unit_of_measure"),
            location_id=location_id,
            notes=record_str(record, "notes"),
            active=record.get("active") is True,
            locations=self._location_options(location_id),
            labels=self.l.form,
        )

    @staticmethod
    def _item_data(form: InventoryFormRequest) -> Dict[str, Any]:
        return {
            "name": form.product_name,
            "sku": form.sku,
            "quantity_on_hand": parse_float(form.quantity_on_hand),
            "quantity_reserved": parse_float(form.quantity_reserved),
            "reorder_level": parse_float(form.reorder_level),
            "unit_of_measure": form.unit_of_measure or "pcs",
            "location_id": form.location_id,
            "notes": form.notes,
            "active": form.active == "true",
        }

    def create_item(self, form: InventoryFormRequest) -> ActionResult:
        try:
            self.repository.create_item(self._item_data(form))
        except DataSourceError as e:
            logger.error(f"Failed to create inventory item: {e}")
            raise ActionError("Failed to create inventory item") from e

        return ActionResult.refresh(INVENTORY_TABLE)

    def update_item(self, item_id: str, form: InventoryFormRequest) -> ActionResult:
        try:
            self.repository.update_item(item_id, self._item_data(form))
        except DataSourceError as e:
            logger.error(f"Failed to update inventory item {item_id}: {e}")
            raise ActionError("Failed to update inventory item") from e

        return ActionResult.refresh(INVENTORY_TABLE)

    def delete_item(self, item_id: str) -> ActionResult:
        if not item_id:
            raise ActionError("Inventory item ID is required")

        try:
            self.repository.delete_item(item_id)
        except DataSourceError as e:
            logger.error(f"Failed to delete inventory item {item_id}: {e}")
            raise ActionError("Failed to delete inventory item") from e

        return ActionResult.refresh(INVENTORY_TABLE)

    def bulk_delete(self, item_ids: List[str]) -> ActionResult:
        if not item_ids:
            raise ActionError("No inventory item IDs provided")

        for item_id in item_ids:
            try:
                self.repository.delete_item(item_id)
            except DataSourceError as e:
                logger.error(f"Failed to delete inventory item {item_id}: {e}")

        return ActionResult.refresh(INVENTORY_TABLE)

    def set_status(self, item_id: str, target_status: str) -> ActionResult:
        if not item_id:
            raise ActionError("Inventory item ID is required")
        if target_status not in ("active", "inactive"):
            raise ActionError("Invalid status")

        try:
            self.repository.set_active(item_id, target_status == "active")
        except DataSourceError as e:
            logger.error(f"Failed to update inventory status {item_id}: {e}")
            raise ActionError("Failed to update inventory status") from e

        return ActionResult.refresh(INVENTORY_TABLE)

    def bulk_set_status(self, item_ids: List[str], target_status: str) -> ActionResult:
        if not item_ids:
            raise ActionError("No inventory item IDs provided")
        if target_status not in ("active", "inactive"):
            raise ActionError("Invalid target status")

        active = target_status == "active"
        for item_id in item_ids:
            try:
                self.repository.set_active(item_id, active)
            except DataSourceError as e:
                logger.error(f"Failed to update inventory status {item_id}: {e}")

        return ActionResult.refresh(INVENTORY_TABLE)

    # ==================== SERIALES ====================

    def _serial_status_options(self, selected: str) -> List[FormOption]:
        s = self.l.serial
        return build_options(
            list(SERIAL_STATUSES),
            {
                "available": s.status_available,
                "sold": s.status_sold,
                "reserved": s.status_reserved,
                "defective": s.status_defective,
                "returned": s.status_returned,
            },
            selected,
        )

    def get_serial_assign_form(self, item_id: str) -> SerialFormData:
        return SerialFormData(
            form_action=routes.route_url(routes.INVENTORY_SERIAL_ASSIGN_URL, id=item_id),
            status="available",
            status_options=self._serial_status_options("available"),
            labels=self.l.serial,
        )

    def get_serial_edit_form(self, item_id: str, serial_id: str) -> SerialFormData:
        try:
            record = self.repository.get_serial(serial_id)
        except DataSourceError as e:
            logger.error(f"Failed to read serial {serial_id}: {e}")
            raise ActionError("Serial not found") from e

        status = record_str(record, "status")
        return SerialFormData(
            form_action=routes.route_url(routes.INVENTORY_SERIAL_EDIT_URL, id=item_id, sid=serial_id),
            is_edit=True,
            id=serial_id,
            serial_number=record_str(record, "serial_number"),
            imei=record_str(record, "imei"),
            status=status,
            warranty_start=record_str(record, "warranty_start"),
            warranty_end=record_str(record, "warranty_end"),
            purchase_order=record_str(record, "purchase_order"),
            sold_reference=record_str(record, "sold_reference"),
            status_options=self._serial_status_options(status),
            labels=self.l.serial,
        )

    def assign_serial(self, item_id: str, form: SerialFormRequest) -> ActionResult:
        data = {"inventory_item_id": item_id, **form.model_dump()}
        try:
            self.repository.create_serial(data)
        except DataSourceError as e:
            logger.error(f"Failed to create serial: {e}")
            raise ActionError("Failed to create serial") from e

        return ActionResult.refresh(SERIAL_TABLE)

    def update_serial(self, serial_id: str, form: SerialFormRequest) -> ActionResult:
        try:
            self.repository.update_serial(serial_id, form.model_dump())
        except DataSourceError as e:
            logger.error(f"Failed to update serial {serial_id}: {e}")
            raise ActionError("Failed to update serial") from e

        return ActionResult.refresh(SERIAL_TABLE)

    def remove_serial(self, serial_id: str) -> ActionResult:
        if not serial_id:
            raise ActionError("Serial ID is required")

        try:
            self.repository.delete_serial(serial_id)
        except DataSourceError as e:
            logger.error(f"Failed to delete serial {serial_id}: {e}")
            raise ActionError("Failed to delete serial") from e

        return ActionResult.refresh(SERIAL_TABLE)

    # ==================== MOVIMIENTOS (DRAWER) ====================

    def get_transaction_form(self, item_id: str) -> TransactionFormData:
        t = self.l.transaction
        return TransactionFormData(
            form_action=routes.route_url(routes.INVENTORY_TRANSACTION_ASSIGN_URL, id=item_id),
            today=date.today().isoformat(),
            type_options=build_options(
                list(TRANSACTION_TYPES),
                {
                    "received": t.type_received,
                    "sold": t.type_sold,
                    "adjusted": t.type_adjusted,
                    "transferred": t.type_transferred,
                    "returned": t.type_returned,
                    "write_off": t.type_write_off,
                },
            ),
            labels=t,
        )

    def record_transaction(self, item_id: str, form: TransactionFormRequest) -> ActionResult:
        """
        Registrar un movimiento y ajustar quantity_on_hand del item.

        El ajuste de stock es best-effort: si falla la lectura o la
        actualización del item el movimiento queda registrado igual.
        """
        quantity = parse_float(form.quantity)
        data = {
            "inventory_item_id": item_id,
            "transaction_type": form.transaction_type,
            "quantity": quantity,
            "transaction_date": form.transaction_date,
            "reference": form.reference,
            "serial_number": form.serial_number,
            "notes": form.notes,
            "performed_by": "system",
        }

        try:
            self.repository.create_transaction(data)
        except DataSourceError as e:
            logger.error(f"Failed to create transaction: {e}")
            raise ActionError("Failed to record stock movement") from e

        try:
            item = self.repository.get_item(item_id)
            on_hand = apply_transaction(record_float(item, "quantity_on_hand"), form.transaction_type, quantity)
            self.repository.update_item(item_id, {"quantity_on_hand": on_hand})
        except DataSourceError as e:
            logger.error(f"Failed to adjust stock for inventory item {item_id}: {e}")

        return ActionResult.refresh(TRANSACTION_TABLE)

    def get_transaction_table(self, item_id: str) -> TableConfig:
        return self.build_transaction_table(item_id)

    # ==================== DEPRECIACIÓN (DRAWER) ====================

    def _depreciation_method_options(self, selected: str) -> List[FormOption]:
        return build_options(
            list(DEPRECIATION_METHODS),
            {method: self._depreciation_method_label(method) for method in DEPRECIATION_METHODS},
            selected,
        )

    def get_depreciation_assign_form(self, item_id: str) -> DepreciationFormData:
        return DepreciationFormData(
            form_action=routes.route_url(routes.INVENTORY_DEPRECIATION_ASSIGN_URL, id=item_id),
            method="straight_line",
            method_options=self._depreciation_method_options("straight_line"),
            labels=self.l.depreciation,
        )

    def get_depreciation_edit_form(self, item_id: str, depreciation_id: str) -> DepreciationFormData:
        try:
            record = self.repository.get_depreciation(depreciation_id)
        except DataSourceError as e:
            logger.error(f"Failed to read depreciation {depreciation_id}: {e}")
            raise ActionError("Depreciation record not found") from e

        method = record_str(record, "method")
        return DepreciationFormData(
            form_action=routes.route_url(routes.INVENTORY_DEPRECIATION_EDIT_URL, id=item_id, did=depreciation_id),
            is_edit=True,
            id=depreciation_id,
            method=method,
            cost_basis=quantity_str(record, "cost_basis"),
            salvage_value=quantity_str(record, "salvage_value"),
            useful_life=quantity_str(record, "useful_life_months"),
            start_date=record_str(record, "start_date"),
            method_options=self._depreciation_method_options(method),
            labels=self.l.depreciation,
        )

    def _depreciation_redirect(self, item_id: str) -> ActionResult:
        return ActionResult.redirect(routes.route_url(routes.INVENTORY_DETAIL_URL, id=item_id) + "?tab=depreciation")

    def assign_depreciation(self, item_id: str, form: DepreciationFormRequest) -> ActionResult:
        data = {"inventory_item_id": item_id, **form.model_dump()}
        try:
            self.repository.create_depreciation(data)
        except DataSourceError as e:
            logger.error(f"Failed to create depreciation: {e}")
            raise ActionError("Failed to configure depreciation") from e

        return self._depreciation_redirect(item_id)

    def update_depreciation(self, item_id: str, depreciation_id: str, form: DepreciationFormRequest) -> ActionResult:
        try:
            self.repository.update_depreciation(depreciation_id, form.model_dump())
        except DataSourceError as e:
            logger.error(f"Failed to update depreciation {depreciation_id}: {e}")
            raise ActionError("Failed to update depreciation") from e

        return self._depreciation_redirect(item_id)


def compute_serial_summary(serials: List[Dict[str, Any]]) -> SerialSummary:
    summary = SerialSummary(total=len(serials))
    for serial in serials:
        status = record_str(serial, "status")
        if status == "available":
            summary.available += 1
        elif status == "sold":
            summary.sold += 1
        elif status == "reserved":
            summary.reserved += 1
    return summary
