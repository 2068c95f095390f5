# centymo/modules/sales/service.py
import logging
from typing import List, Dict, Any, Optional

from centymo.core.exceptions import ActionError, DataSourceError, PageError, RecordNotFoundError
from centymo.shared import routes
from centymo.shared.datasource import DataSource
from centymo.shared.labels import LabelCatalog, map_bulk_config, map_table_labels
from centymo.shared.records import (
    format_amount, format_number, parse_float, record_float, record_str
)
from centymo.shared.schemas import (
    ActionResult, BulkAction, EmptyState, FormOption, InfoField, PageData,
    PrimaryAction, RowAction, TabItem, TableCell, TableColumn, TableConfig,
    TableRow, apply_column_styles, apply_table_settings, build_options
)
from .repository import SalesRepository
from .schemas import (
    DiscountFormData, DiscountFormRequest, LineItemFormData, LineItemFormRequest,
    PaymentFormData, PaymentFormRequest, PaymentInfo, SaleFormRequest,
    SalesDetailPage, SalesFormData, SalesListPage
)

logger = logging.getLogger(__name__)

SALES_TABLE = "sales-table"
LINE_ITEMS_TABLE = "line-items-table"
PAYMENT_TABLE = "payment-table"

# Estados que acepta set-status
SALE_STATUSES = ("ongoing", "complete", "cancelled")

# El listado usa active/completed/cancelled; los registros pueden traer
# el estado de la acción (ongoing/complete) o el del listado
LIST_STATUS_ALIASES = {
    "active": ("active", "ongoing"),
    "completed": ("completed", "complete"),
    "cancelled": ("cancelled",),
}

DETAIL_TABS = ("info", "items", "payment", "audit")


def calculate_line_item_total(quantity: str, unit_price: str, discount: str) -> float:
    """quantity * unit_price - discount (cantidad 0 o inválida cuenta como 1)"""
    qty = parse_float(quantity)
    if qty == 0:
        qty = 1
    return qty * parse_float(unit_price) - parse_float(discount)


def list_status_matches(record_status: str, list_status: str) -> bool:
    return record_status in LIST_STATUS_ALIASES.get(list_status, (list_status,))


def status_variant(status: str) -> str:
    if status in LIST_STATUS_ALIASES["active"]:
        return "info"
    if status in LIST_STATUS_ALIASES["completed"]:
        return "success"
    if status == "cancelled":
        return "warning"
    return "default"


class SalesService:
    """
    Servicio de ventas: páginas, drawers y reglas de estado
    """

    def __init__(self, db: DataSource, labels: LabelCatalog, default_currency: str = "PHP"):
        self.repository = SalesRepository(db)
        self.labels = labels
        self.l = labels.sales
        self.default_currency = default_currency

    # ==================== LISTADO ====================

    def get_list_page(self, status: str, current_path: str = "") -> SalesListPage:
        status = status or "active"

        try:
            records = self.repository.list_sales()
        except DataSourceError as e:
            logger.error(f"Failed to list sales: {e}")
            raise PageError(f"failed to load sales: {e.message}") from e

        columns = [
            TableColumn(key="reference", label=self.l.columns.reference, sortable=True),
            TableColumn(key="customer", label=self.l.columns.customer, sortable=True),
            TableColumn(key="date", label=self.l.columns.date, sortable=True, width="140px"),
            TableColumn(key="amount", label=self.l.columns.amount, sortable=True, width="140px"),
            TableColumn(key="status", label=self.l.columns.status, sortable=True, width="120px"),
        ]
        rows = self._build_list_rows(records, status)
        apply_column_styles(columns, rows)

        common = self.labels.common
        bulk = map_bulk_config(common)
        bulk.actions = [
            BulkAction(
                key="complete",
                label=self.l.detail.mark_complete,
                icon="icon-check-circle",
                variant="success",
                endpoint=routes.SALES_BULK_SET_STATUS_URL,
                confirm_title=self.l.detail.mark_complete,
                confirm_message="Are you sure you want to complete {{count}} sale(s)?",
                extra_params={"target_status": "complete"},
            ),
            BulkAction(
                key="cancel",
                label=self.l.detail.mark_cancelled,
                icon="icon-x-circle",
                variant="warning",
                endpoint=routes.SALES_BULK_SET_STATUS_URL,
                confirm_title=self.l.detail.mark_cancelled,
                confirm_message="Are you sure you want to cancel {{count}} sale(s)?",
                extra_params={"target_status": "cancelled"},
            ),
            BulkAction(
                key="delete",
                label=common.bulk.delete,
                icon="icon-trash-2",
                variant="danger",
                endpoint=routes.SALES_BULK_DELETE_URL,
                confirm_title=common.bulk.delete,
                confirm_message="Are you sure you want to delete {{count}} sale(s)? This action cannot be undone.",
            ),
        ]

        table = TableConfig(
            id=SALES_TABLE,
            refresh_url=routes.route_url(routes.SALES_LIST_URL, status=status),
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
            default_sort_column="date",
            default_sort_direction="desc",
            labels=map_table_labels(common),
            empty_state=EmptyState(
                title=self._status_text(status, "empty_title"),
                message=self._status_text(status, "empty_message"),
            ),
            primary_action=PrimaryAction(label=self.l.buttons.add_sale, action_url=routes.SALES_ADD_URL),
            bulk_actions=bulk,
        )
        apply_table_settings(table)

        title = self._status_text(status, "heading")
        return SalesListPage(
            page=PageData(
                title=title,
                current_path=current_path,
                active_nav="sales",
                active_sub_nav=status,
                header_title=title,
                header_subtitle=self._status_text(status, "caption"),
                header_icon="icon-shopping-bag",
                content_template="sales/list.html",
            ),
            table=table,
        )

    def _build_list_rows(self, records: List[Dict[str, Any]], status: str) -> List[TableRow]:
        rows = []
        for record in records:
            record_status = record_str(record, "status")
            if not list_status_matches(record_status, status):
                continue

            sale_id = record_str(record, "id")
            ref_number = record_str(record, "reference_number")
            name = record_str(record, "name")
            date = record_str(record, "revenue_date_string")
            amount_display = f"{record_str(record, 'currency')} {record_str(record, 'total_amount')}".strip()
            detail_url = routes.route_url(routes.SALES_DETAIL_URL, id=sale_id)

            rows.append(TableRow(
                id=sale_id,
                href=detail_url,
                cells=[
                    TableCell(value=ref_number),
                    TableCell(value=name),
                    TableCell(value=date),
                    TableCell(value=amount_display),
                    TableCell(type="badge", value=record_status, variant=status_variant(record_status)),
                ],
                data_attrs={
                    "reference": ref_number,
                    "customer": name,
                    "date": date,
                    "amount": amount_display,
                    "status": record_status,
                },
                actions=[
                    RowAction(type="view", label=self.l.actions.view, action="view", href=detail_url),
                    RowAction(
                        type="edit", label=self.l.actions.edit, action="edit",
                        url=routes.route_url(routes.SALES_EDIT_URL, id=sale_id),
                        drawer_title=self.l.actions.edit,
                    ),
                    RowAction(
                        type="delete", label=self.l.actions.delete, action="delete",
                        url=routes.SALES_DELETE_URL, item_name=ref_number,
                    ),
                ],
            ))
        return rows

    def _status_text(self, status: str, kind: str) -> str:
        """Textos del listado según estado (heading, caption, empty_title, empty_message)"""
        page, empty = self.l.page, self.l.empty
        texts = {
            "heading": {
                "active": page.heading_active,
                "completed": page.heading_completed,
                "cancelled": page.heading_cancelled,
            },
            "caption": {
                "active": page.caption_active,
                "completed": page.caption_completed,
                "cancelled": page.caption_cancelled,
            },
            "empty_title": {
                "active": empty.active_title,
                "completed": empty.completed_title,
                "cancelled": empty.cancelled_title,
            },
            "empty_message": {
                "active": empty.active_message,
                "completed": empty.completed_message,
                "cancelled": empty.cancelled_message,
            },
        }
        fallback = {
            "heading": page.heading,
            "caption": page.caption,
            "empty_title": empty.active_title,
            "empty_message": empty.active_message,
        }
        return texts[kind].get(status, fallback[kind])

    # ==================== DETALLE ====================

    def get_detail_page(self, sale_id: str, tab: str = "info", current_path: str = "") -> SalesDetailPage:
        try:
            revenue = self.repository.get_sale(sale_id)
        except RecordNotFoundError as e:
            raise PageError(f"failed to load sale: {e.message}", status_code=404) from e
        except DataSourceError as e:
            logger.error(f"Failed to read revenue {sale_id}: {e}")
            raise PageError(f"failed to load sale: {e.message}") from e

        active_tab = tab if tab in DETAIL_TABS else "info"
        header_title = f"Sale #{record_str(revenue, 'reference_number')}"
        currency = record_str(revenue, "currency")
        detail = self.l.detail

        page = SalesDetailPage(
            page=PageData(
                title=header_title,
                current_path=current_path,
                active_nav="sales",
                header_title=header_title,
                header_subtitle=detail.page_title,
                header_icon="icon-shopping-bag",
                content_template="sales/detail.html",
            ),
            revenue_id=sale_id,
            status=record_str(revenue, "status"),
            active_tab=active_tab,
            tab_items=self._build_tab_items(sale_id),
            labels=detail,
        )

        if active_tab == "info":
            page.info_fields = [
                InfoField(label=detail.customer, value=record_str(revenue, "name")),
                InfoField(label=self.l.form.reference, value=record_str(revenue, "reference_number")),
                InfoField(label=detail.date, value=record_str(revenue, "revenue_date_string")),
                InfoField(label=detail.amount, value=f"{currency} {record_str(revenue, 'total_amount')}".strip()),
                InfoField(label=detail.currency, value=currency),
                InfoField(
                    label=detail.status,
                    value=record_str(revenue, "status"),
                    variant=status_variant(record_str(revenue, "status")),
                ),
                InfoField(label=self.l.form.location, value=record_str(revenue, "location_id")),
                InfoField(label=detail.notes, value=record_str(revenue, "notes")),
            ]
        elif active_tab == "items":
            line_items = self._safe_line_items(sale_id)
            page.line_item_table = self.build_line_item_table(line_items, currency, sale_id)
            page.total_amount = f"{currency} {record_str(revenue, 'total_amount')}".strip()
        elif active_tab == "payment":
            payments = self._safe_payments(sale_id)
            page.payment = find_payment(payments, revenue)
            page.payment_table = self.build_payment_table(payments, currency, sale_id)
        elif active_tab == "audit":
            page.audit_table = self._build_audit_table()

        return page

    def _build_tab_items(self, sale_id: str) -> List[TabItem]:
        detail = self.l.detail
        base = routes.route_url(routes.SALES_DETAIL_URL, id=sale_id)
        tab_defs = [
            ("info", detail.tab_basic_info, "icon-info"),
            ("items", detail.tab_line_items, "icon-list"),
            ("payment", detail.tab_payment, "icon-credit-card"),
            ("audit", detail.tab_audit_trail, "icon-clock"),
        ]
        return [
            TabItem(
                key=key,
                label=label,
                href=f"{base}?tab={key}",
                hx_get=routes.route_url(routes.SALES_TAB_ACTION_URL, id=sale_id, tab=key),
                icon=icon,
            )
            for key, label, icon in tab_defs
        ]

    def _safe_line_items(self, sale_id: str) -> List[Dict[str, Any]]:
        try:
            return self.repository.get_line_items(sale_id)
        except DataSourceError as e:
            logger.error(f"Failed to list line items for revenue {sale_id}: {e}")
            return []

    def _safe_payments(self, sale_id: str) -> List[Dict[str, Any]]:
        try:
            return self.repository.get_payments(sale_id)
        except DataSourceError as e:
            logger.error(f"Failed to list payments for revenue {sale_id}: {e}")
            return []

    def _build_audit_table(self) -> TableConfig:
        detail = self.l.detail
        columns = [
            TableColumn(key="date", label=detail.date, sortable=True, width="160px"),
            TableColumn(key="action", label=detail.audit_action, sortable=True),
            TableColumn(key="user", label=detail.audit_user, sortable=True, width="180px"),
            TableColumn(key="description", label=detail.description),
        ]
        table = TableConfig(
            id="audit-trail-table",
            columns=columns,
            rows=[],
            show_search=True,
            show_entries=True,
            default_sort_column="date",
            default_sort_direction="desc",
            labels=map_table_labels(self.labels.common),
            empty_state=EmptyState(title=detail.audit_empty_title, message=detail.audit_empty_message),
        )
        return apply_table_settings(table)

    # ==================== TABLAS PARCIALES ====================

    def build_line_item_table(self, items: List[Dict[str, Any]], currency: str, sale_id: str) -> TableConfig:
        detail = self.l.detail
        columns = [
            TableColumn(key="type", label=detail.item_type, width="90px"),
            TableColumn(key="description", label=detail.description),
            TableColumn(key="quantity", label=detail.quantity, width="80px"),
            TableColumn(key="unit_price", label=detail.unit_price, width="130px"),
            TableColumn(key="discount", label=detail.discount, width="100px"),
            TableColumn(key="total", label=detail.total, width="130px"),
        ]

        rows = []
        for item in items:
            item_id = record_str(item, "id")
            description = record_str(item, "description")
            is_discount = record_str(item, "line_item_type") == "discount"

            actions = []
            # Los descuentos sólo se pueden eliminar
            if not is_discount:
                actions.append(RowAction(
                    type="edit",
                    label=detail.edit_item,
                    action="edit",
                    url=routes.route_url(routes.SALES_LINE_ITEM_EDIT_URL, id=sale_id, item_id=item_id),
                    drawer_title=detail.edit_item,
                ))
            actions.append(RowAction(
                type="delete",
                label=detail.remove_item,
                action="delete",
                url=routes.route_url(routes.SALES_LINE_ITEM_REMOVE_URL, id=sale_id) + f"?itemId={item_id}",
                item_name=description,
            ))

            rows.append(TableRow(
                id=item_id,
                cells=[
                    TableCell(
                        type="badge",
                        value=detail.item_type_discount if is_discount else detail.item_type_item,
                        variant="warning" if is_discount else "info",
                    ),
                    TableCell(value=description),
                    TableCell(value=record_str(item, "quantity")),
                    TableCell(value=f"{currency} {record_str(item, 'unit_price')}".strip()),
                    TableCell(value=record_str(item, "discount")),
                    TableCell(value=f"{currency} {record_str(item, 'total')}".strip()),
                ],
                actions=actions,
            ))

        apply_column_styles(columns, rows)
        return TableConfig(
            id=LINE_ITEMS_TABLE,
            refresh_url=routes.route_url(routes.SALES_LINE_ITEM_TABLE_URL, id=sale_id),
            columns=columns,
            rows=rows,
            show_actions=True,
            labels=map_table_labels(self.labels.common),
            empty_state=EmptyState(title=detail.item_empty_title, message=detail.item_empty_message),
            primary_action=PrimaryAction(
                label=detail.add_item,
                action_url=routes.route_url(routes.SALES_LINE_ITEM_ADD_URL, id=sale_id),
            ),
        )

    def build_payment_table(self, payments: List[Dict[str, Any]], currency: str, sale_id: str) -> TableConfig:
        detail = self.l.detail
        columns = [
            TableColumn(key="method", label=detail.payment_method),
            TableColumn(key="amount", label=detail.amount_paid, width="140px"),
            TableColumn(key="reference", label=detail.reference_number, width="160px"),
            TableColumn(key="received_by", label=detail.received_by, width="160px"),
        ]

        rows = []
        for payment in payments:
            payment_id = record_str(payment, "id")
            payment_currency = record_str(payment, "currency") or currency
            method = record_str(payment, "payment_method")
            rows.append(TableRow(
                id=payment_id,
                cells=[
                    TableCell(value=method),
                    TableCell(value=f"{payment_currency} {record_str(payment, 'amount_paid')}".strip()),
                    TableCell(value=record_str(payment, "reference_number")),
                    TableCell(value=record_str(payment, "received_by")),
                ],
                actions=[
                    RowAction(
                        type="edit",
                        label=detail.edit_payment,
                        action="edit",
                        url=routes.route_url(routes.SALES_PAYMENT_EDIT_URL, id=sale_id, payment_id=payment_id),
                        drawer_title=detail.edit_payment,
                    ),
                    RowAction(
                        type="delete",
                        label=detail.remove_payment,
                        action="delete",
                        url=routes.route_url(routes.SALES_PAYMENT_REMOVE_URL, id=sale_id),
                        item_name=method,
                    ),
                ],
            ))

        apply_column_styles(columns, rows)
        return TableConfig(
            id=PAYMENT_TABLE,
            refresh_url=routes.route_url(routes.SALES_PAYMENT_TABLE_URL, id=sale_id),
            columns=columns,
            rows=rows,
            show_actions=True,
            labels=map_table_labels(self.labels.common),
            empty_state=EmptyState(title=detail.payment_empty_title, message=detail.payment_empty_message),
            primary_action=PrimaryAction(
                label=detail.add_payment,
                action_url=routes.route_url(routes.SALES_PAYMENT_ADD_URL, id=sale_id),
            ),
        )

    def get_line_item_table(self, sale_id: str) -> TableConfig:
        """Tabla de line items para refresco HTMX"""
        try:
            revenue = self.repository.get_sale(sale_id)
        except DataSourceError as e:
            logger.error(f"Failed to read revenue {sale_id}: {e}")
            raise ActionError("Failed to load sale") from e

        items = self._safe_line_items(sale_id)
        return self.build_line_item_table(items, record_str(revenue, "currency"), sale_id)

    def get_payment_table(self, sale_id: str) -> TableConfig:
        try:
            revenue = self.repository.get_sale(sale_id)
        except DataSourceError as e:
            logger.error(f"Failed to read revenue {sale_id}: {e}")
            raise ActionError("Failed to load sale") from e

        payments = self._safe_payments(sale_id)
        return self.build_payment_table(payments, record_str(revenue, "currency"), sale_id)

    # ==================== DRAWER DE VENTA ====================

    def _location_options(self, selected: str = "") -> List[FormOption]:
        try:
            locations = self.repository.get_active_locations()
        except DataSourceError as e:
            logger.error(f"Failed to list locations: {e}")
            return []
        return [
            FormOption(
                value=record_str(location, "id"),
                label=record_str(location, "name"),
                selected=record_str(location, "id") == selected,
            )
            for location in locations
        ]

    def _status_options(self, selected: str) -> List[FormOption]:
        return build_options(
            list(SALE_STATUSES),
            {"ongoing": "Ongoing", "complete": "Complete", "cancelled": "Cancelled"},
            selected,
        )

    def get_add_form(self) -> SalesFormData:
        return SalesFormData(
            form_action=routes.SALES_ADD_URL,
            currency=self.default_currency,
            status="ongoing",
            locations=self._location_options(),
            statuses=self._status_options("ongoing"),
            labels=self.l.form,
        )

    def get_edit_form(self, sale_id: str) -> SalesFormData:
        try:
            record = self.repository.get_sale(sale_id)
        except DataSourceError as e:
            logger.error(f"Failed to read sale {sale_id}: {e}")
            raise ActionError("Sale not found") from e

        location_id = record_str(record, "location_id")
        status = record_str(record, "status")
        return SalesFormData(
            form_action=routes.route_url(routes.SALES_EDIT_URL, id=sale_id),
            is_edit=True,
            id=sale_id,
            name=record_str(record, "name"),
            reference_number=record_str(record, "reference_number"),
            date=record_str(record, "revenue_date_string"),
            currency=record_str(record, "currency"),
            status=status,
            notes=record_str(record, "notes"),
            location_id=location_id,
            locations=self._location_options(location_id),
            statuses=self._status_options(status),
            labels=self.l.form,
        )

    # ==================== CRUD DE VENTA ====================

    def create_sale(self, form: SaleFormRequest) -> ActionResult:
        try:
            created = self.repository.create_sale(form.model_dump())
        except DataSourceError as e:
            logger.error(f"Failed to create sale: {e}")
            raise ActionError("Failed to create sale") from e

        # Ir al detalle de la venta nueva en la pestaña de items
        new_id = record_str(created, "id")
        if new_id:
            return ActionResult.redirect(routes.route_url(routes.SALES_DETAIL_URL, id=new_id) + "?tab=items")
        return ActionResult.refresh(SALES_TABLE)

    def update_sale(self, sale_id: str, form: SaleFormRequest) -> ActionResult:
        try:
            self.repository.update_sale(sale_id, form.model_dump())
        except DataSourceError as e:
            logger.error(f"Failed to update sale {sale_id}: {e}")
            raise ActionError("Failed to update sale") from e

        return ActionResult.redirect(routes.route_url(routes.SALES_DETAIL_URL, id=sale_id))

    def delete_sale(self, sale_id: str) -> ActionResult:
        if not sale_id:
            raise ActionError("Sale ID is required")

        try:
            self.repository.delete_sale(sale_id)
        except DataSourceError as e:
            logger.error(f"Failed to delete sale {sale_id}: {e}")
            raise ActionError("Failed to delete sale") from e

        return ActionResult.refresh(SALES_TABLE)

    def bulk_delete(self, sale_ids: List[str]) -> ActionResult:
        if not sale_ids:
            raise ActionError("No sale IDs provided")

        for sale_id in sale_ids:
            try:
                self.repository.delete_sale(sale_id)
            except DataSourceError as e:
                logger.error(f"Failed to delete sale {sale_id}: {e}")

        return ActionResult.refresh(SALES_TABLE)

    # ==================== CAMBIOS DE ESTADO ====================

    def set_status(self, sale_id: str, target_status: str) -> ActionResult:
        """
        Cambiar el estado de una venta.

        Reglas:
        - complete: requiere al menos un line item; descuenta stock
        - cancelled: no puede tener pagos; libera los seriales
        - ongoing: sólo actualiza el estado
        """
        if not sale_id:
            raise ActionError("Sale ID is required")
        if target_status not in SALE_STATUSES:
            raise ActionError("Invalid status")

        if target_status == "complete":
            try:
                line_items = self.repository.get_line_items(sale_id)
            except DataSourceError as e:
                logger.error(f"Failed to list line items for sale {sale_id}: {e}")
                raise ActionError("Failed to check sale items") from e
            if not line_items:
                raise ActionError("Cannot complete a sale with no items. Add items first.")

            self._update_status(sale_id, target_status)
            self.deduct_stock_for_line_items(sale_id, line_items)
            return ActionResult.refresh(SALES_TABLE)

        if target_status == "cancelled":
            try:
                payments = self.repository.get_payments(sale_id)
            except DataSourceError as e:
                logger.error(f"Failed to list payments for sale {sale_id}: {e}")
                raise ActionError("Failed to check sale payments") from e
            if payments:
                raise ActionError("Cannot cancel a sale with recorded payments. Remove payments first.")

            self._update_status(sale_id, target_status)

            try:
                line_items = self.repository.get_line_items(sale_id)
            except DataSourceError as e:
                logger.error(f"Failed to list line items for serial release on sale {sale_id}: {e}")
            else:
                self.release_serials_for_line_items(sale_id, line_items)
            return ActionResult.refresh(SALES_TABLE)

        # ongoing
        self._update_status(sale_id, target_status)
        return ActionResult.refresh(SALES_TABLE)

    def _update_status(self, sale_id: str, status: str) -> None:
        try:
            self.repository.update_sale(sale_id, {"status": status})
        except DataSourceError as e:
            logger.error(f"Failed to update sale status {sale_id}: {e}")
            raise ActionError("Failed to update sale status") from e

    def bulk_set_status(self, sale_ids: List[str], target_status: str) -> ActionResult:
        """
        Cambiar el estado de varias ventas.

        Las validaciones se hacen antes de tocar ninguna venta: si alguna
        no cumple la regla se rechaza todo el lote.
        """
        if not sale_ids:
            raise ActionError("No sale IDs provided")
        if target_status not in SALE_STATUSES:
            raise ActionError("Invalid target status")

        total = len(sale_ids)

        if target_status == "cancelled":
            with_payments = 0
            for sale_id in sale_ids:
                try:
                    payments = self.repository.get_payments(sale_id)
                except DataSourceError as e:
                    logger.error(f"Failed to check payments for sale {sale_id}: {e}")
                    continue
                if payments:
                    with_payments += 1
            if with_payments:
                raise ActionError(
                    f"{with_payments} of {total} selected sales have recorded payments. Remove payments first."
                )

        if target_status == "complete":
            empty_count = 0
            for sale_id in sale_ids:
                try:
                    line_items = self.repository.get_line_items(sale_id)
                except DataSourceError as e:
                    logger.error(f"Failed to check line items for sale {sale_id}: {e}")
                    continue
                if not line_items:
                    empty_count += 1
            if empty_count:
                raise ActionError(
                    f"{empty_count} of {total} selected sales have no items. Add items first."
                )

        for sale_id in sale_ids:
            try:
                self.repository.update_sale(sale_id, {"status": target_status})
            except DataSourceError as e:
                logger.error(f"Failed to update sale status {sale_id}: {e}")
                continue

            if target_status not in ("complete", "cancelled"):
                continue

            try:
                line_items = self.repository.get_line_items(sale_id)
            except DataSourceError as e:
                logger.error(f"Failed to list line items for sale {sale_id}: {e}")
                continue

            if target_status == "complete":
                self.deduct_stock_for_line_items(sale_id, line_items)
            else:
                self.release_serials_for_line_items(sale_id, line_items)

        return ActionResult.refresh(SALES_TABLE)

    # ==================== EFECTOS SOBRE INVENTARIO ====================

    def deduct_stock_for_line_items(self, sale_id: str, line_items: List[Dict[str, Any]]) -> None:
        """Descontar cantidades del inventario y marcar seriales como vendidos"""
        for item in line_items:
            inventory_item_id = record_str(item, "inventory_item_id")
            serial_id = record_str(item, "inventory_serial_id")

            if inventory_item_id:
                try:
                    inventory_item = self.repository.get_inventory_item(inventory_item_id)
                    new_quantity = record_float(inventory_item, "quantity_on_hand") - parse_float(item.get("quantity"))
                    self.repository.update_inventory_item(inventory_item_id, {"quantity_on_hand": new_quantity})
                    logger.info(
                        f"Stock deducted for inventory item {inventory_item_id}: "
                        f"now {format_number(new_quantity)} (sale {sale_id})"
                    )
                except DataSourceError as e:
                    logger.error(f"Failed to deduct stock for inventory item {inventory_item_id}: {e}")

            if serial_id:
                self._change_serial_status(
                    sale_id,
                    serial_id,
                    inventory_item_id,
                    from_status="reserved",
                    to_status="sold",
                    notes="Auto: sale completed",
                )

    def release_serials_for_line_items(self, sale_id: str, line_items: List[Dict[str, Any]]) -> None:
        """Devolver a 'available' los seriales de una venta cancelada"""
        for item in line_items:
            serial_id = record_str(item, "inventory_serial_id")
            if not serial_id:
                continue

            from_status = "reserved"
            try:
                from_status = record_str(self.repository.get_serial(serial_id), "status") or from_status
            except DataSourceError as e:
                logger.warning(f"Failed to read serial {serial_id} before release: {e}")

            self._change_serial_status(
                sale_id,
                serial_id,
                record_str(item, "inventory_item_id"),
                from_status=from_status,
                to_status="available",
                notes="Auto: sale cancelled",
            )

    def _change_serial_status(
        self,
        sale_id: str,
        serial_id: str,
        inventory_item_id: str,
        from_status: str,
        to_status: str,
        notes: str,
    ) -> None:
        try:
            self.repository.update_serial_status(serial_id, to_status)
        except DataSourceError as e:
            logger.error(f"Failed to set serial {serial_id} to {to_status}: {e}")

        try:
            self.repository.create_serial_history({
                "inventory_serial_id": serial_id,
                "inventory_item_id": inventory_item_id,
                "from_status": from_status,
                "to_status": to_status,
                "reference_type": "revenue",
                "reference_id": sale_id,
                "notes": notes,
                "changed_by": "",
                "changed_by_role": "",
            })
        except DataSourceError as e:
            logger.error(f"Failed to create serial history for {serial_id}: {e}")

    # ==================== LINE ITEMS ====================

    def _inventory_item_options(self, selected: str = "") -> List[FormOption]:
        try:
            items = self.repository.list_inventory_items()
        except DataSourceError as e:
            logger.error(f"Failed to list inventory items: {e}")
            return []

        options = []
        for item in items:
            item_id = record_str(item, "id")
            product_name = record_str(item, "product_name") or record_str(item, "name")
            sku = record_str(item, "sku")
            label = f"{product_name} ({sku})" if sku else product_name
            options.append(FormOption(value=item_id, label=label or item_id, selected=item_id == selected))
        return options

    def get_line_item_add_form(self, sale_id: str) -> LineItemFormData:
        return LineItemFormData(
            form_action=routes.route_url(routes.SALES_LINE_ITEM_ADD_URL, id=sale_id),
            revenue_id=sale_id,
            quantity="1",
            line_item_type="item",
            inventory_items=self._inventory_item_options(),
            labels=self.l.detail,
        )

    def get_line_item_edit_form(self, sale_id: str, item_id: str) -> LineItemFormData:
        try:
            record = self.repository.get_line_item(item_id)
        except DataSourceError as e:
            logger.error(f"Failed to read line item {item_id}: {e}")
            raise ActionError("Line item not found") from e

        inventory_item_id = record_str(record, "inventory_item_id")
        return LineItemFormData(
            form_action=routes.route_url(routes.SALES_LINE_ITEM_EDIT_URL, id=sale_id, item_id=item_id),
            is_edit=True,
            id=item_id,
            revenue_id=sale_id,
            description=record_str(record, "description"),
            quantity=record_str(record, "quantity"),
            unit_price=record_str(record, "unit_price"),
            cost_price=record_str(record, "cost_price"),
            discount=record_str(record, "discount"),
            notes=record_str(record, "notes"),
            line_item_type="item",
            inventory_item_id=inventory_item_id,
            inventory_items=self._inventory_item_options(inventory_item_id),
            labels=self.l.detail,
        )

    def get_discount_form(self, sale_id: str) -> DiscountFormData:
        return DiscountFormData(
            form_action=routes.route_url(routes.SALES_LINE_ITEM_DISCOUNT_URL, id=sale_id),
            revenue_id=sale_id,
            labels=self.l.detail,
        )

    def add_line_item(self, sale_id: str, form: LineItemFormRequest) -> ActionResult:
        total = calculate_line_item_total(form.quantity, form.unit_price, form.discount)
        data = {
            "revenue_id": sale_id,
            "description": form.description,
            "quantity": form.quantity,
            "unit_price": form.unit_price,
            "cost_price": form.cost_price,
            "discount": form.discount,
            "total": format_amount(total),
            "line_item_type": "item",
            "inventory_item_id": form.inventory_item_id,
            "notes": form.notes,
        }
        if form.inventory_serial_id:
            data["inventory_serial_id"] = form.inventory_serial_id

        try:
            self.repository.create_line_item(data)
        except DataSourceError as e:
            logger.error(f"Failed to create line item: {e}")
            raise ActionError("Failed to add line item") from e

        self.recalculate_sale_total(sale_id)
        return ActionResult.refresh(LINE_ITEMS_TABLE)

    def update_line_item(self, sale_id: str, item_id: str, form: LineItemFormRequest) -> ActionResult:
        total = calculate_line_item_total(form.quantity, form.unit_price, form.discount)
        data = {
            "description": form.description,
            "quantity": form.quantity,
            "unit_price": form.unit_price,
            "cost_price": form.cost_price,
            "discount": form.discount,
            "total": format_amount(total),
            "inventory_item_id": form.inventory_item_id,
            "notes": form.notes,
        }

        try:
            self.repository.update_line_item(item_id, data)
        except DataSourceError as e:
            logger.error(f"Failed to update line item {item_id}: {e}")
            raise ActionError("Failed to update line item") from e

        self.recalculate_sale_total(sale_id)
        return ActionResult.refresh(LINE_ITEMS_TABLE)

    def remove_line_item(self, sale_id: str, item_id: str) -> ActionResult:
        if not item_id:
            raise ActionError("Line item ID is required")

        try:
            self.repository.delete_line_item(item_id)
        except DataSourceError as e:
            logger.error(f"Failed to delete line item {item_id}: {e}")
            raise ActionError("Failed to remove line item") from e

        self.recalculate_sale_total(sale_id)
        return ActionResult.refresh(LINE_ITEMS_TABLE)

    def add_discount(self, sale_id: str, form: DiscountFormRequest) -> ActionResult:
        try:
            amount = float(form.amount)
        except ValueError:
            amount = 0.0
        if amount <= 0:
            raise ActionError("Discount amount must be a positive number")

        # El descuento se guarda como total negativo
        data = {
            "revenue_id": sale_id,
            "description": form.description,
            "quantity": "1",
            "unit_price": "0",
            "cost_price": "0",
            "discount": "0",
            "total": f"-{amount:.2f}",
            "line_item_type": "discount",
        }

        try:
            self.repository.create_line_item(data)
        except DataSourceError as e:
            logger.error(f"Failed to create discount line item: {e}")
            raise ActionError("Failed to add discount") from e

        self.recalculate_sale_total(sale_id)
        return ActionResult.refresh(LINE_ITEMS_TABLE)

    def recalculate_sale_total(self, sale_id: str) -> Optional[str]:
        """Recalcular total_amount de la venta sumando sus line items"""
        try:
            items = self.repository.get_line_items(sale_id)
        except DataSourceError as e:
            logger.error(f"Failed to list line items for total recalculation: {e}")
            return None

        total_amount = format_amount(sum(parse_float(item.get("total")) for item in items))
        try:
            self.repository.update_sale(sale_id, {"total_amount": total_amount})
        except DataSourceError as e:
            logger.error(f"Failed to update revenue total: {e}")
            return None
        return total_amount

    # ==================== PAGOS ====================

    def _payment_method_options(self, selected: str = "") -> List[FormOption]:
        try:
            methods = self.repository.list_collection_methods()
        except DataSourceError as e:
            logger.error(f"Failed to list collection methods: {e}")
            return []

        options = []
        for method in methods:
            method_id = record_str(method, "id")
            if not method_id:
                continue
            options.append(FormOption(
                value=method_id,
                label=record_str(method, "name") or method_id,
                selected=method_id == selected,
            ))
        return options

    def _payment_method_name(self, collection_method_id: str) -> str:
        """Nombre del método para la columna payment_method (fallback: el id)"""
        if not collection_method_id:
            return ""
        try:
            method = self.repository.get_collection_method(collection_method_id)
        except DataSourceError:
            return collection_method_id
        return record_str(method, "name") or collection_method_id

    def get_payment_add_form(self, sale_id: str) -> PaymentFormData:
        return PaymentFormData(
            form_action=routes.route_url(routes.SALES_PAYMENT_ADD_URL, id=sale_id),
            revenue_id=sale_id,
            currency=self.default_currency,
            payment_methods=self._payment_method_options(),
            labels=self.l.detail,
        )

    def get_payment_edit_form(self, sale_id: str, payment_id: str) -> PaymentFormData:
        try:
            record = self.repository.get_payment(payment_id)
        except DataSourceError as e:
            logger.error(f"Failed to read payment {payment_id}: {e}")
            raise ActionError("Payment not found") from e

        method_id = record_str(record, "collection_method_id")
        return PaymentFormData(
            form_action=routes.route_url(routes.SALES_PAYMENT_EDIT_URL, id=sale_id, payment_id=payment_id),
            is_edit=True,
            id=payment_id,
            revenue_id=sale_id,
            collection_method_id=method_id,
            amount_paid=record_str(record, "amount_paid"),
            currency=record_str(record, "currency"),
            reference_number=record_str(record, "reference_number"),
            notes=record_str(record, "notes"),
            received_by=record_str(record, "received_by"),
            received_role=record_str(record, "received_role"),
            payment_methods=self._payment_method_options(method_id),
            labels=self.l.detail,
        )

    def add_payment(self, sale_id: str, form: PaymentFormRequest) -> ActionResult:
        data = {
            "revenue_id": sale_id,
            "payment_method": self._payment_method_name(form.collection_method_id),
            "amount_paid": form.amount_paid,
            "currency": form.currency,
            "collection_method_id": form.collection_method_id,
            "reference_number": form.reference_number,
            "received_by": form.received_by,
            "received_role": form.received_role,
            "collection_type": "sale",
            "status": "completed",
            "notes": form.notes,
        }

        try:
            self.repository.create_payment(data)
        except DataSourceError as e:
            logger.error(f"Failed to create payment for revenue {sale_id}: {e}")
            raise ActionError("Failed to record payment") from e

        return ActionResult.refresh(PAYMENT_TABLE)

    def update_payment(self, sale_id: str, payment_id: str, form: PaymentFormRequest) -> ActionResult:
        # received_by no se modifica al editar
        data = {
            "payment_method": self._payment_method_name(form.collection_method_id),
            "amount_paid": form.amount_paid,
            "currency": form.currency,
            "collection_method_id": form.collection_method_id,
            "reference_number": form.reference_number,
            "received_role": form.received_role,
            "notes": form.notes,
        }

        try:
            self.repository.update_payment(payment_id, data)
        except DataSourceError as e:
            logger.error(f"Failed to update payment {payment_id}: {e}")
            raise ActionError("Failed to update payment") from e

        return ActionResult.refresh(PAYMENT_TABLE)

    def remove_payment(self, payment_id: str) -> ActionResult:
        if not payment_id:
            raise ActionError("Payment ID is required")

        try:
            self.repository.delete_payment(payment_id)
        except DataSourceError as e:
            logger.error(f"Failed to delete payment {payment_id}: {e}")
            raise ActionError("Failed to remove payment") from e

        return ActionResult.refresh(PAYMENT_TABLE)


def find_payment(payments: List[Dict[str, Any]], revenue: Dict[str, Any]) -> PaymentInfo:
    """Primer pago de la venta o, si no hay, un resumen con el total de la venta"""
    currency = record_str(revenue, "currency")
    revenue_id = record_str(revenue, "id")

    for payment in payments:
        if record_str(payment, "revenue_id") != revenue_id:
            continue
        return PaymentInfo(
            method=record_str(payment, "payment_method"),
            amount_paid=f"{currency} {record_str(payment, 'amount_paid')}".strip(),
            currency=currency,
            card_last4=record_str(payment, "card_last4"),
            payment_date=record_str(payment, "payment_date"),
            received_by=record_str(payment, "received_by"),
            received_role=record_str(payment, "received_role"),
        )

    return PaymentInfo(
        method="—",
        amount_paid=f"{currency} {record_str(revenue, 'total_amount')}".strip(),
        currency=currency,
    )
