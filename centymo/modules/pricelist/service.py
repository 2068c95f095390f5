# centymo/modules/pricelist/service.py
import logging
from typing import List

from centymo.core.exceptions import ActionError, DataSourceError, PageError, RecordNotFoundError
from centymo.shared import routes
from centymo.shared.datasource import DataSource
from centymo.shared.labels import (
    LabelCatalog, map_bulk_config, map_table_labels, status_empty_state, status_page_text
)
from centymo.shared.records import record_bool, record_str
from centymo.shared.schemas import (
    ActionResult, BulkAction, EmptyState, FormOption, PageData, PrimaryAction,
    RowAction, TableCell, TableColumn, TableConfig, TableRow,
    apply_column_styles, apply_table_settings
)
from .repository import PriceListRepository
from .schemas import (
    PriceList, PriceListDetailPage, PriceListFormData, PriceListFormRequest,
    PriceListListPage, PriceListTab, PriceProduct, PriceProductFormData, PriceProductFormRequest
)

logger = logging.getLogger(__name__)

PRICE_LISTS_TABLE = "price-lists-table"
PRICE_PRODUCTS_TABLE = "price-products-table"

DETAIL_TABS = ("basic", "prices")


def price_list_status(price_list: PriceList) -> str:
    return "active" if price_list.active else "inactive"


def status_variant(status: str) -> str:
    return {"active": "success", "inactive": "warning"}.get(status, "default")


class PriceListService:
    """
    Servicio de listas de precios: listado por estado, detalle con los
    precios de cada producto y acciones de drawer
    """

    def __init__(self, db: DataSource, labels: LabelCatalog, default_currency: str = "PHP"):
        self.repository = PriceListRepository(db)
        self.labels = labels
        self.l = labels.price_list
        self.default_currency = default_currency

    # ==================== LISTADO ====================

    def get_list_page(self, status: str, current_path: str = "") -> PriceListListPage:
        status = status or "active"

        try:
            price_lists = self.repository.list_price_lists()
        except DataSourceError as e:
            logger.error(f"Failed to list price lists: {e}")
            raise PageError(f"failed to load price lists: {e.message}") from e

        columns = [
            TableColumn(key="name", label=self.l.columns.name, sortable=True),
            TableColumn(key="date_start", label=self.l.columns.date_start, sortable=True, width="150px"),
            TableColumn(key="date_end", label=self.l.columns.date_end, sortable=True, width="150px"),
            TableColumn(key="status", label=self.l.columns.status, sortable=True, width="120px"),
        ]
        rows = self.build_list_rows(price_lists, status)
        apply_column_styles(columns, rows)

        common = self.labels.common
        bulk = map_bulk_config(common)
        bulk.actions = [
            BulkAction(
                key="delete",
                label=common.bulk.delete,
                icon="icon-trash-2",
                variant="danger",
                endpoint=routes.PRICE_LIST_BULK_DELETE_URL,
                confirm_title=common.bulk.delete,
                confirm_message="Are you sure you want to delete {{count}} price list(s)? This action cannot be undone.",
            ),
        ]

        table = TableConfig(
            id=PRICE_LISTS_TABLE,
            refresh_url=routes.route_url(routes.PRICE_LIST_LIST_URL, status=status),
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
            empty_state=status_empty_state(self.l.empty, status),
            primary_action=PrimaryAction(label=self.l.buttons.add_price_list, action_url=routes.PRICE_LIST_ADD_URL),
            bulk_actions=bulk,
        )
        apply_table_settings(table)

        title = status_page_text(self.l.page, status, "heading")
        return PriceListListPage(
            page=PageData(
                title=title,
                current_path=current_path,
                active_nav="price-lists",
                active_sub_nav=status,
                header_title=title,
                header_subtitle=status_page_text(self.l.page, status, "caption"),
                header_icon="icon-tag",
                content_template="pricelist/list.html",
            ),
            table=table,
        )

    def build_list_rows(self, price_lists: List[PriceList], status: str) -> List[TableRow]:
        rows = []
        for price_list in price_lists:
            record_status = price_list_status(price_list)
            if record_status != status:
                continue

            date_end = price_list.date_end_string or "—"
            detail_url = routes.route_url(routes.PRICE_LIST_DETAIL_URL, id=price_list.id)
            rows.append(TableRow(
                id=price_list.id,
                href=detail_url,
                cells=[
                    TableCell(value=price_list.name),
                    TableCell(value=price_list.date_start_string),
                    TableCell(value=date_end),
                    TableCell(type="badge", value=record_status, variant=status_variant(record_status)),
                ],
                data_attrs={"name": price_list.name, "status": record_status},
                actions=[
                    RowAction(type="view", label=self.l.actions.view, action="view", href=detail_url),
                    RowAction(
                        type="edit", label=self.l.actions.edit, action="edit",
                        url=routes.route_url(routes.PRICE_LIST_EDIT_URL, id=price_list.id),
                        drawer_title=self.l.actions.edit,
                    ),
                    RowAction(
                        type="delete", label=self.l.actions.delete, action="delete",
                        url=routes.PRICE_LIST_DELETE_URL, item_name=price_list.name,
                    ),
                ],
            ))
        return rows

    # ==================== DETALLE ====================

    def get_detail_page(self, price_list_id: str, tab: str = "basic", current_path: str = "") -> PriceListDetailPage:
        try:
            price_list = self.repository.get_price_list(price_list_id)
        except RecordNotFoundError as e:
            raise PageError("price list not found", status_code=404) from e
        except DataSourceError as e:
            logger.error(f"Failed to read price list {price_list_id}: {e}")
            raise PageError(f"failed to load price list: {e.message}") from e

        active_tab = tab if tab in DETAIL_TABS else "basic"
        base = routes.route_url(routes.PRICE_LIST_DETAIL_URL, id=price_list_id)
        tabs = [
            PriceListTab(key=key, label=label, active=key == active_tab, url=f"{base}?tab={key}")
            for key, label in (("basic", self.l.detail.basic_info), ("prices", self.l.detail.prices))
        ]

        page = PriceListDetailPage(
            page=PageData(
                title=price_list.name,
                current_path=current_path,
                active_nav="price-lists",
                header_title=price_list.name,
                header_subtitle=price_list.description or "",
                header_icon="icon-tag",
                content_template="pricelist/detail.html",
            ),
            price_list=price_list,
            active_tab=active_tab,
            tabs=tabs,
        )
        if active_tab == "prices":
            page.prices_table = self.build_prices_table(price_list_id)
        return page

    def build_prices_table(self, price_list_id: str) -> TableConfig:
        detail = self.l.detail
        columns = [
            TableColumn(key="product_name", label=detail.product_name, sortable=True),
            TableColumn(key="amount", label=detail.amount, sortable=True, width="150px"),
            TableColumn(key="currency", label=detail.currency, sortable=True, width="120px"),
        ]

        price_products: List[PriceProduct] = [
            pp for pp in self.repository.list_price_products() if pp.price_list_id == price_list_id
        ]
        rows = []
        for pp in price_products:
            rows.append(TableRow(
                id=pp.id,
                cells=[
                    TableCell(value=pp.name),
                    TableCell(value=str(pp.amount)),
                    TableCell(value=pp.currency),
                ],
                actions=[
                    RowAction(
                        type="delete", label=self.l.actions.delete, action="delete",
                        url=routes.route_url(routes.PRICE_PRODUCT_DELETE_URL, id=price_list_id),
                        item_name=pp.name,
                    ),
                ],
            ))

        apply_column_styles(columns, rows)
        table = TableConfig(
            id=PRICE_PRODUCTS_TABLE,
            columns=columns,
            rows=rows,
            show_search=True,
            show_actions=True,
            default_sort_column="product_name",
            default_sort_direction="asc",
            labels=map_table_labels(self.labels.common),
            empty_state=EmptyState(
                title="No prices configured",
                message="Add products to this price list to configure pricing.",
            ),
            primary_action=PrimaryAction(
                label=detail.add_price,
                action_url=routes.route_url(routes.PRICE_PRODUCT_ADD_URL, id=price_list_id),
            ),
        )
        return apply_table_settings(table)

    # ==================== CRUD DE LISTA ====================

    def get_add_form(self) -> PriceListFormData:
        return PriceListFormData(form_action=routes.PRICE_LIST_ADD_URL, active=True, labels=self.l.form)

    def get_edit_form(self, price_list_id: str) -> PriceListFormData:
        try:
            price_list = self.repository.get_price_list(price_list_id)
        except DataSourceError as e:
            logger.error(f"Failed to read price list {price_list_id}: {e}")
            raise ActionError("Price list not found") from e

        return PriceListFormData(
            form_action=routes.route_url(routes.PRICE_LIST_EDIT_URL, id=price_list_id),
            is_edit=True,
            id=price_list_id,
            name=price_list.name,
            description=price_list.description or "",
            date_start=price_list.date_start_string,
            date_end=price_list.date_end_string or "",
            active=price_list.active,
            labels=self.l.form,
        )

    @staticmethod
    def _price_list_from_form(form: PriceListFormRequest, price_list_id: str = "") -> PriceList:
        price_list = PriceList(
            id=price_list_id,
            name=form.name,
            description=form.description,
            date_start_string=form.date_start,
            active=form.active == "true",
        )
        # Sin fecha de fin la lista queda abierta
        if form.date_end:
            price_list.date_end_string = form.date_end
        return price_list

    def create_price_list(self, form: PriceListFormRequest) -> ActionResult:
        try:
            self.repository.create_price_list(self._price_list_from_form(form))
        except DataSourceError as e:
            logger.error(f"Failed to create price list: {e}")
            raise ActionError("Failed to create price list") from e

        return ActionResult.refresh(PRICE_LISTS_TABLE)

    def update_price_list(self, price_list_id: str, form: PriceListFormRequest) -> ActionResult:
        try:
            self.repository.update_price_list(self._price_list_from_form(form, price_list_id))
        except DataSourceError as e:
            logger.error(f"Failed to update price list {price_list_id}: {e}")
            raise ActionError("Failed to update price list") from e

        return ActionResult.refresh(PRICE_LISTS_TABLE)

    def delete_price_list(self, price_list_id: str) -> ActionResult:
        if not price_list_id:
            raise ActionError("Price list ID is required")

        try:
            self.repository.delete_price_list(price_list_id)
        except DataSourceError as e:
            logger.error(f"Failed to delete price list {price_list_id}: {e}")
            raise ActionError("Failed to delete price list") from e

        return ActionResult.refresh(PRICE_LISTS_TABLE)

    def bulk_delete(self, price_list_ids: List[str]) -> ActionResult:
        if not price_list_ids:
            raise ActionError("No price list IDs provided")

        for price_list_id in price_list_ids:
            try:
                self.repository.delete_price_list(price_list_id)
            except DataSourceError as e:
                logger.error(f"Failed to delete price list {price_list_id}: {e}")

        return ActionResult.refresh(PRICE_LISTS_TABLE)

    # ==================== PRECIOS POR PRODUCTO ====================

    def get_price_product_form(self, price_list_id: str) -> PriceProductFormData:
        """Drawer de precio con los productos activos como opciones"""
        products: List[FormOption] = []
        try:
            for product in self.repository.list_products():
                if record_bool(product, "active"):
                    products.append(FormOption(value=record_str(product, "id"), label=record_str(product, "name")))
        except DataSourceError as e:
            logger.error(f"Failed to list products for price product form: {e}")

        return PriceProductFormData(
            form_action=routes.route_url(routes.PRICE_PRODUCT_ADD_URL, id=price_list_id),
            price_list_id=price_list_id,
            currency=self.default_currency,
            products=products,
            labels=self.l.detail,
        )

    def add_price_product(self, price_list_id: str, form: PriceProductFormRequest) -> ActionResult:
        if not form.product_id:
            raise ActionError("Product is required")

        amount = 0
        if form.amount:
            try:
                amount = int(form.amount)
            except ValueError as e:
                raise ActionError("Amount must be a valid number") from e

        try:
            self.repository.create_price_product({
                "product_id": form.product_id,
                "name": form.name,
                "amount": amount,
                "currency": form.currency,
                "price_list_id": price_list_id,
                "active": True,
            })
        except DataSourceError as e:
            logger.error(f"Failed to create price product: {e}")
            raise ActionError("Failed to add product price") from e

        return ActionResult.refresh(PRICE_PRODUCTS_TABLE)

    def delete_price_product(self, price_product_id: str) -> ActionResult:
        if not price_product_id:
            raise ActionError("Price product ID is required")

        try:
            self.repository.delete_price_product(price_product_id)
        except DataSourceError as e:
            logger.error(f"Failed to delete price product {price_product_id}: {e}")
            raise ActionError("Failed to remove product price") from e

        return ActionResult.refresh(PRICE_PRODUCTS_TABLE)
