# centymo/modules/product/service.py
import logging
from typing import List, Dict, Any

from centymo.core.exceptions import ActionError, DataSourceError, PageError, RecordNotFoundError
from centymo.shared import routes
from centymo.shared.datasource import DataSource
from centymo.shared.labels import (
    LabelCatalog, map_bulk_config, map_table_labels, status_empty_state, status_page_text
)
from centymo.shared.records import format_price, parse_float, record_bool, record_float, record_str
from centymo.shared.schemas import (
    ActionResult, BulkAction, EmptyState, FormOption, InfoField, PageData,
    PrimaryAction, RowAction, TabItem, TableCell, TableColumn, TableConfig,
    TableRow, apply_column_styles, apply_table_settings
)
from .repository import ProductRepository
from .schemas import (
    AttributeAssignRequest, AttributeFormData, ProductDetailPage, ProductFormData,
    ProductFormRequest, ProductListPage, VariantFormData, VariantFormRequest
)

logger = logging.getLogger(__name__)

PRODUCTS_TABLE = "products-table"
VARIANTS_TABLE = "product-variants-table"
ATTRIBUTES_TABLE = "product-attributes-table"
PRICING_TABLE = "product-pricing-table"

DETAIL_TABS = ("info", "variants", "attributes", "pricing")
PRODUCT_STATUSES = ("active", "inactive")


def product_status(record: Dict[str, Any], fallback: str) -> str:
    """
    Estado del producto: el campo status si existe, si no el flag active;
    sin ninguno de los dos el registro toma el estado del listado
    """
    status = record_str(record, "status")
    if status:
        return status
    if "active" in record and record.get("active") is not None:
        return "active" if record_bool(record, "active") else "inactive"
    return fallback


def status_variant(status: str) -> str:
    return {"active": "success", "inactive": "warning"}.get(status, "default")


class ProductService:
    """
    Servicio del catálogo de productos: listado, detalle con pestañas y
    acciones sobre productos, variantes y atributos
    """

    def __init__(self, db: DataSource, labels: LabelCatalog, default_currency: str = "PHP"):
        self.repository = ProductRepository(db)
        self.labels = labels
        self.l = labels.product
        self.default_currency = default_currency

    def _price_display(self, record: Dict[str, Any]) -> str:
        if record.get("price") in (None, ""):
            return ""
        currency = record_str(record, "currency") or self.default_currency
        return format_price(currency, record_float(record, "price"))

    # ==================== LISTADO ====================

    def get_list_page(self, status: str, current_path: str = "") -> ProductListPage:
        status = status or "active"

        try:
            records = self.repository.list_products()
        except DataSourceError as e:
            logger.error(f"Failed to list products: {e}")
            raise PageError(f"failed to load products: {e.message}") from e

        columns = [
            TableColumn(key="name", label=self.l.columns.name, sortable=True),
            TableColumn(key="sku", label=self.l.columns.sku, sortable=True, width="150px"),
            TableColumn(key="price", label=self.l.columns.price, sortable=True, width="150px"),
            TableColumn(key="status", label=self.l.columns.status, sortable=True, width="120px"),
        ]
        rows = self.build_list_rows(records, status)
        apply_column_styles(columns, rows)

        common = self.labels.common
        bulk = map_bulk_config(common)
        # Sólo se ofrece el cambio hacia el estado contrario al listado
        target = "inactive" if status == "active" else "active"
        bulk.actions = [
            BulkAction(
                key=target,
                label=self.l.status.deactivate if target == "inactive" else self.l.status.activate,
                icon="icon-x-circle" if target == "inactive" else "icon-check-circle",
                variant="warning" if target == "inactive" else "success",
                endpoint=routes.PRODUCT_BULK_SET_STATUS_URL,
                confirm_title=self.l.status.deactivate if target == "inactive" else self.l.status.activate,
                confirm_message=f"Are you sure you want to set {{{{count}}}} product(s) to {target}?",
                extra_params={"target_status": target},
            ),
            BulkAction(
                key="delete",
                label=common.bulk.delete,
                icon="icon-trash-2",
                variant="danger",
                endpoint=routes.PRODUCT_BULK_DELETE_URL,
                confirm_title=common.bulk.delete,
                confirm_message="Are you sure you want to delete {{count}} product(s)? This action cannot be undone.",
            ),
        ]

        table = TableConfig(
            id=PRODUCTS_TABLE,
            refresh_url=routes.route_url(routes.PRODUCT_LIST_URL, status=status),
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
            primary_action=PrimaryAction(label=self.l.buttons.add_product, action_url=routes.PRODUCT_ADD_URL),
            bulk_actions=bulk,
        )
        apply_table_settings(table)

        title = status_page_text(self.l.page, status, "heading")
        return ProductListPage(
            page=PageData(
                title=title,
                current_path=current_path,
                active_nav="products",
                active_sub_nav=status,
                header_title=title,
                header_subtitle=status_page_text(self.l.page, status, "caption"),
                header_icon="icon-box",
                content_template="product/list.html",
            ),
            table=table,
        )

    def build_list_rows(self, records: List[Dict[str, Any]], status: str) -> List[TableRow]:
        rows = []
        for record in records:
            record_status = product_status(record, status)
            if record_status != status:
                continue

            product_id = record_str(record, "id")
            name = record_str(record, "name")
            sku = record_str(record, "sku")
            price = self._price_display(record)
            detail_url = routes.route_url(routes.PRODUCT_DETAIL_URL, id=product_id)

            toggle_status = "inactive" if record_status == "active" else "active"
            rows.append(TableRow(
                id=product_id,
                href=detail_url,
                cells=[
                    TableCell(value=name),
                    TableCell(value=sku),
                    TableCell(value=price),
                    TableCell(type="badge", value=record_status, variant=status_variant(record_status)),
                ],
                data_attrs={
                    "name": name,
                    "sku": sku,
                    "price": price,
                    "status": record_status,
                },
                actions=[
                    RowAction(type="view", label=self.l.actions.view, action="view", href=detail_url),
                    RowAction(
                        type="edit", label=self.l.actions.edit, action="edit",
                        url=routes.route_url(routes.PRODUCT_EDIT_URL, id=product_id),
                        drawer_title=self.l.actions.edit,
                    ),
                    RowAction(
                        type="deactivate" if toggle_status == "inactive" else "activate",
                        label=self.l.status.deactivate if toggle_status == "inactive" else self.l.status.activate,
                        action=toggle_status,
                        url=f"{routes.PRODUCT_SET_STATUS_URL}?id={product_id}&status={toggle_status}",
                        item_name=name,
                    ),
                    RowAction(
                        type="delete", label=self.l.actions.delete, action="delete",
                        url=routes.PRODUCT_DELETE_URL, item_name=name,
                    ),
                ],
            ))
        return rows

    # ==================== DETALLE ====================

    def get_detail_page(self, product_id: str, tab: str = "info", current_path: str = "") -> ProductDetailPage:
        try:
            product = self.repository.get_product(product_id)
        except RecordNotFoundError as e:
            raise PageError(f"failed to load product: {e.message}", status_code=404) from e
        except DataSourceError as e:
            logger.error(f"Failed to read product {product_id}: {e}")
            raise PageError(f"failed to load product: {e.message}") from e

        active_tab = tab if tab in DETAIL_TABS else "info"
        name = record_str(product, "name")
        currency = record_str(product, "currency") or self.default_currency
        price = format_price(currency, record_float(product, "price"))
        status = "active" if product_status(product, "active") == "active" else "inactive"
        collections = self._collection_ids(product_id)

        page = ProductDetailPage(
            page=PageData(
                title=name,
                current_path=current_path,
                active_nav="products",
                header_title=name,
                header_subtitle=record_str(product, "description"),
                header_icon="icon-box",
                content_template="product/detail.html",
            ),
            product_id=product_id,
            active_tab=active_tab,
            tab_items=self._build_tab_items(product_id),
            status=status,
            status_variant=status_variant(status),
            price=price,
            currency=currency,
            collections=collections,
        )

        if active_tab == "info":
            detail = self.l.detail
            page.info_fields = [
                InfoField(label=self.l.form.name, value=name),
                InfoField(label=detail.description, value=record_str(product, "description")),
                InfoField(label=detail.price, value=price),
                InfoField(label=detail.currency, value=currency),
                InfoField(label=detail.collections, value=", ".join(collections)),
                InfoField(label=detail.status, value=status, variant=status_variant(status)),
            ]
        elif active_tab == "variants":
            page.variants_table = self.get_variant_table(product_id)
        elif active_tab == "attributes":
            page.attributes_table = self.get_attribute_table(product_id)
        elif active_tab == "pricing":
            page.pricing_table = self.build_pricing_table(product_id)

        return page

    def _collection_ids(self, product_id: str) -> List[str]:
        try:
            return [record_str(pc, "collection_id") for pc in self.repository.get_collections(product_id)]
        except DataSourceError as e:
            logger.error(f"Failed to list collections for product {product_id}: {e}")
            return []

    def _safe_count(self, loader, product_id: str, what: str) -> int:
        try:
            return len(loader(product_id))
        except DataSourceError as e:
            logger.error(f"Failed to count {what} for product {product_id}: {e}")
            return 0

    def _build_tab_items(self, product_id: str) -> List[TabItem]:
        tabs = self.l.tabs
        variant_count = self._safe_count(self.repository.get_variants, product_id, "variants")
        attribute_count = self._safe_count(self.repository.get_product_attributes, product_id, "attributes")
        tab_defs = [
            ("info", tabs.info, "icon-info", None),
            ("variants", tabs.variants, "icon-layers", variant_count),
            ("attributes", tabs.attributes, "icon-sliders", attribute_count),
            ("pricing", tabs.pricing, "icon-tag", None),
        ]

        base = routes.route_url(routes.PRODUCT_DETAIL_URL, id=product_id)
        return [
            TabItem(
                key=key,
                label=label,
                href=f"{base}?tab={key}",
                hx_get=routes.route_url(routes.PRODUCT_TAB_ACTION_URL, id=product_id, tab=key),
                icon=icon,
                count=count,
            )
            for key, label, icon, count in tab_defs
        ]

    # ==================== TABLAS DEL DETALLE ====================

    def get_variant_table(self, product_id: str) -> TableConfig:
        v = self.l.variant
        columns = [
            TableColumn(key="sku", label=v.sku, sortable=True),
            TableColumn(key="priceOverride", label=v.price_override, sortable=True, width="150px"),
            TableColumn(key="attributes", label=v.attributes),
            TableColumn(key="status", label=self.l.columns.status, sortable=True, width="120px"),
        ]

        try:
            variants = self.repository.get_variants(product_id)
        except DataSourceError as e:
            logger.error(f"Failed to list variants for product {product_id}: {e}")
            variants = []

        rows = []
        for variant in variants:
            variant_id = record_str(variant, "id")
            sku = record_str(variant, "sku")
            status = "active" if record_bool(variant, "active") else "inactive"
            rows.append(TableRow(
                id=variant_id,
                cells=[
                    TableCell(value=sku),
                    TableCell(value=record_str(variant, "price_override")),
                    TableCell(value=record_str(variant, "attribute_values")),
                    TableCell(type="badge", value=status, variant=status_variant(status)),
                ],
                actions=[
                    RowAction(
                        type="edit", label=v.edit, action="edit",
                        url=routes.route_url(routes.PRODUCT_VARIANT_EDIT_URL, id=product_id, vid=variant_id),
                        drawer_title=v.edit,
                    ),
                    RowAction(
                        type="delete", label=v.remove, action="delete",
                        url=routes.route_url(routes.PRODUCT_VARIANT_REMOVE_URL, id=product_id),
                        item_name=sku,
                        confirm_title=v.remove,
                        confirm_message=f"Are you sure you want to remove variant {sku}?",
                    ),
                ],
            ))

        apply_column_styles(columns, rows)
        table = TableConfig(
            id=VARIANTS_TABLE,
            refresh_url=routes.route_url(routes.PRODUCT_VARIANT_TABLE_URL, id=product_id),
            columns=columns,
            rows=rows,
            show_search=True,
            show_actions=True,
            show_entries=True,
            default_sort_column="sku",
            labels=map_table_labels(self.labels.common),
            empty_state=EmptyState(title=v.empty, message="No variants have been added to this product yet."),
            primary_action=PrimaryAction(
                label=v.assign,
                action_url=routes.route_url(routes.PRODUCT_VARIANT_ASSIGN_URL, id=product_id),
            ),
        )
        return apply_table_settings(table)

    def get_attribute_table(self, product_id: str) -> TableConfig:
        a = self.l.attribute
        columns = [
            TableColumn(key="name", label=a.name, sortable=True),
            TableColumn(key="code", label=a.code, sortable=True, width="150px"),
            TableColumn(key="data_type", label=a.data_type, sortable=True, width="130px"),
            TableColumn(key="default_value", label=a.default_value),
        ]

        try:
            product_attributes = self.repository.get_product_attributes(product_id)
        except DataSourceError as e:
            logger.error(f"Failed to list attributes for product {product_id}: {e}")
            product_attributes = []

        # data_type vive en el atributo, no en la asignación
        data_types = {}
        if product_attributes:
            try:
                data_types = {
                    record_str(attr, "id"): record_str(attr, "data_type")
                    for attr in self.repository.list_attributes()
                }
            except DataSourceError as e:
                logger.warning(f"Failed to list attributes: {e}")

        rows = []
        for pa in product_attributes:
            pa_id = record_str(pa, "id")
            name = record_str(pa, "attribute_name")
            data_type = record_str(pa, "data_type") or data_types.get(record_str(pa, "attribute_id"), "")
            rows.append(TableRow(
                id=pa_id,
                cells=[
                    TableCell(value=name),
                    TableCell(value=record_str(pa, "attribute_code")),
                    TableCell(type="badge", value=data_type, variant="info"),
                    TableCell(value=record_str(pa, "default_value")),
                ],
                actions=[
                    RowAction(
                        type="delete", label=a.remove, action="delete",
                        url=routes.route_url(routes.PRODUCT_ATTRIBUTE_REMOVE_URL, id=product_id),
                        item_name=name,
                        confirm_title=a.remove,
                        confirm_message=f"Are you sure you want to remove attribute {name}?",
                    ),
                ],
            ))

        apply_column_styles(columns, rows)
        table = TableConfig(
            id=ATTRIBUTES_TABLE,
            refresh_url=routes.route_url(routes.PRODUCT_ATTRIBUTE_TABLE_URL, id=product_id),
            columns=columns,
            rows=rows,
            show_search=True,
            show_actions=True,
            show_entries=True,
            default_sort_column="name",
            labels=map_table_labels(self.labels.common),
            empty_state=EmptyState(title=a.empty, message="No attributes have been assigned to this product yet."),
            primary_action=PrimaryAction(
                label=a.assign,
                action_url=routes.route_url(routes.PRODUCT_ATTRIBUTE_ASSIGN_URL, id=product_id),
            ),
        )
        return apply_table_settings(table)

    def build_pricing_table(self, product_id: str) -> TableConfig:
        detail = self.l.detail
        columns = [
            TableColumn(key="price_list", label=detail.price_list, sortable=True),
            TableColumn(key="currency", label=detail.currency, sortable=True, width="120px"),
            TableColumn(key="amount", label=detail.custom_price, sortable=True, width="150px"),
            TableColumn(key="date_start", label=detail.valid_from, sortable=True, width="140px"),
            TableColumn(key="date_end", label=detail.valid_to, sortable=True, width="140px"),
        ]

        try:
            price_products = self.repository.get_price_products(product_id)
        except DataSourceError as e:
            logger.error(f"Failed to list price products for product {product_id}: {e}")
            price_products = []

        price_list_names = {}
        if price_products:
            try:
                price_list_names = {
                    record_str(pl, "id"): record_str(pl, "name")
                    for pl in self.repository.list_price_lists()
                }
            except DataSourceError as e:
                logger.warning(f"Failed to list price lists: {e}")

        rows = []
        for pp in price_products:
            price_list_id = record_str(pp, "price_list_id")
            rows.append(TableRow(
                id=record_str(pp, "id"),
                cells=[
                    TableCell(value=price_list_names.get(price_list_id) or price_list_id),
                    TableCell(value=record_str(pp, "currency")),
                    TableCell(value=record_str(pp, "amount")),
                    TableCell(value=record_str(pp, "date_start_string")),
                    TableCell(value=record_str(pp, "date_end_string")),
                ],
            ))

        apply_column_styles(columns, rows)
        table = TableConfig(
            id=PRICING_TABLE,
            columns=columns,
            rows=rows,
            show_search=True,
            default_sort_column="price_list",
            labels=map_table_labels(self.labels.common),
            empty_state=EmptyState(
                title="No Price Lists",
                message="This product has not been added to any price lists yet.",
            ),
        )
        return apply_table_settings(table)

    # ==================== CRUD DE PRODUCTO ====================

    def get_add_form(self) -> ProductFormData:
        return ProductFormData(
            form_action=routes.PRODUCT_ADD_URL,
            active=True,
            currency=self.default_currency,
            labels=self.l.form,
        )

    def get_edit_form(self, product_id: str) -> ProductFormData:
        try:
            record = self.repository.get_product(product_id)
        except DataSourceError as e:
            logger.error(f"Failed to read product {product_id}: {e}")
            raise ActionError("Product not found") from e

        return ProductFormData(
            form_action=routes.route_url(routes.PRODUCT_EDIT_URL, id=product_id),
            is_edit=True,
            id=product_id,
            name=record_str(record, "name"),
            description=record_str(record, "description"),
            price=f"{record_float(record, 'price'):.2f}",
            currency=record_str(record, "currency") or self.default_currency,
            active=product_status(record, "active") == "active",
            labels=self.l.form,
        )

    def _product_data(self, form: ProductFormRequest) -> Dict[str, Any]:
        active = form.active == "true"
        return {
            "name": form.name,
            "description": form.description,
            "price": parse_float(form.price),
            "currency": form.currency or self.default_currency,
            "active": active,
            "status": "active" if active else "inactive",
        }

    def create_product(self, form: ProductFormRequest) -> ActionResult:
        try:
            self.repository.create_product(self._product_data(form))
        except DataSourceError as e:
            logger.error(f"Failed to create product: {e}")
            raise ActionError("Failed to create product") from e

        return ActionResult.refresh(PRODUCTS_TABLE)

    def update_product(self, product_id: str, form: ProductFormRequest) -> ActionResult:
        try:
            self.repository.update_product(product_id, self._product_data(form))
        except DataSourceError as e:
            logger.error(f"Failed to update product {product_id}: {e}")
            raise ActionError("Failed to update product") from e

        return ActionResult.refresh(PRODUCTS_TABLE)

    def delete_product(self, product_id: str) -> ActionResult:
        if not product_id:
            raise ActionError("Product ID is required")

        try:
            self.repository.delete_product(product_id)
        except DataSourceError as e:
            logger.error(f"Failed to delete product {product_id}: {e}")
            raise ActionError("Failed to delete product") from e

        return ActionResult.refresh(PRODUCTS_TABLE)

    def bulk_delete(self, product_ids: List[str]) -> ActionResult:
        if not product_ids:
            raise ActionError("No product IDs provided")

        for product_id in product_ids:
            try:
                self.repository.delete_product(product_id)
            except DataSourceError as e:
                logger.error(f"Failed to delete product {product_id}: {e}")

        return ActionResult.refresh(PRODUCTS_TABLE)

    def set_status(self, product_id: str, target_status: str) -> ActionResult:
        if not product_id:
            raise ActionError("Product ID is required")
        if target_status not in PRODUCT_STATUSES:
            raise ActionError("Invalid status")

        try:
            self.repository.set_active(product_id, target_status == "active")
        except DataSourceError as e:
            logger.error(f"Failed to update product status {product_id}: {e}")
            raise ActionError("Failed to update product status") from e

        return ActionResult.refresh(PRODUCTS_TABLE)

    def bulk_set_status(self, product_ids: List[str], target_status: str) -> ActionResult:
        if not product_ids:
            raise ActionError("No product IDs provided")
        if target_status not in PRODUCT_STATUSES:
            raise ActionError("Invalid target status")

        active = target_status == "active"
        for product_id in product_ids:
            try:
                self.repository.set_active(product_id, active)
            except DataSourceError as e:
                logger.error(f"Failed to update product status {product_id}: {e}")

        return ActionResult.refresh(PRODUCTS_TABLE)

    # ==================== VARIANTES ====================

    def get_variant_assign_form(self, product_id: str) -> VariantFormData:
        return VariantFormData(
            form_action=routes.route_url(routes.PRODUCT_VARIANT_ASSIGN_URL, id=product_id),
            product_id=product_id,
            labels=self.l.variant,
        )

    def get_variant_edit_form(self, product_id: str, variant_id: str) -> VariantFormData:
        try:
            record = self.repository.get_variant(variant_id)
        except DataSourceError as e:
            logger.error(f"Failed to read variant {variant_id}: {e}")
            raise ActionError("Variant not found") from e

        return VariantFormData(
            form_action=routes.route_url(routes.PRODUCT_VARIANT_EDIT_URL, id=product_id, vid=variant_id),
            is_edit=True,
            id=variant_id,
            product_id=product_id,
            sku=record_str(record, "sku"),
            price_override=record_str(record, "price_override"),
            attribute_values=record_str(record, "attribute_values"),
            active=record_bool(record, "active"),
            labels=self.l.variant,
        )

    @staticmethod
    def _variant_data(product_id: str, form: VariantFormRequest) -> Dict[str, Any]:
        return {
            "product_id": product_id,
            "sku": form.sku,
            "price_override": form.price_override,
            "attribute_values": form.attribute_values,
            "active": form.active == "true",
        }

    def assign_variant(self, product_id: str, form: VariantFormRequest) -> ActionResult:
        try:
            self.repository.create_variant(self._variant_data(product_id, form))
        except DataSourceError as e:
            logger.error(f"Failed to create variant for product {product_id}: {e}")
            raise ActionError("Failed to create variant") from e

        return ActionResult.refresh(VARIANTS_TABLE)

    def update_variant(self, product_id: str, variant_id: str, form: VariantFormRequest) -> ActionResult:
        try:
            self.repository.update_variant(variant_id, self._variant_data(product_id, form))
        except DataSourceError as e:
            logger.error(f"Failed to update variant {variant_id}: {e}")
            raise ActionError("Failed to update variant") from e

        return ActionResult.refresh(VARIANTS_TABLE)

    def remove_variant(self, variant_id: str) -> ActionResult:
        if not variant_id:
            raise ActionError("Variant ID is required")

        try:
            self.repository.delete_variant(variant_id)
        except DataSourceError as e:
            logger.error(f"Failed to remove variant {variant_id}: {e}")
            raise ActionError("Failed to remove variant") from e

        return ActionResult.refresh(VARIANTS_TABLE)

    # ==================== ATRIBUTOS ====================

    def get_attribute_assign_form(self, product_id: str) -> AttributeFormData:
        """Drawer de asignación con los atributos que el producto aún no tiene"""
        options: List[FormOption] = []
        try:
            assigned = {record_str(pa, "attribute_id") for pa in self.repository.get_product_attributes(product_id)}
            for attr in self.repository.list_attributes():
                attribute_id = record_str(attr, "id")
                if attribute_id in assigned:
                    continue
                name = record_str(attr, "name")
                code = record_str(attr, "code")
                options.append(FormOption(value=attribute_id, label=f"{name} ({code})" if code else name))
        except DataSourceError as e:
            logger.error(f"Failed to list attributes for product {product_id}: {e}")

        return AttributeFormData(
            form_action=routes.route_url(routes.PRODUCT_ATTRIBUTE_ASSIGN_URL, id=product_id),
            product_id=product_id,
            attributes=options,
            labels=self.l.attribute,
        )

    def assign_attribute(self, product_id: str, form: AttributeAssignRequest) -> ActionResult:
        if not form.attribute_id:
            raise ActionError("Please select an attribute")

        # Nombre y código se copian a la asignación para la tabla
        attribute_name, attribute_code = "", ""
        try:
            attribute = self.repository.get_attribute(form.attribute_id)
            attribute_name = record_str(attribute, "name")
            attribute_code = record_str(attribute, "code")
        except DataSourceError as e:
            logger.warning(f"Failed to read attribute {form.attribute_id}: {e}")

        try:
            self.repository.create_product_attribute({
                "product_id": product_id,
                "attribute_id": form.attribute_id,
                "attribute_name": attribute_name,
                "attribute_code": attribute_code,
                "default_value": form.default_value,
                "active": True,
            })
        except DataSourceError as e:
            logger.error(f"Failed to assign attribute to product {product_id}: {e}")
            raise ActionError("Failed to assign attribute") from e

        return ActionResult.refresh(ATTRIBUTES_TABLE)

    def remove_attribute(self, product_attribute_id: str) -> ActionResult:
        if not product_attribute_id:
            raise ActionError("Product attribute ID is required")

        try:
            self.repository.delete_product_attribute(product_attribute_id)
        except DataSourceError as e:
            logger.error(f"Failed to remove product attribute {product_attribute_id}: {e}")
            raise ActionError("Failed to remove attribute") from e

        return ActionResult.refresh(ATTRIBUTES_TABLE)
