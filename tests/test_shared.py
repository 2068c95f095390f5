"""
Tests de rutas, labels y helpers de tablas compartidos
"""

import json

from centymo.shared import routes
from centymo.shared.labels import (
    LabelCatalog, load_labels, location_display_name, map_bulk_config,
    map_table_labels, status_empty_state, status_page_text
)
from centymo.shared.schemas import (
    TableCell, TableColumn, TableConfig, TableRow, apply_column_styles,
    apply_table_settings, build_options
)


class TestRoutes:
    """Construcción de URLs desde las plantillas de ruta"""

    def test_route_url_fills_placeholders(self):
        assert routes.route_url(routes.SALES_LIST_URL, status="active") == "/app/sales/list/active"
        assert routes.route_url(routes.INVENTORY_SERIAL_EDIT_URL, id="i1", sid="s1") == \
            "/action/inventory/detail/i1/serials/edit/s1"

    def test_pages_and_actions_prefixes(self):
        assert routes.PRODUCT_DETAIL_URL.startswith("/app/")
        assert routes.PRODUCT_ADD_URL.startswith("/action/")


class TestLabels:
    """Catálogo de labels y overrides desde JSON"""

    def test_defaults_are_english(self):
        labels = LabelCatalog()
        assert labels.sales.page.heading_active == "Active Sales"
        assert labels.inventory.buttons.add_item == "Add Item"

    def test_load_labels_without_file_returns_defaults(self):
        assert load_labels(None).product.buttons.add_product == "Add Product"

    def test_load_labels_missing_file(self, tmp_path):
        labels = load_labels(tmp_path / "missing.json")
        assert labels.price_list.buttons.add_price_list == "Add Price List"

    def test_load_labels_overrides_only_given_keys(self, tmp_path):
        path = tmp_path / "labels.json"
        path.write_text(json.dumps({"sales": {"page": {"headingActive": "Ventas activas"}}}), encoding="utf-8")

        labels = load_labels(path)

        assert labels.sales.page.heading_active == "Ventas activas"
        assert labels.sales.page.heading_completed == "Completed Sales"

    def test_map_table_labels_flattens_common(self):
        table_labels = map_table_labels(LabelCatalog().common)
        assert table_labels.density_compact == "Compact"
        assert table_labels.next == "Next"

    def test_map_bulk_config_enabled(self):
        bulk = map_bulk_config(LabelCatalog().common)
        assert bulk.enabled is True
        assert bulk.actions == []

    def test_status_page_text(self):
        page = LabelCatalog().product.page
        assert status_page_text(page, "active") == "Active Products"
        assert status_page_text(page, "inactive", kind="caption") == "Products hidden from sale"
        assert status_page_text(page, "other") == "Products"

    def test_status_empty_state(self):
        empty = LabelCatalog().price_list.empty
        assert status_empty_state(empty, "inactive").title == "No inactive price lists"
        assert status_empty_state(empty, "active").title == "No active price lists"

    def test_location_display_name(self):
        assert location_display_name("sm-city-cebu") == "SM City Cebu"
        assert location_display_name("unknown") == "unknown"


class TestTableHelpers:
    """Estilos de columna y defaults de tabla"""

    def test_apply_column_styles_copies_width_and_align(self):
        columns = [TableColumn(key="a", label="A", width="100px", align="right")]
        rows = [TableRow(id="1", cells=[TableCell(value="x")])]

        apply_column_styles(columns, rows)

        assert rows[0].cells[0].width == "100px"
        assert rows[0].cells[0].align == "right"

    def test_apply_table_settings_defaults(self):
        table = TableConfig(id="t", columns=[TableColumn(key="name", label="Name")])
        apply_table_settings(table)
        assert table.page_size == 25
        assert table.default_sort_column == "name"

    def test_build_options_marks_selected(self):
        options = build_options(["a", "b"], {"a": "Alpha"}, "b")
        assert [o.label for o in options] == ["Alpha", "b"]
        assert [o.selected for o in options] == [False, True]
