"""
Tests del catálogo de productos
"""

import json

import pytest

from centymo.core.exceptions import ActionError
from centymo.modules.product.schemas import AttributeAssignRequest, VariantFormRequest
from centymo.modules.product.service import ProductService, product_status


@pytest.fixture
def service(datasource, labels):
    return ProductService(datasource, labels)


class TestProductStatus:
    """Resolución del estado de un producto"""

    def test_status_field_wins(self):
        assert product_status({"status": "inactive", "active": True}, "active") == "inactive"

    def test_active_flag(self):
        assert product_status({"active": False}, "active") == "inactive"
        assert product_status({"active": "true"}, "inactive") == "active"

    def test_fallback(self):
        assert product_status({"name": "x"}, "inactive") == "inactive"


class TestProductList:
    """Listado por estado"""

    def test_active_list(self, service, datasource, seed_product):
        datasource.create("product", {"id": "prod-2", "name": "Old Phone", "active": False})

        page = service.get_list_page("active")

        assert [row.id for row in page.table.rows] == ["prod-1"]
        assert page.page.title == "Active Products"

    def test_inactive_list(self, service, datasource, seed_product):
        datasource.create("product", {"id": "prod-2", "name": "Old Phone", "active": False})
        assert [row.id for row in service.get_list_page("inactive").table.rows] == ["prod-2"]

    def test_price_display(self, service, seed_product):
        row = service.get_list_page("active").table.rows[0]
        assert row.data_attrs["price"] == "PHP 49,990.00"

    def test_row_toggle_action(self, service, seed_product):
        actions = service.get_list_page("active").table.rows[0].actions
        toggle = [a for a in actions if a.type == "deactivate"][0]
        assert toggle.url == "/action/products/set-status?id=prod-1&status=inactive"

    def test_list_page_renders(self, client, seed_product):
        response = client.get("/app/products/list/active")
        assert response.status_code == 200
        assert "iPhone 15" in response.text


class TestProductDetail:
    """Detalle y pestañas"""

    def test_info_tab(self, client, seed_product):
        response = client.get("/app/products/detail/prod-1")
        assert response.status_code == 200
        assert "PHP 49,990.00" in response.text

    def test_tab_counts(self, service, datasource, seed_product):
        datasource.create("product_variant", {"product_id": "prod-1", "sku": "IP15-BLK"})

        page = service.get_detail_page("prod-1")

        counts = {tab.key: tab.count for tab in page.tab_items}
        assert counts["variants"] == 1
        assert counts["attributes"] == 0

    def test_pricing_tab_resolves_price_list_names(self, service, datasource, seed_product, seed_price_list):
        datasource.create("price_product", {
            "product_id": "prod-1", "price_list_id": "pl-1", "currency": "PHP", "amount": 45000,
        })

        page = service.get_detail_page("prod-1", "pricing")

        assert page.pricing_table.rows[0].cells[0].value == "Holiday Promo"

    def test_missing_product(self, client):
        assert client.get("/app/products/detail/missing").status_code == 404


class TestProductActions:
    """Alta, edición, estado y borrado"""

    def test_create(self, client, datasource):
        response = client.post("/action/products/add", data={
            "name": "AirPods", "price": "12990", "currency": "PHP", "active": "true",
        })

        assert response.status_code == 200
        product = datasource.list_simple("product")[0]
        assert product["price"] == 12990.0
        assert product["active"] is True
        assert product["status"] == "active"

    def test_edit_form_renders(self, client, seed_product):
        response = client.get("/action/products/edit/prod-1")
        assert response.status_code == 200
        assert "49990.00" in response.text

    def test_set_status_writes_both_fields(self, client, datasource, seed_product):
        response = client.post("/action/products/set-status?id=prod-1&status=inactive")

        assert json.loads(response.headers["HX-Trigger"])["refreshTable"] == "products-table"
        product = datasource.read("product", "prod-1")
        assert product["active"] is False
        assert product["status"] == "inactive"

    def test_invalid_status(self, service, seed_product):
        with pytest.raises(ActionError, match="Invalid status"):
            service.set_status("prod-1", "deleted")

    def test_bulk_delete(self, client, datasource, seed_product):
        datasource.create("product", {"id": "prod-2", "name": "Case"})

        client.post("/action/products/bulk-delete", data={"id": ["prod-1", "prod-2"]})

        assert datasource.list_simple("product") == []


class TestVariantsAndAttributes:
    """Variantes y atributos del producto"""

    def test_assign_variant(self, service, datasource, seed_product):
        result = service.assign_variant("prod-1", VariantFormRequest(
            sku="IP15-BLK", price_override="48990", attribute_values="Color: Black", active="true",
        ))

        assert result.refresh_table == "product-variants-table"
        variant = datasource.list_simple("product_variant")[0]
        assert variant["product_id"] == "prod-1"
        assert variant["attribute_values"] == "Color: Black"
        assert variant["active"] is True

    def test_remove_variant(self, client, datasource, seed_product):
        variant = datasource.create("product_variant", {"product_id": "prod-1", "sku": "X"})

        client.post("/action/products/detail/prod-1/variants/remove", data={"id": variant["id"]})

        assert datasource.list_simple("product_variant") == []

    def test_assign_attribute_requires_selection(self, service, seed_product):
        with pytest.raises(ActionError, match="Please select an attribute"):
            service.assign_attribute("prod-1", AttributeAssignRequest())

    def test_assign_attribute_copies_name(self, service, datasource, seed_product):
        datasource.create("attribute", {"id": "attr-1", "name": "Color", "code": "color"})

        service.assign_attribute("prod-1", AttributeAssignRequest(attribute_id="attr-1", default_value="Black"))

        assignment = datasource.list_simple("product_attribute")[0]
        assert assignment["attribute_name"] == "Color"
        assert assignment["attribute_code"] == "color"
        assert assignment["default_value"] == "Black"

    def test_attribute_form_excludes_assigned(self, service, datasource, seed_product):
        datasource.create("attribute", {"id": "attr-1", "name": "Color", "code": "color"})
        datasource.create("attribute", {"id": "attr-2", "name": "Storage"})
        datasource.create("product_attribute", {"product_id": "prod-1", "attribute_id": "attr-1"})

        form = service.get_attribute_assign_form("prod-1")

        assert [(o.value, o.label) for o in form.attributes] == [("attr-2", "Storage")]

    def test_attribute_form_renders(self, client, datasource, seed_product):
        datasource.create("attribute", {"id": "attr-1", "name": "Color", "code": "color"})

        response = client.get("/action/products/detail/prod-1/attributes/assign")

        assert response.status_code == 200
        assert "Color (color)" in response.text
