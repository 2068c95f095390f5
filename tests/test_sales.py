"""
Tests del módulo de ventas: listado, estados, line items, descuentos y pagos
"""

import json

import pytest

from centymo.modules.sales.service import (
    SalesService, calculate_line_item_total, list_status_matches, status_variant
)
from centymo.modules.sales.schemas import DiscountFormRequest, LineItemFormRequest
from centymo.core.exceptions import ActionError


@pytest.fixture
def service(datasource, labels):
    return SalesService(datasource, labels)


def add_item(datasource, sale_id="sale-1", quantity="3", **extra):
    data = {
        "revenue_id": sale_id,
        "description": "iPhone 15",
        "quantity": quantity,
        "unit_price": "100",
        "total": "300.00",
        "line_item_type": "item",
    }
    data.update(extra)
    return datasource.create("revenue_line_item", data)


class TestLineItemTotal:
    """Cálculo del total de un line item"""

    def test_quantity_times_price_minus_discount(self):
        assert calculate_line_item_total("2", "150", "20") == 280.0

    def test_zero_quantity_counts_as_one(self):
        assert calculate_line_item_total("0", "99.5", "") == 99.5

    def test_invalid_values(self):
        assert calculate_line_item_total("abc", "10", "x") == 10.0


class TestStatusHelpers:
    """Aliases de estado del listado"""

    def test_active_includes_ongoing(self):
        assert list_status_matches("ongoing", "active")
        assert list_status_matches("active", "active")
        assert not list_status_matches("complete", "active")

    def test_completed_includes_complete(self):
        assert list_status_matches("complete", "completed")
        assert list_status_matches("completed", "completed")

    def test_variants(self):
        assert status_variant("ongoing") == "info"
        assert status_variant("complete") == "success"
        assert status_variant("cancelled") == "warning"
        assert status_variant("draft") == "default"


class TestSalesListPage:
    """Listado de ventas por estado"""

    def test_active_list_shows_ongoing_sales(self, client, seed_sale, datasource):
        datasource.create("revenue", {"id": "sale-2", "reference_number": "INV-0002", "status": "complete"})

        response = client.get("/app/sales/list/active")

        assert response.status_code == 200
        assert "Active Sales" in response.text
        assert "INV-0001" in response.text
        assert "INV-0002" not in response.text

    def test_completed_list(self, service, seed_sale, datasource):
        datasource.create("revenue", {"id": "sale-2", "reference_number": "INV-0002", "status": "complete"})

        page = service.get_list_page("completed")

        assert [row.id for row in page.table.rows] == ["sale-2"]
        assert page.page.title == "Completed Sales"

    def test_bulk_actions_and_refresh_url(self, service):
        page = service.get_list_page("active")

        assert page.table.refresh_url == "/app/sales/list/active"
        keys = [action.key for action in page.table.bulk_actions.actions]
        assert keys == ["complete", "cancel", "delete"]

    def test_empty_status_defaults_to_active(self, service):
        assert service.get_list_page("").page.active_sub_nav == "active"


class TestSalesDetailPage:
    """Detalle con pestañas"""

    def test_info_tab(self, client, seed_sale):
        response = client.get("/app/sales/detail/sale-1")
        assert response.status_code == 200
        assert "Sale #INV-0001" in response.text
        assert "Juan Dela Cruz" in response.text

    def test_items_tab(self, service, seed_sale, datasource):
        add_item(datasource)

        page = service.get_detail_page("sale-1", "items")

        assert page.active_tab == "items"
        assert len(page.line_item_table.rows) == 1

    def test_unknown_tab_falls_back_to_info(self, service, seed_sale):
        assert service.get_detail_page("sale-1", "bogus").active_tab == "info"

    def test_missing_sale_is_404(self, client):
        response = client.get("/app/sales/detail/missing")
        assert response.status_code == 404


class TestSetStatus:
    """Reglas de cambio de estado"""

    def test_complete_without_items_is_rejected(self, client, seed_sale):
        response = client.post("/action/sales/set-status", data={"id": "sale-1", "status": "complete"})

        assert response.status_code == 422
        assert response.headers["HX-Error-Message"] == "Cannot complete a sale with no items. Add items first."

    def test_complete_deducts_stock(self, client, datasource, seed_sale, seed_inventory):
        add_item(datasource, quantity="3", inventory_item_id="inv-1")

        response = client.post("/action/sales/set-status", data={"id": "sale-1", "status": "complete"})

        assert response.status_code == 200
        assert json.loads(response.headers["HX-Trigger"])["refreshTable"] == "sales-table"
        assert datasource.read("revenue", "sale-1")["status"] == "complete"
        assert datasource.read("inventory_item", "inv-1")["quantity_on_hand"] == 7

    def test_complete_marks_serial_sold(self, service, datasource, seed_sale, seed_inventory):
        datasource.create("inventory_serial", {"id": "ser-1", "serial_number": "SN1", "status": "reserved"})
        add_item(datasource, inventory_item_id="inv-1", inventory_serial_id="ser-1")

        service.set_status("sale-1", "complete")

        assert datasource.read("inventory_serial", "ser-1")["status"] == "sold"
        history = datasource.list_simple("inventory_serial_history")
        assert len(history) == 1
        assert history[0]["from_status"] == "reserved"
        assert history[0]["to_status"] == "sold"
        assert history[0]["reference_id"] == "sale-1"

    def test_cancel_with_payments_is_rejected(self, service, datasource, seed_sale):
        datasource.create("revenue_payment", {"revenue_id": "sale-1", "amount_paid": "100"})

        with pytest.raises(ActionError) as exc_info:
            service.set_status("sale-1", "cancelled")

        assert exc_info.value.message == "Cannot cancel a sale with recorded payments. Remove payments first."
        assert datasource.read("revenue", "sale-1")["status"] == "ongoing"

    def test_cancel_releases_serials(self, service, datasource, seed_sale):
        datasource.create("inventory_serial", {"id": "ser-1", "status": "sold"})
        add_item(datasource, inventory_serial_id="ser-1")

        service.set_status("sale-1", "cancelled")

        assert datasource.read("revenue", "sale-1")["status"] == "cancelled"
        assert datasource.read("inventory_serial", "ser-1")["status"] == "available"
        assert datasource.list_simple("inventory_serial_history")[0]["from_status"] == "sold"

    def test_reopen(self, service, datasource, seed_sale):
        datasource.update("revenue", "sale-1", {"status": "cancelled"})
        service.set_status("sale-1", "ongoing")
        assert datasource.read("revenue", "sale-1")["status"] == "ongoing"

    def test_invalid_status(self, service, seed_sale):
        with pytest.raises(ActionError, match="Invalid status"):
            service.set_status("sale-1", "archived")

    def test_status_from_query_string(self, client, seed_sale):
        response = client.post("/action/sales/set-status?id=sale-1&status=ongoing")
        assert response.status_code == 200


class TestBulkSetStatus:
    """Cambio de estado en lote"""

    def test_bulk_complete_rejects_empty_sales(self, client, datasource, seed_sale):
        datasource.create("revenue", {"id": "sale-2", "status": "ongoing"})
        add_item(datasource, sale_id="sale-2")

        response = client.post(
            "/action/sales/bulk-set-status",
            data={"id": ["sale-1", "sale-2"], "target_status": "complete"},
        )

        assert response.status_code == 422
        assert response.headers["HX-Error-Message"] == "1 of 2 selected sales have no items. Add items first."
        assert datasource.read("revenue", "sale-2")["status"] == "ongoing"

    def test_bulk_cancel_rejects_sales_with_payments(self, service, datasource, seed_sale):
        datasource.create("revenue_payment", {"revenue_id": "sale-1", "amount_paid": "50"})

        with pytest.raises(ActionError) as exc_info:
            service.bulk_set_status(["sale-1"], "cancelled")

        assert exc_info.value.message == "1 of 1 selected sales have recorded payments. Remove payments first."

    def test_bulk_complete(self, service, datasource, seed_sale):
        add_item(datasource)
        service.bulk_set_status(["sale-1"], "complete")
        assert datasource.read("revenue", "sale-1")["status"] == "complete"

    def test_no_ids(self, service):
        with pytest.raises(ActionError, match="No sale IDs provided"):
            service.bulk_set_status([], "complete")


class TestSaleCrud:
    """Alta, edición y borrado de ventas"""

    def test_create_redirects_to_items_tab(self, client, datasource):
        response = client.post("/action/sales/add", data={
            "name": "Maria Santos",
            "reference_number": "INV-0100",
            "currency": "PHP",
            "status": "ongoing",
        })

        assert response.status_code == 200
        records = datasource.list_simple("revenue")
        assert len(records) == 1
        assert response.headers["HX-Redirect"] == f"/app/sales/detail/{records[0]['id']}?tab=items"

    def test_add_form_renders(self, client):
        response = client.get("/action/sales/add")
        assert response.status_code == 200
        assert 'name="reference_number"' in response.text
        assert 'id="sales-drawer-form"' in response.text

    def test_edit(self, client, datasource, seed_sale):
        response = client.post("/action/sales/edit/sale-1", data={"name": "New Name", "status": "ongoing"})

        assert response.headers["HX-Redirect"] == "/app/sales/detail/sale-1"
        assert datasource.read("revenue", "sale-1")["name"] == "New Name"

    def test_delete(self, client, datasource, seed_sale):
        response = client.post("/action/sales/delete", data={"id": "sale-1"})

        assert response.status_code == 200
        assert datasource.list_simple("revenue") == []

    def test_delete_without_id(self, client):
        response = client.post("/action/sales/delete", data={})
        assert response.status_code == 422
        assert response.headers["HX-Error-Message"] == "Sale ID is required"

    def test_bulk_delete(self, client, datasource, seed_sale):
        datasource.create("revenue", {"id": "sale-2", "status": "ongoing"})

        client.post("/action/sales/bulk-delete", data={"id": ["sale-1", "sale-2"]})

        assert datasource.list_simple("revenue") == []


class TestLineItems:
    """Line items, descuentos y total de la venta"""

    def test_add_line_item_recalculates_total(self, service, datasource, seed_sale):
        form = LineItemFormRequest(description="Case", quantity="2", unit_price="150", discount="20")

        result = service.add_line_item("sale-1", form)

        assert result.refresh_table == "line-items-table"
        item = datasource.list_simple("revenue_line_item")[0]
        assert item["total"] == "280.00"
        assert item["line_item_type"] == "item"
        assert datasource.read("revenue", "sale-1")["total_amount"] == "280.00"

    def test_add_discount(self, service, datasource, seed_sale):
        service.add_line_item("sale-1", LineItemFormRequest(quantity="1", unit_price="500"))

        service.add_discount("sale-1", DiscountFormRequest(description="Promo", amount="50"))

        discount = [i for i in datasource.list_simple("revenue_line_item") if i["line_item_type"] == "discount"][0]
        assert discount["total"] == "-50.00"
        assert datasource.read("revenue", "sale-1")["total_amount"] == "450.00"

    @pytest.mark.parametrize("amount", ["0", "-5", "abc", ""])
    def test_discount_must_be_positive(self, service, seed_sale, amount):
        with pytest.raises(ActionError, match="Discount amount must be a positive number"):
            service.add_discount("sale-1", DiscountFormRequest(amount=amount))

    def test_remove_line_item_by_item_id(self, client, datasource, seed_sale):
        item = add_item(datasource)

        response = client.post(f"/action/sales/detail/sale-1/items/remove?itemId={item['id']}")

        assert response.status_code == 200
        assert datasource.list_simple("revenue_line_item") == []
        assert datasource.read("revenue", "sale-1")["total_amount"] == "0.00"

    def test_edit_form_preselects_inventory_item(self, client, datasource, seed_sale, seed_inventory):
        item = add_item(datasource, quantity="2", inventory_item_id="inv-1")

        response = client.get(f"/action/sales/detail/sale-1/items/edit/{item['id']}")

        assert response.status_code == 200
        assert 'name="inventory_item_id"' in response.text
        assert '<option value="inv-1" selected>iPhone 15 (IP15-128)</option>' in response.text

    def test_edit_keeps_inventory_link_for_stock_deduction(self, client, datasource, seed_sale, seed_inventory):
        """Editar un line item y completar la venta sigue descontando stock"""
        item = add_item(datasource, quantity="2", inventory_item_id="inv-1")

        response = client.post(
            f"/action/sales/detail/sale-1/items/edit/{item['id']}",
            data={
                "inventory_item_id": "inv-1",
                "description": "iPhone 15 128GB",
                "quantity": "2",
                "unit_price": "100",
            },
        )
        assert response.status_code == 200
        assert datasource.read("revenue_line_item", item["id"])["inventory_item_id"] == "inv-1"

        client.post("/action/sales/set-status", data={"id": "sale-1", "status": "complete"})

        assert datasource.read("inventory_item", "inv-1")["quantity_on_hand"] == 8

    def test_line_item_table_partial(self, client, datasource, seed_sale):
        add_item(datasource, description="Screen protector")

        response = client.get("/action/sales/detail/sale-1/items/table")

        assert response.status_code == 200
        assert "Screen protector" in response.text


class TestPayments:
    """Pagos de una venta"""

    def test_add_payment(self, client, datasource, seed_sale):
        datasource.create("collection_method", {"id": "cash", "name": "Cash"})

        response = client.post("/action/sales/detail/sale-1/payment/add", data={
            "collection_method_id": "cash",
            "amount_paid": "1000",
            "currency": "PHP",
        })

        assert response.status_code == 200
        payment = datasource.list_simple("revenue_payment")[0]
        assert payment["revenue_id"] == "sale-1"
        assert payment["status"] == "completed"
        assert payment["collection_type"] == "sale"
        assert payment["payment_method"] == "Cash"

    def test_remove_payment(self, client, datasource, seed_sale):
        payment = datasource.create("revenue_payment", {"revenue_id": "sale-1", "amount_paid": "100"})

        client.post("/action/sales/detail/sale-1/payment/remove", data={"id": payment["id"]})

        assert datasource.list_simple("revenue_payment") == []
