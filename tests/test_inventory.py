"""
Tests del módulo de inventario
"""

import json

import pytest

from centymo.core.exceptions import ActionError, PageError
from centymo.modules.inventory.schemas import TransactionFormRequest
from centymo.modules.inventory.service import (
    InventoryService, apply_transaction, compute_available, compute_serial_summary,
    format_signed_quantity, inventory_status, is_low_stock
)


@pytest.fixture
def service(datasource, labels):
    return InventoryService(datasource, labels)


class TestStockHelpers:
    """Cálculos de stock"""

    def test_compute_available(self):
        assert compute_available(10, 3) == "7"
        assert compute_available("5.5", "0") == "5.50"

    def test_available_never_negative(self):
        assert compute_available(2, 5) == "0"
        assert compute_available(None, None) == "0"

    def test_low_stock(self):
        assert is_low_stock({"quantity_on_hand": 8, "quantity_reserved": 3, "reorder_level": 5})
        assert not is_low_stock({"quantity_on_hand": 10, "quantity_reserved": 3, "reorder_level": 5})

    def test_no_reorder_level_is_never_low(self):
        assert not is_low_stock({"quantity_on_hand": 0, "reorder_level": 0})

    def test_inventory_status_only_explicit_false(self):
        assert inventory_status({"active": False}) == "inactive"
        assert inventory_status({"active": True}) == "active"
        assert inventory_status({}) == "active"

    @pytest.mark.parametrize("transaction_type,expected", [
        ("received", 15.0),
        ("returned", 15.0),
        ("sold", 5.0),
        ("transferred", 5.0),
        ("write_off", 5.0),
        ("adjusted", 10.0),
    ])
    def test_apply_transaction(self, transaction_type, expected):
        assert apply_transaction(10.0, transaction_type, 5.0) == expected

    def test_outbound_clamped_at_zero(self):
        assert apply_transaction(3.0, "sold", 5.0) == 0.0

    def test_signed_quantity(self):
        assert format_signed_quantity(4.0, "received") == "+4"
        assert format_signed_quantity(4.0, "sold") == "-4"
        assert format_signed_quantity(4.0, "adjusted") == "4"

    def test_serial_summary(self):
        summary = compute_serial_summary([
            {"status": "available"}, {"status": "available"}, {"status": "sold"}, {"status": "reserved"},
        ])
        assert (summary.total, summary.available, summary.sold, summary.reserved) == (4, 2, 1, 1)


class TestInventoryList:
    """Listado por ubicación"""

    def test_filters_by_location(self, service, datasource, seed_inventory):
        datasource.create("inventory_item", {"id": "inv-2", "name": "Galaxy", "location_id": "sm-city-cebu"})

        page = service.get_list_page("ayala-central-bloc")

        assert [row.id for row in page.table.rows] == ["inv-1"]
        assert page.page.title == "Inventory — Ayala Central Bloc"

    def test_default_location(self, service, seed_inventory):
        page = service.get_list_page("")
        assert page.page.active_sub_nav == "ayala-central-bloc"
        assert page.table.refresh_url == "/app/inventory/list/ayala-central-bloc"

    def test_reorder_flag(self, service, datasource, seed_inventory):
        # 10 - 3 = 7 disponibles, reorden 5: sin alerta
        assert service.get_list_page("ayala-central-bloc").table.rows[0].cells[5].value == "5"

        datasource.update("inventory_item", "inv-1", {"quantity_reserved": 6})

        assert service.get_list_page("ayala-central-bloc").table.rows[0].cells[5].value == "5 (!)"

    def test_available_column(self, service, seed_inventory):
        row = service.get_list_page("ayala-central-bloc").table.rows[0]
        assert row.data_attrs["available"] == "7"

    def test_list_page_renders(self, client, seed_inventory):
        response = client.get("/app/inventory/list/ayala-central-bloc")
        assert response.status_code == 200
        assert "iPhone 15" in response.text


class TestInventoryDetail:
    """Detalle con pestañas"""

    def test_info_tab(self, client, seed_inventory):
        response = client.get("/app/inventory/detail/inv-1")
        assert response.status_code == 200
        assert "IP15-128" in response.text

    def test_serials_tab(self, service, datasource, seed_inventory):
        datasource.create("inventory_serial", {"inventory_item_id": "inv-1", "serial_number": "SN1", "status": "available"})

        page = service.get_detail_page("inv-1", "serials")

        assert page.is_serialized
        assert len(page.serial_table.rows) == 1
        assert page.serial_summary.available == 1

    def test_tab_partial(self, client, seed_inventory):
        response = client.get("/action/inventory/detail/inv-1/tab/transactions")
        assert response.status_code == 200
        assert 'id="inventory-tab-transactions"' in response.text

    def test_missing_item(self, service):
        with pytest.raises(PageError) as exc_info:
            service.get_detail_page("missing")
        assert exc_info.value.status_code == 404


class TestInventoryActions:
    """Acciones del drawer y de la tabla"""

    def test_create_item(self, client, datasource):
        response = client.post("/action/inventory/add", data={
            "product_name": "Galaxy S24",
            "sku": "GS24",
            "quantity_on_hand": "12",
            "quantity_reserved": "abc",
            "reorder_level": "2",
            "location_id": "sm-city-cebu",
            "active": "true",
        })

        assert response.status_code == 200
        assert json.loads(response.headers["HX-Trigger"])["refreshTable"] == "inventory-table"
        item = datasource.list_simple("inventory_item")[0]
        assert item["name"] == "Galaxy S24"
        assert item["quantity_on_hand"] == 12.0
        assert item["quantity_reserved"] == 0.0
        assert item["unit_of_measure"] == "pcs"
        assert item["active"] is True

    def test_add_form_renders(self, client):
        response = client.get("/action/inventory/add")
        assert response.status_code == 200
        assert 'name="product_name"' in response.text
        assert 'id="inventory-drawer-form"' in response.text

    def test_delete_item(self, client, datasource, seed_inventory):
        client.post("/action/inventory/delete", data={"id": "inv-1"})
        assert datasource.list_simple("inventory_item") == []

    def test_set_status(self, client, datasource, seed_inventory):
        response = client.post("/action/inventory/set-status", data={"id": "inv-1", "status": "inactive"})

        assert response.status_code == 200
        assert datasource.read("inventory_item", "inv-1")["active"] is False

    def test_invalid_status(self, service, seed_inventory):
        with pytest.raises(ActionError, match="Invalid status"):
            service.set_status("inv-1", "archived")

    def test_bulk_set_status(self, client, datasource, seed_inventory):
        datasource.create("inventory_item", {"id": "inv-2", "active": True})

        client.post("/action/inventory/bulk-set-status", data={"id": ["inv-1", "inv-2"], "target_status": "inactive"})

        assert all(item["active"] is False for item in datasource.list_simple("inventory_item"))


class TestTransactions:
    """Movimientos de stock"""

    def test_received_adds_stock(self, client, datasource, seed_inventory):
        response = client.post("/action/inventory/detail/inv-1/transactions/assign", data={
            "transaction_type": "received",
            "quantity": "5",
            "transaction_date": "2024-05-01",
            "reference": "PO-1",
        })

        assert response.status_code == 200
        assert json.loads(response.headers["HX-Trigger"])["refreshTable"] == "transaction-table"
        assert datasource.read("inventory_item", "inv-1")["quantity_on_hand"] == 15.0
        transaction = datasource.list_simple("inventory_transaction")[0]
        assert transaction["inventory_item_id"] == "inv-1"
        assert transaction["performed_by"] == "system"

    def test_sold_clamps_at_zero(self, service, datasource, seed_inventory):
        service.record_transaction("inv-1", TransactionFormRequest(transaction_type="sold", quantity="50"))
        assert datasource.read("inventory_item", "inv-1")["quantity_on_hand"] == 0.0

    def test_movement_recorded_even_if_item_missing(self, service, datasource):
        service.record_transaction("ghost", TransactionFormRequest(transaction_type="received", quantity="1"))
        assert len(datasource.list_simple("inventory_transaction")) == 1

    def test_movements_page(self, client, datasource, seed_inventory):
        datasource.create("inventory_transaction", {
            "inventory_item_id": "inv-1", "transaction_type": "sold", "quantity": 2, "reference": "REF-77",
        })

        response = client.get("/app/inventory/movements")

        assert response.status_code == 200
        assert "REF-77" in response.text


class TestSerialsAndDepreciation:
    """Seriales y depreciación"""

    def test_assign_serial(self, client, datasource, seed_inventory):
        response = client.post("/action/inventory/detail/inv-1/serials/assign", data={
            "serial_number": "SN-001", "status": "available",
        })

        assert response.status_code == 200
        serial = datasource.list_simple("inventory_serial")[0]
        assert serial["inventory_item_id"] == "inv-1"
        assert serial["serial_number"] == "SN-001"

    def test_remove_serial(self, client, datasource, seed_inventory):
        serial = datasource.create("inventory_serial", {"inventory_item_id": "inv-1", "serial_number": "SN"})

        client.post("/action/inventory/detail/inv-1/serials/remove", data={"id": serial["id"]})

        assert datasource.list_simple("inventory_serial") == []

    def test_assign_depreciation_redirects(self, client, datasource, seed_inventory):
        response = client.post("/action/inventory/detail/inv-1/depreciation/assign", data={
            "method": "straight_line", "cost_basis": "50000", "useful_life_months": "36",
        })

        assert response.headers["HX-Redirect"] == "/app/inventory/detail/inv-1?tab=depreciation"
        assert datasource.list_simple("inventory_depreciation")[0]["inventory_item_id"] == "inv-1"


class TestDashboard:
    """Dashboard y sus fragmentos"""

    def test_dashboard_page(self, client, seed_inventory):
        response = client.get("/app/inventory/dashboard")
        assert response.status_code == 200

    def test_widgets(self, service, seed_inventory):
        widgets = service.build_dashboard_widgets()
        assert len(widgets) == 8
        assert widgets[0].value == "1000"

    def test_low_stock_alerts(self, service, datasource, seed_inventory):
        datasource.update("inventory_item", "inv-1", {"quantity_on_hand": 4, "quantity_reserved": 0})

        alerts = service.get_low_stock_alerts()

        assert [alert.id for alert in alerts] == ["inv-1"]
        assert alerts[0].available == "4"

    @pytest.mark.parametrize("partial", ["stats", "chart", "movements", "alerts"])
    def test_partials(self, client, seed_inventory, partial):
        assert client.get(f"/action/inventory/dashboard/{partial}").status_code == 200

    def test_unknown_partial(self, client):
        assert client.get("/action/inventory/dashboard/bogus").status_code == 404
