"""
Tests de listas de precios
"""

import pytest

from centymo.core.exceptions import ActionError, PageError
from centymo.modules.pricelist.repository import map_to_price_list, price_list_to_record
from centymo.modules.pricelist.schemas import PriceList, PriceProductFormRequest
from centymo.modules.pricelist.service import PriceListService


@pytest.fixture
def service(datasource, labels):
    return PriceListService(datasource, labels)


class TestMappers:
    """Conversión registro <-> PriceList"""

    def test_map_to_price_list(self):
        price_list = map_to_price_list({
            "id": "pl-1", "name": "Promo", "date_start_string": "2024-01-01", "active": "true",
        })

        assert price_list.name == "Promo"
        assert price_list.active is True
        assert price_list.description is None
        assert price_list.date_end_string is None

    def test_open_ended_list_omits_end_date(self):
        data = price_list_to_record(PriceList(name="Open", date_start_string="2024-01-01", active=True))
        assert "date_end_string" not in data
        assert data["active"] is True


class TestPriceListList:
    """Listado por estado"""

    def test_active_and_inactive(self, service, datasource, seed_price_list):
        datasource.create("price_list", {"id": "pl-2", "name": "Old", "active": False})

        assert [r.id for r in service.get_list_page("active").table.rows] == ["pl-1"]
        assert [r.id for r in service.get_list_page("inactive").table.rows] == ["pl-2"]

    def test_missing_end_date_shows_dash(self, service, datasource):
        datasource.create("price_list", {"id": "pl-3", "name": "Open", "active": True})
        assert service.get_list_page("active").table.rows[0].cells[2].value == "—"

    def test_list_page_renders(self, client, seed_price_list):
        response = client.get("/app/price-lists/list/active")
        assert response.status_code == 200
        assert "Holiday Promo" in response.text


class TestPriceListDetail:
    """Detalle con pestañas basic / prices"""

    def test_basic_tab_default(self, service, seed_price_list):
        page = service.get_detail_page("pl-1")
        assert page.active_tab == "basic"
        assert page.prices_table is None

    def test_prices_tab_filters_by_list(self, service, datasource, seed_price_list):
        datasource.create("price_product", {"price_list_id": "pl-1", "name": "iPhone 15", "amount": 45000})
        datasource.create("price_product", {"price_list_id": "pl-9", "name": "Other", "amount": 1})

        page = service.get_detail_page("pl-1", "prices")

        assert [row.cells[0].value for row in page.prices_table.rows] == ["iPhone 15"]
        assert page.prices_table.rows[0].cells[1].value == "45000"

    def test_prices_tab_renders(self, client, datasource, seed_price_list):
        datasource.create("price_product", {"price_list_id": "pl-1", "name": "iPhone 15", "amount": 45000})

        response = client.get("/app/price-lists/pl-1?tab=prices")

        assert response.status_code == 200
        assert "45000" in response.text

    def test_not_found(self, service):
        with pytest.raises(PageError) as exc_info:
            service.get_detail_page("missing")
        assert exc_info.value.status_code == 404


class TestPriceListActions:
    """Drawer de lista y de precios"""

    def test_create(self, client, datasource):
        response = client.post("/action/price-lists/add", data={
            "name": "Summer", "date_start": "2024-06-01", "active": "true",
        })

        assert response.status_code == 200
        record = datasource.list_simple("price_list")[0]
        assert record["name"] == "Summer"
        assert record["date_start_string"] == "2024-06-01"
        assert "date_end_string" not in record

    def test_delete(self, client, datasource, seed_price_list):
        client.post("/action/price-lists/delete", data={"id": "pl-1"})
        assert datasource.list_simple("price_list") == []

    def test_add_price_product(self, client, datasource, seed_price_list, seed_product):
        response = client.post("/action/price-lists/pl-1/products/add", data={
            "product_id": "prod-1", "name": "iPhone 15", "amount": "45000", "currency": "PHP",
        })

        assert response.status_code == 200
        price_product = datasource.list_simple("price_product")[0]
        assert price_product["amount"] == 45000
        assert price_product["price_list_id"] == "pl-1"

    def test_product_required(self, service, seed_price_list):
        with pytest.raises(ActionError, match="Product is required"):
            service.add_price_product("pl-1", PriceProductFormRequest(amount="10"))

    def test_amount_must_be_integer(self, client, seed_price_list, seed_product):
        response = client.post("/action/price-lists/pl-1/products/add", data={
            "product_id": "prod-1", "amount": "12.50",
        })

        assert response.status_code == 422
        assert response.headers["HX-Error-Message"] == "Amount must be a valid number"

    def test_form_offers_active_products_only(self, service, datasource, seed_product):
        datasource.create("product", {"id": "prod-2", "name": "Retired", "active": False})

        form = service.get_price_product_form("pl-1")

        assert [o.value for o in form.products] == ["prod-1"]

    def test_delete_price_product(self, client, datasource, seed_price_list):
        price_product = datasource.create("price_product", {"price_list_id": "pl-1", "name": "X"})

        response = client.post("/action/price-lists/pl-1/products/delete", data={"id": price_product["id"]})

        assert response.status_code == 200
        assert datasource.list_simple("price_product") == []
