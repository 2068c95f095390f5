"""
Configuración de tests.

Cada test recibe una app nueva sobre un InMemoryDataSource vacío; los
fixtures `seed_*` cargan registros mínimos de cada colección.
"""

import pytest
from fastapi.testclient import TestClient

from centymo.main import create_app
from centymo.shared.datasource import InMemoryDataSource
from centymo.shared.labels import LabelCatalog

HTMX_HEADERS = {"HX-Request": "true"}


@pytest.fixture
def datasource():
    return InMemoryDataSource()


@pytest.fixture
def labels():
    return LabelCatalog()


@pytest.fixture
def client(datasource, labels):
    """TestClient sobre una app con DataSource en memoria"""
    app = create_app(datasource=datasource, labels=labels)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def seed_inventory(datasource):
    """Item en ayala-central-bloc con 10 en mano y 3 reservados"""
    return datasource.create("inventory_item", {
        "id": "inv-1",
        "name": "iPhone 15",
        "sku": "IP15-128",
        "quantity_on_hand": 10,
        "quantity_reserved": 3,
        "reorder_level": 5,
        "unit_of_measure": "pcs",
        "location_id": "ayala-central-bloc",
        "item_type": "serialized",
        "product_id": "prod-1",
        "active": True,
    })


@pytest.fixture
def seed_sale(datasource):
    return datasource.create("revenue", {
        "id": "sale-1",
        "name": "Juan Dela Cruz",
        "reference_number": "INV-0001",
        "revenue_date_string": "2024-05-01",
        "currency": "PHP",
        "total_amount": "0.00",
        "status": "ongoing",
        "location_id": "ayala-central-bloc",
    })


@pytest.fixture
def seed_product(datasource):
    return datasource.create("product", {
        "id": "prod-1",
        "name": "iPhone 15",
        "description": "128GB",
        "price": 49990,
        "currency": "PHP",
        "active": True,
    })


@pytest.fixture
def seed_price_list(datasource):
    return datasource.create("price_list", {
        "id": "pl-1",
        "name": "Holiday Promo",
        "description": "December pricing",
        "date_start_string": "2024-12-01",
        "date_end_string": "2024-12-31",
        "active": True,
    })
