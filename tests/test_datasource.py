"""
Tests del DataSource en memoria y del DataSource SQL sobre SQLite
"""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from centymo.core.exceptions import DataSourceError, RecordNotFoundError
from centymo.shared.datasource import InMemoryDataSource, SQLDataSource


@pytest.fixture
def sql_datasource(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'test.db'}")
    datasource = SQLDataSource(sessionmaker(bind=engine, autoflush=False))
    datasource.initialize()
    yield datasource
    engine.dispose()


@pytest.fixture(params=["memory", "sql"])
def any_datasource(request, sql_datasource):
    if request.param == "memory":
        return InMemoryDataSource()
    return sql_datasource


class TestDataSourceCrud:
    """Operaciones CRUD comunes a ambos backends"""

    def test_create_assigns_id(self, any_datasource):
        record = any_datasource.create("plan", {"name": "Basic"})
        assert record["id"]
        assert record["name"] == "Basic"

    def test_create_keeps_given_id(self, any_datasource):
        record = any_datasource.create("plan", {"id": "plan-1", "name": "Basic"})
        assert record["id"] == "plan-1"
        assert any_datasource.read("plan", "plan-1")["name"] == "Basic"

    def test_list_simple_by_collection(self, any_datasource):
        any_datasource.create("plan", {"name": "A"})
        any_datasource.create("plan", {"name": "B"})
        any_datasource.create("subscription", {"name": "C"})

        names = sorted(r["name"] for r in any_datasource.list_simple("plan"))

        assert names == ["A", "B"]
        assert any_datasource.list_simple("missing") == []

    def test_list_simple_keeps_insertion_order(self, any_datasource):
        """Registros creados en el mismo segundo salen en orden de alta"""
        for n in range(20):
            any_datasource.create("inventory_transaction", {"n": n})

        order = [r["n"] for r in any_datasource.list_simple("inventory_transaction")]

        assert order == list(range(20))

    def test_list_order_survives_updates(self, any_datasource):
        first = any_datasource.create("revenue_payment", {"amount": "1"})
        any_datasource.create("revenue_payment", {"amount": "2"})

        any_datasource.update("revenue_payment", first["id"], {"amount": "10"})

        amounts = [r["amount"] for r in any_datasource.list_simple("revenue_payment")]
        assert amounts == ["10", "2"]

    def test_update_merges_fields(self, any_datasource):
        any_datasource.create("plan", {"id": "p", "name": "A", "status": "active"})

        updated = any_datasource.update("plan", "p", {"status": "inactive"})

        assert updated["name"] == "A"
        assert updated["status"] == "inactive"
        assert any_datasource.read("plan", "p")["status"] == "inactive"

    def test_delete(self, any_datasource):
        any_datasource.create("plan", {"id": "p", "name": "A"})
        any_datasource.delete("plan", "p")
        assert any_datasource.list_simple("plan") == []

    @pytest.mark.parametrize("operation", ["read", "update", "delete"])
    def test_missing_record_raises(self, any_datasource, operation):
        with pytest.raises(RecordNotFoundError):
            if operation == "read":
                any_datasource.read("plan", "nope")
            elif operation == "update":
                any_datasource.update("plan", "nope", {"name": "x"})
            else:
                any_datasource.delete("plan", "nope")

    def test_not_found_is_datasource_error(self):
        assert issubclass(RecordNotFoundError, DataSourceError)


class TestInMemoryDataSource:
    """Particularidades del backend en memoria"""

    def test_seed(self):
        datasource = InMemoryDataSource(seed={"plan": [{"id": "p1", "name": "Basic"}]})
        assert datasource.read("plan", "p1")["name"] == "Basic"

    def test_returns_copies(self):
        datasource = InMemoryDataSource()
        record = datasource.create("plan", {"id": "p1", "name": "Basic"})
        record["name"] = "Changed"
        assert datasource.read("plan", "p1")["name"] == "Basic"
