"""
Tests de planes de facturación
"""

import pytest

from centymo.core.exceptions import ActionError
from centymo.modules.plan.schemas import PlanFormRequest
from centymo.modules.plan.service import PlanService, build_table_rows


@pytest.fixture
def service(datasource, labels):
    return PlanService(datasource, labels)


class TestPlanRows:
    """Filtrado de filas por estado"""

    def test_records_without_status_show_in_any_list(self):
        records = [
            {"id": "p1", "name": "Basic", "status": "active"},
            {"id": "p2", "name": "Legacy", "status": "inactive"},
            {"id": "p3", "name": "Draft"},
        ]

        assert [r.id for r in build_table_rows(records, "active")] == ["p1", "p3"]
        assert [r.id for r in build_table_rows(records, "inactive")] == ["p2", "p3"]

    def test_default_interval(self):
        row = build_table_rows([{"id": "p1", "name": "Basic"}], "active")[0]
        assert row.data_attrs["interval"] == "monthly"


class TestPlanPages:
    """Listado y detalle"""

    def test_list_titles(self, service):
        assert service.get_list_page("active").page.title == "Active Plans"
        assert service.get_list_page("inactive").page.title == "Inactive Plans"

    def test_list_page_renders(self, client, datasource):
        datasource.create("plan", {"id": "p1", "name": "Premium", "status": "active", "price": "999"})

        response = client.get("/app/plans/list/active")

        assert response.status_code == 200
        assert "Premium" in response.text

    def test_detail_page(self, client, datasource):
        datasource.create("plan", {"id": "p1", "name": "Premium", "interval": "annual", "status": "active"})

        response = client.get("/app/plans/p1")

        assert response.status_code == 200
        assert "annual" in response.text

    def test_detail_not_found(self, client):
        assert client.get("/app/plans/missing").status_code == 404


class TestPlanActions:
    """Drawer de plan"""

    def test_create_requires_name(self, service):
        with pytest.raises(ActionError, match="Plan name is required"):
            service.create_plan(PlanFormRequest(price="100"))

    def test_create_defaults(self, client, datasource):
        response = client.post("/action/plans/add", data={"name": "Starter", "price": "199"})

        assert response.status_code == 200
        plan = datasource.list_simple("plan")[0]
        assert plan["interval"] == "monthly"
        assert plan["status"] == "active"

    def test_create_without_name_returns_error_header(self, client):
        response = client.post("/action/plans/add", data={"price": "199"})
        assert response.status_code == 422
        assert response.headers["HX-Error-Message"] == "Plan name is required"

    def test_edit(self, client, datasource):
        datasource.create("plan", {"id": "p1", "name": "Starter", "status": "active"})

        client.post("/action/plans/edit/p1", data={"name": "Starter", "status": "inactive"})

        assert datasource.read("plan", "p1")["status"] == "inactive"

    def test_delete(self, client, datasource):
        datasource.create("plan", {"id": "p1", "name": "Starter"})
        client.post("/action/plans/delete", data={"id": "p1"})
        assert datasource.list_simple("plan") == []
