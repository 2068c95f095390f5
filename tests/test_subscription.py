"""
Tests de suscripciones
"""

import pytest

from centymo.core.exceptions import ActionError
from centymo.modules.subscription.schemas import SubscriptionFormRequest
from centymo.modules.subscription.service import SubscriptionService


@pytest.fixture
def service(datasource, labels):
    return SubscriptionService(datasource, labels)


class TestSubscriptions:
    """Listado, drawer y cancelación"""

    def test_list_filters_by_status(self, service, datasource):
        datasource.create("subscription", {"id": "s1", "customer": "Acme", "status": "active"})
        datasource.create("subscription", {"id": "s2", "customer": "Globex", "status": "inactive"})

        page = service.get_list_page("active")

        assert [row.id for row in page.table.rows] == ["s1"]
        assert page.page.title == "Active Subscriptions"

    def test_list_page_renders(self, client, datasource):
        datasource.create("subscription", {"id": "s1", "customer": "Acme", "plan": "Premium", "status": "active"})

        response = client.get("/app/subscriptions/list/active")

        assert response.status_code == 200
        assert "Acme" in response.text

    def test_form_offers_plans(self, service, datasource):
        datasource.create("plan", {"name": "Premium"})
        datasource.create("plan", {"name": "Basic"})

        form = service.get_add_form()

        assert sorted(o.value for o in form.plans) == ["Basic", "Premium"]

    def test_customer_required(self, service):
        with pytest.raises(ActionError, match="Customer is required"):
            service.create_subscription(SubscriptionFormRequest(plan="Premium"))

    def test_create(self, client, datasource):
        response = client.post("/action/subscriptions/add", data={
            "customer": "Acme", "plan": "Premium", "start_date": "2024-01-01",
        })

        assert response.status_code == 200
        subscription = datasource.list_simple("subscription")[0]
        assert subscription["customer"] == "Acme"
        assert subscription["status"] == "active"

    def test_cancel_deletes_record(self, client, datasource):
        datasource.create("subscription", {"id": "s1", "customer": "Acme"})

        response = client.post("/action/subscriptions/delete", data={"id": "s1"})

        assert response.status_code == 200
        assert datasource.list_simple("subscription") == []

    def test_detail(self, client, datasource):
        datasource.create("subscription", {"id": "s1", "customer": "Acme", "plan": "Premium", "status": "active"})

        response = client.get("/app/subscriptions/s1")

        assert response.status_code == 200
        assert "Premium" in response.text
