"""
Tests de cobros (payment collections)
"""

import pytest

from centymo.core.exceptions import ActionError
from centymo.modules.paymentcollection.schemas import PaymentCollectionFormRequest
from centymo.modules.paymentcollection.service import PaymentCollectionService, status_variant


@pytest.fixture
def service(datasource, labels):
    return PaymentCollectionService(datasource, labels)


class TestPaymentCollections:
    """Listado por estado y drawer"""

    def test_status_variants(self):
        assert status_variant("pending") == "warning"
        assert status_variant("completed") == "success"
        assert status_variant("failed") == "danger"

    def test_list_filters_by_status(self, service, datasource):
        datasource.create("payment_collection", {"id": "c1", "customer": "Acme", "status": "pending"})
        datasource.create("payment_collection", {"id": "c2", "customer": "Globex", "status": "failed"})

        page = service.get_list_page("failed")

        assert [row.id for row in page.table.rows] == ["c2"]
        assert page.page.title == "Failed Payments"

    def test_list_page_renders(self, client, datasource):
        datasource.create("payment_collection", {"id": "c1", "customer": "Acme", "amount": "1500", "status": "pending"})

        response = client.get("/app/payment-collections/list/pending")

        assert response.status_code == 200
        assert "Acme" in response.text

    def test_customer_required(self, service):
        with pytest.raises(ActionError, match="Customer is required"):
            service.create_collection(PaymentCollectionFormRequest(amount="100"))

    def test_create_defaults_to_pending(self, client, datasource):
        response = client.post("/action/payment-collections/add", data={"customer": "Acme", "amount": "1500"})

        assert response.status_code == 200
        assert datasource.list_simple("payment_collection")[0]["status"] == "pending"

    def test_edit(self, client, datasource):
        datasource.create("payment_collection", {"id": "c1", "customer": "Acme", "status": "pending"})

        client.post("/action/payment-collections/edit/c1", data={"customer": "Acme", "status": "completed"})

        assert datasource.read("payment_collection", "c1")["status"] == "completed"

    def test_delete(self, client, datasource):
        datasource.create("payment_collection", {"id": "c1", "customer": "Acme"})
        client.post("/action/payment-collections/delete", data={"id": "c1"})
        assert datasource.list_simple("payment_collection") == []

    def test_detail_not_found(self, client):
        assert client.get("/app/payment-collections/missing").status_code == 404
