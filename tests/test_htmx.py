"""
Tests de las respuestas HTMX de las acciones
"""

import json

from centymo.core.htmx import action_response, htmx_error, htmx_redirect, htmx_success
from centymo.shared.schemas import ActionResult


class TestHtmxResponses:
    """Headers HX-Trigger / HX-Redirect / HX-Error-Message"""

    def test_success_with_table(self):
        response = htmx_success("sales-table")
        assert response.status_code == 200
        assert json.loads(response.headers["HX-Trigger"]) == {
            "formSuccess": True,
            "refreshTable": "sales-table",
        }

    def test_success_without_table(self):
        response = htmx_success()
        assert json.loads(response.headers["HX-Trigger"]) == {"formSuccess": True}

    def test_redirect(self):
        response = htmx_redirect("/app/sales/detail/1")
        assert response.status_code == 200
        assert response.headers["HX-Redirect"] == "/app/sales/detail/1"

    def test_error(self):
        response = htmx_error("Something failed")
        assert response.status_code == 422
        assert response.headers["HX-Error-Message"] == "Something failed"

    def test_action_response_prefers_redirect(self):
        response = action_response(ActionResult.redirect("/app/plans/list/active"))
        assert response.headers["HX-Redirect"] == "/app/plans/list/active"

    def test_action_response_refresh(self):
        response = action_response(ActionResult.refresh("plans-table"))
        assert json.loads(response.headers["HX-Trigger"])["refreshTable"] == "plans-table"
