"""
Tests de la aplicación: health, redirección raíz y manejo de errores
"""


class TestApp:
    """Endpoints generales"""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["app"] == "Centymo Back Office"

    def test_root_redirects_to_active_sales(self, client):
        response = client.get("/", follow_redirects=False)

        assert response.status_code in (302, 307)
        assert response.headers["location"] == "/app/sales/list/active"

    def test_full_page_has_layout(self, client):
        response = client.get("/app/sales/list/active")
        assert "<!DOCTYPE html>" in response.text
        assert "/static/js/centymo.js" in response.text

    def test_htmx_request_gets_content_only(self, client):
        response = client.get("/app/sales/list/active", headers={"HX-Request": "true"})

        assert response.status_code == 200
        assert "<!DOCTYPE html>" not in response.text
        assert 'id="sales-table"' in response.text

    def test_page_error_renders_error_page(self, client):
        response = client.get("/app/products/detail/missing")

        assert response.status_code == 404
        assert "404" in response.text

    def test_static_assets_are_served(self, client):
        assert client.get("/static/css/centymo.css").status_code == 200
        assert client.get("/static/js/centymo.js").status_code == 200
