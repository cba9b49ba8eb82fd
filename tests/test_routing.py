# =============================================================================
# tests/test_routing.py - Origin Allowlist, CORS and Health Tests
# =============================================================================

ALLOWED_ORIGIN = "http://localhost:5500"


# =============================================================================
# Origin Allowlist
# =============================================================================

class TestOriginAllowlist:
    """Only exact allowlisted origins reach the handlers."""

    def test_unknown_origin_rejected(self, client, fake_relay, contact_payload):
        """Test that a foreign origin is refused before the handler runs."""
        response = client.post(
            "/backend/contact",
            json=contact_payload,
            headers={"Origin": "https://evil.example"},
        )

        assert response.status_code == 403
        assert response.json() == {"success": False, "message": "Origin not allowed."}
        assert fake_relay.sent == []

    def test_prefix_of_allowed_origin_rejected(self, client, fake_relay, contact_payload):
        """Test that matching is exact, not a pattern."""
        response = client.post(
            "/backend/contact",
            json=contact_payload,
            headers={"Origin": "https://sandipnanavati.com.evil.example"},
        )

        assert response.status_code == 403
        assert fake_relay.sent == []

    def test_allowed_origin(self, client, fake_relay, contact_payload):
        """Test that an allowlisted origin gets CORS headers."""
        response = client.post(
            "/backend/contact",
            json=contact_payload,
            headers={"Origin": ALLOWED_ORIGIN},
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == ALLOWED_ORIGIN
        assert len(fake_relay.sent) == 1

    def test_no_origin_header(self, client, fake_relay, contact_payload):
        """Test that same-origin and non-browser requests pass."""
        response = client.post("/backend/contact", json=contact_payload)

        assert response.status_code == 200

    def test_preflight(self, client):
        """Test the CORS preflight for an allowlisted origin."""
        response = client.options(
            "/backend/apply",
            headers={
                "Origin": ALLOWED_ORIGIN,
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Content-Type",
            },
        )

        assert response.status_code == 200
        assert "POST" in response.headers["access-control-allow-methods"]
        assert response.headers["access-control-allow-origin"] == ALLOWED_ORIGIN

    def test_custom_origins(self, make_client, settings_factory, fake_relay, contact_payload):
        """Test that CORS_ORIGINS replaces the default allowlist."""
        client = make_client(
            settings_factory(CORS_ORIGINS="https://forms.example.com"), fake_relay
        )

        allowed = client.post(
            "/backend/contact",
            json=contact_payload,
            headers={"Origin": "https://forms.example.com"},
        )
        refused = client.post(
            "/backend/contact",
            json=contact_payload,
            headers={"Origin": ALLOWED_ORIGIN},
        )

        assert allowed.status_code == 200
        assert refused.status_code == 403


# =============================================================================
# Methods
# =============================================================================

class TestMethods:

    def test_get_on_form_endpoint(self, client):
        """Test that the form endpoints only take POST."""
        response = client.get("/backend/contact")

        assert response.status_code == 405


# =============================================================================
# Health
# =============================================================================

class TestHealth:
    """Health and readiness endpoints."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["environment"] == "development"
        assert body["version"] == "1.0.0"

    def test_ready(self, client):
        """Test readiness when the scratch directory is usable."""
        response = client.get("/health/ready")

        assert response.status_code == 200
        assert response.json()["status"] == "ready"
        assert response.json()["checks"]["scratch_directory"] == "healthy"

    def test_degraded_without_scratch_dir(self, client, upload_dir):
        """Test readiness after the scratch directory disappears."""
        upload_dir.rmdir()

        response = client.get("/health/ready")

        assert response.json()["status"] == "degraded"

    def test_scratch_dir_created_at_startup(self, client, upload_dir):
        assert upload_dir.is_dir()
