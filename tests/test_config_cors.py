"""Configuration loading and the CORS allow-list."""

from checkout_backend.core.config import load_settings


class TestLoadSettings:

    def test_defaults(self, monkeypatch):
        for name in (
            "MERCADOPAGO_ACCESS_TOKEN",
            "PORT",
            "BACKEND_BASE_URL",
            "FRONTEND_BASE_URL",
            "CORS_ORIGINS",
            "MERCADOPAGO_TIMEOUT_SECONDS",
        ):
            monkeypatch.delenv(name, raising=False)

        settings = load_settings()
        assert settings.mercadopago_access_token is None
        assert settings.mercadopago_timeout_seconds == 5.0
        assert settings.port == 3001
        assert settings.backend_base_url == "http://localhost:3001"
        assert settings.webhook_url == "http://localhost:3001/api/payment-webhook"
        assert "https://www.telhasindustrial.com" in settings.cors_origins

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("MERCADOPAGO_ACCESS_TOKEN", "TEST-abc")
        monkeypatch.setenv("BACKEND_BASE_URL", "https://api.example.com/")
        monkeypatch.setenv("FRONTEND_BASE_URL", "https://shop.example.com/")
        monkeypatch.setenv("CORS_ORIGINS", "https://shop.example.com, http://localhost:3000 ,")
        monkeypatch.setenv("MERCADOPAGO_USE_SANDBOX", "true")
        monkeypatch.setenv("CURRENCY_ID", "ars")

        settings = load_settings()
        assert settings.mercadopago_access_token == "TEST-abc"
        assert settings.mercadopago_use_sandbox is True
        assert settings.backend_base_url == "https://api.example.com"
        assert settings.frontend_base_url == "https://shop.example.com"
        assert settings.cors_origins == ["https://shop.example.com", "http://localhost:3000"]
        assert settings.currency_id == "ARS"


class TestCors:

    def test_request_without_origin_is_allowed(self, test_client):
        r = test_client.get("/api/status")
        assert r.status_code == 200

    def test_allowed_origin_gets_cors_headers(self, test_client):
        r = test_client.get("/api/status", headers={"Origin": "http://localhost:5173"})
        assert r.status_code == 200
        assert r.headers["access-control-allow-origin"] == "http://localhost:5173"

    def test_preflight_from_allowed_origin(self, test_client):
        r = test_client.options(
            "/api/preference",
            headers={
                "Origin": "https://www.telhas.test",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Content-Type",
            },
        )
        assert r.status_code == 200
        assert r.headers["access-control-allow-origin"] == "https://www.telhas.test"

    def test_unknown_origin_is_rejected(self, test_client, fake_provider, sample_preference_payload):
        r = test_client.post(
            "/api/preference",
            json=sample_preference_payload,
            headers={"Origin": "https://evil.example.com"},
        )
        assert r.status_code == 403
        assert r.json()["error"] == "Origin not allowed"
        assert fake_provider.preferences == []
