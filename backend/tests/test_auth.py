"""
Parcel Server — Authentication & Middleware Tests
==================================================

What we test:
    ✅ Missing / malformed bearer header → 401
    ✅ Rejected token → 403
    ✅ Role-gated routes → 403 for the wrong role or an unknown user
    ✅ X-Request-ID is echoed and appears in error bodies
    ✅ Liveness and health routes
"""

import pytest

from conftest import auth_headers


class TestBearerCredential:

    @pytest.mark.asyncio
    async def test_missing_header_is_401(self, test_client):
        response = await test_client.get("/parcels")

        assert response.status_code == 401
        assert response.json()["error"] == "unauthorized"
        assert response.json()["message"] == "unauthorized access"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("header", ["Basic abc", "Bearer", "Bearer   ", "token-only"])
    async def test_malformed_header_is_401(self, test_client, header):
        response = await test_client.get("/parcels", headers={"Authorization": header})
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_rejected_token_is_403(self, test_client):
        response = await test_client.get("/parcels", headers={"Authorization": "Bearer forged"})

        assert response.status_code == 403
        assert response.json()["error"] == "forbidden"

    @pytest.mark.asyncio
    async def test_valid_token_passes(self, test_client):
        response = await test_client.get("/parcels", headers=auth_headers("alice@example.com"))
        assert response.status_code == 200


class TestRoleGates:

    @pytest.mark.asyncio
    async def test_unknown_user_cannot_use_admin_route(self, test_client):
        response = await test_client.get("/riders/pending", headers=auth_headers("nobody@example.com"))
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_rider_is_not_admin(self, test_client, seed_user):
        await seed_user("rider@example.com", "rider")

        admin_route = await test_client.get("/riders/pending", headers=auth_headers("rider@example.com"))
        rider_route = await test_client.get("/rider/parcels", headers=auth_headers("rider@example.com"))

        assert admin_route.status_code == 403
        assert rider_route.status_code == 200

    @pytest.mark.asyncio
    async def test_admin_is_not_rider(self, test_client, seed_user):
        await seed_user("admin@example.com", "admin")

        response = await test_client.get("/rider/parcels", headers=auth_headers("admin@example.com"))

        assert response.status_code == 403


class TestRequestId:

    @pytest.mark.asyncio
    async def test_client_request_id_is_echoed(self, test_client):
        response = await test_client.get("/parcels", headers={"X-Request-ID": "trace-42"})

        assert response.headers["X-Request-ID"] == "trace-42"
        assert response.json()["request_id"] == "trace-42"

    @pytest.mark.asyncio
    async def test_request_id_is_generated(self, test_client):
        response = await test_client.get("/parcels/delivery/status-count")
        assert len(response.headers["X-Request-ID"]) == 8


class TestServiceRoutes:

    @pytest.mark.asyncio
    async def test_root_banner(self, test_client):
        response = await test_client.get("/")

        assert response.status_code == 200
        assert response.text == "Parcel Server is running"

    @pytest.mark.asyncio
    async def test_health_reports_database(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert body["version"] == "1.0.0"
