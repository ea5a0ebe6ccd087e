"""
Parcel Server — Payment API Tests
==================================

What we test:
    ✅ Payment intents: both amount spellings, positive amounts only,
       processor errors surface as 500 with the processor's message
    ✅ Recording a payment marks the parcel paid exactly once
    ✅ Payment listings are scoped for non-admin callers
"""

import uuid

import pytest
from sqlalchemy import func, select

from conftest import auth_headers
from parcel_server.models import Payment

ALICE = "alice@example.com"
BOB = "bob@example.com"
ADMIN = "admin@example.com"


class TestPaymentIntent:

    @pytest.mark.asyncio
    async def test_returns_client_secret(self, test_client, payment_provider):
        response = await test_client.post("/create-payment-intent", json={"amount_in_cents": 1500})

        assert response.status_code == 200
        assert response.json() == {"clientSecret": "pi_test_1500_secret_abc"}
        assert payment_provider.amounts == [1500]

    @pytest.mark.asyncio
    async def test_accepts_camel_case_amount(self, test_client, payment_provider):
        response = await test_client.post("/create-payment-intent", json={"amountInCents": 990})

        assert response.status_code == 200
        assert payment_provider.amounts == [990]

    @pytest.mark.asyncio
    async def test_non_positive_amount_is_400(self, test_client, payment_provider):
        zero = await test_client.post("/create-payment-intent", json={"amount_in_cents": 0})
        missing = await test_client.post("/create-payment-intent", json={})

        assert zero.status_code == 400
        assert missing.status_code == 400
        assert payment_provider.amounts == []

    @pytest.mark.asyncio
    async def test_processor_failure_is_500_with_message(self, test_client, payment_provider):
        payment_provider.error = "Amount must be at least $0.50 usd"

        response = await test_client.post("/create-payment-intent", json={"amount_in_cents": 10})

        assert response.status_code == 500
        assert response.json()["error"] == "payment_error"
        assert response.json()["message"] == "Amount must be at least $0.50 usd"


class TestRecordPayment:

    @pytest.mark.asyncio
    async def test_marks_parcel_paid_and_stamps_payer(self, test_client, create_parcel):
        parcel_id = await create_parcel(ALICE)

        response = await test_client.post(
            "/payments",
            json={
                "parcel_id": parcel_id,
                "amount": 60,
                "payment_method": "card",
                "transaction_id": "pi_123",
                "email": "someone-else@example.com",
            },
            headers=auth_headers(ALICE),
        )

        assert response.status_code == 201
        assert response.json()["inserted_id"]
        parcel = (await test_client.get(f"/parcels/{parcel_id}")).json()
        assert parcel["payment_status"] == "paid"

        payments = (await test_client.get("/payments", headers=auth_headers(ALICE))).json()
        assert len(payments) == 1
        assert payments[0]["email"] == ALICE
        assert payments[0]["transaction_id"] == "pi_123"
        assert payments[0]["paid_at"] is not None

    @pytest.mark.asyncio
    async def test_already_paid_is_404_without_duplicate(
        self, test_client, create_parcel, session_factory
    ):
        parcel_id = await create_parcel(ALICE)
        body = {"parcel_id": parcel_id, "amount": 60, "transaction_id": "pi_123"}

        first = await test_client.post("/payments", json=body, headers=auth_headers(ALICE))
        second = await test_client.post("/payments", json=body, headers=auth_headers(ALICE))

        assert first.status_code == 201
        assert second.status_code == 404
        async with session_factory() as session:
            count = await session.scalar(select(func.count()).select_from(Payment))
        assert count == 1

    @pytest.mark.asyncio
    async def test_missing_parcel_is_404(self, test_client):
        response = await test_client.post(
            "/payments",
            json={"parcel_id": str(uuid.uuid4()), "amount": 10},
            headers=auth_headers(ALICE),
        )
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_malformed_parcel_id_is_400(self, test_client):
        response = await test_client.post(
            "/payments", json={"parcel_id": "abc", "amount": 10}, headers=auth_headers(ALICE)
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_requires_bearer(self, test_client):
        response = await test_client.post("/payments", json={"parcel_id": "abc", "amount": 10})
        assert response.status_code == 401


class TestListPayments:

    @pytest.mark.asyncio
    async def test_scoping(self, test_client, create_parcel, seed_user):
        await seed_user(ADMIN, "admin")
        for email in (ALICE, BOB):
            parcel_id = await create_parcel(email)
            await test_client.post(
                "/payments", json={"parcel_id": parcel_id, "amount": 25}, headers=auth_headers(email)
            )

        alice_view = await test_client.get(
            "/payments", params={"email": BOB}, headers=auth_headers(ALICE)
        )
        admin_all = await test_client.get("/payments", headers=auth_headers(ADMIN))
        admin_bob = await test_client.get(
            "/payments", params={"email": BOB}, headers=auth_headers(ADMIN)
        )

        assert [p["email"] for p in alice_view.json()] == [ALICE]
        assert len(admin_all.json()) == 2
        assert [p["email"] for p in admin_bob.json()] == [BOB]
