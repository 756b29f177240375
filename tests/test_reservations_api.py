"""
Tests de la API HTTP de reservas (FastAPI + httpx.AsyncClient).

Verifica el mapeo de errores de dominio a códigos HTTP, la identidad del
llamador vía X-User-Email y el flujo completo de una reserva.
"""

import httpx
import pytest
from conftest import (
    ACCOMMODATION_ID,
    GUEST_EMAIL,
    HOST_EMAIL,
    OTHER_GUEST_EMAIL,
    OTHER_HOST_EMAIL,
)

from stayhub.api.dependencies import get_bundle
from stayhub.infrastructure.locks import InProcessAccommodationLocks
from stayhub.main import app

GUEST = {"X-User-Email": GUEST_EMAIL}
OTHER_GUEST = {"X-User-Email": OTHER_GUEST_EMAIL}
HOST = {"X-User-Email": HOST_EMAIL}
OTHER_HOST = {"X-User-Email": OTHER_HOST_EMAIL}


def _payload(check_in="2025-06-01T00:00:00", check_out="2025-06-04T00:00:00", guests=2):
    return {
        "accommodation_id": ACCOMMODATION_ID,
        "check_in": check_in,
        "check_out": check_out,
        "guest_count": guests,
    }


async def _book(client, headers=GUEST, **kwargs):
    response = await client.post("/api/v1/reservations", json=_payload(**kwargs), headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


class TestCreateReservationEndpoint:
    @pytest.mark.asyncio
    async def test_create_reservation_success(self, api_client):
        response = await api_client.post("/api/v1/reservations", json=_payload(), headers=GUEST)

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "PENDING"
        assert body["total_price"] == "150.00"
        assert body["guest_id"] == 2
        assert body["deleted"] is False

    @pytest.mark.asyncio
    async def test_missing_identity_header(self, api_client):
        response = await api_client.post("/api/v1/reservations", json=_payload())
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_unknown_user(self, api_client):
        response = await api_client.post(
            "/api/v1/reservations", json=_payload(), headers={"X-User-Email": "ghost@stayhub.dev"}
        )
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_host_cannot_book(self, api_client):
        response = await api_client.post("/api/v1/reservations", json=_payload(), headers=HOST)
        assert response.status_code == 403
        assert response.json()["code"] == "AUTHORIZATION_ERROR"

    @pytest.mark.asyncio
    async def test_overlap_is_409(self, api_client):
        await _book(api_client)
        response = await api_client.post(
            "/api/v1/reservations",
            json=_payload("2025-06-03T00:00:00", "2025-06-05T00:00:00"),
            headers=OTHER_GUEST,
        )
        assert response.status_code == 409
        assert response.json()["code"] == "DATE_CONFLICT"

    @pytest.mark.asyncio
    async def test_capacity_exceeded_is_422(self, api_client):
        response = await api_client.post("/api/v1/reservations", json=_payload(guests=5), headers=GUEST)
        assert response.status_code == 422
        assert response.json()["code"] == "CAPACITY_EXCEEDED"

    @pytest.mark.asyncio
    async def test_invalid_range_is_400(self, api_client):
        response = await api_client.post(
            "/api/v1/reservations",
            json=_payload("2025-06-04T00:00:00", "2025-06-01T00:00:00"),
            headers=GUEST,
        )
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_RANGE"

    @pytest.mark.asyncio
    async def test_zero_guests_is_400(self, api_client):
        response = await api_client.post("/api/v1/reservations", json=_payload(guests=0), headers=GUEST)
        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_unknown_accommodation_is_404(self, api_client):
        payload = _payload()
        payload["accommodation_id"] = 999
        response = await api_client.post("/api/v1/reservations", json=payload, headers=GUEST)
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_deleted_accommodation_is_409(self, api_client, store):
        store.soft_delete_accommodation(ACCOMMODATION_ID)
        response = await api_client.post("/api/v1/reservations", json=_payload(), headers=GUEST)
        assert response.status_code == 409
        assert response.json()["code"] == "ACCOMMODATION_UNAVAILABLE"

    @pytest.mark.asyncio
    async def test_extra_fields_are_rejected(self, api_client):
        payload = _payload()
        payload["total_price"] = "1.00"
        response = await api_client.post("/api/v1/reservations", json=payload, headers=GUEST)
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_offset_dates_keep_local_wall_time(self, api_client):
        body = await _book(
            api_client,
            check_in="2025-06-01T00:00:00+02:00",
            check_out="2025-06-04T00:00:00+02:00",
        )
        assert body["check_in"] == "2025-06-01T00:00:00"
        assert body["check_out"] == "2025-06-04T00:00:00"
        assert body["total_price"] == "150.00"

    @pytest.mark.asyncio
    async def test_offset_does_not_shift_nights(self, api_client):
        # 20:00-05:00 cae en otro día en UTC; se cobran 3 noches locales
        body = await _book(
            api_client,
            check_in="2025-06-01T15:00:00-05:00",
            check_out="2025-06-04T20:00:00-05:00",
        )
        assert body["check_in"] == "2025-06-01T15:00:00"
        assert body["check_out"] == "2025-06-04T20:00:00"
        assert body["total_price"] == "150.00"

    @pytest.mark.asyncio
    async def test_availability_preview_uses_local_dates(self, api_client):
        response = await api_client.get(
            f"/api/v1/accommodations/{ACCOMMODATION_ID}/availability",
            params={"check_in": "2025-06-01T15:00:00-05:00", "check_out": "2025-06-04T20:00:00-05:00"},
        )
        assert response.status_code == 200
        assert response.json()["nights"] == 3
        assert response.json()["total_price"] == "150.00"

    @pytest.mark.asyncio
    async def test_lock_timeout_is_503_with_retry_after(self, api_client, bundle):
        bundle["locks"] = InProcessAccommodationLocks(timeout_seconds=0.05)

        async with bundle["locks"].hold(ACCOMMODATION_ID):
            response = await api_client.post("/api/v1/reservations", json=_payload(), headers=GUEST)

        assert response.status_code == 503
        assert response.headers["Retry-After"] == "1"
        assert response.json()["code"] == "BOOKING_TIMEOUT"


class TestStatusEndpoints:
    @pytest.mark.asyncio
    async def test_host_confirms(self, api_client):
        created = await _book(api_client)
        response = await api_client.patch(
            f"/api/v1/reservations/{created['id']}/status", json={"status": "CONFIRMED"}, headers=HOST
        )
        assert response.status_code == 200
        assert response.json()["status"] == "CONFIRMED"

    @pytest.mark.asyncio
    async def test_guest_cannot_confirm(self, api_client):
        created = await _book(api_client)
        response = await api_client.patch(
            f"/api/v1/reservations/{created['id']}/status", json={"status": "CONFIRMED"}, headers=GUEST
        )
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_unknown_status_value(self, api_client):
        created = await _book(api_client)
        response = await api_client.patch(
            f"/api/v1/reservations/{created['id']}/status", json={"status": "ARCHIVED"}, headers=HOST
        )
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_cancel_twice(self, api_client):
        created = await _book(api_client)

        first = await api_client.delete(f"/api/v1/reservations/{created['id']}", headers=GUEST)
        assert first.status_code == 200
        assert first.json()["status"] == "CANCELLED"
        assert first.json()["deleted"] is True

        second = await api_client.delete(f"/api/v1/reservations/{created['id']}", headers=GUEST)
        assert second.status_code == 409
        assert second.json()["code"] == "ILLEGAL_TRANSITION"

    @pytest.mark.asyncio
    async def test_cancel_unknown_reservation(self, api_client):
        response = await api_client.delete("/api/v1/reservations/999", headers=GUEST)
        assert response.status_code == 404


class TestReadEndpoints:
    @pytest.mark.asyncio
    async def test_get_reservation_access(self, api_client):
        created = await _book(api_client)
        url = f"/api/v1/reservations/{created['id']}"

        assert (await api_client.get(url, headers=GUEST)).status_code == 200
        assert (await api_client.get(url, headers=HOST)).status_code == 200
        assert (await api_client.get(url, headers=OTHER_GUEST)).status_code == 403
        assert (await api_client.get("/api/v1/reservations/999", headers=GUEST)).status_code == 404

    @pytest.mark.asyncio
    async def test_list_my_reservations(self, api_client):
        later = await _book(api_client, check_in="2025-07-10T00:00:00", check_out="2025-07-12T00:00:00")
        earlier = await _book(api_client, check_in="2025-07-01T00:00:00", check_out="2025-07-03T00:00:00")

        response = await api_client.get("/api/v1/reservations", headers=GUEST)
        assert [r["id"] for r in response.json()] == [earlier["id"], later["id"]]

        empty = await api_client.get("/api/v1/reservations", params={"status": "CONFIRMED"}, headers=GUEST)
        assert empty.json() == []
        assert (await api_client.get("/api/v1/reservations", headers=OTHER_GUEST)).json() == []

    @pytest.mark.asyncio
    async def test_accommodation_reservations_for_host_only(self, api_client):
        created = await _book(api_client)
        url = f"/api/v1/accommodations/{ACCOMMODATION_ID}/reservations"

        response = await api_client.get(url, headers=HOST)
        assert response.status_code == 200
        assert [r["id"] for r in response.json()] == [created["id"]]
        assert (await api_client.get(url, headers=OTHER_HOST)).status_code == 403
        assert (await api_client.get(url, headers=GUEST)).status_code == 403

    @pytest.mark.asyncio
    async def test_availability_preview(self, api_client):
        url = f"/api/v1/accommodations/{ACCOMMODATION_ID}/availability"
        params = {"check_in": "2025-06-01T00:00:00", "check_out": "2025-06-04T00:00:00"}

        free = await api_client.get(url, params=params)
        assert free.status_code == 200
        assert free.json()["available"] is True
        assert free.json()["nights"] == 3
        assert free.json()["total_price"] == "150.00"

        await _book(api_client)
        taken = await api_client.get(url, params=params)
        assert taken.json()["available"] is False

        missing = await api_client.get("/api/v1/accommodations/999/availability", params=params)
        assert missing.status_code == 404


class TestEndToEndOverHTTP:
    @pytest.mark.asyncio
    async def test_full_lifecycle(self, api_client, sink, dispatcher):
        first = await _book(api_client)
        assert first["total_price"] == "150.00"

        confirm = await api_client.patch(
            f"/api/v1/reservations/{first['id']}/status", json={"status": "CONFIRMED"}, headers=HOST
        )
        assert confirm.json()["status"] == "CONFIRMED"

        clash = await api_client.post(
            "/api/v1/reservations",
            json=_payload("2025-06-03T00:00:00", "2025-06-05T00:00:00"),
            headers=OTHER_GUEST,
        )
        assert clash.status_code == 409

        cancel = await api_client.delete(f"/api/v1/reservations/{first['id']}", headers=HOST)
        assert cancel.status_code == 200

        retry = await api_client.post(
            "/api/v1/reservations",
            json=_payload("2025-06-03T00:00:00", "2025-06-05T00:00:00"),
            headers=OTHER_GUEST,
        )
        assert retry.status_code == 201
        assert retry.json()["total_price"] == "100.00"

        await dispatcher.drain()
        assert len(sink.delivered) == 8


class TestWorkerEndpoint:
    @pytest.mark.asyncio
    async def test_run_check_in_reminders(self, api_client, sink, dispatcher):
        await _book(api_client)
        await dispatcher.drain()
        sink.delivered.clear()

        response = await api_client.post(
            "/api/v1/workers/reminders/check-in", params={"today": "2025-05-31"}
        )
        assert response.status_code == 200
        assert response.json() == {"reminded": 1}
        await dispatcher.drain()
        assert len(sink.delivered) == 2


class TestUnhandledErrors:
    @pytest.mark.asyncio
    async def test_unexpected_error_returns_error_id(self, bundle, store):
        async def broken(accommodation_id):
            raise RuntimeError("connection reset")

        store.find_accommodation = broken
        app.dependency_overrides[get_bundle] = lambda: bundle
        transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
        try:
            async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
                response = await client.post("/api/v1/reservations", json=_payload(), headers=GUEST)
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 500
        body = response.json()
        assert body["detail"] == "Internal server error"
        assert "error_id" in body
        assert "connection reset" not in response.text
