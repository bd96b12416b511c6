"""Tests for room CRUD endpoints."""

import pytest
from httpx import AsyncClient

from hoteldesk.models.booking import Booking
from hoteldesk.models.room import Room

pytestmark = pytest.mark.asyncio


class TestRooms:
    async def test_create_and_get(self, client: AsyncClient, auth_headers: dict):
        response = await client.post(
            "/api/rooms",
            json={"room_number": "305", "category": "Suite", "capacity": 4, "price_per_night": 3500},
            headers=auth_headers,
        )
        assert response.status_code == 201
        room = response.json()
        assert room["status"] == "Available"
        assert room["amenities"] == {}

        fetched = await client.get(f"/api/rooms/{room['id']}", headers=auth_headers)
        assert fetched.json()["room_number"] == "305"

    async def test_duplicate_number_is_409(self, client: AsyncClient, auth_headers: dict, test_room: Room):
        response = await client.post(
            "/api/rooms", json={"room_number": "101", "price_per_night": 900}, headers=auth_headers
        )
        assert response.status_code == 409

    async def test_invalid_status_is_400(self, client: AsyncClient, auth_headers: dict):
        response = await client.post(
            "/api/rooms",
            json={"room_number": "306", "price_per_night": 900, "status": "Haunted"},
            headers=auth_headers,
        )
        assert response.status_code == 400

    async def test_partial_update(self, client: AsyncClient, auth_headers: dict, test_room: Room):
        response = await client.put(
            f"/api/rooms/{test_room.id}", json={"status": "Maintenance"}, headers=auth_headers
        )
        assert response.status_code == 200
        assert response.json()["status"] == "Maintenance"
        assert response.json()["room_number"] == "101"

    async def test_list_includes_current_occupancy(
        self, client: AsyncClient, auth_headers: dict, checked_in_booking: Booking
    ):
        response = await client.get("/api/rooms", headers=auth_headers)
        [room] = response.json()
        assert room["current_occupancy"] == 2

    async def test_active_rooms(self, client: AsyncClient, auth_headers: dict, checked_in_booking: Booking):
        response = await client.get("/api/rooms/active", headers=auth_headers)
        [active] = response.json()
        assert active["booking_code"] == "BK-1001"
        assert active["customer_name"] == "Asha Rao"

    async def test_delete_free_room(self, client: AsyncClient, auth_headers: dict, test_room: Room):
        response = await client.delete(f"/api/rooms/{test_room.id}", headers=auth_headers)
        assert response.status_code == 200
        assert (await client.get(f"/api/rooms/{test_room.id}", headers=auth_headers)).status_code == 404

    async def test_delete_booked_room_is_409(
        self, client: AsyncClient, auth_headers: dict, checked_in_booking: Booking, test_room: Room
    ):
        response = await client.delete(f"/api/rooms/{test_room.id}", headers=auth_headers)
        assert response.status_code == 409
