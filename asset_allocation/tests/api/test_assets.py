"""Tests for the /assets endpoints and the allocation sub-resource."""

import pytest

from asset_allocation.tests.utils.payloads import asset_fields, centre_fields

ASSETS = "/api/v1/assets"


@pytest.fixture
def centre_id(client):
    centre = client.post("/api/v1/centres", json=centre_fields(name="C1")).json()
    for code in ("L234", "L235"):
        client.post(f"/api/v1/centres/{centre['id']}/locations", json={"code": code})
    return centre["id"]


def _create_asset(client, **overrides):
    response = client.post(ASSETS, json=asset_fields(**overrides))
    assert response.status_code == 201, response.text
    return response.json()


class TestAssetEndpoints:
    def test_create_and_get(self, client):
        asset = _create_asset(client)

        response = client.get(f"{ASSETS}/{asset['id']}")

        assert response.status_code == 200
        assert response.json()["dimensions"] == {
            "length": 1.2,
            "breadth": 0.7,
            "depth": 0.05,
        }

    def test_non_positive_dimension_is_422(self, client):
        response = client.post(ASSETS, json=asset_fields(length=0))

        assert response.status_code == 422
        assert response.json()["violations"][0]["field"] == "length"

    def test_non_numeric_dimension_is_422(self, client):
        response = client.post(ASSETS, json=asset_fields(depth="thin"))

        assert response.status_code == 422

    def test_delete_then_404(self, client):
        asset = _create_asset(client)

        assert client.delete(f"{ASSETS}/{asset['id']}").status_code == 200
        assert client.get(f"{ASSETS}/{asset['id']}").status_code == 404


class TestAllocationEndpoints:
    def test_allocate_and_read_state(self, client, centre_id):
        asset = _create_asset(client)
        url = f"{ASSETS}/{asset['id']}/allocation"

        allocated = client.put(url, json={"centre_id": centre_id, "location_code": "L234"})
        state = client.get(url).json()

        assert allocated.status_code == 200
        assert allocated.json()["location_code"] == "L234"
        assert state["asset_id"] == asset["id"]
        assert state["allocation"]["id"] == allocated.json()["id"]

    def test_second_allocation_is_409(self, client, centre_id):
        asset = _create_asset(client)
        url = f"{ASSETS}/{asset['id']}/allocation"
        client.put(url, json={"centre_id": centre_id, "location_code": "L234"})

        response = client.put(url, json={"centre_id": centre_id, "location_code": "L235"})

        assert response.status_code == 409

    def test_occupied_location_is_412_until_occupant_deactivated(self, client, centre_id):
        first = _create_asset(client, name="A")
        second = _create_asset(client, name="B")
        body = {"centre_id": centre_id, "location_code": "L234"}
        client.put(f"{ASSETS}/{first['id']}/allocation", json=body)

        blocked = client.put(f"{ASSETS}/{second['id']}/allocation", json=body)
        client.patch(f"{ASSETS}/{first['id']}", json={"active": False})
        allowed = client.put(f"{ASSETS}/{second['id']}/allocation", json=body)

        assert blocked.status_code == 412
        assert allowed.status_code == 200

    def test_missing_location_code_is_422(self, client, centre_id):
        asset = _create_asset(client)

        response = client.put(
            f"{ASSETS}/{asset['id']}/allocation", json={"centre_id": centre_id}
        )

        assert response.status_code == 422

    def test_deallocate(self, client, centre_id):
        asset = _create_asset(client)
        url = f"{ASSETS}/{asset['id']}/allocation"
        client.put(url, json={"centre_id": centre_id, "location_code": "L234"})

        removed = client.delete(url).json()
        again = client.delete(url).json()

        assert removed["allocation"]["status"] == "removed"
        assert again["allocation"] is None
        assert client.get(url).json()["allocation"] is None
