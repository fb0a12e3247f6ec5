import pytest
from fastapi import status


@pytest.fixture
def new_service_request(client, customer_headers):
    def _create(**extra):
        payload = {"service_type": "Diagnostics", "description": "Full hardware check", **extra}
        response = client.post("/api/ServiceRequests/create", json=payload, headers=customer_headers)
        assert response.status_code == 201, response.text
        return response.json()["service_request"]

    return _create


class TestServiceRequests:

    def test_create_and_list_own(self, client, new_service_request, new_order, customer_headers):
        order = new_order()
        created = new_service_request(order_id=order["id"])
        assert created["status"] == "New"
        assert created["order_id"] == order["id"]
        assert created["cost"] is None

        mine = client.get("/api/ServiceRequests/my", headers=customer_headers).json()
        assert [r["id"] for r in mine] == [created["id"]]

    def test_cannot_attach_to_foreign_order(self, client, new_order, other_customer_headers):
        order = new_order()
        response = client.post(
            "/api/ServiceRequests/create",
            json={"service_type": "Cleaning", "description": "Dust", "order_id": order["id"]},
            headers=other_customer_headers,
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_read_access(self, client, new_service_request, other_customer_headers, manager_headers):
        created = new_service_request()
        assert client.get(f"/api/ServiceRequests/{created['id']}", headers=other_customer_headers).status_code == 403
        assert client.get(f"/api/ServiceRequests/{created['id']}", headers=manager_headers).status_code == 200
        assert client.get("/api/ServiceRequests", headers=other_customer_headers).status_code == 403

    def test_assign_then_price_and_complete(self, client, new_service_request, manager, manager_headers):
        created = new_service_request()
        assigned = client.put(f"/api/ServiceRequests/manager/assign/{created['id']}", headers=manager_headers)
        assert assigned.json()["service_request"]["status"] == "Processing"
        assert assigned.json()["service_request"]["assigned_to_id"] == manager.id

        response = client.put(
            f"/api/ServiceRequests/manager/{created['id']}",
            json={"status": "completed", "cost": 2500},
            headers=manager_headers,
        )
        updated = response.json()["service_request"]
        assert response.status_code == status.HTTP_200_OK
        assert updated["status"] == "Completed"
        assert updated["cost"] == 2500.0

    def test_update_rules(self, client, new_service_request, manager_headers, other_manager_headers):
        created = new_service_request()
        client.put(f"/api/ServiceRequests/manager/assign/{created['id']}", headers=manager_headers)

        foreign = client.put(
            f"/api/ServiceRequests/manager/{created['id']}", json={"cost": 10}, headers=other_manager_headers
        )
        invalid = client.put(
            f"/api/ServiceRequests/manager/{created['id']}", json={"status": "Paused"}, headers=manager_headers
        )
        empty = client.put(f"/api/ServiceRequests/manager/{created['id']}", json={}, headers=manager_headers)
        blank_status = client.put(
            f"/api/ServiceRequests/manager/{created['id']}", json={"status": ""}, headers=manager_headers
        )
        assert foreign.status_code == status.HTTP_403_FORBIDDEN
        assert invalid.status_code == status.HTTP_400_BAD_REQUEST
        assert empty.status_code == status.HTTP_400_BAD_REQUEST
        assert blank_status.status_code == status.HTTP_400_BAD_REQUEST
