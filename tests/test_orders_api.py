from datetime import datetime

from fastapi import status

from helpdesk.core.clock import now


def _invariant_holds(order: dict) -> bool:
    return (order["complete_date"] is not None) == (order["status"] == "Completed")


class TestClientOrders:

    def test_create_order_defaults(self, client, customer, customer_headers):
        payload = {"name": "Laptop Repair", "description": "Screen flickers", "cost": "1500.5"}
        response = client.post("/api/Orders/create", json=payload, headers=customer_headers)

        assert response.status_code == status.HTTP_201_CREATED
        body = response.json()
        assert body["success"] is True
        order = body["order"]
        assert order["status"] == "New"
        assert order["priority"] == "Medium"
        assert order["client_id"] == customer.id
        assert order["assigned_to_id"] is None
        assert order["complete_date"] is None
        assert order["cost"] == 1500.5

    def test_create_rejects_bad_input(self, client, customer_headers):
        blank = client.post("/api/Orders/create", json={"name": "  ", "description": "x"}, headers=customer_headers)
        long_name = client.post(
            "/api/Orders/create", json={"name": "x" * 251, "description": "x"}, headers=customer_headers
        )
        bad_priority = client.post(
            "/api/Orders/create",
            json={"name": "Repair", "description": "x", "priority": "Urgent"},
            headers=customer_headers,
        )
        negative = client.post(
            "/api/Orders/create", json={"name": "Repair", "description": "x", "cost": -1}, headers=customer_headers
        )
        for response in (blank, long_name, bad_priority, negative):
            assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_create_requires_auth(self, client):
        response = client.post("/api/Orders/create", json={"name": "Repair", "description": "x"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_my_orders_only_lists_own(self, client, new_order, other_customer_headers, customer_headers):
        new_order("First")
        new_order("Second")
        client.post("/api/Orders/create", json={"name": "Foreign", "description": "x"}, headers=other_customer_headers)

        response = client.get("/api/Orders/my", headers=customer_headers)
        assert response.status_code == status.HTTP_200_OK
        assert {o["name"] for o in response.json()} == {"First", "Second"}

    def test_client_cannot_read_foreign_order(self, client, new_order, other_customer_headers):
        order = new_order()
        response = client.get(f"/api/Orders/{order['id']}", headers=other_customer_headers)
        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert "Laptop Repair" not in response.text

    def test_owner_and_staff_read_order(self, client, new_order, customer_headers, manager_headers):
        order = new_order()
        assert client.get(f"/api/Orders/{order['id']}", headers=customer_headers).status_code == 200
        assert client.get(f"/api/Orders/{order['id']}", headers=manager_headers).status_code == 200

    def test_missing_order(self, client, customer_headers):
        response = client.get("/api/Orders/9999", headers=customer_headers)
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_client_cannot_use_manager_endpoints(self, client, new_order, customer_headers):
        order = new_order()
        assert client.get("/api/Orders", headers=customer_headers).status_code == 403
        assert client.get("/api/Orders/manager", headers=customer_headers).status_code == 403
        assert client.put(f"/api/Orders/manager/assign/{order['id']}", headers=customer_headers).status_code == 403


class TestAssignment:

    def test_assign_new_order_starts_processing(self, client, new_order, manager, manager_headers):
        order = new_order()
        response = client.put(f"/api/Orders/manager/assign/{order['id']}", headers=manager_headers)
        assert response.status_code == status.HTTP_200_OK
        assigned = response.json()["order"]
        assert assigned["status"] == "Processing"
        assert assigned["assigned_to_id"] == manager.id
        assert assigned["manager_name"] == manager.name

    def test_manager_list_mine(self, client, new_order, manager_headers, other_manager_headers):
        first = new_order("Mine")
        second = new_order("Theirs")
        client.put(f"/api/Orders/manager/assign/{first['id']}", headers=manager_headers)
        client.put(f"/api/Orders/manager/assign/{second['id']}", headers=other_manager_headers)

        everything = client.get("/api/Orders/manager", headers=manager_headers).json()
        mine = client.get("/api/Orders/manager", params={"mine": "true"}, headers=manager_headers).json()
        assert len(everything) == 2
        assert [o["name"] for o in mine] == ["Mine"]

    def test_unassign_own_order(self, client, new_order, manager_headers):
        order = new_order()
        client.put(f"/api/Orders/manager/assign/{order['id']}", headers=manager_headers)
        response = client.put(f"/api/Orders/manager/unassign/{order['id']}", headers=manager_headers)
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["order"]["status"] == "New"
        assert response.json()["order"]["assigned_to_id"] is None

    def test_unassign_foreign_order_rejected(self, client, new_order, manager_headers, other_manager_headers):
        order = new_order()
        client.put(f"/api/Orders/manager/assign/{order['id']}", headers=other_manager_headers)
        response = client.put(f"/api/Orders/manager/unassign/{order['id']}", headers=manager_headers)
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_unassign_completed_order_rejected(self, client, new_order, manager_headers):
        order = new_order()
        client.put(f"/api/Orders/manager/assign/{order['id']}", headers=manager_headers)
        client.put(f"/api/Orders/manager/{order['id']}", json={"status": "Completed"}, headers=manager_headers)
        response = client.put(f"/api/Orders/manager/unassign/{order['id']}", headers=manager_headers)
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_admin_unassign_processing(self, client, new_order, manager_headers, admin_headers):
        order = new_order()
        client.put(f"/api/Orders/manager/assign/{order['id']}", headers=manager_headers)
        response = client.put(f"/api/Orders/admin/unassign/{order['id']}", headers=admin_headers)
        result = response.json()["order"]
        assert response.status_code == status.HTTP_200_OK
        assert result["assigned_to_id"] is None
        assert result["status"] == "New"

    def test_admin_unassign_completed_keeps_status(self, client, new_order, manager_headers, admin_headers):
        order = new_order()
        client.put(f"/api/Orders/manager/assign/{order['id']}", headers=manager_headers)
        client.put(f"/api/Orders/manager/{order['id']}", json={"status": "Completed"}, headers=manager_headers)
        result = client.put(f"/api/Orders/admin/unassign/{order['id']}", headers=admin_headers).json()["order"]
        assert result["assigned_to_id"] is None
        assert result["status"] == "Completed"
        assert _invariant_holds(result)

    def test_admin_unassign_requires_admin(self, client, new_order, manager_headers):
        order = new_order()
        response = client.put(f"/api/Orders/admin/unassign/{order['id']}", headers=manager_headers)
        assert response.status_code == status.HTTP_403_FORBIDDEN


class TestOrderUpdate:

    def test_laptop_repair_scenario(self, client, new_order, manager_headers):
        order = new_order("Laptop Repair")
        assert order["status"] == "New"

        assigned = client.put(f"/api/Orders/manager/assign/{order['id']}", headers=manager_headers).json()["order"]
        assert assigned["status"] == "Processing"

        started = now()
        response = client.put(f"/api/Orders/manager/{order['id']}", json={"status": "Completed"}, headers=manager_headers)
        assert response.status_code == status.HTTP_200_OK
        completed = response.json()["order"]
        assert completed["status"] == "Completed"
        assert datetime.fromisoformat(completed["complete_date"]) >= started

    def test_invariant_across_status_changes(self, client, new_order, manager_headers):
        order = new_order()
        client.put(f"/api/Orders/manager/assign/{order['id']}", headers=manager_headers)
        for value in ["completed", "Processing", "COMPLETED", "Cancelled", "New"]:
            response = client.put(f"/api/Orders/manager/{order['id']}", json={"status": value}, headers=manager_headers)
            assert response.status_code == status.HTTP_200_OK
            assert _invariant_holds(response.json()["order"])

    def test_invalid_status_rejected_without_changes(self, client, new_order, manager_headers, customer_headers):
        order = new_order()
        client.put(f"/api/Orders/manager/assign/{order['id']}", headers=manager_headers)
        response = client.put(
            f"/api/Orders/manager/{order['id']}",
            json={"name": "Renamed", "status": "Archived"},
            headers=manager_headers,
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        current = client.get(f"/api/Orders/{order['id']}", headers=customer_headers).json()
        assert current["name"] == "Laptop Repair"

    def test_empty_status_rejected(self, client, new_order, admin_headers):
        order = new_order()
        response = client.put(f"/api/Orders/manager/{order['id']}", json={"status": ""}, headers=admin_headers)
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_only_assignee_or_admin_updates(self, client, new_order, manager_headers, other_manager_headers, admin_headers):
        order = new_order()
        client.put(f"/api/Orders/manager/assign/{order['id']}", headers=manager_headers)

        foreign = client.put(f"/api/Orders/manager/{order['id']}", json={"priority": "High"}, headers=other_manager_headers)
        by_admin = client.put(f"/api/Orders/manager/{order['id']}", json={"priority": "High"}, headers=admin_headers)
        assert foreign.status_code == status.HTTP_403_FORBIDDEN
        assert by_admin.status_code == status.HTTP_200_OK
        assert by_admin.json()["order"]["priority"] == "High"

    def test_reassign_and_clear_assignee(self, client, new_order, customer, other_manager, admin_headers):
        order = new_order()
        moved = client.put(
            f"/api/Orders/manager/{order['id']}", json={"assigned_to_id": other_manager.id}, headers=admin_headers
        )
        assert moved.json()["order"]["assigned_to_id"] == other_manager.id

        to_client = client.put(
            f"/api/Orders/manager/{order['id']}", json={"assigned_to_id": customer.id}, headers=admin_headers
        )
        assert to_client.status_code == status.HTTP_400_BAD_REQUEST

        cleared = client.put(f"/api/Orders/manager/{order['id']}", json={"assigned_to_id": 0}, headers=admin_headers)
        assert cleared.json()["order"]["assigned_to_id"] is None

    def test_update_cost_and_text(self, client, new_order, admin_headers):
        order = new_order()
        response = client.put(
            f"/api/Orders/manager/{order['id']}",
            json={"cost": 99.999, "description": "Replaced the display"},
            headers=admin_headers,
        )
        updated = response.json()["order"]
        assert updated["cost"] == 100.0
        assert updated["description"] == "Replaced the display"


class TestManagerViews:

    def test_stats(self, client, new_order, manager_headers):
        first = new_order(priority="High")
        new_order()
        client.put(f"/api/Orders/manager/assign/{first['id']}", headers=manager_headers)

        response = client.get("/api/Orders/manager/stats", headers=manager_headers)
        assert response.status_code == status.HTTP_200_OK
        stats = response.json()
        assert stats["total_orders"] == 2
        assert stats["new_orders"] == 1
        assert stats["processing_orders"] == 1
        assert stats["my_orders"] == 1
        assert stats["high_priority_orders"] == 1
        assert stats["today_orders"] == 2

    def test_detail(self, client, new_order, customer, customer_headers, manager_headers):
        order = new_order()
        client.post(
            "/api/SupportRequests/create",
            json={"topic": "When?", "message": "Any news?", "related_order_id": order["id"]},
            headers=customer_headers,
        )
        response = client.get(f"/api/Orders/manager/detail/{order['id']}", headers=manager_headers)
        assert response.status_code == status.HTTP_200_OK
        detail = response.json()
        assert detail["order"]["id"] == order["id"]
        assert detail["client"]["email"] == customer.email
        assert detail["manager"] is None
        assert detail["statistics"]["support_request_count"] == 1
        assert detail["statistics"]["active_support_requests"] == 1
        assert detail["statistics"]["total_time_in_days"] == 0


class TestDeleteOrder:

    def test_admin_deletes_unreferenced_order(self, client, new_order, admin_headers):
        order = new_order()
        response = client.delete(f"/api/Orders/{order['id']}", headers=admin_headers)
        assert response.status_code == status.HTTP_200_OK
        assert client.get(f"/api/Orders/{order['id']}", headers=admin_headers).status_code == 404

    def test_referenced_order_is_kept(self, client, new_order, customer_headers, admin_headers):
        order = new_order()
        client.post(
            "/api/ServiceRequests/create",
            json={"service_type": "Diagnostics", "description": "Full check", "order_id": order["id"]},
            headers=customer_headers,
        )
        response = client.delete(f"/api/Orders/{order['id']}", headers=admin_headers)
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_manager_cannot_delete(self, client, new_order, manager_headers):
        order = new_order()
        response = client.delete(f"/api/Orders/{order['id']}", headers=manager_headers)
        assert response.status_code == status.HTTP_403_FORBIDDEN
