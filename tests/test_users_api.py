from fastapi import status

from helpdesk.domain.models.enums import UserRole


class TestReadUsers:

    def test_list_requires_staff(self, client, customer_headers, manager_headers):
        assert client.get("/api/Users", headers=customer_headers).status_code == status.HTTP_403_FORBIDDEN
        response = client.get("/api/Users", headers=manager_headers)
        assert response.status_code == status.HTTP_200_OK
        assert len(response.json()) >= 1

    def test_me(self, client, customer, customer_headers):
        response = client.get("/api/Users/me", headers=customer_headers)
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["id"] == customer.id
        assert "password_hash" not in response.json()

    def test_client_reads_self_but_not_others(self, client, customer, other_customer, customer_headers):
        own = client.get(f"/api/Users/{customer.id}", headers=customer_headers)
        foreign = client.get(f"/api/Users/{other_customer.id}", headers=customer_headers)
        assert own.status_code == status.HTTP_200_OK
        assert foreign.status_code == status.HTTP_403_FORBIDDEN

    def test_missing_user(self, client, manager_headers):
        response = client.get("/api/Users/9999", headers=manager_headers)
        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestManageUsers:

    def test_admin_creates_manager(self, client, admin_headers):
        payload = {"name": "New Manager", "email": "nm@example.com", "password": "secret1", "role": "manager"}
        response = client.post("/api/Users", json=payload, headers=admin_headers)
        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["user"]["role"] == "Manager"

    def test_manager_cannot_create_users(self, client, manager_headers):
        payload = {"name": "X", "email": "x@example.com", "password": "secret1"}
        response = client.post("/api/Users", json=payload, headers=manager_headers)
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_invalid_role_rejected(self, client, admin_headers):
        payload = {"name": "X", "email": "x@example.com", "password": "secret1", "role": "Superuser"}
        response = client.post("/api/Users", json=payload, headers=admin_headers)
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_update_own_profile(self, client, customer, customer_headers):
        payload = {"name": "Ivan Updated", "email": "ivan.new@example.com", "phone": "+70000000001"}
        response = client.put(f"/api/Users/{customer.id}", json=payload, headers=customer_headers)
        assert response.status_code == status.HTTP_200_OK
        user = response.json()["user"]
        assert user["name"] == "Ivan Updated"
        assert user["email"] == "ivan.new@example.com"
        assert user["phone"] == "+70000000001"

    def test_update_to_taken_email(self, client, customer, other_customer, customer_headers):
        payload = {"name": "Ivan", "email": other_customer.email}
        response = client.put(f"/api/Users/{customer.id}", json=payload, headers=customer_headers)
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_cannot_update_other_client(self, client, other_customer, customer_headers):
        response = client.put(f"/api/Users/{other_customer.id}", json={"name": "Hacked"}, headers=customer_headers)
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_change_role(self, client, customer, admin_headers):
        response = client.put(f"/api/Users/{customer.id}/role", json={"role": "Manager"}, headers=admin_headers)
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["user"]["role"] == "Manager"

    def test_last_admin_cannot_be_demoted(self, client, admin, admin_headers):
        response = client.put(f"/api/Users/{admin.id}/role", json={"role": "User"}, headers=admin_headers)
        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestDeleteUsers:

    def test_delete_unreferenced_user(self, client, other_customer, admin_headers):
        response = client.delete(f"/api/Users/{other_customer.id}", headers=admin_headers)
        assert response.status_code == status.HTTP_200_OK
        assert client.get(f"/api/Users/{other_customer.id}", headers=admin_headers).status_code == 404

    def test_delete_user_with_orders_is_rejected(self, client, customer, new_order, admin_headers):
        new_order()
        response = client.delete(f"/api/Users/{customer.id}", headers=admin_headers)
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["success"] is False

    def test_only_admin_deletes(self, client, other_customer, manager_headers):
        response = client.delete(f"/api/Users/{other_customer.id}", headers=manager_headers)
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_last_admin_cannot_delete_self(self, client, admin, admin_headers):
        response = client.delete(f"/api/Users/{admin.id}", headers=admin_headers)
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert client.get(f"/api/Users/{admin.id}", headers=admin_headers).status_code == 200

    def test_admin_deleted_while_another_remains(self, client, make_user, admin_headers):
        second = make_user(UserRole.ADMIN)
        response = client.delete(f"/api/Users/{second.id}", headers=admin_headers)
        assert response.status_code == status.HTTP_200_OK

    def test_assignee_manager_is_kept(self, client, manager, new_order, manager_headers, admin_headers):
        order = new_order()
        client.put(f"/api/Orders/manager/assign/{order['id']}", headers=manager_headers)
        response = client.delete(f"/api/Users/{manager.id}", headers=admin_headers)
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_support_request_client_is_kept(self, client, other_customer, other_customer_headers, admin_headers):
        client.post(
            "/api/SupportRequests/create",
            json={"topic": "Hello", "message": "Question about prices"},
            headers=other_customer_headers,
        )
        response = client.delete(f"/api/Users/{other_customer.id}", headers=admin_headers)
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_service_request_client_is_kept(self, client, other_customer, other_customer_headers, admin_headers):
        client.post(
            "/api/ServiceRequests/create",
            json={"service_type": "Cleaning", "description": "Dust removal"},
            headers=other_customer_headers,
        )
        response = client.delete(f"/api/Users/{other_customer.id}", headers=admin_headers)
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_report_author_is_kept(self, client, manager, manager_headers, admin_headers):
        client.post("/api/Reports/create", json={"title": "Shift", "content": "Quiet day"}, headers=manager_headers)
        response = client.delete(f"/api/Users/{manager.id}", headers=admin_headers)
        assert response.status_code == status.HTTP_400_BAD_REQUEST
