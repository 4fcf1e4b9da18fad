from __future__ import annotations

API = "/api/v1"


def _seed_contract_parties(seed):
    company = seed.company()
    user = seed.user(company)
    car = seed.car(company, price=25_000_000)
    customer = seed.customer(company)
    return company, user, car, customer


def test_requests_without_token_are_unauthorized(client):
    response = client.get(f"{API}/contracts")
    assert response.status_code == 401
    assert "message" in response.json()


def test_contract_lifecycle_over_http(client, seed):
    company, user, car, customer = _seed_contract_parties(seed)
    headers = seed.headers(user)

    created = client.post(
        f"{API}/contracts",
        json={
            "car_id": car.id,
            "customer_id": customer.id,
            "meetings": [{"date": "2026-05-01T10:00:00", "alarms": ["2026-04-30T10:00:00"]}],
        },
        headers=headers,
    )
    assert created.status_code == 201
    body = created.json()
    assert body["status"] == "carInspection"
    assert body["contract_price"] == 25_000_000
    assert body["customer"]["id"] == customer.id
    assert len(body["meetings"]) == 1
    assert len(body["meetings"][0]["alarms"]) == 1
    assert body["contract_documents"] == []
    assert client.get(f"{API}/cars/{car.id}", headers=headers).json()["status"] == "contractProceeding"

    updated = client.patch(
        f"{API}/contracts/{body['id']}",
        json={"status": "contract_successful", "contract_price": 20_000_000},
        headers=headers,
    )
    assert updated.status_code == 200
    assert updated.json()["status"] == "contractSuccessful"
    assert len(updated.json()["meetings"]) == 1
    assert client.get(f"{API}/cars/{car.id}", headers=headers).json()["status"] == "contractCompleted"

    deleted = client.delete(f"{API}/contracts/{body['id']}", headers=headers)
    assert deleted.status_code == 200
    assert deleted.json()["total_contract_count"] == 0
    assert deleted.json()["revenue_by_car_type"]["SUV"] == 0
    assert client.get(f"{API}/cars/{car.id}", headers=headers).json()["status"] == "possession"
    assert client.get(f"{API}/contracts/{body['id']}", headers=headers).status_code == 404


def test_non_owner_admin_gets_forbidden(client, seed):
    company, user, car, customer = _seed_contract_parties(seed)
    admin = seed.user(company, is_admin=True)
    created = client.post(
        f"{API}/contracts", json={"car_id": car.id, "customer_id": customer.id}, headers=seed.headers(user)
    ).json()

    response = client.patch(
        f"{API}/contracts/{created['id']}", json={"contract_price": 1}, headers=seed.headers(admin)
    )
    assert response.status_code == 403
    assert client.delete(f"{API}/contracts/{created['id']}", headers=seed.headers(admin)).status_code == 403


def test_other_tenant_sees_not_found(client, seed):
    company, user, car, customer = _seed_contract_parties(seed)
    created = client.post(
        f"{API}/contracts", json={"car_id": car.id, "customer_id": customer.id}, headers=seed.headers(user)
    ).json()
    stranger = seed.user(seed.company())

    assert client.get(f"{API}/contracts/{created['id']}", headers=seed.headers(stranger)).status_code == 404
    response = client.patch(
        f"{API}/contracts/{created['id']}", json={"status": "contractFailed"}, headers=seed.headers(stranger)
    )
    assert response.status_code == 404


def test_invalid_status_and_payload_are_bad_requests(client, seed):
    company, user, car, customer = _seed_contract_parties(seed)
    headers = seed.headers(user)
    created = client.post(
        f"{API}/contracts", json={"car_id": car.id, "customer_id": customer.id}, headers=headers
    ).json()

    response = client.patch(f"{API}/contracts/{created['id']}", json={"status": "teleported"}, headers=headers)
    assert response.status_code == 400

    response = client.post(f"{API}/contracts", json={"car_id": "abc"}, headers=headers)
    assert response.status_code == 400
    assert response.json()["errors"]


def test_board_and_option_endpoints(client, seed):
    company, user, car, customer = _seed_contract_parties(seed)
    headers = seed.headers(user)

    cars = client.get(f"{API}/contracts/cars", headers=headers).json()
    assert cars == [{"id": car.id, "data": f"{car.model}({car.car_number})"}]

    client.post(f"{API}/contracts", json={"car_id": car.id, "customer_id": customer.id}, headers=headers)
    board = client.get(f"{API}/contracts/board", headers=headers).json()
    assert set(board) == {
        "carInspection",
        "priceNegotiation",
        "contractDraft",
        "contractSuccessful",
        "contractFailed",
    }
    assert board["carInspection"]["total_item_count"] == 1
    assert client.get(f"{API}/contracts/cars", headers=headers).json() == []

    listing = client.get(f"{API}/contracts", params={"pageSize": 5}, headers=headers).json()
    assert listing["total_item_count"] == 1
    assert listing["total_pages"] == 1


def test_dashboard_endpoint(client, seed):
    company, user, car, customer = _seed_contract_parties(seed)
    headers = seed.headers(user)
    created = client.post(
        f"{API}/contracts", json={"car_id": car.id, "customer_id": customer.id}, headers=headers
    ).json()
    client.patch(f"{API}/contracts/{created['id']}", json={"status": "contractSuccessful"}, headers=headers)

    dashboard = client.get(f"{API}/dashboard", headers=headers).json()
    assert dashboard["monthly_sales"] == 25_000_000
    assert dashboard["completed_contracts_count"] == 1
    assert {"car_type": "SUV", "amount": 25_000_000} in dashboard["sales_by_car_type"]


def test_login_returns_working_tokens(client, seed):
    user = seed.user(seed.company())

    rejected = client.post(f"{API}/auth/login", json={"email": user.email, "password": "nope"})
    assert rejected.status_code == 401

    response = client.post(f"{API}/auth/login", json={"email": user.email, "password": seed.password})
    assert response.status_code == 200
    token = response.json()["access_token"]
    listing = client.get(f"{API}/contracts", headers={"Authorization": f"Bearer {token}"})
    assert listing.status_code == 200
