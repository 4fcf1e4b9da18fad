from __future__ import annotations

API = "/api/v1"


def _car_payload(**overrides):
    payload = {
        "car_number": "12가3456",
        "manufacturer": "Kia",
        "model": "Sorento",
        "type": "SUV",
        "manufacturing_year": 2021,
        "mileage": 30_000,
        "price": 25_000_000,
    }
    payload.update(overrides)
    return payload


def test_create_car_accepts_largest_price(client, seed):
    user = seed.user(seed.company())

    response = client.post(f"{API}/cars", json=_car_payload(price=2**63 - 1), headers=seed.headers(user))

    assert response.status_code == 201
    assert response.json()["price"] == 2**63 - 1


def test_oversized_car_values_are_bad_requests(client, seed):
    user = seed.user(seed.company())
    headers = seed.headers(user)

    response = client.post(f"{API}/cars", json=_car_payload(price=2**63), headers=headers)
    assert response.status_code == 400
    assert response.json()["errors"]

    response = client.post(f"{API}/cars", json=_car_payload(mileage=2**31), headers=headers)
    assert response.status_code == 400

    car = seed.car(user.company)
    response = client.patch(f"{API}/cars/{car.id}", json={"accident_count": 2**31}, headers=headers)
    assert response.status_code == 400


def test_oversized_contract_price_is_bad_request(client, seed):
    company = seed.company()
    user = seed.user(company)
    car = seed.car(company)
    customer = seed.customer(company)
    headers = seed.headers(user)

    response = client.post(
        f"{API}/contracts",
        json={"car_id": car.id, "customer_id": customer.id, "contract_price": 2**63},
        headers=headers,
    )
    assert response.status_code == 400

    created = client.post(
        f"{API}/contracts", json={"car_id": car.id, "customer_id": customer.id}, headers=headers
    ).json()
    response = client.patch(f"{API}/contracts/{created['id']}", json={"contract_price": 2**63}, headers=headers)
    assert response.status_code == 400
