import uuid

from conftest import API


def test_create_then_list_round_trip(client, customer_headers):
    res = client.post(
        f"{API}/pets",
        json={
            "name": " Biscuit ",
            "species": "dog",
            "breed": "Shih Tzu",
            "age": 3,
            "weight": 6.5,
            "notes": "   ",
        },
        headers=customer_headers,
    )
    assert res.status_code == 201, res.text
    created = res.json()
    assert created["name"] == "Biscuit"
    assert created["notes"] is None
    assert created["weight"] == 6.5

    listed = client.get(f"{API}/pets", headers=customer_headers).json()
    assert listed == [created]


def test_list_is_newest_first_and_owner_scoped(client, customer_headers, register, make_pet):
    first = make_pet(customer_headers, name="Biscuit")
    second = make_pet(customer_headers, name="Mochi", species="cat")
    other = register(email="sam@example.com", full_name="Sam Lee")
    make_pet(other, name="Clover", species="rabbit")

    listed = client.get(f"{API}/pets", headers=customer_headers).json()
    assert [p["id"] for p in listed] == [second, first]

    assert client.get(f"{API}/pets/{first}", headers=other).status_code == 404


def test_update_and_delete(client, customer_headers, make_pet):
    pet_id = make_pet(customer_headers)

    res = client.put(
        f"{API}/pets/{pet_id}",
        json={"name": "Biscuit", "species": "dog", "breed": " Poodle ", "age": 4},
        headers=customer_headers,
    )
    assert res.status_code == 200
    assert res.json()["breed"] == "Poodle"
    assert res.json()["age"] == 4

    assert client.delete(f"{API}/pets/{pet_id}", headers=customer_headers).status_code == 204
    assert client.get(f"{API}/pets/{pet_id}", headers=customer_headers).status_code == 404
    assert client.delete(f"{API}/pets/{uuid.uuid4()}", headers=customer_headers).status_code == 404


def test_pet_validation(client, customer_headers):
    res = client.post(f"{API}/pets", json={"name": "Rex", "species": "dragon"}, headers=customer_headers)
    assert res.status_code == 400

    res = client.post(f"{API}/pets", json={"name": "  ", "species": "dog"}, headers=customer_headers)
    assert res.status_code == 400

    res = client.post(f"{API}/pets", json={"name": "Rex", "species": "dog", "age": -1}, headers=customer_headers)
    assert res.status_code == 422


def test_pet_with_appointments_cannot_be_deleted(client, customer_headers, make_pet, make_service, book):
    pet_id = make_pet(customer_headers)
    book(customer_headers, pet_id, make_service())

    res = client.delete(f"{API}/pets/{pet_id}", headers=customer_headers)
    assert res.status_code == 409
    assert client.get(f"{API}/pets/{pet_id}", headers=customer_headers).status_code == 200
