from datetime import date, timedelta

from conftest import API


def test_customer_dashboard_starts_empty(client, customer_headers):
    res = client.get(f"{API}/dashboard", headers=customer_headers)
    assert res.status_code == 200
    body = res.json()
    assert body["pet_count"] == 0
    assert body["upcoming_appointments"] == 0
    assert body["loyalty_points"] == 0
    assert body["total_spent"] == 0.0
    assert body["recent_appointments"] == []
    assert body["loyalty_card_number"].startswith("PG-")


def test_customer_dashboard_shows_dated_upcoming(
    client, customer_headers, make_pet, make_service, book, insert_appointment
):
    pet_id = make_pet(customer_headers)
    service_id = make_service()
    today = date.today()

    insert_appointment(customer_headers, pet_id, service_id, today - timedelta(days=3))
    open_days = [d for d in (today + timedelta(days=n) for n in range(1, 9)) if d.weekday() != 6][:6]
    for day in (open_days[5], open_days[1], open_days[3], open_days[0], open_days[4], open_days[2]):
        assert book(customer_headers, pet_id, service_id, appointment_date=day.isoformat()).status_code == 201

    body = client.get(f"{API}/dashboard", headers=customer_headers).json()
    assert body["pet_count"] == 1
    assert body["upcoming_appointments"] == 5
    dates = [a["appointment_date"] for a in body["recent_appointments"]]
    assert dates == [d.isoformat() for d in open_days[:5]]


def test_completion_records_history_and_loyalty(
    client, customer_headers, admin_headers, make_pet, make_service, book
):
    appointment = book(customer_headers, make_pet(customer_headers), make_service()).json()
    url = f"{API}/admin/appointments/{appointment['id']}"

    client.patch(url, json={"status": "confirmed", "total_price": 500, "discount_applied": 50}, headers=admin_headers)
    client.patch(url, json={"status": "in-progress", "total_price": 500, "discount_applied": 50}, headers=admin_headers)
    res = client.patch(url, json={"status": "completed", "total_price": 500, "discount_applied": 50}, headers=admin_headers)
    assert res.status_code == 200

    # Re-saving a completed appointment must not credit points twice.
    client.patch(url, json={"status": "completed", "total_price": 500, "discount_applied": 50}, headers=admin_headers)

    body = client.get(f"{API}/dashboard", headers=customer_headers).json()
    assert body["total_spent"] == 450.0
    assert body["loyalty_points"] == 45
    assert client.get(f"{API}/profile", headers=customer_headers).json()["loyalty_points"] == 45

    past = client.get(f"{API}/appointments", headers=customer_headers).json()["past"]
    assert [a["id"] for a in past] == [appointment["id"]]


def test_admin_stats(client, customer_headers, admin_headers, make_pet, make_service, book):
    service_id = make_service()
    make_service(name="Retired", is_active=False)
    pet_id = make_pet(customer_headers)
    book(customer_headers, pet_id, service_id)
    book(customer_headers, pet_id, service_id)

    res = client.get(f"{API}/admin/stats", headers=admin_headers)
    assert res.status_code == 200
    # Admin accounts carry a profile too.
    assert res.json() == {
        "customer_count": 2,
        "pet_count": 1,
        "appointment_count": 2,
        "service_count": 2,
    }
