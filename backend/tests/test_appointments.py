import uuid

from datetime import date, timedelta

from conftest import API, open_day


def _admin_set(client, headers, appointment_id, **payload):
    return client.patch(f"{API}/admin/appointments/{appointment_id}", json=payload, headers=headers)


def test_full_groom_booking_is_pending_at_minimum_price(client, customer_headers, make_service, make_pet, book):
    service_id = make_service(name="Full Groom", price_min=400, price_max=600, duration_minutes=90)
    pet_id = make_pet(customer_headers, name="Biscuit")

    res = book(customer_headers, pet_id, service_id, notes="  nervous around dryers ")
    assert res.status_code == 201, res.text
    body = res.json()
    assert body["status"] == "pending"
    assert body["total_price"] == 400.0
    assert body["discount_applied"] is None
    assert body["start_time"] == "10:00"
    assert body["end_time"] == "11:30"
    assert body["pet_name"] == "Biscuit"
    assert body["service_name"] == "Full Groom"
    assert body["notes"] == "nervous around dryers"


def test_every_booking_starts_pending(client, customer_headers, make_service, make_pet, book, make_groomer):
    pet_id = make_pet(customer_headers)
    groomer_id = make_groomer()
    for price in (100, 250, 999):
        service_id = make_service(name=f"Service {price}", price_min=price, price_max=price + 50)
        body = book(customer_headers, pet_id, service_id, groomer_id=groomer_id, service_type="pick-up").json()
        assert body["status"] == "pending"
        assert body["total_price"] == float(price)
        assert body["groomer_name"] == "Ana Reyes"


def test_missing_fields_fail_before_store(client, customer_headers, make_service, make_pet, book):
    service_id = make_service()
    pet_id = make_pet(customer_headers)

    res = book(customer_headers, pet_id, service_id, start_time=None)
    assert res.status_code == 400
    assert res.json()["detail"] == "Please fill in all required fields"

    res = book(customer_headers, None, service_id)
    assert res.status_code == 400
    assert client.get(f"{API}/appointments", headers=customer_headers).json() == {"upcoming": [], "past": []}


def test_booking_rejects_unknown_or_unbookable_references(
    client, customer_headers, make_service, make_pet, make_groomer, book
):
    pet_id = make_pet(customer_headers)
    service_id = make_service()

    assert book(customer_headers, str(uuid.uuid4()), service_id).status_code == 404
    assert book(customer_headers, pet_id, str(uuid.uuid4())).status_code == 404
    assert book(customer_headers, "not-a-uuid", service_id).status_code == 400

    retired = make_service(name="Retired", is_active=False)
    assert book(customer_headers, pet_id, retired).status_code == 400

    off_duty = make_groomer(name="Marco Cruz", is_available=False)
    assert book(customer_headers, pet_id, service_id, groomer_id=off_duty).status_code == 400


def test_booking_requires_sign_in(client, make_service, book):
    service_id = make_service()
    res = book({}, str(uuid.uuid4()), service_id)
    assert res.status_code == 401


def test_cancel_pending_then_second_cancel_rejected(client, customer_headers, make_service, make_pet, book):
    appointment = book(customer_headers, make_pet(customer_headers), make_service()).json()

    res = client.patch(f"{API}/appointments/{appointment['id']}/cancel", headers=customer_headers)
    assert res.status_code == 200
    assert res.json()["status"] == "cancelled"

    res = client.patch(f"{API}/appointments/{appointment['id']}/cancel", headers=customer_headers)
    assert res.status_code == 409


def test_customer_cannot_cancel_once_confirmed(
    client, customer_headers, admin_headers, make_service, make_pet, book
):
    appointment = book(customer_headers, make_pet(customer_headers), make_service()).json()
    assert _admin_set(client, admin_headers, appointment["id"], status="confirmed", total_price=400).status_code == 200

    res = client.patch(f"{API}/appointments/{appointment['id']}/cancel", headers=customer_headers)
    assert res.status_code == 409
    assert client.get(f"{API}/appointments/{appointment['id']}", headers=customer_headers).json()["status"] == "confirmed"


def test_customer_cannot_cancel_someone_elses_appointment(
    client, customer_headers, register, make_service, make_pet, book
):
    appointment = book(customer_headers, make_pet(customer_headers), make_service()).json()
    stranger = register(email="sam@example.com", full_name="Sam Lee")

    res = client.patch(f"{API}/appointments/{appointment['id']}/cancel", headers=stranger)
    assert res.status_code == 404
    assert client.get(f"{API}/appointments/{appointment['id']}", headers=stranger).status_code == 404


def test_admin_can_cancel_from_any_status(client, customer_headers, admin_headers, make_service, make_pet, book):
    pet_id = make_pet(customer_headers)
    service_id = make_service()
    for start in ("confirmed", "in-progress", "completed"):
        appointment = book(customer_headers, pet_id, service_id).json()
        assert _admin_set(client, admin_headers, appointment["id"], status=start, total_price=400).status_code == 200

        res = _admin_set(client, admin_headers, appointment["id"], status="cancelled", total_price=400)
        assert res.status_code == 200
        assert res.json()["status"] == "cancelled"


def test_admin_price_and_discount(client, customer_headers, admin_headers, make_service, make_pet, book):
    appointment = book(customer_headers, make_pet(customer_headers), make_service()).json()

    res = _admin_set(
        client, admin_headers, appointment["id"], status="confirmed", total_price=500, discount_applied=50
    )
    assert res.status_code == 200
    assert res.json()["final_price"] == 450.0

    stored = client.get(f"{API}/appointments/{appointment['id']}", headers=customer_headers).json()
    assert stored["total_price"] == 500.0
    assert stored["discount_applied"] == 50.0
    assert stored["status"] == "confirmed"


def test_admin_discount_defaults_to_zero_and_is_bounded(
    client, customer_headers, admin_headers, make_service, make_pet, book
):
    appointment = book(customer_headers, make_pet(customer_headers), make_service()).json()

    res = _admin_set(client, admin_headers, appointment["id"], status="confirmed", total_price=400)
    assert res.json()["discount_applied"] == 0.0
    assert res.json()["final_price"] == 400.0

    res = _admin_set(
        client, admin_headers, appointment["id"], status="confirmed", total_price=400, discount_applied=401
    )
    assert res.status_code == 400

    res = _admin_set(client, admin_headers, appointment["id"], status="confirmed", total_price=-1)
    assert res.status_code == 400


def test_admin_update_writes_audit_entry(client, customer_headers, admin_headers, make_service, make_pet, book):
    appointment = book(customer_headers, make_pet(customer_headers), make_service()).json()
    _admin_set(client, admin_headers, appointment["id"], status="confirmed", total_price=450, discount_applied=25)

    entries = client.get(f"{API}/admin/audit-log", headers=admin_headers).json()
    assert len(entries) == 1
    entry = entries[0]
    assert entry["table_name"] == "appointments"
    assert entry["record_id"] == appointment["id"]
    assert entry["old_values"] == {"status": "pending", "total_price": 400.0, "discount_applied": None}
    assert entry["new_values"] == {"status": "confirmed", "total_price": 450.0, "discount_applied": 25.0}


def test_customer_cancel_leaves_no_audit_entry(client, customer_headers, admin_headers, make_service, make_pet, book):
    appointment = book(customer_headers, make_pet(customer_headers), make_service()).json()
    client.patch(f"{API}/appointments/{appointment['id']}/cancel", headers=customer_headers)
    assert client.get(f"{API}/admin/audit-log", headers=admin_headers).json() == []


def test_customer_listing_partitions_by_status(client, customer_headers, make_service, make_pet, book):
    pet_id = make_pet(customer_headers)
    service_id = make_service()
    early = book(customer_headers, pet_id, service_id, appointment_date="2030-01-10").json()
    late = book(customer_headers, pet_id, service_id, appointment_date="2030-02-12").json()
    gone = book(customer_headers, pet_id, service_id, appointment_date="2030-03-12").json()
    client.patch(f"{API}/appointments/{gone['id']}/cancel", headers=customer_headers)

    res = client.get(f"{API}/appointments", headers=customer_headers).json()
    assert [a["id"] for a in res["upcoming"]] == [late["id"], early["id"]]
    assert [a["id"] for a in res["past"]] == [gone["id"]]


def test_admin_listing_and_status_filter(
    client, customer_headers, admin_headers, register, make_service, make_pet, book
):
    service_id = make_service()
    first = book(customer_headers, make_pet(customer_headers), service_id, appointment_date="2030-01-10").json()
    other = register(email="sam@example.com", full_name="Sam Lee")
    second = book(other, make_pet(other, name="Mochi", species="cat"), service_id, appointment_date="2030-02-12").json()
    _admin_set(client, admin_headers, first["id"], status="confirmed", total_price=400)

    everything = client.get(f"{API}/admin/appointments", headers=admin_headers).json()
    assert [a["id"] for a in everything] == [second["id"], first["id"]]
    assert everything[0]["pet_species"] == "cat"

    pending = client.get(f"{API}/admin/appointments", params={"status": "pending"}, headers=admin_headers).json()
    assert [a["id"] for a in pending] == [second["id"]]

    assert client.get(f"{API}/admin/appointments", headers=customer_headers).status_code == 403


def test_booking_options(client, customer_headers, register, make_service, make_groomer, make_pet):
    make_pet(customer_headers, name="Biscuit")
    other = register(email="sam@example.com", full_name="Sam Lee")
    make_pet(other, name="Mochi")
    make_service(name="Full Groom")
    make_service(name="Retired", is_active=False)
    make_groomer(name="Ana Reyes")
    make_groomer(name="Marco Cruz", is_available=False)

    res = client.get(f"{API}/appointments/booking-options", headers=customer_headers)
    assert res.status_code == 200
    body = res.json()
    assert [p["name"] for p in body["pets"]] == ["Biscuit"]
    assert [s["name"] for s in body["services"]] == ["Full Groom"]
    assert [g["name"] for g in body["groomers"]] == ["Ana Reyes"]
    assert body["service_types"] == ["pick-up", "home-service", "walk-in"]
    assert body["time_slots"][0] == "09:00"
    assert body["time_slots"][-1] == "16:30"
    assert "12:00" not in body["time_slots"]
    assert len(body["time_slots"]) == 14


def test_booking_rejects_past_dates(client, customer_headers, make_service, make_pet, book):
    yesterday = date.today() - timedelta(days=1)
    res = book(customer_headers, make_pet(customer_headers), make_service(), appointment_date=yesterday.isoformat())
    assert res.status_code == 400
    assert res.json()["detail"] == "Appointment date cannot be in the past"


def test_booking_rejects_sundays(client, customer_headers, make_service, make_pet, book):
    day = open_day()
    sunday = day + timedelta(days=6 - day.weekday())
    assert sunday.weekday() == 6

    res = book(customer_headers, make_pet(customer_headers), make_service(), appointment_date=sunday.isoformat())
    assert res.status_code == 400
    assert res.json()["detail"] == "We are closed on Sundays"


def test_booking_rejects_times_outside_slots(client, customer_headers, make_service, make_pet, book):
    pet_id = make_pet(customer_headers)
    service_id = make_service()

    for start_time in ("03:17", "12:00", "17:00", "10:00:30"):
        res = book(customer_headers, pet_id, service_id, start_time=start_time)
        assert res.status_code == 400, start_time
        assert res.json()["detail"] == "Start time must be one of the offered time slots"

    assert book(customer_headers, pet_id, service_id, start_time="16:30").status_code == 201
    assert len(client.get(f"{API}/appointments", headers=customer_headers).json()["upcoming"]) == 1


def test_past_sunday_off_slot_booking_is_refused(client, customer_headers, make_service, make_pet, book):
    res = book(
        customer_headers,
        make_pet(customer_headers),
        make_service(),
        appointment_date="2020-01-05",
        start_time="03:17",
    )
    assert res.status_code == 400
    assert client.get(f"{API}/appointments", headers=customer_headers).json() == {"upcoming": [], "past": []}
