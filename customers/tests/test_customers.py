"""Tests for the customer directory."""

import pytest

from core.exceptions import NotFound, ValidationFailed
from customers.services import (
    add_vehicle,
    find_or_create_by_phone,
    search_customers,
    update_customer,
)


@pytest.mark.django_db
class TestSearch:
    def test_matches_name_phone_and_plate(self, customer):
        assert list(search_customers("ravi")) == [customer]
        assert list(search_customers("98765")) == [customer]
        assert list(search_customers("mh12ab")) == [customer]
        assert list(search_customers("nobody")) == []

    def test_customer_with_two_matching_vehicles_appears_once(self, customer):
        add_vehicle(customer.pk, {"model": "Amaze", "plate_number": "MH12ZZ0001"})
        assert list(search_customers("MH12")) == [customer]


@pytest.mark.django_db
class TestVehicles:
    def test_vehicles_are_appended_in_order(self, customer):
        add_vehicle(customer.pk, {"make": "Maruti", "model": "Swift"})
        positions = list(customer.vehicles.values_list("position", "model"))
        assert positions == [(0, "City"), (1, "Swift")]
        assert customer.vehicle_at(1).display_name == "Maruti Swift"

    def test_vehicle_ids_are_stable(self, customer):
        uid = customer.vehicle_at(0).uid
        add_vehicle(customer.pk, {"model": "Swift"})
        assert customer.vehicle_at(0).uid == uid

    def test_missing_customer(self, db):
        with pytest.raises(NotFound):
            add_vehicle(999, {"model": "Swift"})


@pytest.mark.django_db
class TestFindOrCreate:
    def test_existing_phone(self, customer):
        found, created = find_or_create_by_phone(customer.phone, "Someone else")
        assert found == customer
        assert not created

    def test_new_phone(self, db):
        created_customer, created = find_or_create_by_phone("9000000000", "Kiran", vehicle={"model": "i20"})
        assert created
        assert created_customer.vehicle_at(0).model == "i20"


@pytest.mark.django_db
class TestUpdateCustomer:
    def test_unknown_status_is_rejected(self, customer):
        with pytest.raises(ValidationFailed):
            update_customer(customer.pk, status="Vanished")

    def test_updates_fields(self, customer):
        updated = update_customer(customer.pk, address="12 MG Road")
        assert updated.address == "12 MG Road"
