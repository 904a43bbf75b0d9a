"""
Pytest configuration and shared fixtures.
"""

from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model

User = get_user_model()


@pytest.fixture
def staff_user(db):
    return User.objects.create_user(username="frontdesk", password="testpass123")


@pytest.fixture
def api_client(client, staff_user):
    client.force_login(staff_user)
    return client


@pytest.fixture
def customer(db):
    from customers.services import create_customer

    return create_customer(
        name="Ravi Kumar",
        phone="9876543210",
        email="ravi@example.com",
        vehicles=[{"make": "Honda", "model": "City", "year": "2022", "plate_number": "MH12AB1234"}],
    )


@pytest.fixture
def technician(db):
    from technicians.models import Technician

    return Technician.objects.create(name="Suresh", specialty="PPF")


@pytest.fixture
def ppf_roll(db):
    from inventory.models import InventoryItem

    return InventoryItem.objects.create(
        name="PPF Roll",
        category="PPF",
        quantity=Decimal("10"),
        unit="roll",
        min_stock=Decimal("2"),
        price=Decimal("500"),
    )


@pytest.fixture
def job(db, customer):
    """Service 1000 + labor 500, total 1500, nothing paid."""
    from jobs.services import create_job

    return create_job(customer, 0, service_cost=Decimal("1000"), labor_cost=Decimal("500"))


@pytest.fixture
def stage_templates(db):
    from notifications.service import init_templates

    init_templates()
