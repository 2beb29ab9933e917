from datetime import date
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from bookings.services import BookingEngine
from vehicles.models import Vehicle

User = get_user_model()


class FakeClock:
    """Stands in for timezone.localdate; move it with ``today = ...``."""

    def __init__(self, today):
        self.today = today

    def __call__(self):
        return self.today


@pytest.fixture
def clock():
    return FakeClock(date(2024, 1, 1))


@pytest.fixture
def engine(clock):
    return BookingEngine(clock=clock)


@pytest.fixture
def admin_user(db):
    return User.objects.create_user(
        email='admin@example.com', password='secret123', name='Ada Admin', role=User.ADMIN
    )


@pytest.fixture
def customer(db):
    return User.objects.create_user(
        email='carol@example.com', password='secret123', name='Carol Customer', phone='555-0100'
    )


@pytest.fixture
def other_customer(db):
    return User.objects.create_user(
        email='dave@example.com', password='secret123', name='Dave Driver'
    )


@pytest.fixture
def make_vehicle(db):
    def _make(registration_number='ABC-123', daily_rent_price='100.00', **kwargs):
        kwargs.setdefault('vehicle_name', 'Toyota Corolla')
        kwargs.setdefault('type', Vehicle.CAR)
        return Vehicle.objects.create(
            registration_number=registration_number,
            daily_rent_price=Decimal(daily_rent_price),
            **kwargs,
        )
    return _make


@pytest.fixture
def vehicle(make_vehicle):
    return make_vehicle()


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def admin_client(admin_user):
    client = APIClient()
    client.force_authenticate(user=admin_user)
    return client


@pytest.fixture
def customer_client(customer):
    client = APIClient()
    client.force_authenticate(user=customer)
    return client
