import logging
from decimal import Decimal, InvalidOperation

from django.db import IntegrityError, transaction

from fleetrent.exceptions import Conflict, FailedPrecondition, InvalidArgument, NotFound
from .models import Vehicle

logger = logging.getLogger(__name__)

DUPLICATE_REGISTRATION = 'Vehicle with this registration number already exists'
_TYPES = {choice for choice, _ in Vehicle.TYPE_CHOICES}


def _clean_registration(value):
    value = (value or '').strip()
    if not value:
        raise InvalidArgument('Registration number is required')
    return value


def _clean_price(value):
    try:
        price = Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidArgument('Daily rent price must be a number')
    if not price.is_finite() or price <= 0:
        raise InvalidArgument('Daily rent price must be positive')
    return price


def _clean_type(value):
    if value not in _TYPES:
        raise InvalidArgument(f"Vehicle type must be one of: {', '.join(sorted(_TYPES))}")
    return value


class VehicleRegistry:
    """CRUD over the fleet. Availability is owned by the booking engine and never written here."""

    @staticmethod
    def list_vehicles():
        return Vehicle.objects.all().order_by('id')

    @staticmethod
    def get_vehicle(vehicle_id):
        try:
            return Vehicle.objects.get(pk=vehicle_id)
        except Vehicle.DoesNotExist:
            raise NotFound('Vehicle not found', message='Vehicle not found')

    @staticmethod
    def create_vehicle(vehicle_name, type, registration_number, daily_rent_price):
        vehicle_name = (vehicle_name or '').strip()
        if not vehicle_name:
            raise InvalidArgument('Vehicle name is required')
        registration_number = _clean_registration(registration_number)
        daily_rent_price = _clean_price(daily_rent_price)
        type = _clean_type(type)

        if Vehicle.objects.filter(registration_number=registration_number).exists():
            raise Conflict(DUPLICATE_REGISTRATION)

        try:
            with transaction.atomic():
                vehicle = Vehicle.objects.create(
                    vehicle_name=vehicle_name,
                    type=type,
                    registration_number=registration_number,
                    daily_rent_price=daily_rent_price,
                )
        except IntegrityError:
            raise Conflict(DUPLICATE_REGISTRATION)

        logger.info("Vehicle %s registered (%s)", vehicle.pk, vehicle.registration_number)
        return vehicle

    @staticmethod
    def update_vehicle(vehicle_id, vehicle_name=None, type=None, registration_number=None,
                       daily_rent_price=None):
        """Merge the supplied fields over the stored record; ``None`` keeps the current value."""
        with transaction.atomic():
            try:
                vehicle = Vehicle.objects.select_for_update().get(pk=vehicle_id)
            except Vehicle.DoesNotExist:
                raise NotFound('Vehicle not found', message='Vehicle not found')

            if vehicle_name is not None:
                vehicle_name = vehicle_name.strip()
                if not vehicle_name:
                    raise InvalidArgument('Vehicle name cannot be empty')
                vehicle.vehicle_name = vehicle_name
            if type is not None:
                vehicle.type = _clean_type(type)
            if daily_rent_price is not None:
                vehicle.daily_rent_price = _clean_price(daily_rent_price)
            if registration_number is not None:
                registration_number = _clean_registration(registration_number)
                if registration_number != vehicle.registration_number:
                    taken = Vehicle.objects.filter(
                        registration_number=registration_number
                    ).exclude(pk=vehicle.pk).exists()
                    if taken:
                        raise Conflict(DUPLICATE_REGISTRATION)
                    vehicle.registration_number = registration_number

            try:
                with transaction.atomic():
                    vehicle.save(update_fields=[
                        'vehicle_name', 'type', 'registration_number', 'daily_rent_price', 'updated_at'
                    ])
            except IntegrityError:
                raise Conflict(DUPLICATE_REGISTRATION)

        return vehicle

    @staticmethod
    def delete_vehicle(vehicle_id):
        with transaction.atomic():
            try:
                vehicle = Vehicle.objects.select_for_update().get(pk=vehicle_id)
            except Vehicle.DoesNotExist:
                raise NotFound('Vehicle not found', message='Vehicle not found')

            if vehicle.bookings.filter(status='active').exists():
                raise FailedPrecondition(
                    'Cannot delete vehicle with active bookings', message='Cannot delete vehicle'
                )
            vehicle.delete()

        logger.info("Vehicle %s deleted", vehicle_id)
