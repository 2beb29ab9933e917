import logging
import math
from datetime import date, datetime, time

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.utils import timezone

from fleetrent.exceptions import Conflict, FailedPrecondition, InvalidArgument, NotFound
from users.permissions import ensure_can_change_booking, ensure_can_view_booking, is_admin
from vehicles.models import Vehicle
from .models import Booking

User = get_user_model()
logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60
CLOSING_STATUSES = (Booking.CANCELLED, Booking.RETURNED)


def _as_datetime(value):
    if isinstance(value, datetime):
        if timezone.is_aware(value):
            value = timezone.make_naive(value)
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    raise InvalidArgument('Rental dates must be dates')


def rental_days(start, end):
    """Whole days between ``start`` and ``end``; any partial day counts as a full one."""
    elapsed = _as_datetime(end) - _as_datetime(start)
    return math.ceil(elapsed.total_seconds() / SECONDS_PER_DAY)


class BookingEngine:
    """
    Creates, lists and closes bookings.

    Every operation re-reads the rows it depends on inside its own transaction,
    so nothing is cached between calls. ``clock`` returns today's date and is
    used for the cancellation window.
    """

    def __init__(self, clock=None):
        self.clock = clock or timezone.localdate

    def create_booking(self, customer_id, vehicle_id, rent_start_date, rent_end_date):
        if not User.objects.filter(pk=customer_id).exists():
            raise NotFound('Customer not found', message='Customer not found')

        with transaction.atomic():
            try:
                vehicle = Vehicle.objects.select_for_update().get(pk=vehicle_id)
            except Vehicle.DoesNotExist:
                raise NotFound('Vehicle not found', message='Vehicle not found')

            if vehicle.availability_status != Vehicle.AVAILABLE:
                raise Conflict('Vehicle is not available for booking', message='Vehicle not available')

            start = _as_datetime(rent_start_date)
            end = _as_datetime(rent_end_date)
            if end.date() <= start.date():
                raise InvalidArgument('End date must be after start date', message='Invalid rental period')

            total_price = vehicle.daily_rent_price * rental_days(start, end)

            try:
                with transaction.atomic():
                    booking = Booking.objects.create(
                        customer_id=customer_id,
                        vehicle=vehicle,
                        rent_start_date=start.date(),
                        rent_end_date=end.date(),
                        total_price=total_price,
                        status=Booking.ACTIVE,
                    )
            except IntegrityError:
                raise Conflict('Vehicle is not available for booking', message='Vehicle not available')

            vehicle.availability_status = Vehicle.BOOKED
            vehicle.save(update_fields=['availability_status', 'updated_at'])

        logger.info(
            "Booking %s created: vehicle %s for customer %s (%s to %s, total %s)",
            booking.pk, vehicle.pk, customer_id, booking.rent_start_date,
            booking.rent_end_date, booking.total_price,
        )
        return booking

    def list_bookings(self, requester):
        queryset = Booking.objects.select_related('vehicle', 'customer').order_by('-id')
        if is_admin(requester):
            return queryset
        return queryset.filter(customer_id=requester.id)

    def get_booking(self, booking_id, requester):
        try:
            booking = Booking.objects.select_related('vehicle', 'customer').get(pk=booking_id)
        except Booking.DoesNotExist:
            raise NotFound('Booking not found', message='Booking not found')
        ensure_can_view_booking(requester, booking)
        return booking

    def update_booking_status(self, booking_id, new_status, requester):
        with transaction.atomic():
            try:
                booking = Booking.objects.select_for_update().get(pk=booking_id)
            except Booking.DoesNotExist:
                raise NotFound('Booking not found', message='Booking not found')

            if new_status not in CLOSING_STATUSES:
                raise InvalidArgument('Invalid status update', message='Invalid status')

            ensure_can_change_booking(requester, booking, new_status)

            if booking.status != Booking.ACTIVE:
                raise FailedPrecondition(
                    f'Booking is already {booking.status}', message='Booking is not active'
                )

            if new_status == Booking.CANCELLED and booking.rent_start_date <= self.clock():
                raise FailedPrecondition(
                    'Cannot cancel booking that has already started',
                    message='Booking cannot be cancelled',
                )

            vehicle = Vehicle.objects.select_for_update().get(pk=booking.vehicle_id)

            booking.status = new_status
            booking.save(update_fields=['status', 'updated_at'])
            vehicle.availability_status = Vehicle.AVAILABLE
            vehicle.save(update_fields=['availability_status', 'updated_at'])

        booking.vehicle = vehicle
        logger.info("Booking %s marked %s by user %s", booking.pk, new_status, requester.id)
        return booking
