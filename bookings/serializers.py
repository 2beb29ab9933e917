# bookings/serializers.py
from datetime import date, datetime

from django.utils.dateparse import parse_date, parse_datetime
from rest_framework import serializers

from users.serializers import CustomerSummarySerializer
from vehicles.serializers import VehicleSnapshotSerializer, VehicleSummarySerializer
from .models import Booking


class RentalDateField(serializers.Field):
    """Accepts a date (2024-01-01) or a datetime (2024-01-01T08:00); partial days round up when pricing."""
    default_error_messages = {
        'invalid': 'Date has wrong format. Use YYYY-MM-DD or an ISO 8601 datetime.',
    }

    def to_internal_value(self, data):
        if isinstance(data, (date, datetime)):
            return data
        if not isinstance(data, str):
            self.fail('invalid')
        value = data.strip()
        try:
            parsed = parse_datetime(value) or parse_date(value)
        except ValueError:
            parsed = None
        if parsed is None:
            self.fail('invalid')
        return parsed

    def to_representation(self, value):
        return value.isoformat()


class BookingCreateSerializer(serializers.Serializer):
    customer_id = serializers.IntegerField(min_value=1, required=False)
    vehicle_id = serializers.IntegerField(min_value=1)
    rent_start_date = RentalDateField()
    rent_end_date = RentalDateField()


class BookingStatusSerializer(serializers.Serializer):
    status = serializers.CharField(
        error_messages={'required': 'Please provide a status', 'blank': 'Please provide a status'}
    )


class BookingSerializer(serializers.ModelSerializer):
    class Meta:
        model = Booking
        fields = [
            'id', 'customer_id', 'vehicle_id', 'rent_start_date', 'rent_end_date',
            'total_price', 'status',
        ]
        read_only_fields = fields


class CreatedBookingSerializer(BookingSerializer):
    """Includes the vehicle name and daily price as they were when the booking was made"""
    vehicle = VehicleSnapshotSerializer(read_only=True)

    class Meta(BookingSerializer.Meta):
        fields = BookingSerializer.Meta.fields + ['vehicle']
        read_only_fields = fields


class AdminBookingSerializer(BookingSerializer):
    customer = CustomerSummarySerializer(read_only=True)
    vehicle = VehicleSummarySerializer(read_only=True)

    class Meta(BookingSerializer.Meta):
        fields = BookingSerializer.Meta.fields + ['customer', 'vehicle']
        read_only_fields = fields


class CustomerBookingSerializer(BookingSerializer):
    vehicle = VehicleSummarySerializer(read_only=True)

    class Meta(BookingSerializer.Meta):
        fields = [
            'id', 'vehicle_id', 'rent_start_date', 'rent_end_date',
            'total_price', 'status', 'vehicle',
        ]
        read_only_fields = fields


class ReturnedBookingSerializer(BookingSerializer):
    vehicle = serializers.SerializerMethodField()

    class Meta(BookingSerializer.Meta):
        fields = BookingSerializer.Meta.fields + ['vehicle']
        read_only_fields = fields

    def get_vehicle(self, obj):
        return {'availability_status': obj.vehicle.availability_status}
