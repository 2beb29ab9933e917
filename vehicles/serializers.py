from rest_framework import serializers

from .models import Vehicle


class VehicleSerializer(serializers.ModelSerializer):
    class Meta:
        model = Vehicle
        fields = [
            'id', 'vehicle_name', 'type', 'registration_number',
            'daily_rent_price', 'availability_status',
        ]
        read_only_fields = ['id', 'availability_status']
        # Uniqueness is reported by the registry as a conflict
        extra_kwargs = {'registration_number': {'validators': []}}

    def validate_registration_number(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Registration number cannot be empty")
        return value

    def validate_daily_rent_price(self, value):
        if value <= 0:
            raise serializers.ValidationError("Daily rent price must be positive")
        return value


class VehicleSummarySerializer(serializers.ModelSerializer):
    """Vehicle block embedded in booking listings"""
    class Meta:
        model = Vehicle
        fields = ['vehicle_name', 'registration_number', 'type']
        read_only_fields = fields


class VehicleSnapshotSerializer(serializers.ModelSerializer):
    """Vehicle block returned with a newly created booking"""
    class Meta:
        model = Vehicle
        fields = ['vehicle_name', 'daily_rent_price']
        read_only_fields = fields
