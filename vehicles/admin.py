from django.contrib import admin
from .models import Vehicle

@admin.register(Vehicle)
class VehicleAdmin(admin.ModelAdmin):
    list_display = ['id', 'vehicle_name', 'type', 'registration_number', 'daily_rent_price', 'availability_status']
    list_filter = ['type', 'availability_status']
    search_fields = ['vehicle_name', 'registration_number']
    readonly_fields = ['availability_status', 'created_at', 'updated_at']
    list_per_page = 20
