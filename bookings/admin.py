from django.contrib import admin
from .models import Booking

@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = ['id', 'customer', 'vehicle', 'rent_start_date', 'rent_end_date', 'total_price', 'status']
    list_filter = ['status']
    search_fields = ['customer__email', 'customer__name', 'vehicle__registration_number']
    # Status and price change only through the booking engine
    readonly_fields = ['total_price', 'status', 'created_at', 'updated_at']
    list_per_page = 20

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('customer', 'vehicle')
