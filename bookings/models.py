from django.conf import settings
from django.db import models

from vehicles.models import Vehicle


class Booking(models.Model):
    ACTIVE = 'active'
    CANCELLED = 'cancelled'
    RETURNED = 'returned'
    STATUS_CHOICES = (
        (ACTIVE, 'Active'),
        (CANCELLED, 'Cancelled'),
        (RETURNED, 'Returned'),
    )

    customer = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='bookings'
    )
    vehicle = models.ForeignKey(Vehicle, on_delete=models.CASCADE, related_name='bookings')
    rent_start_date = models.DateField()
    rent_end_date = models.DateField()
    total_price = models.DecimalField(max_digits=12, decimal_places=2)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=ACTIVE)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'bookings'
        verbose_name = 'Booking'
        verbose_name_plural = 'Bookings'
        ordering = ['-id']
        indexes = [
            models.Index(fields=['status', 'rent_end_date'], name='booking_status_end_date_idx'),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=['vehicle'],
                condition=models.Q(status='active'),
                name='one_active_booking_per_vehicle',
            ),
            models.CheckConstraint(
                condition=models.Q(rent_end_date__gt=models.F('rent_start_date')),
                name='booking_end_after_start',
            ),
        ]

    def __str__(self):
        return f"Booking #{self.pk} - {self.vehicle_id} ({self.get_status_display()})"

    @property
    def is_active(self):
        return self.status == self.ACTIVE
