from django.db import models


class Vehicle(models.Model):
    CAR = 'car'
    BIKE = 'bike'
    VAN = 'van'
    SUV = 'SUV'
    TYPE_CHOICES = (
        (CAR, 'Car'),
        (BIKE, 'Bike'),
        (VAN, 'Van'),
        (SUV, 'SUV'),
    )

    AVAILABLE = 'available'
    BOOKED = 'booked'
    AVAILABILITY_CHOICES = (
        (AVAILABLE, 'Available'),
        (BOOKED, 'Booked'),
    )

    vehicle_name = models.CharField(max_length=100)
    type = models.CharField(max_length=10, choices=TYPE_CHOICES)
    registration_number = models.CharField(max_length=50, unique=True)
    daily_rent_price = models.DecimalField(max_digits=10, decimal_places=2)
    # Written only by the booking engine and the auto-return sweep
    availability_status = models.CharField(
        max_length=10, choices=AVAILABILITY_CHOICES, default=AVAILABLE
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'vehicles'
        verbose_name = 'Vehicle'
        verbose_name_plural = 'Vehicles'
        ordering = ['id']
        constraints = [
            models.CheckConstraint(
                condition=models.Q(daily_rent_price__gt=0),
                name='vehicle_daily_rent_price_positive',
            ),
        ]

    def __str__(self):
        return f"{self.vehicle_name} - {self.registration_number}"

    @property
    def is_available(self):
        return self.availability_status == self.AVAILABLE
