from django.urls import path, include
from rest_framework.routers import SimpleRouter

from .views import BookingViewSet

router = SimpleRouter()
# Empty prefix so the routes sit directly under /api/v1/bookings/
router.register(r'', BookingViewSet, basename='booking')

urlpatterns = [
    path('', include(router.urls)),
]
