"""
URL configuration for the fleetrent project.
"""

from django.contrib import admin
from django.urls import path, include

from users.urls import auth_urlpatterns
from . import views

urlpatterns = [
    path('', views.api_root, name='api-root'),
    path('admin/', admin.site.urls),

    path('api/v1/auth/', include(auth_urlpatterns)),
    path('api/v1/vehicles/', include('vehicles.urls')),
    path('api/v1/users/', include('users.urls')),
    path('api/v1/bookings/', include('bookings.urls')),
]

handler404 = 'fleetrent.views.route_not_found'
handler500 = 'fleetrent.views.server_error'
