"""
WSGI config for the fleetrent project.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'fleetrent.settings')

application = get_wsgi_application()

from bookings.auto_return import start_auto_return_scheduler  # noqa: E402

start_auto_return_scheduler()
