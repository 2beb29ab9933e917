"""
Auto-return of overdue bookings.

``run_auto_return_sweep`` closes every active booking whose end date lies
before today and frees its vehicle, all in one transaction.
``AutoReturnScheduler`` runs the sweep on a background thread: once at
start-up and then on a fixed interval.
"""
import logging
import threading
from datetime import timedelta

from django.conf import settings
from django.db import close_old_connections, transaction
from django.utils import timezone

from vehicles.models import Vehicle
from .models import Booking

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = timedelta(hours=24)


def run_auto_return_sweep(today=None):
    """Mark overdue active bookings as returned. Returns how many were closed."""
    if today is None:
        today = timezone.localdate()

    with transaction.atomic():
        overdue = list(
            Booking.objects.select_for_update()
            .filter(status=Booking.ACTIVE, rent_end_date__lt=today)
            .values_list('id', 'vehicle_id')
        )
        if overdue:
            booking_ids = [booking_id for booking_id, _ in overdue]
            vehicle_ids = {vehicle_id for _, vehicle_id in overdue}

            Booking.objects.filter(id__in=booking_ids).update(
                status=Booking.RETURNED, updated_at=timezone.now()
            )
            Vehicle.objects.filter(id__in=vehicle_ids).update(
                availability_status=Vehicle.AVAILABLE, updated_at=timezone.now()
            )

    logger.info("Auto-returned %d expired bookings (before %s)", len(overdue), today)
    return len(overdue)


class AutoReturnScheduler:
    """Background timer for the auto-return sweep."""

    def __init__(self, interval=DEFAULT_INTERVAL, sweep=run_auto_return_sweep, clock=None):
        self.interval = interval
        self.sweep = sweep
        self.clock = clock or timezone.localdate
        self.last_result = None
        self._stop_event = threading.Event()
        self._thread = None
        self._lock = threading.Lock()

    @property
    def running(self):
        return self._thread is not None and self._thread.is_alive()

    def run_once(self):
        """Run a single sweep. Failures are logged and reported as ``None``."""
        try:
            self.last_result = self.sweep(today=self.clock())
        except Exception:
            logger.exception("Auto-return sweep failed; retrying at the next tick")
            self.last_result = None
        return self.last_result

    def _loop(self):
        while not self._stop_event.is_set():
            close_old_connections()
            self.run_once()
            close_old_connections()
            self._stop_event.wait(self.interval.total_seconds())

    def start(self):
        with self._lock:
            if self.running:
                return
            self._stop_event.clear()
            self._thread = threading.Thread(
                target=self._loop, name='auto-return-scheduler', daemon=True
            )
            self._thread.start()
        logger.info("Auto-return scheduler started (runs every %s)", self.interval)

    def stop(self, timeout=5):
        with self._lock:
            if self._thread is None:
                return
            self._stop_event.set()
            self._thread.join(timeout=timeout)
            self._thread = None
        logger.info("Auto-return scheduler stopped")

    def run_forever(self):
        """Run in the calling thread until interrupted."""
        self._stop_event.clear()
        logger.info("Auto-return scheduler running in foreground (every %s)", self.interval)
        self._loop()


_scheduler = None


def start_auto_return_scheduler():
    """Start the process-wide scheduler if enabled in settings. Safe to call more than once."""
    global _scheduler
    config = getattr(settings, 'BOOKINGS_AUTO_RETURN', {})
    if not config.get('ENABLED', True):
        logger.info("Auto-return scheduler disabled by settings")
        return None
    if _scheduler is None:
        _scheduler = AutoReturnScheduler(
            interval=timedelta(hours=config.get('INTERVAL_HOURS', 24))
        )
    _scheduler.start()
    return _scheduler
