from datetime import timedelta

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from django.utils.dateparse import parse_date

from bookings.auto_return import AutoReturnScheduler, run_auto_return_sweep


class Command(BaseCommand):
    help = "Mark overdue active bookings as returned and release their vehicles."

    def add_arguments(self, parser):
        parser.add_argument(
            '--date',
            help="Treat this day (YYYY-MM-DD) as today instead of the current date.",
        )
        parser.add_argument(
            '--loop',
            action='store_true',
            help="Keep running and repeat the sweep on the configured interval.",
        )

    def handle(self, *args, **options):
        if options['loop']:
            config = getattr(settings, 'BOOKINGS_AUTO_RETURN', {})
            scheduler = AutoReturnScheduler(
                interval=timedelta(hours=config.get('INTERVAL_HOURS', 24))
            )
            try:
                scheduler.run_forever()
            except KeyboardInterrupt:
                self.stdout.write("Auto-return loop interrupted")
            return

        today = None
        if options['date']:
            try:
                today = parse_date(options['date'])
            except ValueError:
                today = None
            if today is None:
                raise CommandError(f"Invalid date: {options['date']!r} (expected YYYY-MM-DD)")

        closed = run_auto_return_sweep(today=today)
        self.stdout.write(self.style.SUCCESS(f"Auto-returned {closed} booking(s)"))
