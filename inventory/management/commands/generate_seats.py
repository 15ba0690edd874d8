import logging
from datetime import timedelta
from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone
from events.models import Events, DEFAULT_CAPACITY
from inventory.layout import generate_seat_layout

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Create a demo event one week out with a full seat layout"

    def add_arguments(self, parser):
        parser.add_argument('--name', default="Grand Theater - Demo")
        parser.add_argument('--seats', type=int, default=DEFAULT_CAPACITY)
        parser.add_argument('--section', default="Main")

    def handle(self, *args, **options):
        starts_at = timezone.now() + timedelta(days=7)
        with transaction.atomic():
            event = Events.objects.create(
                event_name=options['name'],
                description=f"Initial seating {options['seats']}",
                starts_at=starts_at,
                ends_at=starts_at + timedelta(hours=2),
                capacity=options['seats'],
            )
            seats = generate_seat_layout(event, total=options['seats'], section=options['section'])

        logger.info("Generated %s seats for event %s", len(seats), event.events_id)
        self.stdout.write(self.style.SUCCESS(f"Created event {event.events_id} with {len(seats)} seats"))
