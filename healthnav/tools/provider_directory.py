"""Provider directory.

The catalog itself is owned by an external directory service; this module
ships the reference entries used in development and tests. The directory
is a tuple of frozen models, so any number of sessions can read it
concurrently without locking.
"""

from typing import Optional, Tuple
from healthnav.models.provider import Provider
import logging

logger = logging.getLogger(__name__)


MOCK_PROVIDERS: Tuple[Provider, ...] = (
    Provider(
        id="1",
        name="Dr. Sarah Chen",
        specialty="General Practice",
        rating=4.9,
        distance_label="0.8 mi",
        available_slots=("Today 2:00 PM", "Today 4:30 PM", "Tomorrow 9:00 AM"),
        address="123 Medical Plaza, Suite 200",
        phone="(555) 123-4567",
        accepts_insurance=True,
    ),
    Provider(
        id="2",
        name="CityHealth Urgent Care",
        specialty="Urgent Care",
        rating=4.7,
        distance_label="1.2 mi",
        available_slots=("Walk-in Available", "Today 3:00 PM", "Today 5:00 PM"),
        address="456 Health Street",
        phone="(555) 234-5678",
        accepts_insurance=True,
    ),
    Provider(
        id="3",
        name="Dr. Michael Torres",
        specialty="Internal Medicine",
        rating=4.8,
        distance_label="2.1 mi",
        available_slots=("Tomorrow 10:00 AM", "Tomorrow 2:00 PM", "Next Week"),
        address="789 Wellness Avenue",
        phone="(555) 345-6789",
        accepts_insurance=True,
    ),
    Provider(
        id="4",
        name="TeleHealth Now",
        specialty="Tele-Consult",
        rating=4.6,
        distance_label="Virtual",
        available_slots=("Available Now", "Today 1:00 PM", "Today 6:00 PM"),
        address="Virtual Consultation",
        phone="(555) 456-7890",
        accepts_insurance=True,
    ),
    Provider(
        id="5",
        name="St. Mary's Emergency Department",
        specialty="Emergency Medicine",
        rating=4.5,
        distance_label="3.4 mi",
        available_slots=("Walk-in Available",),
        address="1 Hospital Drive",
        phone="(555) 911-0000",
        accepts_insurance=True,
    ),
)


def get_provider_directory() -> Tuple[Provider, ...]:
    """Return the shared, read-only provider directory."""
    return MOCK_PROVIDERS


def get_provider(
    provider_id: str, directory: Optional[Tuple[Provider, ...]] = None
) -> Optional[Provider]:
    """Look up a provider by id."""
    for provider in directory if directory is not None else MOCK_PROVIDERS:
        if provider.id == provider_id:
            return provider
    logger.warning(f"Provider {provider_id} not found in directory")
    return None
