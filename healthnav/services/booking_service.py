"""Appointment booking from a provider slot selection."""

from datetime import date, timedelta
from typing import Optional, Tuple
import logging

from healthnav.errors import InvalidSlot
from healthnav.models.conversation import SymptomSet
from healthnav.models.provider import Appointment, Provider
from healthnav.models.triage import AppointmentType

logger = logging.getLogger(__name__)

DEFAULT_PLACEHOLDER_DATE = "TBD"


def resolve_slot(
    slot: str, today: date, placeholder_date: str = DEFAULT_PLACEHOLDER_DATE
) -> Tuple[str, str]:
    """
    Split a slot label into an ISO date and a time string.

    "Today 2:00 PM" → (today, "2:00 PM"); "Tomorrow 9:00 AM" → (today + 1,
    "9:00 AM"). Any other label ("Walk-in Available", "Next Week") is kept
    whole as the time, with ``placeholder_date`` as the date.
    """
    if "Today" in slot:
        return today.isoformat(), slot.replace("Today", "", 1).strip()
    if "Tomorrow" in slot:
        return (today + timedelta(days=1)).isoformat(), slot.replace("Tomorrow", "", 1).strip()
    return placeholder_date, slot


def default_appointment_type(provider: Provider) -> AppointmentType:
    if provider.specialty == "Tele-Consult":
        return AppointmentType.TELE_CONSULT
    return AppointmentType.IN_PERSON


def book(
    provider: Provider,
    slot: str,
    symptoms: SymptomSet,
    type: Optional[AppointmentType] = None,
    *,
    today: Optional[date] = None,
    placeholder_date: str = DEFAULT_PLACEHOLDER_DATE,
) -> Appointment:
    """
    Create an appointment for a provider slot.

    Every call creates a new appointment; repeat bookings of the same slot
    are not deduplicated here.

    Args:
        provider: Provider chosen by the patient
        slot: One of ``provider.available_slots``
        symptoms: Symptoms to attach to the appointment
        type: In-person or tele-consult; derived from the provider when omitted
        today: Reference date for "Today"/"Tomorrow" (defaults to the current date)
        placeholder_date: Date used for slots without a day

    Returns:
        Scheduled Appointment

    Raises:
        InvalidSlot: ``slot`` is not offered by the provider
    """
    if slot not in provider.available_slots:
        logger.warning(f"Rejected booking for provider {provider.id}: slot {slot!r} unavailable")
        raise InvalidSlot(provider.id, slot)

    appointment_date, appointment_time = resolve_slot(
        slot, today or date.today(), placeholder_date
    )

    appointment = Appointment(
        provider_id=provider.id,
        provider_name=provider.name,
        date=appointment_date,
        time=appointment_time,
        type=type or default_appointment_type(provider),
        symptoms=symptoms.tokens,
    )
    logger.info(
        f"Booked appointment {appointment.id} with {provider.name} "
        f"on {appointment.date} at {appointment.time}"
    )
    return appointment
