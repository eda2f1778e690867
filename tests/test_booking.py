from datetime import date

import pytest

from healthnav.errors import InvalidSlot
from healthnav.models.conversation import SymptomSet
from healthnav.models.triage import AppointmentStatus, AppointmentType
from healthnav.services.booking_service import book, resolve_slot
from healthnav.tools.provider_directory import get_provider

TODAY = date(2026, 3, 14)
SYMPTOMS = SymptomSet(tokens=("fever", "cough"))


@pytest.mark.parametrize(
    "slot,expected",
    [
        ("Today 2:00 PM", ("2026-03-14", "2:00 PM")),
        ("Tomorrow 9:00 AM", ("2026-03-15", "9:00 AM")),
        ("Walk-in Available", ("TBD", "Walk-in Available")),
        ("Next Week", ("TBD", "Next Week")),
    ],
)
def test_resolve_slot(slot, expected):
    assert resolve_slot(slot, TODAY) == expected


def test_tomorrow_crosses_month_end():
    assert resolve_slot("Tomorrow 10:00 AM", date(2026, 1, 31)) == ("2026-02-01", "10:00 AM")


def test_book_today_slot():
    provider = get_provider("1")
    appointment = book(provider, "Today 2:00 PM", SYMPTOMS, today=TODAY)

    assert appointment.provider_id == "1"
    assert appointment.provider_name == "Dr. Sarah Chen"
    assert appointment.date == "2026-03-14"
    assert appointment.time == "2:00 PM"
    assert appointment.type == AppointmentType.IN_PERSON
    assert appointment.status == AppointmentStatus.SCHEDULED
    assert appointment.symptoms == ("fever", "cough")


def test_book_slot_without_day_uses_placeholder():
    provider = get_provider("2")
    appointment = book(
        provider, "Walk-in Available", SYMPTOMS, today=TODAY, placeholder_date="pending"
    )
    assert appointment.date == "pending"
    assert appointment.time == "Walk-in Available"


def test_unavailable_slot_is_rejected():
    provider = get_provider("1")
    with pytest.raises(InvalidSlot) as exc_info:
        book(provider, "Today 9:00 AM", SYMPTOMS, today=TODAY)
    assert exc_info.value.slot == "Today 9:00 AM"


def test_tele_consult_provider_defaults_to_tele_consult():
    appointment = book(get_provider("4"), "Available Now", SYMPTOMS, today=TODAY)
    assert appointment.type == AppointmentType.TELE_CONSULT


def test_explicit_type_wins():
    appointment = book(
        get_provider("1"),
        "Tomorrow 9:00 AM",
        SYMPTOMS,
        AppointmentType.TELE_CONSULT,
        today=TODAY,
    )
    assert appointment.type == AppointmentType.TELE_CONSULT


def test_each_booking_is_a_new_appointment():
    provider = get_provider("3")
    first = book(provider, "Next Week", SYMPTOMS, today=TODAY)
    second = book(provider, "Next Week", SYMPTOMS, today=TODAY)
    assert first.id != second.id
