import json

import pytest

from healthnav.config.settings import TriageConfig
from healthnav.errors import InvalidSlot, InvalidStateTransition, SessionNotFound
from healthnav.models.conversation import PatientContext
from healthnav.models.triage import ConversationState, SuggestedAction
from healthnav.services.session_service import SessionService
from tests.helpers import classifier_payload, json_transport, remote_client

CHEST_PAIN_TURNS = ["chest pain", "an hour", "9", "sweating"]


@pytest.fixture
def service():
    return SessionService(config=TriageConfig())


async def complete_triage(service, session_id, turns=CHEST_PAIN_TURNS):
    for text in turns:
        await service.record_turn(session_id, text)


def test_create_session_greets(service):
    session = service.create_session()
    assert session.controller.state == ConversationState.COLLECTING_CHIEF_COMPLAINT
    assert len(session.controller.turns) == 1
    assert service.get_session(session.session_id) is session


def test_unknown_session(service):
    with pytest.raises(SessionNotFound):
        service.get_session("missing")


@pytest.mark.asyncio
async def test_triage_is_added_to_history_once(service):
    session = service.create_session()
    await complete_triage(service, session.session_id)

    assert session.current_triage is not None
    assert session.triage_history == [session.current_triage]


@pytest.mark.asyncio
async def test_reset_keeps_history_and_clears_current(service):
    session = service.create_session()
    await complete_triage(service, session.session_id)

    greeting = service.reset_session(session.session_id)

    assert greeting == session.controller.turns[0].text
    assert session.current_triage is None
    assert len(session.triage_history) == 1

    await complete_triage(service, session.session_id, ["cough"] * 4)
    assert len(session.triage_history) == 2
    assert session.triage_history[0].id != session.triage_history[1].id


@pytest.mark.asyncio
async def test_recommend_requires_triage(service):
    session = service.create_session()
    with pytest.raises(InvalidStateTransition):
        service.recommend_providers(session.session_id)

    await complete_triage(service, session.session_id)
    providers = service.recommend_providers(session.session_id)
    assert session.current_triage.suggested_action == SuggestedAction.EMERGENCY
    assert {p.specialty for p in providers} <= {"Urgent Care", "Emergency Medicine"}


@pytest.mark.asyncio
async def test_booking(service):
    session = service.create_session()
    with pytest.raises(InvalidStateTransition):
        service.book_appointment(session.session_id, "2", "Walk-in Available")

    await complete_triage(service, session.session_id)

    appointment = service.book_appointment(session.session_id, "2", "Walk-in Available")
    assert appointment.date == "TBD"
    assert appointment.symptoms == ("chest pain",)

    with pytest.raises(LookupError):
        service.book_appointment(session.session_id, "999", "Walk-in Available")
    with pytest.raises(InvalidSlot):
        service.book_appointment(session.session_id, "2", "Tomorrow 9:00 AM")


@pytest.mark.asyncio
async def test_patient_context_is_sent_to_classifier():
    requests = []
    config = TriageConfig(classifier_endpoint_url="http://classifier.test/score")
    client = remote_client(json_transport(classifier_payload(), requests=requests))
    service = SessionService(config=config, classifier_client=client)

    context = PatientContext(age=42, medical_history=["asthma"])
    session = service.create_session(patient_context=context)
    await complete_triage(service, session.session_id, ["cough"] * 4)

    assert len(requests) == 1
    body = json.loads(requests[0].content)
    assert body["patient_data"] == {"age": 42, "medicalHistory": ["asthma"]}


def test_end_session(service):
    session = service.create_session()
    assert service.end_session(session.session_id) is True
    assert service.end_session(session.session_id) is False
    with pytest.raises(SessionNotFound):
        service.get_session(session.session_id)
