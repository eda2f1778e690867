"""Session management service.

Sessions live in memory only; each owns its own conversation controller
and triage history, and nothing mutable is shared between them. The
provider directory is shared read-only reference data.
"""

from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence
import logging
import uuid

from healthnav.agents.conversation import ConversationController
from healthnav.agents.classifier import UrgencyClassifier
from healthnav.agents.triage_graph import TriagePipeline
from healthnav.config.settings import TriageConfig
from healthnav.errors import InvalidStateTransition, SessionNotFound
from healthnav.models.assessment import TriageResult
from healthnav.models.conversation import PatientContext
from healthnav.models.provider import Appointment, Provider
from healthnav.models.triage import AppointmentType
from healthnav.services.booking_service import book
from healthnav.services.recommendation_service import recommend
from healthnav.tools.classifier_client import RemoteClassifierClient
from healthnav.tools.provider_directory import get_provider, get_provider_directory

logger = logging.getLogger(__name__)


class TriageSession:
    """One isolated conversation and its triage history."""

    def __init__(self, session_id: str, controller: ConversationController):
        self.session_id = session_id
        self.controller = controller
        self.created_at = datetime.now(timezone.utc)
        self.updated_at = self.created_at
        self.triage_history: List[TriageResult] = []

    @property
    def current_triage(self) -> Optional[TriageResult]:
        return self.controller.triage_result

    def touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)


class SessionService:
    """Service for managing triage sessions."""

    def __init__(
        self,
        config: Optional[TriageConfig] = None,
        directory: Optional[Sequence[Provider]] = None,
        classifier_client: Optional[RemoteClassifierClient] = None,
    ):
        self.config = config or TriageConfig.from_settings()
        self.directory = tuple(directory) if directory is not None else get_provider_directory()
        self._classifier_client = classifier_client
        self._sessions: Dict[str, TriageSession] = {}

    def create_session(
        self, patient_context: Optional[PatientContext] = None
    ) -> TriageSession:
        """
        Create a new triage session and send the greeting.

        Args:
            patient_context: Optional patient data forwarded to the classifier

        Returns:
            Created TriageSession
        """
        session_id = str(uuid.uuid4())
        classifier = UrgencyClassifier(self.config, client=self._classifier_client)
        controller = ConversationController(
            self.config,
            pipeline=TriagePipeline(classifier),
            patient_context=patient_context,
            session_id=session_id,
        )
        controller.greet()

        session = TriageSession(session_id, controller)
        self._sessions[session_id] = session

        logger.info(f"Created session {session_id}")
        return session

    def get_session(self, session_id: str) -> TriageSession:
        """
        Get a session by ID.

        Raises:
            SessionNotFound: Unknown session ID
        """
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFound(session_id)
        return session

    async def record_turn(self, session_id: str, text: str) -> str:
        """Record a patient turn; new triage results are added to the history."""
        session = self.get_session(session_id)
        generation = session.controller.generation

        reply = await session.controller.record_turn(text)

        result = session.controller.triage_result
        if (
            result is not None
            and generation == session.controller.generation
            and result not in session.triage_history
        ):
            session.triage_history.append(result)
            logger.info(
                f"Session {session_id}: triage {result.id} added to history "
                f"({len(session.triage_history)} total)"
            )
        session.touch()
        return reply

    def reset_session(self, session_id: str) -> str:
        """Reset the conversation and greet again. Triage history is kept."""
        session = self.get_session(session_id)
        session.controller.reset()
        session.touch()
        return session.controller.greet()

    def recommend_providers(self, session_id: str) -> List[Provider]:
        """Rank providers for the session's current triage result."""
        session = self.get_session(session_id)
        if session.current_triage is None:
            raise InvalidStateTransition(
                f"Session {session_id} has no triage result yet"
            )
        return recommend(session.current_triage, self.directory)

    def book_appointment(
        self,
        session_id: str,
        provider_id: str,
        slot: str,
        appointment_type: Optional[AppointmentType] = None,
    ) -> Appointment:
        """
        Book a provider slot for the session's current triage.

        Returns:
            Scheduled Appointment for the caller to hand to the history service

        Raises:
            InvalidStateTransition: No triage result yet
            LookupError: Unknown provider ID
            InvalidSlot: Slot not offered by the provider
        """
        session = self.get_session(session_id)
        triage = session.current_triage
        if triage is None:
            raise InvalidStateTransition(
                f"Session {session_id} has no triage result to book against"
            )

        provider = get_provider(provider_id, self.directory)
        if provider is None:
            raise LookupError(f"Provider {provider_id} not found")

        appointment = book(
            provider,
            slot,
            triage.primary_symptoms,
            appointment_type,
            placeholder_date=self.config.booking_placeholder_date,
        )
        session.touch()
        return appointment

    def end_session(self, session_id: str) -> bool:
        """Drop a session. Returns False when it did not exist."""
        removed = self._sessions.pop(session_id, None)
        if removed is not None:
            logger.info(f"Ended session {session_id}")
            return True
        return False


# Global service instance
_session_service: Optional[SessionService] = None


def get_session_service() -> SessionService:
    """Get or create SessionService instance."""
    global _session_service
    if _session_service is None:
        _session_service = SessionService()
    return _session_service
