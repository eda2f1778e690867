"""Conversation controller for symptom triage sessions.

A finite-state dialogue driver: it records turns, accumulates symptoms,
advances through the information-gathering states on each patient turn and
runs the triage pipeline exactly once when enough turns have been collected.

State flow:
    greeting → collecting_chief_complaint → collecting_duration
    → collecting_severity → collecting_additional → analyzing → resolved
"""

import logging
from typing import List, Optional, Tuple

from healthnav.agents.classifier import UrgencyClassifier, fallback_classify
from healthnav.agents.prompts import (
    ANALYSIS_PROMPT,
    ELICITATION_PROMPTS,
    GREETING_PROMPT,
    URGENT_REPLIES,
)
from healthnav.agents.triage_graph import TriagePipeline
from healthnav.agents.urgency_mapper import map_to_triage
from healthnav.config.settings import TriageConfig
from healthnav.errors import ConflictingOperation, InvalidStateTransition
from healthnav.models.assessment import TriageResult
from healthnav.models.conversation import ConversationTurn, PatientContext, SymptomSet
from healthnav.models.triage import ConversationState, Speaker
from healthnav.utils.red_flags import detect_red_flags, get_red_flag_description
from healthnav.utils.symptom_extractor import extract_tokens

logger = logging.getLogger(__name__)

# State reached after N patient turns, before the analysis threshold applies
_GATHERING_STATES = (
    ConversationState.COLLECTING_CHIEF_COMPLAINT,
    ConversationState.COLLECTING_DURATION,
    ConversationState.COLLECTING_SEVERITY,
    ConversationState.COLLECTING_ADDITIONAL,
)


class ConversationController:
    """Drives one triage session. Not shared between sessions."""

    def __init__(
        self,
        config: TriageConfig,
        pipeline: Optional[TriagePipeline] = None,
        patient_context: Optional[PatientContext] = None,
        session_id: str = "unknown",
    ):
        self.config = config
        self.pipeline = pipeline or TriagePipeline(UrgencyClassifier(config))
        self.patient_context = patient_context
        self.session_id = session_id

        self._state = ConversationState.GREETING
        self._turns: List[ConversationTurn] = []
        self._symptoms = SymptomSet()
        self._patient_turns = 0
        self._triage_result: Optional[TriageResult] = None
        self._classification_pending = False
        self._triage_started = False
        self._generation = 0

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------
    @property
    def state(self) -> ConversationState:
        return self._state

    @property
    def turns(self) -> Tuple[ConversationTurn, ...]:
        return tuple(self._turns)

    @property
    def symptoms(self) -> SymptomSet:
        return self._symptoms

    @property
    def patient_turn_count(self) -> int:
        return self._patient_turns

    @property
    def triage_result(self) -> Optional[TriageResult]:
        return self._triage_result

    @property
    def is_analyzing(self) -> bool:
        return self._classification_pending

    @property
    def generation(self) -> int:
        return self._generation

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def greet(self) -> str:
        """Send the greeting and start collecting the chief complaint."""
        if self._state != ConversationState.GREETING:
            raise InvalidStateTransition(
                f"Cannot greet in state {self._state.value}; reset the session first"
            )
        self._append_turn(Speaker.ASSISTANT, GREETING_PROMPT)
        self._state = ConversationState.COLLECTING_CHIEF_COMPLAINT
        logger.info(f"Session {self.session_id}: greeting sent")
        return GREETING_PROMPT

    async def record_turn(self, text: str) -> str:
        """
        Record a patient turn and return the assistant's reply.

        Args:
            text: Patient message

        Returns:
            Elicitation prompt for the pre-transition state, an urgent reply
            when the turn mentions urgent symptoms, or the triage
            recommendation once analysis has run.

        Raises:
            ConflictingOperation: A classification is still outstanding
            InvalidStateTransition: Session is already resolved
            ValueError: Empty message
        """
        if self._classification_pending:
            raise ConflictingOperation(
                f"Session {self.session_id} is still analyzing; wait for the result"
            )
        if self._state in (ConversationState.ANALYZING, ConversationState.RESOLVED):
            raise InvalidStateTransition(
                f"Session {self.session_id} is {self._state.value}; "
                "reset before recording new turns"
            )
        if not text or not text.strip():
            raise ValueError("Patient turn text must not be empty")

        if self._state == ConversationState.GREETING:
            self.greet()

        generation = self._generation
        previous_state = self._state
        self._append_turn(Speaker.PATIENT, text)
        self._symptoms = self._symptoms.merge(
            extract_tokens(text, self.config.symptom_vocabulary)
        )
        self._patient_turns += 1
        self._state = self._next_state()

        if previous_state != self._state:
            logger.info(
                f"Session {self.session_id}: {previous_state.value} → {self._state.value} "
                f"(patient turns: {self._patient_turns})"
            )

        if self._state == ConversationState.ANALYZING:
            reply = await self._run_triage()
        else:
            reply = self._select_reply(text, previous_state)

        # A reset while analyzing started a fresh conversation; leave it untouched
        if generation == self._generation:
            self._append_turn(Speaker.ASSISTANT, reply)
        return reply

    def reset(self) -> None:
        """Return to greeting and drop all turns, symptoms and results.

        A classification still in flight belongs to the old generation and
        its result is discarded when it arrives.
        """
        self._generation += 1
        self._state = ConversationState.GREETING
        self._turns = []
        self._symptoms = SymptomSet()
        self._patient_turns = 0
        self._triage_result = None
        self._classification_pending = False
        self._triage_started = False
        logger.info(f"Session {self.session_id} reset (generation {self._generation})")

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _append_turn(self, speaker: Speaker, text: str) -> None:
        self._turns.append(
            ConversationTurn(
                speaker=speaker, text=text, sequence_number=len(self._turns) + 1
            )
        )

    def _next_state(self) -> ConversationState:
        if self._patient_turns >= self.config.min_turns_before_analysis:
            return ConversationState.ANALYZING
        index = min(self._patient_turns, len(_GATHERING_STATES) - 1)
        return _GATHERING_STATES[index]

    def _select_reply(self, text: str, previous_state: ConversationState) -> str:
        has_red_flags, categories = detect_red_flags(text)
        if has_red_flags:
            logger.warning(
                f"Session {self.session_id}: urgent symptoms mentioned "
                f"({'; '.join(get_red_flag_description(c) for c in categories)})"
            )
            return URGENT_REPLIES[categories[0]]
        return ELICITATION_PROMPTS[previous_state]

    async def _run_triage(self) -> str:
        if self._triage_started:
            raise ConflictingOperation(
                f"Session {self.session_id} has already been triaged; reset to start over"
            )

        generation = self._generation
        symptoms = self._symptoms
        self._classification_pending = True
        self._triage_started = True

        try:
            result = await self.pipeline.run(
                symptoms, self.patient_context, session_id=self.session_id
            )
        except Exception as e:
            logger.exception(
                f"Session {self.session_id}: triage pipeline failed, using fallback rules: {e}"
            )
            result = map_to_triage(
                fallback_classify(symptoms, self.config.emergency_keywords),
                symptoms,
                annotate_fallback=self.config.annotate_fallback,
            )
        finally:
            if generation == self._generation:
                self._classification_pending = False

        if generation != self._generation:
            logger.info(
                f"Session {self.session_id}: discarding triage from generation "
                f"{generation} (current {self._generation})"
            )
            return ANALYSIS_PROMPT

        self._triage_result = result
        self._state = ConversationState.RESOLVED
        return f"{ANALYSIS_PROMPT}\n\n{result.recommendation}"
