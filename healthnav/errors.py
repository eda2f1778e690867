"""Error types raised by the triage core."""


class TriageError(Exception):
    """Base class for every error raised by the triage core."""


class ClassifierError(TriageError):
    """Remote classifier could not produce a usable result.

    Never surfaced to callers: the urgency classifier catches it and
    falls back to the rule-based classifier.
    """

    reason = "unavailable"


class ClassifierTimeout(ClassifierError):
    """Remote classifier did not answer within the configured timeout."""

    reason = "timeout"


class ClassifierInvalidResponse(ClassifierError):
    """Remote classifier answered with a payload that fails validation."""

    reason = "invalid_response"


class ClassifierUnavailable(ClassifierError):
    """Transport error, non-2xx status or no endpoint configured."""

    reason = "unavailable"


class ConflictingOperation(TriageError):
    """A triage is already outstanding for this session; retry once it resolves."""


class InvalidStateTransition(TriageError):
    """The requested operation is not allowed in the current conversation state."""


class InvalidSlot(TriageError):
    """The selected slot is not offered by the provider."""

    def __init__(self, provider_id: str, slot: str):
        super().__init__(f"Slot {slot!r} is not available for provider {provider_id}")
        self.provider_id = provider_id
        self.slot = slot


class SessionNotFound(TriageError):
    """No triage session exists with the given identifier."""

    def __init__(self, session_id: str):
        super().__init__(f"Session {session_id} not found")
        self.session_id = session_id
