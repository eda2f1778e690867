"""LangGraph node functions for the triage pipeline.

Each node receives the session's UrgencyClassifier through the run config
(``config["configurable"]["classifier"]``), so one compiled graph serves
every session without sharing mutable state.
"""

import logging
from langchain_core.runnables import RunnableConfig

from healthnav.agents.classifier import UrgencyClassifier
from healthnav.agents.state import TriagePipelineState
from healthnav.agents.urgency_mapper import map_to_triage
from healthnav.models.classification import ClassifierSuccess

logger = logging.getLogger(__name__)


def _get_classifier(config: RunnableConfig) -> UrgencyClassifier:
    classifier = (config.get("configurable") or {}).get("classifier")
    if classifier is None:
        raise RuntimeError("Triage pipeline invoked without a classifier in config")
    return classifier


async def classify_node(state: TriagePipelineState, config: RunnableConfig) -> dict:
    """Ask the primary scorer for a classification."""
    classifier = _get_classifier(config)
    logger.info(
        f"Classifying {len(state['symptoms'])} symptom(s) for session: {state['session_id']}"
    )

    outcome = await classifier.score(state["symptoms"], state.get("patient_context"))
    if isinstance(outcome, ClassifierSuccess):
        return {"classification": outcome.result, "failure_reason": None}

    return {"classification": None, "failure_reason": outcome.reason}


def route_after_classify(state: TriagePipelineState) -> str:
    """Route to the fallback when the primary scorer failed."""
    if state.get("classification") is None:
        return "fallback"
    return "map_urgency"


async def fallback_node(state: TriagePipelineState, config: RunnableConfig) -> dict:
    """Classify with the deterministic rule set."""
    classifier = _get_classifier(config)
    logger.warning(
        f"Falling back to rule-based classifier for session {state['session_id']} "
        f"(reason: {state.get('failure_reason')})"
    )
    return {
        "classification": classifier.fallback(state["symptoms"]),
        "used_fallback": True,
    }


async def map_urgency_node(state: TriagePipelineState, config: RunnableConfig) -> dict:
    """Map the classification onto an urgency tier and recommendation."""
    classifier = _get_classifier(config)
    triage = map_to_triage(
        state["classification"],
        state["symptoms"],
        annotate_fallback=classifier.config.annotate_fallback,
    )
    logger.info(
        f"Triage for session {state['session_id']}: "
        f"urgency={triage.urgency_level.value}, action={triage.suggested_action.value}, "
        f"risk_score={triage.risk_score}, fallback={state.get('used_fallback', False)}"
    )
    return {"triage_result": triage}
