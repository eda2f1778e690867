"""Triage pipeline workflow.

This module defines the LangGraph workflow that turns a symptom set into a
TriageResult: the primary scorer runs first, the rule-based fallback runs
only when it fails, and the urgency mapper always runs last.
"""

from langgraph.graph import StateGraph, END
from typing import Optional
import logging

from healthnav.agents.classifier import UrgencyClassifier
from healthnav.agents.nodes import (
    classify_node,
    fallback_node,
    map_urgency_node,
    route_after_classify,
)
from healthnav.agents.state import TriagePipelineState
from healthnav.models.assessment import TriageResult
from healthnav.models.conversation import PatientContext, SymptomSet

logger = logging.getLogger(__name__)


def build_triage_graph():
    """
    Build and compile the triage workflow.

    Flow:
    1. classify → map_urgency when the primary scorer succeeds
    2. classify → fallback → map_urgency on timeout, transport error or
       invalid payload
    """
    logger.info("Building triage LangGraph workflow")

    workflow = StateGraph(TriagePipelineState)

    workflow.add_node("classify", classify_node)
    workflow.add_node("fallback", fallback_node)
    workflow.add_node("map_urgency", map_urgency_node)

    workflow.set_entry_point("classify")

    workflow.add_conditional_edges(
        "classify",
        route_after_classify,
        {"fallback": "fallback", "map_urgency": "map_urgency"},
    )
    workflow.add_edge("fallback", "map_urgency")
    workflow.add_edge("map_urgency", END)

    graph = workflow.compile()
    logger.info("Triage workflow compiled successfully")

    return graph


# Global graph instance
_triage_graph = None


def get_triage_graph():
    """Get or create the compiled triage graph. The graph holds no session state."""
    global _triage_graph
    if _triage_graph is None:
        _triage_graph = build_triage_graph()
    return _triage_graph


class TriagePipeline:
    """Runs the triage graph with a session's classifier."""

    def __init__(self, classifier: UrgencyClassifier):
        self.classifier = classifier
        self.graph = get_triage_graph()

    async def run(
        self,
        symptoms: SymptomSet,
        patient_context: Optional[PatientContext] = None,
        session_id: str = "unknown",
    ) -> TriageResult:
        """Classify the symptoms and map the result into a TriageResult."""
        initial_state: TriagePipelineState = {
            "session_id": session_id,
            "symptoms": symptoms,
            "patient_context": patient_context,
            "classification": None,
            "failure_reason": None,
            "used_fallback": False,
            "triage_result": None,
        }

        result = await self.graph.ainvoke(
            initial_state, config={"configurable": {"classifier": self.classifier}}
        )
        return result["triage_result"]
