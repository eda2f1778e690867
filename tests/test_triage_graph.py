import logging

import pytest

from healthnav.agents.classifier import UrgencyClassifier
from healthnav.agents.triage_graph import TriagePipeline
from healthnav.models.conversation import SymptomSet
from healthnav.models.triage import SuggestedAction, UrgencyLevel
from healthnav.agents.prompts import FALLBACK_NOTE
from tests.helpers import classifier_payload, json_transport, remote_client


@pytest.mark.asyncio
async def test_pipeline_uses_fallback_when_classifier_unavailable(config):
    pipeline = TriagePipeline(UrgencyClassifier(config))

    triage = await pipeline.run(SymptomSet(tokens=("chest pain",)), session_id="s-1")

    assert triage.urgency_level == UrgencyLevel.EMERGENCY
    assert triage.suggested_action == SuggestedAction.EMERGENCY
    assert triage.risk_score == pytest.approx(95.0)
    assert FALLBACK_NOTE in triage.recommendation


@pytest.mark.asyncio
async def test_pipeline_maps_primary_result(remote_config):
    client = remote_client(
        json_transport(classifier_payload(urgency_score=0.65, risk_level="high"))
    )
    pipeline = TriagePipeline(UrgencyClassifier(remote_config, client=client))

    triage = await pipeline.run(SymptomSet(tokens=("fever",)))

    assert triage.urgency_level == UrgencyLevel.HIGH
    assert triage.suggested_action == SuggestedAction.URGENT_CARE
    assert triage.estimated_wait_time == "30-60 min"
    assert FALLBACK_NOTE not in triage.recommendation


@pytest.mark.asyncio
async def test_pipeline_falls_back_on_invalid_payload(remote_config):
    client = remote_client(json_transport({"urgency_score": "high"}))
    pipeline = TriagePipeline(UrgencyClassifier(remote_config, client=client))

    triage = await pipeline.run(SymptomSet(tokens=("headache", "fever")))

    assert triage.urgency_level == UrgencyLevel.MODERATE
    assert "• headache\n• fever" in triage.recommendation


@pytest.mark.asyncio
async def test_pipeline_logs_fallback_use(config, caplog):
    caplog.set_level(logging.INFO, logger="healthnav.agents.nodes")
    pipeline = TriagePipeline(UrgencyClassifier(config))

    await pipeline.run(SymptomSet(tokens=("fever",)), session_id="s-2")

    assert "fallback=True" in caplog.text
