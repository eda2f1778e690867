"""Test helpers: fake classifier transports and pipelines."""

import asyncio
import httpx

from healthnav.agents.classifier import fallback_classify
from healthnav.agents.urgency_mapper import map_to_triage
from healthnav.config.settings import TriageConfig
from healthnav.tools.classifier_client import RemoteClassifierClient

CLASSIFIER_URL = "http://classifier.test/score"


def classifier_payload(urgency_score=0.35, risk_level="low", **overrides):
    payload = {
        "urgency_score": urgency_score,
        "risk_level": risk_level,
        "recommended_specialty": "General Practice",
        "confidence": 0.76,
        "key_findings": ["Symptoms appear non-urgent", "Routine consultation recommended"],
    }
    payload.update(overrides)
    return payload


def json_transport(payload, status_code=200, requests=None):
    """MockTransport answering every request with the given JSON body."""

    def handler(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(request)
        return httpx.Response(status_code, json=payload)

    return httpx.MockTransport(handler)


def slow_transport(delay_s: float):
    async def handler(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(delay_s)
        return httpx.Response(200, json=classifier_payload())

    return httpx.MockTransport(handler)


def remote_client(transport, timeout=5.0):
    return RemoteClassifierClient(
        endpoint_url=CLASSIFIER_URL, timeout=timeout, transport=transport
    )


class BlockingPipeline:
    """Triage pipeline stand-in that waits until released."""

    def __init__(self, config: TriageConfig):
        self.config = config
        self.started = asyncio.Event()
        self.release = asyncio.Event()
        self.calls = 0

    async def run(self, symptoms, patient_context=None, session_id="unknown"):
        self.calls += 1
        self.started.set()
        await self.release.wait()
        return map_to_triage(
            fallback_classify(symptoms, self.config.emergency_keywords), symptoms
        )
