"""HealthNav symptom-triage decision engine."""

__version__ = "1.0.0"
