"""Triage agents: conversation controller, classifier, mapper and workflow."""
