"""Core pipeline: classifier, event channel, stream pumps, orchestrator."""
