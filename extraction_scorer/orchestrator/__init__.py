"""Orchestrator modules."""

from .main import ExtractionScoringOrchestrator
from .coordinator import WorkerCoordinator

__all__ = [
    "ExtractionScoringOrchestrator",
    "WorkerCoordinator",
]
