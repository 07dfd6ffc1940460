"""
Extraction Scorer

Scores how hard each project of a monolith would be to extract into an
independently deployable service.
"""

__version__ = "0.1.0"
__author__ = "Extraction Scorer Team"

from .orchestrator.main import ExtractionScoringOrchestrator
from .filtering.filter_engine import FilterEngine
from .models.data_models import AnalysisRequest, AnalysisResult, FilterConfiguration, RawProjectMetrics

__all__ = [
    "ExtractionScoringOrchestrator",
    "FilterEngine",
    "AnalysisRequest",
    "AnalysisResult",
    "FilterConfiguration",
    "RawProjectMetrics",
]
