"""Worker modules."""

from .base import BaseWorker
from .scoring_worker import ScoringWorker

__all__ = [
    "BaseWorker",
    "ScoringWorker",
]
