"""Report records, export and metrics input."""

from .serializer import to_record, score_to_record, format_score
from .csv_exporter import CsvExporter, render_csv
from .loader import MetricsLoader

__all__ = [
    "to_record",
    "score_to_record",
    "format_score",
    "CsvExporter",
    "render_csv",
    "MetricsLoader",
]
