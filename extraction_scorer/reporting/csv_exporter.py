"""CSV export of extraction score reports."""

import re
import time
from pathlib import Path
from typing import List, Sequence, Union

import pandas as pd

from ..models.data_models import ExtractionScore, ExtractionScoreRecord, REPORT_COLUMNS
from ..utils.logging import get_logger
from .serializer import score_to_record

# CRLF and a UTF-8 BOM keep the file friendly to spreadsheet tools.
LINE_TERMINATOR = "\r\n"
ENCODING = "utf-8-sig"

_INVALID_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')


def records_to_dataframe(records: Sequence[ExtractionScoreRecord]) -> pd.DataFrame:
    """Tabulate records with the report columns in contract order."""
    return pd.DataFrame([record.to_row() for record in records], columns=list(REPORT_COLUMNS))


def render_csv(records: Sequence[ExtractionScoreRecord]) -> str:
    """Render records as CSV text, header row included."""
    return records_to_dataframe(records).to_csv(index=False, lineterminator=LINE_TERMINATOR)


def sanitize_file_name(name: str) -> str:
    """Replace characters that are invalid in file names with underscores."""
    return _INVALID_FILENAME_CHARS.sub("_", name)


class CsvExporter:
    """Write extraction score reports to CSV files."""

    def __init__(self):
        self.logger = get_logger("csv_exporter")

    def export_extraction_scores(
        self,
        scores: List[ExtractionScore],
        output_directory: Union[str, Path],
        solution_name: str
    ) -> Path:
        """Export scores, easiest first, to ``<solution>-extraction-scores.csv``.

        Args:
            scores: Extraction scores to export
            output_directory: Directory to write into; created if missing
            solution_name: Name used for the file name

        Returns:
            Path of the written file
        """
        if not str(output_directory).strip():
            raise ValueError("Output directory is required")
        if not solution_name.strip():
            raise ValueError("Solution name is required")

        self.logger.info(
            f"Exporting {len(scores)} extraction scores to CSV for solution {solution_name}"
        )

        ordered = sorted(scores, key=lambda s: s.final_score)
        start = time.perf_counter()

        output_path = Path(output_directory)
        output_path.mkdir(parents=True, exist_ok=True)
        file_path = output_path / f"{sanitize_file_name(solution_name)}-extraction-scores.csv"

        records = [score_to_record(score) for score in ordered]
        records_to_dataframe(records).to_csv(
            file_path, index=False, encoding=ENCODING, lineterminator=LINE_TERMINATOR
        )

        elapsed_ms = (time.perf_counter() - start) * 1000
        self.logger.info(
            f"Exported {len(records)} extraction scores to CSV at {file_path} in {elapsed_ms:.1f}ms"
        )
        return file_path
