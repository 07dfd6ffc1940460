"""Loading of externally produced metrics and dependency edges."""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import chardet
import pandas as pd
from pydantic import ValidationError

from ..exceptions import MetricsInputError
from ..models.data_models import DependencyEdge, RawProjectMetrics, NOT_AVAILABLE
from ..utils.logging import get_logger

COLUMN_ALIASES: Dict[str, str] = {
    "project": "project_name",
    "name": "project_name",
    "coupling_score": "coupling",
    "complexity_score": "complexity",
    "tech_debt_score": "tech_debt",
    "techdebt": "tech_debt",
    "external_api_count": "external_apis",
    "external_api": "external_apis",
}

REQUIRED_METRIC_COLUMNS = ("project_name", "complexity", "tech_debt")


def _cell(value) -> str:
    return value.strip() if isinstance(value, str) else ""


def _normalize_column(name: str) -> str:
    key = str(name).strip().lower().replace(" ", "_").replace("-", "_")
    return COLUMN_ALIASES.get(key, key)


class MetricsLoader:
    """Read raw project metrics and dependency edges from CSV files."""

    def __init__(self):
        self.logger = get_logger("loader")

    def detect_encoding(self, file_path: Union[str, Path]) -> str:
        """Detect file encoding.

        Args:
            file_path: Path to file

        Returns:
            Detected encoding
        """
        with open(file_path, 'rb') as f:
            raw_data = f.read(10000)  # Read first 10KB
            result = chardet.detect(raw_data)
            return result['encoding'] or 'utf-8'

    def read_csv(self, file_path: Union[str, Path]) -> pd.DataFrame:
        """Read a CSV file as strings with normalized column names.

        Raises:
            MetricsInputError: if the file is missing or cannot be parsed
        """
        path = Path(file_path)
        if not path.is_file():
            raise MetricsInputError(f"File not found: {path}")

        encoding = self.detect_encoding(path)
        try:
            df = pd.read_csv(path, encoding=encoding, dtype=str, keep_default_na=False)
        except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
            raise MetricsInputError(f"Cannot read {path}: {e}") from e

        df.columns = [_normalize_column(c) for c in df.columns]
        return df

    def load_metrics(self, file_path: Union[str, Path]) -> List[RawProjectMetrics]:
        """Load raw project metrics.

        Blank or ``N/A`` cells mark a metric as unavailable. A missing
        ``coupling`` column makes coupling unavailable for every project.
        ``external_apis`` is a whole-number count; blank or ``N/A`` counts
        as 0 and a value such as ``3.0`` is read as 3.

        Raises:
            MetricsInputError: on missing columns or unparseable values
        """
        df = self.read_csv(file_path)

        missing = [c for c in REQUIRED_METRIC_COLUMNS if c not in df.columns]
        if missing:
            raise MetricsInputError(
                f"Metrics file {file_path} is missing columns: {', '.join(missing)}"
            )

        projects = []
        for row_number, row in enumerate(df.to_dict(orient="records"), start=2):
            try:
                projects.append(RawProjectMetrics(
                    project_name=_cell(row["project_name"]),
                    coupling=self._parse_float(row.get("coupling", ""), "coupling", row_number),
                    complexity=self._parse_float(row["complexity"], "complexity", row_number),
                    tech_debt=self._parse_float(row["tech_debt"], "tech_debt", row_number),
                    external_api_count=self._parse_count(row.get("external_apis", ""), row_number)
                ))
            except ValidationError as e:
                raise MetricsInputError(f"Invalid metrics on line {row_number}: {e}") from e

        self.logger.info(f"Loaded metrics for {len(projects)} projects from {file_path}")
        return projects

    def load_dependencies(self, file_path: Union[str, Path]) -> List[DependencyEdge]:
        """Load dependency edges from a CSV with ``source`` and ``target`` columns."""
        df = self.read_csv(file_path)

        missing = [c for c in ("source", "target") if c not in df.columns]
        if missing:
            raise MetricsInputError(
                f"Dependency file {file_path} is missing columns: {', '.join(missing)}"
            )

        edges = [
            DependencyEdge(source=_cell(row["source"]), target=_cell(row["target"]))
            for row in df.to_dict(orient="records")
            if _cell(row["source"]) and _cell(row["target"])
        ]

        self.logger.info(f"Loaded {len(edges)} dependency edges from {file_path}")
        return edges

    @staticmethod
    def _parse_float(text: Any, column: str, row_number: int) -> Optional[float]:
        text = _cell(text)
        if not text or text.upper() == NOT_AVAILABLE:
            return None
        try:
            return float(text)
        except ValueError:
            raise MetricsInputError(
                f"Line {row_number}: {column} value '{text}' is not a number"
            ) from None

    @staticmethod
    def _parse_count(text: Any, row_number: int) -> int:
        text = _cell(text)
        if not text or text.upper() == NOT_AVAILABLE:
            return 0
        try:
            count = float(text)
        except ValueError:
            count = None
        if count is None or not count.is_integer():
            raise MetricsInputError(
                f"Line {row_number}: external_apis value '{text}' is not an integer"
            )
        return int(count)
