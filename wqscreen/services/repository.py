# wqscreen/services/repository.py
import os
import logging
import pandas as pd
from typing import Tuple

from ..core import utils
from ..analysis.models import SAMPLE_REQUIRED_COLUMNS, PFAS_DATE_FORMAT, InputSchemaError
from ..analysis.criteria import prepare_criteria, split_criteria
from .file_system import create_directory

logger = logging.getLogger(__name__)


class TableRepository:
    """
    Handles all file reads and writes for the screening jobs.
    This is the *only* place pandas readers/writers should be called.

    Relative paths are resolved against base_dir (default: working directory).
    """
    def __init__(self, base_dir: str = "."):
        self.base_dir = base_dir
        logger.debug(f"TableRepository initialized at {os.path.abspath(base_dir)}")

    def _resolve(self, path: str) -> str:
        return path if os.path.isabs(path) else os.path.join(self.base_dir, path)

    def _existing(self, path: str) -> str:
        full_path = self._resolve(path)
        if not os.path.isfile(full_path):
            logger.error(f"Input file not found: {full_path}")
            raise FileNotFoundError(f"Input file not found: {full_path}")
        return full_path

    # --- Hardness screen ---

    def read_sample_data(self, path: str) -> pd.DataFrame:
        """
        Reads the sample export with every column as text, then cleans it.

        Column names become snake_case, sample_date is parsed as M/D/Y and
        report_result is coerced to float (bad text -> NaN).
        """
        full_path = self._existing(path)
        raw = pd.read_csv(full_path, dtype=str)
        df = utils.clean_names(raw)

        missing = utils.missing_columns(df, SAMPLE_REQUIRED_COLUMNS)
        if missing:
            raise InputSchemaError(f"Sample data {full_path} is missing columns: {missing}")

        df["sample_date"] = utils.parse_dates(df["sample_date"])
        df["report_result"] = utils.to_numeric(df["report_result"])
        logger.info(f"Read {len(df)} sample rows from {full_path}")
        return df

    def read_criteria(self, path: str, strict: bool = False) -> Tuple[pd.DataFrame, pd.DataFrame]:
        """Reads the coefficient workbook and returns (acute, chronic) tables."""
        full_path = self._existing(path)
        raw = pd.read_excel(full_path, engine='openpyxl')
        logger.info(f"Read {len(raw)} criteria rows from {full_path}")
        return split_criteria(prepare_criteria(raw), strict=strict)

    def write_screening_results(self, df: pd.DataFrame, path: str) -> str:
        """Writes the result table to a single-sheet .xlsx, replacing any existing file."""
        full_path = self._resolve(path)
        create_directory(os.path.dirname(full_path) or ".")
        df.to_excel(full_path, index=False, engine='openpyxl')
        logger.info(f"Wrote {len(df)} rows to {full_path}")
        return full_path

    def read_screening_results(self, path: str) -> pd.DataFrame:
        return pd.read_excel(self._existing(path), engine='openpyxl')

    # --- PFAS chart ---

    def read_pfas_export(self, path: str) -> pd.DataFrame:
        """Reads an Intellus PFAS export (Sample Date as M-D-Y)."""
        full_path = self._existing(path)
        df = utils.clean_names(pd.read_csv(full_path, dtype=str))
        if "sample_date" in df.columns:
            df["sample_date"] = utils.parse_dates(df["sample_date"], PFAS_DATE_FORMAT)
        if "report_result" in df.columns:
            df["report_result"] = utils.to_numeric(df["report_result"])
        logger.info(f"Read {len(df)} PFAS rows from {full_path}")
        return df

    def read_short_names(self, path: str) -> pd.DataFrame:
        full_path = self._existing(path)
        df = utils.clean_names(pd.read_excel(full_path, dtype=str, engine='openpyxl'))
        if "parameter_code" not in df.columns:
            raise InputSchemaError(f"Short-name lookup {full_path} has no parameter_code column")
        return df

    def save_chart(self, fig, path: str, dpi: int = 150) -> str:
        """Saves a matplotlib Figure as PNG and closes it."""
        from matplotlib import pyplot as plt

        full_path = self._resolve(path)
        create_directory(os.path.dirname(full_path) or ".")
        try:
            fig.savefig(full_path, dpi=dpi)
        finally:
            plt.close(fig)
        logger.info(f"Chart saved to {full_path}")
        return full_path
