import re
import logging
import pandas as pd
from typing import Iterable, List

logger = logging.getLogger(__name__)

SAMPLE_DATE_FORMAT = "%m/%d/%Y"


def _clean_name(name) -> str:
    """Converts a single column label to lower snake_case."""
    text = str(name).strip()
    text = text.replace("%", "percent").replace("#", "number")
    # split camelCase / PascalCase boundaries (SampleDate -> Sample_Date)
    text = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", text)
    text = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", text)
    text = re.sub(r"[^0-9a-zA-Z]+", "_", text)
    text = text.strip("_").lower()
    return text or "x"


def clean_names(df: pd.DataFrame) -> pd.DataFrame:
    """
    Normalizes DataFrame column names to snake_case.

    "Location ID" -> "location_id", "Sample Date" -> "sample_date",
    "fieldPreparationCode" -> "field_preparation_code".
    Collisions after cleaning get a numeric suffix (_2, _3, ...).

    Returns a new DataFrame; the input is not modified.
    """
    seen = {}
    new_columns: List[str] = []
    for col in df.columns:
        name = _clean_name(col)
        if name in seen:
            seen[name] += 1
            name = f"{name}_{seen[name]}"
        else:
            seen[name] = 1
        new_columns.append(name)

    out = df.copy()
    out.columns = new_columns
    return out


def strip_text(values: pd.Series) -> pd.Series:
    """Trims surrounding whitespace from string cells, leaving other cells as-is."""
    return values.map(lambda v: v.strip() if isinstance(v, str) else v)


def to_numeric(values: pd.Series) -> pd.Series:
    """Coerces text to float; empty or malformed values become NaN."""
    if values.dtype == object:
        values = strip_text(values)
    return pd.to_numeric(values, errors="coerce").astype(float)


def parse_dates(values: pd.Series, date_format: str = SAMPLE_DATE_FORMAT) -> pd.Series:
    """Parses date text with a fixed format. Unparseable entries become NaT."""
    parsed = pd.to_datetime(values, format=date_format, errors="coerce")
    n_bad = int(parsed.isna().sum() - values.isna().sum())
    if n_bad > 0:
        logger.warning(f"{n_bad} date value(s) did not match '{date_format}' and were set to NaT")
    return parsed


def missing_columns(df: pd.DataFrame, required: Iterable[str]) -> List[str]:
    return [col for col in required if col not in df.columns]
