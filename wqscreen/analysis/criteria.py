# wqscreen/analysis/criteria.py
"""
Loading and validation of the hardness-dependent criteria coefficients.

The coefficient workbook has one row per (metal, criteria class) with the
slope `m`, intercept `b` and `conversion_factor` of
    criteria = exp(m * ln(hardness) + b) * CF
Rows are split into an acute and a chronic lookup table keyed by metal.
"""
import logging
import pandas as pd
from typing import Tuple

from ..core import utils
from .models import (
    ACUTE_LABEL,
    CHRONIC_LABEL,
    CRITERIA_REQUIRED_COLUMNS,
    CriteriaValidationError,
    InputSchemaError,
)

logger = logging.getLogger(__name__)

ACUTE_COLUMNS = {"m": "mA", "b": "bA", "conversion_factor": "conversion_factor_A"}
CHRONIC_COLUMNS = {"m": "mC", "b": "bC", "conversion_factor": "conversion_factor_C"}


def _check_unique_metals(table: pd.DataFrame, label: str):
    dupes = table.loc[table["metal"].duplicated(keep=False), "metal"]
    if not dupes.empty:
        names = sorted(dupes.unique().tolist())
        raise CriteriaValidationError(
            f"Duplicate metal rows in '{label}' criteria: {names}"
        )


def _project(criteria_df: pd.DataFrame, label: str, columns: dict) -> pd.DataFrame:
    table = criteria_df.loc[criteria_df["criteria"] == label, ["metal", *columns]]
    table = table.rename(columns=columns).reset_index(drop=True)
    _check_unique_metals(table, label)
    return table


def find_unmatched_labels(criteria_df: pd.DataFrame) -> pd.DataFrame:
    """Returns the rows whose class label is neither acute nor chronic."""
    labels = criteria_df["criteria"]
    return criteria_df.loc[~labels.isin([ACUTE_LABEL, CHRONIC_LABEL])]


def prepare_criteria(raw: pd.DataFrame) -> pd.DataFrame:
    """
    Cleans a raw coefficient table.

    Column names are normalized, the class label is trimmed and the numeric
    columns are coerced (empty or malformed cells become NaN).
    """
    df = utils.clean_names(raw)
    missing = utils.missing_columns(df, CRITERIA_REQUIRED_COLUMNS)
    if missing:
        raise InputSchemaError(f"Criteria table is missing columns: {missing}")

    df["criteria"] = utils.strip_text(df["criteria"])
    for col in ("m", "b", "conversion_factor"):
        df[col] = utils.to_numeric(df[col])
    return df


def split_criteria(criteria_df: pd.DataFrame, strict: bool = False) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """
    Splits a cleaned coefficient table into acute and chronic lookup tables.

    Args:
        criteria_df: Output of prepare_criteria()
        strict: If True, rows with an unrecognized class label raise
            CriteriaValidationError instead of being dropped.

    Returns:
        Tuple of (acute, chronic) DataFrames with columns
        [metal, mA, bA, conversion_factor_A] and [metal, mC, bC, conversion_factor_C].

    Raises:
        CriteriaValidationError: duplicate metal within a class, or an
            unmatched label in strict mode.
    """
    unmatched = find_unmatched_labels(criteria_df)
    if not unmatched.empty:
        labels = sorted(unmatched["criteria"].fillna("<missing>").unique().tolist())
        if strict:
            raise CriteriaValidationError(
                f"{len(unmatched)} criteria row(s) have unrecognized labels: {labels}"
            )
        logger.debug(f"Dropping {len(unmatched)} criteria row(s) with labels {labels}")

    acute = _project(criteria_df, ACUTE_LABEL, ACUTE_COLUMNS)
    chronic = _project(criteria_df, CHRONIC_LABEL, CHRONIC_COLUMNS)
    logger.info(f"Criteria loaded: {len(acute)} acute, {len(chronic)} chronic metals")
    return acute, chronic
