# wqscreen/analysis/hardness_screen.py
"""
Hardness-dependent metal screening.

Surface water samples for the regulated metals are joined to the filtered
hardness measured in the same sample event, then compared to acute and
chronic aquatic life criteria (ug/L):

    Acute:   exp(mA * ln(hardness) + bA) * CF
    Chronic: exp(mC * ln(hardness) + bC) * CF

Hardness is capped at 220 mg/L for aluminum and 400 mg/L for the other
metals. Cadmium and lead use a hardness-dependent CF. Missing values
propagate as NaN and never produce an exceedance.
"""
import logging
import numpy as np
import pandas as pd
from typing import Dict

from ..core import utils
from .models import (
    ALUMINUM,
    ALUMINUM_HARDNESS_CAP,
    ALUMINUM_SCREENING_CASES,
    ACUTE_CORRECTIONS,
    CHRONIC_CORRECTIONS,
    DETECTED_YES,
    FILTERED_PREP_CODES,
    HARDNESS_DEPENDENT_METALS,
    HARDNESS_KEY,
    HARDNESS_PARAMETER,
    METAL_HARDNESS_CAP,
    PREP_FILTERED,
    CorrectionFactor,
)

logger = logging.getLogger(__name__)

_METALS = sorted(HARDNESS_DEPENDENT_METALS)


def _is_filtered(samples: pd.DataFrame) -> pd.Series:
    # Intellus exports carry an explicit Y/N 'filtered' column
    if "filtered" in samples.columns:
        return samples["filtered"] == "Y"
    return samples["field_preparation_code"].isin(sorted(FILTERED_PREP_CODES))


def extract_hardness(samples: pd.DataFrame) -> pd.DataFrame:
    """
    Selects detected, filtered hardness results keyed by sample event.

    Returns:
        DataFrame with columns location_id, sample_date, sample_type,
        hardness_field_sample_id, hardness, hardness_units.
        Duplicate keys are kept (the downstream join fans out).
    """
    mask = (
        (samples["parameter_name"] == HARDNESS_PARAMETER)
        & _is_filtered(samples)
        & (samples["detected"] == DETECTED_YES)
    )
    hardness = samples.loc[
        mask, [*HARDNESS_KEY, "field_sample_id", "report_result", "report_units"]
    ].rename(columns={
        "field_sample_id": "hardness_field_sample_id",
        "report_result": "hardness",
        "report_units": "hardness_units",
    })
    hardness["hardness"] = utils.to_numeric(hardness["hardness"])
    hardness = hardness.reset_index(drop=True)

    n_dupes = int(hardness.duplicated(subset=list(HARDNESS_KEY)).sum())
    if n_dupes:
        logger.warning(
            f"{n_dupes} duplicate hardness key(s) found; matching metal rows will be repeated"
        )
    logger.info(f"Extracted {len(hardness)} hardness measurements")
    return hardness


def select_screening_set(samples: pd.DataFrame) -> pd.DataFrame:
    """
    Selects sample rows eligible for hardness-dependent screening.

    - Dissolved (filtered, "F") results for the eight hardness-dependent metals
    - Total ("UF") aluminum in baseflow ("WS")
    - Ultrafiltered ("F10u") aluminum in stormflow ("WT")
    """
    param = samples["parameter_name"]
    prep = samples["field_preparation_code"]
    sample_type = samples["sample_type"]

    mask = param.isin(_METALS) & (prep == PREP_FILTERED)
    for prep_code, stype in ALUMINUM_SCREENING_CASES:
        mask |= (param == ALUMINUM) & (prep == prep_code) & (sample_type == stype)

    selected = samples.loc[mask].reset_index(drop=True)
    logger.info(f"Selected {len(selected)} of {len(samples)} rows for screening")
    return selected


def attach_hardness_and_coefficients(screen: pd.DataFrame, hardness: pd.DataFrame,
                                     acute: pd.DataFrame, chronic: pd.DataFrame) -> pd.DataFrame:
    """Left-joins hardness (by sample event) and acute/chronic coefficients (by metal)."""
    out = screen.merge(hardness, on=list(HARDNESS_KEY), how="left")
    out = out.merge(acute, left_on="parameter_name", right_on="metal", how="left").drop(columns="metal")
    out = out.merge(chronic, left_on="parameter_name", right_on="metal", how="left").drop(columns="metal")

    n_missing = int(out["hardness"].isna().sum())
    if n_missing:
        logger.warning(f"{n_missing} screened row(s) have no matching hardness")
    return out


def clamp_hardness(df: pd.DataFrame) -> pd.DataFrame:
    """
    Caps hardness at the top of the applicable range.

    Aluminum above 220 mg/L becomes 220; the other regulated metals above
    400 mg/L become 400. Values at or below the cap, and NaN, are unchanged.
    """
    out = df.copy()
    param = out["parameter_name"]
    hardness = utils.to_numeric(out["hardness"])

    hardness = hardness.mask((param == ALUMINUM) & (hardness > ALUMINUM_HARDNESS_CAP), ALUMINUM_HARDNESS_CAP)
    hardness = hardness.mask(param.isin(_METALS) & (hardness > METAL_HARDNESS_CAP), METAL_HARDNESS_CAP)
    out["hardness"] = hardness
    return out


def _criteria(df: pd.DataFrame, m_col: str, b_col: str, cf_col: str,
              corrections: Dict[str, CorrectionFactor]) -> pd.Series:
    # non-positive hardness has no defined criterion
    hardness = df["hardness"].astype(float)
    with np.errstate(divide="ignore", invalid="ignore"):
        ln_hardness = np.log(hardness.where(hardness > 0))
        base = np.exp(df[m_col] * ln_hardness + df[b_col])

        factor = df[cf_col].astype(float)
        for metal, corr in corrections.items():
            factor = factor.mask(df["parameter_name"] == metal,
                                 corr.intercept - corr.slope * ln_hardness)
        return base * factor


def calculate_criteria(df: pd.DataFrame) -> pd.DataFrame:
    """Adds acute_criteria and chronic_criteria columns (ug/L)."""
    out = df.copy()
    out["acute_criteria"] = _criteria(out, "mA", "bA", "conversion_factor_A", ACUTE_CORRECTIONS)
    out["chronic_criteria"] = _criteria(out, "mC", "bC", "conversion_factor_C", CHRONIC_CORRECTIONS)
    return out


def flag_exceedances(df: pd.DataFrame) -> pd.DataFrame:
    """
    Adds 0/1 columns acute_exceedance, chronic_exceedance and exceeds.

    A row exceeds only if it was detected and its result is strictly
    greater than the criteria; comparisons against NaN are false.
    """
    out = df.copy()
    detected = out["detected"] == DETECTED_YES
    out["acute_exceedance"] = ((out["report_result"] > out["acute_criteria"]) & detected).astype(int)
    out["chronic_exceedance"] = ((out["report_result"] > out["chronic_criteria"]) & detected).astype(int)
    out["exceeds"] = ((out["acute_exceedance"] == 1) | (out["chronic_exceedance"] == 1)).astype(int)
    return out


def screen_metals(samples: pd.DataFrame, acute: pd.DataFrame, chronic: pd.DataFrame) -> pd.DataFrame:
    """
    Runs the full screen on cleaned sample data.

    Args:
        samples: Cleaned sample table (see repository.read_sample_data)
        acute: Acute coefficient table (metal, mA, bA, conversion_factor_A)
        chronic: Chronic coefficient table (metal, mC, bC, conversion_factor_C)

    Returns:
        One row per screened sample with hardness, coefficients, criteria and
        exceedance flags appended.
    """
    hardness = extract_hardness(samples)
    screen = select_screening_set(samples)
    screen = attach_hardness_and_coefficients(screen, hardness, acute, chronic)
    screen = clamp_hardness(screen)
    screen = calculate_criteria(screen)
    screen = flag_exceedances(screen)

    logger.info(
        f"Screened {len(screen)} rows: {int(screen['acute_exceedance'].sum())} acute, "
        f"{int(screen['chronic_exceedance'].sum())} chronic exceedance(s)"
    )
    return screen
