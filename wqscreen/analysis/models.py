# wqscreen/analysis/models.py
"""
Constants, settings and exceptions for the screening jobs.

Regulatory constants (metal sets, hardness caps, correction coefficients)
live here so the analysis modules never repeat the literals.
"""
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, FrozenSet, Optional, Tuple


class WQScreenError(Exception):
    """Base class for wqscreen errors."""


class InputSchemaError(WQScreenError):
    """An input table is missing required columns."""


class CriteriaValidationError(WQScreenError):
    """The criteria coefficient table failed validation."""


class ConfigError(WQScreenError):
    """A configuration file or section is unusable."""


# --- Hardness-dependent metals (NMED 20.6.4.900 NMAC) ---
HARDNESS_DEPENDENT_METALS: FrozenSet[str] = frozenset({
    "Cadmium", "Chromium III", "Copper",
    "Lead", "Manganese", "Nickel", "Silver", "Zinc",
})
# Aluminum is screened separately, depending on flow condition.
ALUMINUM = "Aluminum"
CADMIUM = "Cadmium"
LEAD = "Lead"
HARDNESS_PARAMETER = "Hardness"

# Upper end of the applicable hardness range (mg CaCO3/L)
ALUMINUM_HARDNESS_CAP = 220.0
METAL_HARDNESS_CAP = 400.0

# --- Criteria class labels in the coefficient workbook ---
ACUTE_LABEL = "Acute aquatic life"
CHRONIC_LABEL = "Chronic aquatic life"

# --- Field preparation codes ---
PREP_FILTERED = "F"
PREP_UNFILTERED = "UF"
PREP_ULTRAFILTERED = "F10u"
FILTERED_PREP_CODES: FrozenSet[str] = frozenset({PREP_FILTERED, PREP_ULTRAFILTERED})

# --- Sample types ---
SAMPLE_TYPE_BASEFLOW = "WS"
SAMPLE_TYPE_STORMFLOW = "WT"

# Aluminum (field preparation code, sample type) pairs subject to screening
ALUMINUM_SCREENING_CASES: Tuple[Tuple[str, str], ...] = (
    (PREP_UNFILTERED, SAMPLE_TYPE_BASEFLOW),
    (PREP_ULTRAFILTERED, SAMPLE_TYPE_STORMFLOW),
)

DETECTED_YES = "Y"


@dataclass(frozen=True)
class CorrectionFactor:
    """Hardness-dependent conversion factor: intercept - slope * ln(hardness)."""
    intercept: float
    slope: float


# Metals whose conversion factor depends on hardness instead of the table CF.
# The chronic Lead entry is identical to the acute one in the source workbook
# logic; it is reproduced as-is pending confirmation by a domain expert.
ACUTE_CORRECTIONS: Dict[str, CorrectionFactor] = {
    CADMIUM: CorrectionFactor(intercept=1.136672, slope=0.041838),
    LEAD: CorrectionFactor(intercept=1.46203, slope=0.145712),
}
CHRONIC_CORRECTIONS: Dict[str, CorrectionFactor] = {
    CADMIUM: CorrectionFactor(intercept=1.101672, slope=0.041838),
    LEAD: CorrectionFactor(intercept=1.46203, slope=0.145712),
}

# Columns the sample export must provide
SAMPLE_REQUIRED_COLUMNS: Tuple[str, ...] = (
    "location_id", "sample_date", "sample_type", "field_sample_id",
    "parameter_name", "field_preparation_code", "detected",
    "report_result", "report_units",
)
CRITERIA_REQUIRED_COLUMNS: Tuple[str, ...] = (
    "metal", "criteria", "m", "b", "conversion_factor",
)
HARDNESS_KEY: Tuple[str, ...] = ("location_id", "sample_date", "sample_type")


# --- PFAS chart ---
PFAS_SAMPLE_PURPOSE = "REG"
PFAS_LAB_METHOD = "EPA:1633"
PFAS_GAGE_LOCATIONS: Tuple[str, ...] = ("E121", "E122", "E123")
PFAS_GAGE_DATES: Tuple[date, ...] = (date(2024, 7, 30), date(2024, 6, 20))
PFAS_DATE_FORMAT = "%m-%d-%Y"
PFAS_COLUMNS: Tuple[str, ...] = (
    "location_alias", "parameter_name", "parameter_code", "detected",
    "report_result", "report_units", "sample_type", "sample_date",
)
PFAS_PANEL_LABELS: Dict[str, str] = {
    "WG": "Groundwater 10/24/2024",
    "WS": "Baseflow 7/30/2024",
    "WT": "Stormflow 6/20/2024",
}
PFAS_PALETTE_SIZE = 20


@dataclass
class HardnessSettings:
    """File locations and options for the hardness screen."""
    sample_data_path: str = "Data/StreamGages_Sandia_N3B_Metals_Gen_Chem.csv"
    criteria_path: str = "Data/acute_chronic_hard_dep_calc.xlsx"
    output_path: str = "Output/metal_hardness_screen.xlsx"
    strict_criteria: bool = False


@dataclass
class PfasSettings:
    """File locations and palette options for the PFAS chart."""
    alluvial_path: str = "Data/Sandia_Alluvial_PFAS_2024_Intellus_EXPORT_10_26_2025.csv"
    gage_path: str = "Data/Sandia_Gage_PFAS_2024_Intellus_EXPORT_10_26_2025.csv"
    short_name_path: str = "Data/pfas_parameter_code_short_name.xlsx"
    output_path: str = "Output/stacked_bar/PFAS_Upper_Sandia_Stacked_Bar_Plot_2024.png"
    palette: str = "plasma"
    seed: Optional[int] = None
    gage_locations: Tuple[str, ...] = field(default=PFAS_GAGE_LOCATIONS)


DEFAULT_HARDNESS_SETTINGS = HardnessSettings()
DEFAULT_PFAS_SETTINGS = PfasSettings()
