# tests/conftest.py
import logging
import pytest
import numpy as np
import pandas as pd

SAMPLE_COLUMNS = [
    "location_id", "sample_date", "sample_type", "field_sample_id",
    "parameter_name", "field_preparation_code", "detected",
    "report_result", "report_units",
]


@pytest.fixture
def make_samples():
    """Returns a builder for cleaned sample tables from tuples in SAMPLE_COLUMNS order."""
    def _make(rows):
        df = pd.DataFrame(rows, columns=SAMPLE_COLUMNS)
        df["sample_date"] = pd.to_datetime(df["sample_date"])
        df["report_result"] = df["report_result"].astype(float)
        return df
    return _make


@pytest.fixture
def acute():
    """Acute coefficients (illustrative values in the workbook layout)."""
    return pd.DataFrame({
        "metal": ["Zinc", "Cadmium", "Lead", "Aluminum", "Copper"],
        "mA": [0.8473, 0.9789, 1.273, 1.3695, 0.9422],
        "bA": [0.884, -3.866, -1.46, 1.8308, -1.7],
        "conversion_factor_A": [0.978, np.nan, np.nan, 1.0, 0.96],
    })


@pytest.fixture
def chronic():
    """Chronic coefficients (illustrative values in the workbook layout)."""
    return pd.DataFrame({
        "metal": ["Zinc", "Cadmium", "Lead", "Aluminum", "Copper"],
        "mC": [0.8473, 0.7977, 1.273, 1.3695, 0.8545],
        "bC": [0.884, -3.909, -4.705, 0.9161, -1.702],
        "conversion_factor_C": [0.986, np.nan, np.nan, 1.0, 0.96],
    })


@pytest.fixture(autouse=True)
def reset_root_handlers():
    """Removes the console/file handlers installed by setup_main_logging."""
    yield
    root = logging.getLogger()
    for handler in root.handlers[:]:
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()
