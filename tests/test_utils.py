# tests/test_utils.py
import pytest
import numpy as np
import pandas as pd

from wqscreen.core import utils


@pytest.fixture
def intellus_frame():
    """A fixture with column headers as they appear in an Intellus export."""
    return pd.DataFrame(columns=[
        "Location ID", "Sample Date", "Sample Type", "Field Sample ID",
        "Parameter Name", "Field Preparation Code", "Detected",
        "Report Result", "Report Units", "lab_method",
    ])


def test_clean_names_snake_case(intellus_frame):
    cleaned = utils.clean_names(intellus_frame)
    assert list(cleaned.columns) == [
        "location_id", "sample_date", "sample_type", "field_sample_id",
        "parameter_name", "field_preparation_code", "detected",
        "report_result", "report_units", "lab_method",
    ]


def test_clean_names_does_not_modify_input(intellus_frame):
    utils.clean_names(intellus_frame)
    assert "Location ID" in intellus_frame.columns


@pytest.mark.parametrize("raw, expected", [
    ("sampleDate", "sample_date"),
    ("  Report  Result (ug/L) ", "report_result_ug_l"),
    ("% Recovery", "percent_recovery"),
    ("pH", "p_h"),
    ("---", "x"),
])
def test_clean_names_special_cases(raw, expected):
    df = pd.DataFrame(columns=[raw])
    assert list(utils.clean_names(df).columns) == [expected]


def test_clean_names_deduplicates():
    df = pd.DataFrame([[1, 2, 3]], columns=["Result", "result", "RESULT"])
    assert list(utils.clean_names(df).columns) == ["result", "result_2", "result_3"]


def test_to_numeric_coerces_bad_text_to_nan():
    values = pd.Series(["1.5", " 2 ", "", "<0.5", None, "ND"], dtype=object)
    out = utils.to_numeric(values)

    assert out.dtype == float
    assert out.iloc[0] == 1.5
    assert out.iloc[1] == 2.0
    assert out.iloc[2:].isna().all()


def test_parse_dates_month_day_year():
    values = pd.Series(["07/30/2024", "6/20/2024", "2024-06-20", None])
    out = utils.parse_dates(values)

    assert out.iloc[0] == pd.Timestamp(2024, 7, 30)
    assert out.iloc[1] == pd.Timestamp(2024, 6, 20)
    assert pd.isna(out.iloc[2])
    assert pd.isna(out.iloc[3])


def test_missing_columns(intellus_frame):
    cleaned = utils.clean_names(intellus_frame)
    assert utils.missing_columns(cleaned, ["location_id", "filtered"]) == ["filtered"]


def test_strip_text_leaves_non_strings():
    out = utils.strip_text(pd.Series([" a ", 1.0, np.nan], dtype=object))
    assert out.iloc[0] == "a"
    assert out.iloc[1] == 1.0
    assert pd.isna(out.iloc[2])
