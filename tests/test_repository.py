# tests/test_repository.py
import pytest
import numpy as np
import pandas as pd

from wqscreen.services.repository import TableRepository
from wqscreen.analysis.models import CriteriaValidationError, InputSchemaError
from wqscreen.analysis import hardness_screen

SAMPLE_CSV = """Location ID,Sample Date,Sample Type,Field Sample ID,Parameter Name,Field Preparation Code,Filtered,Detected,Report Result,Report Units
E060.1,07/30/2024,WS,HW-1,Hardness,F,Y,Y,120,mg/L
E060.1,07/30/2024,WS,MW-1,Zinc,F,Y,Y,250,ug/L
E060.1,07/30/2024,WS,MW-2,Copper,F,Y,N,<2.0,ug/L
E060.1,07/30/2024,WS,MW-3,Aluminum,UF,N,Y,3000,ug/L
E060.1,07/30/2024,WS,MW-4,Lead,UF,N,Y,5,ug/L
"""


@pytest.fixture
def repo(tmp_path):
    (tmp_path / "Data").mkdir()
    (tmp_path / "Data" / "samples.csv").write_text(SAMPLE_CSV)
    criteria = pd.DataFrame({
        "Metal": ["Zinc", "Zinc", "Copper", "Copper", "Aluminum", "Aluminum"],
        "Criteria": ["Acute aquatic life", "Chronic aquatic life"] * 3,
        "m": [0.8473, 0.8473, 0.9422, 0.8545, 1.3695, 1.3695],
        "b": [0.884, 0.884, -1.7, -1.702, 1.8308, 0.9161],
        "Conversion Factor": [0.978, 0.986, 0.96, 0.96, 1.0, 1.0],
    })
    criteria.to_excel(tmp_path / "Data" / "criteria.xlsx", index=False, engine="openpyxl")
    return TableRepository(str(tmp_path))


class TestReadSampleData:

    def test_reads_and_cleans(self, repo):
        df = repo.read_sample_data("Data/samples.csv")

        assert len(df) == 5
        assert "field_preparation_code" in df.columns
        assert df["sample_date"].iloc[0] == pd.Timestamp(2024, 7, 30)
        assert df["report_result"].iloc[1] == 250.0
        # "<2.0" is not numeric
        assert np.isnan(df["report_result"].iloc[2])
        # other columns stay text
        assert df["detected"].iloc[0] == "Y"
        assert df["location_id"].iloc[0] == "E060.1"

    def test_missing_file_raises(self, repo):
        with pytest.raises(FileNotFoundError):
            repo.read_sample_data("Data/nope.csv")

    def test_missing_columns_raise(self, repo, tmp_path):
        (tmp_path / "Data" / "bad.csv").write_text("Location ID,Sample Date\nA,01/01/2024\n")
        with pytest.raises(InputSchemaError, match="report_result"):
            repo.read_sample_data("Data/bad.csv")


class TestReadCriteria:

    def test_split_tables(self, repo):
        acute, chronic = repo.read_criteria("Data/criteria.xlsx")

        assert acute["metal"].tolist() == ["Zinc", "Copper", "Aluminum"]
        assert chronic.set_index("metal").loc["Zinc", "conversion_factor_C"] == pytest.approx(0.986)

    def test_strict_mode_rejects_unknown_label(self, repo, tmp_path):
        df = pd.DataFrame({
            "metal": ["Zinc"], "criteria": ["Acute aquatic life (old)"],
            "m": [1.0], "b": [1.0], "conversion_factor": [1.0],
        })
        df.to_excel(tmp_path / "Data" / "odd.xlsx", index=False, engine="openpyxl")

        acute, chronic = repo.read_criteria("Data/odd.xlsx")
        assert acute.empty and chronic.empty
        with pytest.raises(CriteriaValidationError):
            repo.read_criteria("Data/odd.xlsx", strict=True)


class TestWriteScreeningResults:

    def test_round_trip_keeps_rows_and_columns(self, repo, tmp_path):
        samples = repo.read_sample_data("Data/samples.csv")
        acute, chronic = repo.read_criteria("Data/criteria.xlsx")
        results = hardness_screen.screen_metals(samples, acute, chronic)

        path = repo.write_screening_results(results, "Output/screen.xlsx")
        assert (tmp_path / "Output" / "screen.xlsx").exists()

        back = repo.read_screening_results(path)
        assert len(back) == len(results)
        assert list(back.columns) == list(results.columns)
        assert back["exceeds"].tolist() == results["exceeds"].tolist()

    def test_overwrites_existing_file(self, repo, tmp_path):
        first = pd.DataFrame({"a": [1, 2, 3]})
        second = pd.DataFrame({"b": [9]})
        repo.write_screening_results(first, "Output/out.xlsx")
        repo.write_screening_results(second, "Output/out.xlsx")

        back = repo.read_screening_results("Output/out.xlsx")
        assert list(back.columns) == ["b"]
        assert len(back) == 1

    def test_unwritable_path_raises(self, repo, tmp_path):
        # a file where the output directory should be
        (tmp_path / "blocked").write_text("")
        with pytest.raises(OSError):
            repo.write_screening_results(pd.DataFrame({"a": [1]}), "blocked/out.xlsx")


def test_screening_results_from_csv(repo):
    """End-to-end through the repository: Zinc exceeds, non-detect Copper does not."""
    samples = repo.read_sample_data("Data/samples.csv")
    acute, chronic = repo.read_criteria("Data/criteria.xlsx")
    results = hardness_screen.screen_metals(samples, acute, chronic).set_index("field_sample_id")

    # Lead is unfiltered so it is not screened
    assert sorted(results.index) == ["MW-1", "MW-2", "MW-3"]
    assert results.loc["MW-1", "exceeds"] == 1
    assert results.loc["MW-2", "exceeds"] == 0
    assert results.loc["MW-3", "hardness"] == 120.0
    assert results.loc["MW-1", "hardness_field_sample_id"] == "HW-1"
