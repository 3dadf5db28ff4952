"""Tests du module report."""

import pytest

from concordauto.config import MatchConfig
from concordauto.matching.index import build_index
from concordauto.matching.schema import CanonicalEntry, InputRow, RowVerdict
from concordauto.matching.validator import BatchValidator
from concordauto.report import build_report_df, print_report_console, verdicts_to_df


@pytest.fixture
def sample_verdicts() -> list[RowVerdict]:
    index = build_index([CanonicalEntry("Honda", "Accord", "Sport")])
    rows = [
        InputRow(0, "Honda", "Accord", "Sport"),
        InputRow(1, "Honda", "Accrd", "Spirt"),
        InputRow(2, "Zzzz", "Qqqq", "Wwww"),
    ]
    return BatchValidator().validate_batch(rows, index)


@pytest.fixture
def sample_config() -> MatchConfig:
    return MatchConfig(auto_correct_threshold=90, review_threshold=70, max_suggestions=3)


def test_build_report_df_counts(sample_verdicts: list[RowVerdict], sample_config: MatchConfig) -> None:
    df = build_report_df(sample_verdicts, sample_config)
    assert df[df["Key"] == "nb_rows"]["Value"].values[0] == 3
    assert df[df["Key"] == "nb_valid"]["Value"].values[0] == 1
    assert df[df["Key"] == "nb_needs_review"]["Value"].values[0] == 1
    assert df[df["Key"] == "nb_invalid"]["Value"].values[0] == 1
    assert df[df["Key"] == "worst_no_match"]["Value"].values[0] == 1


def test_build_report_df_contains_params(sample_verdicts: list[RowVerdict], sample_config: MatchConfig) -> None:
    df = build_report_df(sample_verdicts, sample_config)
    keys = df["Key"].tolist()
    assert "auto_correct_threshold" in keys
    assert "review_threshold" in keys
    assert "version" in keys
    assert "timestamp" in keys


def test_verdicts_to_df(sample_verdicts: list[RowVerdict]) -> None:
    df = verdicts_to_df(sample_verdicts)
    assert len(df) == 9
    review = df[(df["row_index"] == 1) & (df["field"] == "variant")].iloc[0]
    assert review["status"] == "needs_review"
    assert review["suggestions"] == "Sport"
    assert review["matched"] == ""


def test_print_report_console_no_error(
    sample_verdicts: list[RowVerdict], sample_config: MatchConfig, capsys: pytest.CaptureFixture
) -> None:
    print_report_console(sample_verdicts, sample_config)
    out = capsys.readouterr().out
    assert "ConcordAuto Report" in out
    assert "Lignes" in out
    assert "3" in out
