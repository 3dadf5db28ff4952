"""Tests du module config."""

import dataclasses
from pathlib import Path

import pytest

from concordauto.config import AppConfig, ColumnMapping, ConfigError, MatchConfig


def test_match_config_defaults() -> None:
    config = MatchConfig()
    assert config.auto_correct_threshold == 90
    assert config.review_threshold == 70
    assert config.max_suggestions == 3


def test_match_config_from_dict_camel_case() -> None:
    config = MatchConfig.from_dict({"autoCorrectThreshold": 85, "reviewThreshold": 60, "maxSuggestions": 5})
    assert config == MatchConfig(85.0, 60.0, 5)


def test_match_config_from_dict_snake_case() -> None:
    config = MatchConfig.from_dict({"auto_correct_threshold": "95", "review_threshold": 75})
    assert config.auto_correct_threshold == 95.0
    assert config.max_suggestions == 3


def test_config_validation_threshold_order() -> None:
    with pytest.raises(ConfigError, match="auto_correct_threshold doit être >= review_threshold"):
        MatchConfig.from_dict({"auto_correct_threshold": 50, "review_threshold": 70})


def test_config_validation_score_out_of_range() -> None:
    with pytest.raises(ConfigError, match="auto_correct_threshold"):
        MatchConfig.from_dict({"auto_correct_threshold": 150})


def test_config_validation_max_suggestions() -> None:
    with pytest.raises(ConfigError, match="max_suggestions doit être >= 1"):
        MatchConfig(max_suggestions=0)


def test_config_validation_not_a_number() -> None:
    with pytest.raises(ConfigError, match="Valeur de seuil invalide"):
        MatchConfig.from_dict({"review_threshold": "beaucoup"})


def test_match_config_is_immutable() -> None:
    config = MatchConfig()
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.review_threshold = 95  # type: ignore[misc]
    assert config.review_threshold == 70


def test_app_config_nested_match_section() -> None:
    config = AppConfig.from_dict(
        {
            "match": {"auto_correct_threshold": 92},
            "input_columns": {"make": "Marque", "model": "Modèle", "variant": "Version"},
            "input_sheet": "Stock",
            "overwrite_mode": "if_empty",
        }
    )
    assert config.match.auto_correct_threshold == 92
    assert config.input_columns == ColumnMapping("Marque", "Modèle", "Version")
    assert config.catalog_columns == ColumnMapping()
    assert config.input_sheet == "Stock"
    assert config.overwrite_mode == "if_empty"


def test_app_config_flat_thresholds() -> None:
    config = AppConfig.from_dict({"reviewThreshold": 65})
    assert config.match.review_threshold == 65


def test_config_validation_invalid_overwrite_mode() -> None:
    with pytest.raises(ConfigError, match="overwrite_mode invalide"):
        AppConfig.from_dict({"overwrite_mode": "invalid"})


def test_column_mapping_duplicate() -> None:
    with pytest.raises(ConfigError, match="en double"):
        ColumnMapping.from_dict({"make": "x", "model": "x"})


def test_app_config_load(tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text(
        """
        {
            "match": {"auto_correct_threshold": 88, "review_threshold": 66, "max_suggestions": 2},
            "catalog_sheet": "Référentiel"
        }
    """,
        encoding="utf-8",
    )
    config = AppConfig.load(config_path)
    assert config.match == MatchConfig(88, 66, 2)
    assert config.catalog_sheet == "Référentiel"
