"""Tests du matching par champ."""

import pytest

from concordauto.config import ConfigError, MatchConfig
from concordauto.matching.matcher import FieldMatcher
from concordauto.matching.schema import MatchStatus

# Score construit : une substitution sur 10 caractères, sans préfixe commun → 90.0 exactement
TEN_CHARS = "abcdefghij"
POOL_90 = [("XBCDEFGHIJ", "xbcdefghij")]


@pytest.fixture
def makes() -> list[tuple[str, str]]:
    return [("Honda", "honda"), ("Toyota", "toyota"), ("Hyundai", "hyundai")]


def test_exact_match_case_insensitive(makes: list[tuple[str, str]]) -> None:
    result = FieldMatcher().match("honda", makes)
    assert result.status is MatchStatus.EXACT
    assert result.confidence == 100.0
    assert result.matched_value == "Honda"
    assert result.original_value == "honda"


def test_exact_match_surfaces_canonical_display() -> None:
    result = FieldMatcher().match("  ex l ", [("EX-L", "exl"), ("EX", "ex")])
    # "ex l" ≠ "exl" : pas d'égalité exacte, mais le libellé proposé est le canonique
    assert result.suggestions[0] == "EX-L"
    result = FieldMatcher().match("ex-l", [("EX-L", "exl"), ("EX", "ex")])
    assert result.status is MatchStatus.EXACT
    assert result.matched_value == "EX-L"


def test_exact_match_lists_ranked_suggestions() -> None:
    pool = [("Civic", "civic"), ("City", "city"), ("Accord", "accord"), ("CR-V", "crv")]
    result = FieldMatcher(MatchConfig(max_suggestions=3)).match("CIVIC", pool)
    assert result.status is MatchStatus.EXACT
    assert result.suggestions[0] == "Civic"
    assert len(result.suggestions) == 3
    assert "City" in result.suggestions

    single = FieldMatcher(MatchConfig(max_suggestions=1)).match("civic", pool)
    assert single.suggestions == ("Civic",)


def test_exact_match_regardless_of_pool_size() -> None:
    pool = [(f"Model{i}", f"model{i}") for i in range(2000)] + [("Camry", "camry")]
    result = FieldMatcher().match("CAMRY", pool)
    assert result.status is MatchStatus.EXACT
    assert result.confidence == 100.0


def test_empty_input_is_no_match(makes: list[tuple[str, str]]) -> None:
    for value in ("", "   ", None):
        result = FieldMatcher().match(value, makes)
        assert result.status is MatchStatus.NO_MATCH
        assert result.confidence == 0.0
        assert result.suggestions == ()


def test_empty_pool_is_no_match() -> None:
    result = FieldMatcher().match("Honda", [])
    assert result.status is MatchStatus.NO_MATCH
    assert result.confidence == 0.0
    assert result.matched_value is None
    assert result.suggestions == ()


def test_auto_correct_threshold_boundary() -> None:
    at = FieldMatcher(MatchConfig(auto_correct_threshold=90, review_threshold=70)).match(TEN_CHARS, POOL_90)
    assert at.confidence == 90.0
    assert at.status is MatchStatus.AUTO_CORRECTED
    assert at.matched_value == "XBCDEFGHIJ"

    below = FieldMatcher(MatchConfig(auto_correct_threshold=91, review_threshold=70)).match(TEN_CHARS, POOL_90)
    assert below.status is MatchStatus.NEEDS_REVIEW
    assert below.matched_value is None


def test_review_threshold_boundary() -> None:
    at = FieldMatcher(MatchConfig(auto_correct_threshold=95, review_threshold=90)).match(TEN_CHARS, POOL_90)
    assert at.status is MatchStatus.NEEDS_REVIEW

    below = FieldMatcher(MatchConfig(auto_correct_threshold=95, review_threshold=91)).match(TEN_CHARS, POOL_90)
    assert below.status is MatchStatus.NO_MATCH
    assert below.matched_value is None
    # Les suggestions restent disponibles pour le relecteur
    assert below.suggestions == ("XBCDEFGHIJ",)


def test_typo_auto_corrected() -> None:
    result = FieldMatcher().match("Accrd", [("Accord", "accord"), ("Civic", "civic")])
    assert result.status is MatchStatus.AUTO_CORRECTED
    assert result.matched_value == "Accord"
    assert 90 <= result.confidence < 100


def test_medium_confidence_needs_review() -> None:
    result = FieldMatcher().match("Spirt", [("Sport", "sport")])
    assert result.status is MatchStatus.NEEDS_REVIEW
    assert result.matched_value is None
    assert result.suggestions == ("Sport",)


def test_suggestions_limited_and_ranked() -> None:
    pool = [("Civic", "civic"), ("City", "city"), ("Civic Type R", "civic type r"), ("Accord", "accord"), ("CR-V", "crv")]
    result = FieldMatcher(MatchConfig(max_suggestions=3)).match("civc", pool)
    assert len(result.suggestions) == 3
    assert result.suggestions[0] == "Civic"
    assert "Accord" not in result.suggestions


def test_match_deterministic(makes: list[tuple[str, str]]) -> None:
    matcher = FieldMatcher()
    assert matcher.match("Hyundia", makes) == matcher.match("Hyundia", makes)


def test_confidence_within_bounds(makes: list[tuple[str, str]]) -> None:
    for value in ("h", "hon", "hondaa", "zzzzzzzzzzzzzz", "toyota hilux"):
        result = FieldMatcher().match(value, makes)
        assert 0.0 <= result.confidence <= 100.0


def test_invalid_threshold_order_rejected() -> None:
    with pytest.raises(ConfigError, match="auto_correct_threshold doit être >= review_threshold"):
        FieldMatcher(MatchConfig(auto_correct_threshold=60, review_threshold=70))


def test_negative_threshold_rejected() -> None:
    with pytest.raises(ConfigError, match="review_threshold doit être entre 0 et 100"):
        MatchConfig(auto_correct_threshold=90, review_threshold=-1)
