"""Tests des types de résultat."""

import pytest

from concordauto.matching.schema import FieldMatchResult, InputRow, MatchStatus, RowVerdict


def test_status_total_order() -> None:
    assert MatchStatus.EXACT > MatchStatus.AUTO_CORRECTED > MatchStatus.NEEDS_REVIEW > MatchStatus.NO_MATCH
    assert sorted(MatchStatus) == [
        MatchStatus.NO_MATCH,
        MatchStatus.NEEDS_REVIEW,
        MatchStatus.AUTO_CORRECTED,
        MatchStatus.EXACT,
    ]


def test_status_worst() -> None:
    assert MatchStatus.worst(MatchStatus.EXACT, MatchStatus.NEEDS_REVIEW, MatchStatus.AUTO_CORRECTED) is (
        MatchStatus.NEEDS_REVIEW
    )
    assert MatchStatus.worst(MatchStatus.EXACT, MatchStatus.EXACT) is MatchStatus.EXACT


def test_status_is_resolved() -> None:
    assert MatchStatus.EXACT.is_resolved
    assert MatchStatus.AUTO_CORRECTED.is_resolved
    assert not MatchStatus.NEEDS_REVIEW.is_resolved
    assert not MatchStatus.NO_MATCH.is_resolved


def test_input_row_from_dict_camel_case() -> None:
    row = InputRow.from_dict({"rowIndex": 4, "make": "Honda", "model": "Accord", "variant": None})
    assert row == InputRow(4, "Honda", "Accord", "")
    assert InputRow.from_dict({"row_index": "2", "make": "a", "model": "b", "variant": "c"}).row_index == 2


def test_input_row_from_dict_missing_index() -> None:
    with pytest.raises(ValueError, match="rowIndex manquant"):
        InputRow.from_dict({"make": "Honda"})


def test_verdict_to_dict_shape() -> None:
    exact = FieldMatchResult("Honda", "honda", "Honda", 100.0, MatchStatus.EXACT, ("Honda",))
    review = FieldMatchResult("Spirt", "spirt", None, 87.2, MatchStatus.NEEDS_REVIEW, ("Sport",))
    verdict = RowVerdict(7, exact, exact, review, False, True, "Honda", "Honda", None)
    d = verdict.to_dict()
    assert d["rowIndex"] == 7
    assert d["isValid"] is False
    assert d["needsReview"] is True
    assert d["correctedVariant"] is None
    assert d["variantResult"]["status"] == "needs_review"
    assert d["variantResult"]["suggestions"] == ["Sport"]
    assert verdict.category == "needs_review"
    assert verdict.worst_status is MatchStatus.NEEDS_REVIEW
