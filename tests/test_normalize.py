"""Tests de normalisation."""

from concordauto.normalize import display_form, normalize, safe_str


def test_normalize_basic() -> None:
    # Espaces multiples → espace simple, lower, strip
    assert normalize("  Honda  ") == "honda"
    assert normalize("  Land   Rover ") == "land rover"


def test_normalize_whitespace() -> None:
    assert normalize("a\t\n  b") == "a b"
    assert normalize("   ") == ""


def test_normalize_strips_punctuation() -> None:
    assert normalize("EX-L") == "exl"
    assert normalize("C.R.V") == "crv"
    assert normalize("Corolla (E210)") == "corolla e210"


def test_normalize_keeps_digits_and_letters() -> None:
    assert normalize("320i") == "320i"
    assert normalize("Série 3") == "série 3"
    assert normalize("A4 2.0 TDI") == "a4 20 tdi"


def test_normalize_nfkc() -> None:
    assert normalize("ＡＢＣ") == "abc"


def test_normalize_none_nan() -> None:
    assert normalize(None) == ""
    assert normalize(float("nan")) == ""


def test_normalize_same_key_for_case_and_punctuation_drift() -> None:
    assert normalize("CR-V") == normalize("cr.v") == "crv"
    assert normalize("HONDA") == normalize("honda")


def test_display_form_keeps_case() -> None:
    assert display_form("  Mercedes-Benz   C-Class ") == "Mercedes-Benz C-Class"
    assert display_form(None) == ""


def test_safe_str() -> None:
    assert safe_str(None) == ""
    assert safe_str(float("nan")) == ""
    assert safe_str(2020) == "2020"
