"""
Tests for `domain/maturity.py`.

Covers the per-area cutoffs (5 / 3) and the overall cutoffs (4.5 / 2.5),
both inclusive at the lower bound.
"""

from __future__ import annotations

import pytest

from domain.maturity import (
    AreaLabel,
    MaturityLevel,
    OverallLabel,
    derive_area_label,
    derive_overall_label,
    get_result_texts,
    overall_level,
)


@pytest.mark.parametrize(
    "score, expected",
    [
        (0, MaturityLevel.LOW),
        (2, MaturityLevel.LOW),
        (3, MaturityLevel.MEDIUM),
        (4, MaturityLevel.MEDIUM),
        (5, MaturityLevel.HIGH),
        (6, MaturityLevel.HIGH),
    ],
)
def test_area_label_boundaries(score: int, expected: MaturityLevel) -> None:
    """Verify score -> level mapping for every point of the 0-6 scale."""

    label = derive_area_label(score)

    assert isinstance(label, AreaLabel)
    assert label.level is expected


@pytest.mark.parametrize(
    "average, expected",
    [
        (0.0, MaturityLevel.LOW),
        (2.49999, MaturityLevel.LOW),
        (2.5, MaturityLevel.MEDIUM),
        (4.49999, MaturityLevel.MEDIUM),
        (4.5, MaturityLevel.HIGH),
        (6.0, MaturityLevel.HIGH),
    ],
)
def test_overall_label_boundaries(average: float, expected: MaturityLevel) -> None:
    """Verify average -> tier mapping at and just below each cutoff."""

    label = derive_overall_label(average)

    assert isinstance(label, OverallLabel)
    assert label.level is expected
    assert overall_level(average) is expected


def test_area_and_overall_cutoffs_differ() -> None:
    """Verify 4.5 is high overall but medium as an area score."""

    assert derive_overall_label(4.5).level is MaturityLevel.HIGH
    assert derive_area_label(4.5).level is MaturityLevel.MEDIUM


def test_labels_carry_display_metadata() -> None:
    """Verify the area label has text and colors, the overall label headline and summary."""

    area = derive_area_label(6, "de")
    overall = derive_overall_label(0.0, "de")

    assert area.text == "Geringes Risiko / Hohe Reife"
    assert "green" in area.color and "green" in area.bg_color
    assert overall.headline == "Dein Security-Check: Hoher Handlungsbedarf"
    assert overall.summary


def test_labels_follow_language_with_fallback() -> None:
    """Verify English texts and the German fallback for unknown languages."""

    assert derive_area_label(0, "en").text == "High risk / Low maturity"
    assert derive_overall_label(6.0, "fr").headline == derive_overall_label(6.0, "de").headline


def test_result_texts_exist_for_every_level() -> None:
    """Verify a short explanatory text exists per level."""

    for language in ("de", "en"):
        assert set(get_result_texts(language)) == set(MaturityLevel)
