from __future__ import annotations

import pytest

from chromakit.contrast import contrast_ratio, evaluate, rating_for, relative_luminance
from chromakit.models import Color, Rating

BLACK = Color.from_hex("#000000")
WHITE = Color.from_hex("#FFFFFF")


def test_luminance_extremes():
    assert relative_luminance(BLACK) == 0.0
    assert relative_luminance(WHITE) == pytest.approx(1.0)


def test_black_on_white_is_maximum_contrast():
    assert contrast_ratio(BLACK, WHITE) == pytest.approx(21.0)


def test_ratio_is_symmetric_and_at_least_one():
    gray = Color.from_hex("#767676")
    assert contrast_ratio(gray, WHITE) == pytest.approx(contrast_ratio(WHITE, gray))
    assert contrast_ratio(gray, gray) == 1.0


def test_mid_gray_on_white_rates_aa():
    result = evaluate(Color.from_hex("#767676"), WHITE)

    assert result.ratio == pytest.approx(4.54, abs=0.01)
    assert result.rating is Rating.AA
    assert result.description == "Good contrast - meets AA standards"


def test_same_color_fails():
    gray = Color.from_hex("#777777")
    result = evaluate(gray, gray)

    assert result.ratio == 1.0
    assert result.rating is Rating.FAIL
    assert result.description == "Poor contrast - does not meet accessibility standards"


def test_black_on_white_rates_aaa():
    result = evaluate(BLACK, WHITE)
    assert result.rating is Rating.AAA
    assert result.to_dict()["description"] == "Excellent contrast - meets AAA standards"


def test_rating_thresholds_are_inclusive():
    assert rating_for(7.0) is Rating.AAA
    assert rating_for(6.99) is Rating.AA
    assert rating_for(4.5) is Rating.AA
    assert rating_for(4.4999) is Rating.FAIL


@pytest.mark.parametrize(
    "first,second",
    [
        ("#000000", "#FFFFFF"),
        ("#FF0000", "#00FF00"),
        ("#123456", "#FEDCBA"),
        ("#808080", "#7F7F7F"),
    ],
)
def test_ratio_symmetric_and_bounded(first, second):
    a = Color.from_hex(first)
    b = Color.from_hex(second)

    forward = evaluate(a, b).ratio
    assert forward == evaluate(b, a).ratio
    assert 1.0 <= forward <= 21.0 + 1e-9
