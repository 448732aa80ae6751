"""Tests für Text-Ersetzung, Positions-Nachführung und Validierung."""

import random

import pytest

from app.services.grammar.corrections import (
    adjust_issue_positions,
    apply_text_correction,
    calculate_position_delta,
    validate_correction,
)
from app.services.grammar.grammar_models import CorrectionError


def test_replacement_property_on_random_inputs():
    rng = random.Random(2024)
    alphabet = "abc xyz.,!"
    for _ in range(300):
        text = "".join(rng.choice(alphabet) for _ in range(rng.randint(0, 30)))
        start = rng.randint(0, len(text))
        end = rng.randint(start, len(text))
        correction = "".join(rng.choice(alphabet) for _ in range(rng.randint(0, 8)))

        result = apply_text_correction(text, start, end, correction)

        assert result[:start] == text[:start]
        assert result[start:start + len(correction)] == correction
        assert result[start + len(correction):] == text[end:]
        assert len(result) == len(text) - (end - start) + len(correction)


def test_alot_replacement():
    assert apply_text_correction("I have alot of work.", 7, 11, "a lot") == "I have a lot of work."


@pytest.mark.parametrize("start, end", [(-1, 2), (3, 2), (0, 99)])
def test_invalid_range_leaves_text_unchanged(start, end):
    assert apply_text_correction("hello", start, end, "X") == "hello"


def test_position_delta():
    assert calculate_position_delta(4, 5) == 1
    assert calculate_position_delta(5, 2) == -3


def test_adjust_issue_positions(make_issue):
    before = make_issue(start=0, end=5, original_text="hello")
    overlapping = make_issue(start=8, end=12, original_text="wxyz")
    touching_end = make_issue(start=10, end=15, original_text="after")
    after = make_issue(start=20, end=24, original_text="tail")

    adjusted = adjust_issue_positions([before, overlapping, touching_end, after], 6, 10, 3)

    assert adjusted[0] == before
    assert [(i.start_index, i.end_index) for i in adjusted[1:]] == [(13, 18), (23, 27)]
    assert overlapping.id not in {i.id for i in adjusted}


def test_one_char_overlap_drops_issue(make_issue):
    issue = make_issue(start=0, end=7, original_text="abcdefg")
    assert adjust_issue_positions([issue], 6, 8, -1) == []


def test_issue_ending_at_correction_start_is_kept(make_issue):
    issue = make_issue(start=0, end=6)
    assert adjust_issue_positions([issue], 6, 8, 5) == [issue]


@pytest.mark.parametrize(
    "start, end, expected, error",
    [
        (-1, 2, None, CorrectionError.negative_index),
        (0, 50, None, CorrectionError.exceeds_text_length),
        (4, 2, None, CorrectionError.start_greater_than_end),
        (7, 11, "alto", CorrectionError.mismatch),
    ],
)
def test_validate_correction_errors(start, end, expected, error):
    result = validate_correction("I have alot of work.", start, end, expected)
    assert result.is_valid is False
    assert result.error == error
    assert result.message


def test_validate_correction_ok():
    assert validate_correction("I have alot of work.", 7, 11, "alot").is_valid
    assert validate_correction("I have alot of work.", 7, 11).is_valid
    assert validate_correction("", 0, 0).is_valid
