"""
Text-Ersetzung und Positions-Nachführung.

Fehler sind hier Werte: ungültige Bereiche werfen nie, sondern lassen den Text
unverändert bzw. liefern ein ValidationResult mit klassifiziertem Fehler.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from app.services.grammar.grammar_models import CorrectionError, Issue, ValidationResult


def _valid_range(text: str, start: int, end: int) -> bool:
    return 0 <= start <= end <= len(text)


def apply_text_correction(text: str, start_index: int, end_index: int, correction: str) -> str:
    if not _valid_range(text, start_index, end_index):
        return text
    return text[:start_index] + correction + text[end_index:]


def calculate_position_delta(original_length: int, correction_length: int) -> int:
    return correction_length - original_length


def adjust_issue_positions(
    issues: Iterable[Issue],
    correction_start: int,
    correction_end: int,
    delta: int,
) -> List[Issue]:
    """
    - komplett vor der Korrektur: unverändert
    - komplett ab correction_end: um delta verschoben
    - jede Überlappung mit [start, end): Issue fällt weg (keine Teil-Reparatur)
    """
    adjusted: List[Issue] = []
    for issue in issues:
        if issue.start_index < correction_end and issue.end_index > correction_start:
            continue
        if issue.end_index <= correction_start:
            adjusted.append(issue)
            continue
        adjusted.append(
            issue.model_copy(
                update={
                    "start_index": issue.start_index + delta,
                    "end_index": issue.end_index + delta,
                }
            )
        )
    return adjusted


def validate_correction(
    text: str,
    start_index: int,
    end_index: int,
    expected_original: Optional[str] = None,
) -> ValidationResult:
    if start_index < 0:
        return ValidationResult(
            is_valid=False,
            error=CorrectionError.negative_index,
            message="Start index cannot be negative",
        )
    if end_index > len(text):
        return ValidationResult(
            is_valid=False,
            error=CorrectionError.exceeds_text_length,
            message="End index exceeds text length",
        )
    if start_index > end_index:
        return ValidationResult(
            is_valid=False,
            error=CorrectionError.start_greater_than_end,
            message="Start index cannot be greater than end index",
        )
    if expected_original is not None:
        actual = text[start_index:end_index]
        if actual != expected_original:
            return ValidationResult(
                is_valid=False,
                error=CorrectionError.mismatch,
                message=f'Text mismatch: expected "{expected_original}" but found "{actual}"',
            )
    return ValidationResult(is_valid=True)
