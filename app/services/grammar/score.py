"""
Writing-Score.

Pro Kategorie: 100 - 5 * Summe(Gewicht) mit error=3, warning=2, suggestion=1.
Overall: gewichtete Mischung der vier Kategorien (Korrektheit zählt am meisten).
Alle Werte sind ganze Zahlen in [0, 100]; NaN/Inf werden zu 0.
"""

from __future__ import annotations

import math
from typing import Dict, List, Sequence

from app.services.grammar.grammar_models import Issue, IssueCategory, WritingScore

SEVERITY_WEIGHTS: Dict[str, int] = {"error": 3, "warning": 2, "suggestion": 1}

BASE_SCORE = 100
MIN_SCORE = 0
MAX_SCORE = 100
POINTS_PER_WEIGHTED_ISSUE = 5

CATEGORY_WEIGHTS: Dict[IssueCategory, float] = {
    IssueCategory.correctness: 0.40,
    IssueCategory.clarity: 0.25,
    IssueCategory.engagement: 0.20,
    IssueCategory.delivery: 0.15,
}


def clamp_score(score: float) -> int:
    try:
        value = float(score)
    except (TypeError, ValueError):
        return MIN_SCORE
    if not math.isfinite(value):
        return MIN_SCORE
    # half-up, nicht Banker's rounding
    return max(MIN_SCORE, min(MAX_SCORE, int(math.floor(value + 0.5))))


def calculate_weighted_issue_count(issues: Sequence[Issue]) -> int:
    return sum(SEVERITY_WEIGHTS[i.severity] for i in issues)


def calculate_score_from_issues(issues: Sequence[Issue]) -> int:
    return clamp_score(BASE_SCORE - calculate_weighted_issue_count(issues) * POINTS_PER_WEIGHTED_ISSUE)


def filter_issues_by_category(issues: Sequence[Issue], category: IssueCategory) -> List[Issue]:
    return [i for i in issues if i.category == category]


def calculate_category_score(issues: Sequence[Issue], category: IssueCategory) -> int:
    return calculate_score_from_issues(filter_issues_by_category(issues, category))


def calculate_overall_score(correctness: float, clarity: float, engagement: float, delivery: float) -> int:
    weighted = (
        correctness * CATEGORY_WEIGHTS[IssueCategory.correctness]
        + clarity * CATEGORY_WEIGHTS[IssueCategory.clarity]
        + engagement * CATEGORY_WEIGHTS[IssueCategory.engagement]
        + delivery * CATEGORY_WEIGHTS[IssueCategory.delivery]
    )
    return clamp_score(weighted)


def calculate_writing_score(issues: Sequence[Issue]) -> WritingScore:
    correctness = calculate_category_score(issues, IssueCategory.correctness)
    clarity = calculate_category_score(issues, IssueCategory.clarity)
    engagement = calculate_category_score(issues, IssueCategory.engagement)
    delivery = calculate_category_score(issues, IssueCategory.delivery)

    return WritingScore(
        overall=calculate_overall_score(correctness, clarity, engagement, delivery),
        correctness=correctness,
        clarity=clarity,
        engagement=engagement,
        delivery=delivery,
    )


def calculate_score_after_fix(issues: Sequence[Issue], fixed_issue_id: str) -> WritingScore:
    return calculate_writing_score([i for i in issues if i.id != fixed_issue_id])


def calculate_score_after_dismissal(issues: Sequence[Issue], dismissed_issue_id: str) -> WritingScore:
    # gleiche Logik wie beim Fix: das Issue fällt aus der Wertung
    return calculate_score_after_fix(issues, dismissed_issue_id)


def create_empty_score() -> WritingScore:
    return WritingScore(
        overall=MAX_SCORE,
        correctness=MAX_SCORE,
        clarity=MAX_SCORE,
        engagement=MAX_SCORE,
        delivery=MAX_SCORE,
    )


def is_perfect_score(score: WritingScore) -> bool:
    return all(
        v == MAX_SCORE
        for v in (score.overall, score.correctness, score.clarity, score.engagement, score.delivery)
    )


def get_score_color(score: float) -> str:
    if score >= 80:
        return "#38a169"
    if score >= 60:
        return "#d69e2e"
    if score >= 40:
        return "#dd6b20"
    return "#e53e3e"


def get_score_description(score: float) -> str:
    if score >= 90:
        return "Excellent"
    if score >= 80:
        return "Very Good"
    if score >= 70:
        return "Good"
    if score >= 60:
        return "Fair"
    if score >= 50:
        return "Needs Improvement"
    if score >= 40:
        return "Poor"
    return "Very Poor"
