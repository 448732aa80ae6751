"""
Enthält die Datenmodelle der Grammatik-Analyse.

- Issue: ein einzelnes gefundenes Problem (Kategorie, Schweregrad, Position im
  aktuellen Text, exakt markierter Originaltext, Korrekturvorschläge, Regel-ID).
- Correction: ein Ersetzungsvorschlag mit Konfidenz.
- WritingScore / ReadabilityMetrics / ToneAnalysis / TextStatistics:
  abgeleitete Kennzahlen über Text und Issue-Menge.
- DismissedPattern / DismissalState: Session-Speicher für verworfene Muster
  (rule + normalisierter Text) und dessen serialisierbarer Snapshot.
- AnalysisResult: der komplette Snapshot eines Analyse-Durchlaufs.
- CorrectionResult / ValidationResult: Fehler im Korrekturpfad sind Werte,
  keine Exceptions.

Positions-Invariante: für jedes Issue gilt
text[start_index:end_index] == original_text.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, Field


class IssueCategory(str, Enum):
    correctness = "correctness"
    clarity = "clarity"
    engagement = "engagement"
    delivery = "delivery"


ALL_ISSUE_CATEGORIES: List[IssueCategory] = [
    IssueCategory.correctness,
    IssueCategory.clarity,
    IssueCategory.engagement,
    IssueCategory.delivery,
]

Severity = Literal["error", "warning", "suggestion"]

# höher = wichtiger
SEVERITY_ORDER: Dict[str, int] = {"error": 3, "warning": 2, "suggestion": 1}


class ToneType(str, Enum):
    formal = "formal"
    informal = "informal"
    confident = "confident"
    neutral = "neutral"
    friendly = "friendly"


# feste Reihenfolge, entscheidet bei Gleichstand
TONE_TYPES: List[ToneType] = [
    ToneType.formal,
    ToneType.informal,
    ToneType.confident,
    ToneType.neutral,
    ToneType.friendly,
]


class CorrectionError(str, Enum):
    negative_index = "negative index"
    exceeds_text_length = "exceeds text length"
    start_greater_than_end = "start greater than end"
    mismatch = "mismatch"


class Correction(BaseModel):
    text: str
    confidence: float = Field(ge=0.0, le=1.0)
    description: Optional[str] = None


class Issue(BaseModel):
    id: str
    category: IssueCategory
    severity: Severity
    message: str
    description: str
    start_index: int = Field(ge=0)
    end_index: int = Field(ge=0)
    original_text: str
    suggestions: List[Correction] = Field(default_factory=list)
    rule: str


class WritingScore(BaseModel):
    overall: int = Field(ge=0, le=100)
    correctness: int = Field(ge=0, le=100)
    clarity: int = Field(ge=0, le=100)
    engagement: int = Field(ge=0, le=100)
    delivery: int = Field(ge=0, le=100)


class ReadabilityMetrics(BaseModel):
    flesch_kincaid_grade: float
    education_level: str
    average_sentence_length: float
    average_word_length: float
    difficult_sentences: List[int] = Field(default_factory=list)


class ToneBreakdown(BaseModel):
    tone: ToneType
    percentage: int


class ToneInconsistency(BaseModel):
    start_index: int = Field(ge=0)
    end_index: int = Field(ge=0)
    detected_tone: ToneType
    expected_tone: ToneType


class ToneAnalysis(BaseModel):
    dominant: ToneType
    breakdown: List[ToneBreakdown]
    is_consistent: bool
    inconsistencies: List[ToneInconsistency] = Field(default_factory=list)


class TextStatistics(BaseModel):
    word_count: int
    character_count: int
    character_count_no_spaces: int
    sentence_count: int
    paragraph_count: int
    average_sentence_length: float
    reading_time_minutes: int


class DismissedPattern(BaseModel):
    rule: str
    original_text: str  # lowercased + getrimmt
    timestamp: int  # epoch ms


class DismissalState(BaseModel):
    # (key, pattern) in Einfüge-Reihenfolge
    patterns: List[Tuple[str, DismissedPattern]] = Field(default_factory=list)


class SentenceSpan(BaseModel):
    start: int = Field(ge=0)
    end: int = Field(ge=0)
    text: str


class AnalysisResult(BaseModel):
    issues: List[Issue] = Field(default_factory=list)
    score: WritingScore
    readability: ReadabilityMetrics
    tone: ToneAnalysis
    statistics: TextStatistics


class ValidationResult(BaseModel):
    is_valid: bool
    error: Optional[CorrectionError] = None
    message: Optional[str] = None


class TextEdit(BaseModel):
    start_index: int
    end_index: int
    correction_text: str


class CorrectionResult(BaseModel):
    success: bool
    text: str
    result: AnalysisResult
    error: Optional[CorrectionError] = None
    message: Optional[str] = None


# ---------- Darstellung (nur UI) ---------- #

CATEGORY_COLORS: Dict[IssueCategory, Dict[str, str]] = {
    IssueCategory.correctness: {"underline": "#e53e3e", "bg": "#fed7d7"},
    IssueCategory.clarity: {"underline": "#3182ce", "bg": "#bee3f8"},
    IssueCategory.engagement: {"underline": "#38a169", "bg": "#c6f6d5"},
    IssueCategory.delivery: {"underline": "#805ad5", "bg": "#e9d8fd"},
}

GRADE_LEVELS: Dict[int, str] = {
    1: "Grade 1",
    2: "Grade 2",
    3: "Grade 3",
    4: "Grade 4",
    5: "Grade 5",
    6: "Grade 6",
    7: "Grade 7",
    8: "Grade 8",
    9: "High School Freshman",
    10: "High School Sophomore",
    11: "High School Junior",
    12: "High School Senior",
    13: "College Freshman",
    14: "College Sophomore",
    15: "College Junior",
    16: "College Senior",
    17: "Graduate Level",
}
