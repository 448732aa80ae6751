"""
Analyse-Engine: setzt alle Detektoren zu einem AnalysisResult zusammen.

analyze_text() ist eine reine Funktion über den Text. Nach einer Korrektur
wird immer komplett neu analysiert (keine inkrementelle Wiederverwendung alter
Issues), damit das Ergebnis genau dem entspricht, was im neuen Text steht.

AnalysisEngine hält den Zustand einer Dokument-Session: aktueller Text,
letztes Roh-Ergebnis (ungefiltert), gefiltertes Ergebnis und einen eigenen
DismissalManager. Instanzen teilen keinen Zustand.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Set, Tuple

from app.services.grammar.advanced import run_advanced_checks
from app.services.grammar.corrections import apply_text_correction
from app.services.grammar.dismissals import DismissalManager
from app.services.grammar.grammar_models import (
    AnalysisResult,
    Issue,
    ReadabilityMetrics,
    TextStatistics,
)
from app.services.grammar.ids import IdGenerator, resolve_id_generator
from app.services.grammar.readability import calculate_readability, generate_readability_issues
from app.services.grammar.rules import analyze_with_rules
from app.services.grammar.score import calculate_writing_score, create_empty_score
from app.services.grammar.sentences import SentenceSplitter
from app.services.grammar.statistics import calculate_statistics
from app.services.grammar.tone import analyze_tone, create_neutral_tone_analysis, generate_tone_issues

logger = logging.getLogger(__name__)


def create_empty_analysis_result() -> AnalysisResult:
    return AnalysisResult(
        issues=[],
        score=create_empty_score(),
        readability=ReadabilityMetrics(
            flesch_kincaid_grade=0.0,
            education_level="Grade 1",
            average_sentence_length=0.0,
            average_word_length=0.0,
            difficult_sentences=[],
        ),
        tone=create_neutral_tone_analysis(),
        statistics=TextStatistics(
            word_count=0,
            character_count=0,
            character_count_no_spaces=0,
            sentence_count=0,
            paragraph_count=0,
            average_sentence_length=0.0,
            reading_time_minutes=0,
        ),
    )


def _deduplicate(issues: List[Issue]) -> List[Issue]:
    # gleiche Stelle + gleiche Regel (z.B. Basis- und Advanced-Wordy-Regel) -> erster gewinnt
    seen = set()
    unique: List[Issue] = []
    for issue in issues:
        key = (issue.start_index, issue.end_index, issue.rule)
        if key in seen:
            continue
        seen.add(key)
        unique.append(issue)
    return unique


def analyze_text(
    text: str,
    dismissals: Optional[DismissalManager] = None,
    id_generator: Optional[IdGenerator] = None,
    splitter: Optional[SentenceSplitter] = None,
) -> AnalysisResult:
    if not text or not text.strip():
        return create_empty_analysis_result()

    next_id = resolve_id_generator(id_generator)
    tone = analyze_tone(text, splitter)

    rule_issues = analyze_with_rules(text, id_generator=next_id)
    advanced_issues = run_advanced_checks(text, splitter, next_id)
    readability_issues = generate_readability_issues(text, next_id)
    tone_issues = generate_tone_issues(text, id_generator=next_id, analysis=tone)

    logger.debug(
        "analyze_text: rules=%d advanced=%d readability=%d tone=%d",
        len(rule_issues),
        len(advanced_issues),
        len(readability_issues),
        len(tone_issues),
    )

    issues = _deduplicate(rule_issues + advanced_issues + readability_issues + tone_issues)
    if dismissals is not None:
        issues = dismissals.filter_dismissed_issues(issues)
    issues = sorted(issues, key=lambda i: i.start_index)

    return AnalysisResult(
        issues=issues,
        score=calculate_writing_score(issues),
        readability=calculate_readability(text),
        tone=tone,
        statistics=calculate_statistics(text),
    )


def analyze_after_correction(
    text: str,
    start_index: int,
    end_index: int,
    correction: str,
    dismissals: Optional[DismissalManager] = None,
    id_generator: Optional[IdGenerator] = None,
    splitter: Optional[SentenceSplitter] = None,
) -> Tuple[str, AnalysisResult]:
    new_text = apply_text_correction(text, start_index, end_index, correction)
    return new_text, analyze_text(new_text, dismissals, id_generator, splitter)


def _filtered(raw: AnalysisResult, dismissals: DismissalManager) -> AnalysisResult:
    issues = dismissals.filter_dismissed_issues(raw.issues)
    return raw.model_copy(update={"issues": issues, "score": calculate_writing_score(issues)})


class AnalysisEngine:
    def __init__(
        self,
        dismissals: Optional[DismissalManager] = None,
        id_generator: Optional[IdGenerator] = None,
        splitter: Optional[SentenceSplitter] = None,
    ):
        self._dismissals = dismissals if dismissals is not None else DismissalManager()
        self._id_generator = id_generator
        self._splitter = splitter
        self._text = ""
        self._raw = create_empty_analysis_result()
        self._result = self._raw

    @property
    def dismissals(self) -> DismissalManager:
        return self._dismissals

    def _store(self, text: str, raw: AnalysisResult) -> AnalysisResult:
        self._text = text
        self._raw = raw
        self._result = _filtered(raw, self._dismissals)
        return self._result

    def analyze_immediate(self, text: str) -> AnalysisResult:
        return self._store(text, analyze_text(text, None, self._id_generator, self._splitter))

    def apply_correction(self, start_index: int, end_index: int, correction: str) -> Tuple[str, AnalysisResult]:
        new_text, raw = analyze_after_correction(
            self._text,
            start_index,
            end_index,
            correction,
            None,
            self._id_generator,
            self._splitter,
        )
        return new_text, self._store(new_text, raw)

    def dismiss_issue(self, issue: Issue) -> str:
        key = self._dismissals.dismiss(issue)
        self._result = _filtered(self._raw, self._dismissals)
        return key

    def undismiss_issue(self, issue: Issue) -> bool:
        removed = self._dismissals.undismiss(issue)
        if removed:
            self._result = _filtered(self._raw, self._dismissals)
        return removed

    def clear_dismissals(self) -> None:
        self._dismissals.reset()
        self._result = self._raw

    def reset(self) -> None:
        self._dismissals.reset()
        self._text = ""
        self._raw = create_empty_analysis_result()
        self._result = self._raw

    def get_result(self) -> AnalysisResult:
        return self._result

    def get_text(self) -> str:
        return self._text

    def get_dismissed_patterns(self) -> Set[str]:
        return self._dismissals.get_dismissed_pattern_keys()


def create_analysis_engine(
    id_generator: Optional[IdGenerator] = None,
    splitter: Optional[SentenceSplitter] = None,
) -> AnalysisEngine:
    return AnalysisEngine(id_generator=id_generator, splitter=splitter)
