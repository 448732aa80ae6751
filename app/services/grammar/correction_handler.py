"""
Korrekturen mit anschließender Neu-Analyse und Undo-Historie.

CorrectionHandler hält den Text einer Session und einen begrenzten Undo-Stack
aus (Text, Analyse)-Snapshots. Ein Snapshot wird nur bei erfolgreicher
Korrektur abgelegt; eine abgelehnte Korrektur ändert weder Text noch Historie.

Die zuletzt bekannte Analyse des aktuellen Texts wird zwischengespeichert,
damit eine Korrektur den alten Text nicht erneut analysieren muss.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from app.core.config import settings
from app.services.grammar.analyzer import analyze_text
from app.services.grammar.corrections import apply_text_correction, validate_correction
from app.services.grammar.dismissals import DismissalManager
from app.services.grammar.grammar_models import (
    AnalysisResult,
    Correction,
    CorrectionResult,
    Issue,
    TextEdit,
)

logger = logging.getLogger(__name__)


def apply_correction_from_issue(
    text: str,
    issue: Issue,
    correction: Correction,
    dismissals: Optional[DismissalManager] = None,
) -> CorrectionResult:
    check = validate_correction(text, issue.start_index, issue.end_index, issue.original_text)
    if not check.is_valid:
        logger.warning("Korrektur abgelehnt (%s): rule=%s", check.error.value, issue.rule)
        return CorrectionResult(
            success=False,
            text=text,
            result=analyze_text(text, dismissals),
            error=check.error,
            message=check.message,
        )

    new_text = apply_text_correction(text, issue.start_index, issue.end_index, correction.text)
    return CorrectionResult(success=True, text=new_text, result=analyze_text(new_text, dismissals))


def apply_multiple_corrections(
    text: str,
    edits: Sequence[TextEdit],
    dismissals: Optional[DismissalManager] = None,
) -> CorrectionResult:
    """Wendet mehrere Ersetzungen von hinten nach vorne an, dann eine Neu-Analyse."""
    new_text = text
    for edit in sorted(edits, key=lambda e: e.start_index, reverse=True):
        new_text = apply_text_correction(new_text, edit.start_index, edit.end_index, edit.correction_text)
    return CorrectionResult(success=True, text=new_text, result=analyze_text(new_text, dismissals))


class CorrectionHandler:
    def __init__(
        self,
        initial_text: str = "",
        dismissals: Optional[DismissalManager] = None,
        max_history_size: Optional[int] = None,
    ):
        self._text = initial_text
        self._dismissals = dismissals
        self.max_history_size = (
            max_history_size if max_history_size is not None else settings.correction_history_size
        )
        self._history: List[Tuple[str, AnalysisResult]] = []
        self._result: Optional[AnalysisResult] = None

    def get_text(self) -> str:
        return self._text

    def set_text(self, text: str) -> None:
        self._text = text
        self._result = None
        self._history = []

    def _current_result(self) -> AnalysisResult:
        if self._result is None:
            self._result = analyze_text(self._text, self._dismissals)
        return self._result

    def apply_correction(self, issue: Issue, correction: Correction) -> CorrectionResult:
        previous_text = self._text
        outcome = apply_correction_from_issue(previous_text, issue, correction, self._dismissals)
        if not outcome.success:
            # abgelehnt: outcome.result ist die Analyse des unveränderten Texts
            self._result = outcome.result
            return outcome

        self._history.append((previous_text, self._current_result()))
        if len(self._history) > self.max_history_size:
            self._history.pop(0)
        self._text = outcome.text
        self._result = outcome.result
        return outcome

    def undo(self) -> Optional[Tuple[str, AnalysisResult]]:
        if not self._history:
            return None
        text, result = self._history.pop()
        self._text = text
        self._result = result
        logger.info("Undo: %d Schritte verbleibend", len(self._history))
        return text, result

    def can_undo(self) -> bool:
        return bool(self._history)

    def get_history_size(self) -> int:
        return len(self._history)

    def set_dismissals(self, dismissals: Optional[DismissalManager]) -> None:
        self._dismissals = dismissals
        self._result = None

    def clear_history(self) -> None:
        self._history = []


def create_correction_handler(
    initial_text: str = "",
    dismissals: Optional[DismissalManager] = None,
    max_history_size: Optional[int] = None,
) -> CorrectionHandler:
    return CorrectionHandler(initial_text, dismissals, max_history_size)
