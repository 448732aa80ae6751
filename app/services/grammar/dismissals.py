"""
Session-Speicher für verworfene Issue-Muster.

Ein Muster ist rule + normalisierter Originaltext ("rule:text", lowercased und
getrimmt). Ein verworfenes Muster unterdrückt jedes Issue mit derselben Regel
und demselben Text, egal an welcher Position.

Der Speicher ist begrenzt (Default 1000); beim Überlauf fliegt das Muster mit
dem ältesten Zeitstempel raus. Jede Instanz besitzt ihren eigenen Speicher.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, Iterable, List, Optional, Set, Union

from app.core.config import settings
from app.services.grammar.grammar_models import (
    DismissalState,
    DismissedPattern,
    Issue,
    WritingScore,
)
from app.services.grammar.score import calculate_writing_score

logger = logging.getLogger(__name__)

Clock = Callable[[], int]


def _now_ms() -> int:
    return int(time.time() * 1000)


def _normalize(text: str) -> str:
    return (text or "").lower().strip()


def create_pattern_key(rule: str, original_text: str) -> str:
    return f"{rule}:{_normalize(original_text)}"


def create_dismissed_pattern(issue: Issue, clock: Clock = _now_ms) -> DismissedPattern:
    return DismissedPattern(
        rule=issue.rule,
        original_text=_normalize(issue.original_text),
        timestamp=clock(),
    )


class DismissalManager:
    def __init__(self, max_patterns: Optional[int] = None, clock: Clock = _now_ms):
        self.max_patterns = max_patterns if max_patterns is not None else settings.max_dismissed_patterns
        self._clock = clock
        self._patterns: Dict[str, DismissedPattern] = {}

    def dismiss(self, issue: Issue) -> str:
        key = create_pattern_key(issue.rule, issue.original_text)
        if key not in self._patterns and len(self._patterns) >= self.max_patterns:
            self._remove_oldest()
        self._patterns[key] = create_dismissed_pattern(issue, self._clock)
        return key

    def is_dismissed(self, issue: Issue) -> bool:
        return create_pattern_key(issue.rule, issue.original_text) in self._patterns

    def is_pattern_key_dismissed(self, key: str) -> bool:
        return key in self._patterns

    def get_dismissed_pattern_keys(self) -> Set[str]:
        return set(self._patterns)

    def get_all_patterns(self) -> List[DismissedPattern]:
        return list(self._patterns.values())

    def get_pattern_count(self) -> int:
        return len(self._patterns)

    def filter_dismissed_issues(self, issues: Iterable[Issue]) -> List[Issue]:
        return [i for i in issues if not self.is_dismissed(i)]

    def calculate_score_excluding_dismissed(self, issues: Iterable[Issue]) -> WritingScore:
        return calculate_writing_score(self.filter_dismissed_issues(issues))

    def undismiss(self, issue: Issue) -> bool:
        return self.undismiss_by_key(create_pattern_key(issue.rule, issue.original_text))

    def undismiss_by_key(self, key: str) -> bool:
        return self._patterns.pop(key, None) is not None

    def reset(self) -> None:
        self._patterns.clear()

    def export_state(self) -> DismissalState:
        return DismissalState(patterns=[(k, p.model_copy()) for k, p in self._patterns.items()])

    def import_state(self, state: Union[DismissalState, Dict[str, Any]]) -> None:
        snapshot = state if isinstance(state, DismissalState) else DismissalState.model_validate(state)
        self._patterns = {key: pattern.model_copy() for key, pattern in snapshot.patterns}

    # ---------- intern ---------- #

    def _remove_oldest(self) -> None:
        if not self._patterns:
            return
        # min() nimmt bei gleichem Zeitstempel den zuerst eingefügten
        oldest = min(self._patterns, key=lambda k: self._patterns[k].timestamp)
        del self._patterns[oldest]
        logger.info("Dismissal-Limit (%d) erreicht, verdränge %s", self.max_patterns, oldest)


def create_dismissal_manager(max_patterns: Optional[int] = None) -> DismissalManager:
    return DismissalManager(max_patterns=max_patterns)


def should_flag_issue(issue: Issue, dismissed_keys: Set[str]) -> bool:
    return create_pattern_key(issue.rule, issue.original_text) not in dismissed_keys


def filter_issues_by_dismissals(issues: Iterable[Issue], dismissed_keys: Set[str]) -> List[Issue]:
    return [i for i in issues if should_flag_issue(i, dismissed_keys)]
