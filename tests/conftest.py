import os

import pytest

# Default-Splitter für Tests: Regex (spaCy wird gezielt in test_sentences geprüft)
os.environ.setdefault("SENTENCE_SPLITTER", "regex")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from app.services.grammar.grammar_models import Correction, Issue, IssueCategory  # noqa: E402
from app.services.grammar.ids import SequentialIdGenerator  # noqa: E402
from app.services.grammar.sentences import RegexSentenceSplitter  # noqa: E402


@pytest.fixture
def id_gen():
    return SequentialIdGenerator()


@pytest.fixture
def regex_splitter():
    return RegexSentenceSplitter()


@pytest.fixture
def make_issue():
    """Fabrik für Test-Issues mit sinnvollen Defaults."""
    counter = {"n": 0}

    def _make(
        category=IssueCategory.correctness,
        severity="error",
        start=0,
        end=4,
        original_text="alot",
        rule="typo-alot",
        suggestion="a lot",
    ):
        counter["n"] += 1
        return Issue(
            id=f"test-{counter['n']}",
            category=category,
            severity=severity,
            message="msg",
            description="desc",
            start_index=start,
            end_index=end,
            original_text=original_text,
            suggestions=[Correction(text=suggestion, confidence=1.0)] if suggestion is not None else [],
            rule=rule,
        )

    return _make
