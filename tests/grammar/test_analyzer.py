"""
Tests für die Analyse-Engine (reine Funktionen + AnalysisEngine-Zustand).

Geprüft wird insbesondere:
- das alot-Szenario inklusive Korrektur und Neu-Analyse
- leeres Ergebnis für leeren Text
- Dismissals filtern das Ergebnis und den Score
- zwei Engines teilen keinen Zustand
"""

import pytest

from app.services.grammar import (
    AnalysisEngine,
    analyze_after_correction,
    analyze_text,
    create_analysis_engine,
    create_empty_analysis_result,
)
from app.services.grammar.grammar_models import ALL_ISSUE_CATEGORIES, ToneType
from app.services.grammar.ids import SequentialIdGenerator
from app.services.grammar.score import calculate_writing_score

ALOT_TEXT = "I have alot of work."

SAMPLE_TEXTS = [
    ALOT_TEXT,
    "i think their going to the store in order to buy 5 apples and three pears .",
    "The report was written by the team. At the end of the day, synergy is key!",
    "Therefore, consequently, furthermore, the matter is hereby concluded. "
    "Yeah gonna wanna gotta do this cool awesome stuff.",
    " ".join(["word"] * 30) + ".",
    "Extraordinarily sophisticated terminology.",
]


def test_alot_flow(regex_splitter):
    result = analyze_text(ALOT_TEXT, splitter=regex_splitter)
    alot = [i for i in result.issues if i.rule == "typo-alot"]
    assert len(alot) == 1
    assert (alot[0].start_index, alot[0].end_index) == (7, 11)

    new_text, new_result = analyze_after_correction(
        ALOT_TEXT, alot[0].start_index, alot[0].end_index, alot[0].suggestions[0].text, splitter=regex_splitter
    )
    assert new_text == "I have a lot of work."
    assert not [i for i in new_result.issues if i.rule == "typo-alot"]


def test_reanalysis_equals_fresh_analysis(regex_splitter):
    _, after = analyze_after_correction(
        ALOT_TEXT, 7, 11, "a lot", id_generator=SequentialIdGenerator(), splitter=regex_splitter
    )
    fresh = analyze_text("I have a lot of work.", id_generator=SequentialIdGenerator(), splitter=regex_splitter)
    assert after == fresh


@pytest.mark.parametrize("text", ["", "   ", "\n\n"])
def test_empty_text_gives_empty_result(text):
    result = analyze_text(text)
    assert result == create_empty_analysis_result()
    assert result.score.overall == 100
    assert result.statistics.word_count == 0
    assert result.tone.dominant == ToneType.neutral
    assert result.tone.is_consistent


@pytest.mark.parametrize("text", SAMPLE_TEXTS)
def test_issue_invariants(text, regex_splitter):
    result = analyze_text(text, splitter=regex_splitter)
    starts = [i.start_index for i in result.issues]
    assert starts == sorted(starts)
    for issue in result.issues:
        assert text[issue.start_index:issue.end_index] == issue.original_text
        assert issue.category in ALL_ISSUE_CATEGORIES
    assert result.score == calculate_writing_score(result.issues)
    assert sum(b.percentage for b in result.tone.breakdown) == 100


def test_all_detectors_contribute(regex_splitter):
    text = (
        "i have alot of work. The report was written by the team. "
        "Therefore, consequently, furthermore, the matter is hereby concluded. "
        "Yeah gonna wanna gotta do this cool awesome stuff."
    )
    rules = {i.rule for i in analyze_text(text, splitter=regex_splitter).issues}
    assert {"typo-alot", "grammar-lowercase-i", "passive-voice-nlp", "tone-inconsistency"} <= rules


def test_duplicate_rule_hits_are_merged(regex_splitter):
    result = analyze_text("We left in order to win.", splitter=regex_splitter)
    wordy = [i for i in result.issues if i.rule == "wordy-in-order-to"]
    assert len(wordy) == 1


def test_ids_come_from_injected_generator(regex_splitter):
    result = analyze_text(SAMPLE_TEXTS[1], id_generator=SequentialIdGenerator(prefix="t"), splitter=regex_splitter)
    ids = [i.id for i in result.issues]
    assert len(ids) == len(set(ids))
    assert all(i.startswith("t-") for i in ids)


def test_engine_analyze_and_correct(regex_splitter):
    engine = create_analysis_engine(splitter=regex_splitter)
    result = engine.analyze_immediate(ALOT_TEXT)
    assert engine.get_text() == ALOT_TEXT
    assert engine.get_result() == result

    new_text, new_result = engine.apply_correction(7, 11, "a lot")
    assert new_text == "I have a lot of work."
    assert engine.get_text() == new_text
    assert engine.get_result() == new_result


def test_engine_dismiss_filters_result(regex_splitter):
    engine = AnalysisEngine(splitter=regex_splitter)
    engine.analyze_immediate("alot here and alot there.")
    issue = next(i for i in engine.get_result().issues if i.rule == "typo-alot")

    key = engine.dismiss_issue(issue)

    assert key == "typo-alot:alot"
    assert engine.get_dismissed_patterns() == {"typo-alot:alot"}
    result = engine.get_result()
    assert not [i for i in result.issues if i.rule == "typo-alot"]
    assert result.score == calculate_writing_score(result.issues)

    # Muster gilt sitzungsweit, auch nach neuer Analyse
    engine.analyze_immediate("ALOT again.")
    assert not [i for i in engine.get_result().issues if i.rule == "typo-alot"]

    assert engine.undismiss_issue(issue) is True
    assert [i for i in engine.get_result().issues if i.rule == "typo-alot"]


def test_engines_are_isolated(regex_splitter):
    first = AnalysisEngine(splitter=regex_splitter)
    second = AnalysisEngine(splitter=regex_splitter)
    first.analyze_immediate(ALOT_TEXT)
    second.analyze_immediate(ALOT_TEXT)

    issue = next(i for i in first.get_result().issues if i.rule == "typo-alot")
    first.dismiss_issue(issue)

    assert first.get_dismissed_patterns() == {"typo-alot:alot"}
    assert second.get_dismissed_patterns() == set()
    assert any(i.rule == "typo-alot" for i in second.get_result().issues)


def test_engine_reset(regex_splitter):
    engine = AnalysisEngine(splitter=regex_splitter)
    engine.analyze_immediate(ALOT_TEXT)
    engine.dismiss_issue(next(i for i in engine.get_result().issues if i.rule == "typo-alot"))

    engine.reset()

    assert engine.get_text() == ""
    assert engine.get_result() == create_empty_analysis_result()
    assert engine.get_dismissed_patterns() == set()


def test_engine_clear_dismissals_restores_issues(regex_splitter):
    engine = AnalysisEngine(splitter=regex_splitter)
    engine.analyze_immediate(ALOT_TEXT)
    engine.dismiss_issue(next(i for i in engine.get_result().issues if i.rule == "typo-alot"))
    engine.clear_dismissals()
    assert any(i.rule == "typo-alot" for i in engine.get_result().issues)
