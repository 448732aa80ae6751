"""
Tests für CorrectionHandler (Text + Undo-Historie) und die Korrektur-Helfer.
"""

from app.services.grammar.correction_handler import (
    CorrectionHandler,
    apply_correction_from_issue,
    apply_multiple_corrections,
    create_correction_handler,
)
from app.services.grammar.dismissals import DismissalManager
from app.services.grammar.grammar_models import Correction, CorrectionError, TextEdit

ALOT_TEXT = "I have alot of work."


def test_apply_and_undo(make_issue):
    handler = create_correction_handler(ALOT_TEXT)
    issue = make_issue(start=7, end=11, original_text="alot")

    outcome = handler.apply_correction(issue, Correction(text="a lot", confidence=1.0))

    assert outcome.success is True
    assert outcome.text == "I have a lot of work."
    assert handler.get_text() == "I have a lot of work."
    assert handler.can_undo()
    assert handler.get_history_size() == 1
    assert not [i for i in outcome.result.issues if i.rule == "typo-alot"]

    restored = handler.undo()
    assert restored is not None
    text, result = restored
    assert text == ALOT_TEXT
    assert handler.get_text() == ALOT_TEXT
    assert any(i.rule == "typo-alot" for i in result.issues)
    assert handler.undo() is None


def test_failed_correction_leaves_state_untouched(make_issue):
    handler = CorrectionHandler(ALOT_TEXT)
    stale = make_issue(start=7, end=11, original_text="lots")

    outcome = handler.apply_correction(stale, Correction(text="a lot", confidence=1.0))

    assert outcome.success is False
    assert outcome.error == CorrectionError.mismatch
    assert outcome.text == ALOT_TEXT
    assert handler.get_text() == ALOT_TEXT
    assert handler.get_history_size() == 0
    assert not handler.can_undo()


def test_out_of_range_issue_fails_gracefully(make_issue):
    handler = CorrectionHandler("short")
    issue = make_issue(start=3, end=40, original_text="whatever")
    outcome = handler.apply_correction(issue, Correction(text="x", confidence=1.0))
    assert outcome.success is False
    assert outcome.error == CorrectionError.exceeds_text_length
    assert handler.get_text() == "short"


def test_history_is_capped(make_issue):
    handler = CorrectionHandler("aaaa", max_history_size=2)
    for idx in range(3):
        issue = make_issue(start=idx, end=idx + 1, original_text="a")
        assert handler.apply_correction(issue, Correction(text="b", confidence=1.0)).success

    assert handler.get_text() == "bbba"
    assert handler.get_history_size() == 2
    handler.undo()
    handler.undo()
    assert handler.get_text() == "baaa"
    assert handler.undo() is None


def test_clear_history_keeps_text(make_issue):
    handler = CorrectionHandler(ALOT_TEXT)
    handler.apply_correction(make_issue(start=7, end=11), Correction(text="a lot", confidence=1.0))
    handler.clear_history()
    assert handler.get_history_size() == 0
    assert handler.get_text() == "I have a lot of work."


def test_set_text_resets_history(make_issue):
    handler = CorrectionHandler(ALOT_TEXT)
    handler.apply_correction(make_issue(start=7, end=11), Correction(text="a lot", confidence=1.0))
    handler.set_text("fresh")
    assert handler.get_text() == "fresh"
    assert not handler.can_undo()


def test_handlers_do_not_share_history(make_issue):
    first = CorrectionHandler(ALOT_TEXT)
    second = CorrectionHandler(ALOT_TEXT)
    first.apply_correction(make_issue(start=7, end=11), Correction(text="a lot", confidence=1.0))
    assert first.get_history_size() == 1
    assert second.get_history_size() == 0


def test_apply_correction_from_issue_respects_dismissals(make_issue):
    dismissals = DismissalManager()
    dismissals.dismiss(make_issue(rule="typo-teh", original_text="teh"))
    outcome = apply_correction_from_issue(
        "alot of teh work", make_issue(start=0, end=4), Correction(text="a lot", confidence=1.0), dismissals
    )
    assert outcome.success
    assert outcome.text == "a lot of teh work"
    assert not [i for i in outcome.result.issues if i.rule == "typo-teh"]


def test_apply_multiple_corrections_back_to_front():
    edits = [
        TextEdit(start_index=0, end_index=4, correction_text="A lot"),
        TextEdit(start_index=8, end_index=11, correction_text="the"),
    ]
    outcome = apply_multiple_corrections("alot of teh work", edits)
    assert outcome.success
    assert outcome.text == "A lot of the work"


def test_correction_reuses_known_analysis(monkeypatch, make_issue):
    import app.services.grammar.correction_handler as module

    calls = []
    original = module.analyze_text

    def counting(text, dismissals=None):
        calls.append(text)
        return original(text, dismissals)

    monkeypatch.setattr(module, "analyze_text", counting)
    handler = CorrectionHandler("alot and alot")

    first = handler.apply_correction(make_issue(start=0, end=4), Correction(text="a lot", confidence=1.0))
    assert first.success
    # Ausgangstext einmal, neuer Text einmal
    assert calls == ["a lot and alot", "alot and alot"]

    calls.clear()
    second = handler.apply_correction(make_issue(start=10, end=14), Correction(text="a lot", confidence=1.0))
    assert second.success
    assert calls == ["a lot and a lot"]

    text, result = handler.undo()
    assert text == "a lot and alot"
    assert result == first.result
