"""
Tests für den DismissalManager (sitzungsweites Muster-Gedächtnis).
"""

import random

from app.services.grammar.dismissals import (
    DismissalManager,
    create_dismissal_manager,
    create_pattern_key,
    filter_issues_by_dismissals,
    should_flag_issue,
)
from app.services.grammar.grammar_models import ALL_ISSUE_CATEGORIES, DismissalState
from app.services.grammar.score import calculate_writing_score


class FakeClock:
    def __init__(self, start: int = 1000):
        self.now = start

    def __call__(self) -> int:
        self.now += 1
        return self.now


def test_pattern_key_is_normalized():
    assert create_pattern_key("typo-alot", "  ALOT ") == "typo-alot:alot"


def test_dismiss_returns_key_and_matches_any_position(make_issue):
    manager = create_dismissal_manager()
    first = make_issue(start=7, end=11, original_text="alot")
    other = make_issue(start=40, end=44, original_text="Alot")

    key = manager.dismiss(first)

    assert key == "typo-alot:alot"
    assert manager.is_dismissed(first)
    assert manager.is_dismissed(other)
    assert manager.is_pattern_key_dismissed(key)
    assert not manager.is_dismissed(make_issue(rule="typo-teh", original_text="teh"))


def test_reset_clears_memory(make_issue):
    manager = DismissalManager()
    issue = make_issue()
    manager.dismiss(issue)
    manager.reset()
    assert not manager.is_dismissed(issue)
    assert manager.get_pattern_count() == 0


def test_undismiss(make_issue):
    manager = DismissalManager()
    issue = make_issue()
    key = manager.dismiss(issue)

    assert manager.undismiss(issue) is True
    assert manager.undismiss(issue) is False
    manager.dismiss(issue)
    assert manager.undismiss_by_key(key) is True
    assert manager.undismiss_by_key("missing:key") is False


def test_dismissal_exclusion_matches_prefiltered_score(make_issue):
    rng = random.Random(3)
    for _ in range(40):
        issues = [
            make_issue(
                category=rng.choice(ALL_ISSUE_CATEGORIES),
                severity=rng.choice(["error", "warning", "suggestion"]),
                rule=f"rule-{rng.randint(0, 5)}",
                original_text=f"text{rng.randint(0, 3)}",
            )
            for _ in range(rng.randint(1, 15))
        ]
        target = rng.choice(issues)
        manager = DismissalManager()
        manager.dismiss(target)

        remaining = [i for i in issues if not manager.is_dismissed(i)]
        assert target not in remaining
        assert manager.calculate_score_excluding_dismissed(issues) == calculate_writing_score(remaining)


def test_export_import_round_trip(make_issue):
    manager = DismissalManager(clock=FakeClock())
    manager.dismiss(make_issue(rule="a", original_text="x"))
    manager.dismiss(make_issue(rule="b", original_text="y"))

    state = manager.export_state()
    restored = DismissalManager()
    restored.import_state(state)
    assert restored.get_dismissed_pattern_keys() == manager.get_dismissed_pattern_keys()

    # JSON-Form (wie über die API)
    from_dict = DismissalManager()
    from_dict.import_state(state.model_dump(mode="json"))
    assert from_dict.get_dismissed_pattern_keys() == {"a:x", "b:y"}


def test_export_is_a_snapshot(make_issue):
    manager = DismissalManager()
    state = manager.export_state()
    manager.dismiss(make_issue())
    assert state == DismissalState()


def test_oldest_pattern_is_evicted(make_issue):
    manager = DismissalManager(max_patterns=2, clock=FakeClock())
    manager.dismiss(make_issue(rule="r1", original_text="one"))
    manager.dismiss(make_issue(rule="r2", original_text="two"))
    manager.dismiss(make_issue(rule="r3", original_text="three"))

    assert manager.get_dismissed_pattern_keys() == {"r2:two", "r3:three"}


def test_redismiss_does_not_evict(make_issue):
    manager = DismissalManager(max_patterns=2, clock=FakeClock())
    manager.dismiss(make_issue(rule="r1", original_text="one"))
    manager.dismiss(make_issue(rule="r2", original_text="two"))
    manager.dismiss(make_issue(rule="r1", original_text="ONE"))

    assert manager.get_pattern_count() == 2
    # r1 hat jetzt den neueren Zeitstempel -> r2 fliegt als nächstes
    manager.dismiss(make_issue(rule="r3", original_text="three"))
    assert manager.get_dismissed_pattern_keys() == {"r1:one", "r3:three"}


def test_module_level_filters(make_issue):
    keep = make_issue(rule="keep", original_text="k")
    drop = make_issue(rule="drop", original_text="d")
    keys = {"drop:d"}
    assert should_flag_issue(keep, keys)
    assert not should_flag_issue(drop, keys)
    assert filter_issues_by_dismissals([keep, drop], keys) == [keep]
