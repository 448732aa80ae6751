"""Tests für Highlight-Rendering in UI."""

from ui.render import _deduplicate_and_merge_spans, build_highlighted_html, issues_to_dataframe


def _span(start, end, severity="suggestion", category="clarity"):
    return {"start": start, "end": end, "severity": severity, "category": category, "message": ""}


def _issue(start, end, text, severity="error", category="correctness"):
    return {
        "id": f"i-{start}",
        "category": category,
        "severity": severity,
        "message": "msg",
        "description": "desc",
        "start_index": start,
        "end_index": end,
        "original_text": text,
        "suggestions": [{"text": "a lot", "confidence": 1.0}],
        "rule": "typo-alot",
    }


class TestDeduplicateAndMergeSpans:
    """Tests für Span-Deduplizierung und Merge."""

    def test_no_overlaps(self):
        """Keine Überlappungen: alle Spans bleiben."""
        result = _deduplicate_and_merge_spans([_span(0, 10), _span(20, 30)])
        assert len(result) == 2

    def test_identical_ranges(self):
        """Identische Ranges: höchste Severity gewinnt."""
        result = _deduplicate_and_merge_spans(
            [_span(0, 10, "suggestion", "clarity"), _span(0, 10, "error", "correctness")]
        )
        assert len(result) == 1
        assert result[0]["severity"] == "error"
        assert result[0]["category"] == "correctness"

    def test_overlapping_spans(self):
        """Überlappende Spans werden gemerged."""
        result = _deduplicate_and_merge_spans([_span(0, 20, "error"), _span(15, 35, "warning")])
        assert len(result) == 1
        assert (result[0]["start"], result[0]["end"]) == (0, 35)
        assert result[0]["severity"] == "error"

    def test_nested_spans(self):
        """Verschachtelte Spans werden gemerged."""
        result = _deduplicate_and_merge_spans([_span(0, 50), _span(10, 30)])
        assert len(result) == 1
        assert (result[0]["start"], result[0]["end"]) == (0, 50)

    def test_adjacent_spans_stay_separate(self):
        result = _deduplicate_and_merge_spans([_span(0, 5), _span(5, 9)])
        assert len(result) == 2


def test_highlight_html_wraps_issue_span():
    text = "I have alot of work."
    html = build_highlighted_html(text, [_issue(7, 11, "alot")])
    assert html.startswith("I have <mark")
    assert ">alot</mark> of work." in html
    assert "#fed7d7" in html  # correctness-Hintergrund


def test_highlight_html_escapes_text():
    text = "a <b> alot"
    html = build_highlighted_html(text, [_issue(6, 10, "alot")])
    assert "&lt;b&gt;" in html
    assert html.count("<mark") == 1


def test_highlight_without_issues_is_plain_escaped_text():
    assert build_highlighted_html("x & y", []) == "x &amp; y"


def test_issue_table():
    df = issues_to_dataframe([_issue(7, 11, "alot")])
    assert list(df["Text"]) == ["alot"]
    assert list(df["Suggestion"]) == ["a lot"]
