"""Rendering-Funktionen für Highlights, Scores und Analyse-Panels."""

import html
from typing import Any

import pandas as pd
import streamlit as st

from app.services.grammar.grammar_models import CATEGORY_COLORS, SEVERITY_ORDER, IssueCategory
from app.services.grammar.score import get_score_color, get_score_description


def _category_colors(category: str) -> dict[str, str]:
    try:
        return CATEGORY_COLORS[IssueCategory(category)]
    except ValueError:
        return {"underline": "#718096", "bg": "#edf2f7"}


def _deduplicate_and_merge_spans(spans: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """
    Dedupliziert identische Spans und merged überlappende Spans.

    Regel:
    - Identische Ranges: behalte den mit höchster Severity
    - Überlappende Spans: ein Span mit max Severity, Kategorie des stärksten
    """
    if not spans:
        return []

    spans_sorted = sorted(
        spans, key=lambda x: (x["start"], x["end"], -SEVERITY_ORDER.get(x["severity"], 0))
    )

    merged: list[dict[str, Any]] = []
    for span in spans_sorted:
        if merged and span["start"] < merged[-1]["end"]:
            last = merged[-1]
            stronger = SEVERITY_ORDER.get(span["severity"], 0) > SEVERITY_ORDER.get(last["severity"], 0)
            merged[-1] = {
                "start": last["start"],
                "end": max(last["end"], span["end"]),
                "severity": span["severity"] if stronger else last["severity"],
                "category": span["category"] if stronger else last["category"],
                "message": span["message"] if stronger else last["message"],
            }
            continue
        merged.append(dict(span))

    return merged


def build_highlighted_html(text: str, issues: list[dict[str, Any]]) -> str:
    """Baut HTML mit <mark>-Markierungen pro Issue-Span (Farbe nach Kategorie)."""
    spans = [
        {
            "start": i["start_index"],
            "end": i["end_index"],
            "severity": i.get("severity", "suggestion"),
            "category": i.get("category", ""),
            "message": i.get("message", ""),
        }
        for i in issues
        if i.get("end_index", 0) > i.get("start_index", 0)
    ]
    merged = _deduplicate_and_merge_spans(spans)

    # von vorne nach hinten zusammensetzen, Text dazwischen escapen
    parts: list[str] = []
    cursor = 0
    for span in merged:
        start = max(cursor, span["start"])
        end = min(len(text), span["end"])
        if start >= end:
            continue
        colors = _category_colors(span["category"])
        parts.append(html.escape(text[cursor:start]))
        parts.append(
            f'<mark title="{html.escape(span["message"])}" style="background-color: {colors["bg"]}; '
            f'border-bottom: 2px solid {colors["underline"]};">'
        )
        parts.append(html.escape(text[start:end]))
        parts.append("</mark>")
        cursor = end
    parts.append(html.escape(text[cursor:]))
    return "".join(parts)


def render_highlights(text: str, issues: list[dict[str, Any]]) -> None:
    if not issues:
        st.text(text)
        return
    st.markdown(build_highlighted_html(text, issues), unsafe_allow_html=True)
    st.caption("Legende: 🔴 correctness | 🔵 clarity | 🟢 engagement | 🟣 delivery")


def render_scores(score: dict[str, Any]) -> None:
    """Rendert den Writing-Score mit Farbe und Beschreibung."""
    overall = score.get("overall", 0)
    st.markdown(
        f'<h2 style="color: {get_score_color(overall)}; margin-bottom: 0;">{overall}</h2>',
        unsafe_allow_html=True,
    )
    st.caption(get_score_description(overall))

    cols = st.columns(4)
    for col, name in zip(cols, ["correctness", "clarity", "engagement", "delivery"]):
        with col:
            st.metric(name.capitalize(), score.get(name, 0))


def render_readability(readability: dict[str, Any]) -> None:
    st.subheader("Readability")
    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Flesch-Kincaid", f"{readability.get('flesch_kincaid_grade', 0.0):.1f}")
    with col2:
        st.metric("Level", readability.get("education_level", ""))
    with col3:
        st.metric("Ø Wortlänge", f"{readability.get('average_word_length', 0.0):.1f}")
    difficult = readability.get("difficult_sentences", [])
    if difficult:
        st.caption(f"Schwierige Sätze: {', '.join(str(i + 1) for i in difficult)}")


def render_tone(tone: dict[str, Any]) -> None:
    st.subheader("Tone")
    st.metric("Dominant", tone.get("dominant", "neutral"))
    breakdown = tone.get("breakdown", [])
    if breakdown:
        df = pd.DataFrame(breakdown).set_index("tone")
        st.bar_chart(df["percentage"])
    if not tone.get("is_consistent", True):
        st.warning(f"{len(tone.get('inconsistencies', []))} Satz/Sätze weichen vom dominanten Ton ab")


def render_statistics(statistics: dict[str, Any]) -> None:
    st.subheader("Statistics")
    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Wörter", statistics.get("word_count", 0))
    with col2:
        st.metric("Sätze", statistics.get("sentence_count", 0))
    with col3:
        st.metric("Absätze", statistics.get("paragraph_count", 0))
    with col4:
        st.metric("Lesezeit (min)", statistics.get("reading_time_minutes", 0))


def issues_to_dataframe(issues: list[dict[str, Any]]) -> pd.DataFrame:
    rows = []
    for i in issues:
        suggestions = i.get("suggestions", [])
        rows.append(
            {
                "Category": i.get("category", ""),
                "Severity": i.get("severity", ""),
                "Text": i.get("original_text", ""),
                "Message": i.get("message", ""),
                "Suggestion": suggestions[0]["text"] if suggestions else "",
                "Start": i.get("start_index"),
                "End": i.get("end_index"),
                "Rule": i.get("rule", ""),
            }
        )
    return pd.DataFrame(rows)
