"""Streamlit Dashboard für GrammarAPI."""

from pathlib import Path
import sys

import streamlit as st

# Add ui directory to path
UI_DIR = Path(__file__).resolve().parent
sys.path.insert(0, str(UI_DIR))

import api_client
import render

# Page config
st.set_page_config(
    page_title="GrammarAPI Dashboard",
    page_icon="✍️",
    layout="wide",
)

# Session State: Text, letztes Ergebnis und Dismissal-State gehören dem Client
for key, default in (
    ("text", ""),
    ("pending_text", None),
    ("result", None),
    ("dismissal_state", {"patterns": []}),
    ("last_error", None),
):
    if key not in st.session_state:
        st.session_state[key] = default

# Pending updates für die Textarea (verhindert StreamlitAPIException)
if st.session_state["pending_text"] is not None:
    st.session_state["text"] = st.session_state["pending_text"]
    st.session_state["pending_text"] = None


def _run_analysis() -> None:
    resp = api_client.analyze(st.session_state["text"], st.session_state["dismissal_state"])
    if resp["success"]:
        st.session_state["result"] = resp["data"]
        st.session_state["last_error"] = None
    else:
        st.session_state["last_error"] = resp["error"]


def _apply_suggestion(issue: dict, suggestion: str) -> None:
    resp = api_client.correct(
        st.session_state["text"],
        issue["start_index"],
        issue["end_index"],
        suggestion,
        expected_original=issue["original_text"],
        dismissal_state=st.session_state["dismissal_state"],
    )
    if not resp["success"]:
        st.session_state["last_error"] = resp["error"]
        return
    data = resp["data"]
    if not data["success"]:
        st.session_state["last_error"] = data.get("message") or data.get("error")
    st.session_state["pending_text"] = data["text"]
    st.session_state["result"] = data["result"]


def _dismiss(issue: dict) -> None:
    resp = api_client.dismiss(st.session_state["text"], issue, st.session_state["dismissal_state"])
    if not resp["success"]:
        st.session_state["last_error"] = resp["error"]
        return
    st.session_state["dismissal_state"] = resp["data"]["dismissal_state"]
    st.session_state["result"] = resp["data"]["result"]


def _undismiss(key: str) -> None:
    resp = api_client.undismiss(st.session_state["text"], key, st.session_state["dismissal_state"])
    if not resp["success"]:
        st.session_state["last_error"] = resp["error"]
        return
    st.session_state["dismissal_state"] = resp["data"]["dismissal_state"]
    st.session_state["result"] = resp["data"]["result"]


# Sidebar
with st.sidebar:
    st.title("✍️ GrammarAPI")

    st.subheader("API Status")
    api_health = api_client.health_check()
    if api_health.get("available"):
        st.success(f"✅ API: {api_client.API_BASE_URL}")
    else:
        st.error(f"❌ API: {api_client.API_BASE_URL}")
        st.caption(f"Fehler: {api_health.get('message', 'Unknown')}")

    st.divider()
    st.subheader("Ignorierte Muster")
    patterns = st.session_state["dismissal_state"].get("patterns", [])
    if not patterns:
        st.caption("Keine")
    for key, pattern in patterns:
        col1, col2 = st.columns([3, 1])
        with col1:
            st.caption(f"{pattern['rule']}: {pattern['original_text']}")
        with col2:
            st.button("↺", key=f"undismiss_{key}", on_click=_undismiss, args=(key,))
    if patterns and st.button("Alle zurücksetzen"):
        st.session_state["dismissal_state"] = {"patterns": []}
        _run_analysis()


st.header("Writing Assistant")
st.text_area("Text", key="text", height=220)
st.button("Analysieren", type="primary", on_click=_run_analysis)

if st.session_state["last_error"]:
    st.error(st.session_state["last_error"])

result = st.session_state["result"]
if result:
    render.render_scores(result["score"])
    st.divider()

    render.render_highlights(st.session_state["text"], result["issues"])

    tab1, tab2, tab3, tab4 = st.tabs(["Issues", "Readability", "Tone", "Statistics"])

    with tab1:
        issues = result["issues"]
        if not issues:
            st.info("Keine Auffälligkeiten gefunden.")
        for issue in issues:
            with st.expander(f"[{issue['category']}] {issue['message']}: \"{issue['original_text']}\""):
                st.caption(issue["description"])
                for n, suggestion in enumerate(issue.get("suggestions", [])):
                    st.button(
                        f"→ {suggestion['text'] or '(entfernen)'}",
                        key=f"fix_{issue['id']}_{n}",
                        on_click=_apply_suggestion,
                        args=(issue, suggestion["text"]),
                    )
                st.button("Ignorieren", key=f"dismiss_{issue['id']}", on_click=_dismiss, args=(issue,))
        if issues:
            st.dataframe(render.issues_to_dataframe(issues), use_container_width=True)

    with tab2:
        render.render_readability(result["readability"])

    with tab3:
        render.render_tone(result["tone"])

    with tab4:
        render.render_statistics(result["statistics"])
