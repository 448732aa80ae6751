"""API Client für das GrammarAPI Backend."""

import os
from typing import Any

import requests

API_BASE_URL = os.getenv("GRAMMAR_API_BASE_URL", "http://localhost:8000")
TIMEOUT = 30


def health_check() -> dict[str, Any]:
    """Prüft ob API erreichbar ist."""
    try:
        response = requests.get(f"{API_BASE_URL}/health", timeout=5)
        if response.status_code == 200:
            return {"status": "ok", "available": True}
        return {"status": "error", "available": False, "message": f"Status {response.status_code}"}
    except requests.exceptions.RequestException as e:
        return {"status": "error", "available": False, "message": str(e)}


def _post(path: str, payload: dict[str, Any]) -> dict[str, Any]:
    url = f"{API_BASE_URL}{path}"
    try:
        response = requests.post(url, json=payload, timeout=TIMEOUT)
        response.raise_for_status()
        return {"success": True, "data": response.json()}
    except requests.exceptions.HTTPError:
        return {
            "success": False,
            "error": f"HTTP {response.status_code}: {response.text}",
            "status_code": response.status_code,
        }
    except requests.exceptions.RequestException as e:
        return {"success": False, "error": str(e)}


def analyze(text: str, dismissal_state: dict[str, Any] | None = None) -> dict[str, Any]:
    """
    Sendet Text an /analyze.

    Returns:
        dict mit "success" und entweder "data" (AnalysisResult) oder "error"
    """
    payload: dict[str, Any] = {"text": text}
    if dismissal_state:
        payload["dismissal_state"] = dismissal_state
    return _post("/analyze", payload)


def correct(
    text: str,
    start_index: int,
    end_index: int,
    correction: str,
    expected_original: str | None = None,
    dismissal_state: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Wendet eine Korrektur an; data enthält success/text/result."""
    payload: dict[str, Any] = {
        "text": text,
        "start_index": start_index,
        "end_index": end_index,
        "correction": correction,
    }
    if expected_original is not None:
        payload["expected_original"] = expected_original
    if dismissal_state:
        payload["dismissal_state"] = dismissal_state
    return _post("/correct", payload)


def dismiss(text: str, issue: dict[str, Any], dismissal_state: dict[str, Any] | None = None) -> dict[str, Any]:
    payload: dict[str, Any] = {"text": text, "issue": issue}
    if dismissal_state:
        payload["dismissal_state"] = dismissal_state
    return _post("/dismiss", payload)


def undismiss(text: str, key: str, dismissal_state: dict[str, Any]) -> dict[str, Any]:
    return _post("/undismiss", {"text": text, "key": key, "dismissal_state": dismissal_state})
