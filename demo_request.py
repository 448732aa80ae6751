#!/usr/bin/env python3
"""Demo-Request gegen /analyze und /correct"""

import json
import sys

import requests

BASE_URL = "http://localhost:8000"

payload = {
    "text": (
        "I have alot of work to do. Their going to the store in order to buy "
        "5 apples and three oranges. The report was written by the team."
    ),
}

print("=" * 70)
print("INPUT:")
print("=" * 70)
print(json.dumps(payload, indent=2, ensure_ascii=False))
print()

try:
    response = requests.post(f"{BASE_URL}/analyze", json=payload, timeout=30)
    response.raise_for_status()
    result = response.json()
except requests.exceptions.ConnectionError:
    print(f"❌ Server nicht erreichbar unter {BASE_URL}")
    print("   Bitte starten Sie den Server mit: uvicorn app.server:app")
    sys.exit(1)
except requests.exceptions.RequestException as e:
    print(f"❌ Fehler: {e}")
    sys.exit(1)

print("=" * 70)
print("OUTPUT: WRITING SCORE")
print("=" * 70)
for name in ("overall", "correctness", "clarity", "engagement", "delivery"):
    print(f"  {name.capitalize():<12} {result['score'][name]:>3}")
print()

print("=" * 70)
print("OUTPUT: ISSUES")
print("=" * 70)
for issue in result["issues"]:
    suggestion = issue["suggestions"][0]["text"] if issue["suggestions"] else "-"
    print(
        f"  [{issue['category']:<10}] {issue['start_index']:>3}-{issue['end_index']:<3} "
        f"{issue['original_text']!r} -> {suggestion!r} ({issue['rule']})"
    )
print()

print("=" * 70)
print("OUTPUT: READABILITY / TONE / STATISTICS")
print("=" * 70)
print(f"  Flesch-Kincaid: {result['readability']['flesch_kincaid_grade']} ({result['readability']['education_level']})")
print(f"  Ton:            {result['tone']['dominant']} (konsistent: {result['tone']['is_consistent']})")
print(f"  Wörter:         {result['statistics']['word_count']}")
print()

first = next((i for i in result["issues"] if i["suggestions"]), None)
if first:
    correction = {
        "text": payload["text"],
        "start_index": first["start_index"],
        "end_index": first["end_index"],
        "correction": first["suggestions"][0]["text"],
        "expected_original": first["original_text"],
    }
    response = requests.post(f"{BASE_URL}/correct", json=correction, timeout=30)
    response.raise_for_status()
    corrected = response.json()
    print("=" * 70)
    print("OUTPUT: NACH KORREKTUR")
    print("=" * 70)
    print(f"  {corrected['text']}")
    print(f"  Issues: {len(result['issues'])} -> {len(corrected['result']['issues'])}")

print("=" * 70)
print("✅ Demo abgeschlossen")
print("=" * 70)
