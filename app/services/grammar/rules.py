"""
Regel-Engine: deklarative Regel-Tabellen + eine generische Match-Funktion.

Jede Regel ist ein Datensatz (id, Kategorie, Schweregrad, Pattern, Texte,
Vorschlags-Funktion). Neue Regeln werden nur in den Tabellen ergänzt, die
Engine selbst bleibt unverändert.

Die Engine dedupliziert nicht: mehrere Regeln dürfen dieselbe Stelle treffen.
Ausgabe ist stabil nach start_index sortiert.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

from app.services.grammar.grammar_models import (
    ALL_ISSUE_CATEGORIES,
    Correction,
    Issue,
    IssueCategory,
    Severity,
)
from app.services.grammar.ids import IdGenerator, resolve_id_generator

SuggestionFn = Callable[[str, str], List[Correction]]


@dataclass(frozen=True)
class AnalysisRule:
    id: str
    category: IssueCategory
    severity: Severity
    pattern: re.Pattern
    message: str
    description: str
    get_suggestions: SuggestionFn


@dataclass(frozen=True)
class RuleMatch:
    text: str
    start_index: int
    end_index: int


# ---------- Vorschlags-Fabriken ---------- #

def _fixed(*options: tuple[str, float]) -> SuggestionFn:
    def suggest(match: str, context: str) -> List[Correction]:
        return [Correction(text=t, confidence=c) for t, c in options]

    return suggest


def _swap(words: Sequence[str], confidence: float) -> SuggestionFn:
    """Vorschläge = alle anderen Wörter der Verwechslungs-Gruppe."""

    def suggest(match: str, context: str) -> List[Correction]:
        lower = match.lower()
        return [Correction(text=w, confidence=confidence) for w in words if w != lower]

    return suggest


def _ci(pattern: str) -> re.Pattern:
    return re.compile(pattern, re.IGNORECASE)


def _typo(word: str, pattern: str, correct: str, message: str, description: str) -> AnalysisRule:
    return AnalysisRule(
        id=f"typo-{word}",
        category=IssueCategory.correctness,
        severity="error",
        pattern=_ci(pattern),
        message=message,
        description=description,
        get_suggestions=_fixed((correct, 1.0)),
    )


def _spelling(word: str, correct: str, description: str, pattern: Optional[str] = None) -> AnalysisRule:
    return _typo(
        word,
        pattern or rf"\b{word}\b",
        correct,
        f"Spelling error: should be '{correct}'",
        description,
    )


# ---------- Regel-Tabellen ---------- #

TYPO_RULES: List[AnalysisRule] = [
    _typo(
        "alot",
        r"\balot\b",
        "a lot",
        "Spelling error: 'alot' should be 'a lot'",
        "The word 'alot' is not a valid English word. Use 'a lot' (two words) instead.",
    ),
    _spelling("definately", "definitely", "Common misspelling of 'definitely'.", r"\b(definately|definatly)\b"),
    _spelling("seperate", "separate", "Common misspelling of 'separate'."),
    _spelling("occured", "occurred", "The word 'occurred' has double 'r'."),
    _spelling("recieve", "receive", "Remember: 'i' before 'e' except after 'c'."),
    _typo(
        "irregardless",
        r"\birregardless\b",
        "regardless",
        "Use 'regardless' instead of 'irregardless'",
        "'Irregardless' is nonstandard. Use 'regardless'.",
    ),
    _spelling("teh", "the", "Common typo for 'the'."),
    _spelling("wierd", "weird", "Exception to 'i before e' rule."),
    _spelling("accomodate", "accommodate", "'Accommodate' has double 'c' and double 'm'."),
    _spelling("untill", "until", "'Until' has only one 'l'."),
    _spelling("belive", "believe", "Common misspelling of 'believe'."),
    _spelling("calender", "calendar", "Common misspelling of 'calendar'."),
    _spelling("collegue", "colleague", "Common misspelling of 'colleague'."),
    _spelling("comming", "coming", "'Coming' has only one 'm'."),
    _spelling("existance", "existence", "Common misspelling of 'existence'."),
    _spelling("foreward", "forward", "Common misspelling of 'forward'.", r"\b(foreward|foward)\b"),
    _spelling("goverment", "government", "Common misspelling of 'government'."),
    _spelling("knowlege", "knowledge", "Common misspelling of 'knowledge'."),
    _spelling("mispell", "misspell", "'Misspell' has double 's'."),
    _spelling("neccessary", "necessary", "'Necessary' has one 'c' and double 's'."),
    _spelling("publically", "publicly", "'Publicly' does not have 'al'."),
    _spelling("suprise", "surprise", "Common misspelling of 'surprise'."),
    _spelling("truely", "truly", "'Truly' drops the 'e' from 'true'."),
    _spelling("wich", "which", "Common typo for 'which'."),
]


def _contraction(bare: str, fixed: str, long_form: str) -> AnalysisRule:
    # case-sensitive: "Cant" am Satzanfang oder Eigennamen bleiben unberührt
    return AnalysisRule(
        id=f"contraction-{bare}",
        category=IssueCategory.correctness,
        severity="error",
        pattern=re.compile(rf"\b{bare}\b"),
        message=f"Missing apostrophe: should be '{fixed}'",
        description=f"Contraction of '{long_form}' requires an apostrophe.",
        get_suggestions=_fixed((fixed, 1.0)),
    )


CONTRACTION_RULES: List[AnalysisRule] = [
    _contraction("wont", "won't", "will not"),
    _contraction("dont", "don't", "do not"),
    _contraction("cant", "can't", "cannot"),
    _contraction("shouldnt", "shouldn't", "should not"),
    _contraction("couldnt", "couldn't", "could not"),
    _contraction("wouldnt", "wouldn't", "would not"),
    _contraction("hasnt", "hasn't", "has not"),
    _contraction("havent", "haven't", "have not"),
    _contraction("isnt", "isn't", "is not"),
    _contraction("arent", "aren't", "are not"),
    _contraction("didnt", "didn't", "did not"),
    _contraction("doesnt", "doesn't", "does not"),
]


def _confused(rule_id: str, words: Sequence[str], confidence: float, description: str) -> AnalysisRule:
    alternation = "|".join(re.escape(w) for w in words)
    if len(words) > 2:
        label = "/".join(words)
        message = f"Check usage of '{label}'"
    else:
        message = f"Check usage of '{words[0]}' vs '{words[1]}'"
    return AnalysisRule(
        id=f"confused-{rule_id}",
        category=IssueCategory.correctness,
        severity="warning",
        pattern=_ci(rf"\b({alternation})\b"),
        message=message,
        description=description,
        get_suggestions=_swap(words, confidence),
    )


CONFUSED_WORDS_RULES: List[AnalysisRule] = [
    _confused(
        "their-there",
        ["their", "there", "they're"],
        0.5,
        "'their' (possessive), 'there' (location), 'they're' (they are).",
    ),
    _confused("its-its", ["its", "it's"], 0.7, "'its' (possessive) vs 'it's' (it is)."),
    _confused("your-youre", ["your", "you're"], 0.7, "'your' (possessive) vs 'you're' (you are)."),
    _confused("affect-effect", ["affect", "effect"], 0.5, "'affect' (verb) vs 'effect' (noun, usually)."),
    _confused("then-than", ["then", "than"], 0.5, "'then' (time) vs 'than' (comparison)."),
    _confused("loose-lose", ["loose", "lose"], 0.5, "'loose' (not tight) vs 'lose' (misplace)."),
    _confused(
        "to-too-two",
        ["to", "too", "two"],
        0.3,
        "'to' (direction), 'too' (also/excessive), 'two' (2).",
    ),
    _confused("whose-whos", ["whose", "who's"], 0.7, "'whose' (possessive) vs 'who's' (who is)."),
    _confused("accept-except", ["accept", "except"], 0.5, "'accept' (receive) vs 'except' (exclude)."),
]


def _could_have(match: str, context: str) -> List[Correction]:
    return [Correction(text=re.sub(r" of$", " have", match, flags=re.IGNORECASE), confidence=1.0)]


def _strip_space(match: str, context: str) -> List[Correction]:
    return [Correction(text=match.strip(), confidence=1.0)]


GRAMMAR_RULES: List[AnalysisRule] = [
    AnalysisRule(
        id="grammar-could-of",
        category=IssueCategory.correctness,
        severity="error",
        pattern=_ci(r"\b(could|would|should) of\b"),
        message="Use 'have' instead of 'of'",
        description="The correct form is 'could have', 'would have', or 'should have'.",
        get_suggestions=_could_have,
    ),
    AnalysisRule(
        id="grammar-lowercase-i",
        category=IssueCategory.correctness,
        severity="error",
        pattern=re.compile(r"\bi\b"),
        message="Capitalize 'I' when referring to yourself",
        description="The pronoun 'I' should always be capitalized.",
        get_suggestions=_fixed(("I", 1.0)),
    ),
    AnalysisRule(
        id="grammar-double-spaces",
        category=IssueCategory.correctness,
        severity="error",
        pattern=re.compile(r"\s{2,}"),
        message="Multiple consecutive spaces detected",
        description="Use single spaces between words.",
        get_suggestions=_fixed((" ", 1.0)),
    ),
    AnalysisRule(
        id="grammar-space-before-punct",
        category=IssueCategory.correctness,
        severity="error",
        pattern=re.compile(r"\s+([,.!?;:])"),
        message="Remove space before punctuation",
        description="Punctuation should directly follow the preceding word.",
        get_suggestions=_strip_space,
    ),
]


def _style(
    rule_id: str,
    category: IssueCategory,
    pattern: str,
    message: str,
    description: str,
    *options: tuple[str, float],
) -> AnalysisRule:
    return AnalysisRule(
        id=rule_id,
        category=category,
        severity="suggestion",
        pattern=_ci(pattern),
        message=message,
        description=description,
        get_suggestions=_fixed(*options),
    )


_C = IssueCategory.clarity
_E = IssueCategory.engagement

WORDY_PHRASE_RULES: List[AnalysisRule] = [
    _style("wordy-in-order-to", _C, r"\bin order to\b", "Wordy phrase: consider using 'to'",
           "'In order to' can usually be simplified to 'to'.", ("to", 0.9)),
    _style("wordy-due-to-fact", _C, r"\bdue to the fact that\b", "Wordy phrase: consider using 'because'",
           "'Due to the fact that' can be simplified to 'because'.", ("because", 0.9)),
    _style("wordy-at-this-point", _C, r"\bat this point in time\b", "Wordy phrase: consider using 'now'",
           "'At this point in time' can be simplified to 'now'.", ("now", 0.9)),
    _style("wordy-utilize", _C, r"\butilize\b", "Consider using 'use' instead of 'utilize'",
           "'Use' is simpler and more direct than 'utilize'.", ("use", 0.8)),
    _style("wordy-a-number-of", _C, r"\ba number of\b", "Wordy phrase: consider 'many' or 'some'",
           "'A number of' can often be replaced with 'many' or 'some'.", ("many", 0.7), ("some", 0.7)),
    _style("wordy-absolutely-essential", _C, r"\babsolutely essential\b", "Redundant: 'essential' implies absolute",
           "'Essential' already means absolutely necessary.", ("essential", 0.9)),
    _style("wordy-advance-planning", _C, r"\badvance planning\b", "Redundant: planning is done in advance",
           "Planning inherently involves looking ahead.", ("planning", 0.9)),
    _style("wordy-ask-question", _C, r"\bask the question\b", "Redundant: 'ask' implies a question",
           "Simply use 'ask' without 'the question'.", ("ask", 0.9)),
    _style("wordy-at-later-date", _C, r"\bat a later date\b", "Wordy phrase: consider using 'later'",
           "'At a later date' can be simplified to 'later'.", ("later", 0.9)),
    _style("wordy-basic-fundamentals", _C, r"\bbasic fundamentals\b",
           "Redundant: fundamentals are basic by definition",
           "Use either 'basics' or 'fundamentals'.", ("fundamentals", 0.9), ("basics", 0.9)),
    _style("wordy-completely-eliminate", _C, r"\bcompletely eliminate\b",
           "Redundant: 'eliminate' implies completeness",
           "'Eliminate' already means to remove completely.", ("eliminate", 0.9)),
    _style("wordy-during-course", _C, r"\bduring the course of\b", "Wordy phrase: consider using 'during'",
           "'During the course of' can be simplified to 'during'.", ("during", 0.9)),
    _style("wordy-end-result", _C, r"\bend result\b", "Redundant: 'result' implies the end",
           "A result is already the end of a process.", ("result", 0.9)),
    _style("wordy-future-plans", _C, r"\bfuture plans\b", "Redundant: plans are for the future",
           "Plans inherently refer to the future.", ("plans", 0.9)),
    _style("wordy-past-history", _C, r"\bpast history\b", "Redundant: history is in the past",
           "History by definition refers to the past.", ("history", 0.9)),
]

CLICHE_RULES: List[AnalysisRule] = [
    _style("cliche-at-end-of-day", _E, r"\bat the end of the day\b", "Cliché detected: 'at the end of the day'",
           "Consider a more original expression like 'ultimately' or 'in conclusion'.",
           ("ultimately", 0.7), ("in conclusion", 0.7)),
    _style("cliche-think-outside-box", _E, r"\bthink outside the box\b", "Cliché detected: 'think outside the box'",
           "Consider 'be creative' or 'innovate'.", ("be creative", 0.7), ("innovate", 0.7)),
    _style("cliche-low-hanging-fruit", _E, r"\blow[- ]hanging fruit\b", "Cliché detected: 'low-hanging fruit'",
           "Consider 'easy wins' or 'quick opportunities'.", ("easy wins", 0.7), ("quick opportunities", 0.7)),
    _style("cliche-move-needle", _E, r"\bmove the needle\b", "Cliché detected: 'move the needle'",
           "Consider 'make progress' or 'have impact'.", ("make progress", 0.7), ("have impact", 0.7)),
    _style("cliche-synergy", _E, r"\bsynergy\b", "Overused business jargon: 'synergy'",
           "Consider 'collaboration' or 'combined effort'.", ("collaboration", 0.7), ("combined effort", 0.7)),
    _style("cliche-paradigm-shift", _E, r"\bparadigm shift\b", "Overused phrase: 'paradigm shift'",
           "Consider 'fundamental change' or 'transformation'.",
           ("fundamental change", 0.7), ("transformation", 0.7)),
    _style("cliche-game-changer", _E, r"\bgame[- ]changer\b", "Cliché detected: 'game-changer'",
           "Consider 'breakthrough' or 'significant development'.",
           ("breakthrough", 0.7), ("significant development", 0.7)),
    _style("cliche-best-practice", _E, r"\bbest practices?\b", "Overused phrase: 'best practice(s)'",
           "Consider 'recommended approach' or 'proven method'.",
           ("recommended approach", 0.7), ("proven method", 0.7)),
]


def _weak(adjective: str, strong: str, alternative: str) -> AnalysisRule:
    return _style(
        f"weak-very-{adjective}",
        _E,
        rf"\bvery {adjective}\b",
        f"Weak phrase: consider '{strong}'",
        f"'Very {adjective}' can be replaced with a stronger word.",
        (strong, 0.8),
        (alternative, 0.7),
    )


WEAK_ADJECTIVE_RULES: List[AnalysisRule] = [
    _weak("good", "excellent", "outstanding"),
    _weak("bad", "terrible", "awful"),
    _weak("happy", "ecstatic", "delighted"),
    _weak("sad", "devastated", "heartbroken"),
    _weak("big", "massive", "enormous"),
    _weak("small", "tiny", "minuscule"),
]

# Passiv und Zahlenformat laufen über advanced.py (satz- bzw. dokumentweiter Kontext)
ALL_RULES: List[AnalysisRule] = [
    *TYPO_RULES,
    *CONTRACTION_RULES,
    *CONFUSED_WORDS_RULES,
    *GRAMMAR_RULES,
    *WORDY_PHRASE_RULES,
    *CLICHE_RULES,
    *WEAK_ADJECTIVE_RULES,
]


# ---------- Engine ---------- #

def find_matches(text: str, pattern: re.Pattern) -> List[RuleMatch]:
    return [
        RuleMatch(text=m.group(0), start_index=m.start(), end_index=m.end())
        for m in pattern.finditer(text)
        if m.end() > m.start()
    ]


def apply_rule(text: str, rule: AnalysisRule, id_generator: Optional[IdGenerator] = None) -> List[Issue]:
    next_id = resolve_id_generator(id_generator)
    return [
        Issue(
            id=next_id(),
            category=rule.category,
            severity=rule.severity,
            message=rule.message,
            description=rule.description,
            start_index=match.start_index,
            end_index=match.end_index,
            original_text=match.text,
            suggestions=rule.get_suggestions(match.text, text),
            rule=rule.id,
        )
        for match in find_matches(text, rule.pattern)
    ]


def analyze_with_rules(
    text: str,
    rules: Optional[Sequence[AnalysisRule]] = None,
    id_generator: Optional[IdGenerator] = None,
) -> List[Issue]:
    if not text:
        return []
    next_id = resolve_id_generator(id_generator)
    issues: List[Issue] = []
    for rule in ALL_RULES if rules is None else rules:
        issues.extend(apply_rule(text, rule, next_id))
    # sorted() ist stabil: Gleichstand behält Erkennungs-Reihenfolge
    return sorted(issues, key=lambda i: i.start_index)


def get_issues_by_category(issues: Sequence[Issue], category: IssueCategory) -> List[Issue]:
    return [i for i in issues if i.category == category]


def get_issue_counts(issues: Sequence[Issue]) -> Dict[IssueCategory, int]:
    counts = {c: 0 for c in ALL_ISSUE_CATEGORIES}
    for issue in issues:
        counts[issue.category] += 1
    return counts
