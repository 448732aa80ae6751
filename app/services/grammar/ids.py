"""
Issue-IDs.

Kein globaler Zähler: jeder Analyse-Lauf bekommt einen IdGenerator übergeben
(Default: UUID). Für Tests und reproduzierbare Ausgaben gibt es einen
SequentialIdGenerator, dessen Zähler nur zur jeweiligen Instanz gehört.
"""

from __future__ import annotations

import uuid
from typing import Callable, Optional

IdGenerator = Callable[[], str]


def uuid_id_generator() -> str:
    return f"issue-{uuid.uuid4().hex}"


class SequentialIdGenerator:
    def __init__(self, prefix: str = "issue", start: int = 1):
        self.prefix = prefix
        self._next = start

    def __call__(self) -> str:
        value = f"{self.prefix}-{self._next}"
        self._next += 1
        return value


def resolve_id_generator(id_generator: Optional[IdGenerator]) -> IdGenerator:
    return id_generator if id_generator is not None else uuid_id_generator
