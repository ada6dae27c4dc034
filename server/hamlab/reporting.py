"""Отображение событий декодера в журнал."""

from __future__ import annotations

import logging
from typing import List, Optional

from .pipelines.fec import CorrectionEvent, OutcomeKind

logger = logging.getLogger(__name__)


def describe_event(event: CorrectionEvent) -> str:
    if event.kind is OutcomeKind.CORRECTED:
        return f"Ошибка исправлена в бите {event.position} (слово {event.codeword_index})."
    if event.kind is OutcomeKind.UNCORRECTABLE:
        return f"Инвертированы два бита в слове {event.codeword_index}; исправление невозможно!"
    return f"Слово {event.codeword_index} без ошибок."


class LogReporter:
    """Наблюдатель декодера: пишет каждое событие в журнал и запоминает его."""

    def __init__(self, log: Optional[logging.Logger] = None) -> None:
        self.log = log or logger
        self.events: List[CorrectionEvent] = []

    def __call__(self, event: CorrectionEvent) -> None:
        self.events.append(event)
        level = logging.WARNING if event.kind is OutcomeKind.UNCORRECTABLE else logging.INFO
        self.log.log(level, describe_event(event))
