"""
Vagueness Detection

A definition is vague when it cannot be measured the same way twice:
- it names no explicit time window ("30 days", "1 week")
- it hedges ("varies", "sometimes", "any")
- it offers alternatives with "or" but no numeric threshold

The predicates here are shared with incompatibility detection.
"""

import logging

from ...core.entities import MetricRecord
from ...core.vocabulary import (
    TIME_FRAME_PATTERN,
    HEDGE_PATTERN,
    DISJUNCTION_PATTERN,
    THRESHOLD_PATTERN,
    REASON_NO_TIME_FRAME,
    REASON_HEDGE_WORDS,
    REASON_UNQUALIFIED_OR
)
from .schemas import VagueDefinition

logger = logging.getLogger(__name__)


def has_time_frame(definition: str) -> bool:
    return TIME_FRAME_PATTERN.search(definition) is not None


def has_hedge_words(definition: str) -> bool:
    return HEDGE_PATTERN.search(definition) is not None


def has_or(definition: str) -> bool:
    return DISJUNCTION_PATTERN.search(definition) is not None


def has_threshold(definition: str) -> bool:
    return THRESHOLD_PATTERN.search(definition) is not None


def has_unqualified_or(definition: str) -> bool:
    return has_or(definition) and not has_threshold(definition)


class VaguenessDetector:
    """Per-record check for definitions lacking measurable criteria."""

    def reasons(self, definition: str) -> list[str]:
        """Triggered reasons, in fixed order; empty when the definition is clear."""
        found = []
        if not has_time_frame(definition):
            found.append(REASON_NO_TIME_FRAME)
        if has_hedge_words(definition):
            found.append(REASON_HEDGE_WORDS)
        if has_unqualified_or(definition):
            found.append(REASON_UNQUALIFIED_OR)
        return found

    def is_vague(self, definition: str) -> bool:
        return bool(self.reasons(definition))

    def detect(self, records: list[MetricRecord]) -> list[VagueDefinition]:
        vague = []
        for record in records:
            reasons = self.reasons(record.definition)
            if reasons:
                vague.append(VagueDefinition(
                    team=record.team,
                    metric_name=record.name,
                    definition=record.definition,
                    reasons=reasons
                ))

        logger.debug("%d of %d definitions are vague", len(vague), len(records))
        return vague
