"""Pipeline driver: push every input record through the reconciler."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from placeaudit.models import ErrorRecord, InputRecord, OutputRecord
from placeaudit.reconcile import Reconciler

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """The two ordered output streams of a run."""

    successes: list[OutputRecord] = field(default_factory=list)
    errors: list[ErrorRecord] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.successes) + len(self.errors)

    @property
    def low_confidence(self) -> int:
        return sum(1 for r in self.successes if r.is_low_confidence)


def run(
    records: Iterable[InputRecord], reconciler: Reconciler
) -> PipelineResult:
    """
    Reconcile *records* sequentially, in the order given.

    A record that fails to resolve lands in ``errors``; it never stops
    the run. Every record ends up in exactly one of the two lists.
    """
    result = PipelineResult()

    for record in records:
        outcome = reconciler.reconcile(record)
        if isinstance(outcome, ErrorRecord):
            logger.debug("Record %d failed: %s", record.index, outcome.error)
            result.errors.append(outcome)
        else:
            logger.debug(
                "Record %d resolved (%s, %s km)",
                record.index,
                outcome.status,
                outcome.distance,
            )
            result.successes.append(outcome)

    logger.info(
        "Processed %d records: %d resolved (%d low confidence), %d failed",
        result.total,
        len(result.successes),
        result.low_confidence,
        len(result.errors),
    )
    return result
