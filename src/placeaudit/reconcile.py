"""Per-record reconciliation: geocode, classify, measure deviation."""

from __future__ import annotations

import logging
from typing import Optional, Sequence, Union

from placeaudit.distance import distance_km, format_km
from placeaudit.exceptions import GeocodingError
from placeaudit.models import (
    STATUS_LOW_CONFIDENCE,
    STATUS_OK,
    ErrorRecord,
    InputRecord,
    OutputRecord,
)
from placeaudit.providers import GeocodingProvider

logger = logging.getLogger(__name__)

Outcome = Union[OutputRecord, ErrorRecord]


def classify(confidence: float, threshold: float) -> str:
    """LOW CONFIDENCE only when *confidence* is below *threshold*."""
    if confidence < threshold:
        return STATUS_LOW_CONFIDENCE
    return STATUS_OK


class Reconciler:
    """
    Resolves one input record at a time through a geocoding provider.

    The return type is the outcome: an OutputRecord when the provider
    found a place, an ErrorRecord when it did not. Nothing is remembered
    between calls.
    """

    def __init__(
        self,
        provider: GeocodingProvider,
        threshold: float,
        countries: Optional[Sequence[str]] = None,
    ):
        self._provider = provider
        self._threshold = threshold
        self._countries = list(countries) if countries else None

    def reconcile(self, record: InputRecord) -> Outcome:
        try:
            result = self._provider.resolve(record.text, self._countries)
        except GeocodingError as exc:
            return ErrorRecord(
                index=record.index, text=record.text, error=str(exc)
            )

        km = distance_km(
            record.expected_lat,
            record.expected_long,
            result.lat,
            result.long,
        )
        status = classify(result.confidence, self._threshold)
        if status == STATUS_LOW_CONFIDENCE:
            logger.debug(
                "Record %d below threshold (%.3f < %.3f)",
                record.index,
                result.confidence,
                self._threshold,
            )

        return OutputRecord(
            index=record.index,
            input_text=record.text,
            input_lat=record.expected_lat,
            input_long=record.expected_long,
            output_text=result.label,
            output_lat=result.lat,
            output_long=result.long,
            confidence=result.confidence,
            distance=format_km(km),
            status=status,
        )
