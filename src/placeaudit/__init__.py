"""placeaudit — Reconcile place descriptions against a geocoding service."""

from placeaudit.distance import distance_km
from placeaudit.exceptions import (
    ConfigInvalid,
    ConfigNotFound,
    GeocodingError,
    InputInvalid,
    InputNotFound,
    InputUnreadable,
    NoMatchFound,
    PlaceAuditError,
    ProviderError,
)
from placeaudit.models import (
    ErrorRecord,
    GeocodeResult,
    InputRecord,
    OutputRecord,
)
from placeaudit.pipeline import PipelineResult, run
from placeaudit.reconcile import Reconciler

__all__ = [
    "Reconciler",
    "run",
    "PipelineResult",
    "distance_km",
    "InputRecord",
    "GeocodeResult",
    "OutputRecord",
    "ErrorRecord",
    "PlaceAuditError",
    "GeocodingError",
    "ProviderError",
    "NoMatchFound",
    "ConfigNotFound",
    "ConfigInvalid",
    "InputNotFound",
    "InputUnreadable",
    "InputInvalid",
]
