"""Typed record models for placeaudit."""

from dataclasses import dataclass

STATUS_OK = "OK"
STATUS_LOW_CONFIDENCE = "LOW CONFIDENCE"

OUTPUT_HEADER = [
    "Index",
    "InputText",
    "InputLat",
    "InputLong",
    "OutputText",
    "OutputLat",
    "OutputLong",
    "Confidence",
    "Distance",
    "Status",
]
ERROR_HEADER = ["Index", "Text", "Error"]


@dataclass(frozen=True)
class InputRecord:
    """A place description and the coordinate it should resolve to."""

    index: int               # 0-based, input row minus header
    text: str
    expected_lat: float
    expected_long: float


@dataclass(frozen=True)
class GeocodeResult:
    """Top-ranked candidate returned by a geocoding provider."""

    label: str
    confidence: float        # provider relevance, 0.0-1.0
    lat: float               # WGS84
    long: float              # WGS84


@dataclass(frozen=True)
class OutputRecord:
    """A resolved input, annotated with confidence and deviation."""

    index: int
    input_text: str
    input_lat: float
    input_long: float
    output_text: str
    output_lat: float
    output_long: float
    confidence: float
    distance: str            # km, always three decimals
    status: str              # STATUS_OK or STATUS_LOW_CONFIDENCE

    @property
    def is_low_confidence(self) -> bool:
        return self.status == STATUS_LOW_CONFIDENCE

    def to_dict(self) -> dict:
        """Convert to a plain dictionary (useful for JSON serialisation)."""
        return {
            "index": self.index,
            "input_text": self.input_text,
            "input_lat": self.input_lat,
            "input_long": self.input_long,
            "output_text": self.output_text,
            "output_lat": self.output_lat,
            "output_long": self.output_long,
            "confidence": self.confidence,
            "distance": self.distance,
            "status": self.status,
        }

    def to_row(self) -> list[str]:
        """CSV cells in OUTPUT_HEADER order. Floats keep full precision."""
        return [
            str(self.index),
            self.input_text,
            repr(self.input_lat),
            repr(self.input_long),
            self.output_text,
            repr(self.output_lat),
            repr(self.output_long),
            repr(self.confidence),
            self.distance,
            self.status,
        ]


@dataclass(frozen=True)
class ErrorRecord:
    """An input that could not be resolved, with the reason."""

    index: int
    text: str
    error: str

    def to_dict(self) -> dict:
        return {"index": self.index, "text": self.text, "error": self.error}

    def to_row(self) -> list[str]:
        return [str(self.index), self.text, self.error]
