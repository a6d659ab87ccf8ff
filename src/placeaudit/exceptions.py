"""Custom exception hierarchy for placeaudit."""


class PlaceAuditError(Exception):
    """Base exception for all placeaudit errors."""


# ── Per-record failures ──────────────────────────────────────────
# These never abort a run; the reconciler turns them into error records.


class GeocodingError(PlaceAuditError):
    """A single place description could not be resolved."""


class ProviderError(GeocodingError):
    """The provider call itself failed (network, auth, throttling)."""

    def __init__(self, provider: str, detail: str):
        self.provider = provider
        self.detail = detail
        super().__init__(f"{provider}: {detail}")


class NoMatchFound(GeocodingError):
    """The provider returned zero candidates for the search text."""

    def __init__(self, text: str):
        self.text = text
        super().__init__("no result found")


# ── Fatal, run-level failures ────────────────────────────────────


class ConfigNotFound(PlaceAuditError):
    """The configuration file does not exist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Configuration file not found at: {path}")


class ConfigInvalid(PlaceAuditError):
    """The configuration file is unreadable or has bad values."""

    def __init__(self, path: str, detail: str):
        self.path = path
        super().__init__(f"Invalid configuration in {path}: {detail}")


class InputNotFound(PlaceAuditError):
    """The input CSV file does not exist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Input file not found at: {path}")


class InputUnreadable(PlaceAuditError):
    """The input CSV exists but cannot be read or decoded."""

    def __init__(self, path: str, detail: str):
        self.path = path
        super().__init__(f"Cannot read input file {path}: {detail}")


class InputInvalid(PlaceAuditError):
    """An input row has a coordinate that is not a number (strict mode)."""

    def __init__(self, row: int, column: str, value: str):
        self.row = row
        self.column = column
        self.value = value
        super().__init__(
            f"Row {row}: {column} is not a number: '{value}'"
        )
