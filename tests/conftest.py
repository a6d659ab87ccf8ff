"""Shared test fixtures — a scripted in-memory provider and small CSV files."""

import json
from pathlib import Path

import pytest

from placeaudit.exceptions import NoMatchFound, ProviderError
from placeaudit.models import GeocodeResult


class FakeProvider:
    """
    Deterministic provider. Texts in *answers* resolve to the given
    GeocodeResult, or raise the given exception; anything else is a
    no-match.
    """

    name = "fake"

    def __init__(self, answers: dict):
        self.answers = answers
        self.calls: list[tuple] = []

    def resolve(self, text, countries=None):
        self.calls.append((text, countries))
        answer = self.answers.get(text)
        if answer is None:
            raise NoMatchFound(text)
        if isinstance(answer, Exception):
            raise answer
        return answer


@pytest.fixture()
def fake_provider() -> FakeProvider:
    return FakeProvider(
        {
            "123 Main St": GeocodeResult(
                "123 Main Street, City", 0.95, 40.001, -74.001
            ),
            "10 Downing Street": GeocodeResult(
                "10 Downing St, London SW1A 2AA, GBR", 1.0, 51.5034, -0.1276
            ),
            "Somewhere vague": GeocodeResult(
                "Vague Road, Nowhere", 0.5, 10.0, 10.0
            ),
            "Throttled place": ProviderError(
                "aws", "ThrottlingException: Rate exceeded"
            ),
        }
    )


@pytest.fixture()
def input_csv(tmp_path: Path) -> Path:
    """Input with one good row per outcome and one bad coordinate."""
    path = tmp_path / "places.csv"
    path.write_text(
        "text,lat,long\n"
        "123 Main St,40.0,-74.0\n"
        "Unknown Place XYZZY, 1.5 , 2.5\n"
        "Somewhere vague,10.0,10.0\n"
        "10 Downing Street,not-a-number,-0.1276\n"
        "Throttled place,0,0\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture()
def config_file(tmp_path: Path, input_csv: Path) -> Path:
    """A config in the legacy PascalCase key style."""
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps(
            {
                "ALSRegion": "eu-west-1",
                "MapIndex": "audit-index",
                "Countries": ["GBR", "USA"],
                "ConfidenceThreshold": 0.8,
                "InputFile": str(input_csv),
                "OutputFile": str(tmp_path / "report"),
            }
        ),
        encoding="utf-8",
    )
    return path
