"""Tests for placeaudit.reconcile module."""

import pytest

from placeaudit.exceptions import GeocodingError
from placeaudit.models import (
    STATUS_LOW_CONFIDENCE,
    STATUS_OK,
    ErrorRecord,
    GeocodeResult,
    InputRecord,
    OutputRecord,
)
from placeaudit.reconcile import Reconciler, classify

from conftest import FakeProvider


class TestClassify:
    def test_above_threshold_is_ok(self):
        assert classify(0.95, 0.8) == STATUS_OK

    def test_equal_to_threshold_is_ok(self):
        assert classify(0.8, 0.8) == STATUS_OK

    def test_below_threshold_is_low(self):
        assert classify(0.5, 0.8) == STATUS_LOW_CONFIDENCE

    def test_zero_threshold_accepts_everything(self):
        assert classify(0.0, 0.0) == STATUS_OK


class TestReconcile:
    def test_main_street_scenario(self, fake_provider: FakeProvider):
        rec = Reconciler(fake_provider, threshold=0.8)
        out = rec.reconcile(InputRecord(0, "123 Main St", 40.0, -74.0))

        assert isinstance(out, OutputRecord)
        assert out.index == 0
        assert out.input_text == "123 Main St"
        assert out.input_lat == 40.0
        assert out.input_long == -74.0
        assert out.output_text == "123 Main Street, City"
        assert out.output_lat == 40.001
        assert out.output_long == -74.001
        assert out.confidence == 0.95
        assert out.status == STATUS_OK
        assert out.distance == "0.140"

    def test_low_confidence_still_succeeds(self, fake_provider: FakeProvider):
        rec = Reconciler(fake_provider, threshold=0.8)
        out = rec.reconcile(InputRecord(3, "Somewhere vague", 10.0, 10.0))

        assert isinstance(out, OutputRecord)
        assert out.status == STATUS_LOW_CONFIDENCE
        assert out.is_low_confidence
        assert out.output_lat == 10.0
        assert out.output_long == 10.0
        assert out.distance == "0.000"

    def test_confidence_equal_to_threshold_is_ok(self):
        provider = FakeProvider({"x": GeocodeResult("X", 0.8, 1.0, 1.0)})
        out = Reconciler(provider, threshold=0.8).reconcile(
            InputRecord(0, "x", 1.0, 1.0)
        )
        assert out.status == STATUS_OK

    def test_no_match_becomes_error_record(self, fake_provider: FakeProvider):
        rec = Reconciler(fake_provider, threshold=0.8)
        out = rec.reconcile(InputRecord(7, "Unknown Place XYZZY", 1.0, 2.0))

        assert out == ErrorRecord(7, "Unknown Place XYZZY", "no result found")

    def test_provider_error_message_carried(self, fake_provider: FakeProvider):
        rec = Reconciler(fake_provider, threshold=0.8)
        out = rec.reconcile(InputRecord(2, "Throttled place", 0.0, 0.0))

        assert isinstance(out, ErrorRecord)
        assert "ThrottlingException" in out.error
        assert out.error.startswith("aws:")

    def test_generic_geocoding_error_becomes_error_record(self):
        provider = FakeProvider({"": GeocodingError("search text is empty")})
        out = Reconciler(provider, threshold=0.5).reconcile(
            InputRecord(0, "", 0.0, 0.0)
        )
        assert out == ErrorRecord(0, "", "search text is empty")

    def test_unexpected_exception_propagates(self):
        provider = FakeProvider({"boom": RuntimeError("bug")})
        with pytest.raises(RuntimeError):
            Reconciler(provider, threshold=0.5).reconcile(
                InputRecord(0, "boom", 0.0, 0.0)
            )

    def test_countries_passed_to_provider(self, fake_provider: FakeProvider):
        rec = Reconciler(fake_provider, threshold=0.8, countries=("USA",))
        rec.reconcile(InputRecord(0, "123 Main St", 40.0, -74.0))
        assert fake_provider.calls == [("123 Main St", ["USA"])]

    def test_no_state_between_records(self, fake_provider: FakeProvider):
        rec = Reconciler(fake_provider, threshold=0.8)
        first = rec.reconcile(InputRecord(0, "123 Main St", 40.0, -74.0))
        rec.reconcile(InputRecord(1, "Unknown", 0.0, 0.0))
        again = rec.reconcile(InputRecord(0, "123 Main St", 40.0, -74.0))

        assert first == again
        # Every call goes to the provider; nothing is cached
        assert len(fake_provider.calls) == 3
