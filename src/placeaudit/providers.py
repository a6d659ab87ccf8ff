"""Geocoding provider adapters."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional, Protocol, Sequence

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from geopy.exc import GeopyError
from geopy.geocoders import Nominatim

from placeaudit.exceptions import (
    ConfigInvalid,
    GeocodingError,
    NoMatchFound,
    ProviderError,
)
from placeaudit.models import GeocodeResult

if TYPE_CHECKING:
    from placeaudit.config import AppConfig

logger = logging.getLogger(__name__)


class GeocodingProvider(Protocol):
    """Anything that can turn free text into its best-matching place."""

    def resolve(
        self, text: str, countries: Optional[Sequence[str]] = None
    ) -> GeocodeResult:
        """
        Return the top-ranked candidate for *text*.

        Raises ProviderError if the call fails and NoMatchFound if the
        provider has no candidates.
        """
        ...


def _check_text(text: str) -> None:
    if not text or not text.strip():
        raise GeocodingError("search text is empty")


class AwsLocationProvider:
    """
    Amazon Location Service place index search.

    One ``SearchPlaceIndexForText`` call per record; only the first
    ranked result is kept.
    """

    name = "aws"

    def __init__(
        self,
        index_name: str,
        region: Optional[str] = None,
        countries: Optional[Sequence[str]] = None,
        timeout: Optional[float] = None,
        client: Any = None,
    ):
        self._index_name = index_name
        self._countries = list(countries) if countries else None
        if client is None:
            cfg = None
            if timeout:
                cfg = Config(connect_timeout=timeout, read_timeout=timeout)
            client = boto3.client("location", region_name=region, config=cfg)
        self._client = client

    def resolve(
        self, text: str, countries: Optional[Sequence[str]] = None
    ) -> GeocodeResult:
        _check_text(text)
        params: dict = {
            "IndexName": self._index_name,
            "Text": text,
            "MaxResults": 1,
        }
        filter_countries = list(countries) if countries else self._countries
        if filter_countries:
            params["FilterCountries"] = filter_countries

        try:
            response = self._client.search_place_index_for_text(**params)
        except (ClientError, BotoCoreError) as exc:
            logger.warning("Place search failed for %r: %s", text, exc)
            raise ProviderError(self.name, str(exc)) from exc

        results = response.get("Results") or []
        if not results:
            logger.warning("No result found for %r", text)
            raise NoMatchFound(text)

        top = results[0]
        try:
            place = top["Place"]
            # Point is [longitude, latitude]
            long, lat = place["Geometry"]["Point"][:2]
            return GeocodeResult(
                label=place.get("Label", ""),
                confidence=float(top["Relevance"]),
                lat=float(lat),
                long=float(long),
            )
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Malformed result for %r: %r", text, top)
            raise ProviderError(
                self.name, f"malformed result ({exc!r})"
            ) from exc


class NominatimProvider:
    """
    OpenStreetMap Nominatim search via geopy.

    Nominatim has no per-result relevance score, so the OSM ``importance``
    value stands in for confidence. Country filters must be ISO 3166-1
    alpha-2 codes.
    """

    name = "nominatim"

    def __init__(
        self,
        user_agent: str,
        countries: Optional[Sequence[str]] = None,
        timeout: Optional[float] = None,
        geocoder: Any = None,
    ):
        self._countries = list(countries) if countries else None
        if geocoder is None:
            kwargs: dict = {"user_agent": user_agent}
            if timeout:
                kwargs["timeout"] = timeout
            geocoder = Nominatim(**kwargs)
        self._geocoder = geocoder

    def resolve(
        self, text: str, countries: Optional[Sequence[str]] = None
    ) -> GeocodeResult:
        _check_text(text)
        filter_countries = list(countries) if countries else self._countries

        try:
            location = self._geocoder.geocode(
                text, exactly_one=True, country_codes=filter_countries
            )
        except GeopyError as exc:
            logger.warning("Nominatim search failed for %r: %s", text, exc)
            raise ProviderError(self.name, str(exc)) from exc

        if location is None:
            logger.warning("No result found for %r", text)
            raise NoMatchFound(text)

        raw = location.raw or {}
        return GeocodeResult(
            label=location.address,
            confidence=float(raw.get("importance", 0.0)),
            lat=float(location.latitude),
            long=float(location.longitude),
        )


def build_provider(config: AppConfig) -> GeocodingProvider:
    """Construct the provider named in *config*."""
    if config.provider == "aws":
        try:
            return AwsLocationProvider(
                index_name=config.map_index,
                region=config.region or None,
                countries=config.countries,
                timeout=config.timeout,
            )
        except BotoCoreError as exc:
            raise ConfigInvalid(config.source, str(exc)) from exc
    if config.provider == "nominatim":
        return NominatimProvider(
            user_agent=config.user_agent,
            countries=config.countries,
            timeout=config.timeout,
        )
    raise ConfigInvalid(
        config.source, f"unknown provider '{config.provider}'"
    )
