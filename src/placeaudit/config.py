"""Application configuration loaded from a JSON file."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from placeaudit.exceptions import ConfigInvalid, ConfigNotFound

# Environment variable takes priority over ./config.json
CONFIG_ENV_VAR = "PLACEAUDIT_CONFIG"
_DEFAULT_USER_AGENT = "placeaudit"

# Normalised JSON key -> AppConfig field. Keys are compared lower-cased
# with underscores removed, so "MapIndex" and "map_index" both match.
_KEY_ALIASES = {
    "alsregion": "region",
    "region": "region",
    "mapindex": "map_index",
    "countries": "countries",
    "confidencethreshold": "confidence_threshold",
    "inputfile": "input_file",
    "outputfile": "output_file",
    "provider": "provider",
    "timeout": "timeout",
    "strictcoordinates": "strict_coordinates",
    "useragent": "user_agent",
}


@dataclass(frozen=True)
class AppConfig:
    """Settings for one audit run."""

    confidence_threshold: float
    input_file: str
    output_file: str
    region: str = ""
    map_index: str = ""
    countries: tuple[str, ...] = ()
    provider: str = "aws"
    timeout: Optional[float] = None
    strict_coordinates: bool = False
    user_agent: str = _DEFAULT_USER_AGENT
    source: str = "<memory>"


def default_config_path() -> Path:
    return Path(
        os.environ.get(CONFIG_ENV_VAR, str(Path.cwd() / "config.json"))
    )


def _require(values: dict, key: str, path: str) -> Any:
    if key not in values:
        raise ConfigInvalid(path, f"missing required setting '{key}'")
    return values[key]


def _as_str(value: Any, key: str, path: str) -> str:
    if not isinstance(value, str):
        raise ConfigInvalid(path, f"'{key}' must be a string")
    return value


def _as_float(value: Any, key: str, path: str) -> float:
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigInvalid(path, f"'{key}' must be a number")
    return float(value)


def from_dict(data: dict, source: str = "<memory>") -> AppConfig:
    """
    Build an AppConfig from a decoded JSON object.

    Unknown keys are ignored. Raises ConfigInvalid on missing or
    mistyped settings.
    """
    values: dict = {}
    for key, value in data.items():
        field_name = _KEY_ALIASES.get(key.replace("_", "").lower())
        if field_name is not None:
            values[field_name] = value

    threshold = _as_float(
        _require(values, "confidence_threshold", source),
        "confidence_threshold",
        source,
    )
    input_file = _as_str(
        _require(values, "input_file", source), "input_file", source
    )
    output_file = _as_str(
        _require(values, "output_file", source), "output_file", source
    )

    countries = values.get("countries") or []
    if not isinstance(countries, list) or not all(
        isinstance(c, str) for c in countries
    ):
        raise ConfigInvalid(source, "'countries' must be a list of strings")

    timeout = values.get("timeout")
    if timeout is not None:
        timeout = _as_float(timeout, "timeout", source)

    strict = values.get("strict_coordinates", False)
    if not isinstance(strict, bool):
        raise ConfigInvalid(
            source, "'strict_coordinates' must be true or false"
        )

    provider = _as_str(
        values.get("provider", "aws"), "provider", source
    ).lower()
    map_index = _as_str(values.get("map_index", ""), "map_index", source)
    region = _as_str(values.get("region", ""), "region", source)
    if provider == "aws":
        for key, value in (("map_index", map_index), ("region", region)):
            if not value:
                raise ConfigInvalid(
                    source, f"'{key}' is required for provider 'aws'"
                )

    return AppConfig(
        confidence_threshold=threshold,
        input_file=input_file,
        output_file=output_file,
        region=region,
        map_index=map_index,
        countries=tuple(countries),
        provider=provider,
        timeout=timeout,
        strict_coordinates=strict,
        user_agent=_as_str(
            values.get("user_agent", _DEFAULT_USER_AGENT), "user_agent", source
        ),
        source=source,
    )


def load_config(path: str | Path | None = None) -> AppConfig:
    """
    Load settings from *path*, or from default_config_path() if omitted.

    Raises ConfigNotFound if the file is missing and ConfigInvalid if it
    is not valid JSON or has bad values.
    """
    path = Path(path) if path is not None else default_config_path()
    if not path.is_file():
        raise ConfigNotFound(str(path))

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigInvalid(str(path), f"not valid JSON ({exc})") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigInvalid(str(path), f"cannot read file ({exc})") from exc
    if not isinstance(data, dict):
        raise ConfigInvalid(str(path), "top level must be a JSON object")

    return from_dict(data, source=str(path))
