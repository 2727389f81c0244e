"""Configuration settings for planespotter."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from dotenv import load_dotenv

from planespotter.errors import ConfigError
from planespotter.models.geo import Position
from planespotter.models.save_state import ApiAuth, Config
from planespotter.services.geofence import validate_position

logger = logging.getLogger("planespotter.config")

ENV_KEYS = (
    "LATITUDE",
    "LONGITUDE",
    "OPENSKY_USERNAME",
    "OPENSKY_PASSWORD",
    "SPOT_DISTANCE_KM",
    "CHECK_FREQ_SECONDS",
)


def _get_bool(env_var: str, default: bool = False) -> bool:
    """Parse an environment variable into a boolean with a default."""

    value = os.getenv(env_var)
    if value is None:
        return default

    return value.lower() in {"1", "true", "yes", "on"}


def _get_optional_float(env_var: str) -> Optional[float]:
    value = os.getenv(env_var)
    return float(value) if value else None


@dataclass
class Settings:
    """Process settings loaded from environment variables."""

    planespotter_env: str = os.getenv("PLANESPOTTER_ENV", "local")
    log_level: str = os.getenv("PLANESPOTTER_LOG_LEVEL", "INFO")
    save_path: str = os.getenv("PLANESPOTTER_SAVE_PATH", "save.json")

    # OpenSky
    opensky_host: str = os.getenv("OPENSKY_HOST", "opensky-network.org")
    opensky_timeout: Optional[float] = _get_optional_float("OPENSKY_TIMEOUT")
    opensky_password_ssm_parameter: Optional[str] = os.getenv(
        "OPENSKY_PASSWORD_SSM_PARAMETER"
    )

    # Spotting loop
    autostart: bool = _get_bool("PLANESPOTTER_AUTOSTART", default=False)
    stop_timeout: float = float(os.getenv("PLANESPOTTER_STOP_TIMEOUT", "5.0"))

    # Notifications
    notifier: str = os.getenv("PLANESPOTTER_NOTIFIER", "desktop")
    icon_path: str = os.getenv("PLANESPOTTER_ICON_PATH", "assets/plane.png")


settings = Settings()


@lru_cache(maxsize=1)
def _ssm_client():
    return boto3.client(
        "ssm",
        region_name=os.getenv("AWS_REGION") or os.getenv("AWS_DEFAULT_REGION") or "us-east-1",
    )


@lru_cache(maxsize=4)
def get_ssm_secret(name: str) -> str:
    """Fetch a decrypted parameter from AWS SSM Parameter Store.

    The value is cached in-memory to avoid repeated SSM calls.
    """

    try:
        response = _ssm_client().get_parameter(Name=name, WithDecryption=True)
        value = response.get("Parameter", {}).get("Value")
    except (ClientError, BotoCoreError) as exc:  # pragma: no cover - AWS error passthrough
        logger.error("Failed to load %s from SSM: %s", name, exc)
        raise ConfigError(f"Unable to load {name} from SSM") from exc

    if not value:
        logger.error("Received empty value for %s from SSM", name)
        raise ConfigError(f"{name} not configured in SSM")

    return value


def parse_position(latitude: float, longitude: float) -> Position:
    return validate_position(Position(latitude=latitude, longitude=longitude))


def parse_api_auth(username: str, password: str) -> ApiAuth:
    if not username or not password:
        raise ConfigError("error getting OPENSKY_USERNAME or OPENSKY_PASSWORD from env")
    return ApiAuth(username=username, password=password)


def _parse_number(env_var: str, kind: type, label: str, minimum: Optional[int] = None):
    try:
        value = kind(os.getenv(env_var, ""))
    except ValueError as exc:
        raise ConfigError(f"error reading {label} from env") from exc

    if minimum is not None and value < minimum:
        raise ConfigError(f"{label} from env must be at least {minimum}")
    return value


def load_env_config(dotenv_path: Optional[str] = None) -> Optional[Config]:
    """Build the bootstrap Config from ``.env`` and the environment.

    Returns None when none of the observer variables are set. When any is
    set, all must be valid; otherwise ConfigError or InvalidPosition is
    raised. An unset password is read from SSM when
    ``OPENSKY_PASSWORD_SSM_PARAMETER`` names a parameter.
    """

    load_dotenv(dotenv_path)

    if not any(os.getenv(key) for key in ENV_KEYS):
        return None

    latitude = _parse_number("LATITUDE", float, "latitude")
    longitude = _parse_number("LONGITUDE", float, "longitude")
    position = parse_position(latitude, longitude)

    username = os.getenv("OPENSKY_USERNAME", "")
    password = os.getenv("OPENSKY_PASSWORD", "")
    if not password and settings.opensky_password_ssm_parameter:
        password = get_ssm_secret(settings.opensky_password_ssm_parameter)
    api_auth = parse_api_auth(username, password)

    check_freq_seconds = _parse_number("CHECK_FREQ_SECONDS", int, "check frequency", minimum=1)
    spot_distance_km = _parse_number("SPOT_DISTANCE_KM", int, "spot distance", minimum=0)

    return Config(
        position=position,
        api_auth=api_auth,
        spot_distance_km=spot_distance_km,
        check_freq_seconds=check_freq_seconds,
    )


__all__ = [
    "Settings",
    "get_ssm_secret",
    "load_env_config",
    "parse_api_auth",
    "parse_position",
    "settings",
]
