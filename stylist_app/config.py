"""Configuration helpers for the wardrobe planner."""

from dataclasses import dataclass
from pathlib import Path
import os
from typing import Optional

from stylist_app.errors import ConfigurationMissing

DEFAULT_TEXT_MODEL = "gemini-3-flash-preview"
DEFAULT_IMAGE_MODEL = "gemini-2.5-flash-image"
DEFAULT_LOCATION = "New York, NY"
DEFAULT_GEOLOCATION_URL = "https://ipapi.co/json/"


@dataclass
class AppConfig:
    """Configuration values for the planner app.

    Only the API key gates generation; everything else has a working default
    so the wardrobe, trends and calendar views run without credentials.
    """

    api_key: Optional[str] = None
    text_model: str = DEFAULT_TEXT_MODEL
    image_model: str = DEFAULT_IMAGE_MODEL
    request_timeout_seconds: float = 60.0
    default_location: str = DEFAULT_LOCATION
    geolocation_url: str = DEFAULT_GEOLOCATION_URL
    calendar_id: Optional[str] = None
    google_credentials_path: Optional[str] = None
    calendar_days_ahead: int = 4
    environment: str | None = None

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key and self.api_key.strip())

    def require_api_key(self) -> str:
        """Return the API key or raise :class:`ConfigurationMissing`."""

        if not self.has_api_key:
            raise ConfigurationMissing()
        return str(self.api_key).strip()

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Build a config from environment variables or an environment YAML file.

        Environment specific YAML lives in ``config/environments/<env>.yaml`` by
        default and is merged with environment variables so that the API key
        can be injected by the runtime environment.
        """

        env_name = os.getenv("APP_ENV")
        config_path = os.getenv("APP_CONFIG_PATH")
        config_dir = Path(os.getenv("APP_CONFIG_DIR", "config/environments"))
        yaml_config: dict = {}

        if config_path:
            path = Path(config_path)
        elif env_name:
            path = config_dir / f"{env_name}.yaml"
        else:
            path = None

        if path and path.exists():
            yaml_config = cls._load_yaml_config(path)

        def get_value(key: str, default: Optional[str] = None) -> Optional[str]:
            env_key = key.upper()
            return os.getenv(env_key, yaml_config.get(key, default))

        api_key = get_value("google_api_key") or get_value("api_key")
        timeout = get_value("request_timeout_seconds", "60")
        days_ahead = get_value("calendar_days_ahead", "4")

        return cls(
            api_key=api_key,
            text_model=str(get_value("text_model", DEFAULT_TEXT_MODEL) or DEFAULT_TEXT_MODEL),
            image_model=str(get_value("image_model", DEFAULT_IMAGE_MODEL) or DEFAULT_IMAGE_MODEL),
            request_timeout_seconds=float(timeout or 60),
            default_location=str(get_value("default_location", DEFAULT_LOCATION) or DEFAULT_LOCATION),
            geolocation_url=str(
                get_value("geolocation_url", DEFAULT_GEOLOCATION_URL) or DEFAULT_GEOLOCATION_URL
            ),
            calendar_id=get_value("calendar_id"),
            google_credentials_path=get_value("google_credentials_path"),
            calendar_days_ahead=int(days_ahead or 4),
            environment=env_name,
        )

    @staticmethod
    def _load_yaml_config(path: Path) -> dict:
        """Parse a flat ``key: value`` config file."""

        config: dict[str, str] = {}
        for line in path.read_text().splitlines():
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            if ":" not in stripped:
                continue
            key, raw_value = stripped.split(":", 1)
            value = raw_value.strip()
            if (value.startswith("\"") and value.endswith("\"")) or (
                value.startswith("'") and value.endswith("'")
            ):
                value = value[1:-1]
            config[key.strip()] = value
        return config


__all__ = ["AppConfig", "DEFAULT_TEXT_MODEL", "DEFAULT_IMAGE_MODEL", "DEFAULT_LOCATION"]
