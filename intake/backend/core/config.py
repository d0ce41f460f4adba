"""
Configuration Management.

Loads settings from config/settings/*.yaml.
No hardcoded values in code: all configuration comes from these files.
Telegram credentials are not configuration: they are resolved per request
from the delivery config resource (see delivery.yaml).

Settings (YAML):
    application.yaml   - App identity, server, cors, timeouts, static mount
    logging.yaml       - Logging configuration
    features.yaml      - Feature flags
    forms.yaml         - Page variants (validation policy, delivery mode)
    delivery.yaml      - Delivery config source and Telegram API base
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from intake.backend.core.config_schema import (
    ApplicationSchema,
    DeliverySchema,
    FeaturesSchema,
    FormsSchema,
    LoggingSchema,
)


def find_project_root() -> Path:
    """Find project root by looking for .project_root marker file."""
    current = Path.cwd()
    while current != current.parent:
        if (current / ".project_root").exists():
            return current
        current = current.parent
    raise RuntimeError("Project root not found. Ensure .project_root file exists.")


def validate_project_root() -> Path:
    """
    Validate that the project root can be found.

    Raises SystemExit with a clear message if .project_root is not found.
    Use this in entry scripts before any configuration loading.
    """
    try:
        return find_project_root()
    except RuntimeError as e:
        raise SystemExit(f"Error: {e}") from e


def load_yaml_config(filename: str) -> dict[str, Any]:
    """Load a YAML configuration file from config/settings/."""
    project_root = find_project_root()
    config_path = project_root / "config" / "settings" / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path) as f:
        return yaml.safe_load(f) or {}


def _load_validated(schema_cls: type, filename: str) -> Any:
    """Load YAML and validate against schema. Returns typed model instance."""
    raw = load_yaml_config(filename)
    try:
        return schema_cls(**raw)
    except ValidationError as e:
        raise ValueError(
            f"Invalid configuration in {filename}:\n{e}"
        ) from e


class AppConfig:
    """
    Application configuration loaded from YAML files.

    Each YAML file is validated against its Pydantic schema at load time.
    Properties return typed Pydantic model instances with attribute access.
    """

    def __init__(self) -> None:
        self._application = _load_validated(ApplicationSchema, "application.yaml")
        self._logging = _load_validated(LoggingSchema, "logging.yaml")
        self._features = _load_validated(FeaturesSchema, "features.yaml")
        self._forms = _load_validated(FormsSchema, "forms.yaml")
        self._delivery = _load_validated(DeliverySchema, "delivery.yaml")

    @property
    def application(self) -> ApplicationSchema:
        """Application settings."""
        return self._application

    @property
    def logging(self) -> LoggingSchema:
        """Logging settings."""
        return self._logging

    @property
    def features(self) -> FeaturesSchema:
        """Feature flags."""
        return self._features

    @property
    def forms(self) -> FormsSchema:
        """Page variant settings."""
        return self._forms

    @property
    def delivery(self) -> DeliverySchema:
        """Delivery settings."""
        return self._delivery


@lru_cache
def get_app_config() -> AppConfig:
    """Get cached application configuration."""
    return AppConfig()


def get_static_directory() -> Path:
    """Absolute path of the static directory served at the site root."""
    static = get_app_config().application.static
    return find_project_root() / static.directory


def get_server_base_url() -> tuple[str, float | None]:
    """
    Get the server base URL and outbound timeout from application.yaml.

    Returns:
        Tuple of (base_url, timeout_seconds). Timeout is None when disabled.
    """
    app = get_app_config().application
    server = app.server
    base_url = f"http://{server.host}:{server.port}"
    return base_url, app.timeouts.external_api
