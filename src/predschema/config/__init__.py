"""Configuration: TOML defaults with profile overlays, structlog setup."""

from predschema.config.settings import Settings, configure_logging, get_settings, load_config

__all__ = ["Settings", "configure_logging", "get_settings", "load_config"]
