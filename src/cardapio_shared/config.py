"""
Utilities to centralize configuration handling across the cardapio services.
"""

from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass
class AppConfig:
    """Simple container for application level settings."""

    app_name: str
    # Supabase
    supabase_url: str
    supabase_anon_key: str
    # App settings
    secret_key: str
    log_level: str
    restaurant_timezone: str
    default_favicon_url: str
    debug_mode: bool
    flask_debug: bool
    platform_refetch_enabled: bool
    cors_allowed_origins: str
    num_proxies: int

    @property
    def allowed_origins(self) -> list[str]:
        """CORS origins parsed from the comma separated setting."""
        return [
            origin.strip() for origin in self.cors_allowed_origins.split(",") if origin.strip()
        ]


def _read_env(name: str, default: str | None = None) -> str:
    """
    Internal helper to fetch environment variables with support for defaults.
    """
    value = os.getenv(name)
    if value is None:
        if default is None:
            raise RuntimeError(f"Missing required environment variable '{name}'")
        value = default
    return value


def read_bool(name: str, default: str = "false") -> bool:
    value = _read_env(name, default)
    return value.strip().lower() in {"1", "true", "yes", "on"}


def validate_required_env_vars(skip_in_debug: bool = False) -> None:
    """
    Validate that all required environment variables are set.

    Fails fast during startup rather than on the first query against the
    hosted database.

    Args:
        skip_in_debug: If True, skip validation when DEBUG_MODE=true

    Raises:
        RuntimeError: If any required variable is missing or has an invalid value
    """
    if skip_in_debug and read_bool("DEBUG_MODE", "false"):
        return

    errors = []

    supabase_url = os.getenv("SUPABASE_URL", "")
    if not supabase_url:
        errors.append("SUPABASE_URL must be configured")
    elif not supabase_url.startswith("https://"):
        errors.append(f"SUPABASE_URL must use https, got: {supabase_url}")

    if not os.getenv("SUPABASE_ANON_KEY", ""):
        errors.append("SUPABASE_ANON_KEY must be configured")

    secret_key = os.getenv("SECRET_KEY", "")
    if not secret_key or secret_key in ["change-me-please", "super-secret-change-me"]:
        errors.append(
            "SECRET_KEY must be configured with a secure random value. "
            'Generate with: python3 -c "import secrets; print(secrets.token_urlsafe(32))"'
        )

    num_proxies = os.getenv("NUM_PROXIES", "")
    if num_proxies:
        try:
            int(num_proxies)
        except ValueError:
            errors.append(f"NUM_PROXIES must be a valid integer, got: {num_proxies}")

    if errors:
        error_msg = "\nConfiguration Errors - Missing or invalid environment variables:\n"
        for error in errors:
            error_msg += f"  - {error}\n"
        raise RuntimeError(error_msg)


def load_config(app_name: str) -> AppConfig:
    """
    Produce an AppConfig instance populated from environment variables.

    Each service passes its desired `app_name` to keep logs easy to
    differentiate while still reusing the same config loader.
    """
    return AppConfig(
        app_name=app_name,
        supabase_url=_read_env("SUPABASE_URL", ""),
        supabase_anon_key=_read_env("SUPABASE_ANON_KEY", ""),
        secret_key=_read_env("SECRET_KEY", "super-secret-change-me"),
        log_level=_read_env("LOG_LEVEL", "INFO"),
        restaurant_timezone=_read_env("RESTAURANT_TIMEZONE", "America/Sao_Paulo"),
        default_favicon_url=_read_env("DEFAULT_FAVICON_URL", "/static/logo.png"),
        debug_mode=read_bool("DEBUG_MODE", "false"),
        flask_debug=read_bool("FLASK_DEBUG", "false"),
        platform_refetch_enabled=read_bool("PLATFORM_REFETCH_ENABLED", "true"),
        cors_allowed_origins=_read_env("CORS_ALLOWED_ORIGINS", ""),
        num_proxies=int(_read_env("NUM_PROXIES", "0")),
    )
