# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Registry Configuration - Single source of truth.
YAML for settings. Env vars for secrets and deployment overrides.

- ALL configuration in plain text (YAML)
- Credentials come ONLY from the environment and are never persisted
"""

import os
import yaml
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from composer_registry.core.errors import ConfigurationError


# =============================================================================
# CREDENTIALS
# =============================================================================

@dataclass(frozen=True)
class Credentials:
    """One username/password pair guarding a class of operations."""

    username: str = ""
    password: str = field(default="", repr=False)

    @property
    def is_complete(self) -> bool:
        return bool(self.username) and bool(self.password)


# =============================================================================
# CONFIGURATION DATACLASS
# =============================================================================

@dataclass(frozen=True)
class Config:
    """
    Immutable application configuration.
    Loaded once at startup and passed by reference into the app.
    """

    # -- Server --
    service_host: str = "0.0.0.0"
    port: int = 3000

    # -- Storage --
    data_path: str = "data/packages"
    atomic_commit: bool = False

    # -- Logging --
    log_level: str = "INFO"
    log_format: str = "json"

    # -- Secrets --
    user_auth: Credentials = field(default_factory=Credentials)
    admin_auth: Credentials = field(default_factory=Credentials)

    def validate(self) -> None:
        """
        Fail fast on missing credentials.

        Raises:
            ConfigurationError: If any of the four credential values is empty
        """
        checks = [
            (self.user_auth.username, "User basic auth username must be provided in USER_AUTH_USERNAME"),
            (self.user_auth.password, "User basic auth password must be provided in USER_AUTH_PASSWORD"),
            (self.admin_auth.username, "Admin basic auth username must be provided in ADMIN_AUTH_USERNAME"),
            (self.admin_auth.password, "Admin basic auth password must be provided in ADMIN_AUTH_PASSWORD"),
        ]
        for value, message in checks:
            if not value:
                raise ConfigurationError(message)


# =============================================================================
# SECRETS - The ONLY thing from environment variables
# =============================================================================

def get_user_credentials() -> Credentials:
    """Credentials for package downloads."""
    return Credentials(
        username=os.getenv("USER_AUTH_USERNAME", ""),
        password=os.getenv("USER_AUTH_PASSWORD", ""),
    )


def get_admin_credentials() -> Credentials:
    """Credentials for package uploads."""
    return Credentials(
        username=os.getenv("ADMIN_AUTH_USERNAME", ""),
        password=os.getenv("ADMIN_AUTH_PASSWORD", ""),
    )


# =============================================================================
# LOADER
# =============================================================================

def load_config(path: str = "configs/registry.yaml") -> Config:
    """
    Load configuration from YAML plus environment.
    Uses defaults for anything the file doesn't set.
    """
    y = {}
    if Path(path).exists():
        with open(path) as f:
            y = yaml.safe_load(f) or {}

    # Helper to safely navigate nested dicts
    def get(d: dict, *keys, default=None):
        for k in keys:
            if not isinstance(d, dict):
                return default
            d = d.get(k, {})
        return d if d != {} else default

    return Config(
        # Server
        service_host=get(y, "server", "host") or "0.0.0.0",
        port=int(os.getenv("REGISTRY_PORT") or get(y, "server", "port") or 3000),

        # Storage
        data_path=os.getenv("REGISTRY_DATA_PATH") or get(y, "storage", "data_path") or "data/packages",
        atomic_commit=bool(get(y, "storage", "atomic_commit", default=False)),

        # Logging
        log_level=os.getenv("LOG_LEVEL") or get(y, "logging", "level") or "INFO",
        log_format=get(y, "logging", "format") or "json",

        # Secrets
        user_auth=get_user_credentials(),
        admin_auth=get_admin_credentials(),
    )


# =============================================================================
# GLOBAL INSTANCE
# =============================================================================

_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create global config instance."""
    global _config
    if _config is None:
        config_path = os.getenv("REGISTRY_CONFIG_PATH", "configs/registry.yaml")
        _config = load_config(config_path)
    return _config


def reload_config() -> Config:
    """Force reload configuration."""
    global _config
    _config = None
    return get_config()
