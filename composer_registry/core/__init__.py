# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Core utilities and shared modules for the composer registry.

This package contains:
- config: Configuration management
- dependencies: Dependency injection
- errors: Custom exceptions
- logging: Structured logging
- security: HTTP Basic access gates
"""

from composer_registry.core.config import get_config, Config, Credentials
from composer_registry.core.errors import RegistryError, NotFoundError, ValidationError
from composer_registry.core.logging import get_logger

__all__ = [
    "get_config",
    "Config",
    "Credentials",
    "RegistryError",
    "NotFoundError",
    "ValidationError",
    "get_logger",
]
