# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Manifest Reader - composer.json parsing.

Unknown fields are kept as-is. Only the syntax is checked here; required
fields are checked by the caller. NaN, Infinity and numbers that overflow
a float are rejected, since they cannot be written back as JSON.
"""

import json
import math
from typing import Any, Dict

from composer_registry.core.errors import ManifestParseError


def _reject_constant(name: str) -> float:
    raise ValueError(f"non-finite number {name} is not valid JSON")


def _finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"number {text} is out of range")
    return value


def parse_manifest(content: bytes) -> Dict[str, Any]:
    """
    Parse manifest bytes into a dictionary.

    Args:
        content: Raw composer.json bytes

    Returns:
        Decoded manifest

    Raises:
        ManifestParseError: If the bytes are not a JSON object
    """
    try:
        manifest = json.loads(
            content, parse_constant=_reject_constant, parse_float=_finite_float
        )
    except ValueError as e:
        raise ManifestParseError(str(e)) from e

    if not isinstance(manifest, dict):
        raise ManifestParseError(
            f"expected a JSON object, got {type(manifest).__name__}"
        )

    return manifest
