# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""Response models for the registry API."""

from typing import Any, Dict

from pydantic import BaseModel


class UploadResponse(BaseModel):
    """Result of a successful upload"""
    message: str


class CatalogResponse(BaseModel):
    """packages.json body: package name -> version -> composer.json"""
    packages: Dict[str, Dict[str, Dict[str, Any]]]


class HealthResponse(BaseModel):
    status: str
    service: str
