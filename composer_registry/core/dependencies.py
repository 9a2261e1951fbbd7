# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Dependency injection for the composer registry.

Provides FastAPI dependencies for services and access gates.
Everything is read from app.state, which create_app() populates once.
"""

from fastapi import Depends, Request
from fastapi.security import HTTPBasicCredentials

from composer_registry.services.artifact_store import ArtifactStore
from composer_registry.services.catalog_service import CatalogService
from composer_registry.services.upload_service import UploadService


def get_artifact_store(request: Request) -> ArtifactStore:
    """Get the shared ArtifactStore."""
    return request.app.state.artifact_store


def get_catalog_service(
    store: ArtifactStore = Depends(get_artifact_store)
) -> CatalogService:
    """Get CatalogService instance."""
    return CatalogService(store)


def get_upload_service(
    store: ArtifactStore = Depends(get_artifact_store)
) -> UploadService:
    """Get UploadService instance."""
    return UploadService(store)


# Access gates
async def require_user_auth(request: Request) -> HTTPBasicCredentials:
    """Require package download credentials."""
    return await request.app.state.user_gate(request)


async def require_admin_auth(request: Request) -> HTTPBasicCredentials:
    """Require package upload credentials."""
    return await request.app.state.admin_gate(request)
