# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Package API Routes

- GET /packages.json: public catalog
- GET /package/{vendor}/{name}/{version}: archive download (user credentials)
"""

from typing import Any, Dict, Tuple

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from composer_registry.core.dependencies import (
    get_artifact_store,
    get_catalog_service,
    require_user_auth,
)
from composer_registry.core.errors import InvalidPackagePathError
from composer_registry.models import CatalogResponse
from composer_registry.services.artifact_store import ArtifactStore
from composer_registry.services.catalog_service import CatalogService

router = APIRouter(tags=["packages"])


def parse_package_path(package_path: str) -> Tuple[str, str, str]:
    """Split "vendor/name/version" from the download URL."""
    parts = package_path.split("/")
    if len(parts) != 3 or not all(parts):
        raise InvalidPackagePathError("Invalid package path")
    return parts[0], parts[1], parts[2]


@router.get("/packages.json", response_model=CatalogResponse)
async def get_packages_json(
    request: Request,
    service: CatalogService = Depends(get_catalog_service)
) -> Dict[str, Any]:
    """Full catalog of stored packages, rebuilt on every request"""
    host = request.headers.get("host") or request.url.netloc
    return await service.build_catalog(host)


@router.get("/package/{package_path:path}", dependencies=[Depends(require_user_auth)])
async def download_package(
    package_path: str,
    store: ArtifactStore = Depends(get_artifact_store)
) -> Response:
    """Download the stored zip archive of one package version"""
    vendor, name, version = parse_package_path(package_path)
    content = store.get_archive(vendor, name, version)

    return Response(
        content=content,
        media_type="application/octet-stream",
        headers={
            "Content-Disposition": f'attachment; filename="{vendor}-{name}.zip"',
        },
    )
