# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Admin API Routes

Handles package publishing:
- POST /admin/upload with a zip archive as the raw request body
"""

from typing import Dict

from fastapi import APIRouter, Depends, Request
from starlette.requests import ClientDisconnect

from composer_registry.core.dependencies import get_upload_service, require_admin_auth
from composer_registry.core.errors import MethodNotAllowedError, StorageError
from composer_registry.models import UploadResponse
from composer_registry.services.upload_service import UploadService

router = APIRouter(prefix="/admin", tags=["admin"])

# Every method reaches the handler so credentials are checked before the method
ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


@router.api_route(
    "/upload",
    methods=ALL_METHODS,
    response_model=UploadResponse,
    dependencies=[Depends(require_admin_auth)],
)
async def upload_package(
    request: Request,
    service: UploadService = Depends(get_upload_service)
) -> Dict[str, str]:
    """Upload a package zip containing a composer.json"""
    if request.method != "POST":
        raise MethodNotAllowedError(request.method)

    try:
        body = await request.body()
    except ClientDisconnect as e:
        raise StorageError("Cannot read request body: client disconnected") from e

    return await service.upload(body)
