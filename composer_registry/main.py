# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Composer Package Registry
Serves packages.json, package downloads and an upload endpoint.

Registry Structure:
  data/packages/
    {vendor}/{name}/{version}/
      package.zip
      composer.json
"""

from http import HTTPStatus
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from starlette.exceptions import HTTPException as StarletteHTTPException

from composer_registry.api import admin, packages, system
from composer_registry.core.config import Config, get_config
from composer_registry.core.errors import RegistryError
from composer_registry.core.logging import get_api_logger, setup_logging
from composer_registry.core.responses import RegistryJSONResponse
from composer_registry.core.security import BasicAuthGate
from composer_registry.services.artifact_store import FilesystemArtifactStore

logger = get_api_logger()


def _error_content(status_code: int, message: Optional[str] = None) -> dict:
    content = {"error": HTTPStatus(status_code).phrase}
    if message:
        content["message"] = message
    return content


async def registry_error_handler(request: Request, exc: RegistryError) -> RegistryJSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}", exc_info=exc)
    return RegistryJSONResponse(
        exc.to_dict(),
        status_code=exc.status_code,
        headers=exc.headers,
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> RegistryJSONResponse:
    detail = exc.detail if isinstance(exc.detail, str) else None
    if detail == HTTPStatus(exc.status_code).phrase:
        detail = None
    return RegistryJSONResponse(
        _error_content(exc.status_code, detail),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> RegistryJSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return RegistryJSONResponse(_error_content(500), status_code=500)


def create_app(config: Optional[Config] = None) -> FastAPI:
    """
    Build the registry application.

    Args:
        config: Configuration to use (defaults to the global config)

    Returns:
        Configured FastAPI application

    Raises:
        ConfigurationError: If any credential is missing
    """
    config = config or get_config()
    config.validate()

    setup_logging(config.log_level, config.log_format)

    app = FastAPI(
        title="Composer Package Registry",
        description="Self-hosted Composer repository serving zip packages",
        version="1.0.0",
        default_response_class=RegistryJSONResponse,
    )

    app.state.config = config
    app.state.artifact_store = FilesystemArtifactStore(
        Path(config.data_path), atomic_commit=config.atomic_commit
    )
    app.state.user_gate = BasicAuthGate(config.user_auth, name="user")
    app.state.admin_gate = BasicAuthGate(config.admin_auth, name="admin")

    app.add_exception_handler(RegistryError, registry_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # General available routes
    app.include_router(packages.router)
    app.include_router(system.router)

    # Password protected admin routes
    app.include_router(admin.router)

    logger.info(f"Registry initialized with data directory: {config.data_path}")
    return app
