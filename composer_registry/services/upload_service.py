# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Upload Service - Accepts new package versions.

Pipeline (first failure aborts):
  open zip -> find composer.json -> read -> parse -> name/version -> store

The stored archive is always the uploaded body itself; the extracted
composer.json is only used for the storage key and the catalog.
"""

import io
import posixpath
import zipfile
import zlib
from typing import Dict, Optional, Tuple

from composer_registry.core.errors import (
    BadArchiveError,
    BadManifestError,
    InvalidPackagePathError,
    ManifestParseError,
    MissingFieldError,
    MissingManifestError,
    StorageError,
    sanitize_error_for_user,
)
from composer_registry.core.logging import get_service_logger, log_event
from composer_registry.services.artifact_store import ArtifactStore, MANIFEST_FILENAME
from composer_registry.services.manifest import parse_manifest

logger = get_service_logger("upload")


def find_manifest(archive: zipfile.ZipFile) -> Optional[zipfile.ZipInfo]:
    """
    Return the first entry named composer.json.

    Entries in subdirectories match too; the first one in archive order wins.
    """
    for info in archive.infolist():
        if posixpath.basename(info.filename) == MANIFEST_FILENAME:
            return info
    return None


def split_package_name(package_name: str) -> Tuple[str, str]:
    """Split "vendor/name" into its two parts."""
    parts = package_name.split("/")
    if len(parts) != 2 or not all(parts):
        raise InvalidPackagePathError(
            f"Invalid package name in composer.json: {package_name!r}", field="name"
        )
    return parts[0], parts[1]


class UploadService:
    """Validates and persists uploaded package archives."""

    def __init__(self, store: ArtifactStore):
        """
        Initialize UploadService.

        Args:
            store: Artifact store receiving accepted uploads
        """
        self.store = store

    async def upload(self, body: bytes) -> Dict[str, str]:
        """
        Store one package version from a zip archive.

        Args:
            body: Complete request body

        Returns:
            {"message": "Created composer package <name>, version <version>"}

        Raises:
            BadArchiveError: Body is not a zip archive
            MissingManifestError: No (or an empty) composer.json in the archive
            StorageError: composer.json unreadable or the write failed
            BadManifestError: composer.json is not a JSON object
            MissingFieldError: name or version missing or not a string
            InvalidPackagePathError: name/version unusable as a storage key
        """
        try:
            archive = zipfile.ZipFile(io.BytesIO(body))
        except (zipfile.BadZipFile, ValueError, OSError) as e:
            raise BadArchiveError(f"Cannot read ZIP content: {sanitize_error_for_user(e)}") from e

        with archive:
            info = find_manifest(archive)
            manifest_bytes = b""
            if info is not None:
                try:
                    manifest_bytes = archive.read(info)
                except (zipfile.BadZipFile, NotImplementedError, RuntimeError, OSError, zlib.error) as e:
                    raise StorageError(
                        f"Cannot read composer.json: {sanitize_error_for_user(e)}"
                    ) from e

        if not manifest_bytes:
            raise MissingManifestError("Cannot find composer.json in ZIP file.")

        try:
            manifest = parse_manifest(manifest_bytes)
        except ManifestParseError as e:
            raise BadManifestError(f"Cannot decode composer.json: {e.message}") from e

        package_name = manifest.get("name")
        if not isinstance(package_name, str):
            raise MissingFieldError("name")

        package_version = manifest.get("version")
        if not isinstance(package_version, str):
            raise MissingFieldError("version")

        vendor, name = split_package_name(package_name)

        # Existing versions are overwritten
        self.store.put(vendor, name, package_version, body, manifest_bytes)

        log_event(
            logger,
            "package_uploaded",
            vendor=vendor,
            package=name,
            version=package_version,
            size=len(body),
        )

        return {
            "message": f"Created composer package {package_name}, version {package_version}"
        }
