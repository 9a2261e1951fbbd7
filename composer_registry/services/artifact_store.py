# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Artifact Store - Durable storage of package archives and manifests.

Single responsibility: (vendor, name, version) keyed reads and writes.

Storage Structure:
  data/packages/
    {vendor}/{name}/{version}/
      package.zip
      composer.json
"""

import os
import shutil
import uuid
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterator, NamedTuple, Tuple

from composer_registry.core.errors import (
    InvalidPackagePathError,
    NotFoundError,
    StorageError,
    sanitize_error_for_user,
)
from composer_registry.core.logging import get_service_logger

logger = get_service_logger("artifact_store")

ARCHIVE_FILENAME = "package.zip"
MANIFEST_FILENAME = "composer.json"
STAGING_PREFIX = ".staging-"


class StoredManifest(NamedTuple):
    """One listed storage key with its raw manifest bytes."""
    vendor: str
    name: str
    version: str
    manifest: bytes

    @property
    def package_name(self) -> str:
        return f"{self.vendor}/{self.name}"


def validate_key_component(kind: str, value: str) -> str:
    """
    Check that a vendor, name or version maps to exactly one directory.

    Raises:
        InvalidPackagePathError: If the component is empty, contains control
            characters or would escape its parent directory
    """
    if (
        not value
        or value in (".", "..")
        or "/" in value
        or "\\" in value
        or any(ord(char) < 0x20 or ord(char) == 0x7f for char in value)
    ):
        raise InvalidPackagePathError(f"Invalid package {kind}: {value!r}", field=kind)
    return value


class ArtifactStore(ABC):
    """Key-value-with-hierarchy interface for package artifacts."""

    @abstractmethod
    def put(self, vendor: str, name: str, version: str, archive: bytes, manifest: bytes) -> None:
        """Store an archive and its manifest under one key."""

    @abstractmethod
    def get_archive(self, vendor: str, name: str, version: str) -> bytes:
        """Return the stored archive bytes."""

    @abstractmethod
    def list_packages(self) -> Iterator[Tuple[str, str]]:
        """Yield every (vendor, name) pair present in the store."""

    @abstractmethod
    def list_entries(self) -> Iterator[StoredManifest]:
        """Yield every key that has a readable manifest."""


class FilesystemArtifactStore(ArtifactStore):
    """
    Stores artifacts as plain files below a root directory.

    Writes are not locked. Concurrent uploads of the same key race per file
    and the last writer wins. With atomic_commit enabled, both files are
    staged in a sibling directory first and swapped into place by rename.
    """

    def __init__(self, root: Path, atomic_commit: bool = False):
        """
        Initialize store.

        Args:
            root: Storage root (created lazily on first write)
            atomic_commit: Stage writes and rename into place
        """
        self.root = Path(root)
        self.atomic_commit = atomic_commit

    def _key_path(self, vendor: str, name: str, version: str) -> Path:
        validate_key_component("vendor", vendor)
        validate_key_component("name", name)
        validate_key_component("version", version)
        return self.root / vendor / name / version

    def put(self, vendor: str, name: str, version: str, archive: bytes, manifest: bytes) -> None:
        """
        Write package.zip and composer.json for a key.

        Raises:
            InvalidPackagePathError: If a key component is unusable
            StorageError: If the filesystem write fails (nothing is rolled back)
        """
        package_path = self._key_path(vendor, name, version)
        logger.info(f"Adding package: {vendor}/{name}/{version}")

        if self.atomic_commit:
            self._put_staged(package_path, archive, manifest)
            return

        try:
            package_path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot create package folder: {sanitize_error_for_user(e)}") from e

        self._write_file(package_path / ARCHIVE_FILENAME, archive)
        self._write_file(package_path / MANIFEST_FILENAME, manifest)

    def _write_file(self, path: Path, content: bytes) -> None:
        try:
            path.write_bytes(content)
        except OSError as e:
            raise StorageError(f"Cannot write file: {sanitize_error_for_user(e)}") from e

    def _put_staged(self, package_path: Path, archive: bytes, manifest: bytes) -> None:
        parent = package_path.parent
        token = uuid.uuid4().hex[:12]
        staging = parent / f"{STAGING_PREFIX}{package_path.name}-{token}"
        retired = parent / f"{STAGING_PREFIX}{package_path.name}-{token}-old"

        try:
            staging.mkdir(parents=True)
        except OSError as e:
            raise StorageError(f"Cannot create package folder: {sanitize_error_for_user(e)}") from e

        try:
            self._write_file(staging / ARCHIVE_FILENAME, archive)
            self._write_file(staging / MANIFEST_FILENAME, manifest)
            try:
                if package_path.exists():
                    os.replace(package_path, retired)
                os.replace(staging, package_path)
            except OSError as e:
                raise StorageError(f"Cannot commit package: {sanitize_error_for_user(e)}") from e
        finally:
            shutil.rmtree(staging, ignore_errors=True)
            shutil.rmtree(retired, ignore_errors=True)

    def get_archive(self, vendor: str, name: str, version: str) -> bytes:
        """
        Read the stored archive.

        Raises:
            InvalidPackagePathError: If a key component is unusable
            NotFoundError: If no archive exists for the key
            StorageError: If the archive cannot be read
        """
        archive_path = self._key_path(vendor, name, version) / ARCHIVE_FILENAME
        if not archive_path.is_file():
            raise NotFoundError("Package", f"{vendor}/{name} {version}")

        try:
            return archive_path.read_bytes()
        except FileNotFoundError as e:
            raise NotFoundError("Package", f"{vendor}/{name} {version}") from e
        except OSError as e:
            raise StorageError(f"Cannot read package: {sanitize_error_for_user(e)}") from e

    def _subdirs(self, path: Path) -> Iterator[Path]:
        try:
            children = sorted(path.iterdir())
        except OSError:
            return
        for child in children:
            if child.is_dir():
                yield child

    def list_packages(self) -> Iterator[Tuple[str, str]]:
        for vendor_dir in self._subdirs(self.root):
            for name_dir in self._subdirs(vendor_dir):
                yield vendor_dir.name, name_dir.name

    def list_entries(self) -> Iterator[StoredManifest]:
        for vendor, name in self.list_packages():
            name_dir = self.root / vendor / name
            try:
                versions = sorted(name_dir.iterdir())
            except OSError as e:
                logger.warning(f"Cannot list versions of {vendor}/{name}: {sanitize_error_for_user(e)}")
                continue

            for version_dir in versions:
                if version_dir.name.startswith(STAGING_PREFIX):
                    continue

                manifest_path = version_dir / MANIFEST_FILENAME
                if not manifest_path.exists():
                    continue

                try:
                    manifest = manifest_path.read_bytes()
                except OSError as e:
                    logger.warning(
                        f"Skipping {vendor}/{name} {version_dir.name}: {sanitize_error_for_user(e)}"
                    )
                    continue

                yield StoredManifest(vendor, name, version_dir.name, manifest)
