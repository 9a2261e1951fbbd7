# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Catalog Service - Builds packages.json from the artifact store.

The catalog is rebuilt on every call. Broken entries are left out,
never reported.
"""

from typing import Any, Dict
from urllib.parse import quote

from composer_registry.core.errors import ManifestParseError
from composer_registry.core.logging import get_service_logger
from composer_registry.services.artifact_store import ArtifactStore
from composer_registry.services.manifest import parse_manifest

logger = get_service_logger("catalog")

# Scheme is not derived from the connection
DIST_SCHEME = "http"
DIST_TYPE = "zip"

_PATH_SAFE = "!$&'()*+,;=:@"


def build_dist_url(host: str, vendor: str, name: str, version: str) -> str:
    """Download URL for one stored version."""
    path = "/".join(quote(part, safe=_PATH_SAFE) for part in (vendor, name, version))
    return f"{DIST_SCHEME}://{host}/package/{path}"


class CatalogService:
    """Generates the Composer repository index."""

    def __init__(self, store: ArtifactStore):
        """
        Initialize CatalogService.

        Args:
            store: Artifact store to walk
        """
        self.store = store

    async def build_catalog(self, host: str) -> Dict[str, Any]:
        """
        Build the full catalog.

        Args:
            host: Host header of the incoming request, used verbatim

        Returns:
            {"packages": {"vendor/name": {"version": manifest}}}
        """
        # [package name: [package version: composer.json]]
        packages: Dict[str, Dict[str, Any]] = {}

        for vendor, name in self.store.list_packages():
            packages.setdefault(f"{vendor}/{name}", {})

        for entry in self.store.list_entries():
            try:
                manifest = parse_manifest(entry.manifest)
            except ManifestParseError as e:
                logger.warning(
                    f"Skipping {entry.package_name} {entry.version}: {e.message}"
                )
                continue

            manifest["dist"] = {
                "url": build_dist_url(host, entry.vendor, entry.name, entry.version),
                "type": DIST_TYPE,
            }
            packages.setdefault(entry.package_name, {})[entry.version] = manifest

        logger.debug(f"Built catalog with {len(packages)} packages")
        return {"packages": packages}
