# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""Builders for package archives and on-disk fixtures."""

import io
import json
import zipfile
from pathlib import Path
from typing import Dict, Union

USER_AUTH = ("composer", "user-secret")
ADMIN_AUTH = ("admin", "admin-secret")


def make_zip(files: Dict[str, Union[str, bytes]]) -> bytes:
    """Build an in-memory zip archive from {path: content}."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for path, content in files.items():
            archive.writestr(path, content)
    return buffer.getvalue()


def make_package(name: str = "acme/widget", version: str = "1.0.0", **extra) -> bytes:
    """Build a package zip with a root composer.json."""
    manifest = {"name": name, "version": version, **extra}
    return make_zip({
        "composer.json": json.dumps(manifest),
        "src/Widget.php": "<?php\n\nclass Widget {}\n",
    })


def write_version(root: Path, vendor: str, name: str, version: str, manifest, archive: bytes = b"zip") -> Path:
    """Lay out one stored version directly on disk (manifest=None skips composer.json)."""
    version_dir = root / vendor / name / version
    version_dir.mkdir(parents=True, exist_ok=True)
    (version_dir / "package.zip").write_bytes(archive)
    if manifest is not None:
        if isinstance(manifest, dict):
            manifest = json.dumps(manifest)
        if isinstance(manifest, str):
            manifest = manifest.encode()
        (version_dir / "composer.json").write_bytes(manifest)
    return version_dir
