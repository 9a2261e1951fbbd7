# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Unit tests for FilesystemArtifactStore

Tests writes, reads, listing, and key validation on a temp directory.
"""

import pytest

from composer_registry.core.errors import InvalidPackagePathError, NotFoundError, StorageError
from composer_registry.services.artifact_store import (
    FilesystemArtifactStore,
    StoredManifest,
    validate_key_component,
)
from tests.utils import write_version


class TestPut:
    """Test put method"""

    def test_writes_archive_and_manifest(self, store, data_dir):
        """Should create the key directory with both files"""
        store.put("acme", "widget", "1.0.0", b"archive-bytes", b'{"name": "acme/widget"}')

        version_dir = data_dir / "acme" / "widget" / "1.0.0"
        assert (version_dir / "package.zip").read_bytes() == b"archive-bytes"
        assert (version_dir / "composer.json").read_bytes() == b'{"name": "acme/widget"}'

    def test_existing_directory_is_fine(self, store, data_dir):
        """Should not fail when the key directory already exists"""
        (data_dir / "acme" / "widget" / "1.0.0").mkdir(parents=True)

        store.put("acme", "widget", "1.0.0", b"a", b"{}")

        assert (data_dir / "acme" / "widget" / "1.0.0" / "package.zip").exists()

    def test_second_put_overwrites(self, store):
        """Should replace both files on re-upload"""
        store.put("acme", "widget", "1.0.0", b"old", b'{"v": 1}')
        store.put("acme", "widget", "1.0.0", b"new", b'{"v": 2}')

        assert store.get_archive("acme", "widget", "1.0.0") == b"new"
        entries = list(store.list_entries())
        assert entries == [StoredManifest("acme", "widget", "1.0.0", b'{"v": 2}')]

    def test_write_failure_raises_storage_error(self, store, data_dir):
        """Should raise StorageError without exposing the path"""
        version_dir = data_dir / "acme" / "widget" / "1.0.0"
        version_dir.mkdir(parents=True)
        # A directory where the archive file should go
        (version_dir / "package.zip").mkdir()

        with pytest.raises(StorageError) as exc_info:
            store.put("acme", "widget", "1.0.0", b"a", b"{}")

        assert exc_info.value.message.startswith("Cannot write file:")
        assert str(data_dir) not in exc_info.value.message

    def test_failure_after_archive_write_is_not_rolled_back(self, store, data_dir):
        """Archive stays on disk when the manifest write fails"""
        version_dir = data_dir / "acme" / "widget" / "1.0.0"
        version_dir.mkdir(parents=True)
        (version_dir / "composer.json").mkdir()

        with pytest.raises(StorageError):
            store.put("acme", "widget", "1.0.0", b"archive", b"{}")

        assert (version_dir / "package.zip").read_bytes() == b"archive"

    @pytest.mark.parametrize("vendor,name,version", [
        ("..", "widget", "1.0.0"),
        ("acme", "", "1.0.0"),
        ("acme", "widget", "1.0/evil"),
        ("acme", "wid\\get", "1.0.0"),
    ])
    def test_rejects_unsafe_keys(self, store, data_dir, vendor, name, version):
        """Should reject key components that are not a single directory name"""
        with pytest.raises(InvalidPackagePathError):
            store.put(vendor, name, version, b"a", b"{}")

        assert not data_dir.exists()


class TestGetArchive:
    """Test get_archive method"""

    def test_returns_stored_bytes(self, store, data_dir):
        write_version(data_dir, "acme", "widget", "1.0.0", {"name": "acme/widget"}, archive=b"\x00PK\xff")

        assert store.get_archive("acme", "widget", "1.0.0") == b"\x00PK\xff"

    def test_missing_key_raises_not_found(self, store):
        """Should raise NotFoundError for unknown key"""
        with pytest.raises(NotFoundError) as exc_info:
            store.get_archive("acme", "widget", "9.9.9")

        assert "acme/widget" in str(exc_info.value)

    def test_manifest_without_archive_is_not_found(self, store, data_dir):
        version_dir = data_dir / "acme" / "widget" / "1.0.0"
        version_dir.mkdir(parents=True)
        (version_dir / "composer.json").write_text("{}")

        with pytest.raises(NotFoundError):
            store.get_archive("acme", "widget", "1.0.0")


class TestListing:
    """Test list_packages and list_entries"""

    def test_missing_root_lists_nothing(self, store):
        assert list(store.list_packages()) == []
        assert list(store.list_entries()) == []

    def test_lists_every_version(self, store, data_dir):
        write_version(data_dir, "acme", "widget", "1.0.0", {"name": "acme/widget", "version": "1.0.0"})
        write_version(data_dir, "acme", "widget", "1.1.0", {"name": "acme/widget", "version": "1.1.0"})
        write_version(data_dir, "other", "tool", "dev-main", {"name": "other/tool"})

        keys = {(e.vendor, e.name, e.version) for e in store.list_entries()}
        assert keys == {
            ("acme", "widget", "1.0.0"),
            ("acme", "widget", "1.1.0"),
            ("other", "tool", "dev-main"),
        }

    def test_skips_versions_without_manifest(self, store, data_dir):
        """Should skip keys whose composer.json is missing but still list the package"""
        write_version(data_dir, "acme", "widget", "1.0.0", None)

        assert list(store.list_entries()) == []
        assert list(store.list_packages()) == [("acme", "widget")]

    def test_ignores_files_at_vendor_and_name_level(self, store, data_dir):
        data_dir.mkdir(parents=True)
        (data_dir / "README").write_text("not a vendor")
        (data_dir / "acme").mkdir()
        (data_dir / "acme" / "notes.txt").write_text("not a package")

        assert list(store.list_packages()) == []

    def test_listing_is_lazy_and_restartable(self, store, data_dir):
        write_version(data_dir, "acme", "widget", "1.0.0", {"name": "acme/widget"})

        first = store.list_entries()
        assert next(first).version == "1.0.0"

        write_version(data_dir, "acme", "widget", "2.0.0", {"name": "acme/widget"})
        assert len(list(store.list_entries())) == 2

    def test_stored_manifest_package_name(self):
        entry = StoredManifest("acme", "widget", "1.0.0", b"{}")
        assert entry.package_name == "acme/widget"


class TestAtomicCommit:
    """Test staged commit mode"""

    @pytest.fixture
    def atomic_store(self, data_dir):
        return FilesystemArtifactStore(data_dir, atomic_commit=True)

    def test_writes_both_files(self, atomic_store, data_dir):
        atomic_store.put("acme", "widget", "1.0.0", b"archive", b"{}")

        version_dir = data_dir / "acme" / "widget" / "1.0.0"
        assert (version_dir / "package.zip").read_bytes() == b"archive"
        assert (version_dir / "composer.json").read_bytes() == b"{}"

    def test_overwrite_leaves_no_staging_directories(self, atomic_store, data_dir):
        atomic_store.put("acme", "widget", "1.0.0", b"old", b"{}")
        atomic_store.put("acme", "widget", "1.0.0", b"new", b"{}")

        assert atomic_store.get_archive("acme", "widget", "1.0.0") == b"new"
        assert [p.name for p in (data_dir / "acme" / "widget").iterdir()] == ["1.0.0"]

    def test_staging_directories_are_not_listed(self, atomic_store, data_dir):
        write_version(data_dir, "acme", "widget", ".staging-1.0.0-abc", {"name": "acme/widget"})

        assert list(atomic_store.list_entries()) == []


class TestValidateKeyComponent:
    """Test validate_key_component helper"""

    def test_accepts_regular_names(self):
        assert validate_key_component("version", "1.0.0-beta+build.5") == "1.0.0-beta+build.5"

    @pytest.mark.parametrize("value", ["", ".", "..", "a/b", "a\\b", "a\x00b", "a\r\nb", "a\tb", "a\x7fb"])
    def test_rejects_unsafe_names(self, value):
        with pytest.raises(InvalidPackagePathError) as exc_info:
            validate_key_component("name", value)

        assert exc_info.value.status_code == 400
        assert exc_info.value.field == "name"
