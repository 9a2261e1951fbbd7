# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Test Fixtures

Provides temporary package storage and a TestClient wired to an app
with known credentials.
"""

import pytest
from fastapi.testclient import TestClient

from composer_registry.core.config import Config, Credentials
from composer_registry.main import create_app
from composer_registry.services.artifact_store import FilesystemArtifactStore
from tests.utils import ADMIN_AUTH, USER_AUTH


@pytest.fixture
def data_dir(tmp_path):
    """Storage root for packages (not created up front)"""
    return tmp_path / "packages"


@pytest.fixture
def store(data_dir):
    """FilesystemArtifactStore on the temp storage root"""
    return FilesystemArtifactStore(data_dir)


@pytest.fixture
def config(data_dir):
    """Config with test credentials and text logs"""
    return Config(
        data_path=str(data_dir),
        log_level="WARNING",
        log_format="text",
        user_auth=Credentials(*USER_AUTH),
        admin_auth=Credentials(*ADMIN_AUTH),
    )


@pytest.fixture
def client(config):
    """TestClient for a freshly built app"""
    return TestClient(create_app(config))
