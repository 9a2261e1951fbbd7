# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Service layer for the composer registry.

- artifact_store: keyed storage of archives and manifests
- manifest: composer.json parsing
- catalog_service: packages.json generation
- upload_service: archive validation and persistence
"""
