# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Test Suite for the Composer Registry

Structure:
- unit/: Unit tests for services and core modules
- test_api.py: HTTP tests against the FastAPI app
"""
