# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
API Routers

- packages: packages.json catalog and archive downloads
- admin: package uploads
- system: health check
"""
