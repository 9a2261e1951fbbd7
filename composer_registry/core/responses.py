# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""JSON response class shared by every route and error handler."""

from typing import Any, Mapping, Optional

from fastapi.responses import JSONResponse


class RegistryJSONResponse(JSONResponse):
    """JSONResponse with an explicit charset and nosniff header."""

    media_type = "application/json; charset=utf-8"

    def __init__(
        self,
        content: Any,
        status_code: int = 200,
        headers: Optional[Mapping[str, str]] = None,
        **kwargs: Any,
    ) -> None:
        merged = {"X-Content-Type-Options": "nosniff"}
        if headers:
            merged.update(headers)
        super().__init__(content, status_code=status_code, headers=merged, **kwargs)
