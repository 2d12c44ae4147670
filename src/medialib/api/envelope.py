"""Uniform response envelope.

Success: ``{"success": true, "message": ..., "data": ...}``
Failure: ``{"success": false, "message": ..., "error": ...}``
"""

from __future__ import annotations

from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel


def _encode(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", by_alias=True)
    return jsonable_encoder(data)


def success_response(data: Any, message: str = "Success", status_code: int = 200) -> JSONResponse:
    """Wrap ``data`` in a success envelope."""
    return JSONResponse(
        status_code=status_code,
        content={"success": True, "message": message, "data": _encode(data)},
    )


def error_response(message: str, error: Any = None, status_code: int = 400) -> JSONResponse:
    """Wrap an error description in a failure envelope."""
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message, "error": _encode(error)},
    )
