"""
Error response bodies shared by the API and the upload proxy.
"""
from typing import Any, Dict, List

from fastapi.exceptions import RequestValidationError


def error_body(detail: Any) -> Dict[str, Any]:
    """
    Body for an HTTPException.

    Dict details are passed through; string details become
    {"error": detail, "detail": detail}.
    """
    if isinstance(detail, dict):
        return detail
    return {"error": detail, "detail": str(detail)}


def validation_error_details(exc: RequestValidationError) -> List[Dict[str, Any]]:
    """Reduce pydantic errors to JSON-safe dicts (ctx may hold exceptions)."""
    return [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
        for error in exc.errors()
    ]
