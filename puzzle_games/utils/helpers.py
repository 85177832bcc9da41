"""
Helper Functions

Contains request-parsing utilities shared by the controllers.
"""

from typing import Any, Dict, Tuple
from flask import request


class BadRequest(ValueError):
    """Raised when a request body is missing fields or carries the wrong types."""


def get_json_body() -> Dict[str, Any]:
    """Return the JSON body of the current request, or an empty dict."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise BadRequest('Request body must be a JSON object')
    return data


def require_string(data: Dict[str, Any], name: str) -> str:
    value = data.get(name)
    if not isinstance(value, str):
        raise BadRequest(f"'{name}' is required and must be a string")
    return value


def require_cell(data: Dict[str, Any]) -> Tuple[int, int]:
    """Read integer ``row`` and ``col`` fields from a request body."""
    row, col = data.get('row'), data.get('col')
    if not isinstance(row, int) or not isinstance(col, int) or isinstance(row, bool) or isinstance(col, bool):
        raise BadRequest("'row' and 'col' are required integers")
    return row, col
