"""Request helpers shared by the blueprints."""
from __future__ import annotations

from datetime import date
from typing import Optional, Tuple

from flask import current_app, request

from services.errors import MissingFieldError, ValidationError

MAX_LIMIT = 100


def services():
    """The ServiceRegistry attached to the running app."""
    return current_app.extensions["services"]


def json_body() -> dict:
    body = request.get_json(silent=True)
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object", field="body")
    return body


def parse_pagination() -> Tuple[int, int]:
    try:
        page = int(request.args.get("page", "1"))
        limit = int(request.args.get("limit", "20"))
    except ValueError:
        raise ValidationError("page and limit must be integers", field="page")
    page = max(page, 1)
    limit = max(1, min(limit, MAX_LIMIT))
    return page, limit


def paginate(rows: list, schema) -> dict:
    """Slice an already ordered result list into the {data, meta} envelope."""
    page, limit = parse_pagination()
    window = rows[(page - 1) * limit: page * limit]
    return {"data": schema.dump(window), "meta": {"page": page, "limit": limit, "total": len(rows)}}


def parse_date_arg(name: str, required: bool = False) -> Optional[date]:
    val = request.args.get(name)
    if not val:
        if required:
            raise MissingFieldError(name)
        return None
    try:
        return date.fromisoformat(val)
    except ValueError:
        raise ValidationError(f"Invalid date format for {name}. Use YYYY-MM-DD", field=name, value=val)

