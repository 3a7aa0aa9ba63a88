from datetime import date, datetime

from flask import request

from library_backend.errors import ValidationError


def get_json_object() -> dict:
    """Request body as a dict; an empty or unparsable body is an empty dict."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object.")
    return data


def clean_str(value):
    """Strip strings; blank becomes None."""
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def require_str(data: dict, key: str, label: str | None = None) -> str:
    value = clean_str(data.get(key))
    if value is None:
        raise ValidationError(f"{label or key} is required.")
    return value


def parse_int(value, label: str, minimum: int | None = None):
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{label} must be an integer.")
    # int(2.7) would truncate
    if isinstance(value, float) and not value.is_integer():
        raise ValidationError(f"{label} must be an integer.")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{label} must be an integer.")
    if minimum is not None and number < minimum:
        raise ValidationError(f"{label} must be at least {minimum}.")
    return number


def parse_date(value, label: str = "dueDate") -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value:
        raise ValidationError(f"{label} is required.")
    try:
        return datetime.strptime(str(value).strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"{label} must be a date in YYYY-MM-DD format.")
