from __future__ import annotations

from typing import Mapping, MutableMapping, Optional


def is_blank(value) -> bool:
    return value is None or not str(value).strip()


def check_required(
    form: Mapping[str, object],
    errors: MutableMapping[str, str],
    field: str,
    message: str,
) -> None:
    """Record `message` for `field` when the form value is missing or blank."""
    if is_blank(form.get(field)):
        errors[field] = message


def field_value(form: Mapping[str, object], field: str) -> Optional[str]:
    value = form.get(field)
    if value is None:
        return None
    return str(value).strip()
